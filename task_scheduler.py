# -*- coding: utf-8 -*-
########################
# task_scheduler.py
########################
# Purpose:
# - Cancelable scheduled tasks for timed phase transitions and the recall countdown tick.
# - ManualTaskScheduler: deterministic virtual millisecond clock for headless runs and tests.
#
# Design notes:
# - No Qt usage. The QTimer-backed scheduler lives in qt_scheduler.py.
# - cancel() invalidates a handle synchronously. A cancelled task never runs its callback,
#   even if its timer already fired and the callback is queued behind other work.
# - One-shot tasks become inactive right before their callback runs, so a callback may
#   schedule new work freely.
#
########################
# Interfaces:
# Public classes:
# - class ScheduledTask
#   - is_active() -> bool
#   - is_repeating() -> bool
#   - interval_ms() -> int
#   - cancel() -> None
#   - fire() -> None
# - class TaskScheduler(Protocol)
#   - call_later(delay_ms: int, callback) -> ScheduledTask
#   - call_every(interval_ms: int, callback) -> ScheduledTask
# - class ManualTaskScheduler
#   - now_ms() -> int
#   - pending_count() -> int
#   - advance(milliseconds: int) -> int
#   - advance_to_next() -> bool
#
########################

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, runtime_checkable


class ScheduledTask:
    def __init__(
        self,
        callback: Callable[[], None],
        *,
        interval_ms: int,
        repeating: bool,
        on_finished: Optional[Callable[["ScheduledTask"], None]] = None,
    ) -> None:
        self._callback = callback
        self._interval_ms = max(0, int(interval_ms))
        self._repeating = bool(repeating)
        self._on_finished = on_finished
        self._is_active = True

    def is_active(self) -> bool:
        return bool(self._is_active)

    def is_repeating(self) -> bool:
        return bool(self._repeating)

    def interval_ms(self) -> int:
        return int(self._interval_ms)

    def cancel(self) -> None:
        if not self._is_active:
            return
        self._finish()

    def fire(self) -> None:
        if not self._is_active:
            return
        if not self._repeating:
            self._finish()
        self._callback()

    def _finish(self) -> None:
        self._is_active = False
        on_finished = self._on_finished
        self._on_finished = None
        if on_finished is not None:
            on_finished(self)


@runtime_checkable
class TaskScheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        ...

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        ...


@dataclass(order=True)
class _PendingEntry:
    due_ms: int
    order: int
    task: ScheduledTask = field(compare=False)


class ManualTaskScheduler:
    """Virtual clock scheduler. Nothing runs until advance() is called."""

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: List[_PendingEntry] = []
        self._order = itertools.count()

    def now_ms(self) -> int:
        return int(self._now_ms)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        return self._schedule(delay_ms, callback, repeating=False)

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        if int(interval_ms) <= 0:
            raise ValueError(f"Recurring interval must be positive, got {interval_ms}")
        return self._schedule(interval_ms, callback, repeating=True)

    def pending_count(self) -> int:
        return sum(1 for entry in self._queue if entry.task.is_active())

    def advance(self, milliseconds: int) -> int:
        """Move the clock forward, running every task that comes due. Returns the number of callbacks run."""
        if int(milliseconds) < 0:
            raise ValueError("Cannot move the clock backwards")

        target_ms = self._now_ms + int(milliseconds)
        fired = 0
        while True:
            entry = self._pop_next_due(target_ms)
            if entry is None:
                break
            self._now_ms = entry.due_ms
            self._run_entry(entry)
            fired += 1

        self._now_ms = target_ms
        return fired

    def advance_to_next(self) -> bool:
        """Jump straight to the next pending task and run it. Returns False when nothing is pending."""
        self._drop_inactive_head()
        if not self._queue:
            return False
        entry = heapq.heappop(self._queue)
        self._now_ms = max(self._now_ms, entry.due_ms)
        self._run_entry(entry)
        return True

    def _schedule(self, interval_ms: int, callback: Callable[[], None], *, repeating: bool) -> ScheduledTask:
        task = ScheduledTask(callback, interval_ms=interval_ms, repeating=repeating)
        heapq.heappush(
            self._queue,
            _PendingEntry(due_ms=self._now_ms + task.interval_ms(), order=next(self._order), task=task),
        )
        return task

    def _drop_inactive_head(self) -> None:
        while self._queue and not self._queue[0].task.is_active():
            heapq.heappop(self._queue)

    def _pop_next_due(self, target_ms: int) -> Optional[_PendingEntry]:
        self._drop_inactive_head()
        if not self._queue or self._queue[0].due_ms > target_ms:
            return None
        return heapq.heappop(self._queue)

    def _run_entry(self, entry: _PendingEntry) -> None:
        task = entry.task
        if task.is_repeating():
            heapq.heappush(
                self._queue,
                _PendingEntry(due_ms=entry.due_ms + task.interval_ms(), order=next(self._order), task=task),
            )
        task.fire()


def _run_unit_tests() -> None:
    scheduler = ManualTaskScheduler()
    calls: List[str] = []

    scheduler.call_later(100, lambda: calls.append("a"))
    cancelled = scheduler.call_later(50, lambda: calls.append("cancelled"))
    cancelled.cancel()
    ticker = scheduler.call_every(40, lambda: calls.append("tick"))

    scheduler.advance(100)
    assert calls == ["tick", "tick", "a"]
    ticker.cancel()
    scheduler.advance(1000)
    assert calls == ["tick", "tick", "a"]
    assert scheduler.pending_count() == 0


if __name__ == "__main__":
    _run_unit_tests()
    print("task_scheduler.py: ok")
