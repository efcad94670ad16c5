# -*- coding: utf-8 -*-
########################
# countdown_timer.py
########################
# Purpose:
# - Recall phase clock. Counts whole seconds down from a budget and reports expiry once.
#
# Design notes:
# - No Qt usage. Ticks come from an injected TaskScheduler.
# - arm() cancels the previous tick handle before starting a new one.
# - stop() cancels synchronously. A tick that belongs to a cancelled handle is discarded.
# - The counter never goes below zero.
#
########################
# Interfaces:
# Public classes:
# - class CountdownTimer
#   - __init__(scheduler: TaskScheduler, *, on_timed_out, on_tick=None, tick_interval_ms: int = 1000)
#   - arm(budget_seconds: int) -> None
#   - stop() -> None
#   - is_running() -> bool
#   - seconds_remaining() -> int
#
# Outputs:
# - on_tick(seconds_remaining) after every decrement.
# - on_timed_out() exactly once per arm when the counter reaches zero.
#
########################

from __future__ import annotations

from typing import Callable, Optional

from task_scheduler import ScheduledTask, TaskScheduler


class CountdownTimer:
    def __init__(
        self,
        scheduler: TaskScheduler,
        *,
        on_timed_out: Callable[[], None],
        on_tick: Optional[Callable[[int], None]] = None,
        tick_interval_ms: int = 1000,
    ) -> None:
        self._scheduler = scheduler
        self._on_timed_out = on_timed_out
        self._on_tick = on_tick
        self._tick_interval_ms = int(tick_interval_ms)
        self._seconds_remaining = 0
        self._tick_task: Optional[ScheduledTask] = None

    def arm(self, budget_seconds: int) -> None:
        self.stop()
        self._seconds_remaining = max(0, int(budget_seconds))
        if self._seconds_remaining == 0:
            self._on_timed_out()
            return

        self._tick_task = self._scheduler.call_every(self._tick_interval_ms, self._on_tick_elapsed)

    def stop(self) -> None:
        task = self._tick_task
        self._tick_task = None
        if task is not None:
            task.cancel()

    def is_running(self) -> bool:
        return self._tick_task is not None and self._tick_task.is_active()

    def seconds_remaining(self) -> int:
        return int(self._seconds_remaining)

    def _on_tick_elapsed(self) -> None:
        if not self.is_running():
            return

        if self._seconds_remaining > 0:
            self._seconds_remaining -= 1

        if self._on_tick is not None:
            self._on_tick(self._seconds_remaining)

        if self._seconds_remaining == 0 and self._tick_task is not None:
            self.stop()
            self._on_timed_out()


def _run_unit_tests() -> None:
    from task_scheduler import ManualTaskScheduler

    scheduler = ManualTaskScheduler()
    timeouts = []
    timer = CountdownTimer(scheduler, on_timed_out=lambda: timeouts.append(scheduler.now_ms()))
    timer.arm(3)
    scheduler.advance(2000)
    assert timer.seconds_remaining() == 1
    scheduler.advance(5000)
    assert timer.seconds_remaining() == 0
    assert timeouts == [3000]

    timer.arm(2)
    scheduler.advance(1000)
    timer.stop()
    scheduler.advance(5000)
    assert timer.seconds_remaining() == 1
    assert timeouts == [3000]


if __name__ == "__main__":
    _run_unit_tests()
    print("countdown_timer.py: ok")
