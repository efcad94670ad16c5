# -*- coding: utf-8 -*-
########################
# qt_scheduler.py
########################
# Purpose:
# - TaskScheduler implementation backed by QTimer on the GUI thread.
#
# Design notes:
# - One QTimer per task, parented to the scheduler so Qt owns the lifetime.
# - Cancel stops the QTimer and invalidates the ScheduledTask in the same call.
#   A timeout already queued in the event loop still reaches ScheduledTask.fire, which drops it.
#
########################
# Interfaces:
# Public classes:
# - class QtTaskScheduler(PyQt6.QtCore.QObject)
#   - call_later(delay_ms: int, callback) -> ScheduledTask
#   - call_every(interval_ms: int, callback) -> ScheduledTask
#   - active_count() -> int
#
########################

from __future__ import annotations

from typing import Callable, Dict, Optional

from PyQt6.QtCore import QObject, QTimer

from task_scheduler import ScheduledTask


class QtTaskScheduler(QObject):
    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._timers: Dict[int, QTimer] = {}

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        return self._start(delay_ms, callback, repeating=False)

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        if int(interval_ms) <= 0:
            raise ValueError(f"Recurring interval must be positive, got {interval_ms}")
        return self._start(interval_ms, callback, repeating=True)

    def active_count(self) -> int:
        return len(self._timers)

    def _start(self, interval_ms: int, callback: Callable[[], None], *, repeating: bool) -> ScheduledTask:
        timer = QTimer(self)
        timer.setSingleShot(not repeating)
        timer.setInterval(max(0, int(interval_ms)))

        task = ScheduledTask(
            callback,
            interval_ms=interval_ms,
            repeating=repeating,
            on_finished=self._dispose_timer,
        )
        self._timers[id(task)] = timer
        timer.timeout.connect(task.fire)
        timer.start()
        return task

    def _dispose_timer(self, task: ScheduledTask) -> None:
        timer = self._timers.pop(id(task), None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()
