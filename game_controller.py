# -*- coding: utf-8 -*-
########################
# game_controller.py
########################
# Purpose:
# - Authoritative state machine for one play session.
# - Drives FLASHING -> DISTRACTION -> ... -> RECALLING for `level` steps, then judges recall clicks.
#
# Stable notes:
# - Single owner for phase, level, sequence and click log (GamePhaseController).
# - Every timed transition is a ScheduledTask owned by the controller. Leaving a phase cancels its
#   pending task and the countdown before anything for the next phase is armed.
#
########################
# Design notes:
# - No Qt usage. Time comes from an injected TaskScheduler (QtTaskScheduler in the app,
#   ManualTaskScheduler in tests).
# - The distraction answer is accepted unconditionally. The pair is never scored.
# - After COMPLETE or WRONG the recall is "resolved": the final colors stay visible for a short
#   delay, further clicks are ignored and the countdown is stopped.
# - Listeners receive a GameSnapshot after each change and GameNotice values on level results.
#
########################
# Interfaces:
# Public classes:
# - class GamePhaseController
#   - __init__(scheduler: TaskScheduler, *, rules: LevelRules, grid_size: int, ...)
#   - add_state_listener(callback(GameSnapshot)) -> None
#   - add_notice_listener(callback(GameNotice, str)) -> None
#   - snapshot() -> GameSnapshot
#   - phase() -> Phase, level() -> int
#   - start_or_continue_level() -> bool
#   - answer_distraction(answer: Optional[bool] = None) -> bool
#   - click_cell(row: int, col: int) -> RecallOutcome
#   - reset(level: int = 1) -> None
#   - shutdown() -> None
#
# Inputs:
# - Commands from the presentation layer.
# - Scheduler callbacks (flash elapsed, result delays, countdown ticks).
#
# Outputs:
# - GameSnapshot and GameNotice to registered listeners.
#
########################

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional

from countdown_timer import CountdownTimer
from grid_models import (
    DistractionPair,
    GameNotice,
    GameSnapshot,
    GridCoordinate,
    Phase,
    RecallOutcome,
    notice_message,
)
from interference_task import InterferenceTaskGenerator
from level_rules import LevelRules
from recall_validator import RecallValidator
from sequence_generator import RandomSequenceGenerator
from task_scheduler import ScheduledTask, TaskScheduler


logger = logging.getLogger(__name__)

StateListener = Callable[[GameSnapshot], None]
NoticeListener = Callable[[GameNotice, str], None]


class GamePhaseController:
    def __init__(
        self,
        scheduler: TaskScheduler,
        *,
        rules: Optional[LevelRules] = None,
        grid_size: int = 5,
        sequence_generator: Optional[RandomSequenceGenerator] = None,
        interference_generator: Optional[InterferenceTaskGenerator] = None,
        recall_validator: Optional[RecallValidator] = None,
        random_generator: Optional[random.Random] = None,
    ) -> None:
        self._scheduler = scheduler
        self._rules = rules or LevelRules()
        self._grid_size = int(grid_size)

        shared_random = random_generator if random_generator is not None else random.Random()
        self._sequence_generator = sequence_generator or RandomSequenceGenerator(
            grid_size=self._grid_size,
            max_level=int(self._rules.max_level),
            random_generator=shared_random,
        )
        self._interference_generator = interference_generator or InterferenceTaskGenerator(shared_random)
        self._recall_validator = recall_validator or RecallValidator()

        self._countdown = CountdownTimer(
            scheduler,
            on_timed_out=self._on_recall_timed_out,
            on_tick=self._on_countdown_tick,
        )

        self._state_listeners: List[StateListener] = []
        self._notice_listeners: List[NoticeListener] = []

        self._phase = Phase.IDLE
        self._level = 1
        self._step_index = 0
        self._sequence: List[GridCoordinate] = []
        self._click_log: List[GridCoordinate] = []
        self._flashing_coordinate: Optional[GridCoordinate] = None
        self._distraction_pair: Optional[DistractionPair] = None
        self._recall_resolved = False
        self._pending_task: Optional[ScheduledTask] = None

    # -----------------
    # Listeners
    # -----------------

    def add_state_listener(self, callback: StateListener) -> None:
        self._state_listeners.append(callback)

    def add_notice_listener(self, callback: NoticeListener) -> None:
        self._notice_listeners.append(callback)

    # -----------------
    # Read-only state
    # -----------------

    def phase(self) -> Phase:
        return self._phase

    def level(self) -> int:
        return int(self._level)

    def rules(self) -> LevelRules:
        return self._rules

    def grid_size(self) -> int:
        return int(self._grid_size)

    def snapshot(self) -> GameSnapshot:
        seconds_remaining: Optional[int] = None
        if self._phase == Phase.RECALLING:
            seconds_remaining = self._countdown.seconds_remaining()

        return GameSnapshot(
            phase=self._phase,
            level=int(self._level),
            max_level=int(self._rules.max_level),
            grid_size=int(self._grid_size),
            step_index=int(self._step_index),
            sequence=tuple(self._sequence),
            flashing_coordinate=self._flashing_coordinate,
            distraction_pair=self._distraction_pair,
            click_log=tuple(self._click_log),
            seconds_remaining=seconds_remaining,
            recall_resolved=bool(self._recall_resolved),
        )

    # -----------------
    # Commands
    # -----------------

    def start_or_continue_level(self) -> bool:
        if self._phase != Phase.IDLE:
            logger.debug("Start ignored in phase %s", self._phase.value)
            return False

        self._sequence = []
        self._click_log = []
        self._step_index = 0
        self._distraction_pair = None
        self._recall_resolved = False
        logger.info("Starting level %d", self._level)
        self._run_sequence_step(0)
        return True

    def answer_distraction(self, answer: Optional[bool] = None) -> bool:
        """Advance past the interference pair. Both answers are treated the same."""
        if self._phase != Phase.DISTRACTION:
            return False

        logger.debug("Distraction answered (%s) at step %d", answer, self._step_index)
        self._distraction_pair = None
        self._run_sequence_step(self._step_index + 1)
        return True

    def click_cell(self, row: int, col: int) -> RecallOutcome:
        if self._phase != Phase.RECALLING or self._recall_resolved:
            return RecallOutcome.IGNORED

        coordinate = GridCoordinate(row=int(row), col=int(col))
        if not coordinate.is_within(self._grid_size):
            return RecallOutcome.IGNORED

        outcome = self._recall_validator.submit(coordinate, self._click_log, self._sequence)
        if outcome == RecallOutcome.IGNORED:
            return outcome

        logger.debug("Recall click %s -> %s", coordinate.key(), outcome.value)

        if outcome == RecallOutcome.COMPLETE:
            self._resolve_recall()
            self._pending_task = self._scheduler.call_later(
                int(self._rules.success_delay_ms), self._on_success_delay_elapsed
            )
        elif outcome == RecallOutcome.WRONG:
            self._resolve_recall()
            self._pending_task = self._scheduler.call_later(
                int(self._rules.failure_delay_ms), self._on_failure_delay_elapsed
            )

        self._publish()
        return outcome

    def reset(self, level: int = 1) -> None:
        if not 1 <= int(level) <= int(self._rules.max_level):
            raise ValueError(f"level must be within 1..{self._rules.max_level}, got {level}")

        self._cancel_pending()
        self._level = int(level)
        self._step_index = 0
        self._sequence = []
        self._click_log = []
        self._flashing_coordinate = None
        self._distraction_pair = None
        self._recall_resolved = False
        self._phase = Phase.IDLE
        logger.info("Session reset at level %d", self._level)
        self._publish()

    def shutdown(self) -> None:
        self._cancel_pending()

    # -----------------
    # Phase transitions
    # -----------------

    def _enter_phase(self, phase: Phase) -> None:
        # Pending work of the phase being left is cancelled before anything new is armed.
        self._cancel_pending()
        if phase != self._phase:
            logger.debug("Phase %s -> %s (level %d, step %d)", self._phase.value, phase.value, self._level, self._step_index)
        self._phase = phase

    def _cancel_pending(self) -> None:
        task = self._pending_task
        self._pending_task = None
        if task is not None:
            task.cancel()
        self._countdown.stop()

    def _run_sequence_step(self, step_index: int) -> None:
        self._step_index = int(step_index)
        if self._step_index >= self._rules.sequence_length(self._level):
            self._enter_recall()
            return

        self._enter_phase(Phase.FLASHING)
        coordinate = self._sequence_generator.next_coordinate(set(self._sequence))
        self._sequence.append(coordinate)
        self._flashing_coordinate = coordinate

        duration_ms = self._rules.flash_duration_ms(self._level)
        self._pending_task = self._scheduler.call_later(duration_ms, self._on_flash_elapsed)
        self._publish()

    def _on_flash_elapsed(self) -> None:
        if self._phase != Phase.FLASHING:
            return

        self._flashing_coordinate = None
        self._enter_phase(Phase.DISTRACTION)
        self._distraction_pair = self._interference_generator.generate()
        self._publish()

    def _enter_recall(self) -> None:
        self._enter_phase(Phase.RECALLING)
        self._flashing_coordinate = None
        self._distraction_pair = None
        self._click_log = []
        self._recall_resolved = False

        budget_seconds = self._rules.recall_budget_seconds(self._level)
        logger.info("Recall of %d cells, %d seconds", len(self._sequence), budget_seconds)
        self._countdown.arm(budget_seconds)
        self._publish()

    def _resolve_recall(self) -> None:
        self._recall_resolved = True
        self._cancel_pending()

    def _on_countdown_tick(self, seconds_remaining: int) -> None:
        if self._phase != Phase.RECALLING:
            return
        self._publish()

    def _on_recall_timed_out(self) -> None:
        if self._phase != Phase.RECALLING or self._recall_resolved:
            return

        logger.info("Recall timed out at level %d", self._level)
        self._return_to_idle()
        self._notify(GameNotice.TIME_EXPIRED_RESTART)

    def _on_success_delay_elapsed(self) -> None:
        if self._phase != Phase.RECALLING:
            return

        next_level, finished_game = self._rules.next_level(self._level)
        logger.info("Level %d complete", self._level)
        self._level = next_level
        self._return_to_idle()
        self._notify(GameNotice.GAME_COMPLETE if finished_game else GameNotice.LEVEL_COMPLETE)

    def _on_failure_delay_elapsed(self) -> None:
        if self._phase != Phase.RECALLING:
            return

        logger.info("Wrong recall click, restarting level %d", self._level)
        self._return_to_idle()
        self._notify(GameNotice.WRONG_CLICK_RESTART)

    def _return_to_idle(self) -> None:
        self._enter_phase(Phase.IDLE)
        self._flashing_coordinate = None
        self._distraction_pair = None
        self._recall_resolved = False
        self._publish()

    # -----------------
    # Listener fan-out
    # -----------------

    def _publish(self) -> None:
        if not self._state_listeners:
            return
        snapshot = self.snapshot()
        for callback in list(self._state_listeners):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("State listener failed")

    def _notify(self, notice: GameNotice) -> None:
        message = notice_message(notice, level=self._level, max_level=int(self._rules.max_level))
        for callback in list(self._notice_listeners):
            try:
                callback(notice, message)
            except Exception:
                logger.exception("Notice listener failed")
