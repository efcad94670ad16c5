from __future__ import annotations

from typing import AbstractSet, Iterable, List

import pytest

from game_controller import GamePhaseController
from grid_models import GameNotice, GridCoordinate, Phase
from level_rules import LevelRules
from task_scheduler import ManualTaskScheduler


class ScriptedSequenceGenerator:
    """Hands out a fixed coordinate order, skipping cells already used."""

    def __init__(self, coordinates: Iterable[GridCoordinate]) -> None:
        self._coordinates: List[GridCoordinate] = list(coordinates)
        self.calls = 0

    def next_coordinate(self, existing: AbstractSet[GridCoordinate]) -> GridCoordinate:
        self.calls += 1
        for coordinate in self._coordinates:
            if coordinate not in existing:
                return coordinate
        raise AssertionError("script ran out of coordinates")


class NoticeRecorder:
    def __init__(self) -> None:
        self.notices: List[GameNotice] = []
        self.messages: List[str] = []

    def __call__(self, notice: GameNotice, message: str) -> None:
        self.notices.append(notice)
        self.messages.append(message)


def run_to_recall(controller: GamePhaseController, scheduler: ManualTaskScheduler) -> None:
    """Play through every flash and distraction step of the current level."""
    for _ in range(100):
        phase = controller.phase()
        if phase == Phase.RECALLING:
            return
        if phase == Phase.FLASHING:
            scheduler.advance(controller.rules().flash_duration_ms(controller.level()))
        elif phase == Phase.DISTRACTION:
            controller.answer_distraction()
        else:
            raise AssertionError(f"unexpected phase {phase}")
    raise AssertionError("recall phase never reached")


@pytest.fixture
def scheduler() -> ManualTaskScheduler:
    return ManualTaskScheduler()


@pytest.fixture
def rules() -> LevelRules:
    return LevelRules()


@pytest.fixture
def notices() -> NoticeRecorder:
    return NoticeRecorder()


@pytest.fixture
def make_controller(scheduler, rules, notices):
    def factory(coordinates=None, **kwargs) -> GamePhaseController:
        if coordinates is not None:
            kwargs["sequence_generator"] = ScriptedSequenceGenerator(coordinates)
        controller = GamePhaseController(scheduler, rules=rules, **kwargs)
        controller.add_notice_listener(notices)
        return controller

    return factory


@pytest.fixture
def play_to_recall(scheduler):
    def runner(controller: GamePhaseController) -> None:
        run_to_recall(controller, scheduler)

    return runner
