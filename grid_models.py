# -*- coding: utf-8 -*-
########################
# grid_models.py
########################
# Purpose:
# - Core data models for the memory game state machine.
# - Defines grid coordinates, interference shapes, phases, outcomes, notices and the read-only snapshot.
#
# Design notes:
# - Keep these models stable. Prefer extending with new optional fields rather than breaking changes.
# - No Qt usage. These are plain dataclasses and enums.
#
########################
# Interfaces:
# Public dataclasses:
# - GridCoordinate(row: int, col: int)
# - ShapeDescriptor(shape_kind: ShapeKind, color: ShapeColor)
# - DistractionPair(left: ShapeDescriptor, right: ShapeDescriptor, is_identical: bool)
# - GameSnapshot(phase, level, max_level, grid_size, step_index, sequence, flashing_coordinate,
#                distraction_pair, click_log, seconds_remaining, recall_resolved)
# - CellView(role: CellRole, label: Optional[int])
#
# Public enums:
# - Phase: IDLE, FLASHING, DISTRACTION, RECALLING
# - RecallOutcome: IGNORED, CORRECT, WRONG, COMPLETE
# - ShapeKind: SQUARE, CIRCLE, TRIANGLE
# - ShapeColor: RED, BLUE, GREEN, BLACK
# - GameNotice: LEVEL_COMPLETE, GAME_COMPLETE, WRONG_CLICK_RESTART, TIME_EXPIRED_RESTART
# - CellRole: IDLE, FLASH, SUCCESS, ERROR
#
# Public functions:
# - notice_message(notice: GameNotice, *, level: int, max_level: int) -> str
# - cell_view(snapshot: GameSnapshot, coordinate: GridCoordinate) -> CellView
#
########################

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class GridCoordinate:
    row: int
    col: int

    def is_within(self, grid_size: int) -> bool:
        return 0 <= int(self.row) < int(grid_size) and 0 <= int(self.col) < int(grid_size)

    def key(self) -> str:
        return f"{int(self.row)}-{int(self.col)}"


class Phase(str, Enum):
    IDLE = "IDLE"
    FLASHING = "FLASHING"
    DISTRACTION = "DISTRACTION"
    RECALLING = "RECALLING"


class RecallOutcome(str, Enum):
    IGNORED = "IGNORED"
    CORRECT = "CORRECT"
    WRONG = "WRONG"
    COMPLETE = "COMPLETE"


class ShapeKind(str, Enum):
    SQUARE = "square"
    CIRCLE = "circle"
    TRIANGLE = "triangle"


class ShapeColor(str, Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    # Sentinel: never produced by a random draw.
    BLACK = "black"


RANDOM_SHAPE_KINDS: Tuple[ShapeKind, ...] = (ShapeKind.SQUARE, ShapeKind.CIRCLE, ShapeKind.TRIANGLE)
RANDOM_SHAPE_COLORS: Tuple[ShapeColor, ...] = (ShapeColor.RED, ShapeColor.BLUE, ShapeColor.GREEN)


@dataclass(frozen=True)
class ShapeDescriptor:
    shape_kind: ShapeKind
    color: ShapeColor


@dataclass(frozen=True)
class DistractionPair:
    left: ShapeDescriptor
    right: ShapeDescriptor
    # Records the generation branch only. The player's answer is never compared against it.
    is_identical: bool


class GameNotice(str, Enum):
    LEVEL_COMPLETE = "LEVEL_COMPLETE"
    GAME_COMPLETE = "GAME_COMPLETE"
    WRONG_CLICK_RESTART = "WRONG_CLICK_RESTART"
    TIME_EXPIRED_RESTART = "TIME_EXPIRED_RESTART"


def notice_message(notice: GameNotice, *, level: int, max_level: int) -> str:
    """User-facing text for a notice. `level` is the level the player will play next."""
    if notice == GameNotice.LEVEL_COMPLETE:
        return "Correct! Moving to next level."
    if notice == GameNotice.GAME_COMPLETE:
        return f"Champion! You finished all {int(max_level)} Levels!"
    if notice == GameNotice.WRONG_CLICK_RESTART:
        return f"Wrong! You must click in the exact order (1, 2, 3...). Restarting Level {int(level)}."
    if notice == GameNotice.TIME_EXPIRED_RESTART:
        return f"Time's up! You must be faster. Restarting Level {int(level)}."
    return str(notice.value)


@dataclass(frozen=True)
class GameSnapshot:
    phase: Phase
    level: int
    max_level: int
    grid_size: int
    step_index: int
    sequence: Tuple[GridCoordinate, ...]
    flashing_coordinate: Optional[GridCoordinate]
    distraction_pair: Optional[DistractionPair]
    click_log: Tuple[GridCoordinate, ...]
    seconds_remaining: Optional[int]
    recall_resolved: bool = False

    @property
    def target_length(self) -> int:
        return int(self.level)


class CellRole(str, Enum):
    IDLE = "idle"
    FLASH = "flash"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class CellView:
    role: CellRole
    label: Optional[int] = None


def cell_view(snapshot: GameSnapshot, coordinate: GridCoordinate) -> CellView:
    if snapshot.phase == Phase.FLASHING and snapshot.flashing_coordinate == coordinate:
        return CellView(role=CellRole.FLASH, label=int(snapshot.step_index) + 1)

    if snapshot.phase == Phase.RECALLING and coordinate in snapshot.click_log:
        click_index = snapshot.click_log.index(coordinate)
        if click_index < len(snapshot.sequence) and snapshot.sequence[click_index] == coordinate:
            return CellView(role=CellRole.SUCCESS, label=click_index + 1)
        return CellView(role=CellRole.ERROR)

    return CellView(role=CellRole.IDLE)
