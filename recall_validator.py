# -*- coding: utf-8 -*-
########################
# recall_validator.py
########################
# Purpose:
# - Judges each recall click against the ordered target sequence.
#
# Design notes:
# - No Qt usage. Pure gameplay logic.
# - Order is strict: a cell that appears later in the sequence but is clicked out of turn is WRONG.
# - The click log is owned by the caller and mutated in place. Wrong clicks are appended too,
#   so the board can paint them red.
#
########################
# Interfaces:
# Public classes:
# - class RecallValidator
#   - submit(coordinate: GridCoordinate, click_log: list[GridCoordinate],
#            target_sequence: Sequence[GridCoordinate]) -> RecallOutcome
#   - expected_next(click_log, target_sequence) -> Optional[GridCoordinate]
#
# Inputs:
# - Clicked GridCoordinate and the current click log.
#
# Outputs:
# - RecallOutcome for the controller.
#
########################

from __future__ import annotations

from typing import List, Optional, Sequence

from grid_models import GridCoordinate, RecallOutcome


class RecallValidator:
    def expected_next(
        self, click_log: Sequence[GridCoordinate], target_sequence: Sequence[GridCoordinate]
    ) -> Optional[GridCoordinate]:
        next_index = len(click_log)
        if next_index >= len(target_sequence):
            return None
        return target_sequence[next_index]

    def submit(
        self,
        coordinate: GridCoordinate,
        click_log: List[GridCoordinate],
        target_sequence: Sequence[GridCoordinate],
    ) -> RecallOutcome:
        if coordinate in click_log:
            return RecallOutcome.IGNORED

        expected = self.expected_next(click_log, target_sequence)
        if expected is None:
            return RecallOutcome.IGNORED

        click_log.append(coordinate)

        if coordinate != expected:
            return RecallOutcome.WRONG

        if len(click_log) == len(target_sequence):
            return RecallOutcome.COMPLETE
        return RecallOutcome.CORRECT


def _run_unit_tests() -> None:
    validator = RecallValidator()
    target = [GridCoordinate(0, 0), GridCoordinate(4, 4), GridCoordinate(1, 2)]

    clicks: List[GridCoordinate] = []
    assert validator.submit(GridCoordinate(0, 0), clicks, target) == RecallOutcome.CORRECT
    assert validator.submit(GridCoordinate(0, 0), clicks, target) == RecallOutcome.IGNORED
    assert len(clicks) == 1
    assert validator.submit(GridCoordinate(4, 4), clicks, target) == RecallOutcome.CORRECT
    assert validator.submit(GridCoordinate(1, 2), clicks, target) == RecallOutcome.COMPLETE

    clicks = [GridCoordinate(0, 0)]
    assert validator.submit(GridCoordinate(1, 2), clicks, target) == RecallOutcome.WRONG
    assert clicks == [GridCoordinate(0, 0), GridCoordinate(1, 2)]


if __name__ == "__main__":
    _run_unit_tests()
    print("recall_validator.py: ok")
