# -*- coding: utf-8 -*-
########################
# level_rules.py
########################
# Purpose:
# - Fixed level table: sequence length, flash duration, recall time budget and post-result delays.
#
# Design notes:
# - No Qt usage. Pure and deterministic.
# - Flash duration shrinks by a fixed step per level and is floored.
#
########################
# Interfaces:
# Public dataclasses:
# - LevelRules(max_level, flash_base_ms, flash_step_ms, flash_floor_ms,
#              recall_budget_short_seconds, recall_budget_long_seconds, long_budget_from_level,
#              success_delay_ms, failure_delay_ms)
#   - sequence_length(level: int) -> int
#   - flash_duration_ms(level: int) -> int
#   - recall_budget_seconds(level: int) -> int
#   - next_level(level: int) -> tuple[int, bool]
#
########################

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LevelRules:
    max_level: int = 7
    flash_base_ms: int = 3000
    flash_step_ms: int = 400
    flash_floor_ms: int = 500
    recall_budget_short_seconds: int = 20
    recall_budget_long_seconds: int = 30
    long_budget_from_level: int = 6
    success_delay_ms: int = 200
    failure_delay_ms: int = 100

    def sequence_length(self, level: int) -> int:
        return int(level)

    def flash_duration_ms(self, level: int) -> int:
        reduction = (int(level) - 1) * int(self.flash_step_ms)
        return max(int(self.flash_floor_ms), int(self.flash_base_ms) - reduction)

    def recall_budget_seconds(self, level: int) -> int:
        if int(level) >= int(self.long_budget_from_level):
            return int(self.recall_budget_long_seconds)
        return int(self.recall_budget_short_seconds)

    def next_level(self, level: int) -> Tuple[int, bool]:
        """Return (next level, whether the whole game was finished)."""
        if int(level) < int(self.max_level):
            return int(level) + 1, False
        return 1, True


def _run_unit_tests() -> None:
    rules = LevelRules()
    assert rules.flash_duration_ms(1) == 3000
    assert rules.flash_duration_ms(5) == 1400
    assert rules.flash_duration_ms(8) == 500
    assert rules.recall_budget_seconds(5) == 20
    assert rules.recall_budget_seconds(6) == 30
    assert rules.next_level(3) == (4, False)
    assert rules.next_level(7) == (1, True)


if __name__ == "__main__":
    _run_unit_tests()
    print("level_rules.py: ok")
