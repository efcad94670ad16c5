# -*- coding: utf-8 -*-
########################
# sequence_generator.py
########################
# Purpose:
# - Draws grid coordinates for the flash sequence without repeats.
#
# Design notes:
# - No Qt usage. Randomness comes from an injected random.Random so sessions can be seeded.
# - Rejection sampling: draw uniformly, redraw on collision.
# - Precondition: grid_size * grid_size >= max_level. Checked at construction.
#   A full grid raises SequenceExhaustedError instead of looping forever.
#
########################
# Interfaces:
# Public classes:
# - class SequenceExhaustedError(RuntimeError)
# - class RandomSequenceGenerator
#   - __init__(grid_size: int, max_level: int, random_generator: Optional[random.Random] = None)
#   - grid_size() -> int
#   - next_coordinate(existing: AbstractSet[GridCoordinate]) -> GridCoordinate
#   - generate(length: int) -> list[GridCoordinate]
#
########################

from __future__ import annotations

import random
from typing import AbstractSet, List, Optional

from grid_models import GridCoordinate


class SequenceExhaustedError(RuntimeError):
    pass


class RandomSequenceGenerator:
    def __init__(self, grid_size: int = 5, max_level: int = 7, random_generator: Optional[random.Random] = None) -> None:
        if int(grid_size) <= 0:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        if int(grid_size) * int(grid_size) < int(max_level):
            raise ValueError(
                f"grid of {grid_size}x{grid_size} cannot hold a sequence of {max_level} distinct cells"
            )
        self._grid_size = int(grid_size)
        self._random = random_generator if random_generator is not None else random.Random()

    def grid_size(self) -> int:
        return self._grid_size

    def next_coordinate(self, existing: AbstractSet[GridCoordinate]) -> GridCoordinate:
        occupied = sum(1 for coordinate in existing if coordinate.is_within(self._grid_size))
        if occupied >= self._grid_size * self._grid_size:
            raise SequenceExhaustedError(f"No free cell left on a {self._grid_size}x{self._grid_size} grid")

        while True:
            coordinate = GridCoordinate(
                row=self._random.randrange(self._grid_size),
                col=self._random.randrange(self._grid_size),
            )
            if coordinate not in existing:
                return coordinate

    def generate(self, length: int) -> List[GridCoordinate]:
        sequence: List[GridCoordinate] = []
        seen = set()
        for _ in range(int(length)):
            coordinate = self.next_coordinate(seen)
            sequence.append(coordinate)
            seen.add(coordinate)
        return sequence


def _run_unit_tests() -> None:
    generator = RandomSequenceGenerator(grid_size=5, max_level=7, random_generator=random.Random(7))
    for length in range(1, 8):
        sequence = generator.generate(length)
        assert len(sequence) == length
        assert len(set(sequence)) == length
        assert all(coordinate.is_within(5) for coordinate in sequence)

    tiny = RandomSequenceGenerator(grid_size=1, max_level=1)
    assert tiny.next_coordinate(set()) == GridCoordinate(0, 0)
    try:
        tiny.next_coordinate({GridCoordinate(0, 0)})
    except SequenceExhaustedError:
        pass
    else:
        raise AssertionError("expected SequenceExhaustedError")


if __name__ == "__main__":
    _run_unit_tests()
    print("sequence_generator.py: ok")
