# -*- coding: utf-8 -*-
########################
# interference_task.py
########################
# Purpose:
# - Builds the same/different shape pair shown between flashes.
#
# Design notes:
# - No Qt usage.
# - Half the pairs are identical. A "different" draw that lands on the left shape gets the sentinel
#   color black, so a different pair is always visibly different.
# - The pair is never scored. The answer only advances the flash loop.
#
########################
# Interfaces:
# Public classes:
# - class InterferenceTaskGenerator
#   - __init__(random_generator: Optional[random.Random] = None, identical_probability: float = 0.5)
#   - generate() -> DistractionPair
#
########################

from __future__ import annotations

import random
from typing import Optional

from grid_models import RANDOM_SHAPE_COLORS, RANDOM_SHAPE_KINDS, DistractionPair, ShapeColor, ShapeDescriptor


class InterferenceTaskGenerator:
    def __init__(self, random_generator: Optional[random.Random] = None, identical_probability: float = 0.5) -> None:
        self._random = random_generator if random_generator is not None else random.Random()
        self._identical_probability = float(identical_probability)

    def _draw_descriptor(self) -> ShapeDescriptor:
        return ShapeDescriptor(
            shape_kind=self._random.choice(RANDOM_SHAPE_KINDS),
            color=self._random.choice(RANDOM_SHAPE_COLORS),
        )

    def generate(self) -> DistractionPair:
        is_identical = self._random.random() < self._identical_probability
        left = self._draw_descriptor()

        if is_identical:
            return DistractionPair(left=left, right=left, is_identical=True)

        right = self._draw_descriptor()
        if right == left:
            right = ShapeDescriptor(shape_kind=right.shape_kind, color=ShapeColor.BLACK)
        return DistractionPair(left=left, right=right, is_identical=False)


def _run_unit_tests() -> None:
    generator = InterferenceTaskGenerator(random.Random(3))
    identical_count = 0
    for _ in range(500):
        pair = generator.generate()
        if pair.is_identical:
            identical_count += 1
            assert pair.left == pair.right
        else:
            assert pair.left != pair.right
        assert pair.left.color != ShapeColor.BLACK
    assert 150 < identical_count < 350


if __name__ == "__main__":
    _run_unit_tests()
    print("interference_task.py: ok")
