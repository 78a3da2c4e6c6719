from __future__ import annotations

import math
import random

from pygame.math import Vector2


def _derive_stream_seed(seed: int, salt: int) -> int:
    return (int(seed) ^ int(salt)) & 0xFFFFFFFFFFFFFFFF


class DeterministicRng:
    """The single random stream shared by everything inside one simulation instance."""

    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def reset(self) -> None:
        self._random.seed(self._seed)

    def fork(self, salt: int) -> "DeterministicRng":
        return DeterministicRng(_derive_stream_seed(self._seed, salt))

    def next_float(self) -> float:
        return self._random.random()

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_int(self, max_value: int) -> int:
        return self._random.randrange(max_value)

    def next_bool(self) -> bool:
        return self._random.random() < 0.5

    def next_angle(self) -> float:
        return self._random.random() * 2.0 * math.pi

    def next_position(self) -> Vector2:
        x = self._random.random()
        y = self._random.random()
        return Vector2(x, y)
