from __future__ import annotations

from dataclasses import dataclass

from pygame.math import Vector2

from .rng import DeterministicRng


@dataclass(slots=True)
class Food:
    position: Vector2

    @staticmethod
    def random(rng: DeterministicRng) -> "Food":
        return Food(position=rng.next_position())

    @staticmethod
    def at(x: float, y: float) -> "Food":
        return Food(position=Vector2(x, y))

    def relocate(self, rng: DeterministicRng) -> None:
        self.position = rng.next_position()
