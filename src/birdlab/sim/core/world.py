from __future__ import annotations

from typing import Iterable, List, Tuple

from .bird import Bird
from .config import SimulationConfig
from .food import Food
from .rng import DeterministicRng


class World:
    """Owns the birds and the food. Outside code only ever gets tuple views."""

    def __init__(self, config: SimulationConfig):
        self._config = config
        self._birds: List[Bird] = []
        self._foods: List[Food] = []

    @staticmethod
    def random(config: SimulationConfig, rng: DeterministicRng) -> "World":
        world = World(config)
        for _ in range(config.world_animals):
            world.add_bird(Bird.random(rng, config))
        for _ in range(config.world_foods):
            world.add_food(Food.random(rng))
        return world

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def birds(self) -> Tuple[Bird, ...]:
        return tuple(self._birds)

    @property
    def foods(self) -> Tuple[Food, ...]:
        return tuple(self._foods)

    def add_bird(self, bird: Bird) -> None:
        self._birds.append(bird)

    def clear_birds(self) -> None:
        self._birds.clear()

    def replace_birds(self, birds: Iterable[Bird]) -> None:
        self._birds = list(birds)

    def add_food(self, food: Food) -> None:
        self._foods.append(food)

    def clear_foods(self) -> None:
        self._foods.clear()

    def relocate_foods(self, rng: DeterministicRng) -> None:
        for food in self._foods:
            food.relocate(rng)
