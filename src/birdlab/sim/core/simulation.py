from __future__ import annotations

from typing import Iterable, Optional, Tuple

from ...errors import InvalidArgument
from ..types.snapshot import Snapshot
from .bird import Bird
from .config import SimulationConfig
from .events import CollisionChannel, CollisionEvent
from .food import Food
from .rng import DeterministicRng
from .world import World


class Simulation:
    """One world stepped one tick at a time.

    A tick always runs collisions, then brains, then movements. Collisions are checked
    for every (bird, food) pair against the food positions at the start of the tick, so
    several birds may eat the same food in one tick. Each eaten food relocates once,
    after all pairs were checked.
    """

    def __init__(self, config: SimulationConfig, rng: DeterministicRng, world: Optional[World] = None):
        self._config = config.validate()
        if world is not None and world.config is not config and world.config != config:
            raise InvalidArgument("World was built from a different configuration than the simulation")
        self._world = world if world is not None else World.random(config, rng)
        self._collisions = CollisionChannel(config.collision_channel_capacity)
        self._tick = 0

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def world(self) -> World:
        return self._world

    @property
    def birds(self) -> Tuple[Bird, ...]:
        return self._world.birds

    @property
    def foods(self) -> Tuple[Food, ...]:
        return self._world.foods

    @property
    def collisions(self) -> CollisionChannel:
        return self._collisions

    @property
    def tick(self) -> int:
        return self._tick

    def add_foods(self, count: int, rng: DeterministicRng) -> None:
        for _ in range(count):
            self._world.add_food(Food.random(rng))

    def add_bird(self, bird: Bird) -> None:
        self._world.add_bird(bird)

    def clear_birds(self) -> None:
        self._world.clear_birds()

    def replace_birds(self, birds: Iterable[Bird]) -> None:
        self._world.replace_birds(birds)

    def relocate_foods(self, rng: DeterministicRng) -> None:
        self._world.relocate_foods(rng)

    def update(self, rng: DeterministicRng) -> None:
        birds = self._world.birds
        foods = self._world.foods
        self._process_collisions(rng, birds, foods)
        self._process_brains(birds, foods)
        self._process_movements(birds)
        self._tick += 1

    def _process_collisions(self, rng: DeterministicRng, birds: Tuple[Bird, ...], foods: Tuple[Food, ...]) -> None:
        threshold = self._config.bird_size + self._config.food_size
        eaten = [False] * len(foods)
        for bird in birds:
            for index, food in enumerate(foods):
                distance = bird.position.distance_to(food.position)
                if distance <= threshold:
                    bird.eat()
                    eaten[index] = True
                    self._collisions.publish(CollisionEvent.create(bird, food, distance))
        for food, was_eaten in zip(foods, eaten):
            if was_eaten:
                food.relocate(rng)

    def _process_brains(self, birds: Tuple[Bird, ...], foods: Tuple[Food, ...]) -> None:
        for bird in birds:
            bird.process_brain(foods)

    def _process_movements(self, birds: Tuple[Bird, ...]) -> None:
        for bird in birds:
            bird.process_movement()

    def snapshot(self, generation: int = 0, age: int = 0) -> Snapshot:
        return Snapshot(
            tick=self._tick,
            generation=generation,
            age=age,
            birds=[bird.snapshot() for bird in self._world.birds],
            foods=[{"x": food.position.x, "y": food.position.y} for food in self._world.foods],
        )


def new_simulation(config: SimulationConfig, rng: DeterministicRng) -> Simulation:
    return Simulation(config, rng)
