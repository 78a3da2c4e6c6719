from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from pygame.math import Vector2

from ...genetic.chromosome import Chromosome
from ..utils.math2d import clamp, heading_vector, normalize_rotation, wrap_unit
from .brain import Brain
from .config import SimulationConfig
from .eye import Eye
from .food import Food
from .rng import DeterministicRng


@dataclass(slots=True)
class Bird:
    position: Vector2
    rotation: float
    speed: float
    eye: Eye
    brain: Brain
    speed_min: float
    speed_max: float
    satiation: int = 0
    previous_position: Vector2 = field(default_factory=Vector2)
    _vision: List[float] = field(default_factory=list)

    @staticmethod
    def create(brain: Brain, position: Vector2, config: SimulationConfig, rotation: float = 0.0) -> "Bird":
        return Bird(
            position=Vector2(position),
            rotation=normalize_rotation(rotation),
            speed=config.sim_speed_max,
            eye=Eye.from_config(config),
            brain=brain,
            speed_min=config.sim_speed_min,
            speed_max=config.sim_speed_max,
            previous_position=Vector2(position),
            _vision=[0.0] * config.eye_cells,
        )

    @staticmethod
    def random(rng: DeterministicRng, config: SimulationConfig) -> "Bird":
        brain = Brain.random(rng, config)
        return Bird._placed(rng, config, brain)

    @staticmethod
    def from_chromosome(rng: DeterministicRng, config: SimulationConfig, chromosome: Chromosome) -> "Bird":
        brain = Brain.from_chromosome(chromosome, config)
        return Bird._placed(rng, config, brain)

    @staticmethod
    def _placed(rng: DeterministicRng, config: SimulationConfig, brain: Brain) -> "Bird":
        position = rng.next_position()
        rotation = rng.next_angle()
        return Bird.create(brain, position, config, rotation=rotation)

    @property
    def vision(self) -> List[float]:
        return list(self._vision)

    @property
    def fitness(self) -> float:
        return float(self.satiation)

    def see(self, foods: Iterable[Food]) -> List[float]:
        return self.eye.process_vision(self.position, self.rotation, foods)

    def process_brain(self, foods: Iterable[Food]) -> None:
        self._vision = self.see(foods)
        output = self.brain.process_inputs(self._vision)
        self.speed = clamp(self.speed + output.speed, self.speed_min, self.speed_max)
        self.rotation = normalize_rotation(self.rotation + output.rotation)

    def process_movement(self) -> None:
        self.previous_position = Vector2(self.position)
        hx, hy = heading_vector(self.rotation)
        self.position = Vector2(
            wrap_unit(self.position.x + hx * self.speed),
            wrap_unit(self.position.y + hy * self.speed),
        )

    def eat(self) -> None:
        self.satiation += 1

    def to_chromosome(self) -> Chromosome:
        return self.brain.to_chromosome()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "x": self.position.x,
            "y": self.position.y,
            "rotation": self.rotation,
            "speed": self.speed,
            "satiation": self.satiation,
            "vision": list(self._vision),
        }
