from __future__ import annotations

from dataclasses import dataclass

from ...genetic.chromosome import Chromosome
from .bird import Bird
from .config import SimulationConfig
from .rng import DeterministicRng


@dataclass(frozen=True, slots=True)
class BirdIndividual:
    """A bird frozen at a generation boundary: its brain weights and its satiation."""

    chromosome: Chromosome
    fitness: float

    @staticmethod
    def of(bird: Bird) -> "BirdIndividual":
        return BirdIndividual(chromosome=bird.to_chromosome(), fitness=float(bird.satiation))

    def to_bird(self, rng: DeterministicRng, config: SimulationConfig) -> Bird:
        return Bird.from_chromosome(rng, config, self.chromosome)


class BirdIndividualFactory:
    def create(self, chromosome: Chromosome) -> BirdIndividual:
        return BirdIndividual(chromosome=chromosome, fitness=0.0)
