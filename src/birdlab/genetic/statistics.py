from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Sequence

from ..errors import InvalidArgument
from .individual import Individual


@dataclass(frozen=True, slots=True)
class Statistics:
    min_fitness: float
    max_fitness: float
    avg_fitness: float
    median_fitness: float

    @staticmethod
    def of(population: Sequence[Individual]) -> "Statistics":
        if not population:
            raise InvalidArgument("Population must not be empty")
        fitnesses = sorted(individual.fitness for individual in population)
        count = len(fitnesses)
        middle = count // 2
        if count % 2 == 0:
            median = (fitnesses[middle - 1] + fitnesses[middle]) / 2.0
        else:
            median = fitnesses[middle]
        return Statistics(
            min_fitness=float(fitnesses[0]),
            max_fitness=float(fitnesses[-1]),
            avg_fitness=float(sum(fitnesses) / count),
            median_fitness=float(median),
        )

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"min={self.min_fitness:.2f}, max={self.max_fitness:.2f}, "
            f"avg={self.avg_fitness:.2f}, median={self.median_fitness:.2f}"
        )
