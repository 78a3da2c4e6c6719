from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ...genetic.statistics import Statistics


@dataclass(frozen=True, slots=True)
class GenerationStatistics:
    generation: int
    ga: Statistics

    @property
    def min_fitness(self) -> float:
        return self.ga.min_fitness

    @property
    def max_fitness(self) -> float:
        return self.ga.max_fitness

    @property
    def avg_fitness(self) -> float:
        return self.ga.avg_fitness

    @property
    def median_fitness(self) -> float:
        return self.ga.median_fitness

    def as_dict(self) -> Dict[str, Any]:
        return {"generation": self.generation, **self.ga.as_dict()}
