from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar, runtime_checkable

from .chromosome import Chromosome


@runtime_checkable
class Individual(Protocol):
    """Anything the genetic operators can work with.

    Fitness is read-only from the algorithm's point of view.
    """

    @property
    def chromosome(self) -> Chromosome: ...

    @property
    def fitness(self) -> float: ...


I = TypeVar("I", bound=Individual, covariant=True)


class IndividualFactory(Protocol[I]):
    def create(self, chromosome: Chromosome) -> I: ...


@dataclass(frozen=True, slots=True)
class ScoredIndividual:
    chromosome: Chromosome
    fitness: float = 0.0


class ScoredIndividualFactory:
    def create(self, chromosome: Chromosome) -> ScoredIndividual:
        return ScoredIndividual(chromosome=chromosome)
