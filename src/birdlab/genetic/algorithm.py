from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, List, Sequence, Tuple, TypeVar

from ..errors import InvalidArgument
from .crossover import CrossoverMethod
from .individual import Individual, IndividualFactory
from .mutation import MutationMethod
from .selection import SelectionMethod
from .statistics import Statistics

if TYPE_CHECKING:
    from ..sim.core.rng import DeterministicRng

I = TypeVar("I", bound=Individual)


@dataclass(frozen=True, slots=True)
class EvolutionResult(Generic[I]):
    population: Tuple[I, ...]
    statistics: Statistics


class GeneticAlgorithm(Generic[I]):
    """One generation step over any fitness-bearing individual.

    For every slot of the output population two parents are selected independently
    (self-pairing is allowed), crossed over, mutated and handed to the factory.
    The input population is only read.
    """

    def __init__(
        self,
        selection: SelectionMethod,
        crossover: CrossoverMethod,
        mutation: MutationMethod,
        factory: IndividualFactory[I],
    ):
        self._selection = selection
        self._crossover = crossover
        self._mutation = mutation
        self._factory = factory

    @property
    def selection(self) -> SelectionMethod:
        return self._selection

    @property
    def crossover(self) -> CrossoverMethod:
        return self._crossover

    @property
    def mutation(self) -> MutationMethod:
        return self._mutation

    def evolve(self, rng: "DeterministicRng", population: Sequence[Individual]) -> EvolutionResult[I]:
        if not population:
            raise InvalidArgument("Population cannot be empty")
        statistics = Statistics.of(population)
        offspring: List[I] = []
        for _ in range(len(population)):
            parent_a = self._selection.select(rng, population).chromosome
            parent_b = self._selection.select(rng, population).chromosome
            child = self._crossover.crossover(rng, parent_a, parent_b)
            child = child.mutate(self._mutation, rng)
            offspring.append(self._factory.create(child))
        return EvolutionResult(population=tuple(offspring), statistics=statistics)
