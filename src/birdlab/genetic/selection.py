from __future__ import annotations

from bisect import bisect_left
from itertools import accumulate
from typing import TYPE_CHECKING, Protocol, Sequence, TypeVar

from ..errors import InvalidArgument
from .individual import Individual

if TYPE_CHECKING:
    from ..sim.core.rng import DeterministicRng

MINIMUM_FITNESS = 1e-5

I = TypeVar("I", bound=Individual)


class SelectionMethod(Protocol):
    def select(self, rng: "DeterministicRng", population: Sequence[I]) -> I: ...


def _require_population(population: Sequence[Individual]) -> None:
    if not population:
        raise InvalidArgument("Population cannot be empty")


class RouletteWheelSelection:
    """Fitness-proportionate selection.

    Zero or negative fitness is floored at ``MINIMUM_FITNESS`` so that a population of
    equally useless individuals still yields a uniform draw.
    """

    def select(self, rng: "DeterministicRng", population: Sequence[I]) -> I:
        _require_population(population)
        cumulative = list(accumulate(max(individual.fitness, MINIMUM_FITNESS) for individual in population))
        total = cumulative[-1]
        point = rng.next_float() * total
        index = bisect_left(cumulative, point)
        return population[min(index, len(population) - 1)]

    def __repr__(self) -> str:
        return "RouletteWheelSelection()"


class TournamentSelection:
    """Draw ``size`` contenders with replacement and keep the fittest."""

    def __init__(self, size: int = 2):
        if size < 1:
            raise InvalidArgument(f"Tournament size must be at least 1, got {size}")
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    def select(self, rng: "DeterministicRng", population: Sequence[I]) -> I:
        _require_population(population)
        rounds = min(self._size, len(population))
        winner = population[rng.next_int(len(population))]
        for _ in range(rounds - 1):
            contender = population[rng.next_int(len(population))]
            if contender.fitness > winner.fitness:
                winner = contender
        return winner

    def __repr__(self) -> str:
        return f"TournamentSelection(size={self._size})"
