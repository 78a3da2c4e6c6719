from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from ..errors import InvalidArgument
from .chromosome import Chromosome

if TYPE_CHECKING:
    from ..sim.core.rng import DeterministicRng


class CrossoverMethod(Protocol):
    def crossover(self, rng: "DeterministicRng", parent_a: Chromosome, parent_b: Chromosome) -> Chromosome: ...


def _check_parents(parent_a: Optional[Chromosome], parent_b: Optional[Chromosome]) -> None:
    if parent_a is None or parent_b is None:
        raise InvalidArgument("Parents cannot be None")
    if len(parent_a) != len(parent_b):
        raise InvalidArgument(f"Parents must have the same length, got {len(parent_a)} and {len(parent_b)}")


class SinglePointCrossover:
    """Genes ``[0, cut)`` from the first parent, ``[cut, len)`` from the second.

    The cut point is drawn from ``[1, len - 1]`` so both parents always contribute when
    the chromosome has at least two genes.
    """

    def crossover(self, rng: "DeterministicRng", parent_a: Chromosome, parent_b: Chromosome) -> Chromosome:
        _check_parents(parent_a, parent_b)
        length = len(parent_a)
        if length == 0:
            return Chromosome()
        if length == 1:
            return Chromosome(parent_a)
        cut = 1 + rng.next_int(length - 1)
        genes = [parent_a[i] for i in range(cut)]
        genes.extend(parent_b[i] for i in range(cut, length))
        return Chromosome(genes)

    def __repr__(self) -> str:
        return "SinglePointCrossover()"


class UniformCrossover:
    def crossover(self, rng: "DeterministicRng", parent_a: Chromosome, parent_b: Chromosome) -> Chromosome:
        _check_parents(parent_a, parent_b)
        return Chromosome(a if rng.next_bool() else b for a, b in zip(parent_a, parent_b))

    def __repr__(self) -> str:
        return "UniformCrossover()"
