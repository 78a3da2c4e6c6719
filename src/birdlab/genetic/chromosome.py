from __future__ import annotations

from array import array
from typing import TYPE_CHECKING, Iterable, Iterator, List

from ..errors import InvalidArgument

if TYPE_CHECKING:
    from ..neural.network import NeuralNetwork
    from ..sim.core.rng import DeterministicRng
    from .mutation import MutationMethod

GENE_TOLERANCE = 1e-7


class Chromosome:
    """Fixed-length vector of 32-bit float genes.

    The genes never change after construction except through :meth:`mutate`, which
    mutates in place and hands the same object back. Treat the receiver as consumed.
    """

    __slots__ = ("_genes",)

    def __init__(self, genes: Iterable[float] = ()):
        self._genes = array("f", genes)

    @classmethod
    def of(cls, *genes: float) -> "Chromosome":
        return cls(genes)

    @classmethod
    def from_network(cls, network: "NeuralNetwork") -> "Chromosome":
        return cls(network.weights())

    @property
    def genes(self) -> List[float]:
        return self._genes.tolist()

    @property
    def is_empty(self) -> bool:
        return len(self._genes) == 0

    def __len__(self) -> int:
        return len(self._genes)

    def __getitem__(self, index: int) -> float:
        return self._genes[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._genes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        if len(self._genes) != len(other._genes):
            return False
        return all(abs(a - b) <= GENE_TOLERANCE for a, b in zip(self._genes, other._genes))

    # tolerance-based equality cannot be hashed consistently
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Chromosome({self._genes.tolist()!r})"

    def mutate(self, method: "MutationMethod", rng: "DeterministicRng") -> "Chromosome":
        if method is None:
            raise InvalidArgument("Mutation method cannot be None")
        method.mutate(rng, self._genes)
        return self
