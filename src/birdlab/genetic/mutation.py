from __future__ import annotations

from typing import TYPE_CHECKING, MutableSequence, Optional, Protocol

from ..errors import InvalidArgument

if TYPE_CHECKING:
    from ..sim.core.rng import DeterministicRng


class MutationMethod(Protocol):
    def mutate(self, rng: "DeterministicRng", genes: MutableSequence[float]) -> None: ...


def _validate_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise InvalidArgument(f"{name} must be between 0 and 1, got {value}")


def _require_genes(genes: Optional[MutableSequence[float]]) -> None:
    if genes is None:
        raise InvalidArgument("Genes cannot be None")


class GaussianMutation:
    """Nudge each gene by ``+/- coeff * U(0, 1)`` with probability ``chance``."""

    def __init__(self, chance: float, coeff: float):
        _validate_probability("Chance", chance)
        self._chance = chance
        self._coeff = coeff

    @property
    def chance(self) -> float:
        return self._chance

    @property
    def coeff(self) -> float:
        return self._coeff

    def mutate(self, rng: "DeterministicRng", genes: MutableSequence[float]) -> None:
        _require_genes(genes)
        for index in range(len(genes)):
            if rng.next_float() < self._chance:
                sign = 1.0 if rng.next_bool() else -1.0
                genes[index] += sign * self._coeff * rng.next_float()

    def __repr__(self) -> str:
        return f"GaussianMutation(chance={self._chance}, coeff={self._coeff})"


class RandomResetMutation:
    """Replace each gene with a uniform draw from ``[min_value, max_value]``."""

    def __init__(self, probability: float, min_value: float, max_value: float):
        _validate_probability("Probability", probability)
        if min_value > max_value:
            raise InvalidArgument(f"Minimum value {min_value} must not be greater than maximum value {max_value}")
        self._probability = probability
        self._min_value = min_value
        self._max_value = max_value

    @property
    def probability(self) -> float:
        return self._probability

    @property
    def bounds(self) -> tuple[float, float]:
        return self._min_value, self._max_value

    def mutate(self, rng: "DeterministicRng", genes: MutableSequence[float]) -> None:
        _require_genes(genes)
        span = self._max_value - self._min_value
        for index in range(len(genes)):
            if rng.next_float() < self._probability:
                genes[index] = self._min_value + rng.next_float() * span

    def __repr__(self) -> str:
        return f"RandomResetMutation(probability={self._probability}, min_value={self._min_value}, max_value={self._max_value})"
