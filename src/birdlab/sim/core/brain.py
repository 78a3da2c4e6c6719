from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...errors import InvalidArgument
from ...genetic.chromosome import Chromosome
from ...neural.network import NeuralNetwork
from ..utils.math2d import clamp
from .config import SimulationConfig
from .rng import DeterministicRng


@dataclass(frozen=True, slots=True)
class BrainOutput:
    speed: float
    rotation: float


def topology_for(config: SimulationConfig) -> list[int]:
    return config.brain_topology


class Brain:
    """Wraps a ``[eye_cells, brain_neurons, 2]`` network and turns its raw outputs into
    speed and rotation deltas.

    Each output is clamped to ``[0, 1]`` and centred on zero. Their sum drives speed and
    their difference drives turning, so one two-output network expresses both.
    """

    __slots__ = ("_network", "_speed_accel", "_rotation_accel")

    def __init__(self, network: NeuralNetwork, config: SimulationConfig):
        self._network = network
        self._speed_accel = config.sim_speed_accel
        self._rotation_accel = config.sim_rotation_accel

    @staticmethod
    def random(rng: DeterministicRng, config: SimulationConfig) -> "Brain":
        return Brain(NeuralNetwork.random(rng, topology_for(config)), config)

    @staticmethod
    def from_chromosome(chromosome: Chromosome, config: SimulationConfig) -> "Brain":
        return Brain(NeuralNetwork.from_chromosome(chromosome, topology_for(config)), config)

    @staticmethod
    def from_network(network: NeuralNetwork, config: SimulationConfig) -> "Brain":
        topology = topology_for(config)
        if not network.matches_topology(topology):
            raise InvalidArgument(f"Network topology {network.topology} does not match expected {topology}")
        return Brain(network, config)

    @property
    def network(self) -> NeuralNetwork:
        return self._network

    def process_inputs(self, vision: Sequence[float]) -> BrainOutput:
        response = self._network.propagate(vision)
        r0 = clamp(response[0], 0.0, 1.0) - 0.5
        r1 = clamp(response[1], 0.0, 1.0) - 0.5
        return BrainOutput(
            speed=clamp(r0 + r1, -self._speed_accel, self._speed_accel),
            rotation=clamp(r0 - r1, -self._rotation_accel, self._rotation_accel),
        )

    def to_chromosome(self) -> Chromosome:
        return self._network.to_chromosome()
