from __future__ import annotations

from enum import Enum
from typing import List, Optional

from loguru import logger

from ...genetic.algorithm import GeneticAlgorithm
from ...genetic.crossover import UniformCrossover
from ...genetic.mutation import GaussianMutation
from ...genetic.selection import RouletteWheelSelection
from ...genetic.statistics import Statistics
from ..types.statistics import GenerationStatistics
from .bird import Bird
from .config import SimulationConfig
from .individual import BirdIndividual, BirdIndividualFactory
from .rng import DeterministicRng
from .simulation import Simulation


class EvolutionState(str, Enum):
    RUNNING = "Running"
    EVOLVING = "Evolving"


def default_algorithm(config: SimulationConfig) -> GeneticAlgorithm[BirdIndividual]:
    return GeneticAlgorithm(
        selection=RouletteWheelSelection(),
        crossover=UniformCrossover(),
        mutation=GaussianMutation(config.ga_mut_chance, config.ga_mut_coeff),
        factory=BirdIndividualFactory(),
    )


class EvolutionLoop:
    """Drives a simulation and replaces its flock every ``sim_generation_length`` ticks."""

    def __init__(
        self,
        config: SimulationConfig,
        rng: DeterministicRng,
        simulation: Optional[Simulation] = None,
        algorithm: Optional[GeneticAlgorithm[BirdIndividual]] = None,
    ):
        self._config = config.validate()
        self._simulation = simulation if simulation is not None else Simulation(config, rng)
        self._algorithm = algorithm if algorithm is not None else default_algorithm(config)
        self._state = EvolutionState.RUNNING
        self._age = 0
        self._generation = 0
        self._last_statistics: Optional[Statistics] = None

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def simulation(self) -> Simulation:
        return self._simulation

    @property
    def state(self) -> EvolutionState:
        return self._state

    @property
    def age(self) -> int:
        return self._age

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_statistics(self) -> Optional[GenerationStatistics]:
        if self._last_statistics is None:
            return None
        return GenerationStatistics(generation=self._generation - 1, ga=self._last_statistics)

    def step(self, rng: DeterministicRng) -> Optional[Statistics]:
        self._simulation.update(rng)
        return self.try_evolve(rng)

    def train(self, rng: DeterministicRng) -> GenerationStatistics:
        while True:
            statistics = self.step(rng)
            if statistics is not None:
                return GenerationStatistics(generation=self._generation - 1, ga=statistics)

    def try_evolve(self, rng: DeterministicRng) -> Optional[Statistics]:
        self._age += 1
        if self._age < self._config.sim_generation_length:
            return None
        self._state = EvolutionState.EVOLVING
        try:
            statistics = self._evolve(rng)
        finally:
            self._state = EvolutionState.RUNNING
        self._age = 0
        self._generation += 1
        self._last_statistics = statistics
        logger.debug("[EvolutionLoop] generation {} done: {}", self._generation - 1, statistics)
        return statistics

    def _evolve(self, rng: DeterministicRng) -> Statistics:
        individuals = [BirdIndividual.of(bird) for bird in self._simulation.birds]
        if not individuals:
            logger.debug(
                "[EvolutionLoop] no birds alive at generation {}, seeding {} random ones",
                self._generation,
                self._config.world_animals,
            )
            individuals = [BirdIndividual.of(Bird.random(rng, self._config)) for _ in range(self._config.world_animals)]
        result = self._algorithm.evolve(rng, individuals)
        birds: List[Bird] = [individual.to_bird(rng, self._config) for individual in result.population]
        self._simulation.replace_birds(birds)
        self._simulation.relocate_foods(rng)
        return result.statistics
