from __future__ import annotations

import pytest
from pygame.math import Vector2

from birdlab.errors import InvalidArgument
from birdlab.neural.network import NeuralNetwork, parameter_count
from birdlab.sim.core.bird import Bird
from birdlab.sim.core.brain import Brain
from birdlab.sim.core.config import SimulationConfig
from birdlab.sim.core.food import Food
from birdlab.sim.core.rng import DeterministicRng
from birdlab.sim.core.simulation import Simulation, new_simulation
from birdlab.sim.core.world import World


def _silent_bird(config: SimulationConfig, x: float, y: float) -> Bird:
    topology = config.brain_topology
    network = NeuralNetwork.from_weights(topology, [0.0] * parameter_count(topology))
    return Bird.create(Brain.from_network(network, config), Vector2(x, y), config)


def _config(**overrides) -> SimulationConfig:
    values = dict(world_animals=1, world_foods=0, sim_speed_min=0.01, sim_speed_max=0.01)
    values.update(overrides)
    return SimulationConfig(**values)


def test_random_world_has_configured_counts():
    config = SimulationConfig(world_animals=5, world_foods=7)
    world = World.random(config, DeterministicRng(1))

    assert len(world.birds) == 5
    assert len(world.foods) == 7
    assert isinstance(world.birds, tuple)


def test_world_views_cannot_modify_world():
    world = World(_config())
    world.add_food(Food.at(0.1, 0.1))
    foods = world.foods

    with pytest.raises(AttributeError):
        foods.append(Food.at(0.2, 0.2))  # type: ignore[attr-defined]
    world.clear_foods()
    assert len(foods) == 1
    assert world.foods == ()


def test_simulation_rejects_invalid_config():
    with pytest.raises(InvalidArgument):
        Simulation(SimulationConfig(world_animals=0), DeterministicRng(1))


def test_simulation_counts_ticks_and_keeps_birds_in_unit_square():
    config = SimulationConfig(world_animals=6, world_foods=10)
    simulation = new_simulation(config, DeterministicRng(3))
    rng = DeterministicRng(4)
    for _ in range(50):
        simulation.update(rng)

    assert simulation.tick == 50
    for bird in simulation.birds:
        assert 0.0 <= bird.position.x < 1.0
        assert 0.0 <= bird.position.y < 1.0
        assert config.sim_speed_min <= bird.speed <= config.sim_speed_max


def test_bird_flies_straight_into_food_ahead():
    config = _config()
    rng = DeterministicRng(2)
    world = World(config)
    world.add_bird(_silent_bird(config, 0.5, 0.3))
    world.add_food(Food.at(0.5, 0.5))
    simulation = Simulation(config, rng, world=world)
    collisions = simulation.collisions.subscribe()
    bird = simulation.birds[0]
    threshold = config.bird_size + config.food_size

    distance = bird.position.distance_to(Vector2(0.5, 0.5))
    events = []
    for _ in range(40):
        simulation.update(rng)
        events = collisions.drain()
        if events:
            break
        current = bird.position.distance_to(Vector2(0.5, 0.5))
        assert current < distance
        distance = current
        assert 0.0 <= bird.position.y < 1.0

    assert len(events) == 1
    assert events[0].distance <= threshold
    assert (events[0].food_x, events[0].food_y) == (0.5, 0.5)
    assert bird.satiation == 1
    assert bird.rotation == 0.0
    assert simulation.foods[0].position != Vector2(0.5, 0.5)


def test_every_bird_touching_a_food_eats_it_and_food_moves_once():
    config = _config(world_animals=2)
    rng = DeterministicRng(5)
    world = World(config)
    world.add_bird(_silent_bird(config, 0.5, 0.5))
    world.add_bird(_silent_bird(config, 0.51, 0.5))
    world.add_food(Food.at(0.5, 0.5))
    world.add_food(Food.at(0.9, 0.9))
    simulation = Simulation(config, rng, world=world)
    collisions = simulation.collisions.subscribe()

    simulation.update(rng)
    events = collisions.drain()

    assert [bird.satiation for bird in simulation.birds] == [1, 1]
    assert len(events) == 2
    assert all((event.food_x, event.food_y) == (0.5, 0.5) for event in events)
    assert simulation.foods[0].position != Vector2(0.5, 0.5)
    assert simulation.foods[1].position == Vector2(0.9, 0.9)


def test_replace_birds_and_relocate_foods():
    config = SimulationConfig(world_animals=3, world_foods=4)
    rng = DeterministicRng(8)
    simulation = Simulation(config, rng)
    before = [Vector2(food.position) for food in simulation.foods]

    simulation.replace_birds([_silent_bird(config, 0.1, 0.1)])
    simulation.relocate_foods(rng)

    assert len(simulation.birds) == 1
    assert [food.position for food in simulation.foods] != before
    simulation.clear_birds()
    assert simulation.birds == ()


def test_snapshot_lists_birds_and_foods():
    config = SimulationConfig(world_animals=2, world_foods=3)
    simulation = Simulation(config, DeterministicRng(1))
    simulation.update(DeterministicRng(2))
    snapshot = simulation.snapshot(generation=4, age=7).as_dict()

    assert snapshot["tick"] == 1
    assert snapshot["generation"] == 4
    assert snapshot["age"] == 7
    assert len(snapshot["birds"]) == 2
    assert len(snapshot["foods"]) == 3
    assert set(snapshot["birds"][0]) >= {"x", "y", "rotation", "satiation"}


def test_simulation_is_deterministic_for_same_seed():
    config = SimulationConfig(world_animals=5, world_foods=20)

    def run() -> list[tuple[float, float, int]]:
        rng = DeterministicRng(99)
        simulation = Simulation(config, rng)
        for _ in range(200):
            simulation.update(rng)
        return [(bird.position.x, bird.position.y, bird.satiation) for bird in simulation.birds]

    assert run() == run()


def test_injected_world_must_share_simulation_config():
    world = World(_config())

    with pytest.raises(InvalidArgument):
        Simulation(_config(bird_size=0.2), DeterministicRng(1), world=world)
    assert Simulation(_config(), DeterministicRng(1), world=world).world is world
