import math

import pytest
from pygame.math import Vector2

from birdlab.errors import InvalidArgument
from birdlab.neural.network import NeuralNetwork, parameter_count
from birdlab.sim.core.brain import Brain
from birdlab.sim.core.config import SimulationConfig
from birdlab.sim.core.eye import Eye
from birdlab.sim.core.food import Food

CENTER = Vector2(0.5, 0.5)


def _eye() -> Eye:
    return Eye.from_config(SimulationConfig())


def test_eye_validates_parameters():
    with pytest.raises(InvalidArgument):
        Eye(0.0, 1.0, 3)
    with pytest.raises(InvalidArgument):
        Eye(0.5, 7.0, 3)
    with pytest.raises(InvalidArgument):
        Eye(0.5, 1.0, 0)


def test_food_straight_ahead_lands_in_middle_cell():
    vision = _eye().process_vision(CENTER, 0.0, [Food.at(0.5, 0.6)])

    assert len(vision) == 9
    assert vision[4] == pytest.approx(0.6)
    assert sum(vision) == pytest.approx(0.6)


def test_closer_food_weighs_more_and_accumulates():
    vision = _eye().process_vision(CENTER, 0.0, [Food.at(0.5, 0.6), Food.at(0.5, 0.55)])

    assert vision[4] == pytest.approx(0.6 + 0.8)


def test_food_out_of_range_or_behind_is_invisible():
    foods = [Food.at(0.5, 0.8), Food.at(0.5, 0.4)]

    assert _eye().process_vision(CENTER, 0.0, foods) == [0.0] * 9


def test_food_to_the_right_lands_in_last_cell():
    vision = _eye().process_vision(CENTER, 0.0, [Food.at(0.6, 0.5)])

    assert vision[8] == pytest.approx(0.6)


def test_vision_is_relative_to_rotation():
    vision = _eye().process_vision(CENTER, math.pi / 2.0, [Food.at(0.6, 0.5)])

    assert vision[4] == pytest.approx(0.6)


def test_food_on_cone_edge_is_clamped_into_last_cell():
    eye = Eye(fov_range=1.0, fov_angle=math.pi / 2.0, cells=4)
    vision = eye.process_vision(CENTER, 0.0, [Food.at(0.6, 0.6)])

    assert vision[3] > 0.0
    assert sum(vision[:3]) == 0.0


def _brain(config: SimulationConfig, out_bias_a: float, out_bias_b: float) -> Brain:
    # one hidden neuron, both outputs driven by bias alone
    weights = [0.0, 1.0, out_bias_a, 0.0, out_bias_b, 0.0]
    return Brain.from_network(NeuralNetwork.from_weights(config.brain_topology, weights), config)


def _small_config() -> SimulationConfig:
    return SimulationConfig(eye_cells=1, brain_neurons=1)


def test_brain_turns_on_output_difference():
    config = _small_config()
    output = _brain(config, 1.0, 0.0).process_inputs([0.0])

    assert output.speed == pytest.approx(0.0)
    assert output.rotation == pytest.approx(1.0)


def test_brain_accelerates_on_output_sum_clamped_to_accel():
    config = _small_config()
    output = _brain(config, 1.0, 1.0).process_inputs([0.0])

    assert output.speed == pytest.approx(config.sim_speed_accel)
    assert output.rotation == pytest.approx(0.0)


def test_brain_decelerates_when_outputs_are_silent():
    config = _small_config()
    output = _brain(config, -1.0, -1.0).process_inputs([0.0])

    assert output.speed == pytest.approx(-config.sim_speed_accel)
    assert output.rotation == pytest.approx(0.0)


def test_brain_rejects_network_of_wrong_shape():
    config = SimulationConfig()
    network = NeuralNetwork.from_weights([3, 2, 2], [0.0] * parameter_count([3, 2, 2]))

    with pytest.raises(InvalidArgument):
        Brain.from_network(network, config)


def test_brain_chromosome_matches_network_weights():
    config = _small_config()
    brain = _brain(config, 0.25, 0.75)

    assert brain.to_chromosome().genes == [0.0, 1.0, 0.25, 0.0, 0.75, 0.0]
