import pytest

from birdlab.errors import InvalidArgument
from birdlab.genetic.chromosome import Chromosome
from birdlab.genetic.mutation import GaussianMutation, RandomResetMutation
from birdlab.sim.core.rng import DeterministicRng


def test_gaussian_mutation_validates_chance():
    with pytest.raises(InvalidArgument):
        GaussianMutation(1.5, 0.3)
    with pytest.raises(InvalidArgument):
        GaussianMutation(-0.1, 0.3)


def test_random_reset_validates_bounds_and_probability():
    with pytest.raises(InvalidArgument):
        RandomResetMutation(0.5, 1.0, -1.0)
    with pytest.raises(InvalidArgument):
        RandomResetMutation(2.0, -1.0, 1.0)


@pytest.mark.parametrize("method", [GaussianMutation(0.5, 0.3), RandomResetMutation(0.5, -1.0, 1.0)])
def test_mutation_rejects_missing_genes(method):
    with pytest.raises(InvalidArgument):
        method.mutate(DeterministicRng(1), None)


def test_gaussian_mutation_with_certain_chance_changes_every_gene():
    chromosome = Chromosome([0.0] * 200)
    chromosome.mutate(GaussianMutation(1.0, 0.3), DeterministicRng(4))

    assert all(gene != 0.0 for gene in chromosome)
    assert all(abs(gene) <= 0.3 + 1e-6 for gene in chromosome)


@pytest.mark.statistical
def test_gaussian_mutation_rate_matches_chance():
    chromosome = Chromosome([0.0] * 10000)
    chromosome.mutate(GaussianMutation(0.5, 1.0), DeterministicRng(21))
    changed = sum(1 for gene in chromosome if gene != 0.0)

    assert changed == pytest.approx(5000, rel=0.05)


def test_random_reset_stays_within_bounds():
    genes = [5.0] * 1000
    RandomResetMutation(1.0, -0.5, 0.5).mutate(DeterministicRng(8), genes)

    assert all(-0.5 <= gene <= 0.5 for gene in genes)


def test_random_reset_with_zero_probability_keeps_genes():
    genes = [5.0] * 50
    RandomResetMutation(0.0, -0.5, 0.5).mutate(DeterministicRng(8), genes)

    assert genes == [5.0] * 50


@pytest.mark.statistical
def test_random_reset_rate_matches_probability():
    genes = [5.0] * 10000
    RandomResetMutation(0.3, -1.0, 1.0).mutate(DeterministicRng(17), genes)
    replaced = sum(1 for gene in genes if gene != 5.0)

    assert replaced == pytest.approx(3000, rel=0.05)
