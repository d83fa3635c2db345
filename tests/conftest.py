"""Pytest fixtures for pyBowScore tests."""

import numpy as np
import pytest

from pyBowScore.BowVector import BowVector


def random_bow_vector(rng, vocabulary_size, n_words):
    """L1-normalized BowVector with n_words distinct random words."""
    word_ids = rng.choice(vocabulary_size, size=n_words, replace=False)
    weights = rng.random(n_words)
    bv = BowVector({int(w): float(x) for w, x in zip(word_ids, weights)})
    bv.normalize("L1")
    return bv


@pytest.fixture
def v1():
    """Query vector of the worked example: {1: 0.5, 3: 0.5}."""
    return BowVector({1: 0.5, 3: 0.5})


@pytest.fixture
def v2():
    """Candidate vector of the worked example: {1: 0.5, 2: 0.5}."""
    return BowVector({1: 0.5, 2: 0.5})


@pytest.fixture
def empty():
    return BowVector()


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def random_pair(rng):
    """Two overlapping normalized vectors over a small vocabulary."""
    return random_bow_vector(rng, 200, 60), random_bow_vector(rng, 200, 80)


@pytest.fixture
def large_pair(rng):
    """Vectors big enough to take the threaded L2 path."""
    return random_bow_vector(rng, 20000, 5000), random_bow_vector(rng, 20000, 4000)
