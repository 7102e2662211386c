"""Pytest configuration and fixtures."""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from first_and_ten.players import create_test_roster


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: statistical tests over many seeded games")


class ScriptedRNG:
    """
    Stand-in for RandomState that replays a fixed list of uniform draws.

    rand() pops the next scripted value (then repeats `default` once the
    script runs out); randint(lo, hi) returns lo; normal(mean, sd) returns mean.
    """

    def __init__(self, values=(), default=0.5):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def rand(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default

    def randint(self, lo, hi):
        return lo

    def normal(self, mean, sd):
        return mean


@pytest.fixture
def rng():
    """Seeded RandomState."""
    return np.random.RandomState(2025)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRNG instances."""
    return ScriptedRNG


@pytest.fixture
def average_roster():
    """Tier-5 roster at every slot."""
    return create_test_roster()


@pytest.fixture
def elite_roster():
    """Tier-10 roster at every slot."""
    return create_test_roster({pos: 10 for pos in ("QB", "RB", "WR", "TE", "OL", "DL", "LB", "DB", "K", "P")})


@pytest.fixture
def weak_roster():
    """Tier-2 roster at every slot."""
    return create_test_roster({pos: 2 for pos in ("QB", "RB", "WR", "TE", "OL", "DL", "LB", "DB", "K", "P")})


@pytest.fixture
def sample_cards():
    """Raw player cards as they arrive from an external roster export."""
    return [
        {"player": "Jalen Arm", "pos_group": "QB", "tier": 8, "att_pg": 30.0, "rush_att_pg": 2.0,
         "rush_yds_pg": 10.0, "engine_traits": {"accuracy": 80, "mobility": 40}},
        {"player": "Derrick Legs", "pos_group": "RB", "tier": 6, "composite_score": 70},
        {"player": "Wide One", "pos_group": "WR", "tier": 7},
        {"player": "Wide Two", "pos_group": "WR", "tier": 6},
        {"player": "Wide Three", "pos_group": "WR", "tier": 9},
        {"player": "Tight End", "pos_group": "TE", "tier": 5},
        {"player": "Big Line", "pos_group": "OL", "tier": 6},
        {"player": "Edge Rush", "pos_group": "DL", "tier": 7},
        {"player": "Middle Backer", "pos_group": "LB", "tier": 5},
        {"player": "Corner One", "pos_group": "DB", "tier": 6},
        {"player": "Safety Two", "pos_group": "DB", "tier": 4},
        {"player": "Leg", "pos_group": "K", "tier": 5},
    ]
