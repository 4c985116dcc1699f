"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pytest

from flappy_sim.config import FlappyConfig
from flappy_sim.engine import GameStateMachine
from flappy_sim.rng import SequenceRandomSource


@pytest.fixture
def config():
    """Default game configuration."""
    return FlappyConfig()


@pytest.fixture
def game(config):
    """State machine whose gaps are always centred (gap top 145, bottom 145)."""
    return GameStateMachine(config, random_source=SequenceRandomSource([0.5]))


@pytest.fixture
def running_game(game):
    """State machine already past the starting trigger."""
    game.jump()
    return game
