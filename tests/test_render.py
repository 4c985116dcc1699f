"""Tests for the pygame render layer."""

import os

os.environ['SDL_VIDEODRIVER'] = 'dummy'

import numpy as np
import pygame
import pytest

from flappy_sim.config import FlappyConfig
from flappy_sim.entities import Agent, GameState, Obstacle, Phase
from flappy_sim.render import GameRenderer, agent_tilt, FLAP_DURATION_MS, COLOR_SKY, COLOR_PIPE, COLOR_GROUND


@pytest.fixture
def renderer():
    pygame.init()
    return GameRenderer(FlappyConfig())


def running_state(**kwargs):
    defaults = dict(
        phase=Phase.RUNNING,
        agent=Agent(100.0, 250.0, 0.0),
        obstacles=(Obstacle(400.0, 145.0, 145.0, id=0),),
    )
    defaults.update(kwargs)
    return GameState(**defaults)


class TestAgentTilt:
    def test_scales_velocity(self):
        assert agent_tilt(2.0) == 6.0

    def test_clamped_upward(self):
        assert agent_tilt(-8.0) == -24.0
        assert agent_tilt(-20.0) == -30.0

    def test_clamped_downward(self):
        assert agent_tilt(50.0) == 90.0


class TestFlapSignal:
    def test_just_jumped_starts_flourish(self, renderer):
        renderer.on_state(running_state(just_jumped=True), now_ms=1000)
        assert renderer.is_flapping(now_ms=1000 + FLAP_DURATION_MS - 1)
        assert not renderer.is_flapping(now_ms=1000 + FLAP_DURATION_MS)

    def test_plain_snapshot_does_not_flap(self, renderer):
        renderer.on_state(running_state(), now_ms=1000)
        assert not renderer.is_flapping(now_ms=1000)


class TestDrawing:
    def test_array_shape(self, renderer):
        frame = renderer.to_array(running_state())
        assert frame.shape == (500, 800, 3)
        assert frame.dtype == np.uint8

    def test_scaled_array(self, renderer):
        frame = renderer.to_array(running_state(), resolution=(84, 96))
        assert frame.shape == (84, 96, 3)

    def test_scene_colors(self, renderer):
        frame = renderer.to_array(running_state())
        # sky inside the gap, pipe above it, ground strip at the bottom
        assert tuple(frame[200, 430]) == COLOR_SKY
        assert tuple(frame[50, 430]) == COLOR_PIPE
        assert tuple(frame[480, 10]) == COLOR_GROUND

    def test_draw_with_hud(self, renderer):
        surface = pygame.Surface((renderer.width, renderer.height))
        for phase in Phase:
            renderer.draw(surface, running_state(phase=phase, score=3), now_ms=0)
