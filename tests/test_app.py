"""Tests for the interactive host."""

import os

os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pygame
import pytest

from flappy_sim.app import FlappyApp, build_parser
from flappy_sim.policies import GapSeekerPolicy


@pytest.fixture
def app():
    return FlappyApp(seed=1)


def post_key(key):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key))


class TestInputBinding:
    def test_space_starts_and_jumps(self, app):
        post_key(pygame.K_SPACE)
        app.handle_events()
        assert app.game.get_state().is_running
        post_key(pygame.K_SPACE)
        app.handle_events()
        assert app.game.get_state().agent.velocity_y == -8.0

    def test_click_jumps(self, app):
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10)))
        app.handle_events()
        assert app.game.get_state().is_running

    def test_r_resets(self, app):
        app.game.jump()
        app.game.tick(1.0)
        post_key(pygame.K_r)
        app.handle_events()
        assert app.game.get_state().is_idle

    def test_escape_stops(self, app):
        app.running = True
        post_key(pygame.K_ESCAPE)
        app.handle_events()
        assert not app.running


class TestHost:
    def test_best_score_tracked_on_game_over(self, app):
        app.game.jump()
        while app.game.get_state().is_running:
            app.game.tick(1.0)
        assert app.best_score == 0
        assert app._snapshot.is_over

    def test_policy_starts_run(self):
        app = FlappyApp(seed=1, policy=GapSeekerPolicy())
        app.handle_policy()
        assert app.game.get_state().is_running

    def test_policy_ignores_keyboard_jumps(self):
        app = FlappyApp(seed=1, policy=GapSeekerPolicy())
        post_key(pygame.K_SPACE)
        app.handle_events()
        assert app.game.get_state().is_idle

    def test_render_frame(self, app):
        app.render()

    def test_run_exits_on_quit(self, app):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        app.run()
        assert not app.running


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config == "default"
        assert args.policy is None
        assert args.seed is None

    def test_options(self):
        args = build_parser().parse_args(
            ["--config", "tight", "--seed", "3", "--policy", "gap_seeker", "--integrator", "semi_implicit"]
        )
        assert (args.config, args.seed, args.policy, args.integrator) == ("tight", 3, "gap_seeker", "semi_implicit")
