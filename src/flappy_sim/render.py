"""Pygame rendering of GameState snapshots.

The renderer only reads snapshots. The short flap flourish is started by the
``just_jumped`` signal and decays on the renderer's own clock; the simulation
never sees it.
"""

from typing import Optional, Tuple

import numpy as np
import pygame

from .config import FlappyConfig
from .entities import GameState


# Colors (RGB)
COLOR_SKY = (112, 197, 206)
COLOR_PIPE = (84, 170, 64)
COLOR_PIPE_EDGE = (58, 120, 44)
COLOR_GROUND = (222, 216, 149)
COLOR_GROUND_EDGE = (84, 170, 64)
COLOR_BIRD = (250, 204, 21)
COLOR_BIRD_FLAP = (255, 236, 120)
COLOR_BIRD_SHADOW = (202, 138, 4)
COLOR_EYE = (255, 255, 255)
COLOR_PUPIL = (0, 0, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_OVER = (224, 108, 117)

FLAP_DURATION_MS = 150
TILT_FACTOR = 3.0
TILT_RANGE: Tuple[float, float] = (-30.0, 90.0)


def agent_tilt(velocity_y: float) -> float:
    """Nose angle in degrees (positive = nose down), clamped to TILT_RANGE."""
    return min(max(velocity_y * TILT_FACTOR, TILT_RANGE[0]), TILT_RANGE[1])


class GameRenderer:
    """Draws snapshots onto a pygame surface.

    Args:
        config: Game configuration (field geometry and sizes).
    """

    def __init__(self, config: FlappyConfig):
        self.config = config
        self.width = int(config.field_width)
        self.height = int(config.field_height)
        self._flap_until_ms = 0

    def on_state(self, state: GameState, now_ms: Optional[int] = None) -> None:
        """Listener hook: start the flap flourish when a jump was applied."""
        if state.just_jumped:
            if now_ms is None:
                now_ms = pygame.time.get_ticks()
            self._flap_until_ms = now_ms + FLAP_DURATION_MS

    def is_flapping(self, now_ms: Optional[int] = None) -> bool:
        if now_ms is None:
            now_ms = pygame.time.get_ticks()
        return now_ms < self._flap_until_ms

    def draw(self, surface: pygame.Surface, state: GameState, hud: bool = True,
             now_ms: Optional[int] = None, show_flap: bool = True) -> None:
        """Render the full scene for state onto surface."""
        cfg = self.config
        surface.fill(COLOR_SKY)

        # Pipes: top solid from the ceiling, bottom solid resting on the ground
        w = int(cfg.obstacle_width)
        for obstacle in state.obstacles:
            x = int(obstacle.position_x)
            top_rect = (x, 0, w, int(obstacle.gap_top_height))
            bottom_y = int(cfg.playable_height - obstacle.gap_bottom_height)
            bottom_rect = (x, bottom_y, w, int(obstacle.gap_bottom_height))
            for rect in (top_rect, bottom_rect):
                pygame.draw.rect(surface, COLOR_PIPE, rect)
                pygame.draw.rect(surface, COLOR_PIPE_EDGE, rect, width=2)

        # Ground strip
        ground_y = int(cfg.playable_height)
        pygame.draw.rect(surface, COLOR_GROUND, (0, ground_y, self.width, int(cfg.ground_height)))
        pygame.draw.line(surface, COLOR_GROUND_EDGE, (0, ground_y), (self.width, ground_y), 4)

        self._draw_agent(surface, state, show_flap and self.is_flapping(now_ms))

        if hud:
            self._draw_hud(surface, state)

    def _draw_agent(self, surface: pygame.Surface, state: GameState, flapping: bool) -> None:
        size = int(self.config.agent_size)
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        body = COLOR_BIRD_FLAP if flapping else COLOR_BIRD
        radius = size // 2
        pygame.draw.circle(sprite, body, (radius, radius), radius)
        pygame.draw.circle(sprite, COLOR_BIRD_SHADOW, (radius, radius), radius, width=2)
        eye = (size - 7, 6)
        pygame.draw.circle(sprite, COLOR_EYE, eye, 4)
        pygame.draw.circle(sprite, COLOR_PUPIL, (eye[0] + 1, eye[1]), 2)

        # pygame rotates counter-clockwise; positive tilt is nose down
        rotated = pygame.transform.rotate(sprite, -agent_tilt(state.agent.velocity_y))
        center = (
            int(state.agent.position_x) + radius,
            int(state.agent.position_y) + radius,
        )
        surface.blit(rotated, rotated.get_rect(center=center))

    def _draw_hud(self, surface: pygame.Surface, state: GameState) -> None:
        font = pygame.font.Font(None, 40)
        score_surface = font.render(f"Score: {state.score}", True, COLOR_TEXT)
        surface.blit(score_surface, score_surface.get_rect(midtop=(self.width // 2, 10)))

        if state.is_idle:
            self._draw_centered_text(surface, "Click or press Space to start!", COLOR_TEXT)
        elif state.is_over:
            self._draw_centered_text(
                surface, f"Game Over! Final score: {state.score}  (R to play again)", COLOR_OVER
            )

    def _draw_centered_text(self, surface: pygame.Surface, text: str, color: Tuple[int, int, int]) -> None:
        font = pygame.font.Font(None, 36)
        text_surface = font.render(text, True, color)
        surface.blit(text_surface, text_surface.get_rect(center=(self.width // 2, self.height // 2)))

    def to_array(self, state: GameState, resolution: Optional[Tuple[int, int]] = None) -> np.ndarray:
        """Render state offscreen and return an (H, W, 3) uint8 array.

        Args:
            state: Snapshot to draw.
            resolution: Optional (height, width) to scale to.
        """
        surface = pygame.Surface((self.width, self.height))
        self.draw(surface, state, hud=False, show_flap=False)
        if resolution is not None:
            height, width = resolution
            surface = pygame.transform.scale(surface, (width, height))
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)
