"""Gymnasium environment wrapper for the side-scroller core.

Provides the standard Gym API for RL training on top of GameStateMachine.
Each env step forwards the action as a jump trigger and advances one tick.
"""

import numpy as np
import gymnasium
from gymnasium import spaces
from typing import Optional, Dict, Any

import pygame

from .config import FlappyConfig
from .engine import GameStateMachine
from .obstacles import next_obstacle
from .render import GameRenderer
from .rng import NumpyRandomSource

STATE_SIZE = 8


class FlappyEnv(gymnasium.Env):
    """Gymnasium wrapper for the side-scroller.

    Observation space: float32 Box of shape (8,):
        [0] agent y
        [1] agent vertical velocity
        [2] horizontal distance from the agent's left edge to the next obstacle's right edge
        [3] next obstacle gap top (upper edge of the gap)
        [4] next obstacle gap lower edge (y of the lower solid region's top)
        [5] score
        [6] episode progress (steps / max_steps)
        [7] game over (0/1)

    Action space: Discrete(2), 0 = no-op, 1 = jump.

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        pass:  1.0 when an obstacle is cleared
        death: 1.0 when the run ends
        step:  1.0 every step
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[FlappyConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 5000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or FlappyConfig()
        self.render_mode = render_mode
        self.max_episode_steps = max_episode_steps
        self.metadata = {**self.metadata, "render_fps": self.config.fps}

        self.reward_weights = reward_weights or {
            "pass": 1.0,
            "death": -1.0,
            "step": 0.01,
        }

        self.action_space = spaces.Discrete(2)
        self.observation_space = spaces.Box(
            low=-np.inf, high=np.inf, shape=(STATE_SIZE,), dtype=np.float32,
        )

        self._engine: Optional[GameStateMachine] = None
        self._episode_steps = 0

        self._renderer: Optional[GameRenderer] = None
        self._display = None
        if render_mode in ("human", "rgb_array"):
            if not pygame.get_init():
                pygame.init()
            self._renderer = GameRenderer(self.config)
        if render_mode == "human":
            self._display = pygame.display.set_mode(
                (self._renderer.width, self._renderer.height)
            )
            pygame.display.set_caption("FlappyEnv")

    @property
    def engine(self) -> Optional[GameStateMachine]:
        return self._engine

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        # Gap placement draws from the env's seeded generator
        self._engine = GameStateMachine(
            self.config, random_source=NumpyRandomSource(rng=self.np_random)
        )
        if self._renderer is not None:
            self._engine.subscribe(self._renderer.on_state)

        # First trigger only starts the run
        self._engine.jump()
        self._episode_steps = 0

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self._engine is not None, "Must call reset() before step()"

        if isinstance(action, np.ndarray):
            action = action.item()
        if int(action) == 1:
            self._engine.jump()

        before = self._engine.get_state()
        after = self._engine.tick(1.0)
        self._episode_steps += 1

        reward_signals = {
            "pass": float(after.score - before.score),
            "death": 1.0 if after.is_over and not before.is_over else 0.0,
            "step": 1.0,
        }
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = after.is_over
        truncated = self._episode_steps >= self.max_episode_steps

        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, info

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _get_obs(self) -> np.ndarray:
        state = self._engine.get_state()
        cfg = self.config
        obs = np.zeros(STATE_SIZE, dtype=np.float32)

        obs[0] = state.agent.position_y
        obs[1] = state.agent.velocity_y

        nxt = next_obstacle(state.obstacles, state.agent.left, cfg)
        if nxt is not None:
            obs[2] = nxt.right(cfg.obstacle_width) - state.agent.left
            obs[3] = nxt.gap_top_height
            obs[4] = cfg.playable_height - nxt.gap_bottom_height
        else:
            obs[2] = cfg.field_width - state.agent.left
            obs[3] = 0.0
            obs[4] = cfg.playable_height

        obs[5] = float(state.score)
        obs[6] = float(self._episode_steps) / max(self.max_episode_steps, 1)
        obs[7] = float(state.is_over)
        return obs

    def _get_info(self) -> Dict[str, Any]:
        state = self._engine.get_state()
        return {
            "score": state.score,
            "episode_steps": self._episode_steps,
            "tick_count": state.tick_count,
            "phase": state.phase.name.lower(),
            "death_cause": state.death_cause,
            "obstacle_count": len(state.obstacles),
        }

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self):
        if self._engine is None or self._renderer is None:
            return None
        state = self._engine.get_state()
        if self.render_mode == "rgb_array":
            return self._renderer.to_array(state)
        elif self.render_mode == "human" and self._display:
            self._renderer.draw(self._display, state)
            pygame.event.pump()
            pygame.display.flip()
        return None

    def close(self):
        if self._display:
            pygame.display.quit()
            self._display = None
