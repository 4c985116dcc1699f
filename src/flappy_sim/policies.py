"""Scripted policies for autoplay and data collection.

Each policy takes a FlappyEnv state observation and returns an action
(0 = no-op, 1 = jump) compatible with FlappyEnv's action space.
"""

import numpy as np
from typing import Optional

# Observation indices (see FlappyEnv)
OBS_AGENT_Y = 0
OBS_AGENT_VY = 1
OBS_NEXT_DX = 2
OBS_GAP_TOP = 3
OBS_GAP_BOTTOM = 4


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: np.ndarray) -> int:
        return self.act(obs)

    def act(self, obs: np.ndarray) -> int:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass


class IdlePolicy(BasePolicy):
    """Never jumps. The agent falls to the ground."""

    name = "idle"

    def act(self, obs):
        return 0


class RandomPolicy(BasePolicy):
    """Jumps with a fixed probability each step."""

    name = "random"

    def __init__(self, jump_prob: float = 0.08, rng: Optional[np.random.Generator] = None):
        self.jump_prob = jump_prob
        self.rng = rng or np.random.default_rng()

    def act(self, obs):
        return int(self.rng.random() < self.jump_prob)


class GapSeekerPolicy(BasePolicy):
    """Jumps whenever the agent's bottom would sink below the target gap.

    Aims for a point ``margin`` px above the gap's lower edge of the next
    obstacle. Jumps are only issued while falling, so consecutive jumps do
    not stack into a ceiling climb.

    Args:
        agent_size: Agent box size in px (must match the env config).
        margin: Clearance kept above the gap's lower edge.
    """

    name = "gap_seeker"

    def __init__(self, agent_size: float = 24.0, margin: float = 30.0):
        self.agent_size = agent_size
        self.margin = margin

    def act(self, obs):
        y = obs[OBS_AGENT_Y]
        vy = obs[OBS_AGENT_VY]
        gap_bottom = obs[OBS_GAP_BOTTOM]

        target = gap_bottom - self.margin
        falling = vy >= 0
        return int(falling and y + self.agent_size + vy > target)


POLICIES = {
    "idle": IdlePolicy,
    "random": RandomPolicy,
    "gap_seeker": GapSeekerPolicy,
}
