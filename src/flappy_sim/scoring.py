"""Pass detection: one point per obstacle, awarded once."""

from typing import Tuple

from .config import FlappyConfig
from .entities import Agent, Obstacle


def evaluate(agent: Agent, obstacle: Obstacle, config: FlappyConfig) -> Tuple[Obstacle, int]:
    """Mark obstacle passed once the agent's left edge clears its right edge.

    Returns:
        (obstacle, score_delta). The obstacle is returned unchanged with delta 0
        when it was already passed or is not yet cleared.
    """
    if obstacle.passed:
        return obstacle, 0
    if agent.left > obstacle.right(config.obstacle_width):
        return obstacle.mark_passed(), 1
    return obstacle, 0
