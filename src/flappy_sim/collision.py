"""Axis-aligned collision tests between the agent and obstacles.

Only obstacle hits are detected here; ground contact is reported by
physics.integrate.
"""

from typing import Iterable, Optional

from .config import FlappyConfig
from .entities import Agent, Obstacle


def horizontal_overlap(agent: Agent, obstacle: Obstacle, config: FlappyConfig) -> bool:
    """Strict AABB overlap of the horizontal spans (touching edges do not overlap)."""
    agent_left = agent.left
    agent_right = agent.right(config.agent_size)
    obstacle_left = obstacle.position_x
    obstacle_right = obstacle.right(config.obstacle_width)
    return agent_right > obstacle_left and agent_left < obstacle_right


def check_collision(agent: Agent, obstacle: Obstacle, config: FlappyConfig) -> bool:
    """True if the agent's box intrudes into either solid region of obstacle."""
    if not horizontal_overlap(agent, obstacle, config):
        return False

    gap_lower_edge = config.playable_height - obstacle.gap_bottom_height
    return agent.top < obstacle.gap_top_height or agent.bottom(config.agent_size) > gap_lower_edge


def first_collision(agent: Agent, obstacles: Iterable[Obstacle], config: FlappyConfig) -> Optional[Obstacle]:
    """Return the first obstacle the agent hits, in field order."""
    for obstacle in obstacles:
        if check_collision(agent, obstacle, config):
            return obstacle
    return None
