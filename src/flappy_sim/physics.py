"""Vertical agent physics under gravity and discrete jump impulses.

Integration happens once per tick. Two update orders are available:
- EXPLICIT: position advances with the velocity held at the start of the
  tick, then gravity is added (the frame-based order of the arcade game).
- SEMI_IMPLICIT: gravity is added first and the position advances with the
  updated velocity (symplectic Euler).

Ground contact ends the run and freezes the agent at its pre-tick values.
Ceiling contact is not a collision: the agent is pinned to y = 0 with zero
velocity.
"""

from enum import Enum, auto
from typing import Tuple

from .config import FlappyConfig
from .entities import Agent


class Integrator(Enum):
    """Update order of position and velocity within a tick."""
    EXPLICIT = auto()
    SEMI_IMPLICIT = auto()


def resolve_integrator(config: FlappyConfig) -> Integrator:
    """Look up the integrator named in config (case-insensitive)."""
    return Integrator[config.integrator.upper()]


def integrate(agent: Agent, dt: float, config: FlappyConfig) -> Tuple[Agent, bool]:
    """Advance the agent by dt ticks.

    Args:
        agent: Agent at the start of the tick.
        dt: Simulated time step in ticks.
        config: Game configuration.

    Returns:
        (new_agent, ground_collision). On ground collision the input agent is
        returned unchanged.
    """
    new_velocity = agent.velocity_y + config.gravity * dt

    if resolve_integrator(config) is Integrator.SEMI_IMPLICIT:
        new_y = agent.position_y + new_velocity * dt
    else:
        new_y = agent.position_y + agent.velocity_y * dt

    if new_y > config.ground_limit:
        return agent, True

    if new_y < 0:
        new_y = 0.0
        new_velocity = 0.0

    return Agent(agent.position_x, new_y, new_velocity), False


def apply_jump(agent: Agent, config: FlappyConfig) -> Agent:
    """Overwrite vertical velocity with the jump impulse."""
    return agent.with_velocity(config.jump_impulse)
