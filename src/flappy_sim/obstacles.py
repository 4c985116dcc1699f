"""Procedural obstacle stream: scroll, prune, spawn.

Obstacles are kept in insertion order, so the newest (rightmost) obstacle is
always last. Ids come from a counter owned by the field and restart only when
the field itself is reset.
"""

from typing import Iterable, Optional, Tuple

from .config import FlappyConfig
from .entities import Obstacle
from .rng import RandomGapSource


class ObstacleField:
    """Advances existing obstacles and spawns new ones at a fixed cadence.

    Args:
        config: Game configuration.
        gap_source: Source of gap positions for new obstacles.
    """

    def __init__(self, config: FlappyConfig, gap_source: RandomGapSource):
        self.config = config
        self.gap_source = gap_source
        self._next_id = 0

    @property
    def next_id(self) -> int:
        """Id the next spawned obstacle will receive."""
        return self._next_id

    def reset(self) -> None:
        """Restart the id counter (full game reset only)."""
        self._next_id = 0

    def spawn(self, position_x: Optional[float] = None) -> Obstacle:
        """Create one obstacle at the right edge (or position_x) with a fresh gap."""
        if position_x is None:
            position_x = self.config.field_width
        top, bottom = self.gap_source.next_gap(self.config)
        obstacle = Obstacle(
            position_x=position_x,
            gap_top_height=top,
            gap_bottom_height=bottom,
            id=self._next_id,
        )
        self._next_id += 1
        return obstacle

    def should_spawn(self, obstacles: Tuple[Obstacle, ...]) -> bool:
        if not obstacles:
            return True
        return obstacles[-1].position_x < self.config.field_width - self.config.spawn_spacing

    def advance(self, obstacles: Iterable[Obstacle], dt: float) -> Tuple[Obstacle, ...]:
        """Scroll obstacles left, drop off-screen ones, spawn at most one.

        Args:
            obstacles: Obstacles at the start of the tick, insertion-ordered.
            dt: Simulated time step in ticks.

        Returns:
            New obstacle tuple.
        """
        dx = -self.config.obstacle_speed * dt
        moved = tuple(o.shifted(dx) for o in obstacles)

        kept = tuple(o for o in moved if o.position_x > -self.config.obstacle_width)

        if self.should_spawn(kept):
            kept = kept + (self.spawn(),)

        return kept


def next_obstacle(obstacles: Iterable[Obstacle], agent_left: float,
                  config: FlappyConfig) -> Optional[Obstacle]:
    """First obstacle, in field order, whose right edge is not yet behind agent_left."""
    for obstacle in obstacles:
        if obstacle.right(config.obstacle_width) >= agent_left:
            return obstacle
    return None
