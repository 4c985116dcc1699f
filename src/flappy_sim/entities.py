"""Game entities as immutable value objects.

Every tick produces new Agent, Obstacle and GameState instances; nothing here
is mutated in place. Coordinates use the screen convention: y grows downward
and y = 0 is the ceiling.
"""

from dataclasses import dataclass, asdict, replace
from enum import Enum, auto
from typing import Tuple, Optional, Dict, Any


class Phase(Enum):
    """Lifecycle phase of a game session."""
    IDLE = auto()
    RUNNING = auto()
    OVER = auto()


@dataclass(frozen=True)
class Agent:
    """The player-controlled bird (top-left corner of its square box)."""
    position_x: float
    position_y: float
    velocity_y: float = 0.0

    @property
    def left(self) -> float:
        return self.position_x

    @property
    def top(self) -> float:
        return self.position_y

    def right(self, size: float) -> float:
        return self.position_x + size

    def bottom(self, size: float) -> float:
        return self.position_y + size

    def with_velocity(self, velocity_y: float) -> "Agent":
        return replace(self, velocity_y=velocity_y)


@dataclass(frozen=True)
class Obstacle:
    """A pipe pair: solid above gap_top_height and below the gap.

    gap_bottom_height is the height of the lower solid region measured up
    from the ground plane, so the gap's lower edge sits at
    ``playable_height - gap_bottom_height``.
    """
    position_x: float
    gap_top_height: float
    gap_bottom_height: float
    id: int
    passed: bool = False

    def right(self, width: float) -> float:
        return self.position_x + width

    def shifted(self, dx: float) -> "Obstacle":
        return replace(self, position_x=self.position_x + dx)

    def mark_passed(self) -> "Obstacle":
        return replace(self, passed=True)


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of the whole simulation."""
    phase: Phase
    agent: Agent
    obstacles: Tuple[Obstacle, ...] = ()
    score: int = 0
    tick_count: int = 0
    just_jumped: bool = False  # True only on the snapshot where a jump impulse was applied
    death_cause: Optional[str] = None  # "ground", "obstacle"

    @property
    def is_idle(self) -> bool:
        return self.phase is Phase.IDLE

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.OVER

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested plain-Python dictionary (for logging/serialization)."""
        return {
            "phase": self.phase.name.lower(),
            "agent": asdict(self.agent),
            "obstacles": [asdict(o) for o in self.obstacles],
            "score": self.score,
            "tick_count": self.tick_count,
            "just_jumped": self.just_jumped,
            "death_cause": self.death_cause,
        }
