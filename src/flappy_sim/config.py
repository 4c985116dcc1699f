"""Configuration system for the side-scroller simulation.

FlappyConfig holds every tunable constant the core reads. It is supplied once
when a GameStateMachine is constructed and never mutated afterwards; variants
are produced with ``dataclasses.replace`` or ``from_dict``.

Units are pixels and ticks: velocities are px/tick, gravity is px/tick^2,
and ``dt`` is measured in ticks (1.0 = one nominal frame at ``fps``).
"""

from dataclasses import dataclass, fields, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class FlappyConfig:
    """Geometry and physics constants for one game session."""

    # === AGENT PHYSICS ===
    gravity: float = 0.4  # px/tick^2, positive = down (screen coordinates)
    jump_impulse: float = -8.0  # Velocity set by a jump (overwrites, not additive)
    integrator: str = "explicit"  # explicit (position uses pre-step velocity) or semi_implicit

    # === OBSTACLE STREAM ===
    obstacle_speed: float = 2.0  # px/tick leftward scroll
    obstacle_width: float = 60.0
    gap_size: float = 150.0  # Height of the passable gap
    spawn_spacing: float = 300.0  # Spawn once the newest obstacle is this far from the right edge
    min_gap_top: float = 50.0  # Minimum solid height above and below the gap

    # === FIELD GEOMETRY ===
    agent_size: float = 24.0
    ground_height: float = 60.0
    field_width: float = 800.0
    field_height: float = 500.0
    agent_start_x: float = 100.0
    agent_start_y: float = 250.0

    # Nominal driver rate (not read by the simulation itself)
    fps: int = 60

    # === DERIVED GEOMETRY ===

    @property
    def playable_height(self) -> float:
        """Height above the ground plane."""
        return self.field_height - self.ground_height

    @property
    def max_gap_top(self) -> float:
        """Upper bound of gap_top_height, symmetric with min_gap_top."""
        return self.playable_height - self.gap_size - self.min_gap_top

    @property
    def ground_limit(self) -> float:
        """Largest agent y that does not touch the ground."""
        return self.playable_height - self.agent_size

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FlappyConfig":
        """Create from dictionary; missing keys use defaults, unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})


# Predefined configurations for play and experiments
CONFIGS = {
    # Original arcade feel
    "default": FlappyConfig(),

    # Forgiving gap for first-time players
    "wide_gap": FlappyConfig(gap_size=200.0, min_gap_top=40.0),

    # Narrow gap, denser stream
    "tight": FlappyConfig(gap_size=120.0, spawn_spacing=240.0),

    # Faster scroll, stronger flap to keep up
    "fast": FlappyConfig(obstacle_speed=3.5, jump_impulse=-9.0, spawn_spacing=360.0),

    # Low gravity, gentle flap
    "floaty": FlappyConfig(gravity=0.25, jump_impulse=-6.0),
}
