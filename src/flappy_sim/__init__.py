"""flappy-sim: deterministic side-scroller simulation core.

A vertically-moving agent passes through a procedurally generated stream of
gated obstacles. The core is a fixed-step state machine (idle -> running ->
over -> reset) with injectable randomness, immutable snapshots and a
Gymnasium wrapper for RL experiments. Rendering and input live in separate
pygame host modules.
"""

from .config import FlappyConfig, CONFIGS
from .constraints import ParameterConstraints, ConstraintResult, ConstraintViolation, ConfigurationError
from .entities import Phase, Agent, Obstacle, GameState
from .rng import RandomSource, NumpyRandomSource, SequenceRandomSource, RandomGapSource
from .physics import Integrator, integrate
from .obstacles import ObstacleField
from .collision import check_collision, horizontal_overlap
from .scoring import evaluate
from .engine import GameStateMachine

__all__ = [
    "FlappyConfig",
    "CONFIGS",
    "ParameterConstraints",
    "ConstraintResult",
    "ConstraintViolation",
    "ConfigurationError",
    "Phase",
    "Agent",
    "Obstacle",
    "GameState",
    "RandomSource",
    "NumpyRandomSource",
    "SequenceRandomSource",
    "RandomGapSource",
    "Integrator",
    "integrate",
    "ObstacleField",
    "check_collision",
    "horizontal_overlap",
    "evaluate",
    "GameStateMachine",
]
