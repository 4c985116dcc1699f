"""Geometry constraints and validation for game configurations.

A configuration is "valid" when the obstacle generator can always place a
gap with its minimum margins inside the playable field. Anything that merely
makes the game odd (an upward gravity, overlapping obstacles) is reported as
a warning and never blocks construction.
"""

from dataclasses import dataclass
from typing import List

from .config import FlappyConfig
from .physics import Integrator


INTEGRATORS = {i.name for i in Integrator}


@dataclass
class ConstraintViolation:
    """Describes a constraint violation."""
    param: str
    message: str
    severity: str  # "error" = cannot build a game, "warning" = playable but unusual


@dataclass
class ConstraintResult:
    """Result of constraint validation."""
    valid: bool
    violations: List[ConstraintViolation]

    def __bool__(self) -> bool:
        return self.valid

    @property
    def errors(self) -> List[ConstraintViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> List[ConstraintViolation]:
        return [v for v in self.violations if v.severity == "warning"]


class ConfigurationError(ValueError):
    """Raised at construction when the field geometry cannot be satisfied."""

    def __init__(self, violations: List[ConstraintViolation]):
        self.violations = violations
        super().__init__("; ".join(v.message for v in violations))


class ParameterConstraints:
    """Checks a FlappyConfig against the geometry rules."""

    @classmethod
    def validate(cls, config: FlappyConfig) -> ConstraintResult:
        """Validate config; only geometry that breaks gap generation is an error."""
        violations = []

        # Gap plus both margins must fit above the ground
        required = config.gap_size + 2 * config.min_gap_top
        if required > config.playable_height:
            violations.append(ConstraintViolation(
                "gap_size",
                f"Gap {config.gap_size} + 2 * min_gap_top {config.min_gap_top} = {required} "
                f"exceeds playable height {config.playable_height}",
                "error"
            ))

        if config.integrator.upper() not in INTEGRATORS:
            violations.append(ConstraintViolation(
                "integrator",
                f"Unknown integrator {config.integrator!r}, expected one of {sorted(INTEGRATORS)}",
                "error"
            ))

        if config.jump_impulse >= 0:
            violations.append(ConstraintViolation(
                "jump_impulse",
                f"Jump impulse {config.jump_impulse} does not point upward",
                "warning"
            ))

        if config.spawn_spacing < config.obstacle_width:
            violations.append(ConstraintViolation(
                "spawn_spacing",
                f"Spawn spacing {config.spawn_spacing} < obstacle width {config.obstacle_width}",
                "warning"
            ))

        if config.agent_start_y > config.ground_limit:
            violations.append(ConstraintViolation(
                "agent_start_y",
                f"Agent start y {config.agent_start_y} is below ground limit {config.ground_limit}",
                "warning"
            ))

        errors = [v for v in violations if v.severity == "error"]
        return ConstraintResult(valid=len(errors) == 0, violations=violations)

    @classmethod
    def require_valid(cls, config: FlappyConfig) -> ConstraintResult:
        """Validate and raise ConfigurationError on any error-severity violation."""
        result = cls.validate(config)
        if not result:
            raise ConfigurationError(result.errors)
        return result
