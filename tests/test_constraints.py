"""Tests for configuration constraints."""

import pytest

from flappy_sim.config import FlappyConfig
from flappy_sim.constraints import (
    ParameterConstraints,
    ConfigurationError,
    ConstraintResult,
)
from flappy_sim.engine import GameStateMachine


class TestParameterConstraints:
    def test_default_is_valid(self):
        result = ParameterConstraints.validate(FlappyConfig())
        assert isinstance(result, ConstraintResult)
        assert result.valid
        assert result.violations == []

    def test_gap_too_large_is_error(self):
        # 400 + 2 * 50 = 500 > 440
        result = ParameterConstraints.validate(FlappyConfig(gap_size=400.0))
        assert not result
        assert [v.param for v in result.errors] == ["gap_size"]

    def test_margins_too_large_is_error(self):
        result = ParameterConstraints.validate(FlappyConfig(min_gap_top=150.0))
        assert not result.valid

    def test_exact_fit_is_valid(self):
        # 340 + 2 * 50 == 440
        result = ParameterConstraints.validate(FlappyConfig(gap_size=340.0))
        assert result.valid

    def test_unknown_integrator_is_error(self):
        result = ParameterConstraints.validate(FlappyConfig(integrator="verlet"))
        assert not result
        assert result.errors[0].param == "integrator"

    def test_integrator_name_case_insensitive(self):
        assert ParameterConstraints.validate(FlappyConfig(integrator="SEMI_IMPLICIT"))

    def test_downward_jump_is_only_a_warning(self):
        result = ParameterConstraints.validate(FlappyConfig(jump_impulse=2.0))
        assert result.valid
        assert [v.param for v in result.warnings] == ["jump_impulse"]

    def test_overlapping_spawn_is_only_a_warning(self):
        result = ParameterConstraints.validate(FlappyConfig(spawn_spacing=40.0))
        assert result.valid
        assert result.warnings[0].param == "spawn_spacing"

    def test_require_valid_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            ParameterConstraints.require_valid(FlappyConfig(gap_size=400.0))
        assert excinfo.value.violations[0].severity == "error"
        assert "playable height" in str(excinfo.value)


class TestConstructionFailure:
    def test_state_machine_rejects_impossible_geometry(self):
        with pytest.raises(ConfigurationError):
            GameStateMachine(FlappyConfig(gap_size=400.0))

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            GameStateMachine(FlappyConfig(min_gap_top=200.0))

    def test_warnings_do_not_block_construction(self):
        game = GameStateMachine(FlappyConfig(spawn_spacing=40.0))
        assert game.get_state().is_idle
