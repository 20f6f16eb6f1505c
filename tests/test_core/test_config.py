"""Tests for server parameters and pitch geometry."""

import math

import pytest

from pitchmodel.config import ServerParams, get_config, set_config
from pitchmodel.core.field import (
    BallStatus,
    ball_status,
    in_penalty_area,
    penalty_area,
    trajectory_bounds,
)
from pitchmodel.core.vec2 import Vec2


class TestServerParams:
    """Tests for ServerParams defaults and validation."""

    def test_defaults_valid(self, server_params):
        assert server_params.validate() == []
        assert server_params.ball_decay == pytest.approx(0.94)
        assert server_params.pitch_half_length == pytest.approx(52.5)
        assert server_params.penalty_area_half_width == pytest.approx(20.16)

    def test_tacklable_dist(self, server_params):
        assert server_params.tacklable_dist == pytest.approx(math.hypot(2.0, 1.25) + 0.001)

    def test_invalid_values_reported(self):
        params = ServerParams(ball_decay=1.5, trajectory_max_steps=5)
        errors = params.validate()
        assert any("ball_decay" in e for e in errors)
        assert any("trajectory_min_steps" in e for e in errors)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PITCHMODEL_BALL_DECAY", "0.9")
        monkeypatch.setenv("PITCHMODEL_KEEPAWAY", "true")
        params = ServerParams.from_env()
        assert params.ball_decay == pytest.approx(0.9)
        assert params.keepaway_mode is True

    def test_env_override_not_a_number(self, monkeypatch):
        monkeypatch.setenv("PITCHMODEL_TACKLE_CYCLES", "ten")
        with pytest.raises(ValueError):
            ServerParams()


class TestGetConfig:
    """Tests for the config singleton."""

    def test_set_config_used(self, server_params):
        assert get_config() is server_params

    def test_reload_from_env(self, monkeypatch):
        monkeypatch.setenv("PITCHMODEL_BALL_SPEED_MAX", "2.5")
        set_config(None)
        assert get_config().ball_speed_max == pytest.approx(2.5)

    def test_invalid_env_raises(self, monkeypatch):
        monkeypatch.setenv("PITCHMODEL_BALL_DECAY", "1.2")
        set_config(None)
        with pytest.raises(ValueError):
            get_config()


class TestPitchGeometry:
    """Tests for pitch rectangles and ball status."""

    def test_trajectory_bounds(self, server_params):
        bounds = trajectory_bounds(server_params)
        assert bounds.max_x == pytest.approx(57.5)
        assert bounds.max_y == pytest.approx(39.0)
        assert bounds.contains(Vec2(57.0, -38.0))
        assert not bounds.contains(Vec2(58.0, 0.0))

    def test_trajectory_bounds_keepaway(self):
        bounds = trajectory_bounds(ServerParams(keepaway_mode=True))
        assert bounds.max_x == pytest.approx(10.0)
        assert bounds.min_y == pytest.approx(-10.0)

    def test_penalty_area_sides(self, server_params):
        left = penalty_area(server_params, left=True)
        right = penalty_area(server_params, left=False)
        assert left.contains(Vec2(-45.0, 0.0))
        assert not left.contains(Vec2(45.0, 0.0))
        assert not left.contains(Vec2(-30.0, 0.0))
        assert not left.contains(Vec2(-45.0, 25.0))
        assert right.contains(Vec2(45.0, -20.0))

    def test_in_penalty_area(self, server_params):
        assert in_penalty_area(Vec2(-40.0, 5.0), server_params)
        assert in_penalty_area(Vec2(40.0, -5.0), server_params)
        assert not in_penalty_area(Vec2(0.0, 0.0), server_params)

    def test_ball_status(self, server_params):
        assert ball_status(Vec2(0.0, 0.0), server_params) == BallStatus.IN_FIELD
        assert ball_status(Vec2(-53.5, 0.0), server_params) == BallStatus.GOAL_LEFT
        assert ball_status(Vec2(53.5, 1.0), server_params) == BallStatus.GOAL_RIGHT
        assert ball_status(Vec2(0.0, 40.0), server_params) == BallStatus.OUT_OF_FIELD
        assert ball_status(Vec2(53.5, 20.0), server_params) == BallStatus.OUT_OF_FIELD
