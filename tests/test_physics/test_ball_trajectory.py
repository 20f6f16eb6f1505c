"""Tests for the ball trajectory cache."""

import pytest

from pitchmodel.config import ServerParams
from pitchmodel.core.vec2 import Vec2
from pitchmodel.physics.ball_trajectory import BallTrajectory


class TestTrajectoryTermination:
    """Tests for when trajectory generation stops."""

    def test_still_ball_gets_minimum_steps(self, server_params):
        """A resting ball still produces min_steps + 1 entries."""
        trajectory = BallTrajectory.from_ball(Vec2(0.0, 0.0), Vec2(0.0, 0.0), server_params)
        assert len(trajectory) == server_params.trajectory_min_steps + 1
        assert all(pos == Vec2(0.0, 0.0) for pos in trajectory)

    def test_slow_ball_bounded(self, server_params):
        trajectory = BallTrajectory.from_ball(Vec2(0.0, 0.0), Vec2(0.001, 0.0), server_params)
        assert server_params.trajectory_min_steps <= len(trajectory)
        assert len(trajectory) <= server_params.trajectory_max_steps

    def test_moving_ball_capped_at_max_steps(self, server_params):
        """A ball that never slows enough fills the whole window."""
        trajectory = BallTrajectory.from_ball(Vec2(0.0, 0.0), Vec2(1.0, 0.0), server_params)
        assert len(trajectory) == server_params.trajectory_max_steps

    def test_positions_follow_decay(self, server_params):
        trajectory = BallTrajectory.from_ball(Vec2(0.0, 0.0), Vec2(1.0, 0.0), server_params)
        assert trajectory[0] == Vec2(0.0, 0.0)
        assert trajectory[1].x == pytest.approx(1.0)
        assert trajectory[2].x == pytest.approx(1.94)
        assert trajectory[3].x == pytest.approx(2.8236)

    def test_truncates_at_first_out_of_bounds_sample(self, server_params):
        """The first sample past the bounds is kept and ends the cache."""
        trajectory = BallTrajectory.from_ball(Vec2(50.0, 0.0), Vec2(3.0, 0.0), server_params)
        # 50 -> 53 -> 55.82 -> 58.4708 (past 57.5)
        assert len(trajectory) == 4
        assert trajectory.final_position.x == pytest.approx(58.4708)
        assert all(pos.x <= 57.5 for pos in trajectory.positions[:-1])

    def test_keepaway_bounds(self):
        params = ServerParams(keepaway_mode=True)
        trajectory = BallTrajectory.from_ball(Vec2(8.0, 0.0), Vec2(1.5, 0.0), params)
        assert trajectory.final_position.x > 10.0
        assert len(trajectory) == 3

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            BallTrajectory([])


class TestTrajectoryProperties:
    """Tests for derived trajectory properties."""

    def test_move_angle(self, server_params):
        trajectory = BallTrajectory.from_ball(Vec2(0.0, 0.0), Vec2(0.0, 1.0), server_params)
        assert trajectory.move_angle == pytest.approx(90.0)

    def test_move_angle_still_ball(self, server_params):
        trajectory = BallTrajectory.from_ball(Vec2(5.0, 5.0), Vec2(0.0, 0.0), server_params)
        assert trajectory.move_angle == 0.0
