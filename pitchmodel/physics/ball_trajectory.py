"""Ball trajectory cache.

Future ball positions under ballistic decay, computed once per cycle and
shared by every reach-step prediction made against the same ball.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config import ServerParams, get_config
from ..core.field import trajectory_bounds
from ..core.vec2 import Vec2


class BallTrajectory:
    """Bounded sequence of predicted ball positions, index = cycles from now.

    Generation stops once the ball has slowed below the stop speed (and
    the minimum number of entries exists), right after the first
    position outside the bounding rectangle, or at the step limit.
    """

    def __init__(self, positions: Sequence[Vec2]):
        if not positions:
            raise ValueError("trajectory needs at least one position")
        self._positions = tuple(positions)

    @classmethod
    def from_ball(
        cls,
        pos: Vec2,
        vel: Vec2,
        config: Optional[ServerParams] = None,
    ) -> BallTrajectory:
        config = config or get_config()
        bounds = trajectory_bounds(config)
        stop_speed2 = config.trajectory_stop_speed ** 2

        positions: List[Vec2] = []
        for i in range(config.trajectory_max_steps):
            positions.append(pos)
            if i >= config.trajectory_min_steps and vel.length_squared() < stop_speed2:
                break
            if not bounds.contains(pos):
                break
            pos = pos + vel
            vel = vel * config.ball_decay

        return cls(positions)

    @property
    def positions(self) -> tuple:
        return self._positions

    @property
    def final_position(self) -> Vec2:
        return self._positions[-1]

    @property
    def move_angle(self) -> float:
        """Bearing of travel, first entry to last. 0.0 for a still ball."""
        return (self._positions[-1] - self._positions[0]).th()

    def __len__(self) -> int:
        return len(self._positions)

    def __getitem__(self, index: int) -> Vec2:
        return self._positions[index]

    def __iter__(self):
        return iter(self._positions)

    def __repr__(self) -> str:
        return f"BallTrajectory(len={len(self)}, final={self.final_position})"
