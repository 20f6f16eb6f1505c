"""Pitch geometry and coordinate system.

Single, unified coordinate system used throughout the world model.
All measurements in server distance units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..config import ServerParams
from .vec2 import Vec2


# Coordinate system:
#   Origin (0, 0) = Center mark
#   +X = Toward the goal our team attacks (after side normalisation)
#   Penalty boxes sit at |x| >= pitch_half_length - penalty_area_length


# =============================================================================
# Ball Status
# =============================================================================

class BallStatus(str, Enum):
    """Where the ball is relative to the pitch markings."""
    IN_FIELD = "in_field"
    GOAL_LEFT = "goal_left"
    GOAL_RIGHT = "goal_right"
    OUT_OF_FIELD = "out_of_field"


# =============================================================================
# Rectangles
# =============================================================================

@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its minimum and maximum corners."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def contains(self, pos: Vec2) -> bool:
        return (
            self.min_x <= pos.x <= self.max_x and
            self.min_y <= pos.y <= self.max_y
        )

    @classmethod
    def centered(cls, half_length: float, half_width: float) -> Rect:
        return cls(-half_length, -half_width, half_length, half_width)


def trajectory_bounds(params: ServerParams) -> Rect:
    """Rectangle outside of which a simulated ball is considered gone.

    The pitch expanded by the pitch margin, or the keep-away rectangle
    when restricted play is active.
    """
    if params.keepaway_mode:
        return Rect.centered(params.keepaway_length * 0.5, params.keepaway_width * 0.5)
    return Rect.centered(
        params.pitch_half_length + params.pitch_margin,
        params.pitch_half_width + params.pitch_margin,
    )


def penalty_area(params: ServerParams, left: bool) -> Rect:
    """Penalty area at the left (-x) or right (+x) end of the pitch."""
    inner_x = params.pitch_half_length - params.penalty_area_length
    half_width = params.penalty_area_half_width
    if left:
        return Rect(-math.inf, -half_width, -inner_x, half_width)
    return Rect(inner_x, -half_width, math.inf, half_width)


def in_penalty_area(pos: Vec2, params: ServerParams) -> bool:
    """Check if a point lies inside either penalty area."""
    return (
        pos.abs_x() >= params.pitch_half_length - params.penalty_area_length and
        pos.abs_y() <= params.penalty_area_half_width
    )


def ball_status(pos: Vec2, params: ServerParams) -> BallStatus:
    """Classify a ball position as in field, in a goal, or out."""
    half_goal = params.goal_half_width + params.ball_size
    half_length = params.pitch_half_length

    if pos.abs_y() <= half_goal:
        if -half_length - params.goal_depth - params.ball_size <= pos.x < -half_length - params.ball_size:
            return BallStatus.GOAL_LEFT
        if half_length + params.ball_size < pos.x <= half_length + params.goal_depth + params.ball_size:
            return BallStatus.GOAL_RIGHT

    pitch = Rect.centered(
        half_length + params.ball_size * 0.5,
        params.pitch_half_width + params.ball_size * 0.5,
    )
    if not pitch.contains(pos):
        return BallStatus.OUT_OF_FIELD

    return BallStatus.IN_FIELD
