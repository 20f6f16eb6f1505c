"""Core layer - foundational types and utilities."""

from .vec2 import Vec2, normalize_angle, angle_diff
from .field import BallStatus, Rect, ball_status, penalty_area, trajectory_bounds
from .player_type import (
    DEFAULT_TYPE_ID,
    UNKNOWN_TYPE_ID,
    PlayerType,
    PlayerTypeParams,
    PlayerTypeRegistry,
)
from .entities import Ball, Card, Player, Side, UNREACHABLE_STEP, UNUM_UNKNOWN
from .game_mode import GameMode, GameTime, PlayMode
from .trace import TraceCategory, TraceSystem, get_trace_system

__all__ = [
    "Vec2",
    "normalize_angle",
    "angle_diff",
    "BallStatus",
    "Rect",
    "ball_status",
    "penalty_area",
    "trajectory_bounds",
    "DEFAULT_TYPE_ID",
    "UNKNOWN_TYPE_ID",
    "PlayerType",
    "PlayerTypeParams",
    "PlayerTypeRegistry",
    "Ball",
    "Card",
    "Player",
    "Side",
    "UNREACHABLE_STEP",
    "UNUM_UNKNOWN",
    "GameMode",
    "GameTime",
    "PlayMode",
    "TraceCategory",
    "TraceSystem",
    "get_trace_system",
]
