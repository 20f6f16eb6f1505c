"""Core entities - Ball, Player, and supporting types.

Entities are pure data containers rebuilt every cycle. Identity across
cycles is the (side, unum) pair; a snapshot owns its own Player
instances and never shares them with another snapshot.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .player_type import UNKNOWN_TYPE_ID
from .vec2 import Vec2, normalize_angle


UNUM_UNKNOWN = -1
MAX_UNUM = 11
UNREACHABLE_STEP = 1000


# =============================================================================
# Enums
# =============================================================================

class Side(str, Enum):
    """Which end a team starts from."""
    LEFT = "left"
    RIGHT = "right"
    NEUTRAL = "neutral"

    def opposite(self) -> Side:
        if self is Side.LEFT:
            return Side.RIGHT
        if self is Side.RIGHT:
            return Side.LEFT
        return Side.NEUTRAL


class Card(str, Enum):
    """Disciplinary card held by a player."""
    NONE = "none"
    YELLOW = "yellow"
    RED = "red"


def valid_unum(unum: int) -> bool:
    return 1 <= unum <= MAX_UNUM


# =============================================================================
# Ball
# =============================================================================

@dataclass
class Ball:
    """Ball kinematics for one cycle."""
    pos: Vec2 = field(default_factory=Vec2.zero)
    vel: Vec2 = field(default_factory=Vec2.zero)

    @property
    def speed(self) -> float:
        return self.vel.length()

    def reversed_side(self) -> Ball:
        """Copy mirrored through the center mark."""
        return Ball(pos=self.pos.reversed_side(), vel=self.vel.reversed_side())


# =============================================================================
# Player
# =============================================================================

@dataclass
class Player:
    """A player as seen in one cycle.

    Attributes:
        side: Team side
        unum: Uniform number (1-11)
        goalie: Whether the player is the team's goalkeeper
        type_id: Heterogeneous type id, assigned externally (never observed)

        pos: Position
        vel: Velocity
        body: Body direction in degrees
        face: Neck (view) direction in degrees

        pointto_cycle: Consecutive cycles spent pointing
        pointto_angle: Pointing direction, None when not pointing
        kicking: Observed in the kick animation this cycle
        tackle_cycle: Cycles into the current tackle (0 = not tackling)
        charged_cycle: Cycles into the current foul lockout (0 = none)
        card: Disciplinary card

        ball_reach_step: Predicted cycles to gain control of the ball
    """
    # Identity
    side: Side = Side.NEUTRAL
    unum: int = UNUM_UNKNOWN
    goalie: bool = False
    type_id: int = UNKNOWN_TYPE_ID

    # Kinematics
    pos: Vec2 = field(default_factory=Vec2.zero)
    vel: Vec2 = field(default_factory=Vec2.zero)
    body: float = 0.0
    face: float = 0.0

    # Status
    pointto_cycle: int = 0
    pointto_angle: Optional[float] = None
    kicking: bool = False
    tackle_cycle: int = 0
    charged_cycle: int = 0
    card: Card = Card.NONE

    # Prediction
    ball_reach_step: int = UNREACHABLE_STEP

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def key(self) -> tuple:
        """Identity across cycles."""
        return (self.side, self.unum)

    @property
    def label(self) -> str:
        """Short id such as 'L7', used in logs and traces."""
        return f"{self.side.value[0].upper()}{self.unum}"

    @property
    def speed(self) -> float:
        return self.vel.length()

    @property
    def is_tackling(self) -> bool:
        return self.tackle_cycle > 0

    @property
    def is_charged(self) -> bool:
        return self.charged_cycle > 0

    @property
    def is_pointing(self) -> bool:
        return self.pointto_cycle > 0

    def distance_to(self, pos: Vec2) -> float:
        return self.pos.distance_to(pos)

    # =========================================================================
    # Copy helpers (return new instances)
    # =========================================================================

    def clone(self) -> Player:
        """Independent copy carried into the next cycle.

        Vec2 is immutable, so a shallow copy shares no mutable state.
        """
        new = copy.copy(self)
        new.ball_reach_step = UNREACHABLE_STEP
        return new

    def reversed_side(self) -> Player:
        """Copy mirrored through the center mark, angles rotated by 180."""
        new = copy.copy(self)
        new.pos = self.pos.reversed_side()
        new.vel = self.vel.reversed_side()
        new.body = normalize_angle(self.body + 180.0)
        new.face = normalize_angle(self.face + 180.0)
        if self.pointto_angle is not None:
            new.pointto_angle = normalize_angle(self.pointto_angle + 180.0)
        return new

    def __repr__(self) -> str:
        return (
            f"Player({self.side.value} #{self.unum}{' G' if self.goalie else ''}, "
            f"pos={self.pos}, reach={self.ball_reach_step})"
        )
