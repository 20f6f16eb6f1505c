"""Pydantic schemas for one cycle of sensor input.

These records are produced by the external parsing layer. They carry
already-structured values in the external (un-mirrored) frame; the
world builder normalises them to our attacking direction.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.entities import UNUM_UNKNOWN, Card, Side
from ..core.game_mode import PlayMode


class Vec2Schema(BaseModel):
    """2D position or velocity."""

    x: float = 0.0
    y: float = 0.0


class BallObservation(BaseModel):
    """Observed ball kinematics."""

    pos: Vec2Schema = Field(default_factory=Vec2Schema)
    vel: Vec2Schema = Field(default_factory=Vec2Schema)


class PlayerObservation(BaseModel):
    """One observed player.

    Optional fields are None when the sensor did not report them this
    cycle; the builder keeps the previous cycle's value in that case.
    """

    side: Side = Side.NEUTRAL
    unum: int = UNUM_UNKNOWN
    goalie: bool = False
    pos: Vec2Schema = Field(default_factory=Vec2Schema)
    vel: Optional[Vec2Schema] = None
    body: float = Field(default=0.0, ge=-360.0, le=360.0)
    face: Optional[float] = Field(default=None, ge=-360.0, le=360.0)
    pointto_angle: Optional[float] = None
    kicking: bool = False
    tackling: bool = False
    charged: bool = False
    card: Optional[Card] = None


class VisualObservation(BaseModel):
    """Everything observed in one cycle."""

    cycle: int = Field(default=0, ge=0)
    stopped: int = Field(default=0, ge=0)
    play_mode: PlayMode = PlayMode.PLAY_ON
    mode_side: Side = Side.NEUTRAL
    ball: BallObservation = Field(default_factory=BallObservation)
    players: List[PlayerObservation] = Field(default_factory=list)
