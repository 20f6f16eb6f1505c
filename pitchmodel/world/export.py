"""Export world snapshots to JSON for the debug visualizer.

Frames are written in the external frame: a snapshot built for the
right side is mirrored back before export, so the visualizer never has
to know whose point of view produced it.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..core.entities import Player
from ..core.vec2 import Vec2
from .snapshot import WorldSnapshot


@dataclass
class BallFrame:
    """Ball state in one frame."""
    x: float
    y: float
    vx: float
    vy: float


@dataclass
class PlayerFrame:
    """Player state in one frame."""
    side: str
    unum: int
    goalie: bool
    type_id: int
    x: float
    y: float
    vx: float
    vy: float
    body: float
    face: float
    card: str
    kicking: bool
    tackle_cycle: int
    charged_cycle: int
    ball_reach_step: int

    @classmethod
    def from_player(cls, player: Player, mirrored: bool) -> PlayerFrame:
        if mirrored:
            player = player.reversed_side()
        return cls(
            side=player.side.value,
            unum=player.unum,
            goalie=player.goalie,
            type_id=player.type_id,
            x=player.pos.x,
            y=player.pos.y,
            vx=player.vel.x,
            vy=player.vel.y,
            body=player.body,
            face=player.face,
            card=player.card.value,
            kicking=player.kicking,
            tackle_cycle=player.tackle_cycle,
            charged_cycle=player.charged_cycle,
            ball_reach_step=player.ball_reach_step,
        )


@dataclass
class SnapshotFrame:
    """Complete frame of world state."""
    cycle: int
    stopped: int
    play_mode: str
    ball: BallFrame
    players: List[PlayerFrame]
    our_offside_line_x: float
    their_offside_line_x: float
    ball_status: str
    kicker: Optional[str] = None
    kicker_candidates: List[str] = field(default_factory=list)
    fastest_intercept: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot: WorldSnapshot) -> SnapshotFrame:
        mirrored = snapshot.mirrored

        def external(vec: Vec2) -> Vec2:
            return vec.reversed_side() if mirrored else vec

        def external_x(x: float) -> float:
            return -x if mirrored else x

        ball_pos = external(snapshot.ball.pos)
        ball_vel = external(snapshot.ball.vel)
        fastest = snapshot.fastest_intercept_player

        return cls(
            cycle=snapshot.time.cycle,
            stopped=snapshot.time.stopped,
            play_mode=str(snapshot.game_mode),
            ball=BallFrame(x=ball_pos.x, y=ball_pos.y, vx=ball_vel.x, vy=ball_vel.y),
            players=[PlayerFrame.from_player(p, mirrored) for p in snapshot.all_players],
            our_offside_line_x=external_x(snapshot.our_offside_line_x),
            their_offside_line_x=external_x(snapshot.their_offside_line_x),
            ball_status=snapshot.ball_status.value,
            kicker=snapshot.kicker.label if snapshot.kicker is not None else None,
            kicker_candidates=[p.label for p in snapshot.kicker_candidates],
            fastest_intercept=fastest.label if fastest is not None else None,
        )


@dataclass
class SnapshotExport:
    """A sequence of frames plus metadata."""
    metadata: Dict[str, Any]
    frames: List[SnapshotFrame]

    @classmethod
    def from_snapshot(cls, snapshot: WorldSnapshot) -> SnapshotExport:
        """Single-frame export."""
        return cls(
            metadata={"our_side": snapshot.our_side.value},
            frames=[SnapshotFrame.from_snapshot(snapshot)],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: str) -> None:
        """Save to file."""
        with open(path, 'w') as f:
            f.write(self.to_json())


class SnapshotRecorder:
    """Records snapshots over a match for export."""

    def __init__(self):
        self.frames: List[SnapshotFrame] = []
        self.our_side: Optional[str] = None

    def record(self, snapshot: WorldSnapshot) -> None:
        self.our_side = snapshot.our_side.value
        self.frames.append(SnapshotFrame.from_snapshot(snapshot))

    def export(self) -> SnapshotExport:
        metadata: Dict[str, Any] = {
            "our_side": self.our_side,
            "frame_count": len(self.frames),
        }
        if self.frames:
            metadata["first_cycle"] = self.frames[0].cycle
            metadata["last_cycle"] = self.frames[-1].cycle
        return SnapshotExport(metadata=metadata, frames=list(self.frames))
