"""Per-cycle world snapshot.

A snapshot is published once the builder has finished with it and is
never modified afterwards; the next cycle produces a new one. Every
position in it is in the normalised frame where our team attacks
toward +x.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.entities import UNREACHABLE_STEP, Ball, Player, Side
from ..core.field import BallStatus
from ..core.game_mode import GameMode, GameTime
from ..core.vec2 import Vec2


def _reach_step_of(player: Optional[Player]) -> int:
    return player.ball_reach_step if player is not None else UNREACHABLE_STEP


@dataclass(frozen=True)
class WorldSnapshot:
    """Ball, players and derived tactical state for one cycle.

    Attributes:
        time: Game time of the observation
        game_mode: Referee play mode
        our_side: Side the snapshot is built for (NEUTRAL for an observer)
        ball: Ball in the normalised frame
        all_players: Every valid player, sorted by ball_reach_step
        teammates: Our players, sorted by ball_reach_step
        opponents: Their players, sorted by ball_reach_step
        our_offside_line_x: Offside line for our attackers
        their_offside_line_x: Offside line for their attackers
        kicker: Player who touched the ball, None if unknown or ambiguous
        kicker_candidates: Every player who plausibly touched the ball
        fastest_intercept_player: Head of all_players
        fastest_intercept_teammate: Head of teammates
        fastest_intercept_opponent: Head of opponents
        ball_status: Ball position relative to the pitch markings
    """
    time: GameTime
    game_mode: GameMode
    our_side: Side
    ball: Ball
    all_players: Tuple[Player, ...] = ()
    teammates: Tuple[Player, ...] = ()
    opponents: Tuple[Player, ...] = ()
    our_offside_line_x: float = 0.0
    their_offside_line_x: float = 0.0
    kicker: Optional[Player] = None
    kicker_candidates: Tuple[Player, ...] = ()
    fastest_intercept_player: Optional[Player] = None
    fastest_intercept_teammate: Optional[Player] = None
    fastest_intercept_opponent: Optional[Player] = None
    ball_status: BallStatus = BallStatus.IN_FIELD

    # =========================================================================
    # Lookups
    # =========================================================================

    @property
    def teammate_side(self) -> Side:
        """Side whose players count as teammates (LEFT for an observer)."""
        return Side.LEFT if self.our_side is Side.NEUTRAL else self.our_side

    @property
    def mirrored(self) -> bool:
        """Whether positions are mirrored relative to the external frame."""
        return self.our_side is Side.RIGHT

    def teammate(self, unum: int) -> Optional[Player]:
        for player in self.teammates:
            if player.unum == unum:
                return player
        return None

    def opponent(self, unum: int) -> Optional[Player]:
        for player in self.opponents:
            if player.unum == unum:
                return player
        return None

    def get_player(self, side: Side, unum: int) -> Optional[Player]:
        """Player by absolute side and uniform number."""
        if side is Side.NEUTRAL:
            return None
        if side is self.teammate_side:
            return self.teammate(unum)
        return self.opponent(unum)

    def player_nearest_to(self, pos: Vec2) -> Optional[Player]:
        nearest = None
        min_dist2 = float("inf")
        for player in self.all_players:
            dist2 = player.pos.distance_squared_to(pos)
            if dist2 < min_dist2:
                nearest = player
                min_dist2 = dist2
        return nearest

    # =========================================================================
    # Reach Steps
    # =========================================================================

    @property
    def ball_reach_step(self) -> int:
        """Fewest cycles any player needs to reach the ball."""
        return _reach_step_of(self.fastest_intercept_player)

    @property
    def teammate_ball_reach_step(self) -> int:
        return _reach_step_of(self.fastest_intercept_teammate)

    @property
    def opponent_ball_reach_step(self) -> int:
        return _reach_step_of(self.fastest_intercept_opponent)

    def __repr__(self) -> str:
        return (
            f"WorldSnapshot(time={self.time}, mode={self.game_mode}, "
            f"teammates={len(self.teammates)}, opponents={len(self.opponents)})"
        )
