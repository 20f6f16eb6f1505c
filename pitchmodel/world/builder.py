"""World snapshot builder.

Turns one cycle of observations plus the previous snapshot into the next
snapshot:

    1. Normalise every observed value to our attacking direction
    2. Resolve identity: clone the previous cycle's player and update it,
       or create a fresh one
    3. Offside lines
    4. Kicker attribution against the previous snapshot
    5. Reach-step prediction for every player, then sort by it

Malformed observations are dropped with a warning; nothing in here
aborts the cycle.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..config import ServerParams, get_config
from ..core.entities import Ball, Card, Player, Side, valid_unum
from ..core.field import ball_status
from ..core.game_mode import GameMode, GameTime
from ..core.player_type import UNKNOWN_TYPE_ID, PlayerTypeRegistry
from ..core.trace import TraceCategory, TraceSystem, get_trace_system
from ..core.vec2 import Vec2, normalize_angle
from ..perception.observations import PlayerObservation, Vec2Schema, VisualObservation
from ..physics.ball_trajectory import BallTrajectory
from ..physics.intercept import InterceptPredictor
from .kicker import KickerResult, find_kicker
from .offside import our_offside_line_x, their_offside_line_x
from .snapshot import WorldSnapshot

logger = logging.getLogger(__name__)


PlayerKey = Tuple[Side, int]


def _reach_step(player: Player) -> int:
    return player.ball_reach_step


class WorldBuilder:
    """Builds world snapshots for one side's point of view.

    Usage:
        builder = WorldBuilder(Side.LEFT, registry)
        snapshot = builder.build(observation, previous=last_snapshot)
    """

    def __init__(
        self,
        our_side: Side = Side.NEUTRAL,
        registry: Optional[PlayerTypeRegistry] = None,
        config: Optional[ServerParams] = None,
        trace: Optional[TraceSystem] = None,
    ):
        self.our_side = our_side
        self.config = config or get_config()
        self.registry = registry or PlayerTypeRegistry(self.config)
        self.trace = trace or get_trace_system()

    @property
    def mirrored(self) -> bool:
        return self.our_side is Side.RIGHT

    def build(
        self,
        observation: VisualObservation,
        previous: Optional[WorldSnapshot] = None,
        type_ids: Optional[Mapping[PlayerKey, int]] = None,
        cards: Optional[Mapping[PlayerKey, Card]] = None,
        deadline: Optional[Callable[[], bool]] = None,
    ) -> WorldSnapshot:
        """Build the snapshot for one cycle.

        Args:
            observation: This cycle's sensor record, in the external frame
            previous: Last cycle's snapshot, None on the first cycle
            type_ids: Known player type per (side, unum)
            cards: Known cards per (side, unum), applied before observed ones
            deadline: Returns True once time is up; checked between players
                during reach-step prediction
        """
        type_ids = type_ids or {}
        cards = cards or {}
        time = GameTime(observation.cycle, observation.stopped)
        game_mode = GameMode(observation.play_mode, observation.mode_side)
        self.trace.set_time(time.cycle, time.stopped)

        ball = Ball(pos=self._vec(observation.ball.pos), vel=self._vec(observation.ball.vel))

        players = self._resolve_players(observation.players, previous, type_ids, cards)
        teammate_side = Side.LEFT if self.our_side is Side.NEUTRAL else self.our_side
        teammates = [p for p in players if p.side is teammate_side]
        opponents = [p for p in players if p.side is not teammate_side]

        if previous is not None:
            kick = find_kicker(
                players, ball, previous.ball, previous.get_player,
                self.registry, self.config, self.trace,
            )
        else:
            kick = KickerResult()

        self._predict_reach_steps(ball, teammates, opponents, deadline)

        players.sort(key=_reach_step)
        teammates.sort(key=_reach_step)
        opponents.sort(key=_reach_step)

        return WorldSnapshot(
            time=time,
            game_mode=game_mode,
            our_side=self.our_side,
            ball=ball,
            all_players=tuple(players),
            teammates=tuple(teammates),
            opponents=tuple(opponents),
            our_offside_line_x=our_offside_line_x(opponents),
            their_offside_line_x=their_offside_line_x(teammates),
            kicker=kick.kicker,
            kicker_candidates=kick.candidates,
            fastest_intercept_player=players[0] if players else None,
            fastest_intercept_teammate=teammates[0] if teammates else None,
            fastest_intercept_opponent=opponents[0] if opponents else None,
            ball_status=ball_status(ball.pos, self.config),
        )

    # =========================================================================
    # Frame Normalisation
    # =========================================================================

    def _vec(self, value: Vec2Schema) -> Vec2:
        vec = Vec2(value.x, value.y)
        return vec.reversed_side() if self.mirrored else vec

    def _angle(self, degrees: float) -> float:
        if self.mirrored:
            return normalize_angle(degrees + 180.0)
        return normalize_angle(degrees)

    # =========================================================================
    # Identity Resolution
    # =========================================================================

    def _resolve_players(
        self,
        observed: List[PlayerObservation],
        previous: Optional[WorldSnapshot],
        type_ids: Mapping[PlayerKey, int],
        cards: Mapping[PlayerKey, Card],
    ) -> List[Player]:
        players: List[Player] = []
        seen: Dict[PlayerKey, Player] = {}

        for obs in observed:
            if obs.side is Side.NEUTRAL or not valid_unum(obs.unum):
                logger.warning("dropping player with illegal identity: side=%s unum=%d",
                               obs.side.value, obs.unum)
                self.trace.trace(f"{obs.side.value}:{obs.unum}", TraceCategory.WORLD,
                                 "dropped: illegal identity")
                continue

            key = (obs.side, obs.unum)
            if key in seen:
                logger.warning("dropping duplicate observation of %s", seen[key].label)
                self.trace.trace(seen[key].label, TraceCategory.WORLD, "dropped: duplicate")
                continue

            prev_player = previous.get_player(obs.side, obs.unum) if previous is not None else None
            if prev_player is not None:
                player = prev_player.clone()
                self._update_player(player, obs, fresh=False)
            else:
                player = Player(side=obs.side, unum=obs.unum)
                self._update_player(player, obs, fresh=True)

            self._assign_type(player, type_ids.get(key, player.type_id))
            card = cards.get(key)
            if card is not None:
                player.card = card
            if obs.card is not None:
                player.card = obs.card

            seen[key] = player
            players.append(player)

        return players

    def _update_player(self, player: Player, obs: PlayerObservation, fresh: bool) -> None:
        """Overwrite every field the observation carries and advance counters."""
        config = self.config

        player.goalie = obs.goalie
        player.pos = self._vec(obs.pos)
        if obs.vel is not None:
            player.vel = self._vec(obs.vel)
        player.body = self._angle(obs.body)
        if obs.face is not None:
            player.face = self._angle(obs.face)
        elif fresh:
            player.face = player.body

        if obs.pointto_angle is not None:
            player.pointto_cycle += 1
            player.pointto_angle = self._angle(obs.pointto_angle)
        else:
            player.pointto_cycle = 0
            player.pointto_angle = None

        player.kicking = obs.kicking

        if obs.tackling:
            player.tackle_cycle += 1
            if player.tackle_cycle > config.tackle_cycles:
                player.tackle_cycle = 1
        else:
            player.tackle_cycle = 0

        if obs.charged:
            player.charged_cycle += 1
            if player.charged_cycle > config.foul_cycles:
                player.charged_cycle = 1
        else:
            player.charged_cycle = 0

    def _assign_type(self, player: Player, type_id: int) -> None:
        if type_id == player.type_id:
            return
        if player.type_id != UNKNOWN_TYPE_ID:
            # substitution: the new player starts without a card
            logger.info("%s changed type %d -> %d", player.label, player.type_id, type_id)
            player.card = Card.NONE
        player.type_id = type_id

    # =========================================================================
    # Reach Steps
    # =========================================================================

    def _predict_reach_steps(
        self,
        ball: Ball,
        teammates: List[Player],
        opponents: List[Player],
        deadline: Optional[Callable[[], bool]],
    ) -> None:
        trajectory = BallTrajectory.from_ball(ball.pos, ball.vel, self.config)
        predictor = InterceptPredictor(trajectory, self.registry, self.config)

        # An observer evaluates nobody as its own player
        own = self.our_side is not Side.NEUTRAL
        queue = [(p, True) for p in teammates] + [(p, False) for p in opponents]
        for index, (player, teammate) in enumerate(queue):
            if deadline is not None and deadline():
                logger.warning("deadline reached, %d players left unevaluated", len(queue) - index)
                self.trace.trace("intercept", TraceCategory.INTERCEPT,
                                 f"interrupted with {len(queue) - index} players left")
                return
            player.ball_reach_step = predictor.predict_player(
                player, teammate=teammate and own, left_goal=teammate)
            self.trace.trace(player.label, TraceCategory.INTERCEPT,
                             f"reach_step={player.ball_reach_step}")
