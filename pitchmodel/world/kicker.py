"""Kicker attribution.

Works out who touched the ball between two consecutive snapshots. A
player qualifies when they show a kick (or a tackle that started this
cycle), existed last cycle, and the ball was within their reach then and
not further than one maximum-speed kick from them now.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from ..config import ServerParams
from ..core.entities import Ball, Player, Side
from ..core.player_type import PlayerTypeRegistry
from ..core.trace import TraceCategory, TraceSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KickerResult:
    """Outcome of kicker attribution.

    kicker is None when nobody qualifies or when qualifying players
    come from both sides; candidates holds every qualifying player.
    """
    kicker: Optional[Player] = None
    candidates: Tuple[Player, ...] = ()

    @property
    def ambiguous(self) -> bool:
        return self.kicker is None and len(self.candidates) > 0


def find_kicker(
    players: Iterable[Player],
    ball: Ball,
    prev_ball: Ball,
    prev_lookup: Callable[[Side, int], Optional[Player]],
    registry: PlayerTypeRegistry,
    config: ServerParams,
    trace: Optional[TraceSystem] = None,
) -> KickerResult:
    """Attribute the last touch to one player, if possible.

    Args:
        players: Players of the current snapshot
        ball: Current ball
        prev_ball: Ball of the previous snapshot
        prev_lookup: (side, unum) -> player in the previous snapshot
        registry: Player type lookup for kickable radii
        config: Server parameters
        trace: Optional diagnostic trace
    """
    tacklable = config.tacklable_dist
    tackle_thr = tacklable + config.ball_speed_max

    candidates = []
    kicker = None
    min_dist = float("inf")

    for player in players:
        tackle_started = player.tackle_cycle == 1
        if not player.kicking and not tackle_started:
            continue

        prev_player = prev_lookup(player.side, player.unum)
        if prev_player is None:
            continue

        kickable = registry.get(player.type_id).kickable_area + 0.001
        kick_thr = kickable + config.ball_speed_max

        curr_dist = player.pos.distance_to(ball.pos)
        prev_dist = prev_player.pos.distance_to(prev_ball.pos)

        plausible = (
            (player.kicking and prev_dist < kickable and curr_dist < kick_thr)
            or (tackle_started and prev_dist <= tacklable and curr_dist <= tackle_thr)
        )
        if trace is not None:
            trace.trace(
                player.label,
                TraceCategory.KICKER,
                f"prev_dist={prev_dist:.3f} curr_dist={curr_dist:.3f} plausible={plausible}",
            )
        if not plausible:
            continue

        candidates.append(player)
        if prev_dist < min_dist:
            kicker = player
            min_dist = prev_dist

    if len({p.side for p in candidates}) > 1:
        logger.debug("kicker ambiguous: candidates from both sides %s", candidates)
        kicker = None

    return KickerResult(kicker=kicker, candidates=tuple(candidates))
