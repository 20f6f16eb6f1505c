"""World model: the sequence of snapshots over a match.

Owns the current and previous snapshot, a bounded history, externally
supplied player types and cards, and the last-kicker record that
persists across cycles.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, Optional, Tuple

from ..config import ServerParams, get_config
from ..core.entities import UNUM_UNKNOWN, Card, Side, valid_unum
from ..core.game_mode import GameMode, GameTime, PlayMode
from ..core.player_type import UNKNOWN_TYPE_ID, PlayerTypeRegistry
from ..core.trace import TraceSystem
from ..perception.observations import VisualObservation
from .builder import PlayerKey, WorldBuilder
from .snapshot import WorldSnapshot

logger = logging.getLogger(__name__)


DEFAULT_HISTORY_SIZE = 100

# Cycles not kept in the history
_UNRECORDED_MODES = frozenset({PlayMode.BEFORE_KICK_OFF, PlayMode.TIME_OVER})


class WorldModel:
    """Tracks the world across cycles for one side's point of view.

    Usage:
        model = WorldModel(Side.LEFT, registry)
        model.set_player_type(Side.RIGHT, 9, 4)
        snapshot = model.update(observation)
        side, unum = model.last_kicker_side, model.last_kicker_unum
    """

    def __init__(
        self,
        our_side: Side = Side.NEUTRAL,
        registry: Optional[PlayerTypeRegistry] = None,
        config: Optional[ServerParams] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        trace: Optional[TraceSystem] = None,
    ):
        if history_size < 1:
            raise ValueError("history_size must be at least 1")
        self.config = config or get_config()
        self.registry = registry or PlayerTypeRegistry(self.config)
        self.builder = WorldBuilder(our_side, self.registry, self.config, trace)

        self._current: Optional[WorldSnapshot] = None
        self._previous: Optional[WorldSnapshot] = None
        self._history: Deque[WorldSnapshot] = deque(maxlen=history_size)
        self._states: Dict[GameTime, WorldSnapshot] = {}

        self._type_ids: Dict[PlayerKey, int] = {}
        self._cards: Dict[PlayerKey, Card] = {}

        self._last_kicker_side = Side.NEUTRAL
        self._last_kicker_unum = UNUM_UNKNOWN

        self._last_set_play_start_time = GameTime()
        self._set_play_count = 0
        self._last_play_on_start = 0

    # =========================================================================
    # State
    # =========================================================================

    @property
    def our_side(self) -> Side:
        return self.builder.our_side

    @property
    def current(self) -> Optional[WorldSnapshot]:
        return self._current

    @property
    def previous(self) -> Optional[WorldSnapshot]:
        """Snapshot of the cycle before the current one."""
        return self._previous

    @property
    def history(self) -> Tuple[WorldSnapshot, ...]:
        """Recorded snapshots, oldest first."""
        return tuple(self._history)

    @property
    def history_size(self) -> int:
        return self._history.maxlen

    @property
    def time(self) -> GameTime:
        return self._current.time if self._current is not None else GameTime()

    @property
    def game_mode(self) -> GameMode:
        return self._current.game_mode if self._current is not None else GameMode()

    @property
    def last_kicker_side(self) -> Side:
        return self._last_kicker_side

    @property
    def last_kicker_unum(self) -> int:
        return self._last_kicker_unum

    @property
    def last_set_play_start_time(self) -> GameTime:
        """Time the current (or most recent) set play was announced."""
        return self._last_set_play_start_time

    @property
    def set_play_count(self) -> int:
        """Cycles since the last set play started."""
        return self._set_play_count

    @property
    def last_play_on_start(self) -> int:
        """Cycle at which play last resumed."""
        return self._last_play_on_start

    def state_at(self, time: GameTime) -> Optional[WorldSnapshot]:
        """Recorded snapshot for a game time, None if never or no longer held."""
        return self._states.get(time)

    # =========================================================================
    # External Assignments
    # =========================================================================

    def player_type(self, side: Side, unum: int) -> int:
        return self._type_ids.get((side, unum), UNKNOWN_TYPE_ID)

    def set_player_type(self, side: Side, unum: int, type_id: int) -> None:
        """Record a player's type; used from the next snapshot on."""
        if side is Side.NEUTRAL or not valid_unum(unum):
            logger.warning("ignoring player type for illegal identity: side=%s unum=%d",
                           side.value, unum)
            return
        key = (side, unum)
        old = self._type_ids.get(key, UNKNOWN_TYPE_ID)
        if old != UNKNOWN_TYPE_ID and old != type_id:
            self._cards.pop(key, None)
        self._type_ids[key] = type_id

    def set_card(self, side: Side, unum: int, card: Card) -> None:
        """Record a player's card; used from the next snapshot on."""
        if side is Side.NEUTRAL or not valid_unum(unum):
            logger.warning("ignoring card for illegal identity: side=%s unum=%d",
                           side.value, unum)
            return
        self._cards[(side, unum)] = card

    # =========================================================================
    # Update
    # =========================================================================

    def update(
        self,
        observation: VisualObservation,
        deadline: Optional[Callable[[], bool]] = None,
    ) -> WorldSnapshot:
        """Build the next snapshot from an observation and make it current."""
        time = GameTime(observation.cycle, observation.stopped)
        if self._current is not None and self._current.time == time:
            logger.debug("already updated at %s", time)
            return self._current

        self._update_game_mode(GameMode(observation.play_mode, observation.mode_side), time)

        snapshot = self.builder.build(
            observation,
            previous=self._current,
            type_ids=self._type_ids,
            cards=self._cards,
            deadline=deadline,
        )

        self._previous = self._current
        self._current = snapshot
        self._set_play_count += 1

        if snapshot.game_mode.mode not in _UNRECORDED_MODES:
            self._record(snapshot)

        self._update_last_kicker()
        return snapshot

    def _record(self, snapshot: WorldSnapshot) -> None:
        if len(self._history) == self._history.maxlen:
            oldest = self._history.popleft()
            self._states.pop(oldest.time, None)
        self._history.append(snapshot)
        self._states[snapshot.time] = snapshot

    def _update_game_mode(self, game_mode: GameMode, time: GameTime) -> None:
        """Set-play and play-on bookkeeping when the referee changes the mode."""
        old = self.game_mode
        if game_mode == old:
            return

        if not game_mode.is_penalty_kick_mode and not game_mode.is_play_on:
            # a free kick given again, e.g. to the other side, restarts the count
            if old.mode is not game_mode.mode or game_mode.mode is PlayMode.FREE_KICK:
                self._last_set_play_start_time = time
                self._set_play_count = 0
                logger.debug("set play %s started at %s", game_mode, time)

        if not old.is_play_on and game_mode.is_play_on:
            self._last_play_on_start = time.cycle

    def _update_last_kicker(self) -> None:
        current = self._current
        mode = current.game_mode

        if not mode.is_play_on:
            ours = current.teammate_side
            if mode.is_teams_set_play(ours):
                self._last_kicker_side = ours
            elif mode.is_teams_set_play(ours.opposite()):
                self._last_kicker_side = ours.opposite()
            else:
                self._last_kicker_side = Side.NEUTRAL
            self._last_kicker_unum = UNUM_UNKNOWN
            nearest = current.player_nearest_to(current.ball.pos)
            if nearest is not None and nearest.side is self._last_kicker_side:
                self._last_kicker_unum = nearest.unum
            logger.debug("non-playon last kicker: side=%s unum=%d",
                         self._last_kicker_side.value, self._last_kicker_unum)
            return

        if self._previous is None:
            return

        if len(current.kicker_candidates) > 1:
            self._last_kicker_side = Side.NEUTRAL
            self._last_kicker_unum = UNUM_UNKNOWN
        elif current.kicker is not None:
            self._last_kicker_side = current.kicker.side
            self._last_kicker_unum = current.kicker.unum
