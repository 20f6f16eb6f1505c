"""Heterogeneous player types.

A player type is the immutable set of physical parameters the server
assigns to a player (top speed, decay, turn inertia, dash power rate,
body size). PlayerType derives everything the interception predictor
needs from those parameters once, at construction time:

    - kickable and reliable catchable radius
    - effective maximum speed under full-power dashing
    - a cumulative dash-distance table (distance covered after N dashes)

Types are looked up by integer id from a PlayerTypeRegistry, which falls
back to the default type for ids it has never seen.
"""

from __future__ import annotations

import bisect
import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Tuple

from ..config import ServerParams, get_config
from .vec2 import Vec2

logger = logging.getLogger(__name__)


DEFAULT_TYPE_ID = 0
UNKNOWN_TYPE_ID = -1

DASH_TABLE_SIZE = 50
DISTANCE_EPSILON = 0.001


# =============================================================================
# Parameters
# =============================================================================

@dataclass(frozen=True)
class PlayerTypeParams:
    """Raw per-type parameters, as announced by the server.

    Attributes:
        id: Type id (0 is the default, homogeneous type)
        player_speed_max: Hard cap on speed per cycle
        player_decay: Per-cycle velocity multiplier
        inertia_moment: Turn damping factor, scaled by current speed
        dash_power_rate: Acceleration gained per unit of dash power
        player_size: Body radius
        kickable_margin: Kick reach beyond the body
        effort_max: Maximum dash effort
        catchable_area_l_stretch: Goalie catch-area length multiplier
    """
    id: int = DEFAULT_TYPE_ID
    player_speed_max: float = 1.05
    player_decay: float = 0.4
    inertia_moment: float = 5.0
    dash_power_rate: float = 0.006
    player_size: float = 0.3
    kickable_margin: float = 0.7
    effort_max: float = 1.0
    catchable_area_l_stretch: float = 1.0


# =============================================================================
# Player Type
# =============================================================================

class PlayerType:
    """Player type parameters plus the quantities derived from them.

    Instances are treated as read-only once built; all derived values
    depend only on the parameters and the server parameters passed in.
    """

    def __init__(self, params: PlayerTypeParams, config: Optional[ServerParams] = None):
        config = config or get_config()
        self.params = params
        self._max_moment = config.max_moment

        self.kickable_area = params.player_size + params.kickable_margin + config.ball_size

        catch_length = (2.0 - params.catchable_area_l_stretch) * config.catch_area_l
        self.reliable_catchable_dist = math.sqrt(
            catch_length ** 2 + (config.catch_area_w * 0.5) ** 2
        )

        accel = config.max_dash_power * params.dash_power_rate * params.effort_max
        self.real_speed_max = min(params.player_speed_max, accel / (1.0 - params.player_decay))

        self.dash_distance_table, self.cycles_to_reach_max_speed = self._build_dash_table(accel)

    def _build_dash_table(self, accel: float) -> Tuple[Tuple[float, ...], int]:
        """Cumulative distance after 1..N full-power dashes from rest.

        Stamina is not modelled: a fresh player cannot exhaust it within
        the table's horizon.
        """
        speed_max = self.params.player_speed_max
        speed = 0.0
        reach = 0.0
        table = []
        max_speed_cycle = -1

        for counter in range(1, DASH_TABLE_SIZE + 1):
            step_accel = accel
            if speed + step_accel > speed_max:
                step_accel = speed_max - speed
            speed += step_accel
            reach += speed
            table.append(reach)

            if max_speed_cycle < 0 and speed >= self.real_speed_max - 0.01:
                max_speed_cycle = counter

            speed *= self.params.player_decay

        return tuple(table), max_speed_cycle

    # =========================================================================
    # Parameter Shortcuts
    # =========================================================================

    @property
    def id(self) -> int:
        return self.params.id

    @property
    def player_speed_max(self) -> float:
        return self.params.player_speed_max

    @property
    def player_decay(self) -> float:
        return self.params.player_decay

    @property
    def inertia_moment(self) -> float:
        return self.params.inertia_moment

    @property
    def dash_power_rate(self) -> float:
        return self.params.dash_power_rate

    # =========================================================================
    # Kinematics
    # =========================================================================

    def effective_turn(self, moment: float, speed: float) -> float:
        """Actual body rotation (degrees) produced by a turn command."""
        return moment / (1.0 + self.params.inertia_moment * speed)

    def max_effective_turn(self, speed: float) -> float:
        return self.effective_turn(self._max_moment, speed)

    def inertia_travel(self, vel: Vec2, n_step: int) -> Vec2:
        """Distance travelled in n_step cycles by inertia alone."""
        decay = self.params.player_decay
        return vel * ((1.0 - decay ** n_step) / (1.0 - decay))

    def inertia_point(self, pos: Vec2, vel: Vec2, n_step: int) -> Vec2:
        """Position reached after n_step cycles with no further acceleration."""
        return pos + self.inertia_travel(vel, n_step)

    def cycles_to_reach_distance(self, dash_dist: float) -> int:
        """Number of full-power dashes needed to cover a distance from rest."""
        if dash_dist <= DISTANCE_EPSILON:
            return 0

        table = self.dash_distance_table
        index = bisect.bisect_left(table, dash_dist - DISTANCE_EPSILON)
        if index < len(table):
            return index + 1

        rest = dash_dist - table[-1]
        return len(table) + int(math.ceil(rest / self.real_speed_max))

    def __repr__(self) -> str:
        return (
            f"PlayerType(id={self.id}, speed_max={self.player_speed_max:.3f}, "
            f"real_speed_max={self.real_speed_max:.3f}, kickable={self.kickable_area:.3f})"
        )


# =============================================================================
# Registry
# =============================================================================

class PlayerTypeRegistry:
    """Player types keyed by id, with the default type as fallback.

    Usage:
        registry = PlayerTypeRegistry()
        registry.register(PlayerTypeParams(id=3, player_speed_max=1.2))
        ptype = registry.get(3)
        fallback = registry.get(UNKNOWN_TYPE_ID)   # default type
    """

    def __init__(self, config: Optional[ServerParams] = None):
        self._config = config or get_config()
        self._types: Dict[int, PlayerType] = {}
        self._default = PlayerType(PlayerTypeParams(id=DEFAULT_TYPE_ID), self._config)
        self._types[DEFAULT_TYPE_ID] = self._default

    @property
    def default(self) -> PlayerType:
        return self._default

    def register(self, params: PlayerTypeParams) -> PlayerType:
        """Add or replace a type. Negative ids are rejected."""
        if params.id < 0:
            raise ValueError(f"player type id must be non-negative, got {params.id}")
        ptype = PlayerType(params, self._config)
        self._types[params.id] = ptype
        if params.id == DEFAULT_TYPE_ID:
            self._default = ptype
        logger.debug("registered %r", ptype)
        return ptype

    def register_variant(self, type_id: int, **changes) -> PlayerType:
        """Register a type derived from the default parameters."""
        return self.register(replace(self._default.params, id=type_id, **changes))

    def get(self, type_id: int) -> PlayerType:
        """Type for an id, or the default type when the id is unknown."""
        ptype = self._types.get(type_id)
        if ptype is None:
            if type_id != UNKNOWN_TYPE_ID:
                logger.debug("no parameters for player type %d, using default", type_id)
            return self._default
        return ptype

    def __contains__(self, type_id: int) -> bool:
        return type_id in self._types

    def __iter__(self) -> Iterator[PlayerType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
