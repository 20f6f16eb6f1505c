"""Ball interception prediction.

Estimates how many cycles a player needs before the ball is within their
control radius, by walking the cached ball trajectory and checking at
each future step whether turning and then dashing gets them there in
time.

The estimate is deliberately cheap: per step it is a handful of vector
operations, a bounded turn loop and one lookup in the player type's
dash-distance table. A lower bound computed from the player's distance
to the ball's line of travel skips steps that cannot succeed.

Usage:
    trajectory = BallTrajectory.from_ball(ball.pos, ball.vel)
    predictor = InterceptPredictor(trajectory, registry)
    step = predictor.predict_player(player, teammate=True)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..config import ServerParams, get_config
from ..core.entities import UNREACHABLE_STEP, Player
from ..core.field import Rect, penalty_area
from ..core.player_type import PlayerType, PlayerTypeRegistry
from ..core.vec2 import Vec2, angle_diff, asin_deg
from .ball_trajectory import BallTrajectory

logger = logging.getLogger(__name__)


# Projection horizon for the final-point fallback
FINAL_INERTIA_STEPS = 100

# Control radius tightening applied to the evaluating team's own players
TEAMMATE_CONTROL_BUFFER = 0.2

MAX_BONUS_STEP = 3
MIN_TURN_MARGIN = 15.0
BACK_DASH_DIST = 10.0
REJECT_MARGIN = 0.5


# =============================================================================
# Kinematic Input
# =============================================================================

@dataclass(frozen=True)
class PlayerKinematics:
    """The state a prediction starts from.

    The caller picks position and velocity from whichever observation
    channel it trusts most, and sets the step adjustments accordingly.

    Attributes:
        pos: Player position
        vel: Player velocity
        body: Body direction in degrees
        bonus_step: Cycles the player may already have been moving (0-3)
        penalty_step: Cycles the player is locked out (tackle/foul)
    """
    pos: Vec2
    vel: Vec2 = Vec2(0.0, 0.0)
    body: float = 0.0
    bonus_step: int = 0
    penalty_step: int = 0

    @classmethod
    def from_player(cls, player: Player, config: Optional[ServerParams] = None) -> PlayerKinematics:
        """Kinematics from full-state information: no bonus, lockout as penalty."""
        config = config or get_config()
        if player.is_tackling:
            penalty = max(0, config.tackle_cycles - player.tackle_cycle)
        elif player.is_charged:
            penalty = max(0, config.foul_cycles - player.charged_cycle)
        else:
            penalty = 0
        return cls(pos=player.pos, vel=player.vel, body=player.body, penalty_step=penalty)

    @classmethod
    def from_observation_counts(
        cls,
        seen_pos: Vec2,
        seen_pos_count: int,
        heard_pos: Vec2,
        heard_pos_count: int,
        seen_vel: Vec2,
        seen_vel_count: int,
        vel: Vec2,
        vel_count: int,
        body: float,
        tackling: bool = False,
        tackle_count: int = 0,
        config: Optional[ServerParams] = None,
    ) -> PlayerKinematics:
        """Kinematics for an agent with partial observations.

        Counts are cycles since each value was last refreshed; the
        fresher of seen and heard position wins. A player seen or heard
        recently may already be moving, which is credited as bonus steps.
        """
        config = config or get_config()
        pos = heard_pos if heard_pos_count < seen_pos_count else seen_pos
        velocity = vel if vel_count < seen_vel_count else seen_vel
        bonus = min(MAX_BONUS_STEP, heard_pos_count, seen_pos_count)
        penalty = max(0, config.tackle_cycles - tackle_count - 2) if tackling else 0
        return cls(pos=pos, vel=velocity, body=body, bonus_step=bonus, penalty_step=penalty)


@dataclass(frozen=True)
class _Attempt:
    kin: PlayerKinematics
    ptype: PlayerType
    control: float

    def inertia_point(self, step: int) -> Vec2:
        return self.ptype.inertia_point(self.kin.pos, self.kin.vel, step + self.kin.bonus_step)


# =============================================================================
# Predictor
# =============================================================================

class InterceptPredictor:
    """Reach-step prediction for any number of players against one ball.

    The trajectory and registry are only read, so one instance can
    evaluate players in any order, and stopping part way leaves every
    result computed so far valid.
    """

    def __init__(
        self,
        trajectory: BallTrajectory,
        registry: Optional[PlayerTypeRegistry] = None,
        config: Optional[ServerParams] = None,
    ):
        self.config = config or get_config()
        self.trajectory = trajectory
        self._registry = registry
        self._move_angle = trajectory.move_angle

    @property
    def registry(self) -> PlayerTypeRegistry:
        if self._registry is None:
            self._registry = PlayerTypeRegistry(self.config)
        return self._registry

    def predict_player(
        self,
        player: Player,
        teammate: bool,
        left_goal: Optional[bool] = None,
    ) -> int:
        """Reach step for a snapshot player; goalies also tried as goalies.

        left_goal names the goal a goalie defends and defaults to teammate.
        An observer passes teammate=False for everyone and left_goal for
        the left team.
        """
        ptype = self.registry.get(player.type_id)
        kin = PlayerKinematics.from_player(player, self.config)
        step = self.predict(kin, ptype, goalie=False, teammate=teammate)
        if player.goalie:
            step = min(step, self.predict(kin, ptype, goalie=True, teammate=teammate,
                                          left_goal=left_goal))
        return step

    def predict(
        self,
        kin: PlayerKinematics,
        ptype: PlayerType,
        goalie: bool = False,
        teammate: bool = False,
        left_goal: Optional[bool] = None,
    ) -> int:
        """Minimum cycles until the ball is within the player's control radius.

        Always returns a finite int. UNREACHABLE_STEP is only returned for
        a goalie when the ball comes to rest outside their penalty area.

        teammate tightens the control radius for the evaluating team's own
        players. left_goal picks the goalie's penalty area and defaults to
        teammate.
        """
        control = ptype.reliable_catchable_dist if goalie else ptype.kickable_area
        if teammate:
            control -= TEAMMATE_CONTROL_BUFFER
        attempt = _Attempt(kin, ptype, control)

        # Teammates defend the -x end in the normalised frame
        if left_goal is None:
            left_goal = teammate
        box = penalty_area(self.config, left=left_goal) if goalie else None

        cache = self.trajectory
        max_step = len(cache) - 1
        min_step = self._estimate_min_step(attempt)

        if min_step <= max_step:
            for step in range(min_step, max_step):
                ball_pos = cache[step]

                if box is not None and not box.contains(ball_pos):
                    continue

                reach = (
                    control
                    + ptype.real_speed_max * (step + kin.bonus_step - kin.penalty_step)
                    + REJECT_MARGIN
                )
                if reach * reach < kin.pos.distance_squared_to(ball_pos):
                    continue

                if self._can_reach_after_turn_dash(attempt, ball_pos, step):
                    return step

        return self._predict_final(attempt, box)

    # =========================================================================
    # Steps
    # =========================================================================

    def _estimate_min_step(self, attempt: _Attempt) -> int:
        """Lower bound from the distance to the ball's line of travel."""
        rel = (attempt.kin.pos - self.trajectory[0]).rotate(-self._move_angle)
        move_dist = max(0.0, rel.abs_y() - attempt.control)
        step = int(math.floor(move_dist / attempt.ptype.real_speed_max))
        return max(0, step - attempt.kin.bonus_step + attempt.kin.penalty_step)

    def _can_reach_after_turn_dash(self, attempt: _Attempt, ball_pos: Vec2, step: int) -> bool:
        n_turn = self._predict_turn_cycle(attempt, ball_pos, step)
        if step - n_turn - attempt.kin.penalty_step < 0:
            return False

        kin = attempt.kin
        dash_dist = attempt.inertia_point(step).distance_to(ball_pos) - attempt.control
        if dash_dist < 0.0 and step > kin.penalty_step:
            return True

        n_dash = attempt.ptype.cycles_to_reach_distance(dash_dist)
        bonus = max(0, kin.bonus_step - n_turn)
        return n_turn + n_dash - bonus + kin.penalty_step <= step

    def _predict_turn_cycle(self, attempt: _Attempt, ball_pos: Vec2, step: int) -> int:
        """Turns needed before the body points close enough at the ball."""
        ball_rel = ball_pos - attempt.inertia_point(step)
        ball_dist = ball_rel.length()
        error = angle_diff(ball_rel.th(), attempt.kin.body)

        margin = 180.0
        if attempt.control < ball_dist:
            margin = max(MIN_TURN_MARGIN, asin_deg(attempt.control / ball_dist))

        if ball_dist < BACK_DASH_DIST and error > 90.0:
            # dash backwards instead
            error = 180.0 - error

        n_turn = 0
        if error > margin:
            ptype = attempt.ptype
            speed = attempt.kin.vel.length() * ptype.player_decay ** attempt.kin.penalty_step
            while error > margin:
                error -= ptype.max_effective_turn(speed)
                speed *= ptype.player_decay
                n_turn += 1
        return n_turn

    def _predict_final(self, attempt: _Attempt, box: Optional[Rect]) -> int:
        """Estimate against the last cached position, where the ball settles."""
        ball_pos = self.trajectory.final_position
        ball_step = len(self.trajectory) - 1

        if box is not None and not box.contains(ball_pos):
            return UNREACHABLE_STEP

        kin = attempt.kin
        n_turn = self._predict_turn_cycle(attempt, ball_pos, FINAL_INERTIA_STEPS)
        dash_dist = attempt.inertia_point(FINAL_INERTIA_STEPS).distance_to(ball_pos) - attempt.control
        if dash_dist < 0.0 and ball_step > kin.penalty_step:
            return ball_step

        n_dash = attempt.ptype.cycles_to_reach_distance(dash_dist)
        bonus = max(0, kin.bonus_step - n_turn)
        step = max(ball_step, n_turn + n_dash - bonus + kin.penalty_step)
        logger.debug(
            "no step in trajectory window, final point %s: step=%d (turn=%d dash=%d)",
            ball_pos, step, n_turn, n_dash,
        )
        return step


def predict_reach_step(
    kinematics: PlayerKinematics,
    ptype: PlayerType,
    trajectory: BallTrajectory,
    goalie: bool = False,
    teammate: bool = False,
    config: Optional[ServerParams] = None,
) -> int:
    """One-off prediction, e.g. for a hypothetical player position."""
    predictor = InterceptPredictor(trajectory, config=config)
    return predictor.predict(kinematics, ptype, goalie=goalie, teammate=teammate)
