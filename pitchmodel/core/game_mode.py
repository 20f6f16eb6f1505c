"""Referee play modes and game time."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .entities import Side


class PlayMode(str, Enum):
    """Referee play mode, without the side suffix."""
    BEFORE_KICK_OFF = "before_kick_off"
    TIME_OVER = "time_over"
    PLAY_ON = "play_on"
    KICK_OFF = "kick_off"
    KICK_IN = "kick_in"
    FREE_KICK = "free_kick"
    CORNER_KICK = "corner_kick"
    GOAL_KICK = "goal_kick"
    AFTER_GOAL = "goal"
    OFFSIDE = "offside"
    PENALTY_KICK = "penalty_kick"
    FIRST_HALF_OVER = "first_half_over"
    PAUSE = "pause"
    HUMAN = "human_judge"
    FOUL_CHARGE = "foul_charge"
    FOUL_PUSH = "foul_push"
    FOUL_MULTIPLE_ATTACKER = "foul_multiple_attack"
    FOUL_BALL_OUT = "foul_ballout"
    BACK_PASS = "back_pass"
    FREE_KICK_FAULT = "free_kick_fault"
    CATCH_FAULT = "catch_fault"
    IND_FREE_KICK = "indirect_free_kick"
    ILLEGAL_DEFENSE = "illegal_defense"
    GOALIE_CATCH = "goalie_catch_ball"
    DROP_BALL = "drop_ball"
    PENALTY_SETUP = "penalty_setup"
    PENALTY_READY = "penalty_ready"
    PENALTY_TAKEN = "penalty_taken"
    PENALTY_MISS = "penalty_miss"
    PENALTY_SCORE = "penalty_score"
    PENALTY_ONFIELD = "penalty_onfield"
    PENALTY_FOUL = "penalty_foul"


# Restarts taken by the side named in the mode
_OWN_RESTARTS = frozenset({
    PlayMode.KICK_OFF,
    PlayMode.KICK_IN,
    PlayMode.CORNER_KICK,
    PlayMode.GOAL_KICK,
    PlayMode.FREE_KICK,
    PlayMode.GOALIE_CATCH,
    PlayMode.IND_FREE_KICK,
})

# Fouls called against the side named in the mode; the other side restarts
_FOUL_RESTARTS = frozenset({
    PlayMode.OFFSIDE,
    PlayMode.FOUL_CHARGE,
    PlayMode.FOUL_PUSH,
    PlayMode.FREE_KICK_FAULT,
    PlayMode.BACK_PASS,
    PlayMode.CATCH_FAULT,
    PlayMode.ILLEGAL_DEFENSE,
})

# Penalty shoot-out phases
_SHOOTOUT_MODES = frozenset({
    PlayMode.PENALTY_SETUP,
    PlayMode.PENALTY_READY,
    PlayMode.PENALTY_TAKEN,
    PlayMode.PENALTY_MISS,
    PlayMode.PENALTY_SCORE,
    PlayMode.PENALTY_ONFIELD,
    PlayMode.PENALTY_FOUL,
})


@dataclass(frozen=True)
class GameMode:
    """A play mode plus the side it refers to."""
    mode: PlayMode = PlayMode.BEFORE_KICK_OFF
    side: Side = Side.NEUTRAL

    @property
    def is_play_on(self) -> bool:
        return self.mode is PlayMode.PLAY_ON

    @property
    def is_penalty_kick_mode(self) -> bool:
        """Whether the match is in a penalty shoot-out."""
        return self.mode in _SHOOTOUT_MODES

    def restart_side(self) -> Side:
        """Side that executes the restart, NEUTRAL for non-restart modes."""
        if self.mode in _OWN_RESTARTS:
            return self.side
        if self.mode in _FOUL_RESTARTS:
            return self.side.opposite()
        return Side.NEUTRAL

    def is_teams_set_play(self, team_side: Side) -> bool:
        """Whether team_side takes the current set play."""
        if team_side is Side.NEUTRAL:
            return False
        return self.restart_side() is team_side

    def reversed_side(self) -> GameMode:
        return GameMode(self.mode, self.side.opposite())

    def __str__(self) -> str:
        if self.side is Side.NEUTRAL:
            return self.mode.value
        return f"{self.mode.value}_{self.side.value[0]}"


@dataclass(frozen=True, order=True)
class GameTime:
    """Simulation time: the cycle counter plus cycles spent stopped within it."""
    cycle: int = 0
    stopped: int = 0

    def __str__(self) -> str:
        return f"[{self.cycle}, {self.stopped}]"
