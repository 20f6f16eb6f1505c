"""Tests for entities, game modes and the trace system."""

import pytest

from pitchmodel.core.entities import (
    UNREACHABLE_STEP,
    Ball,
    Card,
    Player,
    Side,
    valid_unum,
)
from pitchmodel.core.game_mode import GameMode, GameTime, PlayMode
from pitchmodel.core.trace import TraceCategory, TraceSystem
from pitchmodel.core.vec2 import Vec2


class TestSide:
    """Tests for Side."""

    def test_opposite(self):
        assert Side.LEFT.opposite() is Side.RIGHT
        assert Side.RIGHT.opposite() is Side.LEFT
        assert Side.NEUTRAL.opposite() is Side.NEUTRAL

    def test_valid_unum(self):
        assert valid_unum(1)
        assert valid_unum(11)
        assert not valid_unum(0)
        assert not valid_unum(12)
        assert not valid_unum(-1)


class TestPlayer:
    """Tests for the Player entity."""

    def test_defaults(self):
        player = Player(side=Side.LEFT, unum=7)
        assert player.card == Card.NONE
        assert player.ball_reach_step == UNREACHABLE_STEP
        assert not player.is_tackling
        assert not player.is_charged
        assert player.label == "L7"

    def test_clone_is_distinct(self):
        """Clones share values but not identity."""
        player = Player(side=Side.LEFT, unum=7, pos=Vec2(1.0, 2.0), card=Card.YELLOW)
        player.ball_reach_step = 4
        clone = player.clone()
        assert clone is not player
        assert clone.pos == player.pos
        assert clone.card == Card.YELLOW
        assert clone.ball_reach_step == UNREACHABLE_STEP

        clone.pos = Vec2(5.0, 5.0)
        assert player.pos == Vec2(1.0, 2.0)

    def test_reversed_side(self):
        """Mirroring negates kinematics and turns angles round."""
        player = Player(
            side=Side.RIGHT, unum=2,
            pos=Vec2(10.0, 5.0), vel=Vec2(1.0, 0.0),
            body=0.0, face=90.0, pointto_angle=45.0,
        )
        mirrored = player.reversed_side()
        assert mirrored.pos == Vec2(-10.0, -5.0)
        assert mirrored.vel == Vec2(-1.0, 0.0)
        assert mirrored.body == pytest.approx(-180.0)
        assert mirrored.face == pytest.approx(-90.0)
        assert mirrored.pointto_angle == pytest.approx(-135.0)
        assert player.pos == Vec2(10.0, 5.0)

    def test_status_flags(self):
        player = Player(tackle_cycle=2, charged_cycle=1, pointto_cycle=3)
        assert player.is_tackling
        assert player.is_charged
        assert player.is_pointing


class TestBall:
    """Tests for the Ball entity."""

    def test_speed(self):
        assert Ball(vel=Vec2(3.0, 4.0)).speed == pytest.approx(5.0)

    def test_reversed_side(self):
        ball = Ball(pos=Vec2(1.0, 2.0), vel=Vec2(0.5, 0.0)).reversed_side()
        assert ball.pos == Vec2(-1.0, -2.0)
        assert ball.vel == Vec2(-0.5, 0.0)


class TestGameMode:
    """Tests for GameMode restart attribution."""

    def test_own_restart(self):
        """Kick-ins are taken by the named side."""
        mode = GameMode(PlayMode.KICK_IN, Side.RIGHT)
        assert mode.restart_side() is Side.RIGHT
        assert mode.is_teams_set_play(Side.RIGHT)
        assert not mode.is_teams_set_play(Side.LEFT)

    def test_foul_restart(self):
        """Offside is called against the named side; the other side restarts."""
        mode = GameMode(PlayMode.OFFSIDE, Side.LEFT)
        assert mode.restart_side() is Side.RIGHT
        assert mode.is_teams_set_play(Side.RIGHT)
        assert not mode.is_teams_set_play(Side.LEFT)

    def test_all_own_restarts(self):
        for play_mode in (PlayMode.KICK_OFF, PlayMode.CORNER_KICK, PlayMode.GOAL_KICK,
                          PlayMode.FREE_KICK, PlayMode.GOALIE_CATCH, PlayMode.IND_FREE_KICK):
            assert GameMode(play_mode, Side.LEFT).restart_side() is Side.LEFT

    def test_all_foul_restarts(self):
        for play_mode in (PlayMode.FOUL_CHARGE, PlayMode.FOUL_PUSH, PlayMode.FREE_KICK_FAULT,
                          PlayMode.BACK_PASS, PlayMode.CATCH_FAULT, PlayMode.ILLEGAL_DEFENSE):
            assert GameMode(play_mode, Side.LEFT).restart_side() is Side.RIGHT

    def test_neutral_modes(self):
        for play_mode in (PlayMode.PLAY_ON, PlayMode.BEFORE_KICK_OFF, PlayMode.DROP_BALL,
                          PlayMode.PENALTY_KICK):
            mode = GameMode(play_mode, Side.LEFT)
            assert mode.restart_side() is Side.NEUTRAL
            assert not mode.is_teams_set_play(Side.LEFT)
            assert not mode.is_teams_set_play(Side.RIGHT)

    def test_neutral_team_never_has_set_play(self):
        assert not GameMode(PlayMode.KICK_IN, Side.LEFT).is_teams_set_play(Side.NEUTRAL)

    def test_str(self):
        assert str(GameMode(PlayMode.KICK_IN, Side.RIGHT)) == "kick_in_r"
        assert str(GameMode(PlayMode.PLAY_ON)) == "play_on"

    def test_penalty_shootout_modes(self):
        assert GameMode(PlayMode.PENALTY_TAKEN, Side.LEFT).is_penalty_kick_mode
        assert GameMode(PlayMode.PENALTY_ONFIELD).is_penalty_kick_mode
        assert not GameMode(PlayMode.PENALTY_KICK, Side.LEFT).is_penalty_kick_mode
        assert not GameMode(PlayMode.PLAY_ON).is_penalty_kick_mode


class TestGameTime:
    """Tests for GameTime ordering."""

    def test_ordering(self):
        assert GameTime(10, 0) < GameTime(10, 1) < GameTime(11, 0)
        assert GameTime(5, 2) == GameTime(5, 2)


class TestTraceSystem:
    """Tests for the diagnostic trace."""

    def test_disabled_by_default(self):
        system = TraceSystem()
        system.trace("L7", TraceCategory.WORLD, "ignored")
        assert system.get_entries() == []

    def test_entries_carry_time(self):
        system = TraceSystem()
        system.enable(True)
        system.set_time(12, 1)
        system.trace("L7", TraceCategory.KICKER, "kick plausible")
        system.set_time(13)
        system.trace("R2", TraceCategory.INTERCEPT, "reach_step=4")

        assert len(system.get_entries()) == 2
        assert [e.subject for e in system.get_entries(since_cycle=13)] == ["R2"]
        assert system.get_entries_for_category(TraceCategory.KICKER)[0].stopped == 1

    def test_to_dict_list(self):
        system = TraceSystem()
        system.enable(True)
        system.trace("ball", TraceCategory.WORLD, "out of field")
        data = system.to_dict_list()
        assert data[0]["category"] == "world"
        assert data[0]["subject"] == "ball"

    def test_clear(self):
        system = TraceSystem()
        system.enable(True)
        system.trace("ball", TraceCategory.WORLD, "x")
        system.clear()
        assert system.get_entries() == []
