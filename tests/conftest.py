"""Shared pytest fixtures for pitchmodel tests."""

import pytest

from pitchmodel.config import ServerParams, set_config
from pitchmodel.core.entities import Side
from pitchmodel.core.game_mode import PlayMode
from pitchmodel.core.player_type import PlayerTypeRegistry
from pitchmodel.core.trace import TraceSystem
from pitchmodel.perception.observations import (
    BallObservation,
    PlayerObservation,
    Vec2Schema,
    VisualObservation,
)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def server_params(monkeypatch) -> ServerParams:
    """Default server parameters, isolated from the environment."""
    for name in (
        "PITCHMODEL_KEEPAWAY",
        "PITCHMODEL_BALL_DECAY",
        "PITCHMODEL_BALL_SPEED_MAX",
        "PITCHMODEL_TACKLE_CYCLES",
        "PITCHMODEL_TRAJECTORY_MAX_STEPS",
    ):
        monkeypatch.delenv(name, raising=False)
    params = ServerParams()
    set_config(params)
    yield params
    set_config(None)


@pytest.fixture
def registry(server_params) -> PlayerTypeRegistry:
    """Registry holding only the default type."""
    return PlayerTypeRegistry(server_params)


@pytest.fixture
def trace() -> TraceSystem:
    """A private, enabled trace system."""
    system = TraceSystem()
    system.enable(True)
    return system


# =============================================================================
# Observation Fixtures
# =============================================================================


def player_obs(side, unum, x, y, **kwargs) -> PlayerObservation:
    """Observed player at (x, y), standing still unless vel is given."""
    vel = kwargs.pop("vel", (0.0, 0.0))
    return PlayerObservation(
        side=side,
        unum=unum,
        pos=Vec2Schema(x=x, y=y),
        vel=Vec2Schema(x=vel[0], y=vel[1]) if vel is not None else None,
        **kwargs,
    )


def visual(cycle, players, ball=(0.0, 0.0), ball_vel=(0.0, 0.0),
           play_mode=PlayMode.PLAY_ON, mode_side=Side.NEUTRAL) -> VisualObservation:
    """One cycle of observations."""
    return VisualObservation(
        cycle=cycle,
        play_mode=play_mode,
        mode_side=mode_side,
        ball=BallObservation(
            pos=Vec2Schema(x=ball[0], y=ball[1]),
            vel=Vec2Schema(x=ball_vel[0], y=ball_vel[1]),
        ),
        players=players,
    )


@pytest.fixture
def make_player():
    """Factory for PlayerObservation records."""
    return player_obs


@pytest.fixture
def make_visual():
    """Factory for VisualObservation records."""
    return visual


@pytest.fixture
def kickoff_lineup():
    """Two goalies and a few field players either side of the halfway line."""
    return [
        player_obs(Side.LEFT, 1, -50.0, 0.0, goalie=True),
        player_obs(Side.LEFT, 2, -30.0, -10.0),
        player_obs(Side.LEFT, 3, -30.0, 10.0),
        player_obs(Side.LEFT, 9, -1.0, 0.0),
        player_obs(Side.RIGHT, 1, 50.0, 0.0, goalie=True, body=180.0),
        player_obs(Side.RIGHT, 2, 30.0, -10.0, body=180.0),
        player_obs(Side.RIGHT, 3, 30.0, 10.0, body=180.0),
        player_obs(Side.RIGHT, 9, 10.0, 0.0, body=180.0),
    ]
