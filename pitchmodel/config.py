"""
Simulator parameter configuration.

Holds the server-wide physical constants the world model and the
interception predictor depend on. Defaults match the standard soccer
simulator; every value can be overridden via a PITCHMODEL_* environment
variable.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class ServerParams:
    """Physical constants of the simulated match."""

    # Pitch geometry
    pitch_length: float = 105.0
    pitch_width: float = 68.0
    pitch_margin: float = 5.0
    penalty_area_length: float = 16.5
    penalty_area_width: float = 40.32
    goal_width: float = 14.02
    goal_depth: float = 2.44

    # Keep-away (restricted play) mode
    keepaway_mode: bool = field(
        default_factory=lambda: os.getenv("PITCHMODEL_KEEPAWAY", "false").lower() == "true"
    )
    keepaway_length: float = 20.0
    keepaway_width: float = 20.0

    # Ball
    ball_size: float = 0.085
    ball_decay: float = field(default_factory=lambda: _env_float("PITCHMODEL_BALL_DECAY", 0.94))
    ball_speed_max: float = field(default_factory=lambda: _env_float("PITCHMODEL_BALL_SPEED_MAX", 3.0))

    # Player commands
    max_dash_power: float = 100.0
    max_moment: float = 180.0

    # Goalie catch area
    catch_area_l: float = 1.2
    catch_area_w: float = 1.0

    # Tackle and foul
    tackle_dist: float = 2.0
    tackle_width: float = 1.25
    tackle_cycles: int = field(default_factory=lambda: _env_int("PITCHMODEL_TACKLE_CYCLES", 10))
    foul_cycles: int = 5

    # Ball trajectory cache
    trajectory_max_steps: int = field(
        default_factory=lambda: _env_int("PITCHMODEL_TRAJECTORY_MAX_STEPS", 50)
    )
    trajectory_min_steps: int = 10
    trajectory_stop_speed: float = 0.005

    @classmethod
    def from_env(cls) -> "ServerParams":
        """Create parameters from environment variables."""
        return cls()

    @property
    def pitch_half_length(self) -> float:
        return self.pitch_length * 0.5

    @property
    def pitch_half_width(self) -> float:
        return self.pitch_width * 0.5

    @property
    def penalty_area_half_width(self) -> float:
        return self.penalty_area_width * 0.5

    @property
    def goal_half_width(self) -> float:
        return self.goal_width * 0.5

    @property
    def tacklable_dist(self) -> float:
        """Reach of a tackle measured from the player's center."""
        return (self.tackle_dist ** 2 + self.tackle_width ** 2) ** 0.5 + 0.001

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if not 0.0 < self.ball_decay < 1.0:
            errors.append("ball_decay must be in (0, 1)")
        if self.ball_speed_max <= 0.0:
            errors.append("ball_speed_max must be positive")
        if self.trajectory_max_steps < 1:
            errors.append("trajectory_max_steps must be at least 1")
        if self.trajectory_min_steps > self.trajectory_max_steps:
            errors.append("trajectory_min_steps must not exceed trajectory_max_steps")
        if self.tackle_cycles < 1 or self.foul_cycles < 1:
            errors.append("tackle_cycles and foul_cycles must be positive")
        return errors


# Singleton config instance
_config: Optional[ServerParams] = None


def get_config() -> ServerParams:
    """Get the global server parameters."""
    global _config
    if _config is None:
        config = ServerParams.from_env()
        errors = config.validate()
        if errors:
            for error in errors:
                logger.error("invalid server parameter: %s", error)
            raise ValueError("; ".join(errors))
        _config = config
    return _config


def set_config(config: Optional[ServerParams]) -> None:
    """
    Replace the global server parameters.

    Passing None makes the next get_config() call re-read the environment.
    Useful for testing.
    """
    global _config
    _config = config
