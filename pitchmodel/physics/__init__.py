"""Physics layer - ball trajectory and interception prediction."""

from .ball_trajectory import BallTrajectory
from .intercept import InterceptPredictor, PlayerKinematics, predict_reach_step

__all__ = [
    "BallTrajectory",
    "InterceptPredictor",
    "PlayerKinematics",
    "predict_reach_step",
]
