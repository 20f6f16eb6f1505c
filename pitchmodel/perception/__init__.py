"""Perception layer - structured sensor input."""

from .observations import BallObservation, PlayerObservation, Vec2Schema, VisualObservation

__all__ = [
    "BallObservation",
    "PlayerObservation",
    "Vec2Schema",
    "VisualObservation",
]
