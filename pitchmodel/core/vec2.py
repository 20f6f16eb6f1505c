"""2D Vector implementation for the world model.

All positions and velocities use Vec2. Units are server distance units
(meters); angles exposed by this module are in degrees, matching the
simulator's protocol.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# =============================================================================
# Angle Helpers
# =============================================================================

def normalize_angle(degrees: float) -> float:
    """Wrap an angle into the range [-180, 180)."""
    if -180.0 <= degrees < 180.0:
        return degrees
    wrapped = math.fmod(degrees + 180.0, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    return wrapped - 180.0


def angle_diff(a: float, b: float) -> float:
    """Absolute difference between two bearings (0 to 180 degrees)."""
    return abs(normalize_angle(a - b))


def asin_deg(value: float) -> float:
    """Arc sine in degrees, with the argument clamped to [-1, 1]."""
    return math.degrees(math.asin(max(-1.0, min(1.0, value))))


@dataclass(frozen=True, slots=True)
class Vec2:
    """Immutable 2D vector.

    Coordinate system (canonical frame):
        Origin (0, 0) = Center mark
        +X = Toward the opponent goal
        +Y = Toward the bottom touch line (server convention)

    Bearings returned by th() are degrees from the positive X axis.
    """
    x: float = 0.0
    y: float = 0.0

    # =========================================================================
    # Arithmetic Operations
    # =========================================================================

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> Vec2:
        if scalar == 0:
            return Vec2(0, 0)
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    # =========================================================================
    # Vector Operations
    # =========================================================================

    def length(self) -> float:
        """Magnitude of vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def length_squared(self) -> float:
        """Squared magnitude (faster, avoids sqrt)."""
        return self.x * self.x + self.y * self.y

    def distance_to(self, other: Vec2) -> float:
        """Euclidean distance to another point."""
        return (other - self).length()

    def distance_squared_to(self, other: Vec2) -> float:
        """Squared distance to another point."""
        return (other - self).length_squared()

    def th(self) -> float:
        """Bearing in degrees from positive X axis (-180 to 180).

        A zero vector yields 0.0; callers must not read a meaningful
        direction from it.
        """
        if self.x == 0.0 and self.y == 0.0:
            return 0.0
        return math.degrees(math.atan2(self.y, self.x))

    def rotate(self, degrees: float) -> Vec2:
        """Rotate vector by given angle in degrees."""
        radians = math.radians(degrees)
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        return Vec2(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a
        )

    # =========================================================================
    # Utility
    # =========================================================================

    def abs_x(self) -> float:
        return abs(self.x)

    def abs_y(self) -> float:
        return abs(self.y)

    def reversed_side(self) -> Vec2:
        """Point-mirror through the center mark (left/right side swap)."""
        return Vec2(-self.x, -self.y)

    def __repr__(self) -> str:
        return f"Vec2({self.x:.2f}, {self.y:.2f})"

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"

    # =========================================================================
    # Class Methods
    # =========================================================================

    @classmethod
    def zero(cls) -> Vec2:
        """Zero vector."""
        return cls(0, 0)

    @classmethod
    def from_polar(cls, length: float, degrees: float) -> Vec2:
        """Create vector from length and bearing in degrees."""
        radians = math.radians(degrees)
        return cls(math.cos(radians) * length, math.sin(radians) * length)
