"""2D point and vector arithmetic.

Points double as vectors: the same value type is used for positions on the
outline and for directions between them.
"""

import math
from dataclasses import dataclass
from typing import Any

# Directions shorter than this are treated as zero vectors.
_DIRECTION_EPSILON = 1e-4


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point":
        return Point(self.x / scalar, self.y / scalar)

    def dot(self, other: "Point") -> float:
        """Dot product of two vectors."""
        return self.x * other.x + self.y * other.y

    def clockwise(self, other: "Point") -> bool:
        """Check whether ``other`` turns clockwise relative to this vector.

        Uses the Z component of the cross product (self x other). Co-linear
        vectors are not clockwise.
        """
        return self.x * other.y - self.y * other.x > 0

    def rotate90(self) -> "Point":
        """Rotate 90 degrees: (x, y) -> (-y, x)."""
        return Point(-self.y, self.x)

    def distance_squared(self) -> float:
        """Squared length of this vector."""
        return self.x * self.x + self.y * self.y

    def distance(self) -> float:
        """Length of this vector."""
        return math.hypot(self.x, self.y)

    def direction(self) -> "Point":
        """Unit vector in the same direction.

        Returns:
            Normalized vector, or the zero vector for near-zero lengths
        """
        d = self.distance()
        if d <= _DIRECTION_EPSILON:
            return Point(0.0, 0.0)
        return self / d

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


ORIGIN = Point(0.0, 0.0)


def interpolate(p0: Point, p1: Point, t: float) -> Point:
    """Linear interpolation between two points."""
    return Point(p0.x + (p1.x - p0.x) * t, p0.y + (p1.y - p0.y) * t)


def direction_vector(angle_radians: float) -> Point:
    """Unit vector pointing at the given angle."""
    return Point(math.cos(angle_radians), math.sin(angle_radians))
