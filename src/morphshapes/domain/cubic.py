"""Cubic Bezier curve primitive.

A cubic is described by two anchor points on the outline and two control
points between them. Arithmetic operators act componentwise on all four
points; they exist for interpolation and scaling, not geometric composition.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from morphshapes.domain.point import Point, interpolate

# Anchors closer than this are considered the same point.
DISTANCE_EPSILON = 1e-4

Bounds = tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class CubicBezier:
    """An immutable cubic Bezier curve.

    Attributes:
        anchor0: Start point on the outline
        control0: First control point
        control1: Second control point
        anchor1: End point on the outline
    """

    anchor0: Point
    control0: Point
    control1: Point
    anchor1: Point

    def point_on_curve(self, t: float) -> Point:
        """Evaluate the curve at parameter t using the Bernstein form.

        Args:
            t: Curve parameter, 0 at anchor0 and 1 at anchor1

        Returns:
            Point on the curve
        """
        u = 1 - t
        a = u * u * u
        b = 3 * t * u * u
        c = 3 * t * t * u
        d = t * t * t
        return Point(
            self.anchor0.x * a + self.control0.x * b + self.control1.x * c + self.anchor1.x * d,
            self.anchor0.y * a + self.control0.y * b + self.control1.y * c + self.anchor1.y * d,
        )

    @property
    def is_zero_length(self) -> bool:
        """True if both anchors coincide within the distance epsilon."""
        return (
            abs(self.anchor0.x - self.anchor1.x) < DISTANCE_EPSILON
            and abs(self.anchor0.y - self.anchor1.y) < DISTANCE_EPSILON
        )

    def convex_to(self, next_cubic: "CubicBezier") -> bool:
        """Check whether the turn from this cubic into ``next_cubic`` is convex."""
        prev_vertex = self.anchor0
        curr_vertex = self.anchor1
        next_vertex = next_cubic.anchor1
        return (curr_vertex - prev_vertex).clockwise(next_vertex - curr_vertex)

    def calculate_bounds(self, approximate: bool = False) -> Bounds:
        """Calculate the bounding box of this curve.

        Exact bounds solve the derivative (a quadratic) for extrema within
        [0, 1] on each axis. Approximate bounds use the hull of all four
        points, which is looser but cheaper.

        Args:
            approximate: Use the control-point hull instead of exact extrema

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self.is_zero_length:
            return (self.anchor0.x, self.anchor0.y, self.anchor0.x, self.anchor0.y)

        min_x = min(self.anchor0.x, self.anchor1.x)
        min_y = min(self.anchor0.y, self.anchor1.y)
        max_x = max(self.anchor0.x, self.anchor1.x)
        max_y = max(self.anchor0.y, self.anchor1.y)

        if approximate:
            return (
                min(min_x, self.control0.x, self.control1.x),
                min(min_y, self.control0.y, self.control1.y),
                max(max_x, self.control0.x, self.control1.x),
                max(max_y, self.control0.y, self.control1.y),
            )

        for t in self._extrema(self.anchor0.x, self.control0.x, self.control1.x, self.anchor1.x):
            x = self.point_on_curve(t).x
            min_x = min(min_x, x)
            max_x = max(max_x, x)

        for t in self._extrema(self.anchor0.y, self.control0.y, self.control1.y, self.anchor1.y):
            y = self.point_on_curve(t).y
            min_y = min(min_y, y)
            max_y = max(max_y, y)

        return (min_x, min_y, max_x, max_y)

    @staticmethod
    def _extrema(p0: float, p1: float, p2: float, p3: float) -> list[float]:
        """Roots of the derivative along one axis that fall within [0, 1]."""
        a = -p0 + 3 * p1 - 3 * p2 + p3
        b = 2 * p0 - 4 * p1 + 2 * p2
        c = -p0 + p1

        if abs(a) < DISTANCE_EPSILON:
            # Derivative degenerates to a line: b*t + c = 0
            if b == 0:
                return []
            candidates = [-c / b]
        else:
            discriminant = b * b - 4 * a * c
            if discriminant < 0:
                return []
            root = math.sqrt(discriminant)
            candidates = [(-b + root) / (2 * a), (-b - root) / (2 * a)]

        return [t for t in candidates if 0 <= t <= 1]

    def split(self, t: float) -> tuple["CubicBezier", "CubicBezier"]:
        """Split the curve at parameter t using De Casteljau's algorithm.

        Args:
            t: Split parameter in [0, 1]

        Returns:
            Tuple of (before, after) cubics; before ends where after starts
        """
        u = 1 - t
        p = self.point_on_curve(t)
        a0, c0, c1, a1 = self.anchor0, self.control0, self.control1, self.anchor1
        return (
            CubicBezier(
                a0,
                Point(a0.x * u + c0.x * t, a0.y * u + c0.y * t),
                Point(
                    a0.x * (u * u) + c0.x * (2 * u * t) + c1.x * (t * t),
                    a0.y * (u * u) + c0.y * (2 * u * t) + c1.y * (t * t),
                ),
                p,
            ),
            CubicBezier(
                p,
                Point(
                    c0.x * (u * u) + c1.x * (2 * u * t) + a1.x * (t * t),
                    c0.y * (u * u) + c1.y * (2 * u * t) + a1.y * (t * t),
                ),
                Point(c1.x * u + a1.x * t, c1.y * u + a1.y * t),
                a1,
            ),
        )

    def reversed(self) -> "CubicBezier":
        """Return the same curve traversed from anchor1 to anchor0."""
        return CubicBezier(self.anchor1, self.control1, self.control0, self.anchor0)

    def with_anchor1(self, anchor1: Point) -> "CubicBezier":
        """Return a copy whose end anchor is replaced."""
        return replace(self, anchor1=anchor1)

    def transformed(self, f: Callable[[Point], Point]) -> "CubicBezier":
        """Apply a point transform to all four points."""
        return CubicBezier(f(self.anchor0), f(self.control0), f(self.control1), f(self.anchor1))

    def points(self) -> tuple[Point, Point, Point, Point]:
        """All four points in curve order."""
        return (self.anchor0, self.control0, self.control1, self.anchor1)

    def __add__(self, other: "CubicBezier") -> "CubicBezier":
        return CubicBezier(
            self.anchor0 + other.anchor0,
            self.control0 + other.control0,
            self.control1 + other.control1,
            self.anchor1 + other.anchor1,
        )

    def __mul__(self, scalar: float) -> "CubicBezier":
        return CubicBezier(
            self.anchor0 * scalar,
            self.control0 * scalar,
            self.control1 * scalar,
            self.anchor1 * scalar,
        )

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "CubicBezier":
        return CubicBezier(
            self.anchor0 / scalar,
            self.control0 / scalar,
            self.control1 / scalar,
            self.anchor1 / scalar,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with the four points
        """
        return {
            "anchor0": self.anchor0.to_dict(),
            "control0": self.control0.to_dict(),
            "control1": self.control1.to_dict(),
            "anchor1": self.anchor1.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CubicBezier":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with anchor0, control0, control1, anchor1 fields

        Returns:
            CubicBezier instance
        """
        return cls(
            Point.from_dict(data["anchor0"]),
            Point.from_dict(data["control0"]),
            Point.from_dict(data["control1"]),
            Point.from_dict(data["anchor1"]),
        )

    @classmethod
    def straight_line(cls, p0: Point, p1: Point) -> "CubicBezier":
        """Build a straight segment with controls at 1/3 and 2/3."""
        return cls(p0, interpolate(p0, p1, 1.0 / 3.0), interpolate(p0, p1, 2.0 / 3.0), p1)

    @classmethod
    def circular_arc(cls, center: Point, p0: Point, p1: Point) -> "CubicBezier":
        """Approximate a circular arc between two points around a shared center.

        Falls back to a straight line when the subtended angle is negligible.
        The bulge direction follows the rotation from p0 to p1 around center.

        Args:
            center: Arc center
            p0: Arc start, assumed at the same radius as p1
            p1: Arc end

        Returns:
            Cubic approximating the arc
        """
        v0 = p0 - center
        v1 = p1 - center
        rotated_v0 = v0.rotate90()
        rotated_v1 = v1.rotate90()

        clockwise = rotated_v0.dot(v1) >= 0

        len0 = v0.distance()
        len1 = v1.distance()
        cos_a = v0.dot(v1) / (len0 * len1)

        if cos_a > 0.999:
            return cls.straight_line(p0, p1)

        k = (
            len0
            * 4.0
            / 3.0
            * (math.sqrt(2 * (1 - cos_a)) - math.sqrt(1 - cos_a * cos_a))
            / (1 - cos_a)
        )
        if not clockwise:
            k = -k

        return cls(
            p0,
            Point(p0.x + rotated_v0.x / len0 * k, p0.y + rotated_v0.y / len0 * k),
            Point(p1.x - rotated_v1.x / len1 * k, p1.y - rotated_v1.y / len1 * k),
            p1,
        )

    @classmethod
    def empty(cls, x: float, y: float) -> "CubicBezier":
        """A zero-length cubic with all points at (x, y)."""
        p = Point(x, y)
        return cls(p, p, p, p)

    @classmethod
    def interpolate(cls, start: "CubicBezier", end: "CubicBezier", t: float) -> "CubicBezier":
        """Linearly interpolate all four points between two cubics."""
        return cls(
            interpolate(start.anchor0, end.anchor0, t),
            interpolate(start.control0, end.control0, t),
            interpolate(start.control1, end.control1, t),
            interpolate(start.anchor1, end.anchor1, t),
        )
