"""Geometric and progress helpers shared by the core algorithms.

This module provides:
- Numerical tolerances used across the package
- Convexity test for three consecutive vertices
- Polar to cartesian conversion
- Bounding box union
- Circular progress arithmetic (modulo, distance, range test)

All functions are pure and stateless.
"""

import math

from morphshapes.domain import DISTANCE_EPSILON, ORIGIN, Bounds, Point
from morphshapes.domain.point import direction_vector

__all__ = [
    "ANGLE_EPSILON",
    "DISTANCE_EPSILON",
    "angle_between",
    "calculate_center",
    "convex",
    "is_progress_in_range",
    "positive_modulo",
    "progress_distance",
    "radial_to_cartesian",
    "union_bounds",
]

ANGLE_EPSILON = 1e-4


def convex(previous: Point, current: Point, next_point: Point) -> bool:
    """Determine whether the turn at ``current`` is convex.

    Args:
        previous: Vertex before the corner
        current: Corner vertex
        next_point: Vertex after the corner

    Returns:
        True if the outline turns clockwise (in y-down screen space) at current
    """
    return (current - previous).clockwise(next_point - current)


def radial_to_cartesian(radius: float, angle_radians: float, center: Point = ORIGIN) -> Point:
    """Convert polar coordinates around ``center`` to a cartesian point.

    Examples:
        >>> radial_to_cartesian(2.0, 0.0)
        Point(x=2.0, y=0.0)
    """
    return direction_vector(angle_radians) * radius + center


def calculate_center(vertices: list[Point]) -> Point:
    """Centroid of a vertex list (plain average of the points)."""
    count = len(vertices)
    return Point(
        sum(v.x for v in vertices) / count,
        sum(v.y for v in vertices) / count,
    )


def union_bounds(a: Bounds, b: Bounds) -> Bounds:
    """Smallest box containing both boxes.

    Args:
        a: Tuple of (min_x, min_y, max_x, max_y)
        b: Tuple of (min_x, min_y, max_x, max_y)

    Returns:
        Union box as (min_x, min_y, max_x, max_y)
    """
    return (min(a[0], b[0]), min(a[1], b[1]), max(a[2], b[2]), max(a[3], b[3]))


def positive_modulo(num: float, mod: float) -> float:
    """Modulo that always lands in [0, mod).

    Raises:
        ValueError: If mod is not positive
    """
    if mod <= 0:
        raise ValueError(f"Modulus must be positive, got {mod}")
    m = num % mod
    # Tiny negative inputs round up to exactly mod
    return 0.0 if m >= mod else m


def progress_distance(a: float, b: float) -> float:
    """Shortest distance between two progress values on the unit circle.

    Examples:
        >>> round(progress_distance(0.9, 0.1), 6)
        0.2
    """
    diff = abs(a - b)
    return min(diff, 1 - diff)


def is_progress_in_range(progress: float, progress_from: float, progress_to: float) -> bool:
    """Check whether progress lies in [from, to], wrapping around 1 if needed."""
    if progress_to >= progress_from:
        return progress_from <= progress <= progress_to
    return progress >= progress_from or progress <= progress_to


def angle_between(d1: Point, d2: Point) -> tuple[float, float]:
    """Cosine and sine of the angle between two unit vectors."""
    cos_angle = d1.dot(d2)
    sin_angle = math.sqrt(max(0.0, 1 - cos_angle * cos_angle))
    return cos_angle, sin_angle
