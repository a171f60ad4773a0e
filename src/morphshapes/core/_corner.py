"""Internal corner rounding construction.

This is an internal module used by RoundedPolygon to replace a polygon vertex
with a flank / circular arc / flank run of cubics. Not intended for public use.
"""

import math

from morphshapes.core.geometry import DISTANCE_EPSILON, angle_between
from morphshapes.domain import ORIGIN, CornerRounding, CubicBezier, Point
from morphshapes.domain.point import interpolate


class RoundedCorner:
    """Rounding of a single vertex given its two neighbours.

    The corner at ``p1`` consumes a length of each adjacent edge (its "cut").
    Neighbouring corners compete for the same edge, so the polygon builder
    computes the allowed cut on each side before asking for the cubics.

    Attributes:
        expected_round_cut: Edge length consumed by the circular part alone
        expected_cut: Edge length consumed including smoothing
        center: Arc center, set by get_cubics
    """

    def __init__(self, p0: Point, p1: Point, p2: Point, rounding: CornerRounding) -> None:
        self._p0 = p0
        self._p1 = p1
        self._p2 = p2

        v01 = p0 - p1
        v21 = p2 - p1
        d01 = v01.distance()
        d21 = v21.distance()

        if d01 > 0 and d21 > 0:
            self._d1 = v01 / d01
            self._d2 = v21 / d21
            self._corner_radius = rounding.radius
            self._smoothing = rounding.smoothing
            self._cos_angle, self._sin_angle = angle_between(self._d1, self._d2)
            self.expected_round_cut = (
                self._corner_radius * (self._cos_angle + 1) / self._sin_angle
                if self._sin_angle > 1e-3
                else 0.0
            )
        else:
            self._d1 = ORIGIN
            self._d2 = ORIGIN
            self._corner_radius = 0.0
            self._smoothing = 0.0
            self._cos_angle = 0.0
            self._sin_angle = 0.0
            self.expected_round_cut = 0.0

        self.center = ORIGIN

    @property
    def expected_cut(self) -> float:
        return (1 + self._smoothing) * self.expected_round_cut

    def get_cubics(self, allowed_cut0: float, allowed_cut1: float) -> list[CubicBezier]:
        """Build the cubics replacing this vertex.

        Args:
            allowed_cut0: Edge length available on the side towards p0
            allowed_cut1: Edge length available on the side towards p2

        Returns:
            Three cubics (flank, arc, flank), or a single zero-length cubic at
            the vertex when the corner cannot be rounded
        """
        allowed_cut = min(allowed_cut0, allowed_cut1)
        if (
            self.expected_round_cut < DISTANCE_EPSILON
            or allowed_cut < DISTANCE_EPSILON
            or self._corner_radius < DISTANCE_EPSILON
        ):
            self.center = self._p1
            return [CubicBezier.straight_line(self._p1, self._p1)]

        actual_round_cut = min(allowed_cut, self.expected_round_cut)
        actual_smoothing0 = self._actual_smoothing(allowed_cut0)
        actual_smoothing1 = self._actual_smoothing(allowed_cut1)

        actual_r = self._corner_radius * actual_round_cut / self.expected_round_cut
        center_distance = math.hypot(actual_r, actual_round_cut)

        self.center = self._p1 + ((self._d1 + self._d2) / 2).direction() * center_distance

        circle_intersection0 = self._p1 + self._d1 * actual_round_cut
        circle_intersection2 = self._p1 + self._d2 * actual_round_cut

        flanking0 = _flanking_curve(
            actual_round_cut,
            actual_smoothing0,
            self._p1,
            self._p0,
            circle_intersection0,
            circle_intersection2,
            self.center,
            actual_r,
        )
        flanking2 = _flanking_curve(
            actual_round_cut,
            actual_smoothing1,
            self._p1,
            self._p2,
            circle_intersection2,
            circle_intersection0,
            self.center,
            actual_r,
        ).reversed()

        return [
            flanking0,
            CubicBezier.circular_arc(self.center, flanking0.anchor1, flanking2.anchor0),
            flanking2,
        ]

    def _actual_smoothing(self, allowed_cut: float) -> float:
        """Scale smoothing down when the side cannot fit the full cut."""
        if allowed_cut > self.expected_cut:
            return self._smoothing
        if allowed_cut > self.expected_round_cut:
            return (
                self._smoothing
                * (allowed_cut - self.expected_round_cut)
                / (self.expected_cut - self.expected_round_cut)
            )
        return 0.0


def _flanking_curve(
    actual_round_cut: float,
    actual_smoothing: float,
    corner: Point,
    side_start: Point,
    circle_segment_intersection: Point,
    other_circle_segment_intersection: Point,
    circle_center: Point,
    actual_r: float,
) -> CubicBezier:
    """Curve easing from the straight side into the corner arc.

    Starts on the side at the full (smoothed) cut distance and ends on the
    circle, with its inner control placed where the side line meets the
    circle tangent at the curve end.
    """
    side_direction = (side_start - corner).direction()
    curve_start = corner + side_direction * actual_round_cut * (1 + actual_smoothing)

    p = interpolate(
        circle_segment_intersection,
        (circle_segment_intersection + other_circle_segment_intersection) / 2,
        actual_smoothing,
    )
    curve_end = circle_center + (p - circle_center).direction() * actual_r

    circle_tangent = (curve_end - circle_center).rotate90()
    anchor_end = _line_intersection(side_start, side_direction, curve_end, circle_tangent)
    if anchor_end is None:
        anchor_end = circle_segment_intersection

    anchor_start = (curve_start + anchor_end * 2) / 3
    return CubicBezier(curve_start, anchor_start, anchor_end, curve_end)


def _line_intersection(p0: Point, d0: Point, p1: Point, d1: Point) -> Point | None:
    """Intersect two lines given as point + direction.

    Returns:
        Intersection point, or None when the lines are (nearly) parallel
    """
    rotated_d1 = d1.rotate90()
    den = d0.dot(rotated_d1)
    if abs(den) < DISTANCE_EPSILON:
        return None

    num = (p1 - p0).dot(rotated_d1)
    if abs(den) < DISTANCE_EPSILON * abs(num):
        return None

    k = num / den
    return p0 + d0 * k
