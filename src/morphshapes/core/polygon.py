"""Rounded polygon construction.

A RoundedPolygon is an ordered, cyclic list of features (corner, edge,
corner, edge, ...) plus the flattened list of cubics that renderers consume.
Polygons are immutable; transforms produce new instances.
"""

import logging
import math
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from fontTools.misc.transform import Transform

from morphshapes.core._corner import RoundedCorner
from morphshapes.core.geometry import (
    DISTANCE_EPSILON,
    calculate_center,
    convex,
    radial_to_cartesian,
)
from morphshapes.domain import (
    ORIGIN,
    UNROUNDED,
    Bounds,
    CornerRounding,
    CubicBezier,
    Feature,
    Point,
)
from morphshapes.exceptions import ContinuityError, PolygonError

if TYPE_CHECKING:
    from fontTools.pens.basePen import AbstractPen

logger = logging.getLogger(__name__)

PointTransform = Callable[[Point], Point] | Transform


class RoundedPolygon:
    """A closed outline built from rounded vertices.

    Use the ``from_*`` factories rather than the constructor when starting
    from vertices.

    Example:
        hexagon = RoundedPolygon.from_vertex_count(6, rounding=CornerRounding(0.2))
        for cubic in hexagon.cubics:
            ...
    """

    def __init__(self, features: Sequence[Feature], center: Point) -> None:
        """Build a polygon from features and validate the resulting outline.

        Args:
            features: Cyclic feature list; consecutive features must connect
            center: Shape center

        Raises:
            ContinuityError: If the flattened cubics do not form a closed loop
        """
        self._center = center
        self._features = tuple(features)
        self._cubics = tuple(self._build_cubics())

        prev = self._cubics[-1]
        for index, cubic in enumerate(self._cubics):
            dx = abs(cubic.anchor0.x - prev.anchor1.x)
            dy = abs(cubic.anchor0.y - prev.anchor1.y)
            if dx > DISTANCE_EPSILON or dy > DISTANCE_EPSILON:
                raise ContinuityError(index, max(dx, dy))
            prev = cubic

    @property
    def center(self) -> Point:
        return self._center

    @property
    def features(self) -> tuple[Feature, ...]:
        return self._features

    @property
    def cubics(self) -> tuple[CubicBezier, ...]:
        """Closed, contiguous cubic list; the seam sits inside the first corner."""
        return self._cubics

    def _build_cubics(self) -> list[CubicBezier]:
        # The first/last mechanism ensures the final anchor exactly matches the
        # first anchor; slightly-off seams show up as rendering artifacts.
        cubics: list[CubicBezier] = []
        first_cubic: CubicBezier | None = None
        last_cubic: CubicBezier | None = None

        split_start: list[CubicBezier] | None = None
        split_end: list[CubicBezier] | None = None

        if self._features and len(self._features[0].cubics) == 3:
            corner = self._features[0].cubics
            start, end = corner[1].split(0.5)
            split_start = [corner[0], start]
            split_end = [end, corner[2]]

        runs: list[Sequence[CubicBezier]] = [f.cubics for f in self._features]
        if split_end is not None and split_start is not None:
            runs[0] = split_end
            runs.append(split_start)

        for run in runs:
            for cubic in run:
                if not cubic.is_zero_length:
                    if last_cubic is not None:
                        cubics.append(last_cubic)
                    last_cubic = cubic
                    if first_cubic is None:
                        first_cubic = cubic
                elif last_cubic is not None:
                    # Dropping several near-zero curves in a row can add up to a
                    # visible gap, so the kept curve absorbs the skipped endpoint.
                    last_cubic = last_cubic.with_anchor1(cubic.anchor1)

        if last_cubic is not None and first_cubic is not None:
            cubics.append(last_cubic.with_anchor1(first_cubic.anchor0))
        else:
            # Empty / 0-sized polygon
            cubics.append(CubicBezier.empty(self._center.x, self._center.y))

        return cubics

    @classmethod
    def from_vertex_count(
        cls,
        num_vertices: int,
        radius: float = 1.0,
        center: Point = ORIGIN,
        rounding: CornerRounding = UNROUNDED,
        per_vertex_rounding: Sequence[CornerRounding] | None = None,
    ) -> "RoundedPolygon":
        """Regular polygon with vertices on a circle.

        The first vertex sits at angle 0 (on the positive x axis) and the rest
        follow at equal angles.

        Args:
            num_vertices: Number of vertices (>= 3)
            radius: Circumscribed circle radius
            center: Circle center
            rounding: Rounding applied to every vertex
            per_vertex_rounding: Optional rounding per vertex, overriding rounding

        Returns:
            New polygon

        Raises:
            PolygonError: If num_vertices < 3 or the rounding list size mismatches
        """
        if num_vertices < 3:
            raise PolygonError("Polygons must have at least 3 vertices.")

        vertices = [
            radial_to_cartesian(radius, math.pi / num_vertices * 2 * i, center)
            for i in range(num_vertices)
        ]
        return cls.from_vertices(vertices, rounding, per_vertex_rounding, center)

    @classmethod
    def from_vertices(
        cls,
        vertices: Sequence[Point],
        rounding: CornerRounding = UNROUNDED,
        per_vertex_rounding: Sequence[CornerRounding] | None = None,
        center: Point | None = None,
    ) -> "RoundedPolygon":
        """Polygon from explicit vertices.

        Args:
            vertices: Vertex positions in outline order (>= 3)
            rounding: Rounding applied to every vertex
            per_vertex_rounding: Optional rounding per vertex, overriding rounding
            center: Optional center; defaults to the vertex centroid

        Returns:
            New polygon

        Raises:
            PolygonError: If fewer than 3 vertices or the rounding list size mismatches
        """
        features = _features_from_vertices(list(vertices), rounding, per_vertex_rounding)
        if center is None:
            center = calculate_center(list(vertices))
        return cls(features, center)

    @classmethod
    def from_features(
        cls, features: Sequence[Feature], center: Point | None = None
    ) -> "RoundedPolygon":
        """Polygon from an existing feature list.

        Args:
            features: At least 2 features forming a closed loop
            center: Optional center; defaults to the centroid of all cubic start anchors

        Raises:
            PolygonError: If fewer than 2 features are given
        """
        if len(features) < 2:
            raise PolygonError("Polygons must have at least 2 features")

        if center is None:
            center = calculate_center([c.anchor0 for f in features for c in f.cubics])
        return cls(features, center)

    def copy(self) -> "RoundedPolygon":
        return RoundedPolygon(self._features, self._center)

    def transformed(self, transform: PointTransform) -> "RoundedPolygon":
        """Apply a point function or affine matrix to every point and the center.

        Args:
            transform: Callable mapping Point to Point, or a fontTools Transform

        Returns:
            New transformed polygon
        """
        f = as_point_function(transform)
        return RoundedPolygon([feature.transformed(f) for feature in self._features], f(self._center))

    def normalized(self) -> "RoundedPolygon":
        """Scale and translate so the shape fits the unit square.

        The longer side of the bounding box becomes 1 and the shorter side is
        centered within the square.
        """
        min_x, min_y, max_x, max_y = self.calculate_bounds()
        width = max_x - min_x
        height = max_y - min_y
        side = max(width, height)
        offset_x = (side - width) / 2 - min_x
        offset_y = (side - height) / 2 - min_y
        return self.transformed(lambda p: Point((p.x + offset_x) / side, (p.y + offset_y) / side))

    def calculate_bounds(self, approximate: bool = True) -> Bounds:
        """Union of per-cubic bounds.

        Args:
            approximate: Use control-point hulls rather than exact extrema

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for cubic in self._cubics:
            b = cubic.calculate_bounds(approximate)
            min_x = min(min_x, b[0])
            min_y = min(min_y, b[1])
            max_x = max(max_x, b[2])
            max_y = max(max_y, b[3])
        return (min_x, min_y, max_x, max_y)

    def calculate_max_bounds(self) -> Bounds:
        """Square around the center that contains the shape under any rotation.

        Uses each cubic's start anchor and midpoint, which is cheaper and looser
        than exact bounds; intended for worst-case layout sizing.
        """
        max_dist_squared = 0.0
        for cubic in self._cubics:
            anchor_distance = (cubic.anchor0 - self._center).distance_squared()
            middle_distance = (cubic.point_on_curve(0.5) - self._center).distance_squared()
            max_dist_squared = max(max_dist_squared, anchor_distance, middle_distance)

        distance = math.sqrt(max_dist_squared)
        return (
            self._center.x - distance,
            self._center.y - distance,
            self._center.x + distance,
            self._center.y + distance,
        )

    def draw(self, pen: "AbstractPen") -> None:
        """Draw the outline as one closed contour into a fontTools pen."""
        from morphshapes.io.pens import draw_cubics

        draw_cubics(self._cubics, pen)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RoundedPolygon):
            return NotImplemented
        return self._features == other._features

    def __hash__(self) -> int:
        return hash(self._features)

    def __repr__(self) -> str:
        return (
            f"RoundedPolygon(features={list(self._features)}, "
            f"cubics={len(self._cubics)}, center=({self._center.x}, {self._center.y}))"
        )


def as_point_function(transform: PointTransform) -> Callable[[Point], Point]:
    """Adapt a fontTools Transform (or any callable) into a Point function."""
    if isinstance(transform, Transform):
        matrix = transform

        def apply(p: Point) -> Point:
            x, y = matrix.transformPoint((p.x, p.y))
            return Point(x, y)

        return apply
    return transform


def _features_from_vertices(
    vertices: list[Point],
    rounding: CornerRounding,
    per_vertex_rounding: Sequence[CornerRounding] | None,
) -> list[Feature]:
    """Turn vertices and roundings into alternating corner/edge features."""
    if len(vertices) < 3:
        raise PolygonError("Polygons must have at least 3 vertices")

    n = len(vertices)
    if per_vertex_rounding is not None and len(per_vertex_rounding) != n:
        raise PolygonError(
            "per_vertex_rounding list should be either None or the same size "
            f"as the number of vertices ({len(per_vertex_rounding)} != {n})"
        )

    rounded_corners = [
        RoundedCorner(
            vertices[(i + n - 1) % n],
            vertices[i],
            vertices[(i + 1) % n],
            rounding if per_vertex_rounding is None else per_vertex_rounding[i],
        )
        for i in range(n)
    ]

    # Per edge (vertex i to i+1): ratios scaling the round cut and the
    # smoothing part of the cut so the two corners fit on the edge.
    cut_adjusts: list[tuple[float, float]] = []
    for i in range(n):
        current = rounded_corners[i]
        following = rounded_corners[(i + 1) % n]
        expected_round_cut = current.expected_round_cut + following.expected_round_cut
        expected_cut = current.expected_cut + following.expected_cut
        side_size = (vertices[i] - vertices[(i + 1) % n]).distance()

        if expected_round_cut > side_size:
            cut_adjusts.append((side_size / expected_round_cut, 0.0))
        elif expected_cut > side_size:
            cut_adjusts.append(
                (1.0, (side_size - expected_round_cut) / (expected_cut - expected_round_cut))
            )
        else:
            cut_adjusts.append((1.0, 1.0))

    corners: list[list[CubicBezier]] = []
    for i, corner in enumerate(rounded_corners):
        allowed_cuts = []
        for delta in (0, 1):
            round_cut_ratio, cut_ratio = cut_adjusts[(i + n - 1 + delta) % n]
            allowed_cuts.append(
                corner.expected_round_cut * round_cut_ratio
                + (corner.expected_cut - corner.expected_round_cut) * cut_ratio
            )
        corners.append(corner.get_cubics(allowed_cuts[0], allowed_cuts[1]))

    features: list[Feature] = []
    for i in range(n):
        is_convex = convex(vertices[(i + n - 1) % n], vertices[i], vertices[(i + 1) % n])
        features.append(Feature.corner(corners[i], is_convex))
        features.append(
            Feature.edge(
                [CubicBezier.straight_line(corners[i][-1].anchor1, corners[(i + 1) % n][0].anchor0)]
            )
        )

    logger.debug("Built %d features from %d vertices", len(features), n)
    return features
