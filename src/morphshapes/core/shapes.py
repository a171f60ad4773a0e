"""Factories for common rounded shapes.

Every factory returns a RoundedPolygon, so the results can be morphed into
one another directly.
"""

import math
from collections.abc import Sequence

from morphshapes.core.geometry import DISTANCE_EPSILON, radial_to_cartesian
from morphshapes.core.polygon import RoundedPolygon
from morphshapes.domain import ORIGIN, UNROUNDED, CornerRounding, Point
from morphshapes.exceptions import PolygonError


def circle(num_vertices: int = 8, radius: float = 1.0, center: Point = ORIGIN) -> RoundedPolygon:
    """Circle approximated by a fully rounded regular polygon.

    The polygon radius is enlarged so that the rounded edges touch the
    requested circle radius.

    Args:
        num_vertices: Number of underlying vertices (>= 3)
        radius: Circle radius
        center: Circle center

    Raises:
        PolygonError: If num_vertices < 3
    """
    if num_vertices < 3:
        raise PolygonError("Circle must have at least three vertices")

    theta = math.pi / num_vertices
    polygon_radius = radius / math.cos(theta)
    return RoundedPolygon.from_vertex_count(
        num_vertices, polygon_radius, center, CornerRounding(radius)
    )


def rectangle(
    width: float = 2.0,
    height: float = 2.0,
    rounding: CornerRounding | None = None,
    per_vertex_rounding: Sequence[CornerRounding] | None = None,
    center: Point = ORIGIN,
) -> RoundedPolygon:
    """Axis-aligned rectangle.

    Vertices run bottom-right, bottom-left, top-left, top-right.
    """
    half_width = width / 2
    half_height = height / 2
    vertices = [
        Point(center.x + half_width, center.y + half_height),
        Point(center.x - half_width, center.y + half_height),
        Point(center.x - half_width, center.y - half_height),
        Point(center.x + half_width, center.y - half_height),
    ]
    return RoundedPolygon.from_vertices(
        vertices, rounding or UNROUNDED, per_vertex_rounding, center
    )


def star(
    num_vertices_per_radius: int,
    radius: float = 1.0,
    inner_radius: float = 0.5,
    rounding: CornerRounding | None = None,
    inner_rounding: CornerRounding | None = None,
    per_vertex_rounding: Sequence[CornerRounding] | None = None,
    center: Point = ORIGIN,
) -> RoundedPolygon:
    """Star alternating between outer and inner vertices.

    Args:
        num_vertices_per_radius: Points of the star; the polygon gets twice as many vertices
        radius: Outer radius
        inner_radius: Inner radius, less than radius
        rounding: Rounding for outer vertices (and inner ones unless inner_rounding is set)
        inner_rounding: Rounding for inner vertices
        per_vertex_rounding: Explicit rounding per vertex, overriding both
        center: Star center

    Raises:
        PolygonError: If a radius is not positive or inner_radius >= radius
    """
    if radius <= 0 or inner_radius <= 0:
        raise PolygonError("Star radii must both be greater than 0")
    if inner_radius >= radius:
        raise PolygonError("inner_radius must be less than radius")

    rounding = rounding or UNROUNDED
    per_vertex_rounding = _alternate_rounding(
        num_vertices_per_radius, rounding, inner_rounding, per_vertex_rounding
    )

    vertices: list[Point] = []
    for i in range(num_vertices_per_radius):
        vertices.append(
            radial_to_cartesian(radius, math.pi / num_vertices_per_radius * 2 * i, center)
        )
        vertices.append(
            radial_to_cartesian(inner_radius, math.pi / num_vertices_per_radius * (2 * i + 1), center)
        )

    return RoundedPolygon.from_vertices(vertices, rounding, per_vertex_rounding, center)


def pill(
    width: float = 2.0, height: float = 1.0, smoothing: float = 0.0, center: Point = ORIGIN
) -> RoundedPolygon:
    """Rectangle whose short sides are fully rounded into semicircles.

    Raises:
        PolygonError: If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise PolygonError("Pill shapes must have positive width and height")

    w_half = width / 2
    h_half = height / 2
    vertices = [
        Point(w_half + center.x, h_half + center.y),
        Point(-w_half + center.x, h_half + center.y),
        Point(-w_half + center.x, -h_half + center.y),
        Point(w_half + center.x, -h_half + center.y),
    ]
    return RoundedPolygon.from_vertices(
        vertices, CornerRounding(min(w_half, h_half), smoothing), center=center
    )


def pill_star(
    width: float = 2.0,
    height: float = 1.0,
    num_vertices_per_radius: int = 8,
    inner_radius_ratio: float = 0.5,
    rounding: CornerRounding | None = None,
    inner_rounding: CornerRounding | None = None,
    per_vertex_rounding: Sequence[CornerRounding] | None = None,
    vertex_spacing: float = 0.5,
    start_location: float = 0.0,
    center: Point = ORIGIN,
) -> RoundedPolygon:
    """Star whose vertices follow a pill outline instead of a circle.

    Args:
        width: Pill bounding box width
        height: Pill bounding box height
        num_vertices_per_radius: Number of outer vertices
        inner_radius_ratio: Inner vertex distance as a fraction of the endcap radius, in (0, 1]
        rounding: Rounding for outer vertices
        inner_rounding: Rounding for inner vertices
        per_vertex_rounding: Explicit rounding per vertex
        vertex_spacing: 0 spaces vertices by the inner perimeter, 1 by the outer
        start_location: Where along the perimeter (0..1) the first vertex sits
        center: Shape center

    Raises:
        PolygonError: If the vertex count, size or inner radius ratio is invalid
    """
    if num_vertices_per_radius < 2:
        raise PolygonError("Pill stars need at least 2 vertices per radius")
    if width <= 0 or height <= 0:
        raise PolygonError("Pill shapes must have positive width and height")
    if inner_radius_ratio <= 0 or inner_radius_ratio > 1:
        raise PolygonError("inner_radius_ratio must be between 0 and 1")

    rounding = rounding or UNROUNDED
    per_vertex_rounding = _alternate_rounding(
        num_vertices_per_radius, rounding, inner_rounding, per_vertex_rounding
    )
    vertices = _pill_star_vertices(
        num_vertices_per_radius,
        width,
        height,
        inner_radius_ratio,
        vertex_spacing,
        start_location,
        center,
    )
    return RoundedPolygon.from_vertices(vertices, rounding, per_vertex_rounding, center)


def _alternate_rounding(
    count: int,
    rounding: CornerRounding,
    inner_rounding: CornerRounding | None,
    per_vertex_rounding: Sequence[CornerRounding] | None,
) -> Sequence[CornerRounding] | None:
    if per_vertex_rounding is None and inner_rounding is not None:
        return [r for _ in range(count) for r in (rounding, inner_rounding)]
    return per_vertex_rounding


def _pill_star_vertices(
    num_vertices_per_radius: int,
    width: float,
    height: float,
    inner_radius_ratio: float,
    vertex_spacing: float,
    start_location: float,
    center: Point,
) -> list[Point]:
    """Walk the pill perimeter placing alternating outer and inner vertices.

    The perimeter is split into sections starting at the right middle and
    running clockwise in screen coordinates: half the right straight side,
    bottom-right quarter arc, bottom side, bottom-left arc, left side,
    top-left arc, top side, top-right arc, and the other half of the right
    side.
    """
    endcap_radius = min(width, height) / 2
    v_seg_len = max(0.0, height - width)
    h_seg_len = max(0.0, width - height)
    v_seg_half = v_seg_len / 2
    h_seg_half = h_seg_len / 2

    spacing_radius = inner_radius_ratio + (1.0 - inner_radius_ratio) * vertex_spacing
    circle_perimeter = 2 * math.pi * endcap_radius * spacing_radius
    perimeter = 2 * h_seg_len + 2 * v_seg_len + circle_perimeter

    quarter = circle_perimeter / 4
    sections = [0.0, v_seg_len / 2]
    for length in (quarter, h_seg_len, quarter, v_seg_len, quarter, h_seg_len, quarter, v_seg_len / 2):
        sections.append(sections[-1] + length)
    sections[-1] = perimeter

    rect_br = Point(h_seg_half, v_seg_half)
    rect_bl = Point(-h_seg_half, v_seg_half)
    rect_tl = Point(-h_seg_half, -v_seg_half)
    rect_tr = Point(h_seg_half, -v_seg_half)

    t_per_vertex = perimeter / (2 * num_vertices_per_radius)
    t = start_location * perimeter
    inner = False
    section = 0
    vertices: list[Point] = []

    for _ in range(num_vertices_per_radius * 2):
        bounded_t = t % perimeter
        if bounded_t < sections[section]:
            section = 0
        while section < len(sections) - 2 and bounded_t >= sections[section + 1]:
            section += 1

        sec_start = sections[section]
        sec_size = sections[section + 1] - sec_start
        proportion = 0.0 if sec_size <= DISTANCE_EPSILON else (bounded_t - sec_start) / sec_size
        r = endcap_radius * inner_radius_ratio if inner else endcap_radius
        quarter_turn = math.pi / 2

        if section == 0:
            vertex = Point(r, proportion * v_seg_half)
        elif section == 1:
            vertex = radial_to_cartesian(r, proportion * quarter_turn) + rect_br
        elif section == 2:
            vertex = Point(h_seg_half - proportion * h_seg_len, r)
        elif section == 3:
            vertex = radial_to_cartesian(r, quarter_turn + proportion * quarter_turn) + rect_bl
        elif section == 4:
            vertex = Point(-r, v_seg_half - proportion * v_seg_len)
        elif section == 5:
            vertex = radial_to_cartesian(r, math.pi + proportion * quarter_turn) + rect_tl
        elif section == 6:
            vertex = Point(-h_seg_half + proportion * h_seg_len, -r)
        elif section == 7:
            vertex = radial_to_cartesian(r, 3 * quarter_turn + proportion * quarter_turn) + rect_tr
        else:
            vertex = Point(r, -v_seg_half + proportion * v_seg_half)

        vertices.append(vertex + center)
        t += t_per_vertex
        inner = not inner

    return vertices
