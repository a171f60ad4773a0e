"""Converters between shape files, domain models and plain data.

This module turns validated ShapeSpec models into RoundedPolygons and
flattens cubics into JSON-ready structures.
"""

from collections.abc import Iterable
from typing import Any

from morphshapes.core.polygon import RoundedPolygon
from morphshapes.domain import ORIGIN, CubicBezier, Point
from morphshapes.exceptions import ShapeSpecError
from morphshapes.io.reader import ShapeSpec


def spec_to_polygon(spec: ShapeSpec) -> RoundedPolygon:
    """Build the polygon a shape specification describes.

    Args:
        spec: Validated shape specification

    Returns:
        New polygon, normalized into the unit square if the spec asks for it

    Raises:
        PolygonError: If the vertices cannot form a polygon
        ShapeSpecError: If the spec describes no outline
    """
    rounding = spec.rounding.to_rounding()
    per_vertex = (
        [r.to_rounding() for r in spec.per_vertex_rounding]
        if spec.per_vertex_rounding is not None
        else None
    )
    center = Point(*spec.center) if spec.center is not None else None

    if spec.vertices is not None:
        polygon = RoundedPolygon.from_vertices(
            [Point(x, y) for x, y in spec.vertices], rounding, per_vertex, center
        )
    elif spec.vertex_count is not None:
        polygon = RoundedPolygon.from_vertex_count(
            spec.vertex_count, spec.radius, center or ORIGIN, rounding, per_vertex
        )
    else:
        raise ShapeSpecError(spec.name or "<unnamed>", "no vertices or vertex_count given")

    return polygon.normalized() if spec.normalize else polygon


def cubic_to_dict(cubic: CubicBezier, precision: int | None = None) -> dict[str, Any]:
    """Convert a cubic to a dict of [x, y] pairs.

    Args:
        cubic: Curve to convert
        precision: Optional number of decimals to round to

    Returns:
        Dict with anchor0, control0, control1 and anchor1 entries
    """

    def coords(p: Point) -> list[float]:
        if precision is None:
            return [p.x, p.y]
        return [round(p.x, precision), round(p.y, precision)]

    return {
        "anchor0": coords(cubic.anchor0),
        "control0": coords(cubic.control0),
        "control1": coords(cubic.control1),
        "anchor1": coords(cubic.anchor1),
    }


def cubics_to_list(
    cubics: Iterable[CubicBezier], precision: int | None = None
) -> list[dict[str, Any]]:
    """Convert a cubic sequence with cubic_to_dict."""
    return [cubic_to_dict(c, precision) for c in cubics]
