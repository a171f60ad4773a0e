"""Morphing between two rounded polygons.

A Morph pairs up the cubics of two outlines so that interpolating each pair
at the same progress yields a continuous closed contour. The matching is
computed once; every progress value after that is a cheap linear blend.
"""

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from morphshapes.core.feature_mapping import feature_mapper
from morphshapes.core.geometry import ANGLE_EPSILON, positive_modulo, union_bounds
from morphshapes.core.measure import LengthMeasurer, MeasuredCubic, MeasuredPolygon, Measurer
from morphshapes.core.polygon import RoundedPolygon
from morphshapes.domain import Bounds, CubicBezier
from morphshapes.exceptions import MatchingError, ProgressError

if TYPE_CHECKING:
    from fontTools.pens.basePen import AbstractPen

logger = logging.getLogger(__name__)

CubicPair = tuple[CubicBezier, CubicBezier]


class Morph:
    """Interpolates between a start and an end polygon.

    Example:
        morph = Morph(triangle, square)
        halfway = morph.as_cubics(0.5)
    """

    def __init__(
        self,
        start: RoundedPolygon,
        end: RoundedPolygon,
        measurer: Measurer | None = None,
    ) -> None:
        """Match the two outlines.

        Args:
            start: Shape at progress 0
            end: Shape at progress 1
            measurer: Outline measuring strategy (defaults to LengthMeasurer)

        Raises:
            MatchingError: If the outlines cannot be fully paired
        """
        self._start = start
        self._end = end
        self._match = tuple(match(start, end, measurer or LengthMeasurer()))

    @property
    def start(self) -> RoundedPolygon:
        return self._start

    @property
    def end(self) -> RoundedPolygon:
        return self._end

    @property
    def match_pairs(self) -> tuple[CubicPair, ...]:
        """Aligned (start, end) cubic pairs."""
        return self._match

    def calculate_bounds(self, approximate: bool = True) -> Bounds:
        """Bounds containing both shapes."""
        return union_bounds(
            self._start.calculate_bounds(approximate),
            self._end.calculate_bounds(approximate),
        )

    def calculate_max_bounds(self) -> Bounds:
        """Rotation-safe bounds containing both shapes."""
        return union_bounds(self._start.calculate_max_bounds(), self._end.calculate_max_bounds())

    def as_cubics(self, progress: float) -> list[CubicBezier]:
        """Interpolated outline at the given progress.

        The last cubic's end anchor is set to the first cubic's start anchor so
        the contour closes exactly.

        Args:
            progress: 0 gives the start shape, 1 the end shape

        Returns:
            Closed list of cubics
        """
        _check_progress(progress)
        cubics = list(self.iter_cubics(progress))
        if cubics:
            cubics[-1] = cubics[-1].with_anchor1(cubics[0].anchor0)
        return cubics

    def iter_cubics(self, progress: float) -> Iterator[CubicBezier]:
        """Lazily yield interpolated cubics without the seam adjustment."""
        _check_progress(progress)
        for start, end in self._match:
            yield CubicBezier.interpolate(start, end, progress)

    def for_each_cubic(self, progress: float, callback: Callable[[CubicBezier], None]) -> None:
        """Call callback with each interpolated cubic in order."""
        for cubic in self.iter_cubics(progress):
            callback(cubic)

    def draw(self, pen: "AbstractPen", progress: float) -> None:
        """Draw the outline at progress as one closed contour into a fontTools pen."""
        from morphshapes.io.pens import draw_cubics

        draw_cubics(self.as_cubics(progress), pen)


def _check_progress(progress: float) -> None:
    if not 0.0 <= progress <= 1.0:
        raise ProgressError("Morph progress", progress)


def match(p1: RoundedPolygon, p2: RoundedPolygon, measurer: Measurer) -> list[CubicPair]:
    """Pair up the cubics of two polygons.

    Both outlines are measured, their corners matched, and the second outline
    rotated so that its origin corresponds to the first one's. The two cubic
    lists are then walked in lockstep, cutting whichever cubic extends further
    at the point where the other ends.

    Args:
        p1: Start polygon
        p2: End polygon
        measurer: Outline measuring strategy

    Returns:
        Aligned list of (start, end) cubic pairs

    Raises:
        MatchingError: If one outline runs out of cubics before the other
    """
    measured1 = MeasuredPolygon.measure_polygon(measurer, p1)
    measured2 = MeasuredPolygon.measure_polygon(measurer, p2)

    mapper = feature_mapper(measured1.features, measured2.features)

    cut_point = mapper.map(0.0)
    logger.debug("Aligning second outline at progress %.6f", cut_point)

    bs1 = measured1
    bs2 = measured2.cut_and_shift(cut_point)

    ret: list[CubicPair] = []

    i1 = 0
    i2 = 0
    b1 = _get_or_none(bs1, i1)
    i1 += 1
    b2 = _get_or_none(bs2, i2)
    i2 += 1

    while b1 is not None and b2 is not None:
        # End of each current cubic, both expressed in the first outline's progress
        b1a = 1.0 if i1 == len(bs1) else b1.end_outline_progress
        b2a = (
            1.0
            if i2 == len(bs2)
            else mapper.map_back(positive_modulo(b2.end_outline_progress + cut_point, 1.0))
        )
        minb = min(b1a, b2a)

        if b1a > minb + ANGLE_EPSILON:
            seg1, new_b1 = b1.cut_at_progress(minb)
        else:
            seg1, new_b1 = b1, _get_or_none(bs1, i1)
            i1 += 1

        if b2a > minb + ANGLE_EPSILON:
            seg2, new_b2 = b2.cut_at_progress(positive_modulo(mapper.map(minb) - cut_point, 1.0))
        else:
            seg2, new_b2 = b2, _get_or_none(bs2, i2)
            i2 += 1

        ret.append((seg1.cubic, seg2.cubic))
        b1 = new_b1
        b2 = new_b2

    if b1 is not None or b2 is not None:
        raise MatchingError("Expected both polygons' cubics to be fully matched")

    logger.debug("Matched %d and %d cubics into %d pairs", len(bs1), len(bs2), len(ret))
    return ret


def _get_or_none(polygon: MeasuredPolygon, index: int) -> MeasuredCubic | None:
    return polygon[index] if 0 <= index < len(polygon) else None
