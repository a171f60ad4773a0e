"""Drawing cubic outlines into fontTools pens.

Any object implementing the fontTools pen protocol (moveTo, curveTo,
closePath) can receive a shape: SVGPathPen for path data, RecordingPen for
inspection, or a glyph pen when building font outlines.
"""

from collections.abc import Sequence

from fontTools.pens.basePen import AbstractPen

from morphshapes.domain import CubicBezier


def draw_cubics(cubics: Sequence[CubicBezier], pen: AbstractPen) -> None:
    """Draw a closed run of cubics as a single contour.

    Args:
        cubics: Contiguous cubics; the last one is expected to end where the first starts
        pen: Destination pen
    """
    if not cubics:
        return

    pen.moveTo(cubics[0].anchor0.to_tuple())
    for cubic in cubics:
        pen.curveTo(
            cubic.control0.to_tuple(),
            cubic.control1.to_tuple(),
            cubic.anchor1.to_tuple(),
        )
    pen.closePath()
