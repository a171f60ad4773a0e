"""SVG writer for shapes and morph sheets.

Path data is produced by drawing cubics through a fontTools TransformPen
into an SVGPathPen, so scaling into the frame and number formatting stay in
one place.
"""

import math
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING
from xml.sax.saxutils import quoteattr

from fontTools.misc.transform import Transform
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen

from morphshapes.config.settings import RenderConfig
from morphshapes.domain import Bounds, CubicBezier
from morphshapes.io.pens import draw_cubics

if TYPE_CHECKING:
    from morphshapes.core.polygon import RoundedPolygon

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def number_formatter(precision: int) -> Callable[[float], str]:
    """Build a compact fixed-precision float formatter.

    Trailing zeros and a dangling decimal point are dropped, and negative
    zero is written as "0".
    """

    def ntos(value: float) -> str:
        text = f"{value:.{precision}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return "0" if text == "-0" else text

    return ntos


class SvgWriter:
    """Renders polygons and morph frames as SVG documents.

    Example:
        writer = SvgWriter(RenderConfig(size=128))
        document = writer.render_polygon(polygon)
        writer.save(document, Path("hexagon.svg"))
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()
        self._ntos = number_formatter(self._config.precision)

    @property
    def config(self) -> RenderConfig:
        return self._config

    def path_data(self, cubics: Sequence[CubicBezier], transform: Transform | None = None) -> str:
        """SVG path data for a closed cubic outline.

        Args:
            cubics: Contiguous closed run of cubics
            transform: Optional affine transform applied to every point

        Returns:
            Path data string ("M... C... Z"), empty when there are no cubics
        """
        svg_pen = SVGPathPen(None, ntos=self._ntos)
        pen = svg_pen if transform is None else TransformPen(svg_pen, transform)
        draw_cubics(cubics, pen)
        return svg_pen.getCommands()

    def fit_transform(self, bounds: Bounds, column: int = 0, row: int = 0) -> Transform:
        """Transform that centers bounds inside one padded frame of the grid.

        Args:
            bounds: Shape bounds as (min_x, min_y, max_x, max_y)
            column: Frame column in the sheet
            row: Frame row in the sheet

        Returns:
            fontTools Transform from shape space to SVG pixels
        """
        size = self._config.size
        min_x, min_y, max_x, max_y = bounds
        side = max(max_x - min_x, max_y - min_y)
        scale = size * (1.0 - 2.0 * self._config.padding) / side if side > 0 else 1.0

        return (
            Transform()
            .translate(column * size + size / 2, row * size + size / 2)
            .scale(scale)
            .translate(-(min_x + max_x) / 2, -(min_y + max_y) / 2)
        )

    def render_polygon(self, polygon: "RoundedPolygon") -> str:
        """Render one polygon in a single frame."""
        return self.render_frames([list(polygon.cubics)], polygon.calculate_bounds(approximate=False))

    def render_frames(
        self, frames: Sequence[Sequence[CubicBezier]], bounds: Bounds | None = None
    ) -> str:
        """Render outlines side by side in a grid, one path per frame.

        Args:
            frames: One closed cubic outline per frame
            bounds: Shared bounds used to fit every frame; defaults to the union
                of the frames' control point bounds

        Returns:
            Complete SVG document
        """
        if bounds is None:
            bounds = _frames_bounds(frames)

        count = max(1, len(frames))
        columns = min(self._config.columns, count)
        rows = math.ceil(count / columns)
        width = columns * self._config.size
        height = rows * self._config.size

        fill = quoteattr(self._config.fill)
        lines = [
            f'<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}">'
        ]
        for index, cubics in enumerate(frames):
            row, column = divmod(index, columns)
            data = self.path_data(cubics, self.fit_transform(bounds, column, row))
            lines.append(f'  <path d="{data}" fill={fill}/>')
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def save(self, document: str, output_path: Path) -> None:
        """Write an SVG document.

        Raises:
            OSError: If the file cannot be written
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document, encoding="utf-8")

    @staticmethod
    def get_output_path(name: str, suffix: str | None = None, directory: Path | None = None) -> Path:
        """Generate an output path from a shape name.

        Converts: "star:5" -> star-5.svg
                  ("triangle", "morph") -> triangle-morph.svg

        Args:
            name: Shape name or file stem
            suffix: Optional suffix appended with a dash
            directory: Output directory (defaults to the current directory)

        Returns:
            Path ending in .svg
        """
        stem = name.replace(":", "-").replace("/", "-")
        if suffix:
            stem = f"{stem}-{suffix}"
        return (directory or Path(".")) / f"{stem}.svg"


def _frames_bounds(frames: Sequence[Sequence[CubicBezier]]) -> Bounds:
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for cubics in frames:
        for cubic in cubics:
            b = cubic.calculate_bounds(approximate=True)
            min_x = min(min_x, b[0])
            min_y = min(min_y, b[1])
            max_x = max(max_x, b[2])
            max_y = max(max_y, b[3])
    if min_x == math.inf:
        return (0.0, 0.0, 0.0, 0.0)
    return (min_x, min_y, max_x, max_y)
