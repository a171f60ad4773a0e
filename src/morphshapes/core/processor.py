"""Shape building and rendering orchestration.

This module coordinates the workflow behind the command line: resolving a
shape name to a polygon, matching two shapes into a morph, and writing the
resulting outlines as SVG.

Key components:
- ShapeProcessor: Main orchestrator class for shape and morph rendering
"""

import re
import time
import traceback
from pathlib import Path

import structlog

from morphshapes.config import ShapesSettings
from morphshapes.core import shapes
from morphshapes.core.measure import LengthMeasurer
from morphshapes.core.morph import Morph
from morphshapes.core.polygon import RoundedPolygon
from morphshapes.domain import CubicBezier
from morphshapes.exceptions import ShapesError, ShapeSpecError
from morphshapes.io.converter import spec_to_polygon
from morphshapes.io.reader import ShapeReader
from morphshapes.io.writer import SvgWriter
from morphshapes.utils import RenderLogger, RenderStats, configure_logging

_PRESET_PATTERN = re.compile(r"^(?P<kind>[a-z-]+)(?::(?P<count>\d+))?$")


class ShapeProcessor:
    """Builds shapes and renders them or their morphs to SVG.

    Shape names are either presets or paths to JSON shape files:
    circle, square, triangle, polygon[:N], star[:N], pill, pill-star[:N].
    Without a count, presets use the configured default vertex count.

    Example:
        processor = ShapeProcessor(ShapesSettings())
        start = processor.build_shape("triangle")
        end = processor.build_shape("star:5")
        stats = processor.render_morph(start, end, Path("morph.svg"), frames=8)
    """

    PRESETS = ("circle", "square", "triangle", "polygon", "star", "pill", "pill-star")

    def __init__(
        self,
        config: ShapesSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Application settings
            logger: Preconfigured logger (logging is configured from settings if None)
        """
        self.config = config
        if logger is None:
            logger = configure_logging(
                log_file=config.logging.log_file,
                console_level=config.logging.log_level,
                file_level=config.logging.file_log_level,
                quiet=False,
            )
        self.logger = logger
        self.render_logger = RenderLogger(self.logger)
        self.measurer = LengthMeasurer(config.measure.segments)
        self.writer = SvgWriter(config.render)

    def build_shape(self, name: str) -> RoundedPolygon:
        """Resolve a preset name or shape file path to a polygon.

        Args:
            name: Preset name (optionally with ":N") or path to a JSON file

        Returns:
            The resulting polygon

        Raises:
            FileNotFoundError: If name looks like a file that does not exist
            ShapeSpecError: If the name is neither a preset nor a valid shape file
            PolygonError: If the preset arguments are invalid
        """
        match = _PRESET_PATTERN.match(name.lower())
        if match is not None and match.group("kind") in self.PRESETS:
            count = match.group("count")
            polygon = self._build_preset(
                match.group("kind"), int(count) if count else self.config.shape.vertices
            )
        else:
            path = Path(name)
            if not path.exists() and path.suffix.lower() != ".json":
                raise ShapeSpecError(
                    name, f"unknown preset (expected one of: {', '.join(self.PRESETS)})"
                )
            polygon = spec_to_polygon(ShapeReader(path).load())

        self.render_logger.log_shape_built(name, len(polygon.features), len(polygon.cubics))
        return polygon

    def _build_preset(self, kind: str, count: int) -> RoundedPolygon:
        shape = self.config.shape
        rounding = shape.get_rounding()
        radius = shape.radius

        if kind == "circle":
            return shapes.circle(radius=radius)
        if kind == "square":
            return shapes.rectangle(2 * radius, 2 * radius, rounding)
        if kind == "triangle":
            return RoundedPolygon.from_vertex_count(3, radius, rounding=rounding)
        if kind == "polygon":
            return RoundedPolygon.from_vertex_count(count, radius, rounding=rounding)
        if kind == "star":
            return shapes.star(count, radius, radius / 2, rounding)
        if kind == "pill":
            return shapes.pill(2 * radius, radius, shape.smoothing)
        return shapes.pill_star(2 * radius, radius, count, rounding=rounding)

    def render_shape(self, polygon: RoundedPolygon, output_path: Path) -> RenderStats:
        """Write a single polygon as an SVG file.

        Args:
            polygon: Shape to render
            output_path: Destination SVG path

        Returns:
            RenderStats with counts and timing
        """
        stats = self.render_logger.stats
        stats.start_time = time.time()

        document = self.writer.render_polygon(polygon)
        self.render_logger.log_frame(1.0, len(polygon.cubics))
        self.writer.save(document, output_path)
        self.render_logger.log_saved(output_path)

        stats.end_time = time.time()
        return stats

    def render_morph(
        self,
        start: RoundedPolygon,
        end: RoundedPolygon,
        output_path: Path,
        frames: int | None = None,
        progress: float | None = None,
        names: tuple[str, str] = ("start", "end"),
    ) -> RenderStats:
        """Morph between two shapes and write the frames as one SVG sheet.

        Args:
            start: Shape at progress 0
            end: Shape at progress 1
            output_path: Destination SVG path
            frames: Number of evenly spaced frames (defaults to the render config)
            progress: Render a single frame at this progress instead
            names: Display names of the two shapes for logging

        Returns:
            RenderStats with counts and timing

        Raises:
            MatchingError: If the shapes cannot be matched
            ProgressError: If progress is outside [0, 1]
        """
        stats = self.render_logger.stats
        stats.start_time = time.time()

        try:
            morph = Morph(start, end, self.measurer)
        except ShapesError as e:
            self.render_logger.log_error(f"{names[0]} -> {names[1]}", e, traceback.format_exc())
            raise

        self.render_logger.log_morph_matched(
            names[0],
            names[1],
            len(morph.match_pairs),
            (time.time() - stats.start_time) * 1000,
        )

        if progress is not None:
            steps = [progress]
        else:
            steps = frame_progress(frames or self.config.render.frames)

        outlines: list[list[CubicBezier]] = []
        for value in steps:
            cubics = morph.as_cubics(value)
            outlines.append(cubics)
            self.render_logger.log_frame(value, len(cubics))

        document = self.writer.render_frames(outlines, morph.calculate_bounds())
        self.writer.save(document, output_path)
        self.render_logger.log_saved(output_path)

        stats.end_time = time.time()
        self.logger.info(
            "Morph rendered",
            frames=stats.frames_rendered,
            cubics=stats.cubics_emitted,
            duration_seconds=round(stats.duration_seconds, 3),
        )
        return stats


def frame_progress(frames: int) -> list[float]:
    """Evenly spaced progress values from 0 to 1 inclusive.

    Args:
        frames: Number of frames (>= 1); a single frame is the start shape

    Returns:
        List of progress values
    """
    if frames < 1:
        raise ValueError(f"frames must be at least 1, got {frames}")
    if frames == 1:
        return [0.0]
    return [i / (frames - 1) for i in range(frames)]
