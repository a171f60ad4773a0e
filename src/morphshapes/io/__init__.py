"""Shape I/O layer for morphshapes.

This module handles reading shape files and writing rendered outlines. It
provides a clean abstraction layer between files, fontTools pens and the
domain models.

Key responsibilities:
- Load and validate JSON shape specifications
- Convert specifications to polygons and cubics to plain data
- Draw outlines into fontTools pens
- Write SVG documents for shapes and morph sheets

Key classes:
- ShapeReader: Load shape specification files
- SvgWriter: Render and save SVG output
"""

from morphshapes.io.converter import cubic_to_dict, cubics_to_list, spec_to_polygon
from morphshapes.io.pens import draw_cubics
from morphshapes.io.reader import RoundingSpec, ShapeReader, ShapeSpec
from morphshapes.io.writer import SvgWriter, number_formatter

__all__ = [
    "RoundingSpec",
    "ShapeReader",
    "ShapeSpec",
    "SvgWriter",
    "cubic_to_dict",
    "cubics_to_list",
    "draw_cubics",
    "number_formatter",
    "spec_to_polygon",
]
