"""Core shape algorithms for morphshapes.

This module contains the core algorithms for:

- Geometry helpers (convexity, circular progress arithmetic)
- Polygon construction (corner rounding, per-side cut allocation, seam placement)
- Outline measuring (arc-length progress, cut-and-shift)
- Feature matching (greedy corner correspondence, progress mapping)
- Morphing (cubic pairing and interpolation)

Everything here is immutable after construction and free of I/O, so shapes
and morphs can be shared between threads. The rendering orchestrator lives
in morphshapes.core.processor and is imported from there directly.

Key functions:
- match: Pair up the cubics of two polygons
- feature_mapper: Build a progress mapper from two shapes' corners
- positive_modulo: Wrap a value into [0, mod)
- circle, rectangle, star, pill, pill_star: Shape factories

Key classes:
- RoundedPolygon: Closed outline built from rounded vertices
- MeasuredPolygon: A polygon's cubics with outline progress
- LengthMeasurer: Chord-sum arc length measurer
- DoubleMapper: Circular piecewise-linear progress mapping
- Morph: Interpolator between two polygons
"""

from morphshapes.core.feature_mapping import feature_mapper
from morphshapes.core.geometry import (
    ANGLE_EPSILON,
    DISTANCE_EPSILON,
    convex,
    positive_modulo,
    progress_distance,
    radial_to_cartesian,
)
from morphshapes.core.mapping import DoubleMapper
from morphshapes.core.measure import (
    LengthMeasurer,
    MeasuredCubic,
    MeasuredPolygon,
    Measurer,
    ProgressableFeature,
)
from morphshapes.core.morph import Morph, match
from morphshapes.core.polygon import RoundedPolygon
from morphshapes.core.shapes import circle, pill, pill_star, rectangle, star

__all__ = [
    # Constants
    "ANGLE_EPSILON",
    "DISTANCE_EPSILON",
    # Mapping
    "DoubleMapper",
    "feature_mapper",
    # Measuring
    "LengthMeasurer",
    "MeasuredCubic",
    "MeasuredPolygon",
    "Measurer",
    "ProgressableFeature",
    # Morphing
    "Morph",
    "match",
    # Polygons and shapes
    "RoundedPolygon",
    "circle",
    "pill",
    "pill_star",
    "rectangle",
    "star",
    # Geometry functions
    "convex",
    "positive_modulo",
    "progress_distance",
    "radial_to_cartesian",
]
