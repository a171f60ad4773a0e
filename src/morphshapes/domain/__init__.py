"""Domain models for morphshapes.

This module contains the value types every outline is built from. All models
are immutable (frozen dataclasses) so shapes and morphs can be shared freely.

Key classes:
- Point: A 2D point / vector
- CubicBezier: A cubic curve with two anchors and two controls
- CornerRounding: Radius and smoothing for a polygon vertex
- Feature: A tagged run of cubics (edge or convex/concave corner)
"""

from morphshapes.domain.cubic import DISTANCE_EPSILON, Bounds, CubicBezier
from morphshapes.domain.feature import Feature, FeatureKind
from morphshapes.domain.point import ORIGIN, Point
from morphshapes.domain.rounding import UNROUNDED, CornerRounding

__all__: list[str] = [
    # Constants
    "DISTANCE_EPSILON",
    "ORIGIN",
    "UNROUNDED",
    # Enums
    "FeatureKind",
    # Core types
    "Bounds",
    "Point",
    "CubicBezier",
    "CornerRounding",
    "Feature",
]
