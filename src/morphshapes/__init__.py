"""morphshapes - Rounded polygon shapes and smooth morphing between them.

morphshapes builds closed outlines from polygon vertices with per-corner
rounding and smoothing, and morphs between any two such outlines by matching
their corners and interpolating cubic Bezier curves.

Example:
    $ morphshapes morph triangle star:5 --frames 8

This will create triangle-star-5-morph.svg with eight frames of the morph.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
