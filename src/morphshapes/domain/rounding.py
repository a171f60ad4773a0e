"""Corner rounding parameters."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CornerRounding:
    """How much a polygon vertex is rounded.

    Attributes:
        radius: Radius of the circular arc replacing the vertex (>= 0)
        smoothing: Fraction of the rounding that is eased into the adjacent
            edges rather than circular, roughly in [0, 1]
    """

    radius: float = 0.0
    smoothing: float = 0.0


UNROUNDED = CornerRounding()
