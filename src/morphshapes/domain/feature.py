"""Outline features: tagged runs of cubics.

A feature is one semantic part of a polygon outline. Edges carry no
distinguishing geometry and are ignored by feature matching; corners record
whether they turn outward (convex) or inward (concave).
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from morphshapes.domain.cubic import DISTANCE_EPSILON, CubicBezier
from morphshapes.domain.point import Point
from morphshapes.exceptions import FeatureError


class FeatureKind(Enum):
    """Feature classification."""

    EDGE = auto()
    CORNER = auto()


@dataclass(frozen=True, slots=True)
class Feature:
    """A contiguous, non-empty run of cubics tagged as an edge or corner.

    Attributes:
        cubics: Cubics in outline order; each starts where the previous ends
        kind: Edge or corner
        convex: Corner turn direction (always False for edges)
    """

    cubics: tuple[CubicBezier, ...]
    kind: FeatureKind
    convex: bool = False

    def __post_init__(self) -> None:
        if not self.cubics:
            raise FeatureError("Features need at least one cubic.")

        for prev, curr in zip(self.cubics, self.cubics[1:]):
            if (
                abs(curr.anchor0.x - prev.anchor1.x) > DISTANCE_EPSILON
                or abs(curr.anchor0.y - prev.anchor1.y) > DISTANCE_EPSILON
            ):
                raise FeatureError(
                    "Feature must be continuous, with the anchor points of all cubics "
                    "matching the anchor points of the preceding and succeeding cubics"
                )

    @classmethod
    def edge(cls, cubics: Sequence[CubicBezier]) -> "Feature":
        """Build an edge (ignorable) feature."""
        return cls(tuple(cubics), FeatureKind.EDGE)

    @classmethod
    def corner(cls, cubics: Sequence[CubicBezier], convex: bool) -> "Feature":
        """Build a corner feature."""
        return cls(tuple(cubics), FeatureKind.CORNER, convex)

    @classmethod
    def convex_corner(cls, cubics: Sequence[CubicBezier]) -> "Feature":
        return cls.corner(cubics, True)

    @classmethod
    def concave_corner(cls, cubics: Sequence[CubicBezier]) -> "Feature":
        return cls.corner(cubics, False)

    @property
    def is_edge(self) -> bool:
        return self.kind is FeatureKind.EDGE

    @property
    def is_ignorable(self) -> bool:
        """Edges are ignored when matching features between shapes."""
        return self.is_edge

    @property
    def is_corner(self) -> bool:
        return self.kind is FeatureKind.CORNER

    @property
    def is_convex_corner(self) -> bool:
        return self.is_corner and self.convex

    @property
    def is_concave_corner(self) -> bool:
        return self.is_corner and not self.convex

    def transformed(self, f: Callable[[Point], Point]) -> "Feature":
        """Apply a point transform to every cubic, keeping the tag."""
        return Feature(tuple(c.transformed(f) for c in self.cubics), self.kind, self.convex)

    def reversed(self) -> "Feature":
        """Traverse the feature backwards; a reversed corner flips convexity."""
        cubics = tuple(c.reversed() for c in reversed(self.cubics))
        if self.is_corner:
            return Feature(cubics, FeatureKind.CORNER, not self.convex)
        return Feature(cubics, FeatureKind.EDGE)

    def __repr__(self) -> str:
        if self.is_corner:
            return f"Corner(convex={self.convex}, cubics={len(self.cubics)})"
        return f"Edge(cubics={len(self.cubics)})"
