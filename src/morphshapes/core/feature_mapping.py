"""Corner correspondence between two measured outlines.

Corners of the two shapes are paired greedily by distance, nearest first,
while keeping the pairing order-preserving around the outline. The accepted
pairs become the control points of a DoubleMapper.
"""

import bisect
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from morphshapes.core.geometry import DISTANCE_EPSILON, is_progress_in_range, progress_distance
from morphshapes.core.mapping import DoubleMapper
from morphshapes.core.measure import ProgressableFeature
from morphshapes.domain import Feature, Point
from morphshapes.exceptions import MatchingError

logger = logging.getLogger(__name__)

IDENTITY_MAPPING: tuple[tuple[float, float], ...] = ((0.0, 0.0), (0.5, 0.5))


@dataclass(frozen=True)
class DistanceVertex:
    """A candidate corner pair and its squared distance."""

    distance: float
    f1: ProgressableFeature
    f2: ProgressableFeature


def feature_mapper(
    features1: Sequence[ProgressableFeature], features2: Sequence[ProgressableFeature]
) -> DoubleMapper:
    """Build the progress mapper between two shapes' corner features.

    Args:
        features1: Measured features of the first shape
        features2: Measured features of the second shape

    Returns:
        Mapper from the first shape's outline progress to the second's
    """
    corners1 = [f for f in features1 if f.feature.is_corner]
    corners2 = [f for f in features2 if f.feature.is_corner]
    return DoubleMapper(*do_mapping(corners1, corners2))


def do_mapping(
    features1: Sequence[ProgressableFeature], features2: Sequence[ProgressableFeature]
) -> list[tuple[float, float]]:
    """Greedily pair corners by ascending distance.

    Args:
        features1: Corner features of the first shape
        features2: Corner features of the second shape

    Returns:
        Accepted (progress1, progress2) pairs ordered by progress1
    """
    candidates = [
        DistanceVertex(d, f1, f2)
        for f1 in features1
        for f2 in features2
        if (d := feature_dist_squared(f1.feature, f2.feature)) != math.inf
    ]
    # Stable: equal distances keep their enumeration order
    candidates.sort(key=lambda v: v.distance)

    if not candidates:
        return list(IDENTITY_MAPPING)

    if len(candidates) == 1:
        p1 = candidates[0].f1.progress
        p2 = candidates[0].f2.progress
        return [(p1, p2), ((p1 + 0.5) % 1.0, (p2 + 0.5) % 1.0)]

    helper = _MappingHelper()
    for vertex in candidates:
        helper.add_mapping(vertex.f1, vertex.f2)

    logger.debug(
        "Matched %d of %d candidate corner pairs", len(helper.mapping), len(candidates)
    )
    return helper.mapping


class _MappingHelper:
    """Accumulates pairs sorted by source progress, rejecting conflicting ones."""

    def __init__(self) -> None:
        self.mapping: list[tuple[float, float]] = []
        self._sources: list[float] = []
        self._used_f1: set[ProgressableFeature] = set()
        self._used_f2: set[ProgressableFeature] = set()

    def add_mapping(self, f1: ProgressableFeature, f2: ProgressableFeature) -> None:
        if f1 in self._used_f1 or f2 in self._used_f2:
            return

        insertion_index = bisect.bisect_left(self._sources, f1.progress)
        if insertion_index < len(self._sources) and self._sources[insertion_index] == f1.progress:
            raise MatchingError("There can't be two features with the same progress")

        n = len(self.mapping)
        if n >= 1:
            before1, before2 = self.mapping[(insertion_index + n - 1) % n]
            after1, after2 = self.mapping[insertion_index % n]

            if (
                progress_distance(f1.progress, before1) < DISTANCE_EPSILON
                or progress_distance(f1.progress, after1) < DISTANCE_EPSILON
                or progress_distance(f2.progress, before2) < DISTANCE_EPSILON
                or progress_distance(f2.progress, after2) < DISTANCE_EPSILON
            ):
                return

            # Keep the target order consistent with the source order
            if n > 1 and not is_progress_in_range(f2.progress, before2, after2):
                return

        self.mapping.insert(insertion_index, (f1.progress, f2.progress))
        self._sources.insert(insertion_index, f1.progress)
        self._used_f1.add(f1)
        self._used_f2.add(f2)


def feature_dist_squared(f1: Feature, f2: Feature) -> float:
    """Squared distance between two features' representative points.

    Corners of opposite convexity never match and score infinity.
    """
    if f1.is_corner and f2.is_corner and f1.convex != f2.convex:
        return math.inf

    return (feature_representative_point(f1) - feature_representative_point(f2)).distance_squared()


def feature_representative_point(feature: Feature) -> Point:
    """Midpoint between a feature's first start anchor and last end anchor."""
    first = feature.cubics[0]
    last = feature.cubics[-1]
    return (first.anchor0 + last.anchor1) / 2
