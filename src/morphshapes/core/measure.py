"""Arc-length parametrization of polygon outlines.

A measured polygon assigns every cubic an interval of "outline progress" in
[0, 1]: its share of the total outline length, accumulated from an origin.
Corner features get a representative progress at the middle of their span.
Morphing uses these values to pair up the two outlines.

Key classes:
- Measurer: Strategy for measuring cubics and finding cut points
- LengthMeasurer: Chord-sum arc length approximation
- MeasuredCubic: A cubic with its measured size and progress interval
- ProgressableFeature: A corner feature with its outline progress
- MeasuredPolygon: The measured cubic list of a whole polygon
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol, overload

from morphshapes.core.geometry import DISTANCE_EPSILON, positive_modulo
from morphshapes.core.polygon import RoundedPolygon
from morphshapes.domain import CubicBezier, Feature
from morphshapes.exceptions import ProgressError


class Measurer(Protocol):
    """Strategy for measuring a cubic along the outline."""

    def measure_cubic(self, cubic: CubicBezier) -> float:
        """Return a non-negative size for the cubic."""
        ...

    def find_cubic_cut_point(self, cubic: CubicBezier, m: float) -> float:
        """Return the curve parameter t at which the measured size reaches m."""
        ...


class LengthMeasurer:
    """Approximates arc length by summing chords between sampled points.

    Only relative sizes matter for morphing, so a handful of segments is
    enough.
    """

    def __init__(self, segments: int = 3) -> None:
        if segments < 1:
            raise ValueError(f"segments must be at least 1, got {segments}")
        self.segments = segments

    def measure_cubic(self, cubic: CubicBezier) -> float:
        return self._closest_progress_to(cubic, math.inf)[1]

    def find_cubic_cut_point(self, cubic: CubicBezier, m: float) -> float:
        if math.isnan(m) or m <= 0:
            return 0.0
        return self._closest_progress_to(cubic, m)[0]

    def _closest_progress_to(self, cubic: CubicBezier, threshold: float) -> tuple[float, float]:
        """Walk the sampled chords until their length reaches threshold.

        Returns:
            Tuple of (curve parameter, measured length)
        """
        total = 0.0
        remainder = threshold
        prev = cubic.anchor0

        for i in range(1, self.segments + 1):
            progress = i / self.segments
            point = cubic.point_on_curve(progress)
            segment = (point - prev).distance()

            if remainder <= 0:
                return max(0.0, progress - 1.0 / self.segments), threshold

            if segment > 0 and segment >= remainder:
                t = progress - (1.0 - remainder / segment) / self.segments
                return min(max(t, 0.0), 1.0), threshold

            remainder -= segment
            total += segment
            prev = point

        return 1.0, total


@dataclass(frozen=True)
class MeasuredCubic:
    """A cubic with its measured size and outline progress interval.

    Attributes:
        cubic: The curve
        start_outline_progress: Progress where the cubic starts
        end_outline_progress: Progress where the cubic ends
        measured_size: Size reported by the measurer
    """

    cubic: CubicBezier
    start_outline_progress: float
    end_outline_progress: float
    measurer: Measurer = field(repr=False, compare=False)
    measured_size: float = field(init=False)

    def __post_init__(self) -> None:
        if self.end_outline_progress < self.start_outline_progress:
            raise ValueError(
                "end_outline_progress is expected to be equal or greater than "
                f"start_outline_progress ({self.end_outline_progress} < {self.start_outline_progress})"
            )
        size = self.measurer.measure_cubic(self.cubic)
        if size < 0:
            raise ValueError("Measured cubic is expected to be greater or equal to zero")
        object.__setattr__(self, "measured_size", size)

    def with_progress_range(
        self, start: float | None = None, end: float | None = None
    ) -> "MeasuredCubic":
        """Copy of this measured cubic with a different progress interval."""
        return MeasuredCubic(
            self.cubic,
            self.start_outline_progress if start is None else start,
            self.end_outline_progress if end is None else end,
            self.measurer,
        )

    def cut_at_progress(self, cut_outline_progress: float) -> tuple["MeasuredCubic", "MeasuredCubic"]:
        """Split at an outline progress value within this cubic's interval.

        The progress is clamped into the interval, converted to a fraction of
        the measured size and turned into a curve parameter by the measurer.

        Args:
            cut_outline_progress: Where to cut, in outline progress

        Returns:
            Tuple of (before, after) measured cubics with narrowed intervals
        """
        bounded = min(max(cut_outline_progress, self.start_outline_progress), self.end_outline_progress)
        progress_size = self.end_outline_progress - self.start_outline_progress

        if progress_size <= 0:
            return (
                MeasuredCubic(self.cubic, self.start_outline_progress, bounded, self.measurer),
                MeasuredCubic(self.cubic, bounded, self.end_outline_progress, self.measurer),
            )

        relative_progress = (bounded - self.start_outline_progress) / progress_size
        t = self.measurer.find_cubic_cut_point(self.cubic, relative_progress * self.measured_size)
        if not 0.0 <= t <= 1.0:
            raise ProgressError("Cubic cut point", t)

        c1, c2 = self.cubic.split(t)
        return (
            MeasuredCubic(c1, self.start_outline_progress, bounded, self.measurer),
            MeasuredCubic(c2, bounded, self.end_outline_progress, self.measurer),
        )


@dataclass(frozen=True)
class ProgressableFeature:
    """A feature placed on the outline.

    Attributes:
        progress: Representative outline progress in [0, 1)
        feature: The feature itself
    """

    progress: float
    feature: Feature


class MeasuredPolygon(Sequence[MeasuredCubic]):
    """A polygon's cubics annotated with contiguous outline progress intervals.

    Intervals start at 0, end at 1, and each starts where the previous one
    ends. Cubics narrower than the distance epsilon are dropped.
    """

    def __init__(
        self,
        measurer: Measurer,
        features: Sequence[ProgressableFeature],
        cubics: Sequence[CubicBezier],
        outline_progress: Sequence[float],
    ) -> None:
        if not cubics:
            raise ValueError("MeasuredPolygon expects at least one cubic.")
        if len(outline_progress) != len(cubics) + 1:
            raise ValueError("Outline progress size is expected to be the cubics size + 1")
        if outline_progress[0] != 0.0:
            raise ValueError("First outline progress value is expected to be zero")
        if outline_progress[-1] != 1.0:
            raise ValueError("Last outline progress value is expected to be one")

        self._measurer = measurer
        self.features: tuple[ProgressableFeature, ...] = tuple(features)

        measured: list[MeasuredCubic] = []
        start = 0.0
        for index, cubic in enumerate(cubics):
            if outline_progress[index + 1] - outline_progress[index] > DISTANCE_EPSILON:
                measured.append(MeasuredCubic(cubic, start, outline_progress[index + 1], measurer))
                start = outline_progress[index + 1]

        if not measured:
            measured.append(MeasuredCubic(cubics[0], 0.0, 1.0, measurer))
        else:
            measured[-1] = measured[-1].with_progress_range(end=1.0)

        self._cubics: tuple[MeasuredCubic, ...] = tuple(measured)

    @overload
    def __getitem__(self, index: int) -> MeasuredCubic: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[MeasuredCubic]: ...

    def __getitem__(self, index: int | slice) -> MeasuredCubic | Sequence[MeasuredCubic]:
        return self._cubics[index]

    def __len__(self) -> int:
        return len(self._cubics)

    def __iter__(self) -> Iterator[MeasuredCubic]:
        return iter(self._cubics)

    @property
    def measurer(self) -> Measurer:
        return self._measurer

    def cut_and_shift(self, cutting_point: float) -> "MeasuredPolygon":
        """Rotate the loop so it starts at the given outline progress.

        The cubic containing the cut is split; the part after the cut becomes
        the first cubic and the part before it the last. All progress values
        (cubics and features) are re-expressed relative to the new origin.

        Args:
            cutting_point: New origin, in [0, 1]

        Returns:
            A new measured polygon (or this one if the cut is at the origin)

        Raises:
            ProgressError: If cutting_point is outside [0, 1]
        """
        if not 0.0 <= cutting_point <= 1.0:
            raise ProgressError("Cutting point", cutting_point)

        if cutting_point < DISTANCE_EPSILON or 1.0 - cutting_point < DISTANCE_EPSILON:
            return self

        target_index = next(
            (
                i
                for i, mc in enumerate(self._cubics)
                if mc.start_outline_progress <= cutting_point <= mc.end_outline_progress
            ),
            None,
        )
        if target_index is None:
            raise RuntimeError("Could not find a cubic that crosses the cutting point.")

        count = len(self._cubics)
        before, after = self._cubics[target_index].cut_at_progress(cutting_point)

        cubics = [after.cubic]
        cubics.extend(self._cubics[(i + target_index) % count].cubic for i in range(1, count))
        cubics.append(before.cubic)

        outline_progress = [0.0]
        outline_progress.extend(
            positive_modulo(
                self._cubics[(target_index + index - 1) % count].end_outline_progress - cutting_point,
                1.0,
            )
            for index in range(1, count + 1)
        )
        outline_progress.append(1.0)

        features = [
            ProgressableFeature(positive_modulo(f.progress - cutting_point, 1.0), f.feature)
            for f in self.features
        ]
        return MeasuredPolygon(self._measurer, features, cubics, outline_progress)

    @classmethod
    def measure_polygon(cls, measurer: Measurer, polygon: RoundedPolygon) -> "MeasuredPolygon":
        """Measure a polygon's outline.

        Cubics are taken feature by feature so each corner can be located at
        its middle cubic. Polygons without features fall back to their
        flattened cubic list.

        Args:
            measurer: Size strategy
            polygon: Polygon to measure

        Returns:
            Measured polygon starting at the polygon's first feature
        """
        cubics: list[CubicBezier] = []
        feature_to_cubic: list[tuple[Feature, int]] = []

        if not polygon.features:
            cubics.extend(polygon.cubics)
        else:
            for feature in polygon.features:
                for cubic_index, cubic in enumerate(feature.cubics):
                    if feature.is_corner and cubic_index == len(feature.cubics) // 2:
                        feature_to_cubic.append((feature, len(cubics)))
                    cubics.append(cubic)

        measures = [0.0]
        for cubic in cubics:
            size = measurer.measure_cubic(cubic)
            if size < 0:
                raise ValueError("Measured cubic is expected to be greater or equal to zero")
            measures.append(measures[-1] + size)

        total = measures[-1]
        if total <= 0:
            denom = max(1, len(measures) - 1)
            outline_progress = [i / denom for i in range(len(measures))]
        else:
            outline_progress = [m / total for m in measures]

        outline_progress[0] = 0.0
        outline_progress[-1] = 1.0

        features = [
            ProgressableFeature(
                positive_modulo((outline_progress[ix] + outline_progress[ix + 1]) / 2.0, 1.0),
                feature,
            )
            for feature, ix in feature_to_cubic
        ]
        return cls(measurer, features, cubics, outline_progress)

    def __repr__(self) -> str:
        return f"MeasuredPolygon(cubics={len(self._cubics)}, features={len(self.features)})"
