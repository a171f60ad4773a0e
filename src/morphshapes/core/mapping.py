"""Circular piecewise-linear progress mapping."""

from collections.abc import Sequence

from morphshapes.core.geometry import (
    DISTANCE_EPSILON,
    is_progress_in_range,
    positive_modulo,
    progress_distance,
)
from morphshapes.exceptions import MappingError, ProgressError


class DoubleMapper:
    """Monotone, wraparound-aware mapping between two progress domains.

    Built from (source, target) correspondence pairs. Between pairs, values
    are interpolated linearly; both domains are circular on [0, 1).

    Example:
        mapper = DoubleMapper((0.0, 0.0), (0.5, 0.25))
        mapper.map(0.25)       # 0.125
        mapper.map_back(0.125) # 0.25
    """

    def __init__(self, *mappings: tuple[float, float]) -> None:
        """Create a mapper.

        Raises:
            MappingError: If either sequence leaves [0, 1), repeats a value or
                wraps around more than once
        """
        self._mappings = tuple(mappings)
        self._source_values = [m[0] for m in self._mappings]
        self._target_values = [m[1] for m in self._mappings]

        # Both sequences must increase monotonically, except for at most one
        # wrap since progress is circular.
        _validate_progress(self._source_values)
        _validate_progress(self._target_values)

    @classmethod
    def identity(cls) -> "DoubleMapper":
        return cls((0.0, 0.0), (0.5, 0.5))

    @property
    def mappings(self) -> tuple[tuple[float, float], ...]:
        return self._mappings

    def map(self, x: float) -> float:
        """Map a source progress value to the target domain."""
        return _linear_map(self._source_values, self._target_values, x)

    def map_back(self, x: float) -> float:
        """Map a target progress value back to the source domain."""
        return _linear_map(self._target_values, self._source_values, x)

    def __repr__(self) -> str:
        return f"DoubleMapper{self._mappings!r}"


def _linear_map(x_values: Sequence[float], y_values: Sequence[float], x: float) -> float:
    if not 0 <= x <= 1:
        raise ProgressError("Mapped progress", x)

    n = len(x_values)
    start = next(i for i in range(n) if is_progress_in_range(x, x_values[i], x_values[(i + 1) % n]))
    end = (start + 1) % n

    segment_size_x = positive_modulo(x_values[end] - x_values[start], 1.0)
    segment_size_y = positive_modulo(y_values[end] - y_values[start], 1.0)
    position_in_segment = (
        0.5
        if segment_size_x < 0.001
        else positive_modulo(x - x_values[start], 1.0) / segment_size_x
    )
    return positive_modulo(y_values[start] + segment_size_y * position_in_segment, 1.0)


def _validate_progress(values: list[float]) -> None:
    if not values:
        raise MappingError("Progress list is empty", values)

    prev = values[-1]
    wraps = 0
    for curr in values:
        if not 0.0 <= curr < 1.0:
            raise MappingError("Progress outside of range", values)

        if progress_distance(curr, prev) <= DISTANCE_EPSILON:
            raise MappingError("Progress repeats a value", values)

        if curr < prev:
            wraps += 1
            if wraps > 1:
                raise MappingError("Progress wraps more than once", values)

        prev = curr
