"""Exception hierarchy for morphshapes."""


class ShapesError(Exception):
    """Base exception for all morphshapes errors."""

    pass


class GeometryError(ShapesError):
    """Errors in geometric construction."""

    pass


class FeatureError(GeometryError, ValueError):
    """A feature was built from an empty or non-contiguous cubic list."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class PolygonError(GeometryError, ValueError):
    """Invalid arguments for polygon construction."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ContinuityError(GeometryError):
    """A polygon's flattened cubic list is not closed and contiguous.

    This signals bad vertex or feature input from the calling code rather
    than a recoverable condition.
    """

    def __init__(self, index: int, gap: float) -> None:
        self.index = index
        self.gap = gap
        super().__init__(
            "RoundedPolygon must be contiguous, with the anchor points of all curves "
            f"matching the anchor points of the preceding and succeeding cubics "
            f"(cubic #{index} is off by {gap:.6g})"
        )


class ProgressError(ShapesError, ValueError):
    """A progress value fell outside [0, 1]."""

    def __init__(self, name: str, value: float) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} is expected to be between 0 and 1, got {value}")


class MappingError(ShapesError, ValueError):
    """Progress correspondence values are not monotone-cyclic."""

    def __init__(self, reason: str, values: list[float]) -> None:
        self.reason = reason
        self.values = values
        joined = ", ".join(f"{v:g}" for v in values)
        super().__init__(f"DoubleMapper - {reason}: {joined}")


class MorphError(ShapesError):
    """Errors related to morph construction."""

    pass


class MatchingError(MorphError):
    """Two outlines could not be matched into aligned cubic pairs."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Outline matching failed: {reason}")


class ShapeSpecError(ShapesError):
    """Error loading a shape specification file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load shape spec '{path}': {reason}")
