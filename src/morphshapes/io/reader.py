"""Shape specification reader.

This module provides the ShapeSpec schema for JSON shape files and the
ShapeReader class that loads and validates them.

Example file:
    {
        "name": "rounded-triangle",
        "vertex_count": 3,
        "radius": 1.0,
        "rounding": {"radius": 0.2, "smoothing": 0.5}
    }
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from morphshapes.domain import CornerRounding
from morphshapes.exceptions import ShapeSpecError


class RoundingSpec(BaseModel):
    """Corner rounding as written in a shape file."""

    radius: float = Field(default=0.0, ge=0.0, description="Rounding radius")
    smoothing: float = Field(default=0.0, ge=0.0, le=1.0, description="Rounding smoothing")

    def to_rounding(self) -> CornerRounding:
        return CornerRounding(self.radius, self.smoothing)


class ShapeSpec(BaseModel):
    """A polygon described either by explicit vertices or a regular vertex count."""

    name: str | None = Field(default=None, description="Display name")
    vertices: list[tuple[float, float]] | None = Field(
        default=None,
        min_length=3,
        description="Explicit vertex positions in outline order",
    )
    vertex_count: int | None = Field(
        default=None,
        ge=3,
        description="Vertex count of a regular polygon",
    )
    radius: float = Field(
        default=1.0,
        gt=0.0,
        description="Circumscribed radius when vertex_count is used",
    )
    rounding: RoundingSpec = Field(default_factory=RoundingSpec)
    per_vertex_rounding: list[RoundingSpec] | None = Field(
        default=None,
        description="Rounding per vertex, overriding rounding",
    )
    center: tuple[float, float] | None = Field(
        default=None,
        description="Shape center (defaults to the vertex centroid or the origin)",
    )
    normalize: bool = Field(
        default=False,
        description="Fit the resulting shape into the unit square",
    )

    @model_validator(mode="after")
    def _check_outline(self) -> "ShapeSpec":
        if (self.vertices is None) == (self.vertex_count is None):
            raise ValueError("exactly one of 'vertices' or 'vertex_count' is required")

        count = len(self.vertices) if self.vertices is not None else self.vertex_count
        if self.per_vertex_rounding is not None and len(self.per_vertex_rounding) != count:
            raise ValueError(
                f"per_vertex_rounding has {len(self.per_vertex_rounding)} entries "
                f"for {count} vertices"
            )
        return self


class ShapeReader:
    """Loads shape specification files.

    Example:
        spec = ShapeReader(Path("triangle.json")).load()
        polygon = spec_to_polygon(spec)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to a JSON shape file
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ShapeSpec:
        """Read and validate the shape file.

        Returns:
            Validated shape specification

        Raises:
            FileNotFoundError: If the file does not exist
            ShapeSpecError: If the file is not valid JSON or fails validation
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Shape file not found: {self._path}")

        text = self._path.read_text(encoding="utf-8")
        try:
            spec = ShapeSpec.model_validate_json(text)
        except ValidationError as e:
            raise ShapeSpecError(str(self._path), _summarize(e)) from e

        if spec.name is None:
            spec = spec.model_copy(update={"name": self._path.stem})
        return spec


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = first["msg"]
    return f"{location}: {message}" if location else message
