"""Configuration settings for morphshapes."""

from pathlib import Path

from pydantic import BaseModel, Field

from morphshapes.domain import CornerRounding


class MeasureConfig(BaseModel):
    """Configuration for outline measuring."""

    segments: int = Field(
        default=3,
        ge=1,
        le=64,
        description="Chord segments per cubic when approximating arc length",
    )


class ShapeConfig(BaseModel):
    """Defaults for preset shapes built from the command line."""

    vertices: int = Field(
        default=6,
        ge=3,
        description="Vertex count for presets that take one (polygon, star)",
    )
    radius: float = Field(
        default=1.0,
        gt=0.0,
        description="Circumscribed radius of preset shapes",
    )
    rounding_radius: float = Field(
        default=0.0,
        ge=0.0,
        description="Corner rounding radius applied to preset vertices",
    )
    smoothing: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Corner smoothing applied to preset vertices",
    )

    def get_rounding(self) -> CornerRounding:
        """Corner rounding built from the configured radius and smoothing."""
        return CornerRounding(self.rounding_radius, self.smoothing)


class RenderConfig(BaseModel):
    """Configuration for SVG output."""

    size: int = Field(
        default=256,
        ge=16,
        le=4096,
        description="Width and height of one rendered frame in pixels",
    )
    padding: float = Field(
        default=0.1,
        ge=0.0,
        le=0.45,
        description="Margin around the shape as a fraction of the frame size",
    )
    fill: str = Field(
        default="#6750A4",
        description="SVG fill color of rendered shapes",
    )
    precision: int = Field(
        default=3,
        ge=0,
        le=8,
        description="Decimal places written for path coordinates",
    )
    frames: int = Field(
        default=5,
        ge=1,
        le=120,
        description="Number of frames rendered for a morph",
    )
    columns: int = Field(
        default=5,
        ge=1,
        le=32,
        description="Frames per row in a morph sheet",
    )
    suffix: str = Field(
        default="morph",
        description="Suffix appended to generated output file names",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ShapesSettings(BaseModel):
    """Main application settings."""

    measure: MeasureConfig = Field(default_factory=MeasureConfig)
    shape: ShapeConfig = Field(default_factory=ShapeConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ShapesSettings:
    """Get default application settings."""
    return ShapesSettings()
