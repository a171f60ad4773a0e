"""Configuration management for morphshapes.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- MeasureConfig: Outline measuring settings
- ShapeConfig: Preset shape defaults
- RenderConfig: SVG output settings
- LoggingConfig: Logging settings
- ShapesSettings: Main application settings
"""

from morphshapes.config.settings import (
    LoggingConfig,
    MeasureConfig,
    RenderConfig,
    ShapeConfig,
    ShapesSettings,
    get_default_settings,
)

__all__ = [
    "LoggingConfig",
    "MeasureConfig",
    "RenderConfig",
    "ShapeConfig",
    "ShapesSettings",
    "get_default_settings",
]
