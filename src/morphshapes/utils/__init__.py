"""Utility functions for morphshapes.

This module provides logging setup and render statistics tracking.
"""

from morphshapes.utils.logging import (
    RenderLogger,
    RenderStats,
    configure_logging,
)

__all__ = [
    "RenderLogger",
    "RenderStats",
    "configure_logging",
]
