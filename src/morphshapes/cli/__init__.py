"""Command-line interface for morphshapes.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Render preset or JSON-defined shapes to SVG
- Morph sheets with evenly spaced frames or a single progress value
- Shape inspection as a table or JSON
- Verbose/quiet output modes
"""

from morphshapes.cli.app import cli, main

__all__ = ["cli", "main"]
