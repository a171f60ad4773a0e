"""CLI application entry point for morphshapes.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from morphshapes import __version__
from morphshapes.cli.output import (
    console,
    print_error,
    print_header,
    print_polygon_table,
    print_shape_info,
    print_step,
    print_success,
)
from morphshapes.config import LoggingConfig, ShapeConfig, ShapesSettings
from morphshapes.core.processor import ShapeProcessor
from morphshapes.exceptions import ShapesError, ShapeSpecError
from morphshapes.io import SvgWriter, cubics_to_list

# Create the Typer app
app = typer.Typer(
    name="morphshapes",
    help="Build rounded polygon shapes and morph between them, writing SVG.",
    add_completion=False,
    no_args_is_help=True,
)

RoundingOption = Annotated[
    float,
    typer.Option(
        "--rounding",
        "-r",
        help="Corner rounding radius for preset shapes",
        min=0.0,
    ),
]
SmoothingOption = Annotated[
    float,
    typer.Option(
        "--smoothing",
        "-s",
        help="Corner smoothing for preset shapes (0-1)",
        min=0.0,
        max=1.0,
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output SVG path (default: derived from the shape names)",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]morphshapes[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build rounded polygon shapes and morph between them.

    Shapes are presets (circle, square, triangle, polygon:N, star:N, pill,
    pill-star:N) or paths to JSON shape files.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    ctx.obj = {
        "logging": LoggingConfig(
            log_file=log_file,
            log_level="ERROR" if quiet else ("INFO" if verbose else log_level),
        ),
        "verbose": verbose,
        "quiet": quiet,
    }


def _settings(ctx: typer.Context, rounding: float, smoothing: float) -> ShapesSettings:
    return ShapesSettings(
        shape=ShapeConfig(rounding_radius=rounding, smoothing=smoothing),
        logging=ctx.obj["logging"],
    )


def _display_name(name: str) -> str:
    """Shape name for messages and default output paths (file stem for JSON files)."""
    return Path(name).stem if name.lower().endswith(".json") else name


@app.command()
def shape(
    ctx: typer.Context,
    shape_name: Annotated[
        str,
        typer.Argument(
            metavar="SHAPE",
            help="Preset name or path to a JSON shape file",
            show_default=False,
        ),
    ],
    output: OutputOption = None,
    rounding: RoundingOption = 0.0,
    smoothing: SmoothingOption = 0.0,
) -> None:
    """Render a single shape to SVG.

    Example:
        morphshapes shape star:5 --rounding 0.1
    """
    quiet = ctx.obj["quiet"]
    if not quiet:
        print_header(__version__)

    try:
        processor = ShapeProcessor(_settings(ctx, rounding, smoothing))

        if not quiet:
            print_step("Building shape")
        polygon = processor.build_shape(shape_name)
        if not quiet:
            print_shape_info(shape_name, polygon)

        output_path = output or SvgWriter.get_output_path(_display_name(shape_name))
        if not quiet:
            print_step("Rendering")
        stats = processor.render_shape(polygon, output_path)

        if not quiet:
            print_success(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                frames=stats.frames_rendered,
                cubics=stats.cubics_emitted,
            )
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ShapeSpecError as e:
        print_error(f"Could not load shape '{e.path}'", details=e.reason)
        raise typer.Exit(code=1)
    except ShapesError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def morph(
    ctx: typer.Context,
    start: Annotated[
        str,
        typer.Argument(help="Start shape (preset or JSON file)", show_default=False),
    ],
    end: Annotated[
        str,
        typer.Argument(help="End shape (preset or JSON file)", show_default=False),
    ],
    output: OutputOption = None,
    frames: Annotated[
        int | None,
        typer.Option(
            "--frames",
            "-f",
            help="Number of evenly spaced frames from start to end",
            min=1,
            max=120,
        ),
    ] = None,
    progress: Annotated[
        float | None,
        typer.Option(
            "--progress",
            "-p",
            help="Render a single frame at this progress (0-1)",
            min=0.0,
            max=1.0,
        ),
    ] = None,
    rounding: RoundingOption = 0.0,
    smoothing: SmoothingOption = 0.0,
) -> None:
    """Morph between two shapes and render the frames as one SVG sheet.

    Example:
        morphshapes morph triangle square --frames 8
    """
    if frames is not None and progress is not None:
        print_error("Cannot use --frames and --progress together")
        raise typer.Exit(code=1)

    quiet = ctx.obj["quiet"]
    if not quiet:
        print_header(__version__)

    start_name = _display_name(start)
    end_name = _display_name(end)

    try:
        processor = ShapeProcessor(_settings(ctx, rounding, smoothing))

        if not quiet:
            print_step("Building shapes")
        start_polygon = processor.build_shape(start)
        end_polygon = processor.build_shape(end)
        if not quiet:
            print_shape_info(start, start_polygon)
            print_shape_info(end, end_polygon)

        output_path = output or SvgWriter.get_output_path(
            f"{start_name}-{end_name}", processor.config.render.suffix
        )
        if not quiet:
            print_step("Morphing")
        stats = processor.render_morph(
            start_polygon,
            end_polygon,
            output_path,
            frames=frames,
            progress=progress,
            names=(start_name, end_name),
        )

        if not quiet:
            print_success(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                frames=stats.frames_rendered,
                cubics=stats.cubics_emitted,
            )
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ShapeSpecError as e:
        print_error(f"Could not load shape '{e.path}'", details=e.reason)
        raise typer.Exit(code=1)
    except ShapesError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def inspect(
    ctx: typer.Context,
    shape_name: Annotated[
        str,
        typer.Argument(
            metavar="SHAPE",
            help="Preset name or path to a JSON shape file",
            show_default=False,
        ),
    ],
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the cubics as JSON instead of a table",
        ),
    ] = False,
    rounding: RoundingOption = 0.0,
    smoothing: SmoothingOption = 0.0,
) -> None:
    """Show a shape's features, cubics and bounds.

    Example:
        morphshapes inspect polygon:6 --rounding 0.2
    """
    try:
        settings = _settings(ctx, rounding, smoothing)
        polygon = ShapeProcessor(settings).build_shape(shape_name)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ShapeSpecError as e:
        print_error(f"Could not load shape '{e.path}'", details=e.reason)
        raise typer.Exit(code=1)
    except ShapesError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(
            json.dumps(
                {
                    "name": shape_name,
                    "center": polygon.center.to_dict(),
                    "cubics": cubics_to_list(polygon.cubics, settings.render.precision),
                }
            )
        )
    else:
        print_polygon_table(shape_name, polygon)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
