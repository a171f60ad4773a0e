"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from morphshapes.core.polygon import RoundedPolygon
from morphshapes.domain import Bounds

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]morphshapes[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_shape_info(name: str, polygon: RoundedPolygon) -> None:
    """Print a one-line shape summary.

    Args:
        name: Shape name as given on the command line
        polygon: The built polygon
    """
    corners = sum(1 for f in polygon.features if f.is_corner)
    line = Text("  ")
    line.append(name, style="bold")
    line.append(f" {SYM_DOT} {corners} corners {SYM_DOT} {len(polygon.cubics)} cubics")
    console.print(line)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def _format_bounds(bounds: Bounds) -> str:
    return "({:.3f}, {:.3f}) – ({:.3f}, {:.3f})".format(*bounds)


def print_success(output_path: str, total_time_s: float, frames: int, cubics: int) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total render time in seconds
        frames: Number of frames rendered
        cubics: Total number of cubics written
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    plural = "frame" if frames == 1 else "frames"
    console.print(f"  {frames} {plural} {SYM_DOT} {cubics} cubics")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_polygon_table(name: str, polygon: RoundedPolygon) -> None:
    """Print a polygon's features, cubic counts and bounds as a table.

    Args:
        name: Shape name used as the table title
        polygon: Polygon to describe
    """
    table = Table(title=name, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Cubics", justify="right")
    table.add_column("Start")
    table.add_column("End")

    for index, feature in enumerate(polygon.features):
        if feature.is_edge:
            kind = "edge"
        else:
            kind = "convex corner" if feature.convex else "concave corner"
        first = feature.cubics[0].anchor0
        last = feature.cubics[-1].anchor1
        table.add_row(
            str(index),
            kind,
            str(len(feature.cubics)),
            f"({first.x:.3f}, {first.y:.3f})",
            f"({last.x:.3f}, {last.y:.3f})",
        )

    console.print(table)
    console.print(f"  center ({polygon.center.x:.3f}, {polygon.center.y:.3f})")
    console.print(f"  bounds {_format_bounds(polygon.calculate_bounds(approximate=False))}")
    console.print(f"  max bounds {_format_bounds(polygon.calculate_max_bounds())}")
    console.print(f"  {len(polygon.cubics)} cubics")
