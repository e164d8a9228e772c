from __future__ import annotations

import math
import pathlib
import warnings
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from smoothcorners._config import get_render_settings
from smoothcorners.geometry.path2d import ArcTo, Close, CubicTo, LineTo, MoveTo, Path2D
from smoothcorners.geometry.smooth_rect import (
    CornerGeometry,
    PreconditionViolation,
    compute_corner_geometry,
    make_round_rect,
)
from smoothcorners.io.svg import write_svg
from smoothcorners.preview import OutlinePreviewer, PreviewBackendError

console = Console()
app = typer.Typer(help="Build smooth (squircle-style) rounded rectangle outlines.")

X_OPTION = typer.Option(0.0, "--x", help="Left edge of the rectangle.")
Y_OPTION = typer.Option(0.0, "--y", help="Top edge of the rectangle (y grows downward).")
WIDTH_OPTION = typer.Option(200.0, "--width", help="Rectangle width.")
HEIGHT_OPTION = typer.Option(100.0, "--height", help="Rectangle height.")
RADIUS_OPTION = typer.Option(20.0, "--radius", "-r", help="Corner radius.")
SMOOTHNESS_OPTION = typer.Option(
    None, "--smoothness", "-s", help="Corner smoothing in [0, 1]; defaults to the configured value."
)
FIT_OPTION = typer.Option(True, "--fit/--no-fit", help="Clamp radius and smoothness to fit the rectangle.")


@dataclass(frozen=True)
class RectOptions:
    x: float
    y: float
    width: float
    height: float
    smoothness: float
    radius: float
    fit: bool


def _resolve_options(
    x: float,
    y: float,
    width: float,
    height: float,
    smoothness: float | None,
    radius: float,
    fit: bool,
) -> RectOptions:
    if smoothness is None:
        smoothness = get_render_settings().smoothness
    return RectOptions(x=x, y=y, width=width, height=height, smoothness=smoothness, radius=radius, fit=fit)


def _build_outline(opts: RectOptions) -> Path2D:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            path = make_round_rect(
                opts.x,
                opts.y,
                opts.width,
                opts.height,
                smoothness=opts.smoothness,
                radius=opts.radius,
                fit=opts.fit,
            )
        except PreconditionViolation as exc:
            raise typer.BadParameter(f"Invalid corner parameters: {exc}") from exc
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    for warning in caught:
        console.print(f"[yellow]{warning.message}[/yellow]")
    return path


def _geometry_table(geometry: CornerGeometry) -> Table:
    table = Table(title="Corner geometry", show_header=True, header_style="bold magenta")
    table.add_column("quantity")
    table.add_column("value", justify="right")
    vx, vy = geometry.arc_connecting_vector
    rows = [
        ("rounding segment length", geometry.rounding_segment_length),
        ("smoothing rounding segment length", geometry.smoothing_rounding_segment_length),
        ("edge connecting offset", geometry.edge_connecting_offset),
        ("arc connecting angle (deg)", math.degrees(geometry.arc_connecting_angle)),
        ("arc connecting vector x", vx),
        ("arc connecting vector y", vy),
        ("arc curve offset", geometry.arc_curve_offset),
        ("edge curve offset", geometry.edge_curve_offset),
    ]
    for name, value in rows:
        table.add_row(name, f"{value:.6g}")
    return table


def _fmt_point(point) -> str:
    return f"({point[0]:.4f}, {point[1]:.4f})"


def _commands_table(path: Path2D) -> Table:
    table = Table(title="Path commands", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("command")
    table.add_column("points")
    for index, command in enumerate(path.commands):
        if isinstance(command, MoveTo):
            name, detail = "moveTo", _fmt_point(command.point)
        elif isinstance(command, LineTo):
            name, detail = "lineTo", _fmt_point(command.point)
        elif isinstance(command, CubicTo):
            name = "cubicTo"
            detail = " ".join(_fmt_point(p) for p in (command.control1, command.control2, command.point))
        elif isinstance(command, ArcTo):
            name = "arcTo"
            direction = "cw" if command.clockwise else "ccw"
            size = "large" if command.large_arc else "small"
            detail = f"r={command.radii[0]:.4f} {size} {direction} -> {_fmt_point(command.point)}"
        elif isinstance(command, Close):
            name, detail = "close", ""
        table.add_row(str(index), name, detail)
    return table


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


@app.command()
def path(
    x: float = X_OPTION,
    y: float = Y_OPTION,
    width: float = WIDTH_OPTION,
    height: float = HEIGHT_OPTION,
    smoothness: float | None = SMOOTHNESS_OPTION,
    radius: float = RADIUS_OPTION,
    fit: bool = FIT_OPTION,
    svg: bool = typer.Option(False, "--svg", help="Print only the SVG path data."),
) -> None:
    """
    Print the derived corner geometry and the emitted path commands.
    """

    opts = _resolve_options(x, y, width, height, smoothness, radius, fit)
    outline = _build_outline(opts)
    if svg:
        typer.echo(outline.to_svg_path_data())
        return

    geometry = outline.metadata.get("corner_geometry")
    if isinstance(geometry, CornerGeometry):
        console.print(_geometry_table(geometry))
    else:
        console.print(f"[magenta]Outline kind: {outline.metadata.get('kind')}[/magenta]")
    console.print(_commands_table(outline))


@app.command()
def geometry(
    smoothness: float | None = SMOOTHNESS_OPTION,
    radius: float = RADIUS_OPTION,
) -> None:
    """
    Print the corner offsets for a smoothness and radius without building a path.
    """

    if smoothness is None:
        smoothness = get_render_settings().smoothness
    if not 0 < smoothness <= 1 or not radius > 0:
        raise typer.BadParameter("smoothness must be in (0, 1] and radius must be positive.")
    console.print(_geometry_table(compute_corner_geometry(smoothness, radius)))


@app.command()
def export(
    output: pathlib.Path = typer.Option(
        pathlib.Path("round_rect.svg"),
        "--output",
        "-o",
        help="Path to the SVG file that will be produced.",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing SVG."),
    x: float = X_OPTION,
    y: float = Y_OPTION,
    width: float = WIDTH_OPTION,
    height: float = HEIGHT_OPTION,
    smoothness: float | None = SMOOTHNESS_OPTION,
    radius: float = RADIUS_OPTION,
    fit: bool = FIT_OPTION,
    fill: str | None = typer.Option(None, "--fill", help="Fill color (name, #hex or 'none')."),
    stroke: str | None = typer.Option(None, "--stroke", help="Stroke color (name, #hex or 'none')."),
) -> None:
    """
    Write the outline to an SVG file.
    """

    settings = get_render_settings()
    opts = _resolve_options(x, y, width, height, smoothness, radius, fit)
    outline = _build_outline(opts)

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    try:
        write_svg(
            outline,
            final_output,
            fill=fill if fill is not None else settings.fill,
            stroke=stroke if stroke is not None else settings.stroke,
            stroke_width=settings.stroke_width,
            margin=settings.margin,
        )
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid color: {exc}") from exc
    except OSError as exc:  # pragma: no cover - filesystem failure
        raise typer.BadParameter(f"Failed to export SVG: {exc}") from exc

    console.print(
        Panel(
            f"Wrote SVG to [green]{final_output}[/green] ({len(outline.commands)} commands).",
            title="Export complete",
            border_style="green",
        )
    )


@app.command()
def preview(
    x: float = X_OPTION,
    y: float = Y_OPTION,
    width: float = WIDTH_OPTION,
    height: float = HEIGHT_OPTION,
    smoothness: float | None = SMOOTHNESS_OPTION,
    radius: float = RADIUS_OPTION,
    fit: bool = FIT_OPTION,
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Optional path to save a screenshot instead of opening a window."
    ),
    show_points: bool = typer.Option(False, "--show-points/--hide-points", help="Mark the path anchors."),
) -> None:
    """
    Open an interactive PyVista preview of the outline.
    """

    opts = _resolve_options(x, y, width, height, smoothness, radius, fit)
    outline = _build_outline(opts)

    console.rule("smoothcorners preview")
    previewer = OutlinePreviewer(console=console)
    try:
        previewer.show(outline, screenshot_path=screenshot, show_points=show_points)
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc
