"""Main CLI entry point for simrender."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(
    name="simrender",
    help="simrender - Resample physics traces and plan their rendering",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show debug logging",
    ),
):
    """Configure logging for every command."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def _load_trace(path: Path):
    from simrender.models.trace import Trace

    try:
        return Trace.model_validate_json(path.read_text())
    except (OSError, ValidationError, ValueError) as e:
        console.print(f"[red]Error: could not load trace from {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def resample(
    trace_file: Path = typer.Argument(
        ...,
        help="Simulation trace (JSON with samples and events)",
        exists=True,
        dir_okay=False,
    ),
    fps: float = typer.Option(
        30.0,
        "--fps", "-f",
        envvar="SIMRENDER_FPS",
        help="Target frame rate",
    ),
    event_alignment: bool = typer.Option(
        True,
        "--event-alignment/--no-event-alignment",
        help="Insert frames at event times that fall between grid frames",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file for resampled frames (JSON)",
    ),
):
    """
    Resample a trace to a fixed frame rate.
    """
    from simrender.resampling import FrameResampler, ResampleConfig

    trace = _load_trace(trace_file)
    if fps <= 0:
        console.print("[red]Error: --fps must be positive[/red]")
        raise typer.Exit(1)

    resampler = FrameResampler(ResampleConfig(event_alignment=event_alignment))
    frames = resampler.resample(trace, fps)
    stats = resampler.summarize(frames)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Samples", str(len(trace.samples)))
    table.add_row("Events", str(len(trace.events)))
    table.add_row("Frames", str(stats.num_frames))
    table.add_row("Interpolated", str(stats.num_interpolated))
    table.add_row("Event frames", str(stats.num_event_frames))
    table.add_row("Span", f"{stats.start_time:.3f}s - {stats.end_time:.3f}s")

    console.print(Panel.fit(table, title=str(trace_file.name), border_style="blue"))

    if output:
        output.write_text(json.dumps(
            [frame.model_dump() for frame in frames],
            indent=2,
        ))
        console.print(f"\n[green]Frames saved to {output}[/green]")


@app.command()
def config(
    trace_file: Path = typer.Argument(
        ...,
        help="Simulation trace (JSON with samples and events)",
        exists=True,
        dir_okay=False,
    ),
    width: int = typer.Option(1280, "--width", "-w"),
    height: int = typer.Option(720, "--height", "-h"),
    theme: str = typer.Option("physics", "--theme", help="light, dark or physics"),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file for the coordinate config (JSON)",
    ),
):
    """
    Build the coordinate configuration for a trace.
    """
    from simrender.config import RenderConfigBuilder, Theme, UIOptions

    trace = _load_trace(trace_file)
    try:
        options = UIOptions(theme=Theme(theme.lower()))
    except ValueError:
        console.print(f"[red]Error: unknown theme '{theme}'[/red]")
        raise typer.Exit(1)

    render_config = RenderConfigBuilder(options).build(trace, (width, height))
    coordinate = render_config.coordinate

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Scale", f"{coordinate.scale:.2f} px/m")
    table.add_row("Offset", f"({coordinate.offset_x:.1f}, {coordinate.offset_y:.1f}) px")
    table.add_row("Orientation", coordinate.orientation.value)
    table.add_row("Duration", f"{render_config.duration:.3f}s")
    table.add_row("Background", render_config.style.background_color)

    console.print(table)

    for warning in render_config.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    if output:
        output.write_text(json.dumps({
            "scale": coordinate.scale,
            "offset_x": coordinate.offset_x,
            "offset_y": coordinate.offset_y,
            "orientation": coordinate.orientation.value,
        }, indent=2))
        console.print(f"\n[green]Config saved to {output}[/green]")


@app.command()
def validate(
    angle: float = typer.Option(30.0, "--angle", help="Incline angle in degrees"),
    drop_height: float = typer.Option(2.0, "--drop-height", help="Drop height in m"),
    max_distance: float = typer.Option(5.0, "--max-distance", help="Travel along incline in m"),
    mass: float = typer.Option(1.0, "--mass"),
    friction: float = typer.Option(0.2, "--friction"),
    total_time: float = typer.Option(0.0, "--total-time"),
    strategy: str = typer.Option("2d_canvas", "--strategy", "-s", help="2d_canvas or 3d_webgl"),
    width: int = typer.Option(1280, "--width", "-w"),
    height: int = typer.Option(720, "--height", "-h"),
):
    """
    Score the render setup for a drop-bounce-slide scenario.
    """
    from simrender.models.geometry import ScreenConfig
    from simrender.rendering import RenderingManager, SceneParameters, SceneResults

    try:
        params = SceneParameters(
            mass=mass,
            height=drop_height,
            incline_angle=angle,
            friction_coeff=friction,
        )
        results = SceneResults(max_distance=max_distance, total_time=total_time)
        setup = RenderingManager().create_standard_renderer(
            strategy, params, results, ScreenConfig(width, height)
        )
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    validation = setup.validation
    color = "green" if validation.overall_score == 1.0 else "yellow"
    console.print(Panel.fit(
        f"[bold]Overall score: {validation.overall_score:.2f}[/bold]\n"
        f"Geometry: {'ok' if validation.geometry_valid else 'failed'}\n"
        f"Physics: {'ok' if validation.physics_valid else 'failed'}\n"
        f"Visual: {'ok' if validation.visual_valid else 'failed'}\n"
        f"Scale: {setup.coordinate_config.scale:.1f} px/m",
        border_style=color,
    ))

    if validation.issues:
        console.print("\n[bold]Issues[/bold]\n")
        for i, issue in enumerate(validation.issues, 1):
            console.print(f"  {i}. {issue}")

    if validation.recommendations:
        console.print("\n[bold]Recommendations[/bold]\n")
        for i, rec in enumerate(validation.recommendations, 1):
            console.print(f"  {i}. {rec}")


@app.command()
def version():
    """Show version information."""
    from simrender import __version__

    console.print(f"simrender v{__version__}")


if __name__ == "__main__":
    app()
