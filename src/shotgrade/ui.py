"""UI utilities for the shotgrade CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from shotgrade.scoring.feedback import score_color
from shotgrade.scoring.types import AnalysisReport

# Rich styles for score_color() levels
SCORE_STYLES = {
    "success": "bold green",
    "primary": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
}


def configure_logging(verbose: bool = False) -> None:
    """Route shotgrade logging through rich (DEBUG when verbose)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def create_progress() -> Progress:
    """Create a standard progress bar for shotgrade operations.

    Returns:
        Configured Progress instance with spinner, description,
        bar, percentage, count, and elapsed time columns.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TextColumn("({task.completed}/{task.total})"),
        TimeElapsedColumn(),
        console=None,
    )


def _styled(score: float) -> str:
    style = SCORE_STYLES[score_color(score)]
    return f"[{style}]{score:.1f}[/]"


def render_report(
    report: AnalysisReport,
    console: Console | None = None,
    verbose: bool = False,
) -> None:
    """Print a report as rich tables.

    Args:
        report: Report to display.
        console: Target console (default: stdout).
        verbose: Also show criteria and raw measurements.
    """
    console = console or Console()
    photo = report.photo_type

    console.print(f"Overall Score: {_styled(report.overall_score)}/10")
    console.print(
        f"Photo Type: [bold]{photo.name.value}[/] "
        f"({round(photo.confidence * 100)}% confidence)"
    )

    table = Table(title="Category Scores")
    table.add_column("Category")
    table.add_column("Weight", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Feedback")
    for category, c in report.categories.items():
        table.add_row(
            category.value,
            f"{c.weight * 100:.0f}%",
            _styled(c.score),
            "\n".join(c.feedback[:2]),
        )
    console.print(table)

    current = photo.current_settings
    settings = photo.recommended_settings
    cam = Table(title=f"{photo.name.value} Photography Settings")
    cam.add_column("Setting")
    cam.add_column("Current")
    cam.add_column("Recommended")
    cam.add_row("Resolution", current.resolution, "")
    cam.add_row("Aspect ratio", f"{current.aspect_ratio:.2f}", "")
    cam.add_row("Brightness", f"{current.brightness}%", "")
    cam.add_row("Sharpness", f"{current.sharpness}%", "")
    cam.add_row("Saturation", f"{current.saturation}%", "")
    cam.add_row("Contrast", f"{current.contrast}%", "")
    cam.add_row("Focal length", "", settings.focal_length)
    cam.add_row("ISO", "", settings.iso)
    cam.add_row("Exposure time", "", settings.exposure_time)
    cam.add_row("Aperture", "", settings.aperture)
    console.print(cam)
    for tip in settings.tips:
        console.print(f"  • {tip}")

    strengths = report.strengths()
    improvements = report.improvements()
    if strengths:
        console.print("\n[bold green]Strengths[/]")
        for h in strengths:
            console.print(f"  {h.category.value} ({h.score:.1f}/10): {'; '.join(h.feedback)}")
    if improvements:
        console.print("\n[bold yellow]Areas for Improvement[/]")
        for h in improvements:
            console.print(f"  {h.category.value} ({h.score:.1f}/10): {'; '.join(h.feedback)}")

    if verbose:
        m = report.measurements
        console.print()
        console.print(
            f"Exposure: under={m.exposure.underexposed_pct:.1f}% "
            f"mid={m.exposure.midtones_pct:.1f}% over={m.exposure.overexposed_pct:.1f}% "
            f"score={m.exposure.exposure_score:.2f}"
        )
        console.print(
            f"Clarity: edge={m.clarity.average_edge_strength:.2f} "
            f"ratio={m.clarity.sharpness_ratio:.2f} score={m.clarity.clarity_score:.2f}"
        )
        console.print(
            f"Color: variety={m.color.color_variety:.2f} "
            f"sat={m.color.average_saturation:.2f} balance={m.color.hue_balance:.2f} "
            f"score={m.color.color_score:.2f}"
        )
        weights = " ".join(f"{r.weight:.2f}" for r in m.composition.regions)
        console.print(
            f"Composition: regions=[{weights}] "
            f"h={m.composition.horizontal_balance:.2f} v={m.composition.vertical_balance:.2f} "
            f"thirds={m.composition.rule_of_thirds:.2f} "
            f"score={m.composition.composition_score:.2f}"
        )
        for category, c in report.categories.items():
            console.print(f"  {category.value} criteria: {', '.join(c.criteria)}")
