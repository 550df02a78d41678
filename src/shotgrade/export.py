"""Export module: write analysis reports in various formats."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from shotgrade.scoring.types import AnalysisReport


def report_to_dict(report: AnalysisReport) -> dict[str, Any]:
    """Convert a report to plain JSON-compatible types.

    Category keys use their display names ("focus & clarity").
    """
    photo = report.photo_type
    m = report.measurements
    current = photo.current_settings
    recommended = photo.recommended_settings

    return {
        "overall_score": report.overall_score,
        "categories": {
            category.value: {
                "score": c.score,
                "weight": c.weight,
                "criteria": list(c.criteria),
                "feedback": list(c.feedback),
                "technical_spec": {
                    "basic": list(c.technical_spec.basic),
                    "advanced": list(c.technical_spec.advanced),
                    "reference": c.technical_spec.reference,
                },
            }
            for category, c in report.categories.items()
        },
        "photo_type": {
            "name": photo.name.value,
            "confidence": photo.confidence,
            "current_settings": {
                "resolution": current.resolution,
                "aspect_ratio": current.aspect_ratio,
                "brightness": current.brightness,
                "sharpness": current.sharpness,
                "saturation": current.saturation,
                "contrast": current.contrast,
            },
            "recommended_settings": {
                "focal_length": recommended.focal_length,
                "iso": recommended.iso,
                "exposure_time": recommended.exposure_time,
                "aperture": recommended.aperture,
                "tips": list(recommended.tips),
            },
        },
        "measurements": {
            "exposure": {
                "histogram": list(m.exposure.histogram),
                "underexposed_pct": m.exposure.underexposed_pct,
                "midtones_pct": m.exposure.midtones_pct,
                "overexposed_pct": m.exposure.overexposed_pct,
                "exposure_score": m.exposure.exposure_score,
            },
            "clarity": {
                "average_edge_strength": m.clarity.average_edge_strength,
                "sharpness_ratio": m.clarity.sharpness_ratio,
                "clarity_score": m.clarity.clarity_score,
            },
            "color": {
                "color_variety": m.color.color_variety,
                "average_saturation": m.color.average_saturation,
                "hue_balance": m.color.hue_balance,
                "color_score": m.color.color_score,
            },
            "composition": {
                "regions": [r.weight for r in m.composition.regions],
                "horizontal_balance": m.composition.horizontal_balance,
                "vertical_balance": m.composition.vertical_balance,
                "rule_of_thirds": m.composition.rule_of_thirds,
                "composition_score": m.composition.composition_score,
            },
        },
        "strengths": [h.category.value for h in report.strengths()],
        "improvements": [h.category.value for h in report.improvements()],
    }


def export_json(
    report: AnalysisReport,
    out_path: Path,
    source: Path | None = None,
) -> None:
    """Write a report as indented JSON.

    Args:
        report: Report to export.
        out_path: Output file path.
        source: Analyzed image path, recorded under "source".
    """
    data = report_to_dict(report)
    if source is not None:
        data = {"source": str(source), **data}
    out_path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


def export_text(
    report: AnalysisReport,
    out_path: Path,
    source: Path | None = None,
) -> None:
    """Write a human-readable summary of a report.

    Args:
        report: Report to export.
        out_path: Output file path.
        source: Analyzed image path (for header).
    """
    timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
    photo = report.photo_type

    lines = [
        "# shotgrade report",
        f"# generated: {timestamp}",
    ]
    if source:
        lines.append(f"# source: {source}")
    lines.append("")

    lines.append(f"Overall Score: {report.overall_score:.1f}/10")
    lines.append(
        f"Photo Type: {photo.name.value} ({round(photo.confidence * 100)}% confidence)"
    )
    lines.append("")

    for category, c in report.categories.items():
        lines.append(
            f"{category.value} ({c.weight * 100:.0f}%): {c.score:.1f}/10"
        )
        for line in c.feedback[:2]:
            lines.append(f"  - {line}")
    lines.append("")

    settings = photo.recommended_settings
    lines.append("Recommended Settings:")
    lines.append(f"  Focal length: {settings.focal_length}")
    lines.append(f"  ISO: {settings.iso}")
    lines.append(f"  Exposure time: {settings.exposure_time}")
    lines.append(f"  Aperture: {settings.aperture}")
    for tip in settings.tips:
        lines.append(f"  * {tip}")

    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def export_ranking(
    ranked: list[tuple[str, AnalysisReport]],
    out_path: Path,
    source_dir: Path | None = None,
) -> None:
    """Export ranked paths with their overall scores to a text file.

    Args:
        ranked: (path, report) pairs, best first.
        out_path: Output file path.
        source_dir: Scanned directory (for header).
    """
    timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")

    lines = [
        "# shotgrade ranking",
        f"# generated: {timestamp}",
        f"# count: {len(ranked)}",
    ]
    if source_dir:
        lines.append(f"# source: {source_dir}")
    lines.append("")

    for path, report in ranked:
        lines.append(
            f"{report.overall_score:.2f}\t{report.photo_type.name.value}\t{path}"
        )

    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
