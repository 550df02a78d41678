"""Pixel-buffer analysis and scoring pipeline.

Analysis Passes (independent, read-only over the buffer):
    1. Exposure - luma histogram, shadow/midtone/highlight balance
    2. Clarity - gradient edge strength as a sharpness proxy
    3. Color - hue variety, saturation, hue balance
    4. Composition - 3x3 visual weight, balance, rule of thirds

The four pass results then feed the genre classifier and the
seven-category weighted aggregate, which attaches templated feedback.
"""

from __future__ import annotations

import logging
import time

from shotgrade.scoring.clarity import compute_clarity, compute_edge_strengths
from shotgrade.scoring.classify import PHOTO_RULES, classify_photo
from shotgrade.scoring.color import compute_color, rgb_to_hue_saturation
from shotgrade.scoring.composition import (
    compute_composition,
    compute_region_weights,
    compute_thirds_alignment,
    compute_visual_balance,
)
from shotgrade.scoring.exposure import compute_exposure, compute_histogram
from shotgrade.scoring.feedback import feedback_level, get_feedback, score_color
from shotgrade.scoring.types import (
    AnalysisReport,
    Category,
    CategoryScore,
    ClarityResult,
    ColorResult,
    CompositionResult,
    ExposureResult,
    FeedbackLevel,
    Highlight,
    InvalidBufferError,
    Measurements,
    PhotoGenre,
    PhotoType,
    PixelBuffer,
    Region,
    ShotgradeError,
)
from shotgrade.scoring.utils import GRID_STEP, SAMPLE_STRIDE, GridSampler, PixelSampler
from shotgrade.scoring.weights import (
    CATEGORY_WEIGHTS,
    aggregate_scores,
    compute_category_scores,
    overall_score,
)

logger = logging.getLogger(__name__)

__all__ = [
    # Types
    "PixelBuffer",
    "ExposureResult",
    "ClarityResult",
    "ColorResult",
    "CompositionResult",
    "Region",
    "PhotoType",
    "PhotoGenre",
    "Category",
    "CategoryScore",
    "FeedbackLevel",
    "Highlight",
    "Measurements",
    "AnalysisReport",
    "ShotgradeError",
    "InvalidBufferError",
    # Sampling
    "PixelSampler",
    "GridSampler",
    "SAMPLE_STRIDE",
    "GRID_STEP",
    # Main entry points
    "analyze",
    "measure",
    "build_report",
    # Pass functions
    "compute_exposure",
    "compute_clarity",
    "compute_color",
    "compute_composition",
    # Individual metrics (for direct access)
    "compute_histogram",
    "compute_edge_strengths",
    "rgb_to_hue_saturation",
    "compute_region_weights",
    "compute_visual_balance",
    "compute_thirds_alignment",
    # Classification and aggregation
    "PHOTO_RULES",
    "classify_photo",
    "CATEGORY_WEIGHTS",
    "compute_category_scores",
    "aggregate_scores",
    "overall_score",
    "feedback_level",
    "get_feedback",
    "score_color",
]


def measure(
    buffer: PixelBuffer,
    stride: int = SAMPLE_STRIDE,
    step: int = GRID_STEP,
) -> Measurements:
    """Run the four analysis passes sequentially."""
    return Measurements(
        exposure=compute_exposure(buffer, stride),
        clarity=compute_clarity(buffer, step),
        color=compute_color(buffer, stride),
        composition=compute_composition(buffer, step),
    )


def build_report(buffer: PixelBuffer, measurements: Measurements) -> AnalysisReport:
    """Classify and aggregate finished measurements into a report."""
    m = measurements
    photo_type = classify_photo(
        buffer.width, buffer.height, m.exposure, m.clarity, m.color, m.composition
    )
    categories = aggregate_scores(m.exposure, m.clarity, m.color, m.composition)
    return AnalysisReport(
        categories=categories,
        overall_score=overall_score(categories),
        photo_type=photo_type,
        measurements=m,
    )


def analyze(
    buffer: PixelBuffer,
    parallel: bool = False,
    workers: int | None = None,
    stride: int = SAMPLE_STRIDE,
    step: int = GRID_STEP,
) -> AnalysisReport:
    """Compute the full quality report for a decoded image.

    Args:
        buffer: Decoded RGBA image. Never modified.
        parallel: Run the four passes on worker threads.
        workers: Thread count when parallel (default: one per pass).
        stride: Linear sampling stride for exposure and color.
        step: Grid step for clarity and composition.

    Returns:
        AnalysisReport with category scores, overall score and genre.
    """
    if not isinstance(buffer, PixelBuffer):
        raise InvalidBufferError(f"Expected PixelBuffer, got {type(buffer).__name__}")

    start = time.perf_counter()
    if parallel:
        from shotgrade.parallel import run_analyzers

        measurements = run_analyzers(buffer, workers=workers, stride=stride, step=step)
    else:
        measurements = measure(buffer, stride, step)

    report = build_report(buffer, measurements)
    logger.debug(
        "Analyzed %dx%d buffer in %.1fms: overall=%.2f genre=%s",
        buffer.width,
        buffer.height,
        (time.perf_counter() - start) * 1000,
        report.overall_score,
        report.photo_type.name.value,
    )
    return report
