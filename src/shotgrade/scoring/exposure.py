"""Exposure pass: luma histogram and tonal distribution."""

from __future__ import annotations

import numpy as np

from shotgrade.scoring.types import ExposureResult, PixelBuffer
from shotgrade.scoring.utils import SAMPLE_STRIDE, PixelSampler, clamp

SHADOW_END = 64
HIGHLIGHT_START = 192
TARGET_MIDTONES = 0.70


def compute_histogram(buffer: PixelBuffer, stride: int = SAMPLE_STRIDE) -> np.ndarray:
    """Build a 256-bin luma histogram from strided samples.

    Luma is the plain channel mean, not perceptual luminance. Bin
    counts are multiplied by the stride to approximate full-image
    counts.
    """
    samples = PixelSampler(buffer, stride).samples()
    rgb_sum = samples[:, :3].astype(np.int32).sum(axis=1)
    # (r+g+b)/3 never lands on .5, so banker's rounding is exact here
    luma = np.rint(rgb_sum / 3.0).astype(np.intp)
    hist = np.bincount(luma, minlength=256)
    return hist * stride


def compute_exposure_score(
    shadows: float, midtones: float, highlights: float
) -> float:
    """Score tonal fractions (each 0-1) on a 0-10 scale.

    Rewards a histogram with about 70% of its mass in the midtones and
    lightly penalizes clipped shadows and highlights.
    """
    score = (
        (1 - abs(midtones - TARGET_MIDTONES)) * 7
        + (1 - shadows) * 1.5
        + (1 - highlights) * 1.5
    )
    return clamp(score)


def compute_exposure(
    buffer: PixelBuffer, stride: int = SAMPLE_STRIDE
) -> ExposureResult:
    """Compute exposure metrics for a buffer.

    Args:
        buffer: Decoded RGBA image.
        stride: Linear sampling stride in pixels.

    Returns:
        ExposureResult with histogram, band percentages and score.
    """
    hist = compute_histogram(buffer, stride)
    total = buffer.pixel_count

    if total:
        shadows = hist[:SHADOW_END].sum() / total
        midtones = hist[SHADOW_END:HIGHLIGHT_START].sum() / total
        highlights = hist[HIGHLIGHT_START:].sum() / total
    else:
        shadows = midtones = highlights = 0.0

    return ExposureResult(
        histogram=tuple(int(v) for v in hist),
        underexposed_pct=float(shadows * 100),
        midtones_pct=float(midtones * 100),
        overexposed_pct=float(highlights * 100),
        exposure_score=compute_exposure_score(
            float(shadows), float(midtones), float(highlights)
        ),
    )
