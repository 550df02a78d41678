"""Clarity pass: edge strength as a sharpness proxy."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shotgrade.scoring.types import ClarityResult, PixelBuffer
from shotgrade.scoring.utils import GRID_STEP, GridSampler, clamp

# Typical photos land around "good"; only clearly soft images drop below
BASE_SCORE = 7.5
EDGE_STRENGTH_TARGET = 40.0


def compute_edge_strengths(
    buffer: PixelBuffer, step: int = GRID_STEP
) -> NDArray[np.float64]:
    """Estimate gradient magnitude at each interior grid point.

    Uses a six-tap Sobel-like kernel in each direction, scaled by 1/8.
    The kernels read the red channel only: neighbor offsets are whole
    pixels from a red-aligned index, so no grayscale conversion happens.

    Returns:
        Flat array of edge strengths, one per sample point.
    """
    # Neighbors reach 2 pixels right/down, so keep at least that margin
    grid = GridSampler(buffer, step, margin=max(step, 2))
    if len(grid) == 0:
        return np.zeros(0, dtype=np.float64)

    red = buffer.as_array()[:, :, 0].astype(np.float64)
    y, x = grid.mesh()

    gx = (
        -1 * red[y, x - 1]
        + 1 * red[y, x + 1]
        - 2 * red[y + 1, x - 1]
        + 2 * red[y + 1, x + 1]
        - 1 * red[y + 2, x - 1]
        + 1 * red[y + 2, x + 1]
    ) / 8

    gy = (
        -1 * red[y - 1, x]
        + 1 * red[y + 1, x]
        - 2 * red[y - 1, x + 1]
        + 2 * red[y + 1, x + 1]
        - 1 * red[y - 1, x + 2]
        + 1 * red[y + 1, x + 2]
    ) / 8

    return np.sqrt(gx**2 + gy**2).ravel()


def compute_clarity_score(average: float, sharpness_ratio: float) -> float:
    """Score edge statistics on a 0-10 scale."""
    return clamp(
        BASE_SCORE
        + sharpness_ratio * 2
        + min(1.0, average / EDGE_STRENGTH_TARGET) * 2
    )


def compute_clarity(buffer: PixelBuffer, step: int = GRID_STEP) -> ClarityResult:
    """Compute clarity metrics for a buffer.

    A flat image has zero gradient everywhere and scores exactly the
    base score. Images too small to hold an interior sample point are
    treated the same way.
    """
    strengths = compute_edge_strengths(buffer, step)

    if strengths.size:
        average = float(strengths.mean())
        peak = float(strengths.max())
    else:
        average = peak = 0.0

    sharpness_ratio = average / max(peak, 1.0)

    return ClarityResult(
        average_edge_strength=average,
        sharpness_ratio=sharpness_ratio,
        clarity_score=compute_clarity_score(average, sharpness_ratio),
    )
