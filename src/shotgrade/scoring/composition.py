"""Composition pass: 3x3 visual weight, balance, rule of thirds."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shotgrade.scoring.types import CompositionResult, PixelBuffer, Region
from shotgrade.scoring.utils import GRID_STEP, GridSampler, clamp

# Cell pairs flanking each thirds intersection (row-major 3x3 indices)
THIRDS_PAIRS = ((1, 3), (1, 5), (7, 3), (7, 5))


def compute_region_weights(
    buffer: PixelBuffer, step: int = GRID_STEP
) -> NDArray[np.float64]:
    """Accumulate darkness mass into a 3x3 grid and normalize.

    Dark pixels carry more visual weight: each sample adds
    1 - brightness to its cell. Weights sum to 1 unless every sample
    is pure white, in which case all nine stay 0.

    Returns:
        Array of 9 normalized weights, row-major.
    """
    weights = np.zeros(9, dtype=np.float64)
    width, height = buffer.width, buffer.height
    grid = GridSampler(buffer, step)
    if len(grid) == 0:
        return weights

    y, x = grid.mesh()
    rgb = buffer.as_array()[y, x, :3].astype(np.float64)
    darkness = 1 - rgb.sum(axis=-1) / (3 * 255)

    region_x = np.floor(x / (width / 3)).astype(np.intp)
    region_y = np.floor(y / (height / 3)).astype(np.intp)
    inside = (region_x >= 0) & (region_x < 3) & (region_y >= 0) & (region_y < 3)

    idx = (region_y * 3 + region_x)[inside]
    weights += np.bincount(idx, weights=darkness[inside], minlength=9)

    total = weights.sum() or 1.0
    return weights / total


def compute_visual_balance(weights: NDArray[np.float64]) -> tuple[float, float]:
    """Left/right and top/bottom balance from region weights.

    Returns:
        (horizontal_balance, vertical_balance), each 0-1.
    """
    grid = weights.reshape(3, 3)
    horizontal = 1 - abs(grid[:, 0].sum() - grid[:, 2].sum())
    vertical = 1 - abs(grid[0, :].sum() - grid[2, :].sum())
    return float(horizontal), float(vertical)


def compute_thirds_alignment(weights: NDArray[np.float64]) -> float:
    """Strongest thirds intersection mass, doubled (0-2)."""
    return float(max(weights[a] + weights[b] for a, b in THIRDS_PAIRS) * 2)


def compute_composition(
    buffer: PixelBuffer, step: int = GRID_STEP
) -> CompositionResult:
    """Compute composition metrics for a buffer.

    Args:
        buffer: Decoded RGBA image.
        step: Grid sampling step in pixels, both axes.

    Returns:
        CompositionResult with regions, balance and score.
    """
    weights = compute_region_weights(buffer, step)
    horizontal, vertical = compute_visual_balance(weights)
    thirds = compute_thirds_alignment(weights)

    score = horizontal * 3 + vertical * 3 + thirds * 4

    regions = tuple(
        Region(row=i // 3, col=i % 3, weight=float(w)) for i, w in enumerate(weights)
    )

    return CompositionResult(
        regions=regions,
        horizontal_balance=horizontal,
        vertical_balance=vertical,
        rule_of_thirds=thirds,
        composition_score=clamp(score),
    )
