"""Color pass: hue variety, saturation, hue balance."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shotgrade.scoring.types import ColorResult, PixelBuffer
from shotgrade.scoring.utils import SAMPLE_STRIDE, PixelSampler, clamp

HUE_BUCKET_DEGREES = 30  # 12 buckets for variety
HUE_GROUP_DEGREES = 60  # 6 groups for balance
NUM_HUE_BUCKETS = 360 // HUE_BUCKET_DEGREES
NUM_HUE_GROUPS = 360 // HUE_GROUP_DEGREES


def rgb_to_hue_saturation(
    rgb: NDArray[np.uint8],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Convert (n, 3) RGB samples to HSV hue (degrees) and saturation.

    Gray pixels get hue 0. When channels tie for the maximum, red wins
    over green and green over blue.
    """
    rgb = rgb.astype(np.float64) / 255.0
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    cmax = rgb.max(axis=1)
    cmin = rgb.min(axis=1)
    diff = cmax - cmin

    chromatic = diff > 0
    safe_diff = np.where(chromatic, diff, 1.0)

    hue = np.select(
        [~chromatic, cmax == r, cmax == g],
        [0.0, 60 * ((g - b) / safe_diff), 60 * (2 + (b - r) / safe_diff)],
        default=60 * (4 + (r - g) / safe_diff),
    )
    hue = np.where(hue < 0, hue + 360, hue)

    sat = np.where(cmax > 0, diff / np.where(cmax > 0, cmax, 1.0), 0.0)
    return hue, sat


def compute_color_variety(hue: NDArray[np.float64]) -> float:
    """Fraction of the 12 hue buckets that occur at least once."""
    if hue.size == 0:
        return 0.0
    # Buckets centred on multiples of 30 degrees; 345-360 folds into bucket 0
    buckets = np.floor(hue / HUE_BUCKET_DEGREES + 0.5).astype(np.intp) % NUM_HUE_BUCKETS
    return len(np.unique(buckets)) / NUM_HUE_BUCKETS


def compute_hue_balance(hue: NDArray[np.float64]) -> float:
    """1 minus the share of the most common 60 degree hue group."""
    if hue.size == 0:
        return 0.0
    groups = np.floor(hue / HUE_GROUP_DEGREES).astype(np.intp)
    in_range = groups[(groups >= 0) & (groups < NUM_HUE_GROUPS)]
    counts = np.bincount(in_range, minlength=NUM_HUE_GROUPS)
    return float(1 - counts.max() / hue.size)


def compute_color(buffer: PixelBuffer, stride: int = SAMPLE_STRIDE) -> ColorResult:
    """Compute color metrics for a buffer.

    Args:
        buffer: Decoded RGBA image.
        stride: Linear sampling stride in pixels.

    Returns:
        ColorResult with variety, saturation, balance and score.
    """
    samples = PixelSampler(buffer, stride).samples()
    hue, sat = rgb_to_hue_saturation(samples[:, :3])

    variety = compute_color_variety(hue)
    average_saturation = float(sat.mean()) if sat.size else 0.0
    balance = compute_hue_balance(hue)

    score = variety * 4 + average_saturation * 3 + balance * 3

    return ColorResult(
        color_variety=variety,
        average_saturation=average_saturation,
        hue_balance=balance,
        color_score=clamp(score),
    )
