"""Shared pixel sampling utilities for the analyzers."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

from shotgrade.scoring.types import PixelBuffer

# Exposure and color sample every 4th pixel in a flat scan
SAMPLE_STRIDE = 4
# Clarity and composition sample a 2-D grid, every 4th row and column
GRID_STEP = 4


def clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    """Clamp value into [low, high]."""
    return float(max(low, min(high, value)))


class PixelSampler:
    """Strided row-major walk over a pixel buffer.

    Visits pixel 0, stride, 2*stride, ... of the flattened image.
    Iterating yields (x, y, r, g, b, a) tuples and can be repeated;
    samples() returns the same pixels as an (n, 4) uint8 array for
    vectorized analyzers.
    """

    def __init__(self, buffer: PixelBuffer, stride: int = SAMPLE_STRIDE) -> None:
        if stride < 1:
            raise ValueError(f"stride must be >= 1, got {stride}")
        self.buffer = buffer
        self.stride = stride

    def __len__(self) -> int:
        return -(-self.buffer.pixel_count // self.stride)

    def __iter__(self) -> Iterator[tuple[int, int, int, int, int, int]]:
        width = self.buffer.width
        data = self.buffer.pixels
        for i in range(0, self.buffer.pixel_count, self.stride):
            y, x = divmod(i, width)
            offset = i * 4
            r, g, b, a = data[offset : offset + 4]
            yield x, y, r, g, b, a

    def samples(self) -> NDArray[np.uint8]:
        """Sampled pixels as an (n, 4) RGBA array."""
        flat = np.frombuffer(self.buffer.pixels, dtype=np.uint8).reshape(-1, 4)
        return flat[:: self.stride]


class GridSampler:
    """Regular 2-D grid of sample points.

    Points are (x, y) with x in range(margin, width - margin, step) and
    y likewise. A margin keeps neighbor lookups inside the image.
    """

    def __init__(
        self, buffer: PixelBuffer, step: int = GRID_STEP, margin: int = 0
    ) -> None:
        if step < 1:
            raise ValueError(f"step must be >= 1, got {step}")
        self.buffer = buffer
        self.step = step
        self.margin = margin
        self.xs = np.arange(margin, buffer.width - margin, step, dtype=np.intp)
        self.ys = np.arange(margin, buffer.height - margin, step, dtype=np.intp)

    def __len__(self) -> int:
        return len(self.xs) * len(self.ys)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        for y in self.ys:
            for x in self.xs:
                yield int(x), int(y)

    def mesh(self) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
        """Row-major (ys, xs) coordinate grids for fancy indexing."""
        yy, xx = np.meshgrid(self.ys, self.xs, indexing="ij")
        return yy, xx
