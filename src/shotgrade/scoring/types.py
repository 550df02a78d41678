"""Score dataclasses for the analysis pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray


class ShotgradeError(Exception):
    """Base class for shotgrade errors."""


class InvalidBufferError(ShotgradeError, ValueError):
    """Pixel buffer is inconsistent with its declared dimensions."""


class Category(str, Enum):
    """Weighted scoring categories, in report order."""

    PRESENTATION = "presentation"
    CREATIVITY = "creativity"
    AESTHETICS = "aesthetics"
    COMPOSITION = "composition"
    FOCUS_CLARITY = "focus & clarity"
    EXPOSURE = "exposure"
    LIGHTING = "lighting"


class FeedbackLevel(str, Enum):
    """Qualitative score bands."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    CRITICAL = "critical"


class PhotoGenre(str, Enum):
    """Heuristic photo genres."""

    LANDSCAPE = "Landscape"
    PORTRAIT = "Portrait"
    ACTION = "Action"
    MACRO = "Macro"
    GENERAL = "General"


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA8 image, row-major, 4 bytes per pixel.

    The buffer is never written to. Construction fails fast with
    InvalidBufferError when the byte length does not match the
    declared dimensions.
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise InvalidBufferError(
                f"Dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if not isinstance(self.pixels, bytes):
            # Detach from any mutable source (bytearray, memoryview)
            object.__setattr__(self, "pixels", bytes(self.pixels))
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise InvalidBufferError(
                f"Expected {expected} bytes for {self.width}x{self.height} RGBA, "
                f"got {len(self.pixels)}"
            )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def as_array(self) -> NDArray[np.uint8]:
        """Return a read-only (height, width, 4) view of the pixels."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, 4
        )


@dataclass(frozen=True)
class ExposureResult:
    """Luma histogram and exposure metrics."""

    histogram: tuple[int, ...]  # 256 bins, scaled to full-image counts
    underexposed_pct: float  # 0-100, luma [0, 64)
    midtones_pct: float  # 0-100, luma [64, 192)
    overexposed_pct: float  # 0-100, luma [192, 256)
    exposure_score: float  # 0-10


@dataclass(frozen=True)
class ClarityResult:
    """Gradient-based sharpness metrics."""

    average_edge_strength: float  # >= 0, unbounded
    sharpness_ratio: float  # 0-1, average / max edge strength
    clarity_score: float  # 0-10


@dataclass(frozen=True)
class ColorResult:
    """HSV color statistics."""

    color_variety: float  # 0-1, fraction of 12 hue buckets observed
    average_saturation: float  # 0-1
    hue_balance: float  # 0-1, 1 = no single hue group dominates
    color_score: float  # 0-10


@dataclass(frozen=True)
class Region:
    """One cell of the 3x3 composition grid."""

    row: int
    col: int
    weight: float  # normalized darkness mass


@dataclass(frozen=True)
class CompositionResult:
    """Visual weight distribution over a 3x3 grid."""

    regions: tuple[Region, ...]  # 9 cells, row-major
    horizontal_balance: float  # 0-1
    vertical_balance: float  # 0-1
    rule_of_thirds: float  # 0-2
    composition_score: float  # 0-10


@dataclass(frozen=True)
class CurrentSettings:
    """Descriptive snapshot of what the image looks like now."""

    resolution: str
    aspect_ratio: float  # rounded to 2 decimals
    brightness: int  # percent
    sharpness: int  # percent (rounded edge strength)
    saturation: int  # percent
    contrast: int  # percent


@dataclass(frozen=True)
class CaptureSettings:
    """Recommended camera settings for a genre."""

    focal_length: str
    iso: str
    exposure_time: str
    aperture: str
    tips: tuple[str, ...] = ()


@dataclass(frozen=True)
class PhotoType:
    """Heuristic genre classification with recommendations."""

    name: PhotoGenre
    confidence: float  # 0-1
    current_settings: CurrentSettings
    recommended_settings: CaptureSettings


@dataclass(frozen=True)
class TechnicalSpec:
    """Static reference material for a category."""

    basic: tuple[str, ...]
    advanced: tuple[str, ...]
    reference: str


@dataclass(frozen=True)
class CategoryScore:
    """Score and feedback for one weighted category."""

    category: Category
    score: float  # 0-10
    weight: float  # 0-1
    criteria: tuple[str, ...]
    feedback: tuple[str, ...]
    technical_spec: TechnicalSpec


@dataclass(frozen=True)
class Highlight:
    """A category called out as a strength or an area to improve."""

    category: Category
    score: float
    feedback: tuple[str, ...]  # first two feedback lines


@dataclass(frozen=True)
class Measurements:
    """Raw analyzer outputs behind a report."""

    exposure: ExposureResult
    clarity: ClarityResult
    color: ColorResult
    composition: CompositionResult


@dataclass(frozen=True)
class AnalysisReport:
    """Complete assessment of one image."""

    categories: Mapping[Category, CategoryScore]
    overall_score: float  # 0-10, weighted sum of category scores
    photo_type: PhotoType
    measurements: Measurements

    def strengths(self, threshold: float = 7.0) -> list[Highlight]:
        """Categories scoring at or above threshold."""
        return [
            Highlight(c.category, c.score, c.feedback[:2])
            for c in self.categories.values()
            if c.score >= threshold
        ]

    def improvements(self, threshold: float = 7.0) -> list[Highlight]:
        """Categories scoring below threshold."""
        return [
            Highlight(c.category, c.score, c.feedback[:2])
            for c in self.categories.values()
            if c.score < threshold
        ]
