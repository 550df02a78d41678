"""Genre classification and capture-setting recommendations.

The classifier is an ordered rule table: the first rule whose predicate
holds decides the genre, and General catches everything else. Rule
order is significant (a wide, colorful, blurry frame is a Landscape,
not Action).
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from shotgrade.scoring.types import (
    CaptureSettings,
    ClarityResult,
    ColorResult,
    CompositionResult,
    CurrentSettings,
    ExposureResult,
    PhotoGenre,
    PhotoType,
)

# Any scaled histogram bin above this suggests a busy, high-key action frame
HISTOGRAM_SPIKE = 1000


@dataclass(frozen=True)
class Observation:
    """Everything the rules look at, gathered once per image."""

    width: int
    height: int
    exposure: ExposureResult
    clarity: ClarityResult
    color: ColorResult
    composition: CompositionResult

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 0.0

    @property
    def edge(self) -> float:
        return self.clarity.average_edge_strength

    @property
    def under(self) -> float:
        return self.exposure.underexposed_pct

    @property
    def over(self) -> float:
        return self.exposure.overexposed_pct

    def max_region_weight(self) -> float:
        return max((r.weight for r in self.composition.regions), default=0.0)

    def has_histogram_spike(self) -> bool:
        return any(count > HISTOGRAM_SPIKE for count in self.exposure.histogram)


@dataclass(frozen=True)
class PhotoRule:
    """One branch of the decision list."""

    genre: PhotoGenre
    confidence: float
    matches: Callable[[Observation], bool]
    settings: Callable[[Observation], CaptureSettings]


def _landscape_settings(o: Observation) -> CaptureSettings:
    return CaptureSettings(
        focal_length="14-24mm" if o.width > 3000 else "24-35mm",
        iso="400-800" if o.under > 30 else "100-400",
        exposure_time="1/1000 - 1/2000" if o.over > 30 else "1/60 - 1/250",
        aperture="f/8 - f/16",
        tips=(
            "Consider using HDR for high contrast scenes"
            if o.under > 30
            else "Good dynamic range maintained",
            "Wide panoramic composition detected"
            if o.aspect_ratio > 1.5
            else "Standard landscape ratio detected",
            "Rich color variety - consider polarizing filter"
            if o.color.color_variety > 0.7
            else "Moderate colors - enhance in post",
        ),
    )


def _portrait_settings(o: Observation) -> CaptureSettings:
    return CaptureSettings(
        focal_length="85-135mm" if o.width > 2500 else "50-85mm",
        iso="400-800" if o.edge < 70 else "100-400",
        exposure_time="1/125 - 1/250",
        aperture="f/1.8 - f/4",
        tips=(
            "Sharp focus detected - good eye detail"
            if o.edge > 80
            else "Increase sharpness for better eye detail",
            "Portrait orientation optimal"
            if o.aspect_ratio < 0.8
            else "Consider tighter cropping",
            "Good skin tone saturation"
            if o.color.average_saturation > 0.6
            else "Adjust white balance for better skin tones",
        ),
    )


def _action_settings(o: Observation) -> CaptureSettings:
    return CaptureSettings(
        focal_length="200-400mm" if o.width > 4000 else "70-200mm",
        iso="800-3200",
        exposure_time="1/500 - 1/2000",
        aperture="f/2.8 - f/4",
        tips=(
            "Motion blur detected - increase shutter speed"
            if o.edge < 30
            else "Good motion freeze",
            "Enable continuous autofocus (AI Servo)",
            "Long lens - use monopod for stability"
            if o.width > 4000
            else "Consider closer positioning",
        ),
    )


def _macro_settings(o: Observation) -> CaptureSettings:
    return CaptureSettings(
        focal_length="90-180mm macro",
        iso="100-200" if o.edge > 90 else "200-400",
        exposure_time="1/60 - 1/250",
        aperture="f/8 - f/16",
        tips=(
            "Excellent detail - maintain technique"
            if o.edge > 90
            else "Consider focus stacking",
            "Strong subject isolation"
            if o.max_region_weight() > 0.5
            else "Improve background separation",
            "Use manual focus for precise control",
        ),
    )


def _general_settings(o: Observation) -> CaptureSettings:
    return CaptureSettings(
        focal_length="35-70mm",
        iso="400-1600" if o.under > 30 else "100-400",
        exposure_time="1/60 - 1/250",
        aperture="f/4 - f/8",
        tips=(
            "Increase exposure or use artificial lighting"
            if o.under > 30
            else "Good exposure balance",
            "Increase sharpness" if o.edge < 50 else "Good overall sharpness",
            "Consider color composition"
            if o.color.color_variety < 0.4
            else "Good color variety",
        ),
    )


PHOTO_RULES: tuple[PhotoRule, ...] = (
    PhotoRule(
        PhotoGenre.LANDSCAPE,
        0.8,
        lambda o: o.aspect_ratio > 1.3 and o.color.color_variety > 0.6,
        _landscape_settings,
    ),
    PhotoRule(
        PhotoGenre.PORTRAIT,
        0.85,
        lambda o: o.aspect_ratio < 1.2 and o.edge > 50,
        _portrait_settings,
    ),
    PhotoRule(
        PhotoGenre.ACTION,
        0.75,
        lambda o: o.edge < 40 or o.has_histogram_spike(),
        _action_settings,
    ),
    PhotoRule(
        PhotoGenre.MACRO,
        0.9,
        lambda o: o.edge > 80 and o.max_region_weight() > 0.4,
        _macro_settings,
    ),
)

DEFAULT_RULE = PhotoRule(PhotoGenre.GENERAL, 0.7, lambda o: True, _general_settings)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def describe_current_settings(o: Observation) -> CurrentSettings:
    """Summarize observed brightness, sharpness, saturation and contrast."""
    return CurrentSettings(
        resolution=f"{o.width} × {o.height}",
        aspect_ratio=round(o.aspect_ratio, 2),
        brightness=_round_half_up((1 - o.under / 100) * 100),
        sharpness=_round_half_up(o.edge),
        saturation=_round_half_up(o.color.average_saturation * 100),
        contrast=_round_half_up((1 - abs(o.under - o.over) / 100) * 100),
    )


def select_rule(o: Observation) -> PhotoRule:
    """First rule in PHOTO_RULES that matches, else DEFAULT_RULE."""
    return next((rule for rule in PHOTO_RULES if rule.matches(o)), DEFAULT_RULE)


def classify_photo(
    width: int,
    height: int,
    exposure: ExposureResult,
    clarity: ClarityResult,
    color: ColorResult,
    composition: CompositionResult,
) -> PhotoType:
    """Classify an image into a genre and recommend capture settings.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        exposure: Exposure pass result.
        clarity: Clarity pass result.
        color: Color pass result.
        composition: Composition pass result.

    Returns:
        PhotoType with genre, confidence and settings.
    """
    obs = Observation(width, height, exposure, clarity, color, composition)
    rule = select_rule(obs)
    return PhotoType(
        name=rule.genre,
        confidence=rule.confidence,
        current_settings=describe_current_settings(obs),
        recommended_settings=rule.settings(obs),
    )
