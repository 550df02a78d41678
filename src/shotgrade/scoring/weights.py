"""Category weight table and score aggregation.

Seven weighted categories are derived from the four analyzer scores.
Each category carries a fixed weight, a list of evaluation criteria
and static technical reference material. Weights sum to 1.0, so the
overall score is a convex combination of category scores.
"""

from __future__ import annotations

from types import MappingProxyType

from shotgrade.scoring.feedback import get_feedback
from shotgrade.scoring.types import (
    Category,
    CategoryScore,
    ClarityResult,
    ColorResult,
    CompositionResult,
    ExposureResult,
    TechnicalSpec,
)
from shotgrade.scoring.utils import clamp

CATEGORY_WEIGHTS = MappingProxyType(
    {
        Category.PRESENTATION: 0.20,
        Category.CREATIVITY: 0.15,
        Category.AESTHETICS: 0.15,
        Category.COMPOSITION: 0.15,
        Category.FOCUS_CLARITY: 0.20,
        Category.EXPOSURE: 0.10,
        Category.LIGHTING: 0.05,
    }
)

CATEGORY_CRITERIA = MappingProxyType(
    {
        Category.PRESENTATION: (
            "Color accuracy and calibration",
            "Post-processing technique",
            "Final impact and polish",
            "Print/display readiness",
            "Technical execution",
            "Editing consistency",
            "Output optimization",
            "Detail preservation",
        ),
        Category.CREATIVITY: (
            "Unique perspective",
            "Artistic vision",
            "Emotional impact",
            "Originality",
            "Visual storytelling",
            "Innovative technique",
            "Personal style",
            "Creative risk-taking",
        ),
        Category.AESTHETICS: (
            "Visual harmony",
            "Color relationships",
            "Emotional resonance",
            "Style consistency",
            "Design principles",
            "Tonal balance",
            "Compositional flow",
            "Overall impact",
        ),
        Category.COMPOSITION: (
            "Rule of thirds adherence",
            "Balance and symmetry",
            "Subject placement",
            "Visual flow",
            "Use of space",
            "Leading lines",
            "Frame utilization",
            "Geometric harmony",
        ),
        Category.FOCUS_CLARITY: (
            "Subject sharpness",
            "Depth of field control",
            "Focus accuracy",
            "Detail resolution",
            "Noise management",
            "Overall clarity",
            "Edge definition",
            "Technical precision",
            "Focus point placement",
            "Bokeh quality",
            "Motion stability",
            "Micro contrast",
            "Focus consistency",
            "Atmospheric clarity",
            "Lens performance",
        ),
        Category.EXPOSURE: (
            "Dynamic range",
            "Highlight retention",
            "Shadow detail",
            "Midtone contrast",
            "Exposure accuracy",
            "Histogram balance",
            "Tonal distribution",
            "Light control",
        ),
        Category.LIGHTING: (
            "Light direction",
            "Quality of light",
            "Shadow control",
            "Highlight management",
            "Mood creation",
            "Color temperature",
            "Light balance",
            "Contrast ratio",
        ),
    }
)

TECHNICAL_SPECS = MappingProxyType(
    {
        Category.COMPOSITION: TechnicalSpec(
            basic=(
                "Apply Rule of Thirds grid for balanced composition",
                "Use leading lines to guide viewer's eye",
                "Create depth with foreground, middle ground, background",
                "Maintain clean edges and frame",
                "Consider visual weight distribution",
            ),
            advanced=(
                "Apply Golden Ratio (1.618:1) for dynamic composition",
                "Use diagonal lines at 45° for tension",
                "Implement negative space effectively",
                "Create visual flow through subject placement",
                "Balance color and tonal weight",
            ),
            reference=(
                "• Rule of Thirds: Place key elements at 33.3% and 66.6% intersections\n"
                "• Golden Ratio: Key elements at 38.2% or 61.8% of frame\n"
                "• Dynamic Symmetry: Use diagonal armatures (14.6°, 45°, 75.4°)\n"
                "• Visual Weight: Dark elements need 1.5x more negative space\n"
                "• Aspect Ratios: 3:2 landscape, 4:5 portrait, 16:9 panorama"
            ),
        ),
        Category.FOCUS_CLARITY: TechnicalSpec(
            basic=(
                "Use appropriate autofocus points",
                "Match depth of field to subject",
                "Maintain adequate shutter speed",
                "Control ISO for noise",
                "Keep optics clean",
                "Check focus at 100% zoom",
                "Use focus peaking when available",
                "Consider focus stacking for macro",
                "Stabilize camera properly",
                "Clean lens regularly",
            ),
            advanced=(
                "Calculate hyperfocal distance",
                "Use focus stacking techniques",
                "Master manual focus",
                "Control micro-contrast",
                "Optimize sharpening",
                "Employ selective sharpening",
                "Balance global vs local contrast",
                "Manage atmospheric interference",
                "Account for diffraction limits",
                "Fine-tune autofocus calibration",
            ),
            reference=(
                "• Minimum Shutter Speed: 1/(focal length × crop factor)\n"
                "• Hyperfocal Distance: (focal length² ÷ (f-stop × circle of confusion))\n"
                "• Optimal Aperture: f/8 to f/11 for most lenses\n"
                "• Focus Stacking: 33% DoF overlap between frames\n"
                "• Diffraction Limit: 1.22 × wavelength × f-stop\n"
                "• Circle of Confusion: 0.03mm for full frame\n"
                "• Focus Breathing: Compensate by 5-10%\n"
                "• Critical Focus Zone: ±0.5mm at f/2.8\n"
                "• Focus Shift: +2mm per f-stop closed\n"
                "• Pixel-level Sharpness: MTF50 > 0.3 cycles/pixel"
            ),
        ),
        Category.EXPOSURE: TechnicalSpec(
            basic=(
                "Use histogram to check distribution",
                "Protect highlight detail",
                "Apply exposure compensation",
                "Understand metering modes",
                "Use bracketing for high contrast",
            ),
            advanced=(
                "Master ETTR technique",
                "Use zone system",
                "Calculate filter factors",
                "Control dynamic range",
                "Balance mixed lighting",
            ),
            reference=(
                "• Sunny 16 Rule: f/16 at 1/ISO in full sun\n"
                "• Dynamic Range: 14 stops typical for modern sensors\n"
                "• ETTR: Place highlights at 95% on histogram\n"
                "• Zone System: Middle gray at 18% reflectance\n"
                "• HDR Bracketing: ±2 EV steps for 5 shots"
            ),
        ),
        Category.LIGHTING: TechnicalSpec(
            basic=(
                "Understand light direction",
                "Use diffusion effectively",
                "Control contrast ratio",
                "Manage shadows",
                "Balance fill light",
            ),
            advanced=(
                "Master inverse square law",
                "Control lighting ratios",
                "Use color temperature",
                "Shape light with modifiers",
                "Create mood through lighting",
            ),
            reference=(
                "• Key Light: 45° horizontal, 45° vertical\n"
                "• Fill Ratio: 2:1 standard, 4:1 dramatic\n"
                "• Color Temperature: 5500K daylight, 3200K tungsten\n"
                "• Inverse Square Law: Light falls off with 1/distance²\n"
                "• Golden Hour: Sun at 6° above horizon (±30 minutes)"
            ),
        ),
        Category.CREATIVITY: TechnicalSpec(
            basic=(
                "Explore unique angles",
                "Use creative techniques",
                "Experiment with focal lengths",
                "Try motion effects",
                "Find interesting perspectives",
            ),
            advanced=(
                "Develop personal style",
                "Create visual metaphors",
                "Master advanced techniques",
                "Push technical boundaries",
                "Tell visual stories",
            ),
            reference=(
                "• Multiple Exposure: 50% power per frame\n"
                "• Motion Blur: 1/15 sec for flowing water\n"
                "• Light Painting: f/8, ISO 100, Bulb mode\n"
                "• Zoom Burst: 1-2 sec exposure\n"
                "• Panorama: 33% overlap between frames"
            ),
        ),
        Category.PRESENTATION: TechnicalSpec(
            basic=(
                "Calibrate your monitor",
                "Use appropriate color space",
                "Apply selective adjustments",
                "Maintain clean editing",
                "Export with proper settings",
            ),
            advanced=(
                "Master color grading",
                "Use advanced masking",
                "Control local contrast",
                "Optimize output",
                "Create consistent style",
            ),
            reference=(
                "• Monitor: 120cd/m², 6500K, gamma 2.2\n"
                "• Print Resolution: 300ppi for photo quality\n"
                "• Web Export: sRGB, 72ppi, 85% JPEG\n"
                "• Color Space: ProPhoto RGB for editing\n"
                "• Sharpening: High Pass 0.3px radius, 15%"
            ),
        ),
        Category.AESTHETICS: TechnicalSpec(
            basic=(
                "Create color harmony",
                "Develop visual rhythm",
                "Maintain style consistency",
                "Use negative space",
                "Consider overall mood",
            ),
            advanced=(
                "Apply color theory",
                "Create emotional impact",
                "Control visual hierarchy",
                "Master tonal relationships",
                "Implement design principles",
            ),
            reference=(
                "• Color Harmony: 60-30-10 rule\n"
                "• Visual Weight: Heavier elements toward bottom\n"
                "• Golden Ratio: 1:1.618 for classical proportion\n"
                "• Tonal Range: 3-7 distinct value groups\n"
                "• Style: Color temperature within ±500K"
            ),
        ),
    }
)


def compute_category_scores(
    exposure: ExposureResult,
    clarity: ClarityResult,
    color: ColorResult,
    composition: CompositionResult,
) -> dict[Category, float]:
    """Map the four analyzer scores onto the seven categories."""
    e = exposure.exposure_score
    cl = clarity.clarity_score
    co = color.color_score
    cp = composition.composition_score
    return {
        Category.PRESENTATION: (cl + co) / 2,
        Category.CREATIVITY: co,
        Category.AESTHETICS: (cp + co) / 2,
        Category.COMPOSITION: cp,
        Category.FOCUS_CLARITY: cl,
        Category.EXPOSURE: e,
        Category.LIGHTING: (e + co) / 2,
    }


def build_category_score(category: Category, score: float) -> CategoryScore:
    """Attach weight, criteria, feedback and reference to a raw score."""
    score = clamp(score)
    return CategoryScore(
        category=category,
        score=score,
        weight=CATEGORY_WEIGHTS[category],
        criteria=CATEGORY_CRITERIA[category],
        feedback=get_feedback(category, score),
        technical_spec=TECHNICAL_SPECS[category],
    )


def aggregate_scores(
    exposure: ExposureResult,
    clarity: ClarityResult,
    color: ColorResult,
    composition: CompositionResult,
) -> dict[Category, CategoryScore]:
    """Build one CategoryScore per category, in Category order."""
    raw = compute_category_scores(exposure, clarity, color, composition)
    return {
        category: build_category_score(category, raw[category]) for category in Category
    }


def overall_score(categories: dict[Category, CategoryScore]) -> float:
    """Weighted sum of category scores (0-10)."""
    return clamp(sum(c.score * c.weight for c in categories.values()))
