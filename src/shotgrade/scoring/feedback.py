"""Templated feedback per category and score band."""

from __future__ import annotations

from types import MappingProxyType

from shotgrade.scoring.types import Category, FeedbackLevel

# Lower bound of each band, checked top-down
LEVEL_THRESHOLDS = (
    (9.0, FeedbackLevel.EXCELLENT),
    (7.0, FeedbackLevel.GOOD),
    (5.0, FeedbackLevel.AVERAGE),
    (3.0, FeedbackLevel.POOR),
)

_L = FeedbackLevel

_TEMPLATES: dict[Category, dict[FeedbackLevel, tuple[str, ...]]] = {
    Category.PRESENTATION: {
        _L.EXCELLENT: (
            "Outstanding presentation with professional-grade polish",
            "Exceptional attention to detail in post-processing",
            "Print-ready quality with perfect color accuracy",
        ),
        _L.GOOD: (
            "Well-presented with good attention to detail",
            "Effective post-processing enhances the image",
            "Good overall polish with minor room for improvement",
        ),
        _L.AVERAGE: (
            "Decent presentation but lacks refined polish",
            "Basic post-processing could be enhanced",
            "Consider fine-tuning the final output",
        ),
        _L.POOR: (
            "Presentation needs significant improvement",
            "Post-processing appears heavy-handed or insufficient",
            "Final impact is diminished by technical issues",
        ),
        _L.CRITICAL: (
            "Major presentation issues affect image quality",
            "Post-processing requires complete revision",
            "Technical problems severely impact final output",
        ),
    },
    Category.CREATIVITY: {
        _L.EXCELLENT: (
            "Highly original and innovative perspective",
            "Strong artistic vision clearly conveyed",
            "Compelling storytelling through composition",
        ),
        _L.GOOD: (
            "Creative approach with good artistic merit",
            "Clear artistic intent in composition",
            "Interesting perspective on the subject",
        ),
        _L.AVERAGE: (
            "Standard creative approach",
            "Artistic vision could be more defined",
            "Consider more unique perspectives",
        ),
        _L.POOR: (
            "Limited creative expression",
            "Artistic vision needs development",
            "Very conventional approach",
        ),
        _L.CRITICAL: (
            "Lacks creative input",
            "No clear artistic direction",
            "Extremely conventional composition",
        ),
    },
    Category.AESTHETICS: {
        _L.EXCELLENT: (
            "Exceptional visual harmony and balance",
            "Masterful use of color relationships",
            "Strong emotional resonance through aesthetics",
        ),
        _L.GOOD: (
            "Pleasing aesthetic qualities",
            "Effective color palette choices",
            "Good overall visual appeal",
        ),
        _L.AVERAGE: (
            "Basic aesthetic principles applied",
            "Color harmony could be improved",
            "Consider strengthening visual impact",
        ),
        _L.POOR: (
            "Aesthetic elements need refinement",
            "Color relationships are discordant",
            "Limited visual appeal",
        ),
        _L.CRITICAL: (
            "Significant aesthetic issues",
            "Poor color harmony",
            "Lacks visual cohesion",
        ),
    },
    Category.COMPOSITION: {
        _L.EXCELLENT: (
            "Masterful composition with perfect balance",
            "Excellent use of rule of thirds",
            "Strong visual flow and subject placement",
        ),
        _L.GOOD: (
            "Well-composed with good balance",
            "Effective use of compositional rules",
            "Clear subject emphasis",
        ),
        _L.AVERAGE: (
            "Basic compositional principles applied",
            "Room for improvement in balance",
            "Consider stronger subject placement",
        ),
        _L.POOR: (
            "Compositional issues affect impact",
            "Weak visual balance",
            "Unclear subject emphasis",
        ),
        _L.CRITICAL: (
            "Major compositional problems",
            "Poor visual balance",
            "No clear subject focus",
        ),
    },
    Category.FOCUS_CLARITY: {
        _L.EXCELLENT: (
            "Exceptional sharpness with perfect focus placement",
            "Outstanding detail resolution across key elements",
            "Masterful control of depth of field",
            "Professional-level clarity with zero technical issues",
            "Excellent micro-contrast and edge definition",
        ),
        _L.GOOD: (
            "Well-executed focus with good subject definition",
            "Strong detail retention in important areas",
            "Appropriate depth of field for the subject",
            "Minimal noise with good overall clarity",
            "Consistent sharpness across main elements",
        ),
        _L.AVERAGE: (
            "Acceptable focus but room for improvement",
            "Some areas lack optimal sharpness",
            "Depth of field could be better controlled",
            "Minor issues with noise or clarity",
            "Inconsistent sharpness across the frame",
        ),
        _L.POOR: (
            "Noticeable focus issues affecting image quality",
            "Significant lack of sharpness in key areas",
            "Inappropriate depth of field choice",
            "Problematic noise levels or clarity",
            "Technical shortcomings in focus control",
        ),
        _L.CRITICAL: (
            "Major focus problems throughout the image",
            "Critical sharpness issues affecting usability",
            "Severe technical deficiencies in clarity",
            "Unacceptable noise or resolution issues",
            "Fundamental problems with focus technique",
        ),
    },
    Category.EXPOSURE: {
        _L.EXCELLENT: (
            "Perfect exposure with full dynamic range",
            "Excellent highlight and shadow detail",
            "Optimal brightness levels throughout",
        ),
        _L.GOOD: (
            "Well-exposed with good detail retention",
            "Good balance of highlights and shadows",
            "Appropriate overall brightness",
        ),
        _L.AVERAGE: (
            "Acceptable exposure but could be improved",
            "Some loss of detail in extremes",
            "Consider adjusting brightness levels",
        ),
        _L.POOR: (
            "Exposure issues affect image quality",
            "Significant loss of detail",
            "Brightness levels need adjustment",
        ),
        _L.CRITICAL: (
            "Major exposure problems",
            "Severe loss of detail",
            "Incorrect brightness levels",
        ),
    },
    Category.LIGHTING: {
        _L.EXCELLENT: (
            "Masterful use of lighting",
            "Perfect light direction and quality",
            "Excellent mood creation through lighting",
        ),
        _L.GOOD: (
            "Effective lighting choices",
            "Good direction and quality of light",
            "Appropriate mood setting",
        ),
        _L.AVERAGE: (
            "Basic lighting principles applied",
            "Room for improvement in light direction",
            "Consider enhancing lighting impact",
        ),
        _L.POOR: (
            "Lighting issues affect image quality",
            "Poor light direction or quality",
            "Weak mood creation",
        ),
        _L.CRITICAL: (
            "Major lighting problems",
            "Very poor light quality",
            "No effective mood creation",
        ),
    },
}

# Read-only at both levels
FEEDBACK_TEMPLATES = MappingProxyType(
    {category: MappingProxyType(levels) for category, levels in _TEMPLATES.items()}
)


def feedback_level(score: float) -> FeedbackLevel:
    """Band a 0-10 score. Each threshold is inclusive: 9.0 is excellent."""
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return FeedbackLevel.CRITICAL


def get_feedback(category: Category, score: float) -> tuple[str, ...]:
    """Feedback templates for a category at the band of score."""
    return FEEDBACK_TEMPLATES[category][feedback_level(score)]


def score_color(score: float) -> str:
    """Display style for a score: success, primary, warning or error."""
    if score >= 9:
        return "success"
    if score >= 7:
        return "primary"
    if score >= 5:
        return "warning"
    return "error"
