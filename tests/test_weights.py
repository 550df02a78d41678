"""Tests for shotgrade.scoring.weights module."""

import pytest

from shotgrade.scoring.types import (
    Category,
    ClarityResult,
    ColorResult,
    CompositionResult,
    ExposureResult,
    Region,
)
from shotgrade.scoring.weights import (
    CATEGORY_CRITERIA,
    CATEGORY_WEIGHTS,
    TECHNICAL_SPECS,
    aggregate_scores,
    build_category_score,
    compute_category_scores,
    overall_score,
)


def make_results(e: float = 8.0, cl: float = 9.0, co: float = 6.0, cp: float = 7.0):
    """Analyzer results carrying only the scores that matter here."""
    return (
        ExposureResult((0,) * 256, 0.0, 100.0, 0.0, e),
        ClarityResult(10.0, 0.5, cl),
        ColorResult(0.5, 0.5, 0.5, co),
        CompositionResult(
            tuple(Region(i // 3, i % 3, 1 / 9) for i in range(9)), 1.0, 1.0, 0.4, cp
        ),
    )


class TestTables:
    def test_weights_sum_to_one(self):
        assert sum(CATEGORY_WEIGHTS.values()) == pytest.approx(1.0)

    def test_every_category_covered(self):
        for table in (CATEGORY_WEIGHTS, CATEGORY_CRITERIA, TECHNICAL_SPECS):
            assert set(table) == set(Category)

    def test_weight_values(self):
        assert CATEGORY_WEIGHTS[Category.PRESENTATION] == 0.20
        assert CATEGORY_WEIGHTS[Category.FOCUS_CLARITY] == 0.20
        assert CATEGORY_WEIGHTS[Category.LIGHTING] == 0.05

    def test_tables_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_WEIGHTS[Category.LIGHTING] = 0.5  # type: ignore[index]


class TestCategoryScores:
    def test_derivations(self):
        scores = compute_category_scores(*make_results())
        assert scores == {
            Category.PRESENTATION: 7.5,
            Category.CREATIVITY: 6.0,
            Category.AESTHETICS: 6.5,
            Category.COMPOSITION: 7.0,
            Category.FOCUS_CLARITY: 9.0,
            Category.EXPOSURE: 8.0,
            Category.LIGHTING: 7.0,
        }

    def test_build_category_score(self):
        record = build_category_score(Category.EXPOSURE, 9.2)
        assert record.weight == 0.10
        assert record.criteria[0] == "Dynamic range"
        assert record.feedback[0] == "Perfect exposure with full dynamic range"
        assert record.technical_spec.reference.startswith("• Sunny 16")

    def test_aggregate_in_category_order(self):
        categories = aggregate_scores(*make_results())
        assert list(categories) == list(Category)

    def test_overall_score(self):
        categories = aggregate_scores(*make_results())
        assert overall_score(categories) == pytest.approx(7.375)

    def test_overall_bounds(self):
        assert overall_score(aggregate_scores(*make_results(10, 10, 10, 10))) == pytest.approx(10.0)
        assert overall_score(aggregate_scores(*make_results(0, 0, 0, 0))) == 0.0
