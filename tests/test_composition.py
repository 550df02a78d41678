"""Tests for shotgrade.scoring.composition module."""

import numpy as np
import pytest

from shotgrade.scoring.composition import (
    compute_composition,
    compute_region_weights,
    compute_thirds_alignment,
    compute_visual_balance,
)
from shotgrade.scoring.types import PixelBuffer


def make_buffer(w: int = 120, h: int = 120, color: tuple = (128, 128, 128, 255)) -> PixelBuffer:
    """Create a uniform test buffer."""
    return PixelBuffer(w, h, bytes(color) * (w * h))


def make_dark_column_buffer(w: int = 120, h: int = 120) -> PixelBuffer:
    """White image with a black left third."""
    arr = np.full((h, w, 4), 255, dtype=np.uint8)
    arr[:, : w // 3, :3] = 0
    return PixelBuffer(w, h, arr.tobytes())


class TestRegionWeights:
    def test_uniform_is_even(self):
        weights = compute_region_weights(make_buffer())
        assert weights == pytest.approx(np.full(9, 1 / 9))

    def test_sum_to_one(self):
        rng = np.random.default_rng(5)
        arr = rng.integers(0, 256, size=(77, 131, 4), dtype=np.uint8)
        weights = compute_region_weights(PixelBuffer(131, 77, arr.tobytes()))
        assert weights.sum() == pytest.approx(1.0)

    def test_all_white_fallback(self):
        weights = compute_region_weights(make_buffer(color=(255, 255, 255, 255)))
        assert np.all(weights == 0)

    def test_dark_mass_in_left_column(self):
        weights = compute_region_weights(make_dark_column_buffer()).reshape(3, 3)
        assert weights[:, 0].tolist() == pytest.approx([1 / 3] * 3)
        assert np.all(weights[:, 1:] == 0)


class TestBalance:
    def test_even(self):
        h, v = compute_visual_balance(np.full(9, 1 / 9))
        assert h == pytest.approx(1.0)
        assert v == pytest.approx(1.0)

    def test_left_heavy(self):
        weights = np.zeros(9)
        weights[[0, 3, 6]] = 1 / 3
        h, v = compute_visual_balance(weights)
        assert h == pytest.approx(0.0)
        assert v == pytest.approx(1.0)

    def test_top_heavy(self):
        weights = np.zeros(9)
        weights[[0, 1, 2]] = 1 / 3
        h, v = compute_visual_balance(weights)
        assert h == pytest.approx(1.0)
        assert v == pytest.approx(0.0)


class TestThirdsAlignment:
    def test_even(self):
        assert compute_thirds_alignment(np.full(9, 1 / 9)) == pytest.approx(4 / 9)

    def test_picks_strongest_pair(self):
        weights = np.zeros(9)
        weights[7] = 0.5
        weights[5] = 0.5
        assert compute_thirds_alignment(weights) == pytest.approx(2.0)

    def test_center_mass_scores_zero(self):
        weights = np.zeros(9)
        weights[4] = 1.0
        assert compute_thirds_alignment(weights) == 0.0


class TestComputeComposition:
    def test_regions_row_major(self):
        result = compute_composition(make_buffer())
        assert len(result.regions) == 9
        assert [(r.row, r.col) for r in result.regions] == [
            (i // 3, i % 3) for i in range(9)
        ]

    def test_uniform_score(self):
        result = compute_composition(make_buffer())
        # 1 * 3 + 1 * 3 + (4/9) * 4
        assert result.composition_score == pytest.approx(6 + 16 / 9)

    def test_all_white(self):
        result = compute_composition(make_buffer(color=(255, 255, 255, 255)))
        assert result.rule_of_thirds == 0.0
        assert result.composition_score == pytest.approx(6.0)

    def test_dark_column(self):
        result = compute_composition(make_dark_column_buffer())
        assert result.horizontal_balance == pytest.approx(0.0)
        assert result.vertical_balance == pytest.approx(1.0)
        assert result.rule_of_thirds == pytest.approx(2 / 3)
        assert result.composition_score == pytest.approx(3 + 8 / 3)

    def test_weights_sum(self):
        result = compute_composition(make_dark_column_buffer(99, 51))
        assert sum(r.weight for r in result.regions) == pytest.approx(1.0)

    def test_empty_buffer(self):
        result = compute_composition(PixelBuffer(0, 0, b""))
        assert all(r.weight == 0 for r in result.regions)
        assert 0 <= result.composition_score <= 10
