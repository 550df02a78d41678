"""Tests for shotgrade.parallel module."""

from pathlib import Path

import numpy as np
from PIL import Image

from shotgrade.parallel import (
    FileResult,
    analyze_files_parallel,
    get_default_workers,
    run_analyzers,
)
from shotgrade.scoring import PixelBuffer, measure


def make_noise_buffer(w: int = 80, h: int = 60, seed: int = 0) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    arr = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    return PixelBuffer(w, h, arr.tobytes())


def write_png(path: Path, seed: int) -> Path:
    rng = np.random.default_rng(seed)
    Image.fromarray(rng.integers(0, 256, size=(30, 40, 3), dtype=np.uint8), "RGB").save(path)
    return path


class TestRunAnalyzers:
    def test_matches_sequential(self):
        buf = make_noise_buffer()
        assert run_analyzers(buf) == measure(buf)

    def test_worker_count_clamped(self):
        buf = make_noise_buffer(seed=2)
        assert run_analyzers(buf, workers=64) == measure(buf)
        assert run_analyzers(buf, workers=0) == measure(buf)


class TestAnalyzeFilesParallel:
    def test_empty(self):
        assert list(analyze_files_parallel([])) == []

    def test_mixed_results(self, tmp_path: Path):
        good = write_png(tmp_path / "good.png", 1)
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image")

        results = {Path(r.path).name: r for r in analyze_files_parallel([good, bad], workers=2)}

        assert results["good.png"].success
        assert results["good.png"].report is not None
        assert not results["bad.png"].success
        assert results["bad.png"].report is None
        assert results["bad.png"].error

    def test_max_dim_forwarded(self, tmp_path: Path):
        path = write_png(tmp_path / "a.png", 3)
        (result,) = analyze_files_parallel([path], workers=1, max_dim=20)
        assert result.report.photo_type.current_settings.resolution == "20 × 15"


class TestHelpers:
    def test_default_workers(self):
        assert get_default_workers() >= 1

    def test_file_result_defaults(self):
        result = FileResult(path="x", success=False)
        assert result.report is None
        assert result.error is None
