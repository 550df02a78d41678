"""Tests for shotgrade.ui module."""

import io
import logging

import numpy as np
import pytest
from rich.console import Console
from rich.logging import RichHandler

from shotgrade.scoring import PixelBuffer, analyze
from shotgrade.ui import SCORE_STYLES, configure_logging, create_progress, render_report


@pytest.fixture
def report():
    rng = np.random.default_rng(6)
    arr = rng.integers(0, 256, size=(40, 60, 4), dtype=np.uint8)
    return analyze(PixelBuffer(60, 40, arr.tobytes()))


def render(report, verbose: bool = False) -> str:
    buf = io.StringIO()
    render_report(report, console=Console(file=buf, width=160), verbose=verbose)
    return buf.getvalue()


class TestRenderReport:
    def test_sections(self, report):
        out = render(report)
        assert "Overall Score:" in out
        assert "Category Scores" in out
        assert "focus & clarity" in out
        assert f"{report.photo_type.name.value} Photography Settings" in out
        for tip in report.photo_type.recommended_settings.tips:
            assert tip in out

    def test_highlight_sections(self, report):
        out = render(report)
        if report.strengths():
            assert "Strengths" in out
        if report.improvements():
            assert "Areas for Improvement" in out

    def test_verbose_measurements(self, report):
        assert "Composition: regions=" not in render(report)
        out = render(report, verbose=True)
        assert "Exposure: under=" in out
        assert "Composition: regions=" in out
        assert "criteria:" in out


class TestHelpers:
    def test_styles_cover_colors(self):
        assert set(SCORE_STYLES) == {"success", "primary", "warning", "error"}

    def test_progress(self):
        progress = create_progress()
        task = progress.add_task("x", total=2)
        progress.advance(task)
        assert progress.tasks[0].completed == 1

    def test_configure_logging(self):
        configure_logging(verbose=True)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in root.handlers)
        configure_logging(verbose=False)
        assert logging.getLogger().level == logging.INFO
