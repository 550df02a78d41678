"""Tests for shotgrade.export module."""

import json
from pathlib import Path

import numpy as np
import pytest

from shotgrade.export import export_json, export_ranking, export_text, report_to_dict
from shotgrade.scoring import PixelBuffer, analyze


@pytest.fixture
def report():
    rng = np.random.default_rng(1)
    arr = rng.integers(0, 256, size=(48, 64, 4), dtype=np.uint8)
    return analyze(PixelBuffer(64, 48, arr.tobytes()))


class TestReportToDict:
    def test_json_serializable(self, report):
        data = report_to_dict(report)
        assert json.loads(json.dumps(data)) == data

    def test_category_keys(self, report):
        data = report_to_dict(report)
        assert list(data["categories"]) == [
            "presentation",
            "creativity",
            "aesthetics",
            "composition",
            "focus & clarity",
            "exposure",
            "lighting",
        ]

    def test_measurements(self, report):
        m = report_to_dict(report)["measurements"]
        assert len(m["exposure"]["histogram"]) == 256
        assert len(m["composition"]["regions"]) == 9

    def test_highlights(self, report):
        data = report_to_dict(report)
        assert sorted(data["strengths"] + data["improvements"]) == sorted(data["categories"])


class TestExportJson:
    def test_writes_source_first(self, report, tmp_path: Path):
        out = tmp_path / "r.json"
        export_json(report, out, source=Path("/photos/x.jpg"))
        data = json.loads(out.read_text(encoding="utf-8"))
        assert next(iter(data)) == "source"
        assert data["source"] == "/photos/x.jpg"
        assert data["overall_score"] == pytest.approx(report.overall_score)

    def test_without_source(self, report, tmp_path: Path):
        out = tmp_path / "r.json"
        export_json(report, out)
        assert "source" not in json.loads(out.read_text(encoding="utf-8"))


class TestExportText:
    def test_header_and_scores(self, report, tmp_path: Path):
        out = tmp_path / "r.txt"
        export_text(report, out, source=Path("x.png"))
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "# shotgrade report"
        assert lines[1].startswith("# generated: ")
        assert lines[2] == "# source: x.png"
        assert f"Overall Score: {report.overall_score:.1f}/10" in lines
        assert any(line.startswith("focus & clarity (20%): ") for line in lines)
        assert "Recommended Settings:" in lines


class TestExportRanking:
    def test_format(self, report, tmp_path: Path):
        out = tmp_path / "rank.txt"
        export_ranking([("a.jpg", report), ("b.jpg", report)], out, source_dir=Path("pics"))
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "# shotgrade ranking"
        assert "# count: 2" in lines
        assert "# source: pics" in lines
        entries = [line for line in lines if line and not line.startswith("#")]
        score, genre, path = entries[0].split("\t")
        assert float(score) == pytest.approx(report.overall_score, abs=0.005)
        assert genre == report.photo_type.name.value
        assert path == "a.jpg"
