"""Tests for the shotgrade command line."""

import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from shotgrade import __version__, main


def write_image(path: Path, seed: int = 0, size: tuple = (48, 32)) -> Path:
    rng = np.random.default_rng(seed)
    w, h = size
    Image.fromarray(rng.integers(0, 256, size=(h, w, 3), dtype=np.uint8), "RGB").save(path)
    return path


class TestMain:
    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestAnalyzeCommand:
    def test_success(self, tmp_path: Path, capsys):
        image = write_image(tmp_path / "a.png")
        assert main(["analyze", str(image)]) == 0
        assert "Overall Score:" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path, capsys):
        assert main(["analyze", str(tmp_path / "missing.png")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_unsupported_file(self, tmp_path: Path, capsys):
        path = tmp_path / "a.png"
        path.write_bytes(b"garbage")
        assert main(["analyze", str(path)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_writes_exports(self, tmp_path: Path):
        image = write_image(tmp_path / "a.png")
        json_out = tmp_path / "r.json"
        text_out = tmp_path / "r.txt"
        code = main(
            ["analyze", str(image), "--json", str(json_out), "--text", str(text_out), "--parallel"]
        )
        assert code == 0
        data = json.loads(json_out.read_text(encoding="utf-8"))
        assert data["source"] == str(image.resolve())
        assert text_out.read_text(encoding="utf-8").startswith("# shotgrade report")

    def test_max_dim(self, tmp_path: Path):
        image = write_image(tmp_path / "a.png", size=(200, 100))
        json_out = tmp_path / "r.json"
        assert main(["analyze", str(image), "--max-dim", "50", "--json", str(json_out)]) == 0
        data = json.loads(json_out.read_text(encoding="utf-8"))
        assert data["photo_type"]["current_settings"]["resolution"] == "50 × 25"

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_rejects_non_positive_max_dim(self, tmp_path: Path, capsys, value):
        image = write_image(tmp_path / "a.png")
        assert main(["analyze", str(image), "--max-dim", value]) == 1
        assert "Error: --max-dim must be >= 1" in capsys.readouterr().err


class TestBatchCommand:
    def test_ranking(self, tmp_path: Path, capsys):
        photos = tmp_path / "photos"
        photos.mkdir()
        for i in range(3):
            write_image(photos / f"img{i}.png", seed=i)
        out = tmp_path / "rank.txt"

        assert main(["batch", str(photos), "--workers", "2", "--out", str(out)]) == 0

        stdout = capsys.readouterr().out
        assert "Top 3 of 3 analyzed images" in stdout
        lines = out.read_text(encoding="utf-8").splitlines()
        assert "# count: 3" in lines
        scores = [float(line.split("\t")[0]) for line in lines if line and not line.startswith("#")]
        assert scores == sorted(scores, reverse=True)

    def test_failures_counted(self, tmp_path: Path):
        write_image(tmp_path / "good.png")
        (tmp_path / "bad.png").write_bytes(b"garbage")
        out = tmp_path / "rank.txt"
        assert main(["batch", str(tmp_path), "--workers", "1", "--out", str(out)]) == 0
        assert "# count: 1" in out.read_text(encoding="utf-8").splitlines()

    def test_no_images(self, tmp_path: Path, capsys):
        assert main(["batch", str(tmp_path)]) == 1
        assert "No images found" in capsys.readouterr().err

    def test_not_a_directory(self, tmp_path: Path):
        assert main(["batch", str(tmp_path / "nope")]) == 1

    def test_extension_filter(self, tmp_path: Path, capsys):
        write_image(tmp_path / "a.png")
        assert main(["batch", str(tmp_path), "--ext", "jpg"]) == 1

    def test_rejects_zero_max_dim(self, tmp_path: Path, capsys):
        write_image(tmp_path / "a.png")
        assert main(["batch", str(tmp_path), "--max-dim", "0"]) == 1
        assert "Error: --max-dim must be >= 1" in capsys.readouterr().err
