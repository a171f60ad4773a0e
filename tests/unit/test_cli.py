"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from morphshapes import __version__
from morphshapes.cli.app import app

runner = CliRunner()


class TestGlobalOptions:
    """Tests for options on the main callback."""

    def test_version(self):
        """Test --version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_and_quiet_conflict(self, tmp_path):
        """Test --verbose and --quiet cannot be combined."""
        result = runner.invoke(
            app, ["-v", "-q", "shape", "triangle", "-o", str(tmp_path / "t.svg")]
        )
        assert result.exit_code == 1
        assert "together" in result.output

    def test_log_file(self, tmp_path):
        """Test --log-file writes a log."""
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app,
            ["--log-file", str(log_file), "shape", "triangle", "-o", str(tmp_path / "t.svg")],
        )
        assert result.exit_code == 0
        assert log_file.exists()


class TestShapeCommand:
    """Tests for the shape command."""

    def test_renders_svg(self, tmp_path):
        """Test a preset is written to the given path."""
        output = tmp_path / "triangle.svg"
        result = runner.invoke(app, ["shape", "triangle", "-o", str(output)])
        assert result.exit_code == 0
        assert output.exists()
        assert "Complete" in result.output

    def test_default_output_path(self, tmp_path, monkeypatch):
        """Test the output name is derived from the preset name."""
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["shape", "star:5", "--rounding", "0.05"])
        assert result.exit_code == 0
        assert (tmp_path / "star-5.svg").exists()

    def test_json_shape(self, tmp_path, monkeypatch):
        """Test a JSON shape file is named after its stem."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "kite.json").write_text(
            json.dumps({"vertices": [[0, 1], [-1, 0], [0, -2], [1, 0]]}), encoding="utf-8"
        )
        result = runner.invoke(app, ["shape", "kite.json"])
        assert result.exit_code == 0
        assert (tmp_path / "kite.svg").exists()

    def test_quiet(self, tmp_path):
        """Test quiet mode prints nothing on success."""
        output = tmp_path / "q.svg"
        result = runner.invoke(app, ["-q", "shape", "square", "-o", str(output)])
        assert result.exit_code == 0
        assert output.exists()
        assert "Complete" not in result.output

    def test_unknown_preset(self, tmp_path):
        """Test an unknown shape name fails with exit code 1."""
        result = runner.invoke(app, ["shape", "blob", "-o", str(tmp_path / "b.svg")])
        assert result.exit_code == 1
        assert "Could not load shape 'blob'" in result.output
        assert "unknown preset" in result.output

    def test_missing_file(self, tmp_path):
        """Test a missing shape file fails with exit code 1."""
        result = runner.invoke(app, ["shape", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_shape_file(self, tmp_path):
        """Test an invalid shape file fails with exit code 1."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"radius": 1.0}), encoding="utf-8")
        result = runner.invoke(app, ["shape", str(path), "-o", str(tmp_path / "bad.svg")])
        assert result.exit_code == 1
        assert "Could not load shape" in result.output

    def test_invalid_preset_count(self, tmp_path):
        """Test a geometry error fails with exit code 1."""
        result = runner.invoke(app, ["shape", "polygon:2", "-o", str(tmp_path / "p.svg")])
        assert result.exit_code == 1
        assert "at least 3 vertices" in result.output

    def test_invalid_pill_star_count(self, tmp_path):
        """Test a zero pill-star count is reported instead of crashing."""
        output = tmp_path / "ps.svg"
        result = runner.invoke(app, ["shape", "pill-star:0", "-o", str(output)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ZeroDivisionError)
        assert "at least 2 vertices per radius" in result.output
        assert not output.exists()

    def test_negative_rounding_rejected(self):
        """Test option validation rejects negative rounding."""
        result = runner.invoke(app, ["shape", "triangle", "--rounding", "-1"])
        assert result.exit_code == 2


class TestMorphCommand:
    """Tests for the morph command."""

    def test_frames(self, tmp_path):
        """Test a morph sheet with the requested frame count."""
        output = tmp_path / "morph.svg"
        result = runner.invoke(app, ["morph", "triangle", "square", "-f", "3", "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").count("<path ") == 3
        assert "3 frames" in result.output

    def test_progress(self, tmp_path):
        """Test a single progress value renders one frame."""
        output = tmp_path / "half.svg"
        result = runner.invoke(
            app, ["morph", "circle", "star:5", "-p", "0.5", "-o", str(output)]
        )
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").count("<path ") == 1

    def test_default_output_path(self, tmp_path, monkeypatch):
        """Test the output name joins both shape names."""
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["morph", "triangle", "polygon:5", "-f", "2"])
        assert result.exit_code == 0
        assert (tmp_path / "triangle-polygon-5-morph.svg").exists()

    def test_frames_and_progress_conflict(self, tmp_path):
        """Test --frames and --progress cannot be combined."""
        result = runner.invoke(
            app,
            ["morph", "triangle", "square", "-f", "3", "-p", "0.5", "-o", str(tmp_path / "x.svg")],
        )
        assert result.exit_code == 1
        assert "together" in result.output

    @pytest.mark.parametrize("args", [["-p", "1.5"], ["-f", "0"]])
    def test_out_of_range_options(self, args):
        """Test option validation rejects out-of-range values."""
        result = runner.invoke(app, ["morph", "triangle", "square", *args])
        assert result.exit_code == 2

    def test_unknown_end_shape(self, tmp_path):
        """Test an unknown end shape fails with exit code 1."""
        result = runner.invoke(app, ["morph", "triangle", "blob", "-o", str(tmp_path / "x.svg")])
        assert result.exit_code == 1
        assert not (tmp_path / "x.svg").exists()


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_table(self):
        """Test the feature table lists corners and edges."""
        result = runner.invoke(app, ["inspect", "triangle"])
        assert result.exit_code == 0
        assert "convex corner" in result.output
        assert "edge" in result.output
        assert "3 cubics" in result.output

    def test_json(self):
        """Test JSON output lists every cubic."""
        result = runner.invoke(app, ["inspect", "square", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["name"] == "square"
        assert len(data["cubics"]) == 4
        assert set(data["cubics"][0]) == {"anchor0", "control0", "control1", "anchor1"}

    def test_unknown_shape(self):
        """Test inspecting an unknown shape fails with exit code 1."""
        result = runner.invoke(app, ["inspect", "blob"])
        assert result.exit_code == 1
