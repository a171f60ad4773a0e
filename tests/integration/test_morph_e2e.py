"""End-to-end tests that build shapes, morph them and write SVG output."""

import json
import re
from pathlib import Path
from xml.etree import ElementTree

import pytest
from fontTools.pens.recordingPen import RecordingPen
from typer.testing import CliRunner

from morphshapes.cli.app import app
from morphshapes.core import Morph, RoundedPolygon, circle, pill_star, rectangle, star
from morphshapes.domain import CornerRounding, Point

SVG_NS = "{http://www.w3.org/2000/svg}"


def assert_outline_matches(cubics, polygon: RoundedPolygon, tolerance: float = 2e-3) -> None:
    """Every non-degenerate feature cubic of the polygon starts at a frame anchor."""
    anchors = [c.anchor0 for c in cubics]
    for feature in polygon.features:
        for cubic in feature.cubics:
            if cubic.is_zero_length:
                continue
            assert any((a - cubic.anchor0).distance() < tolerance for a in anchors), (
                f"{cubic.anchor0} missing from frame"
            )


SHAPE_PAIRS = [
    pytest.param(
        RoundedPolygon.from_vertex_count(3), rectangle(), id="triangle-square"
    ),
    pytest.param(
        RoundedPolygon.from_vertex_count(6, rounding=CornerRounding(1.0)),
        RoundedPolygon.from_vertex_count(6),
        id="round-hexagon-sharp-hexagon",
    ),
    pytest.param(
        star(5, inner_radius=0.4, rounding=CornerRounding(0.1, 0.3)),
        circle(8),
        id="star-circle",
    ),
    pytest.param(
        pill_star(3.0, 1.5, rounding=CornerRounding(0.05)),
        rectangle(3.0, 1.5, CornerRounding(0.2)),
        id="pill-star-rectangle",
    ),
]


class TestMorphPipeline:
    """Morphs between different shape families."""

    @pytest.mark.parametrize("start,end", SHAPE_PAIRS)
    def test_endpoints_reproduce_shapes(self, start, end):
        """Test frames at 0 and 1 trace the start and end outlines."""
        morph = Morph(start, end)
        assert_outline_matches(morph.as_cubics(0.0), start)
        assert_outline_matches(morph.as_cubics(1.0), end)

    @pytest.mark.parametrize("start,end", SHAPE_PAIRS)
    def test_frames_are_closed(self, start, end):
        """Test every intermediate frame is a single closed contour."""
        morph = Morph(start, end)
        for step in range(11):
            cubics = morph.as_cubics(step / 10)
            for prev, curr in zip(cubics, cubics[1:]):
                assert abs(prev.anchor1.x - curr.anchor0.x) < 1e-3
                assert abs(prev.anchor1.y - curr.anchor0.y) < 1e-3
            assert cubics[-1].anchor1 == cubics[0].anchor0

    def test_rounding_change_keeps_corners_in_place(self):
        """Test morphing a hexagon between round and sharp keeps corner order."""
        round_hexagon = RoundedPolygon.from_vertex_count(6, rounding=CornerRounding(1.0))
        sharp_hexagon = RoundedPolygon.from_vertex_count(6)
        morph = Morph(round_hexagon, sharp_hexagon)

        # Halfway through, every point lies between the inscribed and circumscribed circles
        for cubic in morph.as_cubics(0.5):
            distance = cubic.anchor0.distance()
            assert 0.8 < distance < 1.0 + 1e-6

    def test_morph_is_translation_aware(self):
        """Test morphing between shifted copies moves the outline halfway."""
        start = RoundedPolygon.from_vertex_count(4)
        end = start.transformed(lambda p: Point(p.x + 0.5, p.y))
        morph = Morph(start, end)

        halfway = morph.as_cubics(0.5)
        xs = [c.anchor0.x for c in halfway]
        assert min(xs) == pytest.approx(-0.75, abs=1e-6)
        assert max(xs) == pytest.approx(1.25, abs=1e-6)
        assert len(halfway) == 4

    def test_draw_frames_into_pen(self):
        """Test frames can be drawn by any fontTools pen."""
        morph = Morph(star(4), circle(6))
        for progress in (0.0, 0.5, 1.0):
            pen = RecordingPen()
            morph.draw(pen, progress)
            assert pen.value[0][0] == "moveTo"
            assert pen.value[-1] == ("closePath", ())


class TestCliOutput:
    """Runs the command line and inspects the written SVG."""

    def test_morph_sheet(self, tmp_path: Path):
        """Test the morph command writes a parseable SVG grid."""
        output = tmp_path / "sheet.svg"
        result = CliRunner().invoke(
            app,
            ["morph", "star:5", "circle", "--frames", "7", "--rounding", "0.1", "-o", str(output)],
        )
        assert result.exit_code == 0, result.output

        root = ElementTree.parse(output).getroot()
        assert root.tag == f"{SVG_NS}svg"
        assert root.get("width") == "1280"
        assert root.get("height") == "512"

        paths = root.findall(f"{SVG_NS}path")
        assert len(paths) == 7
        for path in paths:
            data = path.get("d")
            assert data.startswith("M")
            assert data.rstrip().endswith("Z")
            numbers = [float(n) for n in re.findall(r"-?\d+(?:\.\d+)?", data)]
            assert all(0.0 <= n <= 1280.0 for n in numbers)

    def test_json_shape_morph(self, tmp_path: Path):
        """Test morphing a JSON-defined shape into a preset."""
        spec = tmp_path / "arrow.json"
        spec.write_text(
            json.dumps(
                {
                    "vertices": [[0, 0], [2, 1], [0, 2], [1, 1]],
                    "rounding": {"radius": 0.1},
                    "normalize": True,
                }
            ),
            encoding="utf-8",
        )
        output = tmp_path / "arrow-square.svg"
        result = CliRunner().invoke(app, ["morph", str(spec), "square", "-f", "4", "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8").count("<path ") == 4
