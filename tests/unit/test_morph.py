"""Unit tests for Morph."""

import pytest
from fontTools.pens.recordingPen import RecordingPen

from morphshapes.core.measure import LengthMeasurer
from morphshapes.core.morph import Morph, match
from morphshapes.core.polygon import RoundedPolygon
from morphshapes.core.shapes import circle, rectangle, star
from morphshapes.domain import CornerRounding, Point
from morphshapes.exceptions import ProgressError

CENTER = Point(0.5, 0.5)


def points_close(a, b, tolerance=1e-4):
    return abs(a.x - b.x) < tolerance and abs(a.y - b.y) < tolerance


def cubics_close(a, b, tolerance=1e-4):
    return all(points_close(p, q, tolerance) for p, q in zip(a.points(), b.points()))


def assert_closed(cubics):
    for prev, curr in zip(cubics, cubics[1:]):
        assert points_close(prev.anchor1, curr.anchor0)
    assert cubics[-1].anchor1 == cubics[0].anchor0


@pytest.fixture
def triangle():
    return RoundedPolygon.from_vertex_count(3, center=CENTER)


@pytest.fixture
def square():
    return RoundedPolygon.from_vertex_count(4, center=CENTER)


class TestMatch:
    """Tests for cubic matching."""

    def test_self_match(self, triangle):
        """Test matching a polygon with itself pairs identical cubics."""
        pairs = match(triangle, triangle, LengthMeasurer())
        assert len(pairs) == 3
        for start, end in pairs:
            assert cubics_close(start, end)

    def test_pairs_cover_both_outlines(self, triangle, square):
        """Test both sides of the pairs form closed outlines."""
        pairs = match(triangle, square, LengthMeasurer())
        assert len(pairs) >= 4
        starts = [p[0] for p in pairs]
        ends = [p[1] for p in pairs]
        for cubics in (starts, ends):
            for prev, curr in zip(cubics, cubics[1:]):
                assert points_close(prev.anchor1, curr.anchor0)
            assert points_close(cubics[-1].anchor1, cubics[0].anchor0)


class TestMorph:
    """Tests for Morph interpolation."""

    def test_self_morph_at_start(self, triangle):
        """Test every morph cubic matches a cubic of the polygon."""
        morph = Morph(triangle, triangle)
        for cubic in morph.as_cubics(0.0):
            assert any(cubics_close(cubic, c) for c in triangle.cubics)

    @pytest.mark.parametrize(
        "polygon",
        [
            RoundedPolygon.from_vertex_count(5, rounding=CornerRounding(0.2, 0.5), center=CENTER),
            star(4, rounding=CornerRounding(0.1)),
            circle(6),
        ],
        ids=["rounded-pentagon", "rounded-star", "circle"],
    )
    def test_self_morph_rounded(self, polygon):
        """Test morphing a rounded polygon into itself traces its outline at any progress."""
        morph = Morph(polygon, polygon)
        for start, end in morph.match_pairs:
            assert cubics_close(start, end)

        samples = [c.point_on_curve(i / 200) for c in polygon.cubics for i in range(201)]
        reference = morph.as_cubics(0.0)
        for progress in (0.0, 0.5, 1.0):
            cubics = morph.as_cubics(progress)
            assert len(cubics) == len(reference)
            for cubic, expected in zip(cubics, reference):
                assert cubics_close(cubic, expected)
            for cubic in cubics:
                for t in (0.0, 0.5):
                    point = cubic.point_on_curve(t)
                    assert min((point - s).distance() for s in samples) < 5e-3
            assert_closed(cubics)

    def test_endpoints(self, triangle, square):
        """Test progress 0 and 1 reproduce the start and end outlines."""
        morph = Morph(triangle, square)

        start = morph.as_cubics(0.0)
        end = morph.as_cubics(1.0)
        for cubics, polygon in ((start, triangle), (end, square)):
            anchors = {(round(c.anchor0.x, 4), round(c.anchor0.y, 4)) for c in cubics}
            for vertex in polygon.cubics:
                key = (round(vertex.anchor0.x, 4), round(vertex.anchor0.y, 4))
                assert key in anchors

    def test_midway_is_closed(self, triangle, square):
        """Test intermediate frames are closed outlines."""
        morph = Morph(triangle, square)
        for progress in (0.25, 0.5, 0.75):
            assert_closed(morph.as_cubics(progress))

    def test_cubic_count_constant(self):
        """Test every frame has the same number of cubics."""
        morph = Morph(
            star(5, rounding=CornerRounding(0.1)),
            circle(6),
        )
        counts = {len(morph.as_cubics(p)) for p in (0.0, 0.3, 0.6, 1.0)}
        assert counts == {len(morph.match_pairs)}

    def test_properties(self, triangle, square):
        """Test the shapes are exposed unchanged."""
        morph = Morph(triangle, square)
        assert morph.start is triangle
        assert morph.end is square

    def test_bounds_cover_both_shapes(self):
        """Test morph bounds are the union of both shapes' bounds."""
        small = RoundedPolygon.from_vertex_count(4)
        wide = rectangle(4.0, 1.0)
        morph = Morph(small, wide)
        assert morph.calculate_bounds() == pytest.approx((-2.0, -1.0, 2.0, 1.0))

    def test_max_bounds(self):
        """Test max bounds use the farthest point of either shape."""
        morph = Morph(RoundedPolygon.from_vertex_count(4), RoundedPolygon.from_vertex_count(4, 2.0))
        assert morph.calculate_max_bounds() == pytest.approx((-2.0, -2.0, 2.0, 2.0))

    def test_invalid_progress(self, triangle):
        """Test progress outside [0, 1] raises ProgressError."""
        morph = Morph(triangle, triangle)
        with pytest.raises(ProgressError, match="Morph progress"):
            morph.as_cubics(1.5)
        with pytest.raises(ProgressError):
            list(morph.iter_cubics(-0.5))

    def test_for_each_cubic(self, triangle, square):
        """Test the callback receives every interpolated cubic."""
        morph = Morph(triangle, square)
        seen = []
        morph.for_each_cubic(0.5, seen.append)
        assert len(seen) == len(morph.match_pairs)

    def test_draw(self, triangle, square):
        """Test drawing a frame emits a closed contour."""
        morph = Morph(triangle, square)
        pen = RecordingPen()
        morph.draw(pen, 0.5)

        ops = [op for op, _ in pen.value]
        assert ops[0] == "moveTo"
        assert ops[-1] == "closePath"
        assert ops.count("curveTo") == len(morph.match_pairs)

    def test_custom_measurer(self, triangle, square):
        """Test a finer measurer still produces a valid morph."""
        morph = Morph(triangle, square, LengthMeasurer(12))
        assert_closed(morph.as_cubics(0.5))
