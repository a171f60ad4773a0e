"""Unit tests for rounded polygon construction and corner rounding."""

import pytest
from fontTools.misc.transform import Transform
from fontTools.pens.recordingPen import RecordingPen

from morphshapes.core._corner import RoundedCorner
from morphshapes.core.polygon import RoundedPolygon
from morphshapes.core.shapes import rectangle
from morphshapes.domain import ORIGIN, UNROUNDED, CornerRounding, CubicBezier, Feature, Point
from morphshapes.exceptions import ContinuityError, PolygonError


def assert_closed(polygon):
    """Assert every cubic starts where the previous one ends."""
    cubics = polygon.cubics
    for prev, curr in zip(cubics, cubics[1:]):
        assert curr.anchor0.x == pytest.approx(prev.anchor1.x, abs=1e-4)
        assert curr.anchor0.y == pytest.approx(prev.anchor1.y, abs=1e-4)
    assert cubics[-1].anchor1 == cubics[0].anchor0


class TestRoundedCorner:
    """Tests for single corner rounding."""

    def test_unrounded_corner_is_single_point(self):
        """Test unrounded corners collapse to a zero-length cubic at the vertex."""
        corner = RoundedCorner(Point(2, 0), ORIGIN, Point(0, 2), UNROUNDED)
        cubics = corner.get_cubics(1.0, 1.0)
        assert len(cubics) == 1
        assert cubics[0].is_zero_length
        assert cubics[0].anchor0 == ORIGIN
        assert corner.center == ORIGIN

    def test_right_angle_cut(self):
        """Test the cut for a right angle equals the radius."""
        corner = RoundedCorner(Point(2, 0), ORIGIN, Point(0, 2), CornerRounding(0.5))
        assert corner.expected_round_cut == pytest.approx(0.5)
        assert corner.expected_cut == pytest.approx(0.5)

    def test_smoothing_extends_cut(self):
        """Test smoothing consumes extra edge length."""
        corner = RoundedCorner(Point(2, 0), ORIGIN, Point(0, 2), CornerRounding(0.5, 0.5))
        assert corner.expected_cut == pytest.approx(0.75)

    def test_rounded_corner_cubics(self):
        """Test a rounded corner produces flank, arc and flank."""
        corner = RoundedCorner(Point(2, 0), ORIGIN, Point(0, 2), CornerRounding(0.5))
        cubics = corner.get_cubics(1.0, 1.0)
        assert len(cubics) == 3
        assert corner.center.x == pytest.approx(0.5)
        assert corner.center.y == pytest.approx(0.5)

        arc = cubics[1]
        assert arc.anchor0.x == pytest.approx(0.5)
        assert arc.anchor0.y == pytest.approx(0.0)
        assert arc.anchor1.x == pytest.approx(0.0)
        assert arc.anchor1.y == pytest.approx(0.5)
        mid = arc.point_on_curve(0.5)
        assert (mid - corner.center).distance() == pytest.approx(0.5, abs=1e-3)

    def test_cubics_connect(self):
        """Test the three corner cubics are contiguous."""
        corner = RoundedCorner(Point(2, 0), ORIGIN, Point(0, 2), CornerRounding(0.5, 0.5))
        flank0, arc, flank2 = corner.get_cubics(1.0, 1.0)
        assert flank0.anchor0.x == pytest.approx(0.75)
        assert flank0.anchor1.x == pytest.approx(arc.anchor0.x)
        assert flank0.anchor1.y == pytest.approx(arc.anchor0.y)
        assert arc.anchor1.x == pytest.approx(flank2.anchor0.x)
        assert arc.anchor1.y == pytest.approx(flank2.anchor0.y)
        assert flank2.anchor1.y == pytest.approx(0.75)

    def test_limited_cut_shrinks_radius(self):
        """Test a short edge scales the arc down."""
        corner = RoundedCorner(Point(2, 0), ORIGIN, Point(0, 2), CornerRounding(0.5))
        cubics = corner.get_cubics(0.25, 1.0)
        assert corner.center.x == pytest.approx(0.25)
        assert corner.center.y == pytest.approx(0.25)
        assert cubics[1].anchor0.x == pytest.approx(0.25)

    def test_zero_allowed_cut_is_unrounded(self):
        """Test no available edge length means no rounding."""
        corner = RoundedCorner(Point(2, 0), ORIGIN, Point(0, 2), CornerRounding(0.5))
        assert len(corner.get_cubics(0.0, 1.0)) == 1

    def test_degenerate_neighbour(self):
        """Test a neighbour on top of the vertex disables rounding."""
        corner = RoundedCorner(ORIGIN, ORIGIN, Point(0, 2), CornerRounding(0.5))
        assert corner.expected_round_cut == 0.0
        assert len(corner.get_cubics(1.0, 1.0)) == 1


class TestRoundedPolygonFactories:
    """Tests for RoundedPolygon factories."""

    def test_from_vertex_count_features(self):
        """Test features alternate corner and edge."""
        triangle = RoundedPolygon.from_vertex_count(3)
        assert len(triangle.features) == 6
        for index, feature in enumerate(triangle.features):
            assert feature.is_corner == (index % 2 == 0)
            if feature.is_corner:
                assert feature.convex

    def test_from_vertex_count_unrounded_cubics(self):
        """Test an unrounded n-gon has one cubic per edge."""
        for n in (3, 4, 7):
            polygon = RoundedPolygon.from_vertex_count(n)
            assert len(polygon.cubics) == n
            assert_closed(polygon)

    def test_first_vertex_on_x_axis(self):
        """Test the first vertex sits at angle 0."""
        polygon = RoundedPolygon.from_vertex_count(4, radius=2.0, center=Point(1, 1))
        assert polygon.cubics[0].anchor0 == Point(3.0, 1.0)
        assert polygon.center == Point(1, 1)

    def test_too_few_vertices(self):
        """Test fewer than 3 vertices raises PolygonError."""
        with pytest.raises(PolygonError, match="at least 3 vertices"):
            RoundedPolygon.from_vertex_count(2)
        with pytest.raises(PolygonError):
            RoundedPolygon.from_vertices([Point(0, 0), Point(1, 0)])

    def test_per_vertex_rounding_size_mismatch(self):
        """Test the per-vertex rounding list must match the vertex count."""
        with pytest.raises(PolygonError, match="per_vertex_rounding"):
            RoundedPolygon.from_vertex_count(4, per_vertex_rounding=[UNROUNDED] * 3)

    def test_polygon_error_is_value_error(self):
        """Test PolygonError can be caught as ValueError."""
        with pytest.raises(ValueError):
            RoundedPolygon.from_vertex_count(1)

    def test_from_vertices_center_is_centroid(self):
        """Test the default center is the vertex average."""
        polygon = RoundedPolygon.from_vertices(
            [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        )
        assert polygon.center == Point(1.0, 1.0)

    def test_rounded_square_cubic_count(self):
        """Test smoothed corners keep all three corner cubics."""
        square = RoundedPolygon.from_vertex_count(4, rounding=CornerRounding(0.2, 0.5))
        # 4 corners x 3 cubics, the first arc split in two, plus 4 edges
        assert len(square.cubics) == 17
        assert_closed(square)

    def test_unsmoothed_flanks_are_dropped(self):
        """Test zero-length flanks do not become cubics."""
        square = RoundedPolygon.from_vertex_count(4, rounding=CornerRounding(0.2))
        assert len(square.cubics) == 9
        assert all(not c.is_zero_length for c in square.cubics)

    def test_seam_inside_first_corner(self):
        """Test the outline starts halfway through the first corner's arc."""
        square = RoundedPolygon.from_vertex_count(4, rounding=CornerRounding(0.2))
        start = square.cubics[0].anchor0
        assert start.y == pytest.approx(0.0, abs=1e-6)
        assert start.x < 1.0

    def test_oversized_rounding_is_clamped(self):
        """Test rounding larger than the edges shrinks to the inscribed circle."""
        triangle = RoundedPolygon.from_vertex_count(3, rounding=CornerRounding(5.0))
        assert_closed(triangle)
        min_x, _, max_x, _ = triangle.calculate_bounds(approximate=False)
        assert min_x == pytest.approx(-0.5, abs=1e-3)
        assert max_x == pytest.approx(0.5, abs=1e-2)

    def test_concave_vertex(self):
        """Test a reflex vertex becomes a concave corner."""
        arrow = RoundedPolygon.from_vertices(
            [Point(0, 0), Point(2, 1), Point(0, 2), Point(1, 1)]
        )
        corners = [f for f in arrow.features if f.is_corner]
        assert [c.convex for c in corners] == [True, True, True, False]

    def test_from_features_needs_two(self):
        """Test from_features rejects a single feature."""
        edge = Feature.edge([CubicBezier.straight_line(ORIGIN, Point(1, 0))])
        with pytest.raises(PolygonError, match="at least 2 features"):
            RoundedPolygon.from_features([edge])

    def test_from_features_center(self):
        """Test the default center averages cubic start anchors."""
        polygon = RoundedPolygon.from_features(
            [
                Feature.edge([CubicBezier.straight_line(ORIGIN, Point(2, 0))]),
                Feature.edge([CubicBezier.straight_line(Point(2, 0), Point(2, 2))]),
                Feature.edge([CubicBezier.straight_line(Point(2, 2), ORIGIN)]),
            ]
        )
        assert polygon.center.x == pytest.approx(4 / 3)
        assert polygon.center.y == pytest.approx(2 / 3)

    def test_discontinuous_features_raise(self):
        """Test features that leave a gap raise ContinuityError."""
        with pytest.raises(ContinuityError) as exc_info:
            RoundedPolygon(
                [
                    Feature.edge([CubicBezier.straight_line(ORIGIN, Point(1, 0))]),
                    Feature.edge([CubicBezier.straight_line(Point(2, 0), ORIGIN)]),
                ],
                ORIGIN,
            )
        assert exc_info.value.index == 1
        assert exc_info.value.gap == pytest.approx(1.0)


class TestRoundedPolygonOperations:
    """Tests for transforms, bounds and drawing."""

    def test_bounds(self):
        """Test bounds of an unrounded diamond."""
        bounds = RoundedPolygon.from_vertex_count(4).calculate_bounds()
        assert bounds == pytest.approx((-1.0, -1.0, 1.0, 1.0))

    def test_exact_bounds_tighter_than_approximate(self):
        """Test exact bounds never exceed approximate ones."""
        polygon = RoundedPolygon.from_vertex_count(5, rounding=CornerRounding(0.3))
        exact = polygon.calculate_bounds(approximate=False)
        approx = polygon.calculate_bounds(approximate=True)
        assert exact[0] >= approx[0] - 1e-9
        assert exact[1] >= approx[1] - 1e-9
        assert exact[2] <= approx[2] + 1e-9
        assert exact[3] <= approx[3] + 1e-9

    def test_max_bounds(self):
        """Test max bounds form a square around the center."""
        polygon = RoundedPolygon.from_vertex_count(4, center=Point(1, 2))
        assert polygon.calculate_max_bounds() == pytest.approx((0.0, 1.0, 2.0, 3.0))

    def test_transformed_callable(self):
        """Test translating with a point function."""
        polygon = RoundedPolygon.from_vertex_count(3)
        moved = polygon.transformed(lambda p: Point(p.x + 2, p.y))
        assert moved.center == Point(2.0, 0.0)
        assert moved.cubics[0].anchor0 == Point(3.0, 0.0)
        assert len(moved.cubics) == len(polygon.cubics)

    def test_transformed_matrix(self):
        """Test scaling with a fontTools Transform."""
        polygon = RoundedPolygon.from_vertex_count(4)
        scaled = polygon.transformed(Transform().scale(2))
        assert scaled.calculate_bounds() == pytest.approx((-2.0, -2.0, 2.0, 2.0))

    def test_normalized_square(self):
        """Test normalizing fits the unit square."""
        normalized = RoundedPolygon.from_vertex_count(4, radius=3.0).normalized()
        assert normalized.calculate_bounds() == pytest.approx((0.0, 0.0, 1.0, 1.0))

    def test_normalized_centers_short_side(self):
        """Test the shorter side is centered."""
        normalized = rectangle(4.0, 2.0).normalized()
        assert normalized.calculate_bounds() == pytest.approx((0.0, 0.25, 1.0, 0.75))

    def test_equality(self):
        """Test polygons compare by features."""
        a = RoundedPolygon.from_vertex_count(3)
        b = RoundedPolygon.from_vertex_count(3)
        assert a == b
        assert hash(a) == hash(b)
        assert a.copy() == a
        assert a != RoundedPolygon.from_vertex_count(4)

    def test_draw_into_recording_pen(self):
        """Test drawing emits one closed contour."""
        polygon = RoundedPolygon.from_vertex_count(4)
        pen = RecordingPen()
        polygon.draw(pen)

        assert pen.value[0] == ("moveTo", ((1.0, 0.0),))
        assert [op for op, _ in pen.value[1:-1]] == ["curveTo"] * 4
        assert pen.value[-1] == ("closePath", ())
        assert pen.value[-2][1][-1] == (1.0, 0.0)

    def test_repr(self):
        """Test repr mentions the cubic count."""
        assert "cubics=3" in repr(RoundedPolygon.from_vertex_count(3))
