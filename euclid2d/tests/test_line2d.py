"""Unit tests for the single line operations of Line2D."""
import math

import pytest

from euclid2d.core.errors import InvalidArgumentError, TooSmallError
from euclid2d.core.line2d import Line2D
from euclid2d.core.points import Pt, Rotation2D, UnitVc, Vc


def _close(p, q, tol=1e-10):
    return abs(p.x - q.x) < tol and abs(p.y - q.y) < tol


class TestBasics:
    """Test construction and derived properties."""

    def test_properties(self):
        """Start, end, vector, length and middle."""
        ln = Line2D(1.0, 1.0, 4.0, 5.0)
        assert ln.start == Pt(1.0, 1.0)
        assert ln.end == Pt(4.0, 5.0)
        assert ln.vector == Vc(3.0, 4.0)
        assert ln.direction == ln.vector
        assert ln.length_sq == 25.0
        assert ln.length == 5.0
        assert ln.mid == Pt(2.5, 3.0)

    def test_constructors(self):
        """from_points and from_pt_and_vc."""
        assert Line2D.from_points(Pt(0.0, 0.0), Pt(1.0, 2.0)) == Line2D(0.0, 0.0, 1.0, 2.0)
        assert Line2D.from_pt_and_vc(Pt(1.0, 1.0), Vc(1.0, 2.0)) == Line2D(1.0, 1.0, 2.0, 3.0)

    def test_zero_length_and_tiny(self):
        """Zero length and tiny checks; NaN lines are tiny."""
        assert Line2D(2.0, 2.0, 2.0, 2.0).is_zero_length
        assert Line2D(0.0, 0.0, 0.001, 0.0).is_tiny(0.01)
        assert not Line2D(0.0, 0.0, 1.0, 0.0).is_tiny(0.01)
        assert Line2D(0.0, 0.0, math.nan, 0.0).is_tiny(0.01)
        assert Line2D(0.0, 0.0, 0.1, 0.0).is_tiny_sq(0.1)

    def test_axis_alignment(self):
        """X and Y alignment ignore orientation; degenerate lines raise."""
        assert Line2D(5.0, 1.0, -3.0, 1.0).is_x_aligned
        assert not Line2D(5.0, 1.0, -3.0, 2.0).is_x_aligned
        assert Line2D(1.0, 0.0, 1.0, 9.0).is_y_aligned
        with pytest.raises(TooSmallError):
            Line2D(1.0, 1.0, 1.0, 1.0).is_x_aligned

    def test_equals_and_cross(self):
        """equals is component wise, reversed lines differ."""
        ln = Line2D(0.0, 0.0, 1.0, 1.0)
        assert ln.equals(Line2D(0.0, 0.0, 1.0, 1.0))
        assert not ln.equals(ln.reversed())
        assert ln.equals(Line2D(0.0, 0.001, 1.0, 1.0), tol=0.01)
        assert Line2D(0.0, 0.0, 2.0, 0.0).cross(Line2D(0.0, 0.0, 0.0, 3.0)) == 6.0


class TestEvaluation:
    """Test parameter evaluation."""

    def test_evaluate_and_segment(self):
        """evaluate_at inside and beyond the line, segment between parameters."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert _close(ln.evaluate_at(0.3), Pt(3.0, 0.0))
        assert ln.evaluate_at(-1.0) == Pt(-10.0, 0.0)
        assert ln.segment(0.2, 0.5).equals(Line2D(2.0, 0.0, 5.0, 0.0), tol=1e-10)
        assert ln.reversed() == Line2D(10.0, 0.0, 0.0, 0.0)

    def test_length_till_and_from_param(self):
        """Signed lengths along the line."""
        ln = Line2D(0.0, 0.0, 0.0, 4.0)
        assert abs(ln.length_till_param(0.5) - 2.0) < 1e-10
        assert abs(ln.length_till_param(-0.5) + 2.0) < 1e-10
        assert abs(ln.length_from_param(0.25) - 3.0) < 1e-10
        assert abs(ln.length_from_param(1.5) + 2.0) < 1e-10

    def test_point_at_distance(self):
        """Points at absolute distances from the start."""
        ln = Line2D(0.0, 0.0, 3.0, 4.0)
        assert _close(ln.point_at_distance(5.0), Pt(3.0, 4.0))
        assert _close(ln.point_at_distance(-5.0), Pt(-3.0, -4.0))
        with pytest.raises(TooSmallError):
            Line2D(1.0, 1.0, 1.0, 1.0).point_at_distance(1.0)


class TestEditing:
    """Test operations returning modified lines."""

    def test_extend_and_shrink(self):
        """Absolute and relative extension; shrink is the inverse."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.extend(1.0, 2.0) == Line2D(-1.0, 0.0, 12.0, 0.0)
        assert ln.extend_start(1.0) == Line2D(-1.0, 0.0, 10.0, 0.0)
        assert ln.extend_end(1.0) == Line2D(0.0, 0.0, 11.0, 0.0)
        assert ln.extend_rel(0.5, 0.1) == Line2D(-5.0, 0.0, 11.0, 0.0)
        assert ln.shrink(1.0, 2.0) == Line2D(1.0, 0.0, 8.0, 0.0)

    def test_editing_degenerate_raises(self):
        """Operations that need a direction raise on zero length lines."""
        ln = Line2D(3.0, 3.0, 3.0, 3.0)
        for op in (lambda: ln.extend(1.0, 1.0), lambda: ln.shrink(1.0, 1.0),
                   lambda: ln.extend_rel(1.0, 1.0), lambda: ln.offset(1.0),
                   lambda: ln.with_length_from_start(1.0)):
            with pytest.raises(TooSmallError):
                op()

    def test_with_length(self):
        """Keep start, end or middle fixed while changing the length."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.with_length_from_start(4.0) == Line2D(0.0, 0.0, 4.0, 0.0)
        assert ln.with_length_to_end(4.0) == Line2D(6.0, 0.0, 10.0, 0.0)
        assert ln.with_length_from_mid(4.0) == Line2D(3.0, 0.0, 7.0, 0.0)

    def test_move_and_scale(self):
        """Translation and scaling."""
        ln = Line2D(1.0, 1.0, 2.0, 2.0)
        assert ln.move(Vc(1.0, -1.0)) == Line2D(2.0, 0.0, 3.0, 1.0)
        assert ln.move_x(1.0) == Line2D(2.0, 1.0, 3.0, 2.0)
        assert ln.move_y(-1.0) == Line2D(1.0, 0.0, 2.0, 1.0)
        assert ln.scale(2.0) == Line2D(2.0, 2.0, 4.0, 4.0)
        assert ln.scale_on(Pt(1.0, 1.0), 3.0) == Line2D(1.0, 1.0, 4.0, 4.0)

    def test_rotate(self):
        """Rotation about the origin and about a center keeps the length."""
        ln = Line2D(1.0, 0.0, 2.0, 0.0)
        r = ln.rotate(Rotation2D.from_degrees(90.0))
        assert _close(r.start, Pt(0.0, 1.0))
        assert _close(r.end, Pt(0.0, 2.0))
        rc = ln.rotate_with_center(Pt(1.0, 0.0), Rotation2D.from_degrees(180.0))
        assert _close(rc.start, Pt(1.0, 0.0))
        assert _close(rc.end, Pt(0.0, 0.0))
        assert abs(rc.length - ln.length) < 1e-10

    def test_offset(self):
        """Positive offsets move the line to its left."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.offset(2.0) == Line2D(0.0, 2.0, 10.0, 2.0)
        assert ln.offset(-2.0) == Line2D(0.0, -2.0, 10.0, -2.0)
        assert ln.offset(0.0) is ln

    def test_divide(self):
        """divide returns segments + 1 points including both ends."""
        ln = Line2D(0.0, 0.0, 9.0, 0.0)
        pts = ln.divide(3)
        assert len(pts) == 4
        for p, x in zip(pts, (0.0, 3.0, 6.0, 9.0)):
            assert _close(p, Pt(x, 0.0))
        assert pts[-1] == ln.end
        assert ln.divide(1) == [ln.start, ln.end]
        with pytest.raises(InvalidArgumentError):
            ln.divide(0)

    def test_divide_min_max_length(self):
        """Segment counts from minimum and maximum segment lengths."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert len(ln.divide_min_length(3.0)) == 4    # 3 segments of 3.33
        assert len(ln.divide_min_length(4.0)) == 3    # 2 segments of 5
        assert len(ln.divide_min_length(5.0)) == 2    # exact multiples give one segment fewer
        assert len(ln.divide_max_length(3.0)) == 5    # 4 segments of 2.5
        assert len(ln.divide_max_length(5.0)) == 3    # exactly 2 segments of 5
        with pytest.raises(InvalidArgumentError):
            ln.divide_min_length(11.0)
        with pytest.raises(InvalidArgumentError):
            ln.divide_max_length(0.0)

    def test_split(self):
        """split leaves gaps between equal segments, the last one ends exactly."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        parts = ln.split(1.0, 3)
        assert len(parts) == 3
        assert _close(parts[0].start, Pt(0.0, 0.0))
        assert _close(parts[0].end, Pt(8.0 / 3.0, 0.0))
        assert _close(parts[1].start, Pt(8.0 / 3.0 + 1.0, 0.0))
        assert parts[-1].end == ln.end
        assert ln.split(5.0, 3) == []
        with pytest.raises(InvalidArgumentError):
            ln.split(1.0, 0)


class TestPointRelations:
    """Test closest points and distances of a point to a line."""

    def test_ray_closest_parameter(self):
        """Unclamped projection onto the ray."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert abs(ln.ray_closest_parameter(Pt(15.0, 3.0)) - 1.5) < 1e-10
        assert ln.ray_closest_point(Pt(-5.0, 3.0)) == Pt(-5.0, 0.0)
        assert abs(ln.sq_distance_ray_point(Pt(15.0, 3.0)) - 9.0) < 1e-10
        assert abs(ln.distance_ray_point(Pt(15.0, -3.0)) - 3.0) < 1e-10

    def test_ray_operations_raise_on_degenerate(self):
        """Ray projections need a direction."""
        ln = Line2D(1.0, 1.0, 1.0, 1.0)
        with pytest.raises(TooSmallError):
            ln.ray_closest_parameter(Pt(0.0, 0.0))
        with pytest.raises(TooSmallError):
            ln.ray_closest_point(Pt(0.0, 0.0))
        with pytest.raises(TooSmallError):
            ln.sq_distance_ray_point(Pt(0.0, 0.0))

    def test_closest_parameter_clamped(self):
        """The finite projection is clamped to [0, 1]."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.closest_parameter(Pt(15.0, 3.0)) == 1.0
        assert ln.closest_parameter(Pt(-5.0, 3.0)) == 0.0
        assert abs(ln.closest_parameter(Pt(4.0, 3.0)) - 0.4) < 1e-10
        assert ln.closest_point(Pt(15.0, 3.0)) == Pt(10.0, 0.0)
        assert abs(ln.distance_to_pt(Pt(13.0, 4.0)) - 5.0) < 1e-10
        assert abs(ln.sq_distance_from_point(Pt(4.0, 3.0)) - 9.0) < 1e-10

    def test_closest_parameter_degenerate_never_raises(self):
        """A zero length line answers 0.0 or 1.0 without raising."""
        ln = Line2D(1.0, 1.0, 1.0, 1.0)
        assert ln.closest_parameter(Pt(0.0, 0.0)) in (0.0, 1.0)
        assert ln.closest_point(Pt(0.0, 0.0)) == Pt(1.0, 1.0)
        assert abs(ln.distance_to_pt(Pt(4.0, 5.0)) - 5.0) < 1e-10

    @pytest.mark.parametrize('p', [-1.0, -0.25, 0.0, 0.1, 0.5, 0.9, 1.0, 1.5, 2.0])
    def test_round_trip_parameter(self, p):
        """evaluate_at then closest_parameter recovers p, clamped to [0, 1]."""
        ln = Line2D(-3.0, 2.0, 7.0, -4.0)
        back = ln.closest_parameter(ln.evaluate_at(p))
        expected = min(max(p, 0.0), 1.0)
        assert abs(back - expected) < 1e-9

    def test_left_and_right(self):
        """Side tests looking along the line."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.is_point_on_left(Pt(5.0, 1.0))
        assert ln.is_point_on_right(Pt(5.0, -1.0))
        assert not ln.is_point_on_left(Pt(20.0, 0.0))
        assert not ln.is_point_on_right(Pt(20.0, 0.0))


class TestDirectionRelations:
    """Test the angle based predicates against lines and vectors."""

    def test_matches_orientation(self):
        """Below 90 degrees and below 45 degrees."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.matches_orientation(Vc(1.0, 5.0))
        assert not ln.matches_orientation(Vc(-1.0, 5.0))
        assert not ln.matches_orientation(Vc(0.0, 5.0))
        assert ln.matches_orientation_45(Vc(1.0, 0.5))
        assert not ln.matches_orientation_45(Vc(1.0, 2.0))
        assert not ln.matches_orientation_45(Vc(-1.0, 0.1))

    def test_parallel_accepts_any_direction(self):
        """Vc, UnitVc and Line2D are all accepted."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.is_parallel_to(Vc(-5.0, 0.0))
        assert ln.is_parallel_to(UnitVc(1.0, 0.0))
        assert ln.is_parallel_to(Line2D(3.0, 3.0, 4.0, 3.001))
        assert not ln.is_parallel_to(Vc(1.0, 0.1))
        assert ln.is_parallel_to(Vc(1.0, 0.1), min_tangent=0.2)

    def test_parallel_and_oriented(self):
        """Opposing lines are parallel but not oriented alike."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.is_parallel_and_oriented_to(Vc(1.0, 0.001))
        assert ln.is_parallel_and_oriented_to(Vc(1.0, -0.001))
        assert not ln.is_parallel_and_oriented_to(Vc(-1.0, 0.0))

    def test_perpendicular(self):
        """Perpendicular within 0.25 degrees."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.is_perpendicular_to(Vc(0.0, 1.0))
        assert ln.is_perpendicular_to(Vc(0.001, -1.0))
        assert not ln.is_perpendicular_to(Vc(0.1, 1.0))

    def test_direction_predicates_raise_on_degenerate(self):
        """Angle predicates need a direction on both sides."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        zero = Line2D(1.0, 1.0, 1.0, 1.0)
        with pytest.raises(TooSmallError):
            ln.is_parallel_to(zero)
        with pytest.raises(TooSmallError):
            zero.matches_orientation(ln)
        with pytest.raises(TooSmallError):
            ln.is_perpendicular_to(Vc(0.0, 0.0))
        with pytest.raises(TooSmallError):
            ln.is_coincident_to(zero)

    def test_is_coincident_to(self):
        """Parallel and on the same ray within the distance tolerance."""
        ln = Line2D(0.0, 0.0, 10.0, 0.0)
        assert ln.is_coincident_to(Line2D(20.0, 0.0, 30.0, 0.0))
        assert ln.is_coincident_to(Line2D(5.0, 0.0, -5.0, 0.0))
        assert not ln.is_coincident_to(Line2D(0.0, 1.0, 10.0, 1.0))
        assert ln.is_coincident_to(Line2D(0.0, 0.01, 10.0, 0.01), distance_tolerance=0.1)
        assert not ln.is_coincident_to(Line2D(0.0, 0.0, 10.0, 5.0))
