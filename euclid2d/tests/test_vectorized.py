"""The numpy batch predicates agree with the scalar engine."""
import numpy as np
import pytest

from euclid2d.core.line2d import Line2D
from euclid2d.core.points import Pt
from euclid2d.core.relations import do_intersect, is_touching_end_of
from euclid2d.core.vectorized import (
    classify_many,
    do_intersect_many,
    is_touching_end_of_many,
    lines_to_array,
    sq_distance_points_to_lines,
)
from euclid2d.core.xline2d import XKind, classify


def _pairs():
    a = [
        Line2D(0.0, 0.0, 10.0, 10.0),
        Line2D(0.0, 0.0, 1.0, 0.0),
        Line2D(0.0, 0.0, 10.0, 0.0),
        Line2D(5.0, 5.0, 5.0, 5.0),
        Line2D(0.0, 0.0, 10.0, 0.0),
        Line2D(2.0, 2.0, 2.0, 2.0),
        Line2D(0.0, 0.0, 5.0, 0.0),
        Line2D(0.0, 0.0, 10.0, 0.0),
    ]
    b = [
        Line2D(0.0, 10.0, 10.0, 0.0),     # crossing
        Line2D(5.0, -1.0, 5.0, 1.0),      # apart
        Line2D(0.0, 5.0, 10.0, 5.0),      # parallel
        Line2D(5.0, 5.0, 5.0, 5.0),       # both too short
        Line2D(4.0, 4.0, 4.0, 4.0),       # B too short
        Line2D(0.0, 0.0, 3.0, 1.0),       # A too short
        Line2D(5.0, 0.0, 5.0, 5.0),       # touching ends
        Line2D(5.0, -1.0, 5.0, 1.0),      # perpendicular crossing
    ]
    return a, b


class TestClassifyMany:
    """Test classify_many against classify."""

    def test_lines_to_array(self):
        arr = lines_to_array([Line2D(1.0, 2.0, 3.0, 4.0)])
        assert arr.shape == (1, 4)
        assert arr.dtype == np.float64
        assert lines_to_array([]).shape == (0, 4)

    def test_agrees_with_scalar(self):
        """Kinds and parameters match row by row."""
        a, b = _pairs()
        kinds, t, u = classify_many(lines_to_array(a), lines_to_array(b))
        for i, (la, lb) in enumerate(zip(a, b)):
            x = classify(la, lb)
            assert kinds[i] == x.kind
            if x.kind == XKind.INTERSECT:
                assert abs(t[i] - x.t) < 1e-12
                assert abs(u[i] - x.u) < 1e-12
            else:
                assert np.isnan(t[i]) and np.isnan(u[i])

    def test_expected_kinds(self):
        a, b = _pairs()
        kinds, _, _ = classify_many(lines_to_array(a), lines_to_array(b))
        expected = [XKind.INTERSECT, XKind.APART, XKind.PARALLEL, XKind.TOO_SHORT_BOTH,
                    XKind.TOO_SHORT_B, XKind.TOO_SHORT_A, XKind.INTERSECT, XKind.INTERSECT]
        assert kinds.tolist() == [int(k) for k in expected]

    def test_single_line_broadcasts(self):
        """One line of shape (4,) is related to every row of a batch."""
        a = np.array([0.0, 0.0, 10.0, 0.0])
        b = np.array([[3.0, -1.0, 3.0, 1.0], [3.0, 1.0, 3.0, 2.0]])
        kinds, t, _ = classify_many(a, b)
        assert kinds.tolist() == [XKind.INTERSECT, XKind.APART]
        assert abs(t[0] - 0.3) < 1e-12

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            classify_many(np.zeros((2, 3)), np.zeros((2, 4)))


def test_do_intersect_many_agrees():
    a, b = _pairs()
    got = do_intersect_many(lines_to_array(a), lines_to_array(b))
    assert got.dtype == bool
    assert got.tolist() == [do_intersect(la, lb) for la, lb in zip(a, b)]


def test_is_touching_end_of_many_agrees():
    a, b = _pairs()
    got = is_touching_end_of_many(1e-12, lines_to_array(a), lines_to_array(b))
    assert got.tolist() == [is_touching_end_of(1e-12, la, lb) for la, lb in zip(a, b)]


def test_sq_distance_points_to_lines():
    """Clamped point to segment distances, including a degenerate line."""
    lines = [Line2D(0.0, 0.0, 10.0, 0.0), Line2D(0.0, 0.0, 10.0, 0.0), Line2D(1.0, 1.0, 1.0, 1.0)]
    pts = [Pt(4.0, 3.0), Pt(13.0, 4.0), Pt(4.0, 5.0)]
    got = sq_distance_points_to_lines(np.array([p.as_tuple() for p in pts]), lines_to_array(lines))
    expected = [ln.sq_distance_from_point(p) for ln, p in zip(lines, pts)]
    assert np.allclose(got, expected, atol=1e-10)
    assert np.allclose(got, [9.0, 25.0, 25.0], atol=1e-10)


def test_sq_distance_single_point_broadcasts():
    lines = lines_to_array([Line2D(0.0, 0.0, 10.0, 0.0), Line2D(0.0, 2.0, 10.0, 2.0)])
    got = sq_distance_points_to_lines([5.0, 1.0], lines)
    assert np.allclose(got, [1.0, 1.0])
