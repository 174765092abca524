"""Public operations relating two finite 2D lines.

Each function is a thin selection over the engine in xline2d plus a
tolerance policy. Functions that dispatch on the classification never raise
on degenerate input: a too short line is treated as its start point, as
documented per function. The projection functions need a direction on the
target line and raise TooSmallError instead.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

from .config import DEFAULT_TOLERANCES, LineTolerances
from .errors import TooSmallError
from .line2d import Line2D
from .logging_utils import get_logger
from .points import Pt
from .tolerance import clamp01, is_too_small_sq
from .xline2d import (
    XKind,
    XParam,
    classify,
    do_overlap,
    get_closest_parameters,
    get_ends_touching,
    get_ray_intersection_param,
    get_sq_distance,
)

logger = get_logger('euclid2d.relations')


def do_intersect(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> bool:
    """True only if both lines cross each other.

    The crossing must be inside both lines by more than ``tol.param_slack``.
    Touching ends, T-junctions, parallel or overlapping lines and too
    short lines all give False.
    """
    return _is_strict_crossing(classify(line_a, line_b, tol), tol)


def _is_strict_crossing(x: XParam, tol: LineTolerances) -> bool:
    # both parameters inside (slack, 1 - slack)
    if x.kind != XKind.INTERSECT:
        return False
    lo = tol.param_slack
    hi = 1.0 - tol.param_slack
    return lo < x.t < hi and lo < x.u < hi


def _start_touches(line: Line2D, other: Line2D, tol: LineTolerances) -> bool:
    # start point of a too short line against the other, finite line
    return other.sq_distance_from_point(line.start) < tol.touch_sq


def do_intersect_or_overlap(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> bool:
    """True if the lines intersect, touch, or overlap.

    Parallel lines count when they lie on the same ray and overlap or touch.
    A too short line counts when its start point is within ``tol.touch_sq``
    squared distance of the other line.
    """
    kind = classify(line_a, line_b, tol).kind
    if kind == XKind.INTERSECT:
        return True
    if kind == XKind.PARALLEL:
        return do_overlap(line_a, line_b, tol.overlap_distance)
    if kind == XKind.APART:
        return False
    if kind == XKind.TOO_SHORT_BOTH:
        return line_a.start.sq_distance_to(line_b.start) < tol.touch_sq
    if kind == XKind.TOO_SHORT_A:
        return _start_touches(line_a, line_b, tol)
    return _start_touches(line_b, line_a, tol)


def try_intersect(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> Optional[Pt]:
    """The crossing point under the same rules as do_intersect, or None."""
    x = classify(line_a, line_b, tol)
    if _is_strict_crossing(x, tol):
        return line_a.evaluate_at(x.t)
    return None


def try_intersect_or_overlap(line_a: Line2D, line_b: Line2D,
                             tol: LineTolerances = DEFAULT_TOLERANCES) -> Optional[Pt]:
    """Intersection point, or the middle of the overlap of lines on the same ray.

    For too short lines the start point of the short line is returned if it
    touches the other line.
    """
    x = classify(line_a, line_b, tol)
    if x.kind == XKind.INTERSECT:
        return line_a.evaluate_at(x.t)
    if x.kind == XKind.APART:
        return None
    if x.kind == XKind.PARALLEL:
        if line_a.sq_distance_ray_point(line_b.start) >= tol.touch_sq:
            return None
        se = try_project_onto_line_param(line_a, line_b, tol)
        if se is None:
            return None
        s, e = se
        return line_a.evaluate_at((s + e) * 0.5)
    if x.kind == XKind.TOO_SHORT_BOTH:
        return line_a.start if line_a.start.sq_distance_to(line_b.start) < tol.touch_sq else None
    if x.kind == XKind.TOO_SHORT_A:
        return line_a.start if _start_touches(line_a, line_b, tol) else None
    return line_b.start if _start_touches(line_b, line_a, tol) else None


def try_intersect_ray(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> Optional[Pt]:
    """Intersection of both lines extended to infinite rays.

    None for parallel or too short lines, and when the parameter on A is at
    or beyond ``tol.ray_bound`` (nearly parallel rays).
    """
    x = get_ray_intersection_param(line_a, line_b, tol)
    if x.kind != XKind.INTERSECT:
        return None
    if not (abs(x.t) < tol.ray_bound):
        logger.debug('try_intersect_ray: parameter %r beyond bound %g', x.t, tol.ray_bound)
        return None
    return line_a.evaluate_at(x.t)


def closest_parameters(line_a: Line2D, line_b: Line2D,
                       tol: LineTolerances = DEFAULT_TOLERANCES) -> Tuple[float, float]:
    """Parameters of the closest points on both finite lines.

    Parallel overlapping lines give the middle of the overlap. A too short
    line contributes parameter 0.0, its start point.
    """
    cp = get_closest_parameters(line_a, line_b, tol)
    if cp.kind == XKind.TOO_SHORT_BOTH:
        return 0.0, 0.0
    if cp.kind == XKind.TOO_SHORT_A:
        return 0.0, line_b.closest_parameter(line_a.start)
    if cp.kind == XKind.TOO_SHORT_B:
        return line_a.closest_parameter(line_b.start), 0.0
    return cp.t, cp.u


def closest_points(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> Tuple[Pt, Pt]:
    """Closest points on both finite lines; identical points if they intersect."""
    cp = get_closest_parameters(line_a, line_b, tol)
    if cp.kind == XKind.INTERSECT:
        p = line_a.evaluate_at(cp.t)
        return p, p
    if cp.kind == XKind.TOO_SHORT_BOTH:
        return line_a.start, line_b.start
    if cp.kind == XKind.TOO_SHORT_A:
        return line_a.start, line_b.closest_point(line_a.start)
    if cp.kind == XKind.TOO_SHORT_B:
        return line_a.closest_point(line_b.start), line_b.start
    return line_a.evaluate_at(cp.t), line_b.evaluate_at(cp.u)


def try_get_overlap(line_a: Line2D, line_b: Line2D,
                    tol: LineTolerances = DEFAULT_TOLERANCES) -> Optional[Tuple[float, float]]:
    """Overlap of two lines on the same ray as parameters (start, end) on A.

    start belongs to the start of B. Ascending parameters mean both lines
    point the same way. None if the lines are too short, not parallel, offset
    by more than ``tol.coincident_sq`` squared distance, apart, or only
    touching at their ends.
    """
    if is_too_small_sq(line_a.length_sq, tol.length_sq) or is_too_small_sq(line_b.length_sq, tol.length_sq):
        return None
    if classify(line_a, line_b, tol).kind != XKind.PARALLEL:
        return None
    if not line_a.sq_distance_ray_point(line_b.start) < tol.coincident_sq:
        return None
    se = try_project_onto_line_param(line_a, line_b, tol)
    if se is None:
        return None
    s, e = se
    if abs(e - s) <= tol.param_slack:
        return None
    return s, e


def sq_distance_to_line(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> float:
    return get_sq_distance(line_a, line_b, tol)


def distance_to_line(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> float:
    """Distance between two finite lines, also for too short or parallel lines."""
    return math.sqrt(get_sq_distance(line_a, line_b, tol))


def is_touching_end_of(square_tolerance: float, a: Line2D, b: Line2D) -> bool:
    """True if any end of a is within square_tolerance squared distance of any end of b.

    See get_ends_touching for which ends touch.
    """
    return (a.end.sq_distance_to(b.start) < square_tolerance
            or a.start.sq_distance_to(b.end) < square_tolerance
            or a.start.sq_distance_to(b.start) < square_tolerance
            or a.end.sq_distance_to(b.end) < square_tolerance)


def _ray_params(onto: Line2D, line: Line2D, operation: str) -> Tuple[float, float]:
    if is_too_small_sq(onto.length_sq):
        logger.debug('%s: target line too short: %r', operation, onto)
        raise TooSmallError(operation, onto)
    return onto.ray_closest_parameter(line.start), onto.ray_closest_parameter(line.end)


def project_onto_ray_param(onto: Line2D, line: Line2D) -> Tuple[float, float]:
    """Parameters of the ends of line projected onto the infinite ray of onto."""
    return _ray_params(onto, line, 'Line2D.project_onto_ray_param')


def project_onto_ray(onto: Line2D, line: Line2D) -> Line2D:
    s, e = _ray_params(onto, line, 'Line2D.project_onto_ray')
    return onto.segment(s, e)


def try_project_onto_line_param(onto: Line2D, line: Line2D,
                                tol: LineTolerances = DEFAULT_TOLERANCES) -> Optional[Tuple[float, float]]:
    """Project line onto the finite line onto.

    Returns the clamped parameters of both ends of line, or None if the
    projection misses onto. A descending pair means opposite orientation.
    """
    s, e = _ray_params(onto, line, 'Line2D.try_project_onto_line_param')
    lo, hi = tol.param_lower, tol.param_upper
    if (s < lo and e < lo) or (s > hi and e > hi):
        return None
    return clamp01(s), clamp01(e)


def try_project_onto_line(onto: Line2D, line: Line2D,
                          tol: LineTolerances = DEFAULT_TOLERANCES) -> Optional[Line2D]:
    """The part of onto covered by the projection of line, keeping the orientation of line."""
    se = try_project_onto_line_param(onto, line, tol)
    if se is None:
        return None
    return onto.segment(*se)


__all__ = [
    'classify', 'do_intersect', 'do_intersect_or_overlap', 'try_intersect',
    'try_intersect_or_overlap', 'try_intersect_ray', 'closest_parameters',
    'closest_points', 'try_get_overlap', 'sq_distance_to_line', 'distance_to_line',
    'is_touching_end_of', 'get_ends_touching', 'project_onto_ray_param',
    'project_onto_ray', 'try_project_onto_line_param', 'try_project_onto_line',
]
