"""Relationship engine for pairs of 2D lines.

Three layers, each built on the one before:

- classification: ``classify`` sorts a pair into one of the XKind cases.
  Degenerate (too short) lines are detected first, then parallel lines via
  the tangent ratio ``cross / dot``, then the Cramer solve decides between
  INTERSECT and APART.
- solver: ``solve_parameters`` and the raw ray helpers, closed form.
- resolver: closest parameters / points, squared distance and end touching,
  with a fixed policy per XKind.

All functions are pure and take an optional ``LineTolerances``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

from .config import DEFAULT_TOLERANCES, LineTolerances
from .constants import EPS_COINCIDENT
from .errors import TooSmallError
from .line2d import Line2D
from .logging_utils import get_logger
from .points import Pt
from .tolerance import (
    is_between_zero_and_one,
    is_between_zero_and_one_tolerant_incl,
    is_too_small_sq,
    is_too_tiny_sq,
    tangent_ratio,
)

logger = get_logger('euclid2d.xline2d')


class XKind(IntEnum):
    APART = 0
    PARALLEL = 1
    INTERSECT = 2
    TOO_SHORT_A = 3
    TOO_SHORT_B = 4
    TOO_SHORT_BOTH = 5

    @property
    def is_too_short(self) -> bool:
        return self >= XKind.TOO_SHORT_A


@dataclass(frozen=True)
class XParam:
    """Classification result. t and u are only set for INTERSECT."""
    kind: XKind
    t: float = math.nan
    u: float = math.nan


@dataclass(frozen=True)
class XPt:
    kind: XKind
    point: Optional[Pt] = None


@dataclass(frozen=True)
class XRayParam:
    """Ray classification result; never APART, parameters are unbounded."""
    kind: XKind
    t: float = math.nan
    u: float = math.nan


@dataclass(frozen=True)
class XRay:
    kind: XKind
    point: Optional[Pt] = None


@dataclass(frozen=True)
class ClParams:
    """Closest parameters on both lines and their squared distance.

    Only the kind is set for the TOO_SHORT_* cases.
    """
    kind: XKind
    t: float = math.nan
    u: float = math.nan
    sq_dist: float = math.nan


@dataclass(frozen=True)
class ClPts:
    kind: XKind
    a: Optional[Pt] = None
    b: Optional[Pt] = None
    sq_dist: float = math.nan


class XEnds(Enum):
    """Which ends of two lines touch each other."""
    NOT_TOUCHING = 0
    START_A_START_B = 1
    END_A_END_B = 2
    END_A_START_B = 3
    START_A_END_B = 4
    IDENTICAL = 5
    IDENTICAL_FLIPPED = 6


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------

def _ray_param(line: Line2D, px: float, py: float) -> float:
    # caller guarantees a non degenerate line
    vx = line.vector_x
    vy = line.vector_y
    return (vx * (px - line.from_x) + vy * (py - line.from_y)) / (vx * vx + vy * vy)


def _sq_ray_pt_dist(line: Line2D, px: float, py: float) -> float:
    nx = -line.vector_y
    ny = line.vector_x
    dot = nx * (px - line.from_x) + ny * (py - line.from_y)
    return dot * dot / (nx * nx + ny * ny)


def _segment_param(line: Line2D, px: float, py: float) -> float:
    """Clamped closest parameter; NaN maps to the start."""
    t = _ray_param(line, px, py)
    if t > 1.0:
        return 1.0
    if t > 0.0:
        return t
    return 0.0


def _sq_dist_segment_pt(line: Line2D, px: float, py: float) -> float:
    t = _segment_param(line, px, py)
    x = line.from_x + line.vector_x * t - px
    y = line.from_y + line.vector_y * t - py
    return x * x + y * y


def _solve(line_a: Line2D, line_b: Line2D) -> Tuple[float, float]:
    ax, ay = line_a.vector_x, line_a.vector_y
    bx, by = line_b.vector_x, line_b.vector_y
    det = ax * by - ay * bx
    if det == 0.0:
        return math.nan, math.nan
    wx = line_b.from_x - line_a.from_x
    wy = line_b.from_y - line_a.from_y
    t = (wx * by - wy * bx) / det
    u = (wx * ay - wy * ax) / det
    return t, u


def _too_short_kind(line_a: Line2D, line_b: Line2D, tol: LineTolerances) -> Optional[XKind]:
    short_a = is_too_small_sq(line_a.length_sq, tol.length_sq)
    short_b = is_too_small_sq(line_b.length_sq, tol.length_sq)
    if short_a and short_b:
        return XKind.TOO_SHORT_BOTH
    if short_a:
        return XKind.TOO_SHORT_A
    if short_b:
        return XKind.TOO_SHORT_B
    return None


def _is_parallel_unchecked(line_a: Line2D, line_b: Line2D, tol: LineTolerances) -> bool:
    tan = tangent_ratio(line_a.vector_x, line_a.vector_y, line_b.vector_x, line_b.vector_y)
    return abs(tan) < tol.tangent


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> XParam:
    """Classify the relation of two finite lines.

    Too short lines take precedence over parallel lines, which take
    precedence over the solve. INTERSECT carries the parameters on both
    lines; they may exceed [0, 1] by ``tol.param_slack``.
    """
    short = _too_short_kind(line_a, line_b, tol)
    if short is not None:
        return XParam(short)
    if _is_parallel_unchecked(line_a, line_b, tol):
        return XParam(XKind.PARALLEL)
    t, u = _solve(line_a, line_b)
    lo, hi = tol.param_lower, tol.param_upper
    if lo < t < hi and lo < u < hi:
        return XParam(XKind.INTERSECT, t, u)
    return XParam(XKind.APART)


def get_intersection(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> XPt:
    x = classify(line_a, line_b, tol)
    if x.kind == XKind.INTERSECT:
        return XPt(x.kind, line_a.evaluate_at(x.t))
    return XPt(x.kind)


def get_ray_intersection_param(line_a: Line2D, line_b: Line2D,
                               tol: LineTolerances = DEFAULT_TOLERANCES) -> XRayParam:
    """Like classify but for infinite rays: there is no APART case."""
    short = _too_short_kind(line_a, line_b, tol)
    if short is not None:
        return XRayParam(short)
    if _is_parallel_unchecked(line_a, line_b, tol):
        return XRayParam(XKind.PARALLEL)
    t, u = _solve(line_a, line_b)
    return XRayParam(XKind.INTERSECT, t, u)


def get_ray_intersection(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> XRay:
    x = get_ray_intersection_param(line_a, line_b, tol)
    if x.kind == XKind.INTERSECT:
        return XRay(x.kind, line_a.evaluate_at(x.t))
    return XRay(x.kind)


def is_parallel(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> bool:
    """Tangent ratio test only. Raises TooSmallError if a line is too short."""
    if _too_short_kind(line_a, line_b, tol) is not None:
        logger.debug('is_parallel on too short input: %r, %r', line_a, line_b)
        raise TooSmallError('XLine2D.is_parallel', line_a, line_b)
    return _is_parallel_unchecked(line_a, line_b, tol)


# ---------------------------------------------------------------------------
# Solver and raw ray helpers
# ---------------------------------------------------------------------------

def solve_parameters(line_a: Line2D, line_b: Line2D) -> Tuple[float, float]:
    """Parameters (t, u) where the infinite rays of both lines meet.

    Only meaningful for non parallel, non degenerate pairs; this is not
    re-checked. Exactly parallel input gives NaN parameters.
    """
    return _solve(line_a, line_b)


def parameter_a(line_a: Line2D, line_b: Line2D) -> float:
    return _solve(line_a, line_b)[0]


def try_parameter_a(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> Optional[float]:
    """Parameter on A, or None for (nearly) parallel rays."""
    t = _solve(line_a, line_b)[0]
    if -tol.ray_bound < t < tol.ray_bound:
        return t
    logger.debug('ray parameter %r beyond bound %g', t, tol.ray_bound)
    return None


def is_within_ranges(line_a: Line2D, line_b: Line2D, min_a: float, max_a: float,
                     min_b: float, max_b: float) -> bool:
    """True if the ray intersection lies within both inclusive parameter ranges."""
    t, u = _solve(line_a, line_b)
    return min_a <= t <= max_a and min_b <= u <= max_b


def try_intersect_in_range_a(line_a: Line2D, line_b: Line2D, min_a: float, max_a: float) -> Optional[Pt]:
    t = _solve(line_a, line_b)[0]
    if min_a <= t <= max_a:
        return line_a.evaluate_at(t)
    return None


def try_intersect_in_ranges(line_a: Line2D, line_b: Line2D, min_a: float, max_a: float,
                            min_b: float, max_b: float) -> Optional[Pt]:
    t, u = _solve(line_a, line_b)
    if min_a <= t <= max_a and min_b <= u <= max_b:
        return line_a.evaluate_at(t)
    return None


def do_intersect_raw(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> bool:
    """Tolerant, inclusive parameter range test without any angle check."""
    t, u = _solve(line_a, line_b)
    s = tol.param_slack
    return is_between_zero_and_one_tolerant_incl(t, s) and is_between_zero_and_one_tolerant_incl(u, s)


def do_overlap(line_a: Line2D, line_b: Line2D, distance_tolerance: float = EPS_COINCIDENT) -> bool:
    """True if B lies on the ray of A and both overlap or at least touch.

    Both ends of B must be within distance_tolerance of the ray of A.
    """
    if is_too_tiny_sq(line_a.length_sq):
        raise TooSmallError('XLine2D.do_overlap', line_a)
    sq_tol = distance_tolerance * distance_tolerance
    if _sq_ray_pt_dist(line_a, line_b.from_x, line_b.from_y) > sq_tol:
        return False
    if _sq_ray_pt_dist(line_a, line_b.to_x, line_b.to_y) > sq_tol:
        return False
    t = _ray_param(line_a, line_b.from_x, line_b.from_y)
    u = _ray_param(line_a, line_b.to_x, line_b.to_y)
    if is_between_zero_and_one_tolerant_incl(t) or is_between_zero_and_one_tolerant_incl(u):
        return True
    # B covers all of A
    return (t < 0.0 and u > 1.0) or (u < 0.0 and t > 1.0)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

def project_ends_back_and_forth(line_a: Line2D, line_b: Line2D) -> Tuple[float, float, float, float]:
    """Project each end of B onto A and the result back onto B, clamped.

    Returns ``(ua_start, ub_start, ua_end, ub_end)``. For parallel lines the
    averages ``((ua_start + ua_end) / 2, (ub_start + ub_end) / 2)`` are the
    middle of the overlap, or the closest pair of ends if there is none.
    """
    ua_s = _segment_param(line_a, line_b.from_x, line_b.from_y)
    pa = line_a.evaluate_at(ua_s)
    ub_s = _segment_param(line_b, pa.x, pa.y)
    ua_e = _segment_param(line_a, line_b.to_x, line_b.to_y)
    pa = line_a.evaluate_at(ua_e)
    ub_e = _segment_param(line_b, pa.x, pa.y)
    return ua_s, ub_s, ua_e, ub_e


def _sq_dist_at(line_a: Line2D, line_b: Line2D, t: float, u: float) -> float:
    return line_a.evaluate_at(t).sq_distance_to(line_b.evaluate_at(u))


def _closest_parallel(line_a: Line2D, line_b: Line2D) -> ClParams:
    ua_s, ub_s, ua_e, ub_e = project_ends_back_and_forth(line_a, line_b)
    t = (ua_s + ua_e) * 0.5
    u = (ub_s + ub_e) * 0.5
    return ClParams(XKind.PARALLEL, t, u, _sq_dist_at(line_a, line_b, t, u))


def _sq_dist_parallel(line_a: Line2D, line_b: Line2D) -> float:
    # nearly parallel lines may still cross inside both segments
    t, u = _solve(line_a, line_b)
    if is_between_zero_and_one(t) and is_between_zero_and_one(u):
        return 0.0
    ua_s, ub_s, ua_e, ub_e = project_ends_back_and_forth(line_a, line_b)
    return min(_sq_dist_at(line_a, line_b, ua_s, ub_s), _sq_dist_at(line_a, line_b, ua_e, ub_e))


def _closest_apart(line_a: Line2D, line_b: Line2D) -> ClParams:
    # the four end projections plus the clamped ray solve
    t, u = _solve(line_a, line_b)
    candidates = [
        (0.0, _segment_param(line_b, line_a.from_x, line_a.from_y)),
        (1.0, _segment_param(line_b, line_a.to_x, line_a.to_y)),
        (_segment_param(line_a, line_b.from_x, line_b.from_y), 0.0),
        (_segment_param(line_a, line_b.to_x, line_b.to_y), 1.0),
        (min(max(t, 0.0), 1.0), min(max(u, 0.0), 1.0)),
    ]
    best_t, best_u = candidates[0]
    best_d = _sq_dist_at(line_a, line_b, best_t, best_u)
    for ct, cu in candidates[1:]:
        d = _sq_dist_at(line_a, line_b, ct, cu)
        if d < best_d:
            best_t, best_u, best_d = ct, cu, d
    return ClParams(XKind.APART, best_t, best_u, best_d)


def get_closest_parameters(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> ClParams:
    """Closest parameters per relation kind.

    - INTERSECT: the solved parameters clamped to [0, 1], distance zero.
    - PARALLEL: middle of the overlap, or the closest pair of ends.
    - APART: the minimum over the end projections and the clamped solve.
    - TOO_SHORT_*: kind only, see relations.closest_parameters for the
      point based fallback.
    """
    x = classify(line_a, line_b, tol)
    if x.kind == XKind.INTERSECT:
        return ClParams(x.kind, min(max(x.t, 0.0), 1.0), min(max(x.u, 0.0), 1.0), 0.0)
    if x.kind == XKind.PARALLEL:
        return _closest_parallel(line_a, line_b)
    if x.kind == XKind.APART:
        return _closest_apart(line_a, line_b)
    return ClParams(x.kind)


def get_closest_points(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> ClPts:
    cp = get_closest_parameters(line_a, line_b, tol)
    if cp.kind == XKind.INTERSECT:
        p = line_a.evaluate_at(cp.t)
        return ClPts(cp.kind, p, p, 0.0)
    if cp.kind.is_too_short:
        return ClPts(cp.kind)
    return ClPts(cp.kind, line_a.evaluate_at(cp.t), line_b.evaluate_at(cp.u), cp.sq_dist)


def get_sq_distance(line_a: Line2D, line_b: Line2D, tol: LineTolerances = DEFAULT_TOLERANCES) -> float:
    """Squared distance between two finite lines, zero if they intersect.

    Too short lines are treated as points. Parallel lines give the smaller
    of the two end distances from ``project_ends_back_and_forth``, not the
    distance at the middle of the overlap used by ``get_closest_points``.
    """
    cp = get_closest_parameters(line_a, line_b, tol)
    if cp.kind == XKind.PARALLEL:
        return _sq_dist_parallel(line_a, line_b)
    if cp.kind == XKind.TOO_SHORT_BOTH:
        logger.debug('get_sq_distance: both lines too short, using start points')
        return line_a.start.sq_distance_to(line_b.start)
    if cp.kind == XKind.TOO_SHORT_A:
        logger.debug('get_sq_distance: line A too short, using its start point')
        return _sq_dist_segment_pt(line_b, line_a.from_x, line_a.from_y)
    if cp.kind == XKind.TOO_SHORT_B:
        logger.debug('get_sq_distance: line B too short, using its start point')
        return _sq_dist_segment_pt(line_a, line_b.from_x, line_b.from_y)
    return cp.sq_dist


def get_ends_touching(a: Line2D, b: Line2D, tolerance: float = EPS_COINCIDENT) -> XEnds:
    """Which ends of a and b are within tolerance of each other."""
    sq_tol = tolerance * tolerance

    def touch(p: Pt, q: Pt) -> bool:
        return p.sq_distance_to(q) < sq_tol

    if touch(a.end, b.start):
        return XEnds.IDENTICAL_FLIPPED if touch(a.start, b.end) else XEnds.END_A_START_B
    if touch(a.start, b.end):
        return XEnds.START_A_END_B
    if touch(a.start, b.start):
        return XEnds.IDENTICAL if touch(a.end, b.end) else XEnds.START_A_START_B
    if touch(a.end, b.end):
        return XEnds.END_A_END_B
    return XEnds.NOT_TOUCHING


__all__ = [
    'XKind', 'XParam', 'XPt', 'XRayParam', 'XRay', 'ClParams', 'ClPts', 'XEnds',
    'classify', 'get_intersection', 'get_ray_intersection_param', 'get_ray_intersection',
    'is_parallel', 'solve_parameters', 'parameter_a', 'try_parameter_a',
    'is_within_ranges', 'try_intersect_in_range_a', 'try_intersect_in_ranges',
    'do_intersect_raw', 'do_overlap', 'project_ends_back_and_forth',
    'get_closest_parameters', 'get_closest_points', 'get_sq_distance', 'get_ends_touching',
]
