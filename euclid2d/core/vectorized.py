"""Vectorized batch versions of the line relationship predicates.

Lines are passed as float arrays of shape (n, 4) holding
``[from_x, from_y, to_x, to_y]`` per row. Pairs are related row by row; a
single line of shape (4,) broadcasts against a batch. Results agree with the
scalar functions in xline2d and relations.
"""
from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .config import DEFAULT_TOLERANCES, LineTolerances
from .constants import EPS_LENGTH_SQ
from .line2d import Line2D
from .xline2d import XKind


def lines_to_array(lines: Iterable[Line2D]) -> np.ndarray:
    """Stack Line2D objects into an array of shape (n, 4)."""
    rows = [(ln.from_x, ln.from_y, ln.to_x, ln.to_y) for ln in lines]
    return np.asarray(rows, dtype=np.float64).reshape(-1, 4)


def _as_pairs(a, b) -> Tuple[np.ndarray, np.ndarray]:
    a = np.atleast_2d(np.asarray(a, dtype=np.float64))
    b = np.atleast_2d(np.asarray(b, dtype=np.float64))
    if a.shape[-1] != 4 or b.shape[-1] != 4:
        raise ValueError(f'line arrays must have 4 columns, got {a.shape} and {b.shape}')
    return np.broadcast_arrays(a, b)


def classify_many(a, b, tol: LineTolerances = DEFAULT_TOLERANCES) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Classify line pairs row by row.

    Parameters
    ----------
    a, b : ndarray, shape (n, 4) or (4,)
        Lines A and B.
    tol : LineTolerances
        Same tolerances as the scalar classify.

    Returns
    -------
    kinds : ndarray, shape (n,), int8
        XKind codes.
    t, u : ndarray, shape (n,)
        Parameters on A and B for INTERSECT rows, NaN elsewhere.
    """
    a, b = _as_pairs(a, b)
    ax = a[:, 2] - a[:, 0]
    ay = a[:, 3] - a[:, 1]
    bx = b[:, 2] - b[:, 0]
    by = b[:, 3] - b[:, 1]
    short_a = ~(ax * ax + ay * ay > tol.length_sq)
    short_b = ~(bx * bx + by * by > tol.length_sq)

    det = ax * by - ay * bx
    dot = ax * bx + ay * by
    wx = b[:, 0] - a[:, 0]
    wy = b[:, 1] - a[:, 1]
    with np.errstate(divide='ignore', invalid='ignore'):
        tan = det / dot
        t = (wx * by - wy * bx) / det
        u = (wx * ay - wy * ax) / det
    parallel = np.abs(tan) < tol.tangent
    lo, hi = tol.param_lower, tol.param_upper
    inside = (t > lo) & (t < hi) & (u > lo) & (u < hi)

    kinds = np.full(a.shape[0], XKind.APART, dtype=np.int8)
    kinds[inside] = XKind.INTERSECT
    # precedence: too short over parallel over the solve
    kinds[parallel] = XKind.PARALLEL
    kinds[short_b] = XKind.TOO_SHORT_B
    kinds[short_a] = XKind.TOO_SHORT_A
    kinds[short_a & short_b] = XKind.TOO_SHORT_BOTH

    solved = kinds == XKind.INTERSECT
    t = np.where(solved, t, np.nan)
    u = np.where(solved, u, np.nan)
    return kinds, t, u


def do_intersect_many(a, b, tol: LineTolerances = DEFAULT_TOLERANCES) -> np.ndarray:
    """Strict crossing test per row, as relations.do_intersect."""
    kinds, t, u = classify_many(a, b, tol)
    lo = tol.param_slack
    hi = 1.0 - tol.param_slack
    with np.errstate(invalid='ignore'):
        return (kinds == XKind.INTERSECT) & (t > lo) & (t < hi) & (u > lo) & (u < hi)


def is_touching_end_of_many(square_tolerance: float, a, b) -> np.ndarray:
    """True per row if any end of a is within square_tolerance of any end of b."""
    a, b = _as_pairs(a, b)
    out = np.zeros(a.shape[0], dtype=bool)
    for ia, ib in ((2, 0), (0, 2), (0, 0), (2, 2)):
        dx = a[:, ia] - b[:, ib]
        dy = a[:, ia + 1] - b[:, ib + 1]
        out |= dx * dx + dy * dy < square_tolerance
    return out


def sq_distance_points_to_lines(points, lines) -> np.ndarray:
    """Squared distance of each point to the finite line in the same row.

    Parameters
    ----------
    points : ndarray, shape (n, 2) or (2,)
    lines : ndarray, shape (n, 4) or (4,)

    Returns
    -------
    ndarray, shape (n,)
        Same values as Line2D.sq_distance_from_point.
    """
    p = np.atleast_2d(np.asarray(points, dtype=np.float64))
    ln = np.atleast_2d(np.asarray(lines, dtype=np.float64))
    n = max(p.shape[0], ln.shape[0])
    p = np.broadcast_to(p, (n, 2))
    ln = np.broadcast_to(ln, (n, 4))
    vx = ln[:, 2] - ln[:, 0]
    vy = ln[:, 3] - ln[:, 1]
    ux = p[:, 0] - ln[:, 0]
    uy = p[:, 1] - ln[:, 1]
    dot = vx * ux + vy * uy
    len_sq = vx * vx + vy * vy
    with np.errstate(divide='ignore', invalid='ignore'):
        t = np.clip(dot / len_sq, 0.0, 1.0)
    degenerate = ~(len_sq > EPS_LENGTH_SQ)
    t = np.where(degenerate, np.where(dot < 0.0, 0.0, 1.0), t)
    cx = ln[:, 0] + vx * t - p[:, 0]
    cy = ln[:, 1] + vy * t - p[:, 1]
    return cx * cx + cy * cy


__all__ = [
    'lines_to_array', 'classify_many', 'do_intersect_many',
    'is_touching_end_of_many', 'sq_distance_points_to_lines',
]
