"""Scalar tolerance utilities.

Pure predicates answering whether a length or squared length is too small to
be numerically reliable, plus the clamping helpers and the tangent ratio used
by the parallel tests. All "too small" checks are written as ``not (x > tol)``
so that NaN inputs count as too small.
"""
from __future__ import annotations

import math

from .constants import EPS_LENGTH, EPS_LENGTH_SQ, EPS_PARAM, EPS_TINY, EPS_TINY_SQ


def is_too_small(x: float, tol: float = EPS_LENGTH) -> bool:
    return not (x > tol)


def is_too_small_sq(x: float, tol: float = EPS_LENGTH_SQ) -> bool:
    return not (x > tol)


def is_too_tiny(x: float) -> bool:
    return not (x > EPS_TINY)


def is_too_tiny_sq(x: float) -> bool:
    return not (x > EPS_TINY_SQ)


def clamp01(x: float) -> float:
    """Clamp to [0, 1]. NaN is returned unchanged."""
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


def clamp_unit(x: float) -> float:
    """Clamp to [-1, 1], for safe acos / asin arguments."""
    if x < -1.0:
        return -1.0
    if x > 1.0:
        return 1.0
    return x


def is_between_zero_and_one(x: float) -> bool:
    return 0.0 <= x <= 1.0


def is_between_zero_and_one_tolerant(x: float, slack: float = EPS_PARAM) -> bool:
    """Exclusive test against the range widened by ``slack``; False for NaN."""
    return -slack < x < 1.0 + slack


def is_between_zero_and_one_tolerant_incl(x: float, slack: float = EPS_PARAM) -> bool:
    return -slack <= x <= 1.0 + slack


def tangent_ratio(ax: float, ay: float, bx: float, by: float) -> float:
    """Cross product over dot product of two direction vectors.

    A surrogate for the tangent of the angle between the vectors, compared
    against precomputed tangent values (see constants.TAN_*). Returns +-inf
    for perpendicular vectors and NaN when a vector is zero.
    """
    det = ax * by - ay * bx
    dot = ax * bx + ay * by
    if dot == 0.0:
        if det == 0.0:
            return math.nan
        return math.copysign(math.inf, det)
    return det / dot


def tangent_of_degrees(degrees: float) -> float:
    return math.tan(math.radians(degrees))


__all__ = [
    'is_too_small', 'is_too_small_sq', 'is_too_tiny', 'is_too_tiny_sq',
    'clamp01', 'clamp_unit', 'is_between_zero_and_one',
    'is_between_zero_and_one_tolerant', 'is_between_zero_and_one_tolerant_incl',
    'tangent_ratio', 'tangent_of_degrees',
]
