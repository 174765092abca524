"""Tolerance configuration objects for the line relationship engine."""
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from .constants import (
    EPS_COINCIDENT,
    EPS_COINCIDENT_SQ,
    EPS_FAST_DOT,
    EPS_LENGTH,
    EPS_PARALLELOGRAM_AREA,
    EPS_PARAM,
    EPS_TOUCH_SQ,
    RAY_PARAM_BOUND,
    TAN_0_25,
)
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class LineTolerances:
    """Tolerances used when relating two 2D lines.

    Attributes
    ----------
    length : float
        Lines whose direction is shorter than this are degenerate (too short).
    tangent : float
        Lines are parallel when ``abs(cross / dot)`` of their directions is
        below this tangent ratio (default: tangent of 0.25 degrees).
    param_slack : float
        Slack on the finite [0, 1] parameter range of a segment.
    touch_sq : float
        Squared distance below which points count as touching in the
        degenerate fallbacks and same-ray checks.
    overlap_distance : float
        Distance within which parallel lines are coincident in the
        intersect-or-overlap test.
    coincident_sq : float
        Squared perpendicular offset accepted by ``try_get_overlap``.
    ray_bound : float
        Ray parameters at or beyond this magnitude count as no intersection.
    """
    length: float = EPS_LENGTH
    tangent: float = TAN_0_25
    param_slack: float = EPS_PARAM
    touch_sq: float = EPS_TOUCH_SQ
    overlap_distance: float = EPS_COINCIDENT
    coincident_sq: float = EPS_COINCIDENT_SQ
    ray_bound: float = RAY_PARAM_BOUND

    def __post_init__(self):
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            # NaN fails the comparison; only ray_bound may be infinite
            if not (value >= 0.0) or (math.isinf(value) and f.name != 'ray_bound'):
                raise InvalidArgumentError(f'LineTolerances.{f.name} must be a finite non-negative number, got {value!r}')

    @property
    def length_sq(self) -> float:
        return self.length * self.length

    @property
    def param_lower(self) -> float:
        return -self.param_slack

    @property
    def param_upper(self) -> float:
        return 1.0 + self.param_slack

    @classmethod
    def from_angle(cls, degrees: float, **overrides) -> 'LineTolerances':
        """Build tolerances whose parallel test uses the given angle in degrees."""
        if not (0.0 < degrees < 90.0):
            raise InvalidArgumentError(f'LineTolerances.from_angle: angle must be in (0, 90) degrees, got {degrees!r}')
        return cls(tangent=math.tan(math.radians(degrees)), **overrides)

    def replace(self, **changes) -> 'LineTolerances':
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class FastTolerances:
    """Absolute tolerances of the cross-product-only parallel tests.

    - parallelogram_area: max |cross| of the two direction vectors. Not scaled
      by line length; pick a bigger value for long lines.
    - min_dot: minimum |dot| required by the oriented / opposing variants.
    """
    parallelogram_area: float = EPS_PARALLELOGRAM_AREA
    min_dot: float = EPS_FAST_DOT


DEFAULT_TOLERANCES = LineTolerances()
DEFAULT_FAST_TOLERANCES = FastTolerances()

__all__ = [
    'LineTolerances', 'FastTolerances',
    'DEFAULT_TOLERANCES', 'DEFAULT_FAST_TOLERANCES',
]
