"""2D point and vector value types consumed by the line engine.

Only the algebra the line relationship engine needs is provided: point and
vector arithmetic, dot and cross products, unitizing and rotation by a
precomputed sine / cosine pair.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Tuple

import numpy as np

from .constants import EPS_UNIT
from .errors import TooSmallError, UnitizingError
from .tolerance import is_too_tiny_sq


class HasDirection(Protocol):
    """Anything with a 2D direction vector: Vc, UnitVc and Line2D."""

    @property
    def direction(self) -> 'Vc': ...


@dataclass(frozen=True)
class Pt:
    x: float
    y: float

    def __sub__(self, other):
        if isinstance(other, Pt):
            return Vc(self.x - other.x, self.y - other.y)
        if isinstance(other, (Vc, UnitVc)):
            return Pt(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __add__(self, other):
        if isinstance(other, (Vc, UnitVc)):
            return Pt(self.x + other.x, self.y + other.y)
        return NotImplemented

    def sq_distance_to(self, other: 'Pt') -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: 'Pt') -> float:
        return math.sqrt(self.sq_distance_to(other))

    def mid_pt(self, other: 'Pt') -> 'Pt':
        return Pt((self.x + other.x) * 0.5, (self.y + other.y) * 0.5)

    def equals(self, other: 'Pt', tol: float = 0.0) -> bool:
        """Component-wise comparison; a tolerance of 0.0 checks for an exact match."""
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class Vc:
    """A free 2D vector, not necessarily unit length."""
    x: float
    y: float

    def __add__(self, other):
        if isinstance(other, (Vc, UnitVc)):
            return Vc(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, (Vc, UnitVc)):
            return Vc(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __mul__(self, f: float) -> 'Vc':
        return Vc(self.x * f, self.y * f)

    __rmul__ = __mul__

    def __truediv__(self, f: float) -> 'Vc':
        return Vc(self.x / f, self.y / f)

    def __neg__(self) -> 'Vc':
        return Vc(-self.x, -self.y)

    @property
    def direction(self) -> 'Vc':
        return self

    @property
    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    @property
    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def dot(self, other: HasDirection) -> float:
        o = other.direction
        return self.x * o.x + self.y * o.y

    def cross(self, other: HasDirection) -> float:
        """2D cross product: signed area of the parallelogram spanned by both vectors."""
        o = other.direction
        return self.x * o.y - self.y * o.x

    def unitized(self) -> 'UnitVc':
        sq = self.length_sq
        if is_too_tiny_sq(sq):
            raise UnitizingError(f'Vc({self.x}, {self.y}) is too small to unitize.')
        inv = 1.0 / math.sqrt(sq)
        return UnitVc(self.x * inv, self.y * inv)

    def rotate90_ccw(self) -> 'Vc':
        return Vc(-self.y, self.x)

    def rotate90_cw(self) -> 'Vc':
        return Vc(self.y, -self.x)

    def rotate(self, r: 'Rotation2D') -> 'Vc':
        return Vc(r.cos * self.x - r.sin * self.y, r.sin * self.x + r.cos * self.y)


@dataclass(frozen=True)
class UnitVc:
    """A 2D vector of length one. Use UnitVc.create to unitize arbitrary input."""
    x: float
    y: float

    def __post_init__(self):
        if abs(self.x * self.x + self.y * self.y - 1.0) > EPS_UNIT:
            raise UnitizingError(f'UnitVc({self.x}, {self.y}) is not of length one.')

    @classmethod
    def create(cls, x: float, y: float) -> 'UnitVc':
        return Vc(x, y).unitized()

    @property
    def direction(self) -> Vc:
        return Vc(self.x, self.y)

    def __neg__(self) -> 'UnitVc':
        return UnitVc(-self.x, -self.y)

    def __mul__(self, f: float) -> Vc:
        return Vc(self.x * f, self.y * f)

    __rmul__ = __mul__

    def dot(self, other: HasDirection) -> float:
        o = other.direction
        return self.x * o.x + self.y * o.y

    def cross(self, other: HasDirection) -> float:
        o = other.direction
        return self.x * o.y - self.y * o.x


@dataclass(frozen=True)
class Rotation2D:
    """A 2D rotation stored as its precomputed sine and cosine."""
    sin: float
    cos: float

    def __post_init__(self):
        if abs(self.sin * self.sin + self.cos * self.cos - 1.0) > EPS_UNIT:
            raise UnitizingError(f'Rotation2D(sin {self.sin}, cos {self.cos}): sin*sin + cos*cos is not one.')

    @classmethod
    def from_radians(cls, angle: float) -> 'Rotation2D':
        return cls(math.sin(angle), math.cos(angle))

    @classmethod
    def from_degrees(cls, degrees: float) -> 'Rotation2D':
        return cls.from_radians(math.radians(degrees))

    @property
    def inverse(self) -> 'Rotation2D':
        return Rotation2D(-self.sin, self.cos)

    @property
    def in_degrees(self) -> float:
        return math.degrees(math.atan2(self.sin, self.cos))


def direction_of(obj: HasDirection, operation: str) -> Vc:
    """Return the direction of obj, raising TooSmallError when it has none."""
    v = obj.direction
    if is_too_tiny_sq(v.length_sq):
        raise TooSmallError(operation, obj)
    return v


__all__ = ['HasDirection', 'Pt', 'Vc', 'UnitVc', 'Rotation2D', 'direction_of']
