"""The Line2D value type: a finite 2D segment from a start to an end point.

Parameters along a line are 0.0 at the start and 1.0 at the end; values
outside [0, 1] lie on the ray extension. All methods return new values,
a Line2D is never mutated.

Methods that need a direction (ray projections, extending, orientation
predicates) raise TooSmallError for degenerate lines. The finite-line point
queries (closest_parameter, closest_point, distance_to_pt) never raise.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from .constants import (
    EPS_AXIS_ALIGNED,
    EPS_COINCIDENT,
    EPS_FAST_DOT,
    EPS_LENGTH,
    EPS_ORIENTATION_DOT,
    EPS_PARALLELOGRAM_AREA,
    TAN_0_25,
    TAN_45,
    TAN_89_75,
)
from .errors import InvalidArgumentError, TooSmallError
from .points import HasDirection, Pt, Rotation2D, Vc, direction_of
from .tolerance import (
    clamp01,
    is_too_small,
    is_too_small_sq,
    is_too_tiny,
    tangent_ratio,
)


@dataclass(frozen=True)
class Line2D:
    from_x: float
    from_y: float
    to_x: float
    to_y: float

    # --- construction ---------------------------------------------------

    @classmethod
    def from_points(cls, a: Pt, b: Pt) -> 'Line2D':
        return cls(a.x, a.y, b.x, b.y)

    @classmethod
    def from_pt_and_vc(cls, p: Pt, v: Vc) -> 'Line2D':
        return cls(p.x, p.y, p.x + v.x, p.y + v.y)

    # --- basic properties ----------------------------------------------

    @property
    def start(self) -> Pt:
        return Pt(self.from_x, self.from_y)

    @property
    def end(self) -> Pt:
        return Pt(self.to_x, self.to_y)

    @property
    def vector_x(self) -> float:
        return self.to_x - self.from_x

    @property
    def vector_y(self) -> float:
        return self.to_y - self.from_y

    @property
    def vector(self) -> Vc:
        return Vc(self.to_x - self.from_x, self.to_y - self.from_y)

    @property
    def direction(self) -> Vc:
        return self.vector

    @property
    def length_sq(self) -> float:
        x = self.to_x - self.from_x
        y = self.to_y - self.from_y
        return x * x + y * y

    @property
    def length(self) -> float:
        return math.sqrt(self.length_sq)

    @property
    def mid(self) -> Pt:
        return Pt((self.from_x + self.to_x) * 0.5, (self.from_y + self.to_y) * 0.5)

    @property
    def is_zero_length(self) -> bool:
        return self.to_x == self.from_x and self.to_y == self.from_y

    def is_tiny(self, tol: float) -> bool:
        """True if shorter than tol, or if any coordinate is NaN."""
        return is_too_small(self.length, tol)

    def is_tiny_sq(self, tol: float) -> bool:
        return is_too_small_sq(self.length_sq, tol)

    @property
    def is_x_aligned(self) -> bool:
        """Parallel to the X axis, ignoring orientation. Fails on degenerate lines."""
        x = abs(self.vector_x)
        y = abs(self.vector_y)
        if is_too_small(x + y, EPS_LENGTH):
            raise TooSmallError('Line2D.is_x_aligned', self)
        return y < EPS_AXIS_ALIGNED

    @property
    def is_y_aligned(self) -> bool:
        x = abs(self.vector_x)
        y = abs(self.vector_y)
        if is_too_small(x + y, EPS_LENGTH):
            raise TooSmallError('Line2D.is_y_aligned', self)
        return x < EPS_AXIS_ALIGNED

    def equals(self, other: 'Line2D', tol: float = 0.0) -> bool:
        """Component-wise comparison. Reversed lines are not equal."""
        return (abs(self.from_x - other.from_x) <= tol
                and abs(self.from_y - other.from_y) <= tol
                and abs(self.to_x - other.to_x) <= tol
                and abs(self.to_y - other.to_y) <= tol)

    def cross(self, other: 'Line2D') -> float:
        """Determinant of both direction vectors; zero for parallel or zero-length lines."""
        return self.vector_x * other.vector_y - self.vector_y * other.vector_x

    # --- evaluation -----------------------------------------------------

    def evaluate_at(self, p: float) -> Pt:
        return Pt(self.from_x + self.vector_x * p, self.from_y + self.vector_y * p)

    def segment(self, start: float, end: float) -> 'Line2D':
        """The sub line between two parameters."""
        x = self.vector_x
        y = self.vector_y
        return Line2D(self.from_x + x * start, self.from_y + y * start,
                      self.from_x + x * end, self.from_y + y * end)

    def reversed(self) -> 'Line2D':
        return Line2D(self.to_x, self.to_y, self.from_x, self.from_y)

    def length_till_param(self, p: float) -> float:
        """Signed length from the start to parameter p; negative for p < 0."""
        x = self.vector_x * p
        y = self.vector_y * p
        l = math.sqrt(x * x + y * y)
        return l if p > 0.0 else -l

    def length_from_param(self, t: float) -> float:
        p = 1.0 - t
        x = self.vector_x * p
        y = self.vector_y * p
        l = math.sqrt(x * x + y * y)
        return l if p > 0.0 else -l

    def _checked_length(self, operation: str) -> float:
        l = self.length
        if is_too_tiny(l):
            raise TooSmallError(operation, self)
        return l

    def point_at_distance(self, dist: float) -> Pt:
        l = self._checked_length('Line2D.point_at_distance')
        return Pt(self.from_x + self.vector_x * dist / l, self.from_y + self.vector_y * dist / l)

    # --- editing --------------------------------------------------------

    def extend(self, dist_at_start: float, dist_at_end: float) -> 'Line2D':
        """Extend by absolute distances; negative values shrink."""
        x = self.vector_x
        y = self.vector_y
        l = self._checked_length('Line2D.extend')
        return Line2D(self.from_x - x * dist_at_start / l, self.from_y - y * dist_at_start / l,
                      self.to_x + x * dist_at_end / l, self.to_y + y * dist_at_end / l)

    def extend_start(self, dist: float) -> 'Line2D':
        return self.extend(dist, 0.0)

    def extend_end(self, dist: float) -> 'Line2D':
        return self.extend(0.0, dist)

    def extend_rel(self, rel_at_start: float, rel_at_end: float) -> 'Line2D':
        """Extend relative to the length; 0.5 adds half the length on that side."""
        self._checked_length('Line2D.extend_rel')
        x = self.vector_x
        y = self.vector_y
        return Line2D(self.from_x - x * rel_at_start, self.from_y - y * rel_at_start,
                      self.to_x + x * rel_at_end, self.to_y + y * rel_at_end)

    def shrink(self, dist_at_start: float, dist_at_end: float) -> 'Line2D':
        x = self.vector_x
        y = self.vector_y
        l = self._checked_length('Line2D.shrink')
        return Line2D(self.from_x + x * dist_at_start / l, self.from_y + y * dist_at_start / l,
                      self.to_x - x * dist_at_end / l, self.to_y - y * dist_at_end / l)

    def with_length_from_start(self, length: float) -> 'Line2D':
        l = self._checked_length('Line2D.with_length_from_start')
        return Line2D(self.from_x, self.from_y,
                      self.from_x + self.vector_x * length / l,
                      self.from_y + self.vector_y * length / l)

    def with_length_to_end(self, length: float) -> 'Line2D':
        l = self._checked_length('Line2D.with_length_to_end')
        return Line2D(self.to_x - self.vector_x * length / l,
                      self.to_y - self.vector_y * length / l,
                      self.to_x, self.to_y)

    def with_length_from_mid(self, length: float) -> 'Line2D':
        l = self._checked_length('Line2D.with_length_from_mid')
        m = self.mid
        hx = self.vector_x * length * 0.5 / l
        hy = self.vector_y * length * 0.5 / l
        return Line2D(m.x - hx, m.y - hy, m.x + hx, m.y + hy)

    def move(self, v: Vc) -> 'Line2D':
        return Line2D(self.from_x + v.x, self.from_y + v.y, self.to_x + v.x, self.to_y + v.y)

    def move_x(self, distance: float) -> 'Line2D':
        return Line2D(self.from_x + distance, self.from_y, self.to_x + distance, self.to_y)

    def move_y(self, distance: float) -> 'Line2D':
        return Line2D(self.from_x, self.from_y + distance, self.to_x, self.to_y + distance)

    def scale(self, factor: float) -> 'Line2D':
        """Scale about the world origin."""
        return Line2D(self.from_x * factor, self.from_y * factor, self.to_x * factor, self.to_y * factor)

    def scale_on(self, cen: Pt, factor: float) -> 'Line2D':
        cx, cy = cen.x, cen.y
        return Line2D(cx + (self.from_x - cx) * factor, cy + (self.from_y - cy) * factor,
                      cx + (self.to_x - cx) * factor, cy + (self.to_y - cy) * factor)

    def rotate(self, r: Rotation2D) -> 'Line2D':
        """Rotate about the world origin; the length is preserved."""
        c, s = r.cos, r.sin
        fx, fy, tx, ty = self.from_x, self.from_y, self.to_x, self.to_y
        return Line2D(c * fx - s * fy, s * fx + c * fy, c * tx - s * ty, s * tx + c * ty)

    def rotate_with_center(self, cen: Pt, r: Rotation2D) -> 'Line2D':
        return self.move(Vc(-cen.x, -cen.y)).rotate(r).move(Vc(cen.x, cen.y))

    def offset(self, distance: float) -> 'Line2D':
        """Parallel copy; positive distances move the line to its left side."""
        if distance == 0.0:
            return self
        x = self.vector_x
        y = self.vector_y
        l = self._checked_length('Line2D.offset')
        ox = -y * distance / l
        oy = x * distance / l
        return Line2D(self.from_x + ox, self.from_y + oy, self.to_x + ox, self.to_y + oy)

    def divide(self, segments: int) -> List[Pt]:
        """Return segments + 1 points, start and end included."""
        if segments < 1:
            raise InvalidArgumentError(f'Line2D.divide: segments < 1: {segments}')
        pts = [self.start]
        for i in range(1, segments):
            pts.append(self.evaluate_at(i / segments))
        pts.append(self.end)
        return pts

    def divide_min_length(self, min_segment_length: float) -> List[Pt]:
        """Divide into as many segments as possible that are at least min_segment_length long.

        min_segment_length is scaled up slightly, so a line of exactly n times
        min_segment_length gives n - 1 segments.
        """
        l = self.length
        if is_too_small(l, EPS_LENGTH):
            raise TooSmallError('Line2D.divide_min_length', self)
        if l < min_segment_length:
            raise InvalidArgumentError(
                f'Line2D.divide_min_length: line length {l} is smaller than min_segment_length {min_segment_length}')
        return self.divide(int(l / (min_segment_length * 1.000001)))

    def divide_max_length(self, max_segment_length: float) -> List[Pt]:
        """Divide into the fewest segments that are at most max_segment_length long."""
        l = self.length
        if is_too_small(l, EPS_LENGTH):
            raise TooSmallError('Line2D.divide_max_length', self)
        if is_too_small(max_segment_length, EPS_LENGTH):
            raise InvalidArgumentError(
                f'Line2D.divide_max_length: max_segment_length must be positive, was {max_segment_length}')
        return self.divide(int(l / max_segment_length * 0.999999) + 1)

    def split(self, gap: float, segments: int) -> List['Line2D']:
        """Split into equal lines separated by gap. Empty if nothing remains between the gaps."""
        if segments <= 0:
            raise InvalidArgumentError(f'Line2D.split: invalid segments: {segments}')
        l = self._checked_length('Line2D.split')
        seg_len = (l - gap * (segments - 1)) / segments
        if is_too_tiny(seg_len):
            return []
        lines = []
        for i in range(segments):
            s = (i * seg_len + i * gap) / l
            e = ((i + 1) * seg_len + i * gap) / l
            lines.append(self.segment(s, e))
        last = lines[-1]
        lines[-1] = Line2D(last.from_x, last.from_y, self.to_x, self.to_y)
        return lines

    # --- point relations ------------------------------------------------

    def ray_closest_parameter(self, pt: Pt) -> float:
        """Parameter of the point on the infinite ray closest to pt (unclamped)."""
        x = self.vector_x
        y = self.vector_y
        len_sq = x * x + y * y
        if is_too_small_sq(len_sq):
            raise TooSmallError('Line2D.ray_closest_parameter', self, pt)
        return (x * (pt.x - self.from_x) + y * (pt.y - self.from_y)) / len_sq

    def closest_parameter(self, pt: Pt) -> float:
        """Parameter of the closest point on the finite line, in [0, 1].

        Never fails: on a degenerate line the result is 0.0 or 1.0 depending
        on which side of the start the point projects to.
        """
        x = self.vector_x
        y = self.vector_y
        dot = x * (pt.x - self.from_x) + y * (pt.y - self.from_y)
        len_sq = x * x + y * y
        if is_too_small_sq(len_sq):
            return 0.0 if dot < 0.0 else 1.0
        return clamp01(dot / len_sq)

    def ray_closest_point(self, pt: Pt) -> Pt:
        try:
            t = self.ray_closest_parameter(pt)
        except TooSmallError:
            raise TooSmallError('Line2D.ray_closest_point', self, pt) from None
        return self.evaluate_at(t)

    def closest_point(self, pt: Pt) -> Pt:
        return self.evaluate_at(self.closest_parameter(pt))

    def sq_distance_ray_point(self, pt: Pt) -> float:
        """Squared distance from pt to the infinite ray."""
        nx = -self.vector_y
        ny = self.vector_x
        len_sq = nx * nx + ny * ny
        if is_too_small_sq(len_sq):
            raise TooSmallError('Line2D.sq_distance_ray_point', self, pt)
        dot = nx * (pt.x - self.from_x) + ny * (pt.y - self.from_y)
        return dot * dot / len_sq

    def distance_ray_point(self, pt: Pt) -> float:
        return math.sqrt(self.sq_distance_ray_point(pt))

    def sq_distance_from_point(self, pt: Pt) -> float:
        return self.closest_point(pt).sq_distance_to(pt)

    def distance_to_pt(self, pt: Pt) -> float:
        return math.sqrt(self.sq_distance_from_point(pt))

    def is_point_on_left(self, pt: Pt) -> bool:
        """Looking along the line; False for points on the ray."""
        return self.vector.cross(pt - self.start) > 0.0

    def is_point_on_right(self, pt: Pt) -> bool:
        return self.vector.cross(pt - self.start) < 0.0

    # --- direction relations --------------------------------------------

    def matches_orientation(self, other: HasDirection) -> bool:
        """True if the angle between both directions is below 90 degrees."""
        a = direction_of(self, 'Line2D.matches_orientation')
        b = direction_of(other, 'Line2D.matches_orientation')
        return a.dot(b) > EPS_ORIENTATION_DOT

    def matches_orientation_45(self, other: HasDirection) -> bool:
        """True if the angle between both directions is below 45 degrees."""
        a = direction_of(self, 'Line2D.matches_orientation_45')
        b = direction_of(other, 'Line2D.matches_orientation_45')
        if a.dot(b) <= 0.0:
            return False
        return abs(tangent_ratio(a.x, a.y, b.x, b.y)) < TAN_45

    def is_parallel_to(self, other: HasDirection, min_tangent: float = TAN_0_25) -> bool:
        """Parallel within the angle whose tangent is min_tangent, ignoring orientation."""
        a = direction_of(self, 'Line2D.is_parallel_to')
        b = direction_of(other, 'Line2D.is_parallel_to')
        return abs(tangent_ratio(a.x, a.y, b.x, b.y)) < min_tangent

    def is_parallel_and_oriented_to(self, other: HasDirection, min_tangent: float = TAN_0_25) -> bool:
        a = direction_of(self, 'Line2D.is_parallel_and_oriented_to')
        b = direction_of(other, 'Line2D.is_parallel_and_oriented_to')
        if a.dot(b) <= 0.0:
            return False
        return abs(tangent_ratio(a.x, a.y, b.x, b.y)) < min_tangent

    def is_perpendicular_to(self, other: HasDirection, max_tangent: float = TAN_89_75) -> bool:
        a = direction_of(self, 'Line2D.is_perpendicular_to')
        b = direction_of(other, 'Line2D.is_perpendicular_to')
        return abs(tangent_ratio(a.x, a.y, b.x, b.y)) > max_tangent

    def is_coincident_to(self, other: 'Line2D', distance_tolerance: float = EPS_COINCIDENT,
                         min_tangent: float = TAN_0_25) -> bool:
        """Parallel within min_tangent and on the same ray within distance_tolerance.

        The distance is measured from the other line's start to this ray.
        Fails on degenerate lines.
        """
        a = direction_of(self, 'Line2D.is_coincident_to')
        b = direction_of(other, 'Line2D.is_coincident_to')
        if not abs(tangent_ratio(a.x, a.y, b.x, b.y)) < min_tangent:
            return False
        x = other.from_x - self.from_x
        y = other.from_y - self.from_y
        dot_n = x * a.y - y * a.x
        return dot_n * dot_n / a.length_sq < distance_tolerance * distance_tolerance

    # Fast variants: absolute parallelogram area, no length normalisation.
    # They return True for zero-length lines and False for long, nearly
    # parallel lines unless the area tolerance is scaled by the caller.

    def is_parallel_to_fast(self, other: 'Line2D', parallelogram_area: float = EPS_PARALLELOGRAM_AREA) -> bool:
        return abs(self.cross(other)) < parallelogram_area

    def is_coincident_to_fast(self, other: 'Line2D', parallelogram_area: float = EPS_PARALLELOGRAM_AREA) -> bool:
        if not abs(self.cross(other)) < parallelogram_area:
            return False
        return abs(self._start_offset_cross(other)) < parallelogram_area

    def is_parallel_and_oriented_to_fast(self, other: 'Line2D', parallelogram_area: float = EPS_PARALLELOGRAM_AREA,
                                         min_dot: float = EPS_FAST_DOT) -> bool:
        """min_dot must be positive; it keeps zero-length lines from passing."""
        if not abs(self.cross(other)) < parallelogram_area:
            return False
        return self.vector.dot(other) > min_dot

    def is_parallel_and_opposing_to_fast(self, other: 'Line2D', parallelogram_area: float = EPS_PARALLELOGRAM_AREA,
                                         max_dot: float = -EPS_FAST_DOT) -> bool:
        """max_dot must be negative; it keeps zero-length lines from passing."""
        if not abs(self.cross(other)) < parallelogram_area:
            return False
        return self.vector.dot(other) < max_dot

    def is_coincident_and_oriented_to_fast(self, other: 'Line2D', parallelogram_area: float = EPS_PARALLELOGRAM_AREA,
                                           min_dot: float = EPS_FAST_DOT) -> bool:
        if not self.is_parallel_and_oriented_to_fast(other, parallelogram_area, min_dot):
            return False
        return abs(self._start_offset_cross(other)) < parallelogram_area

    def is_coincident_and_opposing_to_fast(self, other: 'Line2D', parallelogram_area: float = EPS_PARALLELOGRAM_AREA,
                                           max_dot: float = -EPS_FAST_DOT) -> bool:
        if not self.is_parallel_and_opposing_to_fast(other, parallelogram_area, max_dot):
            return False
        return abs(self._start_offset_cross(other)) < parallelogram_area

    def _start_offset_cross(self, other: 'Line2D') -> float:
        # area spanned by the start-to-start vector and the other direction
        px = self.from_x - other.from_x
        py = self.from_y - other.from_y
        return px * other.vector_y - py * other.vector_x

    def __repr__(self) -> str:
        return (f'Line2D(from ({self.from_x:g}, {self.from_y:g}) to ({self.to_x:g}, {self.to_y:g}), '
                f'length {self.length:g})')


__all__ = ['Line2D']
