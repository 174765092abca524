"""Exceptions raised by euclid2d geometry operations."""
from __future__ import annotations

from typing import Any, Tuple


class GeometryError(Exception):
    """Base exception for geometry operations."""

    pass


class TooSmallError(GeometryError):
    """Input is too short to define a direction for the requested operation.

    The offending values (lines, points, vectors) are kept on ``items`` for
    diagnostics.
    """

    def __init__(self, operation: str, *items: Any):
        self.operation = operation
        self.items: Tuple[Any, ...] = items
        detail = ''.join(f'\n  {item!r}' for item in items)
        super().__init__(f'euclid2d.{operation} failed on too small input:{detail}')


class UnitizingError(GeometryError):
    """A vector or rotation cannot be brought to unit length."""

    pass


class InvalidArgumentError(GeometryError, ValueError):
    """Argument outside the accepted domain (counts, tolerances)."""

    pass


__all__ = ['GeometryError', 'TooSmallError', 'UnitizingError', 'InvalidArgumentError']
