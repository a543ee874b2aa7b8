"""Procedural color patterns.

A pattern maps a point in pattern space to a color. Patterns are a closed
tagged variant (``PatternKind``) dispatched through a table of plain functions,
so adding a pattern means adding a kind and one function.

Each pattern owns a transform, independent of the transform of the shape it
is painted on. A world-space point is first mapped into the shape's object
space and then into pattern space before evaluation.

Supported kinds:
    SOLID: always color ``a``
    STRIPE: alternates ``a`` / ``b`` every unit along x
    GRADIENT: linear blend from ``a`` to ``b`` across each unit of x
    RING: concentric rings in the xz plane
    CHECKER: 3D checkerboard of unit cubes
    COORDINATES: returns the pattern-space point itself as a color (debugging)

Example:
    >>> from glint.core.transform import color, point, scaling
    >>> from glint.materials.pattern import make_stripe_pattern
    >>> stripes = make_stripe_pattern(color(1, 1, 1), color(0, 0, 0))
    >>> stripes.transform = scaling(0.5, 0.5, 0.5)
    >>> stripes.pattern_at(point(0.6, 0.0, 0.0))
    array([0., 0., 0.])
"""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np

from glint.core.transform import Color, Matrix4, Tuple4, color, identity, invert

if TYPE_CHECKING:
    from glint.geometry.shape import Shape

WHITE = (1.0, 1.0, 1.0)
BLACK = (0.0, 0.0, 0.0)


class PatternKind(IntEnum):
    """Enumeration of supported pattern kinds."""

    SOLID = 0
    STRIPE = 1
    GRADIENT = 2
    RING = 3
    CHECKER = 4
    COORDINATES = 5


class Pattern:
    """A two-color procedural pattern with its own transform.

    Attributes:
        kind: The pattern kind used for dispatch.
        a: First color.
        b: Second color (unused by SOLID and COORDINATES).
    """

    def __init__(
        self,
        kind: PatternKind,
        a: Color | None = None,
        b: Color | None = None,
        transform: Matrix4 | None = None,
    ) -> None:
        self.kind = PatternKind(kind)
        self.a = color(*WHITE) if a is None else np.asarray(a, dtype=np.float64)
        self.b = color(*BLACK) if b is None else np.asarray(b, dtype=np.float64)
        self.transform = identity() if transform is None else transform

    @property
    def transform(self) -> Matrix4:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix4) -> None:
        # Inverse is computed on write so evaluation never inverts
        inverse = invert(matrix)
        self._transform = np.asarray(matrix, dtype=np.float64)
        self._inverse = inverse

    @property
    def inverse(self) -> Matrix4:
        return self._inverse

    def pattern_at(self, pattern_point: Tuple4) -> Color:
        """Evaluate the pattern at a point already in pattern space."""
        return _PATTERN_FUNCTIONS[self.kind](self, pattern_point)

    def pattern_at_shape(self, shape: Shape, world_point: Tuple4) -> Color:
        """Evaluate the pattern at a world-space point on ``shape``.

        Args:
            shape: The shape the pattern is applied to.
            world_point: The point in world space.

        Returns:
            The pattern color at that point.
        """
        object_point = shape.inverse @ world_point
        pattern_point = self._inverse @ object_point
        return self.pattern_at(pattern_point)

    def __repr__(self) -> str:
        return f"Pattern(kind={self.kind.name}, a={self.a.tolist()}, b={self.b.tolist()})"


# =============================================================================
# Pattern Functions
# =============================================================================


def _solid_at(pattern: Pattern, p: Tuple4) -> Color:
    return pattern.a


def _stripe_at(pattern: Pattern, p: Tuple4) -> Color:
    if math.floor(p[0]) % 2 == 0:
        return pattern.a
    return pattern.b


def _gradient_at(pattern: Pattern, p: Tuple4) -> Color:
    fraction = p[0] - math.floor(p[0])
    return pattern.a + (pattern.b - pattern.a) * fraction


def _ring_at(pattern: Pattern, p: Tuple4) -> Color:
    if math.floor(math.hypot(p[0], p[2])) % 2 == 0:
        return pattern.a
    return pattern.b


def _checker_at(pattern: Pattern, p: Tuple4) -> Color:
    if (math.floor(p[0]) + math.floor(p[1]) + math.floor(p[2])) % 2 == 0:
        return pattern.a
    return pattern.b


def _coordinates_at(pattern: Pattern, p: Tuple4) -> Color:
    return color(p[0], p[1], p[2])


_PATTERN_FUNCTIONS: dict[PatternKind, Callable[[Pattern, Tuple4], Color]] = {
    PatternKind.SOLID: _solid_at,
    PatternKind.STRIPE: _stripe_at,
    PatternKind.GRADIENT: _gradient_at,
    PatternKind.RING: _ring_at,
    PatternKind.CHECKER: _checker_at,
    PatternKind.COORDINATES: _coordinates_at,
}


# =============================================================================
# Constructors
# =============================================================================


def make_solid_pattern(a: Color) -> Pattern:
    return Pattern(PatternKind.SOLID, a, a)


def make_stripe_pattern(a: Color, b: Color, transform: Matrix4 | None = None) -> Pattern:
    return Pattern(PatternKind.STRIPE, a, b, transform)


def make_gradient_pattern(a: Color, b: Color, transform: Matrix4 | None = None) -> Pattern:
    return Pattern(PatternKind.GRADIENT, a, b, transform)


def make_ring_pattern(a: Color, b: Color, transform: Matrix4 | None = None) -> Pattern:
    return Pattern(PatternKind.RING, a, b, transform)


def make_checker_pattern(a: Color, b: Color, transform: Matrix4 | None = None) -> Pattern:
    return Pattern(PatternKind.CHECKER, a, b, transform)


def make_coordinates_pattern(transform: Matrix4 | None = None) -> Pattern:
    """Pattern that echoes the pattern-space point as a color; useful in tests."""
    return Pattern(PatternKind.COORDINATES, transform=transform)
