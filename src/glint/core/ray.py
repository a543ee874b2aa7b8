"""Ray data structure and vector utilities.

This module provides the Ray dataclass used throughout the ray caster together
with the small set of vector helpers the intersection and shading code needs.
Vectors are the 4-component arrays produced by :mod:`glint.core.transform`;
every helper here works on the xyz part and keeps w intact where it matters.

Example:
    >>> from glint.core.ray import Ray
    >>> from glint.core.transform import point, vector
    >>> ray = Ray(point(2.0, 3.0, 4.0), vector(1.0, 0.0, 0.0))
    >>> ray.position(2.5)
    array([4.5, 3. , 4. , 1. ])
"""

import sys
from dataclasses import dataclass

import numpy as np

from glint.core.transform import Matrix4, Tuple4

# Surface offset that prevents acne, also the on-cap tolerance for normals
EPSILON = 1e-5

# Direction components below this count as zero in parallel-ray tests
PARALLEL_EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (point, w = 1).
        direction: The direction of the ray (vector, w = 0). It is not
            required to be unit length and is never renormalized by the
            intersection code: t values are measured in units of this vector.
    """

    origin: Tuple4
    direction: Tuple4

    def position(self, t: float) -> Tuple4:
        """Compute the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix4) -> "Ray":
        """Return a new ray with origin and direction multiplied by ``matrix``."""
        return Ray(matrix @ self.origin, matrix @ self.direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Tuple4, b: Tuple4) -> float:
    """Dot product of the xyz parts of two tuples."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Tuple4, b: Tuple4) -> Tuple4:
    """Cross product of two vectors; the result is a vector (w = 0)."""
    result = np.zeros(4, dtype=np.float64)
    result[:3] = np.cross(a[:3], b[:3])
    return result


def magnitude(v: Tuple4) -> float:
    return float(np.linalg.norm(v[:3]))


def normalize(v: Tuple4) -> Tuple4:
    """Normalize a vector to unit length.

    Zero-length input is returned unchanged rather than producing NaNs.
    """
    length = magnitude(v)
    if length == 0.0:
        return v.copy()
    result = v / length
    result[3] = v[3]
    return result


def reflect(incident: Tuple4, normal: Tuple4) -> Tuple4:
    """Reflect an incident vector about a normal: ``v - 2 * dot(v, n) * n``.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - normal * (2.0 * dot(incident, normal))
