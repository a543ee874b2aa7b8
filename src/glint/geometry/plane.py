"""Infinite plane primitive.

In object space the plane is the xz plane through the origin with normal
(0, 1, 0). A ray whose direction has (nearly) no y component is parallel to
the plane and never meets it; this includes rays lying inside the plane.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from glint.core.ray import PARALLEL_EPSILON, Ray
from glint.core.transform import Tuple4, vector

if TYPE_CHECKING:
    from glint.geometry.shape import Shape


def intersect_plane(shape: Shape, ray: Ray) -> list[float]:
    """Intersect an object-space ray with the xz plane.

    Returns:
        An empty list for parallel rays, otherwise a single t value.
    """
    dy = ray.direction[1]
    if abs(dy) < PARALLEL_EPSILON:
        return []
    return [float(-ray.origin[1] / dy)]


def plane_normal(shape: Shape, local_point: Tuple4) -> Tuple4:
    """The plane's normal is (0, 1, 0) everywhere."""
    return vector(0.0, 1.0, 0.0)
