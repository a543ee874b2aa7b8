"""Unit sphere primitive.

In object space the sphere is centered on the origin with radius 1; size and
position come from the owning shape's transform.

The ray-sphere intersection is found by substituting the ray into
``x^2 + y^2 + z^2 = 1``:

    a*t^2 + b*t + c = 0

where:
    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - 1

A negative discriminant means the ray misses. A tangent ray produces two
equal roots, which are both reported.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from glint.core.ray import Ray
from glint.core.transform import Tuple4, vector

if TYPE_CHECKING:
    from glint.geometry.shape import Shape


def intersect_sphere(shape: Shape, ray: Ray) -> list[float]:
    """Intersect an object-space ray with the unit sphere.

    Args:
        shape: The owning shape (unused; the sphere has no parameters).
        ray: Ray in the sphere's object space.

    Returns:
        Zero or two t values in ascending order.
    """
    ox, oy, oz = ray.origin[0], ray.origin[1], ray.origin[2]
    dx, dy, dz = ray.direction[0], ray.direction[1], ray.direction[2]

    a = dx * dx + dy * dy + dz * dz
    b = 2.0 * (dx * ox + dy * oy + dz * oz)
    c = ox * ox + oy * oy + oz * oz - 1.0

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0 or a == 0.0:
        return []

    sqrt_d = math.sqrt(discriminant)
    t0 = (-b - sqrt_d) / (2.0 * a)
    t1 = (-b + sqrt_d) / (2.0 * a)
    if t0 > t1:
        t0, t1 = t1, t0
    return [float(t0), float(t1)]


def sphere_normal(shape: Shape, local_point: Tuple4) -> Tuple4:
    """Object-space normal: the vector from the center to the point."""
    return vector(local_point[0], local_point[1], local_point[2])
