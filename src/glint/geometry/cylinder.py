"""Truncated, optionally capped cylinder primitive.

In object space the cylinder has radius 1 around the y axis and extends
between ``shape.minimum`` and ``shape.maximum`` (both exclusive). When
``shape.closed`` is set, the ends are sealed with unit-radius discs.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from glint.core.ray import EPSILON, PARALLEL_EPSILON, Ray
from glint.core.transform import Tuple4, vector

if TYPE_CHECKING:
    from glint.geometry.shape import Shape


def _within_radius(ray: Ray, t: float, radius: float) -> bool:
    """True if the ray at t lies inside a disc of the given radius around y."""
    x = ray.origin[0] + t * ray.direction[0]
    z = ray.origin[2] + t * ray.direction[2]
    return x * x + z * z <= radius * radius


def _intersect_caps(shape: Shape, ray: Ray, xs: list[float]) -> None:
    if not shape.closed or abs(ray.direction[1]) < PARALLEL_EPSILON:
        return

    t = (shape.minimum - ray.origin[1]) / ray.direction[1]
    if _within_radius(ray, t, 1.0):
        xs.append(float(t))

    t = (shape.maximum - ray.origin[1]) / ray.direction[1]
    if _within_radius(ray, t, 1.0):
        xs.append(float(t))


def intersect_cylinder(shape: Shape, ray: Ray) -> list[float]:
    """Intersect an object-space ray with the cylinder walls and caps.

    Args:
        shape: The owning shape; supplies ``minimum``, ``maximum`` and ``closed``.
        ray: Ray in the cylinder's object space.

    Returns:
        Up to four t values in ascending order.
    """
    ox, oy, oz = ray.origin[0], ray.origin[1], ray.origin[2]
    dx, dy, dz = ray.direction[0], ray.direction[1], ray.direction[2]

    xs: list[float] = []
    a = dx * dx + dz * dz

    # A ray parallel to the y axis can only hit the caps
    if abs(a) >= PARALLEL_EPSILON:
        b = 2.0 * ox * dx + 2.0 * oz * dz
        c = ox * ox + oz * oz - 1.0
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0

        y0 = oy + t0 * dy
        if shape.minimum < y0 < shape.maximum:
            xs.append(float(t0))
        y1 = oy + t1 * dy
        if shape.minimum < y1 < shape.maximum:
            xs.append(float(t1))

    _intersect_caps(shape, ray, xs)
    xs.sort()
    return xs


def cylinder_normal(shape: Shape, local_point: Tuple4) -> Tuple4:
    """Object-space normal on the walls or on either cap."""
    x, y, z = local_point[0], local_point[1], local_point[2]
    dist = x * x + z * z

    if dist < 1.0 and y >= shape.maximum - EPSILON:
        return vector(0.0, 1.0, 0.0)
    if dist < 1.0 and y <= shape.minimum + EPSILON:
        return vector(0.0, -1.0, 0.0)
    return vector(x, 0.0, z)
