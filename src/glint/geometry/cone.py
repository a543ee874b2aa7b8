"""Truncated, optionally capped double-napped cone primitive.

In object space the cone is ``x^2 + z^2 = y^2``: two nappes meeting at the
origin. Like the cylinder it is cut at ``shape.minimum`` and
``shape.maximum`` and sealed with caps when ``shape.closed`` is set; a cap's
radius is the absolute value of its y coordinate.

A ray parallel to one of the nappes makes the quadratic degenerate
(a = 0); it still crosses the other nappe once, at ``t = -c / 2b``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from glint.core.ray import EPSILON, PARALLEL_EPSILON, Ray
from glint.core.transform import Tuple4, vector

if TYPE_CHECKING:
    from glint.geometry.shape import Shape


def _within_radius(ray: Ray, t: float, radius: float) -> bool:
    x = ray.origin[0] + t * ray.direction[0]
    z = ray.origin[2] + t * ray.direction[2]
    return x * x + z * z <= radius * radius


def _intersect_caps(shape: Shape, ray: Ray, xs: list[float]) -> None:
    if not shape.closed or abs(ray.direction[1]) < PARALLEL_EPSILON:
        return

    t = (shape.minimum - ray.origin[1]) / ray.direction[1]
    if _within_radius(ray, t, abs(shape.minimum)):
        xs.append(float(t))

    t = (shape.maximum - ray.origin[1]) / ray.direction[1]
    if _within_radius(ray, t, abs(shape.maximum)):
        xs.append(float(t))


def intersect_cone(shape: Shape, ray: Ray) -> list[float]:
    """Intersect an object-space ray with the cone nappes and caps.

    Args:
        shape: The owning shape; supplies ``minimum``, ``maximum`` and ``closed``.
        ray: Ray in the cone's object space.

    Returns:
        Up to four t values in ascending order.
    """
    ox, oy, oz = ray.origin[0], ray.origin[1], ray.origin[2]
    dx, dy, dz = ray.direction[0], ray.direction[1], ray.direction[2]

    a = dx * dx - dy * dy + dz * dz
    b = 2.0 * ox * dx - 2.0 * oy * dy + 2.0 * oz * dz
    c = ox * ox - oy * oy + oz * oz

    xs: list[float] = []
    if abs(a) < PARALLEL_EPSILON:
        if abs(b) >= PARALLEL_EPSILON:
            t = -c / (2.0 * b)
            y = oy + t * dy
            if shape.minimum < y < shape.maximum:
                xs.append(float(t))
    else:
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


def cone_normal(shape: Shape, local_point: Tuple4) -> Tuple4:
    """Object-space normal on a nappe or cap (unnormalized)."""
    x, y, z = local_point[0], local_point[1], local_point[2]
    dist = x * x + z * z

    if dist < y * y and y >= shape.maximum - EPSILON:
        return vector(0.0, 1.0, 0.0)
    if dist < y * y and y <= shape.minimum + EPSILON:
        return vector(0.0, -1.0, 0.0)

    ny = math.sqrt(dist)
    if y > 0.0:
        ny = -ny
    return vector(x, ny, z)
