"""Axis-aligned cube primitive.

In object space the cube spans [-1, 1] on every axis. Intersection uses the
slab method: each axis contributes the interval of t for which the ray lies
between that axis' two bounding planes, and the ray is inside the cube for
the intersection of the three intervals.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from glint.core.ray import PARALLEL_EPSILON, Ray
from glint.core.transform import Tuple4, vector

if TYPE_CHECKING:
    from glint.geometry.shape import Shape


def _check_axis(origin: float, direction: float) -> tuple[float, float]:
    """Entry and exit t for one pair of slab planes at -1 and +1.

    A direction component of (nearly) zero means the ray never crosses the
    planes, so the bounds become infinite with the sign of the numerator.
    """
    tmin_numerator = -1.0 - origin
    tmax_numerator = 1.0 - origin

    if abs(direction) >= PARALLEL_EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = math.copysign(math.inf, tmin_numerator)
        tmax = math.copysign(math.inf, tmax_numerator)

    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


def intersect_cube(shape: Shape, ray: Ray) -> list[float]:
    """Intersect an object-space ray with the cube.

    Returns:
        An empty list when the three slab intervals do not overlap,
        otherwise the entry and exit t values (either may be negative).
    """
    xtmin, xtmax = _check_axis(ray.origin[0], ray.direction[0])
    ytmin, ytmax = _check_axis(ray.origin[1], ray.direction[1])
    ztmin, ztmax = _check_axis(ray.origin[2], ray.direction[2])

    tmin = max(xtmin, ytmin, ztmin)
    tmax = min(xtmax, ytmax, ztmax)

    # A zero direction leaves every slab bound infinite
    if tmin > tmax or math.isinf(tmin) or math.isinf(tmax):
        return []
    return [float(tmin), float(tmax)]


def cube_normal(shape: Shape, local_point: Tuple4) -> Tuple4:
    """Normal of the face containing the point: the axis of largest magnitude."""
    x, y, z = local_point[0], local_point[1], local_point[2]
    largest = max(abs(x), abs(y), abs(z))

    if largest == abs(x):
        return vector(x, 0.0, 0.0)
    if largest == abs(y):
        return vector(0.0, y, 0.0)
    return vector(0.0, 0.0, z)
