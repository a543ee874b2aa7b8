"""Hit selection and precomputed shading state.

Given the intersections of a ray with the world, this module picks the
visible hit and precomputes everything the shading pipeline needs at that
point: position, eye and normal vectors, the reflection direction, points
nudged above and below the surface, and the refractive indices on either
side of the boundary.

Refractive indices are found with a containment stack. The intersections
are walked in ascending t; each shape is pushed when the ray enters it and
removed when the ray leaves it. At the hit, n1 is the index of the innermost
containing shape before the crossing and n2 the one after.

Example:
    >>> from glint.core.ray import Ray
    >>> from glint.core.transform import point, vector
    >>> from glint.geometry.shape import make_sphere
    >>> from glint.scene.intersection import hit, prepare_hit
    >>> s = make_sphere()
    >>> r = Ray(point(0, 0, -5), vector(0, 0, 1))
    >>> xs = s.intersect(r)
    >>> rec = prepare_hit(hit(xs), r, xs)
    >>> rec.t, rec.inside
    (4.0, False)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from glint.core.ray import EPSILON, Ray, dot, normalize, reflect
from glint.core.transform import Tuple4
from glint.geometry.shape import Intersection, Shape
from glint.materials.material import VACUUM_INDEX


def hit(intersections: Sequence[Intersection]) -> Intersection | None:
    """Return the visible intersection: the smallest non-negative t.

    Ties are broken by list order. Intersections behind the ray origin
    (t < 0) are never visible.

    Args:
        intersections: Intersections in any order.

    Returns:
        The visible intersection, or None if every t is negative.
    """
    return min(
        (i for i in intersections if i.t >= 0.0),
        key=lambda i: i.t,
        default=None,
    )


@dataclass
class HitRecord:
    """Precomputed state for shading one intersection.

    Attributes:
        t: Ray parameter of the hit.
        shape: The shape that was hit.
        point: World-space hit point.
        eye: Unit vector toward the eye (negated ray direction).
        normal: Unit normal, flipped to face the eye.
        inside: True if the normal had to be flipped (ray started inside).
        reflect: Ray direction reflected about the normal.
        over_point: Point nudged along the normal; origin for shadow and
            reflection rays so they do not re-hit the surface.
        under_point: Point nudged against the normal; origin for
            refraction rays.
        n1: Refractive index of the medium being left.
        n2: Refractive index of the medium being entered.
    """

    t: float
    shape: Shape
    point: Tuple4
    eye: Tuple4
    normal: Tuple4
    inside: bool
    reflect: Tuple4
    over_point: Tuple4
    under_point: Tuple4
    n1: float = VACUUM_INDEX
    n2: float = VACUUM_INDEX

    def schlick(self) -> float:
        """Schlick approximation of the Fresnel reflectance.

        Returns:
            Fraction of light reflected at this boundary, in [0, 1]. Total
            internal reflection returns 1.0.
        """
        cos = dot(self.eye, self.normal)

        if self.n1 > self.n2:
            ratio = self.n1 / self.n2
            sin2_t = ratio * ratio * (1.0 - cos * cos)
            if sin2_t > 1.0:
                return 1.0
            # Use cos(theta_t) when leaving the denser medium
            cos = math.sqrt(1.0 - sin2_t)

        r0 = ((self.n1 - self.n2) / (self.n1 + self.n2)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cos) ** 5


def _refractive_indices(
    target: Intersection, intersections: Sequence[Intersection]
) -> tuple[float, float]:
    """Walk the containment stack up to ``target`` and return (n1, n2)."""
    containers: list[Shape] = []
    n1 = n2 = VACUUM_INDEX

    for i in intersections:
        if i is target:
            n1 = containers[-1].material.refractive_index if containers else VACUUM_INDEX

        # Shapes compare by identity, so list.remove drops this exact shape
        if i.shape in containers:
            containers.remove(i.shape)
        else:
            containers.append(i.shape)

        if i is target:
            n2 = containers[-1].material.refractive_index if containers else VACUUM_INDEX
            break

    return n1, n2


def prepare_hit(
    intersection: Intersection,
    ray: Ray,
    intersections: Sequence[Intersection] | None = None,
) -> HitRecord:
    """Precompute the shading state for an intersection.

    Args:
        intersection: The intersection being shaded (usually the hit).
        ray: The ray that produced it.
        intersections: The full ascending intersection list for the ray,
            used to determine n1/n2. When omitted the hit is treated as an
            entry from vacuum into its shape.

    Returns:
        A populated HitRecord.
    """
    shape = intersection.shape
    position = ray.position(intersection.t)
    direction = normalize(ray.direction)
    eye = -direction
    normal = shape.normal_at(position)

    inside = False
    if dot(normal, eye) < 0.0:
        inside = True
        normal = -normal

    if intersections is None:
        intersections = [intersection]
    n1, n2 = _refractive_indices(intersection, intersections)

    return HitRecord(
        t=intersection.t,
        shape=shape,
        point=position,
        eye=eye,
        normal=normal,
        inside=inside,
        reflect=reflect(direction, normal),
        over_point=position + normal * EPSILON,
        under_point=position - normal * EPSILON,
        n1=n1,
        n2=n2,
    )
