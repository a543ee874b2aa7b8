"""Shape abstraction shared by every geometric primitive.

A Shape is a tagged variant: ``kind`` selects the object-space intersection
and normal routines from per-kind dispatch tables, while the Shape itself
carries the state every primitive shares (transform, cached inverse,
material) plus the truncation parameters used by cylinders and cones.

World-space queries follow the same recipe for every kind:

1. Transform the ray into object space with the cached inverse.
2. Run the kind's local routine.
3. For normals, map the local normal back with the inverse transpose,
   zero w and renormalize.

Example:
    >>> from glint.core.ray import Ray
    >>> from glint.core.transform import point, scaling, vector
    >>> from glint.geometry.shape import make_sphere
    >>> s = make_sphere(transform=scaling(2, 2, 2))
    >>> [i.t for i in s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))]
    [3.0, 7.0]
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from glint.core.ray import Ray, normalize
from glint.core.transform import Matrix4, Tuple4, identity, invert
from glint.geometry.cone import cone_normal, intersect_cone
from glint.geometry.cube import cube_normal, intersect_cube
from glint.geometry.cylinder import cylinder_normal, intersect_cylinder
from glint.geometry.plane import intersect_plane, plane_normal
from glint.geometry.sphere import intersect_sphere, sphere_normal
from glint.materials.material import Material, make_glass_material


class ShapeKind(IntEnum):
    """Closed set of primitive kinds."""

    SPHERE = 0
    PLANE = 1
    CUBE = 2
    CYLINDER = 3
    CONE = 4


@dataclass(frozen=True)
class Intersection:
    """A ray/shape intersection.

    Attributes:
        t: Ray parameter at the intersection (may be negative).
        shape: The shape that was hit.
    """

    t: float
    shape: Shape


LocalIntersect = Callable[["Shape", Ray], "list[float]"]
LocalNormal = Callable[["Shape", Tuple4], Tuple4]

_INTERSECT_FUNCTIONS: dict[ShapeKind, LocalIntersect] = {
    ShapeKind.SPHERE: intersect_sphere,
    ShapeKind.PLANE: intersect_plane,
    ShapeKind.CUBE: intersect_cube,
    ShapeKind.CYLINDER: intersect_cylinder,
    ShapeKind.CONE: intersect_cone,
}

_NORMAL_FUNCTIONS: dict[ShapeKind, LocalNormal] = {
    ShapeKind.SPHERE: sphere_normal,
    ShapeKind.PLANE: plane_normal,
    ShapeKind.CUBE: cube_normal,
    ShapeKind.CYLINDER: cylinder_normal,
    ShapeKind.CONE: cone_normal,
}


class Shape:
    """A transformed primitive with a material.

    Shapes compare by identity: two spheres with equal parameters are still
    distinct objects in a scene, which the refraction containment stack
    relies on.

    Attributes:
        kind: Which primitive this shape is.
        material: Surface material.
        minimum: Lower y bound (exclusive) for cylinders and cones.
        maximum: Upper y bound (exclusive) for cylinders and cones.
        closed: Whether cylinders and cones have end caps.
    """

    def __init__(
        self,
        kind: ShapeKind,
        *,
        transform: Matrix4 | None = None,
        material: Material | None = None,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False,
    ) -> None:
        self.kind = ShapeKind(kind)
        self.material = material if material is not None else Material()
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.closed = bool(closed)
        self.transform = transform if transform is not None else identity()

    @property
    def transform(self) -> Matrix4:
        """Object-to-world transform."""
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix4) -> None:
        # invert() raises before any cached state changes
        matrix = np.asarray(matrix, dtype=np.float64)
        inverse = invert(matrix)
        self._transform = matrix
        self._inverse = inverse
        self._inverse_transpose = inverse.T.copy()

    @property
    def inverse(self) -> Matrix4:
        """Cached inverse of the transform (world-to-object)."""
        return self._inverse

    def local_intersect(self, local_ray: Ray) -> list[float]:
        """Intersection t values for a ray already in object space."""
        return _INTERSECT_FUNCTIONS[self.kind](self, local_ray)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this shape.

        Args:
            ray: World-space ray.

        Returns:
            Intersections in ascending t order; t values are measured in
            units of the world-space direction.
        """
        local_ray = ray.transform(self._inverse)
        return [Intersection(t, self) for t in self.local_intersect(local_ray)]

    def local_normal_at(self, local_point: Tuple4) -> Tuple4:
        """Object-space normal (not necessarily unit length)."""
        return _NORMAL_FUNCTIONS[self.kind](self, local_point)

    def normal_at(self, world_point: Tuple4) -> Tuple4:
        """Unit world-space surface normal at a point on the shape."""
        local_point = self._inverse @ np.asarray(world_point, dtype=np.float64)
        local_normal = self.local_normal_at(local_point)
        world_normal = self._inverse_transpose @ local_normal
        world_normal[3] = 0.0
        return normalize(world_normal)

    def __repr__(self) -> str:
        return f"Shape(kind={self.kind.name}, material={self.material!r})"


# =============================================================================
# Constructors
# =============================================================================


def make_sphere(
    transform: Matrix4 | None = None, material: Material | None = None
) -> Shape:
    """Unit sphere centered on the origin."""
    return Shape(ShapeKind.SPHERE, transform=transform, material=material)


def make_glass_sphere(transform: Matrix4 | None = None) -> Shape:
    """Unit sphere with a fully transparent, index 1.5 material."""
    return Shape(ShapeKind.SPHERE, transform=transform, material=make_glass_material())


def make_plane(
    transform: Matrix4 | None = None, material: Material | None = None
) -> Shape:
    """The xz plane."""
    return Shape(ShapeKind.PLANE, transform=transform, material=material)


def make_cube(
    transform: Matrix4 | None = None, material: Material | None = None
) -> Shape:
    """Axis-aligned cube spanning [-1, 1] on every axis."""
    return Shape(ShapeKind.CUBE, transform=transform, material=material)


def make_cylinder(
    transform: Matrix4 | None = None,
    material: Material | None = None,
    minimum: float = -math.inf,
    maximum: float = math.inf,
    closed: bool = False,
) -> Shape:
    """Unit-radius cylinder around the y axis, truncated to (minimum, maximum)."""
    return Shape(
        ShapeKind.CYLINDER,
        transform=transform,
        material=material,
        minimum=minimum,
        maximum=maximum,
        closed=closed,
    )


def make_cone(
    transform: Matrix4 | None = None,
    material: Material | None = None,
    minimum: float = -math.inf,
    maximum: float = math.inf,
    closed: bool = False,
) -> Shape:
    """Double-napped cone ``x^2 + z^2 = y^2``, truncated to (minimum, maximum)."""
    return Shape(
        ShapeKind.CONE,
        transform=transform,
        material=material,
        minimum=minimum,
        maximum=maximum,
        closed=closed,
    )
