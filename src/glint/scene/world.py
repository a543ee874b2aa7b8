"""World: the aggregate scene of shapes and lights.

The World owns an insertion-ordered list of shapes and a list of point
lights. It answers the two geometric queries the shading pipeline needs:
all intersections of a ray with the scene, and whether a point is in shadow
with respect to a light.

Example:
    >>> from glint.core.ray import Ray
    >>> from glint.core.transform import point, vector
    >>> from glint.scene.world import default_world
    >>> world = default_world()
    >>> [round(i.t, 1) for i in world.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))]
    [4.0, 4.5, 5.5, 6.0]
"""

from __future__ import annotations

from collections.abc import Iterable

from glint.core.ray import Ray, magnitude, normalize
from glint.core.transform import Color, Tuple4, color, point, scaling
from glint.geometry.shape import Intersection, Shape, make_sphere
from glint.materials.material import Material
from glint.scene.intersection import hit
from glint.scene.light import PointLight


class World:
    """Container for the shapes and lights of a scene.

    Attributes:
        shapes: Shapes in insertion order.
        lights: Point lights; each contributes independently to shading.
    """

    def __init__(
        self,
        shapes: Iterable[Shape] | None = None,
        lights: Iterable[PointLight] | None = None,
    ) -> None:
        self.shapes: list[Shape] = list(shapes) if shapes is not None else []
        self.lights: list[PointLight] = list(lights) if lights is not None else []

    def add_shape(self, shape: Shape) -> Shape:
        """Append a shape and return it."""
        self.shapes.append(shape)
        return shape

    def add_light(self, light: PointLight) -> PointLight:
        """Append a light and return it."""
        self.lights.append(light)
        return light

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every shape.

        Returns:
            All intersections in ascending t. The sort is stable, so equal t
            values keep shape insertion order.
        """
        xs: list[Intersection] = []
        for shape in self.shapes:
            xs.extend(shape.intersect(ray))
        xs.sort(key=lambda i: i.t)
        return xs

    def is_shadowed(self, world_point: Tuple4, light: PointLight) -> bool:
        """True if some shape lies between the point and the light.

        A hit exactly at the light's distance does not cast a shadow.
        """
        to_light = light.position - world_point
        distance = magnitude(to_light)
        shadow_ray = Ray(world_point, normalize(to_light))

        h = hit(self.intersect(shadow_ray))
        return h is not None and h.t < distance

    def color_at(self, ray: Ray, remaining: int | None = None) -> Color:
        """Color seen along a ray; see :func:`glint.core.integrator.color_at`."""
        from glint.core.integrator import DEFAULT_DEPTH, color_at

        return color_at(self, ray, DEFAULT_DEPTH if remaining is None else remaining)

    def __len__(self) -> int:
        return len(self.shapes)

    def __repr__(self) -> str:
        return f"World(shapes={len(self.shapes)}, lights={len(self.lights)})"


def default_world() -> World:
    """Two concentric spheres lit from the upper left.

    The outer unit sphere is green-yellow with diffuse 0.7 and specular 0.2;
    the inner sphere has the default material and is scaled by 0.5. The
    light sits at (-10, 10, -10) with white intensity.
    """
    light = PointLight(point(-10.0, 10.0, -10.0), color(1.0, 1.0, 1.0))
    outer = make_sphere(
        material=Material(color=color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
    )
    inner = make_sphere(transform=scaling(0.5, 0.5, 0.5))
    return World(shapes=[outer, inner], lights=[light])
