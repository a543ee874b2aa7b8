"""Phong surface material and local illumination.

This module provides the Material dataclass that describes how a surface
responds to light and the ``lighting`` function that evaluates the Phong
reflection model (ambient + diffuse + specular) for one point light.

Recursive effects (reflection, refraction) are not computed here; the
integrator combines the local color returned by ``lighting`` with the
reflected and refracted contributions.

Example:
    >>> from glint.core.transform import color, point, vector
    >>> from glint.geometry.shape import make_sphere
    >>> from glint.materials.material import Material, lighting
    >>> from glint.scene.light import PointLight
    >>> m = Material()
    >>> light = PointLight(point(0, 0, -10), color(1, 1, 1))
    >>> lighting(m, make_sphere(), light, point(0, 0, 0),
    ...          vector(0, 0, -1), vector(0, 0, -1), in_shadow=False)
    array([1.9, 1.9, 1.9])
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from glint.core.ray import dot, normalize, reflect
from glint.core.transform import Color, Tuple4, color
from glint.materials.pattern import Pattern

if TYPE_CHECKING:
    from glint.geometry.shape import Shape
    from glint.scene.light import PointLight

# Refractive indices of common media
VACUUM_INDEX = 1.0
AIR_INDEX = 1.00029
WATER_INDEX = 1.333
GLASS_INDEX = 1.5
DIAMOND_INDEX = 2.417


@dataclass
class Material:
    """Surface appearance parameters.

    Attributes:
        color: Base surface color, used when no pattern is set.
        ambient: Ambient reflection weight, typically in [0, 1].
        diffuse: Diffuse reflection weight, typically in [0, 1].
        specular: Specular reflection weight, typically in [0, 1].
        shininess: Specular exponent; larger values give smaller highlights.
        reflective: Mirror reflection weight in [0, 1].
        transparency: Refraction weight in [0, 1].
        refractive_index: Index of refraction of the medium inside the shape.
        pattern: Optional pattern that replaces ``color``.
    """

    color: Color = field(default_factory=lambda: color(1.0, 1.0, 1.0))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM_INDEX
    pattern: Pattern | None = None

    def __post_init__(self) -> None:
        self.color = np.asarray(self.color, dtype=np.float64)
        if self.shininess <= 0.0:
            raise ValueError(f"shininess must be positive, got {self.shininess}")
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"refractive_index must be positive, got {self.refractive_index}"
            )

    def color_at(self, shape: Shape, world_point: Tuple4) -> Color:
        """Surface color at a point: the pattern if one is set, else the base color."""
        if self.pattern is not None:
            return self.pattern.pattern_at_shape(shape, world_point)
        return self.color


def make_glass_material(refractive_index: float = GLASS_INDEX) -> Material:
    """Fully transparent material with the given index of refraction."""
    return Material(transparency=1.0, refractive_index=refractive_index)


def lighting(
    material: Material,
    shape: Shape,
    light: PointLight,
    point: Tuple4,
    eye: Tuple4,
    normal: Tuple4,
    in_shadow: bool = False,
) -> Color:
    """Evaluate the Phong reflection model for a single light.

    Args:
        material: Material of the surface being shaded.
        shape: Shape being shaded (needed to evaluate patterns).
        light: The point light.
        point: World-space point being shaded.
        eye: Unit vector from the point toward the eye.
        normal: Unit surface normal, already flipped toward the eye.
        in_shadow: When True only the ambient term is returned.

    Returns:
        The unclamped local color.
    """
    effective_color = material.color_at(shape, point) * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    light_dir = normalize(light.position - point)
    light_dot_normal = dot(light_dir, normal)
    if light_dot_normal < 0.0:
        # Light is on the other side of the surface
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)

    reflect_dir = reflect(-light_dir, normal)
    reflect_dot_eye = dot(reflect_dir, eye)
    if reflect_dot_eye <= 0.0:
        return ambient + diffuse

    factor = math.pow(reflect_dot_eye, material.shininess)
    specular = light.intensity * (material.specular * factor)
    return ambient + diffuse + specular
