"""Whitted-style recursive shading.

This module evaluates the color seen along a ray: local Phong lighting from
every point light (with hard shadows), plus mirror reflection and Snell
refraction traced recursively with an explicit remaining-depth counter.

Key features:
    - Multiple point lights, summed
    - Hard shadows via shadow rays from the over-point
    - Reflection and refraction bounded by ``remaining`` (0 gives black)
    - Total internal reflection yields no refracted light
    - Schlick-weighted blend for materials both reflective and transparent

Example:
    >>> from glint.core.integrator import color_at
    >>> from glint.core.ray import Ray
    >>> from glint.core.transform import point, vector
    >>> from glint.scene.world import default_world
    >>> c = color_at(default_world(), Ray(point(0, 0, -5), vector(0, 0, 1)))
    >>> [round(float(v), 5) for v in c]
    [0.38066, 0.47583, 0.2855]
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from glint.core.ray import Ray, dot
from glint.core.transform import Color, color
from glint.materials.material import lighting
from glint.scene.intersection import HitRecord, hit, prepare_hit

if TYPE_CHECKING:
    from glint.scene.world import World

# =============================================================================
# Rendering Constants
# =============================================================================

# Default recursion budget for reflection and refraction
DEFAULT_DEPTH = 5

# Color returned for rays that hit nothing
BACKGROUND_COLOR = (0.0, 0.0, 0.0)


def _black() -> Color:
    return color(*BACKGROUND_COLOR)


# =============================================================================
# Shading
# =============================================================================


def surface_color(world: World, comps: HitRecord) -> Color:
    """Local Phong color at a hit, summed over every light."""
    material = comps.shape.material
    total = np.zeros(3, dtype=np.float64)
    for light in world.lights:
        shadowed = world.is_shadowed(comps.over_point, light)
        total += lighting(
            material,
            comps.shape,
            light,
            comps.over_point,
            comps.eye,
            comps.normal,
            shadowed,
        )
    return total


def reflected_color(world: World, comps: HitRecord, remaining: int) -> Color:
    """Color contributed by mirror reflection, already scaled by ``reflective``."""
    reflective = comps.shape.material.reflective
    if reflective == 0.0 or remaining <= 0:
        return _black()

    reflect_ray = Ray(comps.over_point, comps.reflect)
    return color_at(world, reflect_ray, remaining - 1) * reflective


def refracted_color(world: World, comps: HitRecord, remaining: int) -> Color:
    """Color contributed by refraction, already scaled by ``transparency``.

    Returns black when the material is opaque, the depth is exhausted or the
    ray undergoes total internal reflection.
    """
    transparency = comps.shape.material.transparency
    if transparency == 0.0 or remaining <= 0:
        return _black()

    n_ratio = comps.n1 / comps.n2
    cos_i = dot(comps.eye, comps.normal)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return _black()

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normal * (n_ratio * cos_i - cos_t) - comps.eye * n_ratio
    refract_ray = Ray(comps.under_point, direction)
    return color_at(world, refract_ray, remaining - 1) * transparency


def shade_hit(world: World, comps: HitRecord, remaining: int = DEFAULT_DEPTH) -> Color:
    """Total color at a prepared hit.

    Args:
        world: The scene.
        comps: Precomputed hit state from :func:`prepare_hit`.
        remaining: Recursion budget left for reflection and refraction.

    Returns:
        The unclamped color.
    """
    surface = surface_color(world, comps)
    reflected = reflected_color(world, comps, remaining)
    refracted = refracted_color(world, comps, remaining)

    material = comps.shape.material
    if material.reflective > 0.0 and material.transparency > 0.0:
        reflectance = comps.schlick()
        return surface + reflected * reflectance + refracted * (1.0 - reflectance)

    return surface + reflected + refracted


def color_at(world: World, ray: Ray, remaining: int = DEFAULT_DEPTH) -> Color:
    """Color seen along a ray.

    Args:
        world: The scene.
        ray: World-space ray.
        remaining: Recursion budget for reflection and refraction.

    Returns:
        The background color if nothing is hit, otherwise the shaded color.
    """
    xs = world.intersect(ray)
    h = hit(xs)
    if h is None:
        return _black()

    comps = prepare_hit(h, ray, xs)
    return shade_hit(world, comps, remaining)
