"""Core rendering module.

This module contains the fundamental building blocks of the ray caster:

Components:
    transform: Points, vectors, colors and 4x4 transformation matrices
    ray: Ray data structure and vector utilities
    canvas: Taichi-backed pixel buffer
    integrator: Whitted-style shading (local, reflected and refracted light)
    renderer: Pixel loop driving a camera over a world

The integrator recurses on reflection and refraction with an explicit
remaining-depth counter, so every ray tree is bounded.
"""

from .ray import (
    EPSILON,
    PARALLEL_EPSILON,
    Ray,
    cross,
    dot,
    magnitude,
    normalize,
    reflect,
)
from .transform import (
    NonInvertibleTransformError,
    color,
    identity,
    invert,
    point,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    vector,
    view_transform,
)

# Note: canvas, integrator and renderer are NOT imported here to avoid circular
# imports and an eager Taichi import. Import them directly when needed, e.g.
#   from glint.core.renderer import Renderer

__all__ = [
    "EPSILON",
    "PARALLEL_EPSILON",
    "Ray",
    "cross",
    "dot",
    "magnitude",
    "normalize",
    "reflect",
    "NonInvertibleTransformError",
    "color",
    "identity",
    "invert",
    "point",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "scaling",
    "shearing",
    "translation",
    "vector",
    "view_transform",
]
