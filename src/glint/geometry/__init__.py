"""Geometry module for ray-primitive intersection.

Components:
    shape: Shape variant, Intersection record and shape constructors
    sphere: Unit sphere
    plane: Infinite xz plane
    cube: Axis-aligned cube
    cylinder: Truncated, optionally capped cylinder
    cone: Truncated, optionally capped double cone

Each primitive module only knows its object-space math; transforms and
dispatch live in :mod:`glint.geometry.shape`.
"""

from .shape import (
    Intersection,
    Shape,
    ShapeKind,
    make_cone,
    make_cube,
    make_cylinder,
    make_glass_sphere,
    make_plane,
    make_sphere,
)

__all__ = [
    "Intersection",
    "Shape",
    "ShapeKind",
    "make_cone",
    "make_cube",
    "make_cylinder",
    "make_glass_sphere",
    "make_plane",
    "make_sphere",
]
