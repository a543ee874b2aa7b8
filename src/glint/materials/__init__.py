"""Materials module: surface appearance and local illumination.

Components:
    material: Phong Material, glass helper and the lighting function
    pattern: Procedural color patterns (stripe, gradient, ring, checker)
"""

from .material import (
    AIR_INDEX,
    DIAMOND_INDEX,
    GLASS_INDEX,
    VACUUM_INDEX,
    WATER_INDEX,
    Material,
    lighting,
    make_glass_material,
)
from .pattern import (
    Pattern,
    PatternKind,
    make_checker_pattern,
    make_coordinates_pattern,
    make_gradient_pattern,
    make_ring_pattern,
    make_solid_pattern,
    make_stripe_pattern,
)

__all__ = [
    "AIR_INDEX",
    "DIAMOND_INDEX",
    "GLASS_INDEX",
    "VACUUM_INDEX",
    "WATER_INDEX",
    "Material",
    "lighting",
    "make_glass_material",
    "Pattern",
    "PatternKind",
    "make_checker_pattern",
    "make_coordinates_pattern",
    "make_gradient_pattern",
    "make_ring_pattern",
    "make_solid_pattern",
    "make_stripe_pattern",
]
