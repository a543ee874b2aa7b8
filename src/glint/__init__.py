"""Whitted-style recursive ray caster.

This package renders scenes of transformed primitives lit by point lights,
with Phong shading, hard shadows, procedural patterns, mirror reflection
and refraction. Pixel buffers are Taichi fields; everything else is plain
Python over NumPy arrays.

Subpackages:
    core: Transforms, rays, canvas, shading integrator and render loop
    geometry: Shape variant and per-primitive intersection routines
    materials: Phong materials and procedural patterns
    scene: Lights, hit preparation, world and scene descriptions
    camera: Pinhole camera
    preview: PPM/PNG export and Matplotlib preview

Modules:
    config: Environment-variable defaults and RenderSettings
    logging_config: setup_logging helper
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
