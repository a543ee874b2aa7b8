"""Built-in demonstration scene.

This module provides a factory for a small scene that exercises every
feature of the ray caster:

- Checkered floor plane with a slightly reflective finish
- Striped back wall
- Glass sphere (refraction with Fresnel blending)
- Mirror-like sphere (reflection)
- Ring-patterned cube and a capped cylinder
- Truncated cone
- Two point lights (one warm, one cool)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from glint.scene.showcase import create_showcase_scene
    >>> scene, camera = create_showcase_scene(200, 100)
    >>> canvas = camera.render(scene.get_world())
"""

import math
from dataclasses import dataclass

from glint.camera.camera import Camera
from glint.scene.manager import SceneManager

# =============================================================================
# Showcase Parameters
# =============================================================================


@dataclass
class ShowcaseParams:
    """Parameters for configuring the showcase scene.

    Attributes:
        key_light_color: RGB intensity of the main light (upper left).
        fill_light_color: RGB intensity of the fill light (upper right).
            Set to (0, 0, 0) for a single-light scene.
        floor_reflective: Reflectivity of the checkered floor.
        field_of_view: Camera field of view in radians.
    """

    key_light_color: tuple[float, float, float] = (0.9, 0.85, 0.8)
    fill_light_color: tuple[float, float, float] = (0.2, 0.25, 0.3)
    floor_reflective: float = 0.2
    field_of_view: float = math.pi / 3


# =============================================================================
# Showcase Constants
# =============================================================================

CAMERA_FROM = (0.0, 1.5, -5.0)
CAMERA_TO = (0.0, 1.0, 0.0)
CAMERA_UP = (0.0, 1.0, 0.0)

KEY_LIGHT_POSITION = (-10.0, 10.0, -10.0)
FILL_LIGHT_POSITION = (10.0, 6.0, -10.0)

FLOOR_COLORS = ([0.9, 0.9, 0.9], [0.15, 0.15, 0.15])
WALL_COLORS = ([0.55, 0.6, 0.75], [0.45, 0.5, 0.65])


# =============================================================================
# Showcase Factory
# =============================================================================


def create_showcase_scene(
    width: int = 400,
    height: int = 200,
    params: ShowcaseParams | None = None,
) -> tuple[SceneManager, Camera]:
    """Create the showcase scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        params: Optional ShowcaseParams; defaults to ShowcaseParams().

    Returns:
        A tuple of (SceneManager, Camera). The manager holds the world and
        its description; the camera is configured for the standard view.
    """
    if params is None:
        params = ShowcaseParams()

    scene = SceneManager()

    # =========================================================================
    # Lights
    # =========================================================================

    scene.add_light(KEY_LIGHT_POSITION, params.key_light_color)
    if any(c > 0.0 for c in params.fill_light_color):
        scene.add_light(FILL_LIGHT_POSITION, params.fill_light_color)

    # =========================================================================
    # Room
    # =========================================================================

    scene.add_shape(
        "plane",
        material={
            "specular": 0.0,
            "reflective": params.floor_reflective,
            "pattern": {"type": "checker", "colors": list(FLOOR_COLORS)},
        },
    )
    scene.add_shape(
        "plane",
        transform=[["rotate_x", math.pi / 2], ["translate", 0, 0, 10]],
        material={
            "specular": 0.0,
            "pattern": {
                "type": "stripe",
                "colors": list(WALL_COLORS),
                "transform": [["scale", 0.5, 0.5, 0.5], ["rotate_y", math.pi / 4]],
            },
        },
    )

    # =========================================================================
    # Objects
    # =========================================================================

    # Glass sphere, centre stage
    scene.add_shape(
        "sphere",
        transform=[["translate", -0.5, 1, 0.5]],
        material={
            "color": [0.1, 0.1, 0.1],
            "diffuse": 0.1,
            "specular": 1.0,
            "shininess": 300,
            "reflective": 0.9,
            "transparency": 0.9,
            "refractive_index": 1.5,
        },
    )

    # Mirror sphere on the right
    scene.add_shape(
        "sphere",
        transform=[["scale", 0.5, 0.5, 0.5], ["translate", 1.5, 0.5, -0.5]],
        material={"color": [0.2, 0.2, 0.25], "diffuse": 0.3, "reflective": 0.7},
    )

    # Ring-patterned cube on the left
    scene.add_shape(
        "cube",
        transform=[
            ["scale", 0.35, 0.35, 0.35],
            ["rotate_y", math.pi / 5],
            ["translate", -1.6, 0.35, -0.9],
        ],
        material={
            "diffuse": 0.7,
            "specular": 0.3,
            "pattern": {
                "type": "ring",
                "colors": [[1.0, 0.5, 0.1], [0.6, 0.2, 0.05]],
                "transform": [["scale", 0.2, 0.2, 0.2]],
            },
        },
    )

    # Capped cylinder in the back
    scene.add_shape(
        "cylinder",
        transform=[["scale", 0.4, 1.0, 0.4], ["translate", 1.2, 0, 2.5]],
        material={"color": [0.2, 0.7, 0.3], "diffuse": 0.8, "specular": 0.4},
        minimum=0.0,
        maximum=1.6,
        closed=True,
    )

    # Small gradient cone
    scene.add_shape(
        "cone",
        transform=[["scale", 0.3, 0.6, 0.3], ["translate", 0.4, 0.6, -1.5]],
        material={
            "pattern": {
                "type": "gradient",
                "colors": [[0.9, 0.2, 0.4], [0.3, 0.2, 0.9]],
                "transform": [["scale", 2, 1, 1], ["translate", -1, 0, 0]],
            },
        },
        minimum=-1.0,
        maximum=0.0,
        closed=True,
    )

    scene.set_camera(width, height, params.field_of_view, CAMERA_FROM, CAMERA_TO, CAMERA_UP)
    return scene, scene.get_camera()
