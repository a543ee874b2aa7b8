"""Scene manager for building worlds from descriptions.

This module provides a high-level scene API that builds a World and a Camera
either programmatically or from a plain dictionary / JSON document, and
exports the scene back to the same format.

Scene description format::

    {
      "camera": {"width": 100, "height": 50, "field_of_view": 1.0472,
                 "from": [0, 1.5, -5], "to": [0, 1, 0], "up": [0, 1, 0]},
      "lights": [{"position": [-10, 10, -10], "intensity": [1, 1, 1]}],
      "shapes": [
        {"type": "sphere",
         "transform": [["scale", 0.5, 0.5, 0.5], ["translate", 1, 0, 0]],
         "material": {"color": [1, 0, 0], "reflective": 0.3,
                      "pattern": {"type": "stripe",
                                  "colors": [[1, 1, 1], [0, 0, 0]],
                                  "transform": [["scale", 0.1, 0.1, 0.1]]}}},
        {"type": "cylinder", "minimum": 0, "maximum": 2, "closed": true}
      ]
    }

Transform operations are applied in the order listed: the first operation
acts on the object first.

Example:
    >>> from glint.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_light((-10, 10, -10))
    >>> scene.add_shape("sphere", material={"color": [1, 0.2, 1]})
    >>> scene.set_camera(100, 50, 1.0472, (0, 1.5, -5), (0, 1, 0))
    >>> world, camera = scene.get_world(), scene.get_camera()
"""

from __future__ import annotations

import copy
import json
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from glint.camera.camera import Camera
from glint.core.transform import (
    Matrix4,
    as_color,
    as_point,
    as_vector,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from glint.geometry.shape import Shape, ShapeKind
from glint.materials.material import Material
from glint.materials.pattern import Pattern, PatternKind
from glint.scene.light import PointLight
from glint.scene.world import World

logger = logging.getLogger(__name__)

# =============================================================================
# Description Vocabulary
# =============================================================================

_TRANSFORM_OPS: dict[str, tuple[Callable[..., Matrix4], int]] = {
    "translate": (translation, 3),
    "scale": (scaling, 3),
    "rotate_x": (rotation_x, 1),
    "rotate_y": (rotation_y, 1),
    "rotate_z": (rotation_z, 1),
    "shear": (shearing, 6),
}

_SHAPE_KINDS: dict[str, ShapeKind] = {kind.name.lower(): kind for kind in ShapeKind}

_PATTERN_KINDS: dict[str, PatternKind] = {kind.name.lower(): kind for kind in PatternKind}

_SHAPE_KEYS = frozenset({"type", "transform", "material", "minimum", "maximum", "closed"})

_MATERIAL_KEYS = frozenset(
    {
        "color",
        "ambient",
        "diffuse",
        "specular",
        "shininess",
        "reflective",
        "transparency",
        "refractive_index",
        "pattern",
    }
)

_PATTERN_KEYS = frozenset({"type", "colors", "transform"})

_CAMERA_KEYS = frozenset({"width", "height", "field_of_view", "from", "to", "up"})

_LIGHT_KEYS = frozenset({"position", "intensity"})

DEFAULT_FIELD_OF_VIEW = math.pi / 3


def _check_keys(kind: str, data: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"Unknown {kind} keys: {', '.join(sorted(unknown))}")


def parse_transform(ops: Sequence[Sequence[Any]] | None) -> Matrix4:
    """Compose a list of transform operations into one matrix.

    Args:
        ops: Operations such as ``["translate", 1, 0, 0]`` or
            ``["rotate_y", 0.5]``, applied in the order listed.

    Returns:
        The combined 4x4 matrix (identity for an empty list).

    Raises:
        ValueError: If an operation is unknown or has the wrong arity.
    """
    matrix = identity()
    for op in ops or []:
        if not op:
            raise ValueError("Empty transform operation")
        name, args = op[0], [float(a) for a in op[1:]]
        if name not in _TRANSFORM_OPS:
            raise ValueError(f"Unknown transform operation: {name}")
        builder, arity = _TRANSFORM_OPS[name]
        if len(args) != arity:
            raise ValueError(f"Transform '{name}' takes {arity} arguments, got {len(args)}")
        # Later operations wrap earlier ones
        matrix = builder(*args) @ matrix
    return matrix


def parse_pattern(data: dict[str, Any]) -> Pattern:
    """Build a Pattern from its description.

    Raises:
        ValueError: If the pattern type or a key is unknown.
    """
    _check_keys("pattern", data, _PATTERN_KEYS)
    kind_name = str(data.get("type", "")).lower()
    if kind_name not in _PATTERN_KINDS:
        raise ValueError(f"Unknown pattern type: {kind_name}")

    colors = data.get("colors", [])
    a = as_color(colors[0]) if len(colors) > 0 else None
    b = as_color(colors[1]) if len(colors) > 1 else None
    return Pattern(
        _PATTERN_KINDS[kind_name],
        a=a,
        b=b,
        transform=parse_transform(data.get("transform")),
    )


def parse_material(data: dict[str, Any] | None) -> Material:
    """Build a Material from its description; missing keys keep defaults.

    Raises:
        ValueError: If a key is unknown or a value is out of range.
    """
    if not data:
        return Material()
    _check_keys("material", data, _MATERIAL_KEYS)

    params: dict[str, Any] = {}
    for key, value in data.items():
        if key == "color":
            params[key] = as_color(value)
        elif key == "pattern":
            params[key] = parse_pattern(value)
        else:
            params[key] = float(value)
    return Material(**params)


def parse_shape(data: dict[str, Any]) -> Shape:
    """Build a Shape from its description.

    Raises:
        ValueError: If the shape type or a key is unknown.
    """
    _check_keys("shape", data, _SHAPE_KEYS)
    kind_name = str(data.get("type", "")).lower()
    if kind_name not in _SHAPE_KINDS:
        raise ValueError(f"Unknown shape type: {kind_name}")

    return Shape(
        _SHAPE_KINDS[kind_name],
        transform=parse_transform(data.get("transform")),
        material=parse_material(data.get("material")),
        minimum=float(data.get("minimum", -math.inf)),
        maximum=float(data.get("maximum", math.inf)),
        closed=bool(data.get("closed", False)),
    )


def parse_light(data: dict[str, Any]) -> PointLight:
    """Build a PointLight from its description (intensity defaults to white)."""
    _check_keys("light", data, _LIGHT_KEYS)
    if "position" not in data:
        raise ValueError("Light description needs a position")
    return PointLight(
        as_point(data["position"]),
        as_color(data.get("intensity", [1.0, 1.0, 1.0])),
    )


# =============================================================================
# Scene Manager
# =============================================================================


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        camera: Camera description, or None if the scene has no camera.
        lights: List of light descriptions.
        shapes: List of shape descriptions.
    """

    camera: dict[str, Any] | None = None
    lights: list[dict[str, Any]] = field(default_factory=list)
    shapes: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Builds a World and Camera from scene descriptions.

    Every shape and light added, whether through the API or a loaded
    description, is kept both as a live object in the world and as its
    description, so the scene can be exported again with ``to_dict``.

    Attributes:
        world: The World being built.
        config: Descriptions of everything in the world.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.world = World()
        self.config = SceneConfig()

    def clear(self) -> None:
        """Remove every shape, light and the camera."""
        self.world = World()
        self.config = SceneConfig()

    # =========================================================================
    # Building
    # =========================================================================

    def add_light(
        self,
        position: Sequence[float],
        intensity: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> PointLight:
        """Add a point light.

        Args:
            position: Light position (x, y, z).
            intensity: RGB intensity.

        Returns:
            The created light.
        """
        description = {"position": list(position), "intensity": list(intensity)}
        light = parse_light(description)
        self.world.add_light(light)
        self.config.lights.append(description)
        return light

    def add_shape(
        self,
        kind: str,
        *,
        transform: Sequence[Sequence[Any]] | None = None,
        material: dict[str, Any] | None = None,
        **extra: Any,
    ) -> Shape:
        """Add a shape from description parts.

        Args:
            kind: Shape type ("sphere", "plane", "cube", "cylinder", "cone").
            transform: Transform operations, applied in order.
            material: Material description.
            **extra: ``minimum``, ``maximum`` and ``closed`` for cylinders
                and cones.

        Returns:
            The created shape.

        Raises:
            ValueError: If any part of the description is invalid.
        """
        description: dict[str, Any] = {"type": kind, **extra}
        if transform:
            description["transform"] = [list(op) for op in transform]
        if material:
            description["material"] = copy.deepcopy(material)

        shape = parse_shape(description)
        self.world.add_shape(shape)
        self.config.shapes.append(description)
        return shape

    def set_camera(
        self,
        width: int,
        height: int,
        field_of_view: float,
        from_point: Sequence[float],
        to_point: Sequence[float],
        up: Sequence[float] = (0.0, 1.0, 0.0),
    ) -> None:
        """Set the camera description.

        Raises:
            ValueError: If the camera parameters are invalid.
        """
        description = {
            "width": int(width),
            "height": int(height),
            "field_of_view": float(field_of_view),
            "from": list(from_point),
            "to": list(to_point),
            "up": list(up),
        }
        # Validate eagerly so bad parameters fail here, not at render time
        self._build_camera(description)
        self.config.camera = description

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_world(self) -> World:
        """Get the World built so far."""
        return self.world

    @staticmethod
    def _build_camera(
        description: dict[str, Any],
        width: int | None = None,
        height: int | None = None,
    ) -> Camera:
        _check_keys("camera", description, _CAMERA_KEYS)
        transform = view_transform(
            as_point(description.get("from", [0.0, 0.0, 0.0])),
            as_point(description.get("to", [0.0, 0.0, -1.0])),
            as_vector(description.get("up", [0.0, 1.0, 0.0])),
        )
        return Camera(
            width if width is not None else int(description.get("width", 100)),
            height if height is not None else int(description.get("height", 100)),
            float(description.get("field_of_view", DEFAULT_FIELD_OF_VIEW)),
            transform,
        )

    def get_camera(self, width: int | None = None, height: int | None = None) -> Camera:
        """Build the Camera described by the scene.

        Args:
            width: Optional override of the described image width.
            height: Optional override of the described image height.

        Raises:
            ValueError: If the scene has no camera description.
        """
        if self.config.camera is None:
            raise ValueError("Scene has no camera description")
        return self._build_camera(self.config.camera, width, height)

    def get_shape_count(self) -> int:
        """Get the number of shapes in the scene."""
        return len(self.world.shapes)

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return len(self.world.lights)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a (deep-copied) configuration object."""
        return copy.deepcopy(self.config)

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration. Nothing is
        replaced unless the whole configuration is valid.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        world = World(
            shapes=[parse_shape(s) for s in config.shapes],
            lights=[parse_light(light) for light in config.lights],
        )
        if config.camera is not None:
            self._build_camera(config.camera)

        self.world = world
        self.config = copy.deepcopy(config)
        logger.info(
            "Loaded scene: %d shapes, %d lights, camera %s",
            len(world.shapes),
            len(world.lights),
            "set" if config.camera is not None else "missing",
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        data: dict[str, Any] = {"lights": config.lights, "shapes": config.shapes}
        if config.camera is not None:
            data["camera"] = config.camera
        return data

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with optional 'camera', 'lights' and 'shapes' keys.

        Raises:
            ValueError: If the description is invalid.
        """
        _check_keys("scene", data, frozenset({"camera", "lights", "shapes"}))
        config = SceneConfig(
            camera=data.get("camera"),
            lights=list(data.get("lights", [])),
            shapes=list(data.get("shapes", [])),
        )
        self.from_config(config)

    def load(self, filepath: str | Path) -> None:
        """Load a scene from a JSON file."""
        path = Path(filepath)
        logger.debug("Reading scene description from %s", path)
        with path.open(encoding="utf-8") as f:
            self.from_dict(json.load(f))

    def save(self, filepath: str | Path) -> None:
        """Write the scene description to a JSON file."""
        path = Path(filepath)
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, default=_json_default)
        logger.info("Saved scene description to %s", path)

    def __repr__(self) -> str:
        return (
            f"SceneManager(shapes={self.get_shape_count()}, "
            f"lights={self.get_light_count()}, "
            f"camera={'set' if self.config.camera is not None else 'missing'})"
        )


def _json_default(value: Any) -> Any:
    # numpy scalars that slipped into a description
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
