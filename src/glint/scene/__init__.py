"""Scene module for scene management and hit records.

Components:
    light: Point light sources
    intersection: Hit selection and precomputed shading state
    world: Shapes and lights, ray-scene and shadow queries
    manager: Building worlds and cameras from dict/JSON descriptions
    showcase: Built-in demonstration scene
"""

from .intersection import HitRecord, hit, prepare_hit
from .light import PointLight
from .manager import SceneConfig, SceneManager
from .showcase import ShowcaseParams, create_showcase_scene
from .world import World, default_world

__all__ = [
    "HitRecord",
    "hit",
    "prepare_hit",
    "PointLight",
    "SceneConfig",
    "SceneManager",
    "ShowcaseParams",
    "create_showcase_scene",
    "World",
    "default_world",
]
