"""Scene module.

Components:
    model: Camera, PointLight and Scene data structures
    loader: JSON scene loading and random scene generation
"""

from .loader import load_scene, random_scene, scene_from_dict
from .model import Camera, PointLight, Scene, SceneObject

__all__ = [
    "Camera",
    "PointLight",
    "Scene",
    "SceneObject",
    "load_scene",
    "scene_from_dict",
    "random_scene",
]
