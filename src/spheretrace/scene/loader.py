"""Scene description loading and random scene generation.

Scenes are stored as JSON documents:

    {
      "camera": {"fovY": 1.0472},
      "materials": {"red": {"albedo": [1.0, 0.0, 0.0]}},
      "objects": [
        {"type": "sphere", "position": [0, 0, -3], "radius": 1, "material": "red"},
        {"type": "light", "position": [2, 2, -1], "radiantPower": 1000}
      ]
    }

Structural problems raise ValueError naming the offending entry. A sphere
that refers to a material missing from "materials" is still loaded; the
path tracer warns about it and renders it black.

Example:
    >>> from spheretrace.scene.loader import load_scene, random_scene
    >>> scene = load_scene("examples/scenes/three_spheres.json")
    >>> scene = random_scene(np.random.default_rng(7))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from spheretrace.core.ray import RandomSource, Vec3, as_vec3, default_rng, vec3
from spheretrace.geometry.sphere import Sphere
from spheretrace.materials.lambertian import Material
from spheretrace.scene.model import Camera, PointLight, Scene, SceneObject

logger = logging.getLogger(__name__)

# Vertical field of view of generated scenes (60 degrees)
RANDOM_SCENE_FOV_Y = 1.0472

RANDOM_SCENE_SPHERES = 10
RANDOM_SCENE_LIGHTS = 3


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"{where} must be an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"{where} is missing required key {key!r}")
    return data[key]


def _vector(value: Any, where: str) -> Vec3:
    try:
        return as_vec3(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where} must be a list of 3 numbers: {e}") from e


def _positive(value: Any, where: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where} must be a number, got {value!r}") from e
    if not number > 0.0:
        raise ValueError(f"{where} must be positive, got {number}")
    return number


def _parse_material(name: str, data: Any) -> Material:
    where = f"material {name!r}"
    albedo = _vector(_require(data, "albedo", where), f"{where} albedo")
    if np.any(albedo < 0.0) or np.any(albedo > 1.0):
        raise ValueError(f"{where} albedo components must be in [0, 1], got {albedo.tolist()}")
    return Material(albedo=albedo)


def _parse_object(index: int, data: Any) -> SceneObject:
    where = f"object {index}"
    kind = _require(data, "type", where)
    if kind == "sphere":
        material = _require(data, "material", where)
        if not isinstance(material, str):
            raise ValueError(f"{where} material must be a string, got {material!r}")
        return Sphere(
            position=_vector(_require(data, "position", where), f"{where} position"),
            radius=_positive(_require(data, "radius", where), f"{where} radius"),
            material=material,
        )
    if kind == "light":
        return PointLight(
            position=_vector(_require(data, "position", where), f"{where} position"),
            radiant_power=_positive(
                _require(data, "radiantPower", where), f"{where} radiantPower"
            ),
        )
    raise ValueError(f"{where} has unknown type {kind!r}")


def scene_from_dict(data: dict[str, Any]) -> Scene:
    """Build a scene from a decoded JSON document.

    Args:
        data: The scene description.

    Returns:
        The scene.

    Raises:
        ValueError: If the description is malformed.
    """
    camera_data = _require(data, "camera", "scene")
    fov_y = _positive(_require(camera_data, "fovY", "camera"), "camera fovY")

    materials_data = data.get("materials", {})
    if not isinstance(materials_data, dict):
        raise ValueError("scene materials must be an object")
    materials = {name: _parse_material(name, m) for name, m in materials_data.items()}

    objects_data = data.get("objects", [])
    if not isinstance(objects_data, list):
        raise ValueError("scene objects must be a list")
    objects = tuple(_parse_object(i, o) for i, o in enumerate(objects_data))

    scene = Scene(camera=Camera(fov_y=fov_y), materials=materials, objects=objects)
    for index, sphere in scene.spheres():
        if sphere.material not in materials:
            logger.warning("Object %d refers to unknown material %r", index, sphere.material)
    return scene


def load_scene(path: str | Path) -> Scene:
    """Load a scene from a JSON file.

    Args:
        path: Path to the scene file.

    Returns:
        The scene.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or not a valid scene.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON: {e}") from e
    return scene_from_dict(data)


def _uniform(rng: RandomSource, low: float, high: float) -> float:
    return low + (high - low) * rng.random()


def _random_position(rng: RandomSource) -> Vec3:
    return vec3(_uniform(rng, -5.0, 5.0), _uniform(rng, -5.0, 5.0), _uniform(rng, -15.0, -5.0))


def random_scene(rng: RandomSource | None = None) -> Scene:
    """Generate a scene of randomly colored spheres and random lights.

    Each sphere gets its own material named ``color0``, ``color1``, ...

    Args:
        rng: Uniform random source. Defaults to the process-wide generator.

    Returns:
        A scene with 10 spheres followed by 3 lights.
    """
    if rng is None:
        rng = default_rng()

    materials: dict[str, Material] = {}
    objects: list[SceneObject] = []
    for i in range(RANDOM_SCENE_SPHERES):
        name = f"color{i}"
        materials[name] = Material(albedo=vec3(rng.random(), rng.random(), rng.random()))
        objects.append(
            Sphere(
                position=_random_position(rng),
                radius=_uniform(rng, 0.5, 1.5),
                material=name,
            )
        )
    for _ in range(RANDOM_SCENE_LIGHTS):
        objects.append(
            PointLight(
                position=_random_position(rng),
                radiant_power=_uniform(rng, 500.0, 1500.0),
            )
        )

    return Scene(
        camera=Camera(fov_y=RANDOM_SCENE_FOV_Y),
        materials=materials,
        objects=tuple(objects),
    )
