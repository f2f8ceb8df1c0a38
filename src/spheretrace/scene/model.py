"""In-memory scene description consumed by the path tracer.

A scene is a camera, a set of named materials and an ordered list of
objects. Objects are either spheres or point lights; consumers pick the kind
they need with ``Scene.spheres()`` or ``Scene.lights()`` rather than checking
type tags themselves. Scenes are treated as read-only for the duration of a
render.

Example:
    >>> from spheretrace.core.ray import vec3
    >>> from spheretrace.geometry.sphere import Sphere
    >>> from spheretrace.materials.lambertian import Material
    >>> scene = Scene(
    ...     camera=Camera(fov_y=1.0472),
    ...     materials={"red": Material(albedo=vec3(1, 0, 0))},
    ...     objects=(
    ...         Sphere(position=vec3(0, 0, -3), radius=1.0, material="red"),
    ...         PointLight(position=vec3(2, 2, -1), radiant_power=1000.0),
    ...     ),
    ... )
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Union

from spheretrace.core.ray import Vec3
from spheretrace.geometry.sphere import Sphere
from spheretrace.materials.lambertian import Material


@dataclass(frozen=True)
class Camera:
    """Camera settings.

    The camera is fixed at the origin looking down -Z with a perspective
    projection; only the field of view is configurable.

    Attributes:
        fov_y: Vertical field of view in radians.
    """

    fov_y: float


@dataclass(frozen=True, eq=False)
class PointLight:
    """An isotropic white point light.

    Lights are not geometry: they neither occlude nor get hit by rays.

    Attributes:
        position: Position of the light in world space.
        radiant_power: Radiant power in watts (positive).
    """

    position: Vec3
    radiant_power: float


SceneObject = Union[Sphere, PointLight]


@dataclass(frozen=True, eq=False)
class Scene:
    """A renderable scene.

    Attributes:
        camera: Camera settings.
        materials: Mapping from material name to material.
        objects: Ordered spheres and lights. Contacts refer to spheres by
            their index in this sequence.
    """

    camera: Camera
    materials: Mapping[str, Material] = field(default_factory=dict)
    objects: tuple[SceneObject, ...] = ()

    def spheres(self) -> Iterator[tuple[int, Sphere]]:
        """Iterate over (object index, sphere) pairs."""
        for index, obj in enumerate(self.objects):
            if isinstance(obj, Sphere):
                yield index, obj

    def lights(self) -> Iterator[PointLight]:
        """Iterate over the point lights."""
        for obj in self.objects:
            if isinstance(obj, PointLight):
                yield obj

    def material_for(self, sphere: Sphere) -> Material | None:
        """Resolve a sphere's material, or None if the name is unknown."""
        return self.materials.get(sphere.material)
