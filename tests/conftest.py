"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session, and small
reference scenes used across the integrator and renderer tests.
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def rng():
    """A seeded random source for reproducible sampling."""
    return np.random.default_rng(1234)


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_random():
    """A random source that always returns 0.0.

    With this source every cosine-weighted sample points along the normal.
    """
    return FixedRandom(0.0)


def _make_scene(objects, materials=None, fov_y=1.0472):
    from spheretrace.core.ray import as_vec3
    from spheretrace.materials.lambertian import Material
    from spheretrace.scene.model import Camera, Scene

    materials = materials or {}
    return Scene(
        camera=Camera(fov_y=fov_y),
        materials={name: Material(albedo=as_vec3(albedo)) for name, albedo in materials.items()},
        objects=tuple(objects),
    )


@pytest.fixture
def make_scene():
    """Factory building a scene from objects and a name -> albedo mapping."""
    return _make_scene


@pytest.fixture
def red_sphere_scene():
    """One red sphere in front of the camera, lit from the front."""
    from spheretrace.core.ray import vec3
    from spheretrace.geometry.sphere import Sphere
    from spheretrace.scene.model import PointLight

    return _make_scene(
        [
            Sphere(position=vec3(0.0, 0.0, -3.0), radius=1.0, material="red"),
            PointLight(position=vec3(2.0, 2.0, -1.0), radiant_power=1000.0),
        ],
        {"red": (1.0, 0.0, 0.0)},
    )
