"""Ray data structures and vector utilities for CPU path tracing.

This module provides the fundamental Ray and Segment dataclasses, the vector
helpers used throughout the renderer, and the random sampling routines needed
for Monte Carlo integration. Vectors are plain NumPy arrays of shape (3,) so
the same helpers work on positions, directions, normals and colors.

Randomness is drawn from an injectable uniform source. Any object with a
``random()`` method returning a float in [0, 1) qualifies, which includes
``numpy.random.Generator`` and ``random.Random``.

Example:
    >>> from spheretrace.core.ray import Ray, ray_at, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors (positions, directions, normals and colors)
Vec3 = npt.NDArray[np.float64]

# Reference axes for building an orthonormal basis around a normal
X_AXIS: Vec3 = np.array([1.0, 0.0, 0.0])
Y_AXIS: Vec3 = np.array([0.0, 1.0, 0.0])

# Normals with |y| at or above this use X as the reference axis instead of Y
ONB_PARALLEL_THRESHOLD = 0.9


class RandomSource(Protocol):
    """A uniform random source producing floats in [0, 1)."""

    def random(self) -> float: ...


_process_rng = np.random.default_rng()


def default_rng() -> RandomSource:
    """Get the process-wide random source used when none is injected."""
    return _process_rng


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(values) -> Vec3:
    """Convert any length-3 sequence to a 3D vector.

    Raises:
        ValueError: If the input does not have exactly three components.
    """
    v = np.asarray(values, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {v.shape}")
    return v


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Must be non-zero but need
            not be normalized; intersection math does not depend on its length.
    """

    origin: Vec3
    direction: Vec3


@dataclass(frozen=True, eq=False)
class Segment:
    """A bounded line from start to end, used for shadow tests.

    Attributes:
        start: The first endpoint (t = 0).
        end: The second endpoint (t = 1).
    """

    start: Vec3
    end: Vec3

    def as_ray(self) -> Ray:
        """Get the ray whose t in [0, 1] spans this segment."""
        return Ray(origin=self.start, direction=self.end - self.start)


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return np.cross(a, b)


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than a full length when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        ValueError: If v has zero length.
    """
    len_sq = length_squared(v)
    if len_sq == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / math.sqrt(len_sq)


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_cosine_direction(rng: RandomSource) -> Vec3:
    """Generate a random direction with cosine-weighted distribution.

    Uses Malley's method: a point sampled uniformly on the unit disk is
    lifted onto the hemisphere. The radius takes the square root of the
    uniform draw so points do not clump at the disk center. The resulting
    distribution has PDF = cos(theta) / pi.

    Args:
        rng: Uniform random source.

    Returns:
        A random unit direction in the local coordinate frame (z-up).
    """
    r = math.sqrt(rng.random())
    theta = 2.0 * math.pi * rng.random()
    x = r * math.cos(theta)
    y = r * math.sin(theta)
    z = math.sqrt(max(0.0, 1.0 - x * x - y * y))
    return vec3(x, y, z)


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis from a normal vector.

    Creates a local coordinate frame where the normal is the z-axis. World Y
    is the reference axis unless the normal is nearly parallel to it, in which
    case world X is used.

    Args:
        normal: The surface normal (should be normalized).

    Returns:
        A tuple (tangent, bitangent, normal) forming an orthonormal basis.
    """
    reference = Y_AXIS if abs(normal[1]) < ONB_PARALLEL_THRESHOLD else X_AXIS
    tangent = normalize(cross(normal, reference))
    bitangent = cross(normal, tangent)
    return tangent, bitangent, normal


def local_to_world(local_dir: Vec3, tangent: Vec3, bitangent: Vec3, normal: Vec3) -> Vec3:
    """Transform a direction from local to world coordinates.

    Args:
        local_dir: Direction in local coordinates (z-up).
        tangent: The x-axis of the local frame in world coordinates.
        bitangent: The y-axis of the local frame in world coordinates.
        normal: The z-axis of the local frame in world coordinates.

    Returns:
        The direction in world coordinates.
    """
    return local_dir[0] * tangent + local_dir[1] * bitangent + local_dir[2] * normal


def sample_cosine_hemisphere(normal: Vec3, rng: RandomSource | None = None) -> Vec3:
    """Cosine-weighted hemisphere sampling for diffuse surfaces.

    Generates a random unit direction weighted by cos(theta) around the
    normal, which is the importance sampling distribution matching a
    Lambertian BRDF.

    Args:
        normal: The unit surface normal defining the hemisphere orientation.
        rng: Uniform random source. Defaults to the process-wide generator.

    Returns:
        The sampled unit direction in world space. Its dot product with the
        normal is never negative.
    """
    if rng is None:
        rng = default_rng()
    local_dir = random_cosine_direction(rng)
    tangent, bitangent, n = build_onb_from_normal(normal)
    return local_to_world(local_dir, tangent, bitangent, n)
