"""Recursive path tracing integrator for diffuse spheres and point lights.

Estimates the radiance arriving along a ray by combining two terms at the
nearest surface hit:

1. Direct lighting: every point light contributes unless a shadow segment
   from the hit point to the light crosses another sphere.
2. Indirect lighting: a Monte Carlo estimate of light bounced off other
   surfaces, using cosine-weighted hemisphere samples and recursion.

The indirect estimator for a Lambertian surface is

    L_o = integral of (albedo / pi) * L_i * cos(theta) d(omega)

With samples drawn from PDF = cos(theta) / pi, each sample's weight reduces
to albedo * L_i, and the estimate is the mean over all samples.

Rays that escape the scene, surfaces with an unknown material and an
exhausted depth budget all yield None ("no radiance") instead of raising,
so a malformed object only blackens the rays that touch it.

Example:
    >>> from spheretrace.core.integrator import radiance_for_ray
    >>> radiance = radiance_for_ray(ray, scene, depth=3, indirect_samples=16)
    >>> color = radiance if radiance is not None else vec3(0, 0, 0)
"""

from __future__ import annotations

import logging

import numpy as np

from spheretrace.core.ray import (
    RandomSource,
    Ray,
    Segment,
    Vec3,
    default_rng,
    sample_cosine_hemisphere,
)
from spheretrace.geometry.sphere import (
    Contact,
    closest_to,
    intersect_ray_sphere,
    intersect_seg_sphere,
)
from spheretrace.materials.lambertian import (
    Material,
    evaluate_point_light,
    scatter_weight,
)
from spheretrace.scene.model import Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Default maximum recursion depth
DEFAULT_DEPTH = 3

# Default number of indirect rays per bounce
DEFAULT_INDIRECT_SAMPLES = 16

# Offset along the normal for bounce ray origins to avoid self-intersection
RAY_EPSILON = 0.001


def find_nearest_hit(ray: Ray, scene: Scene) -> Contact | None:
    """Intersect a ray with every sphere and keep the nearest contact.

    Nearness is squared distance from the ray origin to the contact
    position. Among equal distances the sphere listed first wins.

    Args:
        ray: The ray to trace.
        scene: The scene to search.

    Returns:
        The nearest contact, or None if the ray hits nothing.
    """
    hits = []
    for index, sphere in scene.spheres():
        contact = intersect_ray_sphere(ray, sphere, index)
        if contact is not None:
            hits.append(contact)
    if not hits:
        return None
    return min(hits, key=closest_to(ray.origin))


def is_occluded(segment: Segment, scene: Scene, ignore: int | None) -> bool:
    """Test whether any sphere other than ``ignore`` crosses a segment.

    Args:
        segment: The shadow segment.
        scene: The scene whose spheres may occlude.
        ignore: Object index of the sphere the segment starts on, or None
            to test every sphere.

    Returns:
        True if the segment is blocked.
    """
    for index, sphere in scene.spheres():
        if index == ignore:
            continue
        if intersect_seg_sphere(segment, sphere, index) is not None:
            return True
    return False


def direct_lighting(hit: Contact, material: Material, scene: Scene) -> Vec3:
    """Sum the unoccluded contributions of every point light at a hit.

    Visibility is binary per light: an occluded light contributes exactly
    zero.

    Args:
        hit: The surface contact being shaded.
        material: Material of the hit surface.
        scene: The scene providing lights and occluders.

    Returns:
        The direct radiance (RGB).
    """
    total = np.zeros(3)
    for light in scene.lights():
        shadow = Segment(start=hit.position, end=light.position)
        if is_occluded(shadow, scene, hit.geometry):
            continue
        total += evaluate_point_light(light, hit, material)
    return total


def indirect_lighting(
    hit: Contact,
    material: Material,
    scene: Scene,
    depth: int,
    indirect_samples: int,
    rng: RandomSource,
) -> Vec3:
    """Estimate bounced radiance at a hit with cosine-weighted sampling.

    Samples whose recursive trace returns None add nothing but still count
    toward the mean. With zero samples the estimate is zero.

    Args:
        hit: The surface contact being shaded.
        material: Material of the hit surface.
        scene: The scene to trace into.
        depth: Remaining depth for the bounce rays.
        indirect_samples: Number of bounce rays.
        rng: Uniform random source for direction sampling.

    Returns:
        The indirect radiance (RGB).
    """
    total = np.zeros(3)
    if indirect_samples <= 0:
        return total

    origin = hit.position + hit.normal * RAY_EPSILON
    for _ in range(indirect_samples):
        direction = sample_cosine_hemisphere(hit.normal, rng)
        bounce = Ray(origin=origin, direction=direction)
        incoming = radiance_for_ray(bounce, scene, depth, indirect_samples, rng)
        if incoming is not None:
            total += scatter_weight(material, incoming)

    return total / indirect_samples


def radiance_for_ray(
    ray: Ray,
    scene: Scene,
    depth: int,
    indirect_samples: int,
    rng: RandomSource | None = None,
) -> Vec3 | None:
    """Compute the radiance seen along a ray.

    Args:
        ray: The ray to trace.
        scene: The scene containing spheres, materials and lights.
        depth: Remaining recursion depth. Zero or less returns None.
        indirect_samples: Number of indirect rays cast per bounce.
        rng: Uniform random source. Defaults to the process-wide generator.

    Returns:
        The radiance (RGB, linear HDR) or None if the ray escapes, hits a
        surface with an unknown material, or the depth budget is spent.
    """
    if depth <= 0:
        return None

    hit = find_nearest_hit(ray, scene)
    if hit is None:
        return None

    sphere = scene.objects[hit.geometry]
    material = scene.material_for(sphere)
    if material is None:
        logger.warning(
            "Material %r not found for object %d (%s)", sphere.material, hit.geometry, sphere
        )
        return None

    if rng is None:
        rng = default_rng()

    direct = direct_lighting(hit, material, scene)
    indirect = indirect_lighting(hit, material, scene, depth - 1, indirect_samples, rng)
    return direct + indirect
