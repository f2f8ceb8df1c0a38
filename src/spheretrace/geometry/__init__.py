"""Geometry module for shape primitives and intersection testing.

Provides:
    Sphere: Sphere primitive (center, radius, material name)
    Contact: Intersection result with position, normal and sphere index
    ray_sphere_t: Near root of the ray-sphere quadratic
    intersect_ray_sphere: Ray-sphere intersection (t >= 0)
    intersect_seg_sphere: Segment-sphere intersection (0 <= t <= 1)
    closest_to: Sort key selecting the nearest contact
"""

from .sphere import (
    Contact,
    Sphere,
    closest_to,
    intersect_ray_sphere,
    intersect_seg_sphere,
    ray_sphere_t,
)

__all__ = [
    "Sphere",
    "Contact",
    "ray_sphere_t",
    "intersect_ray_sphere",
    "intersect_seg_sphere",
    "closest_to",
]
