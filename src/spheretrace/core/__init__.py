"""Core rendering module.

Components:
    ray: Ray and segment structures, vector helpers and hemisphere sampling
    integrator: Recursive path tracing estimator
    film: Taichi-backed HDR render target
    progressive: Row-by-row renderer driving the integrator
"""

from .ray import (
    RandomSource,
    Ray,
    Segment,
    Vec3,
    as_vec3,
    build_onb_from_normal,
    cross,
    default_rng,
    dot,
    length_squared,
    local_to_world,
    normalize,
    random_cosine_direction,
    ray_at,
    sample_cosine_hemisphere,
    vec3,
)

# Note: integrator, film and progressive are NOT imported here to avoid circular
# imports (geometry and materials import this package). Import them directly:
#   from spheretrace.core.integrator import radiance_for_ray

__all__ = [
    "Ray",
    "Segment",
    "Vec3",
    "RandomSource",
    "default_rng",
    "vec3",
    "as_vec3",
    "ray_at",
    "dot",
    "cross",
    "length_squared",
    "normalize",
    "random_cosine_direction",
    "build_onb_from_normal",
    "local_to_world",
    "sample_cosine_hemisphere",
]
