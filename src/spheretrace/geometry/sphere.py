"""Sphere primitive with ray-sphere and segment-sphere intersection.

Both intersection tests share one quadratic solve. For a ray ``o + t*d``
and a sphere with center ``c`` and radius ``r``:

    |o + t*d - c|^2 = r^2

expands to ``a*t^2 + b*t + cc = 0`` with

    oc = o - c
    a  = dot(d, d)
    b  = 2 * dot(oc, d)
    cc = dot(oc, oc) - r^2

Only the near root is ever used, so a ray starting inside a sphere does not
see its far wall. For rays any t >= 0 is a hit; for segments t must lie in
[0, 1], where 0 is the start point and 1 the end point.

Example:
    >>> from spheretrace.core.ray import Ray, vec3
    >>> from spheretrace.geometry.sphere import Sphere, intersect_ray_sphere
    >>> sphere = Sphere(position=vec3(0, 0, -3), radius=1.0, material="red")
    >>> ray = Ray(origin=vec3(0, 0, 0), direction=vec3(0, 0, -1))
    >>> contact = intersect_ray_sphere(ray, sphere)
    >>> contact.position  # array([ 0.,  0., -2.])
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from spheretrace.core.ray import Ray, Segment, Vec3, dot, length_squared, normalize, ray_at


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        position: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: Name of the material applied to the sphere.
    """

    position: Vec3
    radius: float
    material: str


@dataclass(frozen=True, eq=False)
class Contact:
    """Record of a successful intersection.

    Attributes:
        position: The point of contact.
        normal: Unit surface normal, pointing outward from the sphere center
            through the contact position.
        geometry: Index of the intersected sphere in the scene's object list,
            or None when the sphere was tested outside a scene.
    """

    position: Vec3
    normal: Vec3
    geometry: int | None = None


def ray_sphere_t(ray: Ray, sphere: Sphere) -> float | None:
    """Solve for the near intersection parameter of a ray and a sphere.

    Args:
        ray: The ray (direction need not be normalized).
        sphere: The sphere to test against.

    Returns:
        The near root t, or None if the discriminant is negative. The sign of
        t is not checked.
    """
    oc = ray.origin - sphere.position
    a = length_squared(ray.direction)
    b = 2.0 * dot(oc, ray.direction)
    c = length_squared(oc) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return None
    return (-b - math.sqrt(discriminant)) / (2.0 * a)


def _make_contact(ray: Ray, t: float, sphere: Sphere, sphere_id: int | None) -> Contact:
    position = ray_at(ray, t)
    normal = normalize(position - sphere.position)
    return Contact(position=position, normal=normal, geometry=sphere_id)


def intersect_ray_sphere(
    ray: Ray, sphere: Sphere, sphere_id: int | None = None
) -> Contact | None:
    """Find the intersection of a ray with a sphere.

    Intersections behind the ray origin (t < 0) are not hits.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.
        sphere_id: Scene index recorded in the returned contact.

    Returns:
        The contact at the near intersection, or None.
    """
    t = ray_sphere_t(ray, sphere)
    if t is None or t < 0.0:
        return None
    return _make_contact(ray, t, sphere, sphere_id)


def intersect_seg_sphere(
    seg: Segment, sphere: Sphere, sphere_id: int | None = None
) -> Contact | None:
    """Find the intersection of a segment with a sphere.

    The hit must satisfy 0 <= t <= 1; a sphere touched exactly at either
    endpoint still counts.

    Args:
        seg: The segment to test.
        sphere: The sphere to test against.
        sphere_id: Scene index recorded in the returned contact.

    Returns:
        The contact at the near intersection, or None.
    """
    ray = seg.as_ray()
    t = ray_sphere_t(ray, sphere)
    if t is None or t < 0.0 or t > 1.0:
        return None
    return _make_contact(ray, t, sphere, sphere_id)


def closest_to(point: Vec3) -> Callable[[Contact], float]:
    """Get a sort key ordering contacts by squared distance from a point.

    Use with ``min`` or ``sorted``; both keep input order among equal keys.
    The distance is measured to the contact position, not along the ray
    parameter.

    Args:
        point: The reference point, typically a ray origin.

    Returns:
        A key function mapping a contact to its squared distance from point.
    """

    def key(contact: Contact) -> float:
        return length_squared(contact.position - point)

    return key
