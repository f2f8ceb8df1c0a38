"""Lambertian (diffuse) material model and point light shading.

Implements the ideal diffuse BRDF, which scatters light equally in all
directions:

    f_r = albedo / pi

The 1/pi factor normalizes the BRDF so a white surface reflects exactly
the energy it receives.

Direct lighting from a point light of radiant power P at distance d:

    intensity  = P / (4 * pi)          (isotropic emission)
    irradiance = intensity / d^2       (inverse-square falloff)
    radiance   = f_r * max(cos(theta), 0) * irradiance

Indirect lighting uses cosine-weighted sampling with PDF = cos(theta) / pi,
so the BRDF and cosine cancel against the PDF and each sample's weight is
simply the albedo (see ``scatter_weight``).

Example:
    >>> from spheretrace.core.ray import vec3
    >>> material = Material(albedo=vec3(0.8, 0.3, 0.3))
    >>> lambert_term(vec3(0, 0, 1), vec3(0, 0, 1), material)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from spheretrace.core.ray import Vec3, dot, length_squared, normalize

if TYPE_CHECKING:
    from spheretrace.geometry.sphere import Contact
    from spheretrace.scene.model import PointLight


@dataclass(frozen=True, eq=False)
class Material:
    """A diffuse material.

    Attributes:
        albedo: Reflectance color, each component in [0, 1].
    """

    albedo: Vec3


def lambert_term(unit_to_light: Vec3, normal: Vec3, material: Material) -> Vec3:
    """Compute the Lambertian BRDF times the cosine term.

    Back-facing directions (negative cosine) contribute nothing.

    Args:
        unit_to_light: Unit direction from the surface toward the light.
        normal: Unit surface normal.
        material: The surface material.

    Returns:
        (albedo / pi) * max(dot(unit_to_light, normal), 0).
    """
    cos_theta = max(dot(unit_to_light, normal), 0.0)
    return (material.albedo / math.pi) * cos_theta


def evaluate_point_light(light: PointLight, contact: Contact, material: Material) -> Vec3:
    """Compute outgoing radiance at a contact due to one point light.

    Occlusion is not considered here; the caller performs shadow testing.
    A light placed exactly on the contact point divides by zero.

    Args:
        light: The point light.
        contact: The surface contact being shaded.
        material: Material of the contact's surface.

    Returns:
        The reflected radiance (RGB).
    """
    to_light = light.position - contact.position
    falloff = 1.0 / length_squared(to_light)
    intensity = light.radiant_power / (4.0 * math.pi)
    irradiance = intensity * falloff
    return lambert_term(normalize(to_light), contact.normal, material) * irradiance


def scatter_weight(material: Material, incoming: Vec3) -> Vec3:
    """Weight incoming radiance from a cosine-weighted bounce.

    Args:
        material: The surface material.
        incoming: Radiance arriving along the sampled direction.

    Returns:
        albedo * incoming, element-wise.
    """
    return np.multiply(material.albedo, incoming)
