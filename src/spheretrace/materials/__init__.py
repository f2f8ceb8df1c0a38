"""Material models.

All surfaces are Lambertian diffuse reflectors with a single albedo.
"""

from .lambertian import Material, evaluate_point_light, lambert_term, scatter_weight

__all__ = [
    "Material",
    "lambert_term",
    "evaluate_point_light",
    "scatter_weight",
]
