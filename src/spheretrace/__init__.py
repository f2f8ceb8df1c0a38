"""CPU path tracer for scenes of diffuse spheres and point lights.

This package renders still images by Monte Carlo path tracing, with:
- Ray/segment-sphere intersection and nearest-hit selection
- Direct lighting from point lights with binary shadow tests
- Cosine-weighted indirect bounces with a bounded recursion depth
- Reinhard tone mapping and PNG output

Subpackages:
    core: Rays, vectors, sampling, the integrator, film and row renderer
    geometry: Sphere primitive and intersection tests
    materials: Lambertian material and point light shading
    scene: Scene model, JSON loading and random scene generation
    camera: Fixed pinhole viewport
    preview: Tone mapping, PNG export and preview windows
"""

__version__ = "0.1.0"
