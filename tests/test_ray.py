"""Unit tests for ray structures, vector helpers and hemisphere sampling.

Tests cover:
- Ray evaluation and segment-to-ray conversion
- Vector helpers (dot, cross, normalize)
- Orthonormal basis construction and reference axis choice
- Cosine-weighted hemisphere sampling (unit length, orientation, distribution)
"""

import math

import numpy as np
import pytest

from spheretrace.core.ray import (
    Ray,
    Segment,
    as_vec3,
    build_onb_from_normal,
    cross,
    dot,
    length_squared,
    local_to_world,
    normalize,
    random_cosine_direction,
    ray_at,
    sample_cosine_hemisphere,
    vec3,
)


class TestRayBasics:
    """Tests for Ray and Segment."""

    def test_ray_at(self):
        """Test point evaluation along a ray."""
        ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -2.0))
        np.testing.assert_allclose(ray_at(ray, 0.0), [1.0, 2.0, 3.0])
        np.testing.assert_allclose(ray_at(ray, 1.5), [1.0, 2.0, 0.0])

    def test_segment_as_ray_spans_unit_interval(self):
        """Test that t=0 and t=1 of the segment ray are the endpoints."""
        seg = Segment(start=vec3(0.0, 1.0, 0.0), end=vec3(4.0, 1.0, -2.0))
        ray = seg.as_ray()
        np.testing.assert_allclose(ray_at(ray, 0.0), seg.start)
        np.testing.assert_allclose(ray_at(ray, 1.0), seg.end)

    def test_as_vec3_rejects_wrong_arity(self):
        """Test that as_vec3 requires exactly three components."""
        with pytest.raises(ValueError, match="3 components"):
            as_vec3([1.0, 2.0])


class TestVectorUtilities:
    """Tests for vector helper functions."""

    def test_dot_and_length_squared(self):
        """Test dot product and squared length."""
        a = vec3(1.0, 2.0, 3.0)
        b = vec3(4.0, -5.0, 6.0)
        assert dot(a, b) == pytest.approx(12.0)
        assert length_squared(a) == pytest.approx(14.0)

    def test_cross_is_right_handed(self):
        """Test x cross y = z."""
        np.testing.assert_allclose(cross(vec3(1, 0, 0), vec3(0, 1, 0)), [0.0, 0.0, 1.0])

    def test_normalize(self):
        """Test normalization to unit length."""
        n = normalize(vec3(3.0, 0.0, 4.0))
        np.testing.assert_allclose(n, [0.6, 0.0, 0.8])

    def test_normalize_zero_vector_raises(self):
        """Test that normalizing a zero vector fails loudly."""
        with pytest.raises(ValueError, match="zero-length"):
            normalize(vec3(0.0, 0.0, 0.0))


class TestOrthonormalBasis:
    """Tests for basis construction around a normal."""

    @pytest.mark.parametrize(
        "normal",
        [
            (0.0, 0.0, 1.0),
            (0.0, 1.0, 0.0),
            (0.0, -1.0, 0.0),
            (1.0, 0.0, 0.0),
            (0.3, 0.95, 0.1),
            (-0.5, 0.5, -0.7),
        ],
    )
    def test_basis_is_orthonormal(self, normal):
        """Test that the basis vectors are unit length and mutually orthogonal."""
        n = normalize(vec3(*normal))
        t, b, z = build_onb_from_normal(n)

        for v in (t, b, z):
            assert length_squared(v) == pytest.approx(1.0)
        assert dot(t, b) == pytest.approx(0.0, abs=1e-12)
        assert dot(t, z) == pytest.approx(0.0, abs=1e-12)
        assert dot(b, z) == pytest.approx(0.0, abs=1e-12)
        np.testing.assert_allclose(z, n)

    def test_basis_uses_y_reference_for_z_normal(self):
        """Test the tangent derived from world Y for a normal far from Y."""
        t, b, _ = build_onb_from_normal(vec3(0.0, 0.0, 1.0))
        np.testing.assert_allclose(t, [-1.0, 0.0, 0.0])
        np.testing.assert_allclose(b, [0.0, -1.0, 0.0])

    def test_basis_switches_reference_near_y(self):
        """Test that world X is used once |normal.y| reaches 0.9."""
        t, b, _ = build_onb_from_normal(vec3(0.0, 1.0, 0.0))
        np.testing.assert_allclose(t, [0.0, 0.0, -1.0])
        np.testing.assert_allclose(b, [-1.0, 0.0, 0.0])

    def test_local_to_world_maps_z_to_normal(self):
        """Test that the local up axis lands on the normal."""
        n = normalize(vec3(1.0, 1.0, 1.0))
        t, b, z = build_onb_from_normal(n)
        np.testing.assert_allclose(local_to_world(vec3(0, 0, 1), t, b, z), n)


class TestCosineSampling:
    """Tests for cosine-weighted hemisphere sampling."""

    def test_local_direction_is_unit_upper_hemisphere(self, rng):
        """Test that local samples are unit vectors with z >= 0."""
        for _ in range(500):
            d = random_cosine_direction(rng)
            assert length_squared(d) == pytest.approx(1.0)
            assert d[2] >= 0.0

    def test_zero_draws_point_along_normal(self, fixed_random):
        """Test that r = 0 maps to the pole of the hemisphere."""
        n = normalize(vec3(0.2, -0.4, 0.9))
        np.testing.assert_allclose(sample_cosine_hemisphere(n, fixed_random), n)

    @pytest.mark.parametrize(
        "normal",
        [
            (0.0, 0.0, 1.0),
            (0.0, 1.0, 0.0),
            (0.0, -0.95, 0.31),
            (-1.0, 0.0, 0.0),
            (0.577, -0.577, 0.577),
        ],
    )
    def test_samples_in_hemisphere_of_normal(self, normal, rng):
        """Test unit length and non-negative dot with the normal across trials."""
        n = normalize(vec3(*normal))
        for _ in range(300):
            d = sample_cosine_hemisphere(n, rng)
            assert length_squared(d) == pytest.approx(1.0)
            assert dot(d, n) >= -1e-12

    def test_mean_cosine_matches_distribution(self, rng):
        """Test E[cos(theta)] = 2/3 for PDF cos(theta)/pi."""
        n = vec3(0.0, 0.0, 1.0)
        cosines = [dot(sample_cosine_hemisphere(n, rng), n) for _ in range(20000)]
        assert np.mean(cosines) == pytest.approx(2.0 / 3.0, abs=0.01)

    def test_seeded_sources_are_reproducible(self):
        """Test that equal seeds produce equal samples."""
        n = vec3(0.0, 1.0, 0.0)
        a = np.random.default_rng(7)
        b = np.random.default_rng(7)
        for _ in range(10):
            np.testing.assert_array_equal(
                sample_cosine_hemisphere(n, a), sample_cosine_hemisphere(n, b)
            )

    def test_default_source_is_used_without_rng(self):
        """Test sampling without an injected source."""
        n = vec3(1.0, 0.0, 0.0)
        d = sample_cosine_hemisphere(n)
        assert length_squared(d) == pytest.approx(1.0)
        assert dot(d, n) >= -1e-12
        assert math.isfinite(d.sum())
