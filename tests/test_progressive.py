"""Tests for the row-by-row renderer.

This module tests the ProgressiveRenderer class including:
- Initialization and viewport/film setup
- Rendering rows, whole images and progress reporting
- Background pixels rendered black
- Reset and tone mapped output

Note: Imports are done inside test methods to avoid Taichi initialization issues.
"""

import logging

import numpy as np
import pytest


class TestProgressiveRendererInit:
    """Test ProgressiveRenderer initialization."""

    def test_init(self, red_sphere_scene):
        """Test dimensions and parameters are recorded."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 16, 8, depth=2, indirect_samples=4)

        assert renderer.width == 16
        assert renderer.height == 8
        assert renderer.depth == 2
        assert renderer.indirect_samples == 4
        assert renderer.rows_rendered == 0
        assert renderer.viewport.width == 16

    def test_rejects_bad_dimensions(self, red_sphere_scene):
        """Test that invalid sizes are refused."""
        from spheretrace.core.progressive import ProgressiveRenderer

        with pytest.raises(ValueError):
            ProgressiveRenderer(red_sphere_scene, 0, 8)


class TestProgressiveRendering:
    """Test rendering."""

    def test_render_row_writes_film(self, red_sphere_scene):
        """Test one row is traced and stored."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 9, 9, depth=1, indirect_samples=0)
        row = renderer.render_row(4)

        assert row.shape == (9, 3)
        assert row[4, 0] > 0.0
        np.testing.assert_allclose(renderer.get_image_numpy()[4], row)

    def test_background_is_black(self, red_sphere_scene):
        """Test pixels whose rays escape stay black and hits are red."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 8, 8, depth=1, indirect_samples=0)
        renderer.render()
        image = renderer.get_image_numpy()

        np.testing.assert_array_equal(image[0, 0], [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(image[7, 7], [0.0, 0.0, 0.0])
        assert image[3, 4, 0] > 0.0
        assert np.all(image[..., 1:] == 0.0)

    def test_callback_reports_every_row(self, red_sphere_scene):
        """Test the progress callback sees each row in order."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 4, 5, depth=1, indirect_samples=0)
        calls = []
        renderer.render(callback=lambda done, total: calls.append((done, total)))

        assert calls == [(1, 5), (2, 5), (3, 5), (4, 5), (5, 5)]
        assert renderer.rows_rendered == 5

    def test_render_progressive_generator(self, red_sphere_scene):
        """Test the generator yields progress after each row."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 3, 3, depth=1, indirect_samples=0)
        progress = list(renderer.render_progressive())
        assert progress == [(1, 3), (2, 3), (3, 3)]

    def test_logs_progress(self, red_sphere_scene, caplog):
        """Test progress is logged at INFO."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 2, 10, depth=1, indirect_samples=0)
        with caplog.at_level(logging.INFO, logger="spheretrace.core.progressive"):
            renderer.render()

        assert "Progress: 100%" in caplog.text
        assert "Rendering complete!" in caplog.text

    def test_seeded_renders_match(self, red_sphere_scene):
        """Test that equal seeds render identical images."""
        from spheretrace.core.progressive import ProgressiveRenderer

        images = []
        for _ in range(2):
            renderer = ProgressiveRenderer(
                red_sphere_scene,
                6,
                4,
                depth=2,
                indirect_samples=2,
                rng=np.random.default_rng(99),
            )
            renderer.render()
            images.append(renderer.get_image_numpy())

        np.testing.assert_array_equal(images[0], images[1])


class TestProgressiveOutput:
    """Test reset and output images."""

    def test_reset(self, red_sphere_scene):
        """Test reset clears the film and row count."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 8, 8, depth=1, indirect_samples=0)
        renderer.render()
        renderer.reset()

        assert renderer.rows_rendered == 0
        assert np.all(renderer.get_image_numpy() == 0.0)

    def test_display_image_range(self, red_sphere_scene):
        """Test the tone mapped image lies in [0, 1)."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 8, 8, depth=1, indirect_samples=0)
        renderer.render()
        display = renderer.get_display_image()

        assert display.shape == (8, 8, 3)
        assert np.all(display >= 0.0)
        assert np.all(display < 1.0)

    def test_repr(self, red_sphere_scene):
        """Test the string representation."""
        from spheretrace.core.progressive import ProgressiveRenderer

        renderer = ProgressiveRenderer(red_sphere_scene, 4, 2, depth=1, indirect_samples=0)
        assert "width=4" in repr(renderer)
        assert "rows=0" in repr(renderer)
