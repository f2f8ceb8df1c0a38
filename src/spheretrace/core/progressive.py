"""Row-by-row renderer driving the path tracer over an image.

The renderer owns the pixel loop: it builds one primary ray per pixel
through the viewport, asks the integrator for its radiance, and stores the
result in a Film. Rows are rendered sequentially from the top, which makes
it easy to report progress and refresh a preview between rows.

Pixels are independent of one another; only the shared random source is
touched by more than one pixel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(scene, 256, 256, depth=3, indirect_samples=16)
    >>> renderer.render()
    >>> image = renderer.get_display_image()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from spheretrace.camera.viewport import Viewport
from spheretrace.core.film import Film
from spheretrace.core.integrator import (
    DEFAULT_DEPTH,
    DEFAULT_INDIRECT_SAMPLES,
    radiance_for_ray,
)
from spheretrace.core.ray import RandomSource, default_rng
from spheretrace.preview.display import tonemap_reinhard
from spheretrace.scene.model import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """Renders a scene into a film one row at a time.

    Attributes:
        scene: The scene being rendered.
        depth: Maximum recursion depth passed to the integrator.
        indirect_samples: Indirect rays per bounce passed to the integrator.
    """

    def __init__(
        self,
        scene: Scene,
        width: int,
        height: int,
        *,
        depth: int = DEFAULT_DEPTH,
        indirect_samples: int = DEFAULT_INDIRECT_SAMPLES,
        rng: RandomSource | None = None,
    ) -> None:
        """Set up the viewport and a cleared film.

        Args:
            scene: The scene to render.
            width: Image width in pixels.
            height: Image height in pixels.
            depth: Maximum recursion depth (positive).
            indirect_samples: Indirect rays per bounce (non-negative).
            rng: Uniform random source. Defaults to the process-wide generator.

        Raises:
            ValueError: If dimensions are not positive.
        """
        self.scene = scene
        self.depth = depth
        self.indirect_samples = indirect_samples
        self._rng = rng if rng is not None else default_rng()
        self._viewport = Viewport(width, height, scene.camera)
        self._film = Film(width, height)
        self._rows_rendered = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._film.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._film.height

    @property
    def viewport(self) -> Viewport:
        """Get the viewport used for primary rays."""
        return self._viewport

    @property
    def film(self) -> Film:
        """Get the film receiving radiance."""
        return self._film

    @property
    def rows_rendered(self) -> int:
        """Get the number of rows rendered since the last reset."""
        return self._rows_rendered

    def reset(self) -> None:
        """Clear the film so the image can be rendered again."""
        self._film.clear()
        self._rows_rendered = 0

    def render_row(self, y: int) -> npt.NDArray[np.float32]:
        """Trace every pixel of one row and store it in the film.

        Pixels whose ray carries no radiance are stored as black.

        Args:
            y: Row index, 0 at the top.

        Returns:
            The row's radiance, shape (width, 3).
        """
        row = np.zeros((self.width, 3), dtype=np.float32)
        for x in range(self.width):
            ray = self._viewport.ray_for_pixel(x, y)
            radiance = radiance_for_ray(
                ray, self.scene, self.depth, self.indirect_samples, self._rng
            )
            if radiance is not None:
                row[x] = radiance
        self._film.write_row(y, row)
        return row

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render all rows, yielding progress after each one.

        Yields:
            Tuple of (rows_done, total_rows).
        """
        self.reset()
        total = self.height
        report_every = max(1, total // 10)

        logger.info("Rendering %d rows...", total)
        for y in range(total):
            self.render_row(y)
            self._rows_rendered = y + 1
            if self._rows_rendered % report_every == 0:
                logger.info("Progress: %d%%", round(self._rows_rendered / total * 100))
            yield (self._rows_rendered, total)
        logger.info("Rendering complete!")

    def render(self, callback: ProgressCallback | None = None) -> None:
        """Render all rows.

        Args:
            callback: Optional function called after each row with
                (rows_done, total_rows).
        """
        for done, total in self.render_progressive():
            if callback is not None:
                callback(done, total)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the linear HDR image, shape (height, width, 3)."""
        return self._film.to_numpy()

    def get_display_image(self) -> npt.NDArray[np.float32]:
        """Get the Reinhard tone mapped image with values in [0, 1)."""
        return tonemap_reinhard(self.get_image_numpy()).astype(np.float32)

    def __repr__(self) -> str:
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"depth={self.depth}, indirect_samples={self.indirect_samples}, "
            f"rows={self.rows_rendered})"
        )
