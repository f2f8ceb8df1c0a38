"""Render target holding the linear HDR radiance of an image.

The film stores one RGB radiance value per pixel in a Taichi vector field.
The field is indexed (x, y) with a bottom-left origin, which is the layout
Taichi's GGUI canvas displays directly. Callers address rows top-down as
in a normal image; the flip happens on the way in and out.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> film = Film(64, 48)
    >>> film.write_row(0, np.ones((64, 3), dtype=np.float32))
    >>> image = film.to_numpy()  # shape (48, 64, 3), row 0 is the top
"""

import numpy as np
import numpy.typing as npt
import taichi as ti


@ti.kernel
def _write_row(buffer: ti.template(), row: ti.types.ndarray(), j: ti.i32):
    for i in range(row.shape[0]):
        buffer[i, j] = ti.Vector([row[i, 0], row[i, 1], row[i, 2]])


class Film:
    """A width x height buffer of linear RGB radiance.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a cleared film.

        Taichi must be initialized before a film is created.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Film dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._buffer: ti.MatrixField = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def field(self) -> ti.MatrixField:
        """Get the underlying Taichi field (bottom-left origin)."""
        return self._buffer

    def clear(self) -> None:
        """Reset every pixel to black."""
        self._buffer.fill(0.0)

    def write_row(self, y: int, row: npt.ArrayLike) -> None:
        """Store the radiance of one image row.

        Args:
            y: Row index, 0 at the top of the image.
            row: Array of shape (width, 3) with the row's RGB radiance.

        Raises:
            ValueError: If y is out of range or row has the wrong shape.
        """
        if not 0 <= y < self._height:
            raise ValueError(f"Row {y} out of range for height {self._height}")
        data = np.ascontiguousarray(row, dtype=np.float32)
        if data.shape != (self._width, 3):
            raise ValueError(f"Row shape {data.shape} doesn't match expected {(self._width, 3)}")
        _write_row(self._buffer, data, self._height - 1 - y)

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Get the film as a standard image array.

        Returns:
            NumPy array of shape (height, width, 3) with row 0 at the top.
            Values are linear radiance and are not clamped.
        """
        image = self._buffer.to_numpy()

        # Transpose from (width, height, 3) to (height, width, 3)
        image = np.transpose(image, (1, 0, 2))

        # Flip vertically (Taichi uses bottom-left origin, images use top-left)
        image = np.flipud(image)

        return np.ascontiguousarray(image, dtype=np.float32)

    def __repr__(self) -> str:
        return f"Film(width={self._width}, height={self._height})"
