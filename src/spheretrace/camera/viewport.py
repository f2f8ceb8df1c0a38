"""Fixed pinhole viewport for primary ray generation.

The camera sits at the origin looking down -Z. Picture the image pasted
onto a plane at unit distance in front of the camera, centered on the view
axis. A primary ray goes from the origin through the center of a pixel on
that plane.

The plane's size follows from the vertical field of view and the image
aspect ratio:

    plane_height = 2 * tan(fov_y / 2)
    plane_width  = plane_height * (width / height)

Example:
    >>> from spheretrace.scene.model import Camera
    >>> viewport = Viewport(256, 256, Camera(fov_y=1.0472))
    >>> ray = viewport.ray_for_pixel(128, 128)
"""

from __future__ import annotations

import math

from spheretrace.core.ray import Ray, vec3
from spheretrace.scene.model import Camera

# All primary rays start at the camera position
CAMERA_ORIGIN = (0.0, 0.0, 0.0)


class Viewport:
    """Maps pixel coordinates to primary rays.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        plane_width: Width of the image plane at unit distance.
        plane_height: Height of the image plane at unit distance.
    """

    def __init__(self, width: int, height: int, camera: Camera) -> None:
        """Compute image plane dimensions.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            camera: Camera providing the vertical field of view (radians).

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.plane_height = 2.0 * math.tan(camera.fov_y / 2.0)
        self.plane_width = self.plane_height * (width / height)

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Build the ray from the camera through the center of pixel (x, y).

        Pixel row 0 is the top of the image while world Y points up, so the
        vertical screen coordinate is flipped.

        Args:
            x: Pixel column, 0 at the left.
            y: Pixel row, 0 at the top.

        Returns:
            A ray from the origin with an unnormalized direction ending on the
            image plane at z = -1.
        """
        screen_x = (2 * x + 1) / self.width - 1.0
        screen_y = 1.0 - (2 * y + 1) / self.height
        world_x = screen_x * (self.plane_width / 2.0)
        world_y = screen_y * (self.plane_height / 2.0)
        return Ray(origin=vec3(*CAMERA_ORIGIN), direction=vec3(world_x, world_y, -1.0))

    def __repr__(self) -> str:
        return (
            f"Viewport(width={self.width}, height={self.height}, "
            f"plane={self.plane_width:.4f}x{self.plane_height:.4f})"
        )
