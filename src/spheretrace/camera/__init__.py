"""Camera module for primary ray generation.

The camera is fixed at the origin looking down -Z with a perspective
projection. ``Viewport`` maps pixel coordinates to rays.
"""

from .viewport import Viewport

__all__ = ["Viewport"]
