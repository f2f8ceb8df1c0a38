"""Image export utilities for rendered images.

Supported formats:
    - PNG (8-bit RGBA via Pillow, alpha fully opaque)

Example:
    >>> from spheretrace.preview.export import save_png
    >>> save_png(renderer.get_image_numpy(), "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.preview.display import ToneMapMethod, process_image_for_display


def image_to_rgba8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "reinhard",
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear HDR image to 8-bit RGBA.

    Each [0, 1] channel is scaled by 255 and truncated. Alpha is 255.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none" or "reinhard").
        gamma: Gamma correction value.

    Returns:
        Array of shape (H, W, 4) with dtype uint8.
    """
    processed = process_image_for_display(image, tone_map=tone_map, gamma=gamma)
    height, width, _ = processed.shape

    rgba = np.full((height, width, 4), 255, dtype=np.uint8)
    rgba[..., :3] = np.floor(processed * 255.0).astype(np.uint8)
    return rgba


def save_png(
    image: npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "reinhard",
    gamma: float = 1.0,
) -> Path:
    """Save a linear HDR image as an RGBA PNG file.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method ("none" or "reinhard").
        gamma: Gamma correction value.

    Returns:
        The path written.
    """
    path = Path(filepath)
    rgba = image_to_rgba8(image, tone_map=tone_map, gamma=gamma)
    PILImage.fromarray(rgba).save(path)
    return path
