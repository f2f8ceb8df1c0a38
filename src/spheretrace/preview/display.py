"""Tone mapping and Matplotlib-based preview display.

The renderer works in linear HDR space, so radiance values can exceed 1.0.
Tone mapping compresses them into a displayable range before output.

Features:
    - Reinhard tone mapping (per color or per image)
    - Optional gamma correction
    - Static preview window

Example:
    >>> from spheretrace.preview.display import show_preview
    >>> from spheretrace.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(scene, 256, 256)
    >>> renderer.render()
    >>> show_preview(renderer.get_image_numpy())
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard"]


def tonemap_reinhard(color: npt.ArrayLike) -> npt.NDArray[np.floating]:
    """Apply Reinhard tone mapping: c / (1 + c) per channel.

    Maps 0 to 0 and 1 to 0.5, and approaches 1 as c grows. For
    non-negative input the output lies in [0, 1). No clamping or gamma is
    applied.

    Args:
        color: A single RGB color or an image array with RGB last.

    Returns:
        The tone mapped color or image, same shape as the input.
    """
    c = np.asarray(color, dtype=np.float64)
    return c / (1.0 + c)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Image array of shape (H, W, 3) in [0, 1] range.
        gamma: Gamma value (2.2 for sRGB).

    Returns:
        Gamma corrected image.
    """
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)

    # Apply gamma encoding: out = in^(1/gamma)
    result = np.power(image, 1.0 / gamma)

    return result.astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "reinhard",
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Process an HDR image for display.

    Applies the display pipeline:
    1. Tone mapping (Reinhard by default)
    2. Gamma correction (off by default)
    3. Clamping to [0, 1]

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none" or "reinhard").
        gamma: Gamma correction value (1.0 leaves values linear).

    Returns:
        Processed image in [0, 1] range.

    Raises:
        ValueError: If tone_map is not a known method.
    """
    if tone_map == "reinhard":
        result = tonemap_reinhard(image).astype(np.float32)
    elif tone_map == "none":
        result = np.asarray(image, dtype=np.float32).copy()
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)

    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "reinhard",
    gamma: float = 1.0,
    title: str = "Render Preview",
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered HDR image in a Matplotlib figure.

    Args:
        image: Linear HDR image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none" or "reinhard").
        gamma: Gamma correction value.
        title: Figure title.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image, tone_map=tone_map, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
