"""Render configuration.

Example:
    >>> config = RenderConfig(width=128, height=96, samples=8, depth=2)
    >>> config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import get_args

from spheretrace.core.integrator import DEFAULT_DEPTH, DEFAULT_INDIRECT_SAMPLES
from spheretrace.preview.display import ToneMapMethod

TONE_MAP_METHODS: tuple[str, ...] = get_args(ToneMapMethod)


@dataclass
class RenderConfig:
    """Settings for one render.

    Attributes:
        input: Scene JSON file, or None to generate a random scene.
        output: Output PNG path.
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Indirect samples per bounce.
        depth: Maximum recursion depth.
        seed: Seed for a reproducible random source, or None.
        tone_map: Tone mapping applied to the output ("none" or "reinhard").
        gamma: Gamma correction applied after tone mapping (1.0 for none).
        preview: Whether to show a live preview window while rendering.
        show: Whether to show the finished image in a Matplotlib window.
    """

    input: str | None = None
    output: str = "output.png"
    width: int = 256
    height: int = 256
    samples: int = DEFAULT_INDIRECT_SAMPLES
    depth: int = DEFAULT_DEPTH
    seed: int | None = None
    tone_map: ToneMapMethod = "reinhard"
    gamma: float = 1.0
    preview: bool = False
    show: bool = False

    def validate(self) -> None:
        """Check that the settings describe a renderable image.

        Raises:
            ValueError: If a setting is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.depth <= 0:
            raise ValueError(f"Depth must be positive, got {self.depth}")
        if self.samples < 0:
            raise ValueError(f"Samples must be non-negative, got {self.samples}")
        if self.tone_map not in TONE_MAP_METHODS:
            raise ValueError(f"Unknown tone mapping method: {self.tone_map}")
        if not self.gamma > 0.0:
            raise ValueError(f"Gamma must be positive, got {self.gamma}")
