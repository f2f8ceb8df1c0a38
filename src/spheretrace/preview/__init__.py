"""Preview module for output and visualization.

Components:
    display: Tone mapping and Matplotlib static preview
    export: RGBA PNG export
    interactive: Taichi GGUI window updated while rendering

Import ``interactive`` directly; it needs an initialized Taichi runtime.
"""

from spheretrace.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tonemap_reinhard,
)
from spheretrace.preview.export import image_to_rgba8, save_png

__all__ = [
    "show_preview",
    "tonemap_reinhard",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    "save_png",
    "image_to_rgba8",
]
