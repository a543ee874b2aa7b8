"""Preview module for output and visualization.

Components:
    display: Tone mapping, gamma and the Matplotlib preview window
    export: Plain PPM (P3) writer and Pillow-based PNG export

Example:
    >>> from glint.preview import save_image, show_preview
    >>> canvas = camera.render(world)
    >>> save_image(canvas, "output.ppm")
    >>> show_preview(canvas)
"""

from glint.preview.display import (
    TONE_MAP_METHODS,
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from glint.preview.export import (
    canvas_to_ppm,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    "TONE_MAP_METHODS",
    "ToneMapMethod",
    "apply_gamma",
    "process_image_for_display",
    "show_preview",
    "tone_map_exposure",
    "tone_map_reinhard",
    "canvas_to_ppm",
    "image_to_uint8",
    "save_image",
    "save_png",
    "save_ppm",
]
