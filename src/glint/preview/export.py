"""Image export utilities for rendered canvases.

Supported formats:
    - PPM (plain-text P3, written directly)
    - PNG and anything else Pillow can write (8-bit RGB)

The PPM writer follows the plain format: a ``P3`` magic line, a
``width height`` line and a maximum-value line, followed by pixel
components clamped to [0, 1], scaled to [0, max_value] and rounded. Each
image row starts on a new line and no line exceeds 70 characters.

Example:
    >>> from glint.preview.export import save_image
    >>> canvas = camera.render(world)
    >>> save_image(canvas, "output.ppm")
    >>> save_image(canvas, "output.png", gamma=2.2)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from glint.preview.display import TONE_MAP_METHODS, ToneMapMethod, process_image_for_display

if TYPE_CHECKING:
    from glint.core.canvas import Canvas

logger = logging.getLogger(__name__)

# Plain PPM readers are only required to handle lines up to this length
PPM_MAX_LINE_LENGTH = 70


def _wrap_tokens(tokens: list[str], limit: int = PPM_MAX_LINE_LENGTH) -> list[str]:
    """Join tokens with spaces into lines no longer than ``limit``."""
    lines: list[str] = []
    current = ""
    for token in tokens:
        if not current:
            current = token
        elif len(current) + 1 + len(token) <= limit:
            current += " " + token
        else:
            lines.append(current)
            current = token
    if current:
        lines.append(current)
    return lines


def canvas_to_ppm(canvas: Canvas, max_value: int = 255) -> str:
    """Serialize a canvas as plain-text PPM (P3).

    Args:
        canvas: The canvas to serialize.
        max_value: Maximum component value written in the header.

    Returns:
        The PPM document, ending with a newline.
    """
    scaled = canvas.scaled(max_value)

    lines = ["P3", f"{canvas.width} {canvas.height}", str(max_value)]
    for row in scaled:
        lines.extend(_wrap_tokens([str(int(v)) for v in row.reshape(-1)]))
    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path, max_value: int = 255) -> None:
    """Write a canvas to a plain-text PPM file."""
    path = Path(filepath)
    path.write_text(canvas_to_ppm(canvas, max_value), encoding="ascii")
    logger.info("Saved %dx%d PPM to %s", canvas.width, canvas.height, path)


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to rounded uint8 for display or export.

    Args:
        image: Image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value.
        exposure: Exposure value for exposure tone mapping.

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    processed = process_image_for_display(
        image,
        tone_map=tone_map,
        gamma=gamma,
        exposure=exposure,
    )
    return np.floor(processed * 255.0 + 0.5).astype(np.uint8)


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save a canvas through Pillow (format chosen from the suffix).

    Args:
        canvas: The canvas to save.
        filepath: Output file path, usually ending in .png.
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value.
        exposure: Exposure value for exposure tone mapping.
    """
    image_uint8 = image_to_uint8(
        canvas.to_numpy(), tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)
    logger.info("Saved %dx%d image to %s", canvas.width, canvas.height, filepath)


def save_image(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> Path:
    """Save a canvas, picking the writer from the file suffix.

    ``.ppm`` files are written as plain-text PPM; every other suffix goes
    through Pillow. Tone mapping and gamma apply to Pillow output only.

    Returns:
        The path written.

    Raises:
        ValueError: If the tone mapping method is unknown.
    """
    if tone_map not in TONE_MAP_METHODS:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    path = Path(filepath)
    if path.suffix.lower() == ".ppm":
        save_ppm(canvas, path)
    else:
        save_png(canvas, path, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return path
