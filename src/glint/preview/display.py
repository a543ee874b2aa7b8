"""Display pipeline and Matplotlib preview for rendered canvases.

Canvas colors are linear and unclamped. Before they can be shown or written
as 8-bit pixels they pass through the display pipeline:

1. Tone map (optional): compress values above 1.
2. Gamma encode (optional): ``c ** (1 / gamma)``.
3. Clamp to [0, 1].

Phong output is already display-referred, so the defaults skip the first
two steps and only clamp. Scenes with several bright lights can use the
Reinhard or exposure operator instead of letting highlights clip.

Example:
    >>> from glint.preview.display import show_preview
    >>> canvas = camera.render(world)
    >>> show_preview(canvas, tone_map="reinhard")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from glint.core.canvas import Canvas

FloatImage = npt.NDArray[np.float32]

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]

TONE_MAP_METHODS: tuple[str, ...] = ("none", "reinhard", "exposure")


# =============================================================================
# Tone Mapping Operators
# =============================================================================


def tone_map_reinhard(image: FloatImage) -> FloatImage:
    """Reinhard operator ``c / (1 + c)``, applied per channel.

    Negative components are treated as black.
    """
    linear = np.clip(image, 0.0, None)
    return (linear / (linear + 1.0)).astype(np.float32)


def tone_map_exposure(image: FloatImage, exposure: float = 1.0) -> FloatImage:
    """Exposure operator ``1 - exp(-c * exposure)``, applied per channel.

    Args:
        image: Linear image of shape (H, W, 3).
        exposure: Brightness scale; larger values brighten the result.

    Returns:
        Image with every component in [0, 1).
    """
    linear = np.clip(image, 0.0, None)
    return (-np.expm1(-linear * exposure)).astype(np.float32)


_TONE_MAPS: dict[str, Callable[[FloatImage, float], FloatImage]] = {
    "none": lambda image, exposure: image,
    "reinhard": lambda image, exposure: tone_map_reinhard(image),
    "exposure": tone_map_exposure,
}


def apply_gamma(image: FloatImage, gamma: float = 2.2) -> FloatImage:
    """Gamma encode an image.

    Components are clamped to [0, 1] before the power so negative values
    cannot produce NaN. A gamma of exactly 1.0 returns the input as is.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image
    encoded = np.clip(image, 0.0, 1.0) ** (1.0 / gamma)
    return encoded.astype(np.float32)


def process_image_for_display(
    image: npt.ArrayLike,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> FloatImage:
    """Run the full display pipeline on a linear image.

    The input array is never modified.

    Args:
        image: Linear colors, shape (H, W, 3).
        tone_map: One of :data:`TONE_MAP_METHODS`.
        gamma: Gamma for encoding; 1.0 keeps values linear.
        exposure: Used by the "exposure" operator only.

    Returns:
        A new float32 image in [0, 1].

    Raises:
        ValueError: If the tone map is unknown or gamma is not positive.
    """
    operator = _TONE_MAPS.get(tone_map)
    if operator is None:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    working = np.array(image, dtype=np.float32, copy=True)
    working = apply_gamma(operator(working, exposure), gamma)
    return np.clip(working, 0.0, 1.0).astype(np.float32)


# =============================================================================
# Preview Window
# =============================================================================


def show_preview(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Open a Matplotlib window showing a canvas.

    Matplotlib is imported on first use, so rendering and exporting work
    without it installed.

    Args:
        canvas: The rendered canvas.
        tone_map: One of :data:`TONE_MAP_METHODS`.
        gamma: Gamma for encoding.
        exposure: Used by the "exposure" operator only.
        title: Window title; defaults to the canvas size and tone map.
        figsize: Figure size in inches (width, height).
        block: Wait until the window is closed.
    """
    import matplotlib.pyplot as plt

    pixels = process_image_for_display(
        canvas.to_numpy(), tone_map=tone_map, gamma=gamma, exposure=exposure
    )

    if title is None:
        title = f"glint {canvas.width}x{canvas.height}"
        if tone_map != "none":
            title = f"{title} [{tone_map}]"

    figure = plt.figure(figsize=figsize)
    axes = figure.add_subplot()
    axes.imshow(pixels, interpolation="nearest")
    axes.set_axis_off()
    axes.set_title(title)
    figure.tight_layout()
    plt.show(block=block)
