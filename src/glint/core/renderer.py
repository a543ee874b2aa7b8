"""Render loop driving a camera over a world.

The Renderer casts one ray per pixel through the camera, shades it with the
integrator and stores the result in a Taichi-backed Canvas. Rows are
rendered in order from top to bottom; after each row an optional callback
receives progress, and a DEBUG log record is emitted.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from glint.camera.camera import Camera
    >>> from glint.core.renderer import Renderer
    >>> from glint.scene.world import default_world
    >>> renderer = Renderer(Camera(11, 11, math.pi / 2))
    >>> canvas = renderer.render(default_world())
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from glint.core.canvas import Canvas
from glint.core.integrator import DEFAULT_DEPTH, color_at

if TYPE_CHECKING:
    from glint.camera.camera import Camera
    from glint.scene.world import World

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class Renderer:
    """Renders a world through a camera into a canvas.

    Attributes:
        camera: The camera generating primary rays.
        max_depth: Recursion budget for reflection and refraction.
    """

    def __init__(self, camera: Camera, max_depth: int | None = None) -> None:
        """Create a renderer.

        Args:
            camera: Camera to render through.
            max_depth: Reflection/refraction depth; defaults to DEFAULT_DEPTH.

        Raises:
            ValueError: If max_depth is negative.
        """
        depth = DEFAULT_DEPTH if max_depth is None else int(max_depth)
        if depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {depth}")
        self.camera = camera
        self.max_depth = depth

    def render_row(self, world: World, y: int) -> npt.NDArray[np.float64]:
        """Shade one row of pixels.

        Returns:
            Array of shape (width, 3).
        """
        row = np.empty((self.camera.hsize, 3), dtype=np.float64)
        for x in range(self.camera.hsize):
            ray = self.camera.ray_for_pixel(x, y)
            row[x] = color_at(world, ray, self.max_depth)
        return row

    def render_rows(
        self, world: World
    ) -> Generator[tuple[int, npt.NDArray[np.float64]], None, None]:
        """Render row by row, yielding ``(y, row)`` after each row.

        Useful for displaying partial results or stopping early.
        """
        for y in range(self.camera.vsize):
            yield y, self.render_row(world, y)

    def render(self, world: World, callback: ProgressCallback | None = None) -> Canvas:
        """Render the full image.

        Args:
            world: Scene to render.
            callback: Optional callback called after each row with
                (rows_completed, total_rows).

        Returns:
            A new Canvas with every pixel set.
        """
        width, height = self.camera.hsize, self.camera.vsize
        logger.info(
            "Rendering %dx%d image (%d shapes, %d lights, depth %d)",
            width,
            height,
            len(world.shapes),
            len(world.lights),
            self.max_depth,
        )
        start = time.perf_counter()

        image = np.zeros((height, width, 3), dtype=np.float64)
        for y, row in self.render_rows(world):
            image[y] = row
            logger.debug("Row %d/%d done", y + 1, height)
            if callback is not None:
                callback(y + 1, height)

        canvas = Canvas(width, height)
        canvas.from_numpy(image)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return canvas

    def __repr__(self) -> str:
        return f"Renderer(camera={self.camera!r}, max_depth={self.max_depth})"
