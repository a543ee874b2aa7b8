"""Pinhole camera mapping pixels to world-space rays.

The camera sits at the origin of its own space looking down -z, with the
image plane at z = -1. The field of view spans the longer image dimension;
the view transform (usually built with
:func:`glint.core.transform.view_transform`) places the camera in the world.

Each pixel is sampled once, through its center:

    half_view   = tan(field_of_view / 2)
    half_width  = half_view            if hsize >= vsize
                  half_view * aspect   otherwise
    pixel_size  = 2 * half_width / hsize

Example:
    >>> import math
    >>> from glint.camera.camera import Camera
    >>> camera = Camera(201, 101, math.pi / 2)
    >>> ray = camera.ray_for_pixel(100, 50)
    >>> ray.direction.round(5)
    array([ 0.,  0., -1.,  0.])
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from glint.core.ray import Ray, normalize
from glint.core.transform import Matrix4, Tuple4, identity, invert, point, view_transform

if TYPE_CHECKING:
    from glint.core.canvas import Canvas
    from glint.core.renderer import ProgressCallback
    from glint.scene.world import World


class Camera:
    """A pinhole camera with a view transform.

    Attributes:
        hsize: Horizontal size of the image in pixels.
        vsize: Vertical size of the image in pixels.
        field_of_view: Angle (radians) covered by the longer image side.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix4 | None = None,
    ) -> None:
        """Create a camera.

        Args:
            hsize: Image width in pixels.
            vsize: Image height in pixels.
            field_of_view: Field of view in radians, strictly between 0 and pi.
            transform: World-to-camera view transform (identity by default).

        Raises:
            ValueError: If a size is not positive or the field of view is
                outside (0, pi).
            NonInvertibleTransformError: If the transform is singular.
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera dimensions must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi), got {field_of_view}")

        self.hsize = int(hsize)
        self.vsize = int(vsize)
        self.field_of_view = float(field_of_view)
        self.transform = transform if transform is not None else identity()

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            self._half_width = half_view
            self._half_height = half_view / aspect
        else:
            self._half_width = half_view * aspect
            self._half_height = half_view
        self._pixel_size = self._half_width * 2.0 / self.hsize

    @classmethod
    def look_at(
        cls,
        hsize: int,
        vsize: int,
        field_of_view: float,
        from_point: Tuple4,
        to_point: Tuple4,
        up: Tuple4,
    ) -> Camera:
        """Create a camera positioned with :func:`view_transform`."""
        return cls(hsize, vsize, field_of_view, view_transform(from_point, to_point, up))

    @property
    def transform(self) -> Matrix4:
        """World-to-camera view transform."""
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix4) -> None:
        matrix = np.asarray(matrix, dtype=np.float64)
        inverse = invert(matrix)
        self._transform = matrix
        self._inverse = inverse
        self._origin = inverse @ point(0.0, 0.0, 0.0)

    @property
    def inverse(self) -> Matrix4:
        """Cached inverse of the view transform."""
        return self._inverse

    @property
    def half_width(self) -> float:
        """Half the width of the image plane at z = -1."""
        return self._half_width

    @property
    def half_height(self) -> float:
        """Half the height of the image plane at z = -1."""
        return self._half_height

    @property
    def pixel_size(self) -> float:
        """World-space size of one pixel on the image plane."""
        return self._pixel_size

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Ray from the camera through the center of pixel (px, py).

        Args:
            px: Column index (0 at the left).
            py: Row index (0 at the top).

        Returns:
            World-space ray with a unit direction.
        """
        x_offset = (px + 0.5) * self._pixel_size
        y_offset = (py + 0.5) * self._pixel_size

        # Camera looks toward -z, so +x is to the left
        world_x = self._half_width - x_offset
        world_y = self._half_height - y_offset

        pixel = self._inverse @ point(world_x, world_y, -1.0)
        direction = normalize(pixel - self._origin)
        return Ray(self._origin.copy(), direction)

    def render(
        self,
        world: World,
        max_depth: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> Canvas:
        """Render the world into a new canvas; see :class:`Renderer`."""
        from glint.core.renderer import Renderer

        return Renderer(self, max_depth=max_depth).render(world, callback=callback)

    def get_camera_info(self) -> dict[str, float | int]:
        """Get the derived camera parameters for debugging and logging."""
        return {
            "hsize": self.hsize,
            "vsize": self.vsize,
            "field_of_view": self.field_of_view,
            "half_width": self._half_width,
            "half_height": self._half_height,
            "pixel_size": self._pixel_size,
        }

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view:.4f})"
        )
