"""Taichi-backed pixel canvas.

The Canvas stores a width x height grid of linear RGB colors in a Taichi
vector field. Colors are written unclamped; clamping and scaling to an
integer range happen only when the canvas is exported, in a Taichi kernel.

Fields are indexed (x, y) with x running along a row and y down the image,
matching pixel coordinates. NumPy views returned by the canvas are
row-major: shape (height, width, 3).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from glint.core.canvas import Canvas
    >>> canvas = Canvas(10, 20)
    >>> canvas.write_pixel(2, 3, (1.0, 0.0, 0.0))
    >>> canvas.pixel_at(2, 3)
    array([1., 0., 0.])
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm


@ti.data_oriented
class Canvas:
    """A grid of RGB float colors, initially black.

    Pixels live in a ``ti.f32`` field, so colors are stored at float32
    precision. Values written as float64 read back rounded to the nearest
    float32, although ``pixel_at`` returns them as float64 arrays.

    Attributes:
        width: Number of pixel columns.
        height: Number of pixel rows.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the pixel buffers.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self._pixels = ti.Vector.field(3, dtype=ti.f32, shape=(self._width, self._height))
        self._scaled = ti.Vector.field(3, dtype=ti.i32, shape=(self._width, self._height))

    @property
    def width(self) -> int:
        """Get the canvas width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the canvas height."""
        return self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Sequence[float]) -> None:
        """Set the color of one pixel.

        Raises:
            IndexError: If (x, y) is outside the canvas.
        """
        self._check_bounds(x, y)
        self._pixels[x, y] = (float(color[0]), float(color[1]), float(color[2]))

    def pixel_at(self, x: int, y: int) -> npt.NDArray[np.float64]:
        """Get the color of one pixel.

        Raises:
            IndexError: If (x, y) is outside the canvas.
        """
        self._check_bounds(x, y)
        return np.asarray(self._pixels[x, y].to_numpy(), dtype=np.float64)

    def clear(self) -> None:
        """Reset every pixel to black."""
        self._pixels.fill(0.0)

    def from_numpy(self, image: npt.NDArray) -> None:
        """Load the whole canvas from a (height, width, 3) array.

        Raises:
            ValueError: If the array shape does not match the canvas.
        """
        image = np.asarray(image, dtype=np.float32)
        expected = (self._height, self._width, 3)
        if image.shape != expected:
            raise ValueError(f"Expected image of shape {expected}, got {image.shape}")
        self._pixels.from_numpy(np.ascontiguousarray(image.transpose(1, 0, 2)))

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Get the raw (unclamped) colors as a (height, width, 3) float32 array."""
        return np.ascontiguousarray(self._pixels.to_numpy().transpose(1, 0, 2))

    @ti.kernel
    def _scale_kernel(self, max_value: ti.f32):
        for x, y in self._pixels:
            c = tm.clamp(self._pixels[x, y], 0.0, 1.0)
            self._scaled[x, y] = ti.cast(ti.floor(c * max_value + 0.5), ti.i32)

    def scaled(self, max_value: int = 255) -> npt.NDArray[np.int32]:
        """Clamp to [0, 1], scale to [0, max_value] and round.

        Args:
            max_value: Largest integer component value (e.g. 255).

        Returns:
            Array of shape (height, width, 3) with dtype int32.

        Raises:
            ValueError: If max_value is not positive.
        """
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")
        self._scale_kernel(float(max_value))
        return np.ascontiguousarray(self._scaled.to_numpy().transpose(1, 0, 2)).astype(np.int32)

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"
