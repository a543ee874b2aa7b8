"""Unit tests for image export.

Tests cover:
- PPM header, pixel data and line wrapping
- Writing PPM and PNG files
- Suffix dispatch and tone map validation
"""

import numpy as np
import pytest
from PIL import Image

from glint.core.canvas import Canvas
from glint.preview.export import (
    PPM_MAX_LINE_LENGTH,
    canvas_to_ppm,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
)


@pytest.fixture
def small_canvas():
    """A 5x3 canvas with three pixels set, one per row."""
    c = Canvas(5, 3)
    c.write_pixel(0, 0, (1.5, 0.0, 0.0))
    c.write_pixel(2, 1, (0.0, 0.5, 0.0))
    c.write_pixel(4, 2, (-0.5, 0.0, 1.0))
    return c


class TestPpm:
    """Tests for PPM serialization."""

    def test_header(self):
        """The first three lines are magic, size and max value."""
        lines = canvas_to_ppm(Canvas(5, 3)).splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_pixel_data(self, small_canvas):
        """Pixels are clamped, scaled and written row by row."""
        lines = canvas_to_ppm(small_canvas).splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_are_split(self):
        """No line exceeds the PPM line limit, and tokens stay whole."""
        c = Canvas(10, 2)
        c.from_numpy(np.tile(np.array([1.0, 0.8, 0.6]), (2, 10, 1)))
        lines = canvas_to_ppm(c).splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]
        assert all(len(line) <= PPM_MAX_LINE_LENGTH for line in lines)

    def test_ends_with_newline(self):
        """The document is terminated by a newline."""
        assert canvas_to_ppm(Canvas(5, 3)).endswith("\n")

    def test_custom_max_value(self, small_canvas):
        """The header and the data follow max_value."""
        lines = canvas_to_ppm(small_canvas, max_value=15).splitlines()
        assert lines[2] == "15"
        assert lines[3].startswith("15 0 0")


class TestSaving:
    """Tests for writing files."""

    def test_save_ppm(self, small_canvas, tmp_path):
        """save_ppm writes the serialized canvas."""
        path = tmp_path / "out.ppm"
        save_ppm(small_canvas, path)
        assert path.read_text(encoding="ascii") == canvas_to_ppm(small_canvas)

    def test_save_png(self, small_canvas, tmp_path):
        """save_png writes an 8-bit RGB image Pillow can read back."""
        path = tmp_path / "out.png"
        save_png(small_canvas, path)
        with Image.open(path) as img:
            assert img.size == (5, 3)
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (255, 0, 0)
            assert img.getpixel((2, 1)) == (0, 128, 0)
            assert img.getpixel((4, 2)) == (0, 0, 255)

    @pytest.mark.parametrize("suffix", [".ppm", ".PPM", ".png"])
    def test_save_image_dispatches_on_suffix(self, small_canvas, tmp_path, suffix):
        """save_image picks the writer from the suffix and returns the path."""
        path = save_image(small_canvas, tmp_path / f"out{suffix}")
        assert path.exists()
        if suffix.lower() == ".ppm":
            assert path.read_text(encoding="ascii").startswith("P3\n")

    def test_save_image_unknown_tone_map(self, small_canvas, tmp_path):
        """An unknown tone map is rejected before writing."""
        path = tmp_path / "out.png"
        with pytest.raises(ValueError, match="tone mapping"):
            save_image(small_canvas, path, tone_map="filmic")
        assert not path.exists()

    def test_image_to_uint8(self):
        """Linear floats are clamped and rounded half up."""
        image = np.array([[[0.0, 0.5, 2.0]]], dtype=np.float32)
        np.testing.assert_array_equal(image_to_uint8(image), [[[0, 128, 255]]])
