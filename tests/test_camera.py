"""Unit tests for the pinhole camera.

Tests cover:
- Pixel size for landscape and portrait images
- Primary rays through the center and the corner
- Rays from a transformed camera
- Argument validation
- Rendering the default world
"""

import math

import numpy as np
import pytest
from conftest import assert_tuple_close

from glint.camera.camera import Camera
from glint.core.transform import (
    identity,
    point,
    rotation_y,
    scaling,
    translation,
    vector,
    view_transform,
)

HALF_SQRT2 = math.sqrt(2) / 2


class TestCameraSetup:
    """Tests for camera construction."""

    def test_construct(self):
        """A camera keeps its size, field of view and identity transform."""
        c = Camera(160, 120, math.pi / 2)
        assert c.hsize == 160
        assert c.vsize == 120
        assert c.field_of_view == pytest.approx(math.pi / 2)
        np.testing.assert_allclose(c.transform, identity())

    @pytest.mark.parametrize("hsize, vsize", [(200, 125), (125, 200)])
    def test_pixel_size(self, hsize, vsize):
        """The longer side spans the field of view."""
        assert Camera(hsize, vsize, math.pi / 2).pixel_size == pytest.approx(0.01)

    @pytest.mark.parametrize("hsize, vsize", [(0, 10), (10, 0), (-1, 5)])
    def test_non_positive_size_raises(self, hsize, vsize):
        """Image dimensions must be positive."""
        with pytest.raises(ValueError):
            Camera(hsize, vsize, math.pi / 2)

    @pytest.mark.parametrize("fov", [0.0, math.pi, -1.0, 4.0])
    def test_field_of_view_out_of_range_raises(self, fov):
        """The field of view must lie strictly between 0 and pi."""
        with pytest.raises(ValueError, match="field_of_view"):
            Camera(10, 10, fov)

    def test_singular_transform_raises(self):
        """A non-invertible view transform is rejected."""
        with pytest.raises(ValueError):
            Camera(10, 10, math.pi / 2, scaling(0, 1, 1))

    def test_camera_info(self):
        """get_camera_info reports the derived image-plane values."""
        info = Camera(200, 125, math.pi / 2).get_camera_info()
        assert info["hsize"] == 200
        assert info["half_width"] == pytest.approx(1.0)
        assert info["half_height"] == pytest.approx(0.625)
        assert info["pixel_size"] == pytest.approx(0.01)


class TestRayForPixel:
    """Tests for primary ray generation."""

    def test_ray_through_center(self):
        """The center pixel looks straight down -z."""
        r = Camera(201, 101, math.pi / 2).ray_for_pixel(100, 50)
        assert_tuple_close(r.origin, point(0, 0, 0))
        assert_tuple_close(r.direction, vector(0, 0, -1))

    def test_ray_through_corner(self):
        """The top-left pixel looks up and to the left."""
        r = Camera(201, 101, math.pi / 2).ray_for_pixel(0, 0)
        assert_tuple_close(r.origin, point(0, 0, 0))
        assert_tuple_close(r.direction, vector(0.66519, 0.33259, -0.66851))

    def test_ray_when_camera_is_transformed(self):
        """The view transform moves and turns every ray."""
        c = Camera(201, 101, math.pi / 2, rotation_y(math.pi / 4) @ translation(0, -2, 5))
        r = c.ray_for_pixel(100, 50)
        assert_tuple_close(r.origin, point(0, 2, -5))
        assert_tuple_close(r.direction, vector(HALF_SQRT2, 0, -HALF_SQRT2))

    def test_directions_are_unit_length(self):
        """Every primary ray has a unit direction."""
        c = Camera(7, 5, math.pi / 3)
        for px, py in [(0, 0), (6, 4), (3, 2), (6, 0)]:
            d = c.ray_for_pixel(px, py).direction
            assert np.linalg.norm(d[:3]) == pytest.approx(1.0)

    def test_look_at(self):
        """look_at builds the view transform from eye, target and up."""
        eye, target, up = point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)
        c = Camera.look_at(11, 11, math.pi / 2, eye, target, up)
        np.testing.assert_allclose(c.transform, view_transform(eye, target, up))
        assert_tuple_close(c.ray_for_pixel(5, 5).origin, eye)


class TestCameraRender:
    """Tests for rendering through the camera."""

    def test_render_default_world(self, default_world):
        """The center pixel of the default world matches its shaded color."""
        c = Camera.look_at(
            11, 11, math.pi / 2, point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)
        )
        canvas = c.render(default_world)
        assert canvas.width == 11
        assert canvas.height == 11
        assert_tuple_close(canvas.pixel_at(5, 5), (0.38066, 0.47583, 0.2855))

    def test_render_reports_progress(self, default_world):
        """The callback sees every row."""
        calls = []
        Camera(4, 3, math.pi / 2).render(default_world, callback=lambda d, t: calls.append((d, t)))
        assert calls == [(1, 3), (2, 3), (3, 3)]
