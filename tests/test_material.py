"""Unit tests for materials and Phong lighting.

Tests cover:
- Material defaults and validation
- Glass material helper
- The Phong model for each eye/light arrangement
- Shadowed lighting and patterned surfaces
"""

import math

import pytest
from conftest import assert_tuple_close

from glint.core.transform import color, point, vector
from glint.geometry.shape import make_sphere
from glint.materials.material import GLASS_INDEX, Material, lighting, make_glass_material
from glint.materials.pattern import make_stripe_pattern
from glint.scene.light import PointLight

HALF_SQRT2 = math.sqrt(2) / 2


@pytest.fixture
def setup():
    """Default material, a sphere to shade and a point at the origin."""
    return Material(), make_sphere(), point(0, 0, 0)


class TestMaterial:
    """Tests for Material construction."""

    def test_defaults(self):
        """The default material is white, slightly ambient and very shiny."""
        m = Material()
        assert_tuple_close(m.color, color(1, 1, 1))
        assert m.ambient == pytest.approx(0.1)
        assert m.diffuse == pytest.approx(0.9)
        assert m.specular == pytest.approx(0.9)
        assert m.shininess == pytest.approx(200.0)
        assert m.reflective == 0.0
        assert m.transparency == 0.0
        assert m.refractive_index == pytest.approx(1.0)
        assert m.pattern is None

    def test_color_list_is_converted(self):
        """Colors given as lists are stored as arrays."""
        m = Material(color=[0.5, 0.25, 1.0])
        assert_tuple_close(m.color * 2, color(1.0, 0.5, 2.0))

    @pytest.mark.parametrize("shininess", [0.0, -5.0])
    def test_non_positive_shininess_raises(self, shininess):
        """Shininess must be positive."""
        with pytest.raises(ValueError, match="shininess"):
            Material(shininess=shininess)

    def test_non_positive_refractive_index_raises(self):
        """The refractive index must be positive."""
        with pytest.raises(ValueError, match="refractive_index"):
            Material(refractive_index=0.0)

    def test_glass_material(self):
        """Glass is fully transparent with index 1.5."""
        m = make_glass_material()
        assert m.transparency == pytest.approx(1.0)
        assert m.refractive_index == pytest.approx(GLASS_INDEX)


class TestLighting:
    """Tests for the Phong reflection model."""

    def test_eye_between_light_and_surface(self, setup):
        """Full ambient, diffuse and specular."""
        m, shape, position = setup
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        result = lighting(m, shape, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_tuple_close(result, color(1.9, 1.9, 1.9))

    def test_eye_offset_45_degrees(self, setup):
        """Moving the eye off the reflection removes the specular term."""
        m, shape, position = setup
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        eye = vector(0, HALF_SQRT2, -HALF_SQRT2)
        result = lighting(m, shape, light, position, eye, vector(0, 0, -1))
        assert_tuple_close(result, color(1.0, 1.0, 1.0))

    def test_light_offset_45_degrees(self, setup):
        """Moving the light reduces the diffuse term."""
        m, shape, position = setup
        light = PointLight(point(0, 10, -10), color(1, 1, 1))
        result = lighting(m, shape, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_tuple_close(result, color(0.7364, 0.7364, 0.7364))

    def test_eye_in_reflection_path(self, setup):
        """Full specular when the eye is on the reflection vector."""
        m, shape, position = setup
        light = PointLight(point(0, 10, -10), color(1, 1, 1))
        eye = vector(0, -HALF_SQRT2, -HALF_SQRT2)
        result = lighting(m, shape, light, position, eye, vector(0, 0, -1))
        assert_tuple_close(result, color(1.6364, 1.6364, 1.6364))

    def test_light_behind_surface(self, setup):
        """Only ambient light when the light is behind the surface."""
        m, shape, position = setup
        light = PointLight(point(0, 0, 10), color(1, 1, 1))
        result = lighting(m, shape, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_tuple_close(result, color(0.1, 0.1, 0.1))

    def test_surface_in_shadow(self, setup):
        """Only ambient light when the point is shadowed."""
        m, shape, position = setup
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        result = lighting(
            m, shape, light, position, vector(0, 0, -1), vector(0, 0, -1), in_shadow=True
        )
        assert_tuple_close(result, color(0.1, 0.1, 0.1))

    def test_light_intensity_scales_result(self, setup):
        """Colored light tints every term."""
        m, shape, position = setup
        light = PointLight(point(0, 0, -10), color(0.5, 0.0, 1.0))
        result = lighting(m, shape, light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert_tuple_close(result, color(0.95, 0.0, 1.9))

    def test_lighting_with_pattern(self):
        """A pattern replaces the base color."""
        m = Material(
            ambient=1.0,
            diffuse=0.0,
            specular=0.0,
            pattern=make_stripe_pattern(color(1, 1, 1), color(0, 0, 0)),
        )
        shape = make_sphere()
        light = PointLight(point(0, 0, -10), color(1, 1, 1))
        eye, normal = vector(0, 0, -1), vector(0, 0, -1)
        c1 = lighting(m, shape, light, point(0.9, 0, 0), eye, normal)
        c2 = lighting(m, shape, light, point(1.1, 0, 0), eye, normal)
        assert_tuple_close(c1, color(1, 1, 1))
        assert_tuple_close(c2, color(0, 0, 0))
