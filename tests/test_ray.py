"""Unit tests for the Ray class and vector utilities.

Tests cover:
- Ray position along t
- Transforming rays (translation and scaling)
- dot, cross, magnitude, normalize and reflect
"""

import math

import pytest
from conftest import assert_tuple_close

from glint.core.ray import EPSILON, Ray, cross, dot, magnitude, normalize, reflect
from glint.core.transform import point, scaling, translation, vector


class TestRay:
    """Tests for Ray construction and queries."""

    def test_ray_stores_origin_and_direction(self):
        """A ray keeps the origin and direction it was given."""
        origin, direction = point(1, 2, 3), vector(4, 5, 6)
        ray = Ray(origin, direction)
        assert_tuple_close(ray.origin, origin)
        assert_tuple_close(ray.direction, direction)

    @pytest.mark.parametrize(
        "t, expected",
        [(0, (2, 3, 4)), (1, (3, 3, 4)), (-1, (1, 3, 4)), (2.5, (4.5, 3, 4))],
    )
    def test_position(self, t, expected):
        """position(t) = origin + direction * t."""
        ray = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert_tuple_close(ray.position(t), point(*expected))

    def test_translate_ray(self):
        """Translation moves the origin but not the direction."""
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        moved = ray.transform(translation(3, 4, 5))
        assert_tuple_close(moved.origin, point(4, 6, 8))
        assert_tuple_close(moved.direction, vector(0, 1, 0))

    def test_scale_ray_does_not_normalize(self):
        """Scaling scales the direction too, and it is left unnormalized."""
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        scaled = ray.transform(scaling(2, 3, 4))
        assert_tuple_close(scaled.origin, point(2, 6, 12))
        assert_tuple_close(scaled.direction, vector(0, 3, 0))

    def test_transform_returns_new_ray(self):
        """The original ray is untouched by transform()."""
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        ray.transform(translation(3, 4, 5))
        assert_tuple_close(ray.origin, point(1, 2, 3))


class TestVectorUtilities:
    """Tests for vector helper functions."""

    def test_dot(self):
        """Dot product of two vectors."""
        assert dot(vector(1, 2, 3), vector(2, 3, 4)) == pytest.approx(20.0)

    def test_cross(self):
        """Cross product is anti-commutative."""
        a, b = vector(1, 2, 3), vector(2, 3, 4)
        assert_tuple_close(cross(a, b), vector(-1, 2, -1))
        assert_tuple_close(cross(b, a), vector(1, -2, 1))

    @pytest.mark.parametrize(
        "v, expected",
        [
            ((1, 0, 0), 1.0),
            ((0, 1, 0), 1.0),
            ((1, 2, 3), math.sqrt(14)),
            ((-1, -2, -3), math.sqrt(14)),
        ],
    )
    def test_magnitude(self, v, expected):
        """Magnitude is the Euclidean length of the xyz part."""
        assert magnitude(vector(*v)) == pytest.approx(expected)

    def test_normalize(self):
        """Normalizing gives a unit vector in the same direction."""
        n = normalize(vector(1, 2, 3))
        s = math.sqrt(14)
        assert_tuple_close(n, vector(1 / s, 2 / s, 3 / s))
        assert magnitude(n) == pytest.approx(1.0)
        assert n[3] == 0.0

    def test_normalize_zero_vector(self):
        """A zero vector stays zero instead of becoming NaN."""
        assert_tuple_close(normalize(vector(0, 0, 0)), vector(0, 0, 0))

    def test_reflect_at_45_degrees(self):
        """Reflecting a vector approaching at 45 degrees."""
        assert_tuple_close(reflect(vector(1, -1, 0), vector(0, 1, 0)), vector(1, 1, 0))

    def test_reflect_off_slanted_surface(self):
        """Reflecting straight down off a 45 degree surface."""
        h = math.sqrt(2) / 2
        assert_tuple_close(reflect(vector(0, -1, 0), vector(h, h, 0)), vector(1, 0, 0))

    def test_epsilon_value(self):
        """The surface offset is small but well above float noise."""
        assert EPSILON == pytest.approx(1e-5)
