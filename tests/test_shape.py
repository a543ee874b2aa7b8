"""Unit tests for the Shape abstraction.

Tests cover:
- Default transform and material
- Transform caching and non-invertible transforms
- Transformed intersection (ray mapped into object space)
- Transformed normals (inverse transpose)
- Constructors for every kind
"""

import math

import numpy as np
import pytest
from conftest import assert_tuple_close

from glint.core.ray import Ray
from glint.core.transform import (
    NonInvertibleTransformError,
    identity,
    point,
    rotation_z,
    scaling,
    translation,
    vector,
)
from glint.geometry.shape import (
    Intersection,
    Shape,
    ShapeKind,
    make_cone,
    make_cube,
    make_cylinder,
    make_glass_sphere,
    make_plane,
    make_sphere,
)
from glint.materials.material import Material


class TestShapeState:
    """Tests for shared shape state."""

    def test_default_transform_is_identity(self):
        """A new shape has the identity transform."""
        s = make_sphere()
        np.testing.assert_allclose(s.transform, identity())
        np.testing.assert_allclose(s.inverse, identity())

    def test_assign_transform_updates_inverse(self):
        """Assigning a transform recomputes the cached inverse."""
        s = make_sphere()
        s.transform = translation(2, 3, 4)
        np.testing.assert_allclose(s.inverse, translation(-2, -3, -4))

    def test_default_material(self):
        """A new shape has the default material."""
        m = make_sphere().material
        assert m.ambient == pytest.approx(0.1)
        assert m.diffuse == pytest.approx(0.9)
        assert m.specular == pytest.approx(0.9)
        assert m.shininess == pytest.approx(200.0)

    def test_assign_material(self):
        """A shape may be given a material."""
        m = Material(ambient=1.0)
        s = make_sphere(material=m)
        assert s.material is m

    def test_singular_transform_raises(self):
        """A non-invertible transform is rejected on assignment."""
        with pytest.raises(NonInvertibleTransformError):
            make_sphere(transform=scaling(0, 1, 1))

    def test_failed_assignment_keeps_previous_transform(self):
        """A rejected transform leaves the shape unchanged."""
        s = make_sphere(transform=translation(1, 0, 0))
        with pytest.raises(NonInvertibleTransformError):
            s.transform = scaling(1, 0, 1)
        np.testing.assert_allclose(s.transform, translation(1, 0, 0))
        np.testing.assert_allclose(s.inverse, translation(-1, 0, 0))

    def test_shapes_compare_by_identity(self):
        """Two equal-looking shapes are distinct scene objects."""
        a, b = make_sphere(), make_sphere()
        assert a != b
        assert a == a


class TestShapeIntersect:
    """Tests for world-space intersection through the transform."""

    def test_intersect_scaled_sphere(self):
        """A scaled sphere is hit at the scaled distances."""
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        s = make_sphere(transform=scaling(2, 2, 2))
        xs = s.intersect(r)
        assert [i.t for i in xs] == pytest.approx([3.0, 7.0])
        assert all(i.shape is s for i in xs)

    def test_intersect_translated_sphere(self):
        """A translated sphere can be missed."""
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        s = make_sphere(transform=translation(5, 0, 0))
        assert s.intersect(r) == []

    def test_intersection_record(self):
        """An intersection keeps t and the shape."""
        s = make_sphere()
        i = Intersection(3.5, s)
        assert i.t == 3.5
        assert i.shape is s


class TestShapeNormal:
    """Tests for world-space normals."""

    def test_normal_on_translated_sphere(self):
        """Translation does not change the normal direction."""
        s = make_sphere(transform=translation(0, 1, 0))
        n = s.normal_at(point(0, 1.70711, -0.70711))
        assert_tuple_close(n, vector(0, 0.70711, -0.70711))

    def test_normal_on_transformed_sphere(self):
        """Non-uniform scaling needs the inverse transpose."""
        s = make_sphere(transform=scaling(1, 0.5, 1) @ rotation_z(math.pi / 5))
        h = math.sqrt(2) / 2
        n = s.normal_at(point(0, h, -h))
        assert_tuple_close(n, vector(0, 0.97014, -0.24254))

    def test_normal_is_normalized_vector(self):
        """World normals are unit vectors with w = 0."""
        s = make_sphere(transform=scaling(2, 3, 4))
        n = s.normal_at(point(2, 0, 0))
        assert np.linalg.norm(n[:3]) == pytest.approx(1.0)
        assert n[3] == 0.0


class TestConstructors:
    """Tests for the make_* constructors."""

    @pytest.mark.parametrize(
        "factory, kind",
        [
            (make_sphere, ShapeKind.SPHERE),
            (make_plane, ShapeKind.PLANE),
            (make_cube, ShapeKind.CUBE),
            (make_cylinder, ShapeKind.CYLINDER),
            (make_cone, ShapeKind.CONE),
        ],
    )
    def test_factory_kind(self, factory, kind):
        """Each constructor produces its kind."""
        assert factory().kind == kind

    def test_cylinder_defaults_are_unbounded(self):
        """Cylinders and cones default to infinite, open extents."""
        cyl = make_cylinder()
        assert cyl.minimum == -math.inf
        assert cyl.maximum == math.inf
        assert cyl.closed is False

    def test_glass_sphere(self):
        """The glass sphere helper is fully transparent with index 1.5."""
        s = make_glass_sphere()
        np.testing.assert_allclose(s.transform, identity())
        assert s.material.transparency == pytest.approx(1.0)
        assert s.material.refractive_index == pytest.approx(1.5)

    def test_shape_accepts_integer_kind(self):
        """Kinds can be given as plain integers."""
        assert Shape(2).kind is ShapeKind.CUBE
