"""Points, vectors, colors and 4x4 affine transforms.

This module is the linear-algebra layer of the ray caster. Tuples are plain
float64 NumPy arrays of shape (4,) where the w component distinguishes points
(w = 1) from vectors (w = 0). Colors are arrays of shape (3,). Transforms are
4x4 float64 arrays composed with the ``@`` operator; the transform applied to
an object first is the rightmost factor.

Example:
    >>> import math
    >>> from glint.core.transform import point, rotation_y, translation
    >>> m = translation(0.0, 1.0, 0.0) @ rotation_y(math.pi / 2)
    >>> m @ point(0.0, 0.0, 1.0)
    array([1., 1., 0., 1.])
"""

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

Tuple4 = npt.NDArray[np.float64]
Matrix4 = npt.NDArray[np.float64]
Color = npt.NDArray[np.float64]

# Determinants below this magnitude are treated as singular
SINGULAR_DETERMINANT = 1e-12


class NonInvertibleTransformError(ValueError):
    """Raised when a transform assigned to a shape, pattern or camera has no inverse."""


# =============================================================================
# Tuple Constructors
# =============================================================================


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a point (w = 1)."""
    return np.array([x, y, z, 1.0], dtype=np.float64)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a vector (w = 0)."""
    return np.array([x, y, z, 0.0], dtype=np.float64)


def color(red: float, green: float, blue: float) -> Color:
    """Create an RGB color. Components are not clamped."""
    return np.array([red, green, blue], dtype=np.float64)


def as_point(values: Sequence[float]) -> Tuple4:
    """Convert a 3-sequence (e.g. from a scene description) to a point."""
    x, y, z = values
    return point(float(x), float(y), float(z))


def as_vector(values: Sequence[float]) -> Tuple4:
    """Convert a 3-sequence to a vector."""
    x, y, z = values
    return vector(float(x), float(y), float(z))


def as_color(values: Sequence[float]) -> Color:
    """Convert a 3-sequence to a color."""
    r, g, b = values
    return color(float(r), float(g), float(b))


def is_point(t: Tuple4) -> bool:
    return bool(t[3] == 1.0)


def is_vector(t: Tuple4) -> bool:
    return bool(t[3] == 0.0)


# =============================================================================
# Matrices
# =============================================================================


def identity() -> Matrix4:
    """Return a fresh 4x4 identity matrix."""
    return np.eye(4, dtype=np.float64)


def invert(matrix: Matrix4) -> Matrix4:
    """Invert a 4x4 transform.

    Args:
        matrix: The transform to invert.

    Returns:
        The inverse matrix.

    Raises:
        NonInvertibleTransformError: If the matrix is singular.
    """
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape != (4, 4):
        raise ValueError(f"Transform must be a 4x4 matrix, got shape {m.shape}")

    determinant = np.linalg.det(m)
    if not math.isfinite(determinant) or abs(determinant) < SINGULAR_DETERMINANT:
        raise NonInvertibleTransformError(
            f"Transform is not invertible (determinant {determinant:g})"
        )

    try:
        return np.linalg.inv(m)
    except np.linalg.LinAlgError as exc:
        raise NonInvertibleTransformError(f"Transform is not invertible: {exc}") from exc


def translation(x: float, y: float, z: float) -> Matrix4:
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(x: float, y: float, z: float) -> Matrix4:
    m = identity()
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return m


def rotation_x(radians: float) -> Matrix4:
    """Rotate around the x axis (left-handed, angle in radians)."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[1, 1] = c
    m[1, 2] = -s
    m[2, 1] = s
    m[2, 2] = c
    return m


def rotation_y(radians: float) -> Matrix4:
    """Rotate around the y axis (left-handed, angle in radians)."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 2] = s
    m[2, 0] = -s
    m[2, 2] = c
    return m


def rotation_z(radians: float) -> Matrix4:
    """Rotate around the z axis (left-handed, angle in radians)."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 1] = -s
    m[1, 0] = s
    m[1, 1] = c
    return m


def shearing(
    x_y: float, x_z: float, y_x: float, y_z: float, z_x: float, z_y: float
) -> Matrix4:
    """Shear transform; ``x_y`` moves x in proportion to y, and so on."""
    m = identity()
    m[0, 1] = x_y
    m[0, 2] = x_z
    m[1, 0] = y_x
    m[1, 2] = y_z
    m[2, 0] = z_x
    m[2, 1] = z_y
    return m


def view_transform(from_point: Tuple4, to_point: Tuple4, up: Tuple4) -> Matrix4:
    """Build the world-to-camera transform for an eye looking from ``from_point``.

    The camera looks down its local -z axis. The orientation matrix is built
    from the forward, left and true-up basis vectors, then the world is moved
    so the eye sits at the origin.

    Args:
        from_point: Eye position (point).
        to_point: Point the eye looks at.
        up: Approximate up direction (vector); need not be normalized or
            orthogonal to the view direction.

    Returns:
        The 4x4 view transform.
    """
    forward = to_point[:3] - from_point[:3]
    forward = forward / np.linalg.norm(forward)
    up_normalized = up[:3] / np.linalg.norm(up[:3])
    left = np.cross(forward, up_normalized)
    true_up = np.cross(left, forward)

    orientation = identity()
    orientation[0, :3] = left
    orientation[1, :3] = true_up
    orientation[2, :3] = -forward

    return orientation @ translation(-from_point[0], -from_point[1], -from_point[2])
