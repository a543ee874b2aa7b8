"""Pytest configuration for glint tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture
def default_world():
    """The two-sphere world most shading tests start from."""
    from glint.scene.world import default_world as make_default_world

    return make_default_world()


def assert_tuple_close(actual, expected, tol=1e-4):
    """Compare points, vectors or colors component-wise."""
    np.testing.assert_allclose(
        np.asarray(actual, dtype=np.float64),
        np.asarray(expected, dtype=np.float64),
        atol=tol,
        rtol=0.0,
    )
