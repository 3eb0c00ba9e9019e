"""Shared point sets for the test suite."""

import numpy as np
import pytest


@pytest.fixture
def line_points():
    """Ten noisy points near y = 2x + 1 followed by ten outliers."""
    return np.array([
        [0, 1.2], [1, 3.1], [2, 5.0], [3, 6.8], [4, 9.2],
        [5, 10.9], [6, 13.0], [7, 15.1], [8, 16.8], [9, 19.2],
        [1, 10.0], [2, -3.5], [3, 20.0], [4, 1.0], [6, 25.0],
        [7, -5.0], [8, 30.0], [10, -10.0], [11, 35.0], [12, 0.0],
    ])


@pytest.fixture
def plane_points():
    """Eight points on 2x + 0.5y - z + 1 = 0 followed by eight outliers."""
    return np.array([
        [1.0, 1.0, 3.5], [2.0, 1.0, 5.5], [1.0, 2.0, 4.0], [3.0, 2.0, 8.0],
        [0.0, 0.0, 1.0], [2.5, 1.5, 7.25], [1.5, 0.5, 4.25], [0.5, 1.5, 2.75],
        [10.0, 10.0, 10.0], [10.0, 20.0, 10.0], [5.0, 5.0, 100.0], [-5.0, -5.0, -5.0],
        [50.0, 1.0, 1.0], [20.0, 20.0, 5.0], [1.0, 1.0, -50.0], [-10.0, 10.0, 10.0],
    ])


@pytest.fixture
def plane_normal():
    """Unit normal of 2x + 0.5y - z + 1 = 0."""
    normal = np.array([2.0, 0.5, -1.0])
    return normal / np.linalg.norm(normal)
