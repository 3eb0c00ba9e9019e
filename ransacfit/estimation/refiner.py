"""Global refits of a model from its full consensus set."""

import numpy as np
from scipy import linalg
from typing import Callable, Dict, Optional

from ransacfit.models.base import DEGENERACY_EPS
from ransacfit.models.line import LineModel
from ransacfit.models.plane import PlaneModel


def fit_line_least_squares(points: np.ndarray,
                           candidate: Optional[LineModel] = None) -> LineModel:
    """
    Ordinary least squares line through the points (normal equations).

    Args:
        points: (N, 2) array of consensus points
        candidate: Minimal-sample line the consensus set came from (optional)

    Returns:
        Fitted line. A vertical candidate is refit as x = mean(x). Points
        sharing one x give a vertical line, fewer than two distinct points
        give an invalid line.
    """
    points = np.asarray(points, dtype=np.float64)
    n = len(points)
    if n < 2:
        return LineModel()

    x = points[:, 0]
    y = points[:, 1]

    if candidate is not None and candidate.is_vertical:
        return LineModel.vertical(np.mean(x))

    if np.ptp(x) == 0:
        if np.ptp(y) == 0:
            return LineModel()
        return LineModel.vertical(x[0])

    sum_x = np.sum(x)
    sum_y = np.sum(y)
    sum_x2 = np.sum(x * x)
    sum_xy = np.sum(x * y)

    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        return LineModel()

    m = (n * sum_xy - sum_x * sum_y) / denom
    b = (sum_y - m * sum_x) / n
    return LineModel.from_slope_intercept(m, b)


def fit_plane_svd(points: np.ndarray, candidate: Optional[PlaneModel] = None) -> PlaneModel:
    """
    Total least squares plane through the points.

    The normal is the right singular vector of the centered points with the
    smallest singular value, oriented so that normal . centroid <= 0.
    ``candidate`` is not used.
    """
    points = np.asarray(points, dtype=np.float64)
    if len(points) < 3:
        return PlaneModel()

    centroid = points.mean(axis=0)
    centered = points - centroid

    _, singular_values, vt = linalg.svd(centered, full_matrices=False)
    # rank < 2 means the points are collinear or coincident
    if len(singular_values) < 2 or singular_values[1] < DEGENERACY_EPS:
        return PlaneModel()

    normal = vt[-1]
    if np.dot(normal, centroid) > 0:
        normal = -normal

    return PlaneModel.from_normal_and_point(normal, centroid)


REFINERS: Dict[type, Callable[..., object]] = {
    LineModel: fit_line_least_squares,
    PlaneModel: fit_plane_svd,
}


def get_refiner(model_cls: type) -> Callable[..., object]:
    """Refiner registered for a model class."""
    if model_cls not in REFINERS:
        raise ValueError(f"No refiner registered for {model_cls.__name__}")
    return REFINERS[model_cls]
