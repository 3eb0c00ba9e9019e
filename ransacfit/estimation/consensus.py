"""Inlier classification of points against a candidate model."""

import numpy as np

from ransacfit.models.base import GeometricModel, INVALID_DISTANCE
from ransacfit.points import PointStore


class ConsensusEvaluator:
    """Partition a point store into inliers and outliers for a model."""

    def __init__(self, tolerance: float):
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        self.tolerance = tolerance

    def inlier_mask(self, model: GeometricModel, points: PointStore) -> np.ndarray:
        """Boolean mask of points strictly closer than the tolerance."""
        if not model.is_valid():
            return np.zeros(len(points), dtype=bool)
        return model.distances(points.array) < self.tolerance

    def consensus_set(self, model: GeometricModel, points: PointStore) -> np.ndarray:
        """Inlier points in store order."""
        return points.subset(self.inlier_mask(model, points))

    def evaluate_model(self, model: GeometricModel, points: PointStore) -> float:
        """Mean inlier distance over the whole store; lower is better."""
        if not model.is_valid():
            return INVALID_DISTANCE

        distances = model.distances(points.array)
        inliers = distances < self.tolerance
        if not np.any(inliers):
            return INVALID_DISTANCE
        return float(np.mean(distances[inliers]))
