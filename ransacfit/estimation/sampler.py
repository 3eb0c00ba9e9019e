"""Minimal-sample selection with degeneracy rejection."""

import numpy as np
from typing import Optional

from ransacfit.models.base import GeometricModel
from ransacfit.models.line import LineModel
from ransacfit.models.plane import PlaneModel
from ransacfit.points import PointStore


class RandomPairSampler:
    """Draw two distinct indices uniformly, redrawing while the points coincide."""

    def __init__(self, model_cls: type = LineModel, max_attempts: int = 10):
        self.model_cls = model_cls
        self.max_attempts = max_attempts

    def draw(self, points: PointStore, rng: np.random.Generator) -> Optional[GeometricModel]:
        """Return a valid candidate model, or None if every attempt was degenerate."""
        n = len(points)
        if n < self.model_cls.sample_size:
            return None

        for _ in range(self.max_attempts):
            indices = rng.choice(n, size=self.model_cls.sample_size, replace=False)
            sample = points[indices]
            if np.array_equal(sample[0], sample[1]):
                continue
            model = self.model_cls.from_sample(sample)
            if model.is_valid():
                return model

        return None


class ShuffledTripletSampler:
    """
    Shuffle all indices once and scan consecutive triples.

    One permutation per call amortizes better than redrawing independent
    triples when the data contains many collinear subsets.
    """

    def __init__(self, model_cls: type = PlaneModel, max_attempts: int = 10):
        self.model_cls = model_cls
        self.max_attempts = max_attempts

    def draw(self, points: PointStore, rng: np.random.Generator) -> Optional[GeometricModel]:
        """Return the model of the first non-degenerate triple, or None."""
        n = len(points)
        k = self.model_cls.sample_size
        if n < k:
            return None

        indices = rng.permutation(n)
        attempts = min(self.max_attempts, n - k + 1)

        for start in range(attempts):
            sample = points[indices[start:start + k]]
            model = self.model_cls.from_sample(sample)
            if model.is_valid():
                return model

        return None
