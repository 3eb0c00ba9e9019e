"""Common interface of the geometric models fitted by RANSAC."""

import numpy as np
from typing import Dict

# Distance reported for invalid models so they never win a consensus comparison.
INVALID_DISTANCE = 1e10

DEGENERACY_EPS = 1e-9


class GeometricModel:
    """
    Base class for models that can be built from a minimal sample.

    Subclasses set ``sample_size`` and implement ``from_sample``,
    ``distance`` and ``is_valid``.
    """

    sample_size = 0
    name = "model"

    @classmethod
    def from_sample(cls, points: np.ndarray) -> "GeometricModel":
        raise NotImplementedError

    def distance(self, point: np.ndarray) -> float:
        raise NotImplementedError

    def is_valid(self) -> bool:
        raise NotImplementedError

    def distances(self, points: np.ndarray) -> np.ndarray:
        """Distance of every point to the model, in input order."""
        return np.array([self.distance(pt) for pt in points], dtype=np.float64)

    def to_dict(self) -> Dict:
        raise NotImplementedError

    @classmethod
    def _check_sample(cls, points: np.ndarray) -> np.ndarray:
        sample = np.asarray(points, dtype=np.float64)
        if len(sample) != cls.sample_size:
            raise ValueError(
                f"{cls.__name__} needs exactly {cls.sample_size} points, got {len(sample)}"
            )
        return sample
