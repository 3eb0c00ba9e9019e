"""3-D plane model a*x + b*y + c*z + d = 0 with a unit normal."""

import numpy as np
from typing import Dict

from ransacfit.models.base import GeometricModel, INVALID_DISTANCE, DEGENERACY_EPS


class PlaneModel(GeometricModel):
    """Plane with unit normal (a, b, c) and offset d. A zero normal marks it invalid."""

    sample_size = 3
    name = "plane"

    def __init__(self, a: float = 0.0, b: float = 0.0, c: float = 0.0, d: float = 0.0):
        self.a = float(a)
        self.b = float(b)
        self.c = float(c)
        self.d = float(d)

    @classmethod
    def from_normal_and_point(cls, normal: np.ndarray, point: np.ndarray) -> "PlaneModel":
        """Plane through ``point`` with the given (not necessarily unit) normal."""
        normal = np.asarray(normal, dtype=np.float64)
        norm = np.linalg.norm(normal)
        if norm < DEGENERACY_EPS:
            return cls()
        unit = normal / norm
        return cls(unit[0], unit[1], unit[2], -float(np.dot(unit, point)))

    @classmethod
    def from_sample(cls, points: np.ndarray) -> "PlaneModel":
        """Plane through three points; collinear or coincident points give an invalid plane."""
        p1, p2, p3 = cls._check_sample(points)
        cross = np.cross(p2 - p1, p3 - p1)
        if np.linalg.norm(cross) < DEGENERACY_EPS:
            return cls()
        return cls.from_normal_and_point(cross, p1)

    @property
    def normal(self) -> np.ndarray:
        return np.array([self.a, self.b, self.c])

    def is_valid(self) -> bool:
        return bool(np.linalg.norm(self.normal) > DEGENERACY_EPS)

    def distance(self, point: np.ndarray) -> float:
        if self.a * self.a + self.b * self.b + self.c * self.c < 1e-18:
            return INVALID_DISTANCE
        # unit normal, no denominator
        return abs(self.a * point[0] + self.b * point[1] + self.c * point[2] + self.d)

    def to_dict(self) -> Dict:
        return {
            "a": self.a,
            "b": self.b,
            "c": self.c,
            "d": self.d,
            "valid": self.is_valid(),
        }

    def equation(self) -> str:
        if not self.is_valid():
            return "invalid plane"
        return f"{self.a:.6g}x + {self.b:.6g}y + {self.c:.6g}z + {self.d:.6g} = 0"

    def __repr__(self) -> str:
        return f"PlaneModel({self.equation()})"
