"""2-D line model y = m*x + b, with an explicit vertical state."""

import numpy as np
from typing import Dict, Optional

from ransacfit.models.base import GeometricModel, INVALID_DISTANCE


class LineModel(GeometricModel):
    """
    Line in the plane.

    A non-vertical line is ``y = m*x + b`` and its error is the vertical
    residual ``|m*x + b - y|``. A vertical line ``x = x0`` keeps ``x0``
    instead of a huge slope and its error is the horizontal residual.
    The default-constructed line is invalid.
    """

    sample_size = 2
    name = "line"

    def __init__(self, m: float = 0.0, b: float = 0.0, x0: Optional[float] = None,
                 valid: bool = False):
        self.m = float(m)
        self.b = float(b)
        self.x0 = None if x0 is None else float(x0)
        self.valid = valid

    @classmethod
    def from_slope_intercept(cls, m: float, b: float) -> "LineModel":
        return cls(m=m, b=b, valid=True)

    @classmethod
    def vertical(cls, x0: float) -> "LineModel":
        return cls(x0=x0, valid=True)

    @classmethod
    def from_sample(cls, points: np.ndarray) -> "LineModel":
        """Build the line through two points; coincident points give an invalid line."""
        (x1, y1), (x2, y2) = cls._check_sample(points)

        if x1 == x2 and y1 == y2:
            return cls()
        if x1 == x2:
            return cls.vertical(x1)

        m = (y2 - y1) / (x2 - x1)
        return cls.from_slope_intercept(m, y1 - m * x1)

    @property
    def is_vertical(self) -> bool:
        return self.x0 is not None

    def is_valid(self) -> bool:
        return bool(self.valid and np.isfinite(self.m) and np.isfinite(self.b))

    def distance(self, point: np.ndarray) -> float:
        if not self.is_valid():
            return INVALID_DISTANCE
        x, y = point[0], point[1]
        if self.is_vertical:
            return abs(x - self.x0)
        return abs(self.m * x + self.b - y)

    def to_dict(self) -> Dict:
        if self.is_vertical:
            return {"vertical": True, "x0": self.x0, "valid": self.is_valid()}
        return {"vertical": False, "m": self.m, "b": self.b, "valid": self.is_valid()}

    def equation(self) -> str:
        if not self.is_valid():
            return "invalid line"
        if self.is_vertical:
            return f"x = {self.x0:.6g}"
        return f"y = {self.m:.6g}x + {self.b:.6g}"

    def __repr__(self) -> str:
        return f"LineModel({self.equation()})"
