"""Immutable point storage shared by the samplers and the consensus evaluator."""

import numpy as np
from typing import Iterable, Sequence, Union


class PointStore:
    """Read-only, ordered collection of points of a fixed dimension."""

    def __init__(self, points: Union[np.ndarray, Iterable[Sequence[float]]], dim: int):
        array = np.array(points, dtype=np.float64)
        if array.size == 0:
            array = array.reshape(0, dim)

        if array.ndim != 2 or array.shape[1] != dim:
            raise ValueError(f"Expected points of shape (N, {dim}), got {array.shape}")
        if not np.all(np.isfinite(array)):
            raise ValueError("Points must have finite coordinates")

        array.setflags(write=False)
        self._array = array
        self.dim = dim

    @property
    def array(self) -> np.ndarray:
        return self._array

    def __len__(self) -> int:
        return self._array.shape[0]

    def __getitem__(self, index):
        return self._array[index]

    def subset(self, mask: np.ndarray) -> np.ndarray:
        """Return the points selected by a boolean mask, in store order."""
        return self._array[mask]
