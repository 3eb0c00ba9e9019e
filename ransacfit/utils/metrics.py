"""Timing of fitting runs and residual statistics."""

import numpy as np
from contextlib import contextmanager
from typing import Dict, Iterator
from time import perf_counter


class PerformanceMetrics:
    """Wall-clock durations of named fitting runs, in milliseconds."""

    def __init__(self):
        self.durations: Dict[str, float] = {}
        self.counts: Dict[str, int] = {}

    @contextmanager
    def track(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it as the latest run of ``name``."""
        start = perf_counter()
        try:
            yield
        finally:
            self.durations[name] = (perf_counter() - start) * 1000
            self.counts[name] = self.counts.get(name, 0) + 1

    def last_duration(self, name: str) -> float:
        return self.durations.get(name, 0.0)

    def get_summary(self) -> Dict[str, Dict[str, float]]:
        """Latest duration and run count per name."""
        return {
            name: {'last_ms': duration, 'runs': self.counts[name]}
            for name, duration in self.durations.items()
        }


class ResidualMetrics:
    """Summaries of point-to-model residuals."""

    @staticmethod
    def summarize(errors: np.ndarray) -> Dict[str, float]:
        """Mean, median, max, standard deviation and RMS of the residuals."""
        errors = np.asarray(errors, dtype=np.float64)
        if errors.size == 0:
            return {'mean_error': 0.0, 'median_error': 0.0, 'max_error': 0.0,
                    'std_error': 0.0, 'rms_error': 0.0}
        return {
            'mean_error': float(np.mean(errors)),
            'median_error': float(np.median(errors)),
            'max_error': float(np.max(errors)),
            'std_error': float(np.std(errors)),
            'rms_error': ResidualMetrics.rms(errors)
        }

    @staticmethod
    def rms(errors: np.ndarray) -> float:
        """Root mean square of the residuals, the quantity a least squares refit minimizes."""
        errors = np.asarray(errors, dtype=np.float64)
        if errors.size == 0:
            return 0.0
        return float(np.sqrt(np.mean(errors * errors)))
