"""
RANSAC Processor
Main entry point for robust line and plane fitting
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ransacfit import __version__
from ransacfit.config import FittingConfig, merge_config
from ransacfit.estimation.ransac import RANSAC, FitResult
from ransacfit.points import PointStore
from ransacfit.utils.metrics import PerformanceMetrics, ResidualMetrics

logger = logging.getLogger(__name__)


class RansacProcessor:
    """Fit lines and planes to in-memory point sets and report the results"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize RANSAC processor

        Args:
            config: Configuration overrides merged over DEFAULT_CONFIG (optional)
        """
        self.config = merge_config(config)
        self.version = __version__
        self.metrics = PerformanceMetrics()

    def fit_line(self, points, seed: Optional[int] = None) -> Dict[str, Any]:
        """
        Fit a 2-D line y = m*x + b

        Args:
            points: (N, 2) array or sequence of (x, y) pairs
            seed: Random seed (falls back to sampling.seed from the config)

        Returns:
            Result dictionary, see ``_build_result``
        """
        store = PointStore(points, dim=2)
        fit_config = FittingConfig.from_section(self.config["line"], len(store))
        solver = RANSAC.for_lines(store, fit_config, seed=self._seed(seed),
                                  max_attempts=self.config["sampling"]["max_attempts"])
        return self._run("line", solver)

    def fit_plane(self, points, seed: Optional[int] = None) -> Dict[str, Any]:
        """
        Fit a 3-D plane a*x + b*y + c*z + d = 0

        Args:
            points: (N, 3) array or sequence of (x, y, z) triples
            seed: Random seed (falls back to sampling.seed from the config)

        Returns:
            Result dictionary, see ``_build_result``
        """
        store = PointStore(points, dim=3)
        fit_config = FittingConfig.from_section(self.config["plane"], len(store))
        solver = RANSAC.for_planes(store, fit_config, seed=self._seed(seed),
                                   max_attempts=self.config["sampling"]["max_attempts"])
        return self._run("plane", solver)

    def _seed(self, seed: Optional[int]) -> Optional[int]:
        return seed if seed is not None else self.config["sampling"]["seed"]

    def _run(self, model_type: str, solver: RANSAC) -> Dict[str, Any]:
        with self.metrics.track(model_type):
            result = solver.run()
        processing_time = self.metrics.last_duration(model_type)

        logger.info(f"{model_type} fit {result.status} in {processing_time:.2f} ms: "
                    f"{result.model.equation()}")
        return self._build_result(model_type, solver, result, processing_time)

    def _build_result(self, model_type: str, solver: RANSAC, result: FitResult,
                      processing_time: float) -> Dict[str, Any]:
        """Assemble the JSON-ready result dictionary"""
        total = len(solver.points)
        inliers = result.inliers(solver.points)
        residuals = result.model.distances(inliers) if result.model.is_valid() else []

        return {
            "system": "ransacfit",
            "version": self.version,
            "timestamp": datetime.now().isoformat(),
            "model_type": model_type,
            "status": result.status,
            "reason": result.reason,

            "model": result.model.to_dict(),
            "equation": result.model.equation(),

            "inliers": {
                "count": int(result.num_inliers),
                "total_points": total,
                "ratio": round(result.num_inliers / total, 4) if total else 0.0,
                "indices": result.to_dict()["inlier_indices"],
            },

            "quality": {
                "mean_inlier_error": result.score,
                "residuals": ResidualMetrics.summarize(residuals),
            },

            "processing_metadata": {
                "processing_time_ms": round(processing_time, 2),
                "iterations": result.iterations,
                "max_iterations": solver.config.max_iterations,
                "tolerance": solver.config.tolerance,
                "min_consensus": solver.config.min_consensus,
            }
        }
