"""RANSAC implementation for robust estimation."""

import logging
import numpy as np
from typing import Callable, Dict, List, Optional

from ransacfit.config import FittingConfig
from ransacfit.estimation.consensus import ConsensusEvaluator
from ransacfit.estimation.refiner import get_refiner
from ransacfit.estimation.sampler import RandomPairSampler, ShuffledTripletSampler
from ransacfit.models.base import GeometricModel, INVALID_DISTANCE
from ransacfit.models.line import LineModel
from ransacfit.models.plane import PlaneModel
from ransacfit.points import PointStore

logger = logging.getLogger(__name__)

ITERATING = "iterating"
CONVERGED = "converged"
EXHAUSTED = "exhausted"
FAILED = "failed"

INSUFFICIENT_DATA = "insufficient_data"
NO_CONSENSUS = "no_consensus"


class FitResult:
    """Outcome of a RANSAC run."""

    def __init__(self, model: GeometricModel, status: str, num_inliers: int = 0,
                 inlier_mask: Optional[np.ndarray] = None, iterations: int = 0,
                 score: float = INVALID_DISTANCE, reason: Optional[str] = None,
                 history: Optional[List[int]] = None):
        self.model = model
        self.status = status
        self.num_inliers = num_inliers
        self.inlier_mask = inlier_mask if inlier_mask is not None else np.array([], dtype=bool)
        self.iterations = iterations
        self.score = score
        self.reason = reason
        self.history = history or []

    @property
    def succeeded(self) -> bool:
        """True for converged and exhausted runs, which both carry a usable model."""
        return self.status in (CONVERGED, EXHAUSTED) and self.model.is_valid()

    def inliers(self, points: PointStore) -> np.ndarray:
        """Consensus set the final model was refit from."""
        if not len(self.inlier_mask):
            return points.array[:0]
        return points.subset(self.inlier_mask)

    def to_dict(self) -> Dict:
        return {
            "status": self.status,
            "reason": self.reason,
            "model": self.model.to_dict(),
            "num_inliers": int(self.num_inliers),
            "inlier_indices": np.flatnonzero(self.inlier_mask).tolist(),
            "iterations": self.iterations,
            "score": float(self.score),
        }


class RANSAC:
    """
    Model-agnostic RANSAC controller.

    The controller samples a candidate with ``sampler``, scores it with a
    ``ConsensusEvaluator`` and keeps the candidate with strictly more inliers
    than any before it. ``refiner`` recomputes the model from the winning
    consensus set, either after every improvement
    (``refit_each_improvement=True``) or once after the loop. A refit
    replaces the candidate only if it keeps at least as many inliers.

    Termination:
        converged: best inlier count reached ``config.min_consensus`` and,
            when ``stagnation_limit`` is set, more than that many iterations
            passed without improvement.
        exhausted: the iteration budget ran out but a consensus set of at
            least ``sample_size`` points was found.
        failed: too few points, or no usable consensus set.
    """

    def __init__(self, points: PointStore, config: FittingConfig, sampler,
                 refiner: Optional[Callable[..., GeometricModel]] = None,
                 refit_each_improvement: bool = False,
                 stagnation_limit: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        self.points = points
        self.config = config
        self.sampler = sampler
        self.model_cls = sampler.model_cls
        self.refiner = refiner if refiner is not None else get_refiner(self.model_cls)
        self.refit_each_improvement = refit_each_improvement
        self.stagnation_limit = stagnation_limit
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.evaluator = ConsensusEvaluator(config.tolerance)
        self.state = ITERATING

    @classmethod
    def for_lines(cls, points, config: FittingConfig, seed: Optional[int] = None,
                  rng: Optional[np.random.Generator] = None,
                  max_attempts: int = 10) -> "RANSAC":
        """Line fitting: refit on every improvement, stop as soon as the threshold is met."""
        store = points if isinstance(points, PointStore) else PointStore(points, dim=2)
        return cls(store, config, RandomPairSampler(LineModel, max_attempts),
                   refit_each_improvement=True,
                   stagnation_limit=None, rng=rng, seed=seed)

    @classmethod
    def for_planes(cls, points, config: FittingConfig, seed: Optional[int] = None,
                   rng: Optional[np.random.Generator] = None,
                   max_attempts: int = 10) -> "RANSAC":
        """Plane fitting: refit once at the end, stop after a quarter of the budget without improvement."""
        store = points if isinstance(points, PointStore) else PointStore(points, dim=3)
        return cls(store, config, ShuffledTripletSampler(PlaneModel, max_attempts),
                   refit_each_improvement=False,
                   stagnation_limit=config.max_iterations // 4, rng=rng, seed=seed)

    def _failure(self, reason: str, iterations: int = 0,
                 history: Optional[List[int]] = None) -> FitResult:
        self.state = FAILED
        return FitResult(self.model_cls(), FAILED, iterations=iterations,
                         reason=reason, history=history)

    def _refit(self, candidate: GeometricModel, mask: np.ndarray,
               count: int) -> Optional[GeometricModel]:
        """Refit from a consensus set, or None if the refit loses inliers."""
        refit = self.refiner(self.points.subset(mask), candidate)
        if not refit.is_valid():
            return None
        refit_count = int(np.count_nonzero(self.evaluator.inlier_mask(refit, self.points)))
        if refit_count < count:
            logger.debug(f"Rejected refit {refit!r}: {refit_count} inliers, candidate had {count}")
            return None
        return refit

    def _converged(self, best_count: int, stagnant: int) -> bool:
        if best_count < self.config.min_consensus:
            return False
        return self.stagnation_limit is None or stagnant > self.stagnation_limit

    def run(self) -> FitResult:
        """Run the sample / score / refit loop and return the best model found."""
        n = len(self.points)
        sample_size = self.model_cls.sample_size
        self.state = ITERATING

        if n < sample_size:
            logger.warning(f"Insufficient data for {self.model_cls.name} fitting: "
                           f"{n} points, need {sample_size}")
            return self._failure(INSUFFICIENT_DATA)

        best_count = 0
        best_model = None
        best_mask = None
        refined = None
        stagnant = 0
        history = []
        iterations = 0

        for iteration in range(self.config.max_iterations):
            iterations = iteration + 1
            candidate = self.sampler.draw(self.points, self.rng)
            if candidate is None:
                history.append(best_count)
                continue

            mask = self.evaluator.inlier_mask(candidate, self.points)
            count = int(np.count_nonzero(mask))

            if count > best_count:
                best_count = count
                best_model = candidate
                best_mask = mask
                stagnant = 0
                logger.debug(f"Iteration {iterations}: {count} inliers for {candidate!r}")
                if self.refit_each_improvement:
                    refined = self._refit(candidate, mask, count)
            else:
                stagnant += 1

            history.append(best_count)

            if self._converged(best_count, stagnant):
                self.state = CONVERGED
                break

        if best_model is None or best_count < sample_size:
            logger.warning(f"RANSAC failed to find a valid consensus set after "
                           f"{iterations} iterations")
            return self._failure(NO_CONSENSUS, iterations, history)

        if not self.refit_each_improvement:
            refined = self._refit(best_model, best_mask, best_count)

        final_model = refined if refined is not None else best_model

        if self.state != CONVERGED:
            self.state = EXHAUSTED
            logger.info(f"RANSAC exhausted {iterations} iterations with {best_count} "
                        f"inliers out of {n} points (threshold {self.config.min_consensus})")
        else:
            logger.info(f"RANSAC converged with {best_count} inliers out of {n} points "
                        f"after {iterations} iterations")

        return FitResult(
            model=final_model,
            status=self.state,
            num_inliers=best_count,
            inlier_mask=best_mask,
            iterations=iterations,
            score=self.evaluate_model(final_model),
            history=history,
        )

    def evaluate_model(self, model: GeometricModel) -> float:
        """Mean inlier distance of any model over this controller's points."""
        return self.evaluator.evaluate_model(model, self.points)


def fit_line(points, tolerance: float, max_iterations: int, min_consensus: int,
             seed: Optional[int] = None) -> FitResult:
    """Fit a 2-D line with RANSAC."""
    config = FittingConfig.create(tolerance, max_iterations, min_consensus)
    return RANSAC.for_lines(points, config, seed=seed).run()


def fit_plane(points, tolerance: float, max_iterations: int, min_consensus: int,
              seed: Optional[int] = None) -> FitResult:
    """Fit a 3-D plane with RANSAC."""
    config = FittingConfig.create(tolerance, max_iterations, min_consensus)
    return RANSAC.for_planes(points, config, seed=seed).run()
