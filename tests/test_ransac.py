"""Tests for the RANSAC controller."""

import pytest
import numpy as np
from ransacfit.config import FittingConfig
from ransacfit.points import PointStore
from ransacfit.models import LineModel, PlaneModel, INVALID_DISTANCE
from ransacfit.estimation.consensus import ConsensusEvaluator
from ransacfit.estimation.refiner import fit_plane_svd
from ransacfit.estimation.sampler import RandomPairSampler, ShuffledTripletSampler
from ransacfit.estimation.ransac import (
    RANSAC, FitResult, fit_line, fit_plane,
    CONVERGED, EXHAUSTED, FAILED, INSUFFICIENT_DATA, NO_CONSENSUS,
)


class TestLineRANSAC:
    """Test RANSAC line fitting."""

    def test_exact_line_round_trip(self):
        """Test recovery of y = 2x + 1 from exact points."""
        points = [(0, 1), (1, 3), (2, 5), (3, 7)]
        result = fit_line(points, tolerance=0.01, max_iterations=100, min_consensus=4, seed=0)

        assert result.status == CONVERGED
        assert result.num_inliers == 4
        assert result.iterations == 1
        assert result.model.m == pytest.approx(2.0)
        assert result.model.b == pytest.approx(1.0)

    def test_line_with_outliers(self, line_points):
        """Test line fitting on the reference data."""
        config = FittingConfig.create(0.5, 100, 10)
        result = RANSAC.for_lines(line_points, config, seed=42).run()

        assert result.succeeded
        assert result.num_inliers >= 8
        assert result.model.m == pytest.approx(2.0, abs=0.15)
        assert result.model.b == pytest.approx(1.0, abs=0.5)
        # outliers never join the consensus set
        assert not result.inlier_mask[10:].any()

    def test_vertical_line(self):
        """Test fitting points that share one x-coordinate."""
        points = [(2, 0), (2, 1), (2, 2), (2, 3), (5, 9)]
        result = fit_line(points, tolerance=0.1, max_iterations=100, min_consensus=4, seed=0)

        assert result.status == CONVERGED
        assert result.model.is_vertical
        assert result.model.x0 == pytest.approx(2.0)
        np.testing.assert_array_equal(result.inlier_mask, [True, True, True, True, False])

    def test_near_vertical_line(self):
        """Test that a steep consensus set keeps its vertical model."""
        xs = [0.0, 0.03, -0.03, 0.04, -0.04, 0.05, -0.05, 0.0, 0.03, -0.04]
        points = [(x, float(i)) for i, x in enumerate(xs)]
        result = fit_line(points, tolerance=0.1, max_iterations=200, min_consensus=10, seed=0)

        assert result.status == CONVERGED
        assert result.num_inliers == 10
        assert result.model.is_vertical
        assert result.model.x0 == pytest.approx(np.mean(xs))

        final_mask = ConsensusEvaluator(0.1).inlier_mask(result.model, PointStore(points, dim=2))
        np.testing.assert_array_equal(final_mask, result.inlier_mask)
        assert result.score < 0.1

    def test_worse_refit_is_rejected(self):
        """Test that a refit losing inliers does not replace the candidate."""
        points = PointStore([(0, 1), (1, 3), (2, 5), (3, 7)], dim=2)
        solver = RANSAC(points, FittingConfig.create(0.01, 10, 4), RandomPairSampler(),
                        refiner=lambda inliers, candidate: LineModel.from_slope_intercept(100.0, 0.0),
                        refit_each_improvement=True, seed=0)
        result = solver.run()

        assert result.status == CONVERGED
        assert result.model.m == pytest.approx(2.0)
        assert result.model.b == pytest.approx(1.0)

    def test_determinism(self, line_points):
        """Test that a fixed seed gives identical results."""
        config = FittingConfig.create(0.5, 100, 10)
        first = RANSAC.for_lines(line_points, config, seed=7).run()
        second = RANSAC.for_lines(line_points, config, seed=7).run()

        assert first.model.to_dict() == second.model.to_dict()
        assert first.history == second.history
        np.testing.assert_array_equal(first.inlier_mask, second.inlier_mask)

    def test_injected_generator(self, line_points):
        """Test that an explicit generator is used instead of a seed."""
        config = FittingConfig.create(0.5, 100, 10)
        first = RANSAC.for_lines(line_points, config, rng=np.random.default_rng(5)).run()
        second = RANSAC.for_lines(line_points, config, seed=5).run()
        assert first.model.to_dict() == second.model.to_dict()

    def test_inlier_count_is_monotonic(self, line_points):
        """Test that the best inlier count never decreases."""
        config = FittingConfig.create(0.5, 100, 20)
        result = RANSAC.for_lines(line_points, config, seed=3).run()

        assert result.status == EXHAUSTED
        assert len(result.history) == result.iterations == 100
        assert all(np.diff(result.history) >= 0)
        assert result.history[-1] == result.num_inliers

    def test_insufficient_data(self):
        """Test that a single point fails without crashing."""
        result = fit_line([(1.0, 2.0)], tolerance=0.5, max_iterations=10, min_consensus=1)

        assert result.status == FAILED
        assert result.reason == INSUFFICIENT_DATA
        assert not result.succeeded
        assert not result.model.is_valid()
        assert np.isfinite(result.model.m) and np.isfinite(result.model.b)

    def test_empty_input(self):
        """Test that no points fail without crashing."""
        result = fit_line([], tolerance=0.5, max_iterations=10, min_consensus=1)
        assert result.status == FAILED
        assert result.reason == INSUFFICIENT_DATA

    def test_identical_points(self):
        """Test that degenerate data reports no consensus."""
        result = fit_line([(1, 1)] * 5, tolerance=0.5, max_iterations=20, min_consensus=3, seed=0)

        assert result.status == FAILED
        assert result.reason == NO_CONSENSUS
        assert result.iterations == 20
        assert not result.model.is_valid()

    def test_invalid_config(self):
        """Test configuration validation."""
        with pytest.raises(ValueError):
            fit_line([(0, 0), (1, 1)], tolerance=0.0, max_iterations=10, min_consensus=1)

    def test_line_policy(self, line_points):
        """Test the line controller settings."""
        solver = RANSAC.for_lines(line_points, FittingConfig.create(0.5, 100, 10))
        assert solver.refit_each_improvement
        assert solver.stagnation_limit is None
        assert solver.model_cls is LineModel


class TestPlaneRANSAC:
    """Test RANSAC plane fitting."""

    def test_plane_recovery(self, plane_points, plane_normal):
        """Test plane fitting on the reference data with a 60% threshold."""
        config = FittingConfig.from_ratio(0.4, 2000, 0.6, len(plane_points))
        assert config.min_consensus == 9

        solver = RANSAC.for_planes(plane_points, config, seed=0)
        result = solver.run()

        # only eight points lie on the plane, so the threshold is never met
        assert result.status == EXHAUSTED
        assert result.succeeded
        assert result.num_inliers == 8
        assert abs(np.dot(result.model.normal, plane_normal)) == pytest.approx(1.0, abs=1e-2)

        mask = ConsensusEvaluator(0.4).inlier_mask(result.model, solver.points)
        assert mask[:8].all()
        assert not mask[8:].any()

    def test_plane_converges(self, plane_points):
        """Test stagnation-based convergence."""
        config = FittingConfig.create(0.4, 2000, 8)
        result = RANSAC.for_planes(plane_points, config, seed=1).run()

        assert result.status == CONVERGED
        assert 2000 // 4 < result.iterations < 2000
        assert all(np.diff(result.history) >= 0)

    def test_refit_uses_best_consensus_set(self, plane_points):
        """Test that the final model is the SVD fit of the consensus set."""
        config = FittingConfig.create(0.4, 2000, 8)
        solver = RANSAC.for_planes(plane_points, config, seed=2)
        result = solver.run()

        expected = fit_plane_svd(result.inliers(solver.points))
        np.testing.assert_allclose(result.model.normal, expected.normal)
        assert result.model.d == pytest.approx(expected.d)

    def test_sign_convention_across_runs(self, plane_points):
        """Test that different seeds agree on the normal orientation."""
        config = FittingConfig.create(0.4, 2000, 8)
        first = RANSAC.for_planes(plane_points, config, seed=10).run()
        second = RANSAC.for_planes(plane_points, config, seed=20).run()
        np.testing.assert_allclose(first.model.normal, second.model.normal, atol=1e-9)

    def test_evaluate_model(self, plane_points):
        """Test the quality score."""
        config = FittingConfig.create(0.4, 2000, 8)
        solver = RANSAC.for_planes(plane_points, config, seed=0)
        result = solver.run()

        assert 0.0 <= result.score < 0.4
        assert result.score == pytest.approx(solver.evaluate_model(result.model))
        assert solver.evaluate_model(PlaneModel()) == INVALID_DISTANCE

    def test_insufficient_data(self):
        """Test that two points fail."""
        result = fit_plane([(0, 0, 0), (1, 1, 1)], tolerance=0.4, max_iterations=10,
                           min_consensus=1)
        assert result.status == FAILED
        assert result.reason == INSUFFICIENT_DATA
        assert not result.model.is_valid()

    def test_collinear_points(self):
        """Test that collinear data reports no consensus."""
        points = [(i, 2 * i, 3 * i) for i in range(10)]
        result = fit_plane(points, tolerance=0.4, max_iterations=50, min_consensus=3, seed=0)

        assert result.status == FAILED
        assert result.reason == NO_CONSENSUS
        assert result.history == [0] * 50

    def test_plane_policy(self, plane_points):
        """Test the plane controller settings."""
        solver = RANSAC.for_planes(plane_points, FittingConfig.create(0.4, 2000, 9))
        assert not solver.refit_each_improvement
        assert solver.stagnation_limit == 500
        assert solver.refiner is fit_plane_svd

    def test_generic_controller(self, plane_points):
        """Test building the controller from a sampler alone."""
        store = PointStore(plane_points, dim=3)
        solver = RANSAC(store, FittingConfig.create(0.4, 200, 8),
                        ShuffledTripletSampler(PlaneModel), seed=4)
        assert solver.refiner is fit_plane_svd

        result = solver.run()
        # no stagnation limit, so the threshold stops the loop at once
        assert result.status == CONVERGED
        assert result.num_inliers == 8
        assert result.history[-1] == 8
        assert result.history.count(8) == 1


class TestFitResult:
    """Test the result container."""

    def test_to_dict(self):
        """Test serialization of a successful result."""
        mask = np.array([True, False, True])
        result = FitResult(LineModel.from_slope_intercept(1.0, 0.0), CONVERGED,
                           num_inliers=2, inlier_mask=mask, iterations=3, score=0.1)
        data = result.to_dict()

        assert data["status"] == CONVERGED
        assert data["num_inliers"] == 2
        assert data["inlier_indices"] == [0, 2]
        assert data["model"]["m"] == 1.0
        assert result.succeeded

    def test_failed_result(self):
        """Test defaults of a failed result."""
        result = FitResult(PlaneModel(), FAILED, reason=NO_CONSENSUS)
        store = PointStore([[0, 0, 0]], dim=3)

        assert not result.succeeded
        assert result.score == INVALID_DISTANCE
        assert result.inliers(store).shape == (0, 3)
        assert result.to_dict()["inlier_indices"] == []
