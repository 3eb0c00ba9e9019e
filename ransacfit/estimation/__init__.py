"""Sampling, consensus, refinement and the RANSAC controller."""

from .consensus import ConsensusEvaluator
from .ransac import RANSAC, FitResult, fit_line, fit_plane
from .refiner import fit_line_least_squares, fit_plane_svd, get_refiner
from .sampler import RandomPairSampler, ShuffledTripletSampler

__all__ = [
    'ConsensusEvaluator',
    'RANSAC',
    'FitResult',
    'fit_line',
    'fit_plane',
    'fit_line_least_squares',
    'fit_plane_svd',
    'get_refiner',
    'RandomPairSampler',
    'ShuffledTripletSampler',
]
