"""
ransacfit - robust line and plane fitting

Random Sample Consensus over 2-D lines and 3-D planes, with least squares
and SVD refinement of the winning consensus set.
"""

__version__ = '1.0.0'

from .config import DEFAULT_CONFIG, FittingConfig, load_config
from .estimation.ransac import RANSAC, FitResult, fit_line, fit_plane
from .models import LineModel, PlaneModel
from .points import PointStore
from .core import RansacProcessor

__all__ = [
    'DEFAULT_CONFIG',
    'FittingConfig',
    'load_config',
    'RANSAC',
    'FitResult',
    'fit_line',
    'fit_plane',
    'LineModel',
    'PlaneModel',
    'PointStore',
    'RansacProcessor',
]
