"""Geometric models fitted by the RANSAC controller."""

from .base import GeometricModel, INVALID_DISTANCE
from .line import LineModel
from .plane import PlaneModel

__all__ = ['GeometricModel', 'LineModel', 'PlaneModel', 'INVALID_DISTANCE']
