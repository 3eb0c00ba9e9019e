"""
Configuration management for ransacfit
"""

import copy
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Union

import yaml

DEFAULT_CONFIG = {
    "line": {
        "tolerance": 0.5,
        "max_iterations": 100,
        "min_consensus": 10
    },
    "plane": {
        "tolerance": 0.4,
        "max_iterations": 2000,
        "consensus_ratio": 0.6
    },
    "sampling": {
        "max_attempts": 10,
        "seed": None
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}


class FittingConfig(NamedTuple):
    """Parameters bound to one RANSAC run."""

    tolerance: float
    max_iterations: int
    min_consensus: int

    @classmethod
    def create(cls, tolerance: float, max_iterations: int, min_consensus: int) -> "FittingConfig":
        """Validate and build a configuration."""
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        if int(max_iterations) <= 0:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")
        if int(min_consensus) <= 0:
            raise ValueError(f"min_consensus must be positive, got {min_consensus}")
        return cls(float(tolerance), int(max_iterations), int(min_consensus))

    @classmethod
    def from_ratio(cls, tolerance: float, max_iterations: int, ratio: float,
                   n_points: int) -> "FittingConfig":
        """Consensus threshold as a fraction of the input size, floored, at least 1."""
        if not 0 < ratio <= 1:
            raise ValueError(f"consensus ratio must be in (0, 1], got {ratio}")
        return cls.create(tolerance, max_iterations, max(1, int(ratio * n_points)))

    @classmethod
    def from_section(cls, section: Dict[str, Any],
                     n_points: Optional[int] = None) -> "FittingConfig":
        """Build from a ``line``/``plane`` section of the config dictionary."""
        if "min_consensus" in section:
            return cls.create(section["tolerance"], section["max_iterations"],
                              section["min_consensus"])
        if "consensus_ratio" in section:
            if n_points is None:
                raise ValueError("n_points is required for a ratio-based consensus threshold")
            return cls.from_ratio(section["tolerance"], section["max_iterations"],
                                  section["consensus_ratio"], n_points)
        raise ValueError("Section needs either 'min_consensus' or 'consensus_ratio'")


def merge_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Deep-merge user settings over ``DEFAULT_CONFIG``."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in (overrides or {}).items():
        if section not in config:
            raise ValueError(f"Unknown config section: {section}")
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
        config[section].update(values)
    return config


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML config file and merge it over the defaults."""
    with open(config_path, 'r') as f:
        overrides = yaml.safe_load(f) or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return merge_config(overrides)
