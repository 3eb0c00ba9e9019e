"""JSON output of fit results."""

import json
import numpy as np
from pathlib import Path
from typing import Any, Dict


def _to_builtin(value: Any) -> Any:
    """Convert numpy values nested in a result to plain Python types."""
    if isinstance(value, dict):
        return {key: _to_builtin(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_builtin(item) for item in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value


class JSONWriter:
    """Write fit results to JSON."""

    @staticmethod
    def save_results(output_dict: Dict, output_path: str, indent: int = 2):
        """Save results to JSON file."""
        if hasattr(output_dict, 'to_dict'):
            output_dict = output_dict.to_dict()
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(_to_builtin(output_dict), f, indent=indent)

    @staticmethod
    def load_results(input_path: str) -> Dict:
        """Load a saved result dictionary."""
        with open(input_path, 'r') as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"{input_path} does not contain a result object")
        return loaded
