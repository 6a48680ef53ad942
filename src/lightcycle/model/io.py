"""
Input Manager (JSON)
Loads the raw light-angle data produced by the external extraction step.

Expected layout::

    {
      "<path name>": {
        "title": "<optional display title>",
        "<segment id>": {"<hour>": {"x": <vertical>, "y": <horizontal>}, ...},
        ...
      },
      ...
    }
"""
import json
import logging
import os
from typing import Any

from lightcycle.model.keyframes import DEFAULT_CYCLE_DURATION
from lightcycle.model.registry import PathRegistry

# Get module logger
logger = logging.getLogger(__name__)


def read_light_angles(filepath: str) -> dict[str, Any]:
    """
    Read and shape-check the raw light-angle JSON.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the JSON is malformed or does not follow the layout.
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Light-angle data not found: {filepath}")

    logger.info(f"Reading light-angle data from: {filepath}")
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in '{filepath}': {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Expected a JSON object of paths in '{filepath}', got {type(raw).__name__}.")

    for name, path_data in raw.items():
        if not isinstance(path_data, dict):
            raise ValueError(f"Path '{name}' must be a JSON object, got {type(path_data).__name__}.")
        for key, segment in path_data.items():
            if key == "title":
                continue
            if not isinstance(segment, dict):
                raise ValueError(f"Path '{name}', segment '{key}' must map hours to angles.")
    return raw


def load_light_angles(filepath: str, cycle_duration: float = DEFAULT_CYCLE_DURATION) -> PathRegistry:
    """Read the raw light-angle JSON and build a PathRegistry from it."""
    raw = read_light_angles(filepath)
    registry = PathRegistry.from_raw(raw, cycle_duration=cycle_duration)
    logger.debug(f"Paths available: {', '.join(registry.names())}")
    return registry
