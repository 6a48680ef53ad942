"""Shared fixtures for the lightcycle test suite."""
import json
from pathlib import Path

import pytest

from lightcycle.model.keyframes import Keyframe, Timeline
from lightcycle.model.vector import Vector

BUNDLED_DATA = Path(__file__).parent.parent / "assets" / "light-angles.json"


@pytest.fixture
def bundled_data_file() -> Path:
    return BUNDLED_DATA


@pytest.fixture
def timeline_0_6_18() -> Timeline:
    """Keyframes at 0, 6 and 18 h pointing along +X, +Z and +Y."""
    return Timeline(
        [
            Keyframe(0.0, Vector(1.0, 0.0, 0.0)),
            Keyframe(6.0, Vector(0.0, 0.0, 1.0)),
            Keyframe(18.0, Vector(0.0, 1.0, 0.0)),
        ],
        cycle_duration=24.0,
    )


@pytest.fixture
def raw_paths() -> dict:
    return {
        "main": {
            "title": "Main path",
            "0": {"0": {"x": -0.5, "y": 1.9}, "12": {"x": -0.3, "y": -1.9}},
            "1": {"4": {"x": -1.0, "y": -0.5}, "16": {"x": -0.2, "y": 0.1}},
        },
        "overlay": {
            "0": {"6": {"x": -0.8, "y": -1.0}},
        },
    }


@pytest.fixture
def raw_paths_file(tmp_path: Path, raw_paths: dict) -> Path:
    path = tmp_path / "light-angles.json"
    path.write_text(json.dumps(raw_paths), encoding="utf-8")
    return path
