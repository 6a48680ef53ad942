"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths scattered throughout the code.
2. Variants: Every visualization target (sphere, plane, torus, cylinder)
   runs the same interpolation/trail core; the only differences between them
   are the small parameter sets collected here.
3. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_PATHS_FILE (str): Absolute path to the bundled light-angle data.
    VariantConfig: Per-target animation parameters.
    VARIANTS: Preset VariantConfig for every RenderTarget.
"""
import sys
import os
import logging
from dataclasses import dataclass
from pathlib import Path

from lightcycle.model.projections import RenderTarget

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/lightcycle/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_PATHS_FILE: str = os.path.join(ASSETS_PATH, "light-angles.json")
DEFAULT_PATH_NAME: str = "m10_00_0000"

CYCLE_DURATION_HOURS: float = 24.0
FULL_PATH_SAMPLES: int = 240


@dataclass(frozen=True)
class VariantConfig:
    """
    Parameters of one visualization variant.

    Attributes:
        fade_window_ms: Age (ms) after which a trail point is evicted.
        max_points: Trail capacity per segment.
        animation_speed: Cycle hours advanced per wall-clock second.
        target: Surface the directions are projected onto.
        dot_size: Size of the current-position marker.
    """
    fade_window_ms: float = 6400.0
    max_points: int = 3600
    animation_speed: float = 10.0
    target: RenderTarget = RenderTarget.SPHERE
    dot_size: float = 0.04

    def __post_init__(self) -> None:
        if self.fade_window_ms <= 0.0:
            raise ValueError(f"fade_window_ms must be positive, got {self.fade_window_ms}.")
        if self.max_points <= 0:
            raise ValueError(f"max_points must be positive, got {self.max_points}.")
        if self.animation_speed <= 0.0:
            raise ValueError(f"animation_speed must be positive, got {self.animation_speed}.")


# The very first card demo: real-time clock, short trail
CARD_VARIANT = VariantConfig(
    fade_window_ms=3000.0, max_points=100, animation_speed=1.0, target=RenderTarget.SPHERE, dot_size=0.1
)
SPHERE_VARIANT = VariantConfig(target=RenderTarget.SPHERE, dot_size=0.04)
PLANE_VARIANT = VariantConfig(target=RenderTarget.PLANE, dot_size=0.05)
TORUS_VARIANT = VariantConfig(target=RenderTarget.TORUS, dot_size=0.04)
CYLINDER_VARIANT = VariantConfig(target=RenderTarget.CYLINDER, dot_size=0.04)

VARIANTS: dict[RenderTarget, VariantConfig] = {
    RenderTarget.SPHERE: SPHERE_VARIANT,
    RenderTarget.PLANE: PLANE_VARIANT,
    RenderTarget.TORUS: TORUS_VARIANT,
    RenderTarget.CYLINDER: CYLINDER_VARIANT,
}

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
