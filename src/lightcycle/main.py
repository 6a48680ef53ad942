"""
Application Initialization
==========================
This module wires the data, the orchestrator and the host loop together.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Loads the PathRegistry from the light-angle data (or the built-in demo).
2. Combines the selected path with any overlays.
3. Builds the SegmentOrchestrator for the chosen render target.
4. Runs the headless frame loop or hands the paths to the preview.
"""
import logging
import time
from dataclasses import replace
from typing import Callable, Optional, Sequence

from lightcycle.config import VARIANTS, CARD_VARIANT, DEFAULT_PATHS_FILE, DEFAULT_PATH_NAME, VariantConfig
from lightcycle.controller.orchestrator import SegmentOrchestrator, Frame
from lightcycle.model.io import load_light_angles
from lightcycle.model.projections import RenderTarget
from lightcycle.model.registry import PathRegistry, combine, combine_paths, demo_path

logger = logging.getLogger(__name__)

DEMO_PATH_NAME = "demo"


def load_registry(data_file: Optional[str] = None) -> PathRegistry:
    """Load the registry from `data_file` (defaults to the bundled asset)."""
    return load_light_angles(data_file or DEFAULT_PATHS_FILE)


def build_orchestrator(
    registry: Optional[PathRegistry],
    path_name: str = DEFAULT_PATH_NAME,
    overlays: Sequence[str] = (),
    target: RenderTarget = RenderTarget.SPHERE,
    config: Optional[VariantConfig] = None,
) -> SegmentOrchestrator:
    """
    Build an orchestrator for a path (plus overlays) on a render target.

    The name "demo" selects the built-in figure-eight path with the card
    variant parameters projected onto `target`; it cannot be combined with
    overlays.
    """
    if path_name == DEMO_PATH_NAME:
        if overlays:
            raise ValueError("The demo path cannot be combined with overlays.")
        dataset = combine(demo_path().segments)
        config = config or replace(CARD_VARIANT, target=RenderTarget(target))
    else:
        if registry is None:
            raise ValueError(f"Path '{path_name}' requested but no data was loaded.")
        dataset = combine_paths(registry, path_name, overlays)
        config = config or VARIANTS[RenderTarget(target)]

    logger.info(
        f"Dataset '{path_name}': {dataset.main_count} main + {dataset.overlay_count} overlay segment(s)."
    )
    return SegmentOrchestrator(dataset.segments, config)


def _log_frame(frame: Frame) -> None:
    for seg in frame.segments:
        x, y, z = seg.position
        logger.info(
            f"t={frame.cycle_time:6.3f} h  segment {seg.id}: "
            f"({x:+.4f}, {y:+.4f}, {z:+.4f})  trail={len(seg.trail)}"
        )


def run_headless(
    orchestrator: SegmentOrchestrator,
    frames: int = 60,
    fps: float = 30.0,
    on_frame: Callable[[Frame], None] = _log_frame,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Drive the orchestrator with a fixed-rate frame loop.

    Args:
        orchestrator: The orchestrator to tick.
        frames: Number of frames to render.
        fps: Target frame rate.
        on_frame: Consumer of every produced frame.
        clock: Monotonic clock in seconds.
        sleep: Sleep function used between frames.

    Returns:
        The number of frames produced.
    """
    if fps <= 0.0:
        raise ValueError(f"fps must be positive, got {fps}.")

    interval = 1.0 / fps
    produced = 0
    try:
        for _ in range(frames):
            frame_start = clock()
            frame = orchestrator.tick(frame_start * 1000.0)
            if frame is not None:
                on_frame(frame)
                produced += 1
            remaining = interval - (clock() - frame_start)
            if remaining > 0.0:
                sleep(remaining)
    finally:
        orchestrator.stop()
    logger.info(f"Rendered {produced} frame(s).")
    return produced
