"""
Segment Orchestrator
====================
Drives every animated segment from one shared cycle clock.

Why is this file needed?
------------------------
1. Single clock: all segments read the same cyclic time, so overlays stay in
   step with the main path.
2. Shared core: every render target runs the same interpolate -> trail ->
   project pipeline; only the VariantConfig differs.
3. Lifecycle: pause/resume keep the cyclic position continuous; stop is
   terminal and discards the per-segment state.

The host calls `tick(now)` once per rendered frame with a monotonic
millisecond timestamp. Ticks are synchronous and never re-entered.

Classes:
    CycleClock: Elapsed wall-clock time -> cyclic time.
    Segment: Runtime state of one animated path (timeline + trail).
    SegmentOrchestrator: The per-tick state machine.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np

from lightcycle.config import VariantConfig, SPHERE_VARIANT, FULL_PATH_SAMPLES
from lightcycle.model.interpolation import sample_path
from lightcycle.model.keyframes import Timeline
from lightcycle.model.projections import project
from lightcycle.model.registry import SegmentSpec, Color
from lightcycle.model.trail import TrailBuffer, TrailSample
from lightcycle.model.vector import Vector
from lightcycle.utils import wrap_cycle_time

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class OrchestratorState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class CycleClock:
    """
    Maps wall-clock milliseconds to a cyclic time.

    Args:
        cycle_duration: Length of the cycle (hours).
        animation_speed: Cycle hours advanced per wall-clock second.
    """

    def __init__(self, cycle_duration: float, animation_speed: float = 1.0) -> None:
        if cycle_duration <= 0.0:
            raise ValueError(f"Cycle duration must be positive, got {cycle_duration}.")
        self.cycle_duration = cycle_duration
        self.animation_speed = animation_speed
        self.start_time: Optional[float] = None
        self._paused_elapsed: Optional[float] = None

    @property
    def started(self) -> bool:
        return self.start_time is not None

    @property
    def paused(self) -> bool:
        return self._paused_elapsed is not None

    def start(self, now: float) -> None:
        self.start_time = now
        self._paused_elapsed = None

    def elapsed(self, now: float) -> float:
        """Wall-clock ms since start, frozen while paused."""
        if self.start_time is None:
            return 0.0
        if self._paused_elapsed is not None:
            return self._paused_elapsed
        return now - self.start_time

    def cycle_time(self, now: float) -> float:
        scaled = self.elapsed(now) / 1000.0 * self.animation_speed
        return wrap_cycle_time(scaled, self.cycle_duration)

    def pause(self, now: float) -> None:
        if self.start_time is None or self._paused_elapsed is not None:
            return
        self._paused_elapsed = now - self.start_time

    def resume(self, now: float) -> None:
        if self._paused_elapsed is None:
            return
        self.start_time = now - self._paused_elapsed
        self._paused_elapsed = None


@dataclass
class Segment:
    """One independently animated path: keyframes, color and its own trail."""
    id: int
    timeline: Timeline
    color: Color
    trail: TrailBuffer

    @classmethod
    def from_spec(cls, spec: SegmentSpec, config: VariantConfig) -> Segment:
        return cls(
            id=spec.id,
            timeline=spec.timeline,
            color=spec.color,
            trail=TrailBuffer(fade_window=config.fade_window_ms, max_points=config.max_points),
        )


@dataclass(frozen=True)
class SegmentFrame:
    """Per-segment output of one tick."""
    id: int
    color: Color
    direction: Vector
    position: tuple[float, float, float]
    trail: list[TrailSample]


@dataclass(frozen=True)
class Frame:
    """Output of one tick for every segment."""
    now: float
    cycle_time: float
    segments: list[SegmentFrame]


class SegmentOrchestrator:
    """
    Per-tick driver of N segments sharing one cycle clock.

    Args:
        segments: Segment descriptions (e.g. from `combine`).
        config: Variant parameters (trail window/capacity, speed, target).

    Raises:
        ValueError: If there are no segments or their cycle durations differ.
    """

    def __init__(self, segments: Sequence[SegmentSpec], config: VariantConfig = SPHERE_VARIANT) -> None:
        if not segments:
            raise ValueError("No segment data found.")

        cycle_duration = segments[0].timeline.cycle_duration
        for spec in segments[1:]:
            if spec.timeline.cycle_duration != cycle_duration:
                raise ValueError(
                    f"Segment {spec.id} has cycle duration {spec.timeline.cycle_duration}, "
                    f"expected {cycle_duration}."
                )

        self.config = config
        self.clock = CycleClock(cycle_duration=cycle_duration, animation_speed=config.animation_speed)
        self.segments: list[Segment] = [Segment.from_spec(spec, config) for spec in segments]
        self.state = OrchestratorState.IDLE
        logger.info(
            f"Orchestrator ready: {len(self.segments)} segment(s), target '{config.target}', "
            f"cycle {cycle_duration} h at speed x{config.animation_speed}."
        )

    @property
    def cycle_duration(self) -> float:
        return self.clock.cycle_duration

    @property
    def running(self) -> bool:
        return self.state in (OrchestratorState.IDLE, OrchestratorState.RUNNING)

    def start(self, now: float) -> None:
        """Start the clock explicitly; otherwise the first tick does it."""
        self._ensure_not_stopped()
        if self.state is OrchestratorState.IDLE:
            self.clock.start(now)
            self.state = OrchestratorState.RUNNING
            logger.info("Animation started.")

    def tick(self, now: float) -> Optional[Frame]:
        """
        Advance every segment to the cyclic time at wall-clock `now` (ms).

        Returns:
            The frame, or None while paused.

        Raises:
            RuntimeError: If the orchestrator has been stopped.
        """
        self._ensure_not_stopped()
        if self.state is OrchestratorState.PAUSED:
            return None
        if self.state is OrchestratorState.IDLE:
            self.start(now)

        cycle_time = self.clock.cycle_time(now)
        target = self.config.target

        frames = []
        for seg in self.segments:
            direction = seg.timeline.direction_at(cycle_time)
            position = project(target, cycle_time, direction, self.cycle_duration)
            seg.trail.push(position, now)
            seg.trail.evict(now)
            frames.append(SegmentFrame(
                id=seg.id,
                color=seg.color,
                direction=direction,
                position=position,
                trail=seg.trail.snapshot(now),
            ))

        logger.debug(f"Tick at {now:.1f} ms -> cycle time {cycle_time:.3f} h")
        return Frame(now=now, cycle_time=cycle_time, segments=frames)

    def pause(self, now: float) -> None:
        if self.state is not OrchestratorState.RUNNING:
            return
        self.clock.pause(now)
        self.state = OrchestratorState.PAUSED
        logger.info(f"Paused at cycle time {self.clock.cycle_time(now):.3f} h.")

    def resume(self, now: float) -> None:
        if self.state is not OrchestratorState.PAUSED:
            return
        self.clock.resume(now)
        self.state = OrchestratorState.RUNNING
        logger.info("Resumed.")

    def stop(self) -> None:
        """Terminal: no further ticks, trails and timelines are released."""
        if self.state is OrchestratorState.STOPPED:
            return
        for seg in self.segments:
            seg.trail.clear()
        self.segments = []
        self.state = OrchestratorState.STOPPED
        logger.info("Stopped.")

    def full_paths(self, samples: int = FULL_PATH_SAMPLES) -> list[npt.NDArray[np.float64]]:
        """
        Sample each segment's whole cycle and project it for the active target.

        Returns:
            One (samples + 1, 3) array per segment.
        """
        self._ensure_not_stopped()
        paths = []
        for seg in self.segments:
            sampled = sample_path(seg.timeline, samples)
            points = [
                project(self.config.target, row[0], Vector.from_iterable(row[1:]), self.cycle_duration)
                for row in sampled
            ]
            paths.append(np.asarray(points, dtype=np.float64))
        return paths

    def _ensure_not_stopped(self) -> None:
        if self.state is OrchestratorState.STOPPED:
            raise RuntimeError("Orchestrator has been stopped; build a new one to restart.")
