"""
Trail management for animated light directions.

Each segment owns one TrailBuffer: a time-ordered queue of recently visited
positions. Points enter at the tail every tick and leave from the head, either
because they are older than the fade window or because the buffer is over
capacity.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, TYPE_CHECKING

import numpy as np

from lightcycle.utils import clamp

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrailPoint:
    """A visited position (direction or projected coordinate) and its wall-clock time in ms."""
    position: tuple[float, ...]
    timestamp: float


@dataclass(frozen=True)
class TrailSample:
    """
    A trail point annotated for rendering.

    Attributes:
        position: Stored position.
        timestamp: Wall-clock time (ms) the point was pushed.
        age: Normalized age in [0, 1]; 0 is brand new, 1 fully faded.
    """
    position: tuple[float, ...]
    timestamp: float
    age: float


class TrailBuffer:
    """
    Bounded, fading history of one segment's positions.

    Args:
        fade_window: Age in ms after which points are evicted.
        max_points: Maximum number of retained points.
    """

    def __init__(self, fade_window: float, max_points: int) -> None:
        if fade_window <= 0.0:
            raise ValueError(f"Fade window must be positive, got {fade_window}.")
        if max_points <= 0:
            raise ValueError(f"Trail capacity must be positive, got {max_points}.")
        self.fade_window = float(fade_window)
        self.max_points = int(max_points)
        self._points: deque[TrailPoint] = deque()

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TrailPoint]:
        return iter(self._points)

    @property
    def newest(self) -> Optional[TrailPoint]:
        return self._points[-1] if self._points else None

    def push(self, position: Sequence[float], now: float) -> None:
        """Append a position at the tail. `now` must not decrease between calls."""
        self._points.append(TrailPoint(position=tuple(float(c) for c in position), timestamp=float(now)))

    def evict(
        self,
        now: float,
        fade_window: Optional[float] = None,
        max_points: Optional[int] = None,
    ) -> int:
        """
        Drop expired and excess points from the head.

        Args:
            now: Current wall-clock time in ms.
            fade_window: Override of the configured fade window.
            max_points: Override of the configured capacity.

        Returns:
            Number of points removed.
        """
        window = self.fade_window if fade_window is None else fade_window
        capacity = self.max_points if max_points is None else max_points

        removed = 0
        while self._points and now - self._points[0].timestamp > window:
            self._points.popleft()
            removed += 1
        while len(self._points) > capacity:
            self._points.popleft()
            removed += 1

        if removed:
            logger.debug(f"Evicted {removed} trail points, {len(self._points)} remain.")
        return removed

    def _age(self, timestamp: float, now: float) -> float:
        return clamp((now - timestamp) / self.fade_window, 0.0, 1.0)

    def snapshot(self, now: Optional[float] = None) -> list[TrailSample]:
        """
        Annotate every retained point with its normalized age.

        Args:
            now: Reference time in ms; defaults to the newest point's timestamp.
        """
        if not self._points:
            return []
        if now is None:
            now = self._points[-1].timestamp
        return [TrailSample(p.position, p.timestamp, self._age(p.timestamp, now)) for p in self._points]

    def to_array(self, now: Optional[float] = None) -> npt.NDArray[np.float32]:
        """
        Pack the trail as an (N, 4) float32 array of [x, y, z, age] rows.

        2-D positions (x, z) are stored as (x, 0, z).
        """
        samples = self.snapshot(now)
        out = np.zeros((len(samples), 4), dtype=np.float32)
        for i, sample in enumerate(samples):
            pos = sample.position
            if len(pos) == 2:
                out[i, 0], out[i, 2] = pos
            else:
                out[i, :3] = pos[:3]
            out[i, 3] = sample.age
        return out

    def clear(self) -> None:
        self._points.clear()
