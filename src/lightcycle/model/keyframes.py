"""
Keyframe Timeline
=================
Sparse, time-stamped light directions for one animated segment over a
repeating cycle (24 hours by default).

A Timeline is built once from raw angle data and is immutable afterwards.
The loop is closed explicitly: a closure keyframe carrying the earliest
direction is appended one full cycle after the earliest keyframe, so the
point at time 24 equals the point at time 0.

Bracketing convention: `next` is the first keyframe whose time is strictly
greater than the query time. A query landing exactly on a keyframe therefore
returns that keyframe as `prev` with `local_t == 0`.
"""
from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from lightcycle.model.interpolation import interpolate_direction
from lightcycle.model.vector import Vector
from lightcycle.utils import wrap_cycle_time

logger = logging.getLogger(__name__)

DEFAULT_CYCLE_DURATION = 24.0


@dataclass(frozen=True)
class Keyframe:
    """A known (time, direction) sample of an animated path."""
    time: float
    direction: Vector


@dataclass(frozen=True)
class KeyframeBracket:
    """
    Result of a timeline lookup.

    Attributes:
        prev: Keyframe at or before the query time.
        next: First keyframe strictly after the query time (cyclically).
        local_t: Normalized position between `prev` and `next` in [0, 1).
        wrapped: True if `next` carries the earliest direction across the
            cycle boundary.
    """
    prev: Keyframe
    next: Keyframe
    local_t: float
    wrapped: bool = False


def _parse_hour(key: Any) -> float:
    try:
        return float(key)
    except (TypeError, ValueError):
        raise ValueError(f"Keyframe time must be numeric, got {key!r}.") from None


def _parse_angles(value: Any) -> tuple[float, float]:
    """Accept {'x': vertical, 'y': horizontal} mappings or (vertical, horizontal) pairs."""
    if isinstance(value, Mapping):
        try:
            return float(value["x"]), float(value["y"])
        except KeyError as e:
            raise ValueError(f"Angle entry is missing key {e}: {value!r}") from None
    if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2:
        return float(value[0]), float(value[1])
    raise ValueError(f"Expected an angle pair (vertical, horizontal), got {value!r}.")


class Timeline:
    """
    Sorted, cyclic sequence of keyframes for one segment.

    Use `Timeline.build` for raw angle data and `Timeline.from_directions`
    for data that is already in direction form.
    """

    def __init__(self, keyframes: Iterable[Keyframe], cycle_duration: float = DEFAULT_CYCLE_DURATION) -> None:
        if cycle_duration <= 0.0:
            raise ValueError(f"Cycle duration must be positive, got {cycle_duration}.")

        ordered = sorted(keyframes, key=lambda k: k.time)
        if not ordered:
            raise ValueError("A timeline needs at least one keyframe.")

        for kf in ordered:
            if not 0.0 <= kf.time < cycle_duration:
                raise ValueError(
                    f"Keyframe time {kf.time} is outside the cyclic domain [0, {cycle_duration})."
                )
        for a, b in zip(ordered[:-1], ordered[1:]):
            if a.time == b.time:
                raise ValueError(f"Duplicate keyframe time {a.time}.")

        self._cycle_duration = float(cycle_duration)
        self._keyframes: tuple[Keyframe, ...] = tuple(ordered)
        first = ordered[0]
        self._closure = Keyframe(time=first.time + self._cycle_duration, direction=first.direction)
        # Real keyframes followed by the closure keyframe
        self._closed: tuple[Keyframe, ...] = self._keyframes + (self._closure,)
        self._times: list[float] = [kf.time for kf in self._closed]

    # ------------------------------------------------------------------ builders
    @classmethod
    def build(cls, raw_segment: Mapping[Any, Any], cycle_duration: float = DEFAULT_CYCLE_DURATION) -> Timeline:
        """
        Build a timeline from raw angle data.

        Args:
            raw_segment: Mapping of hour-of-day (number or numeric string) to
                an angle pair, either `(vertical, horizontal)` or
                `{"x": vertical, "y": horizontal}`.
            cycle_duration: Length of the cycle, in the same unit as the keys.

        Raises:
            ValueError: If the mapping is empty or contains invalid entries.
        """
        if not raw_segment:
            raise ValueError("Cannot build a timeline from zero keyframes.")

        keyframes: list[Keyframe] = []
        seen: set[float] = set()
        for key, value in raw_segment.items():
            hour = _parse_hour(key)
            if hour in seen:
                raise ValueError(f"Duplicate keyframe time {hour} (key {key!r}).")
            seen.add(hour)
            vertical, horizontal = _parse_angles(value)
            keyframes.append(Keyframe(time=hour, direction=Vector.from_angles(vertical, horizontal)))

        timeline = cls(keyframes, cycle_duration=cycle_duration)
        logger.debug(f"Built timeline with {len(timeline)} keyframes over {cycle_duration} h.")
        return timeline

    @classmethod
    def from_directions(
        cls,
        samples: Iterable[tuple[float, Vector]],
        cycle_duration: float = DEFAULT_CYCLE_DURATION,
    ) -> Timeline:
        """Build a timeline from (time, direction) pairs; directions are normalized."""
        keyframes = [Keyframe(time=float(t), direction=d.normalize()) for t, d in samples]
        if not keyframes:
            raise ValueError("Cannot build a timeline from zero keyframes.")
        return cls(keyframes, cycle_duration=cycle_duration)

    # ---------------------------------------------------------------- accessors
    @property
    def cycle_duration(self) -> float:
        return self._cycle_duration

    @property
    def keyframes(self) -> tuple[Keyframe, ...]:
        """The real keyframes, sorted by time (closure excluded)."""
        return self._keyframes

    @property
    def closure(self) -> Keyframe:
        """The keyframe that closes the loop one cycle after the earliest one."""
        return self._closure

    def __len__(self) -> int:
        return len(self._keyframes)

    def __repr__(self) -> str:
        keyframes = getattr(self, "_keyframes", ())
        return f"Timeline({len(keyframes)} keyframes, cycle_duration={getattr(self, '_cycle_duration', None)})"

    # ------------------------------------------------------------------- lookup
    def bracket(self, t: float) -> KeyframeBracket:
        """
        Find the keyframes surrounding cyclic time `t`.

        Args:
            t: Query time; reduced into [0, cycle_duration) first.

        Returns:
            The bracketing keyframes and the local interpolation parameter.
        """
        cycle = self._cycle_duration
        t = wrap_cycle_time(t, cycle)

        # The closure time is >= cycle > t, so an index is always found
        next_index = bisect.bisect_right(self._times, t)

        if next_index == 0:
            # t precedes the earliest keyframe: wrap from the last real keyframe
            prev = self._keyframes[-1]
            nxt = self._keyframes[0]
        else:
            prev = self._closed[next_index - 1]
            nxt = self._closed[next_index]

        if nxt.time - prev.time <= 0.0:
            span = cycle - prev.time + nxt.time
        else:
            span = nxt.time - prev.time

        if span == 0.0:
            local_t = 0.0
        elif nxt.time > prev.time:
            local_t = (t - prev.time) / span
        else:
            adjusted = t - prev.time if t >= prev.time else cycle - prev.time + t
            local_t = adjusted / span

        wrapped = next_index == 0 or nxt is self._closure
        return KeyframeBracket(prev=prev, next=nxt, local_t=local_t, wrapped=wrapped)

    def direction_at(self, t: float) -> Vector:
        """Interpolated light direction at cyclic time `t`."""
        b = self.bracket(t)
        return interpolate_direction(b.prev, b.next, b.local_t)


def bracket_keyframes(timeline: Timeline, cyclic_time: float) -> KeyframeBracket:
    """Functional alias of `Timeline.bracket`."""
    return timeline.bracket(cyclic_time)
