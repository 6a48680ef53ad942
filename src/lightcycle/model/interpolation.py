"""
Spherical interpolation between light directions.

The same `interpolate_direction` drives the animated marker and the dense
path samples drawn as static overlays, so the two always coincide.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Union

import numpy as np

from lightcycle.model.vector import Vector
from lightcycle.utils import clamp

if TYPE_CHECKING:
    import numpy.typing as npt
    from lightcycle.model.keyframes import Keyframe, Timeline

SLERP_EPSILON = 0.001

DirectionLike = Union[Vector, "Keyframe"]


def _as_vector(value: DirectionLike) -> Vector:
    return value if isinstance(value, Vector) else value.direction


def _perpendicular(v: Vector) -> Vector:
    """Any unit vector perpendicular to `v`."""
    helper = Vector(1.0, 0.0, 0.0) if abs(v.x) < 0.9 else Vector(0.0, 1.0, 0.0)
    return v.cross(helper).normalize()


def _half_turn(a: Vector, t: float) -> Vector:
    """Rotate `a` by t * pi around an axis perpendicular to it."""
    axis = _perpendicular(a)
    angle = t * math.pi
    # Rodrigues' formula; the axis . a term vanishes
    return a * math.cos(angle) + axis.cross(a) * math.sin(angle)


def interpolate_direction(prev: DirectionLike, next: DirectionLike, t: float) -> Vector:
    """
    Great-circle interpolation between two unit directions.

    Args:
        prev: Start direction (or a keyframe carrying it).
        next: End direction (or a keyframe carrying it).
        t: Position between the two, 0 -> prev, 1 -> next.

    Returns:
        The interpolated direction. Below SLERP_EPSILON of angular separation
        a plain linear blend is returned without renormalization. For
        (nearly) opposite directions the great circle is not unique; one
        through an arbitrary perpendicular axis is used.
    """
    a = _as_vector(prev)
    b = _as_vector(next)

    cos_theta = clamp(a.dot(b), -1.0, 1.0)
    theta = math.acos(cos_theta)

    if theta < SLERP_EPSILON:
        return a + (b - a) * t

    sin_theta = math.sin(theta)
    if theta > math.pi / 2 and sin_theta < SLERP_EPSILON:
        return _half_turn(a, t)

    w1 = math.sin((1.0 - t) * theta) / sin_theta
    w2 = math.sin(t * theta) / sin_theta
    return a * w1 + b * w2


def sample_path(timeline: Timeline, samples: int = 240) -> npt.NDArray[np.float64]:
    """
    Sample a full cycle of a timeline.

    Args:
        timeline: The timeline to sample.
        samples: Number of intervals; `samples + 1` points are returned so the
            loop is closed.

    Returns:
        Array of shape (samples + 1, 4) holding (time, x, y, z) rows.
    """
    if samples < 1:
        raise ValueError(f"At least one sample interval is required, got {samples}.")

    out = np.empty((samples + 1, 4))
    for i in range(samples + 1):
        time = (i / samples) * timeline.cycle_duration
        direction = timeline.direction_at(time)
        out[i] = (time, direction.x, direction.y, direction.z)
    return out
