"""
Projection Functions
====================
Stateless mappings from a unit light direction (and, for ring-shaped
targets, the cycle time) onto an alternative target surface.

Plane:
    Stereographic projection from the north pole. Directions pointing up
    (y = 1) land near the centre, horizontal ones near radius 1; the
    epsilon keeps y = -1 finite.

Torus:
    Time walks around the big circle (0 h at the top, -pi/2), the
    stereographic offset of the direction is placed on the tube's circular
    cross-section. One point encodes both "when" and "where".

Cylinder:
    The torus cut open: time walks along the axis, the cross-section
    placement is the same.
"""
from __future__ import annotations

import math
from enum import StrEnum

from lightcycle.model.vector import Vector

PLANE_EPSILON = 0.01

TORUS_MAJOR_RADIUS = 1.5
TORUS_MINOR_RADIUS = 0.6
TUBE_FILL = 0.9

CYLINDER_RADIUS = 0.6
CYLINDER_HEIGHT = 3.0


class RenderTarget(StrEnum):
    SPHERE = "sphere"
    PLANE = "plane"
    TORUS = "torus"
    CYLINDER = "cylinder"


def project_to_plane(direction: Vector, epsilon: float = PLANE_EPSILON) -> tuple[float, float]:
    """
    Stereographic projection of a direction onto the horizontal plane.

    Returns:
        The (x, z) plane coordinates.
    """
    scale = 1.0 / (1.0 + direction.y + epsilon)
    return direction.x * scale, direction.z * scale


def major_angle(time: float, cycle_duration: float = 24.0) -> float:
    """Angle around the torus ring for a cycle time; time 0 sits at -pi/2."""
    return (time / cycle_duration) * 2.0 * math.pi - math.pi / 2.0


def _tube_offset(direction: Vector, minor_radius: float, tube_fill: float) -> tuple[float, float]:
    """Place the plane projection of `direction` on a tube cross-section of radius `minor_radius`."""
    proj_x, proj_z = project_to_plane(direction)
    distance = math.hypot(proj_x, proj_z)
    angle = math.atan2(proj_z, proj_x)
    radius_on_tube = min(distance, 1.0) * minor_radius * tube_fill
    return radius_on_tube * math.cos(angle), radius_on_tube * math.sin(angle)


def project_to_torus(
    time: float,
    direction: Vector,
    cycle_duration: float = 24.0,
    major_radius: float = TORUS_MAJOR_RADIUS,
    minor_radius: float = TORUS_MINOR_RADIUS,
    tube_fill: float = TUBE_FILL,
) -> tuple[float, float, float]:
    """
    Map (cycle time, direction) to a point inside the torus tube.

    Args:
        time: Cycle time in [0, cycle_duration).
        direction: Unit light direction.
        cycle_duration: Length of the cycle.
        major_radius: Distance from the torus centre to the tube centre.
        minor_radius: Tube radius.
        tube_fill: Fraction of the tube radius used by the unit plane disc.

    Returns:
        The (x, y, z) position; the ring lies in the XZ plane, y is the ring normal.
    """
    phi = major_angle(time, cycle_duration)
    tube_x, tube_y = _tube_offset(direction, minor_radius, tube_fill)

    center_x = major_radius * math.cos(phi)
    center_z = major_radius * math.sin(phi)

    # Tube-local x is radial (rotated with the ring), tube-local y is the ring normal
    x = center_x + tube_x * math.cos(phi)
    y = tube_y
    z = center_z + tube_x * math.sin(phi)
    return x, y, z


def project_to_cylinder(
    time: float,
    direction: Vector,
    cycle_duration: float = 24.0,
    radius: float = CYLINDER_RADIUS,
    height: float = CYLINDER_HEIGHT,
    tube_fill: float = TUBE_FILL,
) -> tuple[float, float, float]:
    """
    Map (cycle time, direction) to a point inside a cylinder lying along X.

    Time 0 sits at x = -height / 2 and the end of the cycle at +height / 2.
    """
    x = (time / cycle_duration - 0.5) * height
    tube_x, tube_y = _tube_offset(direction, radius, tube_fill)
    return x, tube_y, tube_x


def project(
    target: RenderTarget,
    time: float,
    direction: Vector,
    cycle_duration: float = 24.0,
) -> tuple[float, float, float]:
    """Project a direction for the given render target as a 3D position."""
    match RenderTarget(target):
        case RenderTarget.SPHERE:
            return direction.to_tuple()
        case RenderTarget.PLANE:
            x, z = project_to_plane(direction)
            return x, 0.0, z
        case RenderTarget.TORUS:
            return project_to_torus(time, direction, cycle_duration)
        case RenderTarget.CYLINDER:
            return project_to_cylinder(time, direction, cycle_duration)
