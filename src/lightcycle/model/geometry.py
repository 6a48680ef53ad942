"""
Static geometry of the render targets.

Every function returns plain numpy arrays; the rendering collaborator decides
how to draw them (GPU buffers, matplotlib lines, ...). Polylines are returned
as lists of (N, 3) arrays so each one can be drawn as its own line strip.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from lightcycle.model.projections import (
    TORUS_MAJOR_RADIUS,
    TORUS_MINOR_RADIUS,
    CYLINDER_RADIUS,
    CYLINDER_HEIGHT,
    major_angle,
)

if TYPE_CHECKING:
    import numpy.typing as npt


def circle_xz(radius: float, n_segments: int, y: float = 0.0) -> npt.NDArray[np.float64]:
    """
    Discretize a circle lying in the XZ plane into a closed (N+1, 3) polyline.

    Args:
        radius: Circle radius.
        n_segments: Number of segments to use for discretization.
        y: Height of the circle.
    """
    theta = np.linspace(0.0, 2.0 * np.pi, n_segments + 1)
    return np.c_[radius * np.cos(theta), np.full_like(theta, y), radius * np.sin(theta)]


def sphere_scale_lines(radius: float = 1.0, n_segments: int = 64) -> list[npt.NDArray[np.float64]]:
    """
    Latitude circles (every 18 degrees), 8 meridians and the equator.

    The equator is the last polyline so it can be styled separately.
    """
    lines: list[npt.NDArray[np.float64]] = []

    for lat in range(-4, 5):
        if lat == 0:
            continue
        theta = (lat / 5) * (np.pi / 2)
        lines.append(circle_xz(radius * np.cos(theta), n_segments, y=radius * np.sin(theta)))

    polar = np.linspace(0.0, np.pi, n_segments + 1)
    for lon in range(8):
        phi = (lon / 8) * 2.0 * np.pi
        r = radius * np.sin(polar)
        lines.append(np.c_[r * np.cos(phi), radius * np.cos(polar), r * np.sin(phi)])

    lines.append(circle_xz(radius, n_segments))
    return lines


def plane_grid(radius: float = 1.0, n_segments: int = 32) -> list[npt.NDArray[np.float64]]:
    """Concentric rings at 0.2 steps, 8 radial spokes and the outline circle."""
    lines = [circle_xz(radius * r, n_segments) for r in (0.2, 0.4, 0.6, 0.8, 1.0)]

    spoke = np.linspace(0.0, radius, 21)
    for i in range(8):
        angle = (i / 8) * 2.0 * np.pi
        lines.append(np.c_[spoke * np.cos(angle), np.zeros_like(spoke), spoke * np.sin(angle)])

    lines.append(circle_xz(radius, n_segments * 2))
    return lines


def torus_wireframe(
    major_radius: float = TORUS_MAJOR_RADIUS,
    minor_radius: float = TORUS_MINOR_RADIUS,
    major_segments: int = 48,
    minor_segments: int = 24,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.uint16]]:
    """
    Torus vertices and line-list indices.

    Returns:
        vertices: ((major_segments + 1) * (minor_segments + 1), 3) array.
        indices: (M, 2) array of vertex index pairs, tube rings and ring lines.
    """
    u = np.linspace(0.0, 2.0 * np.pi, major_segments + 1)
    v = np.linspace(0.0, 2.0 * np.pi, minor_segments + 1)
    uu, vv = np.meshgrid(u, v, indexing="ij")

    x = (major_radius + minor_radius * np.cos(vv)) * np.cos(uu)
    y = minor_radius * np.sin(vv)
    z = (major_radius + minor_radius * np.cos(vv)) * np.sin(uu)
    vertices = np.c_[x.ravel(), y.ravel(), z.ravel()]

    indices: list[tuple[int, int]] = []
    for i in range(major_segments):
        for j in range(minor_segments):
            a = i * (minor_segments + 1) + j
            b = a + minor_segments + 1
            c = a + 1
            indices.append((a, c))
            indices.append((a, b))

    return vertices, np.asarray(indices, dtype=np.uint16)


def torus_cross_sections(
    major_radius: float = TORUS_MAJOR_RADIUS,
    minor_radius: float = TORUS_MINOR_RADIUS,
    n_sections: int = 24,
    points_per_circle: int = 32,
    cycle_duration: float = 24.0,
) -> list[npt.NDArray[np.float64]]:
    """One tube cross-section circle per hour, at the ring angle used by the torus projection."""
    r = minor_radius * 0.85
    angle = np.linspace(0.0, 2.0 * np.pi, points_per_circle + 1)
    local_x = r * np.cos(angle)
    local_y = r * np.sin(angle)

    sections = []
    for section in range(n_sections):
        phi = major_angle(section / n_sections * cycle_duration, cycle_duration)
        cx, cz = major_radius * np.cos(phi), major_radius * np.sin(phi)
        sections.append(np.c_[cx + local_x * np.cos(phi), local_y, cz + local_x * np.sin(phi)])
    return sections


def cylinder_wireframe(
    radius: float = CYLINDER_RADIUS,
    height: float = CYLINDER_HEIGHT,
    n_sections: int = 24,
    points_per_circle: int = 32,
) -> list[npt.NDArray[np.float64]]:
    """Rings along the X axis (one per hour plus the closing ring) and 8 axial lines."""
    angle = np.linspace(0.0, 2.0 * np.pi, points_per_circle + 1)
    lines = []
    for x in np.linspace(-height / 2, height / 2, n_sections + 1):
        lines.append(np.c_[np.full_like(angle, x), radius * np.sin(angle), radius * np.cos(angle)])

    ends = np.array([-height / 2, height / 2])
    for i in range(8):
        a = (i / 8) * 2.0 * np.pi
        lines.append(np.c_[ends, np.full(2, radius * np.sin(a)), np.full(2, radius * np.cos(a))])
    return lines
