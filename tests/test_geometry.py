"""Shape checks for the static render-target geometry."""
import numpy as np
import pytest

from lightcycle.model.geometry import (
    circle_xz,
    cylinder_wireframe,
    plane_grid,
    sphere_scale_lines,
    torus_cross_sections,
    torus_wireframe,
)
from lightcycle.model.projections import TORUS_MAJOR_RADIUS


def test_circle_is_closed():
    circle = circle_xz(2.0, 16, y=0.5)
    assert circle.shape == (17, 3)
    np.testing.assert_allclose(circle[0], circle[-1], atol=1e-12)
    np.testing.assert_allclose(np.hypot(circle[:, 0], circle[:, 2]), 2.0)
    assert np.all(circle[:, 1] == 0.5)


def test_sphere_scale_lines():
    lines = sphere_scale_lines()
    assert len(lines) == 17
    assert all(line.shape == (65, 3) for line in lines)
    # equator last
    np.testing.assert_allclose(lines[-1][:, 1], 0.0)
    for line in lines:
        np.testing.assert_allclose(np.linalg.norm(line, axis=1), 1.0)


def test_plane_grid():
    lines = plane_grid()
    assert len(lines) == 14
    assert lines[-1].shape == (65, 3)
    assert all(np.all(line[:, 1] == 0.0) for line in lines)


def test_torus_wireframe():
    vertices, indices = torus_wireframe()
    assert vertices.shape == (49 * 25, 3)
    assert indices.shape == (48 * 24 * 2, 2)
    assert indices.dtype == np.uint16
    assert indices.max() < len(vertices)


def test_torus_cross_sections_follow_the_ring():
    sections = torus_cross_sections()
    assert len(sections) == 24
    # hour 0 sits at the top of the ring
    centre = sections[0][:-1].mean(axis=0)
    np.testing.assert_allclose(centre, [0.0, 0.0, -TORUS_MAJOR_RADIUS], atol=1e-9)


def test_cylinder_wireframe():
    lines = cylinder_wireframe()
    assert len(lines) == 25 + 8
    assert lines[0][0, 0] == pytest.approx(-1.5)
    assert lines[24][0, 0] == pytest.approx(1.5)
