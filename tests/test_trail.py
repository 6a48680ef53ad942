"""
Test Suite: Trail Buffer
========================
Age and capacity eviction, age annotation and array packing.
"""
import numpy as np
import pytest

from lightcycle.model.trail import TrailBuffer


def push_at(trail: TrailBuffer, *timestamps: float) -> None:
    for ts in timestamps:
        trail.push((ts, 0.0, 0.0), ts)


class TestEviction:
    def test_age_eviction(self):
        trail = TrailBuffer(fade_window=100, max_points=10)
        push_at(trail, 0, 50, 150, 260)

        removed = trail.evict(260)

        assert removed == 3
        assert [p.timestamp for p in trail] == [260]

    def test_point_exactly_at_fade_window_is_kept(self):
        trail = TrailBuffer(fade_window=100, max_points=10)
        push_at(trail, 0, 100)
        trail.evict(100)
        assert [p.timestamp for p in trail] == [0, 100]

    def test_capacity_eviction_keeps_newest_points_in_order(self):
        trail = TrailBuffer(fade_window=1e9, max_points=20)
        push_at(trail, *range(25))

        removed = trail.evict(24)

        assert removed == 5
        assert len(trail) == 20
        assert [p.timestamp for p in trail] == list(range(5, 25))

    def test_overrides_replace_configured_limits(self):
        trail = TrailBuffer(fade_window=1e9, max_points=100)
        push_at(trail, 0, 10, 20, 30)
        trail.evict(30, fade_window=15)
        assert [p.timestamp for p in trail] == [20, 30]
        trail.evict(30, max_points=1)
        assert [p.timestamp for p in trail] == [30]

    def test_evicting_an_empty_trail(self):
        trail = TrailBuffer(fade_window=100, max_points=10)
        assert trail.evict(1000) == 0
        assert trail.newest is None

    @pytest.mark.parametrize("fade_window, max_points", [(0, 10), (-1, 10), (100, 0)])
    def test_invalid_limits_rejected(self, fade_window, max_points):
        with pytest.raises(ValueError):
            TrailBuffer(fade_window=fade_window, max_points=max_points)


class TestSnapshot:
    def test_ages_are_normalized_and_clamped(self):
        trail = TrailBuffer(fade_window=100, max_points=10)
        push_at(trail, 0, 50, 100)

        ages = [s.age for s in trail.snapshot(now=150)]

        assert ages == pytest.approx([1.0, 1.0, 0.5])

    def test_default_reference_is_newest_point(self):
        trail = TrailBuffer(fade_window=100, max_points=10)
        push_at(trail, 0, 50, 100)
        ages = [s.age for s in trail.snapshot()]
        assert ages == pytest.approx([1.0, 0.5, 0.0])

    def test_empty_snapshot(self):
        assert TrailBuffer(fade_window=100, max_points=10).snapshot(0) == []

    def test_to_array_pads_plane_positions(self):
        trail = TrailBuffer(fade_window=100, max_points=10)
        trail.push((0.25, 0.5), 0)
        trail.push((1.0, 2.0, 3.0), 50)

        packed = trail.to_array(now=50)

        assert packed.dtype == np.float32
        np.testing.assert_allclose(packed, [[0.25, 0.0, 0.5, 0.5], [1.0, 2.0, 3.0, 0.0]])

    def test_clear(self):
        trail = TrailBuffer(fade_window=100, max_points=10)
        push_at(trail, 0, 1)
        trail.clear()
        assert len(trail) == 0
