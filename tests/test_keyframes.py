"""
Test Suite: Keyframe Timeline
=============================
Construction, validation, loop closure and cyclic bracketing.
"""
import numpy as np
import pytest

from lightcycle.model.interpolation import interpolate_direction
from lightcycle.model.keyframes import Keyframe, Timeline, bracket_keyframes
from lightcycle.model.vector import Vector


class TestTimelineBuild:
    def test_build_from_angle_mappings(self):
        timeline = Timeline.build({"12": {"x": -0.3, "y": -1.9}, "0": {"x": -0.5, "y": 1.9}})
        assert [kf.time for kf in timeline.keyframes] == [0.0, 12.0]
        assert timeline.keyframes[0].direction == Vector.from_angles(-0.5, 1.9)

    def test_build_from_angle_pairs(self):
        timeline = Timeline.build({6: (-1.0, 0.0), 3.5: (-0.2, -0.4)})
        assert [kf.time for kf in timeline.keyframes] == [3.5, 6.0]

    def test_zero_keyframes_rejected(self):
        with pytest.raises(ValueError, match="zero keyframes"):
            Timeline.build({})

    def test_zero_cycle_duration_rejected(self):
        with pytest.raises(ValueError, match="Cycle duration"):
            Timeline.build({0: (-0.5, 0.0)}, cycle_duration=0.0)

    def test_time_outside_cycle_rejected(self):
        with pytest.raises(ValueError, match="outside the cyclic domain"):
            Timeline.build({24: (-0.5, 0.0)})

    def test_duplicate_times_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            Timeline.build({"6": (-0.5, 0.0), "6.0": (-0.4, 0.0)})

    def test_non_numeric_key_rejected(self):
        with pytest.raises(ValueError, match="numeric"):
            Timeline.build({"noon": (-0.5, 0.0)})

    def test_malformed_angles_rejected(self):
        with pytest.raises(ValueError):
            Timeline.build({0: {"x": -0.5}})

    def test_closure_repeats_earliest_direction(self, timeline_0_6_18):
        closure = timeline_0_6_18.closure
        assert closure.time == pytest.approx(24.0)
        assert closure.direction == timeline_0_6_18.keyframes[0].direction
        assert len(timeline_0_6_18) == 3

    def test_from_directions_normalizes(self):
        timeline = Timeline.from_directions([(0.0, Vector(0, 2, 0))], cycle_duration=20.0)
        assert timeline.keyframes[0].direction == Vector(0, 1, 0)
        assert timeline.closure.time == pytest.approx(20.0)


class TestBracket:
    def test_inside_a_span(self, timeline_0_6_18):
        b = timeline_0_6_18.bracket(3.0)
        assert (b.prev.time, b.next.time) == (0.0, 6.0)
        assert b.local_t == pytest.approx(0.5)
        assert not b.wrapped

    def test_last_span_wraps_to_first_direction(self, timeline_0_6_18):
        b = timeline_0_6_18.bracket(23.9)
        assert b.prev.time == 18.0
        assert b.next.direction == timeline_0_6_18.keyframes[0].direction
        assert b.wrapped
        assert b.local_t == pytest.approx(5.9 / 6.0)

    def test_exact_keyframe_time_is_prev(self, timeline_0_6_18):
        b = timeline_0_6_18.bracket(6.0)
        assert (b.prev.time, b.next.time) == (6.0, 18.0)
        assert b.local_t == 0.0

    def test_cycle_start(self, timeline_0_6_18):
        b = timeline_0_6_18.bracket(0.0)
        assert (b.prev.time, b.next.time) == (0.0, 6.0)
        assert b.local_t == 0.0

    def test_query_is_reduced_modulo_cycle(self, timeline_0_6_18):
        assert timeline_0_6_18.bracket(27.0) == timeline_0_6_18.bracket(3.0)

    def test_before_first_keyframe_wraps_from_last(self):
        timeline = Timeline.build({6: (-0.5, 0.0), 18: (-1.0, -1.0)})
        b = bracket_keyframes(timeline, 0.0)
        assert (b.prev.time, b.next.time) == (18.0, 6.0)
        assert b.wrapped
        # span 18 -> 6 is 12 h, 0 h is 6 h into it
        assert b.local_t == pytest.approx(0.5)

    def test_local_t_is_monotonic_across_the_wrap(self):
        timeline = Timeline.build({6: (-0.5, 0.0), 18: (-1.0, -1.0)})
        values = [timeline.bracket(t).local_t for t in (19.0, 22.0, 23.99, 0.0, 3.0, 5.99)]
        assert values == sorted(values)

    def test_single_keyframe(self):
        timeline = Timeline.build({12: (-0.5, 0.0)})
        expected = Vector.from_angles(-0.5, 0.0)
        for t in (0.0, 11.0, 12.0, 23.5):
            np.testing.assert_allclose(timeline.direction_at(t).to_array(), expected.to_array(), atol=1e-12)


class TestDirectionAt:
    def test_continuous_across_cycle_boundary(self):
        timeline = Timeline.build({6: (-0.5, 0.0), 18: (-1.0, -1.0)})
        before = timeline.direction_at(24.0 - 1e-9)
        after = timeline.direction_at(0.0)
        np.testing.assert_allclose(before.to_array(), after.to_array(), atol=1e-6)

    def test_two_keyframe_segment_end_to_end(self):
        a = Vector.from_angles(-0.5, 1.9)
        b = Vector.from_angles(-0.3, -1.9)
        timeline = Timeline.build({0: (-0.5, 1.9), 12: (-0.3, -1.9)}, cycle_duration=24.0)

        np.testing.assert_allclose(timeline.direction_at(0.0).to_array(), a.to_array(), atol=1e-12)
        np.testing.assert_allclose(timeline.direction_at(12.0).to_array(), b.to_array(), atol=1e-12)

        halfway_back = timeline.direction_at(18.0)
        assert halfway_back.magnitude == pytest.approx(1.0)
        expected = interpolate_direction(b, a, 0.5)
        np.testing.assert_allclose(halfway_back.to_array(), expected.to_array(), atol=1e-12)

    def test_repr_of_partially_built_timeline(self):
        timeline = Timeline.__new__(Timeline)
        assert repr(timeline) == "Timeline(0 keyframes, cycle_duration=None)"

    def test_repr(self, timeline_0_6_18):
        assert repr(timeline_0_6_18) == "Timeline(3 keyframes, cycle_duration=24.0)"

    def test_keyframe_is_immutable(self):
        kf = Keyframe(0.0, Vector(1, 0, 0))
        with pytest.raises(AttributeError):
            kf.time = 1.0
