"""Tests for the piecewise heart-rate trajectory builder."""
import numpy as np
import pytest

from synthhr_gen.trajectory import N_SEGMENTS, build_trajectory, trajectory_segments
from synthhr_gen.utils import colon_range, draw_jitter


# ---------------------------------------------------------------------------
# colon_range
# ---------------------------------------------------------------------------

def test_colon_range_ascending_inclusive():
    np.testing.assert_array_equal(colon_range(60, 63), [60, 61, 62, 63])


def test_colon_range_descending():
    np.testing.assert_array_equal(colon_range(150, 147), [150, 149, 148, 147])


def test_colon_range_single_value_when_equal():
    np.testing.assert_array_equal(colon_range(72.5, 72.5), [72.5])


def test_colon_range_keeps_fractional_start():
    out = colon_range(60.4, 63.0)
    np.testing.assert_allclose(out, [60.4, 61.4, 62.4])


def test_draw_jitter_is_inclusive():
    rng = np.random.default_rng(0)
    draws = {draw_jitter(rng, 2, 8) for _ in range(2000)}
    assert draws == set(range(2, 9))


# ---------------------------------------------------------------------------
# build_trajectory
# ---------------------------------------------------------------------------

def test_segment_layout_follows_profile():
    rng = np.random.default_rng(7)
    resting, submax = 58.0, 152.0
    segs = trajectory_segments(resting, submax, rng)

    assert len(segs) == N_SEGMENTS
    # first three segments start at rest
    assert [s[0] for s in segs[:3]] == [resting] * 3
    assert resting + 2 <= segs[0][1] <= resting + 8
    assert resting + 5 <= segs[1][1] <= resting + 15
    assert submax - 15 <= segs[2][1] <= submax - 5
    # fixed dip target
    assert segs[3][1] == submax - 20
    assert submax - 30 <= segs[4][0] <= submax - 10
    assert segs[5][1] == submax
    for seg, (lo, hi) in zip(segs[6:9], [(2, 8), (2, 8), (10, 20)]):
        assert seg[0] == submax
        assert submax - hi <= seg[1] <= submax - lo
    assert submax - 30 <= segs[9][0] <= submax - 10
    assert submax - 50 <= segs[9][1] <= submax - 30


def test_trajectory_is_concatenation_of_segments():
    resting, submax = 61.3, 148.7
    segs = trajectory_segments(resting, submax, np.random.default_rng(3))
    traj = build_trajectory(resting, submax, np.random.default_rng(3))

    expected = sum(len(colon_range(a, b)) for a, b in segs)
    assert traj.ndim == 1
    assert len(traj) == expected
    assert traj[0] == pytest.approx(resting)


def test_trajectory_length_varies_between_calls():
    rng = np.random.default_rng(11)
    lengths = {len(build_trajectory(60.0, 150.0, rng)) for _ in range(25)}
    assert len(lengths) > 1


def test_trajectory_is_seed_deterministic():
    a = build_trajectory(60.0, 150.0, np.random.default_rng(99))
    b = build_trajectory(60.0, 150.0, np.random.default_rng(99))
    np.testing.assert_array_equal(a, b)


def test_trajectory_stays_near_profile_band():
    traj = build_trajectory(60.0, 150.0, np.random.default_rng(5))
    assert traj.min() >= 60.0 - 1e-9
    assert traj.max() <= 150.0 + 1e-9
