"""Tests for geometric initial sampling."""

import os
import sys
from collections import deque

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from endgame import EndgameSettings, SuccessCode, compute_initial_samples
from path_fixtures import AnalyticTracker, PolynomialPath


@pytest.fixture
def path():
    return PolynomialPath.random(degree=4, dim=2, seed=1)


class TestGeometricTimes:
    """Times contract by the sample factor toward the origin."""

    def test_halving_from_tenth(self, path):
        tracker = AnalyticTracker(path.value)
        settings = EndgameSettings(num_sample_points=4, sample_factor=0.5)
        start_point = path.value(0.1)
        times, samples = [], []

        code = compute_initial_samples(tracker, settings, 0.1, start_point, times, samples)

        assert code is SuccessCode.SUCCESS
        assert times == [0.1, 0.05, 0.025, 0.0125]
        assert samples[0] is start_point
        assert len(samples) == 4

    def test_samples_follow_path(self, path):
        tracker = AnalyticTracker(path.value)
        settings = EndgameSettings(num_sample_points=5, sample_factor=0.3)
        times, samples = [], []

        compute_initial_samples(tracker, settings, 0.2 + 0.1j, path.value(0.2 + 0.1j), times, samples)

        for t, x in zip(times, samples):
            np.testing.assert_allclose(x, path.value(t))
        moduli = [abs(t) for t in times]
        assert all(a > b for a, b in zip(moduli, moduli[1:]))

    def test_tracking_is_chained(self, path):
        tracker = AnalyticTracker(path.value)
        settings = EndgameSettings(num_sample_points=3, sample_factor=0.5)
        times, samples = [], []

        compute_initial_samples(tracker, settings, 0.1, path.value(0.1), times, samples)

        assert len(tracker.calls) == 2
        for i, (start_time, end_time, start_point) in enumerate(tracker.calls):
            assert start_time == times[i]
            assert end_time == times[i + 1]
            assert start_point is samples[i]

    def test_outputs_are_resized(self, path):
        tracker = AnalyticTracker(path.value)
        settings = EndgameSettings(num_sample_points=2)
        times = deque([9.0] * 6)
        samples = deque([None] * 6)

        code = compute_initial_samples(tracker, settings, 0.1, path.value(0.1), times, samples)

        assert code is SuccessCode.SUCCESS
        assert list(times) == [0.1, 0.05]
        assert len(samples) == 2

    def test_extended_precision_times(self, path):
        extended = PolynomialPath(path.coeffs, dtype=np.clongdouble)
        tracker = AnalyticTracker(extended.value)
        settings = EndgameSettings(num_sample_points=3)
        start = np.clongdouble(0.1)
        times, samples = [], []

        compute_initial_samples(tracker, settings, start, extended.value(start), times, samples)

        assert all(isinstance(t, np.clongdouble) for t in times)
        assert all(x.dtype == np.clongdouble for x in samples)


class TestTrackerFailure:
    """A failing tracker stops the bootstrap and its code is returned verbatim."""

    def test_failure_on_third_call(self, path):
        tracker = AnalyticTracker(path.value, fail_on_call=3, failure=SuccessCode.MIN_STEP_SIZE_REACHED)
        settings = EndgameSettings(num_sample_points=5)
        times, samples = [], []

        code = compute_initial_samples(tracker, settings, 0.1, path.value(0.1), times, samples)

        assert code is SuccessCode.MIN_STEP_SIZE_REACHED
        assert len(tracker.calls) == 3
        for i in range(3):
            np.testing.assert_allclose(samples[i], path.value(times[i]))
        assert samples[3] is None
        assert samples[4] is None

    def test_failure_on_first_call(self, path):
        tracker = AnalyticTracker(path.value, fail_on_call=1, failure=SuccessCode.GOING_TO_INFINITY)
        settings = EndgameSettings(num_sample_points=3)
        times, samples = [], []

        code = compute_initial_samples(tracker, settings, 0.1, path.value(0.1), times, samples)

        assert code is SuccessCode.GOING_TO_INFINITY
        assert not code.is_success
        assert samples[1:] == [None, None]

    def test_failure_is_logged(self, path, caplog):
        tracker = AnalyticTracker(path.value, fail_on_call=2)
        settings = EndgameSettings(num_sample_points=3)

        with caplog.at_level("WARNING", logger="Endgame"):
            compute_initial_samples(tracker, settings, 0.1, path.value(0.1), [], [])

        assert "sample 2" in caplog.text
        assert "failure" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__])
