"""
Initial sample generation for endgames.

Both the power-series and Cauchy endgames start from a geometric run of
times t0, t0*f, t0*f**2, ... toward the origin, tracking the path from each
sample to the next.
"""
import logging
from typing import Any, MutableSequence

from .common import SuccessCode
from .config import EndgameSettings
from .tracker import Tracker

logger = logging.getLogger('Endgame')


def compute_initial_samples(tracker: Tracker,
                            settings: EndgameSettings,
                            start_time: Any,
                            start_point: Any,
                            times: MutableSequence[Any],
                            samples: MutableSequence[Any]) -> SuccessCode:
    """
    Fill ``times`` and ``samples`` with ``settings.num_sample_points`` entries.

    Index 0 is ``(start_time, start_point)``; every later time is the previous
    one scaled by ``settings.sample_factor`` and its sample is tracked from the
    previous sample. The first non-success code from the tracker is returned
    as is; samples from that index on are left as None.
    """
    n = settings.num_sample_points
    times.clear()
    samples.clear()
    times.extend([None] * n)
    samples.extend([None] * n)

    times[0] = start_time
    samples[0] = start_point

    for i in range(1, n):
        times[i] = times[i - 1] * settings.sample_factor
        code, point = tracker.track_path(times[i - 1], times[i], samples[i - 1])
        if code is not SuccessCode.SUCCESS:
            logger.warning(f"Tracking to sample {i} (t={times[i]}) failed: {code.value}")
            return code
        samples[i] = point

    logger.debug(f"Computed {n} initial samples from t={start_time} to t={times[-1]}")
    return SuccessCode.SUCCESS
