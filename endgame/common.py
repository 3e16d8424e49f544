"""
Common data structures and enums used across the endgame package.

Contains the tracker status vocabulary (SuccessCode) and the SampleWindow
container that concrete endgame strategies feed to the interpolation engine.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Optional, Tuple

from .errors import SampleWindowError
from .interpolation import hermite_interpolate_and_solve


class SuccessCode(Enum):
    """Status reported by a path tracker for a single tracking call."""
    SUCCESS = "success"
    HIGHER_PRECISION_NECESSARY = "higher_precision_necessary"
    REDUCED_PRECISION = "reduced_precision"
    GOING_TO_INFINITY = "going_to_infinity"
    FAILED_TO_CONVERGE = "failed_to_converge"
    MATRIX_SOLVE_FAILURE = "matrix_solve_failure"
    MAX_NUM_STEPS_TAKEN = "max_num_steps_taken"
    MAX_PRECISION_REACHED = "max_precision_reached"
    MIN_STEP_SIZE_REACHED = "min_step_size_reached"
    FAILURE = "failure"
    SINGULAR_START_POINT = "singular_start_point"
    EXTERNALLY_TERMINATED = "externally_terminated"
    MIN_TRACK_TIME_REACHED = "min_track_time_reached"
    SECURITY_MAX_NORM_REACHED = "security_max_norm_reached"
    CYCLE_NUM_TOO_HIGH = "cycle_num_too_high"

    @property
    def is_success(self) -> bool:
        return self is SuccessCode.SUCCESS


@dataclass
class SampleWindow:
    """Index-aligned (time, sample, derivative) triples, oldest first.

    Derivatives are either recorded for every entry or for none; the
    derivative deque stays empty in the latter case.
    """
    times: Deque[Any] = field(default_factory=deque)
    samples: Deque[Any] = field(default_factory=deque)
    derivatives: Deque[Any] = field(default_factory=deque)

    def __post_init__(self):
        self.times = deque(self.times)
        self.samples = deque(self.samples)
        self.derivatives = deque(self.derivatives)
        if len(self.times) != len(self.samples):
            raise SampleWindowError(
                f"times and samples must be index-aligned, got {len(self.times)} and {len(self.samples)}")
        if self.derivatives and len(self.derivatives) != len(self.times):
            raise SampleWindowError(
                f"derivatives must match times, got {len(self.derivatives)} and {len(self.times)}")

    def __len__(self) -> int:
        return len(self.times)

    @property
    def has_derivatives(self) -> bool:
        return len(self.derivatives) > 0

    @property
    def latest_time(self) -> Any:
        return self.times[-1]

    @property
    def latest_sample(self) -> Any:
        return self.samples[-1]

    def append(self, time: Any, sample: Any, derivative: Optional[Any] = None) -> None:
        """Add a triple at the newest end of the window."""
        if derivative is None:
            if self.has_derivatives:
                raise SampleWindowError("window tracks derivatives; a derivative is required")
        elif len(self.times) and not self.has_derivatives:
            raise SampleWindowError("window does not track derivatives; cannot start mid-window")
        self.times.append(time)
        self.samples.append(sample)
        if derivative is not None:
            self.derivatives.append(derivative)

    def pop_oldest(self) -> Tuple[Any, Any, Optional[Any]]:
        """Remove and return the oldest triple."""
        if not self.times:
            raise SampleWindowError("cannot pop from an empty sample window")
        derivative = self.derivatives.popleft() if self.has_derivatives else None
        return self.times.popleft(), self.samples.popleft(), derivative

    def extrapolate(self, target_time: Any = 0, num_points: Optional[int] = None) -> Any:
        """Hermite-extrapolate the window to ``target_time`` (the origin by default)."""
        if not self.has_derivatives:
            raise SampleWindowError("extrapolation needs derivatives for every sample")
        n = len(self) if num_points is None else num_points
        return hermite_interpolate_and_solve(target_time, n, self.times, self.samples, self.derivatives)
