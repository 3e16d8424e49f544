"""
Exception taxonomy for the endgame core.

Tracking failures are not exceptions: they travel as SuccessCode values.
Everything here is a fault of the call itself.
"""
from typing import Tuple


class EndgameError(Exception):
    """Base class for all endgame core errors."""


class InsufficientSamplesError(EndgameError, ValueError):
    """Fewer times, samples or derivatives than the requested point count."""


class DegenerateSampleTimesError(EndgameError, ZeroDivisionError):
    """Two sample times coincide (or nearly so) where the difference table divides by them."""

    def __init__(self, indices: Tuple[int, int], difference):
        self.indices = indices
        self.difference = difference
        super().__init__(
            f"sample times {indices[0]} and {indices[1]} are not separated "
            f"(difference {difference!r})")


class NumericalBreakdownError(EndgameError, FloatingPointError):
    """The difference table overflowed; samples are too noisy for their time spacing."""

    def __init__(self, order: int):
        self.order = order
        super().__init__(
            f"divided difference of order {order} is not finite; "
            "sample times are too close for the precision of the samples")


class PrecisionMismatchError(EndgameError, LookupError):
    """The requested precision slot of the final approximation was never populated."""


class SampleWindowError(EndgameError, ValueError):
    """Times, samples and derivatives of a window are not index-aligned."""


class ConfigurationError(EndgameError, ValueError):
    """Settings file content failed validation."""
