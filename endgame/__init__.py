"""
Endgame core for homotopy continuation.

This package contains the machinery every endgame strategy shares: Hermite
extrapolation to the origin, geometric initial sampling through a path
tracker, and the endgame state and settings.
"""

# Shared types
from .common import SuccessCode, SampleWindow

# Errors
from .errors import (
    EndgameError, InsufficientSamplesError, DegenerateSampleTimesError, NumericalBreakdownError,
    PrecisionMismatchError, SampleWindowError, ConfigurationError
)

# Settings
from .config import (
    EndgameSettings, Tolerances, Security, SettingsBundle,
    default_settings, load_settings, save_settings
)

# Tracker contract
from .tracker import Tracker, TrackingResult

# Numerics
from .precision import PrecisionTag, DTYPES, precision_of, as_point, as_time
from .interpolation import hermite_interpolate_and_solve
from .sampling import compute_initial_samples

# Endgame state
from .base import EndgameBase, FinalApproximation

__all__ = [
    # Types
    'SuccessCode', 'PrecisionTag', 'SampleWindow',
    # Errors
    'EndgameError', 'InsufficientSamplesError', 'DegenerateSampleTimesError', 'NumericalBreakdownError',
    'PrecisionMismatchError', 'SampleWindowError', 'ConfigurationError',
    # Settings
    'EndgameSettings', 'Tolerances', 'Security', 'SettingsBundle',
    'default_settings', 'load_settings', 'save_settings',
    # Tracker
    'Tracker', 'TrackingResult',
    # Numerics
    'DTYPES', 'precision_of', 'as_point', 'as_time',
    'hermite_interpolate_and_solve', 'compute_initial_samples',
    # State
    'EndgameBase', 'FinalApproximation'
]
