"""
Parent class for all endgames.

EndgameBase holds what every concrete endgame shares: the cycle number, the
final approximation in each precision regime, the three settings bundles and
the tracker used to compute samples. Strategy logic (when to stop, how to
estimate the cycle number) lives in the subclasses.
"""
import logging
import numbers
from dataclasses import dataclass
from typing import Any, Dict, MutableSequence, Optional

import numpy as np
import torch

from .common import SuccessCode
from .config import EndgameSettings, Security, SettingsBundle, Tolerances, coerce_settings
from .errors import PrecisionMismatchError
from .interpolation import hermite_interpolate_and_solve
from .precision import DTYPES, PrecisionTag, precision_of
from .sampling import compute_initial_samples
from .tracker import Tracker

logger = logging.getLogger('Endgame')


@dataclass(frozen=True)
class FinalApproximation:
    """A final approximation at the origin, tagged with its precision."""
    precision: PrecisionTag
    value: Any


class EndgameBase:
    """Shared state and primitives of the power-series and Cauchy endgames."""

    def __init__(self,
                 tracker: Tracker,
                 settings: Optional[SettingsBundle] = None,
                 *,
                 endgame: Optional[EndgameSettings] = None,
                 security: Optional[Security] = None,
                 tolerances: Optional[Tolerances] = None):
        keywords = (endgame, security, tolerances)
        if settings is not None:
            if any(k is not None for k in keywords):
                raise TypeError("pass either a settings triple or keyword bundles, not both")
            bundle = SettingsBundle.from_triple(settings)
        else:
            bundle = SettingsBundle.build(endgame=endgame, security=security, tolerances=tolerances)

        self._tracker = tracker
        self._endgame_settings = bundle.endgame
        self._security = bundle.security
        self._tolerances = bundle.tolerances

        self._cycle_number = 0
        self._final_approximations: Dict[PrecisionTag, FinalApproximation] = {}
        self._latest_precision: Optional[PrecisionTag] = None
        logger.info(f"{type(self).__name__} initialized with {bundle.endgame.num_sample_points} sample points, "
                    f"sample factor {bundle.endgame.sample_factor}")

    # cycle number

    @property
    def cycle_number(self) -> int:
        return self._cycle_number

    @cycle_number.setter
    def cycle_number(self, value: int):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError(f"cycle number must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"cycle number must be non-negative, got {value}")
        self._cycle_number = int(value)

    def increment_cycle_number(self, delta: int) -> int:
        self.cycle_number = self._cycle_number + delta
        return self._cycle_number

    # settings

    @property
    def endgame_settings(self) -> EndgameSettings:
        return self._endgame_settings

    @endgame_settings.setter
    def endgame_settings(self, value):
        self._endgame_settings = coerce_settings(value, EndgameSettings)

    @property
    def tolerances(self) -> Tolerances:
        return self._tolerances

    @tolerances.setter
    def tolerances(self, value):
        self._tolerances = coerce_settings(value, Tolerances)

    @property
    def security_settings(self) -> Security:
        return self._security

    @security_settings.setter
    def security_settings(self, value):
        self._security = coerce_settings(value, Security)

    @property
    def settings(self) -> SettingsBundle:
        return SettingsBundle(self._endgame_settings, self._security, self._tolerances)

    # tracker

    @property
    def tracker(self) -> Tracker:
        return self._tracker

    def get_system(self) -> Any:
        """The polynomial system the tracker follows."""
        return self._tracker.get_system()

    # final approximation

    @property
    def final_approximation_precision(self) -> Optional[PrecisionTag]:
        """Precision of the most recently stored final approximation."""
        return self._latest_precision

    def final_approximation(self, precision: PrecisionTag = PrecisionTag.FIXED) -> Any:
        try:
            return self._final_approximations[precision].value
        except KeyError:
            raise PrecisionMismatchError(
                f"no {precision.value}-precision final approximation has been computed") from None

    def set_final_approximation(self, value: Any, precision: Optional[PrecisionTag] = None) -> FinalApproximation:
        """Store ``value`` in the slot of its precision (inferred unless given)."""
        if precision is None:
            precision = precision_of(value)
        if isinstance(value, torch.Tensor):
            if precision is PrecisionTag.FIXED:
                value = value.detach().to(torch.complex128, copy=True)
            else:
                value = np.array(value.detach().cpu().numpy(), dtype=DTYPES[precision])
        else:
            value = np.array(value, dtype=DTYPES[precision])
        tagged = FinalApproximation(precision, value)
        self._final_approximations[precision] = tagged
        self._latest_precision = precision
        return tagged

    def reset(self):
        """Forget per-path state so the endgame can be reused on another path."""
        self._cycle_number = 0
        self._final_approximations.clear()
        self._latest_precision = None

    # shared primitives

    def compute_initial_samples(self,
                                start_time: Any,
                                start_point: Any,
                                times: MutableSequence[Any],
                                samples: MutableSequence[Any]) -> SuccessCode:
        """Geometric initial samples toward the origin, see sampling.compute_initial_samples."""
        return compute_initial_samples(self._tracker, self._endgame_settings,
                                       start_time, start_point, times, samples)

    def interpolate_and_solve(self, target_time, times, samples, derivatives, num_points: Optional[int] = None):
        """Hermite extrapolation using ``num_sample_points`` samples unless told otherwise."""
        n = self._endgame_settings.num_sample_points if num_points is None else num_points
        return hermite_interpolate_and_solve(target_time, n, times, samples, derivatives)
