"""Capability an endgame needs from a path tracker."""
from typing import Any, NamedTuple, Protocol, runtime_checkable

from .common import SuccessCode


class TrackingResult(NamedTuple):
    """Outcome of one tracking call; ``point`` is meaningful only on success."""
    code: SuccessCode
    point: Any = None


@runtime_checkable
class Tracker(Protocol):
    """Path tracker as seen by the endgame core.

    Implementations advance a known solution at ``start_time`` to an estimate
    at ``end_time``. Timeouts and aborts are reported through the returned
    code, never raised.
    """

    def track_path(self, start_time: Any, end_time: Any, start_point: Any) -> TrackingResult:
        ...

    def get_system(self) -> Any:
        ...
