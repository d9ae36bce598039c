"""Timer package."""

from .config import IntervalConfig, IntervalFlowError, InvalidConfiguration
from .engine import TimerEngine
from .estimator import estimate
from .state import Phase, SessionReport, TimerSnapshot, TimerState
from .status import format_time, status_label

__all__ = [
    "IntervalConfig",
    "IntervalFlowError",
    "InvalidConfiguration",
    "TimerEngine",
    "estimate",
    "Phase",
    "SessionReport",
    "TimerSnapshot",
    "TimerState",
    "format_time",
    "status_label",
]
