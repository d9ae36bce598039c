"""Interval configuration — the five values a workout session runs on.

Ranges
------
work_seconds     1 – 300   length of one work interval
total_reps       1 – 100   number of work intervals in a session
gap_seconds      0 – 60    short pause between reps (0 = none)
break_seconds    0 – 300   long rest every ``reps_per_break`` reps (0 = none)
reps_per_break   1 – 100   how many reps between long breaks

A config is frozen for the lifetime of a session.  Editing values means
building a new one and resetting the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


# ── errors ────────────────────────────────────────────────────────────────


class IntervalFlowError(Exception):
    """Base class for IntervalFlow errors."""


class InvalidConfiguration(IntervalFlowError, ValueError):
    """A session cannot start with the given configuration."""


INVALID_SETTINGS_MESSAGE = "Invalid settings (Reps/Duration > 0)"


# ── ranges ────────────────────────────────────────────────────────────────

WORK_RANGE = (1, 300)
REPS_RANGE = (1, 100)
GAP_RANGE = (0, 60)
BREAK_RANGE = (0, 300)
REPS_PER_BREAK_RANGE = (1, 100)

RANGES: dict[str, tuple[int, int]] = {
    "work_seconds": WORK_RANGE,
    "total_reps": REPS_RANGE,
    "gap_seconds": GAP_RANGE,
    "break_seconds": BREAK_RANGE,
    "reps_per_break": REPS_PER_BREAK_RANGE,
}


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(int(value), high))


@dataclass(frozen=True)
class IntervalConfig:
    """Immutable per-session timer settings (all durations in seconds)."""

    work_seconds: int = 30
    total_reps: int = 10
    gap_seconds: int = 5
    break_seconds: int = 60
    reps_per_break: int = 5

    @property
    def breaks_enabled(self) -> bool:
        """A zero-length break disables breaks whatever ``reps_per_break`` says."""
        return self.break_seconds > 0 and self.reps_per_break > 0

    def is_break_boundary(self, rep: int) -> bool:
        """True when finishing *rep* is followed by a long break."""
        return self.breaks_enabled and rep % self.reps_per_break == 0

    def validate(self) -> None:
        """Raise :class:`InvalidConfiguration` if a session can't start."""
        if self.total_reps <= 0 or self.work_seconds <= 0:
            raise InvalidConfiguration(INVALID_SETTINGS_MESSAGE)

    def clamped(self) -> IntervalConfig:
        """Copy with every field forced into its valid range."""
        return replace(
            self,
            **{name: _clamp(getattr(self, name), bounds) for name, bounds in RANGES.items()},
        )
