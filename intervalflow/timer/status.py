"""Human-readable status labels and time formatting."""

from __future__ import annotations

from .state import Phase


_FIXED_LABELS: dict[Phase, str] = {
    Phase.SETUP:     "Setup Timer",
    Phase.IN_GAP:    "Gap Time",
    Phase.ON_BREAK:  "Break Time",
    Phase.PAUSED:    "Paused",
    Phase.STOPPED:   "Stopped",
    Phase.COMPLETED: "Session Complete!",
}


def status_label(phase: Phase, current_rep: int, error: str | None = None) -> str:
    """Label for the current phase.  A rejected start shows its error."""
    if phase == Phase.WORKING:
        return f"Work Interval {current_rep}"
    if phase == Phase.SETUP and error:
        return error
    return _FIXED_LABELS[phase]


def format_time(seconds: int) -> str:
    """``MM:SS`` with zero-padded minutes."""
    m, s = divmod(max(0, seconds), 60)
    return f"{m:02d}:{s:02d}"
