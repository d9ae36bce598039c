"""Estimated session length from a config."""

from __future__ import annotations

from .config import IntervalConfig


def estimate(config: IntervalConfig) -> int:
    """Total seconds a session will take if run without pauses.

    Every rep contributes its work interval.  Each boundary between two
    reps adds either a long break or a gap — never both, break first.
    Nothing follows the final rep.
    """
    if config.total_reps <= 0 or config.work_seconds <= 0:
        return 0

    total = 0
    for rep in range(1, config.total_reps + 1):
        total += config.work_seconds
        if rep == config.total_reps:
            break
        if config.is_break_boundary(rep):
            total += config.break_seconds
        elif config.gap_seconds > 0:
            total += config.gap_seconds
    return total
