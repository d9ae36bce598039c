"""Timer phases and the state the engine owns.

States
------
SETUP       Nothing running — waiting for the first start.
WORKING     Work interval counting down.
IN_GAP      Short gap between reps counting down (silent countdown).
ON_BREAK    Long break counting down.
PAUSED      Frozen (remembers which of the three above it came from).
STOPPED     Ended early by the user.  Terminal until reset.
COMPLETED   All reps done.  Terminal until reset.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .config import IntervalConfig


class Phase(Enum):
    SETUP = "setup"
    WORKING = "working"
    IN_GAP = "in_gap"
    ON_BREAK = "on_break"
    PAUSED = "paused"
    STOPPED = "stopped"
    COMPLETED = "completed"


# Phases driven by clock ticks.
ACTIVE_PHASES = frozenset({Phase.WORKING, Phase.IN_GAP, Phase.ON_BREAK})

TERMINAL_PHASES = frozenset({Phase.STOPPED, Phase.COMPLETED})


@dataclass
class TimerState:
    """Mutable session state.  Only :class:`TimerEngine` writes to it."""

    phase: Phase = Phase.SETUP
    current_rep: int = 0
    remaining_seconds: int = 0
    active_elapsed_seconds: int = 0
    session_start: datetime | None = None

    # ── bookkeeping ───────────────────────────────────────────────────
    paused_from: Phase | None = None
    ended_at: datetime | None = None
    error: str | None = None


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the engine handed to observers."""

    phase: Phase
    current_rep: int
    total_reps: int
    remaining_seconds: int
    active_elapsed_seconds: int
    session_start: datetime | None
    status: str

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES


@dataclass(frozen=True)
class SessionReport:
    """Everything a history store needs once a session has ended.

    ``wall_clock_seconds`` includes paused time; ``active_seconds`` does
    not.
    """

    config: IntervalConfig
    estimated_seconds: int
    active_seconds: int
    wall_clock_seconds: int
    reps_reached: int
    completed: bool
    started_at: datetime | None
    ended_at: datetime | None
