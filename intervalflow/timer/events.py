"""Side-effect events the engine emits, and the sinks that receive them.

The engine never talks to speakers, speech engines or the OS directly.
It hands small value objects to an :class:`EventSink`, which decides
what to do with them.

Event types
-----------
Announce(phrase)       Speak a phrase.  Interrupts anything still speaking.
PlayCue()              Short sound at the end of a work interval.
CancelSpeech()         Stop any in-flight announcement now.
KeepAwake(enabled)     Ask the platform to keep the screen on (or release it).
StateChanged(snapshot) The engine's state changed.
SessionEnded(report)   A session was stopped or completed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from loguru import logger

from .state import SessionReport, TimerSnapshot


# ── announcement vocabulary ───────────────────────────────────────────────

PHRASE_START = "Start"
PHRASE_BREAK = "Break time"
PHRASE_CHANGE = "Change"
PHRASE_SESSION_COMPLETE = "Session Complete!"
PHRASE_TIMER_COMPLETE = "Timer Complete!"

COUNTDOWN_FROM = 5  # spoken "5" .. "1"


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Announce:
    phrase: str


@dataclass(frozen=True)
class PlayCue:
    pass


@dataclass(frozen=True)
class CancelSpeech:
    pass


@dataclass(frozen=True)
class KeepAwake:
    enabled: bool


@dataclass(frozen=True)
class StateChanged:
    snapshot: TimerSnapshot


@dataclass(frozen=True)
class SessionEnded:
    report: SessionReport


TimerEvent = Union[Announce, PlayCue, CancelSpeech, KeepAwake, StateChanged, SessionEnded]


# ── sinks ─────────────────────────────────────────────────────────────────


class EventSink(Protocol):
    def emit(self, event: TimerEvent) -> None: ...


class LoggingSink:
    """Traces every event at DEBUG."""

    def emit(self, event: TimerEvent) -> None:
        logger.debug("event {}", event)


class RecordingSink:
    """Keeps every event in order.  Handy for headless runs and tests."""

    def __init__(self) -> None:
        self.events: list[TimerEvent] = []

    def emit(self, event: TimerEvent) -> None:
        self.events.append(event)

    @property
    def phrases(self) -> list[str]:
        return [e.phrase for e in self.events if isinstance(e, Announce)]

    @property
    def cue_count(self) -> int:
        return sum(1 for e in self.events if isinstance(e, PlayCue))

    def of_type(self, event_type: type) -> list:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()


class MultiSink:
    """Fans each event out to several sinks, in order."""

    def __init__(self, *sinks: EventSink) -> None:
        self._sinks = list(sinks)

    def add(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def emit(self, event: TimerEvent) -> None:
        for sink in self._sinks:
            sink.emit(event)
