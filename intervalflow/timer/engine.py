"""Interval timer state machine for IntervalFlow.

Transitions
-----------
SETUP → WORKING                         (start, fresh session)
WORKING | IN_GAP | ON_BREAK → PAUSED    (pause)
PAUSED → {whatever was paused}          (start)
WORKING | IN_GAP | ON_BREAK → STOPPED   (stop)
Any → SETUP                             (reset)

When the countdown reaches zero, in this order:

IN_GAP   → WORKING, next rep, "Start"
WORKING  → COMPLETED if that was the last rep, "Session Complete!"
         → ON_BREAK if the rep is a break boundary, "Break time"
         → IN_GAP if gaps are on, "Change"
         → WORKING, next rep, "Start"
ON_BREAK → WORKING, next rep, "Start"

The engine is single-threaded and synchronous.  It never blocks: the
clock calls :meth:`TimerEngine.on_tick`, commands are plain method calls,
and every side effect goes out through the :class:`EventSink` as a
fire-and-forget event.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Union

from loguru import logger

from .clock import Clock
from .config import IntervalConfig, InvalidConfiguration
from .estimator import estimate
from .events import (
    Announce,
    CancelSpeech,
    COUNTDOWN_FROM,
    EventSink,
    KeepAwake,
    PHRASE_BREAK,
    PHRASE_CHANGE,
    PHRASE_SESSION_COMPLETE,
    PHRASE_START,
    PHRASE_TIMER_COMPLETE,
    PlayCue,
    SessionEnded,
    StateChanged,
    TimerEvent,
)
from .state import (
    ACTIVE_PHASES,
    TERMINAL_PHASES,
    Phase,
    SessionReport,
    TimerSnapshot,
    TimerState,
)
from .status import status_label


ConfigSource = Union[IntervalConfig, Callable[[], IntervalConfig]]


class TimerEngine:
    """Workout interval timer: work reps separated by gaps and breaks.

    *config* is either a fixed :class:`IntervalConfig` or a callable that
    returns one.  It is read once, when a fresh session starts; later
    edits only take effect after :meth:`reset`.

    Not thread-safe.  Drive it from one thread (the Qt event loop, in
    the app).
    """

    def __init__(
        self,
        config: ConfigSource,
        sink: EventSink,
        clock: Clock,
    ) -> None:
        self._config_source = config
        self._sink = sink
        self._clock = clock

        # Frozen at the start of each session.
        self._config: IntervalConfig | None = None
        self._state = TimerState()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def current_rep(self) -> int:
        return self._state.current_rep

    @property
    def remaining_seconds(self) -> int:
        """Seconds left in the current phase."""
        return self._state.remaining_seconds

    @property
    def active_elapsed_seconds(self) -> int:
        """Seconds actually ticked this session (paused time excluded)."""
        return self._state.active_elapsed_seconds

    @property
    def session_start(self) -> datetime | None:
        return self._state.session_start

    @property
    def error(self) -> str | None:
        """Message from the last rejected start, if any."""
        return self._state.error

    @property
    def config(self) -> IntervalConfig:
        """The session's config, or a preview from the source in SETUP."""
        if self._config is not None:
            return self._config
        return self._read_config()

    @property
    def is_active(self) -> bool:
        """True while counting down (not paused, stopped or completed)."""
        return self._state.phase in ACTIVE_PHASES

    @property
    def status(self) -> str:
        return status_label(self._state.phase, self._state.current_rep, self._state.error)

    @property
    def wall_clock_seconds(self) -> int:
        """Real time since the session started, paused time included.

        Frozen at the moment the session stopped or completed.
        """
        start = self._state.session_start
        if start is None:
            return 0
        end = self._state.ended_at or self._clock.now()
        return max(0, int((end - start).total_seconds()))

    def snapshot(self) -> TimerSnapshot:
        s = self._state
        return TimerSnapshot(
            phase=s.phase,
            current_rep=s.current_rep,
            total_reps=self.config.total_reps,
            remaining_seconds=s.remaining_seconds,
            active_elapsed_seconds=s.active_elapsed_seconds,
            session_start=s.session_start,
            status=self.status,
        )

    def report(self) -> SessionReport:
        """Figures for a history record.  The engine never stores them."""
        config = self.config
        return SessionReport(
            config=config,
            estimated_seconds=estimate(config),
            active_seconds=self._state.active_elapsed_seconds,
            wall_clock_seconds=self.wall_clock_seconds,
            reps_reached=self._state.current_rep,
            completed=self._state.phase == Phase.COMPLETED,
            started_at=self._state.session_start,
            ended_at=self._state.ended_at,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start a fresh session, or resume a paused one.

        An invalid config doesn't raise: the engine stays in SETUP and
        :attr:`status` shows why.
        """
        phase = self._state.phase
        if phase in ACTIVE_PHASES:
            return
        if phase in TERMINAL_PHASES:
            logger.debug("start ignored: session is {}", phase.value)
            return

        if phase == Phase.PAUSED:
            self._resume()
        else:
            self._begin_session()

    def pause(self) -> None:
        """Freeze the countdown.  No-op unless running."""
        if not self.is_active:
            return
        self._state.paused_from = self._state.phase
        self._halt()
        self._state.phase = Phase.PAUSED
        logger.debug("paused at rep {} ({}s left)", self._state.current_rep, self._state.remaining_seconds)
        self._notify()

    def stop(self) -> None:
        """End the session early.  Figures are kept for reporting."""
        if not self.is_active:
            return
        self._halt()
        self._state.phase = Phase.STOPPED
        self._state.ended_at = self._clock.now()
        logger.info(
            "session stopped at rep {} after {}s active",
            self._state.current_rep,
            self._state.active_elapsed_seconds,
        )
        self._emit(SessionEnded(self.report()))
        self._notify()

    def reset(self) -> None:
        """Back to SETUP with zeroed counters.  Safe from any phase."""
        self._halt()
        self._state = TimerState()
        self._config = None
        self._notify()

    def on_tick(self) -> None:
        """Advance one second.  Ignored outside the running phases."""
        s = self._state
        if s.phase not in ACTIVE_PHASES:
            logger.debug("tick ignored in {}", s.phase.value)
            return

        if s.remaining_seconds > 0:
            s.remaining_seconds -= 1
            s.active_elapsed_seconds += 1
            if 0 < s.remaining_seconds <= COUNTDOWN_FROM and s.phase != Phase.IN_GAP:
                self._announce(str(s.remaining_seconds))

        if s.remaining_seconds <= 0:
            s.remaining_seconds = 0
            self._finish_phase(self.config)

        self._notify()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — session mechanics
    # ══════════════════════════════════════════════════════════════════

    def _read_config(self) -> IntervalConfig:
        source = self._config_source
        return source() if callable(source) else source

    def _begin_session(self) -> None:
        config = self._read_config()
        try:
            config.validate()
        except InvalidConfiguration as exc:
            logger.warning("cannot start session: {} ({})", exc, config)
            self._state.error = str(exc)
            self._notify()
            return

        self._config = config
        now = self._clock.now()
        self._state = replace(
            TimerState(),
            phase=Phase.WORKING,
            current_rep=1,
            remaining_seconds=config.work_seconds,
            session_start=now,
        )
        logger.info("session started: {} (~{}s)", config, estimate(config))

        self._clock.subscribe(self.on_tick)
        self._emit(KeepAwake(True))
        self._announce(PHRASE_START)
        self._notify()

    def _resume(self) -> None:
        s = self._state
        s.phase = s.paused_from or Phase.WORKING
        s.paused_from = None
        logger.debug("resumed {} at rep {}", s.phase.value, s.current_rep)
        self._clock.subscribe(self.on_tick)
        self._emit(KeepAwake(True))
        self._notify()

    def _halt(self) -> None:
        """Detach from the clock and silence speech."""
        self._clock.unsubscribe()
        self._emit(CancelSpeech())
        self._emit(KeepAwake(False))

    def _finish_phase(self, config: IntervalConfig) -> None:
        s = self._state

        if s.phase == Phase.IN_GAP:
            self._next_rep(config)
            self._announce(PHRASE_START)
            return

        if s.phase == Phase.WORKING:
            self._emit(PlayCue())
            if s.current_rep >= config.total_reps:
                self._complete(PHRASE_SESSION_COMPLETE)
                return

            if config.is_break_boundary(s.current_rep):
                s.phase = Phase.ON_BREAK
                s.remaining_seconds = config.break_seconds
                self._announce(PHRASE_BREAK)
            elif config.gap_seconds > 0:
                s.phase = Phase.IN_GAP
                s.remaining_seconds = config.gap_seconds
                # "Start" waits for the gap to finish.
                self._announce(PHRASE_CHANGE)
            else:
                self._next_rep(config)
                if s.current_rep > 1:
                    self._announce(PHRASE_START)
            return

        # ON_BREAK
        if s.current_rep + 1 > config.total_reps:
            # Unreachable with a valid config: the last rep completes
            # before a break can start.
            self._complete(PHRASE_TIMER_COMPLETE)
            return
        self._next_rep(config)
        self._announce(PHRASE_START)

    def _next_rep(self, config: IntervalConfig) -> None:
        s = self._state
        s.current_rep += 1
        s.remaining_seconds = config.work_seconds
        s.phase = Phase.WORKING

    def _complete(self, phrase: str) -> None:
        self._halt()
        self._state.phase = Phase.COMPLETED
        self._state.paused_from = None
        self._state.ended_at = self._clock.now()
        self._announce(phrase)
        logger.info(
            "session complete: {} reps, {}s active, {}s wall clock",
            self._state.current_rep,
            self._state.active_elapsed_seconds,
            self.wall_clock_seconds,
        )
        self._emit(SessionEnded(self.report()))

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — events
    # ══════════════════════════════════════════════════════════════════

    def _announce(self, phrase: str) -> None:
        self._emit(Announce(phrase))

    def _notify(self) -> None:
        self._emit(StateChanged(self.snapshot()))

    def _emit(self, event: TimerEvent) -> None:
        # A broken speaker or sound device must not stop the countdown.
        try:
            self._sink.emit(event)
        except Exception:
            logger.exception("event sink failed on {}", event)
