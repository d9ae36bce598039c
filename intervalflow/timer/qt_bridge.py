"""Qt adapters: a QTimer-backed clock and a signal-emitting event sink.

The engine itself has no Qt dependency.  These two classes plug it into
a running ``QApplication``:

    clock = QtClock(parent=window)
    sink = QtEventSink(parent=window)
    sink.announced.connect(announcer.say)
    engine = TimerEngine(settings.to_config, sink, clock)
"""

from __future__ import annotations

from datetime import datetime

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .clock import TickCallback
from .events import (
    Announce,
    CancelSpeech,
    KeepAwake,
    PlayCue,
    SessionEnded,
    StateChanged,
    TimerEvent,
)

TICK_INTERVAL_MS = 1000


class QtClock(QObject):
    """One tick per second from a ``QTimer`` on the GUI thread."""

    def __init__(self, parent: QObject | None = None, *, interval_ms: int = TICK_INTERVAL_MS) -> None:
        super().__init__(parent)
        self._callback: TickCallback | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    @property
    def is_subscribed(self) -> bool:
        return self._callback is not None

    def subscribe(self, callback: TickCallback) -> None:
        self._callback = callback
        self._qt_timer.start()

    def unsubscribe(self) -> None:
        self._qt_timer.stop()
        self._callback = None

    def now(self) -> datetime:
        return datetime.now()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()


class QtEventSink(QObject):
    """Re-emits engine events as Qt signals.

    Signals
    -------
    announced(phrase: str)
    cue_requested()
    speech_cancelled()
    keep_awake_changed(enabled: bool)
    state_changed(snapshot: TimerSnapshot)
    session_ended(report: SessionReport)
    """

    announced = pyqtSignal(str)
    cue_requested = pyqtSignal()
    speech_cancelled = pyqtSignal()
    keep_awake_changed = pyqtSignal(bool)
    state_changed = pyqtSignal(object)
    session_ended = pyqtSignal(object)

    def emit(self, event: TimerEvent) -> None:
        if isinstance(event, Announce):
            self.announced.emit(event.phrase)
        elif isinstance(event, PlayCue):
            self.cue_requested.emit()
        elif isinstance(event, CancelSpeech):
            self.speech_cancelled.emit()
        elif isinstance(event, KeepAwake):
            self.keep_awake_changed.emit(event.enabled)
        elif isinstance(event, StateChanged):
            self.state_changed.emit(event.snapshot)
        elif isinstance(event, SessionEnded):
            self.session_ended.emit(event.report)
