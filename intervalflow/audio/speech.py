"""Spoken announcements via QTextToSpeech.

Every new phrase interrupts whatever is still being spoken, countdown
digits included.
"""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtTextToSpeech import QTextToSpeech


class SpeechBackend(Protocol):
    def say(self, text: str) -> None: ...

    def stop(self) -> None: ...


class Announcer(QObject):
    """Speaks engine announcements, newest first.

    Signals
    -------
    spoken(phrase: str)
        Emitted for every phrase handed to the backend.
    """

    spoken = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        backend: SpeechBackend | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._backend: SpeechBackend = backend if backend is not None else QTextToSpeech(self)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.cancel()

    def say(self, phrase: str) -> None:
        if not self._enabled:
            return
        self._backend.stop()
        self._backend.say(phrase)
        logger.debug("speaking {!r}", phrase)
        self.spoken.emit(phrase)

    def cancel(self) -> None:
        """Stop speaking immediately."""
        self._backend.stop()
