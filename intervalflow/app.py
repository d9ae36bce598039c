"""Main application window for IntervalFlow.

A thin shell around :class:`TimerEngine`: it shows the engine's
snapshots, forwards button presses as commands, and routes the engine's
events to speech, sound, the keep-awake helper and the history store.
"""

from __future__ import annotations

import os
import sys

from loguru import logger
from PyQt6.QtCore import Qt, QProcess
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QPushButton, QSpinBox, QListWidget, QFrame,
)

from .audio.sounds import SoundManager
from .audio.speech import Announcer
from .database.db import record_session, recent_sessions
from .settings import Settings, load_settings, save_settings
from .timer.config import RANGES
from .timer.clock import Clock
from .timer.engine import TimerEngine
from .timer.estimator import estimate
from .timer.events import LoggingSink, MultiSink
from .timer.qt_bridge import QtClock, QtEventSink
from .timer.state import TERMINAL_PHASES, Phase, SessionReport, TimerSnapshot
from .timer.status import format_time


_SPIN_LABELS: dict[str, tuple[str, str]] = {
    "work_seconds":   ("Work Duration", " sec"),
    "total_reps":     ("Total Repetitions", ""),
    "gap_seconds":    ("Gap Duration", " sec"),
    "break_seconds":  ("Break Duration", " sec"),
    "reps_per_break": ("Reps Before Break", ""),
}

HISTORY_LIMIT = 10


class KeepAwake:
    """Holds the display awake while a session runs (macOS ``caffeinate``)."""

    def __init__(self, parent: QWidget) -> None:
        self._parent = parent
        self._process: QProcess | None = None
        self.enabled = True

    @property
    def active(self) -> bool:
        return self._process is not None

    def set_active(self, active: bool) -> None:
        if active and self.enabled and self._process is None:
            if sys.platform != "darwin":
                logger.debug("keep-awake requested; not supported on {}", sys.platform)
                return
            self._process = QProcess(self._parent)
            self._process.start("caffeinate", ["-d", "-w", str(os.getpid())])
            logger.debug("screen lock disabled")
        elif not active and self._process is not None:
            self._process.kill()
            self._process = None
            logger.debug("screen lock enabled")


class IntervalFlowWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Settings | None = None, clock: Clock | None = None) -> None:
        super().__init__()
        self.setWindowTitle("IntervalFlow")
        self.setMinimumSize(380, 560)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── engine + adapters ─────────────────────────────────────────
        self._clock: Clock = clock or QtClock(self)
        self._sink = QtEventSink(self)
        self._engine = TimerEngine(
            self._settings.to_config,
            MultiSink(self._sink, LoggingSink()),
            self._clock,
        )

        self._sound_manager = SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        self._announcer = Announcer(parent=self)
        self._announcer.set_enabled(self._settings.speech_enabled)

        self._keep_awake = KeepAwake(self)
        self._keep_awake.enabled = self._settings.keep_screen_awake

        self._spins: dict[str, QSpinBox] = {}
        self._build_ui()
        self._connect_signals()
        self._refresh(self._engine.snapshot())
        self._refresh_history()

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    # ══════════════════════════════════════════════════════════════════
    #  BUILD
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(20, 16, 20, 16)
        root.setSpacing(10)

        # ── status display ────────────────────────────────────────────
        self._status_label = QLabel(central)
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._status_label.setStyleSheet("font-size: 16px; font-weight: 600;")

        self._rep_label = QLabel(central)
        self._rep_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._rep_label.setStyleSheet("font-size: 20px;")

        self._time_label = QLabel(central)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 60px; font-weight: 700;")

        self._estimate_label = QLabel(central)
        self._estimate_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._estimate_label.setStyleSheet("color: gray;")

        self._total_label = QLabel(central)
        self._total_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._total_label.setStyleSheet("font-weight: 600; color: gray;")

        for label in (self._status_label, self._rep_label, self._time_label, self._estimate_label):
            root.addWidget(label)
        root.addWidget(self._total_label)

        # ── inputs ────────────────────────────────────────────────────
        self._inputs = QFrame(central)
        form = QFormLayout(self._inputs)
        for name, (text, suffix) in _SPIN_LABELS.items():
            low, high = RANGES[name]
            spin = QSpinBox(self._inputs)
            spin.setRange(low, high)
            spin.setSuffix(suffix)
            spin.setValue(getattr(self._settings, name))
            form.addRow(text, spin)
            self._spins[name] = spin
        self._spins["reps_per_break"].setEnabled(self._settings.break_seconds > 0)
        root.addWidget(self._inputs)

        # ── controls ──────────────────────────────────────────────────
        row = QHBoxLayout()
        self._start_btn = QPushButton("Start", central)
        self._pause_btn = QPushButton("Pause", central)
        self._stop_btn = QPushButton("Stop", central)
        self._reset_btn = QPushButton("Reset", central)
        for btn in (self._start_btn, self._pause_btn, self._stop_btn, self._reset_btn):
            row.addWidget(btn)
        root.addLayout(row)

        # ── history ───────────────────────────────────────────────────
        root.addWidget(QLabel("Recent sessions", central))
        self._history = QListWidget(central)
        root.addWidget(self._history)

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._on_start_clicked)
        self._pause_btn.clicked.connect(self._engine.pause)
        self._stop_btn.clicked.connect(self._engine.stop)
        self._reset_btn.clicked.connect(self._engine.reset)

        for name, spin in self._spins.items():
            spin.valueChanged.connect(lambda value, n=name: self._on_setting_changed(n, value))

        self._sink.announced.connect(self._announcer.say)
        self._sink.speech_cancelled.connect(self._announcer.cancel)
        self._sink.cue_requested.connect(self._sound_manager.play_cue)
        self._sink.keep_awake_changed.connect(self._keep_awake.set_active)
        self._sink.state_changed.connect(self._refresh)
        self._sink.session_ended.connect(self._on_session_ended)

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_start_clicked(self) -> None:
        self._sound_manager.play("click")
        self._engine.start()

    def _on_setting_changed(self, name: str, value: int) -> None:
        setattr(self._settings, name, value)
        save_settings(self._settings)
        if name == "break_seconds":
            # No breaks means no break cadence to pick
            if value == 0:
                self._spins["reps_per_break"].setValue(RANGES["reps_per_break"][0])
            self._spins["reps_per_break"].setEnabled(value > 0)
        if self._engine.phase == Phase.SETUP:
            self._refresh(self._engine.snapshot())

    def _on_session_ended(self, report: SessionReport) -> None:
        if report.completed:
            self._sound_manager.play("session_complete")
        record_session(report)
        self._refresh_history()

    def _refresh(self, snapshot: TimerSnapshot) -> None:
        phase = snapshot.phase
        self._status_label.setText(snapshot.status)
        self._rep_label.setText(f"Rep: {snapshot.current_rep} / {snapshot.total_reps}")
        self._time_label.setText(format_time(snapshot.remaining_seconds))
        self._estimate_label.setText(
            f"Estimated Total: {format_time(estimate(self._engine.config))}"
        )
        if phase in TERMINAL_PHASES:
            self._total_label.setText(
                "Total Session Time (including pause): "
                f"{format_time(self._engine.wall_clock_seconds)}"
            )
        self._total_label.setVisible(phase in TERMINAL_PHASES)

        # Settings are frozen from the first start until reset
        self._inputs.setEnabled(phase == Phase.SETUP)
        self._start_btn.setText("Resume" if phase == Phase.PAUSED else "Start")
        self._start_btn.setEnabled(phase in (Phase.SETUP, Phase.PAUSED))
        self._pause_btn.setEnabled(snapshot.is_active)
        self._stop_btn.setEnabled(snapshot.is_active)

    def _refresh_history(self) -> None:
        self._history.clear()
        for row in recent_sessions(HISTORY_LIMIT):
            outcome = "Completed" if row.was_completed else "Stopped"
            self._history.addItem(
                f"{row.date:%Y-%m-%d %H:%M}  {outcome}  "
                f"{format_time(row.actual_duration)} / {format_time(row.estimated_duration)}"
            )

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # noqa: N802
        self._engine.pause()
        self._keep_awake.set_active(False)
        save_settings(self._settings)
        super().closeEvent(event)
