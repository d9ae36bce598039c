"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/IntervalFlow/settings.json

The timer engine reads the five interval values once, when a fresh
session starts (``engine = TimerEngine(settings.to_config, ...)``).

Usage::

    settings = load_settings()
    settings.work_seconds = 45
    save_settings(settings)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from loguru import logger

from .timer.config import IntervalConfig


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalFlow"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

_INTERVAL_FIELDS = (
    "work_seconds",
    "total_reps",
    "gap_seconds",
    "break_seconds",
    "reps_per_break",
)


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── intervals ─────────────────────────────────────────────────────
    work_seconds: int = 30
    total_reps: int = 10
    gap_seconds: int = 5
    break_seconds: int = 60
    reps_per_break: int = 5

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    speech_enabled: bool = True

    # ── system ────────────────────────────────────────────────────────
    keep_screen_awake: bool = True

    def to_config(self) -> IntervalConfig:
        """Interval values as a config, clamped into the valid ranges."""
        return IntervalConfig(
            **{name: getattr(self, name) for name in _INTERVAL_FIELDS}
        ).clamped()


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("unreadable settings at {}, using defaults", SETTINGS_PATH)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
