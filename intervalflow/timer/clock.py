"""Tick sources for the engine.

A clock delivers one tick per second to a single subscriber and tells
the wall-clock time.  :class:`ManualClock` only ticks when told to, which
makes whole sessions reproducible without waiting.  The Qt-backed clock
lives in :mod:`intervalflow.timer.qt_bridge`.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Protocol


TickCallback = Callable[[], None]


class Clock(Protocol):
    def subscribe(self, callback: TickCallback) -> None: ...

    def unsubscribe(self) -> None: ...

    def now(self) -> datetime: ...

    @property
    def is_subscribed(self) -> bool: ...


class ManualClock:
    """Deterministic clock driven by :meth:`advance`.

    Each advanced second moves ``now()`` forward by one second, and
    delivers a tick if something is subscribed.  :meth:`wait` moves time
    without ticking (e.g. time spent paused).
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2025, 1, 1, 9, 0, 0)
        self._callback: TickCallback | None = None

    @property
    def is_subscribed(self) -> bool:
        return self._callback is not None

    def subscribe(self, callback: TickCallback) -> None:
        self._callback = callback

    def unsubscribe(self) -> None:
        self._callback = None

    def now(self) -> datetime:
        return self._now

    def wait(self, seconds: int) -> None:
        self._now += timedelta(seconds=seconds)

    def advance(self, seconds: int = 1) -> int:
        """Advance *seconds* ticks.  Returns how many were delivered.

        Stops delivering as soon as the subscriber detaches, but time
        still moves for the full amount.
        """
        delivered = 0
        for _ in range(seconds):
            self._now += timedelta(seconds=1)
            if self._callback is not None:
                self._callback()
                delivered += 1
        return delivered
