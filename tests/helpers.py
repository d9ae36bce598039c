"""Shared test helpers for IntervalFlow."""

from intervalflow.timer.clock import ManualClock
from intervalflow.timer.engine import TimerEngine
from intervalflow.timer.events import RecordingSink, StateChanged


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def finish_phase(engine: TimerEngine, clock: ManualClock) -> None:
    """Tick until the current phase hands over to the next one."""
    phase, rep = engine.phase, engine.current_rep
    clock.advance(engine.remaining_seconds)
    assert (engine.phase, engine.current_rep) != (phase, rep)


def run_to_end(engine: TimerEngine, clock: ManualClock, limit: int = 100_000) -> int:
    """Tick until the clock is released.  Returns ticks delivered."""
    ticks = 0
    while clock.is_subscribed and ticks < limit:
        ticks += clock.advance()
    return ticks


def phases_seen(sink: RecordingSink) -> list:
    """Distinct consecutive (phase, rep) pairs from StateChanged events."""
    seen: list = []
    for event in sink.of_type(StateChanged):
        key = (event.snapshot.phase, event.snapshot.current_rep)
        if not seen or seen[-1] != key:
            seen.append(key)
    return seen
