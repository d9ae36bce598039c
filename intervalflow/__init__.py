"""IntervalFlow — workout interval timer with spoken cues."""

__version__ = "0.1.0"
