"""Database package."""

from .db import get_session, init_db, record_session, recent_sessions
from .models import TimerSession

__all__ = ["get_session", "init_db", "record_session", "recent_sessions", "TimerSession"]
