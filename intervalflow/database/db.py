"""Database connection, session management and history queries."""

from pathlib import Path
from contextlib import contextmanager
from datetime import datetime

from loguru import logger
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from ..timer.state import SessionReport
from .models import Base, TimerSession

# ── paths ────────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "IntervalFlow"
DB_PATH = APP_SUPPORT_DIR / "intervalflow.db"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _get_engine():
    global _engine
    if _engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        _engine = create_engine(
            f"sqlite:///{DB_PATH}",
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database instead of the real one on disk."""
    global _engine, _SessionFactory
    _SessionFactory = None
    _engine = create_engine(
        url,
        connect_args={"check_same_thread": False},
        echo=False,
    )


def init_db() -> None:
    """Create all tables."""
    Base.metadata.create_all(_get_engine())


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def record_session(report: SessionReport) -> TimerSession:
    """Store a finished session and return the saved row."""
    config = report.config
    record = TimerSession(
        date=report.ended_at or datetime.now(),
        estimated_duration=report.estimated_seconds,
        actual_duration=report.active_seconds,
        was_completed=report.completed,
        work_duration_setting=config.work_seconds,
        total_reps_setting=config.total_reps,
        gap_duration_setting=config.gap_seconds,
        break_duration_setting=config.break_seconds,
        reps_per_break_setting=config.reps_per_break,
    )
    with get_session() as db:
        db.add(record)
        db.flush()
    logger.info(
        "saved session #{} ({}s active, completed={})",
        record.id, record.actual_duration, record.was_completed,
    )
    return record


def recent_sessions(limit: int = 20) -> list[TimerSession]:
    """Most recent sessions first."""
    with get_session() as db:
        rows = db.scalars(
            select(TimerSession)
            .order_by(TimerSession.date.desc(), TimerSession.id.desc())
            .limit(limit)
        ).all()
        return list(rows)
