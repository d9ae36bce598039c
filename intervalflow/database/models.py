"""SQLAlchemy ORM models for IntervalFlow."""

from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class TimerSession(Base):
    """One finished (completed or stopped) workout session."""

    __tablename__ = "timer_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, default=datetime.now)  # when the session ended
    estimated_duration = Column(Integer, nullable=False, default=0)  # seconds
    actual_duration = Column(Integer, nullable=False, default=0)     # active seconds
    was_completed = Column(Boolean, nullable=False, default=False)

    # Settings the session ran with
    work_duration_setting = Column(Integer, nullable=False)
    total_reps_setting = Column(Integer, nullable=False)
    gap_duration_setting = Column(Integer, nullable=False)
    break_duration_setting = Column(Integer, nullable=False)
    reps_per_break_setting = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<TimerSession id={self.id} actual={self.actual_duration}s "
            f"completed={self.was_completed}>"
        )
