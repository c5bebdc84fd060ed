from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text

from .db import Base


def utcnow() -> datetime:
    return datetime.utcnow()


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(String(10), nullable=False, index=True)
    time = Column(String(20), nullable=False, default="")
    duration = Column(String(20), nullable=True)
    priority = Column(String(10), nullable=False, default="medium")
    category = Column(String(20), nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    recurrence_type = Column(String(20), nullable=True)
    recurrence_interval = Column(Integer, nullable=False, default=1)
    recurrence_days_of_week = Column(String(20), nullable=True)
    recurrence_end_date = Column(String(10), nullable=True)
    recurrence_custom = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class TimeEntryModel(Base):
    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    duration = Column(Integer, nullable=False, default=0)
    category = Column(String(50), nullable=False, default="")
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class SleepEntryModel(Base):
    __tablename__ = "sleep_entries"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    bedtime = Column(String(5), nullable=False)
    wakeup_time = Column(String(5), nullable=False)
    quality = Column(String(10), nullable=False, default="good")
    created_at = Column(DateTime, nullable=False, default=utcnow)
