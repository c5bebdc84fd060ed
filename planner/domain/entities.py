from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .recurrence import RecurrencePattern


@dataclass(frozen=True)
class TaskEntity:
    id: int | None
    title: str
    date: str
    time: str
    priority: str
    completed: bool = False
    description: str = ""
    duration: Optional[str] = None
    category: Optional[str] = None
    recurrence: Optional[RecurrencePattern] = None


@dataclass(frozen=True)
class TimeEntryEntity:
    id: int | None
    date: date
    start_time: str
    duration: int
    category: str
    completed: bool


@dataclass(frozen=True)
class ProductivityPattern:
    most_productive_time_of_day: str
    most_productive_day: str
    average_focus_session_length: float
    completion_rate: float
    common_categories: list[tuple[str, int]] = field(default_factory=list)
    total_time_spent: int = 0


@dataclass(frozen=True)
class CompletionStatus:
    completed: int
    pending: int


@dataclass(frozen=True)
class PriorityStatus:
    high: int
    medium: int
    low: int


@dataclass(frozen=True)
class SleepEntryEntity:
    id: int | None
    date: date
    bedtime: str
    wakeup_time: str
    quality: str


@dataclass(frozen=True)
class SleepPattern:
    average_sleep_hours: float
    average_bedtime: str
    average_wakeup_time: str
    sleep_quality_distribution: dict[str, int]
    recommendations: list[str] = field(default_factory=list)
