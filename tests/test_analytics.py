from __future__ import annotations

from datetime import date

import pytest

from planner.domain.entities import SleepEntryEntity, TaskEntity, TimeEntryEntity
from planner.infra.repository import SleepEntryRepository, TimeEntryRepository
from planner.services.analytics import (
    AnalyticsService,
    completion_status,
    format_clock,
    priority_status,
    productivity_patterns,
    sleep_hours,
    sleep_patterns,
    time_of_day,
)


def entry(day: date, start: str, minutes: int, category: str = "work", completed: bool = True) -> TimeEntryEntity:
    return TimeEntryEntity(
        id=None, date=day, start_time=start, duration=minutes, category=category, completed=completed
    )


def task(priority: str, completed: bool) -> TaskEntity:
    return TaskEntity(id=None, title="t", date="2024-01-01", time="", priority=priority, completed=completed)


def test_defaults_without_entries() -> None:
    patterns = productivity_patterns([], default_session_minutes=30)
    assert patterns.most_productive_time_of_day == "morning"
    assert patterns.most_productive_day == "Monday"
    assert patterns.average_focus_session_length == 30
    assert patterns.completion_rate == 0
    assert patterns.common_categories == []
    assert patterns.total_time_spent == 0


@pytest.mark.parametrize(
    "start,expected",
    [("04:59", "evening"), ("05:00", "morning"), ("11:59", "morning"), ("12:00", "afternoon"), ("17:00", "evening")],
)
def test_time_of_day_buckets(start: str, expected: str) -> None:
    assert time_of_day(start) == expected


def test_patterns_from_entries() -> None:
    wednesday = date(2024, 1, 3)
    entries = [
        entry(wednesday, "14:00", 50, "writing"),
        entry(wednesday, "15:30", 25, "writing", completed=False),
        entry(date(2024, 1, 6), "09:00", 25, "reading"),
        entry(date(2024, 1, 7), "21:00", 20, "exercise", completed=False),
    ]

    patterns = productivity_patterns(entries)

    assert patterns.most_productive_time_of_day == "afternoon"
    assert patterns.most_productive_day == "Wednesday"
    assert patterns.average_focus_session_length == 30
    assert patterns.completion_rate == 50
    assert patterns.common_categories == [("writing", 2), ("reading", 1), ("exercise", 1)]
    assert patterns.total_time_spent == 120


def test_ties_resolve_in_declaration_order() -> None:
    entries = [entry(date(2024, 1, 7), "20:00", 10), entry(date(2024, 1, 2), "08:00", 10)]
    patterns = productivity_patterns(entries)
    assert patterns.most_productive_time_of_day == "morning"
    assert patterns.most_productive_day == "Tuesday"


def test_unparseable_start_time_is_skipped() -> None:
    patterns = productivity_patterns([entry(date(2024, 1, 5), "soon", 15), entry(date(2024, 1, 5), "18:00", 15)])
    assert patterns.most_productive_time_of_day == "evening"
    assert patterns.most_productive_day == "Friday"
    assert patterns.total_time_spent == 30


def test_completion_and_priority_status() -> None:
    tasks = [task("high", True), task("high", False), task("low", False), task("medium", True)]
    status = completion_status(tasks)
    assert (status.completed, status.pending) == (2, 2)
    priorities = priority_status(tasks)
    assert (priorities.high, priorities.medium, priorities.low) == (2, 1, 1)


def test_service_records_and_summarizes(session_factory) -> None:
    service = AnalyticsService(TimeEntryRepository(session_factory), session_minutes=25)
    assert service.productivity_patterns().average_focus_session_length == 25

    service.add_time_entry(
        {"start_time": "10:00", "duration": 45, "category": "work", "completed": True},
        today=date(2024, 1, 1),
    )
    patterns = service.productivity_patterns()
    assert patterns.most_productive_day == "Monday"
    assert patterns.total_time_spent == 45

    with pytest.raises(ValueError):
        service.add_time_entry({"start_time": "10:00", "duration": -5, "category": "", "completed": False})


def night(bedtime: str, wakeup_time: str, quality: str, day: date = date(2024, 1, 1)) -> SleepEntryEntity:
    return SleepEntryEntity(id=None, date=day, bedtime=bedtime, wakeup_time=wakeup_time, quality=quality)


def test_sleep_hours_cross_midnight() -> None:
    assert sleep_hours("23:00", "07:00") == 8
    assert sleep_hours("00:30", "07:15") == 6.75
    assert format_clock(24 * 60 + 50) == "00:50"


def test_sleep_defaults_without_entries() -> None:
    patterns = sleep_patterns([])
    assert patterns.average_sleep_hours == 0
    assert patterns.average_bedtime == "--:--"
    assert patterns.average_wakeup_time == "--:--"
    assert patterns.sleep_quality_distribution == {"poor": 0, "fair": 0, "good": 0, "excellent": 0}
    assert len(patterns.recommendations) == 1


def test_sleep_patterns_average_bedtime_across_midnight() -> None:
    patterns = sleep_patterns([
        night("23:00", "07:00", "good"),
        night("00:30", "07:30", "fair"),
        night("22:30", "06:30", "excellent"),
    ])

    assert patterns.average_sleep_hours == pytest.approx(23 / 3)
    assert patterns.average_bedtime == "23:20"
    assert patterns.average_wakeup_time == "07:00"
    assert patterns.sleep_quality_distribution == {"poor": 0, "fair": 1, "good": 1, "excellent": 1}
    assert patterns.recommendations == [
        "Your bedtime varies by more than an hour; keep a consistent schedule."
    ]


def test_short_late_poor_sleep_recommendations() -> None:
    patterns = sleep_patterns([night("01:00", "06:00", "poor"), night("00:40", "06:00", "poor")])

    assert patterns.average_bedtime == "00:50"
    assert len(patterns.recommendations) == 3
    assert patterns.recommendations[0].startswith("Aim for 7-9 hours")
    assert "late" in patterns.recommendations[1]
    assert "poor or fair" in patterns.recommendations[2]


def test_healthy_sleep_and_unparseable_nights() -> None:
    patterns = sleep_patterns([
        night("22:45", "06:45", "good"),
        night("23:15", "07:15", "excellent"),
        night("late", "07:00", "unknown"),
    ])

    assert patterns.average_sleep_hours == 8
    assert patterns.average_bedtime == "23:00"
    assert patterns.sleep_quality_distribution["good"] == 1
    assert patterns.recommendations == ["Your sleep routine looks healthy; keep it up."]


def test_service_records_sleep(session_factory) -> None:
    service = AnalyticsService(TimeEntryRepository(session_factory), SleepEntryRepository(session_factory))
    service.add_sleep_entry({"bedtime": "23:00", "wakeup_time": "07:00", "quality": "good"}, today=date(2024, 1, 2))
    service.add_sleep_entry({"bedtime": "23:30", "wakeup_time": "07:30"}, today=date(2024, 1, 3))

    patterns = service.sleep_patterns()
    assert patterns.average_sleep_hours == 8
    assert patterns.average_bedtime == "23:15"
    assert patterns.sleep_quality_distribution["good"] == 2

    with pytest.raises(ValueError):
        service.add_sleep_entry({"bedtime": "23:00", "wakeup_time": "07:00", "quality": "great"})
    with pytest.raises(ValueError):
        service.add_sleep_entry({"bedtime": "25:00", "wakeup_time": "07:00"})


def test_service_without_sleep_store() -> None:
    service = AnalyticsService(TimeEntryRepository())
    assert service.sleep_patterns().average_bedtime == "--:--"
    with pytest.raises(RuntimeError):
        service.add_sleep_entry({"bedtime": "23:00", "wakeup_time": "07:00"})
