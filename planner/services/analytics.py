from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Iterable, Sequence

from planner.config import SETTINGS
from planner.domain.calendar import parse_iso_date
from planner.domain.entities import (
    CompletionStatus,
    PriorityStatus,
    ProductivityPattern,
    SleepEntryEntity,
    SleepPattern,
    TaskEntity,
    TimeEntryEntity,
)
from planner.domain.enums import Priority, SleepQuality
from planner.infra.repository import SleepEntryRepository, TimeEntryRepository

logger = logging.getLogger(__name__)

TIMES_OF_DAY = ("morning", "afternoon", "evening")
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MINUTES_PER_DAY = 24 * 60
NOON = 12 * 60
LATE_BEDTIME = 23 * 60 + 30
NO_CLOCK = "--:--"


def time_of_day(start_time: str) -> str:
    hour = int(start_time.split(":")[0])
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    return "evening"


def _most_common(counts: Counter, order: Sequence[str]) -> str:
    return max(order, key=lambda key: counts[key])


def productivity_patterns(
    entries: Sequence[TimeEntryEntity],
    default_session_minutes: int = SETTINGS.pomodoro_work_min,
) -> ProductivityPattern:
    if not entries:
        return ProductivityPattern(
            most_productive_time_of_day="morning",
            most_productive_day="Monday",
            average_focus_session_length=default_session_minutes,
            completion_rate=0,
            common_categories=[],
            total_time_spent=0,
        )

    time_counts: Counter = Counter()
    day_counts: Counter = Counter()
    categories: Counter = Counter()
    total_duration = 0
    completed = 0

    for entry in entries:
        try:
            time_counts[time_of_day(entry.start_time)] += 1
        except (AttributeError, ValueError):
            logger.warning("Time entry %s has unparseable start time %r", entry.id, entry.start_time)
        try:
            day_counts[DAY_NAMES[parse_iso_date(entry.date).weekday()]] += 1
        except ValueError:
            logger.warning("Time entry %s has unparseable date %r", entry.id, entry.date)
        if entry.category:
            categories[entry.category] += 1
        total_duration += entry.duration
        if entry.completed:
            completed += 1

    return ProductivityPattern(
        most_productive_time_of_day=_most_common(time_counts, TIMES_OF_DAY),
        most_productive_day=_most_common(day_counts, DAY_NAMES),
        average_focus_session_length=total_duration / len(entries),
        completion_rate=completed / len(entries) * 100,
        common_categories=categories.most_common(3),
        total_time_spent=total_duration,
    )


def completion_status(tasks: Iterable[TaskEntity]) -> CompletionStatus:
    done = pending = 0
    for task in tasks:
        if task.completed:
            done += 1
        else:
            pending += 1
    return CompletionStatus(completed=done, pending=pending)


def priority_status(tasks: Iterable[TaskEntity]) -> PriorityStatus:
    counts = Counter(task.priority for task in tasks)
    return PriorityStatus(
        high=counts[Priority.HIGH.value],
        medium=counts[Priority.MEDIUM.value],
        low=counts[Priority.LOW.value],
    )


def clock_minutes(clock: str) -> int:
    hours, minutes = clock.strip().split(":")
    if not 0 <= int(minutes) < 60:
        raise ValueError(f"Invalid clock time {clock!r}")
    value = int(hours) * 60 + int(minutes)
    if not 0 <= value < MINUTES_PER_DAY:
        raise ValueError(f"Invalid clock time {clock!r}")
    return value


def format_clock(minutes: float) -> str:
    total = int(round(minutes)) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def sleep_hours(bedtime: str, wakeup_time: str) -> float:
    return ((clock_minutes(wakeup_time) - clock_minutes(bedtime)) % MINUTES_PER_DAY) / 60


def _evening_minutes(bedtime: str) -> int:
    # after-midnight bedtimes count as the same night
    minutes = clock_minutes(bedtime)
    return minutes + MINUTES_PER_DAY if minutes < NOON else minutes


def _sleep_recommendations(
    average_hours: float, bedtimes: list[int], distribution: dict[str, int]
) -> list[str]:
    recommendations = []
    if average_hours < 7:
        recommendations.append("Aim for 7-9 hours of sleep; try going to bed 30 minutes earlier.")
    elif average_hours > 9:
        recommendations.append("You sleep more than 9 hours; a fixed wake-up time can help you feel rested.")
    if sum(bedtimes) / len(bedtimes) > LATE_BEDTIME:
        recommendations.append("Your bedtime is late; start winding down before 23:00.")
    if max(bedtimes) - min(bedtimes) > 60:
        recommendations.append("Your bedtime varies by more than an hour; keep a consistent schedule.")
    poor_nights = distribution[SleepQuality.POOR.value] + distribution[SleepQuality.FAIR.value]
    good_nights = distribution[SleepQuality.GOOD.value] + distribution[SleepQuality.EXCELLENT.value]
    if poor_nights > good_nights:
        recommendations.append("Most nights are rated poor or fair; limit screens and caffeine in the evening.")
    if not recommendations:
        recommendations.append("Your sleep routine looks healthy; keep it up.")
    return recommendations


def sleep_patterns(entries: Sequence[SleepEntryEntity]) -> SleepPattern:
    distribution = {quality.value: 0 for quality in SleepQuality}
    durations: list[float] = []
    bedtimes: list[int] = []
    wakeups: list[int] = []

    for entry in entries:
        if entry.quality in distribution:
            distribution[entry.quality] += 1
        try:
            duration = sleep_hours(entry.bedtime, entry.wakeup_time)
            bedtime = _evening_minutes(entry.bedtime)
            wakeup = clock_minutes(entry.wakeup_time)
        except (AttributeError, ValueError):
            logger.warning("Sleep entry %s has unparseable times %r-%r", entry.id, entry.bedtime, entry.wakeup_time)
            continue
        durations.append(duration)
        bedtimes.append(bedtime)
        wakeups.append(wakeup)

    if not durations:
        return SleepPattern(
            average_sleep_hours=0.0,
            average_bedtime=NO_CLOCK,
            average_wakeup_time=NO_CLOCK,
            sleep_quality_distribution=distribution,
            recommendations=["Log your sleep to get personalized recommendations."],
        )

    average_hours = sum(durations) / len(durations)
    return SleepPattern(
        average_sleep_hours=average_hours,
        average_bedtime=format_clock(sum(bedtimes) / len(bedtimes)),
        average_wakeup_time=format_clock(sum(wakeups) / len(wakeups)),
        sleep_quality_distribution=distribution,
        recommendations=_sleep_recommendations(average_hours, bedtimes, distribution),
    )


class AnalyticsService:
    def __init__(
        self,
        entries: TimeEntryRepository,
        sleep_entries: SleepEntryRepository | None = None,
        session_minutes: int = SETTINGS.pomodoro_work_min,
    ) -> None:
        self._entries = entries
        self._sleep_entries = sleep_entries
        self._session_minutes = session_minutes

    def add_time_entry(self, data: dict, today: date | None = None) -> TimeEntryEntity:
        if int(data.get("duration", 0)) < 0:
            raise ValueError("Time entry duration cannot be negative")
        return self._entries.add_entry(data, today=today)

    def productivity_patterns(self) -> ProductivityPattern:
        return productivity_patterns(self._entries.list_entries(), self._session_minutes)

    def add_sleep_entry(self, data: dict, today: date | None = None) -> SleepEntryEntity:
        if self._sleep_entries is None:
            raise RuntimeError("No sleep entry store configured")
        quality = data.get("quality", SleepQuality.GOOD.value)
        if quality not in {item.value for item in SleepQuality}:
            raise ValueError(f"Unknown sleep quality {quality!r}")
        clock_minutes(data["bedtime"])
        clock_minutes(data["wakeup_time"])
        return self._sleep_entries.add_entry({**data, "quality": str(quality)}, today=today)

    def sleep_patterns(self) -> SleepPattern:
        if self._sleep_entries is None:
            return sleep_patterns([])
        return sleep_patterns(self._sleep_entries.list_entries())
