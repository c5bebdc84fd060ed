from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Sequence

from planner.domain.calendar import as_date, parse_iso_date, weekday_index
from planner.domain.entities import TaskEntity
from planner.domain.enums import Weekday
from planner.domain.recurrence import RecurrencePattern, occurs_on

logger = logging.getLogger(__name__)

WEEKEND = frozenset({Weekday.SUNDAY, Weekday.SATURDAY})


def is_weekend(day: date | datetime) -> bool:
    return weekday_index(day) in WEEKEND


def task_occurs_on(task: TaskEntity, day: date | datetime) -> bool:
    try:
        anchor = parse_iso_date(task.date)
    except ValueError:
        logger.warning("Skipping task %s with unparseable date %r", task.id, task.date)
        return False
    recurrence = task.recurrence
    try:
        if isinstance(recurrence, Mapping):
            recurrence = RecurrencePattern.from_dict(recurrence)
        return occurs_on(anchor, recurrence, as_date(day))
    except (AttributeError, TypeError, ValueError, OverflowError):
        logger.warning("Skipping task %s with malformed recurrence %r", task.id, task.recurrence)
        return False


def tasks_on_date(tasks: Iterable[TaskEntity], day: date | datetime) -> list[TaskEntity]:
    return [task for task in tasks if task_occurs_on(task, day)]


def tasks_by_day(
    tasks: Sequence[TaskEntity], days: Iterable[date]
) -> dict[date, list[TaskEntity]]:
    return {day: tasks_on_date(tasks, day) for day in days}


def occurrences_between(task: TaskEntity, start: date, end: date) -> list[date]:
    span = (end - start).days
    return [
        start + timedelta(days=offset)
        for offset in range(span + 1)
        if task_occurs_on(task, start + timedelta(days=offset))
    ]
