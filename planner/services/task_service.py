from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum

from planner.domain.calendar import generate_month_grid, parse_iso_date, week_dates
from planner.domain.entities import TaskEntity
from planner.domain.enums import Category, Priority, RecurrenceType
from planner.domain.filters import TaskFilters
from planner.domain.recurrence import RecurrencePattern
from planner.infra.repository import TaskRepository

from .schedule import tasks_by_day, tasks_on_date

logger = logging.getLogger(__name__)

PRIORITIES = {priority.value for priority in Priority}
CATEGORIES = {category.value for category in Category}
RECURRENCE_TYPES = {rule.value for rule in RecurrenceType}


class TaskValidationError(ValueError):
    pass


class TaskService:
    def __init__(self, repo: TaskRepository) -> None:
        self._repo = repo

    def list_tasks(self, filters: TaskFilters | None = None) -> list[TaskEntity]:
        return self._repo.list_tasks(filters)

    def get_task(self, task_id: int) -> TaskEntity | None:
        return self._repo.get_task(task_id)

    def create_task(self, data: dict) -> TaskEntity:
        normalized = self._normalize_data(data)
        normalized.setdefault("priority", Priority.MEDIUM.value)
        normalized.setdefault("completed", False)
        self._validate(normalized, require_all=True)
        task = self._repo.create_task(normalized)
        logger.info("Created task %s on %s", task.id, task.date)
        return task

    def update_task(self, task_id: int, data: dict) -> TaskEntity | None:
        normalized = self._normalize_data(data)
        current = self._repo.get_task(task_id)
        if not current:
            return None
        merged = {
            "title": current.title,
            "date": current.date,
            "priority": current.priority,
            "category": current.category,
            "recurrence": current.recurrence,
            **normalized,
        }
        self._validate(merged, require_all=False)
        return self._repo.update_task(task_id, normalized)

    def delete_task(self, task_id: int) -> None:
        self._repo.delete_task(task_id)

    def toggle_completion(self, task_id: int) -> TaskEntity | None:
        return self._repo.toggle_completion(task_id)

    def tasks_on_date(self, day: date | datetime) -> list[TaskEntity]:
        return tasks_on_date(self._repo.list_tasks(), day)

    def week_agenda(self, day: date | datetime) -> dict[date, list[TaskEntity]]:
        return tasks_by_day(self._repo.list_tasks(), week_dates(day))

    def month_agenda(self, day: date | datetime) -> dict[date, list[TaskEntity]]:
        return tasks_by_day(self._repo.list_tasks(), generate_month_grid(day))

    def _normalize_data(self, data: dict) -> dict:
        normalized = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in data.items()
        }
        if "date" in normalized:
            try:
                normalized["date"] = parse_iso_date(normalized["date"]).isoformat()
            except ValueError:
                pass
        recurrence = normalized.get("recurrence")
        if isinstance(recurrence, dict):
            normalized["recurrence"] = RecurrencePattern.from_dict(recurrence)
        return normalized

    def _validate(self, data: dict, require_all: bool) -> None:
        if require_all or "title" in data:
            if not str(data.get("title") or "").strip():
                raise TaskValidationError("Task title is required")

        try:
            anchor = parse_iso_date(data.get("date"))
        except ValueError as exc:
            raise TaskValidationError(f"Invalid task date {data.get('date')!r}") from exc

        if data.get("priority") not in PRIORITIES:
            raise TaskValidationError(f"Unknown priority {data.get('priority')!r}")

        category = data.get("category")
        if category is not None and category not in CATEGORIES:
            raise TaskValidationError(f"Unknown category {category!r}")

        recurrence = data.get("recurrence")
        if recurrence is not None:
            self._validate_recurrence(recurrence, anchor)

    @staticmethod
    def _validate_recurrence(recurrence: RecurrencePattern, anchor: date) -> None:
        if recurrence.type not in RECURRENCE_TYPES:
            raise TaskValidationError(f"Unknown recurrence type {recurrence.type!r}")
        if not isinstance(recurrence.interval, int) or recurrence.interval < 1:
            raise TaskValidationError("Recurrence interval must be a positive integer")
        for day in recurrence.days_of_week or ():
            if not isinstance(day, int) or not 0 <= day <= 6:
                raise TaskValidationError(f"Weekday index {day!r} is outside 0..6")
        if recurrence.end_date:
            try:
                end = parse_iso_date(recurrence.end_date)
            except ValueError as exc:
                raise TaskValidationError(
                    f"Invalid recurrence end date {recurrence.end_date!r}"
                ) from exc
            if end < anchor:
                raise TaskValidationError("Recurrence end date precedes the task date")
        if recurrence.type == RecurrenceType.CUSTOM.value:
            logger.warning("Custom recurrence stored for a task; it will not produce occurrences")
