from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy import select

from planner.domain.entities import SleepEntryEntity, TaskEntity, TimeEntryEntity
from planner.domain.enums import RecurrenceType
from planner.domain.filters import TaskFilters
from planner.domain.recurrence import RecurrencePattern

from .db import SessionLocal
from .models import SleepEntryModel, TaskModel, TimeEntryModel

logger = logging.getLogger(__name__)


def _parse_days(raw: str | None) -> tuple | None:
    if not raw:
        return None
    parts = tuple(part.strip() for part in raw.split(",") if part.strip())
    try:
        return tuple(int(part) for part in parts)
    except ValueError:
        logger.warning("Stored weekday set %r is not a list of integers", raw)
        return parts


def _to_recurrence(model: TaskModel) -> Optional[RecurrencePattern]:
    if not model.recurrence_type:
        return None
    return RecurrencePattern(
        type=model.recurrence_type,
        interval=model.recurrence_interval,
        days_of_week=_parse_days(model.recurrence_days_of_week),
        end_date=model.recurrence_end_date,
        custom=model.recurrence_custom,
    )


def _recurrence_columns(recurrence: RecurrencePattern | None) -> dict:
    if recurrence is None or recurrence.type == RecurrenceType.NONE.value:
        return {
            "recurrence_type": None,
            "recurrence_interval": 1,
            "recurrence_days_of_week": None,
            "recurrence_end_date": None,
            "recurrence_custom": None,
        }
    days = recurrence.days_of_week
    return {
        "recurrence_type": recurrence.type,
        "recurrence_interval": recurrence.interval,
        "recurrence_days_of_week": ",".join(str(day) for day in days) if days else None,
        "recurrence_end_date": recurrence.end_date,
        "recurrence_custom": recurrence.custom,
    }


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        title=model.title,
        description=model.description,
        date=model.date,
        time=model.time,
        duration=model.duration,
        priority=model.priority,
        category=model.category,
        completed=bool(model.completed),
        recurrence=_to_recurrence(model),
    )


def _to_columns(data: dict) -> dict:
    columns = dict(data)
    if "recurrence" in columns:
        columns.update(_recurrence_columns(columns.pop("recurrence")))
    columns.pop("id", None)
    return columns


def _apply_filters(stmt, filters: TaskFilters) -> object:
    if filters.status_key == "pending":
        stmt = stmt.where(TaskModel.completed.is_(False))
    elif filters.status_key == "completed":
        stmt = stmt.where(TaskModel.completed.is_(True))

    if filters.category:
        stmt = stmt.where(TaskModel.category == filters.category)

    if filters.search:
        stmt = stmt.where(TaskModel.title.ilike(f"%{filters.search}%"))

    return stmt


class TaskRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def list_tasks(self, filters: TaskFilters | None = None) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel)
            if filters:
                stmt = _apply_filters(stmt, filters)
            stmt = stmt.order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
            return [_to_entity(task) for task in session.scalars(stmt)]

    def get_task(self, task_id: int) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            return _to_entity(task) if task else None

    def create_task(self, data: dict) -> TaskEntity:
        with self._session_factory() as session:
            task = TaskModel(**_to_columns(data))
            session.add(task)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def update_task(self, task_id: int, data: dict) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return None
            for key, value in _to_columns(data).items():
                setattr(task, key, value)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def delete_task(self, task_id: int) -> None:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return
            session.delete(task)
            session.commit()

    def toggle_completion(self, task_id: int) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return None
            task.completed = not task.completed
            session.commit()
            session.refresh(task)
            return _to_entity(task)


def _to_time_entry(model: TimeEntryModel) -> TimeEntryEntity:
    return TimeEntryEntity(
        id=model.id,
        date=model.date,
        start_time=model.start_time,
        duration=model.duration,
        category=model.category,
        completed=bool(model.completed),
    )


class TimeEntryRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def add_entry(self, data: dict, today: date | None = None) -> TimeEntryEntity:
        with self._session_factory() as session:
            entry = TimeEntryModel(**{**data, "date": today or date.today()})
            session.add(entry)
            session.commit()
            session.refresh(entry)
            return _to_time_entry(entry)

    def list_entries(self) -> list[TimeEntryEntity]:
        with self._session_factory() as session:
            stmt = select(TimeEntryModel).order_by(TimeEntryModel.id.asc())
            return [_to_time_entry(entry) for entry in session.scalars(stmt)]


def _to_sleep_entry(model: SleepEntryModel) -> SleepEntryEntity:
    return SleepEntryEntity(
        id=model.id,
        date=model.date,
        bedtime=model.bedtime,
        wakeup_time=model.wakeup_time,
        quality=model.quality,
    )


class SleepEntryRepository:
    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def add_entry(self, data: dict, today: date | None = None) -> SleepEntryEntity:
        with self._session_factory() as session:
            entry = SleepEntryModel(**{"date": today or date.today(), **data})
            session.add(entry)
            session.commit()
            session.refresh(entry)
            return _to_sleep_entry(entry)

    def list_entries(self) -> list[SleepEntryEntity]:
        with self._session_factory() as session:
            stmt = select(SleepEntryModel).order_by(SleepEntryModel.date.asc(), SleepEntryModel.id.asc())
            return [_to_sleep_entry(entry) for entry in session.scalars(stmt)]
