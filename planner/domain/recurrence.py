from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from .calendar import (
    days_between,
    is_same_calendar_day,
    months_between,
    parse_iso_date,
    weekday_index,
    weeks_between,
)
from .enums import RecurrenceType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplicitWeekdays:
    days: frozenset[int]

    def resolve(self, anchor: date) -> frozenset[int]:
        return self.days


@dataclass(frozen=True)
class AnchorWeekday:
    def resolve(self, anchor: date) -> frozenset[int]:
        return frozenset({weekday_index(anchor)})


WeekdaySelection = Union[ExplicitWeekdays, AnchorWeekday]


def normalize_interval(value: Any) -> int:
    try:
        interval = int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(interval, 1)


@dataclass(frozen=True)
class RecurrencePattern:
    type: str = RecurrenceType.NONE.value
    interval: int = 1
    days_of_week: Optional[tuple[int, ...]] = None
    end_date: Optional[str] = None
    custom: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RecurrencePattern":
        days = payload.get("days_of_week", payload.get("daysOfWeek"))
        end_date = payload.get("end_date", payload.get("endDate"))
        if isinstance(end_date, (date, datetime)):
            end_date = end_date.isoformat()[:10]
        interval = payload.get("interval")
        return cls(
            type=str(payload.get("type") or RecurrenceType.NONE.value),
            interval=1 if interval is None else interval,
            days_of_week=tuple(days) if isinstance(days, (list, tuple, set, frozenset)) and days else None,
            end_date=end_date or None,
            custom=payload.get("custom"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type, "interval": self.interval}
        if self.days_of_week:
            payload["daysOfWeek"] = list(self.days_of_week)
        if self.end_date:
            payload["endDate"] = self.end_date
        if self.custom is not None:
            payload["custom"] = self.custom
        return payload

    @property
    def is_recurring(self) -> bool:
        return self.type != RecurrenceType.NONE.value

    def weekday_selection(self) -> WeekdaySelection:
        if self.days_of_week:
            return ExplicitWeekdays(frozenset(int(day) for day in self.days_of_week))
        return AnchorWeekday()


def occurs_on(
    anchor: date | datetime,
    recurrence: RecurrencePattern | None,
    target: date | datetime,
) -> bool:
    if recurrence is None or not recurrence.is_recurring:
        return is_same_calendar_day(anchor, target)

    if days_between(anchor, target) < 0:
        return False

    if recurrence.end_date:
        try:
            end = parse_iso_date(recurrence.end_date)
        except ValueError:
            logger.warning("Unparseable recurrence end date %r", recurrence.end_date)
            return False
        if days_between(end, target) > 0:
            return False

    interval = normalize_interval(recurrence.interval)
    rule = recurrence.type

    if rule == RecurrenceType.DAILY.value:
        return days_between(anchor, target) % interval == 0

    if rule == RecurrenceType.WEEKLY.value:
        if weeks_between(anchor, target) % interval != 0:
            return False
        try:
            weekdays = recurrence.weekday_selection().resolve(anchor)
        except (TypeError, ValueError):
            logger.warning("Malformed weekday set %r", recurrence.days_of_week)
            return False
        return weekday_index(target) in weekdays

    if rule == RecurrenceType.MONTHLY.value:
        if anchor.day != target.day:
            return False
        return months_between(anchor, target) % interval == 0

    if rule == RecurrenceType.CUSTOM.value:
        logger.debug("Custom recurrence is not implemented; payload %r ignored", recurrence.custom)
        return False

    logger.debug("Unknown recurrence type %r", rule)
    return False

