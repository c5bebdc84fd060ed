from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskFilters:
    status_key: str = "all"
    search: str | None = None
    category: str | None = None
