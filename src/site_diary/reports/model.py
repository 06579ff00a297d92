from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..diary.model import DiaryEntry
from ..personal.model import WorkerRef
from ..projects.model import ProjectRef


@dataclass(frozen=True)
class DiaryStats:
    total_entries: int
    active_workers: int
    total_hours: float
    unique_workers: int


@dataclass(frozen=True)
class ProjectDiary:
    project: ProjectRef
    entries_by_day: dict[str, list[DiaryEntry]]
    stats: DiaryStats


@dataclass(frozen=True)
class WorkerStats:
    total_entries: int
    total_hours: float
    average_hours_per_day: float
    projects_worked: int
    active_entries: int


@dataclass(frozen=True)
class WorkerDiary:
    worker: WorkerRef
    entries: list[DiaryEntry]
    stats: WorkerStats


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


@dataclass(frozen=True)
class WorkHistoryRow:
    """One project in a worker's history.

    ``maestros`` lists who led the project when the worker never did;
    it is None when the worker was maestro or nobody was ever flagged.
    """

    project: ProjectRef
    total_hours: float
    total_days: int
    date_range: DateRange
    was_maestro: bool
    maestros: Optional[tuple[WorkerRef, ...]] = None


@dataclass(frozen=True)
class WorkHistorySummary:
    total_projects: int
    total_days_worked: int
    total_hours: float


@dataclass(frozen=True)
class WorkHistory:
    rows: list[WorkHistoryRow]
    summary: WorkHistorySummary
