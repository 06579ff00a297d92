from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import DiaryStatus
from ..core.exceptions import NotFoundError
from ..diary.model import DiaryEntry, DiaryFilter
from ..diary.repository import DiaryRepository
from ..personal.repository import PersonalRepository
from ..projects.model import ProjectRef
from ..projects.repository import ProjectRepository
from .model import (
    DateRange,
    DiaryStats,
    ProjectDiary,
    WorkHistory,
    WorkHistoryRow,
    WorkHistorySummary,
    WorkerDiary,
    WorkerStats,
)


def group_by_day(entries: Iterable[DiaryEntry]) -> dict[str, list[DiaryEntry]]:
    """Bucket entries by ISO day, keeping the incoming order."""
    grouped: dict[str, list[DiaryEntry]] = {}
    for e in entries:
        grouped.setdefault(e.work_date.isoformat(), []).append(e)
    return grouped


def project_stats(entries: Sequence[DiaryEntry]) -> DiaryStats:
    return DiaryStats(
        total_entries=len(entries),
        active_workers=sum(1 for e in entries if e.status == DiaryStatus.ACTIVE),
        total_hours=sum(e.total_hours for e in entries),
        unique_workers=len({e.worker_id for e in entries}),
    )


def worker_stats(entries: Sequence[DiaryEntry]) -> WorkerStats:
    total_hours = sum(e.total_hours for e in entries)
    return WorkerStats(
        total_entries=len(entries),
        total_hours=total_hours,
        average_hours_per_day=total_hours / len(entries) if entries else 0.0,
        projects_worked=len({e.project_id for e in entries}),
        active_entries=sum(1 for e in entries if e.status == DiaryStatus.ACTIVE),
    )


class DiaryReportService:
    """Read-side views over the diary: listings, per-project and per-worker
    statistics, and a worker's work history across projects.

    Reports read committed rows without a transaction spanning the whole
    report, so they may reflect writes that happen mid-read.
    """

    def __init__(self, entries: DiaryRepository, projects: ProjectRepository, workers: PersonalRepository):
        self._entries = entries
        self._projects = projects
        self._workers = workers

    def list_entries(self, criteria: DiaryFilter) -> list[DiaryEntry]:
        return list(self._entries.find(criteria))

    def project_diary(
        self,
        project_id: int,
        *,
        work_date: Optional[date] = None,
        status: Optional[DiaryStatus] = None,
    ) -> ProjectDiary:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")

        entries = list(self._entries.find(DiaryFilter(project_id=project_id, work_date=work_date, status=status)))
        return ProjectDiary(project=project.ref(), entries_by_day=group_by_day(entries), stats=project_stats(entries))

    def worker_diary(
        self,
        worker_id: int,
        *,
        project_id: Optional[int] = None,
        work_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> WorkerDiary:
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise NotFoundError("Worker not found")

        criteria = DiaryFilter(
            project_id=project_id,
            worker_id=worker_id,
            work_date=work_date,
            start_date=start_date,
            end_date=end_date,
        )
        entries = list(self._entries.find(criteria))
        return WorkerDiary(worker=worker.ref(), entries=entries, stats=worker_stats(entries))

    def work_history(self, worker_id: int) -> WorkHistory:
        entries = list(self._entries.find(DiaryFilter(worker_id=worker_id)))

        by_project: dict[int, list[DiaryEntry]] = {}
        for e in entries:
            by_project.setdefault(e.project_id, []).append(e)

        rows: list[WorkHistoryRow] = []
        for project_id, project_entries in by_project.items():
            was_maestro = any(e.is_maestro for e in project_entries)

            maestros = None
            if not was_maestro:
                # Whole project, not only the days this worker was there.
                found = tuple(self._entries.list_maestros(project_id))
                maestros = found or None

            days = [e.work_date for e in project_entries]
            first = project_entries[0]
            rows.append(
                WorkHistoryRow(
                    project=first.project or ProjectRef(project_id=project_id, name=""),
                    total_hours=sum(e.total_hours for e in project_entries),
                    total_days=len(project_entries),
                    date_range=DateRange(start=min(days), end=max(days)),
                    was_maestro=was_maestro,
                    maestros=maestros,
                )
            )

        rows.sort(key=lambda r: r.date_range.end, reverse=True)

        summary = WorkHistorySummary(
            total_projects=len(rows),
            total_days_worked=len(entries),
            total_hours=sum(e.total_hours for e in entries),
        )
        return WorkHistory(rows=rows, summary=summary)
