from __future__ import annotations

from ..diary.serializers import entry_to_dict, project_ref_to_dict, worker_ref_to_dict
from .model import DiaryStats, ProjectDiary, WorkHistory, WorkHistoryRow, WorkerDiary, WorkerStats


def diary_stats_to_dict(s: DiaryStats) -> dict:
    return {
        "totalEntries": s.total_entries,
        "activeWorkers": s.active_workers,
        "totalHours": s.total_hours,
        "uniqueWorkers": s.unique_workers,
    }


def worker_stats_to_dict(s: WorkerStats) -> dict:
    return {
        "totalEntries": s.total_entries,
        "totalHours": s.total_hours,
        "averageHoursPerDay": s.average_hours_per_day,
        "projectsWorked": s.projects_worked,
        "activeEntries": s.active_entries,
    }


def project_diary_to_dict(view: ProjectDiary) -> dict:
    return {
        "project": project_ref_to_dict(view.project),
        "entries": {day: [entry_to_dict(e) for e in items] for day, items in view.entries_by_day.items()},
        "stats": diary_stats_to_dict(view.stats),
    }


def worker_diary_to_dict(view: WorkerDiary) -> dict:
    return {
        "worker": worker_ref_to_dict(view.worker),
        "entries": [entry_to_dict(e) for e in view.entries],
        "stats": worker_stats_to_dict(view.stats),
    }


def _history_row_to_dict(r: WorkHistoryRow) -> dict:
    return {
        "project": project_ref_to_dict(r.project),
        "totalHours": r.total_hours,
        "totalDays": r.total_days,
        "dateRange": {"start": r.date_range.start.isoformat(), "end": r.date_range.end.isoformat()},
        "wasMaestro": r.was_maestro,
        "maestros": [worker_ref_to_dict(m) for m in r.maestros] if r.maestros else None,
    }


def work_history_to_dict(history: WorkHistory) -> dict:
    return {
        "workHistory": [_history_row_to_dict(r) for r in history.rows],
        "summary": {
            "totalProjects": history.summary.total_projects,
            "totalDaysWorked": history.summary.total_days_worked,
            "totalHours": history.summary.total_hours,
        },
    }
