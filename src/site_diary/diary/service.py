from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import (
    AlreadyClockedOutError,
    DuplicateEntryError,
    InvalidTimeRangeError,
    NotFoundError,
    ProjectFinalizedError,
    ValidationError,
)
from ..personal.repository import PersonalRepository
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from .model import DiaryEntry, RoleSnapshot
from .repository import DiaryRepository

logger = logging.getLogger(__name__)


def _check_range(start_time: datetime, end_time: Optional[datetime]) -> None:
    if end_time is not None and end_time <= start_time:
        raise InvalidTimeRangeError("End time must be after start time")


class DiaryService:
    """Use case: clock workers in and out of a project, and correct entries.

    One entry exists per (project, worker, day). The day is the local
    calendar date of the clock-in time.
    """

    def __init__(
        self,
        entries: DiaryRepository,
        projects: ProjectRepository,
        workers: PersonalRepository,
        *,
        lock_finalized_projects: bool = True,
    ):
        self._entries = entries
        self._projects = projects
        self._workers = workers
        self._lock_finalized = bool(lock_finalized_projects)

    def _require_project(self, project_id: int) -> Project:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project

    def _ensure_open(self, project: Project) -> None:
        if self._lock_finalized and project.is_finalized:
            logger.warning("Rejected diary change on finalized project %s", project.project_id)
            raise ProjectFinalizedError("Project is finalized; its diary can no longer be changed")

    def _reload(self, entry_id: int) -> DiaryEntry:
        entry = self._entries.get_by_id(entry_id)
        if not entry:
            raise NotFoundError("Diary entry not found")
        return entry

    def clock_in(
        self,
        *,
        project_id: int,
        worker_id: int,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        notes: Optional[str] = None,
        is_maestro: bool = False,
        now: Optional[datetime] = None,
    ) -> DiaryEntry:
        start_time = start_time or now or now_local()

        project = self._require_project(project_id)
        if not self._workers.get_by_id(worker_id):
            raise NotFoundError("Worker not found")
        self._ensure_open(project)
        _check_range(start_time, end_time)

        role = project.role_for(worker_id)
        work_date = start_time.date()

        # No pre-check: the store's unique key on (project, worker, day) decides.
        try:
            entry_id = self._entries.create(
                project_id=project_id,
                worker_id=worker_id,
                work_date=work_date,
                start_time=start_time,
                end_time=end_time,
                notes=notes,
                is_maestro=bool(is_maestro),
                role_id=role.role_id if role else None,
                role_snapshot=RoleSnapshot.of(role) if role else None,
            )
        except DuplicateEntryError as e:
            logger.warning("Duplicate clock-in: project=%s worker=%s date=%s", project_id, worker_id, work_date)
            raise DuplicateEntryError("Worker already has an entry for this date") from e

        logger.info("Clock-in: project=%s worker=%s date=%s entry=%s", project_id, worker_id, work_date, entry_id)
        return self._reload(entry_id)

    def clock_out(
        self,
        *,
        project_id: int,
        worker_id: int,
        end_time: Optional[datetime] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DiaryEntry:
        end_time = end_time or now or now_local()
        work_date = end_time.date()

        project = self._require_project(project_id)
        self._ensure_open(project)

        entry = self._entries.get_for_worker_and_date(project_id=project_id, worker_id=worker_id, work_date=work_date)
        if not entry:
            raise NotFoundError("No diary entry found for this date")
        if not entry.is_active:
            raise AlreadyClockedOutError("Worker already clocked out for this date")
        _check_range(entry.start_time, end_time)

        if not self._entries.close_entry(entry_id=entry.entry_id, end_time=end_time, notes=notes):
            # Another request closed it between the read and the write.
            raise AlreadyClockedOutError("Worker already clocked out for this date")

        logger.info("Clock-out: project=%s worker=%s date=%s entry=%s", project_id, worker_id, work_date, entry.entry_id)
        return self._reload(entry.entry_id)

    def update_entry(
        self,
        entry_id: int,
        *,
        start_time: Optional[datetime],
        end_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> DiaryEntry:
        """Correct the clock times of an entry.

        Without ``end_time`` the entry is reopened (status back to active).
        """
        if start_time is None:
            raise ValidationError("Start time is required")

        entry = self._reload(entry_id)
        project = self._projects.get_by_id(entry.project_id)
        if project:
            self._ensure_open(project)
        _check_range(start_time, end_time)

        if not self._entries.update_times(entry_id=entry_id, start_time=start_time, end_time=end_time, notes=notes):
            raise NotFoundError("Diary entry not found")

        logger.info("Updated diary entry %s (closed=%s)", entry_id, end_time is not None)
        return self._reload(entry_id)

    def delete_entry(self, entry_id: int) -> None:
        if not self._entries.delete(entry_id):
            raise NotFoundError("Diary entry not found")
        logger.info("Deleted diary entry %s", entry_id)

    def get_entry(self, entry_id: int) -> DiaryEntry:
        return self._reload(entry_id)
