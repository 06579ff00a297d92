from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..core.enums import DiaryStatus
from ..personal.model import WorkerRef
from ..projects.model import ProjectRef, Role


@dataclass(frozen=True)
class RoleSnapshot:
    """Role display attributes frozen at clock-in.

    Later edits to the role definition do not rewrite diary history.
    """

    name: str
    description: Optional[str]
    color: Optional[str]

    @classmethod
    def of(cls, role: Role) -> "RoleSnapshot":
        return cls(name=role.name, description=role.description, color=role.color)


@dataclass(frozen=True)
class DiaryEntry:
    """Domain entity: one worker's attendance on one project for one day.

    ``status`` and ``total_hours`` are computed from the clock times and
    cannot be set independently.
    """

    entry_id: int
    project_id: int
    worker_id: int
    work_date: date
    start_time: datetime
    end_time: Optional[datetime] = None
    notes: Optional[str] = None
    is_maestro: bool = False
    role_id: Optional[int] = None
    role_snapshot: Optional[RoleSnapshot] = None
    worker: Optional[WorkerRef] = None
    project: Optional[ProjectRef] = None

    @property
    def status(self) -> DiaryStatus:
        return DiaryStatus.ACTIVE if self.end_time is None else DiaryStatus.COMPLETED

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def total_hours(self) -> float:
        if self.end_time is None:
            return 0.0
        return hours_between(self.start_time, self.end_time)


@dataclass(frozen=True)
class DiaryFilter:
    """Conjunctive filter for diary listings.

    An exact ``work_date`` wins over the ``start_date``/``end_date`` range.
    Range bounds are inclusive and either one may be open.
    """

    project_id: Optional[int] = None
    worker_id: Optional[int] = None
    work_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[DiaryStatus] = None
    is_maestro: Optional[bool] = None

    def date_bounds(self) -> tuple[Optional[date], Optional[date]]:
        if self.work_date is not None:
            return self.work_date, self.work_date
        return self.start_date, self.end_date

    def matches(self, entry: DiaryEntry) -> bool:
        if self.project_id is not None and entry.project_id != self.project_id:
            return False
        if self.worker_id is not None and entry.worker_id != self.worker_id:
            return False
        start, end = self.date_bounds()
        if start is not None and entry.work_date < start:
            return False
        if end is not None and entry.work_date > end:
            return False
        if self.status is not None and entry.status != self.status:
            return False
        if self.is_maestro is not None and entry.is_maestro != self.is_maestro:
            return False
        return True


def sort_newest_first(entries) -> list[DiaryEntry]:
    """Order by ``(work_date desc, start_time desc)``."""
    return sorted(entries, key=lambda e: (e.work_date, e.start_time), reverse=True)
