from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..personal.model import WorkerRef
from .model import DiaryEntry, DiaryFilter, RoleSnapshot


class DiaryRepository(Protocol):
    """Repository interface for diary entries.

    Services depend on this interface, not on a concrete database.
    """

    def create(
        self,
        *,
        project_id: int,
        worker_id: int,
        work_date: date,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        notes: Optional[str] = None,
        is_maestro: bool = False,
        role_id: Optional[int] = None,
        role_snapshot: Optional[RoleSnapshot] = None,
    ) -> int:
        """Insert an entry and return its id.

        Raises ``DuplicateEntryError`` when the store's unique key on
        (project, worker, day) rejects the row.
        """

        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[DiaryEntry]:
        raise NotImplementedError

    def get_for_worker_and_date(self, *, project_id: int, worker_id: int, work_date: date) -> Optional[DiaryEntry]:
        raise NotImplementedError

    def close_entry(self, *, entry_id: int, end_time: datetime, notes: Optional[str] = None) -> bool:
        """Set ``end_time`` only if the entry is still open.

        Returns False when no open entry was updated.
        """

        raise NotImplementedError

    def update_times(
        self,
        *,
        entry_id: int,
        start_time: datetime,
        end_time: Optional[datetime],
        notes: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete(self, entry_id: int) -> bool:
        raise NotImplementedError

    def find(self, criteria: DiaryFilter) -> Sequence[DiaryEntry]:
        """Entries matching ``criteria``, newest day first, then latest start."""

        raise NotImplementedError

    def list_maestros(self, project_id: int) -> Sequence[WorkerRef]:
        """Distinct workers ever flagged maestro on the project."""

        raise NotImplementedError
