from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import DiaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..personal.model import WorkerRef
from ..projects.model import ProjectRef
from .model import DiaryEntry, DiaryFilter, RoleSnapshot
from .repository import DiaryRepository

_SELECT_ENTRY = """
    SELECT de.entry_id, de.project_id, de.worker_id, de.work_date,
           de.start_time, de.end_time, de.notes, de.is_maestro,
           de.role_id, de.role_name, de.role_description, de.role_color,
           w.name AS worker_name, w.email AS worker_email,
           pr.name AS project_name
    FROM diary_entries de
    JOIN personal w ON w.worker_id = de.worker_id
    JOIN projects pr ON pr.project_id = de.project_id
"""


def _to_entry(r: dict) -> DiaryEntry:
    snapshot = None
    if r.get("role_name"):
        snapshot = RoleSnapshot(
            name=r["role_name"],
            description=r.get("role_description"),
            color=r.get("role_color"),
        )
    return DiaryEntry(
        entry_id=int(r["entry_id"]),
        project_id=int(r["project_id"]),
        worker_id=int(r["worker_id"]),
        work_date=r["work_date"],
        start_time=r["start_time"],
        end_time=r.get("end_time"),
        notes=r.get("notes"),
        is_maestro=bool(r.get("is_maestro")),
        role_id=int(r["role_id"]) if r.get("role_id") is not None else None,
        role_snapshot=snapshot,
        worker=WorkerRef(worker_id=int(r["worker_id"]), name=r["worker_name"], email=r.get("worker_email")),
        project=ProjectRef(project_id=int(r["project_id"]), name=r["project_name"]),
    )


class MySQLDiaryRepository(DiaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO diary_entries(
                    project_id, worker_id, work_date, start_time, end_time, notes, is_maestro,
                    role_id, role_name, role_description, role_color
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(project_id),
                    int(worker_id),
                    work_date,
                    start_time,
                    end_time,
                    notes,
                    1 if is_maestro else 0,
                    role_id,
                    role_snapshot.name if role_snapshot else None,
                    role_snapshot.description if role_snapshot else None,
                    role_snapshot.color if role_snapshot else None,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, entry_id: int) -> Optional[DiaryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ENTRY + " WHERE de.entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def get_for_worker_and_date(self, *, project_id: int, worker_id: int, work_date: date) -> Optional[DiaryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ENTRY + " WHERE de.project_id=%s AND de.worker_id=%s AND de.work_date=%s",
                (int(project_id), int(worker_id), work_date),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def close_entry(self, *, entry_id: int, end_time: datetime, notes: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE diary_entries
                SET end_time=%s, notes=COALESCE(%s, notes)
                WHERE entry_id=%s AND end_time IS NULL
                """,
                (end_time, notes, int(entry_id)),
            )
            return cur.rowcount > 0

    def update_times(
        self,
        *,
        entry_id: int,
        start_time: datetime,
        end_time: Optional[datetime],
        notes: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE diary_entries
                SET start_time=%s, end_time=%s, notes=%s
                WHERE entry_id=%s
                """,
                (start_time, end_time, notes, int(entry_id)),
            )
            return cur.rowcount > 0

    def delete(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM diary_entries WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0

    def find(self, criteria: DiaryFilter) -> Sequence[DiaryEntry]:
        clauses = ["1=1"]
        params: list[object] = []

        if criteria.project_id is not None:
            clauses.append("de.project_id=%s")
            params.append(int(criteria.project_id))
        if criteria.worker_id is not None:
            clauses.append("de.worker_id=%s")
            params.append(int(criteria.worker_id))

        start, end = criteria.date_bounds()
        if start is not None:
            clauses.append("de.work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("de.work_date <= %s")
            params.append(end)

        if criteria.status == DiaryStatus.ACTIVE:
            clauses.append("de.end_time IS NULL")
        elif criteria.status == DiaryStatus.COMPLETED:
            clauses.append("de.end_time IS NOT NULL")

        if criteria.is_maestro is not None:
            clauses.append("de.is_maestro=%s")
            params.append(1 if criteria.is_maestro else 0)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ENTRY + f" WHERE {where} ORDER BY de.work_date DESC, de.start_time DESC",
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_maestros(self, project_id: int) -> Sequence[WorkerRef]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT w.worker_id, w.name, w.email, MIN(de.entry_id) AS first_entry
                FROM diary_entries de
                JOIN personal w ON w.worker_id = de.worker_id
                WHERE de.project_id=%s AND de.is_maestro=1
                GROUP BY w.worker_id, w.name, w.email
                ORDER BY first_entry ASC
                """,
                (int(project_id),),
            )
            return [
                WorkerRef(worker_id=int(r["worker_id"]), name=r["name"], email=r.get("email"))
                for r in fetchall(cur)
            ]
