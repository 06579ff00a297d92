from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Worker
from .repository import PersonalRepository


class MySQLPersonalRepository(PersonalRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT worker_id, name, email, phone, active FROM personal WHERE worker_id=%s",
                (int(worker_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Worker(
                worker_id=int(r["worker_id"]),
                name=r["name"],
                email=r.get("email"),
                phone=r.get("phone"),
                active=bool(r.get("active", 1)),
            )
