from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_ROLE_COLOR
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PersonalRole, Project, Role
from .repository import ProjectRepository


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT project_id, name, active, finalized FROM projects WHERE project_id=%s",
                (int(project_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            cur.execute(
                """
                SELECT ppr.worker_id, ppr.notes,
                       ro.role_id, ro.name AS role_name, ro.description AS role_description, ro.color AS role_color
                FROM project_personal_roles ppr
                LEFT JOIN roles ro ON ro.role_id = ppr.role_id
                WHERE ppr.project_id=%s
                ORDER BY ppr.worker_id ASC
                """,
                (int(project_id),),
            )
            assignments = []
            for a in fetchall(cur):
                role = None
                if a.get("role_id") is not None:
                    role = Role(
                        role_id=int(a["role_id"]),
                        name=a["role_name"],
                        description=a.get("role_description"),
                        color=a.get("role_color") or DEFAULT_ROLE_COLOR,
                    )
                assignments.append(PersonalRole(worker_id=int(a["worker_id"]), role=role, notes=a.get("notes")))

            return Project(
                project_id=int(r["project_id"]),
                name=r["name"],
                active=bool(r.get("active", 1)),
                finalized=r.get("finalized"),
                personal_roles=tuple(assignments),
            )

    def finalize(self, *, project_id: int, finalized: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE projects
                SET finalized=%s, active=0
                WHERE project_id=%s AND finalized IS NULL
                """,
                (finalized, int(project_id)),
            )
            return cur.rowcount > 0
