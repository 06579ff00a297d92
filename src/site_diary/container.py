from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DatabaseConnection, DBConfig
from .diary.mysql_diary_repository import MySQLDiaryRepository
from .diary.repository import DiaryRepository
from .diary.service import DiaryService
from .personal.mysql_personal_repository import MySQLPersonalRepository
from .personal.repository import PersonalRepository
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .reports.service import DiaryReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    diary_repo: DiaryRepository
    projects_repo: ProjectRepository
    personal_repo: PersonalRepository

    diary_service: DiaryService
    report_service: DiaryReportService
    project_service: ProjectService


def wire_container(
    *,
    diary_repo: DiaryRepository,
    projects_repo: ProjectRepository,
    personal_repo: PersonalRepository,
    conn: Optional[DatabaseConnection] = None,
    lock_finalized_projects: bool = True,
) -> Container:
    diary_service = DiaryService(
        diary_repo,
        projects_repo,
        personal_repo,
        lock_finalized_projects=lock_finalized_projects,
    )
    report_service = DiaryReportService(diary_repo, projects_repo, personal_repo)
    project_service = ProjectService(projects_repo)

    return Container(
        conn=conn,
        diary_repo=diary_repo,
        projects_repo=projects_repo,
        personal_repo=personal_repo,
        diary_service=diary_service,
        report_service=report_service,
        project_service=project_service,
    )


def build_container(*, db_config: dict, lock_finalized_projects: bool = True) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_container(
        diary_repo=MySQLDiaryRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        personal_repo=MySQLPersonalRepository(conn),
        conn=conn,
        lock_finalized_projects=lock_finalized_projects,
    )
