from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from site_diary.container import wire_container
from site_diary.core.exceptions import DuplicateEntryError
from site_diary.diary.model import DiaryEntry, DiaryFilter, RoleSnapshot, sort_newest_first
from site_diary.main import create_app
from site_diary.personal.model import Worker, WorkerRef
from site_diary.projects.model import PersonalRole, Project, Role


class InMemoryPersonal:
    def __init__(self, workers: list[Worker]):
        self.by_id = {w.worker_id: w for w in workers}

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self.by_id.get(worker_id)


class InMemoryProjects:
    def __init__(self, projects: list[Project]):
        self.by_id = {p.project_id: p for p in projects}

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self.by_id.get(project_id)

    def finalize(self, *, project_id: int, finalized: date) -> bool:
        p = self.by_id.get(project_id)
        if not p or p.finalized is not None:
            return False
        self.by_id[project_id] = replace(p, finalized=finalized, active=False)
        return True


class InMemoryDiary:
    """Dict-backed diary store with the same unique key as the SQL table."""

    def __init__(self, projects: InMemoryProjects, workers: InMemoryPersonal):
        self._projects = projects
        self._workers = workers
        self._rows: dict[int, DiaryEntry] = {}
        self._id = 0
        self._lock = threading.Lock()

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
        with self._lock:
            for r in self._rows.values():
                if (r.project_id, r.worker_id, r.work_date) == (project_id, worker_id, work_date):
                    raise DuplicateEntryError("Record already exists")
            self._id += 1
            self._rows[self._id] = DiaryEntry(
                entry_id=self._id,
                project_id=project_id,
                worker_id=worker_id,
                work_date=work_date,
                start_time=start_time,
                end_time=end_time,
                notes=notes,
                is_maestro=is_maestro,
                role_id=role_id,
                role_snapshot=role_snapshot,
                worker=self._workers.by_id[worker_id].ref(),
                project=self._projects.by_id[project_id].ref(),
            )
            return self._id

    def get_by_id(self, entry_id: int) -> Optional[DiaryEntry]:
        return self._rows.get(entry_id)

    def get_for_worker_and_date(self, *, project_id: int, worker_id: int, work_date: date) -> Optional[DiaryEntry]:
        for r in self._rows.values():
            if (r.project_id, r.worker_id, r.work_date) == (project_id, worker_id, work_date):
                return r
        return None

    def close_entry(self, *, entry_id: int, end_time: datetime, notes: Optional[str] = None) -> bool:
        with self._lock:
            r = self._rows.get(entry_id)
            if not r or r.end_time is not None:
                return False
            self._rows[entry_id] = replace(r, end_time=end_time, notes=notes if notes is not None else r.notes)
            return True

    def update_times(self, *, entry_id: int, start_time: datetime, end_time: Optional[datetime], notes: Optional[str]) -> bool:
        r = self._rows.get(entry_id)
        if not r:
            return False
        self._rows[entry_id] = replace(r, start_time=start_time, end_time=end_time, notes=notes)
        return True

    def delete(self, entry_id: int) -> bool:
        return self._rows.pop(entry_id, None) is not None

    def find(self, criteria: DiaryFilter):
        return sort_newest_first(r for r in self._rows.values() if criteria.matches(r))

    def list_maestros(self, project_id: int):
        seen: dict[int, WorkerRef] = {}
        for r in sorted(self._rows.values(), key=lambda r: r.entry_id):
            if r.project_id == project_id and r.is_maestro and r.worker_id not in seen:
                seen[r.worker_id] = r.worker
        return list(seen.values())

    def all(self) -> list[DiaryEntry]:
        return list(self._rows.values())


MASON = Role(role_id=5, name="Albañil", description="Mason", color="#FF0000")

PROJECT_A = 10
PROJECT_B = 20
ANA = 1
LUIS = 2
PEDRO = 3


@pytest.fixture
def workers():
    return InMemoryPersonal(
        [
            Worker(worker_id=ANA, name="Ana", email="ana@example.com"),
            Worker(worker_id=LUIS, name="Luis", email="luis@example.com"),
            Worker(worker_id=PEDRO, name="Pedro"),
        ]
    )


@pytest.fixture
def projects():
    return InMemoryProjects(
        [
            Project(
                project_id=PROJECT_A,
                name="Casa Norte",
                personal_roles=(PersonalRole(worker_id=ANA, role=MASON), PersonalRole(worker_id=LUIS)),
            ),
            Project(project_id=PROJECT_B, name="Bodega Sur"),
        ]
    )


@pytest.fixture
def diary_repo(projects, workers):
    return InMemoryDiary(projects, workers)


@pytest.fixture
def container(diary_repo, projects, workers):
    return wire_container(diary_repo=diary_repo, projects_repo=projects, personal_repo=workers)


@pytest.fixture
def diary_service(container):
    return container.diary_service


@pytest.fixture
def report_service(container):
    return container.report_service


@pytest.fixture
def project_service(container):
    return container.project_service


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="site_diary.config.testing")
    with app.test_client() as c:
        yield c
