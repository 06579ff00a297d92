from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_ROLE_COLOR


@dataclass(frozen=True)
class Role:
    role_id: int
    name: str
    description: Optional[str] = None
    color: str = DEFAULT_ROLE_COLOR


@dataclass(frozen=True)
class PersonalRole:
    """A worker assigned to a project, optionally with a role."""

    worker_id: int
    role: Optional[Role] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Project:
    """Domain entity: a construction project.

    Once ``finalized`` is set the project is inactive for good.
    """

    project_id: int
    name: str
    active: bool = True
    finalized: Optional[date] = None
    personal_roles: tuple[PersonalRole, ...] = field(default_factory=tuple)

    @property
    def is_finalized(self) -> bool:
        return self.finalized is not None

    def role_for(self, worker_id: int) -> Optional[Role]:
        for assignment in self.personal_roles:
            if assignment.worker_id == worker_id:
                return assignment.role
        return None

    def ref(self) -> "ProjectRef":
        return ProjectRef(project_id=self.project_id, name=self.name)


@dataclass(frozen=True)
class ProjectRef:
    project_id: int
    name: str
