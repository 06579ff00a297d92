from __future__ import annotations

import logging
from typing import Any

from ..common.validators import optional_date
from ..core.exceptions import AlreadyFinalizedError, NotFoundError, ValidationError
from .model import Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    """Use case: read a project and close it for good (finalization)."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    def get_project(self, project_id: int) -> Project:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project

    def finalize(self, project_id: int, finalized_date: Any) -> Project:
        """Mark the project finalized on ``finalized_date`` and deactivate it.

        There is no way back: a second call fails and keeps the first date.
        """
        finalized = optional_date(finalized_date, "Finalized date")
        if finalized is None:
            raise ValidationError("Finalized date is required")

        project = self.get_project(project_id)
        if project.is_finalized:
            raise AlreadyFinalizedError(f"Project is already finalized ({project.finalized.isoformat()})")

        if not self._projects.finalize(project_id=project_id, finalized=finalized):
            # Lost a race with a concurrent finalize.
            raise AlreadyFinalizedError("Project is already finalized")

        logger.info("Finalized project %s on %s", project_id, finalized.isoformat())
        return self.get_project(project_id)
