from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        """Project with its personnel-role assignments loaded."""

        raise NotImplementedError

    def finalize(self, *, project_id: int, finalized: date) -> bool:
        """Set ``finalized`` and clear ``active`` if not finalized yet.

        Returns False when the project was already finalized (or missing).
        """

        raise NotImplementedError
