from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Worker:
    """Domain entity: a person on the payroll (``personal`` table).

    Plain data object; no DB access code lives here.
    """

    worker_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    active: bool = True

    def ref(self) -> "WorkerRef":
        return WorkerRef(worker_id=self.worker_id, name=self.name, email=self.email)


@dataclass(frozen=True)
class WorkerRef:
    """Worker fields expanded onto diary entries and reports."""

    worker_id: int
    name: str
    email: Optional[str] = None
