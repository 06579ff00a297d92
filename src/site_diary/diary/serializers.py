from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..personal.model import WorkerRef
from ..projects.model import ProjectRef
from .model import DiaryEntry, RoleSnapshot


def iso(moment: Optional[datetime]) -> Optional[str]:
    return moment.isoformat() if moment else None


def worker_ref_to_dict(w: WorkerRef) -> dict:
    return {"id": w.worker_id, "name": w.name, "email": w.email}


def project_ref_to_dict(p: ProjectRef) -> dict:
    return {"id": p.project_id, "name": p.name}


def role_snapshot_to_dict(s: Optional[RoleSnapshot]) -> Optional[dict]:
    if s is None:
        return None
    return {"name": s.name, "description": s.description, "color": s.color}


def entry_to_dict(e: DiaryEntry) -> dict:
    return {
        "id": e.entry_id,
        "project": project_ref_to_dict(e.project) if e.project else {"id": e.project_id},
        "worker": worker_ref_to_dict(e.worker) if e.worker else {"id": e.worker_id},
        "date": e.work_date.isoformat(),
        "startTime": iso(e.start_time),
        "endTime": iso(e.end_time),
        "totalHours": e.total_hours,
        "status": e.status.value,
        "notes": e.notes,
        "isMaestro": e.is_maestro,
        "role": e.role_id,
        "roleSnapshot": role_snapshot_to_dict(e.role_snapshot),
    }
