from __future__ import annotations

from typing import Optional, Protocol

from .model import Worker


class PersonalRepository(Protocol):
    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError
