from __future__ import annotations

from enum import Enum


class DiaryStatus(str, Enum):
    """Diary entry state, derived from whether the worker has clocked out."""

    ACTIVE = "active"
    COMPLETED = "completed"
