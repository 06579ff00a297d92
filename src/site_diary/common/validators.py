from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_id(value: Any, field_name: str) -> int:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a valid id")
    if ident <= 0:
        raise ValidationError(f"{field_name} is not a valid id")
    return ident


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_id(value, field_name)


def optional_datetime(value: Any, field_name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be an ISO-8601 string")
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date/time")


def require_datetime(value: Any, field_name: str) -> datetime:
    moment = optional_datetime(value, field_name)
    if moment is None:
        raise ValidationError(f"{field_name} is required")
    return moment


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be an ISO-8601 string")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date")


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
