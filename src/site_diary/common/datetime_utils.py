from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_FORMAT, SECONDS_PER_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Full ISO timestamps are accepted too; their local calendar day is used.
    """
    value = value.strip()
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return parse_iso_datetime(value).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Offsets (including a trailing ``Z``) are converted to the server's local
    time so that every stored time shares one clock.
    """
    moment = datetime.fromisoformat(value.strip())
    if moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return moment


def hours_between(start: datetime, end: datetime) -> float:
    seconds = (end - start).total_seconds()
    return max(seconds, 0.0) / SECONDS_PER_HOUR


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
