from __future__ import annotations

from datetime import date, datetime

import pytest

from site_diary.common.datetime_utils import hours_between, parse_iso_date, parse_iso_datetime
from site_diary.common.validators import optional_date, optional_datetime, optional_id, require_datetime, require_id
from site_diary.core.exceptions import ValidationError


def test_parse_iso_date_accepts_plain_days_and_timestamps():
    assert parse_iso_date("2024-01-10") == date(2024, 1, 10)
    assert parse_iso_date("2024-01-10T23:15:00") == date(2024, 1, 10)


def test_parse_iso_datetime_keeps_naive_values():
    assert parse_iso_datetime(" 2024-01-10T08:00 ") == datetime(2024, 1, 10, 8, 0)


def test_parse_iso_datetime_drops_offsets():
    moment = parse_iso_datetime("2024-01-10T08:00:00+00:00")

    assert moment.tzinfo is None


def test_hours_between_never_negative():
    start = datetime(2024, 1, 10, 8, 0)

    assert hours_between(start, datetime(2024, 1, 10, 17, 0)) == 9
    assert hours_between(start, datetime(2024, 1, 10, 8, 30)) == 0.5
    assert hours_between(start, datetime(2024, 1, 10, 7, 0)) == 0


@pytest.mark.parametrize("value", [None, "", "abc", 0, -3, True])
def test_require_id_rejects_missing_or_invalid(value):
    with pytest.raises(ValidationError):
        require_id(value, "Project ID")


def test_ids_accept_numeric_strings():
    assert require_id("42", "Project ID") == 42
    assert optional_id(None, "project") is None
    assert optional_id("7", "project") == 7


def test_datetime_fields():
    assert optional_datetime(None, "End time") is None
    assert optional_datetime("", "End time") is None
    assert require_datetime("2024-01-10T08:00:00", "Start time") == datetime(2024, 1, 10, 8, 0)

    with pytest.raises(ValidationError):
        require_datetime(None, "Start time")
    with pytest.raises(ValidationError):
        optional_datetime("10/01/2024", "Start time")
    with pytest.raises(ValidationError):
        optional_datetime(1704873600, "Start time")


def test_date_fields():
    assert optional_date("2024-01-10", "date") == date(2024, 1, 10)
    assert optional_date(datetime(2024, 1, 10, 9, 0), "date") == date(2024, 1, 10)

    with pytest.raises(ValidationError):
        optional_date("tomorrow", "date")
