from datetime import date
from unittest.mock import patch

import pytest

from app.domain.watering import WateringStatus, compute_status

TODAY = date(2026, 3, 10)


def test_never_watered_is_due_without_next_date():
    assert compute_status(None, 7, TODAY) == (WateringStatus.DUE, None)


@pytest.mark.parametrize(
    "last_watered, interval, expected_status, expected_next",
    [
        ("2026-03-05T08:00:00Z", 7, WateringStatus.OK, date(2026, 3, 12)),
        ("2026-03-03T23:59:59Z", 7, WateringStatus.DUE, date(2026, 3, 10)),
        ("2026-03-01T08:00:00Z", 7, WateringStatus.OVERDUE, date(2026, 3, 8)),
        ("2026-03-10", 0, WateringStatus.DUE, date(2026, 3, 10)),
        ("2026-03-09", 0, WateringStatus.OVERDUE, date(2026, 3, 9)),
        ("2026-03-10T06:00:00Z", -3, WateringStatus.DUE, date(2026, 3, 10)),
    ],
)
def test_status_relative_to_today(last_watered, interval, expected_status, expected_next):
    status, next_due = compute_status(last_watered, interval, TODAY)

    assert status is expected_status
    assert next_due == expected_next


def test_time_of_day_is_ignored():
    early = compute_status("2026-03-09T00:00:01Z", 1, TODAY)
    late = compute_status("2026-03-09T23:59:59Z", 1, TODAY)

    assert early == late == (WateringStatus.DUE, date(2026, 3, 10))


def test_unparseable_value_is_due():
    assert compute_status("yesterday", 7, TODAY) == (WateringStatus.DUE, None)


def test_interval_past_the_calendar_is_due():
    assert compute_status("2026-03-01", 10**9, TODAY) == (WateringStatus.DUE, None)
    assert compute_status("2026-03-01", 3_000_000, TODAY) == (WateringStatus.DUE, None)


def test_defaults_to_utc_today():
    with patch("app.domain.watering.utc_today", return_value=TODAY):
        status, _ = compute_status("2026-03-10T12:00:00Z", 3)

    assert status is WateringStatus.OK


def test_status_renders_as_plain_string():
    assert str(WateringStatus.OVERDUE) == "overdue"
    assert WateringStatus("due") is WateringStatus.DUE
