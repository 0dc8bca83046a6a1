from __future__ import annotations

from datetime import date, datetime

import pytest
import typer

from fit_cli.utils.dates import (
    epoch_ms,
    local_day,
    parse_timestamp,
    start_of_week,
    sunday_weekday,
    today,
    validate_timestamp,
)


def test_epoch_ms_round_trips_local_day() -> None:
    moment = datetime(2026, 2, 14, 23, 59)
    assert local_day(epoch_ms(moment)) == date(2026, 2, 14)


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        (date(2026, 2, 8), date(2026, 2, 8)),
        (date(2026, 2, 11), date(2026, 2, 8)),
        (date(2026, 2, 14), date(2026, 2, 8)),
        (date(2026, 2, 15), date(2026, 2, 15)),
    ],
)
def test_start_of_week_is_sunday(day: date, expected: date) -> None:
    assert start_of_week(day) == expected


def test_sunday_weekday_numbers() -> None:
    assert sunday_weekday(date(2026, 2, 8)) == 0
    assert sunday_weekday(date(2026, 2, 14)) == 6


def test_parse_timestamp_accepts_dates_and_datetimes() -> None:
    assert parse_timestamp("2026-02-14") == datetime(2026, 2, 14)
    assert parse_timestamp("2026-02-14T18:30") == datetime(2026, 2, 14, 18, 30)
    assert parse_timestamp("2026-02-14T18:30:00Z").tzinfo is not None


def test_today_uses_given_now() -> None:
    assert today(datetime(2026, 2, 14, 0, 1)) == date(2026, 2, 14)


def test_validate_timestamp() -> None:
    assert validate_timestamp(None) is None
    assert validate_timestamp("2026-02-14") == "2026-02-14"
    with pytest.raises(typer.BadParameter):
        validate_timestamp("next tuesday")
