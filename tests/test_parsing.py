from __future__ import annotations

import pytest

from zonesync.errors import InvalidCalendarDateError, MalformedInputError
from zonesync.parsing import (
    CalendarDate,
    TimeOfDay,
    parse_date,
    parse_datetime,
    parse_time_of_day,
)
from zonesync.projection import CalendarDateTime


@pytest.mark.parametrize(
    "text, expected",
    [
        ("9:05", TimeOfDay(9, 5)),
        ("09:05", TimeOfDay(9, 5)),
        (" 23:59:30 ", TimeOfDay(23, 59, 30)),
        ("00:00", TimeOfDay(0, 0)),
    ],
)
def test_parse_24_hour(text, expected) -> None:
    assert parse_time_of_day(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12:00 AM", TimeOfDay(0, 0)),
        ("12:30 pm", TimeOfDay(12, 30)),
        ("07:05 PM", TimeOfDay(19, 5)),
        ("7:05PM", TimeOfDay(19, 5)),
        ("11:59:59 am", TimeOfDay(11, 59, 59)),
    ],
)
def test_parse_12_hour(text, expected) -> None:
    assert parse_time_of_day(text, use_24_hour=False) == expected


@pytest.mark.parametrize("text", ["", "7", "7:5", "07:05 PM", "7.05", "ab:cd", "10:00:0"])
def test_parse_24_hour_rejects(text) -> None:
    with pytest.raises(MalformedInputError):
        parse_time_of_day(text)


@pytest.mark.parametrize("text", ["19:05", "13:00 PM", "0:30 AM", "7:05 XM"])
def test_parse_12_hour_rejects(text) -> None:
    with pytest.raises(MalformedInputError):
        parse_time_of_day(text, use_24_hour=False)


def test_out_of_range_numbers_parse_but_do_not_validate() -> None:
    assert parse_time_of_day("25:70") == TimeOfDay(25, 70)


def test_non_text_is_malformed() -> None:
    with pytest.raises(MalformedInputError):
        parse_time_of_day(930)


def test_parse_date() -> None:
    assert parse_date("2024-02-29") == CalendarDate(2024, 2, 29)
    for text in ("2024-2-29", "29/02/2024", "2024-02-29T10:00"):
        with pytest.raises(MalformedInputError):
            parse_date(text)


def test_parse_datetime() -> None:
    assert parse_datetime("2024-01-31T08:15") == CalendarDateTime(2024, 1, 31, 8, 15)
    assert parse_datetime("2024-01-31 08:15:09", utc_offset_minutes=60) == CalendarDateTime(
        2024, 1, 31, 8, 15, 9, utc_offset_minutes=60
    )
    with pytest.raises(MalformedInputError):
        parse_datetime("2024-01-31")
    with pytest.raises(InvalidCalendarDateError):
        parse_datetime("2024-04-31T10:00")
