"""Strict grammars for user-entered times and dates.

Accepted forms:

* 24-hour time: ``H:MM``, ``HH:MM``, ``HH:MM:SS``
* 12-hour time: ``h:MM AM``, ``hh:MM pm``, ``hh:MM:SS PM`` (hour 1-12)
* date: ``YYYY-MM-DD``
* date and time: ``YYYY-MM-DDTHH:MM[:SS]`` or with a space instead of ``T``

Anything else raises :class:`MalformedInputError`. Range checks on the numbers
happen where the fields are combined into a calendar reading.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import MalformedInputError
from .projection import CalendarDateTime

_TIME_24_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_TIME_12_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])$")
_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DATETIME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2})(?::(\d{2}))?$")


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int
    second: int | None = None


@dataclass(frozen=True)
class CalendarDate:
    year: int
    month: int
    day: int


def _clean(text: object) -> str:
    if not isinstance(text, str):
        raise MalformedInputError(f"Expected text, got {type(text).__name__}")
    return " ".join(text.split())


def parse_time_of_day(text: str, *, use_24_hour: bool = True) -> TimeOfDay:
    value = _clean(text)
    if use_24_hour:
        match = _TIME_24_RE.match(value)
        if not match:
            raise MalformedInputError(f"Expected HH:MM, got {text!r}")
        hour = int(match.group(1))
    else:
        match = _TIME_12_RE.match(value)
        if not match:
            raise MalformedInputError(f"Expected hh:MM AM/PM, got {text!r}")
        hour = int(match.group(1))
        if not 1 <= hour <= 12:
            raise MalformedInputError(f"12-hour clock hour must be 1-12, got {hour}")
        hour %= 12
        if match.group(4).upper() == "PM":
            hour += 12
    second = match.group(3)
    return TimeOfDay(
        hour=hour,
        minute=int(match.group(2)),
        second=int(second) if second is not None else None,
    )


def parse_date(text: str) -> CalendarDate:
    match = _DATE_RE.match(_clean(text))
    if not match:
        raise MalformedInputError(f"Expected YYYY-MM-DD, got {text!r}")
    year, month, day = (int(group) for group in match.groups())
    return CalendarDate(year=year, month=month, day=day)


def parse_datetime(text: str, *, utc_offset_minutes: int = 0) -> CalendarDateTime:
    match = _DATETIME_RE.match(_clean(text))
    if not match:
        raise MalformedInputError(f"Expected YYYY-MM-DDTHH:MM[:SS], got {text!r}")
    year, month, day, hour, minute, second = match.groups()
    return CalendarDateTime(
        year=int(year),
        month=int(month),
        day=int(day),
        hour=int(hour),
        minute=int(minute),
        second=int(second or 0),
        utc_offset_minutes=utc_offset_minutes,
    )
