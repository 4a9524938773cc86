"""Fixed English renderings of calendar readings."""

from __future__ import annotations

from .projection import CalendarDateTime

_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DAY_START_HOUR = 6
NIGHT_START_HOUR = 18


def format_offset(minutes: int) -> str:
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def _twelve_hour(hour: int) -> tuple[int, str]:
    meridiem = "AM" if hour < 12 else "PM"
    return (hour % 12) or 12, meridiem


def format_time(value: CalendarDateTime, use_24_hour: bool = True) -> str:
    if use_24_hour:
        return f"{value.hour:02d}:{value.minute:02d}"
    hour, meridiem = _twelve_hour(value.hour)
    return f"{hour}:{value.minute:02d} {meridiem}"


def format_date(value: CalendarDateTime) -> str:
    """Short date, e.g. ``Mon, Jan 5, 2026``."""

    weekday = value.to_naive().weekday()
    return (
        f"{_DAY_NAMES[weekday][:3]}, {_MONTH_NAMES[value.month - 1][:3]} "
        f"{value.day}, {value.year:04d}"
    )


def format_long(value: CalendarDateTime) -> str:
    """Full date and clock, e.g. ``Monday, January 5, 2026 3:04:05 PM``."""

    weekday = value.to_naive().weekday()
    hour, meridiem = _twelve_hour(value.hour)
    return (
        f"{_DAY_NAMES[weekday]}, {_MONTH_NAMES[value.month - 1]} {value.day}, {value.year:04d} "
        f"{hour}:{value.minute:02d}:{value.second:02d} {meridiem}"
    )


def day_night(value: CalendarDateTime) -> str:
    if DAY_START_HOUR <= value.hour < NIGHT_START_HOUR:
        return "day"
    return "night"
