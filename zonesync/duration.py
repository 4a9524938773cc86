"""Calendar-aware differences and shifts between wall-clock readings.

Both operations treat :class:`CalendarDateTime` values as plain wall-clock
readings; UTC offsets are neither compared nor changed.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from dateutil.relativedelta import relativedelta

from .errors import InvalidCalendarDateError, MalformedInputError
from .projection import CalendarDateTime

UNITS = ("years", "months", "days", "hours", "minutes", "seconds")
SAME_DATES = "Same dates"


class Direction(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"


@dataclass(frozen=True)
class DurationVector:
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self) -> None:
        for unit in UNITS:
            value = getattr(self, unit)
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedInputError(f"{unit} must be an integer, got {value!r}")
            if value < 0:
                raise MalformedInputError(f"{unit} must not be negative, got {value}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, int]) -> DurationVector:
        unknown = set(values) - set(UNITS)
        if unknown:
            raise MalformedInputError(f"Unknown duration units: {', '.join(sorted(unknown))}")
        return cls(**values)

    def is_zero(self) -> bool:
        return not any(getattr(self, unit) for unit in UNITS)


@dataclass(frozen=True)
class DurationBreakdown:
    """Magnitude of a difference in cascaded calendar units."""

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    same: bool = False
    past: bool = False

    def parts(self) -> list[tuple[str, int]]:
        """Non-zero units for display, seconds rounded to the nearest whole.

        A rounded-up second carries as far as days; month lengths vary, so
        days never roll into months here.
        """

        seconds = self.seconds + (1 if self.milliseconds >= 500 else 0)
        minutes, seconds = self.minutes + seconds // 60, seconds % 60
        hours, minutes = self.hours + minutes // 60, minutes % 60
        days, hours = self.days + hours // 24, hours % 24
        values = dataclasses.replace(
            self, days=days, hours=hours, minutes=minutes, seconds=seconds
        )
        return [(unit, getattr(values, unit)) for unit in UNITS if getattr(values, unit)]

    def render(self) -> str:
        parts = self.parts()
        if self.same or not parts:
            return SAME_DATES
        text = ", ".join(f"{value} {unit if value != 1 else unit[:-1]}" for unit, value in parts)
        return f"-{text}" if self.past else text

    def as_dict(self) -> dict[str, int]:
        return {unit: getattr(self, unit) for unit in UNITS}


def difference(start: CalendarDateTime, end: CalendarDateTime) -> DurationBreakdown:
    start_dt = start.to_naive()
    end_dt = end.to_naive()
    if start_dt == end_dt:
        return DurationBreakdown(same=True)
    past = end_dt < start_dt
    earlier, later = (end_dt, start_dt) if past else (start_dt, end_dt)
    # relativedelta steps whole months forward from ``earlier`` without
    # passing ``later``, then leaves the remainder in days and below.
    delta = relativedelta(later, earlier)
    return DurationBreakdown(
        years=delta.years,
        months=delta.months,
        days=delta.days,
        hours=delta.hours,
        minutes=delta.minutes,
        seconds=delta.seconds,
        milliseconds=delta.microseconds // 1000,
        past=past,
    )


def shift(
    start: CalendarDateTime,
    duration: DurationVector,
    direction: Direction | str = Direction.ADD,
) -> CalendarDateTime:
    """Apply ``duration`` unit by unit, largest first.

    Each unit operates on the previous unit's result, so a month step that
    lands past the end of the target month clamps to its last day before the
    day step is applied.
    """

    try:
        direction = Direction(direction)
    except ValueError as exc:
        raise MalformedInputError(f"Unknown direction {direction!r}") from exc
    sign = 1 if direction is Direction.ADD else -1
    steps = (
        relativedelta(years=sign * duration.years),
        relativedelta(months=sign * duration.months),
        dt.timedelta(days=sign * duration.days),
        dt.timedelta(hours=sign * duration.hours),
        dt.timedelta(minutes=sign * duration.minutes),
        dt.timedelta(seconds=sign * duration.seconds),
    )
    value = start.to_naive()
    try:
        for step in steps:
            value = value + step
    except (OverflowError, ValueError) as exc:
        raise InvalidCalendarDateError(f"Shift leaves the supported calendar range: {exc}") from exc
    return CalendarDateTime.from_datetime(value, utc_offset_minutes=start.utc_offset_minutes)
