"""Projection between epoch-millisecond instants and zone-local calendar fields.

``project`` maps an instant into a zone. ``to_instant`` is the inverse: given
wall-clock fields and a zone it finds the instant whose local reading matches.
Wall times that do not map to exactly one instant are resolved by explicit
policies:

* gap (spring forward): ``GapPolicy.ADVANCE`` moves to the first valid instant
  at or after the gap, which is the transition instant itself and reads as the
  first wall time after the skipped range. ``GapPolicy.REJECT`` raises
  :class:`NonExistentLocalTimeError`.
* overlap (fall back): ``OverlapPolicy.EARLIER`` picks the earlier occurrence,
  i.e. the offset in effect before the transition. ``OverlapPolicy.REJECT``
  raises :class:`AmbiguousLocalTimeError`.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
from dataclasses import dataclass
from enum import Enum

from dateutil import tz

from .errors import (
    AmbiguousLocalTimeError,
    InvalidCalendarDateError,
    NonExistentLocalTimeError,
)
from .time_utils import ONE_MS, from_epoch_ms, to_epoch_ms

DAY_MS = 24 * 3600 * 1000

# One day of margin on both ends keeps every zone's projection inside
# datetime.min..datetime.max.
MIN_INSTANT_MS = to_epoch_ms(dt.datetime(1, 1, 2, tzinfo=tz.UTC))
MAX_INSTANT_MS = to_epoch_ms(dt.datetime(9999, 12, 30, 23, 59, 59, 999000, tzinfo=tz.UTC))


class GapPolicy(str, Enum):
    ADVANCE = "advance"
    REJECT = "reject"


class OverlapPolicy(str, Enum):
    EARLIER = "earlier"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class CalendarDateTime:
    """Local calendar and clock reading plus the UTC offset it was read under."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    utc_offset_minutes: int = 0

    def __post_init__(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCalendarDateError(f"{field.name} must be an integer, got {value!r}")
        if not 0 <= self.millisecond <= 999:
            raise InvalidCalendarDateError(f"millisecond out of range: {self.millisecond}")
        if abs(self.utc_offset_minutes) >= 24 * 60:
            raise InvalidCalendarDateError(f"utc offset out of range: {self.utc_offset_minutes}")
        try:
            dt.datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)
        except ValueError as exc:
            raise InvalidCalendarDateError(str(exc)) from exc

    @classmethod
    def from_datetime(
        cls, value: dt.datetime, *, utc_offset_minutes: int | None = None
    ) -> CalendarDateTime:
        if utc_offset_minutes is None:
            offset = value.utcoffset()
            utc_offset_minutes = 0 if offset is None else offset // dt.timedelta(minutes=1)
        return cls(
            year=value.year,
            month=value.month,
            day=value.day,
            hour=value.hour,
            minute=value.minute,
            second=value.second,
            millisecond=value.microsecond // 1000,
            utc_offset_minutes=utc_offset_minutes,
        )

    def to_naive(self) -> dt.datetime:
        return dt.datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.millisecond * 1000,
        )

    def replace(self, **changes: int) -> CalendarDateTime:
        return dataclasses.replace(self, **changes)

    def isoformat(self) -> str:
        text = self.to_naive().isoformat(timespec="milliseconds" if self.millisecond else "seconds")
        sign = "-" if self.utc_offset_minutes < 0 else "+"
        hours, minutes = divmod(abs(self.utc_offset_minutes), 60)
        return f"{text}{sign}{hours:02d}:{minutes:02d}"

    def __str__(self) -> str:
        return self.isoformat()


def offset_ms_at(instant_ms: int, tzinfo: dt.tzinfo) -> int:
    """UTC offset of ``tzinfo`` at an instant, in milliseconds."""

    offset = from_epoch_ms(instant_ms).astimezone(tzinfo).utcoffset()
    return 0 if offset is None else offset // ONE_MS


def project(instant_ms: int, tzinfo: dt.tzinfo) -> CalendarDateTime:
    try:
        local = from_epoch_ms(instant_ms).astimezone(tzinfo)
    except OverflowError as exc:
        raise InvalidCalendarDateError(f"instant {instant_ms} is outside the calendar range") from exc
    return CalendarDateTime.from_datetime(local)


def to_instant(
    fields: CalendarDateTime,
    tzinfo: dt.tzinfo,
    *,
    on_gap: GapPolicy = GapPolicy.ADVANCE,
    on_overlap: OverlapPolicy = OverlapPolicy.EARLIER,
) -> int:
    """Re-encode wall-clock ``fields`` (offset ignored) in ``tzinfo``."""

    naive = fields.to_naive()
    local = naive.replace(tzinfo=tzinfo)
    try:
        if not tz.datetime_exists(local):
            if on_gap is GapPolicy.REJECT:
                raise NonExistentLocalTimeError(f"{naive.isoformat()} does not exist in {tzinfo}")
            return _first_instant_after_gap(naive, tzinfo)
        if tz.datetime_ambiguous(local):
            if on_overlap is OverlapPolicy.REJECT:
                raise AmbiguousLocalTimeError(f"{naive.isoformat()} is ambiguous in {tzinfo}")
            local = tz.enfold(local, fold=0)
        return to_epoch_ms(local)
    except OverflowError as exc:
        raise InvalidCalendarDateError(f"{naive.isoformat()} is outside the calendar range") from exc


def _first_instant_after_gap(naive: dt.datetime, tzinfo: dt.tzinfo) -> int:
    wall_ms = to_epoch_ms(naive.replace(tzinfo=tz.UTC))
    before = offset_ms_at(wall_ms - DAY_MS, tzinfo)
    after = offset_ms_at(wall_ms + DAY_MS, tzinfo)
    if after <= before:
        # Not a plain forward jump; fall back to shifting by the gap length.
        return to_epoch_ms(tz.resolve_imaginary(naive.replace(tzinfo=tzinfo)))

    # lo reads before the transition, hi after it; narrow down to the
    # first millisecond carrying the post-transition offset.
    lo = wall_ms - after
    hi = wall_ms - before
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if offset_ms_at(mid, tzinfo) == after:
            hi = mid
        else:
            lo = mid
    return hi
