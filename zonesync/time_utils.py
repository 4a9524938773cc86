"""Clock helpers for epoch-millisecond instants and edit bookkeeping."""

from __future__ import annotations

import datetime as dt
import time

from dateutil import tz

EPOCH = dt.datetime(1970, 1, 1, tzinfo=tz.UTC)
ONE_MS = dt.timedelta(milliseconds=1)


def utc_now() -> dt.datetime:
    return dt.datetime.now(tz.UTC)


def now_ms() -> int:
    return to_epoch_ms(utc_now())


def monotonic_now() -> float:
    return time.monotonic()


def elapsed_s(start_ts: float, end_ts: float | None = None) -> float:
    end_ts = monotonic_now() if end_ts is None else end_ts
    return max(0.0, end_ts - start_ts)


def to_epoch_ms(value: dt.datetime) -> int:
    """Convert an aware datetime to integer epoch milliseconds (floor)."""

    if value.tzinfo is None:
        raise ValueError("naive datetime has no absolute position")
    return (value - EPOCH) // ONE_MS


def from_epoch_ms(value: int) -> dt.datetime:
    """Return the UTC datetime for an epoch-millisecond instant."""

    return EPOCH + dt.timedelta(milliseconds=value)
