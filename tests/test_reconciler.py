from __future__ import annotations

import datetime as dt

import pytest
from dateutil import tz

from zonesync.errors import (
    AmbiguousLocalTimeError,
    InvalidCalendarDateError,
    InvalidInstantError,
    MalformedInputError,
    NonExistentLocalTimeError,
    UnknownEntryError,
    UnknownZoneError,
)
from zonesync.instant import InstantStore
from zonesync.projection import GapPolicy, OverlapPolicy, offset_ms_at, project
from zonesync.reconciler import Reconciler
from zonesync.registry import ZoneRegistry
from zonesync.time_utils import to_epoch_ms


def utc_ms(*args: int) -> int:
    return to_epoch_ms(dt.datetime(*args, tzinfo=tz.UTC))


def _setup(catalog, instant: int, *zones: str, **policies):
    store = InstantStore(instant)
    registry = ZoneRegistry(catalog)
    entries = [registry.add(zone) for zone in zones]
    reconciler = Reconciler(store, registry, catalog, **policies)
    return store, registry, reconciler, entries


def _wall(local) -> tuple[int, ...]:
    return (local.year, local.month, local.day, local.hour, local.minute, local.second)


def test_time_edit_replaces_clock_and_keeps_date(catalog) -> None:
    store, _, reconciler, (tokyo,) = _setup(catalog, utc_ms(2024, 6, 1, 13, 30, 42), "Asia/Tokyo")

    result = reconciler.apply_time_edit(tokyo.id, 8, 15)

    assert result.ok is True
    assert result.error is None
    assert store.get() == result.instant == utc_ms(2024, 5, 31, 23, 15, 42)
    assert _wall(reconciler.local_time(tokyo.id)) == (2024, 6, 1, 8, 15, 42)


def test_time_edit_with_seconds(catalog) -> None:
    store, _, reconciler, (utc,) = _setup(catalog, utc_ms(2024, 6, 1, 13, 30, 42), "UTC")
    assert reconciler.apply_time_edit(utc.id, 9, 0, 5).ok is True
    assert store.get() == utc_ms(2024, 6, 1, 9, 0, 5)


@pytest.mark.parametrize("hour, minute", [(25, 0), (12, 70), (-1, 0), (23, 60)])
def test_time_edit_out_of_range_is_rejected(catalog, hour, minute) -> None:
    start = utc_ms(2024, 6, 1, 13, 30)
    store, _, reconciler, (entry,) = _setup(catalog, start, "Europe/Paris")

    result = reconciler.apply_time_edit(entry.id, hour, minute)

    assert result.ok is False
    assert isinstance(result.error, InvalidCalendarDateError)
    assert result.instant == start
    assert store.get() == start


def test_time_edit_non_integer_is_malformed(catalog) -> None:
    start = utc_ms(2024, 6, 1, 13, 30)
    store, _, reconciler, (entry,) = _setup(catalog, start, "UTC")
    result = reconciler.apply_time_edit(entry.id, "10", 5)
    assert isinstance(result.error, MalformedInputError)
    assert store.get() == start


def test_time_edit_into_gap_rejected_by_default(catalog) -> None:
    start = utc_ms(2024, 3, 10, 12, 0)
    store, _, reconciler, (entry,) = _setup(catalog, start, "America/New_York")

    result = reconciler.apply_time_edit(entry.id, 2, 30)

    assert result.ok is False
    assert isinstance(result.error, NonExistentLocalTimeError)
    assert store.get() == start


def test_time_edit_into_gap_advances_when_configured(catalog) -> None:
    store, _, reconciler, (entry,) = _setup(
        catalog, utc_ms(2024, 3, 10, 12, 0), "America/New_York", on_gap=GapPolicy.ADVANCE
    )
    assert reconciler.apply_time_edit(entry.id, 2, 30).ok is True
    assert store.get() == utc_ms(2024, 3, 10, 7, 0)


def test_time_edit_into_overlap(catalog) -> None:
    store, _, reconciler, (entry,) = _setup(catalog, utc_ms(2024, 11, 3, 12, 0), "America/New_York")
    assert reconciler.apply_time_edit(entry.id, 1, 30).ok is True
    assert store.get() == utc_ms(2024, 11, 3, 5, 30)

    _, _, strict, (other,) = _setup(
        catalog,
        utc_ms(2024, 11, 3, 12, 0),
        "America/New_York",
        on_overlap=OverlapPolicy.REJECT,
    )
    result = strict.apply_time_edit(other.id, 1, 30)
    assert isinstance(result.error, AmbiguousLocalTimeError)


def test_date_edit_keeps_time_of_day(catalog) -> None:
    store, _, reconciler, (paris,) = _setup(catalog, utc_ms(2024, 6, 1, 13, 30), "Europe/Paris")

    result = reconciler.apply_date_edit(paris.id, 2024, 12, 24)

    assert result.ok is True
    # 15:30 CEST in June stays 15:30 wall time, now under CET.
    assert store.get() == utc_ms(2024, 12, 24, 14, 30)
    assert _wall(reconciler.local_time(paris.id)) == (2024, 12, 24, 15, 30, 0)


@pytest.mark.parametrize("year, month, day", [(2024, 4, 31), (2023, 2, 29), (2024, 13, 1), (2024, 0, 10)])
def test_date_edit_rejects_invalid_dates(catalog, year, month, day) -> None:
    start = utc_ms(2024, 6, 1, 13, 30)
    store, _, reconciler, (entry,) = _setup(catalog, start, "UTC")
    result = reconciler.apply_date_edit(entry.id, year, month, day)
    assert isinstance(result.error, InvalidCalendarDateError)
    assert store.get() == start


def test_date_edit_leap_day(catalog) -> None:
    store, _, reconciler, (entry,) = _setup(catalog, utc_ms(2024, 6, 1, 13, 30), "UTC")
    assert reconciler.apply_date_edit(entry.id, 2024, 2, 29).ok is True
    assert store.get() == utc_ms(2024, 2, 29, 13, 30)


def test_text_edits(catalog) -> None:
    store, _, reconciler, (entry,) = _setup(catalog, utc_ms(2024, 6, 1, 13, 30), "UTC")

    assert reconciler.apply_time_text(entry.id, "7:05 PM", use_24_hour=False).ok is True
    assert store.get() == utc_ms(2024, 6, 1, 19, 5)

    assert reconciler.apply_date_text(entry.id, "2025-01-02").ok is True
    assert store.get() == utc_ms(2025, 1, 2, 19, 5)

    result = reconciler.apply_time_text(entry.id, "7h05")
    assert isinstance(result.error, MalformedInputError)
    result = reconciler.apply_date_text(entry.id, "02/01/2025")
    assert isinstance(result.error, MalformedInputError)
    assert store.get() == utc_ms(2025, 1, 2, 19, 5)


def test_unknown_entry_is_rejected(catalog) -> None:
    start = utc_ms(2024, 6, 1, 13, 30)
    store, _, reconciler, _ = _setup(catalog, start, "UTC")
    for result in (
        reconciler.apply_time_edit("zone-404", 10, 0),
        reconciler.apply_date_edit("zone-404", 2024, 1, 1),
        reconciler.apply_zone_reassignment("zone-404", "Asia/Tokyo"),
    ):
        assert result.ok is False
        assert isinstance(result.error, UnknownEntryError)
    assert store.get() == start


def test_reassignment_anchors_edited_entry(catalog) -> None:
    # 14:30 in Lagos (UTC+1) is 13:30Z.
    store, registry, reconciler, (anchor, utc, paris) = _setup(
        catalog, utc_ms(2024, 6, 1, 13, 30), "Africa/Lagos", "UTC", "Europe/Paris"
    )
    before = {entry.id: reconciler.local_time(entry.id) for entry in (utc, paris)}

    result = reconciler.apply_zone_reassignment(anchor.id, "Asia/Tokyo")

    assert result.ok is True
    assert registry.get(anchor.id).zone == "Asia/Tokyo"
    anchored = reconciler.local_time(anchor.id)
    assert (anchored.hour, anchored.minute, anchored.utc_offset_minutes) == (14, 30, 540)
    # 14:30 in Tokyo happens 8 hours earlier than 14:30 in Lagos.
    assert store.get() == utc_ms(2024, 6, 1, 5, 30)
    for entry in (utc, paris):
        moved = reconciler.local_time(entry.id)
        shift = moved.to_naive() - before[entry.id].to_naive()
        assert shift == dt.timedelta(hours=-8)


@pytest.mark.parametrize(
    "old_zone, new_zone",
    [
        ("Europe/Paris", "America/New_York"),
        ("Asia/Kolkata", "Australia/Sydney"),
        ("UTC", "Asia/Kathmandu"),
        ("America/Los_Angeles", "Pacific/Auckland"),
    ],
)
def test_reassignment_preserves_wall_time(catalog, old_zone, new_zone) -> None:
    start = utc_ms(2024, 6, 12, 9, 41, 7) + 250
    store, _, reconciler, (entry,) = _setup(catalog, start, old_zone)
    before = reconciler.local_time(entry.id)

    assert reconciler.apply_zone_reassignment(entry.id, new_zone).ok is True

    after = reconciler.local_time(entry.id)
    assert after.to_naive() == before.to_naive()
    old_offset = offset_ms_at(start, catalog.tzinfo_for(old_zone))
    new_offset = offset_ms_at(store.get(), catalog.tzinfo_for(new_zone))
    assert store.get() - start == old_offset - new_offset


def test_reassignment_to_same_zone_is_identity(catalog) -> None:
    start = utc_ms(2024, 6, 1, 13, 30)
    store, _, reconciler, (entry,) = _setup(catalog, start, "Europe/Paris")
    assert reconciler.apply_zone_reassignment(entry.id, "Europe/Paris").ok is True
    assert store.get() == start


def test_reassignment_into_gap_advances(catalog) -> None:
    # 02:30 on 2024-03-10 in Tokyo, moved to New York where 02:30 is skipped.
    store, _, reconciler, (entry,) = _setup(catalog, utc_ms(2024, 3, 9, 17, 30), "Asia/Tokyo")

    assert reconciler.apply_zone_reassignment(entry.id, "America/New_York").ok is True

    assert store.get() == utc_ms(2024, 3, 10, 7, 0)
    assert _wall(reconciler.local_time(entry.id)) == (2024, 3, 10, 3, 0, 0)


def test_reassignment_into_overlap_takes_earlier(catalog) -> None:
    store, _, reconciler, (entry,) = _setup(catalog, utc_ms(2024, 11, 3, 1, 30), "UTC")
    assert reconciler.apply_zone_reassignment(entry.id, "America/New_York").ok is True
    assert store.get() == utc_ms(2024, 11, 3, 5, 30)


def test_reassignment_listener_sees_new_zone_with_new_instant(catalog) -> None:
    store, registry, reconciler, (lagos,) = _setup(catalog, utc_ms(2024, 6, 1, 13, 30), "Africa/Lagos")
    seen = []

    def _record(instant: int) -> None:
        zone = registry.get(lagos.id).zone
        local = project(instant, catalog.tzinfo_for(zone))
        seen.append((zone, local.hour, local.minute))

    store.add_listener("view", _record)

    assert reconciler.apply_zone_reassignment(lagos.id, "Asia/Tokyo").ok is True
    assert seen == [("Asia/Tokyo", 14, 30)]


def test_reassignment_outside_range_restores_zone(catalog) -> None:
    # 23:00 on 9999-12-30 in Los Angeles is past the last supported instant.
    start = utc_ms(9999, 12, 30, 23, 0)
    store, registry, reconciler, (entry,) = _setup(catalog, start, "UTC")
    seen = []
    store.add_listener("view", seen.append)

    result = reconciler.apply_zone_reassignment(entry.id, "America/Los_Angeles")

    assert result.ok is False
    assert isinstance(result.error, InvalidInstantError)
    assert store.get() == start
    assert registry.get(entry.id).zone == "UTC"
    assert seen == []


def test_reassignment_to_unknown_zone_changes_nothing(catalog) -> None:
    start = utc_ms(2024, 6, 1, 13, 30)
    store, registry, reconciler, (entry,) = _setup(catalog, start, "UTC")

    result = reconciler.apply_zone_reassignment(entry.id, "Mars/Olympus")

    assert isinstance(result.error, UnknownZoneError)
    assert store.get() == start
    assert registry.get(entry.id).zone == "UTC"


def test_time_step_wraps_within_day(catalog) -> None:
    store, _, reconciler, (entry,) = _setup(catalog, utc_ms(2024, 6, 1, 14, 30), "Asia/Tokyo")

    assert reconciler.apply_time_step(entry.id, "hour", 1).ok is True
    assert _wall(reconciler.local_time(entry.id)) == (2024, 6, 1, 0, 30, 0)

    assert reconciler.apply_time_step(entry.id, "minute", -31).ok is True
    assert _wall(reconciler.local_time(entry.id)) == (2024, 6, 1, 23, 59, 0)

    assert reconciler.apply_time_step(entry.id, "meridiem").ok is True
    assert _wall(reconciler.local_time(entry.id)) == (2024, 6, 1, 11, 59, 0)
    assert store.get() == utc_ms(2024, 6, 1, 2, 59)


def test_time_step_unknown_field(catalog) -> None:
    start = utc_ms(2024, 6, 1, 14, 30)
    store, _, reconciler, (entry,) = _setup(catalog, start, "UTC")
    result = reconciler.apply_time_step(entry.id, "second")
    assert isinstance(result.error, MalformedInputError)
    assert store.get() == start


def test_local_time_projects_current_instant(catalog) -> None:
    _, _, reconciler, (entry,) = _setup(catalog, utc_ms(2024, 6, 1, 13, 30), "Asia/Kolkata")
    assert reconciler.local_time(entry.id) == project(
        utc_ms(2024, 6, 1, 13, 30), catalog.tzinfo_for("Asia/Kolkata")
    )
