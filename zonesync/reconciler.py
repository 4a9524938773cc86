"""Turn edits on one zone display into a new shared instant.

Every edit projects the current instant into the edited entry's zone, changes
some calendar fields, and re-encodes the result. A zone reassignment keeps the
entry's wall-clock reading and moves the instant instead, so the edited entry
stays fixed while every other display shifts by the offset difference.

Edits never raise for bad input: they return an :class:`EditResult` and leave
the instant and the registry as they were.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .catalog import ZoneCatalog
from .errors import MalformedInputError, UnknownEntryError, ZoneSyncError
from .instant import InstantStore
from .logging_utils import get_logger
from .parsing import parse_date, parse_time_of_day
from .projection import (
    CalendarDateTime,
    GapPolicy,
    OverlapPolicy,
    project,
    to_instant,
)
from .registry import ZoneEntry, ZoneRegistry

STEP_FIELDS = ("hour", "minute", "meridiem")


@dataclass(frozen=True)
class EditResult:
    ok: bool
    instant: int
    error: ZoneSyncError | None = None


def _require_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(f"{name} must be an integer, got {value!r}")
    return value


class Reconciler:
    def __init__(
        self,
        store: InstantStore,
        registry: ZoneRegistry,
        catalog: ZoneCatalog,
        *,
        on_gap: GapPolicy = GapPolicy.REJECT,
        on_overlap: OverlapPolicy = OverlapPolicy.EARLIER,
    ) -> None:
        self._store = store
        self._registry = registry
        self._catalog = catalog
        self._on_gap = GapPolicy(on_gap)
        self._on_overlap = OverlapPolicy(on_overlap)
        self._log = get_logger("reconciler")

    def local_time(self, entry_id: str) -> CalendarDateTime:
        entry = self._entry(entry_id)
        return project(self._store.get(), self._catalog.tzinfo_for(entry.zone))

    def apply_time_edit(
        self, entry_id: str, hour: int, minute: int, second: int | None = None
    ) -> EditResult:
        def _compute() -> int:
            changes = {
                "hour": _require_int("hour", hour),
                "minute": _require_int("minute", minute),
            }
            if second is not None:
                changes["second"] = _require_int("second", second)
            return self._reencode(entry_id, changes)

        return self._commit("time", entry_id, _compute)

    def apply_date_edit(self, entry_id: str, year: int, month: int, day: int) -> EditResult:
        def _compute() -> int:
            changes = {
                "year": _require_int("year", year),
                "month": _require_int("month", month),
                "day": _require_int("day", day),
            }
            return self._reencode(entry_id, changes)

        return self._commit("date", entry_id, _compute)

    def apply_time_text(self, entry_id: str, text: str, *, use_24_hour: bool = True) -> EditResult:
        try:
            parsed = parse_time_of_day(text, use_24_hour=use_24_hour)
        except MalformedInputError as exc:
            return self._reject("time", entry_id, exc)
        return self.apply_time_edit(entry_id, parsed.hour, parsed.minute, parsed.second)

    def apply_date_text(self, entry_id: str, text: str) -> EditResult:
        try:
            parsed = parse_date(text)
        except MalformedInputError as exc:
            return self._reject("date", entry_id, exc)
        return self.apply_date_edit(entry_id, parsed.year, parsed.month, parsed.day)

    def apply_time_step(self, entry_id: str, field: str, step: int = 1) -> EditResult:
        """Nudge the clock of one entry, wrapping within its current date."""

        def _compute() -> int:
            if field not in STEP_FIELDS:
                raise MalformedInputError(f"Unknown step field {field!r}")
            current = self.local_time(entry_id)
            delta = _require_int("step", step)
            if field == "hour":
                minutes = current.hour * 60 + current.minute + delta * 60
            elif field == "minute":
                minutes = current.hour * 60 + current.minute + delta
            else:
                minutes = ((current.hour + 12) % 24) * 60 + current.minute
            hour, minute = divmod(minutes % (24 * 60), 60)
            return self._reencode(entry_id, {"hour": hour, "minute": minute})

        return self._commit("step", entry_id, _compute)

    def apply_zone_reassignment(self, entry_id: str, new_zone: str) -> EditResult:
        """Switch an entry's zone while keeping its displayed wall time."""

        try:
            entry = self._entry(entry_id)
            new_tz = self._catalog.tzinfo_for(new_zone)
            current = project(self._store.get(), self._catalog.tzinfo_for(entry.zone))
            candidate = to_instant(
                current,
                new_tz,
                on_gap=GapPolicy.ADVANCE,
                on_overlap=OverlapPolicy.EARLIER,
            )
            previous = self._store.get()
            # Zone first, so instant listeners never see the new instant
            # paired with the old zone.
            if not self._registry.reassign(entry_id, new_zone):
                raise UnknownEntryError(f"No zone entry {entry_id!r}")
            try:
                instant = self._store.try_set(candidate)
            except ZoneSyncError:
                self._registry.reassign(entry_id, entry.zone)
                raise
        except ZoneSyncError as exc:
            return self._reject("zone", entry_id, exc)
        self._log.info(
            "Anchored {} at {} while moving {} -> {} (instant shift {} ms)",
            entry_id,
            current.to_naive().isoformat(timespec="seconds"),
            entry.zone,
            new_zone,
            instant - previous,
        )
        return EditResult(ok=True, instant=instant)

    def _entry(self, entry_id: str) -> ZoneEntry:
        entry = self._registry.get(entry_id)
        if entry is None:
            raise UnknownEntryError(f"No zone entry {entry_id!r}")
        return entry

    def _reencode(self, entry_id: str, changes: dict[str, int]) -> int:
        entry = self._entry(entry_id)
        tzinfo = self._catalog.tzinfo_for(entry.zone)
        current = project(self._store.get(), tzinfo)
        edited = current.replace(**changes)
        return to_instant(edited, tzinfo, on_gap=self._on_gap, on_overlap=self._on_overlap)

    def _commit(self, kind: str, entry_id: str, compute: Callable[[], int]) -> EditResult:
        try:
            instant = self._store.try_set(compute())
        except ZoneSyncError as exc:
            return self._reject(kind, entry_id, exc)
        return EditResult(ok=True, instant=instant)

    def _reject(self, kind: str, entry_id: str, exc: ZoneSyncError) -> EditResult:
        self._log.debug("Rejected {} edit on {}: {}", kind, entry_id, exc)
        return EditResult(ok=False, instant=self._store.get(), error=exc)
