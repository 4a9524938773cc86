"""Session facade wiring the instant, the zone displays and the edit rules."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from .catalog import LOCAL_ZONE, ZoneCatalog, default_catalog
from .config import AppConfig
from .formatting import day_night, format_date, format_time
from .instant import InstantStore
from .logging_utils import get_logger
from .projection import CalendarDateTime, project
from .reconciler import EditResult, Reconciler
from .registry import ZoneEntry, ZoneRegistry
from .time_utils import elapsed_s, monotonic_now, now_ms


@dataclass
class DisplaySettings:
    use_24_hour: bool = True
    show_date: bool = True


class RefreshPolicy:
    """Decide whether a periodic "now" proposal may replace the instant.

    Proposals are ignored for ``suppress_after_edit_s`` seconds after the
    last manual edit so a refresh never undoes what the user just set.
    """

    def __init__(
        self,
        suppress_after_edit_s: float,
        *,
        clock: Callable[[], float] = monotonic_now,
    ) -> None:
        self._suppress_s = max(0.0, float(suppress_after_edit_s))
        self._clock = clock
        self._last_edit: float | None = None

    def record_edit(self) -> None:
        self._last_edit = self._clock()

    def allows_refresh(self) -> bool:
        if self._last_edit is None or self._suppress_s == 0:
            return True
        return elapsed_s(self._last_edit, self._clock()) >= self._suppress_s


@dataclass(frozen=True)
class ZoneView:
    entry_id: str
    zone: str
    local: CalendarDateTime
    time_text: str
    date_text: str | None
    label: str
    day_night: str
    deletable: bool


class Session:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        catalog: ZoneCatalog | None = None,
        now: int | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = monotonic_now,
    ) -> None:
        self._config = config or AppConfig()
        self._catalog = catalog or default_catalog()
        self._log = get_logger("session")
        self.settings = DisplaySettings(
            use_24_hour=self._config.display.use_24_hour,
            show_date=self._config.display.show_date,
        )
        self.store = InstantStore(now_ms() if now is None else now)
        self.registry = ZoneRegistry(
            self._catalog,
            candidates=self._config.zones.candidates,
            rng=rng,
        )
        self.reconciler = Reconciler(
            self.store,
            self.registry,
            self._catalog,
            on_gap=self._config.edits.on_gap,
            on_overlap=self._config.edits.on_overlap,
        )
        self.refresh_policy = RefreshPolicy(
            self._config.refresh.suppress_after_edit_s, clock=clock
        )
        for zone in self._config.zones.initial:
            if zone == LOCAL_ZONE:
                zone = self._catalog.resolve_local_zone()
            self.registry.add(zone)

    @property
    def instant(self) -> int:
        return self.store.get()

    @property
    def catalog(self) -> ZoneCatalog:
        return self._catalog

    def entries(self) -> list[ZoneEntry]:
        return self.registry.list()

    def add_zone(self, zone: str | None = None) -> ZoneEntry:
        return self.registry.add(zone)

    def is_deletable(self, entry_id: str) -> bool:
        index = self.registry.index_of(entry_id)
        if index < 0:
            return False
        minimum = self._config.zones.min_entries
        return len(self.registry) > minimum or index >= minimum

    def remove_zone(self, entry_id: str) -> bool:
        if not self.is_deletable(entry_id):
            self._log.debug("Refusing to remove {}", entry_id)
            return False
        return self.registry.remove(entry_id)

    def apply_time_edit(
        self, entry_id: str, hour: int, minute: int, second: int | None = None
    ) -> EditResult:
        return self._record(self.reconciler.apply_time_edit(entry_id, hour, minute, second))

    def apply_date_edit(self, entry_id: str, year: int, month: int, day: int) -> EditResult:
        return self._record(self.reconciler.apply_date_edit(entry_id, year, month, day))

    def apply_zone_reassignment(self, entry_id: str, new_zone: str) -> EditResult:
        return self._record(self.reconciler.apply_zone_reassignment(entry_id, new_zone))

    def apply_time_text(self, entry_id: str, text: str) -> EditResult:
        return self._record(
            self.reconciler.apply_time_text(
                entry_id, text, use_24_hour=self.settings.use_24_hour
            )
        )

    def apply_date_text(self, entry_id: str, text: str) -> EditResult:
        return self._record(self.reconciler.apply_date_text(entry_id, text))

    def apply_time_step(self, entry_id: str, field: str, step: int = 1) -> EditResult:
        return self._record(self.reconciler.apply_time_step(entry_id, field, step))

    def refresh(self, now: object | None = None) -> bool:
        """Propose a fresh "now"; returns True when the instant was replaced."""

        if not self.refresh_policy.allows_refresh():
            self._log.debug("Refresh suppressed after recent manual edit")
            return False
        return self.store.set(now_ms() if now is None else now)

    def views(self) -> list[ZoneView]:
        instant = self.store.get()
        views = []
        for entry in self.registry.list():
            local = project(instant, self._catalog.tzinfo_for(entry.zone))
            metadata = self._catalog.metadata_for(entry.zone, instant)
            views.append(
                ZoneView(
                    entry_id=entry.id,
                    zone=entry.zone,
                    local=local,
                    time_text=format_time(local, self.settings.use_24_hour),
                    date_text=format_date(local) if self.settings.show_date else None,
                    label=metadata.label,
                    day_night=day_night(local),
                    deletable=self.is_deletable(entry.id),
                )
            )
        return views

    def _record(self, result: EditResult) -> EditResult:
        if result.ok:
            self.refresh_policy.record_edit()
        return result
