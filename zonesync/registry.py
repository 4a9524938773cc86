"""Ordered collection of zone displays."""

from __future__ import annotations

import dataclasses
import itertools
import random
import threading
from dataclasses import dataclass
from typing import Sequence

from .catalog import ZoneCatalog
from .catalog_data import POPULAR_ZONES
from .errors import UnknownZoneError
from .logging_utils import get_logger

RANDOM_ZONE = "random"


@dataclass(frozen=True)
class ZoneEntry:
    id: str
    zone: str


class ZoneRegistry:
    """Entries keep insertion order; ids come from a monotonic counter.

    The registry only validates zone names. It never touches the shared
    instant and does not enforce a minimum number of entries.
    """

    def __init__(
        self,
        catalog: ZoneCatalog,
        *,
        candidates: Sequence[str] | None = None,
        rng: random.Random | None = None,
        id_prefix: str = "zone",
    ) -> None:
        self._catalog = catalog
        self._candidates = tuple(POPULAR_ZONES if candidates is None else candidates)
        if not self._candidates:
            raise ValueError("candidate zone list is empty")
        for zone in self._candidates:
            self._require_zone(zone)
        self._rng = rng or random.Random()
        self._id_prefix = id_prefix
        self._ids = itertools.count(1)
        self._entries: list[ZoneEntry] = []
        self._lock = threading.Lock()
        self._log = get_logger("registry")

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    def add(self, zone: str | None = None) -> ZoneEntry:
        if not zone or zone == RANDOM_ZONE:
            zone = self._rng.choice(self._candidates)
        self._require_zone(zone)
        with self._lock:
            entry = ZoneEntry(id=f"{self._id_prefix}-{next(self._ids)}", zone=zone)
            self._entries.append(entry)
        self._log.debug("Added {} ({})", entry.id, entry.zone)
        return entry

    def remove(self, entry_id: str) -> bool:
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.id == entry_id:
                    del self._entries[index]
                    break
            else:
                return False
        self._log.debug("Removed {} ({})", entry.id, entry.zone)
        return True

    def reassign(self, entry_id: str, new_zone: str) -> bool:
        self._require_zone(new_zone)
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.id == entry_id:
                    self._entries[index] = dataclasses.replace(entry, zone=new_zone)
                    return True
        return False

    def get(self, entry_id: str) -> ZoneEntry | None:
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def index_of(self, entry_id: str) -> int:
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.id == entry_id:
                    return index
        return -1

    def list(self) -> list[ZoneEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _require_zone(self, zone: str) -> None:
        if not self._catalog.is_valid(zone):
            raise UnknownZoneError(f"Unknown zone identifier: {zone!r}")
