"""Zone catalog: valid identifiers, tzinfo resolution and display metadata."""

from __future__ import annotations

import datetime as dt
import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from dateutil import tz
from dateutil.zoneinfo import get_zonefile_instance

from .catalog_data import ABBREVIATION_FALLBACKS, COUNTRY_BY_ZONE, UNIVERSAL_TIME
from .errors import UnknownZoneError
from .formatting import format_offset
from .logging_utils import get_logger
from .projection import offset_ms_at
from .time_utils import from_epoch_ms, now_ms

UTC_ZONE = "UTC"
LOCAL_ZONE = "local"

_NON_GEOGRAPHIC = {"Factory", "localtime", "posixrules"}
_ABBREVIATION_RE = re.compile(r"^[A-Z]{3,5}$")


@dataclass(frozen=True)
class ZoneMetadata:
    zone: str
    country: str
    city: str
    offset: str
    offset_minutes: int
    abbreviation: str | None
    label: str


UNIVERSAL_METADATA = ZoneMetadata(
    zone=UTC_ZONE,
    country=UNIVERSAL_TIME,
    city=UTC_ZONE,
    offset="+00:00",
    offset_minutes=0,
    abbreviation=UTC_ZONE,
    label="Universal Time (UTC, GMT+00:00)",
)


def bundled_zone_names() -> frozenset[str]:
    """IANA names shipped with python-dateutil's zone database, plus UTC."""

    names = {name for name in get_zonefile_instance().zones if name not in _NON_GEOGRAPHIC}
    names.add(UTC_ZONE)
    return frozenset(names)


class ZoneCatalog:
    def __init__(
        self,
        identifiers: Iterable[str] | None = None,
        *,
        countries: Mapping[str, str] | None = None,
        abbreviations: Mapping[str, str] | None = None,
    ) -> None:
        self._identifiers = (
            frozenset(identifiers) if identifiers is not None else bundled_zone_names()
        )
        self._countries = dict(COUNTRY_BY_ZONE if countries is None else countries)
        self._abbreviations = dict(
            ABBREVIATION_FALLBACKS if abbreviations is None else abbreviations
        )
        self._log = get_logger("catalog")

    def list_zone_identifiers(self) -> frozenset[str]:
        return self._identifiers

    def is_valid(self, zone: object) -> bool:
        return isinstance(zone, str) and zone in self._identifiers

    def tzinfo_for(self, zone: str) -> dt.tzinfo:
        if not self.is_valid(zone):
            raise UnknownZoneError(f"Unknown zone identifier: {zone!r}")
        if zone == UTC_ZONE:
            return tz.UTC
        tzinfo = tz.gettz(zone)
        if tzinfo is None:
            raise UnknownZoneError(f"No zone data for {zone!r}")
        return tzinfo

    def country_for(self, zone: str) -> str:
        country = self._countries.get(zone)
        if country:
            return country
        if "/" in zone:
            return zone.rsplit("/", 1)[-1].replace("_", " ")
        return zone

    def metadata_for(self, zone: str, at_ms: int | None = None) -> ZoneMetadata:
        """Describe ``zone`` at an instant; unknown zones fall back to Universal Time."""

        if zone == UTC_ZONE:
            return UNIVERSAL_METADATA
        try:
            tzinfo = self.tzinfo_for(zone)
        except UnknownZoneError as exc:
            self._log.debug("Metadata lookup failed, using Universal Time: {}", exc)
            return UNIVERSAL_METADATA

        at_ms = now_ms() if at_ms is None else at_ms
        offset_minutes = offset_ms_at(at_ms, tzinfo) // 60_000
        offset = format_offset(offset_minutes)
        abbreviation = self._abbreviation(zone, tzinfo, at_ms)
        country = self.country_for(zone)
        city = zone.rsplit("/", 1)[-1].replace("_", " ")
        location = country if country == city else f"{country} - {city}"
        if abbreviation:
            label = f"{location} ({abbreviation}, GMT{offset})"
        else:
            label = f"{location} (GMT{offset})"
        return ZoneMetadata(
            zone=zone,
            country=country,
            city=city,
            offset=offset,
            offset_minutes=offset_minutes,
            abbreviation=abbreviation,
            label=label,
        )

    def options(self, at_ms: int | None = None) -> list[ZoneMetadata]:
        at_ms = now_ms() if at_ms is None else at_ms
        items = [self.metadata_for(zone, at_ms) for zone in self._identifiers]
        return sorted(items, key=lambda item: (item.country, item.zone))

    def resolve_local_zone(
        self,
        environ: Mapping[str, str] | None = None,
        localtime_path: Path = Path("/etc/localtime"),
    ) -> str:
        """Best-effort IANA name of the host zone; ``UTC`` when unknown."""

        environ = os.environ if environ is None else environ
        candidate = (environ.get("TZ") or "").lstrip(":")
        if self.is_valid(candidate):
            return candidate
        try:
            target = str(localtime_path.resolve())
        except OSError:
            target = ""
        if "zoneinfo/" in target:
            candidate = target.split("zoneinfo/", 1)[1]
            if self.is_valid(candidate):
                return candidate
        return UTC_ZONE

    def _abbreviation(self, zone: str, tzinfo: dt.tzinfo, at_ms: int) -> str | None:
        name = from_epoch_ms(at_ms).astimezone(tzinfo).tzname()
        if name and _ABBREVIATION_RE.match(name):
            return name
        return self._abbreviations.get(zone)


_default_catalog: ZoneCatalog | None = None
_default_lock = threading.Lock()


def default_catalog() -> ZoneCatalog:
    global _default_catalog
    with _default_lock:
        if _default_catalog is None:
            _default_catalog = ZoneCatalog()
        return _default_catalog
