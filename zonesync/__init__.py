"""Keep one instant in sync across time zones and do calendar arithmetic."""

from __future__ import annotations

from .catalog import ZoneCatalog, ZoneMetadata, default_catalog
from .config import AppConfig, load_config
from .duration import Direction, DurationBreakdown, DurationVector, difference, shift
from .errors import (
    AmbiguousLocalTimeError,
    InvalidCalendarDateError,
    InvalidInstantError,
    MalformedInputError,
    NonExistentLocalTimeError,
    UnknownEntryError,
    UnknownZoneError,
    ZoneSyncError,
)
from .instant import InstantStore
from .logging_utils import configure_logging
from .projection import CalendarDateTime, GapPolicy, OverlapPolicy, project, to_instant
from .reconciler import EditResult, Reconciler
from .registry import ZoneEntry, ZoneRegistry
from .session import DisplaySettings, RefreshPolicy, Session, ZoneView

__all__ = [
    "AmbiguousLocalTimeError",
    "AppConfig",
    "CalendarDateTime",
    "Direction",
    "DisplaySettings",
    "DurationBreakdown",
    "DurationVector",
    "EditResult",
    "GapPolicy",
    "InstantStore",
    "InvalidCalendarDateError",
    "InvalidInstantError",
    "MalformedInputError",
    "NonExistentLocalTimeError",
    "OverlapPolicy",
    "Reconciler",
    "RefreshPolicy",
    "Session",
    "UnknownEntryError",
    "UnknownZoneError",
    "ZoneCatalog",
    "ZoneEntry",
    "ZoneMetadata",
    "ZoneRegistry",
    "ZoneSyncError",
    "ZoneView",
    "configure_logging",
    "default_catalog",
    "difference",
    "load_config",
    "project",
    "shift",
    "to_instant",
]
