"""Error types raised by the synchronization and calendar engine."""

from __future__ import annotations


class ZoneSyncError(ValueError):
    """Base error for rejected input and edits."""


class InvalidInstantError(ZoneSyncError):
    """Candidate instant is not a finite integral epoch-millisecond value."""


class InvalidCalendarDateError(ZoneSyncError):
    """Calendar or clock fields do not name a real date/time."""


class UnknownZoneError(ZoneSyncError):
    """Zone identifier is not present in the catalog."""


class UnknownEntryError(ZoneSyncError):
    """No registry entry with the given id."""


class LocalTimeError(ZoneSyncError):
    """Local wall time does not map to exactly one instant."""


class NonExistentLocalTimeError(LocalTimeError):
    """Local time falls inside a spring-forward gap."""


class AmbiguousLocalTimeError(LocalTimeError):
    """Local time occurs twice inside a fall-back overlap."""


class MalformedInputError(ZoneSyncError):
    """User text could not be parsed with the accepted formats."""
