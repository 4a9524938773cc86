"""Single shared instant behind every zone display."""

from __future__ import annotations

import math
import numbers
import threading
from typing import Callable

from .errors import InvalidInstantError
from .logging_utils import get_logger
from .projection import MAX_INSTANT_MS, MIN_INSTANT_MS
from .time_utils import now_ms


def coerce_instant(candidate: object) -> int:
    """Return ``candidate`` as integral epoch milliseconds or raise InvalidInstantError."""

    if isinstance(candidate, bool):
        raise InvalidInstantError(f"Not a timestamp: {candidate!r}")
    if isinstance(candidate, numbers.Integral):
        value = int(candidate)
    elif isinstance(candidate, numbers.Real):
        as_float = float(candidate)
        if not math.isfinite(as_float) or not as_float.is_integer():
            raise InvalidInstantError(f"Not a finite integral timestamp: {candidate!r}")
        value = int(as_float)
    else:
        raise InvalidInstantError(f"Not a timestamp: {candidate!r}")
    if not MIN_INSTANT_MS <= value <= MAX_INSTANT_MS:
        raise InvalidInstantError(f"Timestamp outside the calendar range: {value}")
    return value


class InstantStore:
    """Mutable cell holding the canonical epoch-millisecond instant.

    Writes are serialized by a lock and replace the whole value, so readers
    always see a complete instant. Listeners run after a successful change,
    outside the lock, in registration order.
    """

    def __init__(self, initial: object | None = None) -> None:
        self._lock = threading.Lock()
        self._value = coerce_instant(now_ms() if initial is None else initial)
        self._listeners: dict[str, Callable[[int], None]] = {}
        self._log = get_logger("instant")

    def get(self) -> int:
        with self._lock:
            return self._value

    def set(self, candidate: object) -> bool:
        try:
            self.try_set(candidate)
        except InvalidInstantError as exc:
            self._log.debug("Rejected instant: {}", exc)
            return False
        return True

    def try_set(self, candidate: object) -> int:
        value = coerce_instant(candidate)
        with self._lock:
            changed = value != self._value
            self._value = value
            listeners = list(self._listeners.items())
        if changed:
            for name, listener in listeners:
                try:
                    listener(value)
                except Exception as exc:  # pragma: no cover
                    self._log.warning("Instant listener {} failed: {}", name, exc)
        return value

    def add_listener(self, name: str, listener: Callable[[int], None]) -> None:
        if not name:
            return
        with self._lock:
            self._listeners[name] = listener

    def remove_listener(self, name: str) -> None:
        with self._lock:
            self._listeners.pop(name, None)
