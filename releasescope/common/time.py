"""Clock helpers shared by the cache and the dashboard service."""

from __future__ import annotations

import datetime as dt
import time


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def epoch_millis() -> float:
    """Return the wall-clock time in milliseconds since the epoch."""
    return time.time() * 1000.0


def isoformat_z(value: dt.datetime) -> str:
    """Render an aware datetime as ISO-8601 UTC with a ``Z`` suffix."""
    return value.astimezone(dt.UTC).isoformat().replace("+00:00", "Z")
