"""TTL cache store contract and the in-memory implementation.

An entry is valid while ``now - timestamp < ttl`` (milliseconds). Reads
never return an expired entry: it is evicted on the read that finds it
and reported as absent. Writes replace entries wholesale, so a reader
never observes a partially-built payload.

Usage
-----
>>> import asyncio
>>> store = MemoryCacheStore()
>>> asyncio.run(store.set("dashboard", {"totalReleases": 3}, ttl_ms=60_000))
>>> asyncio.run(store.get("dashboard"))
{'totalReleases': 3}

"""

from __future__ import annotations

import typing as typ

import msgspec

from releasescope.common.time import epoch_millis
from releasescope.logging import get_logger, log_debug, log_warning

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)

Clock: typ.TypeAlias = "cabc.Callable[[], float]"


def _encoded_size(payload: object) -> int:
    if isinstance(payload, msgspec.Raw):
        return memoryview(payload).nbytes
    try:
        return len(msgspec.json.encode(payload))
    except (msgspec.EncodeError, TypeError):
        return 0


class CacheEntry(msgspec.Struct, frozen=True):
    """A cached payload with its creation time and time-to-live.

    Attributes
    ----------
    payload
        Cached value. Entries reloaded from disk hold ``msgspec.Raw`` JSON
        until the first read decodes them.
    timestamp
        Creation time in epoch milliseconds.
    ttl
        Time-to-live in milliseconds.

    """

    payload: typ.Any
    timestamp: float
    ttl: float

    def is_valid(self, now: float) -> bool:
        """Return whether the entry may still be served at ``now``."""
        return now - self.timestamp < self.ttl


class CacheStatus(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Observability snapshot of a cache store."""

    keys: tuple[str, ...] = ()
    approx_size_bytes: int = 0


@typ.runtime_checkable
class CacheStore(typ.Protocol):
    """Contract shared by the memory-only and durable cache stores."""

    async def get(self, key: str, payload_type: typ.Any = typ.Any) -> typ.Any | None:
        """Return the valid payload stored under ``key`` or ``None``."""
        ...

    async def set(self, key: str, value: object, *, ttl_ms: float) -> None:
        """Store ``value`` under ``key`` with a fresh timestamp."""
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""
        ...

    async def clear(self) -> None:
        """Remove every entry."""
        ...

    async def status(self) -> CacheStatus:
        """Return the valid keys and their approximate serialized size."""
        ...


class MemoryCacheStore:
    """Process-local ``CacheStore`` backed by a dict of ``CacheEntry``."""

    def __init__(self, *, clock: Clock = epoch_millis) -> None:
        """Create an empty store reading time from ``clock`` (milliseconds)."""
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def _now(self) -> float:
        return self._clock()

    async def get(self, key: str, payload_type: typ.Any = typ.Any) -> typ.Any | None:
        """Return the payload under ``key`` if it is still valid.

        Parameters
        ----------
        key
            Cache key, usually built with ``cache_key``.
        payload_type
            Type used to decode payloads reloaded from disk. Payloads set
            in this process are returned as stored.

        Returns
        -------
        Any | None
            The payload, or ``None`` when the key is absent, expired or
            holds a payload that no longer decodes as ``payload_type``.

        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_valid(self._now()):
            log_debug(logger, "Cache entry %s expired", key)
            await self.delete(key)
            return None
        if not isinstance(entry.payload, msgspec.Raw):
            return entry.payload

        try:
            payload = msgspec.json.decode(entry.payload, type=payload_type)
        except (msgspec.DecodeError, msgspec.ValidationError) as exc:
            log_warning(logger, "Discarding undecodable cache entry %s: %s", key, exc)
            await self.delete(key)
            return None
        self._entries[key] = msgspec.structs.replace(entry, payload=payload)
        return payload

    async def set(self, key: str, value: object, *, ttl_ms: float) -> None:
        """Store ``value`` under ``key`` for ``ttl_ms`` milliseconds."""
        self._entries[key] = CacheEntry(
            payload=value, timestamp=self._now(), ttl=ttl_ms
        )
        log_debug(logger, "Cached %s (ttl=%d ms)", key, ttl_ms)

    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._entries.pop(key, None)

    async def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    async def status(self) -> CacheStatus:
        """Summarize the valid entries without evicting expired ones."""
        now = self._now()
        valid = {
            key: entry
            for key, entry in self._entries.items()
            if entry.is_valid(now)
        }
        return CacheStatus(
            keys=tuple(sorted(valid)),
            approx_size_bytes=sum(
                _encoded_size(entry.payload) for entry in valid.values()
            ),
        )

    def _restore(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry
