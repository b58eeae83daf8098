r"""Durable cache store persisting one JSON record per key.

Records live at ``{directory}/{key}.json`` and hold the serialized
payload with its creation timestamp and TTL::

    {"payload": {...}, "timestamp": 1723100000000.0, "ttl": 1800000.0}

The in-memory map stays authoritative while the process runs; the files
let a restarted process serve still-valid entries. ``load()`` restores
valid records and deletes expired or unreadable ones. File I/O runs in a
worker thread so the event loop only suspends while it completes.

Usage
-----
>>> import asyncio
>>> from pathlib import Path
>>> store = FileCacheStore(Path("cache"))
>>> asyncio.run(store.load())
0

"""

from __future__ import annotations

import asyncio
import os
import typing as typ

import msgspec

from releasescope.common.time import epoch_millis
from releasescope.logging import (
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)

from .errors import CacheKeyError
from .store import CacheEntry, MemoryCacheStore

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .store import Clock

logger = get_logger(__name__)

_RECORD_SUFFIX = ".json"
_TEMP_SUFFIX = ".tmp"


class _CacheRecord(msgspec.Struct, frozen=True):
    """On-disk layout of a cache entry with the payload left undecoded."""

    payload: msgspec.Raw
    timestamp: float
    ttl: float


_RECORD_DECODER = msgspec.json.Decoder(_CacheRecord)


def _write_atomically(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(path.name + _TEMP_SUFFIX)
    temp_path.write_bytes(data)
    os.replace(temp_path, path)


class FileCacheStore(MemoryCacheStore):
    """``CacheStore`` mirroring every entry to a JSON record on disk.

    Parameters
    ----------
    directory
        Directory holding the records; created on first write.
    clock
        Millisecond clock used for timestamps and validity checks.

    """

    def __init__(self, directory: Path, *, clock: Clock = epoch_millis) -> None:
        """Create a store over ``directory``; call ``load()`` to restore records."""
        super().__init__(clock=clock)
        self._directory = directory

    @property
    def directory(self) -> Path:
        """Return the record directory."""
        return self._directory

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise CacheKeyError.unsafe_key(key)
        return self._directory / f"{key}{_RECORD_SUFFIX}"

    def _record_paths(self) -> list[Path]:
        if not self._directory.is_dir():
            return []
        return sorted(self._directory.glob(f"*{_RECORD_SUFFIX}"))

    async def load(self) -> int:
        """Restore valid records from disk and prune the rest.

        Returns
        -------
        int
            Number of entries restored into memory.

        """
        paths = await asyncio.to_thread(self._record_paths)
        restored = 0
        for path in paths:
            key = path.name.removesuffix(_RECORD_SUFFIX)
            try:
                data = await asyncio.to_thread(path.read_bytes)
                record = _RECORD_DECODER.decode(data)
            except (OSError, msgspec.DecodeError) as exc:
                log_warning(logger, "Removing unreadable cache record %s: %s", key, exc)
                await asyncio.to_thread(path.unlink, missing_ok=True)
                continue

            entry = CacheEntry(
                payload=record.payload, timestamp=record.timestamp, ttl=record.ttl
            )
            if not entry.is_valid(self._now()):
                log_info(logger, "Removing expired cache record %s", key)
                await asyncio.to_thread(path.unlink, missing_ok=True)
                continue

            self._restore(key, entry)
            restored += 1

        log_info(logger, "Restored %d cache entries from %s", restored, self._directory)
        return restored

    async def set(self, key: str, value: object, *, ttl_ms: float) -> None:
        """Store ``value`` in memory and persist it as the record for ``key``.

        A payload that cannot be serialized stays cached in memory only and
        the failure is logged.
        """
        path = self._path_for(key)
        await super().set(key, value, ttl_ms=ttl_ms)
        entry = self._entries[key]
        try:
            data = msgspec.json.encode(entry)
        except (msgspec.EncodeError, TypeError) as exc:
            log_error(
                logger,
                "Cache entry %s could not be serialized; kept in memory only: %s",
                key,
                exc,
            )
            return
        try:
            await asyncio.to_thread(_write_atomically, path, data)
        except OSError as exc:
            log_exception(logger, f"Failed to persist cache entry {key}", exc)

    async def delete(self, key: str) -> None:
        """Remove ``key`` from memory and delete its record."""
        await super().delete(key)
        path = self._path_for(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as exc:
            log_error(logger, "Failed to delete cache record %s: %s", key, exc)

    async def clear(self) -> None:
        """Remove every entry and every record file."""
        await super().clear()
        for path in await asyncio.to_thread(self._record_paths):
            try:
                await asyncio.to_thread(path.unlink, missing_ok=True)
            except OSError as exc:
                log_error(logger, "Failed to delete cache record %s: %s", path, exc)
        log_info(logger, "Cleared cache directory %s", self._directory)
