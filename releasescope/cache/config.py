"""Cache backend selection.

Usage
-----
>>> config = CacheConfig()
>>> config.backend
<CacheBackend.MEMORY: 'memory'>

"""

from __future__ import annotations

import dataclasses as dc
import enum
import os
from pathlib import Path

from releasescope.logging import get_logger, log_info

from .durable import FileCacheStore
from .store import CacheStore, MemoryCacheStore

logger = get_logger(__name__)

_DEFAULT_DIRECTORY = Path("cache")


class CacheBackend(enum.StrEnum):
    """Available cache store variants."""

    MEMORY = "memory"
    FILE = "file"


@dc.dataclass(frozen=True, slots=True)
class CacheConfig:
    """Configuration for the dashboard cache.

    Attributes
    ----------
    backend
        ``memory`` keeps entries in process; ``file`` also persists one JSON
        record per key so a restart can serve still-valid entries.
    directory
        Record directory used by the ``file`` backend.

    """

    backend: CacheBackend = CacheBackend.MEMORY
    directory: Path = _DEFAULT_DIRECTORY

    @classmethod
    def from_env(cls) -> CacheConfig:
        """Create configuration from environment variables.

        Reads ``RELEASESCOPE_CACHE_BACKEND`` (``memory`` or ``file``) and
        ``RELEASESCOPE_CACHE_DIR``.

        Raises
        ------
        ValueError
            If the backend names no known variant.

        """
        raw_backend = os.environ.get("RELEASESCOPE_CACHE_BACKEND", "").strip().lower()
        try:
            backend = CacheBackend(raw_backend) if raw_backend else CacheBackend.MEMORY
        except ValueError as exc:
            choices = ", ".join(member.value for member in CacheBackend)
            msg = (
                f"RELEASESCOPE_CACHE_BACKEND must be one of {choices}, "
                f"got: {raw_backend!r}"
            )
            raise ValueError(msg) from exc

        raw_directory = os.environ.get("RELEASESCOPE_CACHE_DIR", "").strip()
        directory = Path(raw_directory) if raw_directory else _DEFAULT_DIRECTORY
        return cls(backend=backend, directory=directory)


def build_cache_store(config: CacheConfig) -> CacheStore:
    """Return the store selected by ``config``.

    A ``FileCacheStore`` starts empty; await its ``load()`` before serving
    to restore the records left by a previous process.
    """
    if config.backend is CacheBackend.FILE:
        log_info(logger, "Using file-backed dashboard cache in %s", config.directory)
        return FileCacheStore(config.directory)
    log_info(logger, "Using in-memory dashboard cache")
    return MemoryCacheStore()
