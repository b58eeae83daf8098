"""Errors raised by the cache layer."""

from __future__ import annotations


class CacheKeyError(ValueError):
    """Raised when a cache key cannot be built or stored."""

    @classmethod
    def missing_identifier(cls, kind: str) -> CacheKeyError:
        """Return an error for a scoped kind built without an identifier."""
        return cls(f"Cache kind {kind!r} requires a repository identifier")

    @classmethod
    def invalid_identifier(cls, identifier: str) -> CacheKeyError:
        """Return an error for an identifier that is not ``owner/name``."""
        return cls(
            "Invalid repository identifier: expected 'owner/name', "
            f"got {identifier!r}"
        )

    @classmethod
    def unknown_kind(cls, kind: str) -> CacheKeyError:
        """Return an error for a kind outside ``CacheKind``."""
        return cls(f"Unknown cache kind: {kind!r}")

    @classmethod
    def unsafe_key(cls, key: str) -> CacheKeyError:
        """Return an error for a key that cannot name a cache record file."""
        return cls(f"Cache key cannot be stored on disk: {key!r}")
