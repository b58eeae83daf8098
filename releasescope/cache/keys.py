"""Cache key construction.

Keys are plain strings. Unscoped kinds use the kind name as the key;
repository-scoped keys join the kind and the ``owner/name`` identifier
with ``~``, replacing every ``/`` in the identifier with the same
delimiter:

>>> cache_key(CacheKind.REPOSITORY_DASHBOARD, "daangn/stackflow")
'repository-dashboard~daangn~stackflow'

GitHub owner and repository names cannot contain ``~``, so two different
identifiers never map to the same key, and no scoped key equals an
unscoped one. Identifiers are validated, never rewritten: one that is not
already a plain ``owner/name`` pair is rejected, so every store accepts
every key this module builds.
"""

from __future__ import annotations

import enum
import re

from .errors import CacheKeyError

KEY_DELIMITER = "~"
_NAME_PART = re.compile(r"[A-Za-z0-9_.-]+")


class CacheKind(enum.StrEnum):
    """Kinds of cached payload."""

    RAW_DATA = "raw-data"
    DASHBOARD = "dashboard"
    REPOSITORY_DASHBOARD = "repository-dashboard"


def parse_cache_kind(value: str) -> CacheKind:
    """Return the ``CacheKind`` named by ``value``.

    Raises
    ------
    CacheKeyError
        If ``value`` names no kind.

    """
    try:
        return CacheKind(value)
    except ValueError as exc:
        raise CacheKeyError.unknown_kind(value) from exc


def cache_key(kind: CacheKind | str, identifier: str | None = None) -> str:
    """Build the cache key for ``kind``.

    ``identifier`` is required for ``repository-dashboard`` and ignored for
    the unscoped kinds.

    Raises
    ------
    CacheKeyError
        If ``kind`` is unknown, or a scoped kind lacks an identifier or gets
        one that is not a plain ``owner/name`` pair.

    """
    resolved = parse_cache_kind(kind) if not isinstance(kind, CacheKind) else kind
    if resolved is not CacheKind.REPOSITORY_DASHBOARD:
        return resolved.value
    if not identifier:
        raise CacheKeyError.missing_identifier(resolved.value)
    parts = identifier.split("/")
    if len(parts) != 2 or not all(_NAME_PART.fullmatch(part) for part in parts):
        raise CacheKeyError.invalid_identifier(identifier)
    return KEY_DELIMITER.join((resolved.value, *parts))
