"""Helpers for ``owner/name`` repository identifiers.

Release events and cache keys both carry the GitHub ``owner/name`` form.
It is an identifier, not a path, so it is split here rather than with
``pathlib``.
"""

from __future__ import annotations


def repo_slug(owner: str, name: str) -> str:
    """Join ``owner`` and ``name`` into an ``owner/name`` identifier.

    Examples
    --------
    >>> repo_slug("daangn", "stackflow")
    'daangn/stackflow'

    """
    return f"{owner}/{name}"


def parse_repo_slug(slug: str) -> tuple[str, str]:
    """Split an ``owner/name`` identifier into its two parts.

    Raises
    ------
    ValueError
        If ``slug`` does not contain exactly one ``/`` with text on both
        sides.

    Examples
    --------
    >>> parse_repo_slug("daangn/seed-design")
    ('daangn', 'seed-design')

    """
    owner, sep, name = slug.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        msg = f"Invalid repository slug: expected 'owner/name', got {slug!r}"
        raise ValueError(msg)
    return owner, name
