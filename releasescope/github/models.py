"""Release records fetched from the GitHub REST API.

``ReleaseEvent`` and its parts are the read-only input of every aggregator
and the payload cached under the ``raw-data`` key. The ``_Payload`` structs
mirror the subset of the ``GET /repos/{owner}/{repo}/releases`` response we
decode; unknown fields are ignored by msgspec.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import enum

import msgspec


class AuthorType(enum.StrEnum):
    """Account type GitHub reports for a release author."""

    USER = "User"
    BOT = "Bot"
    ORGANIZATION = "Organization"


class ReleaseAuthor(msgspec.Struct, kw_only=True, frozen=True):
    """Identity of the account that published a release.

    Attributes
    ----------
    login
        GitHub login, compared case-sensitively.
    id
        Numeric account identifier.
    type
        Declared account type.

    """

    login: str
    id: int
    type: AuthorType = AuthorType.USER

    @property
    def is_bot(self) -> bool:
        """Return whether the author is an automation account."""
        return self.type is AuthorType.BOT or "[bot]" in self.login


class ReleaseAsset(msgspec.Struct, kw_only=True, frozen=True):
    """One file attached to a release."""

    name: str
    content_type: str
    size: int
    download_count: int


class ReleaseEvent(msgspec.Struct, kw_only=True, frozen=True):
    """A single release of one repository.

    Attributes
    ----------
    repository
        Repository identifier in ``owner/name`` form.
    release_id
        GitHub release identifier.
    tag_name
        Tag the release points at, e.g. ``@stackflow/core@1.1.0``.
    target_commitish
        Branch (or commit) the tag was created from.
    name
        Release title, if any.
    draft
        Whether the release is an unpublished draft.
    prerelease
        Whether the release is flagged as a prerelease.
    created_at
        Creation timestamp.
    published_at
        Publication timestamp; ``None`` for drafts.
    author
        Publishing account.
    body
        Release notes, if any.
    assets
        Attached files in API order.

    """

    repository: str
    release_id: int
    tag_name: str
    target_commitish: str
    created_at: dt.datetime
    author: ReleaseAuthor
    name: str | None = None
    draft: bool = False
    prerelease: bool = False
    published_at: dt.datetime | None = None
    body: str | None = None
    assets: tuple[ReleaseAsset, ...] = ()


class _UserPayload(msgspec.Struct, frozen=True):
    login: str
    id: int
    type: str = AuthorType.USER.value


class _AssetPayload(msgspec.Struct, frozen=True):
    name: str
    size: int
    download_count: int
    content_type: str | None = None


class ReleasePayload(msgspec.Struct, frozen=True):
    """Release object as returned by the GitHub REST API."""

    id: int
    tag_name: str
    created_at: dt.datetime
    target_commitish: str = ""
    name: str | None = None
    draft: bool = False
    prerelease: bool = False
    published_at: dt.datetime | None = None
    author: _UserPayload | None = None
    body: str | None = None
    assets: list[_AssetPayload] = msgspec.field(default_factory=list)


# Releases whose author account was deleted are attributed to GitHub's ghost
# user.
_GHOST = ReleaseAuthor(login="ghost", id=10137, type=AuthorType.USER)


def _author_type(value: str) -> AuthorType:
    try:
        return AuthorType(value)
    except ValueError:
        return AuthorType.USER


def release_event_from_payload(repository: str, payload: ReleasePayload) -> ReleaseEvent:
    """Convert a decoded API release into a ``ReleaseEvent`` for ``repository``."""
    author = (
        ReleaseAuthor(
            login=payload.author.login,
            id=payload.author.id,
            type=_author_type(payload.author.type),
        )
        if payload.author is not None
        else _GHOST
    )
    return ReleaseEvent(
        repository=repository,
        release_id=payload.id,
        tag_name=payload.tag_name,
        target_commitish=payload.target_commitish,
        name=payload.name,
        draft=payload.draft,
        prerelease=payload.prerelease,
        created_at=payload.created_at,
        published_at=payload.published_at,
        author=author,
        body=payload.body,
        assets=tuple(
            ReleaseAsset(
                name=asset.name,
                content_type=asset.content_type or "",
                size=asset.size,
                download_count=asset.download_count,
            )
            for asset in payload.assets
        ),
    )
