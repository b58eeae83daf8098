"""Classify releases by publication state and semantic-version shape."""

from __future__ import annotations

import collections
import enum
import re
import typing as typ

from .models import ReleaseTypeCounts, VersionTypeCounts

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from releasescope.github.models import ReleaseEvent

# First MAJOR.MINOR.PATCH triple anywhere in the tag, so scoped tags such as
# ``@stackflow/core@1.4.0`` still classify.
_SEMVER_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class ReleaseType(enum.StrEnum):
    """Publication state of a release."""

    STABLE = "stable"
    PRERELEASE = "prerelease"
    DRAFT = "draft"


class VersionType(enum.StrEnum):
    """Shape of the version embedded in a release tag."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"
    CUSTOM = "custom"


def classify_release_type(*, draft: bool, prerelease: bool) -> ReleaseType:
    """Return the release state; the draft flag wins over the prerelease flag."""
    if draft:
        return ReleaseType.DRAFT
    if prerelease:
        return ReleaseType.PRERELEASE
    return ReleaseType.STABLE


def classify_version_type(tag: str, *, prerelease: bool) -> VersionType:
    """Classify the version shape of ``tag``.

    Tags without a ``X.Y.Z`` triple are ``CUSTOM``. Otherwise the prerelease
    flag takes precedence over the numeric shape, even for a clean
    ``X.0.0``. The triple's parts are compared as strings, so ``"00"`` is
    not treated as zero.

    Examples
    --------
    >>> classify_version_type("v2.0.0", prerelease=False)
    <VersionType.MAJOR: 'major'>
    >>> classify_version_type("nightly-build-42", prerelease=False)
    <VersionType.CUSTOM: 'custom'>

    """
    match = _SEMVER_PATTERN.search(tag)
    if match is None:
        return VersionType.CUSTOM
    if prerelease:
        return VersionType.PRERELEASE

    major, minor, patch = match.groups()
    if major != "0" and minor == "0" and patch == "0":
        return VersionType.MAJOR
    if minor != "0" and patch == "0":
        return VersionType.MINOR
    return VersionType.PATCH


def summarize_versions(
    events: cabc.Iterable[ReleaseEvent],
) -> tuple[ReleaseTypeCounts, VersionTypeCounts]:
    """Count releases per release type and per version type."""
    release_types: collections.Counter[ReleaseType] = collections.Counter()
    version_types: collections.Counter[VersionType] = collections.Counter()
    for event in events:
        release_types[
            classify_release_type(draft=event.draft, prerelease=event.prerelease)
        ] += 1
        version_types[
            classify_version_type(event.tag_name, prerelease=event.prerelease)
        ] += 1

    return (
        ReleaseTypeCounts(
            stable=release_types[ReleaseType.STABLE],
            prerelease=release_types[ReleaseType.PRERELEASE],
            draft=release_types[ReleaseType.DRAFT],
        ),
        VersionTypeCounts(
            major=version_types[VersionType.MAJOR],
            minor=version_types[VersionType.MINOR],
            patch=version_types[VersionType.PATCH],
            prerelease=version_types[VersionType.PRERELEASE],
            custom=version_types[VersionType.CUSTOM],
        ),
    )
