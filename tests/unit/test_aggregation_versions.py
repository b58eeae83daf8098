"""Unit tests for release-type and version-type classification."""

from __future__ import annotations

import pytest

from releasescope.aggregation.versions import (
    ReleaseType,
    VersionType,
    classify_release_type,
    classify_version_type,
    summarize_versions,
)
from tests.helpers.release_builders import release


@pytest.mark.parametrize(
    ("draft", "prerelease", "expected"),
    [
        pytest.param(True, True, ReleaseType.DRAFT, id="draft-wins"),
        pytest.param(True, False, ReleaseType.DRAFT, id="draft"),
        pytest.param(False, True, ReleaseType.PRERELEASE, id="prerelease"),
        pytest.param(False, False, ReleaseType.STABLE, id="stable"),
    ],
)
def test_classify_release_type(
    *, draft: bool, prerelease: bool, expected: ReleaseType
) -> None:
    """Draft takes precedence over prerelease, otherwise stable."""
    assert classify_release_type(draft=draft, prerelease=prerelease) is expected


@pytest.mark.parametrize(
    ("tag", "prerelease", "expected"),
    [
        pytest.param("v2.0.0", False, VersionType.MAJOR, id="major"),
        pytest.param("v2.3.0", False, VersionType.MINOR, id="minor"),
        pytest.param("v2.3.4", False, VersionType.PATCH, id="patch"),
        pytest.param("v0.0.0", False, VersionType.PATCH, id="all-zero"),
        pytest.param("v0.1.0", False, VersionType.MINOR, id="zero-major-minor"),
        pytest.param("v2.0.0", True, VersionType.PRERELEASE, id="flag-wins"),
        pytest.param("nightly-build", False, VersionType.CUSTOM, id="no-triple"),
        pytest.param("nightly-build", True, VersionType.CUSTOM, id="custom-flagged"),
        pytest.param(
            "@stackflow/core@1.1.0", False, VersionType.MINOR, id="scoped-package"
        ),
        pytest.param("v1.00.0", False, VersionType.MINOR, id="string-compare"),
        pytest.param("2024.1", False, VersionType.CUSTOM, id="two-parts"),
    ],
)
def test_classify_version_type(
    tag: str,
    expected: VersionType,
    *,
    prerelease: bool,
) -> None:
    """Version shapes follow the first X.Y.Z triple in the tag."""
    assert classify_version_type(tag, prerelease=prerelease) is expected, (
        f"unexpected classification for {tag!r}"
    )


def test_summarize_versions_sums_to_total() -> None:
    """Both distributions account for every release exactly once."""
    events = [
        release("v1.0.0"),
        release("v1.1.0"),
        release("v1.1.1"),
        release("v2.0.0-rc.1", prerelease=True),
        release("snapshot", draft=True),
    ]
    release_types, version_types = summarize_versions(events)

    assert (release_types.stable, release_types.prerelease, release_types.draft) == (
        3,
        1,
        1,
    ), "unexpected release-type split"
    assert version_types.major == 1, "expected one major release"
    assert version_types.minor == 1, "expected one minor release"
    assert version_types.patch == 1, "expected one patch release"
    assert version_types.prerelease == 1, "expected one prerelease"
    assert version_types.custom == 1, "expected one custom tag"
    assert (
        release_types.stable + release_types.prerelease + release_types.draft
        == len(events)
    ), "release types should sum to the total"
