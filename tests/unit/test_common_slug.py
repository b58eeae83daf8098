"""Unit tests for ``owner/name`` repository identifiers."""

from __future__ import annotations

import pytest

from releasescope.common.slug import parse_repo_slug, repo_slug
from releasescope.dashboard.config import DEFAULT_REPOSITORIES


class TestRepoSlug:
    """Tests for joining and splitting repository identifiers."""

    @pytest.mark.parametrize("slug", DEFAULT_REPOSITORIES)
    def test_default_repositories_round_trip(self, slug: str) -> None:
        """The configured defaults split and rejoin unchanged."""
        assert repo_slug(*parse_repo_slug(slug)) == slug, f"{slug} changed"

    def test_route_segments_join_into_identifier(self) -> None:
        """URL owner and name segments form the identifier releases carry."""
        assert repo_slug("octo", "reef") == "octo/reef"

    def test_surrounding_whitespace_is_ignored(self) -> None:
        """Comma-separated configuration may pad its entries."""
        assert parse_repo_slug("  daangn/seed-design ") == ("daangn", "seed-design")

    @pytest.mark.parametrize(
        "slug",
        [
            pytest.param("", id="empty"),
            pytest.param("stackflow", id="name-only"),
            pytest.param("daangn/", id="missing-name"),
            pytest.param("/stackflow", id="missing-owner"),
            pytest.param("daangn/stackflow/releases", id="api-path"),
            pytest.param("https://github.com/daangn", id="url"),
        ],
    )
    def test_rejects_non_identifiers(self, slug: str) -> None:
        """Anything but a single ``owner/name`` pair is refused."""
        with pytest.raises(ValueError, match="Invalid repository slug"):
            parse_repo_slug(slug)
