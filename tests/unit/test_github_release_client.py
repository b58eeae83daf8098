"""Unit tests for the GitHub REST release client and release source."""

from __future__ import annotations

import datetime as dt
import secrets
import typing as typ

import httpx
import pytest

from releasescope.github import (
    AuthorType,
    GitHubAPIError,
    GitHubConfigError,
    GitHubReleaseClient,
    GitHubReleaseConfig,
    GitHubReleaseSource,
    GitHubResponseShapeError,
    ReleaseSource,
)

_TOKEN = secrets.token_hex(8)
_API_URL = "https://api.example.test"


def _release_payload(
    release_id: int,
    tag_name: str,
    **overrides: typ.Any,  # noqa: ANN401 - merged into the payload
) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "id": release_id,
        "tag_name": tag_name,
        "target_commitish": "main",
        "name": tag_name,
        "draft": False,
        "prerelease": False,
        "created_at": "2024-03-04T09:00:00Z",
        "published_at": "2024-03-04T10:00:00Z",
        "author": {"login": "alice", "id": 7, "type": "User"},
        "body": "notes",
        "assets": [
            {
                "name": "bundle.zip",
                "content_type": "application/zip",
                "size": 1024,
                "download_count": 12,
                "browser_download_url": "https://example.test/bundle.zip",
            }
        ],
        "html_url": "https://example.test/release",
    }
    payload.update(overrides)
    return payload


def _make_client(
    pages: dict[str, httpx.Response],
    *,
    token: str = _TOKEN,
) -> tuple[GitHubReleaseClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return pages[request.url.path + "?" + request.url.query.decode()]

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    client = GitHubReleaseClient(
        GitHubReleaseConfig(token=token, api_url=_API_URL),
        http_client=http_client,
    )
    return client, requests


class TestGitHubReleaseClient:
    """Tests for ``GitHubReleaseClient``."""

    @pytest.mark.asyncio
    async def test_follows_link_pagination(self) -> None:
        """Pages are fetched until no ``next`` link remains."""
        next_url = f"{_API_URL}/repos/octo/reef/releases?per_page=100&page=2"
        client, requests = _make_client(
            {
                "/repos/octo/reef/releases?per_page=100": httpx.Response(
                    200,
                    json=[_release_payload(1, "v1.1.0")],
                    headers={"Link": f'<{next_url}>; rel="next"'},
                ),
                "/repos/octo/reef/releases?per_page=100&page=2": httpx.Response(
                    200, json=[_release_payload(2, "v1.0.0")]
                ),
            }
        )

        events = await client.list_releases("octo", "reef")

        assert [event.tag_name for event in events] == ["v1.1.0", "v1.0.0"]
        assert len(requests) == 2, "expected two page requests"
        assert requests[0].headers["Authorization"] == f"Bearer {_TOKEN}"

    @pytest.mark.asyncio
    async def test_maps_payload_fields(self) -> None:
        """API fields are mapped onto ``ReleaseEvent``."""
        client, _ = _make_client(
            {
                "/repos/octo/reef/releases?per_page=100": httpx.Response(
                    200,
                    json=[
                        _release_payload(
                            3,
                            "v2.0.0-rc.1",
                            prerelease=True,
                            author={"login": "ci[bot]", "id": 9, "type": "Bot"},
                        )
                    ],
                )
            }
        )

        (event,) = await client.list_releases("octo", "reef")

        assert event.repository == "octo/reef", "repository not attached"
        assert event.prerelease, "prerelease flag lost"
        assert event.author.type is AuthorType.BOT, "author type lost"
        assert event.published_at == dt.datetime(2024, 3, 4, 10, tzinfo=dt.UTC)
        (asset,) = event.assets
        assert (asset.content_type, asset.size, asset.download_count) == (
            "application/zip",
            1024,
            12,
        ), "asset fields lost"

    @pytest.mark.asyncio
    async def test_missing_author_and_draft_fields(self) -> None:
        """Deleted authors become ``ghost`` and drafts have no publish time."""
        client, _ = _make_client(
            {
                "/repos/octo/reef/releases?per_page=100": httpx.Response(
                    200,
                    json=[
                        _release_payload(
                            4,
                            "draft",
                            draft=True,
                            published_at=None,
                            author=None,
                            body=None,
                            assets=[],
                        )
                    ],
                )
            }
        )

        (event,) = await client.list_releases("octo", "reef")

        assert event.author.login == "ghost", "expected ghost author"
        assert event.published_at is None, "drafts are unpublished"
        assert event.assets == (), "expected no assets"

    @pytest.mark.asyncio
    async def test_http_error_raises(self) -> None:
        """Error statuses raise ``GitHubAPIError`` with the status code."""
        client, _ = _make_client(
            {
                "/repos/octo/reef/releases?per_page=100": httpx.Response(
                    404, json={"message": "Not Found"}
                )
            }
        )

        with pytest.raises(GitHubAPIError) as excinfo:
            await client.list_releases("octo", "reef")
        assert excinfo.value.status_code == 404, "status code not carried"

    @pytest.mark.asyncio
    async def test_undecodable_page_raises(self) -> None:
        """Pages that do not match the schema raise a shape error."""
        client, _ = _make_client(
            {
                "/repos/octo/reef/releases?per_page=100": httpx.Response(
                    200, json={"unexpected": "object"}
                )
            }
        )

        with pytest.raises(GitHubResponseShapeError, match="octo/reef"):
            await client.list_releases("octo", "reef")

    @pytest.mark.asyncio
    async def test_anonymous_client_sends_no_authorization(self) -> None:
        """An empty token means no ``Authorization`` header."""
        client, requests = _make_client(
            {"/repos/octo/reef/releases?per_page=100": httpx.Response(200, json=[])},
            token="",
        )

        assert await client.list_releases("octo", "reef") == []
        assert "Authorization" not in requests[0].headers


class TestGitHubReleaseSource:
    """Tests for ``GitHubReleaseSource``."""

    @pytest.mark.asyncio
    async def test_fetches_repositories_in_order(self) -> None:
        """Releases of every repository are concatenated in config order."""
        client, requests = _make_client(
            {
                "/repos/octo/reef/releases?per_page=100": httpx.Response(
                    200, json=[_release_payload(1, "v1.0.0")]
                ),
                "/repos/octo/kelp/releases?per_page=100": httpx.Response(
                    200, json=[_release_payload(2, "v0.1.0")]
                ),
            }
        )
        source = GitHubReleaseSource(client, ["octo/reef", "octo/kelp"])

        events = await source.fetch_releases()

        assert isinstance(source, ReleaseSource), "source should match protocol"
        assert [event.repository for event in events] == ["octo/reef", "octo/kelp"]
        assert len(requests) == 2, "expected one request per repository"

    def test_requires_repositories(self) -> None:
        """An empty repository list is a configuration error."""
        client, _ = _make_client({})
        with pytest.raises(GitHubConfigError):
            GitHubReleaseSource(client, [])

    def test_rejects_malformed_identifier(self) -> None:
        """Identifiers must have the ``owner/name`` form."""
        client, _ = _make_client({})
        with pytest.raises(ValueError, match="Invalid repository slug"):
            GitHubReleaseSource(client, ["octo"])


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Token and API URL are read from the environment."""
    monkeypatch.setenv("RELEASESCOPE_GITHUB_TOKEN", _TOKEN)
    monkeypatch.delenv("RELEASESCOPE_GITHUB_API_URL", raising=False)
    config = GitHubReleaseConfig.from_env()

    assert config.token == _TOKEN, "token not read"
    assert config.api_url == "https://api.github.com", "default API URL expected"
