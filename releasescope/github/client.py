"""GitHub REST client and the release source consumed by the dashboard."""

from __future__ import annotations

import dataclasses
import os
import typing as typ

import httpx
import msgspec

from releasescope.common.slug import parse_repo_slug, repo_slug
from releasescope.logging import get_logger, log_info, log_warning

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import ReleaseEvent, ReleasePayload, release_event_from_payload

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_PAGE_SIZE = 100
_DEFAULT_API_URL = "https://api.github.com"
_RELEASE_PAGE_DECODER = msgspec.json.Decoder(list[ReleasePayload])


@typ.runtime_checkable
class ReleaseSource(typ.Protocol):
    """Upstream collaborator producing the release events to aggregate."""

    async def fetch_releases(self) -> list[ReleaseEvent]:
        """Return every release of the configured repositories, in order."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubReleaseConfig:
    """Connection settings for the GitHub REST API.

    An empty ``token`` means anonymous access, which GitHub limits to 60
    requests per hour.
    """

    token: str = ""
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = 20.0
    user_agent: str = "releasescope/0.1"

    @classmethod
    def from_env(cls) -> GitHubReleaseConfig:
        """Build configuration from ``RELEASESCOPE_GITHUB_*`` variables."""
        token = os.environ.get("RELEASESCOPE_GITHUB_TOKEN", "").strip()
        api_url = os.environ.get("RELEASESCOPE_GITHUB_API_URL", "").strip()
        return cls(token=token, api_url=api_url or _DEFAULT_API_URL)


class GitHubReleaseClient:
    """List repository releases through ``GET /repos/{owner}/{repo}/releases``."""

    def __init__(
        self,
        config: GitHubReleaseConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client, creating an HTTP client when none is given."""
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": config.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"
        else:
            log_warning(
                logger,
                "No GitHub token configured; anonymous requests are limited "
                "to 60 per hour",
            )

        self._config = config
        # Sent per request so injected clients carry the GitHub headers too.
        self._headers = headers
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def iter_releases(
        self, owner: str, name: str
    ) -> cabc.AsyncIterator[ReleaseEvent]:
        """Yield every release of ``owner/name``, following ``Link`` pagination."""
        repository = repo_slug(owner, name)
        url: str | None = f"{self._config.api_url}/repos/{owner}/{name}/releases"
        params: dict[str, int] | None = {"per_page": _PAGE_SIZE}

        while url is not None:
            response = await self._client.get(
                url, params=params, headers=self._headers
            )
            if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
                raise GitHubAPIError.http_error(response.status_code, repository)
            try:
                page = _RELEASE_PAGE_DECODER.decode(response.content)
            except msgspec.DecodeError as exc:
                raise GitHubResponseShapeError.undecodable(
                    repository, str(exc)
                ) from exc

            for payload in page:
                yield release_event_from_payload(repository, payload)

            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None

    async def list_releases(self, owner: str, name: str) -> list[ReleaseEvent]:
        """Return every release of ``owner/name`` as a list."""
        return [event async for event in self.iter_releases(owner, name)]


class GitHubReleaseSource:
    """``ReleaseSource`` fetching a fixed set of repositories sequentially."""

    def __init__(
        self,
        client: GitHubReleaseClient,
        repositories: typ.Sequence[str],
    ) -> None:
        """Validate the repository identifiers and remember the client."""
        if not repositories:
            raise GitHubConfigError.no_repositories()
        self._client = client
        self._repositories = tuple(parse_repo_slug(slug) for slug in repositories)

    @property
    def repositories(self) -> tuple[str, ...]:
        """Return the configured repositories in fetch order."""
        return tuple(repo_slug(owner, name) for owner, name in self._repositories)

    async def fetch_releases(self) -> list[ReleaseEvent]:
        """Fetch all releases of every configured repository."""
        releases: list[ReleaseEvent] = []
        for owner, name in self._repositories:
            fetched = await self._client.list_releases(owner, name)
            log_info(
                logger,
                "Fetched %d releases for %s",
                len(fetched),
                repo_slug(owner, name),
            )
            releases.extend(fetched)
        return releases
