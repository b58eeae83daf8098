"""Errors raised while fetching releases from GitHub."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when GitHub answers a release request with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, repository: str) -> GitHubAPIError:
        """Return an error for a non-2xx response while listing releases."""
        return cls(
            f"GitHub releases request for {repository} failed with HTTP {status_code}",
            status_code=status_code,
        )


class GitHubResponseShapeError(RuntimeError):
    """Raised when a releases page cannot be decoded."""

    @classmethod
    def undecodable(cls, repository: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a page that does not match the release schema."""
        return cls(f"Unexpected GitHub releases payload for {repository}: {detail}")


class GitHubConfigError(RuntimeError):
    """Raised when the release source configuration is invalid."""

    @classmethod
    def no_repositories(cls) -> GitHubConfigError:
        """Return an error when no repository is configured for fetching."""
        return cls("At least one repository must be configured for release fetching")
