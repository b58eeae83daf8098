"""Errors raised while building dashboard summaries."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard errors."""


class UpstreamFetchError(DashboardError):
    """Raised when the release source fails; the cause is chained.

    Nothing is cached for the failed fetch and no retry is attempted.
    """

    @classmethod
    def from_cause(cls, cause: BaseException) -> UpstreamFetchError:
        """Return an error describing ``cause``."""
        return cls(f"Failed to fetch releases: {cause}")


class EmptyDatasetError(DashboardError):
    """Raised when a summary is requested over zero releases."""

    def __init__(self, message: str = "No releases to summarize") -> None:
        """Initialise with an optional message."""
        super().__init__(message)


class RepositoryReleasesNotFoundError(EmptyDatasetError):
    """Raised when the raw data holds no release for a repository.

    Attributes
    ----------
    repository
        Repository identifier in ``owner/name`` form.

    """

    def __init__(self, repository: str) -> None:
        """Initialise with the repository that had no releases."""
        self.repository = repository
        super().__init__(f"No releases found for repository: {repository}")
