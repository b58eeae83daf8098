"""GitHub release fetching: the upstream collaborator of the dashboard."""

from __future__ import annotations

from .client import (
    GitHubReleaseClient,
    GitHubReleaseConfig,
    GitHubReleaseSource,
    ReleaseSource,
)
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import AuthorType, ReleaseAsset, ReleaseAuthor, ReleaseEvent

__all__ = [
    "AuthorType",
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubReleaseClient",
    "GitHubReleaseConfig",
    "GitHubReleaseSource",
    "GitHubResponseShapeError",
    "ReleaseAsset",
    "ReleaseAuthor",
    "ReleaseEvent",
    "ReleaseSource",
]
