"""Domain exceptions and Falcon error handlers for the API layer.

Handlers translate dashboard and cache errors into JSON bodies carrying
``title`` and ``description``; tracebacks never reach the client.

Usage
-----
Register every handler on the Falcon app::

    from releasescope.api.errors import register_error_handlers

    register_error_handlers(app)

"""

from __future__ import annotations

import typing as typ

import falcon

from releasescope.cache.errors import CacheKeyError
from releasescope.dashboard.errors import EmptyDatasetError, UpstreamFetchError
from releasescope.logging import get_logger, log_warning

if typ.TYPE_CHECKING:
    from falcon.asgi import App, Request, Response

__all__ = [
    "InvalidInputError",
    "handle_cache_key_error",
    "handle_empty_dataset",
    "handle_invalid_input",
    "handle_upstream_fetch",
    "register_error_handlers",
]

logger = get_logger(__name__)


class InvalidInputError(Exception):
    """Raised for client validation errors that should map to HTTP 400.

    Attributes
    ----------
    reason
        Human-readable description of the validation failure.
    field
        Optional name of the input field that failed validation.

    """

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialize with a validation reason and optional field name."""
        self.reason = reason
        self.field = field
        message = f"{field}: {reason}" if field is not None else reason
        super().__init__(message)


async def handle_empty_dataset(
    _req: Request,
    resp: Response,
    ex: EmptyDatasetError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``EmptyDatasetError`` and its subclasses to HTTP 404.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status and media are set.
    ex
        The empty-dataset error, possibly naming a repository.
    _params
        URI template parameters (unused).

    """
    resp.status = falcon.HTTP_404
    resp.media = {"title": "No releases found", "description": str(ex)}


async def handle_upstream_fetch(
    _req: Request,
    resp: Response,
    ex: UpstreamFetchError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``UpstreamFetchError`` to HTTP 502."""
    resp.status = falcon.HTTP_502
    resp.media = {"title": "Upstream fetch failed", "description": str(ex)}


async def handle_invalid_input(
    _req: Request,
    resp: Response,
    ex: InvalidInputError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidInputError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    media: dict[str, str] = {"title": "Invalid input", "description": ex.reason}
    if ex.field is not None:
        media["field"] = ex.field
    resp.media = media


async def handle_cache_key_error(
    req: Request,
    resp: Response,
    ex: CacheKeyError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``CacheKeyError`` to an HTTP 400 JSON response."""
    log_warning(logger, "Rejected cache request %s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_400
    resp.media = {"title": "Invalid cache key", "description": str(ex)}


def register_error_handlers(app: App) -> None:
    """Register every domain error handler on ``app``."""
    app.add_error_handler(EmptyDatasetError, handle_empty_dataset)
    app.add_error_handler(UpstreamFetchError, handle_upstream_fetch)
    app.add_error_handler(InvalidInputError, handle_invalid_input)
    app.add_error_handler(CacheKeyError, handle_cache_key_error)
