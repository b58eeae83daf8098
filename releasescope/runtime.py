"""releasescope runtime entrypoint.

This module provides the ASGI application factory served by Granian. It
delegates to :func:`releasescope.api.app.create_app` and keeps the
``releasescope.runtime:create_app`` entrypoint stable.

Configuration is driven by environment variables:

- ``RELEASESCOPE_HOST``: Bind address (default ``0.0.0.0``)
- ``RELEASESCOPE_PORT``: Listen port (default ``8080``)
- ``RELEASESCOPE_LOG_LEVEL``: Log level (default ``INFO``)
- ``RELEASESCOPE_REPOSITORIES`` and the other dashboard, cache and GitHub
  variables read by :func:`releasescope.api.factory.build_app_dependencies`

Run the service directly with ``python -m releasescope.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from releasescope.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid RELEASESCOPE_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from environment configuration.

    Returns
    -------
    falcon.asgi.App
        App serving the dashboard, cache and probe endpoints.

    """
    from releasescope.api.app import create_app as _create_api_app
    from releasescope.api.factory import build_app_dependencies

    return _create_api_app(build_app_dependencies())


def main() -> None:
    """Start the releasescope server using Granian.

    Reads ``RELEASESCOPE_HOST``, ``RELEASESCOPE_PORT`` and
    ``RELEASESCOPE_LOG_LEVEL`` from the environment and starts the ASGI
    server.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("RELEASESCOPE_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port_str = os.environ.get("RELEASESCOPE_PORT", "8080")
    port = _parse_port(port_str)
    log_level_str = os.environ.get("RELEASESCOPE_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid RELEASESCOPE_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting releasescope on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "releasescope.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
