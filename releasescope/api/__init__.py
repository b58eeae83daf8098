"""releasescope HTTP API layer.

Usage
-----
Create and run the application::

    from releasescope.api import create_app

    app = create_app()              # probes only
    app = create_app(dependencies)  # dashboard and cache endpoints

Public API
----------
create_app
    Application factory that configures the Falcon ASGI app with probe
    endpoints and, when a dashboard service is provided, the dashboard
    and cache endpoints.
"""

from releasescope.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
