"""Unit tests for releasescope.api.app application factory and routes.

Usage
-----
Run with pytest::

    pytest tests/unit/test_api_app.py

"""

from __future__ import annotations

import datetime as dt

import falcon
import falcon.asgi
import falcon.testing
import pytest

from releasescope.api.app import AppDependencies, create_app
from releasescope.cache.store import MemoryCacheStore
from releasescope.dashboard import DashboardConfig, DashboardService
from releasescope.github.errors import GitHubAPIError
from tests.helpers.release_builders import (
    FakeClock,
    StubReleaseSource,
    three_release_dataset,
)


@pytest.fixture
def source() -> StubReleaseSource:
    """Serve the three-release dataset."""
    return StubReleaseSource(three_release_dataset())


@pytest.fixture
def full_client(source: StubReleaseSource) -> falcon.testing.TestClient:
    """Build a test client with a dashboard service over the stub source."""
    service = DashboardService(
        source,
        MemoryCacheStore(clock=FakeClock()),
        DashboardConfig(repositories=("octo/reef",)),
        now=lambda: dt.datetime(2024, 6, 1, 12, tzinfo=dt.UTC),
    )
    return falcon.testing.TestClient(
        create_app(AppDependencies(dashboard_service=service))
    )


@pytest.fixture
def health_client() -> falcon.testing.TestClient:
    """Build a test client for probes-only mode."""
    return falcon.testing.TestClient(create_app())


class TestCreateAppHealthOnly:
    """Tests for create_app() without a dashboard service."""

    def test_returns_falcon_app(self) -> None:
        """Create_app() returns a Falcon ASGI App."""
        app = create_app()
        assert isinstance(app, falcon.asgi.App), "expected Falcon ASGI App"

    def test_health_is_ok(self, health_client: falcon.testing.TestClient) -> None:
        """Liveness does not depend on the dashboard service."""
        result = health_client.simulate_get("/health")
        assert result.status == falcon.HTTP_200, "expected HTTP 200 from /health"
        assert result.json == {"status": "ok"}, "wrong /health body"

    def test_ready_is_degraded(self, health_client: falcon.testing.TestClient) -> None:
        """Readiness reports degraded without a dashboard service."""
        result = health_client.simulate_get("/ready")
        assert result.status == falcon.HTTP_503, "expected HTTP 503 from /ready"
        assert result.json == {"status": "degraded"}, "wrong /ready body"

    def test_dashboard_not_registered(
        self, health_client: falcon.testing.TestClient
    ) -> None:
        """Without a service the dashboard endpoint returns 404."""
        result = health_client.simulate_get("/dashboard")
        assert result.status == falcon.HTTP_404, "expected HTTP 404"


class TestDashboardRoutes:
    """Tests for the dashboard endpoints."""

    def test_ready_with_service(self, full_client: falcon.testing.TestClient) -> None:
        """Readiness reports ready once the service is wired."""
        result = full_client.simulate_get("/ready")
        assert result.json == {"status": "ready"}, "wrong /ready body"

    def test_whole_summary(self, full_client: falcon.testing.TestClient) -> None:
        """GET /dashboard returns camelCase data and no diagnostics."""
        result = full_client.simulate_get("/dashboard")

        assert result.status == falcon.HTTP_200, "expected HTTP 200"
        body = result.json
        assert body["diagnostics"] == [], "no field group should fail"
        data = body["data"]
        assert data["totalReleases"] == 3, "wrong total"
        assert data["releasesByType"] == {"stable": 1, "prerelease": 1, "draft": 1}
        assert data["generatedAt"] == "2024-06-01T12:00:00Z", "wrong build stamp"
        assert data["dateRange"]["earliest"] == "2024-03-04T10:00:00Z"

    def test_repeated_requests_fetch_once(
        self,
        full_client: falcon.testing.TestClient,
        source: StubReleaseSource,
    ) -> None:
        """The second request is served from the cache."""
        first = full_client.simulate_get("/dashboard")
        second = full_client.simulate_get("/dashboard")

        assert first.json == second.json, "cached summary should match"
        assert source.calls == 1, "expected a single upstream fetch"

    def test_repository_summary(self, full_client: falcon.testing.TestClient) -> None:
        """The repository route joins owner and name."""
        result = full_client.simulate_get("/dashboard/repositories/octo/reef")

        assert result.status == falcon.HTTP_200, "expected HTTP 200"
        names = [entry["name"] for entry in result.json["data"]["repositoryStats"]]
        assert names == ["octo/reef"], "wrong repository breakdown"

    def test_unknown_repository_is_404(
        self, full_client: falcon.testing.TestClient
    ) -> None:
        """A repository without releases maps to 404."""
        result = full_client.simulate_get("/dashboard/repositories/octo/coral")

        assert result.status == falcon.HTTP_404, "expected HTTP 404"
        assert result.json["title"] == "No releases found", "wrong title"
        assert "octo/coral" in result.json["description"], "repository not named"

    def test_malformed_repository_is_400(
        self,
        full_client: falcon.testing.TestClient,
        source: StubReleaseSource,
    ) -> None:
        """A padded owner segment is rejected before any fetch."""
        result = full_client.simulate_get("/dashboard/repositories/%20octo/reef")

        assert result.status == falcon.HTTP_400, "expected HTTP 400"
        assert result.json["title"] == "Invalid cache key", "wrong title"
        assert source.calls == 0, "no fetch for a malformed identifier"

    def test_upstream_failure_is_502(
        self,
        full_client: falcon.testing.TestClient,
        source: StubReleaseSource,
    ) -> None:
        """Source errors map to 502 without leaking a traceback."""
        source.error = GitHubAPIError("rate limited", status_code=403)

        result = full_client.simulate_get("/dashboard")

        assert result.status == falcon.HTTP_502, "expected HTTP 502"
        assert result.json["title"] == "Upstream fetch failed", "wrong title"
        assert "Traceback" not in result.text, "traceback leaked"

    def test_refresh_reports_totals(
        self,
        full_client: falcon.testing.TestClient,
        source: StubReleaseSource,
    ) -> None:
        """POST /dashboard/refresh refetches and reports the rebuilt totals."""
        full_client.simulate_get("/dashboard")

        result = full_client.simulate_post("/dashboard/refresh")

        assert result.status == falcon.HTTP_200, "expected HTTP 200"
        assert result.json == {
            "totalReleases": 3,
            "repositories": ["octo/reef"],
            "generatedAt": "2024-06-01T12:00:00Z",
        }, "wrong refresh body"
        assert source.calls == 2, "refresh should refetch"


class TestCacheRoutes:
    """Tests for the cache status and invalidation endpoints."""

    def test_status_lists_valid_keys(
        self, full_client: falcon.testing.TestClient
    ) -> None:
        """GET /cache lists keys and a positive size once warmed."""
        full_client.simulate_get("/dashboard")

        result = full_client.simulate_get("/cache")

        assert result.json["keys"] == ["dashboard", "raw-data"], "wrong keys"
        assert result.json["approxSizeBytes"] > 0, "size should be positive"

    def test_delete_all(self, full_client: falcon.testing.TestClient) -> None:
        """DELETE /cache empties the cache."""
        full_client.simulate_get("/dashboard")

        result = full_client.simulate_delete("/cache")

        assert result.json == {"invalidated": "all"}, "wrong delete body"
        assert full_client.simulate_get("/cache").json["keys"] == []

    def test_delete_one_kind(self, full_client: falcon.testing.TestClient) -> None:
        """DELETE /cache/{kind} removes only that key."""
        full_client.simulate_get("/dashboard")

        result = full_client.simulate_delete("/cache/dashboard")

        assert result.json == {"invalidated": "dashboard"}, "wrong delete body"
        assert full_client.simulate_get("/cache").json["keys"] == ["raw-data"]

    def test_delete_repository_entry(
        self, full_client: falcon.testing.TestClient
    ) -> None:
        """Repository entries are addressed with the ``repository`` parameter."""
        full_client.simulate_get("/dashboard/repositories/octo/reef")

        result = full_client.simulate_delete(
            "/cache/repository-dashboard", params={"repository": "octo/reef"}
        )

        assert result.json == {"invalidated": "repository-dashboard~octo~reef"}

    def test_repository_kind_requires_parameter(
        self, full_client: falcon.testing.TestClient
    ) -> None:
        """A repository kind without ``repository`` is a 400."""
        result = full_client.simulate_delete("/cache/repository-dashboard")

        assert result.status == falcon.HTTP_400, "expected HTTP 400"
        assert result.json["field"] == "repository", "field not named"

    def test_unknown_kind_is_400(self, full_client: falcon.testing.TestClient) -> None:
        """Unknown cache kinds are rejected."""
        result = full_client.simulate_delete("/cache/everything")

        assert result.status == falcon.HTTP_400, "expected HTTP 400"
        assert result.json["title"] == "Invalid cache key", "wrong title"
