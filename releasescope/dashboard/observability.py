"""Emit structured observability events for dashboard cache and builds.

Usage
-----
>>> event_logger = DashboardEventLogger()
>>> event_logger.log_cache_hit(key="dashboard")

"""

from __future__ import annotations

import enum

from releasescope.logging import get_logger, log_debug, log_error, log_info

logger = get_logger(__name__)


class DashboardEventType(enum.StrEnum):
    """Structured log event types for the aggregation orchestrator."""

    CACHE_HIT = "dashboard.cache.hit"
    CACHE_MISS = "dashboard.cache.miss"
    CACHE_INVALIDATED = "dashboard.cache.invalidated"
    CACHE_CLEARED = "dashboard.cache.cleared"
    CACHE_WRITE_SKIPPED = "dashboard.cache.write_skipped"
    FETCH_COMPLETED = "dashboard.fetch.completed"
    FETCH_FAILED = "dashboard.fetch.failed"
    BUILD_COMPLETED = "dashboard.build.completed"
    BUILD_JOINED = "dashboard.build.joined"


class DashboardEventLogger:
    """Emit structured dashboard events via femtologging."""

    def log_cache_hit(self, *, key: str) -> None:
        """Log a cache read that returned a valid entry."""
        log_debug(logger, "[%s] key=%s", DashboardEventType.CACHE_HIT, key)

    def log_cache_miss(self, *, key: str) -> None:
        """Log a cache read that found no valid entry."""
        log_info(logger, "[%s] key=%s", DashboardEventType.CACHE_MISS, key)

    def log_build_joined(self, *, key: str) -> None:
        """Log a caller waiting on a rebuild already in flight for ``key``."""
        log_debug(logger, "[%s] key=%s", DashboardEventType.BUILD_JOINED, key)

    def log_cache_invalidated(self, *, key: str) -> None:
        """Log removal of one cache key."""
        log_info(logger, "[%s] key=%s", DashboardEventType.CACHE_INVALIDATED, key)

    def log_cache_write_skipped(self, *, key: str) -> None:
        """Log a rebuild result discarded because the cache was invalidated."""
        log_info(logger, "[%s] key=%s", DashboardEventType.CACHE_WRITE_SKIPPED, key)

    def log_cache_cleared(self) -> None:
        """Log removal of every cache key."""
        log_info(logger, "[%s]", DashboardEventType.CACHE_CLEARED)

    def log_fetch_completed(self, *, release_count: int, duration_s: float) -> None:
        """Log a successful upstream fetch.

        Parameters
        ----------
        release_count
            Number of releases returned by the source.
        duration_s
            Wall-clock seconds spent waiting on the source.

        """
        log_info(
            logger,
            "[%s] release_count=%d duration_seconds=%.3f",
            DashboardEventType.FETCH_COMPLETED,
            release_count,
            duration_s,
        )

    def log_fetch_failed(self, *, error: BaseException, duration_s: float) -> None:
        """Log a failed upstream fetch with error details.

        Parameters
        ----------
        error
            Exception raised by the source.
        duration_s
            Wall-clock seconds elapsed before the failure.

        """
        log_error(
            logger,
            "[%s] duration_seconds=%.3f error_type=%s error_message=%s",
            DashboardEventType.FETCH_FAILED,
            duration_s,
            type(error).__name__,
            str(error),
            exc_info=error,
        )

    def log_build_completed(
        self,
        *,
        key: str,
        release_count: int,
        duration_s: float,
    ) -> None:
        """Log a summary built and cached under ``key``."""
        log_info(
            logger,
            "[%s] key=%s release_count=%d duration_seconds=%.3f",
            DashboardEventType.BUILD_COMPLETED,
            key,
            release_count,
            duration_s,
        )
