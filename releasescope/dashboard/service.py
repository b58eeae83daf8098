"""Aggregation orchestrator serving cached dashboard summaries.

The service composes the aggregators into one ``DashboardSummary`` and
memoizes both the upstream fetch (``raw-data``) and the built summaries
(``dashboard`` and ``repository-dashboard~owner~name``) in a
``CacheStore``. Summaries expire before the raw data they were built from.

Concurrent misses for the same key share one rebuild; a failure reaches
every waiter and leaves nothing cached. Invalidation bumps a generation
counter: rebuilds begun under an older generation never write to the
cache, and later callers start a fresh rebuild instead of joining them.

Usage
-----
>>> service = DashboardService(source, MemoryCacheStore(), DashboardConfig())
>>> summary = await service.get_or_build_whole()
>>> summary.total_releases
42

"""

from __future__ import annotations

import time
import typing as typ

from releasescope.aggregation.assets import summarize_assets
from releasescope.aggregation.authors import summarize_authors
from releasescope.aggregation.branches import summarize_branches
from releasescope.aggregation.content import published_date_range, summarize_content
from releasescope.aggregation.models import DashboardSummary
from releasescope.aggregation.repositories import summarize_repositories
from releasescope.aggregation.time_buckets import DayPolicy, bucket_releases
from releasescope.aggregation.versions import summarize_versions
from releasescope.cache.keys import CacheKind, cache_key
from releasescope.common.time import isoformat_z, utcnow
from releasescope.github.models import ReleaseEvent

from ._singleflight import SingleFlight
from .config import DashboardConfig
from .errors import (
    EmptyDatasetError,
    RepositoryReleasesNotFoundError,
    UpstreamFetchError,
)
from .observability import DashboardEventLogger

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from releasescope.cache.store import CacheStatus, CacheStore
    from releasescope.github.client import ReleaseSource

T = typ.TypeVar("T")

RawReleases = tuple[ReleaseEvent, ...]

_RAW_DATA_KEY = cache_key(CacheKind.RAW_DATA)
_DASHBOARD_KEY = cache_key(CacheKind.DASHBOARD)


class DashboardService:
    """Build and cache whole-dataset and per-repository summaries.

    Parameters
    ----------
    source
        Upstream collaborator returning the raw release events.
    store
        Cache store shared by the raw data and the built summaries.
    config
        TTLs, timezone and day policies; defaults when omitted.
    event_logger
        Structured event emitter; a default instance when omitted.
    now
        Clock stamping ``generated_at`` on built summaries.

    """

    def __init__(
        self,
        source: ReleaseSource,
        store: CacheStore,
        config: DashboardConfig | None = None,
        *,
        event_logger: DashboardEventLogger | None = None,
        now: cabc.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        """Wire the source, store and configuration together."""
        self._source = source
        self._store = store
        self._config = config or DashboardConfig()
        self._events = event_logger or DashboardEventLogger()
        self._now = now
        self._flights: SingleFlight[typ.Any] = SingleFlight()
        self._generation = 0

    @property
    def config(self) -> DashboardConfig:
        """Return the active configuration."""
        return self._config

    @property
    def store(self) -> CacheStore:
        """Return the backing cache store."""
        return self._store

    def build_summary(
        self,
        events: cabc.Sequence[ReleaseEvent],
        *,
        day_policy: DayPolicy = DayPolicy.ALL_DAYS,
    ) -> DashboardSummary:
        """Run every aggregator over ``events`` and assemble the summary.

        Parameters
        ----------
        events
            Release events; the collection is only read.
        day_policy
            Day policy applied to the time buckets.

        Returns
        -------
        DashboardSummary
            Frozen summary stamped with the build time.

        Raises
        ------
        EmptyDatasetError
            If ``events`` is empty.

        """
        if not events:
            raise EmptyDatasetError
        releases_by_type, version_types = summarize_versions(events)
        return DashboardSummary(
            total_releases=len(events),
            date_range=published_date_range(events),
            releases_by_type=releases_by_type,
            version_type_distribution=version_types,
            releases_by_time_unit=bucket_releases(
                events, tz=self._config.timezone, day_policy=day_policy
            ),
            author_stats=summarize_authors(events),
            content_stats=summarize_content(events),
            asset_stats=summarize_assets(events),
            branch_stats=summarize_branches(events),
            repository_stats=summarize_repositories(events),
            generated_at=isoformat_z(self._now()),
        )

    async def _cached(self, key: str, payload_type: type[T]) -> T | None:
        cached = await self._store.get(key, payload_type)
        if cached is None:
            self._events.log_cache_miss(key=key)
        else:
            self._events.log_cache_hit(key=key)
        return cached

    async def _single_flight(
        self,
        key: str,
        factory: cabc.Callable[[int], cabc.Coroutine[typ.Any, typ.Any, T]],
    ) -> T:
        # Flights are scoped to the generation so a rebuild started after an
        # invalidation never joins one started before it.
        generation = self._generation
        flight_key = f"{key}@{generation}"
        if self._flights.in_flight(flight_key):
            self._events.log_build_joined(key=key)
        return await self._flights.run(flight_key, lambda: factory(generation))

    async def _store_if_current(
        self, key: str, value: object, *, ttl_ms: float, generation: int
    ) -> None:
        if generation != self._generation:
            self._events.log_cache_write_skipped(key=key)
            return
        await self._store.set(key, value, ttl_ms=ttl_ms)

    async def get_or_fetch_raw(self) -> RawReleases:
        """Return the cached raw releases, fetching them on a miss.

        Raises
        ------
        UpstreamFetchError
            If the source fails; the original error is chained.

        """
        cached = await self._cached(_RAW_DATA_KEY, RawReleases)
        if cached is not None:
            return cached
        return await self._single_flight(_RAW_DATA_KEY, self._fetch_raw)

    async def _fetch_raw(self, generation: int) -> RawReleases:
        started = time.perf_counter()
        try:
            fetched = await self._source.fetch_releases()
        except Exception as exc:
            self._events.log_fetch_failed(
                error=exc, duration_s=time.perf_counter() - started
            )
            raise UpstreamFetchError.from_cause(exc) from exc

        releases = tuple(fetched)
        self._events.log_fetch_completed(
            release_count=len(releases), duration_s=time.perf_counter() - started
        )
        await self._store_if_current(
            _RAW_DATA_KEY,
            releases,
            ttl_ms=self._config.raw_data_ttl_ms,
            generation=generation,
        )
        return releases

    async def get_or_build_whole(self) -> DashboardSummary:
        """Return the whole-dataset summary, rebuilding it on a miss.

        Raises
        ------
        EmptyDatasetError
            If the source returned no releases.
        UpstreamFetchError
            If the raw data had to be fetched and the source failed.

        """
        cached = await self._cached(_DASHBOARD_KEY, DashboardSummary)
        if cached is not None:
            return cached
        return await self._single_flight(_DASHBOARD_KEY, self._build_whole)

    async def _build_whole(self, generation: int) -> DashboardSummary:
        releases = await self.get_or_fetch_raw()
        return await self._build_and_store(
            _DASHBOARD_KEY,
            releases,
            day_policy=self._config.whole_day_policy,
            generation=generation,
        )

    async def get_or_build_for_repository(self, repository: str) -> DashboardSummary:
        """Return the summary of one repository, rebuilding it on a miss.

        Parameters
        ----------
        repository
            Repository identifier in ``owner/name`` form, matched exactly.
            It is validated, not normalized, so the cache key and the
            release filter always agree.

        Raises
        ------
        CacheKeyError
            If ``repository`` is not a plain ``owner/name`` pair.
        RepositoryReleasesNotFoundError
            If the raw data holds no release of ``repository``.
        UpstreamFetchError
            If the raw data had to be fetched and the source failed.

        """
        key = cache_key(CacheKind.REPOSITORY_DASHBOARD, repository)
        cached = await self._cached(key, DashboardSummary)
        if cached is not None:
            return cached
        return await self._single_flight(
            key,
            lambda generation: self._build_repository(key, repository, generation),
        )

    async def _build_repository(
        self, key: str, repository: str, generation: int
    ) -> DashboardSummary:
        releases = await self.get_or_fetch_raw()
        subset = [event for event in releases if event.repository == repository]
        if not subset:
            raise RepositoryReleasesNotFoundError(repository)
        return await self._build_and_store(
            key,
            subset,
            day_policy=self._config.repository_day_policy,
            generation=generation,
        )

    async def _build_and_store(
        self,
        key: str,
        events: cabc.Sequence[ReleaseEvent],
        *,
        day_policy: DayPolicy,
        generation: int,
    ) -> DashboardSummary:
        started = time.perf_counter()
        summary = self.build_summary(events, day_policy=day_policy)
        await self._store_if_current(
            key,
            summary,
            ttl_ms=self._config.dashboard_ttl_ms,
            generation=generation,
        )
        self._events.log_build_completed(
            key=key,
            release_count=summary.total_releases,
            duration_s=time.perf_counter() - started,
        )
        return summary

    async def invalidate(
        self, kind: CacheKind | str, identifier: str | None = None
    ) -> str:
        """Remove one cached entry and return its key.

        Rebuilds already running when this is called still answer their
        callers but no longer write to the cache.

        Raises
        ------
        CacheKeyError
            If ``kind`` is unknown or a repository kind lacks a valid
            ``identifier``.

        """
        key = cache_key(kind, identifier)
        self._generation += 1
        await self._store.delete(key)
        self._events.log_cache_invalidated(key=key)
        return key

    async def invalidate_all(self) -> None:
        """Remove every cached entry.

        Rebuilds already running when this is called still answer their
        callers but no longer write to the cache.
        """
        self._generation += 1
        await self._store.clear()
        self._events.log_cache_cleared()

    async def status(self) -> CacheStatus:
        """Return the valid cache keys and their approximate size."""
        return await self._store.status()

    async def refresh(self) -> DashboardSummary:
        """Drop every cached entry and rebuild the whole-dataset summary.

        The rebuild always fetches anew; it never joins a rebuild that was
        already running.
        """
        await self.invalidate_all()
        return await self.get_or_build_whole()
