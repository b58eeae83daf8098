"""Configuration for dashboard building and caching.

Usage
-----
Create a configuration with defaults:

>>> config = DashboardConfig()
>>> config.dashboard_ttl_minutes
15

Or load from environment variables:

>>> import os
>>> os.environ["RELEASESCOPE_REPOSITORIES"] = "octo/reef, octo/kelp"
>>> DashboardConfig.from_env().repositories
('octo/reef', 'octo/kelp')

A YAML repositories file holds a plain list of ``owner/name`` strings::

    - octo/reef
    - octo/kelp

"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import os
import typing as typ
import zoneinfo
from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from releasescope.aggregation.time_buckets import DayPolicy
from releasescope.common.slug import parse_repo_slug

YAML_VERSION = (1, 2)
MILLIS_PER_MINUTE = 60_000

DEFAULT_REPOSITORIES = ("daangn/stackflow", "daangn/seed-design")


class DashboardConfigError(ValueError):
    """Raised when dashboard configuration values are invalid."""


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml


def load_repositories_file(path: Path | str) -> tuple[str, ...]:
    """Read a YAML list of ``owner/name`` identifiers.

    Raises
    ------
    DashboardConfigError
        If the file cannot be read or is not a list of valid identifiers.

    """
    path_obj = Path(path)
    try:
        loaded = _yaml().load(path_obj.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        msg = f"failed to read repositories file {path_obj}: {exc}"
        raise DashboardConfigError(msg) from exc

    if loaded is None:
        msg = f"repositories file {path_obj} is empty"
        raise DashboardConfigError(msg)

    try:
        entries = msgspec.convert(loaded, type=list[str])
    except msgspec.ValidationError as exc:
        msg = f"repositories file {path_obj} must hold a list of strings: {exc}"
        raise DashboardConfigError(msg) from exc
    return _normalize_repositories(entries)


def _normalize_repositories(entries: typ.Iterable[str]) -> tuple[str, ...]:
    repositories: list[str] = []
    for entry in entries:
        slug = entry.strip()
        if not slug:
            continue
        try:
            parse_repo_slug(slug)
        except ValueError as exc:
            raise DashboardConfigError(str(exc)) from exc
        if slug not in repositories:
            repositories.append(slug)
    if not repositories:
        msg = "at least one repository must be configured"
        raise DashboardConfigError(msg)
    return tuple(repositories)


@dc.dataclass(frozen=True, slots=True)
class DashboardConfig:
    """Settings for the aggregation orchestrator.

    Attributes
    ----------
    repositories
        ``owner/name`` identifiers fetched for the whole-dataset summary.
    raw_data_ttl_minutes
        Lifetime of the cached raw release list. Default is 30 minutes.
    dashboard_ttl_minutes
        Lifetime of built summaries; must be shorter than the raw-data TTL
        so a summary never outlives the data it was built from. Default is
        15 minutes.
    timezone
        Timezone whose calendar defines every time bucket. Default is UTC.
    whole_day_policy
        Day policy for the whole-dataset summary. Default excludes weekends
        from the quarterly, hourly and business-hours counters.
    repository_day_policy
        Day policy for per-repository summaries. Default counts every day.

    """

    repositories: tuple[str, ...] = DEFAULT_REPOSITORIES
    raw_data_ttl_minutes: int = 30
    dashboard_ttl_minutes: int = 15
    timezone: dt.tzinfo = dt.UTC
    whole_day_policy: DayPolicy = DayPolicy.WEEKDAYS_ONLY
    repository_day_policy: DayPolicy = DayPolicy.ALL_DAYS

    def __post_init__(self) -> None:
        """Validate the TTL relationship."""
        if self.raw_data_ttl_minutes < 1 or self.dashboard_ttl_minutes < 1:
            msg = "cache TTLs must be positive"
            raise DashboardConfigError(msg)
        if self.dashboard_ttl_minutes >= self.raw_data_ttl_minutes:
            msg = (
                "dashboard TTL must be shorter than the raw-data TTL, got "
                f"{self.dashboard_ttl_minutes} >= {self.raw_data_ttl_minutes}"
            )
            raise DashboardConfigError(msg)

    @property
    def raw_data_ttl_ms(self) -> int:
        """Return the raw-data TTL in milliseconds."""
        return self.raw_data_ttl_minutes * MILLIS_PER_MINUTE

    @property
    def dashboard_ttl_ms(self) -> int:
        """Return the summary TTL in milliseconds."""
        return self.dashboard_ttl_minutes * MILLIS_PER_MINUTE

    @staticmethod
    def _parse_positive_int(env_var: str, default: int) -> int:
        """Read a positive integer env var, falling back to a default."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            msg = f"{env_var} must be an integer, got: {raw!r}"
            raise DashboardConfigError(msg) from exc
        if value < 1:
            msg = f"{env_var} must be positive, got: {value}"
            raise DashboardConfigError(msg)
        return value

    @staticmethod
    def _parse_day_policy(env_var: str, default: DayPolicy) -> DayPolicy:
        raw = os.environ.get(env_var, "").strip().lower()
        if not raw:
            return default
        try:
            return DayPolicy(raw)
        except ValueError as exc:
            choices = ", ".join(policy.value for policy in DayPolicy)
            msg = f"{env_var} must be one of {choices}, got: {raw!r}"
            raise DashboardConfigError(msg) from exc

    @staticmethod
    def _parse_timezone(env_var: str) -> dt.tzinfo:
        raw = os.environ.get(env_var, "").strip()
        if not raw or raw.upper() == "UTC":
            return dt.UTC
        try:
            return zoneinfo.ZoneInfo(raw)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"{env_var} must name an IANA timezone, got: {raw!r}"
            raise DashboardConfigError(msg) from exc

    @staticmethod
    def _parse_repositories() -> tuple[str, ...]:
        raw = os.environ.get("RELEASESCOPE_REPOSITORIES", "")
        if raw.strip():
            return _normalize_repositories(raw.split(","))
        raw_path = os.environ.get("RELEASESCOPE_REPOSITORIES_FILE", "").strip()
        if raw_path:
            return load_repositories_file(raw_path)
        return DEFAULT_REPOSITORIES

    @classmethod
    def from_env(cls) -> DashboardConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``RELEASESCOPE_REPOSITORIES``: comma-separated ``owner/name`` list.
        - ``RELEASESCOPE_REPOSITORIES_FILE``: YAML list used when the
          previous variable is unset.
        - ``RELEASESCOPE_RAW_DATA_TTL_MINUTES`` and
          ``RELEASESCOPE_DASHBOARD_TTL_MINUTES``: positive integers.
        - ``RELEASESCOPE_TIMEZONE``: IANA timezone name.
        - ``RELEASESCOPE_WHOLE_DAY_POLICY`` and
          ``RELEASESCOPE_REPOSITORY_DAY_POLICY``: ``all`` or ``weekdays``.

        Returns
        -------
        DashboardConfig
            Configuration instance with values from environment or defaults.

        Raises
        ------
        DashboardConfigError
            If any variable holds an invalid value.

        """
        return cls(
            repositories=cls._parse_repositories(),
            raw_data_ttl_minutes=cls._parse_positive_int(
                "RELEASESCOPE_RAW_DATA_TTL_MINUTES", 30
            ),
            dashboard_ttl_minutes=cls._parse_positive_int(
                "RELEASESCOPE_DASHBOARD_TTL_MINUTES", 15
            ),
            timezone=cls._parse_timezone("RELEASESCOPE_TIMEZONE"),
            whole_day_policy=cls._parse_day_policy(
                "RELEASESCOPE_WHOLE_DAY_POLICY", DayPolicy.WEEKDAYS_ONLY
            ),
            repository_day_policy=cls._parse_day_policy(
                "RELEASESCOPE_REPOSITORY_DAY_POLICY", DayPolicy.ALL_DAYS
            ),
        )
