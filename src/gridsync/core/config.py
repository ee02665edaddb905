# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import TelemetryConfig


def _env_int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GridSyncConfig:
    """
    Configuration settings for gridsync clients.

    :param http_retries: Extra attempts after a network error (default: 0, no retry).
        Non-2xx responses are never retried.
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff between attempts (default: 0.5).
    :type http_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param tables_endpoint: Root URL of the tables API, with trailing slash.
    :type tables_endpoint: str
    :param jobs_page_size: Records requested per page from the jobs API. The service
        does not like more than 500.
    :type jobs_page_size: int
    :param lookup_cache_seconds: Default TTL for cached lookup tables (12 hours).
    :type lookup_cache_seconds: int
    :param cache_max_chars: Largest serialized value the cache layer will store.
    :type cache_max_chars: int
    :param cache_write_when_disabled: When True a call made with a TTL of zero or below
        still writes its fresh result so later callers see it. When False such a
        call neither reads nor writes the cache.
    :type cache_write_when_disabled: bool
    :param telemetry: Optional telemetry settings for page events.
    :type telemetry: ~gridsync.core.telemetry.TelemetryConfig or None
    """

    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_timeout: Optional[float] = None

    tables_endpoint: str = "https://api.airtable.com/v0/"
    jobs_page_size: int = 300

    lookup_cache_seconds: int = 43200
    cache_max_chars: int = 100000
    cache_write_when_disabled: bool = True

    telemetry: Optional[TelemetryConfig] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GridSyncConfig":
        """
        Create a configuration instance from ``GRIDSYNC_*`` environment variables.

        Unset variables fall back to the dataclass defaults.

        :param environ: Mapping to read instead of :data:`os.environ`.
        :return: Configuration instance.
        :rtype: ~gridsync.core.config.GridSyncConfig
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            http_retries=_env_int(env, "GRIDSYNC_HTTP_RETRIES", None),
            http_backoff=_env_float(env, "GRIDSYNC_HTTP_BACKOFF", None),
            http_timeout=_env_float(env, "GRIDSYNC_HTTP_TIMEOUT", None),
            tables_endpoint=env.get("GRIDSYNC_TABLES_ENDPOINT") or defaults.tables_endpoint,
            jobs_page_size=_env_int(env, "GRIDSYNC_JOBS_PAGE_SIZE", defaults.jobs_page_size),
            lookup_cache_seconds=_env_int(env, "GRIDSYNC_LOOKUP_CACHE_SECONDS", defaults.lookup_cache_seconds),
            cache_max_chars=_env_int(env, "GRIDSYNC_CACHE_MAX_CHARS", defaults.cache_max_chars),
            cache_write_when_disabled=_env_bool(
                env, "GRIDSYNC_CACHE_WRITE_WHEN_DISABLED", defaults.cache_write_when_disabled
            ),
            telemetry=TelemetryConfig(enable_logging=True)
            if _env_bool(env, "GRIDSYNC_LOGGING", False)
            else None,
        )
