# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Optional

import requests

from .core.cache import CacheLayer
from .core.config import GridSyncConfig
from .core.telemetry import create_telemetry_manager
from .data._jobs import _JobsClient
from .data._tables import _TablesClient
from .models.endpoints import EndpointRegistry
from .operations.jobs import JobOperations
from .operations.lookups import LookupOperations
from .operations.records import RecordOperations


class TablesClient:
    """
    High-level client for one base of the tables API.

    Reads are paginated transparently: every page is fetched before a call
    returns, and a failure on any page aborts the whole call.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager enables connection pooling and
        releases the HTTP session on exit::

            with TablesClient(token, "appVlR8qys1QCNt3H") as client:
                records = client.records.list("tblWPSxJhJdRgBstS")

    **Without Context Manager**:
        Resources are created lazily on first use. Call ``close()`` when done::

            client = TablesClient(token, "appVlR8qys1QCNt3H")
            try:
                records = client.records.list("tblWPSxJhJdRgBstS")
            finally:
                client.close()

    Namespaces:

        - ``client.records``: list, create and update records; field metadata
        - ``client.lookups``: cached lookup tables built from a table's records

    :param api_key: Personal access token, sent as a bearer token.
    :type api_key: :class:`str`
    :param base: Base identifier, e.g. ``"appVlR8qys1QCNt3H"``.
    :type base: :class:`str`
    :param config: Optional configuration. Defaults to :meth:`GridSyncConfig.from_env`.
    :type config: ~gridsync.core.config.GridSyncConfig or None
    :param cache: Cache used by ``client.lookups``. Defaults to a process-local
        in-memory cache sized by ``config.cache_max_chars``.
    :type cache: ~gridsync.core.cache.CacheLayer or None

    :raises ValueError: If ``api_key`` or ``base`` is missing.
    """

    def __init__(
        self,
        api_key: str,
        base: str,
        config: Optional[GridSyncConfig] = None,
        cache: Optional[CacheLayer] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required.")
        self._api_key = api_key
        self._base = (base or "").strip()
        if not self._base:
            raise ValueError("base is required.")
        self._config = config or GridSyncConfig.from_env()
        self._cache = cache if cache is not None else CacheLayer(max_chars=self._config.cache_max_chars)
        self._telemetry = create_telemetry_manager(self._config.telemetry)
        self._tables: Optional[_TablesClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.records = RecordOperations(self)
        self.lookups = LookupOperations(self)

    @property
    def base(self) -> str:
        return self._base

    def __enter__(self) -> "TablesClient":
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the HTTP session and the internal low-level client.

        Safe to call multiple times.
        """
        if self._tables is not None:
            self._tables.close()
            self._tables = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_tables(self) -> _TablesClient:
        """Get or create the low-level tables client, sharing the context session if any."""
        if self._tables is None:
            self._tables = _TablesClient(
                self._api_key,
                self._base,
                config=self._config,
                session=self._session,
                telemetry=self._telemetry,
            )
        return self._tables


class JobsClient:
    """
    High-level client for the jobs API.

    Every search is paginated by result count and runs until the service
    returns an empty page.

    Example::

        with JobsClient(token) as client:
            jobs = client.jobs.active_jobs()
            invoices = client.jobs.invoices_of_recent_archived_jobs(since_days_ago=10)

    :param api_key: API token, sent as a bearer token.
    :type api_key: :class:`str`
    :param config: Optional configuration. Defaults to :meth:`GridSyncConfig.from_env`.
    :type config: ~gridsync.core.config.GridSyncConfig or None
    :param endpoints: Endpoint registry. Defaults to the public service URLs.
    :type endpoints: ~gridsync.models.endpoints.EndpointRegistry or None

    :raises ValueError: If ``api_key`` is missing.
    """

    def __init__(
        self,
        api_key: str,
        config: Optional[GridSyncConfig] = None,
        endpoints: Optional[EndpointRegistry] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required.")
        self._api_key = api_key
        self._config = config or GridSyncConfig.from_env()
        self._endpoints = endpoints if endpoints is not None else EndpointRegistry.default()
        self._telemetry = create_telemetry_manager(self._config.telemetry)
        self._jobs: Optional[_JobsClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.jobs = JobOperations(self)

    @property
    def endpoints(self) -> EndpointRegistry:
        return self._endpoints

    def __enter__(self) -> "JobsClient":
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._jobs is not None:
            self._jobs.close()
            self._jobs = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_jobs(self) -> _JobsClient:
        if self._jobs is None:
            self._jobs = _JobsClient(
                self._api_key,
                endpoints=self._endpoints,
                config=self._config,
                session=self._session,
                telemetry=self._telemetry,
            )
        return self._jobs


__all__ = ["TablesClient", "JobsClient"]
