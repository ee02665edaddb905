# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Low-level client for the jobs API search endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

import requests

from ..core.config import GridSyncConfig
from ..core.telemetry import NoOpTelemetryManager, TelemetryManager
from ..models.conditions import Condition, build_search_body
from ..models.endpoints import DEFAULT_JOB_ENDPOINTS, EndpointRegistry
from ._base import _ApiClient
from .pagination import CountedPages, fetch_all


class _JobsClient(_ApiClient):
    """
    Jobs API client.

    :param api_key: API token.
    :param endpoints: Endpoint registry; defaults to the public service.
    """

    # The service rejects JSON content types on search requests.
    content_type = "text/plain"

    def __init__(
        self,
        api_key: str,
        endpoints: Optional[EndpointRegistry] = None,
        config: Optional[GridSyncConfig] = None,
        session: Optional[requests.Session] = None,
        telemetry: Optional[Union[TelemetryManager, NoOpTelemetryManager]] = None,
    ) -> None:
        super().__init__(api_key, config, session=session, telemetry=telemetry)
        self.endpoints = endpoints if endpoints is not None else DEFAULT_JOB_ENDPOINTS

    def _fetch_all(
        self,
        endpoint: str,
        conditions: Sequence[Condition] = (),
        page_size: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search ``endpoint`` with ``conditions`` and return every result.

        :param endpoint: Name in the endpoint registry, e.g. ``"Jobs"``.
        :param conditions: Conditions combined with AND, sent on every page.
        :param page_size: Records per page; defaults to ``config.jobs_page_size``.
        """
        url = self.endpoints[endpoint]
        size = page_size if page_size is not None else self.config.jobs_page_size
        frozen = tuple(conditions)

        def body(offset: int, max_results: int) -> Dict[str, Any]:
            return build_search_body(frozen, offset=offset, max_results=max_results)

        strategy = CountedPages(url, body, size)
        return fetch_all(self._send, strategy, source="jobs", telemetry=self._telemetry)

    def _fetch_get(self, endpoint: str) -> Any:
        """Plain GET for the endpoints that do not support search."""
        return self._request("get", self.endpoints[endpoint]).json()
