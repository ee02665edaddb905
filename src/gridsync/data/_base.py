# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Shared transport for the bearer-token REST clients."""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

import requests

from ..core._http import _HttpClient
from ..core.config import GridSyncConfig
from ..core.errors import HttpError
from ..core.telemetry import NoOpTelemetryManager, TelemetryManager, create_telemetry_manager
from .pagination import PageRequest


class _ApiClient:
    """
    Base for the low-level API clients.

    :param api_key: Bearer token.
    :param config: Client configuration.
    :param session: Optional shared ``requests.Session``.
    """

    content_type = "application/json"

    def __init__(
        self,
        api_key: str,
        config: Optional[GridSyncConfig] = None,
        session: Optional[requests.Session] = None,
        telemetry: Optional[Union[TelemetryManager, NoOpTelemetryManager]] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required.")
        self.api_key = api_key
        self.config = config or GridSyncConfig.from_env()
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            session=session,
        )
        self._telemetry = telemetry or create_telemetry_manager(self.config.telemetry)

    def _headers(self) -> Dict[str, str]:
        """Build standard headers with bearer auth."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
            "Content-Type": self.content_type,
        }

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Perform one request and raise :class:`~gridsync.core.errors.HttpError` on a non-2xx status.

        Network errors from ``requests`` propagate unchanged.
        """
        kwargs.setdefault("headers", self._headers())
        r = self._http._request(method, url, **kwargs)
        if not (200 <= r.status_code < 300):
            raise self._http_error(method, url, r)
        return r

    def _send(self, request: PageRequest) -> Any:
        """Perform a paginated request and return the decoded JSON body."""
        kwargs: Dict[str, Any] = {}
        if request.params:
            kwargs["params"] = request.params
        if request.json is not None:
            kwargs["json"] = request.json
        return self._request(request.method.lower(), request.url, **kwargs).json()

    @staticmethod
    def _http_error(method: str, url: str, r: requests.Response) -> HttpError:
        message = f"{method.upper()} {url} failed with status {r.status_code}"
        service_code: Optional[str] = None
        body_text = getattr(r, "text", "") or ""
        try:
            body = r.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error", body.get("errors"))
            if isinstance(err, dict):
                service_code = err.get("type") or err.get("code")
                if err.get("message"):
                    message = f"{message}: {err['message']}"
            elif isinstance(err, str):
                service_code = err
            elif isinstance(body.get("message"), str):
                message = f"{message}: {body['message']}"
        retry_after: Optional[int] = None
        headers = getattr(r, "headers", None) or {}
        if "Retry-After" in headers:
            try:
                retry_after = int(headers["Retry-After"])
            except (TypeError, ValueError):
                retry_after = None
        return HttpError(
            message,
            status_code=r.status_code,
            service_error_code=service_code,
            url=url,
            method=method.upper(),
            body_excerpt=body_text[:200] or None,
            retry_after=retry_after,
        )

    def close(self) -> None:
        self._http.close()
