# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with timeout handling and optional session support.

This module provides :class:`~gridsync.core._http._HttpClient`, a wrapper
around the requests library that applies per-method default timeouts, reuses a
:class:`requests.Session` when one is supplied, and can optionally repeat a
request after a network error. Retries are off by default: a failed page
aborts the whole fetch.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class _HttpClient:
    """
    HTTP client with timeout handling and optional session support.

    :param retries: Extra attempts after a network error. Default is 0.
    :type retries: :class:`int` | None
    :param backoff: Base delay in seconds between attempts. Default is 0.5.
    :type backoff: :class:`float` | None
    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session for connection pooling.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.max_attempts = 1 + (retries if retries is not None and retries > 0 else 0)
        self.base_delay = backoff if backoff is not None else 0.5
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute an HTTP request with timeout management.

        Applies default timeouts based on HTTP method (120s for writes, 10s for others).
        Network errors are re-raised unchanged once the attempts are spent.

        :param method: HTTP method (GET, POST, PATCH, etc.).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: If every attempt fails.
        """
        if "timeout" not in kwargs:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "patch", "put", "delete") else 10

        for attempt in range(self.max_attempts):
            try:
                if self._session is not None:
                    return self._session.request(method, url, **kwargs)
                return requests.request(method, url, **kwargs)
            except requests.exceptions.RequestException:
                if attempt == self.max_attempts - 1:
                    raise
                delay = self.base_delay * (2**attempt)
                logger.warning("%s %s failed, retrying in %.1fs", method.upper(), url, delay)
                time.sleep(delay)
        raise RuntimeError("Unexpected end of request loop")

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
