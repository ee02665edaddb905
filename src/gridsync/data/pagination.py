# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Paginated fetch engine shared by both API clients.

The two services paginate differently:

- The tables API returns an opaque ``offset`` token while more pages exist.
  The token is sent back verbatim; a response without it is the last page.
- The jobs API is paged by the client: each request carries ``offset`` and
  ``maxResults``, and an empty ``searchResults`` array ends the loop.

Both are expressed as a :class:`PaginationStrategy` so :func:`fetch_all` runs
one loop for either service. Pages are requested strictly one after another
and any failure aborts the whole fetch; there is no partial result. A page
whose body does not carry its records collection is such a failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from ..core._error_codes import RESPONSE_MALFORMED_BODY, VALIDATION_PAGE_SIZE
from ..core.errors import ResponseFormatError, ValidationError
from ..core.telemetry import NoOpTelemetryManager, PageEvent, TelemetryManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRequest:
    """
    One HTTP request of a paginated fetch.

    :param method: HTTP method.
    :param url: Absolute URL.
    :param params: Query string parameters.
    :param json: JSON body, if any.
    :param page: Zero-based page index of this request.
    """

    method: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    json: Optional[Dict[str, Any]] = None
    page: int = 0


class PaginationStrategy(Protocol):
    """Decides which request comes next, given the previous response."""

    def first_request(self) -> PageRequest:
        ...

    def records(self, body: Any) -> List[Dict[str, Any]]:
        ...

    def next_request(
        self, prior: PageRequest, body: Any, records: List[Dict[str, Any]]
    ) -> Optional[PageRequest]:
        """Return the next request, or None when the fetch is done."""
        ...


def _page_records(body: Any, records_key: str, url: str) -> List[Dict[str, Any]]:
    """Return the records of one page, raising when the body does not carry them."""
    items = body.get(records_key) if isinstance(body, dict) else None
    # Some endpoints answer with an object keyed by position instead of an array.
    if isinstance(items, dict):
        items = list(items.values())
    if not isinstance(items, list):
        raise ResponseFormatError(
            f"Response from {url} has no '{records_key}' collection.",
            subcode=RESPONSE_MALFORMED_BODY,
            details={"url": url, "records_key": records_key, "body_type": type(body).__name__},
        )
    return [x for x in items if isinstance(x, dict)]


class TokenContinuation:
    """
    Continuation by opaque ``offset`` token.

    :param url: Endpoint URL.
    :param params: Extra query parameters repeated on every request.
    :param records_key: Body key holding the page's records.
    """

    def __init__(self, url: str, params: Optional[Dict[str, Any]] = None, records_key: str = "records") -> None:
        self.url = url
        self.params = dict(params or {})
        self.records_key = records_key

    def first_request(self) -> PageRequest:
        return PageRequest("GET", self.url, params=dict(self.params))

    def records(self, body: Any) -> List[Dict[str, Any]]:
        return _page_records(body, self.records_key, self.url)

    def next_request(
        self, prior: PageRequest, body: Any, records: List[Dict[str, Any]]
    ) -> Optional[PageRequest]:
        if not isinstance(body, dict) or "offset" not in body:
            return None
        params = dict(prior.params)
        params["offset"] = body["offset"]
        return replace(prior, params=params, page=prior.page + 1)


class CountedPages:
    """
    Client-side page counting.

    :param url: Endpoint URL.
    :param body_factory: Builds the request body for ``(offset, page_size)``.
    :param page_size: Records per page.
    :param method: HTTP method, POST for search endpoints.
    :param records_key: Body key holding the page's records.
    :raises ~gridsync.core.errors.ValidationError: If ``page_size`` is below 1.
    """

    def __init__(
        self,
        url: str,
        body_factory: Callable[[int, int], Dict[str, Any]],
        page_size: int,
        method: str = "POST",
        records_key: str = "searchResults",
    ) -> None:
        if page_size < 1:
            raise ValidationError("page_size must be at least 1", subcode=VALIDATION_PAGE_SIZE)
        self.url = url
        self.body_factory = body_factory
        self.page_size = page_size
        self.method = method
        self.records_key = records_key

    def _request_for(self, page: int) -> PageRequest:
        offset = page * self.page_size
        return PageRequest(self.method, self.url, json=self.body_factory(offset, self.page_size), page=page)

    def first_request(self) -> PageRequest:
        return self._request_for(0)

    def records(self, body: Any) -> List[Dict[str, Any]]:
        return _page_records(body, self.records_key, self.url)

    def next_request(
        self, prior: PageRequest, body: Any, records: List[Dict[str, Any]]
    ) -> Optional[PageRequest]:
        if not records:
            return None
        return self._request_for(prior.page + 1)


def fetch_all(
    send: Callable[[PageRequest], Any],
    strategy: PaginationStrategy,
    *,
    source: str,
    telemetry: Optional[Union[TelemetryManager, NoOpTelemetryManager]] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch every page and return all records in arrival order.

    :param send: Performs one request and returns the parsed JSON body. Any
        exception it raises propagates unchanged and ends the fetch.
    :param strategy: Pagination strategy for the endpoint.
    :param source: Label used in page events, e.g. ``"tables"``.
    :param telemetry: Receives one :class:`~gridsync.core.telemetry.PageEvent` per page.
    :return: Every record of every page.
    """
    telemetry = telemetry or NoOpTelemetryManager()
    results: List[Dict[str, Any]] = []
    request: Optional[PageRequest] = strategy.first_request()
    endpoint = request.url

    while request is not None:
        body = send(request)
        page = strategy.records(body)
        results.extend(page)
        telemetry.record_page(
            PageEvent(
                source=source,
                endpoint=endpoint,
                page_number=request.page + 1,
                page_size=len(page),
                total=len(results),
            )
        )
        request = strategy.next_request(request, body, page)

    logger.info("Fetched %d records from %s.", len(results), endpoint)
    return results


__all__ = ["PageRequest", "PaginationStrategy", "TokenContinuation", "CountedPages", "fetch_all"]
