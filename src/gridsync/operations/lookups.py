# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Cached lookup tables built from tables API records."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..core.cache import cache_key
from ..models.projection import Projection, build_lookup

if TYPE_CHECKING:
    from ..client import TablesClient

logger = logging.getLogger(__name__)

LOOKUP_NAMESPACE = "airtable-lookup"


class LookupOperations:
    """
    Lookup table construction.

    Accessed via ``client.lookups``. Results are cached to stay clear of API
    rate limits; see :meth:`get`.

    Example::

        people = client.lookups.get(
            "tblWPSxJhJdRgBstS",
            key_field=None,
            projection=ObjectProjection({"email": "fldQRiDzR0S0GpqqJ"}),
        )
        # {"rec123": {"email": "a@example.com"}, ...}

        names = client.lookups.get(
            "tblWPSxJhJdRgBstS",
            key_field="fldQRiDzR0S0GpqqJ",
            projection=ScalarProjection("fld1kVewzVNs3K1PX"),
            cache_seconds=0,  # force a refresh
        )
    """

    def __init__(self, client: "TablesClient") -> None:
        self._client = client

    def get(
        self,
        table: str,
        key_field: Optional[str],
        projection: Projection,
        cache_seconds: Optional[int] = None,
        cache_id: str = "",
    ) -> Dict[str, Any]:
        """
        Build (or load from cache) a lookup table for ``table``.

        :param table: Table id, e.g. ``"tbl..."``.
        :param key_field: Field id whose value keys the lookup, or None for the record id.
        :param projection: :class:`~gridsync.models.projection.ScalarProjection` or
            :class:`~gridsync.models.projection.ObjectProjection`.
        :param cache_seconds: Cache TTL. Defaults to ``config.lookup_cache_seconds``
            (12 hours). Zero or below skips the cache read; whether the fresh
            value is still written follows ``config.cache_write_when_disabled``.
        :param cache_id: Explicit cache key, for several lookups over one table.
        :return: The lookup dictionary.
        """
        config = self._client._config
        ttl = config.lookup_cache_seconds if cache_seconds is None else cache_seconds
        key = cache_key(LOOKUP_NAMESPACE, self._client._base, table, cache_id)

        def produce() -> Dict[str, Any]:
            tables = self._client._get_tables()
            meta = tables._fields_meta(table)
            records = tables._get_records(table)
            lookup = build_lookup(records, meta, key_field, projection)
            logger.debug("Built lookup %s with %d entries", key, len(lookup))
            return lookup

        # Stored one second longer than requested, so a zero TTL still leaves a fresh entry.
        return self._client._cache.cached(
            key,
            produce,
            ttl,
            write_when_disabled=config.cache_write_when_disabled,
            ttl_padding=1,
        )


__all__ = ["LookupOperations", "LOOKUP_NAMESPACE"]
