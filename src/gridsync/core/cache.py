# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
TTL cache layer placed in front of expensive API reads.

The backing store is an external collaborator with its own expiry
(:class:`CacheStore`). :class:`CacheLayer` only adds policy on top of it:
values are serialized to a canonical JSON string, and any value whose
serialized form is longer than ``max_chars`` is never stored. Skipped writes
are logged and the caller carries on with the freshly computed value.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 100000


@runtime_checkable
class CacheStore(Protocol):
    """String key/value store with per-entry expiry."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        ...


class InMemoryCacheStore:
    """
    Process-local :class:`CacheStore` implementation.

    Entries expire ``ttl_seconds`` after they were written. A non-positive TTL
    stores an entry that is already expired, which still replaces (and so
    invalidates) whatever was stored under the key before.

    :param clock: Monotonic time source, replaceable in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds)

    def __len__(self) -> int:
        return len(self._entries)


def cache_key(namespace: str, source: str, table: str, override: Optional[str] = None) -> str:
    """
    Build a deterministic cache key.

    :param namespace: Kind of cached value, e.g. ``"airtable-lookup"``.
    :param source: Base or spreadsheet the value came from.
    :param table: Table or sheet name.
    :param override: Caller supplied key. Used verbatim when non-empty, which lets
        several lookups over one physical table live side by side.
    :return: Cache key string.
    """
    if override:
        return override
    return f"{namespace}-{source}-{table}"


class CacheLayer:
    """
    Serialization and size policy over a :class:`CacheStore`.

    :param store: Backing store. Defaults to a new :class:`InMemoryCacheStore`.
    :param max_chars: Largest serialized value that will be written.
    """

    def __init__(self, store: Optional[CacheStore] = None, max_chars: int = DEFAULT_MAX_CHARS) -> None:
        self.store: CacheStore = store if store is not None else InMemoryCacheStore()
        self.max_chars = max_chars

    @staticmethod
    def serialize(value: Any) -> str:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for ``key``, or ``None`` on a miss."""
        raw = self.store.get(key)
        if raw is None:
            return None
        logger.info("Loading %s from cache.", key)
        return json.loads(raw)

    def put(self, key: str, value: Any, ttl_seconds: int) -> bool:
        """
        Serialize and store ``value``.

        :return: True when written, False when the value was too large to cache.
        """
        serialized = self.serialize(value)
        if len(serialized) > self.max_chars:
            logger.warning(
                "%s is too large to cache (%d > %d characters), so it is being loaded every time.",
                key,
                len(serialized),
                self.max_chars,
            )
            return False
        logger.info("Caching %s of length %d", key, len(serialized))
        self.store.put(key, serialized, ttl_seconds)
        return True

    def cached(
        self,
        key: str,
        producer: Callable[[], Any],
        ttl_seconds: int,
        *,
        write_when_disabled: bool = True,
        ttl_padding: int = 0,
    ) -> Any:
        """
        Read-through helper.

        The cache is only read when ``ttl_seconds`` is positive; a hit returns
        without calling ``producer``. On a miss the produced value is written back
        with a TTL of ``ttl_seconds + ttl_padding``. With a non-positive TTL the
        fresh value is still written when ``write_when_disabled`` is True, so a
        forced refresh replaces a stale entry.
        """
        if ttl_seconds > 0:
            hit = self.get(key)
            if hit is not None:
                return hit

        value = producer()
        if ttl_seconds > 0 or write_when_disabled:
            self.put(key, value, ttl_seconds + ttl_padding)
        return value


__all__ = ["CacheStore", "InMemoryCacheStore", "CacheLayer", "cache_key", "DEFAULT_MAX_CHARS"]
