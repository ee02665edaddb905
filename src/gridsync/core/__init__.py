# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for gridsync.

This module contains the foundational components including configuration,
HTTP transport, caching, telemetry, and error handling.
"""

from .cache import CacheLayer, CacheStore, InMemoryCacheStore, cache_key
from .config import GridSyncConfig
from .secrets import EnvSecretStore, SecretStore
from .errors import (
    GridSyncError,
    HttpError,
    MetadataError,
    ResponseFormatError,
    SheetStructureError,
    ValidationError,
)

__all__ = [
    "CacheLayer",
    "CacheStore",
    "InMemoryCacheStore",
    "cache_key",
    "GridSyncConfig",
    "GridSyncError",
    "HttpError",
    "MetadataError",
    "ResponseFormatError",
    "SheetStructureError",
    "ValidationError",
    "SecretStore",
    "EnvSecretStore",
]
