# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for gridsync.

This module provides:

- :class:`~gridsync.models.record.Record`: Record snapshot with dict-like access.
- :class:`~gridsync.models.field_meta.FieldMeta` and ``TableMeta``: Field metadata.
- :mod:`~gridsync.models.conditions`: Search condition builders.
- :mod:`~gridsync.models.projection`: Lookup projections.
- :class:`~gridsync.models.endpoints.EndpointRegistry`: Jobs API endpoints.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from the
    specific module files.
"""

__all__ = []
