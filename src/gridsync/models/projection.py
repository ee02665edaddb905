# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Projection of records into lookup tables.

A lookup maps a chosen key (the record id, or the value of a key field) to
either a single field value (:class:`ScalarProjection`) or a small object of
named field values (:class:`ObjectProjection`). Fields are referenced by their
stable field id and resolved to names through the table's field metadata.

Projection is lenient: a record whose key is empty or not a string still gets
an entry (an empty object) so that referential rows are never silently
dropped, and fields that cannot be resolved come back as ``None``. Records
sharing a key overwrite each other in fetch order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .field_meta import FieldMeta
from .record import Record

logger = logging.getLogger(__name__)

EMPTY_KEY = ""


@dataclass(frozen=True)
class ScalarProjection:
    """Lookup value is the value of one field, e.g. ``{"rec1": "Alice"}``."""

    field: str


@dataclass(frozen=True)
class ObjectProjection:
    """
    Lookup value is an object built from several fields.

    :param properties: Output property name to source field id, e.g.
        ``{"email": "fldA", "phone": "fldB"}``.
    """

    properties: Mapping[str, str]


Projection = Union[ScalarProjection, ObjectProjection]


def resolve_field(record: Record, meta: Mapping[str, FieldMeta], field_id: str) -> Any:
    """Value of ``field_id`` on ``record``, or None when unknown or empty."""
    field_meta = meta.get(field_id)
    if field_meta is None:
        return None
    return record.fields.get(field_meta.name)


def build_lookup(
    records: Iterable[Record],
    meta: Mapping[str, FieldMeta],
    key_field: Optional[str],
    projection: Projection,
) -> Dict[str, Any]:
    """
    Build a lookup table from records.

    :param records: Records in fetch order.
    :param meta: Field id to :class:`~gridsync.models.field_meta.FieldMeta` for the table.
    :param key_field: Field id whose value becomes the key, or None to key by record id.
    :param projection: Scalar or object projection of the values.
    :return: Lookup dictionary.
    """
    lookup: Dict[str, Any] = {}
    for record in records:
        key = record.id if key_field is None else resolve_field(record, meta, key_field)

        if not isinstance(key, str):
            logger.debug("%s has no usable lookup key (%r), adding an empty entry", record.id, key)
            lookup[EMPTY_KEY if key is None else str(key)] = {}
            continue

        if isinstance(projection, ScalarProjection):
            lookup[key] = resolve_field(record, meta, projection.field)
        else:
            lookup[key] = {
                prop: resolve_field(record, meta, field_id) for prop, field_id in projection.properties.items()
            }
    return lookup


__all__ = ["ScalarProjection", "ObjectProjection", "Projection", "build_lookup", "resolve_field"]
