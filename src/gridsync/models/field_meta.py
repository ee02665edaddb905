# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Table and field metadata for the tables API.

Field identifiers (``fld...``) are opaque and stable, while records are keyed
by field *name*. :meth:`TableMeta.fields_by_id` gives the id to metadata map
used to resolve one into the other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class FieldMeta:
    """
    Metadata for one field of a table.

    :param id: Field identifier, e.g. ``"fldQRiDzR0S0GpqqJ"``.
    :param name: Display name, which is the key used inside record ``fields``.
    :param type: Field type reported by the service, e.g. ``"singleLineText"``.
    :param options: Type-specific options, passed through untouched.
    """

    id: str
    name: str
    type: str = ""
    options: Optional[Dict[str, Any]] = None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "FieldMeta":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            options=data.get("options"),
        )


@dataclass(frozen=True)
class TableMeta:
    """
    Metadata for one table of a base.

    :param id: Table identifier, e.g. ``"tblWPSxJhJdRgBstS"``.
    :param name: Table display name.
    :param fields: Field metadata in the order the service reports them.
    """

    id: str
    name: str
    fields: List[FieldMeta] = field(default_factory=list)

    def fields_by_id(self) -> Dict[str, FieldMeta]:
        return {f.id: f for f in self.fields}

    def matches(self, table: str) -> bool:
        """True when ``table`` is this table's id or name."""
        return table in (self.id, self.name)

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "TableMeta":
        raw_fields = data.get("fields") or []
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            fields=[FieldMeta.from_api_response(f) for f in raw_fields if isinstance(f, dict)],
        )


__all__ = ["FieldMeta", "TableMeta"]
