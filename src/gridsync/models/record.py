# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for the tables API.

Provides a typed representation of a fetched record with dict-like access to
its fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

# Type aliases for semantic clarity
RecordId = str  # e.g. "rec..."
FieldName = str


@dataclass
class Record:
    """
    A record snapshot as returned by one fetch.

    :param id: Record identifier, stable across fetches within a base and table.
    :type id: str
    :param fields: Field values keyed by field *name*. Empty fields are absent.
    :type fields: dict[str, Any]
    :param created_time: Creation timestamp reported by the service, if any.
    :type created_time: str | None

    Example::

        record = client.records.list("tblPeople")[0]
        print(record.id)
        print(record["Name"])
        print(record.get("Email"))  # None when the field is empty
    """

    id: RecordId
    fields: Dict[FieldName, Any] = field(default_factory=dict)
    created_time: Optional[str] = None

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the wire shape ``{"id": ..., "fields": {...}}``.

        :rtype: dict[str, Any]
        """
        out: Dict[str, Any] = {"id": self.id, "fields": dict(self.fields)}
        if self.created_time is not None:
            out["createdTime"] = self.created_time
        return out

    @classmethod
    def from_api_response(cls, response_data: Dict[str, Any]) -> "Record":
        """
        Create a Record from one element of a ``records`` array.

        :param response_data: Raw API dictionary with ``id``, ``fields`` and
            optionally ``createdTime``.
        :type response_data: dict[str, Any]
        :rtype: Record
        """
        fields = response_data.get("fields")
        return cls(
            id=str(response_data.get("id", "")),
            fields=dict(fields) if isinstance(fields, dict) else {},
            created_time=response_data.get("createdTime"),
        )


__all__ = ["Record", "RecordId", "FieldName"]
