# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record operations namespace for the tables API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..models.field_meta import FieldMeta
from ..models.record import Record

if TYPE_CHECKING:
    from ..client import TablesClient


class RecordOperations:
    """
    Record operations.

    Accessed via ``client.records``.

    Example::

        with TablesClient(token, "appVlR8qys1QCNt3H") as client:
            for record in client.records.list("tblWPSxJhJdRgBstS"):
                print(record.id, record.get("Name"))

            created = client.records.create("tblWPSxJhJdRgBstS", {"Name": "Cheese"})
            client.records.update("tblWPSxJhJdRgBstS", created.id, {"Notes": "touch"})
    """

    def __init__(self, client: "TablesClient") -> None:
        self._client = client

    def list(self, table: str, *, params: Optional[Dict[str, Any]] = None) -> List[Record]:
        """
        Retrieve every record of a table.

        :param table: Table id or name.
        :param params: Extra query parameters sent with every page, e.g. ``{"view": "Grid view"}``.
        :return: Records in the order the service returned them.
        :raises ~gridsync.core.errors.HttpError: If any page request fails.
        """
        return self._client._get_tables()._get_records(table, params=params)

    def fields_meta(self, table: str) -> Dict[str, FieldMeta]:
        """
        Field id to field metadata for a table.

        :raises ~gridsync.core.errors.MetadataError: If the base has no such table.
        """
        return self._client._get_tables()._fields_meta(table)

    def create(self, table: str, fields: Dict[str, Any]) -> Record:
        """Create one record from a mapping of field name to value."""
        return self._client._get_tables()._create_record(table, fields)

    def update(self, table: str, record_id: str, fields: Dict[str, Any]) -> Record:
        """Update the given fields of an existing record."""
        return self._client._get_tables()._update_record(table, record_id, fields)


__all__ = ["RecordOperations"]
