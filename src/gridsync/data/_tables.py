# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Low-level client for the tables API (bases, tables, records, field metadata)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import requests

from ..core._error_codes import METADATA_TABLE_NOT_FOUND
from ..core.config import GridSyncConfig
from ..core.errors import MetadataError
from ..core.telemetry import NoOpTelemetryManager, TelemetryManager
from ..models.field_meta import FieldMeta, TableMeta
from ..models.record import Record
from ._base import _ApiClient
from .pagination import TokenContinuation, fetch_all

logger = logging.getLogger(__name__)


class _TablesClient(_ApiClient):
    """
    Tables API client for one base.

    :param api_key: Personal access token.
    :param base: Base identifier, e.g. ``"appVlR8qys1QCNt3H"``.
    """

    def __init__(
        self,
        api_key: str,
        base: str,
        config: Optional[GridSyncConfig] = None,
        session: Optional[requests.Session] = None,
        telemetry: Optional[Union[TelemetryManager, NoOpTelemetryManager]] = None,
    ) -> None:
        super().__init__(api_key, config, session=session, telemetry=telemetry)
        self.base = (base or "").strip()
        if not self.base:
            raise ValueError("base is required.")
        endpoint = self.config.tables_endpoint
        self.endpoint = endpoint if endpoint.endswith("/") else endpoint + "/"

    def _table_url(self, table: str) -> str:
        return f"{self.endpoint}{self.base}/{table}"

    # ----------------------------- Metadata -----------------------------
    def _list_tables(self) -> List[TableMeta]:
        url = f"{self.endpoint}meta/bases/{self.base}/tables"
        body = self._request("get", url).json()
        tables = body.get("tables", []) if isinstance(body, dict) else []
        return [TableMeta.from_api_response(t) for t in tables if isinstance(t, dict)]

    def _fields_meta(self, table: str) -> Dict[str, FieldMeta]:
        """
        Resolve field id to field metadata for ``table``.

        Always hits the service; schema is small and freshness matters more
        than saving the call.

        :raises ~gridsync.core.errors.MetadataError: If the base has no such table.
        """
        for table_meta in self._list_tables():
            if table_meta.matches(table):
                return table_meta.fields_by_id()
        raise MetadataError(
            f"Table '{table}' was not found in base '{self.base}'.",
            subcode=METADATA_TABLE_NOT_FOUND,
            details={"base": self.base, "table": table},
        )

    # ----------------------------- Records ------------------------------
    def _get_records(self, table: str, params: Optional[Dict[str, Any]] = None) -> List[Record]:
        """Retrieve every record of ``table``, following ``offset`` tokens."""
        strategy = TokenContinuation(self._table_url(table), params=params)
        raw = fetch_all(self._send, strategy, source="tables", telemetry=self._telemetry)
        return [Record.from_api_response(r) for r in raw]

    def _create_record(self, table: str, fields: Dict[str, Any]) -> Record:
        """Create one record. The service accepts up to ten per call; this sends one."""
        payload = {"records": [{"fields": fields}]}
        body = self._request("post", self._table_url(table), json=payload).json()
        created = body.get("records") if isinstance(body, dict) else None
        if isinstance(created, list) and created and isinstance(created[0], dict):
            return Record.from_api_response(created[0])
        return Record.from_api_response(body if isinstance(body, dict) else {})

    def _update_record(self, table: str, record_id: str, fields: Dict[str, Any]) -> Record:
        """Update the given fields of one record, leaving the others untouched."""
        url = f"{self._table_url(table)}/{record_id}"
        body = self._request("patch", url, json={"fields": fields}).json()
        return Record.from_api_response(body if isinstance(body, dict) else {})
