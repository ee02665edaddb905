# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Google Sheets backend built on the Sheets v4 API.

Structural changes (inserting, deleting and deduplicating rows or columns)
go through ``spreadsheets.batchUpdate`` so that formatting, frozen rows and
named ranges on the untouched parts of a sheet are preserved. Values are
read and written with ``spreadsheets.values``. API errors from
:mod:`googleapiclient` propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from google.oauth2 import service_account
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

SCOPES = ("https://www.googleapis.com/auth/spreadsheets",)


def column_letter(index: int) -> str:
    """1-based column index to its A1 letters: 1 -> ``A``, 27 -> ``AA``."""
    if index < 1:
        raise ValueError("column index must be >= 1")
    letters = ""
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def a1_range(title: str, row: int, column: int, num_rows: int, num_columns: int) -> str:
    escaped = title.replace("'", "''")
    start = f"{column_letter(column)}{row}"
    end = f"{column_letter(column + num_columns - 1)}{row + num_rows - 1}"
    return f"'{escaped}'!{start}:{end}"


class GoogleWorksheet:
    """
    One sheet of a Google spreadsheet.

    Grid extents are taken from the sheet properties at construction and kept
    in step with the structural changes made through this object.

    :param service: Sheets v4 service from :func:`googleapiclient.discovery.build`.
    :param spreadsheet_id: Spreadsheet identifier.
    :param properties: The sheet's ``properties`` object from ``spreadsheets.get``.
    """

    def __init__(self, service: Any, spreadsheet_id: str, properties: Dict[str, Any]) -> None:
        self._service = service
        self.spreadsheet_id = spreadsheet_id
        self.sheet_id: int = properties.get("sheetId", 0)
        self.title: str = properties.get("title", "")
        grid = properties.get("gridProperties") or {}
        self._row_count: int = int(grid.get("rowCount", 0))
        self._column_count: int = int(grid.get("columnCount", 0))

    # ----------------------------- Extents -----------------------------
    @property
    def max_rows(self) -> int:
        return self._row_count

    @property
    def max_columns(self) -> int:
        return self._column_count

    @property
    def last_row(self) -> int:
        return len(self._read_all())

    # --------------------------- Structure -----------------------------
    def _batch_update(self, requests: List[Dict[str, Any]]) -> Dict[str, Any]:
        return (
            self._service.spreadsheets()
            .batchUpdate(spreadsheetId=self.spreadsheet_id, body={"requests": requests})
            .execute()
        )

    def _dimension_range(self, dimension: str, start_index: int, end_index: int) -> Dict[str, Any]:
        return {
            "sheetId": self.sheet_id,
            "dimension": dimension,
            "startIndex": start_index,
            "endIndex": end_index,
        }

    def insert_rows_after(self, row: int, count: int) -> None:
        self._batch_update(
            [
                {
                    "insertDimension": {
                        "range": self._dimension_range("ROWS", row, row + count),
                        "inheritFromBefore": row > 0,
                    }
                }
            ]
        )
        self._row_count += count

    def insert_columns_after(self, column: int, count: int) -> None:
        self._batch_update(
            [
                {
                    "insertDimension": {
                        "range": self._dimension_range("COLUMNS", column, column + count),
                        "inheritFromBefore": column > 0,
                    }
                }
            ]
        )
        self._column_count += count

    def delete_rows(self, start: int, count: int) -> None:
        self._batch_update(
            [{"deleteDimension": {"range": self._dimension_range("ROWS", start - 1, start - 1 + count)}}]
        )
        self._row_count -= count

    def delete_row(self, row: int) -> None:
        self.delete_rows(row, 1)

    def delete_columns(self, start: int, count: int) -> None:
        self._batch_update(
            [{"deleteDimension": {"range": self._dimension_range("COLUMNS", start - 1, start - 1 + count)}}]
        )
        self._column_count -= count

    def remove_duplicates(self, columns: Sequence[int]) -> None:
        filled = self.last_row
        if filled == 0:
            return
        self._batch_update(
            [
                {
                    "deleteDuplicates": {
                        "range": {
                            "sheetId": self.sheet_id,
                            "startRowIndex": 0,
                            "endRowIndex": filled,
                            "startColumnIndex": 0,
                            "endColumnIndex": self._column_count,
                        },
                        "comparisonColumns": [self._dimension_range("COLUMNS", c - 1, c) for c in columns],
                    }
                }
            ]
        )

    # ----------------------------- Values ------------------------------
    def _read_all(self) -> List[List[Any]]:
        escaped = self.title.replace("'", "''")
        result = (
            self._service.spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=f"'{escaped}'", valueRenderOption="UNFORMATTED_VALUE")
            .execute()
        )
        return result.get("values", [])

    def get_values(self, row: int, column: int, num_rows: int, num_columns: int) -> List[List[Any]]:
        """Read a block, padding short rows with empty strings as the API trims them."""
        if num_rows < 1 or num_columns < 1:
            return []
        result = (
            self._service.spreadsheets()
            .values()
            .get(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range(self.title, row, column, num_rows, num_columns),
                valueRenderOption="UNFORMATTED_VALUE",
            )
            .execute()
        )
        values = result.get("values", [])
        padded = [list(r) + [""] * (num_columns - len(r)) for r in values]
        padded.extend([[""] * num_columns for _ in range(num_rows - len(padded))])
        return padded

    def set_values(self, row: int, column: int, values: Sequence[Sequence[Any]]) -> None:
        if not values:
            return
        num_columns = max(len(r) for r in values)
        (
            self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range(self.title, row, column, len(values), num_columns),
                valueInputOption="RAW",
                # A null cell is skipped by the API and keeps its old value.
                body={"values": [["" if v is None else v for v in r] for r in values]},
            )
            .execute()
        )

    def get_data_values(self) -> List[List[Any]]:
        values = self._read_all()
        width = max((len(r) for r in values), default=0)
        return [list(r) + [""] * (width - len(r)) for r in values]

    def flush(self) -> None:
        # Every call above is applied by the API before it returns.
        logger.debug("Flushed sheet %s", self.title)


class GoogleSheetsHost:
    """
    A Google spreadsheet document.

    :param service: Sheets v4 service object.
    :param spreadsheet_id: Spreadsheet identifier from its URL.

    Example::

        host = GoogleSheetsHost.from_service_account_file("sa.json", "1AbC...")
        sync = SheetSynchronizer(host)
        sync.update_sheet_with_data("Jobs", rows)
    """

    def __init__(self, service: Any, spreadsheet_id: str) -> None:
        if not spreadsheet_id:
            raise ValueError("spreadsheet_id is required.")
        self._service = service
        self.spreadsheet_id = spreadsheet_id

    @classmethod
    def from_service_account_file(
        cls,
        path: str,
        spreadsheet_id: str,
        scopes: Sequence[str] = SCOPES,
    ) -> "GoogleSheetsHost":
        credentials = service_account.Credentials.from_service_account_file(path, scopes=list(scopes))
        service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return cls(service, spreadsheet_id)

    def get_sheet(self, name: str) -> Optional[GoogleWorksheet]:
        meta = (
            self._service.spreadsheets()
            .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties")
            .execute()
        )
        for sheet in meta.get("sheets", []):
            properties = sheet.get("properties") or {}
            if properties.get("title") == name:
                return GoogleWorksheet(self._service, self.spreadsheet_id, properties)
        return None


__all__ = ["GoogleSheetsHost", "GoogleWorksheet", "column_letter", "SCOPES"]
