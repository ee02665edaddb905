# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Reconcile rectangular datasets against existing sheets.

Two strategies are offered. :meth:`SheetSynchronizer.update_sheet_with_data`
replaces a sheet's data, resizing the grid by the minimal row and column delta
so the sheet itself (frozen rows, formatting, whole-column named ranges) is
kept. :meth:`SheetSynchronizer.insert_data` pushes new rows in at the top and
leaves existing rows alone; :meth:`SheetSynchronizer.clean_up_sheet` then
drops older duplicates, since the host keeps the first occurrence.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from ..core._error_codes import (
    SHEET_NOT_FOUND,
    SHEET_TOO_FEW_COLUMNS,
    VALIDATION_EMPTY_DATA,
    VALIDATION_PRIMARY_KEY_COLUMN,
    VALIDATION_RAGGED_ROWS,
)
from ..core.cache import CacheLayer
from ..core.errors import SheetStructureError, ValidationError
from .host import SheetHost, Worksheet

logger = logging.getLogger(__name__)

SHEET_CACHE_NAMESPACE = "props"

Rows = Sequence[Sequence[Any]]


def _extents(rows: Rows) -> Tuple[int, int]:
    """(row count, column count) of a rectangular dataset."""
    if not rows:
        return 0, 0
    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise ValidationError(
                f"Row {i} has {len(row)} values, expected {width}.",
                subcode=VALIDATION_RAGGED_ROWS,
                details={"row": i, "expected": width, "actual": len(row)},
            )
    return len(rows), width


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


class SheetSynchronizer:
    """
    Spreadsheet synchronization engine.

    Every operation needs the named sheet to exist already and raises
    :class:`~gridsync.core.errors.SheetStructureError` when it does not.

    :param host: Spreadsheet document implementing :class:`~gridsync.sheets.host.SheetHost`.
    :param cache: Cache used by :meth:`get_keyed_columns`. Defaults to a
        process-local in-memory cache.
    :param write_when_disabled: Whether a read with caching disabled still
        stores its fresh result.
    """

    def __init__(
        self,
        host: SheetHost,
        cache: Optional[CacheLayer] = None,
        write_when_disabled: bool = True,
    ) -> None:
        self._host = host
        self._cache = cache if cache is not None else CacheLayer()
        self._write_when_disabled = write_when_disabled

    def _sheet(self, name: str) -> Worksheet:
        sheet = self._host.get_sheet(name)
        if sheet is None:
            raise SheetStructureError(
                f"Sheet '{name}' does not exist.",
                subcode=SHEET_NOT_FOUND,
                details={"sheet": name},
            )
        return sheet

    def update_sheet_with_data(self, name: str, rows: Rows) -> Worksheet:
        """
        Replace a sheet's data completely, resizing it to fit ``rows``.

        Surplus rows and columns are deleted from the end, missing ones are
        appended, and the data is written in one bulk call starting at A1.

        :param name: Name of an existing sheet.
        :param rows: Rectangular data, header row first, e.g.
            ``[["Name", "Code"], ["Cotton Sweatshirt XL", "css004"]]``.
        :return: The updated worksheet.
        :raises ~gridsync.core.errors.ValidationError: If ``rows`` is empty or ragged.
        """
        data_rows, data_cols = _extents(rows)
        if data_rows == 0 or data_cols == 0:
            raise ValidationError(
                "Cannot replace sheet data with an empty dataset.",
                subcode=VALIDATION_EMPTY_DATA,
                details={"sheet": name},
            )
        sheet = self._sheet(name)
        sheet_rows = sheet.max_rows
        sheet_cols = sheet.max_columns
        logger.debug("Resizing %s from %dx%d to %dx%d", name, sheet_rows, sheet_cols, data_rows, data_cols)

        if data_rows < sheet_rows:
            sheet.delete_rows(data_rows + 1, sheet_rows - data_rows)
        elif data_rows > sheet_rows:
            sheet.insert_rows_after(sheet_rows, data_rows - sheet_rows)

        if data_cols < sheet_cols:
            sheet.delete_columns(data_cols + 1, sheet_cols - data_cols)
        elif data_cols > sheet_cols:
            sheet.insert_columns_after(sheet_cols, data_cols - sheet_cols)

        sheet.set_values(1, 1, rows)
        logger.info("Wrote %d rows to %s", data_rows, name)
        return sheet

    def insert_data(self, name: str, rows: Rows) -> Optional[Worksheet]:
        """
        Insert ``rows`` at the top of an existing sheet without touching the rows below.

        The sheet is not widened: its structure is assumed to match the data.
        New rows go in first so that :meth:`clean_up_sheet` keeps them over
        older duplicates.

        :return: The worksheet, or None when ``rows`` is empty.
        :raises ~gridsync.core.errors.SheetStructureError: If the data has more
            columns than the sheet. Nothing is inserted in that case.
        """
        data_rows, data_cols = _extents(rows)
        sheet = self._sheet(name)
        sheet_cols = sheet.max_columns
        if data_cols > sheet_cols:
            raise SheetStructureError(
                f"Sheet '{name}' has {sheet_cols} columns but the data has {data_cols}.",
                subcode=SHEET_TOO_FEW_COLUMNS,
                details={"sheet": name, "sheet_columns": sheet_cols, "data_columns": data_cols},
            )
        if data_rows < 1:
            logger.debug("No rows to insert into %s", name)
            return None

        sheet.insert_rows_after(1, data_rows)
        sheet.set_values(1, 1, rows)
        logger.info("Inserted %d rows into %s", data_rows, name)
        return sheet

    def clean_up_sheet(self, name: str, primary_key_columns: Union[int, Sequence[int]] = 1) -> None:
        """
        Remove duplicate rows, then empty rows.

        :param primary_key_columns: 1-based column, or columns, identifying a
            row. The first listed column is also the one checked for emptiness.
        :raises ~gridsync.core.errors.ValidationError: If no column is given or one is below 1.
        """
        columns = [primary_key_columns] if isinstance(primary_key_columns, int) else list(primary_key_columns)
        if not columns or any(c < 1 for c in columns):
            raise ValidationError(
                "Primary key columns must be 1-based column numbers.",
                subcode=VALIDATION_PRIMARY_KEY_COLUMN,
                details={"columns": columns},
            )
        sheet = self._sheet(name)
        sheet.remove_duplicates(columns)
        self._delete_empty_rows(sheet, columns[0])
        sheet.flush()

    def delete_empty_rows(self, name: str, primary_key_column: int = 1) -> None:
        """
        Delete trailing empty rows in bulk, then every row whose key cell is empty.

        The second pass deletes rows one at a time; it is meant for the odd
        straggler, not for large gaps.
        """
        if primary_key_column < 1:
            raise ValidationError(
                "Primary key column must be a 1-based column number.",
                subcode=VALIDATION_PRIMARY_KEY_COLUMN,
                details={"column": primary_key_column},
            )
        self._delete_empty_rows(self._sheet(name), primary_key_column)

    def _delete_empty_rows(self, sheet: Worksheet, primary_key_column: int) -> None:
        filled = sheet.last_row
        total = sheet.max_rows
        # A sheet keeps at least one row.
        keep = max(filled, 1)
        if total > keep:
            sheet.delete_rows(keep + 1, total - keep)

        if filled == 0:
            return
        keys = sheet.get_values(1, primary_key_column, filled, 1)
        removed = 0
        for i in range(len(keys) - 1, -1, -1):
            if not keys[i] or _is_empty(keys[i][0]):
                sheet.delete_row(i + 1)
                removed += 1
        if removed:
            logger.info("Deleted %d rows with an empty key", removed)

    def get_keyed_columns(
        self,
        name: str,
        key_column: int = 0,
        value_columns: Optional[Dict[str, int]] = None,
        cache_minutes: int = 60,
    ) -> Dict[str, Dict[str, Any]]:
        """
        Build a lookup from a sheet with a known layout.

        The first row is treated as the header and skipped. Keys are the
        stringified values of ``key_column``; later rows overwrite earlier
        rows with the same key.

        :param key_column: 0-based column holding the keys.
        :param value_columns: Property name to 0-based column. Defaults to
            every other column, named by its header.
        :param cache_minutes: Cache lifetime. Stored for ``cache_minutes * 10`` seconds.
        """
        key = f"{SHEET_CACHE_NAMESPACE}-{name}"

        def produce() -> Dict[str, Dict[str, Any]]:
            values = self._sheet(name).get_data_values()
            if not values:
                return {}
            columns = value_columns
            if columns is None:
                columns = {str(h): i for i, h in enumerate(values[0]) if i != key_column}
            data: Dict[str, Dict[str, Any]] = {}
            for row in values[1:]:
                item = {prop: (row[col] if col < len(row) else None) for prop, col in columns.items()}
                data[str(row[key_column]) if key_column < len(row) else ""] = item
            return data

        return self._cache.cached(
            key,
            produce,
            cache_minutes * 10,
            write_when_disabled=self._write_when_disabled,
        )


__all__ = ["SheetSynchronizer", "SHEET_CACHE_NAMESPACE"]
