# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Contracts for a spreadsheet backend.

All row and column indices are 1-based, as in the spreadsheet UI.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Worksheet(Protocol):
    """One named sheet of a spreadsheet."""

    @property
    def max_rows(self) -> int:
        """Allocated rows, filled or not."""
        ...

    @property
    def max_columns(self) -> int:
        ...

    @property
    def last_row(self) -> int:
        """Index of the last row holding any content, 0 when the sheet is empty."""
        ...

    def insert_rows_after(self, row: int, count: int) -> None:
        ...

    def insert_columns_after(self, column: int, count: int) -> None:
        ...

    def delete_rows(self, start: int, count: int) -> None:
        ...

    def delete_row(self, row: int) -> None:
        ...

    def delete_columns(self, start: int, count: int) -> None:
        ...

    def get_values(self, row: int, column: int, num_rows: int, num_columns: int) -> List[List[Any]]:
        ...

    def set_values(self, row: int, column: int, values: Sequence[Sequence[Any]]) -> None:
        """Write a rectangular block whose top-left cell is (row, column)."""
        ...

    def get_data_values(self) -> List[List[Any]]:
        """Values of the range spanning every filled row and column."""
        ...

    def remove_duplicates(self, columns: Sequence[int]) -> None:
        """Drop rows repeating an earlier row's values in ``columns``; the first occurrence wins."""
        ...

    def flush(self) -> None:
        """Apply any buffered changes."""
        ...


@runtime_checkable
class SheetHost(Protocol):
    """A spreadsheet document that owns named sheets."""

    def get_sheet(self, name: str) -> Optional[Worksheet]:
        ...


__all__ = ["Worksheet", "SheetHost"]
