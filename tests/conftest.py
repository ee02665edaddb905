# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for gridsync tests.

This module provides common test fixtures, mock objects, and configuration
that can be used across all test modules.
"""

import pytest

from gridsync.core.config import GridSyncConfig


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return GridSyncConfig(
        http_retries=0,
        http_backoff=0.0,
        http_timeout=5,
        tables_endpoint="https://tables.example/v0/",
        jobs_page_size=300,
    )


class FakeWorksheet:
    """In-memory worksheet with the same 1-based semantics as a spreadsheet host."""

    def __init__(self, values, columns=None):
        width = columns if columns is not None else max((len(r) for r in values), default=0)
        self.grid = [list(r) + [""] * (width - len(r)) for r in values]
        self.width = width
        self.calls = []

    @property
    def max_rows(self):
        return len(self.grid)

    @property
    def max_columns(self):
        return self.width

    @property
    def last_row(self):
        for i in range(len(self.grid) - 1, -1, -1):
            if any(v not in ("", None) for v in self.grid[i]):
                return i + 1
        return 0

    def insert_rows_after(self, row, count):
        self.calls.append(("insert_rows_after", row, count))
        self.grid[row:row] = [[""] * self.width for _ in range(count)]

    def insert_columns_after(self, column, count):
        self.calls.append(("insert_columns_after", column, count))
        for r in self.grid:
            r[column:column] = [""] * count
        self.width += count

    def delete_rows(self, start, count):
        self.calls.append(("delete_rows", start, count))
        del self.grid[start - 1 : start - 1 + count]

    def delete_row(self, row):
        self.calls.append(("delete_row", row))
        del self.grid[row - 1]

    def delete_columns(self, start, count):
        self.calls.append(("delete_columns", start, count))
        for r in self.grid:
            del r[start - 1 : start - 1 + count]
        self.width -= count

    def get_values(self, row, column, num_rows, num_columns):
        return [list(r[column - 1 : column - 1 + num_columns]) for r in self.grid[row - 1 : row - 1 + num_rows]]

    def set_values(self, row, column, values):
        self.calls.append(("set_values", row, column, [list(v) for v in values]))
        if row - 1 + len(values) > len(self.grid) or column - 1 + len(values[0]) > self.width:
            raise IndexError("range exceeds the grid")
        for i, v in enumerate(values):
            self.grid[row - 1 + i][column - 1 : column - 1 + len(v)] = list(v)

    def get_data_values(self):
        return [list(r) for r in self.grid[: self.last_row]]

    def remove_duplicates(self, columns):
        self.calls.append(("remove_duplicates", list(columns)))
        filled = self.last_row
        seen = set()
        kept = []
        for r in self.grid[:filled]:
            key = tuple(r[c - 1] for c in columns)
            if key in seen:
                continue
            seen.add(key)
            kept.append(r)
        removed = filled - len(kept)
        # The sheet keeps its size; rows below the data range move up.
        self.grid = kept + [[""] * self.width for _ in range(removed)] + self.grid[filled:]

    def flush(self):
        self.calls.append(("flush",))


class FakeHost:
    def __init__(self, sheets=None):
        self.sheets = dict(sheets or {})

    def get_sheet(self, name):
        return self.sheets.get(name)


@pytest.fixture
def make_sheet():
    """Factory for :class:`FakeWorksheet` instances."""
    return FakeWorksheet


@pytest.fixture
def make_host():
    """Factory for hosts holding named fake worksheets."""
    return FakeHost


@pytest.fixture
def sample_table_meta():
    """Field metadata response for one table."""
    return {
        "tables": [
            {
                "id": "tblPeople",
                "name": "People",
                "fields": [
                    {"id": "fldName", "name": "Name", "type": "singleLineText"},
                    {"id": "fldEmail", "name": "Email", "type": "email"},
                    {"id": "fldCode", "name": "Code", "type": "number"},
                ],
            },
            {"id": "tblOther", "name": "Other", "fields": []},
        ]
    }
