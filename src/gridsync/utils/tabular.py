# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Flatten JSON objects into spreadsheet-shaped rows."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping, Sequence, Union

import pandas as pd

Extractor = Union[str, Callable[[str, Any], Any]]


def flatten(columns: Mapping[str, Extractor], items: Iterable[Any]) -> List[List[Any]]:
    """
    Turn a list of JSON objects into a list of rows with a header row first.

    Each cell is computed on its own: a callable extractor is called as
    ``extractor(header, item)``, a string extractor reads ``item[name]``, and
    anything else yields None.

    :param columns: Ordered mapping of column header to extractor.
    :param items: JSON objects, typically one per API result.
    :return: ``[[header, ...], [cell, ...], ...]``.

    Example::

        rows = flatten(
            {
                "Job": "number",
                "Client": lambda _h, job: (job.get("company") or {}).get("name"),
            },
            client.jobs.active_jobs(),
        )
    """
    headers = list(columns)
    rows: List[List[Any]] = [headers]
    for item in items:
        row: List[Any] = []
        for header in headers:
            extractor = columns[header]
            if callable(extractor):
                row.append(extractor(header, item))
            elif isinstance(extractor, str):
                row.append(item.get(extractor) if item else None)
            else:
                row.append(None)
        rows.append(row)
    return rows


def rows_to_dataframe(rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """Convert rows from :func:`flatten` to a DataFrame, using the header row as columns."""
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame([list(r) for r in rows[1:]], columns=list(rows[0]))


def dataframe_to_rows(df: pd.DataFrame) -> List[List[Any]]:
    """Inverse of :func:`rows_to_dataframe`; missing values become empty cells and timestamps ISO strings."""
    rows: List[List[Any]] = [[str(c) for c in df.columns]]
    for record in df.itertuples(index=False, name=None):
        row: List[Any] = []
        for v in record:
            if isinstance(v, pd.Timestamp):
                row.append(v.isoformat())
            elif not isinstance(v, (list, dict)) and pd.isna(v):
                row.append("")
            else:
                row.append(v)
        rows.append(row)
    return rows


__all__ = ["flatten", "rows_to_dataframe", "dataframe_to_rows", "Extractor"]
