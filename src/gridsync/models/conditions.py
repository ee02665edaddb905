# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Filter conditions for the jobs API search endpoints.

Every builder in this module is a pure function returning one
:class:`Condition`. A search request carries an ordered list of conditions
which the service combines with AND; a condition's own filters are combined
with its ``condition_match_type_id`` (AND or OR).

Day offsets are resolved to absolute ``YYYY-MM-DD`` dates when the builder is
called, anchored on the current UTC time.

Example::

    conditions = [
        job_status(JobStatus.ARCHIVED),
        job_archived_from_date(days_ago=5),
        invoice_status(),
    ]
    body = build_search_body(conditions, offset=0, max_results=300)
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

DATE_FORMAT = "%Y-%m-%d"


class MatchType(IntEnum):
    """How the filters inside a condition, or the conditions of a search, combine."""

    ALL = 1  # and
    ANY = 2  # or


class ValueMatch:
    """Value match type identifiers. The service expects them as strings."""

    EQUALS = "1"
    AFTER = "5"
    BEFORE = "6"


class FilterGroup(IntEnum):
    JOB_STATUS = 3
    TIME_DATE = 5
    INVOICE_STATUS = 26
    INVOICE_DATE = 35
    QUOTE_STATUS = 36
    JOB_ARCHIVED_DATE = 134


class JobStatus(IntEnum):
    """Job status classes accepted by :func:`job_status`."""

    ACTIVE = 1
    ALL = 2
    ARCHIVED = 4


class JobStatusValue(IntEnum):
    IN_PLAY = 1
    DONE = 2
    ARCHIVED = 4
    PAUSED = 5


ACTIVE_JOB_STATUSES: Tuple[int, ...] = (JobStatusValue.DONE, JobStatusValue.IN_PLAY, JobStatusValue.PAUSED)
ARCHIVED_JOB_STATUSES: Tuple[int, ...] = (JobStatusValue.ARCHIVED,)
ALL_JOB_STATUSES: Tuple[int, ...] = ACTIVE_JOB_STATUSES + ARCHIVED_JOB_STATUSES

# Awaiting payment, paid, and 7 which the service reports for settled invoices.
# Drafts (1), voided (5) and credit notes (8) are left out.
INVOICE_STATUSES: Tuple[int, ...] = (2, 3, 7)
UNPAID_INVOICE_STATUSES: Tuple[int, ...] = (2,)
QUOTE_STATUSES: Tuple[int, ...] = (1, 2, 5)

DateLike = Union[str, _dt.date]


@dataclass(frozen=True)
class Filter:
    """
    One value test inside a :class:`Condition`.

    :param value_match_type_id: One of the :class:`ValueMatch` identifiers.
    :param value: Value to compare against.
    :param is_relative_date: For date filters, whether ``value`` is relative.
        Builders in this module always send absolute dates.
    """

    value_match_type_id: str
    value: Any
    is_relative_date: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"valueMatchTypeId": self.value_match_type_id, "value": self.value}
        if self.is_relative_date is not None:
            out["isRelativeDateValueMatchType"] = "true" if self.is_relative_date else "false"
        return out


@dataclass(frozen=True)
class Condition:
    """
    A filter group sent in ``filterGroups`` of a search request.

    :param condition_match_type_id: How ``filters`` combine, see :class:`MatchType`.
    :param filter_group_type_id: Which property the filters apply to, see :class:`FilterGroup`.
    :param filters: Ordered filters.
    """

    condition_match_type_id: int
    filter_group_type_id: int
    filters: Tuple[Filter, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conditionMatchTypeId": int(self.condition_match_type_id),
            "filterGroupTypeId": int(self.filter_group_type_id),
            "filters": [f.to_dict() for f in self.filters],
        }


def date_offset(days: int = 0, now: Optional[_dt.datetime] = None) -> str:
    """
    Return the UTC calendar date ``days`` away from now as ``YYYY-MM-DD``.

    :param days: Positive for the future, negative for the past.
    :param now: Anchor time; defaults to the current UTC time.
    """
    anchor = now if now is not None else _dt.datetime.now(_dt.timezone.utc)
    return (anchor + _dt.timedelta(days=days)).strftime(DATE_FORMAT)


def format_date(value: str, fmt: str) -> str:
    """Reformat a ``YYYY-MM-DD`` date string with a :func:`~datetime.datetime.strftime` pattern."""
    return _dt.datetime.strptime(value, DATE_FORMAT).strftime(fmt)


def _as_date_param(value: DateLike) -> str:
    if isinstance(value, _dt.datetime):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, _dt.date):
        return value.isoformat()
    return value


def _any_of(group: FilterGroup, values: Sequence[int]) -> Condition:
    return Condition(
        condition_match_type_id=MatchType.ANY,
        filter_group_type_id=group,
        filters=tuple(Filter(ValueMatch.EQUALS, int(v)) for v in values),
    )


def _date_bound(group: FilterGroup, match: str, value: DateLike) -> Condition:
    return Condition(
        condition_match_type_id=MatchType.ALL,
        filter_group_type_id=group,
        filters=(Filter(match, _as_date_param(value), is_relative_date=False),),
    )


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def job_status(status: JobStatus = JobStatus.ACTIVE) -> Condition:
    """
    Match jobs by status class.

    ``ACTIVE`` and ``ARCHIVED`` never overlap. ``ALL`` lists every status value
    explicitly rather than dropping the filter.

    :raises ValueError: For an unknown status class.
    """
    status = JobStatus(status)
    if status is JobStatus.ACTIVE:
        return _any_of(FilterGroup.JOB_STATUS, ACTIVE_JOB_STATUSES)
    if status is JobStatus.ALL:
        return _any_of(FilterGroup.JOB_STATUS, ALL_JOB_STATUSES)
    return _any_of(FilterGroup.JOB_STATUS, ARCHIVED_JOB_STATUSES)


def job_archived_from_date(days_ago: int = 30, *, now: Optional[_dt.datetime] = None) -> Condition:
    """Jobs archived after the date ``days_ago`` days before today."""
    return _date_bound(FilterGroup.JOB_ARCHIVED_DATE, ValueMatch.AFTER, date_offset(-days_ago, now))


def invoice_status() -> Condition:
    return _any_of(FilterGroup.INVOICE_STATUS, INVOICE_STATUSES)


def invoice_status_unpaid() -> Condition:
    return _any_of(FilterGroup.INVOICE_STATUS, UNPAID_INVOICE_STATUSES)


def invoice_from_date(days_ago: int = 30, *, now: Optional[_dt.datetime] = None) -> Condition:
    return _date_bound(FilterGroup.INVOICE_DATE, ValueMatch.AFTER, date_offset(-days_ago, now))


def quote_status() -> Condition:
    return _any_of(FilterGroup.QUOTE_STATUS, QUOTE_STATUSES)


def time_from_date(from_date: DateLike) -> Condition:
    """Logged time after ``from_date``. The service compares exclusively."""
    return _date_bound(FilterGroup.TIME_DATE, ValueMatch.AFTER, from_date)


def time_to_date(to_date: DateLike) -> Condition:
    """Logged time before ``to_date``. The service compares exclusively."""
    return _date_bound(FilterGroup.TIME_DATE, ValueMatch.BEFORE, to_date)


def time_from_days_ago(days_ago: int = 5, *, now: Optional[_dt.datetime] = None) -> Condition:
    return time_from_date(date_offset(-days_ago, now))


def time_to_now(*, now: Optional[_dt.datetime] = None) -> Condition:
    return time_to_date(date_offset(0, now))


def build_search_body(
    conditions: Sequence[Condition],
    *,
    offset: int = 0,
    max_results: int = 300,
    wildcard_search: str = "",
    sort_ascending: bool = True,
) -> Dict[str, Any]:
    """
    Build the JSON body of a search request.

    Conditions are sent in caller order and combined with AND.
    """
    filter_groups: List[Dict[str, Any]] = [c.to_dict() for c in conditions]
    return {
        "conditionMatchTypeId": int(MatchType.ALL),
        "filterGroups": filter_groups,
        "wildcardSearch": wildcard_search,
        "sortAscending": sort_ascending,
        "maxResults": max_results,
        "offset": offset,
    }


__all__ = [
    "Condition",
    "Filter",
    "FilterGroup",
    "JobStatus",
    "JobStatusValue",
    "MatchType",
    "ValueMatch",
    "build_search_body",
    "date_offset",
    "format_date",
    "invoice_from_date",
    "invoice_status",
    "invoice_status_unpaid",
    "job_archived_from_date",
    "job_status",
    "quote_status",
    "time_from_date",
    "time_from_days_ago",
    "time_to_date",
    "time_to_now",
]
