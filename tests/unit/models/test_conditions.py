# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for the jobs API condition builders."""

import datetime as dt

import pytest

from gridsync.models import conditions as c
from gridsync.models.conditions import FilterGroup, JobStatus, MatchType

NOW = dt.datetime(2024, 3, 10, 23, 30, tzinfo=dt.timezone.utc)


def _values(condition):
    return [f.value for f in condition.filters]


class TestJobStatus:
    def test_active(self):
        cond = c.job_status(JobStatus.ACTIVE)
        assert cond.condition_match_type_id == MatchType.ANY
        assert cond.filter_group_type_id == FilterGroup.JOB_STATUS
        assert _values(cond) == [2, 1, 5]

    def test_archived(self):
        assert _values(c.job_status(JobStatus.ARCHIVED)) == [4]

    def test_all_is_union_of_active_and_archived(self):
        active = set(_values(c.job_status(JobStatus.ACTIVE)))
        archived = set(_values(c.job_status(JobStatus.ARCHIVED)))
        assert not active & archived
        assert set(_values(c.job_status(JobStatus.ALL))) == active | archived

    def test_accepts_plain_int(self):
        assert _values(c.job_status(4)) == [4]

    def test_unknown_status(self):
        with pytest.raises(ValueError):
            c.job_status(3)

    def test_wire_shape(self):
        assert c.job_status(JobStatus.ARCHIVED).to_dict() == {
            "conditionMatchTypeId": 2,
            "filterGroupTypeId": 3,
            "filters": [{"valueMatchTypeId": "1", "value": 4}],
        }


class TestDates:
    def test_date_offset_is_utc_calendar_date(self):
        assert c.date_offset(0, NOW) == "2024-03-10"
        assert c.date_offset(-30, NOW) == "2024-02-09"
        assert c.date_offset(1, NOW) == "2024-03-11"

    def test_format_date(self):
        assert c.format_date("2024-03-10", "%d/%m/%Y") == "10/03/2024"

    def test_archived_from_date(self):
        cond = c.job_archived_from_date(5, now=NOW)
        assert cond.filter_group_type_id == FilterGroup.JOB_ARCHIVED_DATE
        assert cond.condition_match_type_id == MatchType.ALL
        assert cond.to_dict()["filters"] == [
            {"valueMatchTypeId": "5", "value": "2024-03-05", "isRelativeDateValueMatchType": "false"}
        ]

    def test_time_window(self):
        start = c.time_from_date("2024-01-01")
        end = c.time_to_date(dt.date(2024, 2, 1))
        assert start.filters[0].value_match_type_id == "5"
        assert end.filters[0].value_match_type_id == "6"
        assert end.filters[0].value == "2024-02-01"
        assert start.filter_group_type_id == end.filter_group_type_id == FilterGroup.TIME_DATE

    def test_time_relative_builders(self):
        assert _values(c.time_from_days_ago(5, now=NOW)) == ["2024-03-05"]
        assert _values(c.time_to_now(now=NOW)) == ["2024-03-10"]

    def test_invoice_from_date(self):
        cond = c.invoice_from_date(1500, now=NOW)
        assert cond.filter_group_type_id == FilterGroup.INVOICE_DATE
        assert _values(cond) == [c.date_offset(-1500, NOW)]


def test_status_builders():
    assert _values(c.invoice_status()) == [2, 3, 7]
    assert _values(c.invoice_status_unpaid()) == [2]
    assert _values(c.quote_status()) == [1, 2, 5]
    assert c.quote_status().filter_group_type_id == FilterGroup.QUOTE_STATUS


def test_build_search_body_keeps_caller_order():
    conditions = [c.job_status(JobStatus.ARCHIVED), c.invoice_status()]

    body = c.build_search_body(conditions, offset=600, max_results=300)

    assert body["conditionMatchTypeId"] == 1
    assert [g["filterGroupTypeId"] for g in body["filterGroups"]] == [3, 26]
    assert body["offset"] == 600
    assert body["maxResults"] == 300
    assert body["wildcardSearch"] == ""
    assert body["sortAscending"] is True


def test_conditions_are_immutable():
    cond = c.invoice_status()
    with pytest.raises(AttributeError):
        cond.filter_group_type_id = 1
