# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for the low-level tables and jobs clients."""

import json

import pytest

from gridsync.core._error_codes import METADATA_TABLE_NOT_FOUND, RESPONSE_MALFORMED_BODY
from gridsync.core.errors import HttpError, MetadataError, ResponseFormatError
from gridsync.data._jobs import _JobsClient
from gridsync.data._tables import _TablesClient
from gridsync.models.conditions import JobStatus, job_status
from gridsync.models.endpoints import EndpointRegistry
from gridsync.models.record import Record


class DummyHTTP:
    def __init__(self, responses):
        self._responses = responses
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError("No more responses")
        status, headers, body = self._responses.pop(0)

        class R:
            pass

        r = R()
        r.status_code = status
        r.headers = headers
        r.text = json.dumps(body)
        r.json = lambda: body
        return r

    def close(self):
        pass


def tables_client(responses, config):
    c = _TablesClient("pat", "appBase", config)
    c._http = DummyHTTP(responses)
    return c


def jobs_client(responses, config, endpoints=None):
    c = _JobsClient("jt", endpoints, config)
    c._http = DummyHTTP(responses)
    return c


class TestTablesClient:
    def test_requires_base(self, test_config):
        with pytest.raises(ValueError):
            _TablesClient("pat", "  ", test_config)

    def test_get_records_follows_offset(self, test_config):
        c = tables_client(
            [
                (200, {}, {"records": [{"id": "rec1", "fields": {"Name": "A"}}], "offset": "o1"}),
                (200, {}, {"records": [{"id": "rec2", "fields": {}}]}),
            ],
            test_config,
        )

        records = c._get_records("tblPeople")

        assert [r.id for r in records] == ["rec1", "rec2"]
        assert isinstance(records[0], Record)
        method, url, kwargs = c._http.calls[1]
        assert method == "get"
        assert url == "https://tables.example/v0/appBase/tblPeople"
        assert kwargs["params"] == {"offset": "o1"}

    def test_error_page_aborts(self, test_config):
        c = tables_client(
            [
                (200, {}, {"records": [{"id": "rec1", "fields": {}}], "offset": "o1"}),
                (422, {}, {"error": {"type": "LIST_RECORDS_ITERATOR_NOT_AVAILABLE"}}),
            ],
            test_config,
        )

        with pytest.raises(HttpError) as ei:
            c._get_records("tblPeople")

        assert ei.value.status_code == 422

    def test_malformed_page_aborts(self, test_config):
        c = tables_client(
            [
                (200, {}, {"records": [{"id": "rec1", "fields": {}}], "offset": "o1"}),
                (200, {}, {"error": {"type": "X"}}),
            ],
            test_config,
        )

        with pytest.raises(ResponseFormatError) as ei:
            c._get_records("tblPeople")

        assert ei.value.subcode == RESPONSE_MALFORMED_BODY

    def test_fields_meta_by_id_or_name(self, test_config, sample_table_meta):
        c = tables_client([(200, {}, sample_table_meta), (200, {}, sample_table_meta)], test_config)

        by_id = c._fields_meta("tblPeople")
        by_name = c._fields_meta("People")

        assert by_id["fldEmail"].name == "Email"
        assert by_id == by_name
        assert c._http.calls[0][1] == "https://tables.example/v0/meta/bases/appBase/tables"

    def test_fields_meta_unknown_table(self, test_config, sample_table_meta):
        c = tables_client([(200, {}, sample_table_meta)], test_config)

        with pytest.raises(MetadataError) as ei:
            c._fields_meta("tblNope")

        assert ei.value.subcode == METADATA_TABLE_NOT_FOUND

    def test_create_record(self, test_config):
        c = tables_client(
            [(200, {}, {"records": [{"id": "recNew", "fields": {"Name": "Cheese"}, "createdTime": "t"}]})],
            test_config,
        )

        record = c._create_record("tblPeople", {"Name": "Cheese"})

        assert record.id == "recNew"
        assert c._http.calls[0][2]["json"] == {"records": [{"fields": {"Name": "Cheese"}}]}

    def test_update_record(self, test_config):
        c = tables_client([(200, {}, {"id": "rec1", "fields": {"Notes": "touch"}})], test_config)

        record = c._update_record("tblPeople", "rec1", {"Notes": "touch"})

        method, url, kwargs = c._http.calls[0]
        assert method == "patch"
        assert url.endswith("/tblPeople/rec1")
        assert kwargs["json"] == {"fields": {"Notes": "touch"}}
        assert record["Notes"] == "touch"


class TestJobsClient:
    def test_search_pages_with_conditions(self, test_config):
        c = jobs_client(
            [
                (200, {}, {"searchResults": [{"id": i} for i in range(300)]}),
                (200, {}, {"searchResults": [{"id": 300}]}),
                (200, {}, {"searchResults": []}),
            ],
            test_config,
        )

        result = c._fetch_all("Jobs", [job_status(JobStatus.ACTIVE)])

        assert len(result) == 301
        method, url, kwargs = c._http.calls[1]
        assert method == "post"
        assert url == "https://api.streamtime.net/v1/jobs/search"
        assert kwargs["json"]["offset"] == 300
        assert kwargs["json"]["maxResults"] == 300
        assert kwargs["json"]["filterGroups"][0]["filterGroupTypeId"] == 3
        assert kwargs["headers"]["Content-Type"] == "text/plain"
        assert kwargs["headers"]["Authorization"] == "Bearer jt"

    def test_page_size_override(self, test_config):
        c = jobs_client([(200, {}, {"searchResults": []})], test_config)

        c._fetch_all("Companies", page_size=50)

        assert c._http.calls[0][2]["json"]["maxResults"] == 50
        assert c._http.calls[0][2]["json"]["filterGroups"] == []

    def test_custom_endpoints(self, test_config):
        registry = EndpointRegistry.default().with_base("https://staging.example/v1")
        c = jobs_client([(200, {}, {"searchResults": []})], test_config, registry)

        c._fetch_all("Time")

        assert c._http.calls[0][1] == "https://staging.example/v1/logged_times/search"

    def test_unknown_endpoint(self, test_config):
        c = jobs_client([], test_config)
        with pytest.raises(KeyError):
            c._fetch_all("Nope")

    def test_plain_get(self, test_config):
        c = jobs_client([(200, {}, [{"id": 1, "firstName": "Ada"}])], test_config)

        users = c._fetch_get("Users")

        assert users == [{"id": 1, "firstName": "Ada"}]
        assert c._http.calls[0][:2] == ("get", "https://api.streamtime.net/v1/users")
