# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for client construction and context manager support."""

import unittest
from unittest.mock import MagicMock

import requests

from gridsync.client import JobsClient, TablesClient
from gridsync.core.cache import CacheLayer
from gridsync.core.config import GridSyncConfig
from gridsync.data._jobs import _JobsClient
from gridsync.data._tables import _TablesClient
from gridsync.models.endpoints import EndpointRegistry
from gridsync.operations.jobs import JobOperations
from gridsync.operations.lookups import LookupOperations
from gridsync.operations.records import RecordOperations


class TestTablesClient(unittest.TestCase):
    def setUp(self):
        self.config = GridSyncConfig(cache_max_chars=500)

    def test_requires_token_and_base(self):
        with self.assertRaises(ValueError):
            TablesClient("", "app1", self.config)
        with self.assertRaises(ValueError):
            TablesClient("pat", " ", self.config)

    def test_namespaces(self):
        client = TablesClient("pat", " app1 ", self.config)
        self.assertEqual(client.base, "app1")
        self.assertIsInstance(client.records, RecordOperations)
        self.assertIsInstance(client.lookups, LookupOperations)

    def test_default_cache_uses_configured_ceiling(self):
        client = TablesClient("pat", "app1", self.config)
        self.assertEqual(client._cache.max_chars, 500)

    def test_injected_cache(self):
        cache = CacheLayer()
        client = TablesClient("pat", "app1", self.config, cache=cache)
        self.assertIs(client._cache, cache)

    def test_lazy_low_level_client(self):
        client = TablesClient("pat", "app1", self.config)
        self.assertIsNone(client._tables)
        tables = client._get_tables()
        self.assertIsInstance(tables, _TablesClient)
        self.assertIs(client._get_tables(), tables)

    def test_context_manager_protocol(self):
        with TablesClient("pat", "app1", self.config) as client:
            self.assertIsInstance(client._session, requests.Session)
            self.assertTrue(client._owns_session)
            self.assertIs(client._get_tables()._http._session, client._session)
        self.assertIsNone(client._session)
        self.assertIsNone(client._tables)

    def test_exit_closes_session(self):
        client = TablesClient("pat", "app1", self.config)
        client.__enter__()
        mock_session = MagicMock(spec=requests.Session)
        client._session = mock_session

        client.__exit__(None, None, None)

        mock_session.close.assert_called_once()
        self.assertFalse(client._owns_session)

    def test_close_is_idempotent(self):
        client = TablesClient("pat", "app1", self.config)
        client._get_tables()
        client.close()
        client.close()
        self.assertIsNone(client._tables)


class TestJobsClient(unittest.TestCase):
    def setUp(self):
        self.config = GridSyncConfig()

    def test_requires_token(self):
        with self.assertRaises(ValueError):
            JobsClient("", self.config)

    def test_namespace_and_default_endpoints(self):
        client = JobsClient("jt", self.config)
        self.assertIsInstance(client.jobs, JobOperations)
        self.assertEqual(dict(client.endpoints), dict(EndpointRegistry.default()))

    def test_endpoints_passed_to_low_level_client(self):
        registry = EndpointRegistry.default().with_base("https://staging.example/v1/")
        client = JobsClient("jt", self.config, endpoints=registry)
        jobs = client._get_jobs()
        self.assertIsInstance(jobs, _JobsClient)
        self.assertIs(jobs.endpoints, registry)

    def test_context_manager_protocol(self):
        with JobsClient("jt", self.config) as client:
            self.assertIsInstance(client._session, requests.Session)
            client._get_jobs()
        self.assertIsNone(client._session)
        self.assertIsNone(client._jobs)
