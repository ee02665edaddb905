# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the Record, FieldMeta and TableMeta data models."""

import unittest

from gridsync.models.field_meta import FieldMeta, TableMeta
from gridsync.models.record import Record


class TestRecord(unittest.TestCase):
    """Test cases for the Record dataclass."""

    def setUp(self):
        """Set up test fixtures."""
        self.record = Record(
            id="recA1",
            fields={"Name": "Contoso Ltd", "Phone": "555-0100"},
            created_time="2024-01-01T00:00:00.000Z",
        )

    def test_dict_like_access(self):
        self.assertEqual(self.record["Name"], "Contoso Ltd")
        self.assertIn("Phone", self.record)
        self.assertEqual(len(self.record), 2)
        self.assertEqual(sorted(self.record), ["Name", "Phone"])
        self.assertIsNone(self.record.get("Email"))
        self.assertEqual(self.record.get("Email", "n/a"), "n/a")

    def test_missing_key_raises(self):
        with self.assertRaises(KeyError):
            self.record["Email"]

    def test_to_dict(self):
        self.assertEqual(
            self.record.to_dict(),
            {
                "id": "recA1",
                "fields": {"Name": "Contoso Ltd", "Phone": "555-0100"},
                "createdTime": "2024-01-01T00:00:00.000Z",
            },
        )

    def test_from_api_response(self):
        record = Record.from_api_response({"id": "rec9", "fields": {"Name": "X"}, "createdTime": "t"})
        self.assertEqual(record.id, "rec9")
        self.assertEqual(record.fields, {"Name": "X"})
        self.assertEqual(record.created_time, "t")

    def test_from_api_response_without_fields(self):
        record = Record.from_api_response({"id": "rec9"})
        self.assertEqual(record.fields, {})
        self.assertNotIn("createdTime", record.to_dict())


class TestTableMeta(unittest.TestCase):
    def setUp(self):
        self.meta = TableMeta.from_api_response(
            {
                "id": "tblPeople",
                "name": "People",
                "fields": [
                    {"id": "fldName", "name": "Name", "type": "singleLineText"},
                    {"id": "fldTags", "name": "Tags", "type": "multipleSelects", "options": {"choices": []}},
                    "not-a-field",
                ],
            }
        )

    def test_fields_parsed(self):
        self.assertEqual([f.id for f in self.meta.fields], ["fldName", "fldTags"])
        self.assertEqual(self.meta.fields[1].options, {"choices": []})

    def test_fields_by_id(self):
        self.assertEqual(self.meta.fields_by_id()["fldName"], FieldMeta("fldName", "Name", "singleLineText"))

    def test_matches_id_or_name(self):
        self.assertTrue(self.meta.matches("tblPeople"))
        self.assertTrue(self.meta.matches("People"))
        self.assertFalse(self.meta.matches("tblOther"))
