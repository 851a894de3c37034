#!/usr/bin/env python3
"""
Unit tests for request validation.
"""

import os
import sys
import unittest

# Add the parent directory to the path so we can import the modules
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from console import RecordingConsole
from content_store import InMemoryContentStore
from deletion_request import (
    DateCutoff,
    DeletionRequest,
    InvalidDate,
    InvalidDateColumn,
    InvalidMaxCount,
    UnknownContentType,
    UnknownStatus,
    validate_request,
)


class TestDateCutoff(unittest.TestCase):
    """Test cases for DateCutoff."""

    def test_valid_dates(self):
        """Real calendar dates, leap days included, are accepted."""
        for year, month, day in [(2020, 1, 1), (2020, 2, 29), (2000, 2, 29), (1999, 12, 31), (2021, 4, 30)]:
            cutoff = DateCutoff(year, month, day)
            self.assertEqual((cutoff.year, cutoff.month, cutoff.day), (year, month, day))

    def test_invalid_dates(self):
        """Impossible dates are rejected when the cutoff is built."""
        for year, month, day in [(2020, 2, 30), (2019, 2, 29), (1900, 2, 29), (2020, 13, 1),
                                 (2020, 0, 10), (2020, 1, 0), (2020, 4, 31), (0, 1, 1)]:
            with self.assertRaises(InvalidDate):
                DateCutoff(year, month, day)

    def test_midnight_and_display(self):
        cutoff = DateCutoff(2020, 3, 5)
        self.assertEqual(cutoff.as_datetime().isoformat(), "2020-03-05T00:00:00")
        self.assertEqual(cutoff.display(), "5.3.2020")

    def test_equality(self):
        self.assertEqual(DateCutoff(2020, 1, 1), DateCutoff("2020", "1", "1"))
        self.assertNotEqual(DateCutoff(2020, 1, 1), DateCutoff(2020, 1, 2))


class TestValidateRequest(unittest.TestCase):
    """Test cases for validate_request."""

    def setUp(self):
        self.store = InMemoryContentStore()
        self.console = RecordingConsole()

    def test_valid_request(self):
        request, error = validate_request(self.store, "post", "publish", 2020, 1, 1, console=self.console)
        self.assertIsNone(error)
        self.assertEqual(
            request, DeletionRequest("post", "publish", DateCutoff(2020, 1, 1), "post_date_gmt", -1)
        )
        self.assertTrue(request.is_unbounded)
        self.assertFalse(request.is_attachment)

    def test_unknown_type_wins_over_everything_else(self):
        """An unknown type is reported even when every other field is also wrong."""
        request, error = validate_request(self.store, "product", "nope", 2020, 2, 30, comparison_column="bad")
        self.assertIsNone(request)
        self.assertIsInstance(error, UnknownContentType)
        self.assertEqual(error.value, "product")
        self.assertIn('"product"', error.message)

    def test_unknown_status(self):
        request, error = validate_request(self.store, "post", "archived", 2020, 1, 1)
        self.assertIsNone(request)
        self.assertIsInstance(error, UnknownStatus)
        self.assertIn('"archived"', error.message)

    def test_attachment_status_is_normalized(self):
        """Attachments always end up with the inherit status, with a notice."""
        request, error = validate_request(self.store, "attachment", "publish", 2020, 1, 1, console=self.console)
        self.assertIsNone(error)
        self.assertEqual(request.status, "inherit")
        self.assertEqual(len(self.console.messages), 1)
        self.assertIn('Argument "publish" changed to "inherit"', self.console.messages[0])

    def test_attachment_unknown_status_is_normalized_not_rejected(self):
        request, error = validate_request(self.store, "attachment", "whatever", 2020, 1, 1, console=self.console)
        self.assertIsNone(error)
        self.assertEqual(request.status, "inherit")

    def test_attachment_inherit_status_has_no_notice(self):
        request, error = validate_request(self.store, "attachment", "inherit", 2020, 1, 1, console=self.console)
        self.assertIsNone(error)
        self.assertEqual(self.console.messages, [])

    def test_invalid_date(self):
        request, error = validate_request(self.store, "post", "draft", 2021, 2, 29)
        self.assertIsNone(request)
        self.assertIsInstance(error, InvalidDate)
        self.assertIn("Year: 2021, Month: 2, Day: 29", error.message)

    def test_invalid_date_reported_before_invalid_column(self):
        _, error = validate_request(self.store, "post", "draft", 2021, 13, 1, comparison_column="post_title")
        self.assertIsInstance(error, InvalidDate)

    def test_invalid_column(self):
        request, error = validate_request(self.store, "post", "draft", 2021, 1, 1, comparison_column="post_title")
        self.assertIsNone(request)
        self.assertIsInstance(error, InvalidDateColumn)
        self.assertIn('"post_title"', error.message)

    def test_every_recognized_column(self):
        for column in ("post_date_gmt", "post_modified_gmt", "post_date", "post_modified"):
            request, error = validate_request(self.store, "page", "draft", 2021, 1, 1, comparison_column=column)
            self.assertIsNone(error)
            self.assertEqual(request.comparison_column, column)

    def test_max_count_is_kept(self):
        request, _ = validate_request(self.store, "post", "draft", 2021, 1, 1, max_count=25)
        self.assertEqual(request.max_count, 25)
        self.assertFalse(request.is_unbounded)

    def test_invalid_max_count(self):
        """Zero or anything below the unbounded sentinel is rejected."""
        for value in (0, -2, -100, "10"):
            request, error = validate_request(self.store, "post", "draft", 2021, 1, 1, max_count=value)
            self.assertIsNone(request)
            self.assertIsInstance(error, InvalidMaxCount)
            self.assertEqual(error.value, value)

    def test_invalid_column_reported_before_invalid_max_count(self):
        _, error = validate_request(self.store, "post", "draft", 2021, 1, 1, max_count=0, comparison_column="bad")
        self.assertIsInstance(error, InvalidDateColumn)


if __name__ == '__main__':
    unittest.main()
