from __future__ import annotations
import logging
import unittest

from api.middleware.logging_filter import (
    CorrelationIDFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


class CorrelationIDFilterTests(unittest.TestCase):
    def tearDown(self):
        clear_correlation_id()

    def _record(self):
        return logging.LogRecord("api", logging.INFO, __file__, 1, "msg", None, None)

    def test_record_gets_request_id(self):
        set_correlation_id("req-1")
        record = self._record()

        self.assertTrue(CorrelationIDFilter().filter(record))
        self.assertEqual(record.correlation_id, "req-1")

    def test_outside_request(self):
        record = self._record()

        CorrelationIDFilter().filter(record)

        self.assertIsNone(get_correlation_id())
        self.assertEqual(record.correlation_id, "no-request-id")
