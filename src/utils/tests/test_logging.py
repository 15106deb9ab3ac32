"""Tests for the structured JSON log formatter."""

import json
import sys
import logging
import unittest

from utils.logging import JSONFormatter


class TestJSONFormatter(unittest.TestCase):

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="services.task_service", level=logging.INFO, pathname=__file__,
            lineno=1, msg="Task %s", args=("created",), exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "services.task_service")
        self.assertEqual(data["message"], "Task created")
        self.assertTrue(data["timestamp"].endswith("Z"))
        self.assertNotIn("lineno", data)

    def test_extra_fields_are_top_level(self):
        data = json.loads(JSONFormatter().format(self._record(taskId="t1", userId="u1")))

        self.assertEqual(data["taskId"], "t1")
        self.assertEqual(data["userId"], "u1")

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self._record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))
        self.assertIn("RuntimeError: boom", data["exception"])


if __name__ == '__main__':
    unittest.main()
