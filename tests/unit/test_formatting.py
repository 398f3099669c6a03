"""
Unit tests for message panel formatting.
"""

import json
import unittest
from datetime import datetime, timezone

from mqtt_test_client.models.sample import Sample
from mqtt_test_client.views.formatting import (
    NO_MESSAGE,
    NO_MESSAGES,
    format_history,
    format_latest_header,
    format_latest_raw,
)


class TestFormatting(unittest.TestCase):

    def test_header_without_message(self):
        self.assertEqual(format_latest_header("", None), "Topic: -")

    def test_header_with_message(self):
        header = format_latest_header("sensors/sound", datetime(2024, 5, 1, 12, 30, 5))
        self.assertEqual(header, "Topic: sensors/sound · Time: 2024-05-01 12:30:05")

    def test_header_shows_utc_receipt_in_local_time(self):
        received = datetime(2024, 10, 27, 1, 30, 0, tzinfo=timezone.utc)
        local = received.astimezone().strftime("%Y-%m-%d %H:%M:%S")

        self.assertEqual(format_latest_header("t", received), f"Topic: t · Time: {local}")

    def test_latest_raw_placeholder(self):
        self.assertEqual(format_latest_raw(""), NO_MESSAGE)
        self.assertEqual(format_latest_raw("hello"), "hello")

    def test_history(self):
        self.assertEqual(format_history(()), NO_MESSAGES)

        series = (Sample(time=datetime(2024, 5, 1, 12, 0, 0), min=40.0, max=150.0, average=95.0),)
        dumped = json.loads(format_history(series))
        self.assertEqual(dumped, [{"time": "2024-05-01T12:00:00", "min": 40.0, "max": 150.0, "average": 95.0}])

    def test_history_keeps_utc_offset(self):
        series = (Sample(time=datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc), min=1.0, max=2.0, average=1.5),)
        self.assertEqual(json.loads(format_history(series))[0]["time"], "2024-05-01T12:00:00+00:00")


if __name__ == "__main__":
    unittest.main()
