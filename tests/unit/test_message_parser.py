"""
Unit tests for the message interpreter.

Covers the accepted payload shapes, each rejection reason and the
positional field order.
"""

import random
import unittest
from datetime import datetime, timezone

from mqtt_test_client.models.sample import Accepted, RejectReason, Rejected
from mqtt_test_client.processing.message_parser import generate_test_payload, interpret, parse


FIXED_TIME = datetime(2024, 5, 1, 12, 0, 0)


def fixed_clock():
    return FIXED_TIME


class TestInterpretAccepted(unittest.TestCase):
    """Payloads that must produce a sample."""

    def test_basic_payload(self):
        """Average, 95; Min, 40; Max, 150;"""
        result = interpret("Average, 95; Min, 40; Max, 150;", fixed_clock)

        self.assertIsInstance(result, Accepted)
        self.assertTrue(result.accepted)
        self.assertEqual(result.sample.average, 95.0)
        self.assertEqual(result.sample.min, 40.0)
        self.assertEqual(result.sample.max, 150.0)
        self.assertEqual(result.sample.time, FIXED_TIME)

    def test_irregular_spacing(self):
        sample = parse("average,95.5 ; min , 40.2; max, 150.9;")

        self.assertIsNotNone(sample)
        self.assertAlmostEqual(sample.average, 95.5)
        self.assertAlmostEqual(sample.min, 40.2)
        self.assertAlmostEqual(sample.max, 150.9)

    def test_without_trailing_separator(self):
        sample = parse("AVERAGE, 1; MIN, 2; MAX, 3")
        self.assertEqual((sample.average, sample.min, sample.max), (1.0, 2.0, 3.0))

    def test_scientific_notation_and_signs(self):
        sample = parse("Average, 1E2; Min, -4e1; Max, +1.5e2;")
        self.assertEqual((sample.average, sample.min, sample.max), (100.0, -40.0, 150.0))

    def test_time_not_older_than_call(self):
        before = datetime.now(timezone.utc)
        sample = parse("Average, 95; Min, 40; Max, 150;")
        self.assertGreaterEqual(sample.time, before)
        self.assertIsNotNone(sample.time.tzinfo)

    def test_fields_are_positional(self):
        """Labels are not matched, position 0/1/2 is average/min/max."""
        sample = parse("Max, 150; Min, 40; Average, 95;")
        self.assertEqual(sample.average, 150.0)
        self.assertEqual(sample.min, 40.0)
        self.assertEqual(sample.max, 95.0)

    def test_keywords_anywhere_in_message(self):
        sample = parse("a, 1; b, 2; c, 3; average min max")
        self.assertEqual((sample.average, sample.min, sample.max), (1.0, 2.0, 3.0))


class TestInterpretRejected(unittest.TestCase):
    """Payloads that must be dropped without a sample."""

    def assertRejected(self, raw, reason):
        result = interpret(raw)
        self.assertIsInstance(result, Rejected)
        self.assertFalse(result.accepted)
        self.assertEqual(result.reason, reason)
        self.assertIsNone(parse(raw))

    def test_no_keywords(self):
        self.assertRejected("Temp update: all nominal", RejectReason.MISSING_KEYWORD)

    def test_each_missing_keyword(self):
        self.assertRejected("Mean, 95; Min, 40; Max, 150;", RejectReason.MISSING_KEYWORD)
        self.assertRejected("Average, 95; Low, 40; Max, 150;", RejectReason.MISSING_KEYWORD)
        self.assertRejected("Average, 95; Min, 40; High, 150;", RejectReason.MISSING_KEYWORD)

    def test_missing_keyword_detail_names_keyword(self):
        result = interpret("Average, 95; Min, 40;")
        self.assertIn("max", result.detail)

    def test_non_numeric_average(self):
        self.assertRejected("Average, abc; Min, 40; Max, 150;", RejectReason.NON_NUMERIC)

    def test_non_numeric_min_and_max(self):
        self.assertRejected("Average, 95; Min, x; Max, 150;", RejectReason.NON_NUMERIC)
        self.assertRejected("Average, 95; Min, 40; Max, 15o;", RejectReason.NON_NUMERIC)

    def test_empty_value(self):
        self.assertRejected("Average, ; Min, 40; Max, 150;", RejectReason.NON_NUMERIC)

    def test_non_finite_values(self):
        self.assertRejected("Average, NaN; Min, 40; Max, 150;", RejectReason.NON_NUMERIC)
        self.assertRejected("Average, 95; Min, -Infinity; Max, 150;", RejectReason.NON_NUMERIC)
        self.assertRejected("Average, 95; Min, 40; Max, inf;", RejectReason.NON_NUMERIC)
        self.assertRejected("Average, 1e999; Min, 40; Max, 150;", RejectReason.NON_NUMERIC)
        self.assertRejected("Average, 95; Min, -1e400; Max, 150;", RejectReason.NON_NUMERIC)

    def test_python_only_literals(self):
        self.assertRejected("Average, 1_000; Min, 40; Max, 150;", RejectReason.NON_NUMERIC)

    def test_non_ascii_digits(self):
        self.assertRejected("Average, \u0663; Min, 40; Max, 150;", RejectReason.NON_NUMERIC)
        self.assertRejected("Average, 95; Min, \uff14\uff10; Max, 150;", RejectReason.NON_NUMERIC)

    def test_too_few_segments(self):
        self.assertRejected("average min max", RejectReason.MALFORMED_FIELD)
        self.assertRejected("Average, 95; Min max, 40", RejectReason.MALFORMED_FIELD)

    def test_segment_without_comma(self):
        self.assertRejected("Average 95; Min, 40; Max, 150;", RejectReason.MALFORMED_FIELD)
        self.assertRejected("Average, 95; Min 40; Max, 150;", RejectReason.MALFORMED_FIELD)

    def test_extra_comma_in_value(self):
        """Value is everything after the first comma."""
        self.assertRejected("Average, 95,5; Min, 40; Max, 150;", RejectReason.NON_NUMERIC)

    def test_rejection_is_idempotent(self):
        raw = "Average, abc; Min, 40; Max, 150;"
        first = interpret(raw)
        second = interpret(raw)
        self.assertEqual(first, second)
        self.assertIsInstance(second, Rejected)


class TestGenerateTestPayload(unittest.TestCase):

    def test_payload_is_accepted_and_in_range(self):
        rng = random.Random(42)
        for _ in range(50):
            sample = parse(generate_test_payload(rng))
            self.assertIsNotNone(sample)
            self.assertTrue(90 <= sample.average < 110)
            self.assertTrue(30 <= sample.min < 80)
            self.assertTrue(120 <= sample.max < 200)

    def test_payload_format(self):
        payload = generate_test_payload(random.Random(1))
        self.assertRegex(payload, r"^Average, \d+; Min, \d+; Max, \d+;$")


if __name__ == "__main__":
    unittest.main()
