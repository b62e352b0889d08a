"""Unit tests for time, task and taskset encodings."""

import io
import math
import unittest

import yaml

from rtcommon.errors import MalformedFormatError, MalformedNumberError, ParseError, UnknownUnitError
from rtcommon.models import RTTask
from rtcommon.serialization import (
    decode_task,
    decode_time,
    dump_taskset,
    encode_task,
    encode_time,
    load_taskset,
)
from rtcommon.units import Time


class TestEncodeTime(unittest.TestCase):
    """Test the "<value> ns" encoding."""

    def test_always_nanoseconds(self):
        """Test that times are written in nanoseconds whatever their unit."""
        self.assertEqual(encode_time(Time.nanos(1500.0)), "1500 ns")
        self.assertEqual(encode_time(Time.millis(2.0)), "2000000 ns")

    def test_integral_values_have_no_fraction(self):
        """Test that integral values drop the trailing ".0"."""
        self.assertEqual(encode_time(Time.zero()), "0 ns")
        self.assertEqual(encode_time(Time.nanos(10.0)), "10 ns")

    def test_fractional(self):
        """Test that fractional nanoseconds are kept."""
        self.assertEqual(encode_time(Time.nanos(0.25)), "0.25 ns")
        self.assertEqual(encode_time(Time.nanos(100.05)), "100.05 ns")

    def test_large_values_are_positional(self):
        """Test that large values are not written with an exponent."""
        self.assertEqual(encode_time(Time.secs(1e7)), "10000000000000000 ns")

    def test_negative(self):
        """Test that negative times keep their sign."""
        self.assertEqual(encode_time(Time.nanos(-3.5)), "-3.5 ns")
        self.assertEqual(encode_time(Time.nanos(-4.0)), "-4 ns")

    def test_non_finite(self):
        """Test the spelling of infinities and nan."""
        self.assertEqual(encode_time(Time.nanos(math.inf)), "inf ns")
        self.assertEqual(encode_time(Time.nanos(-math.inf)), "-inf ns")
        self.assertEqual(encode_time(Time.nanos(math.nan)), "NaN ns")


class TestDecodeTime(unittest.TestCase):
    """Test the time literal grammar."""

    def test_bare_number_is_nanoseconds(self):
        """Test that a single token is read as nanoseconds."""
        self.assertEqual(decode_time("1500"), Time.nanos(1500.0))
        self.assertEqual(decode_time("  42.5  "), Time.nanos(42.5))

    def test_units(self):
        """Test every recognized unit suffix."""
        self.assertEqual(decode_time("2 s"), Time.secs(2.0))
        self.assertEqual(decode_time("2 ms"), Time.millis(2.0))
        self.assertEqual(decode_time("2 us"), Time.micros(2.0))
        self.assertEqual(decode_time("2 ns"), Time.nanos(2.0))

    def test_any_whitespace_separates_tokens(self):
        """Test that tabs, runs of spaces and newlines split tokens."""
        self.assertEqual(decode_time("1.5\tms"), Time.micros(1500.0))
        self.assertEqual(decode_time("1.5   ms\n"), Time.micros(1500.0))

    def test_number_forms(self):
        """Test signs, exponents, bare fractions and non-finite words."""
        self.assertEqual(decode_time("1e3 us"), Time.millis(1.0))
        self.assertEqual(decode_time("+2.5E2"), Time.nanos(250.0))
        self.assertEqual(decode_time("-.5 us"), Time.nanos(-500.0))
        self.assertEqual(decode_time("3. ns"), Time.nanos(3.0))
        self.assertEqual(decode_time("Infinity").value_ns, math.inf)
        self.assertEqual(decode_time("-inf ms").value_ns, -math.inf)
        self.assertTrue(math.isnan(decode_time("NaN").value_ns))

    def test_malformed_number(self):
        """Test that a non-numeric token is a malformed number."""
        with self.assertRaises(MalformedNumberError) as ctx:
            decode_time("abc")
        self.assertEqual(ctx.exception.token, "abc")
        with self.assertRaises(MalformedNumberError):
            decode_time("abc ms")

    def test_digit_group_underscores_rejected(self):
        """Test that "1_000" is not accepted as a number."""
        with self.assertRaises(MalformedNumberError):
            decode_time("1_000 ms")
        with self.assertRaises(MalformedNumberError):
            decode_time("1_000")

    def test_non_ascii_digits_rejected(self):
        """Test that non-ASCII digits are not accepted as a number."""
        with self.assertRaises(MalformedNumberError):
            decode_time("١٢ ns")

    def test_unknown_unit(self):
        """Test that an unrecognized suffix is an unknown unit."""
        with self.assertRaises(UnknownUnitError) as ctx:
            decode_time("5 foo")
        self.assertEqual(ctx.exception.unit, "foo")

    def test_malformed_format(self):
        """Test that zero or more than two tokens is a format error."""
        with self.assertRaises(MalformedFormatError):
            decode_time("5 ms extra")
        with self.assertRaises(MalformedFormatError):
            decode_time("")
        with self.assertRaises(MalformedFormatError):
            decode_time("   ")

    def test_non_string(self):
        """Test that a non-string value is a format error."""
        with self.assertRaises(MalformedFormatError):
            decode_time(1500)

    def test_errors_are_value_errors(self):
        """Test that every decoding error is a ParseError and a ValueError."""
        for text in ("abc", "5 foo", "1 2 3"):
            with self.assertRaises(ParseError):
                decode_time(text)
            with self.assertRaises(ValueError):
                decode_time(text)

    def test_round_trip(self):
        """Test that decoding an encoded time gives an equal time."""
        for t in (
            Time.zero(),
            Time.nanos(0.3),
            Time.micros(12.345),
            Time.millis(-7.5),
            Time.secs(123.456789),
            Time.secs(1e7),
        ):
            self.assertEqual(decode_time(encode_time(t)), t)

    def test_non_finite_round_trip(self):
        """Test that inf and nan survive encoding and decoding."""
        self.assertEqual(decode_time(encode_time(Time.nanos(math.inf))).value_ns, math.inf)
        self.assertTrue(math.isnan(decode_time(encode_time(Time.nanos(math.nan))).value_ns))


class TestTaskRecords(unittest.TestCase):
    """Test task record encoding."""

    def test_encode_task(self):
        """Test that a task encodes as three named time fields."""
        record = encode_task(RTTask.new_ns(1, 5, 10))
        self.assertEqual(record, {"wcet": "1 ns", "deadline": "5 ns", "period": "10 ns"})

    def test_decode_task(self):
        """Test decoding a record with unit suffixes."""
        task = decode_task({"wcet": "1 ms", "deadline": "5 ms", "period": "10 ms"})
        self.assertEqual(task.wcet, Time.millis(1.0))
        self.assertEqual(task.deadline, Time.millis(5.0))
        self.assertEqual(task.period, Time.millis(10.0))

    def test_record_round_trip(self):
        """Test that decoding an encoded task gives an equal task."""
        task = RTTask(wcet=Time.micros(1.5), deadline=Time.millis(2.0), period=Time.secs(0.01))
        self.assertEqual(decode_task(encode_task(task)), task)

    def test_extra_keys_ignored(self):
        """Test that unknown keys in a record are ignored."""
        task = decode_task({"wcet": "1", "deadline": "5", "period": "10", "name": "t1"})
        self.assertEqual(task, RTTask.new_ns(1, 5, 10))

    def test_missing_field(self):
        """Test that a record without a deadline is a format error."""
        with self.assertRaises(MalformedFormatError):
            decode_task({"wcet": "1 ms", "period": "10 ms"})

    def test_not_a_record(self):
        """Test that a list is not accepted as a task record."""
        with self.assertRaises(MalformedFormatError):
            decode_task(["1 ms", "5 ms", "10 ms"])

    def test_field_errors_propagate(self):
        """Test that a bad field raises the time decoding error."""
        with self.assertRaises(UnknownUnitError):
            decode_task({"wcet": "1 min", "deadline": "5 ms", "period": "10 ms"})


class TestTasksetYaml(unittest.TestCase):
    """Test YAML taskset documents."""

    DOCUMENT = (
        "- wcet: 1 ms\n"
        "  deadline: 10 ms\n"
        "  period: 10 ms\n"
        "- wcet: 500 us\n"
        "  deadline: 4 ms\n"
        "  period: 20 ms\n"
    )

    def test_load_from_string(self):
        """Test loading a taskset from a YAML string."""
        taskset = load_taskset(self.DOCUMENT)
        self.assertEqual(len(taskset), 2)
        self.assertEqual(taskset[0], RTTask.new_ns(1_000_000, 10_000_000, 10_000_000))
        self.assertEqual(taskset[1].wcet, Time.micros(500.0))

    def test_load_from_stream(self):
        """Test loading a taskset from an open text stream."""
        taskset = load_taskset(io.StringIO(self.DOCUMENT))
        self.assertEqual(taskset[1].period, Time.millis(20.0))

    def test_empty_document(self):
        """Test that an empty document is an empty taskset."""
        self.assertEqual(load_taskset(""), [])

    def test_dump_then_load(self):
        """Test that a dumped taskset loads back equal."""
        taskset = load_taskset(self.DOCUMENT)
        self.assertEqual(load_taskset(dump_taskset(taskset)), taskset)

    def test_dump_uses_nanoseconds(self):
        """Test that dumped fields use the nanosecond encoding."""
        dumped = yaml.safe_load(dump_taskset([RTTask.new_ns(1, 5, 10)]))
        self.assertEqual(dumped, [{"wcet": "1 ns", "deadline": "5 ns", "period": "10 ns"}])

    def test_not_a_list(self):
        """Test that a top-level mapping is a format error."""
        with self.assertRaises(MalformedFormatError):
            load_taskset("wcet: 1 ms\n")

    def test_numeric_field_is_rejected(self):
        """Test that bare YAML numbers are not accepted as times."""
        with self.assertRaises(MalformedFormatError):
            load_taskset("- {wcet: 1, deadline: 5, period: 10}\n")

    def test_yaml_syntax_error_propagates(self):
        """Test that YAML syntax errors are not wrapped."""
        with self.assertRaises(yaml.YAMLError):
            load_taskset("- [unclosed\n")


if __name__ == "__main__":
    unittest.main()
