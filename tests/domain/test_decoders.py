"""Tests for the decoder table."""

from __future__ import annotations

import math
import struct
from datetime import UTC, datetime, timedelta, timezone

import pytest

from envbind.domain.decoders import (
    DECODERS,
    decode_bool,
    decode_duration,
    decode_float32,
    decode_float64,
    decode_rfc3339,
    decode_string_list,
)
from envbind.domain.levels import LogLevel


class TestRegistry:
    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            DECODERS["custom"] = str  # type: ignore[index]

    @pytest.mark.parametrize(
        "key",
        [
            "str",
            "bytes",
            "[]uint8",
            "[]str",
            "int",
            "int8",
            "int16",
            "int32",
            "int64",
            "uint",
            "uint8",
            "uint16",
            "uint32",
            "uint64",
            "float",
            "float32",
            "float64",
            "bool",
            "datetime.datetime",
            "datetime.timedelta",
            "envbind.domain.levels.LogLevel",
        ],
    )
    def test_registered_keys(self, key: str) -> None:
        assert key in DECODERS

    def test_string_identity(self) -> None:
        assert DECODERS["str"](" keep  me ") == " keep  me "

    def test_bytes(self) -> None:
        assert DECODERS["bytes"]("héllo") == "héllo".encode()
        assert DECODERS["[]uint8"]("ab") == b"ab"


class TestStringList:
    def test_split(self) -> None:
        assert decode_string_list("a,b,c") == ["a", "b", "c"]

    def test_empty_is_one_empty_element(self) -> None:
        assert decode_string_list("") == [""]

    def test_keeps_blanks(self) -> None:
        assert decode_string_list("a,,b,") == ["a", "", "b", ""]


class TestIntegers:
    @pytest.mark.parametrize(
        ("key", "raw", "expected"),
        [
            ("int", "-13", -13),
            ("int", "+5", 5),
            ("int8", "127", 127),
            ("int8", "-128", -128),
            ("int16", "-32768", -32768),
            ("int32", "2147483647", 2147483647),
            ("int64", "-9223372036854775808", -(2**63)),
            ("uint8", "255", 255),
            ("uint16", "65535", 65535),
            ("uint32", "4294967295", 4294967295),
            ("uint64", "18446744073709551615", 2**64 - 1),
            ("uint", "0", 0),
        ],
    )
    def test_valid(self, key: str, raw: str, expected: int) -> None:
        assert DECODERS[key](raw) == expected

    @pytest.mark.parametrize(
        ("key", "raw"),
        [
            ("int", "a"),
            ("int", ""),
            ("int", "1_000"),
            ("int", " 1"),
            ("int", "1\n"),
            ("int", "0x10"),
            ("int8", "128"),
            ("int8", "-129"),
            ("int64", "9223372036854775808"),
            ("uint8", "256"),
            ("uint8", "-1"),
            ("uint", "+1"),
            ("uint64", "18446744073709551616"),
        ],
    )
    def test_invalid(self, key: str, raw: str) -> None:
        with pytest.raises(ValueError, match="parsing"):
            DECODERS[key](raw)


class TestFloats:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1.23", 1.23), ("-1.23", -1.23), ("1e3", 1000.0), (".5", 0.5), ("5.", 5.0)],
    )
    def test_float64(self, raw: str, expected: float) -> None:
        assert decode_float64(raw) == expected

    def test_infinity(self) -> None:
        assert decode_float64("inf") == math.inf
        assert decode_float64("-Infinity") == -math.inf

    def test_nan(self) -> None:
        assert math.isnan(decode_float64("NaN"))

    @pytest.mark.parametrize("raw", ["", "abc", "1.2.3", " 1.0", "1_0.0", "1e400", "."])
    def test_float64_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError):
            decode_float64(raw)

    def test_float32_rounds_to_single_precision(self) -> None:
        value = decode_float32("1.23")
        assert value != 1.23
        assert value == pytest.approx(1.23, rel=1e-6)

    def test_float32_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="float32"):
            decode_float32("1e39")

    @pytest.mark.parametrize("raw", ["3.4028235e+38", "-3.4028235e+38"])
    def test_float32_max_rounds_down(self, raw: str) -> None:
        value = decode_float32(raw)
        assert math.isfinite(value)
        assert abs(value) == struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("0x1p-2", 0.25), ("-0X1.8p1", -3.0), ("0x.8p0", 0.5), ("0x10P0", 16.0)],
    )
    def test_hex_float(self, raw: str, expected: float) -> None:
        assert decode_float64(raw) == expected

    @pytest.mark.parametrize("raw", ["0x1", "0x1.8", "0xp1", "0x1p"])
    def test_hex_float_needs_exponent(self, raw: str) -> None:
        with pytest.raises(ValueError, match="invalid syntax"):
            decode_float64(raw)

    def test_hex_float_overflow(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            decode_float64("0x1p5000")


class TestBool:
    @pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true(self, raw: str) -> None:
        assert decode_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false(self, raw: str) -> None:
        assert decode_bool(raw) is False

    @pytest.mark.parametrize("raw", ["", "yes", "no", "tRuE", " true"])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError):
            decode_bool(raw)


class TestRfc3339:
    def test_utc(self) -> None:
        assert decode_rfc3339("2025-01-01T00:00:00Z") == datetime(2025, 1, 1, tzinfo=UTC)

    def test_offset(self) -> None:
        value = decode_rfc3339("2025-06-01T12:30:00+02:00")
        assert value.utcoffset() == timedelta(hours=2)
        assert value == datetime(2025, 6, 1, 10, 30, tzinfo=UTC)

    def test_negative_offset(self) -> None:
        value = decode_rfc3339("2025-06-01T12:30:00-05:30")
        assert value.tzinfo == timezone(-timedelta(hours=5, minutes=30))

    def test_fraction_truncated_to_microseconds(self) -> None:
        value = decode_rfc3339("2025-01-01T00:00:00.123456789Z")
        assert value.microsecond == 123456

    def test_short_fraction(self) -> None:
        assert decode_rfc3339("2025-01-01T00:00:00.5Z").microsecond == 500000

    @pytest.mark.parametrize(
        "raw",
        [
            "a",
            "2025-01-01",
            "2025-01-01T00:00:00",
            "2025-01-01 00:00:00Z",
            "2025-02-30T00:00:00Z",
            "2025-01-01T25:00:00Z",
            "2025-01-01T00:00:00+24:00",
        ],
    )
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError):
            decode_rfc3339(raw)


class TestDuration:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2h", timedelta(hours=2)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("1.5h", timedelta(minutes=90)),
            ("300ms", timedelta(milliseconds=300)),
            ("-300ms", timedelta(milliseconds=-300)),
            ("+10s", timedelta(seconds=10)),
            ("0", timedelta(0)),
            ("0s", timedelta(0)),
            ("1us", timedelta(microseconds=1)),
            ("1µs", timedelta(microseconds=1)),
            ("1000ns", timedelta(microseconds=1)),
            ("2h45m30.5s", timedelta(hours=2, minutes=45, seconds=30.5)),
        ],
    )
    def test_valid(self, raw: str, expected: timedelta) -> None:
        assert decode_duration(raw) == expected

    @pytest.mark.parametrize("raw", ["", "a", "1", "h", "-", "1x", ".s", "1h ", "3d"])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError, match="duration"):
            decode_duration(raw)

    def test_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            decode_duration("3000000h")


class TestRoundTrip:
    """Canonical string forms decode back to the value that produced them."""

    @pytest.mark.parametrize("value", [0, 1, -1, 42, 2**63 - 1, -(2**63)])
    def test_int(self, value: int) -> None:
        assert DECODERS["int64"](str(value)) == value

    @pytest.mark.parametrize("value", [0.0, 1.5, -2.25, 1e-10])
    def test_float(self, value: float) -> None:
        assert DECODERS["float64"](repr(value)) == value

    def test_float32_max(self) -> None:
        largest = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]
        assert DECODERS["float32"]("3.4028235e+38") == largest

    @pytest.mark.parametrize("value", [True, False])
    def test_bool(self, value: bool) -> None:
        assert DECODERS["bool"](str(value).lower()) is value

    def test_timestamp(self) -> None:
        value = datetime(2025, 1, 1, tzinfo=UTC)
        assert DECODERS["datetime.datetime"](value.isoformat().replace("+00:00", "Z")) == value

    @pytest.mark.parametrize("level", list(LogLevel))
    def test_log_level(self, level: LogLevel) -> None:
        assert DECODERS["envbind.domain.levels.LogLevel"](level.name.lower()) is level
