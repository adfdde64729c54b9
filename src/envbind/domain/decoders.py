"""String decoders keyed by canonical type key.

:data:`DECODERS` is built once at import time and exposed read-only, so
concurrent loaders can share it without locking. Every decoder takes the
raw string exactly as resolved and either returns a typed value or
raises :class:`ValueError` naming the offending input.

Grammars: base-10 integers with a width check, decimal and ``0x1p-2``
hexadecimal floats, ``1``/``t``/``TRUE`` style booleans, RFC 3339
timestamps and ``1h30m`` durations.
"""

from __future__ import annotations

import re
import struct
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from envbind.domain.levels import LogLevel
from envbind.domain.types import SEQUENCE_PREFIX, type_key

Decoder = Callable[[str], Any]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_RFC3339_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(?:(Z)|([+-])([0-9]{2}):([0-9]{2}))"
)
_DURATION_PART_RE = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]*)")

_MAX_DURATION_NS = (1 << 63) - 1

# Microseconds per unit; timedelta resolution truncates nanoseconds.
_DURATION_UNITS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # micro sign
    "μs": Decimal(1),  # greek mu
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def _signed(bits: int) -> Decoder:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def decode(raw: str) -> int:
        if not _INT_RE.fullmatch(raw):
            raise ValueError(f"parsing {raw!r}: invalid syntax")
        value = int(raw)
        if not low <= value <= high:
            raise ValueError(f"parsing {raw!r}: value out of range for int{bits}")
        return value

    return decode


def _unsigned(bits: int) -> Decoder:
    high = (1 << bits) - 1

    def decode(raw: str) -> int:
        if not _UINT_RE.fullmatch(raw):
            raise ValueError(f"parsing {raw!r}: invalid syntax")
        value = int(raw)
        if value > high:
            raise ValueError(f"parsing {raw!r}: value out of range for uint{bits}")
        return value

    return decode


def decode_float64(raw: str) -> float:
    """Parse a decimal or hexadecimal (``0x1p-2``) float literal."""
    if _HEX_FLOAT_RE.fullmatch(raw):
        try:
            return float.fromhex(raw)
        except OverflowError as exc:
            raise ValueError(f"parsing {raw!r}: value out of range") from exc
    if not _FLOAT_RE.fullmatch(raw):
        raise ValueError(f"parsing {raw!r}: invalid syntax")
    value = float(raw)
    if value in (float("inf"), float("-inf")) and "inf" not in raw.lower():
        raise ValueError(f"parsing {raw!r}: value out of range")
    return value


def decode_float32(raw: str) -> float:
    """Parse like :func:`decode_float64`, then round to single precision.

    Values that round to the largest finite float32 are accepted; only
    those rounding to infinity are out of range.
    """
    value = decode_float64(raw)
    if value != value or value in (float("inf"), float("-inf")):
        return value
    try:
        packed = struct.pack("<f", value)
    except OverflowError as exc:
        raise ValueError(f"parsing {raw!r}: value out of range for float32") from exc
    return struct.unpack("<f", packed)[0]


def decode_bool(raw: str) -> bool:
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"parsing {raw!r}: invalid syntax")


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


def decode_rfc3339(raw: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware :class:`datetime`.

    Fractional seconds beyond microsecond precision are truncated.
    """
    match = _RFC3339_RE.fullmatch(raw)
    if match is None:
        raise ValueError(f"parsing time {raw!r} as RFC 3339: invalid syntax")
    year, month, day, hour, minute, second, frac, zulu, sign, off_h, off_m = match.groups()

    if zulu:
        tz = timezone.utc
    else:
        if int(off_h) >= 24 or int(off_m) >= 60:
            raise ValueError(f"parsing time {raw!r}: time zone offset out of range")
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        tz = timezone(-offset if sign == "-" else offset)

    microsecond = int((frac or "0")[:6].ljust(6, "0"))
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=tz,
        )
    except ValueError as exc:
        raise ValueError(f"parsing time {raw!r}: {exc}") from exc


def decode_duration(raw: str) -> timedelta:
    """Parse a duration such as ``300ms``, ``-1.5h`` or ``2h45m``.

    A duration is an optionally signed sequence of decimal numbers, each
    with an optional fraction and a required unit (``ns``, ``us``, ``ms``,
    ``s``, ``m``, ``h``). A bare ``0`` is also accepted.
    """
    text = raw
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {raw!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART_RE.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {raw!r}")
        number, unit = match.groups()
        if number in ("", "."):
            raise ValueError(f"invalid duration {raw!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {raw!r}")
        if unit not in _DURATION_UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {raw!r}")
        total += Decimal(number) * _DURATION_UNITS[unit]
        pos = match.end()

    limit = _MAX_DURATION_NS + (1 if negative else 0)
    if total * 1000 > limit:
        raise ValueError(f"invalid duration {raw!r}: out of range")
    micros = int(total)
    return timedelta(microseconds=-micros if negative else micros)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def decode_bytes(raw: str) -> bytes:
    return raw.encode("utf-8", "surrogateescape")


def decode_string_list(raw: str) -> list[str]:
    """Split on commas without trimming. ``""`` yields ``[""]``."""
    return raw.split(",")


DECODERS: Mapping[str, Decoder] = MappingProxyType(
    {
        "str": str,
        "bytes": decode_bytes,
        SEQUENCE_PREFIX + "uint8": decode_bytes,
        SEQUENCE_PREFIX + "str": decode_string_list,
        "int": _signed(64),
        "int8": _signed(8),
        "int16": _signed(16),
        "int32": _signed(32),
        "int64": _signed(64),
        "uint": _unsigned(64),
        "uint8": _unsigned(8),
        "uint16": _unsigned(16),
        "uint32": _unsigned(32),
        "uint64": _unsigned(64),
        "float": decode_float64,
        "float32": decode_float32,
        "float64": decode_float64,
        "bool": decode_bool,
        type_key(datetime): decode_rfc3339,
        type_key(timedelta): decode_duration,
        type_key(LogLevel): LogLevel.parse,
    }
)
