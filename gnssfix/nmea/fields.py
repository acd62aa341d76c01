"""NMEA field parsing utilities.

This module provides utilities for parsing individual fields from NMEA sentences.
NMEA fields are comma-separated and may be empty (consecutive commas indicate
missing data). Two families of helpers live here:

* ``parse_*`` helpers for optional fields. They never raise: an empty or
  unparseable float becomes NaN and an empty or unparseable integer becomes
  None, so callers can distinguish "no data" from "measured zero".

* ``require_*`` helpers for fields a decode rule cannot do without. They raise
  ``InvalidFieldError`` naming the sentence code and the field index, so a
  message is either fully decoded or not built at all.

Numbers are parsed in a locale-invariant format: an optional sign, digits, an
optional '.' decimal separator and an optional exponent. Thousands
separators, underscores and surrounding whitespace are rejected.
"""

import math
import re
from collections.abc import Mapping, Sequence
from datetime import datetime, time, timezone
from typing import TypeVar

from gnssfix.errors import InvalidFieldError
from gnssfix.nmea.types import ModeIndicator

_T = TypeVar("_T")

_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PATTERN = re.compile(r"[+-]?\d+")

_MODE_INDICATORS = {mode.value: mode for mode in ModeIndicator}


def field_at(fields: Sequence[str], index: int) -> str:
    """Return ``fields[index]``, or ``""`` for trailing fields a sender omitted."""
    if index < len(fields):
        return fields[index]
    return ""


def parse_float_field(value: str) -> float:
    """Parse a string field to float, returning NaN if empty or invalid.

    Example:
        >>> parse_float_field("545.4")
        545.4
        >>> parse_float_field("")  # empty field
        nan
    """
    if not value or _FLOAT_PATTERN.fullmatch(value) is None:
        return math.nan
    return float(value)


def parse_int_field(value: str) -> int | None:
    """Parse a string field to int, returning None if empty or invalid.

    Example:
        >>> parse_int_field("08")
        8
        >>> parse_int_field("")
        None
    """
    if not value or _INT_PATTERN.fullmatch(value) is None:
        return None
    return int(value)


def parse_string_field(value: str) -> str | None:
    """Return the field unchanged, or None if empty."""
    if not value:
        return None
    return value


def _convert_to_decimal_degrees(value: str, direction: str, degree_digits: int) -> float:
    """Convert an NMEA coordinate to decimal degrees.

    NMEA coordinates use DDMM.MMMM (latitude) or DDDMM.MMMM (longitude)
    format: a fixed-width integer degree prefix followed by decimal minutes.

        decimal_degrees = degrees + minutes / 60

    South and West hemispheres are negative.
    """
    if len(value) <= degree_digits:
        return math.nan

    degrees = parse_int_field(value[:degree_digits])
    minutes = parse_float_field(value[degree_digits:])
    if degrees is None or degrees < 0 or math.isnan(minutes):
        return math.nan

    decimal_degrees = degrees + minutes / 60.0

    if direction in ("S", "W"):
        return -decimal_degrees

    return decimal_degrees


def parse_latitude(value: str, direction: str) -> float:
    """Convert an NMEA latitude (DDMM.MMMM) to decimal degrees, NaN if absent.

    Example:
        >>> parse_latitude("4807.038", "N")
        48.1173  # 48° + 7.038'/60
    """
    return _convert_to_decimal_degrees(value, direction, 2)


def parse_longitude(value: str, direction: str) -> float:
    """Convert an NMEA longitude (DDDMM.MMMM) to decimal degrees, NaN if absent.

    Example:
        >>> parse_longitude("01131.000", "W")
        -11.5166667  # negative for West
    """
    return _convert_to_decimal_degrees(value, direction, 3)


def _split_time(value: str) -> tuple[int, int, int, int] | None:
    if len(value) < 6:
        return None
    hours = parse_int_field(value[0:2])
    minutes = parse_int_field(value[2:4])
    seconds = parse_float_field(value[4:])
    if hours is None or minutes is None or math.isnan(seconds):
        return None
    whole_seconds = int(seconds)
    microseconds = round((seconds - whole_seconds) * 1_000_000)
    # 59.9999999 must not round up into an invalid 60th second
    microseconds = min(microseconds, 999_999)
    return hours, minutes, whole_seconds, microseconds


def parse_time_field(value: str) -> time | None:
    """Parse a UTC time-of-day in hhmmss(.sss) format.

    Example:
        >>> parse_time_field("123519.50")
        datetime.time(12, 35, 19, 500000)
    """
    parts = _split_time(value)
    if parts is None:
        return None
    try:
        return time(*parts)
    except ValueError:
        return None


def combine_date_time(
    year: int | None,
    month: int | None,
    day: int | None,
    time_value: str,
) -> datetime | None:
    """Build a UTC datetime from date parts and an hhmmss(.sss) time field.

    Returns None when any part is missing or the combination is not a real
    calendar instant (e.g. month 13).
    """
    parts = _split_time(time_value)
    if year is None or month is None or day is None or parts is None:
        return None
    try:
        return datetime(year, month, day, *parts, tzinfo=timezone.utc)
    except ValueError:
        return None


def require_field_count(code: str, fields: Sequence[str], minimum: int) -> None:
    """Raise ``InvalidFieldError`` if fewer than ``minimum`` fields are present."""
    if len(fields) < minimum:
        raise InvalidFieldError(
            code,
            len(fields),
            f"expected at least {minimum} fields, got {len(fields)}",
        )


def require_float(code: str, fields: Sequence[str], index: int) -> float:
    """Parse a mandatory numeric field."""
    value = parse_float_field(field_at(fields, index))
    if math.isnan(value):
        raise InvalidFieldError(code, index, f"not a number: {field_at(fields, index)!r}")
    return value


def require_int(code: str, fields: Sequence[str], index: int) -> int:
    """Parse a mandatory integer field."""
    value = parse_int_field(field_at(fields, index))
    if value is None:
        raise InvalidFieldError(code, index, f"not an integer: {field_at(fields, index)!r}")
    return value


def require_char(code: str, fields: Sequence[str], index: int) -> str:
    """Return the first character of a mandatory unit/flag field."""
    value = field_at(fields, index)
    if not value:
        raise InvalidFieldError(code, index, "field is empty")
    return value[0]


def lookup_code(
    code: str,
    index: int,
    value: str | int,
    table: Mapping[str, _T] | Mapping[int, _T],
) -> _T:
    """Validate ``value`` against a closed code table."""
    try:
        return table[value]  # type: ignore[index]
    except KeyError:
        raise InvalidFieldError(code, index, f"unknown code {value!r}") from None


def parse_mode_field(code: str, fields: Sequence[str], index: int) -> ModeIndicator | None:
    """Parse an optional single-character FAA mode indicator."""
    value = field_at(fields, index)
    if not value:
        return None
    return lookup_code(code, index, value, _MODE_INDICATORS)


def parse_mode_string(code: str, fields: Sequence[str], index: int) -> tuple[ModeIndicator, ...]:
    """Parse a GNS-style mode string with one character per constellation."""
    value = field_at(fields, index)
    return tuple(lookup_code(code, index, char, _MODE_INDICATORS) for char in value)
