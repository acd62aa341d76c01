"""Tests for NMEA field parsing helpers."""

import math
from datetime import datetime, time, timezone

import pytest

from gnssfix.errors import InvalidFieldError
from gnssfix.nmea.fields import (
    combine_date_time,
    field_at,
    lookup_code,
    parse_float_field,
    parse_int_field,
    parse_latitude,
    parse_longitude,
    parse_mode_field,
    parse_mode_string,
    parse_string_field,
    parse_time_field,
    require_char,
    require_field_count,
    require_float,
    require_int,
)
from gnssfix.nmea.types import ModeIndicator


class TestParseNumbers:
    def test_float(self):
        assert parse_float_field("545.4") == pytest.approx(545.4)

    def test_signed_float(self):
        assert parse_float_field("-6.777") == pytest.approx(-6.777)

    @pytest.mark.parametrize("value", ["", "abc", "1,5", " 1.5", "1_000", "nan", "inf"])
    def test_float_not_reported(self, value):
        assert math.isnan(parse_float_field(value))

    def test_int_with_leading_zero(self):
        assert parse_int_field("08") == 8

    @pytest.mark.parametrize("value", ["", "8.0", "x"])
    def test_int_not_reported(self, value):
        assert parse_int_field(value) is None

    def test_string(self):
        assert parse_string_field("M") == "M"
        assert parse_string_field("") is None

    def test_field_at_past_end(self):
        assert field_at(("a", "b"), 1) == "b"
        assert field_at(("a", "b"), 5) == ""


class TestParseCoordinates:
    def test_latitude_north(self):
        assert parse_latitude("4807.038", "N") == pytest.approx(48.1173)

    def test_latitude_south(self):
        assert parse_latitude("3356.123", "S") == pytest.approx(-33.93538333)

    def test_longitude_east(self):
        assert parse_longitude("01131.000", "E") == pytest.approx(11.5166667)

    def test_longitude_west(self):
        assert parse_longitude("12311.12", "W") == pytest.approx(-123.18533333)

    def test_empty_coordinate(self):
        assert math.isnan(parse_latitude("", ""))
        assert math.isnan(parse_longitude("", "E"))

    def test_too_short_coordinate(self):
        assert math.isnan(parse_latitude("48", "N"))

    def test_malformed_minutes(self):
        assert math.isnan(parse_latitude("48xx.038", "N"))


class TestParseTime:
    def test_whole_seconds(self):
        assert parse_time_field("123519") == time(12, 35, 19)

    def test_fractional_seconds(self):
        assert parse_time_field("123519.50") == time(12, 35, 19, 500000)

    @pytest.mark.parametrize("value", ["", "1235", "126019", "ab3519"])
    def test_invalid_time(self, value):
        assert parse_time_field(value) is None

    def test_combine_date_time(self):
        assert combine_date_time(1994, 3, 23, "123519") == datetime(
            1994, 3, 23, 12, 35, 19, tzinfo=timezone.utc
        )

    def test_combine_missing_part(self):
        assert combine_date_time(None, 3, 23, "123519") is None
        assert combine_date_time(1994, 3, 23, "") is None

    def test_combine_impossible_date(self):
        assert combine_date_time(1994, 13, 23, "123519") is None


class TestRequiredFields:
    def test_field_count(self):
        require_field_count("GPGGA", ["1"] * 14, 14)
        with pytest.raises(InvalidFieldError) as exc_info:
            require_field_count("GPGGA", ["1"] * 3, 14)
        assert exc_info.value.code == "GPGGA"
        assert exc_info.value.index == 3

    def test_require_float(self):
        assert require_float("SDDPT", ["12.5"], 0) == pytest.approx(12.5)
        with pytest.raises(InvalidFieldError) as exc_info:
            require_float("SDDPT", [""], 0)
        assert exc_info.value.index == 0

    def test_require_int(self):
        assert require_int("GPGGA", ["", "4"], 1) == 4
        with pytest.raises(InvalidFieldError):
            require_int("GPGGA", ["", ""], 1)

    def test_require_char(self):
        assert require_char("PTNLA", ["Meters"], 0) == "M"
        with pytest.raises(InvalidFieldError):
            require_char("PTNLA", [], 0)

    def test_lookup_code(self):
        assert lookup_code("GPGSA", 0, "A", {"A": 1}) == 1
        with pytest.raises(InvalidFieldError) as exc_info:
            lookup_code("GPGSA", 0, "Q", {"A": 1})
        assert "unknown code" in exc_info.value.reason


class TestModeIndicators:
    def test_single_mode(self):
        assert parse_mode_field("GPVTG", ["", "D"], 1) is ModeIndicator.DIFFERENTIAL

    def test_absent_mode(self):
        assert parse_mode_field("GPVTG", ["x"], 1) is None
        assert parse_mode_field("GPVTG", ["x", ""], 1) is None

    def test_unknown_mode(self):
        with pytest.raises(InvalidFieldError):
            parse_mode_field("GPVTG", ["Z"], 0)

    def test_mode_string(self):
        assert parse_mode_string("GNGNS", ["AN"], 0) == (
            ModeIndicator.AUTONOMOUS,
            ModeIndicator.NOT_VALID,
        )
