"""Tests for position fix sentence decoding."""

import math
from datetime import datetime, time, timezone

import pytest

from gnssfix.errors import InvalidFieldError
from gnssfix.nmea import (
    FixQuality,
    Gga,
    Ggk,
    GgkQuality,
    Gll,
    Gns,
    ModeIndicator,
    NavigationalStatus,
    PositioningStatus,
    Rma,
    Rmc,
    parse,
)


class TestDecodeGGA:
    def test_valid_gga_with_fix(self):
        result = parse("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47")
        assert isinstance(result, Gga)
        assert result.fix_time == time(12, 35, 19)
        assert result.latitude == pytest.approx(48.1173, rel=1e-4)
        assert result.longitude == pytest.approx(11.5166667, rel=1e-4)
        assert result.quality is FixQuality.GPS_FIX
        assert result.satellites_in_use == 8
        assert result.hdop == pytest.approx(0.9)
        assert result.altitude == pytest.approx(545.4)
        assert result.altitude_units == "M"
        assert result.geoid_separation == pytest.approx(46.9)
        assert math.isnan(result.dgps_age)
        assert result.dgps_station_id is None

    def test_gga_no_fix(self):
        result = parse("$GPGGA,123520,4807.038,N,01131.000,E,0,00,,,M,,M,,*58")
        assert isinstance(result, Gga)
        assert result.quality is FixQuality.INVALID
        assert result.satellites_in_use == 0
        assert math.isnan(result.hdop)
        assert math.isnan(result.altitude)

    def test_gga_differential(self):
        result = parse(
            "$GPGGA,123521,4807.040,N,01131.002,E,2,09,0.8,545.6,M,46.9,M,1.2,0031*6F"
        )
        assert isinstance(result, Gga)
        assert result.quality is FixQuality.DGPS_FIX
        assert result.dgps_age == pytest.approx(1.2)
        assert result.dgps_station_id == 31

    def test_gga_missing_quality(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse("$GPGGA,123519,4807.038,N,01131.000,E,,08,0.9,545.4,M,46.9,M,,*76")
        assert exc_info.value.index == 5

    def test_gga_unknown_quality(self):
        with pytest.raises(InvalidFieldError):
            parse("$GPGGA,123519,4807.038,N,01131.000,E,9,08,0.9,545.4,M,46.9,M,,*4F")


class TestDecodeGNS:
    def test_gns_per_constellation_modes(self):
        result = parse(
            "$GNGNS,014035.00,4332.69262,S,17235.48549,E,RR,13,0.9,25.63,11.24,,,S*0F"
        )
        assert isinstance(result, Gns)
        assert result.latitude == pytest.approx(-43.5448770, rel=1e-6)
        assert result.longitude == pytest.approx(172.5914248, rel=1e-6)
        assert result.modes == (ModeIndicator.RTK, ModeIndicator.RTK)
        assert result.satellites_in_use == 13
        assert result.orthometric_height == pytest.approx(25.63)
        assert result.geoid_separation == pytest.approx(11.24)
        assert result.dgps_station_id is None
        assert result.status is NavigationalStatus.SAFE


class TestDecodeRMC:
    def test_valid_rmc(self):
        result = parse("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A")
        assert isinstance(result, Rmc)
        assert result.active is True
        assert result.fix_time == datetime(2094, 3, 23, 12, 35, 19, tzinfo=timezone.utc)
        assert result.speed == pytest.approx(22.4)
        assert result.course == pytest.approx(84.4)
        assert result.magnetic_variation == pytest.approx(-3.1)
        assert result.mode is None

    def test_rmc_with_mode(self):
        result = parse(
            "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W,A*07"
        )
        assert isinstance(result, Rmc)
        assert result.mode is ModeIndicator.AUTONOMOUS

    def test_rmc_unknown_mode(self):
        with pytest.raises(InvalidFieldError):
            parse("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W,Z*1C")

    def test_void_rmc(self):
        result = parse("$GPRMC,123519,V,,,,,,,230394,,,*1F")
        assert isinstance(result, Rmc)
        assert result.active is False
        assert math.isnan(result.latitude)
        assert math.isnan(result.speed)
        assert math.isnan(result.magnetic_variation)


class TestDecodeGLL:
    def test_full_gll(self):
        result = parse("$GPGLL,4916.45,N,12311.12,W,225444,A,A*5C")
        assert isinstance(result, Gll)
        assert result.latitude == pytest.approx(49.2741667)
        assert result.longitude == pytest.approx(-123.1853333)
        assert result.fix_time == time(22, 54, 44)
        assert result.data_active is True
        assert result.mode is ModeIndicator.AUTONOMOUS

    def test_legacy_gll_without_status(self):
        result = parse("$GPGLL,4916.45,N,12311.12,W*71")
        assert isinstance(result, Gll)
        assert result.fix_time is None
        assert result.data_active is True
        assert result.mode is None


class TestDecodeGGK:
    def test_trimble_ggk(self):
        result = parse(
            "$PTNL,GGK,172814.00,071296,3723.46587704,N,12202.26957864,W,3,06,1.7,EHT-6.777,M*4B"
        )
        assert isinstance(result, Ggk)
        assert result.fix_time == datetime(1996, 7, 12, 17, 28, 14, tzinfo=timezone.utc)
        assert result.latitude == pytest.approx(37.3910979507)
        assert result.longitude == pytest.approx(-122.037826311)
        assert result.quality is GgkQuality.RTK_FIX
        assert result.satellites_in_use == 6
        assert result.dop == pytest.approx(1.7)
        assert result.ellipsoidal_height == pytest.approx(-6.777)
        assert result.height_in_meters is True


class TestDecodeRMA:
    def test_loran_rma(self):
        result = parse("$GPRMA,A,4917.24,N,12309.57,W,1000.0,2000.0,5.0,60.0,10.0,E,D*09")
        assert isinstance(result, Rma)
        assert result.status is PositioningStatus.AUTONOMOUS
        assert result.time_difference_a == pytest.approx(1000.0)
        assert result.time_difference_b == pytest.approx(2000.0)
        assert result.speed == pytest.approx(5.0)
        assert result.course == pytest.approx(60.0)
        assert result.magnetic_variation == pytest.approx(-10.0)
        assert result.mode is ModeIndicator.DIFFERENTIAL
