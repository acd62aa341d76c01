"""Tests for GSA and GSV decoding."""

import math

import pytest

from gnssfix.errors import InvalidFieldError
from gnssfix.nmea import FixType, Gsa, Gsv, SatelliteSystem, SatelliteVehicle, SelectionMode, parse


class TestDecodeGSA:
    def test_valid_gsa(self):
        result = parse("$GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39")
        assert isinstance(result, Gsa)
        assert result.mode is SelectionMode.AUTO
        assert result.fix_type is FixType.FIX_3D
        assert result.satellite_ids == (4, 5, 9, 12, 24)
        assert result.pdop == pytest.approx(2.5)
        assert result.hdop == pytest.approx(1.3)
        assert result.vdop == pytest.approx(2.1)
        assert result.system_id is None

    def test_missing_fix_type(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse("$GPGSA,A,,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*0A")
        assert exc_info.value.index == 1


class TestDecodeGSV:
    def test_full_page(self):
        result = parse("$GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75")
        assert isinstance(result, Gsv)
        assert result.total_messages == 2
        assert result.message_number == 1
        assert result.satellites_in_view == 8
        assert [satellite.prn for satellite in result.satellites] == [1, 2, 12, 14]
        assert result.satellites[0] == SatelliteVehicle(prn=1, elevation=40.0, azimuth=83.0, snr=46)

    def test_untracked_satellite_has_no_snr(self):
        result = parse("$GPGSV,2,2,08,15,30,050,40,17,10,100,,22,55,210,48,24,05,330,30*7E")
        assert isinstance(result, Gsv)
        assert result.satellites[1].prn == 17
        assert result.satellites[1].snr is None

    def test_padding_block_skipped(self):
        result = parse("$GPGSV,3,3,09,30,45,120,40,,,,*45")
        assert isinstance(result, Gsv)
        assert len(result.satellites) == 1
        assert result.satellites[0].prn == 30

    def test_glonass_satellites(self):
        result = parse("$GLGSV,1,1,02,65,20,045,35,66,40,120,42*60")
        assert isinstance(result, Gsv)
        assert {satellite.system for satellite in result.satellites} == {SatelliteSystem.GLONASS}


class TestSatelliteSystem:
    @pytest.mark.parametrize(
        ("prn", "system"),
        [
            (1, SatelliteSystem.GPS),
            (32, SatelliteSystem.GPS),
            (33, SatelliteSystem.WAAS),
            (64, SatelliteSystem.WAAS),
            (65, SatelliteSystem.GLONASS),
            (96, SatelliteSystem.GLONASS),
            (201, SatelliteSystem.UNKNOWN),
        ],
    )
    def test_prn_ranges(self, prn, system):
        assert SatelliteVehicle(prn, math.nan, math.nan, None).system is system
