"""Tests for NTRIP source-table parsing."""

import pytest

from gnssfix.errors import SourceTableError
from gnssfix.ntrip import Carrier, Caster, NtripStream, parse_source_entry, parse_source_table

_STREAM_LINE = (
    "STR;station1;City;RTCM 3.1;1004(1),1005(5);2;GPS;Net1;USA;40.00;-105.00;0;0;"
    "sNTRIP;none;N;N;9600;"
)
_CASTER_LINE = "CAS;rtk2go.com;2101;RTK2go;SNIP;0;USA;36.17;-115.14;;0;"
_NETWORK_LINE = "NET;Net1;Operator;B;N;https://example.com;;none;"


class TestParseSourceEntry:
    def test_stream(self):
        entry = parse_source_entry(_STREAM_LINE)
        assert isinstance(entry, NtripStream)
        assert entry.mountpoint == "station1"
        assert entry.identifier == "City"
        assert entry.format == "RTCM 3.1"
        assert entry.format_details == "1004(1),1005(5)"
        assert entry.carrier is Carrier.L1_L2
        assert entry.navigation_system == "GPS"
        assert entry.network == "Net1"
        assert entry.country_code == "USA"
        assert entry.latitude == pytest.approx(40.0)
        assert entry.longitude == pytest.approx(-105.0)
        assert entry.supports_nmea is False
        assert entry.authentication == "N"
        assert entry.fee is False
        assert entry.bitrate == 9600

    def test_stream_without_trailing_fields(self):
        entry = parse_source_entry("STR;MP;Town;RTCM 3;;0;GPS;;DEU;50.1;8.6;1")
        assert isinstance(entry, NtripStream)
        assert entry.carrier is Carrier.NONE
        assert entry.supports_nmea is True
        assert entry.authentication is None
        assert entry.bitrate is None

    def test_caster(self):
        entry = parse_source_entry(_CASTER_LINE)
        assert isinstance(entry, Caster)
        assert entry.address == "rtk2go.com"
        assert entry.port == 2101
        assert entry.identifier == "RTK2go"
        assert entry.operator == "SNIP"
        assert entry.supports_nmea is False
        assert entry.country_code == "USA"
        assert entry.latitude == pytest.approx(36.17)
        assert entry.longitude == pytest.approx(-115.14)
        assert entry.fallback_address is None
        assert entry.fallback_port == 0

    def test_other_record_kinds_ignored(self):
        assert parse_source_entry(_NETWORK_LINE) is None

    def test_short_stream_record(self):
        with pytest.raises(SourceTableError, match="at least 12"):
            parse_source_entry("STR;station1;City")

    def test_unknown_carrier(self):
        with pytest.raises(SourceTableError, match="carrier"):
            parse_source_entry(_STREAM_LINE.replace(";2;GPS;", ";7;GPS;"))

    def test_malformed_coordinate(self):
        with pytest.raises(SourceTableError):
            parse_source_entry(_STREAM_LINE.replace("40.00", "north"))

    def test_malformed_caster_port(self):
        with pytest.raises(SourceTableError):
            parse_source_entry(_CASTER_LINE.replace("2101", "port"))


class TestParseSourceTable:
    def test_table(self):
        text = "\r\n".join([_CASTER_LINE, _NETWORK_LINE, _STREAM_LINE, "ENDSOURCETABLE", ""])
        entries = parse_source_table(text)
        assert [type(entry) for entry in entries] == [Caster, NtripStream]

    def test_stops_at_end_marker(self):
        text = "\n".join([_STREAM_LINE, "ENDSOURCETABLE", _CASTER_LINE])
        entries = parse_source_table(text)
        assert len(entries) == 1

    def test_bad_records_skipped(self):
        text = "\r\n".join(["STR;broken", "", _STREAM_LINE, "ENDSOURCETABLE"])
        entries = parse_source_table(text)
        assert len(entries) == 1
        assert entries[0].mountpoint == "station1"

    def test_empty_table(self):
        assert parse_source_table("ENDSOURCETABLE\r\n") == []
