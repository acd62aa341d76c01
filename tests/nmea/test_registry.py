"""Tests for sentence-code dispatch."""

import pytest

from gnssfix.errors import InvalidFieldError
from gnssfix.nmea import (
    Gga,
    Ggk,
    Hdt,
    Pgrmz,
    RawSentence,
    Talker,
    UnknownMessage,
    decode,
    parse,
    talker_of,
)
from gnssfix.nmea.registry import RULES, TRIMBLE_RULES, find_rule

# One minimal valid field list per registered code
MINIMAL_FIELDS = {
    "GPGGA": ("123519", "", "", "", "", "0", "", "", "", "", "", "", "", ""),
    "GPGNS": ("", "", "", "", "", "N", "", "", "", "", "", ""),
    "GPRMC": ("", "V", "", "", "", "", "", "", "", "", ""),
    "GPGLL": ("", "", "", ""),
    "GPRMA": ("V", "", "", "", "", "", "", "", "", "", "", ""),
    "GPGSA": ("A", "1", *[""] * 15),
    "GPGSV": ("1", "1", "0"),
    "GPGST": ("",) * 8,
    "GPGBS": ("",) * 8,
    "GPGRS": ("", "0", *[""] * 6),
    "GPDTM": ("W84", "", "", "", "", "W84"),
    "GPZDA": ("",) * 4,
    "GPVTG": ("",) * 7,
    "GPBOD": ("",) * 3,
    "GPRMB": ("",) * 13,
    "GPRTE": ("1", "1", "c", "0"),
    "HEHDT": ("", "T"),
    "HEROT": ("", "V"),
    "IIVLW": ("",) * 4,
    "SDDPT": ("0", ""),
    "WIMDA": ("",) * 20,
    "WIMWV": ("", "R", "", "N", "V"),
    "YXXDR": ("",) * 4,
    "INCUR": ("",) * 11,
    "PGRME": ("",) * 6,
    "PGRMZ": ("", "", ""),
    "PTNLA": ("HV", "1", "M", "2", "D", "3", "D", "4", "M"),
    "PTNLB": ("H", "1", "M", "D", "2", "M"),
}


class TestFindRule:
    def test_talker_agnostic_lookup(self):
        assert find_rule("GPGGA") is find_rule("GNGGA") is RULES["--GGA"]

    def test_exact_proprietary_lookup(self):
        assert find_rule("PGRME") is RULES["PGRME"]

    def test_unregistered_code(self):
        assert find_rule("GPXYZ") is None

    def test_proprietary_never_falls_back(self):
        assert find_rule("PXGGA") is None

    def test_rule_count(self):
        assert len(RULES) + len(TRIMBLE_RULES) == 29

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            RULES["--ABC"] = RULES["--GGA"]  # type: ignore[index]


class TestDecode:
    @pytest.mark.parametrize("code", sorted(MINIMAL_FIELDS))
    def test_every_rule_keeps_code(self, code):
        message = decode(RawSentence(code, MINIMAL_FIELDS[code]))
        assert not isinstance(message, UnknownMessage)
        assert message.code == code
        assert message.talker is talker_of(code)

    def test_every_registered_code_covered(self):
        keys = {code if code.startswith("P") else "--" + code[2:] for code in MINIMAL_FIELDS}
        assert keys == set(RULES)

    def test_unknown_code(self):
        message = decode(RawSentence("GPABC", ("1", "2")))
        assert isinstance(message, UnknownMessage)
        assert message.fields == ("1", "2")
        assert message.talker is Talker.GPS

    def test_talker_from_code(self):
        message = parse("$GNGGA,123519,4807.038,N,01131.000,E,1,12,0.7,545.4,M,46.9,M,,*5C")
        assert isinstance(message, Gga)
        assert message.talker is Talker.COMBINED

    def test_heading_talker(self):
        message = parse("$HEHDT,274.07,T*19")
        assert isinstance(message, Hdt)
        assert message.talker is Talker.GYRO_NORTH_SEEKING

    def test_trimble_sub_type(self):
        message = parse(
            "$PTNL,GGK,172814.00,071296,3723.46587704,N,12202.26957864,W,3,06,1.7,EHT-6.777,M*4B"
        )
        assert isinstance(message, Ggk)
        assert message.code == "GGK"
        assert message.talker is Talker.PROPRIETARY
        assert message.is_proprietary is False

    def test_unknown_trimble_sub_type(self):
        message = parse("$PTNL,XYZ,1,2*72")
        assert isinstance(message, UnknownMessage)
        assert message.code == "PTNL"
        assert message.fields == ("XYZ", "1", "2")

    def test_proprietary_message(self):
        message = parse("$PGRMZ,1494,f,3*23")
        assert isinstance(message, Pgrmz)
        assert message.is_proprietary

    def test_rule_failure_propagates(self):
        with pytest.raises(InvalidFieldError):
            parse("$GPGGA,123519,4807.038,N*27")


class TestTalkerOf:
    @pytest.mark.parametrize(
        ("code", "talker"),
        [
            ("GPGGA", Talker.GPS),
            ("GLGSV", Talker.GLONASS),
            ("GNRMC", Talker.COMBINED),
            ("GAGSV", Talker.GALILEO),
            ("GBGSV", Talker.BEIDOU),
            ("BDGSV", Talker.BEIDOU),
            ("PGRME", Talker.PROPRIETARY),
            ("ZZGGA", Talker.UNKNOWN),
        ],
    )
    def test_talker(self, code, talker):
        assert talker_of(code) is talker
