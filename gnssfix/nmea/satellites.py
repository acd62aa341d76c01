"""Satellite status sentences: GSA and GSV.

GSA (GNSS DOP and Active Satellites) lists the satellites used in the
solution and the dilution-of-precision values:

    $GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39
           | | |                      |   |   |
           | | |                      |   |   +-- VDOP
           | | |                      |   +-- HDOP
           | | |                      +-- PDOP
           | | +-- PRNs of satellites used (12 slots)
           | +-- Fix type (1=none, 2=2D, 3=3D)
           +-- Selection mode (A=auto, M=manual)

GSV (Satellites in View) is a paginated report. Each page carries up to four
satellite blocks (PRN, elevation, azimuth, SNR):

    $GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75
           | | |  |  |  |   |
           | | |  +--+--+---+-- Satellite block (repeats)
           | | +-- Satellites in view (total over all pages)
           | +-- Page number
           +-- Total pages
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum

from gnssfix.nmea.fields import (
    field_at,
    lookup_code,
    parse_float_field,
    parse_int_field,
    require_field_count,
    require_int,
)
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import NmeaMessage


class SelectionMode(Enum):
    AUTO = "A"
    MANUAL = "M"


_SELECTION_MODES = {mode.value: mode for mode in SelectionMode}


class FixType(IntEnum):
    NOT_AVAILABLE = 1
    FIX_2D = 2
    FIX_3D = 3


_FIX_TYPES = {fix_type.value: fix_type for fix_type in FixType}


class SatelliteSystem(Enum):
    """Constellation inferred from the NMEA PRN numbering ranges."""

    GPS = "GPS"
    WAAS = "WAAS"
    GLONASS = "GLONASS"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Gsa(NmeaMessage):
    """Parsed GSA (GNSS DOP and Active Satellites) sentence.

    Attributes:
        mode: Automatic or manual 2D/3D selection.
        fix_type: Required. A GSA without a fix type is rejected.
        satellite_ids: PRNs of the satellites used, empty slots skipped.
        pdop: Position dilution of precision.
        hdop: Horizontal dilution of precision.
        vdop: Vertical dilution of precision.
        system_id: GNSS system id (NMEA 4.1+), None on older receivers.
    """

    mode: SelectionMode
    fix_type: FixType
    satellite_ids: tuple[int, ...]
    pdop: float
    hdop: float
    vdop: float
    system_id: int | None


@dataclass(frozen=True)
class SatelliteVehicle:
    """One satellite block of a GSV page.

    Attributes:
        prn: Satellite PRN number.
        elevation: Degrees above the horizon (0-90).
        azimuth: Degrees from true north (0-359).
        snr: Signal-to-noise ratio in dB-Hz, None when not tracking.
    """

    prn: int
    elevation: float
    azimuth: float
    snr: int | None

    @property
    def system(self) -> SatelliteSystem:
        if 1 <= self.prn <= 32:
            return SatelliteSystem.GPS
        if 33 <= self.prn <= 64:
            return SatelliteSystem.WAAS
        if 65 <= self.prn <= 96:
            return SatelliteSystem.GLONASS
        return SatelliteSystem.UNKNOWN


@dataclass(frozen=True)
class Gsv(NmeaMessage):
    """Parsed GSV (Satellites in View) page."""

    total_messages: int
    message_number: int
    satellites_in_view: int
    satellites: tuple[SatelliteVehicle, ...]


def decode_gsa(code: str, talker: Talker, fields: Sequence[str]) -> Gsa:
    require_field_count(code, fields, 17)

    satellite_ids = tuple(
        prn
        for prn in (parse_int_field(value) for value in fields[2:14])
        if prn is not None
    )

    return Gsa(
        code=code,
        talker=talker,
        mode=lookup_code(code, 0, fields[0], _SELECTION_MODES),
        fix_type=lookup_code(code, 1, require_int(code, fields, 1), _FIX_TYPES),
        satellite_ids=satellite_ids,
        pdop=parse_float_field(fields[14]),
        hdop=parse_float_field(fields[15]),
        vdop=parse_float_field(fields[16]),
        system_id=parse_int_field(field_at(fields, 17)),
    )


def _parse_satellites(code: str, fields: Sequence[str]) -> tuple[SatelliteVehicle, ...]:
    """Parse the four-field satellite blocks that follow the page header.

    Blocks start at index 3. A block with an empty PRN is a padding slot on
    the last page and is skipped. A trailing signal id (NMEA 4.1+) does not
    form a block of its own.
    """
    satellites = []
    for index in range(3, len(fields) - 3, 4):
        if not fields[index]:
            continue
        satellites.append(
            SatelliteVehicle(
                prn=require_int(code, fields, index),
                elevation=parse_float_field(fields[index + 1]),
                azimuth=parse_float_field(fields[index + 2]),
                snr=parse_int_field(fields[index + 3]),
            )
        )
    return tuple(satellites)


def decode_gsv(code: str, talker: Talker, fields: Sequence[str]) -> Gsv:
    require_field_count(code, fields, 3)

    return Gsv(
        code=code,
        talker=talker,
        total_messages=require_int(code, fields, 0),
        message_number=require_int(code, fields, 1),
        satellites_in_view=require_int(code, fields, 2),
        satellites=_parse_satellites(code, fields),
    )
