"""Position fix sentences: GGA, GNS, RMC, GLL, RMA and Trimble GGK.

GGA (Global Positioning System Fix Data) is the primary fix sentence. It
carries coordinates, altitude, fix quality, and satellite/accuracy metrics.

GGA Sentence Format:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
           |      |        | |         | | |  |   |     | |    | ||
           |      |        | |         | | |  |   |     | |    | |+-- DGPS station id
           |      |        | |         | | |  |   |     | |    | +-- DGPS age (seconds)
           |      |        | |         | | |  |   |     | +----+-- Geoid separation (M=meters)
           |      |        | |         | | |  |   +-----+-- Altitude above MSL
           |      |        | |         | | |  +-- HDOP (horizontal dilution)
           |      |        | |         | | +-- Number of satellites
           |      |        | |         | +-- Fix quality (0-8)
           |      |        | +---------+-- Longitude + E/W
           |      +--------+-- Latitude + N/S
           +-- UTC time (HHMMSS.ss)

RMC (Recommended Minimum Specific GNSS Data) is the "low quality" fix source:
it has no altitude or fix quality, only an active/void flag, but it carries
date, speed and course.

RMC Sentence Format:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
           |      | |        | |         | |     |     |      |     |
           |      | |        | |         | |     |     |      +-----+-- Magnetic variation + E/W
           |      | |        | |         | |     |     +-- Date (DDMMYY)
           |      | |        | |         | |     +-- Course over ground (true)
           |      | |        | |         | +-- Speed over ground (knots)
           |      | +--------+-+---------+-- Latitude, Longitude
           |      +-- Status (A=active, V=void)
           +-- UTC time

Talker-specific sentences (GPGGA, GNGGA, GLGGA, ...) share one rule each and
differ only in the talker attached to the decoded message.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum, IntEnum

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
    require_field_count,
    require_int,
)
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import FixQuality, ModeIndicator, NmeaMessage

_FIX_QUALITIES = {quality.value: quality for quality in FixQuality}


class NavigationalStatus(Enum):
    """GNS navigational status (NMEA 4.1+)."""

    SAFE = "S"
    CAUTION = "C"
    UNSAFE = "U"
    NOT_VALID = "V"


_NAVIGATIONAL_STATUSES = {status.value: status for status in NavigationalStatus}


class GgkQuality(IntEnum):
    """Trimble GGK position quality, a superset of the GGA table."""

    INVALID = 0
    GPS_FIX = 1
    RTK_FLOAT = 2
    RTK_FIX = 3
    DGPS = 4
    SBAS = 5
    RTK_FLOAT_3D_NETWORK = 6
    RTK_FIXED_3D_NETWORK = 7
    RTK_FLOAT_2D_NETWORK = 8
    RTK_FIXED_2D_NETWORK = 9
    OMNISTAR_HP_XP = 10
    OMNISTAR_VBS = 11
    LOCATION_RTK = 12
    BEACON_DGPS = 13
    CENTERPOINT_RTX = 14
    XFILL = 15


_GGK_QUALITIES = {quality.value: quality for quality in GgkQuality}


class PositioningStatus(Enum):
    """Loran-C RMA data status."""

    AUTONOMOUS = "A"
    DIFFERENTIAL = "D"
    INVALID = "V"


@dataclass(frozen=True)
class Gga(NmeaMessage):
    """Parsed GGA (Global Positioning System Fix Data) sentence.

    Attributes:
        fix_time: UTC time of the fix, or None if the field was empty.
        latitude: Decimal degrees, positive North. NaN if not reported.
        longitude: Decimal degrees, positive East. NaN if not reported.
        quality: Fix quality indicator. Always present: a GGA without a
            quality cannot be interpreted at all.
        satellites_in_use: Number of satellites used in the solution.
        hdop: Horizontal dilution of precision.
        altitude: Antenna altitude above mean sea level.
        altitude_units: Unit of ``altitude`` (normally ``"M"``).
        geoid_separation: Height of the geoid above the WGS84 ellipsoid.
            ellipsoidal height = altitude + geoid_separation.
        geoid_separation_units: Unit of ``geoid_separation``.
        dgps_age: Seconds since the last differential correction, NaN if none.
        dgps_station_id: Differential reference station id.
    """

    fix_time: time | None
    latitude: float
    longitude: float
    quality: FixQuality
    satellites_in_use: int | None
    hdop: float
    altitude: float
    altitude_units: str | None
    geoid_separation: float
    geoid_separation_units: str | None
    dgps_age: float
    dgps_station_id: int | None


@dataclass(frozen=True)
class Gns(NmeaMessage):
    """Parsed GNS (GNSS Fix Data) sentence.

    ``modes`` holds one indicator per constellation in the order GPS,
    GLONASS, Galileo, BeiDou, QZSS, NavIC. Receivers send as many characters
    as they track constellations.
    """

    fix_time: time | None
    latitude: float
    longitude: float
    modes: tuple[ModeIndicator, ...]
    satellites_in_use: int | None
    hdop: float
    orthometric_height: float
    geoid_separation: float
    dgps_age: float
    dgps_station_id: str | None
    status: NavigationalStatus | None


@dataclass(frozen=True)
class Rmc(NmeaMessage):
    """Parsed RMC (Recommended Minimum Specific GNSS Data) sentence.

    Attributes:
        fix_time: UTC date and time of the fix. None when either the date or
            the time field is empty.
        active: True for status 'A' (valid), False for 'V' (navigation
            receiver warning).
        speed: Speed over ground in knots.
        course: Course over ground, degrees from true north.
        magnetic_variation: Degrees, negative when West.
        mode: FAA mode indicator, None on NMEA < 2.3 receivers.
    """

    fix_time: datetime | None
    active: bool
    latitude: float
    longitude: float
    speed: float
    course: float
    magnetic_variation: float
    mode: ModeIndicator | None


@dataclass(frozen=True)
class Gll(NmeaMessage):
    """Parsed GLL (Geographic Position, Latitude/Longitude) sentence."""

    latitude: float
    longitude: float
    fix_time: time | None
    data_active: bool
    mode: ModeIndicator | None


@dataclass(frozen=True)
class Ggk(NmeaMessage):
    """Parsed Trimble ``$PTNL,GGK`` time, position and position type sentence."""

    fix_time: datetime | None
    latitude: float
    longitude: float
    quality: GgkQuality
    satellites_in_use: int | None
    dop: float
    ellipsoidal_height: float
    height_in_meters: bool


@dataclass(frozen=True)
class Rma(NmeaMessage):
    """Parsed RMA (Recommended Minimum Specific Loran-C Data) sentence.

    Time differences are in microseconds. Magnetic variation is negative
    when East.
    """

    status: PositioningStatus
    latitude: float
    longitude: float
    time_difference_a: float
    time_difference_b: float
    speed: float
    course: float
    magnetic_variation: float
    mode: ModeIndicator | None


def decode_gga(code: str, talker: Talker, fields: Sequence[str]) -> Gga:
    """Decode a GGA sentence.

    Maps NMEA field indices to Gga attributes:
        fields[0]  -> fix_time (HHMMSS.ss format)
        fields[1]  -> latitude (DDMM.MMMM format)
        fields[2]  -> latitude direction (N/S)
        fields[3]  -> longitude (DDDMM.MMMM format)
        fields[4]  -> longitude direction (E/W)
        fields[5]  -> quality (0-8, required)
        fields[6]  -> satellites_in_use
        fields[7]  -> hdop
        fields[8]  -> altitude above MSL
        fields[10] -> geoid separation
        fields[12] -> DGPS age
        fields[13] -> DGPS station id

    Raises:
        InvalidFieldError: Fewer than 14 fields, or a missing/unknown quality.
    """
    require_field_count(code, fields, 14)
    quality = lookup_code(code, 5, require_int(code, fields, 5), _FIX_QUALITIES)

    return Gga(
        code=code,
        talker=talker,
        fix_time=parse_time_field(fields[0]),
        latitude=parse_latitude(fields[1], fields[2]),
        longitude=parse_longitude(fields[3], fields[4]),
        quality=quality,
        satellites_in_use=parse_int_field(fields[6]),
        hdop=parse_float_field(fields[7]),
        altitude=parse_float_field(fields[8]),
        altitude_units=parse_string_field(fields[9]),
        geoid_separation=parse_float_field(fields[10]),
        geoid_separation_units=parse_string_field(fields[11]),
        dgps_age=parse_float_field(fields[12]),
        dgps_station_id=parse_int_field(fields[13]),
    )


def decode_gns(code: str, talker: Talker, fields: Sequence[str]) -> Gns:
    require_field_count(code, fields, 12)

    status_field = field_at(fields, 12)
    status = None
    if status_field:
        status = lookup_code(code, 12, status_field, _NAVIGATIONAL_STATUSES)

    return Gns(
        code=code,
        talker=talker,
        fix_time=parse_time_field(fields[0]),
        latitude=parse_latitude(fields[1], fields[2]),
        longitude=parse_longitude(fields[3], fields[4]),
        modes=parse_mode_string(code, fields, 5),
        satellites_in_use=parse_int_field(fields[6]),
        hdop=parse_float_field(fields[7]),
        orthometric_height=parse_float_field(fields[8]),
        geoid_separation=parse_float_field(fields[9]),
        dgps_age=parse_float_field(fields[10]),
        dgps_station_id=parse_string_field(fields[11]),
        status=status,
    )


def _parse_ddmmyy(value: str) -> tuple[int | None, int | None, int | None]:
    if len(value) != 6:
        return None, None, None
    day = parse_int_field(value[0:2])
    month = parse_int_field(value[2:4])
    year = parse_int_field(value[4:6])
    return (year + 2000 if year is not None else None), month, day


def _signed_variation(value: str, direction: str, negative: str) -> float:
    variation = parse_float_field(value)
    if direction == negative:
        return -variation
    return variation


def decode_rmc(code: str, talker: Talker, fields: Sequence[str]) -> Rmc:
    """Decode an RMC sentence.

    The date field is DDMMYY; two-digit years are taken as 20YY.
    """
    require_field_count(code, fields, 11)
    year, month, day = _parse_ddmmyy(fields[8])

    return Rmc(
        code=code,
        talker=talker,
        fix_time=combine_date_time(year, month, day, fields[0]),
        active=fields[1] == "A",
        latitude=parse_latitude(fields[2], fields[3]),
        longitude=parse_longitude(fields[4], fields[5]),
        speed=parse_float_field(fields[6]),
        course=parse_float_field(fields[7]),
        magnetic_variation=_signed_variation(fields[9], fields[10], "W"),
        mode=parse_mode_field(code, fields, 11),
    )


def decode_gll(code: str, talker: Talker, fields: Sequence[str]) -> Gll:
    require_field_count(code, fields, 4)
    # NMEA < 2.0 receivers end the sentence after the coordinates
    status = field_at(fields, 5)

    return Gll(
        code=code,
        talker=talker,
        latitude=parse_latitude(fields[0], fields[1]),
        longitude=parse_longitude(fields[2], fields[3]),
        fix_time=parse_time_field(field_at(fields, 4)),
        data_active=len(fields) < 6 or status == "A",
        mode=parse_mode_field(code, fields, 6),
    )


def decode_ggk(code: str, talker: Talker, fields: Sequence[str]) -> Ggk:
    """Decode the fields of a ``$PTNL,GGK`` sentence (after the sub-type).

    The date field is MMDDYY. Years below 80 are taken as 20YY, others as
    19YY. The height field is written with an ``EHT`` prefix.
    """
    require_field_count(code, fields, 11)

    date = fields[1]
    month = day = year = None
    if len(date) == 6:
        month = parse_int_field(date[0:2])
        day = parse_int_field(date[2:4])
        year = parse_int_field(date[4:6])
        if year is not None:
            year += 2000 if year < 80 else 1900

    quality = GgkQuality.INVALID
    if fields[6]:
        quality = lookup_code(code, 6, require_int(code, fields, 6), _GGK_QUALITIES)

    return Ggk(
        code=code,
        talker=talker,
        fix_time=combine_date_time(year, month, day, fields[0]),
        latitude=parse_latitude(fields[2], fields[3]),
        longitude=parse_longitude(fields[4], fields[5]),
        quality=quality,
        satellites_in_use=parse_int_field(fields[7]),
        dop=parse_float_field(fields[8]),
        ellipsoidal_height=parse_float_field(fields[9].removeprefix("EHT")),
        height_in_meters=fields[10].startswith("M"),
    )


def decode_rma(code: str, talker: Talker, fields: Sequence[str]) -> Rma:
    require_field_count(code, fields, 12)

    if fields[0] == "A":
        status = PositioningStatus.AUTONOMOUS
    elif fields[0] == "D":
        status = PositioningStatus.DIFFERENTIAL
    else:
        status = PositioningStatus.INVALID

    return Rma(
        code=code,
        talker=talker,
        status=status,
        latitude=parse_latitude(fields[1], fields[2]),
        longitude=parse_longitude(fields[3], fields[4]),
        time_difference_a=parse_float_field(fields[5]),
        time_difference_b=parse_float_field(fields[6]),
        speed=parse_float_field(fields[7]),
        course=parse_float_field(fields[8]),
        magnetic_variation=_signed_variation(fields[9], fields[10], "E"),
        mode=parse_mode_field(code, fields, 11),
    )
