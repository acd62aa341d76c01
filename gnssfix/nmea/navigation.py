"""Course, heading and route sentences: VTG, BOD, RMB, RTE, HDT, ROT, VLW.

VTG (Track Made Good and Ground Speed) provides velocity information from GNSS.

VTG Sentence Format:
    $GPVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*25
           |     | |     | |     | |     | |
           |     | |     | |     | |     | +-- Mode indicator (A/D/E/N)
           |     | |     | |     | +-----+-- Speed in km/h
           |     | |     | +-----+-- Speed in knots
           |     | +-----+-- Track (magnetic north, degrees)
           +-----+-- Track (true north, degrees)

Note: When stationary, the track angle may be empty (no heading when not moving).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from gnssfix.nmea.fields import (
    field_at,
    parse_float_field,
    parse_latitude,
    parse_longitude,
    parse_mode_field,
    parse_string_field,
    require_field_count,
    require_int,
)
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import ModeIndicator, NmeaMessage

# Conversion factor: km/h to m/s
# 1 km/h = 1000m / 3600s = 1/3.6 m/s
_KILOMETERS_PER_HOUR_TO_METERS_PER_SECOND = 3.6


class WaypointListType(Enum):
    COMPLETE = "c"
    REMAINING = "w"


@dataclass(frozen=True)
class Vtg(NmeaMessage):
    """Parsed VTG (Track Made Good and Ground Speed) sentence.

    Attributes:
        course_true: Track relative to true north in degrees.
            NaN when stationary (no heading without movement).
        course_magnetic: Track relative to magnetic north in degrees.
        speed_knots: Ground speed in knots. 1 knot = 1.852 km/h.
        speed_kilometers_per_hour: Ground speed in km/h.
        mode: FAA mode indicator, None on NMEA < 2.3 receivers.

    Example:
        >>> vtg = parse("$GPVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*25")
        >>> vtg.speed_meters_per_second
        2.833...
    """

    course_true: float
    course_magnetic: float
    speed_knots: float
    speed_kilometers_per_hour: float
    mode: ModeIndicator | None

    @property
    def speed_meters_per_second(self) -> float:
        """Ground speed in m/s, derived from the km/h field."""
        return self.speed_kilometers_per_hour / _KILOMETERS_PER_HOUR_TO_METERS_PER_SECOND


@dataclass(frozen=True)
class Bod(NmeaMessage):
    """Parsed BOD (Bearing, Origin to Destination) sentence."""

    true_bearing: float
    magnetic_bearing: float
    destination_id: str | None
    origin_id: str | None


@dataclass(frozen=True)
class Rmb(NmeaMessage):
    """Parsed RMB (Recommended Minimum Navigation Information) sentence.

    Attributes:
        data_valid: False when the receiver flags a navigation warning.
        cross_track_error: Nautical miles, negative when the correction is
            to steer left.
        range_to_destination: Nautical miles.
        velocity: Closing velocity towards the destination, knots.
        arrived: True once the arrival circle has been entered.
    """

    data_valid: bool
    cross_track_error: float
    origin_waypoint_id: str | None
    destination_waypoint_id: str | None
    destination_latitude: float
    destination_longitude: float
    range_to_destination: float
    true_bearing: float
    velocity: float
    arrived: bool


@dataclass(frozen=True)
class Rte(NmeaMessage):
    """Parsed RTE (Routes) page. Long routes span several pages."""

    total_messages: int
    message_number: int
    list_type: WaypointListType
    route_id: str
    waypoints: tuple[str, ...]


@dataclass(frozen=True)
class Hdt(NmeaMessage):
    """Parsed HDT (Heading, True) sentence."""

    heading: float
    relative_to_true_north: bool


@dataclass(frozen=True)
class Rot(NmeaMessage):
    """Parsed ROT (Rate of Turn) sentence. Degrees per minute, negative to port."""

    rate_of_turn: float
    valid: bool


@dataclass(frozen=True)
class Vlw(NmeaMessage):
    """Parsed VLW (Distance Traveled through Water) sentence, nautical miles.

    Ground distances were added in NMEA 4.0 and are NaN on older devices.
    """

    water_distance_cumulative: float
    water_distance_since_reset: float
    ground_distance_cumulative: float
    ground_distance_since_reset: float


def decode_vtg(code: str, talker: Talker, fields: Sequence[str]) -> Vtg:
    """Decode a VTG sentence.

    Maps NMEA field indices to Vtg attributes:
        fields[0] -> course_true
        fields[2] -> course_magnetic
        fields[4] -> speed_knots
        fields[6] -> speed_kilometers_per_hour
        fields[8] -> mode (FAA mode indicator, if present)
    """
    require_field_count(code, fields, 7)

    return Vtg(
        code=code,
        talker=talker,
        course_true=parse_float_field(fields[0]),
        course_magnetic=parse_float_field(fields[2]),
        speed_knots=parse_float_field(fields[4]),
        speed_kilometers_per_hour=parse_float_field(fields[6]),
        mode=parse_mode_field(code, fields, 8),
    )


def decode_bod(code: str, talker: Talker, fields: Sequence[str]) -> Bod:
    require_field_count(code, fields, 3)

    return Bod(
        code=code,
        talker=talker,
        true_bearing=parse_float_field(fields[0]),
        magnetic_bearing=parse_float_field(fields[2]),
        destination_id=parse_string_field(field_at(fields, 4)),
        origin_id=parse_string_field(field_at(fields, 5)),
    )


def decode_rmb(code: str, talker: Talker, fields: Sequence[str]) -> Rmb:
    require_field_count(code, fields, 13)

    cross_track_error = parse_float_field(fields[1])
    if fields[2] == "L":
        cross_track_error = -cross_track_error

    return Rmb(
        code=code,
        talker=talker,
        data_valid=fields[0] == "A",
        cross_track_error=cross_track_error,
        origin_waypoint_id=parse_string_field(fields[3]),
        destination_waypoint_id=parse_string_field(fields[4]),
        destination_latitude=parse_latitude(fields[5], fields[6]),
        destination_longitude=parse_longitude(fields[7], fields[8]),
        range_to_destination=parse_float_field(fields[9]),
        true_bearing=parse_float_field(fields[10]),
        velocity=parse_float_field(fields[11]),
        arrived=fields[12] == "A",
    )


def decode_rte(code: str, talker: Talker, fields: Sequence[str]) -> Rte:
    require_field_count(code, fields, 4)
    list_type = WaypointListType.COMPLETE if fields[2] == "c" else WaypointListType.REMAINING

    return Rte(
        code=code,
        talker=talker,
        total_messages=require_int(code, fields, 0),
        message_number=require_int(code, fields, 1),
        list_type=list_type,
        route_id=fields[3],
        waypoints=tuple(waypoint for waypoint in fields[4:] if waypoint),
    )


def decode_hdt(code: str, talker: Talker, fields: Sequence[str]) -> Hdt:
    require_field_count(code, fields, 2)

    return Hdt(
        code=code,
        talker=talker,
        heading=parse_float_field(fields[0]),
        relative_to_true_north=fields[1] == "T",
    )


def decode_rot(code: str, talker: Talker, fields: Sequence[str]) -> Rot:
    require_field_count(code, fields, 2)

    return Rot(
        code=code,
        talker=talker,
        rate_of_turn=parse_float_field(fields[0]),
        valid=fields[1] == "A",
    )


def decode_vlw(code: str, talker: Talker, fields: Sequence[str]) -> Vlw:
    require_field_count(code, fields, 4)

    return Vlw(
        code=code,
        talker=talker,
        water_distance_cumulative=parse_float_field(fields[0]),
        water_distance_since_reset=parse_float_field(fields[2]),
        ground_distance_cumulative=parse_float_field(field_at(fields, 4)),
        ground_distance_since_reset=parse_float_field(field_at(fields, 6)),
    )
