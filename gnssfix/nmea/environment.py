"""Marine environment sentences: DPT, MDA, MWV, XDR and CUR.

These come from instruments sharing the NMEA bus with the GNSS receiver
(sounders, weather stations, current meters). They are decoded so a mixed
bus can be logged in full, but they do not feed the fix.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from gnssfix.nmea.fields import (
    field_at,
    lookup_code,
    parse_float_field,
    parse_int_field,
    require_field_count,
    require_float,
)
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import NmeaMessage


class WindReference(Enum):
    RELATIVE = "R"
    TRUE = "T"


_WIND_REFERENCES = {reference.value: reference for reference in WindReference}


class WindSpeedUnit(Enum):
    KILOMETERS_PER_HOUR = "K"
    METERS_PER_SECOND = "M"
    KNOTS = "N"


_WIND_SPEED_UNITS = {unit.value: unit for unit in WindSpeedUnit}


class SpeedReference(Enum):
    BOTTOM_TRACK = "B"
    WATER_TRACK = "W"
    POSITIONING_SYSTEM = "P"


_SPEED_REFERENCES = {reference.value: reference for reference in SpeedReference}


@dataclass(frozen=True)
class Dpt(NmeaMessage):
    """Parsed DPT (Depth) sentence.

    Attributes:
        depth: Water depth relative to the transducer, meters. Required.
        offset: Transducer offset; positive is distance to the waterline,
            negative to the keel.
        max_range: Maximum range scale in use, NaN on NMEA < 3.0 devices.
    """

    depth: float
    offset: float
    max_range: float


@dataclass(frozen=True)
class Mda(NmeaMessage):
    """Parsed MDA (Meteorological Composite) sentence."""

    pressure_inches: float
    pressure_bars: float
    air_temperature: float
    water_temperature: float
    relative_humidity: float
    absolute_humidity: float
    dew_point: float
    wind_direction_true: float
    wind_direction_magnetic: float
    wind_speed_knots: float
    wind_speed_meters_per_second: float


@dataclass(frozen=True)
class Mwv(NmeaMessage):
    """Parsed MWV (Wind Speed and Angle) sentence."""

    wind_angle: float
    reference: WindReference
    wind_speed: float
    wind_speed_unit: WindSpeedUnit
    valid: bool


@dataclass(frozen=True)
class TransducerMeasurement:
    transducer_type: str
    value: float
    units: str
    name: str


@dataclass(frozen=True)
class Xdr(NmeaMessage):
    """Parsed XDR (Transducer Measurement) sentence.

    One sentence may carry several (type, value, units, name) quadruples.
    """

    measurements: tuple[TransducerMeasurement, ...]


@dataclass(frozen=True)
class Cur(NmeaMessage):
    """Parsed CUR (Water Current Layer) sentence.

    Attributes:
        direction_true: True when ``direction`` is referenced to true north,
            False when relative.
        heading_true: True when ``heading`` is referenced to true north,
            False when magnetic.
    """

    valid: bool
    data_set: int | None
    layer: int | None
    depth: float
    direction: float
    direction_true: bool
    speed: float
    reference_layer_depth: float
    heading: float
    heading_true: bool
    speed_reference: SpeedReference | None


def decode_dpt(code: str, talker: Talker, fields: Sequence[str]) -> Dpt:
    require_field_count(code, fields, 2)

    return Dpt(
        code=code,
        talker=talker,
        depth=require_float(code, fields, 0),
        offset=parse_float_field(fields[1]),
        max_range=parse_float_field(field_at(fields, 2)),
    )


def decode_mda(code: str, talker: Talker, fields: Sequence[str]) -> Mda:
    """Decode an MDA sentence.

    Values are read from fixed positions; the unit letters that follow each
    value are fixed by the sentence definition (I, B, C, C, -, -, C, T, M, N, M).
    """
    require_field_count(code, fields, 20)

    return Mda(
        code=code,
        talker=talker,
        pressure_inches=parse_float_field(fields[0]),
        pressure_bars=parse_float_field(fields[2]),
        air_temperature=parse_float_field(fields[4]),
        water_temperature=parse_float_field(fields[6]),
        relative_humidity=parse_float_field(fields[8]),
        absolute_humidity=parse_float_field(fields[9]),
        dew_point=parse_float_field(fields[10]),
        wind_direction_true=parse_float_field(fields[12]),
        wind_direction_magnetic=parse_float_field(fields[14]),
        wind_speed_knots=parse_float_field(fields[16]),
        wind_speed_meters_per_second=parse_float_field(fields[18]),
    )


def decode_mwv(code: str, talker: Talker, fields: Sequence[str]) -> Mwv:
    require_field_count(code, fields, 5)

    return Mwv(
        code=code,
        talker=talker,
        wind_angle=parse_float_field(fields[0]),
        reference=lookup_code(code, 1, fields[1], _WIND_REFERENCES),
        wind_speed=parse_float_field(fields[2]),
        wind_speed_unit=lookup_code(code, 3, fields[3], _WIND_SPEED_UNITS),
        valid=fields[4] == "A",
    )


def decode_xdr(code: str, talker: Talker, fields: Sequence[str]) -> Xdr:
    require_field_count(code, fields, 4)

    measurements = tuple(
        TransducerMeasurement(
            transducer_type=fields[index],
            value=parse_float_field(fields[index + 1]),
            units=fields[index + 2],
            name=fields[index + 3],
        )
        for index in range(0, len(fields) - 3, 4)
    )
    return Xdr(code=code, talker=talker, measurements=measurements)


def decode_cur(code: str, talker: Talker, fields: Sequence[str]) -> Cur:
    require_field_count(code, fields, 11)

    speed_reference = None
    if fields[10]:
        speed_reference = lookup_code(code, 10, fields[10], _SPEED_REFERENCES)

    return Cur(
        code=code,
        talker=talker,
        valid=fields[0] == "A",
        data_set=parse_int_field(fields[1]),
        layer=parse_int_field(fields[2]),
        depth=parse_float_field(fields[3]),
        direction=parse_float_field(fields[4]),
        direction_true=fields[5] == "T",
        speed=parse_float_field(fields[6]),
        reference_layer_depth=parse_float_field(fields[7]),
        heading=parse_float_field(fields[8]),
        heading_true=fields[9] == "T",
        speed_reference=speed_reference,
    )
