"""Proprietary sentences: Garmin PGRME/PGRMZ and Trimble laser rangefinder PTNLA/PTNLB.

Proprietary codes start with 'P' followed by a three-letter manufacturer
mnemonic (GRM = Garmin, TNL = Trimble). They are registered under their
full code and carry the PROPRIETARY talker.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from gnssfix.nmea.fields import (
    lookup_code,
    parse_float_field,
    parse_int_field,
    parse_string_field,
    require_char,
    require_field_count,
    require_float,
)
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import NmeaMessage

_FEET_TO_METERS = 0.3048


class FixDimension(IntEnum):
    NO_FIX = 1
    FIX_2D = 2
    FIX_3D = 3


_FIX_DIMENSIONS = {dimension.value: dimension for dimension in FixDimension}


@dataclass(frozen=True)
class Pgrme(NmeaMessage):
    """Parsed Garmin PGRME (Estimated Error Information) sentence.

    Attributes:
        horizontal_error: Estimated horizontal position error (HPE).
        vertical_error: Estimated vertical position error (VPE).
        spherical_error: Overall spherical equivalent position error.
        *_units: Unit letter of the preceding value, normally ``"M"``.
    """

    horizontal_error: float
    horizontal_error_units: str | None
    vertical_error: float
    vertical_error_units: str | None
    spherical_error: float
    spherical_error_units: str | None


@dataclass(frozen=True)
class Pgrmz(NmeaMessage):
    """Parsed Garmin PGRMZ (Altitude) sentence."""

    altitude: float
    altitude_in_feet: bool
    fix_dimension: FixDimension | None

    @property
    def altitude_meters(self) -> float:
        if self.altitude_in_feet:
            return self.altitude * _FEET_TO_METERS
        return self.altitude


@dataclass(frozen=True)
class Ptnla(NmeaMessage):
    """Parsed Trimble PTNLA laser range measurement.

    Every numeric field is required: a partial laser shot is meaningless.
    Unit fields hold the first character of the unit code.
    """

    horizontal_vector: str
    horizontal_distance: float
    horizontal_distance_units: str
    horizontal_angle: float
    horizontal_angle_units: str
    vertical_angle: float
    vertical_angle_units: str
    slope_distance: float
    slope_distance_units: str


@dataclass(frozen=True)
class Ptnlb(NmeaMessage):
    """Parsed Trimble PTNLB tree measurement."""

    tree_height: str
    measured_tree_height: float
    measured_tree_height_units: str
    tree_diameter: str
    measured_tree_diameter: float
    measured_tree_diameter_units: str


def decode_pgrme(code: str, talker: Talker, fields: Sequence[str]) -> Pgrme:
    require_field_count(code, fields, 6)

    return Pgrme(
        code=code,
        talker=talker,
        horizontal_error=parse_float_field(fields[0]),
        horizontal_error_units=parse_string_field(fields[1]),
        vertical_error=parse_float_field(fields[2]),
        vertical_error_units=parse_string_field(fields[3]),
        spherical_error=parse_float_field(fields[4]),
        spherical_error_units=parse_string_field(fields[5]),
    )


def decode_pgrmz(code: str, talker: Talker, fields: Sequence[str]) -> Pgrmz:
    require_field_count(code, fields, 3)

    dimension = parse_int_field(fields[2])
    fix_dimension = None
    if dimension is not None:
        fix_dimension = lookup_code(code, 2, dimension, _FIX_DIMENSIONS)

    return Pgrmz(
        code=code,
        talker=talker,
        altitude=parse_float_field(fields[0]),
        altitude_in_feet=fields[1] == "f",
        fix_dimension=fix_dimension,
    )


def decode_ptnla(code: str, talker: Talker, fields: Sequence[str]) -> Ptnla:
    require_field_count(code, fields, 9)

    return Ptnla(
        code=code,
        talker=talker,
        horizontal_vector=fields[0],
        horizontal_distance=require_float(code, fields, 1),
        horizontal_distance_units=require_char(code, fields, 2),
        horizontal_angle=require_float(code, fields, 3),
        horizontal_angle_units=require_char(code, fields, 4),
        vertical_angle=require_float(code, fields, 5),
        vertical_angle_units=require_char(code, fields, 6),
        slope_distance=require_float(code, fields, 7),
        slope_distance_units=require_char(code, fields, 8),
    )


def decode_ptnlb(code: str, talker: Talker, fields: Sequence[str]) -> Ptnlb:
    require_field_count(code, fields, 6)

    return Ptnlb(
        code=code,
        talker=talker,
        tree_height=fields[0],
        measured_tree_height=require_float(code, fields, 1),
        measured_tree_height_units=require_char(code, fields, 2),
        tree_diameter=fields[3],
        measured_tree_diameter=require_float(code, fields, 4),
        measured_tree_diameter_units=require_char(code, fields, 5),
    )
