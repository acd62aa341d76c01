"""Error statistics sentences: GST, GBS and GRS.

GST (Pseudorange Noise Statistics) is the receiver's own 1-sigma error
estimate for the current fix:

    $GPGST,172814.0,0.006,0.023,0.020,273.6,0.023,0.020,0.031*6A
           |        |     |     |     |     |     |     |
           |        |     |     |     |     |     |     +-- Sigma height (m)
           |        |     |     |     |     |     +-- Sigma longitude (m)
           |        |     |     |     |     +-- Sigma latitude (m)
           |        |     |     |     +-- Error ellipse orientation (deg)
           |        |     +-----+-- Error ellipse semi-major/semi-minor (m)
           |        +-- RMS of pseudorange residuals
           +-- UTC time
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import time
from enum import Enum

from gnssfix.nmea.fields import (
    parse_float_field,
    parse_int_field,
    parse_time_field,
    require_field_count,
)
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import NmeaMessage


class ResidualMode(Enum):
    """Whether GRS residuals were used in the fix or recomputed after it."""

    USED_FOR_POSITION = "0"
    RECOMPUTED = "1"


@dataclass(frozen=True)
class Gst(NmeaMessage):
    """Parsed GST (GNSS Pseudorange Error Statistics) sentence.

    All errors are 1-sigma values in meters, NaN when not reported.
    """

    fix_time: time | None
    rms: float
    semi_major_error: float
    semi_minor_error: float
    error_orientation: float
    sigma_latitude_error: float
    sigma_longitude_error: float
    sigma_height_error: float


@dataclass(frozen=True)
class Gbs(NmeaMessage):
    """Parsed GBS (GNSS Satellite Fault Detection) sentence."""

    fix_time: time | None
    latitude_error: float
    longitude_error: float
    altitude_error: float
    failed_satellite_id: int | None
    missed_detection_probability: float
    bias_estimate: float
    bias_standard_deviation: float


@dataclass(frozen=True)
class Grs(NmeaMessage):
    """Parsed GRS (GNSS Range Residuals) sentence.

    ``residuals`` is in the order of the satellites listed by the matching
    GSA sentence. Empty slots are NaN.
    """

    fix_time: time | None
    mode: ResidualMode
    residuals: tuple[float, ...]


def decode_gst(code: str, talker: Talker, fields: Sequence[str]) -> Gst:
    require_field_count(code, fields, 8)

    return Gst(
        code=code,
        talker=talker,
        fix_time=parse_time_field(fields[0]),
        rms=parse_float_field(fields[1]),
        semi_major_error=parse_float_field(fields[2]),
        semi_minor_error=parse_float_field(fields[3]),
        error_orientation=parse_float_field(fields[4]),
        sigma_latitude_error=parse_float_field(fields[5]),
        sigma_longitude_error=parse_float_field(fields[6]),
        sigma_height_error=parse_float_field(fields[7]),
    )


def decode_gbs(code: str, talker: Talker, fields: Sequence[str]) -> Gbs:
    require_field_count(code, fields, 8)

    return Gbs(
        code=code,
        talker=talker,
        fix_time=parse_time_field(fields[0]),
        latitude_error=parse_float_field(fields[1]),
        longitude_error=parse_float_field(fields[2]),
        altitude_error=parse_float_field(fields[3]),
        failed_satellite_id=parse_int_field(fields[4]),
        missed_detection_probability=parse_float_field(fields[5]),
        bias_estimate=parse_float_field(fields[6]),
        bias_standard_deviation=parse_float_field(fields[7]),
    )


def decode_grs(code: str, talker: Talker, fields: Sequence[str]) -> Grs:
    require_field_count(code, fields, 8)
    mode = ResidualMode.RECOMPUTED if fields[1] == "1" else ResidualMode.USED_FOR_POSITION

    # 12 residual slots; NMEA 4.1 appends system and signal ids after them
    return Grs(
        code=code,
        talker=talker,
        fix_time=parse_time_field(fields[0]),
        mode=mode,
        residuals=tuple(parse_float_field(value) for value in fields[2:14]),
    )
