"""Datum and time reference sentences: DTM and ZDA."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from gnssfix.nmea.fields import (
    combine_date_time,
    field_at,
    parse_float_field,
    parse_int_field,
    parse_string_field,
    require_field_count,
)
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import NmeaMessage


@dataclass(frozen=True)
class Dtm(NmeaMessage):
    """Parsed DTM (Datum Reference) sentence.

    Attributes:
        local_datum: Datum of the reported positions, e.g. ``"W84"`` (WGS84),
            ``"W72"``, ``"S85"``, ``"P90"``, or ``"999"`` (user defined).
        local_datum_subdivision: Optional one-character subdivision code.
        latitude_offset: Offset from the reference datum, in minutes.
        longitude_offset: Offset from the reference datum, in minutes.
        altitude_offset: Offset from the reference datum, in meters.
        reference_datum: Datum the offsets are relative to.
    """

    local_datum: str
    local_datum_subdivision: str | None
    latitude_offset: float
    longitude_offset: float
    altitude_offset: float
    reference_datum: str


@dataclass(frozen=True)
class Zda(NmeaMessage):
    """Parsed ZDA (Time and Date) sentence.

    Attributes:
        fix_time: UTC date and time, None if any part was empty.
        local_zone: Offset of local time from UTC, None if not reported.
    """

    fix_time: datetime | None
    local_zone: timedelta | None


def _signed_offset(value: str, hemisphere: str, negative: str) -> float:
    offset = parse_float_field(value)
    if hemisphere == negative:
        return -offset
    return offset


def decode_dtm(code: str, talker: Talker, fields: Sequence[str]) -> Dtm:
    """Decode a DTM sentence.

    The standard layout has eight fields, with an N/S and an E/W hemisphere
    after each offset; offsets to the south or west are negative. Some
    receivers omit the hemispheres and send six fields.
    """
    require_field_count(code, fields, 6)

    if len(fields) >= 8:
        latitude_offset = _signed_offset(fields[2], fields[3], "S")
        longitude_offset = _signed_offset(fields[4], fields[5], "W")
        altitude_offset = parse_float_field(fields[6])
        reference_datum = fields[7]
    else:
        latitude_offset = parse_float_field(fields[2])
        longitude_offset = parse_float_field(fields[3])
        altitude_offset = parse_float_field(fields[4])
        reference_datum = fields[5]

    return Dtm(
        code=code,
        talker=talker,
        local_datum=fields[0],
        local_datum_subdivision=parse_string_field(fields[1][:1]),
        latitude_offset=latitude_offset,
        longitude_offset=longitude_offset,
        altitude_offset=altitude_offset,
        reference_datum=reference_datum,
    )


def _parse_local_zone(hours_field: str, minutes_field: str) -> timedelta | None:
    hours = parse_int_field(hours_field)
    if hours is None:
        return None
    minutes = parse_int_field(minutes_field) or 0
    # Minutes carry the sign of the hours: -05,30 is five and a half hours west
    if hours_field.startswith("-"):
        minutes = -abs(minutes)
    return timedelta(hours=hours, minutes=minutes)


def decode_zda(code: str, talker: Talker, fields: Sequence[str]) -> Zda:
    require_field_count(code, fields, 4)

    return Zda(
        code=code,
        talker=talker,
        fix_time=combine_date_time(
            parse_int_field(fields[3]),
            parse_int_field(fields[2]),
            parse_int_field(fields[1]),
            fields[0],
        ),
        local_zone=_parse_local_zone(field_at(fields, 4), field_at(fields, 5)),
    )
