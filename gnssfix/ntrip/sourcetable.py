"""Source-table parsing.

A caster answers a request for ``/`` with its source table: one record per
line, fields separated by ';', terminated by a literal ``ENDSOURCETABLE``
line::

    CAS;rtk2go.com;2101;RTK2go;SNIP;0;USA;36.17;-115.14;;0;
    STR;station1;City;RTCM 3.1;1004(1),1005(5);2;GPS;Net1;USA;40.00;-105.00;0;0;sNTRIP;none;N;N;9600;
    ENDSOURCETABLE

Only ``CAS`` and ``STR`` records are decoded. Other tags (``NET``, and any
added by later protocol revisions) are ignored. Parsing is best effort: a
record that cannot be decoded is skipped and the rest of the table is kept.
"""

import logging
from collections.abc import Sequence

from gnssfix.errors import SourceTableError
from gnssfix.ntrip.types import Carrier, Caster, NtripSource, NtripStream

__all__ = ["parse_caster", "parse_source_entry", "parse_source_table", "parse_stream"]

logger = logging.getLogger(__name__)

_END_MARKER = "ENDSOURCETABLE"

_CASTER_TAG = "CAS"
_STREAM_TAG = "STR"

# Through the longitude field; trailing fields are optional in practice
_CASTER_MIN_FIELDS = 9
_STREAM_MIN_FIELDS = 12

_CARRIERS = {carrier.value: carrier for carrier in Carrier}


def _field(fields: Sequence[str], index: int) -> str:
    if index < len(fields):
        return fields[index]
    return ""


def _to_float(fields: Sequence[str], index: int) -> float:
    try:
        return float(fields[index])
    except ValueError:
        raise SourceTableError(f"Field {index} is not a number: {fields[index]!r}") from None


def _to_int(fields: Sequence[str], index: int) -> int:
    try:
        return int(fields[index])
    except ValueError:
        raise SourceTableError(f"Field {index} is not an integer: {fields[index]!r}") from None


def _to_optional_int(fields: Sequence[str], index: int) -> int | None:
    if not _field(fields, index):
        return None
    return _to_int(fields, index)


def _require_count(tag: str, fields: Sequence[str], minimum: int) -> None:
    if len(fields) < minimum:
        raise SourceTableError(
            f"{tag} record has {len(fields)} fields, expected at least {minimum}"
        )


def parse_caster(fields: Sequence[str]) -> Caster:
    """Decode the ';'-separated fields of a ``CAS`` record, tag included."""
    _require_count(_CASTER_TAG, fields, _CASTER_MIN_FIELDS)

    return Caster(
        address=fields[1],
        port=_to_int(fields, 2),
        identifier=fields[3],
        operator=fields[4],
        supports_nmea=fields[5] == "1",
        country_code=fields[6],
        latitude=_to_float(fields, 7),
        longitude=_to_float(fields, 8),
        fallback_address=_field(fields, 9) or None,
        fallback_port=_to_optional_int(fields, 10),
    )


def parse_stream(fields: Sequence[str]) -> NtripStream:
    """Decode the ';'-separated fields of a ``STR`` record, tag included."""
    _require_count(_STREAM_TAG, fields, _STREAM_MIN_FIELDS)

    carrier = Carrier.NONE
    if fields[5]:
        try:
            carrier = _CARRIERS[_to_int(fields, 5)]
        except KeyError:
            raise SourceTableError(f"Unknown carrier code: {fields[5]!r}") from None

    return NtripStream(
        mountpoint=fields[1],
        identifier=fields[2],
        format=fields[3],
        format_details=fields[4],
        carrier=carrier,
        navigation_system=fields[6],
        network=fields[7],
        country_code=fields[8],
        latitude=_to_float(fields, 9),
        longitude=_to_float(fields, 10),
        supports_nmea=fields[11] == "1",
        authentication=_field(fields, 15) or None,
        fee=_field(fields, 16) == "Y",
        bitrate=_to_optional_int(fields, 17),
    )


def parse_source_entry(line: str) -> NtripSource | None:
    """Decode one source-table line.

    Returns:
        A ``Caster`` or ``NtripStream``, or None for record kinds this
        client does not decode.

    Raises:
        SourceTableError: The record is too short or a numeric field is
            malformed.

    Example:
        >>> parse_source_entry("STR;station1;City;RTCM 3.1;1004(1),1005(5);2;GPS;Net1;USA;40.00;-105.00;0;0;sNTRIP;none;N;N;9600;")
        NtripStream(mountpoint='station1', ..., carrier=<Carrier.L1_L2: 2>, ...)
    """
    fields = line.split(";")
    tag = fields[0]
    if tag == _CASTER_TAG:
        return parse_caster(fields)
    if tag == _STREAM_TAG:
        return parse_stream(fields)
    return None


def parse_source_table(text: str) -> list[NtripSource]:
    """Decode a source-table body, stopping at ``ENDSOURCETABLE``.

    Lines are split on '\\n' with a trailing '\\r' removed. Blank lines,
    unknown record kinds and records that fail to decode are skipped.
    """
    sources: list[NtripSource] = []
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if not line:
            continue
        if line == _END_MARKER:
            break
        try:
            entry = parse_source_entry(line)
        except SourceTableError as e:
            logger.debug("Skipping source-table line %r: %s", line, e)
            continue
        if entry is not None:
            sources.append(entry)
    return sources
