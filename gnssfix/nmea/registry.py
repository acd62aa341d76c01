"""Sentence-code to decode-rule registry.

Rules are looked up by exact code first (proprietary sentences such as
``PGRME``), then by the talker-agnostic key ``--XXX`` so that ``GPGGA``,
``GNGGA`` and ``GLGGA`` all share the GGA rule and differ only in talker.

Trimble sends most of its proprietary data as ``$PTNL,<sub-type>,...``. Those
are dispatched on the first field; the decoded message carries the sub-type
as its code and the rule sees the fields after it.

Codes without a rule decode to ``UnknownMessage``, so every framed sentence
yields a message.
"""

from collections.abc import Callable, Sequence
from types import MappingProxyType

from gnssfix.nmea.accuracy import decode_gbs, decode_grs, decode_gst
from gnssfix.nmea.checksum import frame
from gnssfix.nmea.environment import (
    decode_cur,
    decode_dpt,
    decode_mda,
    decode_mwv,
    decode_xdr,
)
from gnssfix.nmea.navigation import (
    decode_bod,
    decode_hdt,
    decode_rmb,
    decode_rot,
    decode_rte,
    decode_vlw,
    decode_vtg,
)
from gnssfix.nmea.position import (
    decode_gga,
    decode_ggk,
    decode_gll,
    decode_gns,
    decode_rma,
    decode_rmc,
)
from gnssfix.nmea.reference import decode_dtm, decode_zda
from gnssfix.nmea.satellites import decode_gsa, decode_gsv
from gnssfix.nmea.talker import Talker, talker_of
from gnssfix.nmea.types import NmeaMessage, RawSentence, UnknownMessage
from gnssfix.nmea.vendor import decode_pgrme, decode_pgrmz, decode_ptnla, decode_ptnlb

DecodeRule = Callable[[str, Talker, Sequence[str]], NmeaMessage]

_TRIMBLE_CODE = "PTNL"

RULES: MappingProxyType[str, DecodeRule] = MappingProxyType(
    {
        "--GGA": decode_gga,
        "--GNS": decode_gns,
        "--RMC": decode_rmc,
        "--GLL": decode_gll,
        "--RMA": decode_rma,
        "--GSA": decode_gsa,
        "--GSV": decode_gsv,
        "--GST": decode_gst,
        "--GBS": decode_gbs,
        "--GRS": decode_grs,
        "--DTM": decode_dtm,
        "--ZDA": decode_zda,
        "--VTG": decode_vtg,
        "--BOD": decode_bod,
        "--RMB": decode_rmb,
        "--RTE": decode_rte,
        "--HDT": decode_hdt,
        "--ROT": decode_rot,
        "--VLW": decode_vlw,
        "--DPT": decode_dpt,
        "--MDA": decode_mda,
        "--MWV": decode_mwv,
        "--XDR": decode_xdr,
        "--CUR": decode_cur,
        "PGRME": decode_pgrme,
        "PGRMZ": decode_pgrmz,
        "PTNLA": decode_ptnla,
        "PTNLB": decode_ptnlb,
    }
)

TRIMBLE_RULES: MappingProxyType[str, DecodeRule] = MappingProxyType(
    {
        "GGK": decode_ggk,
    }
)


def find_rule(code: str) -> DecodeRule | None:
    """Return the rule for a sentence code, or None if none is registered."""
    rule = RULES.get(code)
    if rule is None and len(code) == 5 and not code.startswith("P"):
        rule = RULES.get("--" + code[2:])
    return rule


def decode(raw: RawSentence) -> NmeaMessage:
    """Decode a framed sentence into its message variant.

    Args:
        raw: Output of ``frame``.

    Returns:
        The decoded variant, or ``UnknownMessage`` when no rule is
        registered for the code.

    Raises:
        InvalidFieldError: A rule matched but the fields were invalid.

    Example:
        >>> decode(RawSentence("GPHDT", ("274.07", "T"))).heading
        274.07
    """
    code, fields = raw.code, raw.fields

    if code == _TRIMBLE_CODE and fields:
        rule = TRIMBLE_RULES.get(fields[0])
        if rule is not None:
            return rule(fields[0], Talker.PROPRIETARY, fields[1:])

    talker = talker_of(code)
    rule = find_rule(code)
    if rule is None:
        return UnknownMessage(code=code, talker=talker, fields=fields)
    return rule(code, talker, fields)


def parse(line: str) -> NmeaMessage:
    """Frame and decode one sentence.

    Raises:
        FrameError: The envelope is malformed.
        InvalidFieldError: The fields do not satisfy the decode rule.
    """
    return decode(frame(line))
