"""gnssfix: NMEA 0183 decoding, GNSS fix fusion and NTRIP corrections."""

import logging

__version__ = "0.1.0"

from gnssfix.errors import (
    ChecksumMismatchError,
    DecodeError,
    FrameError,
    GnssFixError,
    InvalidFieldError,
    NetworkError,
    NtripError,
)
from gnssfix.gnss import FixState, GnssMonitor, LineBuffer, NmeaReader, read_nmea_file
from gnssfix.nmea import (
    FixQuality,
    ModeIndicator,
    NmeaMessage,
    RawSentence,
    Talker,
    UnknownMessage,
    decode,
    frame,
    parse,
    validate_checksum,
)
from gnssfix.ntrip import Caster, NtripClient, NtripStream

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Caster",
    "ChecksumMismatchError",
    "DecodeError",
    "FixQuality",
    "FixState",
    "FrameError",
    "GnssFixError",
    "GnssMonitor",
    "InvalidFieldError",
    "LineBuffer",
    "ModeIndicator",
    "NetworkError",
    "NmeaMessage",
    "NmeaReader",
    "NtripClient",
    "NtripError",
    "NtripStream",
    "RawSentence",
    "Talker",
    "UnknownMessage",
    "decode",
    "frame",
    "parse",
    "read_nmea_file",
    "validate_checksum",
]
