"""NMEA 0183 sentence framing and decoding."""

from gnssfix.nmea.accuracy import Gbs, Grs, Gst, ResidualMode
from gnssfix.nmea.checksum import calculate_checksum, frame, validate_checksum
from gnssfix.nmea.environment import (
    Cur,
    Dpt,
    Mda,
    Mwv,
    SpeedReference,
    TransducerMeasurement,
    WindReference,
    WindSpeedUnit,
    Xdr,
)
from gnssfix.nmea.navigation import Bod, Hdt, Rmb, Rot, Rte, Vlw, Vtg, WaypointListType
from gnssfix.nmea.position import (
    Gga,
    Ggk,
    GgkQuality,
    Gll,
    Gns,
    NavigationalStatus,
    PositioningStatus,
    Rma,
    Rmc,
)
from gnssfix.nmea.reference import Dtm, Zda
from gnssfix.nmea.registry import decode, parse
from gnssfix.nmea.satellites import (
    FixType,
    Gsa,
    Gsv,
    SatelliteSystem,
    SatelliteVehicle,
    SelectionMode,
)
from gnssfix.nmea.talker import Talker, talker_of
from gnssfix.nmea.types import (
    FixQuality,
    ModeIndicator,
    NmeaMessage,
    RawSentence,
    UnknownMessage,
)
from gnssfix.nmea.vendor import FixDimension, Pgrme, Pgrmz, Ptnla, Ptnlb

__all__ = [
    "Bod",
    "Cur",
    "Dpt",
    "Dtm",
    "FixDimension",
    "FixQuality",
    "FixType",
    "Gbs",
    "Gga",
    "Ggk",
    "GgkQuality",
    "Gll",
    "Gns",
    "Grs",
    "Gsa",
    "Gst",
    "Gsv",
    "Hdt",
    "Mda",
    "ModeIndicator",
    "Mwv",
    "NavigationalStatus",
    "NmeaMessage",
    "Pgrme",
    "Pgrmz",
    "PositioningStatus",
    "Ptnla",
    "Ptnlb",
    "RawSentence",
    "ResidualMode",
    "Rma",
    "Rmb",
    "Rmc",
    "Rot",
    "Rte",
    "SatelliteSystem",
    "SatelliteVehicle",
    "SelectionMode",
    "SpeedReference",
    "Talker",
    "TransducerMeasurement",
    "UnknownMessage",
    "Vlw",
    "Vtg",
    "WaypointListType",
    "WindReference",
    "WindSpeedUnit",
    "Xdr",
    "Zda",
    "calculate_checksum",
    "decode",
    "frame",
    "parse",
    "talker_of",
    "validate_checksum",
]
