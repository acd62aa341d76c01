"""Shared NMEA data types.

Design Decisions:
    1. Frozen dataclasses: a decoded message is immutable once built, so it
       can be handed to several consumers (logging, fusion, the server)
       without copying or locking.

    2. NaN for missing physical quantities: NMEA fields may be empty,
       indicated by consecutive commas. Floats use NaN for "not reported" so
       arithmetic on them stays total; counts and identifiers use None.

    3. Closed code tables as enums: fix quality and mode indicators are
       validated when decoding, so a message never carries a code the rest
       of the system does not understand.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

from gnssfix.nmea.talker import Talker


@dataclass(frozen=True)
class RawSentence:
    """One framed sentence: the code and its ordered fields.

    Attributes:
        code: Text between '$' and the first comma (e.g. ``"GPGGA"``).
        fields: Comma-separated tokens after the code, in original order.
            Empty tokens are kept as ``""`` and mean "field not reported".
    """

    code: str
    fields: tuple[str, ...]


@dataclass(frozen=True)
class NmeaMessage:
    """Base of every decoded message variant.

    Attributes:
        code: Sentence code the message was decoded from.
        talker: Source system derived from the code.
    """

    code: str
    talker: Talker

    @property
    def is_proprietary(self) -> bool:
        return self.code.startswith("P")


@dataclass(frozen=True)
class UnknownMessage(NmeaMessage):
    """A sentence with no registered decode rule, kept verbatim."""

    fields: tuple[str, ...]


class FixQuality(IntEnum):
    """GGA fix quality indicator.

    0 = Invalid (no fix)
    1 = GPS fix (SPS)
    2 = DGPS fix
    3 = PPS fix
    4 = RTK Fixed (centimeter-level)
    5 = RTK Float (decimeter-level, converging)
    6 = Estimated (dead reckoning)
    7 = Manual input
    8 = Simulation
    """

    INVALID = 0
    GPS_FIX = 1
    DGPS_FIX = 2
    PPS_FIX = 3
    RTK = 4
    FLOAT_RTK = 5
    ESTIMATED = 6
    MANUAL_INPUT = 7
    SIMULATION = 8


class ModeIndicator(Enum):
    """FAA mode indicator (NMEA 2.3+), one character per constellation."""

    AUTONOMOUS = "A"
    DIFFERENTIAL = "D"
    PRECISE = "P"
    RTK = "R"
    FLOAT_RTK = "F"
    ESTIMATED = "E"
    MANUAL = "M"
    SIMULATOR = "S"
    NOT_VALID = "N"
