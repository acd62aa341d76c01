"""Talker identifiers.

The two characters following '$' name the system that produced a sentence.
Multi-constellation receivers tag sentences per constellation (GP, GL, GA,
GB, GQ, GI) and tag solutions computed from all of them with GN.
Sentences whose code starts with 'P' are proprietary (PGRME, PTNLA, ...).
"""

from enum import Enum


class Talker(Enum):
    GPS = "GP"
    GLONASS = "GL"
    COMBINED = "GN"
    GALILEO = "GA"
    BEIDOU = "GB"
    QZSS = "GQ"
    NAVIC = "GI"
    INTEGRATED_INSTRUMENTATION = "II"
    INTEGRATED_NAVIGATION = "IN"
    ELECTRONIC_CHART = "EC"
    SOUNDER_DEPTH = "SD"
    WEATHER_INSTRUMENTS = "WI"
    TRANSDUCER = "YX"
    COMPASS_MAGNETIC = "HC"
    GYRO_NORTH_SEEKING = "HE"
    PROPRIETARY = "P"
    UNKNOWN = ""


# Older BeiDou receivers use BD instead of GB
_ALIASES = {"BD": Talker.BEIDOU}

_BY_PREFIX = {talker.value: talker for talker in Talker if len(talker.value) == 2}


def talker_of(code: str) -> Talker:
    """Return the talker for a sentence code such as ``"GNGGA"``."""
    if code.startswith("P"):
        return Talker.PROPRIETARY
    prefix = code[:2]
    return _BY_PREFIX.get(prefix) or _ALIASES.get(prefix, Talker.UNKNOWN)
