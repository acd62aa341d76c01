"""NTRIP source-table entry types."""

from dataclasses import dataclass
from enum import IntEnum


class Carrier(IntEnum):
    """Carrier phase information carried by a stream."""

    NONE = 0
    L1 = 1
    L1_L2 = 2


@dataclass(frozen=True)
class Caster:
    """A ``CAS`` record: another caster known to this one.

    Attributes:
        address: Host name or IP address of the caster.
        port: TCP port of the caster.
        identifier: Caster name, typically the provider and city.
        operator: Organisation running the caster.
        supports_nmea: True if the caster accepts NMEA GGA from clients
            (needed for virtual reference stations).
        country_code: Three-letter ISO 3166 country code.
        latitude: Approximate caster position, decimal degrees.
        longitude: Approximate caster position, decimal degrees.
        fallback_address: Host to try when ``address`` is unreachable.
        fallback_port: Port of the fallback host, None if not given.
    """

    address: str
    port: int
    identifier: str
    operator: str
    supports_nmea: bool
    country_code: str
    latitude: float
    longitude: float
    fallback_address: str | None
    fallback_port: int | None


@dataclass(frozen=True)
class NtripStream:
    """A ``STR`` record: one mountpoint offered by the caster.

    Attributes:
        mountpoint: Resource name to pass to ``NtripClient.connect``.
        identifier: Human-readable source name, typically the nearest city.
        format: Correction data format, e.g. ``"RTCM 3.1"``.
        format_details: Message types and their update rates.
        carrier: Phase information available in the stream.
        navigation_system: Constellations, e.g. ``"GPS+GLO"``.
        network: Network the reference station belongs to.
        country_code: Three-letter ISO 3166 country code.
        latitude: Reference station position, decimal degrees.
        longitude: Reference station position, decimal degrees.
        supports_nmea: True if the stream needs (VRS) or accepts NMEA GGA.
        authentication: ``"N"`` none, ``"B"`` basic, ``"D"`` digest, or None
            when the record omits it.
        fee: True if the stream is charged for.
        bitrate: Average bits per second, None if not given.
    """

    mountpoint: str
    identifier: str
    format: str
    format_details: str
    carrier: Carrier
    navigation_system: str
    network: str
    country_code: str
    latitude: float
    longitude: float
    supports_nmea: bool
    authentication: str | None
    fee: bool
    bitrate: int | None


NtripSource = Caster | NtripStream
