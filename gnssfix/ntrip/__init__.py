"""NTRIP correction-source client."""

from gnssfix.ntrip.client import ClientState, NtripClient
from gnssfix.ntrip.sourcetable import parse_source_entry, parse_source_table
from gnssfix.ntrip.types import Carrier, Caster, NtripSource, NtripStream

__all__ = [
    "Carrier",
    "Caster",
    "ClientState",
    "NtripClient",
    "NtripSource",
    "NtripStream",
    "parse_source_entry",
    "parse_source_table",
]
