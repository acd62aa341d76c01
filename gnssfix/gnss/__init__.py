"""GNSS fix fusion and NMEA transport readers."""

from gnssfix.gnss.monitor import GnssMonitor
from gnssfix.gnss.reader import LineBuffer, NmeaReader, read_nmea_file
from gnssfix.gnss.types import FixState

__all__ = ["FixState", "GnssMonitor", "LineBuffer", "NmeaReader", "read_nmea_file"]
