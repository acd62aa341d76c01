"""Background NMEA reading loop feeding the fix monitor."""

import asyncio
import logging
import os

from gnssfix.gnss import FixState, GnssMonitor, NmeaReader
from server.broadcaster import broadcast_message
from server.formatters import format_fix_message

__all__ = ["create_fix_monitor", "create_nmea_reader", "nmea_source_address", "run_nmea_loop"]

logger = logging.getLogger(__name__)

_HOST_ENV = "GNSSFIX_NMEA_HOST"
_PORT_ENV = "GNSSFIX_NMEA_PORT"

_HOST = "localhost"
_PORT = 10110


def nmea_source_address() -> tuple[str, int]:
    """Return the NMEA source address from the environment, or the defaults."""
    host = os.environ.get(_HOST_ENV, _HOST)
    port = int(os.environ.get(_PORT_ENV, _PORT))
    return host, port


def create_nmea_reader() -> NmeaReader:
    host, port = nmea_source_address()
    return NmeaReader(host, port)


def create_fix_monitor(loop: asyncio.AbstractEventLoop) -> GnssMonitor:
    """Build a monitor that broadcasts every fix change and loss on *loop*."""
    monitor = GnssMonitor()

    def _on_changed(_state: FixState) -> None:
        broadcast_message(format_fix_message(monitor, "changed"), loop)

    def _on_lost(_state: FixState) -> None:
        broadcast_message(format_fix_message(monitor, "lost"), loop)

    monitor.on_location_changed = _on_changed
    monitor.on_location_lost = _on_lost
    return monitor


def run_nmea_loop(reader: NmeaReader, monitor: GnssMonitor) -> None:
    """Open *reader* and feed every decoded message to *monitor*.

    The loop exits when ``reader.cancel()`` is called, which causes the
    underlying ``NmeaReader.read()`` to raise ``EOFError``. A source that
    cannot be reached is logged and ends the loop.

    Args:
        reader: An unopened ``NmeaReader``; the loop owns its connection.
        monitor: The monitor to update, written only from this loop.
    """
    try:
        with reader:
            logger.info("NMEA loop started")
            for message in reader:
                monitor.on_message(message)
    except EOFError:
        logger.info("NMEA loop stopped")
    except OSError as e:
        logger.error("Cannot read from NMEA source: %s", e)
