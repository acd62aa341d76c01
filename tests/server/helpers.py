"""Helper factories for server tests."""

import queue
from collections.abc import Iterator

from gnssfix.nmea import NmeaMessage, parse

GGA_FIX = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"
GGA_NO_FIX = "$GPGGA,123520,4807.038,N,01131.000,E,0,00,,,M,,M,,*58"
VTG = "$GPVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*25"


class ControlledNmeaReader:
    """Stands in for ``NmeaReader``: yields whatever the test queues, ``None`` stops it."""

    def __init__(self) -> None:
        self.message_queue: queue.Queue[NmeaMessage | None] = queue.Queue()

    def __enter__(self) -> "ControlledNmeaReader":
        return self

    def __exit__(self, *_: object) -> None:
        pass

    def __iter__(self) -> Iterator[NmeaMessage]:
        while True:
            item = self.message_queue.get()
            if item is None:
                raise EOFError("NMEA read cancelled.")
            yield item

    def cancel(self) -> None:
        self.message_queue.put(None)

    def put_sentence(self, line: str) -> None:
        self.message_queue.put(parse(line))
