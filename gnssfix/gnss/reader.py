"""NMEA transport readers: TCP stream, chunk buffer and recorded log playback.

Line splitting belongs here, not in the framer: transports split on '\\n',
trim a trailing '\\r', and hold partial lines until their terminator arrives.

Reading strategy:
    Lines that fail framing or decoding are dropped and logged at DEBUG;
    a single corrupt sentence never interrupts the stream. A quiet source
    only makes the read wait longer. Only transport failures (connection
    closed, cancelled) end a read loop, as ``EOFError``.
"""

import contextlib
import logging
import os
import socket
from collections import deque
from collections.abc import Iterator
from types import TracebackType

from gnssfix.errors import DecodeError, FrameError
from gnssfix.nmea.registry import parse
from gnssfix.nmea.types import NmeaMessage

__all__ = ["LineBuffer", "NmeaReader", "read_nmea_file"]

logger = logging.getLogger(__name__)

# --- connection defaults ------------------------------------------------------

_HOST = "localhost"
_PORT = 10110  # IANA-registered NMEA-0183 over TCP port
_TIMEOUT = 2.0  # socket read timeout; determines maximum cancel() latency
_CHUNK_SIZE = 4096


# --- helpers ------------------------------------------------------------------


def _parse_line(line: str) -> NmeaMessage | None:
    """Frame and decode one line; ``None`` if it is blank or invalid."""
    if not line:
        return None
    try:
        return parse(line)
    except (FrameError, DecodeError) as e:
        logger.debug("Dropping NMEA line %r: %s", line, e)
        return None


class LineBuffer:
    """Turns arbitrary byte chunks into complete NMEA lines.

    Example:
        >>> buffer = LineBuffer()
        >>> buffer.feed(b"$GPHDT,274.07,T*03\\r\\n$GPH")
        ['$GPHDT,274.07,T*03']
        >>> buffer.feed(b"DT,274.08,T*0C\\r\\n")
        ['$GPHDT,274.08,T*0C']
    """

    def __init__(self) -> None:
        self._pending = ""

    def feed(self, data: bytes) -> list[str]:
        """Append a chunk and return every line it completed, blanks dropped."""
        self._pending += data.decode("ascii", errors="replace")
        *complete, self._pending = self._pending.split("\n")
        lines = []
        for line in complete:
            line = line.removesuffix("\r")
            if line:
                lines.append(line)
        return lines

    @property
    def pending(self) -> str:
        """Text received after the last line terminator."""
        return self._pending


# --- public API ---------------------------------------------------------------


class NmeaReader:
    """Context manager for reading decoded NMEA messages from a TCP source.

    Suitable for receivers and multiplexers that expose raw NMEA over TCP
    (ser2net, gpsd's raw NMEA port, marine gateways).

    Two consumption patterns are supported:

    Continuous iteration (recommended for server backends)::

        with NmeaReader() as reader:
            for message in reader:
                monitor.on_message(message)

    Single read (useful for one-shot or polling scenarios)::

        with NmeaReader() as reader:
            message = reader.read()

    The socket is read in chunks through a ``LineBuffer``. A read timeout
    is not an error: the reader checks for ``cancel()`` and waits again, so
    a source may stay silent for any length of time.

    Args:
        host: NMEA source host (default: ``"localhost"``).
        port: NMEA source TCP port (default: ``10110``).
        timeout: Socket read timeout in seconds; bounds how long
            ``cancel()`` takes to be observed.
    """

    def __init__(
        self,
        host: str = _HOST,
        port: int = _PORT,
        timeout: float = _TIMEOUT,
    ) -> None:
        """Store connection parameters; the socket is opened in ``__enter__``."""
        self._host = host
        self._port = port
        self._timeout = timeout
        self._sock: socket.socket | None = None
        self._buffer = LineBuffer()
        self._lines: deque[str] = deque()
        self._cancelled: bool = False

    def __enter__(self) -> "NmeaReader":
        """Open the connection and reset internal state."""
        self._sock = socket.create_connection((self._host, self._port))
        try:
            self._sock.settimeout(self._timeout)
        except OSError:
            self._sock.close()
            self._sock = None
            raise
        self._buffer = LineBuffer()
        self._lines.clear()
        self._cancelled = False
        logger.info("Connected to NMEA source %s:%d", self._host, self._port)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the connection."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def cancel(self) -> None:
        """Cancel pending blocking reads gracefully.

        Sets the cancellation flag and shuts down the socket so that any
        in-progress ``recv()`` returns at once and the read raises
        ``EOFError``. The socket itself is only closed by ``__exit__``.
        """
        self._cancelled = True
        if self._sock is not None:
            with contextlib.suppress(OSError):
                self._sock.shutdown(socket.SHUT_RDWR)

    def _recv_chunk(self, sock: socket.socket) -> bytes | None:
        """Receive one chunk; returns ``None`` on timeout retry.

        Raises:
            EOFError: If the stream ended or the connection was closed.
        """
        try:
            data = sock.recv(_CHUNK_SIZE)
        except TimeoutError:
            return None
        except OSError as e:
            raise EOFError("NMEA connection closed.") from e
        if not data:
            raise EOFError("NMEA stream ended.")
        return data

    def _read_line(self, sock: socket.socket) -> str:
        """Return the next complete line, receiving chunks as needed.

        Raises:
            EOFError: If cancelled, or the stream ended or was closed.
        """
        while True:
            if self._cancelled:
                raise EOFError("NMEA read cancelled.")
            if self._lines:
                return self._lines.popleft()
            data = self._recv_chunk(sock)
            if data is not None:
                self._lines.extend(self._buffer.feed(data))

    def read(self) -> NmeaMessage:
        """Block until the next valid sentence and return it decoded.

        Raises:
            RuntimeError: If called outside a ``with`` block.
            EOFError: If the read is cancelled or the stream ends.
        """
        sock = self._sock
        if sock is None:
            raise RuntimeError("NmeaReader must be used as a context manager.")
        while True:
            message = _parse_line(self._read_line(sock))
            if message is not None:
                return message

    def __iter__(self) -> Iterator[NmeaMessage]:
        """Yield decoded messages indefinitely.

        Iteration continues until the caller breaks the loop or an exception
        propagates out (e.g. ``EOFError`` on cancellation). ``StopIteration``
        is never raised.
        """
        while True:
            yield self.read()


def read_nmea_file(path: str | os.PathLike[str]) -> Iterator[NmeaMessage]:
    """Yield the decoded messages of a recorded log, skipping bad lines.

    Example:
        >>> monitor = GnssMonitor()
        >>> for message in read_nmea_file("drive.nmea"):
        ...     monitor.on_message(message)
    """
    with open(path, encoding="ascii", errors="replace", newline="") as log_file:
        for line in log_file:
            message = _parse_line(line.rstrip("\r\n"))
            if message is not None:
                yield message
