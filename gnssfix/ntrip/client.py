"""NtripClient: source-table fetch and correction streaming from an NTRIP caster.

The caster speaks a plain-text, HTTP/1.1-like request/response protocol over
TCP. A request for ``/`` returns the source table; a request for a mountpoint
returns a status line followed by an unbounded binary correction stream
(usually RTCM 3), which this client hands to subscribers as raw chunks
without decoding it.

Threading:
    ``connect`` starts one receive thread per connection. The socket read
    timeout is the poll interval: it only bounds how soon ``disconnect`` is
    observed and never ends the stream. ``disconnect`` sets a stop event and
    joins the thread; the socket is closed by the thread itself on exit, so
    no read is ever issued on a closed socket.

No retries:
    A failed connect or a dropped stream is reported once. Reconnect policy
    belongs to the caller.
"""

import base64
import logging
import socket
import threading
from collections.abc import Callable
from enum import Enum
from types import TracebackType

from gnssfix import __version__
from gnssfix.errors import (
    NtripAuthenticationError,
    NtripConnectionError,
    NtripError,
    NtripResponseError,
)
from gnssfix.ntrip.sourcetable import parse_source_table
from gnssfix.ntrip.types import NtripSource

__all__ = ["ClientState", "NtripClient"]

logger = logging.getLogger(__name__)

# --- connection defaults ------------------------------------------------------

_PORT = 2101
_TIMEOUT = 10.0  # connect and handshake timeout
_POLL_INTERVAL = 1.0  # stream read timeout; determines maximum disconnect() latency
_CHUNK_SIZE = 4096

_USER_AGENT = f"NTRIP gnssfix/{__version__}"

Subscriber = Callable[[bytes], None]


class ClientState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    STREAMING = "streaming"


# --- response helpers ---------------------------------------------------------


def _head_complete(data: bytes) -> bool:
    """True once ``data`` holds a full response head.

    NTRIP 1.0 stream responses are a bare ``ICY 200 OK`` status line; every
    other response is HTTP-like and its head ends with a blank line.
    """
    if data.startswith(b"ICY") and b"\r\n" in data:
        return True
    return b"\r\n\r\n" in data


def _split_response(data: bytes) -> tuple[str, bytes]:
    """Split a response into its status line and the bytes after the head."""
    status, _, rest = data.partition(b"\r\n")
    status_line = status.decode("ascii", errors="replace").strip()
    if status.startswith(b"ICY"):
        return status_line, rest.removeprefix(b"\r\n")
    head_end = data.find(b"\r\n\r\n")
    if head_end < 0:
        return status_line, rest
    return status_line, data[head_end + 4 :]


def _check_status(status_line: str) -> None:
    """Accept ``ICY 200 OK``, ``SOURCETABLE 200 OK`` and ``HTTP/1.x 200``.

    Raises:
        NtripAuthenticationError: The caster answered 401.
        NtripResponseError: Any other non-200 answer.
    """
    parts = status_line.split()
    status_code = parts[1] if len(parts) > 1 else ""
    if status_code == "200":
        return
    if status_code == "401":
        raise NtripAuthenticationError(f"Caster rejected the credentials: {status_line!r}")
    raise NtripResponseError(status_line)


# --- public API ---------------------------------------------------------------


class NtripClient:
    """Client for one NTRIP caster.

    Usage::

        client = NtripClient("caster.example.com", 2101, "user", "secret")
        for source in client.fetch_source_table():
            print(source)

        client.add_subscriber(receiver.write)
        client.connect("MOUNT1")
        ...
        client.disconnect()

    The client is also a context manager that disconnects on exit.

    Args:
        host: Caster host name or address.
        port: Caster TCP port (default: ``2101``).
        username: Optional user name for HTTP Basic authentication.
        password: Optional password for HTTP Basic authentication.
        timeout: Connect and handshake timeout in seconds.
        poll_interval: Stream read timeout in seconds; bounds how long
            ``disconnect()`` waits for the receive thread.
    """

    def __init__(
        self,
        host: str,
        port: int = _PORT,
        username: str | None = None,
        password: str | None = None,
        *,
        timeout: float = _TIMEOUT,
        poll_interval: float = _POLL_INTERVAL,
        chunk_size: int = _CHUNK_SIZE,
    ) -> None:
        if not host:
            raise ValueError("host must not be empty")
        if port < 1:
            raise ValueError(f"port must be positive, got {port}")

        self._host = host
        self._port = port
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._chunk_size = chunk_size

        self._auth: str | None = None
        if username or password:
            credentials = f"{username or ''}:{password or ''}".encode()
            self._auth = base64.b64encode(credentials).decode("ascii")

        self._state = ClientState.DISCONNECTED
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._subscribers: list[Subscriber] = []
        self._subscribers_lock = threading.Lock()
        self._total_bytes = 0
        self._last_error: NtripError | None = None

    def __enter__(self) -> "NtripClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disconnect()

    # --- properties -----------------------------------------------------------

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def total_bytes(self) -> int:
        """Correction bytes delivered to subscribers since construction."""
        return self._total_bytes

    @property
    def last_error(self) -> NtripError | None:
        """Why the last stream ended, None if it was stopped by ``disconnect``."""
        return self._last_error

    # --- subscribers ----------------------------------------------------------

    def add_subscriber(self, subscriber: Subscriber) -> None:
        """Register a callable receiving each correction chunk.

        Subscribers run on the receive thread and should return quickly.
        """
        with self._subscribers_lock:
            self._subscribers.append(subscriber)

    def remove_subscriber(self, subscriber: Subscriber) -> None:
        with self._subscribers_lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

    # --- requests -------------------------------------------------------------

    def _build_request(self, path: str) -> bytes:
        lines = [
            f"GET /{path} HTTP/1.1",
            f"Host: {self._host}",
            f"User-Agent: {_USER_AGENT}",
        ]
        if self._auth is not None:
            lines.append(f"Authorization: Basic {self._auth}")
        lines += ["Accept: */*", "Connection: close", "", ""]
        return "\r\n".join(lines).encode("ascii")

    def _open(self, path: str) -> socket.socket:
        """Connect and send the request for ``path``.

        Raises:
            NtripConnectionError: The caster could not be reached.
        """
        try:
            sock = socket.create_connection((self._host, self._port), timeout=self._timeout)
        except OSError as e:
            raise NtripConnectionError(
                f"Cannot connect to caster {self._host}:{self._port}: {e}"
            ) from e
        try:
            sock.sendall(self._build_request(path))
        except OSError as e:
            sock.close()
            raise NtripConnectionError(f"Cannot send request to caster: {e}") from e
        return sock

    def _recv(self, sock: socket.socket) -> bytes:
        try:
            return sock.recv(self._chunk_size)
        except OSError as e:
            raise NtripConnectionError(f"Caster connection failed: {e}") from e

    def _require_disconnected(self) -> None:
        if self._state is not ClientState.DISCONNECTED:
            raise NtripError(f"Client is busy ({self._state.value})")

    def fetch_source_table(self) -> list[NtripSource]:
        """Download and decode the caster's source table.

        Raises:
            NtripError: The client is connecting or streaming.
            NtripConnectionError: The caster could not be reached.
            NtripAuthenticationError: The caster rejected the credentials.
            NtripResponseError: The caster answered with another status.
        """
        self._require_disconnected()
        self._state = ClientState.CONNECTING
        chunks = []
        try:
            sock = self._open("")
            try:
                while chunk := self._recv(sock):
                    chunks.append(chunk)
            finally:
                sock.close()
        finally:
            self._state = ClientState.DISCONNECTED

        status_line, body = _split_response(b"".join(chunks))
        _check_status(status_line)
        return parse_source_table(body.decode("utf-8", errors="replace"))

    def connect(self, mountpoint: str) -> None:
        """Open the correction stream of ``mountpoint`` and start receiving.

        Returns once the caster has accepted the request. Correction bytes
        are then delivered to subscribers from a background thread until
        ``disconnect`` is called or the stream ends.

        Raises:
            ValueError: ``mountpoint`` is empty.
            NtripError: The client is already connecting or streaming.
            NtripConnectionError: The caster could not be reached or
                closed the connection during the handshake.
            NtripAuthenticationError: The caster rejected the credentials.
            NtripResponseError: The caster answered with another status.
        """
        mountpoint = mountpoint.lstrip("/")
        if not mountpoint.strip():
            raise ValueError("mountpoint must not be empty")
        self._require_disconnected()

        self._state = ClientState.CONNECTING
        try:
            sock = self._open(mountpoint)
            try:
                leftover = self._handshake(sock)
                sock.settimeout(self._poll_interval)
            except BaseException:
                sock.close()
                raise
        except BaseException:
            self._state = ClientState.DISCONNECTED
            raise

        self._stop.clear()
        self._last_error = None
        self._state = ClientState.STREAMING
        self._thread = threading.Thread(
            target=self._receive_loop,
            args=(sock, leftover),
            name=f"ntrip-{mountpoint}",
            daemon=True,
        )
        self._thread.start()
        logger.info("Streaming %s from %s:%d", mountpoint, self._host, self._port)

    def _handshake(self, sock: socket.socket) -> bytes:
        """Read and check the response head; return stream bytes read past it."""
        data = b""
        while not _head_complete(data):
            chunk = self._recv(sock)
            if not chunk:
                raise NtripConnectionError("Caster closed the connection before responding")
            data += chunk
        status_line, leftover = _split_response(data)
        _check_status(status_line)
        return leftover

    def _emit(self, data: bytes) -> None:
        self._total_bytes += len(data)
        with self._subscribers_lock:
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            try:
                subscriber(data)
            except Exception:
                logger.exception("NTRIP subscriber %r failed", subscriber)

    def _receive_loop(self, sock: socket.socket, leftover: bytes) -> None:
        try:
            if leftover:
                self._emit(leftover)
            while not self._stop.is_set():
                try:
                    data = sock.recv(self._chunk_size)
                except TimeoutError:
                    continue
                if not data:
                    self._last_error = NtripConnectionError("Caster closed the stream")
                    logger.warning("Caster %s:%d closed the stream", self._host, self._port)
                    break
                self._emit(data)
        except OSError as e:
            self._last_error = NtripConnectionError(f"Caster connection failed: {e}")
            logger.warning("NTRIP stream from %s:%d failed: %s", self._host, self._port, e)
        finally:
            sock.close()
            self._state = ClientState.DISCONNECTED
            logger.info("Disconnected from %s:%d", self._host, self._port)

    def disconnect(self) -> None:
        """Stop the receive thread and wait for it to close the socket.

        Safe to call more than once, and on a client that never connected.
        """
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
