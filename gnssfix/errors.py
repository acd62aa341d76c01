"""Exception hierarchy for framing, decoding and correction-source failures.

Every failure raised by this package is scoped to a single sentence or a single
connection attempt. Callers decide whether to drop the offending line, log it,
or propagate:

    GnssFixError
    ├── FrameError              malformed ``$...*hh`` envelope
    ├── DecodeError             a registered rule rejected the fields
    ├── SourceTableError        one source-table entry could not be decoded
    └── NetworkError            caster connection or response failures
        └── NtripError
"""


class GnssFixError(Exception):
    """Base class for all errors raised by gnssfix."""


class FrameError(GnssFixError, ValueError):
    """The sentence envelope is malformed and no ``RawSentence`` was produced."""


class MissingStartError(FrameError):
    def __init__(self, line: str) -> None:
        super().__init__(f"Sentence does not start with '$': {line[:20]!r}")
        self.line = line


class MissingCodeError(FrameError):
    def __init__(self, line: str) -> None:
        super().__init__(f"Sentence has no message code: {line[:20]!r}")
        self.line = line


class MalformedChecksumError(FrameError):
    def __init__(self, checksum: str) -> None:
        super().__init__(f"Checksum is not two hex digits: {checksum!r}")
        self.checksum = checksum


class InvalidCharacterError(FrameError):
    def __init__(self, character: str) -> None:
        super().__init__(f"Sentence contains a non-printable character: {character!r}")
        self.character = character


class ChecksumMismatchError(FrameError):
    """The stated checksum does not match the XOR of the sentence content.

    Attributes:
        expected: Checksum computed from the characters between '$' and '*'.
        actual: Checksum stated after the '*'.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Checksum failure: got {actual:02X}, expected {expected:02X}"
        )
        self.expected = expected
        self.actual = actual


class DecodeError(GnssFixError, ValueError):
    """A registered decode rule could not build its message from the fields."""


class InvalidFieldError(DecodeError):
    """A field is missing, unparseable, or outside its code table.

    Attributes:
        code: Sentence code being decoded (e.g. ``"GPGGA"``).
        index: Zero-based index into the field list (after the code).
        reason: Human-readable description of the problem.
    """

    def __init__(self, code: str, index: int, reason: str) -> None:
        super().__init__(f"{code} field {index}: {reason}")
        self.code = code
        self.index = index
        self.reason = reason


class SourceTableError(GnssFixError, ValueError):
    """A single source-table line could not be decoded."""


class NetworkError(GnssFixError):
    """Base class for connection-level failures."""


class NtripError(NetworkError):
    """The NTRIP client was misused or the caster misbehaved."""


class NtripConnectionError(NtripError):
    """The caster could not be reached or the connection dropped."""


class NtripAuthenticationError(NtripError):
    """The caster rejected the supplied credentials."""


class NtripResponseError(NtripError):
    """The caster answered with an unexpected status line."""

    def __init__(self, status_line: str) -> None:
        super().__init__(f"Unexpected caster response: {status_line!r}")
        self.status_line = status_line
