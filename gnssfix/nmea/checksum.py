"""NMEA checksum validation and sentence framing.

NMEA 0183 sentences use a simple XOR checksum for data integrity verification.
The checksum is calculated over all characters between '$' and '*' (exclusive),
then represented as a two-digit hexadecimal number after the '*'.

Example sentence structure:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
    ^                       checksum content                      ^^
    start                                                checksum (0x47 = 71)

The checksum is optional on the wire: a sentence without '*' is accepted
unverified. When a '*' is present the checksum must be exactly two hex digits
and must match, otherwise no sentence is produced.
"""

from gnssfix.errors import (
    ChecksumMismatchError,
    InvalidCharacterError,
    MalformedChecksumError,
    MissingCodeError,
    MissingStartError,
)
from gnssfix.nmea.types import RawSentence

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _extract_checksum_parts(sentence: str) -> tuple[str, str] | None:
    """Extract the payload content and provided checksum from an NMEA sentence.

    Args:
        sentence: Raw NMEA sentence string starting with '$'
            (e.g., "$GPGGA,...*47")

    Returns:
        A tuple of (content, checksum_hex), or None when the sentence carries
        no '*' delimiter. ``checksum_hex`` is everything after the '*' and is
        not validated here.

    Example:
        >>> _extract_checksum_parts("$GPGGA,123519*47")
        ('GPGGA,123519', '47')
    """
    end = sentence.find("*")
    if end < 0:
        return None
    return sentence[1:end], sentence[end + 1 :]


def calculate_checksum(content: str) -> int:
    """Calculate the XOR checksum of a content string.

    The NMEA checksum algorithm XORs the ASCII value of each character
    in the content.

    Args:
        content: The string between '$' and '*' (exclusive)

    Returns:
        Integer checksum value (0-255)

    Example:
        >>> calculate_checksum("GPXXX")
        79
    """
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def validate_checksum(sentence: str) -> bool:
    """Validate the checksum of an NMEA sentence.

    Args:
        sentence: Complete NMEA sentence including '$', '*', and checksum.
                  May include trailing whitespace/newlines (will be stripped).

    Returns:
        True if the checksum is valid, False if:
        - Sentence is malformed (missing delimiters)
        - Checksum is truncated or non-hexadecimal
        - Calculated checksum doesn't match provided checksum

    Example:
        >>> validate_checksum("$GPXXX*4F")
        True
        >>> validate_checksum("$GPXXX*00")  # wrong checksum
        False
    """
    sentence = sentence.strip()
    if not sentence.startswith("$"):
        return False

    parts = _extract_checksum_parts(sentence)
    if parts is None:
        return False

    content, provided = parts
    if len(provided) != 2 or not set(provided) <= _HEX_DIGITS:
        return False

    return calculate_checksum(content) == int(provided, 16)


def frame(line: str) -> RawSentence:
    """Validate the envelope of one sentence and split it into code and fields.

    Args:
        line: One sentence, with or without a trailing line terminator.

    Returns:
        The framed sentence. Fields are split on ',' with no trimming, so
        empty fields stay as ``""``.

    Raises:
        MissingStartError: The line does not start with '$'.
        MalformedChecksumError: Text after '*' is not exactly two hex digits.
        InvalidCharacterError: The content holds a non-printable character.
        ChecksumMismatchError: The stated checksum does not match the content.
        MissingCodeError: Nothing between '$' and the first ','.

    Example:
        >>> frame("$GPHDT,274.07,T*03")
        RawSentence(code='GPHDT', fields=('274.07', 'T'))
    """
    line = line.rstrip("\r\n")
    if not line.startswith("$"):
        raise MissingStartError(line)

    parts = _extract_checksum_parts(line)
    if parts is None:
        content, provided = line[1:], None
    else:
        content, provided = parts
        if len(provided) != 2 or not set(provided) <= _HEX_DIGITS:
            raise MalformedChecksumError(provided)

    for character in content:
        if not " " <= character <= "~":
            raise InvalidCharacterError(character)

    if provided is not None:
        expected = calculate_checksum(content)
        actual = int(provided, 16)
        if expected != actual:
            raise ChecksumMismatchError(expected=expected, actual=actual)

    code, *fields = content.split(",")
    if not code:
        raise MissingCodeError(line)

    return RawSentence(code=code, fields=tuple(fields))
