"""
SBD-specific reply parsers.

Parses replies for session, signal, system time and binary read commands.
"""

import logging
from datetime import datetime, timedelta, timezone

from .base import ResponseParser, parse_decimal, parse_hex
from ..types import SbdixReply
from ..exceptions import ParseError, ProtocolMismatchError

logger = logging.getLogger(__name__)

# Iridium system time epoch in milliseconds: May 11, 2014, at 14:23:55 UTC
IRIDIUM_EPOCH_MS = 1399818235000

# One system time tick is 90 ms
TICK_MS = 90

SBDIX_PREFIX = "+SBDIX:"
SBDIX_SEPARATOR = ", "
SBDIX_FIELDS = 6

MSSTM_PREFIX = "-MSSTM:"
MSSTM_REPLY_LENGTH = 16
MSSTM_VALUE_OFFSET = 8

CSQ_PREFIX = "+CSQ"
CSQ_REPLY_LENGTH = 6
DIGITS = "0123456789"

SBDRB_ECHO = b"AT+SBDRB"


class SbdixParser(ResponseParser[str, SbdixReply]):
    """Parser for AT+SBDIX (session) reply."""

    command = "AT+SBDIX"

    def parse(self, line: str) -> SbdixReply:
        """
        Parse AT+SBDIX reply.

        Expected format: "+SBDIX: 0, 5, 1, 7, 10, 1"
        """
        if not line.startswith(SBDIX_PREFIX):
            raise ParseError(
                f"Missing {SBDIX_PREFIX} prefix",
                command=self.command,
                response=[line]
            )

        tokens = line[len(SBDIX_PREFIX):].strip().split(SBDIX_SEPARATOR)

        if len(tokens) != SBDIX_FIELDS:
            raise ParseError(
                f"Expected {SBDIX_FIELDS} fields in session reply, got {len(tokens)}",
                command=self.command,
                response=[line]
            )

        values = [parse_decimal(t, command=self.command, line=line) for t in tokens]
        return SbdixReply(*values)


class SignalStrengthParser(ResponseParser[str, int]):
    """Parser for AT+CSQ (signal strength) reply."""

    command = "AT+CSQ"

    def check_shape(self, line: str) -> None:
        """
        Require the fixed "+CSQ:<digit>" shape.

        Raises:
            ProtocolMismatchError: If the reply is not exactly 6 characters
        """
        if CSQ_PREFIX not in line or len(line) != CSQ_REPLY_LENGTH:
            raise ProtocolMismatchError(
                line, "+CSQ:<0-5>",
                command=self.command,
                message=f"Unexpected reply: {line!r}"
            )

    def parse(self, line: str) -> int:
        """
        Parse AT+CSQ reply.

        Expected format: "+CSQ:5"
        """
        self.check_shape(line)

        digit = line[CSQ_REPLY_LENGTH - 1]
        if digit not in DIGITS:
            raise ParseError(
                f"Signal strength is not a digit: {digit!r}",
                command=self.command,
                response=[line]
            )
        return int(digit)


class NetworkTimeParser(ResponseParser[str, int]):
    """
    Parser for AT-MSSTM (system time) reply.

    Returns UTC seconds since the Unix epoch.
    """

    command = "AT-MSSTM"

    def is_valid(self, line: str) -> bool:
        """Check for the "-MSSTM: xxxxxxxx" shape the modem sends once it has a fix."""
        return MSSTM_PREFIX in line and len(line) == MSSTM_REPLY_LENGTH

    def ticks(self, line: str) -> int:
        """
        Extract the raw 90 ms tick count.

        Raises:
            ProtocolMismatchError: If the prefix is missing
            ParseError: If there is no hex value (e.g. "no network service")
        """
        if MSSTM_PREFIX not in line:
            raise ProtocolMismatchError(
                line, "-MSSTM:<hex>",
                command=self.command,
                message=f"Unexpected reply: {line!r}"
            )

        value = line[MSSTM_VALUE_OFFSET:]
        try:
            return parse_hex(value, command=self.command, line=line)
        except ParseError as e:
            raise ParseError(
                f"No network time: {value!r}",
                command=self.command,
                response=[line]
            ) from e

    def parse(self, line: str) -> int:
        """
        Parse AT-MSSTM reply.

        Expected format: "-MSSTM: 1a2b3c4d"
        """
        return ticks_to_unix(self.ticks(line))


class MtFrameParser(ResponseParser[bytes, bytes]):
    """
    Parser for the binary AT+SBDRB frame.

    Frame layout: <2-byte length><payload><2-byte checksum>. Neither the
    length header nor the checksum is verified against the payload.
    """

    command = "AT+SBDRB"

    def parse(self, line: bytes) -> bytes:
        frame = line
        if frame.startswith(SBDRB_ECHO + b"\r"):
            frame = frame[len(SBDRB_ECHO) + 1:]
        elif frame.startswith(SBDRB_ECHO):
            frame = frame[len(SBDRB_ECHO):]

        if len(frame) > 4:
            return frame[2:-2]

        logger.debug(f"Frame too short for a payload ({len(frame)} bytes)")
        return b""


def ticks_to_unix(ticks: int) -> int:
    """Convert Iridium system time ticks to Unix seconds."""
    return (IRIDIUM_EPOCH_MS + ticks * TICK_MS) // 1000


def ticks_to_datetime(ticks: int) -> datetime:
    """Convert Iridium system time ticks to an aware UTC datetime."""
    epoch = datetime.fromtimestamp(IRIDIUM_EPOCH_MS / 1000, tz=timezone.utc)
    return epoch + timedelta(milliseconds=ticks * TICK_MS)


_sbdix_parser = SbdixParser()


def parse_sbdix(line: str) -> SbdixReply:
    """Parse an AT+SBDIX status line into an SbdixReply."""
    return _sbdix_parser.parse(line)
