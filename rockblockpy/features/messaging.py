"""
Message manager.

Handles the binary write (AT+SBDWB) and read (AT+SBDRB) protocols and
clearing of the mobile originated buffer.
"""

import logging
from typing import TYPE_CHECKING, Union

from ..config import SBDConfig
from ..parsers.base import parse_decimal
from ..parsers.sbd import MtFrameParser
from ..exceptions import ParseError, ProtocolMismatchError, ValidationError

if TYPE_CHECKING:
    from ..core import CommandChannel

logger = logging.getLogger(__name__)

# Known AT+SBDWB completion codes
WRITE_STATUS = {
    0: "accepted",
    1: "timeout waiting for payload",
    2: "checksum mismatch",
    3: "message size invalid",
}


def sbd_checksum(payload: bytes) -> int:
    """Sum of all payload bytes, modulo 65536."""
    return sum(payload) % 65536


def checksum_bytes(payload: bytes) -> bytes:
    """Checksum as transmitted after the payload: high byte, then low byte."""
    checksum = sbd_checksum(payload)
    return bytes((checksum >> 8, checksum & 0xFF))


class MessageManager:
    """
    Manages SBD message buffers.

    Provides methods to queue a mobile originated message, read a mobile
    terminated message and clear the outbound buffer.
    """

    def __init__(self, channel: "CommandChannel", config: SBDConfig) -> None:
        """
        Initialize message manager.

        Args:
            channel: CommandChannel instance for AT command execution
            config: Limits (maximum message length)
        """
        self.channel = channel
        self.config = config
        self._frame_parser = MtFrameParser()
        logger.debug("Initialized MessageManager")

    def queue_message(self, payload: Union[bytes, str]) -> None:
        """
        Write a message into the modem's MO buffer.

        The message is sent at the next session (see SessionManager).

        Args:
            payload: Message bytes; str is encoded as UTF-8

        Raises:
            ValidationError: If the payload is too long (nothing is sent)
            ProtocolMismatchError: If the modem rejects the message

        Example:

        .. code-block:: python

            modem.messaging.queue_message(b"Hello, World")
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")

        if len(payload) > self.config.max_message_length:
            raise ValidationError(
                f"Message is too long, should be <= {self.config.max_message_length} "
                f"and is {len(payload)}"
            )

        command = f"AT+SBDWB={len(payload)}"
        logger.info(f"Queueing {len(payload)} byte message")

        self.channel.send(command + "\r")
        self.channel.expect(command)
        self.channel.expect("READY")

        self.channel.send(payload)
        self.channel.send(checksum_bytes(payload))

        status = self.channel.read_line()
        if status != "0":
            try:
                meaning = WRITE_STATUS.get(parse_decimal(status), "unknown error")
            except ParseError:
                meaning = "unexpected reply"
            raise ProtocolMismatchError(
                status, "0",
                command=command,
                message=f"Message rejected by modem: {status!r} ({meaning})"
            )

        self.channel.expect("OK")
        logger.debug(f"Message queued (checksum {sbd_checksum(payload):#06x})")

    def retrieve_mt_message(self) -> bytes:
        """
        Read the message in the modem's MT buffer.

        The length header and checksum in the frame are not verified.

        Returns:
            Message payload, or b"" if the frame holds no payload

        Raises:
            ProtocolMismatchError: If the trailing OK is missing
        """
        command = "AT+SBDRB"
        logger.info("Retrieving MT message")

        self.channel.send(command + "\r")
        line = self.channel.read_raw_line()
        payload = self._frame_parser.parse(line)

        try:
            self.channel.expect("OK")
        except ProtocolMismatchError as e:
            raise ProtocolMismatchError(
                e.actual, e.expected,
                command=command,
                message=f"Expected OK after message: {e}"
            ) from e

        logger.debug(f"Retrieved {len(payload)} byte message")
        return payload

    def clear_mo_buffer(self) -> None:
        """
        Clear the MO buffer (AT+SBDD0).

        Raises:
            ProtocolMismatchError: If the modem does not confirm with OK
        """
        logger.info("Clearing MO buffer")
        self.channel.send_and_read_reply("AT+SBDD0")
        self.channel.expect("OK")
