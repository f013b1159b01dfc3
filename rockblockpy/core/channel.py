"""
AT command channel.

Send/expect primitives for a modem running with local echo enabled.
Every higher level operation is built on these.
"""

import logging
from typing import Optional, Union

from .transport import Transport
from .trace import TraceHandler
from ..exceptions import ProtocolMismatchError

logger = logging.getLogger(__name__)


class CommandChannel:
    """
    Synchronous command/reply channel over a line-oriented transport.

    Each send is followed by a blocking read of the matching reply; ordering
    alone ties replies to commands. Not thread-safe: one caller at a time.
    """

    def __init__(
        self,
        transport: Transport,
        trace: Optional[TraceHandler] = None
    ) -> None:
        """
        Initialize command channel.

        Args:
            transport: Transport instance for communication
            trace: Observer hub for wire traffic (a logging one is created if None)
        """
        self.transport = transport
        self.trace = trace if trace is not None else TraceHandler()

    def send(self, command: Union[str, bytes]) -> None:
        """
        Write raw bytes to the modem.

        Callers that expect an echo or reply must include the trailing "\\r".

        Raises:
            TransportError: If the write fails
        """
        data = command.encode("latin-1") if isinstance(command, str) else bytes(command)
        self.trace.sent(data)
        self.transport.write(data)

    def read_line(self) -> str:
        """
        Read the next non-blank line, whitespace-trimmed.

        Blocks until a line arrives. Returns "" if the stream ended.

        Raises:
            TransportError: If the read fails
        """
        while True:
            data = self.transport.read_until(b"\n")
            if not data:
                return ""

            line = data.decode("latin-1").strip()
            if line:
                self.trace.received(data)
                return line

    def read_raw_line(self) -> bytes:
        """
        Read the next non-blank line as bytes.

        Only the line terminator is removed so binary content survives.
        Returns b"" if the stream ended.
        """
        while True:
            data = self.transport.read_until(b"\n")
            if not data:
                return b""

            line = data[:-1] if data.endswith(b"\n") else data
            if line.endswith(b"\r"):
                line = line[:-1]
            if line.strip():
                self.trace.received(data)
                return line

    def expect(self, expected: str) -> None:
        """
        Read a line and require it to equal ``expected``.

        Raises:
            ProtocolMismatchError: If the line differs
        """
        line = self.read_line()
        if line != expected:
            raise ProtocolMismatchError(line, expected)

    def send_and_read_reply(self, command: str) -> str:
        """
        Send a command, consume its echo and return the next line.

        Args:
            command: AT command without terminator (e.g., "AT+CSQ")

        Returns:
            First line after the echo

        Raises:
            ProtocolMismatchError: If the echo does not match the command
            TransportError: If the channel fails
        """
        self.send(command + "\r")

        try:
            self.expect(command)
        except ProtocolMismatchError as e:
            raise ProtocolMismatchError(e.actual, e.expected, command=command) from None

        return self.read_line()

    def close(self) -> None:
        """Release the underlying transport."""
        self.transport.close()
