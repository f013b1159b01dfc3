"""
Transport layer abstraction for modem communication.

Provides abstractions for serial communication with dependency injection support.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional, Union
import serial
from serial import SerialException

from ..exceptions import TransportError, DeviceDisconnectedError, ReadTimeoutError

logger = logging.getLogger(__name__)

# Phrases pyserial uses when the device has gone away
_DISCONNECT_PHRASES = (
    "device disconnected",
    "device reports readiness to read but returned no data",
    "no such device",
    "device not configured",
    "input/output error",
)


class Transport(ABC):
    """Abstract base class for modem transport."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write data to the transport.

        Args:
            data: Bytes to write

        Returns:
            Number of bytes written

        Raises:
            TransportError: If write fails
        """
        pass

    @abstractmethod
    def read_until(self, terminator: bytes = b"\n") -> bytes:
        """
        Read from transport until terminator is found.

        Args:
            terminator: Byte sequence marking end of data

        Returns:
            Bytes read including terminator, or b"" at end of stream

        Raises:
            TransportError: If read fails
        """
        pass

    @abstractmethod
    def is_open(self) -> bool:
        """Check if transport is open."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the transport."""
        pass


class SerialTransport(Transport):
    """Serial port transport implementation."""

    def __init__(
        self,
        port: str,
        baudrate: int = 19200,
        timeout: Optional[float] = None
    ) -> None:
        """
        Initialize serial transport.

        Args:
            port: Serial port path (e.g., /dev/ttyUSB0)
            baudrate: Baud rate for serial communication (RockBLOCK default: 19200)
            timeout: Read timeout in seconds. None blocks until a line arrives.

        Raises:
            TransportError: If serial port cannot be opened
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout

        try:
            self._serial = serial.Serial(
                port=port,
                baudrate=baudrate,
                timeout=timeout
            )
            logger.info(f"Opened serial port {port} at {baudrate} baud")
        except SerialException as e:
            logger.error(f"Failed to open serial port {port}: {e}")
            raise TransportError(f"Failed to open serial port {port}: {e}") from e

    def write(self, data: bytes) -> int:
        """Write data to serial port."""
        try:
            written = self._serial.write(data)
            logger.debug(f"Wrote {written} bytes: {data!r}")
            return written
        except SerialException as e:
            raise self._translate(e, "write") from e

    def read_until(self, terminator: bytes = b"\n") -> bytes:
        """Read from serial port until terminator."""
        try:
            data = self._serial.read_until(terminator)
        except SerialException as e:
            raise self._translate(e, "read") from e

        if self.timeout is not None and not data.endswith(terminator):
            logger.error(f"Serial read timed out after {self.timeout}s (partial: {data!r})")
            raise ReadTimeoutError(
                f"No complete line within {self.timeout}s",
                response=[data.decode("latin-1")] if data else None
            )

        if data:
            logger.debug(f"Read {len(data)} bytes: {data!r}")

        return data

    def _translate(self, error: SerialException, operation: str) -> TransportError:
        """Map a pyserial exception onto the library's transport errors."""
        error_str = str(error).lower()

        if any(phrase in error_str for phrase in _DISCONNECT_PHRASES):
            logger.error(f"Device disconnected: {error}")
            return DeviceDisconnectedError(
                f"Serial device disconnected: {error}",
                response=[str(error)]
            )

        logger.error(f"Serial {operation} failed: {error}")
        return TransportError(f"Serial {operation} failed: {error}")

    def is_open(self) -> bool:
        """Check if serial port is open."""
        return bool(self._serial and self._serial.is_open)

    def close(self) -> None:
        """Close the serial port."""
        if self._serial and self._serial.is_open:
            self._serial.close()
            logger.info(f"Closed serial port {self.port}")


class MockTransport(Transport):
    """
    Mock transport for testing.

    Simulates modem responses without requiring hardware. Every write is
    recorded in ``written`` so tests can check what was sent.
    """

    def __init__(self) -> None:
        """Initialize mock transport."""
        self._open = True
        self._response_queue: list[list[Union[str, bytes]]] = []
        self._lock = threading.Lock()
        self.written: list[bytes] = []
        logger.info("Initialized MockTransport")

    def add_response(self, lines: list[Union[str, bytes]]) -> None:
        """
        Queue a response to be returned by read_until.

        Args:
            lines: List of response lines (e.g., ["AT+CSQ", "+CSQ:5", "OK"]).
                   Bytes lines are passed through unchanged apart from the
                   "\\r\\n" terminator, for binary replies.
        """
        with self._lock:
            self._response_queue.append(list(lines))
            logger.debug(f"Added mock response: {lines}")

    def write(self, data: bytes) -> int:
        """Simulate writing data."""
        if not self._open:
            raise DeviceDisconnectedError(
                "MockTransport is closed (simulating device disconnection)",
                response=["MockTransport closed"]
            )

        logger.debug(f"Mock write: {data!r}")
        self.written.append(bytes(data))
        return len(data)

    def read_until(self, terminator: bytes = b"\n") -> bytes:
        """
        Simulate reading from modem.

        Returns queued responses one line at a time.
        """
        if not self._open:
            raise DeviceDisconnectedError(
                "MockTransport is closed (simulating device disconnection)",
                response=["MockTransport closed"]
            )

        with self._lock:
            # Drop responses that were queued empty
            while self._response_queue and not self._response_queue[0]:
                self._response_queue.pop(0)

            # Get next response from queue
            if self._response_queue:
                current_response = self._response_queue[0]
                line = current_response.pop(0)

                # Remove empty response from queue
                if not current_response:
                    self._response_queue.pop(0)

                if isinstance(line, str):
                    line = line.encode("latin-1")
                result = line + b"\r\n"
                logger.debug(f"Mock read: {result!r}")
                return result

        # End of stream
        return b""

    def is_open(self) -> bool:
        """Check if mock transport is open."""
        return self._open

    def close(self) -> None:
        """Close mock transport."""
        self._open = False
        logger.info("Closed MockTransport")

    def clear_responses(self) -> None:
        """Clear all queued responses (useful for testing)."""
        with self._lock:
            self._response_queue.clear()
            logger.debug("Cleared mock response queue")

    def pending_lines(self) -> int:
        """Number of scripted lines not yet read."""
        with self._lock:
            return sum(len(r) for r in self._response_queue)

    def written_commands(self) -> list[str]:
        """Writes that look like AT commands, with the terminator removed."""
        return [
            w.decode("latin-1").rstrip("\r")
            for w in self.written
            if w.startswith(b"AT")
        ]
