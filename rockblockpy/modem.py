"""
Main RockBlockModem class.

User-facing API that coordinates all feature managers.
"""

import logging
from typing import Optional, Union

from .config import SBDConfig
from .core import CommandChannel, SerialTransport, Transport, TraceHandler, TraceCallback
from .features import DeviceManager, MessageManager, ConnectivityManager, SessionManager
from .types import SessionOutcome

logger = logging.getLogger(__name__)


class RockBlockModem:
    """
    Main interface for Iridium SBD modem control.

    Provides a high-level API for modem operations through feature managers:

    - device: Ping, echo, flow control, ring alerts, serial identifier
    - messaging: Queue MO messages, read MT messages
    - network: Network time, signal strength, connection readiness
    - session: SBD sessions and MT queue draining

    Example usage with context manager:

    .. code-block:: python

        with RockBlockModem(port="/dev/ttyUSB0") as modem:
            modem.device.initialize()

            outcome = modem.send_message(b"Hello, World")
            for message in outcome.messages:
                print(f"Received: {message.text}")

    Example usage with manual lifecycle management:

    .. code-block:: python

        modem = RockBlockModem(port="/dev/ttyUSB0")
        # ... use modem ...
        modem.close()
    """

    def __init__(
        self,
        port: Optional[str] = None,
        transport: Optional[Transport] = None,
        baudrate: int = 19200,
        timeout: Optional[float] = None,
        config: Optional[SBDConfig] = None,
        trace: Optional[TraceHandler] = None
    ) -> None:
        """
        Initialize RockBlockModem.

        Args:
            port: Serial port path (e.g., "/dev/ttyUSB0"). Either port or transport required.
            transport: Custom transport instance (for testing). Overrides port if provided.
            baudrate: Serial port baud rate (default: 19200)
            timeout: Serial read timeout in seconds (default: None, block forever)
            config: Retry counts, delays and limits (default: SBDConfig())
            trace: Observer hub for wire traffic (default: logs at DEBUG)

        Raises:
            ValueError: If neither port nor transport is provided
            TransportError: If serial port cannot be opened

        Example:

        .. code-block:: python

            # Give up on a silent modem after 60 seconds per line
            modem = RockBlockModem(port="/dev/ttyUSB0", timeout=60.0)

            # Using custom transport (for testing)
            from rockblockpy.core import MockTransport
            modem = RockBlockModem(transport=MockTransport())
        """
        if transport is None and port is None:
            raise ValueError("Either 'port' or 'transport' must be provided")

        if transport is None:
            transport = SerialTransport(
                port=port,
                baudrate=baudrate,
                timeout=timeout
            )
            logger.info(f"Created serial transport for {port}")

        self.config = config if config is not None else SBDConfig()
        self.channel = CommandChannel(transport, trace=trace)

        self.device = DeviceManager(self.channel)
        self.messaging = MessageManager(self.channel, self.config)
        self.network = ConnectivityManager(self.channel, self.config)
        self.session = SessionManager(self.channel, self.messaging, self.config)

        logger.info("Initialized RockBlockModem")

    def send_message(self, payload: Union[bytes, str]) -> SessionOutcome:
        """
        Queue a message, wait for connectivity and run a session.

        Args:
            payload: Message to send (at most config.max_message_length bytes)

        Returns:
            SessionOutcome including any MT messages picked up on the way

        Raises:
            ValidationError: If the payload is too long
            RetryExhaustedError: If connectivity or the session could not be established
        """
        self.messaging.queue_message(payload)
        self.network.attempt_connection()
        return self.session.attempt_session()

    def check_mailbox(self) -> SessionOutcome:
        """
        Wait for connectivity and run a session to collect MT messages.

        Returns:
            SessionOutcome with the retrieved messages
        """
        self.network.attempt_connection()
        return self.session.attempt_session()

    def register_trace_callback(self, name: str, callback: TraceCallback) -> None:
        """
        Register an observer for wire traffic.

        Example:

        .. code-block:: python

            modem.register_trace_callback("print", lambda event: print(event))
        """
        self.channel.trace.register_callback(name, callback)

    def unregister_trace_callback(self, name: str) -> bool:
        """Unregister a wire traffic observer."""
        return self.channel.trace.unregister_callback(name)

    def close(self) -> None:
        """
        Close the modem connection.

        Releases the transport. Any operation blocked on the transport in
        another thread fails with TransportError.
        """
        self.channel.close()
        logger.info("Modem closed")

    @property
    def is_open(self) -> bool:
        """Check if the underlying transport is open."""
        return self.channel.transport.is_open()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, *exc):
        """
        Context manager exit.

        Automatically closes the modem connection.
        """
        self.close()

    def __repr__(self) -> str:
        """String representation of modem."""
        status = "open" if self.is_open else "closed"
        return f"<RockBlockModem status={status}>"
