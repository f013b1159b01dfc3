"""
Device information manager.

Handles modem setup commands and identity queries.
"""

import logging
from typing import TYPE_CHECKING

from ..exceptions import ProtocolMismatchError

if TYPE_CHECKING:
    from ..core import CommandChannel

logger = logging.getLogger(__name__)


class DeviceManager:
    """
    Manages device setup and identity.

    Provides methods for pinging the modem, configuring echo, flow control
    and ring alerts, and reading the serial identifier (IMEI).
    """

    def __init__(self, channel: "CommandChannel") -> None:
        """
        Initialize device manager.

        Args:
            channel: CommandChannel instance for AT command execution
        """
        self.channel = channel
        logger.debug("Initialized DeviceManager")

    def _simple_command(self, cmd: str, what: str) -> None:
        """Send a command whose only reply is OK."""
        reply = self.channel.send_and_read_reply(cmd)
        if reply != "OK":
            raise ProtocolMismatchError(
                reply, "OK",
                command=cmd,
                message=f"{what} failed (got {reply!r})"
            )

    def ping(self) -> None:
        """
        Check the modem answers at all.

        Raises:
            ProtocolMismatchError: If the modem does not answer OK
        """
        logger.info("Pinging modem")
        self._simple_command("AT", "Ping")

    def enable_echo(self) -> None:
        """
        Enable local echo (ATE1).

        The command channel relies on echo to synchronize replies.
        """
        logger.info("Enabling echo")
        self._simple_command("ATE1", "Enable echo")

    def disable_flow_control(self) -> None:
        """Disable RTS/CTS flow control (AT&K0) for 3-wire serial links."""
        logger.info("Disabling flow control")
        self._simple_command("AT&K0", "Disable flow control")

    def disable_ring_alerts(self) -> None:
        """Disable SBD ring alerts (AT+SBDMTA=0)."""
        logger.info("Disabling ring alerts")
        self._simple_command("AT+SBDMTA=0", "Disable ring alerts")

    def get_serial_identifier(self) -> str:
        """
        Get the modem serial identifier (IMEI).

        Returns:
            Serial identifier string

        Example:

        .. code-block:: python

            imei = modem.device.get_serial_identifier()
            print(f"IMEI: {imei}")
        """
        logger.info("Getting serial identifier")
        reply = self.channel.send_and_read_reply("AT+GSN")
        self.channel.expect("OK")
        logger.debug(f"Serial identifier: {reply}")
        return reply

    def initialize(self) -> None:
        """
        Bring the modem into the state the rest of the library expects.

        Runs ping, echo on, ring alerts off and flow control off, in that order.
        """
        self.ping()
        self.enable_echo()
        self.disable_ring_alerts()
        self.disable_flow_control()
        logger.info("Modem initialized")
