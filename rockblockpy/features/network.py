"""
Connectivity manager.

Handles network time, signal strength and the polling that decides whether
the modem is ready for a session.
"""

import logging
import time
from datetime import datetime
from typing import TYPE_CHECKING

from ..config import SBDConfig
from ..parsers.sbd import NetworkTimeParser, SignalStrengthParser, ticks_to_datetime
from ..exceptions import ParseError, ProtocolMismatchError, RetryExhaustedError

if TYPE_CHECKING:
    from ..core import CommandChannel

logger = logging.getLogger(__name__)


class ConnectivityManager:
    """
    Manages satellite connectivity checks.

    Provides methods for reading system time and signal strength, and for
    waiting until both are good enough to start a session.
    """

    def __init__(self, channel: "CommandChannel", config: SBDConfig) -> None:
        """
        Initialize connectivity manager.

        Args:
            channel: CommandChannel instance for AT command execution
            config: Polling counts, delays and the signal threshold
        """
        self.channel = channel
        self.config = config

        # Parsers
        self._time_parser = NetworkTimeParser()
        self._signal_parser = SignalStrengthParser()

        logger.debug("Initialized ConnectivityManager")

    def _read_system_time(self) -> str:
        reply = self.channel.send_and_read_reply("AT-MSSTM")
        self.channel.expect("OK")
        return reply

    def is_network_time_valid(self) -> None:
        """
        Check the modem has received system time from the network.

        Raises:
            ProtocolMismatchError: If no network time is available yet
        """
        reply = self._read_system_time()

        # The length includes the prefix
        if not self._time_parser.is_valid(reply):
            raise ProtocolMismatchError(
                reply, "-MSSTM: <8 hex digits>",
                command="AT-MSSTM",
                message=f"Unexpected reply: {reply!r}"
            )

    def get_signal_strength(self) -> int:
        """
        Get signal strength in bars.

        Returns:
            Signal bars, 0-5

        Example:

        .. code-block:: python

            bars = modem.network.get_signal_strength()
            print(f"Signal: {bars}/5")
        """
        logger.info("Getting signal strength")
        reply = self.channel.send_and_read_reply("AT+CSQ")
        self._signal_parser.check_shape(reply)
        self.channel.expect("OK")

        signal = self._signal_parser.parse(reply)
        logger.debug(f"Signal strength: {signal}")
        return signal

    def get_network_time(self) -> int:
        """
        Get network time.

        Returns:
            UTC seconds since the Unix epoch

        Raises:
            ParseError: If the modem has no time fix yet
        """
        logger.info("Getting network time")
        reply = self._read_system_time()
        seconds = self._time_parser.parse(reply)
        logger.debug(f"Network time: {seconds}")
        return seconds

    def get_network_datetime(self) -> datetime:
        """
        Get network time as an aware UTC datetime, with millisecond resolution.

        Raises:
            ParseError: If the modem has no time fix yet
        """
        reply = self._read_system_time()
        return ticks_to_datetime(self._time_parser.ticks(reply))

    def wait_for_network_time(self) -> None:
        """
        Poll AT-MSSTM until the modem reports valid network time.

        Raises:
            RetryExhaustedError: If no valid time after config.time_attempts queries
        """
        attempts = self.config.time_attempts
        delay = self.config.time_delay

        logger.info(f"Attempting connection (attempts={attempts}, delay={delay})")

        for attempt in range(1, attempts + 1):
            try:
                self.is_network_time_valid()
                logger.info(f"Network time valid after {attempt} attempt(s)")
                return
            except (ProtocolMismatchError, ParseError) as e:
                logger.warning(f"No network time ({attempt}/{attempts}): {e}")

            if attempt < attempts:
                time.sleep(delay)

        raise RetryExhaustedError(
            "Unable to establish connection",
            attempts=attempts,
            command="AT-MSSTM"
        )

    def wait_for_signal(self) -> int:
        """
        Poll AT+CSQ until signal reaches config.signal_threshold.

        Returns:
            The signal strength that met the threshold

        Raises:
            RetryExhaustedError: If the threshold is never met
        """
        attempts = self.config.signal_attempts
        delay = self.config.signal_delay
        threshold = self.config.signal_threshold

        logger.info(f"Waiting for signal of {threshold} (attempts={attempts}, delay={delay})")

        for attempt in range(1, attempts + 1):
            signal = self.get_signal_strength()

            if signal < 0:
                raise RetryExhaustedError(
                    "Unable to find required signal",
                    attempts=attempt,
                    command="AT+CSQ"
                )

            if signal >= threshold:
                logger.info(f"Signal {signal} meets threshold {threshold}")
                return signal

            logger.warning(f"Signal {signal} below threshold {threshold} ({attempt}/{attempts})")

            if attempt < attempts:
                time.sleep(delay)

        raise RetryExhaustedError(
            "Unable to find required signal",
            attempts=attempts,
            command="AT+CSQ"
        )

    def attempt_connection(self) -> int:
        """
        Wait for network time, then for adequate signal.

        Returns:
            Signal strength at the time the modem was judged ready

        Raises:
            RetryExhaustedError: If either phase runs out of attempts
            TransportError: If the channel fails

        Example:

        .. code-block:: python

            modem.network.attempt_connection()
            outcome = modem.session.attempt_session()
        """
        self.wait_for_network_time()
        return self.wait_for_signal()
