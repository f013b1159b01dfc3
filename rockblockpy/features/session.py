"""
Session manager.

Drives AT+SBDIX sessions, reads any MT message that arrived and keeps
starting sessions while the gateway reports more messages queued.
"""

import logging
import time
from typing import TYPE_CHECKING

from ..config import SBDConfig
from ..types import InboundMessage, SessionOutcome
from ..parsers.sbd import SbdixParser, SBDIX_PREFIX
from ..exceptions import SBDError, TransportError, RetryExhaustedError

if TYPE_CHECKING:
    from ..core import CommandChannel
    from .messaging import MessageManager

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages SBD sessions with the gateway.

    One call to attempt_session() sends whatever is in the MO buffer,
    collects MT messages and drains the gateway queue, bounded by
    config.max_drain_sessions.
    """

    def __init__(
        self,
        channel: "CommandChannel",
        messaging: "MessageManager",
        config: SBDConfig
    ) -> None:
        """
        Initialize session manager.

        Args:
            channel: CommandChannel instance for AT command execution
            messaging: MessageManager used to read MT messages and clear the MO buffer
            config: Attempt budget and drain limit
        """
        self.channel = channel
        self.messaging = messaging
        self.config = config
        self._sbdix_parser = SbdixParser()
        logger.debug("Initialized SessionManager")

    def _clear_mo_buffer(self) -> None:
        """Clear the MO buffer; failure only gets logged."""
        try:
            self.messaging.clear_mo_buffer()
        except TransportError:
            raise
        except SBDError as e:
            logger.warning(f"Ignoring failure to clear MO buffer: {e}")

    def attempt_session(self) -> SessionOutcome:
        """
        Run SBD sessions until the mailbox is checked and drained.

        Returns:
            SessionOutcome with every MT message retrieved

        Raises:
            RetryExhaustedError: If no session succeeded within the attempt
                budget. Its ``messages`` holds anything retrieved so far.
            ProtocolMismatchError: If a reply or MT message read goes wrong
            TransportError: If the channel fails

        Example:

        .. code-block:: python

            outcome = modem.session.attempt_session()
            for message in outcome.messages:
                print(message.text)
        """
        command = "AT+SBDIX"
        outcome = SessionOutcome()
        attempts = self.config.session_attempts
        drains = 0
        tries = 0

        logger.info(f"Attempt session (attempts={attempts})")

        while attempts > 0:
            attempts -= 1
            tries += 1

            reply = self.channel.send_and_read_reply(command)

            if SBDIX_PREFIX not in reply:
                logger.warning(f"No session status in reply: {reply!r}")
                self._pause(attempts)
                continue

            status = self._sbdix_parser.parse(reply)
            self.channel.expect("OK")

            outcome.sessions += 1
            outcome.replies.append(status)
            logger.info(f"Session status: {status.mo_status_text} {status}")

            attempt_ok = status.mo_success
            if attempt_ok:
                self._clear_mo_buffer()
                outcome.success = True

            if status.has_mt_message:
                payload = self.messaging.retrieve_mt_message()
                if payload:
                    outcome.messages.append(InboundMessage(payload, status.mt_msn))

            if status.mt_queued > 0:
                if drains < self.config.max_drain_sessions:
                    drains += 1
                    attempts = self.config.session_attempts
                    logger.info(
                        f"{status.mt_queued} MT message(s) queued at gateway, "
                        f"starting drain session {drains}/{self.config.max_drain_sessions}"
                    )
                    continue
                logger.warning(
                    f"Drain limit reached with {status.mt_queued} MT message(s) still queued"
                )

            if attempt_ok:
                return outcome

            self._pause(attempts)

        if outcome.success:
            logger.warning("Stopped draining MT messages after running out of attempts")
            return outcome

        raise RetryExhaustedError(
            "Unable to establish session",
            attempts=tries,
            messages=outcome.messages,
            command=command
        )

    def _pause(self, attempts_left: int) -> None:
        if attempts_left > 0 and self.config.session_retry_delay > 0:
            time.sleep(self.config.session_retry_delay)
