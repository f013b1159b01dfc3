"""
Configuration for connection polling and session handling.

All retry counts, delays and thresholds used by the feature managers live
here instead of being embedded in the protocol code.
"""

from dataclasses import dataclass


@dataclass
class SBDConfig:
    """
    Tunable limits for an SBD conversation.

    Attributes:
        time_attempts: Network time queries before giving up (AT-MSSTM)
        time_delay: Seconds between network time queries
        signal_attempts: Signal strength queries before giving up (AT+CSQ)
        signal_delay: Seconds between signal strength queries
        signal_threshold: Minimum signal bars (0-5) needed to start a session
        session_attempts: AT+SBDIX tries per session
        session_retry_delay: Seconds between failed AT+SBDIX tries
        max_drain_sessions: Extra sessions allowed per call to fetch queued MT messages
        max_message_length: Largest MO payload the modem accepts, in bytes

    Example:

    .. code-block:: python

        # Faster polling for a bench setup with a clear sky view
        config = SBDConfig(time_attempts=5, signal_delay=2.0)
    """
    time_attempts: int = 20
    time_delay: float = 1.0
    signal_attempts: int = 10
    signal_delay: float = 10.0
    signal_threshold: int = 2
    session_attempts: int = 3
    session_retry_delay: float = 0.0
    max_drain_sessions: int = 8
    max_message_length: int = 340

    def __post_init__(self) -> None:
        for name in ("time_attempts", "signal_attempts", "session_attempts"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")

        for name in ("time_delay", "signal_delay", "session_retry_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

        if self.max_drain_sessions < 0:
            raise ValueError("max_drain_sessions must not be negative")

        if not 0 <= self.signal_threshold <= 5:
            raise ValueError("signal_threshold must be between 0 and 5")

        if self.max_message_length < 0:
            raise ValueError("max_message_length must not be negative")
