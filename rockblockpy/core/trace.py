"""
Traffic trace handler.

Dispatches every line sent to or received from the modem to registered
observers, so protocol code never logs wire traffic itself.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict

logger = logging.getLogger(__name__)

SEND = ">"
RECV = "#"


@dataclass(frozen=True)
class TraceEvent:
    """One unit of wire traffic."""
    direction: str  # SEND or RECV
    data: bytes

    @property
    def text(self) -> str:
        return self.data.decode("latin-1")

    def __str__(self) -> str:
        return f"{self.direction} {self.text.rstrip()!r}"


# Type alias for trace callbacks
TraceCallback = Callable[[TraceEvent], None]


def log_trace(event: TraceEvent) -> None:
    """Default observer: write traffic to this module's logger at DEBUG."""
    logger.debug(str(event))


class TraceHandler:
    """
    Fans out trace events to observers.

    Features:
    - Bounded history of recent traffic
    - Named callback registration
    - Misbehaving callbacks are logged and do not break the conversation
    """

    def __init__(self, max_history: int = 200, log_traffic: bool = True) -> None:
        """
        Initialize trace handler.

        Args:
            max_history: Number of recent events to keep
            log_traffic: Register the default logging observer
        """
        self._history: Deque[TraceEvent] = deque(maxlen=max_history)
        self._callbacks: Dict[str, TraceCallback] = {}
        self._lock = threading.Lock()

        if log_traffic:
            self._callbacks["log"] = log_trace

    def register_callback(self, name: str, callback: TraceCallback) -> None:
        """
        Register an observer.

        Args:
            name: Key used to unregister the observer later
            callback: Function called with each TraceEvent

        Example:

        .. code-block:: python

            handler.register_callback("print", lambda ev: print(ev))
        """
        with self._lock:
            self._callbacks[name] = callback
            logger.debug(f"Registered trace callback: {name}")

    def unregister_callback(self, name: str) -> bool:
        """
        Unregister an observer.

        Returns:
            True if callback was removed, False if not found
        """
        with self._lock:
            if name in self._callbacks:
                del self._callbacks[name]
                return True
            return False

    def sent(self, data: bytes) -> None:
        self.emit(TraceEvent(SEND, data))

    def received(self, data: bytes) -> None:
        self.emit(TraceEvent(RECV, data))

    def emit(self, event: TraceEvent) -> None:
        """Record an event and dispatch it to every observer."""
        with self._lock:
            self._history.append(event)
            callbacks = list(self._callbacks.items())

        # Call callbacks outside lock
        for name, callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Trace callback '{name}' failed: {e}", exc_info=True)

    def history(self) -> list[TraceEvent]:
        """Get a copy of recent events (oldest first)."""
        with self._lock:
            return list(self._history)

    def clear(self) -> None:
        with self._lock:
            self._history.clear()
