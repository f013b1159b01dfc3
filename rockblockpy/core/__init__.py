"""
Core modem infrastructure.

Provides low-level building blocks for modem communication:
- Transport: Serial communication abstraction
- Trace: Observer hub for wire traffic
- CommandChannel: send/expect primitives with echo handling
"""

from .transport import Transport, SerialTransport, MockTransport
from .trace import TraceHandler, TraceEvent, TraceCallback
from .channel import CommandChannel

__all__ = [
    "Transport",
    "SerialTransport",
    "MockTransport",
    "TraceHandler",
    "TraceEvent",
    "TraceCallback",
    "CommandChannel",
]
