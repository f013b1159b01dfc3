"""
RockBlockPy - Python library for Iridium SBD modems (RockBLOCK 9602/9603).
"""

from .version import __version__
from .modem import RockBlockModem
from .config import SBDConfig
from .core import MockTransport, SerialTransport, TraceHandler, TraceEvent

from .types import (
    SbdixReply,
    InboundMessage,
    SessionOutcome,
    MoStatus,
    MtStatus,
)

from .parsers import parse_sbdix

from .exceptions import (
    SBDError,
    TransportError,
    DeviceDisconnectedError,
    ReadTimeoutError,
    ProtocolMismatchError,
    ParseError,
    ValidationError,
    RetryExhaustedError,
)

__all__ = [
    "__version__",
    "RockBlockModem",
    "SBDConfig",
    "MockTransport",
    "SerialTransport",
    "TraceHandler",
    "TraceEvent",
    "SbdixReply",
    "InboundMessage",
    "SessionOutcome",
    "MoStatus",
    "MtStatus",
    "parse_sbdix",
    "SBDError",
    "TransportError",
    "DeviceDisconnectedError",
    "ReadTimeoutError",
    "ProtocolMismatchError",
    "ParseError",
    "ValidationError",
    "RetryExhaustedError",
]
