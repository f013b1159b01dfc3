"""
Reply parsers for AT command replies.

Provides type-safe parsing of modem replies into structured data.
"""

from .base import ResponseParser, parse_decimal, parse_hex
from .sbd import (
    SbdixParser,
    SignalStrengthParser,
    NetworkTimeParser,
    MtFrameParser,
    parse_sbdix,
    ticks_to_unix,
    ticks_to_datetime,
    IRIDIUM_EPOCH_MS,
)

__all__ = [
    "ResponseParser",
    "parse_decimal",
    "parse_hex",
    "SbdixParser",
    "SignalStrengthParser",
    "NetworkTimeParser",
    "MtFrameParser",
    "parse_sbdix",
    "ticks_to_unix",
    "ticks_to_datetime",
    "IRIDIUM_EPOCH_MS",
]
