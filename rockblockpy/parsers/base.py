"""
Base parser classes and utilities.

Provides reusable parsing functionality for AT command replies.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional

from ..exceptions import ParseError

logger = logging.getLogger(__name__)

L = TypeVar('L', str, bytes)
T = TypeVar('T')

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_HEX = re.compile(r"[0-9a-fA-F]+")


class ResponseParser(ABC, Generic[L, T]):
    """
    Abstract base class for reply parsers.

    Parsers convert a single reply line into a typed data structure.
    L is the line type: str for text replies, bytes for binary frames.
    """

    command: Optional[str] = None

    @abstractmethod
    def parse(self, line: L) -> T:
        """
        Parse a reply line.

        Args:
            line: Reply line from the modem (echo already consumed)

        Returns:
            Parsed data structure

        Raises:
            ParseError: If the line cannot be parsed
        """
        pass


def parse_decimal(token: str, command: Optional[str] = None, line: Optional[str] = None) -> int:
    """Parse a signed base-10 integer, rejecting anything else."""
    if not _DECIMAL.fullmatch(token):
        raise ParseError(
            f"Not a decimal integer: {token!r}",
            command=command,
            response=[line] if line is not None else None
        )
    return int(token)


def parse_hex(token: str, command: Optional[str] = None, line: Optional[str] = None) -> int:
    """Parse an unsigned base-16 integer, rejecting anything else."""
    if not _HEX.fullmatch(token):
        raise ParseError(
            f"Not a hexadecimal integer: {token!r}",
            command=command,
            response=[line] if line is not None else None
        )
    return int(token, 16)
