"""
Exceptions for RockBlockPy library.

Provides detailed error information for debugging modem communication issues.
"""

from typing import Optional


def render_visible(text: str) -> str:
    """
    Render control characters in a reply so they show up in error messages.

    Args:
        text: Raw text from or for the modem

    Returns:
        Text with "\\r" as <cr>, "\\n" as <lf> and other control bytes as <0xNN>
    """
    parts = []
    for ch in text:
        if ch == "\r":
            parts.append("<cr>")
        elif ch == "\n":
            parts.append("<lf>")
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            parts.append(f"<0x{ord(ch):02x}>")
        else:
            parts.append(ch)
    return "".join(parts)


class SBDError(Exception):
    """
    Base exception for Iridium SBD modem errors.

    All RockBlockPy exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        response: Optional[list[str]] = None
    ) -> None:
        """
        Initialize exception with context.

        Args:
            message: Error description
            command: AT command that caused the error (if applicable)
            response: Modem response (if applicable)
        """
        self.command = command
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with context."""
        parts = [super().__str__()]

        if self.command:
            parts.append(f"Command: {self.command}")

        if self.response:
            parts.append(f"Response: {self.response}")

        return " | ".join(parts)


class TransportError(SBDError):
    """
    Raised when transport layer fails.

    This indicates:
    - Serial port issues
    - Connection lost
    - Hardware communication failure
    """
    pass


class DeviceDisconnectedError(TransportError):
    """
    Raised when device is disconnected during operation.

    This is a fatal error that requires closing and reopening the connection.
    """
    pass


class ReadTimeoutError(TransportError):
    """
    Raised when a read timeout is configured on the transport and no
    complete line arrived in time.
    """
    pass


class ProtocolMismatchError(SBDError):
    """
    Raised when the modem sent something other than the expected token.

    Both strings are kept on the exception; control characters are rendered
    visibly in the message.
    """

    def __init__(
        self,
        actual: str,
        expected: str,
        command: Optional[str] = None,
        message: Optional[str] = None
    ) -> None:
        self.actual = actual
        self.expected = expected
        if message is None:
            message = (
                f"Unexpected reply (got {render_visible(actual)!r}, "
                f"expected {render_visible(expected)!r})"
            )
        super().__init__(message, command=command, response=[actual])


class ParseError(SBDError):
    """
    Raised when a reply field does not conform to its fixed format.

    This indicates:
    - Wrong number of fields
    - Non-numeric data where a number is required
    - Placeholder values the modem sends when it has no fix
    """
    pass


class ValidationError(SBDError):
    """
    Raised when caller-supplied input violates a precondition.

    Detected before any I/O takes place.
    """
    pass


class RetryExhaustedError(SBDError):
    """
    Raised when a bounded polling or session loop ran out of attempts.

    Attributes:
        attempts: Total number of commands sent before giving up
        messages: Inbound messages accumulated before giving up (session loop)
    """

    def __init__(
        self,
        message: str,
        attempts: int = 0,
        messages: Optional[list] = None,
        command: Optional[str] = None
    ) -> None:
        self.attempts = attempts
        self.messages = list(messages) if messages else []
        super().__init__(message, command=command)
