"""
Data types and structures for RockBlockPy.

Provides type-safe representations of modem data.
"""

from dataclasses import dataclass, field
from enum import IntEnum


class MoStatus(IntEnum):
    """
    Mobile originated status codes reported by AT+SBDIX.

    Codes 0-4 mean the session with the gateway completed; anything
    above is a failed session.
    """
    TRANSFERRED = 0
    TRANSFERRED_MT_TOO_BIG = 1
    TRANSFERRED_LOCATION_REJECTED = 2
    # 3 and 4 are reserved but still count as success
    RESERVED_3 = 3
    RESERVED_4 = 4
    GSS_TIMEOUT = 10
    GSS_QUEUE_FULL = 11
    MO_TOO_MANY_SEGMENTS = 12
    GSS_INCOMPLETE_SESSION = 13
    INVALID_SEGMENT_SIZE = 14
    GSS_ACCESS_DENIED = 15
    ISU_LOCKED = 16
    GATEWAY_NOT_RESPONDING = 17
    CONNECTION_LOST = 18
    LINK_FAILURE = 19
    NO_NETWORK_SERVICE = 32
    ANTENNA_FAULT = 33
    RADIO_DISABLED = 34
    ISU_BUSY = 35
    TRY_LATER = 36
    SBD_SERVICE_DISABLED = 37
    TRAFFIC_MANAGEMENT = 38
    BAND_VIOLATION = 64
    PLL_LOCK_FAILURE = 65


class MtStatus(IntEnum):
    """Mobile terminated status codes reported by AT+SBDIX."""
    NO_MESSAGE = 0
    RECEIVED = 1
    ERROR = 2


@dataclass(frozen=True)
class SbdixReply:
    """
    Session result from AT+SBDIX.

    Reply format: "+SBDIX: <MO status>, <MOMSN>, <MT status>, <MTMSN>, <MT length>, <MT queued>"
    """
    mo_status: int   # MO session outcome (see MoStatus)
    msn: int         # MO message sequence number
    mt_status: int   # MT session outcome (see MtStatus)
    mt_msn: int      # MT message sequence number
    mt_length: int   # Length of the MT message waiting in the buffer
    mt_queued: int   # MT messages still queued at the gateway

    @property
    def mo_success(self) -> bool:
        """Check if the mailbox check/transfer completed."""
        return self.mo_status <= 4

    @property
    def has_mt_message(self) -> bool:
        """Check if an MT message was received into the modem buffer."""
        return self.mt_status == MtStatus.RECEIVED and self.mt_length > 0

    @property
    def mo_status_text(self) -> str:
        """Get a readable name for the MO status code."""
        try:
            return MoStatus(self.mo_status).name
        except ValueError:
            return f"UNKNOWN_{self.mo_status}"


@dataclass(frozen=True)
class InboundMessage:
    """A mobile terminated message read from the modem with AT+SBDRB."""
    payload: bytes
    mt_msn: int = -1

    @property
    def text(self) -> str:
        """Payload decoded as UTF-8 (undecodable bytes replaced)."""
        return self.payload.decode("utf-8", errors="replace")

    def __len__(self) -> int:
        return len(self.payload)


@dataclass
class SessionOutcome:
    """
    Result of SessionManager.attempt_session().

    Attributes:
        success: True if at least one session completed with MO status 0-4
        messages: Inbound messages retrieved, in arrival order
        sessions: Number of AT+SBDIX sessions that returned a status line
        replies: Every parsed AT+SBDIX status line, in order
    """
    success: bool = False
    messages: list[InboundMessage] = field(default_factory=list)
    sessions: int = 0
    replies: list[SbdixReply] = field(default_factory=list)

    @property
    def payloads(self) -> list[bytes]:
        """Raw payloads of all retrieved messages."""
        return [m.payload for m in self.messages]
