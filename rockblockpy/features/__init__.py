"""
Feature managers for modem functionality.

Provides high-level managers for different modem capabilities:
- DeviceManager: Ping, echo, flow control, ring alerts, serial identifier
- MessageManager: MO buffer writes, MT buffer reads, buffer clearing
- ConnectivityManager: Network time, signal strength, readiness polling
- SessionManager: SBD sessions and MT queue draining
"""

from .device_info import DeviceManager
from .messaging import MessageManager
from .network import ConnectivityManager
from .session import SessionManager

__all__ = [
    "DeviceManager",
    "MessageManager",
    "ConnectivityManager",
    "SessionManager",
]
