"""
Enumeration types for lxcport.
"""

from enum import Enum


class Protocol(str, Enum):
    """
    Forwarding protocol requested by the user.

    BOTH is a request-level value only: it always expands into one TCP
    device and one UDP device, and never appears in a device name.
    """

    TCP = "tcp"
    UDP = "udp"
    BOTH = "both"

    @property
    def legs(self) -> list["Protocol"]:
        """Single-protocol legs in creation order."""
        if self is Protocol.BOTH:
            return [Protocol.TCP, Protocol.UDP]
        return [self]


class LogLevel(str, Enum):
    """
    Logging verbosity levels.

    Levels (from most to least verbose):
        - FULL: Complete trace with detailed stack information
        - DEBUG: Debug messages and above
        - INFO: Informational messages and above
        - WARNING: Only warnings and errors
    """

    FULL = "full"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
