"""
Host port availability probing.

is_port_available() binds a real socket and releases it immediately. The
answer is advisory: another process may claim the port between the probe
and the proxy device creation.
"""

import socket
import time

from lxcport.exceptions import MappingCheckError
from lxcport.models.mapping import MAX_PORT, MIN_PORT
from lxcport.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_VALIDATE_TIMEOUT = 5.0
DEFAULT_SETTLE_DELAY = 0.1


def is_port_available(port: int, protocol: str, address: str = "0.0.0.0") -> bool:
    """
    Check whether a host port can currently be bound.

    Unknown protocols and out-of-range ports are reported as unavailable
    without touching the network.
    """
    if port < MIN_PORT or port > MAX_PORT:
        return False

    protocol = protocol.lower()
    if protocol == "tcp":
        sock_type = socket.SOCK_STREAM
    elif protocol == "udp":
        sock_type = socket.SOCK_DGRAM
    else:
        logger.debug(f"Unknown protocol '{protocol}' for port availability check")
        return False

    address = address.strip("[]")
    family = socket.AF_INET6 if ":" in address else socket.AF_INET
    sock = socket.socket(family, sock_type)
    try:
        if sock_type == socket.SOCK_STREAM:
            # Ignore TIME_WAIT leftovers; an active listener still conflicts
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((address, port))
            sock.listen(1)
        else:
            sock.bind((address, port))
    except OSError as e:
        logger.debug(f"Port {port} ({protocol.upper()}) appears to be in use: {e}")
        return False
    finally:
        sock.close()

    logger.debug(f"Port {port} ({protocol.upper()}) is available")
    return True


def validate_mapping(
    host_port: int,
    protocol: str,
    timeout: float = DEFAULT_VALIDATE_TIMEOUT,
    settle_delay: float = DEFAULT_SETTLE_DELAY,
) -> None:
    """
    Best-effort check that a created mapping answers on localhost.

    TCP connects to the port; UDP can only send a datagram, so it only
    detects local errors such as an unreachable address.

    Raises:
        MappingCheckError: If the port looks non-functional or the protocol
            is unknown.
    """
    if timeout <= 0:
        timeout = DEFAULT_VALIDATE_TIMEOUT

    time.sleep(settle_delay)

    protocol = protocol.lower()
    label = protocol.upper()

    if protocol == "tcp":
        try:
            conn = socket.create_connection(("localhost", host_port), timeout=timeout)
        except OSError as e:
            raise MappingCheckError(
                f"port {host_port} ({label}) appears to be non-functional: {e}",
                host_port,
                protocol,
            ) from e
        conn.close()
        logger.debug(f"Port {host_port} (TCP) mapping validated successfully")
        return

    if protocol == "udp":
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.settimeout(timeout)
                sock.connect(("localhost", host_port))
                sock.send(b"")
        except OSError as e:
            raise MappingCheckError(
                f"port {host_port} ({label}) appears to be non-functional: {e}",
                host_port,
                protocol,
            ) from e
        logger.debug(f"Port {host_port} (UDP) mapping validated (basic check)")
        return

    raise MappingCheckError(
        f"cannot validate unknown protocol '{protocol}'", host_port, protocol
    )


def format_port_conflict(host_port: int | str, protocol: str) -> str:
    """Build the user-facing message for a host port that is already bound."""
    return (
        f"host port {host_port} ({protocol}) is already in use\n"
        "\n"
        "Suggestions:\n"
        f"  • Use a different host port: lxcport port add <container> <other-port> <container-port> {protocol}\n"
        f"  • Check what's using the port: ss -tuln | grep :{host_port}\n"
        f"  • Force creation anyway: lxcport port add <container> {host_port} <container-port> {protocol} --force\n"
        "\n"
        "Note: Forced creation may result in non-functional port mapping"
    )


def port_usage_info(port: int) -> str:
    """Hint on how to find what holds a port."""
    return (
        f"Port {port} may be in use by another service. "
        f"Use 'ss -tuln | grep :{port}' or 'netstat -tuln | grep :{port}' to investigate."
    )
