"""
Proxy device naming conventions.

A forwarding rule is stored as a proxy device named

    {container}-{host_port}-{container_port}-{protocol}

where protocol is tcp or udp. The name is the only identity a rule has.
Container names may themselves contain '-', so decoding always takes the
last three tokens as host port, container port and protocol.
"""

import ipaddress
import re

from lxcport.exceptions import DeviceNameError
from lxcport.models.mapping import DeviceAttributes, PortMapping

DEVICE_TYPE_PROXY = "proxy"
DEFAULT_IP = "0.0.0.0"


def _is_ascii_number(text: str) -> bool:
    return text.isascii() and text.isdecimal()


def device_name(
    container_name: str, host_port: int | str, container_port: int | str, protocol: str
) -> str:
    """Generate proxy device name for one forwarding leg."""
    return f"{container_name}-{host_port}-{container_port}-{protocol}"


def proxy_address(protocol: str, address: str, port: int | str) -> str:
    """Build a proxy connect/listen address, e.g. "tcp:0.0.0.0:8080"."""
    if ":" in address and not address.startswith("["):
        address = f"[{address}]"
    return f"{protocol}:{address}:{port}"


def is_port_device(name: str, container_name: str) -> bool:
    """Check whether a device name belongs to a forwarding rule of this container."""
    pattern = rf"{re.escape(container_name)}-[0-9]+-[0-9]+-(tcp|udp)"
    return re.fullmatch(pattern, name) is not None


def parse_address(address: str | None) -> str:
    """
    Extract the IP from a "proto:ip:port" address.

    IPv6 hosts are accepted in brackets ("tcp:[::1]:80"). A missing or
    malformed address yields 0.0.0.0.
    """
    if not address or address.count(":") < 2:
        return DEFAULT_IP

    _, rest = address.split(":", 1)
    host, _, port = rest.rpartition(":")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not _is_ascii_number(port):
        return DEFAULT_IP

    try:
        return str(ipaddress.ip_address(host))
    except ValueError:
        return DEFAULT_IP


def parse_mapping(name: str, attrs: DeviceAttributes) -> PortMapping:
    """
    Decode a device name and its attributes into a PortMapping.

    Raises:
        DeviceNameError: If the name has fewer than four '-' tokens or its
            port tokens are not numeric.
    """
    parts = name.split("-")
    if len(parts) < 4:
        raise DeviceNameError(name)

    *_, host_port, container_port, protocol = parts
    if not (_is_ascii_number(host_port) and _is_ascii_number(container_port)):
        raise DeviceNameError(name)

    return PortMapping(
        device_name=name,
        protocol=protocol.upper(),
        host_port=int(host_port),
        container_port=int(container_port),
        host_ip=parse_address(attrs.connect),
        container_ip=parse_address(attrs.listen),
    )
