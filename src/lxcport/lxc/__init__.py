"""
LXC proxy device port forwarding.

Provides:
- Device naming (encode/decode of forwarding rules)
- Host port availability probing
- Configuration parsing and report formatting
- The forwarding manager tying them together
"""

from lxcport.lxc.backend import ContainerBackend, LXCBackend
from lxcport.lxc.config_parser import parse_port_mappings
from lxcport.lxc.forwarding import ForwardingLeg, PortForwardManager
from lxcport.lxc.naming import device_name, is_port_device, parse_mapping
from lxcport.lxc.probe import (
    format_port_conflict,
    is_port_available,
    port_usage_info,
    validate_mapping,
)
from lxcport.lxc.report import format_port_mappings

__all__ = [
    # Manager
    "PortForwardManager",
    "ForwardingLeg",
    # Backend
    "ContainerBackend",
    "LXCBackend",
    # Naming
    "device_name",
    "is_port_device",
    "parse_mapping",
    # Probing
    "is_port_available",
    "validate_mapping",
    "format_port_conflict",
    "port_usage_info",
    # Listing
    "parse_port_mappings",
    "format_port_mappings",
]
