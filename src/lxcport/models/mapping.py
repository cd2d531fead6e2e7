"""
Data model for port forwarding.

ForwardingRequest is the validated, transient input of one add call.
DeviceAttributes and ContainerDocument mirror the parts of
`lxc config show` output that matter for forwarding.
PortMapping is the record recovered from one proxy device at list time.
"""

import re
from dataclasses import asdict, dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from lxcport.exceptions import ForwardingValidationError
from lxcport.models.enums import Protocol

MIN_PORT = 1
MAX_PORT = 65535

_INT_PATTERN = re.compile(r"[+-]?\d+")


# =============================================================================
# Request
# =============================================================================


def _parse_port(value: Any, label: str, field: str) -> int:
    """Parse a user-supplied port, raising a field-specific validation error."""
    if isinstance(value, int) and not isinstance(value, bool):
        port = value
    else:
        text = "" if value is None else str(value)
        if text == "":
            raise ForwardingValidationError(f"{label} is required", field, text)
        if not _INT_PATTERN.fullmatch(text):
            raise ForwardingValidationError(
                f"invalid {label} '{text}': must be a number", field, text
            )
        port = int(text)

    if port < MIN_PORT or port > MAX_PORT:
        raise ForwardingValidationError(
            f"invalid {label} '{value}': must be between {MIN_PORT} and {MAX_PORT}",
            field,
            value,
        )
    return port


def normalize_protocol(protocol: str | Protocol | None) -> str:
    """Trim and lowercase a protocol, substituting tcp for an empty value."""
    if isinstance(protocol, Protocol):
        return protocol.value
    text = (protocol or "").strip().lower()
    return text or Protocol.TCP.value


@dataclass(frozen=True)
class ForwardingRequest:
    """A validated forwarding request."""

    container_name: str
    host_port: int
    container_port: int
    protocol: Protocol = Protocol.TCP
    force: bool = False

    @classmethod
    def from_user_input(
        cls,
        container_name: str,
        host_port: int | str,
        container_port: int | str,
        protocol: str | Protocol | None = "",
        force: bool = False,
    ) -> "ForwardingRequest":
        """
        Validate raw user input and build a request.

        Fields are checked in order (container name, host port, container
        port, protocol); the first invalid one raises.

        Raises:
            ForwardingValidationError: naming the offending field and its constraint.
        """
        if not container_name:
            raise ForwardingValidationError(
                "container name is required", "container_name", container_name
            )

        host = _parse_port(host_port, "host port", "host_port")
        container = _parse_port(container_port, "container port", "container_port")

        normalized = normalize_protocol(protocol)
        try:
            proto = Protocol(normalized)
        except ValueError:
            raise ForwardingValidationError(
                f"invalid protocol '{normalized}': must be 'tcp', 'udp', or 'both'",
                "protocol",
                protocol,
            ) from None

        return cls(
            container_name=container_name,
            host_port=host,
            container_port=container,
            protocol=proto,
            force=force,
        )


# =============================================================================
# Container Configuration
# =============================================================================


class DeviceAttributes(BaseModel):
    """One entry of the `devices:` map in a container configuration."""

    model_config = ConfigDict(extra="ignore")

    type: str = ""
    connect: str = ""
    listen: str = ""

    @field_validator("type", "connect", "listen", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        # `listen:` with no value or `connect: 8080` still lists the device
        if value is None:
            return ""
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value


class ContainerDocument(BaseModel):
    """The subset of `lxc config show` output used for listing."""

    model_config = ConfigDict(extra="ignore")

    # Raw per-device maps; each one is validated on its own so a single
    # malformed device cannot fail the whole document.
    devices: dict[Any, Any] = {}

    @field_validator("devices", mode="before")
    @classmethod
    def _empty_devices(cls, value: Any) -> Any:
        return {} if value is None else value


# =============================================================================
# Listing Result
# =============================================================================


@dataclass
class PortMapping:
    """A forwarding rule recovered from one proxy device."""

    device_name: str
    protocol: str  # Uppercased for display, e.g. "TCP"
    host_port: int
    container_port: int
    host_ip: str = "0.0.0.0"
    container_ip: str = "0.0.0.0"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
