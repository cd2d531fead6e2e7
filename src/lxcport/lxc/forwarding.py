"""
Port forwarding manager.

Turns a forwarding request into LXC proxy devices and reads them back.

Add pipeline, per call:
    validate -> container exists -> for each leg: (probe) -> create device

A "both" request runs the TCP leg, then the UDP leg. If the UDP leg fails
the TCP device stays in place; there is no automatic rollback.

Nothing is cached between calls. The container configuration is re-read on
every list.
"""

import time
from dataclasses import dataclass

from lxcport.config import PortConfig
from lxcport.exceptions import (
    CommandError,
    ContainerNotFoundError,
    DeviceCommandError,
    ForwardingValidationError,
    PortConflictError,
)
from lxcport.lxc.backend import ContainerBackend, LXCBackend
from lxcport.lxc.config_parser import parse_port_mappings
from lxcport.lxc.naming import DEVICE_TYPE_PROXY, device_name, proxy_address
from lxcport.lxc.probe import format_port_conflict, is_port_available, validate_mapping
from lxcport.lxc.report import format_port_mappings
from lxcport.models.enums import Protocol
from lxcport.models.mapping import ForwardingRequest, PortMapping
from lxcport.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ForwardingLeg:
    """One created proxy device."""

    device_name: str
    protocol: Protocol
    host_port: int
    container_port: int
    connect: str
    listen: str


class _Deadline:
    """Remaining-time budget shared by the external calls of one operation."""

    def __init__(self, seconds: float | None):
        self._end = None if seconds is None else time.monotonic() + seconds

    def remaining(self) -> float | None:
        if self._end is None:
            return None
        return max(self._end - time.monotonic(), 0.0)


class PortForwardManager:
    """
    Creates and lists port forwarding rules of LXC containers.

    Attributes:
        backend: Existence oracle, command executor and config fetch.
        config: Runtime configuration.
    """

    def __init__(
        self,
        backend: ContainerBackend | None = None,
        config: PortConfig | None = None,
    ):
        self.config = config or PortConfig()
        self.backend = backend or LXCBackend(self.config)

    # =========================================================================
    # Add
    # =========================================================================

    def add_mapping(
        self,
        container_name: str,
        host_port: int | str,
        container_port: int | str,
        protocol: str = "tcp",
        force: bool = False,
        timeout: float | None = None,
    ) -> list[ForwardingLeg]:
        """
        Forward a host port to a container port.

        Args:
            container_name: Target container.
            host_port: Host port, 1-65535.
            container_port: Container port, 1-65535.
            protocol: tcp, udp or both (case-insensitive, empty means tcp).
            force: Skip the host port availability check.
            timeout: Budget for all external calls (default TIMEOUT_SECONDS).

        Returns:
            The created legs, in creation order.

        Raises:
            ForwardingValidationError: Invalid input; nothing external was called.
            ContainerNotFoundError: Container does not exist.
            PortConflictError: Host port is in use and force is not set.
            DeviceCommandError: `lxc config device add` failed.
        """
        request = ForwardingRequest.from_user_input(
            container_name, host_port, container_port, protocol, force
        )
        return self.apply(request, timeout=timeout)

    def apply(
        self, request: ForwardingRequest, timeout: float | None = None
    ) -> list[ForwardingLeg]:
        """Run the add pipeline for an already validated request."""
        deadline = _Deadline(self._timeout(timeout))

        if not self.backend.container_exists(
            request.container_name, timeout=deadline.remaining()
        ):
            raise ContainerNotFoundError(request.container_name)

        created: list[ForwardingLeg] = []
        for leg in request.protocol.legs:
            created.append(self._add_leg(request, leg, deadline))
        return created

    def _add_leg(
        self, request: ForwardingRequest, protocol: Protocol, deadline: _Deadline
    ) -> ForwardingLeg:
        """Create the proxy device for a single protocol."""
        proto = protocol.value
        bind = self.config.BIND_ADDRESS

        if not request.force and not is_port_available(
            request.host_port, proto, address=bind
        ):
            raise PortConflictError(
                format_port_conflict(request.host_port, proto),
                request.host_port,
                proto,
            )

        leg = ForwardingLeg(
            device_name=device_name(
                request.container_name,
                request.host_port,
                request.container_port,
                proto,
            ),
            protocol=protocol,
            host_port=request.host_port,
            container_port=request.container_port,
            connect=proxy_address(proto, bind, request.host_port),
            listen=proxy_address(proto, bind, request.container_port),
        )

        logger.info(
            f"Configuring {proto.upper()} port forwarding: "
            f"{bind}:{request.host_port} -> "
            f"{request.container_name}:{request.container_port}"
        )

        argv = [
            self.config.LXC_BINARY,
            "config",
            "device",
            "add",
            request.container_name,
            leg.device_name,
            DEVICE_TYPE_PROXY,
            f"connect={leg.connect}",
            f"listen={leg.listen}",
        ]
        try:
            self.backend.run_command(argv, timeout=deadline.remaining())
        except CommandError as e:
            raise DeviceCommandError(
                e,
                proto,
                request.host_port,
                request.container_port,
                request.container_name,
                bind,
            ) from e

        logger.info(
            f"Successfully configured {proto.upper()} port forwarding "
            f"{bind}:{request.host_port} -> "
            f"{request.container_name}:{request.container_port}"
        )
        return leg

    def check_mapping(self, leg: ForwardingLeg) -> None:
        """
        Best-effort check that a created leg answers on the host.

        Raises:
            MappingCheckError: If the port looks non-functional.
        """
        validate_mapping(
            leg.host_port,
            leg.protocol.value,
            timeout=self.config.VALIDATE_TIMEOUT_SECONDS,
            settle_delay=self.config.SETTLE_DELAY_SECONDS,
        )

    # =========================================================================
    # List
    # =========================================================================

    def collect_mappings(
        self, container_name: str, timeout: float | None = None
    ) -> list[PortMapping]:
        """
        Read the forwarding rules of a container.

        An empty list means the container has no rules.

        Raises:
            ForwardingValidationError: Empty container name.
            ContainerNotFoundError: Container does not exist.
            CommandError: Configuration could not be fetched.
            ConfigParseError: Configuration is not a valid document.
        """
        if not container_name:
            raise ForwardingValidationError(
                "container name is required", "container_name", container_name
            )

        deadline = _Deadline(self._timeout(timeout))

        if not self.backend.container_exists(
            container_name, timeout=deadline.remaining()
        ):
            raise ContainerNotFoundError(container_name)

        raw = self.backend.get_config(container_name, timeout=deadline.remaining())
        mappings = parse_port_mappings(raw, container_name)
        logger.debug(
            f"Found {len(mappings)} port mapping(s) for container '{container_name}'"
        )
        return mappings

    def list_mappings(self, container_name: str, timeout: float | None = None) -> str:
        """Render the forwarding rules of a container as a text report."""
        return format_port_mappings(self.collect_mappings(container_name, timeout))

    def _timeout(self, timeout: float | None) -> float | None:
        return self.config.TIMEOUT_SECONDS if timeout is None else timeout
