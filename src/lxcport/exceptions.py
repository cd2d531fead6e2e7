"""Port forwarding exception classes."""


class PortForwardError(Exception):
    """Base exception for port forwarding operations."""

    pass


class ForwardingValidationError(PortForwardError):
    """User input failed validation before any external call was made."""

    def __init__(self, message: str, field: str, value=None):
        self.field = field
        self.value = value
        super().__init__(message)


class ContainerNotFoundError(PortForwardError):
    """Target container does not exist."""

    def __init__(self, container_name: str):
        self.container_name = container_name
        super().__init__(f"container '{container_name}' does not exist")


class PortConflictError(PortForwardError):
    """Host port is already bound by another process."""

    def __init__(self, message: str, host_port: int, protocol: str):
        self.host_port = host_port
        self.protocol = protocol
        super().__init__(message)


class CommandError(PortForwardError):
    """An external command failed, timed out, or could not be started."""

    def __init__(
        self,
        message: str,
        argv: list[str] | None = None,
        returncode: int | None = None,
        output: str = "",
    ):
        self.argv = argv or []
        self.returncode = returncode
        self.output = output
        super().__init__(message)


class DeviceCommandError(PortForwardError):
    """Creating a proxy device failed."""

    def __init__(
        self,
        cause: Exception,
        protocol: str,
        host_port: int,
        container_port: int,
        container_name: str,
        bind_address: str = "0.0.0.0",
    ):
        self.protocol = protocol
        self.host_port = host_port
        self.container_port = container_port
        self.container_name = container_name
        super().__init__(
            f"failed to configure {protocol} port forwarding "
            f"{bind_address}:{host_port} -> {container_name}:{container_port}: {cause}"
        )


class DeviceNameError(PortForwardError):
    """Device name does not follow the forwarding naming convention."""

    def __init__(self, device_name: str):
        self.device_name = device_name
        super().__init__(f"invalid device name format: {device_name}")


class ConfigParseError(PortForwardError):
    """Container configuration document could not be parsed."""

    pass


class MappingCheckError(PortForwardError):
    """A created mapping did not answer the post-creation check."""

    def __init__(self, message: str, host_port: int, protocol: str):
        self.host_port = host_port
        self.protocol = protocol
        super().__init__(message)
