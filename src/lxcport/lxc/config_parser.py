"""
Recover forwarding rules from a container configuration.

Input is the YAML document printed by `lxc config show <container>`:

    devices:
      web-8080-80-tcp:
        connect: tcp:0.0.0.0:8080
        listen: tcp:0.0.0.0:80
        type: proxy

Only proxy devices whose names follow the naming convention for the given
container are considered. A device that fails to decode is logged and
skipped so one malformed legacy device does not hide the others.
"""

import yaml
from pydantic import ValidationError

from lxcport.exceptions import ConfigParseError, DeviceNameError
from lxcport.lxc.naming import DEVICE_TYPE_PROXY, is_port_device, parse_mapping
from lxcport.models.mapping import ContainerDocument, DeviceAttributes, PortMapping
from lxcport.utils.logger import get_logger

logger = get_logger(__name__)


def load_document(raw: bytes | str) -> ContainerDocument:
    """
    Parse raw configuration text into a ContainerDocument.

    Raises:
        ConfigParseError: If the text is not YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"failed to parse container configuration: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            "failed to parse container configuration: "
            f"expected a mapping, got {type(data).__name__}"
        )

    try:
        return ContainerDocument.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"failed to parse container configuration: {e}") from e


def parse_port_mappings(raw: bytes | str, container_name: str) -> list[PortMapping]:
    """Extract the forwarding rules of one container from its configuration."""
    document = load_document(raw)

    mappings: list[PortMapping] = []
    for name, entry in document.devices.items():
        name = str(name)
        if not isinstance(entry, dict):
            logger.debug(f"Skipping device '{name}': not a device mapping")
            continue

        try:
            attrs = DeviceAttributes.model_validate(entry)
        except ValidationError as e:
            logger.debug(f"Skipping device '{name}': invalid attributes: {e}")
            continue

        if attrs.type != DEVICE_TYPE_PROXY or not is_port_device(name, container_name):
            continue

        try:
            mappings.append(parse_mapping(name, attrs))
        except DeviceNameError as e:
            logger.debug(f"Failed to parse port mapping for device '{name}': {e}")
            continue

    return sort_mappings(mappings)


def sort_mappings(mappings: list[PortMapping]) -> list[PortMapping]:
    """Order mappings by host port, then protocol, then device name."""
    return sorted(
        mappings, key=lambda m: (m.host_port, m.protocol, m.device_name)
    )
