"""Fixed-width text report of forwarding rules."""

from lxcport.models.mapping import PortMapping

HEADER = "PROTOCOL  HOST PORT  CONTAINER PORT  HOST IP      CONTAINER IP  DEVICE NAME"
SEPARATOR = "--------  ---------  --------------  -----------  ------------  -----------"


def format_port_mappings(mappings: list[PortMapping]) -> str:
    """
    Render mappings as a table.

    Returns an empty string for no mappings; callers print their own
    "no rules" message.
    """
    if not mappings:
        return ""

    lines = [HEADER, SEPARATOR]
    for m in mappings:
        lines.append(
            f"{m.protocol:<8}  {m.host_port!s:<9}  {m.container_port!s:<14}  "
            f"{m.host_ip:<11}  {m.container_ip:<12}  {m.device_name}"
        )
    return "\n".join(lines) + "\n"
