"""
Port forwarding commands.

Commands:
    add     Forward a host port to a container port
    list    List forwarding rules of a container
    check   Check whether a host port is free
"""

import json
from typing import Annotated

import typer
import yaml

from lxcport.cli.output import console, print_error, print_success, print_warning
from lxcport.config import PortConfig
from lxcport.exceptions import MappingCheckError, PortForwardError
from lxcport.lxc.forwarding import PortForwardManager
from lxcport.lxc.probe import is_port_available, port_usage_info
from lxcport.lxc.report import format_port_mappings

app = typer.Typer(
    help="""Manage port forwarding between host and container using LXC proxy devices.

Examples:
  lxcport port add mycontainer 8080 80        # Add TCP port forwarding
  lxcport port add mycontainer 5432 5432 udp  # Add UDP port forwarding
  lxcport port list mycontainer               # List all port mappings""",
    no_args_is_help=True,
)


def _get_config(ctx: typer.Context, timeout: float | None) -> PortConfig:
    """Config from the root callback, with a per-command timeout override."""
    config = ctx.obj if isinstance(ctx.obj, PortConfig) else PortConfig.from_env()
    if timeout is not None:
        config.TIMEOUT_SECONDS = timeout
    return config


# =============================================================================
# port add
# =============================================================================


@app.command("add")
def add_port(
    ctx: typer.Context,
    container_name: Annotated[str, typer.Argument(help="Container name")],
    host_port: Annotated[str, typer.Argument(help="Host port (1-65535)")],
    container_port: Annotated[str, typer.Argument(help="Container port (1-65535)")],
    protocol: Annotated[
        str, typer.Argument(help="Protocol: tcp, udp or both")
    ] = "tcp",
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Force port mapping creation even if port appears to be in use",
        ),
    ] = False,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Timeout in seconds for LXC commands"),
    ] = None,
    validate: Annotated[
        bool,
        typer.Option("--validate", help="Check the mapping answers after creation"),
    ] = False,
):
    """
    Add port forwarding rule for an LXC container.

    Creates a proxy device forwarding the host port to the container port.
    With protocol 'both', a TCP and a UDP rule are created.
    """
    config = _get_config(ctx, timeout)
    manager = PortForwardManager(config=config)

    try:
        legs = manager.add_mapping(
            container_name, host_port, container_port, protocol, force=force
        )
    except PortForwardError as e:
        print_error(str(e))
        raise typer.Exit(1)

    for leg in legs:
        print_success(
            f"{leg.protocol.value.upper()} {config.BIND_ADDRESS}:{leg.host_port} "
            f"-> {container_name}:{leg.container_port} ({leg.device_name})"
        )

    if validate:
        for leg in legs:
            try:
                manager.check_mapping(leg)
            except MappingCheckError as e:
                print_warning(str(e))


# =============================================================================
# port list
# =============================================================================


@app.command("list")
def list_ports(
    ctx: typer.Context,
    container_name: Annotated[str, typer.Argument(help="Container name")],
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Timeout in seconds for LXC commands"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: table|json|yaml"),
    ] = "table",
):
    """List port forwarding rules for an LXC container."""
    if output_format not in ("table", "json", "yaml"):
        print_error(f"Unknown output format '{output_format}': use table, json or yaml")
        raise typer.Exit(1)

    config = _get_config(ctx, timeout)
    manager = PortForwardManager(config=config)

    try:
        mappings = manager.collect_mappings(container_name)
    except PortForwardError as e:
        print_error(str(e))
        raise typer.Exit(1)

    records = [m.to_dict() for m in mappings]
    if output_format == "json":
        console.print_json(json.dumps(records))
        return
    if output_format == "yaml":
        console.print(
            yaml.safe_dump(records, sort_keys=False, default_flow_style=False),
            end="",
            markup=False,
            highlight=False,
        )
        return

    if not mappings:
        console.print(
            f"No port forwarding rules found for container '{container_name}'",
            highlight=False,
            markup=False,
            soft_wrap=True,
        )
        return

    console.print(
        f"Port mappings for container '{container_name}':",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    console.print(
        format_port_mappings(mappings),
        end="",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


# =============================================================================
# port check
# =============================================================================


@app.command("check")
def check_port(
    host_port: Annotated[int, typer.Argument(help="Host port (1-65535)")],
    protocol: Annotated[str, typer.Argument(help="Protocol: tcp or udp")] = "tcp",
):
    """Check whether a host port is currently free."""
    proto = protocol.lower()
    if proto not in ("tcp", "udp"):
        print_error(f"invalid protocol '{protocol}': must be 'tcp' or 'udp'")
        raise typer.Exit(1)

    if is_port_available(host_port, proto):
        print_success(f"Host port {host_port} ({proto}) is available")
        return

    print_error(f"Host port {host_port} ({proto}) is not available")
    console.print(port_usage_info(host_port), highlight=False, soft_wrap=True)
    raise typer.Exit(1)
