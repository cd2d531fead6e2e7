"""
LXC collaborators used by the forwarding manager.

ContainerBackend is the interface the manager depends on: an existence
oracle, a command executor and a configuration fetch. LXCBackend implements
it with the `lxc` CLI; tests substitute an in-memory fake.

Every call takes an optional timeout in seconds. Only these external calls
honor it; parsing and encoding always run to completion.
"""

import subprocess
from typing import Protocol

from lxcport.config import PortConfig
from lxcport.exceptions import CommandError
from lxcport.utils.logger import get_logger

logger = get_logger(__name__)


class ContainerBackend(Protocol):
    """Interface to the container runtime."""

    def container_exists(self, name: str, timeout: float | None = None) -> bool:
        """Return True if the container exists (running or stopped)."""
        ...

    def run_command(self, argv: list[str], timeout: float | None = None) -> None:
        """
        Run a host command.

        Raises:
            CommandError: If the command cannot be started, times out, or
                exits non-zero.
        """
        ...

    def get_config(self, name: str, timeout: float | None = None) -> bytes:
        """
        Return the container configuration as YAML.

        Raises:
            CommandError: If the configuration cannot be fetched.
        """
        ...


class LXCBackend:
    """ContainerBackend backed by the `lxc` command line client."""

    def __init__(self, config: PortConfig | None = None):
        self.config = config or PortConfig()

    @property
    def binary(self) -> str:
        return self.config.LXC_BINARY

    def _timeout(self, timeout: float | None) -> float | None:
        return self.config.TIMEOUT_SECONDS if timeout is None else timeout

    def _execute(
        self, argv: list[str], timeout: float | None
    ) -> subprocess.CompletedProcess:
        """Run argv with stderr folded into stdout."""
        logger.debug(f"Executing host command: {argv}")
        try:
            return subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self._timeout(timeout),
            )
        except FileNotFoundError as e:
            raise CommandError(f"command not found: {argv[0]}", argv) from e
        except subprocess.TimeoutExpired as e:
            output = (e.output or b"").decode(errors="replace")
            raise CommandError(
                f"command timed out after {e.timeout}s: {' '.join(argv)}",
                argv,
                output=output,
            ) from e

    def container_exists(self, name: str, timeout: float | None = None) -> bool:
        """Check container existence with `lxc list <name> --format csv`."""
        try:
            result = self._execute(
                [self.binary, "list", name, "--format", "csv", "--columns", "n"],
                timeout,
            )
        except CommandError as e:
            logger.debug(f"Container existence check for '{name}' failed: {e}")
            return False

        output = result.stdout.decode(errors="replace")
        logger.debug(f"Output: '{output.strip()}'")

        # `lxc list` filters by name prefix, so require an exact row
        names = {line.strip() for line in output.splitlines()}
        exists = result.returncode == 0 and name in names
        logger.debug(f"Container '{name}' exists: {exists}")
        return exists

    def run_command(self, argv: list[str], timeout: float | None = None) -> None:
        """Run a command on the host, raising CommandError on failure."""
        if not argv:
            raise CommandError("no command provided")

        result = self._execute(argv, timeout)
        output = result.stdout.decode(errors="replace")
        if result.returncode != 0:
            logger.debug(f"Host command failed with output: {output}")
            raise CommandError(
                f"command failed: exit status {result.returncode} "
                f"(output: {output.strip()})",
                argv,
                result.returncode,
                output,
            )
        logger.debug(f"Host command succeeded with output: {output}")

    def get_config(self, name: str, timeout: float | None = None) -> bytes:
        """Fetch `lxc config show <name>`."""
        if not name:
            raise CommandError("container name is required")

        argv = [self.binary, "config", "show", name]
        result = self._execute(argv, timeout)
        if result.returncode != 0:
            output = result.stdout.decode(errors="replace")
            logger.debug(f"Failed to get container config: {output}")
            raise CommandError(
                f"failed to get container config: exit status {result.returncode} "
                f"(output: {output.strip()})",
                argv,
                result.returncode,
                output,
            )
        return result.stdout
