"""
Configuration for lxcport.

A PortConfig instance is built once by the CLI (defaults, then LXCPORT_*
environment variables, then command-line options) and passed explicitly to
the backend and the forwarding manager.

Usage:
    from lxcport.config import PortConfig

    config = PortConfig.from_env()
    config.TIMEOUT_SECONDS = 60
"""

import os
from dataclasses import dataclass

from lxcport.models.enums import LogLevel


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class PortConfig:
    """
    Port forwarding configuration.

    Attributes:
        LXC_BINARY: LXC client used for every external command.
        TIMEOUT_SECONDS: Deadline for each external command.
        BIND_ADDRESS: Address used in proxy connect/listen strings.
        SETTLE_DELAY_SECONDS: Wait before checking a freshly created mapping.
        VALIDATE_TIMEOUT_SECONDS: Connect timeout of the mapping check.
        LOG_LEVEL: Logging verbosity level.
        LOG_FILE: Optional log file path (empty = console only).
    """

    # -------------------------------------------------------------------------
    # LXC Configuration
    # -------------------------------------------------------------------------

    LXC_BINARY: str = "lxc"
    TIMEOUT_SECONDS: float = 30.0

    # -------------------------------------------------------------------------
    # Network Configuration
    # -------------------------------------------------------------------------

    BIND_ADDRESS: str = "0.0.0.0"

    # Give LXC a moment to set up the proxy before checking it
    SETTLE_DELAY_SECONDS: float = 0.1
    VALIDATE_TIMEOUT_SECONDS: float = 5.0

    # -------------------------------------------------------------------------
    # Logging Configuration
    # -------------------------------------------------------------------------

    LOG_LEVEL: LogLevel = LogLevel.INFO
    LOG_FILE: str = ""

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "PortConfig":
        """
        Build a config from defaults overlaid with LXCPORT_* variables.

        Args:
            environ: Mapping to read instead of os.environ.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if env.get("LXCPORT_LXC_BINARY"):
            config.LXC_BINARY = env["LXCPORT_LXC_BINARY"]
        if env.get("LXCPORT_TIMEOUT"):
            config.TIMEOUT_SECONDS = float(env["LXCPORT_TIMEOUT"])
        if env.get("LXCPORT_BIND_ADDRESS"):
            config.BIND_ADDRESS = env["LXCPORT_BIND_ADDRESS"]
        if env.get("LXCPORT_LOG_LEVEL"):
            config.LOG_LEVEL = LogLevel(env["LXCPORT_LOG_LEVEL"].lower())
        if env.get("LXCPORT_LOG_FILE"):
            config.LOG_FILE = env["LXCPORT_LOG_FILE"]

        return config
