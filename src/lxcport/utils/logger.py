"""
Logging setup for lxcport.

Thin wrapper around loguru so every module logs the same way:

    from lxcport.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("...")

configure_logging() is called once by the CLI entry point. Library code only
ever calls get_logger().
"""

import sys

from loguru import logger as _logger

from lxcport.models.enums import LogLevel

_LEVEL_MAP = {
    LogLevel.FULL: "TRACE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARNING",
}

_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

# Records logged before configure_logging() still need extra["name"]
_logger.configure(extra={"name": "lxcport"})


def get_logger(name: str):
    """Get a logger bound to a module name."""
    return _logger.bind(name=name)


def configure_logging(level: LogLevel | str = LogLevel.INFO, log_file: str = "") -> None:
    """
    Replace loguru's default sink with lxcport's console (and file) sinks.

    Args:
        level: Verbosity level. FULL also enables loguru's extended tracebacks.
        log_file: Optional path of an additional log file sink.
    """
    level = LogLevel(level)
    loguru_level = _LEVEL_MAP[level]
    full = level == LogLevel.FULL

    _logger.remove()
    _logger.add(
        sys.stderr,
        level=loguru_level,
        format=_FORMAT,
        backtrace=full,
        diagnose=full,
    )
    if log_file:
        _logger.add(
            log_file,
            level=loguru_level,
            format=_FORMAT,
            rotation="10 MB",
            backtrace=full,
            diagnose=full,
        )
