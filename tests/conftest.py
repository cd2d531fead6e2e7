"""Shared fixtures for lxcport tests."""

import socket

import pytest

from lxcport.config import PortConfig
from lxcport.exceptions import CommandError
from lxcport.lxc.forwarding import PortForwardManager
from lxcport.models.enums import LogLevel
from lxcport.utils.logger import configure_logging

SAMPLE_CONFIG = b"""\
architecture: x86_64
config:
  image.os: Ubuntu
devices:
  eth0:
    name: eth0
    network: lxdbr0
    type: nic
  web-8080-80-tcp:
    connect: tcp:0.0.0.0:8080
    listen: tcp:0.0.0.0:80
    type: proxy
  web-5353-53-udp:
    connect: udp:127.0.0.1:5353
    listen: udp:10.0.0.5:53
    type: proxy
  web-9000-9000-tcp:
    connect: tcp:0.0.0.0:9000
    listen: tcp:0.0.0.0:9000
    type: disk
  other-8081-81-tcp:
    connect: tcp:0.0.0.0:8081
    listen: tcp:0.0.0.0:81
    type: proxy
ephemeral: false
"""


class FakeBackend:
    """In-memory ContainerBackend recording every call."""

    def __init__(self, containers=None, configs=None):
        self.containers = set(containers or [])
        self.configs = dict(configs or {})
        self.calls: list[tuple] = []
        self.commands: list[list[str]] = []
        # Callable(argv) -> Exception | None, consulted for every run_command
        self.fail_command = None
        self.config_error: Exception | None = None

    def container_exists(self, name, timeout=None):
        self.calls.append(("container_exists", name))
        return name in self.containers

    def run_command(self, argv, timeout=None):
        self.calls.append(("run_command", tuple(argv)))
        self.commands.append(list(argv))
        if self.fail_command is not None:
            error = self.fail_command(argv)
            if error is not None:
                raise error

    def get_config(self, name, timeout=None):
        self.calls.append(("get_config", name))
        if self.config_error is not None:
            raise self.config_error
        return self.configs.get(name, b"devices: {}\n")

    def call_count(self, method):
        return sum(1 for call in self.calls if call[0] == method)


def fail_on(protocol):
    """fail_command hook failing device creation for one protocol."""

    def _hook(argv):
        if argv[-1].startswith(f"listen={protocol}:"):
            return CommandError(f"command failed: exit status 1 (output: {protocol} boom)")
        return None

    return _hook


@pytest.fixture(autouse=True)
def _reset_logging():
    """Point loguru back at the current stderr after CLI runs swap it."""
    yield
    configure_logging(LogLevel.INFO)


@pytest.fixture
def fake_backend():
    return FakeBackend(containers={"web"}, configs={"web": SAMPLE_CONFIG})


@pytest.fixture
def config():
    return PortConfig(TIMEOUT_SECONDS=5.0, SETTLE_DELAY_SECONDS=0.0)


@pytest.fixture
def manager(fake_backend, config):
    return PortForwardManager(backend=fake_backend, config=config)


@pytest.fixture
def tcp_listener():
    """A TCP socket listening on an ephemeral port of all interfaces."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("0.0.0.0", 0))
    sock.listen(1)
    yield sock.getsockname()[1]
    sock.close()


@pytest.fixture
def udp_listener():
    """A UDP socket bound to an ephemeral port of all interfaces."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("0.0.0.0", 0))
    yield sock.getsockname()[1]
    sock.close()


@pytest.fixture
def free_port():
    """A port that was free a moment ago (advisory, like the prober)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("0.0.0.0", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
