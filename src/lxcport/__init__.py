"""
lxcport: host-to-container port forwarding for LXC containers.

Forwarding rules are LXC proxy devices whose names encode the container,
host port, container port and protocol. The container configuration is the
only source of truth; nothing is persisted locally.
"""

__version__ = "0.1.0"
