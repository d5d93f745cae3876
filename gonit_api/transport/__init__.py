"""
Transport Module

Connections used by the RPC client to reach the gonit daemon:
- TCP (tcp://host:port)
- Unix domain socket (default: ~/.gonit.sock)

Every connection carries exactly one newline-delimited JSON request and response.
"""

from .transport_factory import TransportFactory, TransportType
from .transport_interface import ConnectionInterface
from .socket_connection import SocketConnection

__all__ = [
    "TransportFactory",
    "TransportType",
    "ConnectionInterface",
    "SocketConnection"
]
