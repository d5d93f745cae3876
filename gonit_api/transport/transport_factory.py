"""
Transport factory

Opens connections to the gonit daemon. Chooses the socket family from the
endpoint scheme (TCP or Unix domain socket) so callers never deal with raw
sockets.
"""

import logging
import socket

from gonit_api.endpoint import Endpoint, EndpointScheme
from gonit_api.transport.transport_interface import ConnectionInterface
from gonit_api.transport.socket_connection import SocketConnection

logger = logging.getLogger(__name__)


class TransportType:
    """Transport type constants"""
    TCP = EndpointScheme.TCP
    UNIX = EndpointScheme.UNIX


class TransportFactory:
    """Transport factory, creates one connection per call"""

    @staticmethod
    def connect(endpoint: Endpoint) -> ConnectionInterface:
        """Open a new connection to the endpoint

        No timeout is set; the OS defaults apply.

        Args:
            endpoint: Parsed daemon endpoint

        Returns:
            ConnectionInterface: Connected, line-framed connection

        Raises:
            OSError: Connection failed (refused, missing socket file, ...)
            ValueError: Unknown transport type
        """
        if endpoint.scheme == TransportType.TCP:
            # create_connection resolves the host and handles IPv4/IPv6
            sock = socket.create_connection(endpoint.address)
        elif endpoint.scheme == TransportType.UNIX:
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.connect(endpoint.address)
            except OSError:
                sock.close()
                raise
        else:
            raise ValueError(f"Unknown transport type: {endpoint.scheme}")

        logger.debug(f"Connected to {endpoint}")
        return SocketConnection(sock)
