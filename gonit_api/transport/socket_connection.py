"""
Stream socket connection

Line-oriented wrapper around a connected stream socket. Used for both TCP and
Unix domain sockets; framing is newline-delimited UTF-8 text.
"""

import logging
import socket

from gonit_api.transport.transport_interface import ConnectionInterface

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
NEWLINE = b"\n"


class SocketConnection(ConnectionInterface):
    """
    Newline-framed connection over a connected stream socket
    """

    def __init__(self, sock: socket.socket):
        """Wrap a connected socket

        Args:
            sock: Connected stream socket, owned by this connection from now on
        """
        self.sock = sock
        self.reader = sock.makefile("rb")
        self.closed = False

    def write_line(self, line: str) -> None:
        self.sock.sendall(line.encode(ENCODING) + NEWLINE)

    def read_line(self) -> bytes:
        data = self.reader.readline()
        if not data.endswith(NEWLINE):
            # EOF before the terminator: empty or truncated response
            raise ConnectionError(
                f"connection closed after {len(data)} bytes, expected a newline-terminated response"
            )
        return data[:-1].rstrip(b"\r")

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.reader.close()
        finally:
            self.sock.close()
        logger.debug("Socket connection closed")
