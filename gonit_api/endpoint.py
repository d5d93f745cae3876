"""
gonit daemon endpoint

Parses the RPC URL a client is configured with into an immutable endpoint
description. Two transports are understood:

- tcp://host:port  -> TCP connection
- anything else    -> Unix domain socket at the URL's path
"""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

# Filename of the daemon's control socket in the user's home directory
DEFAULT_SOCKET_NAME = ".gonit.sock"


class EndpointScheme:
    """Endpoint scheme constants"""
    TCP = "tcp"
    UNIX = "unix"


def default_socket_path() -> str:
    """Return the default control socket path, ``$HOME/.gonit.sock``"""
    return os.path.join(os.path.expanduser("~"), DEFAULT_SOCKET_NAME)


@dataclass(frozen=True)
class Endpoint:
    """Where the gonit daemon listens"""
    url: str
    scheme: str
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None

    @property
    def is_tcp(self) -> bool:
        return self.scheme == EndpointScheme.TCP

    @property
    def address(self):
        """Address in the form ``socket.connect`` expects"""
        if self.is_tcp:
            return (self.host, self.port)
        return self.path

    @classmethod
    def parse(cls, url: Optional[str] = None) -> "Endpoint":
        """Parse an RPC URL

        Args:
            url: ``tcp://host:port``, ``unix:///path`` or a socket path.
                 None selects the default socket in the home directory.

        Returns:
            Endpoint: Parsed endpoint

        Raises:
            ValueError: A tcp URL without host or port
        """
        if url is None:
            url = default_socket_path()

        parts = urlsplit(url)

        if parts.scheme == EndpointScheme.TCP:
            port = parts.port
            if not parts.hostname or port is None:
                raise ValueError(f"invalid URL {url!r}")
            return cls(url=url, scheme=EndpointScheme.TCP, host=parts.hostname, port=port)

        # A plain path has no scheme; keep it verbatim
        path = parts.path if parts.scheme else url
        if not path:
            raise ValueError(f"invalid URL {url!r}")
        return cls(url=url, scheme=EndpointScheme.UNIX, path=path)

    def __str__(self) -> str:
        if self.is_tcp:
            return f"tcp://{self.host}:{self.port}"
        return self.path
