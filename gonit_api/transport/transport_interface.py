"""
Transport connection interface

Defines the interface shared by every connection the client opens to the
gonit daemon (TCP or Unix domain socket). The client only relies on this
interface, so the underlying socket type can change without touching the
call path.
"""

import abc


class ConnectionInterface(abc.ABC):
    """A single request/response connection to the daemon"""

    @abc.abstractmethod
    def write_line(self, line: str) -> None:
        """Write one line, appending the newline terminator

        Args:
            line: Serialized message without trailing newline

        Raises:
            OSError: Write failed
        """
        pass

    @abc.abstractmethod
    def read_line(self) -> bytes:
        """Read one newline-terminated line

        Returns:
            bytes: The raw line with the terminator stripped; decoding is left
                   to the caller so undecodable bytes surface as a parse failure

        Raises:
            ConnectionError: Peer closed before a full line arrived
            OSError: Read failed
        """
        pass

    @abc.abstractmethod
    def close(self) -> None:
        """Close the connection and release the socket"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
