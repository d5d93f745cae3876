"""
gonit RPC client

Calls the gonit daemon's ``API.*`` methods over newline-delimited JSON.
Each call opens its own connection, writes one request line, reads one
response line and closes the connection:

    >>> client = RpcClient("tcp://127.0.0.1:9999")
    >>> client.call("status_process", "nginx")
    >>> client.stop_group("web")          # same as call("stop_group", "web")
"""

import json
import time
import logging
from functools import partial
from typing import Any, Optional

from gonit_api.endpoint import Endpoint
from gonit_api.transport import TransportFactory, ConnectionInterface
from gonit_api.telemetry.tracer import create_span
from gonit_api.telemetry.metrics import record_latency, increment_counter

logger = logging.getLogger(__name__)

# Namespace the daemon registers its API under
METHOD_NAMESPACE = "API."

ENCODING = "utf-8"


class RpcError(Exception):
    """Raised when the daemon reports an error or its response can't be parsed."""

    def __init__(self, message: str, error: Any = None, response: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error
        self.response = response


def pascal_case(name: str) -> str:
    """``stop_group`` -> ``StopGroup``; only the first letter of each segment changes."""
    return "".join(segment[:1].upper() + segment[1:] for segment in name.split("_"))


def method_name(name: str) -> str:
    """Full RPC method name, e.g. ``status_process`` -> ``API.StatusProcess``"""
    return METHOD_NAMESPACE + pascal_case(name)


class RpcClient:
    """
    Client for the gonit daemon's JSON-RPC API

    Unknown attributes dispatch to call(), so any daemon method can be
    invoked by its snake_case name.
    """

    def __init__(self, url: Optional[str] = None):
        """Initialize the client

        Args:
            url: ``tcp://host:port``, ``unix:///path`` or a socket path;
                 defaults to ``~/.gonit.sock``

        Raises:
            ValueError: Malformed tcp URL
        """
        self.endpoint = Endpoint.parse(url)
        logger.debug(f"gonit RPC client for {self.endpoint}")

    def _connect(self) -> ConnectionInterface:
        return TransportFactory.connect(self.endpoint)

    def call(self, name: str, *args: Any) -> Any:
        """Invoke a daemon method and return its result

        Args:
            name: Method name, snake_case or PascalCase, without the ``API.`` prefix
            *args: JSON-serializable positional parameters

        Returns:
            The response's ``result`` value (None when absent)

        Raises:
            RpcError: The daemon returned an error, or an unparseable response
            OSError: Connecting, writing or reading failed
        """
        method = method_name(name)
        attributes = {"method": method}

        with create_span(f"rpc.client {method}", {"rpc.method": method, "server.address": str(self.endpoint)}):
            try:
                conn = self._connect()
            except OSError as e:
                logger.error(f"Failed to connect to {self.endpoint}: {e}")
                increment_counter("rpc.client.errors", 1, {"type": "io_error", **attributes})
                raise

            start_time = time.time()
            try:
                request_json = json.dumps({"method": method, "params": list(args)}, separators=(",", ":"))
                increment_counter("rpc.client.requests", 1, attributes)
                logger.debug(f"Sending request: {request_json[:200]}")

                conn.write_line(request_json)
                line = conn.read_line()

                latency_ms = (time.time() - start_time) * 1000
                record_latency("rpc.client.latency", latency_ms, attributes)
                logger.debug(f"Received response, latency: {latency_ms:.2f}ms")

                return self._parse_response(method, line)

            except OSError as e:
                logger.error(f"I/O error calling {method} on {self.endpoint}: {e}")
                increment_counter("rpc.client.errors", 1, {"type": "io_error", **attributes})
                raise

            finally:
                conn.close()

    def _parse_response(self, method: str, raw: bytes) -> Any:
        attributes = {"method": method}
        line = raw.decode(ENCODING, errors="replace")

        try:
            # UnicodeDecodeError is a ValueError: bad bytes are a parse failure
            response = json.loads(raw.decode(ENCODING))
        except ValueError as e:
            logger.error(f"Unparseable response to {method}: {line[:200]}")
            increment_counter("rpc.client.errors", 1, {"type": "parse_error", **attributes})
            raise RpcError(f"parsing response `{line}': {e}", response=line) from e

        if not isinstance(response, dict):
            increment_counter("rpc.client.errors", 1, {"type": "parse_error", **attributes})
            raise RpcError(f"unexpected response `{line}': not a JSON object", response=line)

        error = response.get("error")
        if error:
            message = error if isinstance(error, str) else json.dumps(error)
            logger.error(f"RPC call {method} failed: {message}")
            increment_counter("rpc.client.errors", 1, {"type": "rpc_error", **attributes})
            raise RpcError(message, error=error, response=line)

        increment_counter("rpc.client.success", 1, attributes)
        return response.get("result")

    def __getattr__(self, name: str):
        # Only reached for attributes not defined on the class
        if name.startswith("_"):
            raise AttributeError(name)
        return partial(self.call, name)

    # Single process

    def start_process(self, name: str) -> Any:
        return self.call("start_process", name)

    def stop_process(self, name: str) -> Any:
        return self.call("stop_process", name)

    def restart_process(self, name: str) -> Any:
        return self.call("restart_process", name)

    def monitor_process(self, name: str) -> Any:
        return self.call("monitor_process", name)

    def unmonitor_process(self, name: str) -> Any:
        return self.call("unmonitor_process", name)

    def status_process(self, name: str) -> Any:
        return self.call("status_process", name)

    # Process group

    def start_group(self, name: str) -> Any:
        return self.call("start_group", name)

    def stop_group(self, name: str) -> Any:
        return self.call("stop_group", name)

    def restart_group(self, name: str) -> Any:
        return self.call("restart_group", name)

    def monitor_group(self, name: str) -> Any:
        return self.call("monitor_group", name)

    def unmonitor_group(self, name: str) -> Any:
        return self.call("unmonitor_group", name)

    def status_group(self, name: str) -> Any:
        return self.call("status_group", name)

    # Every process

    def start_all(self) -> Any:
        return self.call("start_all")

    def stop_all(self) -> Any:
        return self.call("stop_all")

    def restart_all(self) -> Any:
        return self.call("restart_all")

    def monitor_all(self) -> Any:
        return self.call("monitor_all")

    def unmonitor_all(self) -> Any:
        return self.call("unmonitor_all")

    def status_all(self) -> Any:
        return self.call("status_all")

    # Daemon

    def about(self) -> Any:
        """Daemon version information"""
        return self.call("about")

    def reload(self) -> Any:
        """Reload the daemon's configuration"""
        return self.call("reload")

    def quit(self) -> Any:
        """Shut the daemon down"""
        return self.call("quit")
