"""
gonit API client

Python client for the gonit process supervisor's JSON-RPC control API.
Requests and responses are single-line JSON objects exchanged over a Unix
domain socket (default ``~/.gonit.sock``) or a TCP connection.
"""

from .client import RpcClient, RpcError, method_name, pascal_case
from .endpoint import Endpoint

__version__ = "0.1.0"

__all__ = [
    "RpcClient",
    "RpcError",
    "Endpoint",
    "method_name",
    "pascal_case"
]
