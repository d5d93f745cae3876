"""
OpenTelemetry Integration Module

- tracer: span export setup and a client span per RPC call
- metrics: request, error and latency metrics
"""

from .tracer import setup_tracer, create_span
from .metrics import setup_metrics, increment_counter, record_latency

__all__ = [
    "setup_tracer",
    "create_span",
    "setup_metrics",
    "increment_counter",
    "record_latency"
]
