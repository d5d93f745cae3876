"""
Configuration settings for the gonit API command line client
"""
import os
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from gonit_api.endpoint import default_socket_path


@dataclass
class ClientConfig:
    """Main configuration for the command line client"""
    rpc_url: str = field(default_factory=default_socket_path)
    log_level: str = "WARNING"

    # Tracing/metrics export; disabled when no endpoint is set
    otlp_endpoint: Optional[str] = None
    service_name: str = "gonit-api"

    @property
    def telemetry_enabled(self) -> bool:
        return bool(self.otlp_endpoint)

    @classmethod
    def default(cls) -> "ClientConfig":
        """Create default configuration"""
        return cls()

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config from environment variables"""
        defaults = cls.default()
        return cls(
            rpc_url=os.getenv("GONIT_RPC_URL", defaults.rpc_url),
            log_level=os.getenv("GONIT_LOG_LEVEL", defaults.log_level).upper(),
            otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
            service_name=os.getenv("OTEL_SERVICE_NAME", defaults.service_name),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "rpc_url": self.rpc_url,
            "log_level": self.log_level,
            "otlp_endpoint": self.otlp_endpoint,
            "service_name": self.service_name,
        }
