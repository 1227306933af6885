""" Client Factory System with Connection Configuration """

import os, json
from dataclasses import dataclass, field
from typing import Dict, Optional

from .base import RECV_BUFFER_SIZE
from .middlewares import LoggingMiddleware, UserAgentMiddleware
from .top import SyncHTTPClient

ENV_PREFIX = "SOCKHTTP_"


@dataclass
class ClientConfig:
    """Connection settings for one client."""
    host: str
    port: int = 80
    recv_buffer_size: int = RECV_BUFFER_SIZE
    user_agent: Optional[str] = None
    default_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate host, port and buffer size."""
        if not self.host:
            raise ValueError("Host must not be empty")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"Port {self.port} is out of range (1-65535)")
        if self.recv_buffer_size <= 0:
            raise ValueError(f"Receive buffer size must be positive, got {self.recv_buffer_size}")

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "ClientConfig":
        """Build a config from environment variables."""
        host = os.getenv(f"{prefix}HOST")
        if not host:
            raise ValueError(f"Host not found. Please provide it or set {prefix}HOST environment variable.")

        try:
            port = int(os.getenv(f"{prefix}PORT", "80"))
            recv_buffer_size = int(os.getenv(f"{prefix}RECV_BUFFER_SIZE", str(RECV_BUFFER_SIZE)))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting in environment: {e}")

        return cls(
            host=host,
            port=port,
            recv_buffer_size=recv_buffer_size,
            user_agent=os.getenv(f"{prefix}USER_AGENT") or None
        )


def load_client_config(config_file_path: str) -> ClientConfig:
    """Load a client configuration from a JSON file."""
    try:
        with open(config_file_path, 'r') as f: raw_config = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Client configuration file not found at {config_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in client configuration file: {e}")

    if not isinstance(raw_config, dict):
        raise ValueError(f"Client configuration in {config_file_path} must be a JSON object")

    return ClientConfig(**raw_config)


def create_sync_client(config: Optional[ClientConfig] = None, **kwargs) -> SyncHTTPClient:
    """Create a synchronous client from a config, or from the environment when none is given."""
    config = config or ClientConfig.from_env()

    middleware = kwargs.pop('middleware', None)
    if middleware is None:
        middleware = []
        if config.user_agent:
            middleware.append(UserAgentMiddleware(config.user_agent))
        middleware.append(LoggingMiddleware())

    client = SyncHTTPClient(
        host=config.host,
        port=config.port,
        recv_buffer_size=config.recv_buffer_size,
        middleware=middleware,
        **kwargs
    )
    for name, value in config.default_headers.items():
        client.set_system_header(name, value)

    return client
