"""SockHTTP - A synchronous HTTP/1.1 client over plain TCP sockets."""

# Import key classes for easier access
from .top import SyncHTTPClient
from .base import Connection, resolve_address, global_startup, global_shutdown
from .models import HTTPRequest, HTTPResponse
from .protocol import format_request, parse_response
from .middlewares import BaseMiddleware, LoggingMiddleware, UserAgentMiddleware
from .client_factory import ClientConfig, load_client_config, create_sync_client
from .exceptions import (
    HTTPClientError,
    HostResolutionError,
    NoUsableAddressError,
    ConnectError,
    SendError,
    ReceiveError,
    GlobalStartupError
)

__version__ = "0.1.0"
