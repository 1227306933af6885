"""
Synchronous HTTP/1.1 client over plain TCP sockets.

Every request opens a fresh connection, sends the whole request, reads the
whole response and closes the connection again. Cookies set by the server are
kept in a per-client jar and sent back on every later request.
"""

import logging
import socket
import time
from typing import Any, Callable, Dict, List, Optional

from .base import Address, Connection, RECV_BUFFER_SIZE, resolve_address
from .middlewares import BaseMiddleware, HTTPRequest, HTTPResponse
from .protocol import HEAD_ENCODING, format_request, parse_response
from .utils import merge_mappings

logger = logging.getLogger(__name__)


# Synchronous Client
class SyncHTTPClient:
    """
    HTTP client bound to one host and port for its whole lifetime.

    Not thread-safe: the cookie jar and system headers are mutated in place,
    so concurrent callers sharing one client must serialize their requests.
    On a name collision the client's system headers win over headers passed
    to request(), while cookies passed to request() win over the jar.
    """

    def __init__(self, host: str, port: int = 80,
                 recv_buffer_size: int = RECV_BUFFER_SIZE,
                 middleware: Optional[List[BaseMiddleware]] = None,
                 socket_factory: Callable[..., socket.socket] = socket.socket):
        self.host = host
        self.port = port
        self.recv_buffer_size = recv_buffer_size
        self.middleware = middleware or []
        self.system_headers: Dict[str, str] = {}
        self.cookies: Dict[str, str] = {}
        self._address: Optional[Address] = None
        self._socket_factory = socket_factory
        self._closed = False

        self._setup_system_headers()

    def _setup_system_headers(self):
        self.system_headers["host"] = f"{self.host}:{self.port}"

    @property
    def address(self) -> Optional[Address]:
        return self._address

    def resolve_host(self) -> Address:
        """Resolve the target host and cache the address for later connects."""
        self._address = resolve_address(self.host, self.port)
        return self._address

    def set_system_header(self, name: str, value: str):
        """Add or replace a header sent with every request."""
        self.system_headers[name] = value

    def clear_cookies(self):
        self.cookies.clear()

    def request(self, method: str, path: str, query_params: Any = None,
                body: bytes = b"", content_type: str = "",
                headers: Optional[Dict[str, str]] = None,
                cookies: Optional[Dict[str, str]] = None) -> HTTPResponse:
        """Send one request over a new connection and return the parsed response."""
        if self._closed:
            raise RuntimeError("Client is closed")

        request = HTTPRequest(
            method=method,
            path=path,
            query_params=query_params or {},
            body=body or b"",
            content_type=content_type,
            headers=dict(headers or {}),
            cookies=dict(cookies or {})
        )

        # Process request through middleware
        for middleware in self.middleware:
            request = middleware.process_request(request)

        try:
            response = self._execute_request(request)
        except Exception as error:
            for middleware in self.middleware:
                middleware.process_error(error, request)
            raise

        # Process response through middleware
        for middleware in reversed(self.middleware):
            response = middleware.process_response(response)

        return response

    def _execute_request(self, request: HTTPRequest) -> HTTPResponse:
        # System headers override caller headers, caller cookies override the jar
        merged_headers = merge_mappings(request.headers, self.system_headers)
        merged_cookies = merge_mappings(self.cookies, request.cookies)
        raw_request = format_request(
            request.method, request.path, request.query_params, request.body,
            request.content_type, merged_headers, merged_cookies
        )

        address = self._address or self.resolve_host()
        response = HTTPResponse(request=request)
        start_time = time.time()

        with Connection(address, self.recv_buffer_size, self._socket_factory) as conn:
            conn.send(raw_request)

            response.reset()
            raw = conn.receive()
            parse_response(raw, response)
            response.elapsed = time.time() - start_time
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Raw response:\n{raw.decode(HEAD_ENCODING)}")

            # Response cookies always overwrite the jar
            self.cookies.update(response.cookies)

        return response

    def get(self, path: str, query_params: Any = None, **kwargs) -> HTTPResponse:
        return self.request('GET', path, query_params, **kwargs)

    def head(self, path: str, query_params: Any = None, **kwargs) -> HTTPResponse:
        return self.request('HEAD', path, query_params, **kwargs)

    def post(self, path: str, body: bytes = b"", content_type: str = "application/octet-stream",
             **kwargs) -> HTTPResponse:
        """Send a POST request with body."""
        return self.request('POST', path, body=body, content_type=content_type, **kwargs)

    def put(self, path: str, body: bytes = b"", content_type: str = "application/octet-stream",
            **kwargs) -> HTTPResponse:
        """Send a PUT request with body."""
        return self.request('PUT', path, body=body, content_type=content_type, **kwargs)

    def delete(self, path: str, query_params: Any = None, **kwargs) -> HTTPResponse:
        return self.request('DELETE', path, query_params, **kwargs)

    def close(self):
        """Close the client and drop its cookies."""
        self._closed = True
        self.cookies.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
