import logging
import socket
from typing import Callable, Optional, Tuple

from .exceptions import *

logger = logging.getLogger(__name__)

Address = Tuple[str, int]

# 255 usable bytes per read
RECV_BUFFER_SIZE = 255


# Process-wide socket subsystem lifecycle
def global_startup():
    """
    Check that the socket subsystem is usable by this process.

    Call once from the owning application before any client issues a request.
    Clients never call this themselves.
    """
    try:
        probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
    except OSError as e:
        logger.error(f"Socket subsystem startup failed: {e}")
        raise GlobalStartupError(f"Socket subsystem unavailable: {e}", errno=e.errno) from e
    probe.close()
    logger.debug("Socket subsystem started")

def global_shutdown():
    """Counterpart of global_startup(), called once the application is done with clients."""
    logger.debug("Socket subsystem shut down")


# Address Resolution
def resolve_address(host: str, port: int) -> Address:
    """
    Resolve host and port into one connectable IPv4/stream/TCP address.

    The first candidate matching all three criteria wins, the rest are ignored.
    """
    try:
        candidates = socket.getaddrinfo(host, port, socket.AF_INET,
                                        socket.SOCK_STREAM, socket.IPPROTO_TCP)
    except (socket.gaierror, UnicodeError) as e:
        logger.error(f"Couldn't resolve {host}:{port}: {e}")
        raise HostResolutionError(f"Couldn't resolve {host}:{port}: {e}",
                                  host=host, port=port,
                                  errno=getattr(e, 'errno', None)) from e

    for family, socktype, proto, _, sockaddr in candidates:
        if (family == socket.AF_INET and socktype == socket.SOCK_STREAM
                and proto == socket.IPPROTO_TCP):
            logger.debug(f"Resolved {host}:{port} to {sockaddr[0]}:{sockaddr[1]}")
            return sockaddr[0], sockaddr[1]

    logger.error(f"No IPv4/TCP address for {host}:{port} among {len(candidates)} candidate(s)")
    raise NoUsableAddressError(f"No usable IPv4/TCP address for {host}:{port}",
                               host=host, port=port)


# Connection Management
class Connection:
    """
    One TCP socket for exactly one request.

    Use as a context manager so the socket is released on every exit path:

        with Connection(address) as conn:
            conn.send(data)
            raw = conn.receive()
    """

    def __init__(self, address: Address, recv_buffer_size: int = RECV_BUFFER_SIZE,
                 socket_factory: Callable[..., socket.socket] = socket.socket):
        self.address = address
        self.recv_buffer_size = recv_buffer_size
        self._socket_factory = socket_factory
        self._sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def open(self):
        """Create a stream socket and connect it to the resolved address."""
        host, port = self.address
        try:
            sock = self._socket_factory(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        except OSError as e:
            logger.error(f"Couldn't create socket: {e}")
            raise ConnectError(f"Couldn't create socket: {e}", host=host, port=port,
                               errno=e.errno) from e

        try:
            sock.connect(self.address)
        except OSError as e:
            sock.close()
            logger.error(f"Couldn't connect to HTTP server at {host}:{port}: {e}")
            raise ConnectError(f"Couldn't connect to {host}:{port}: {e}", host=host, port=port,
                               errno=e.errno) from e

        self._sock = sock
        return self

    def close(self):
        """Release the socket. Safe to call more than once."""
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    def send(self, data: bytes) -> int:
        """Write all of data, looping over partial writes. Returns the byte count."""
        self._ensure_open()
        view = memoryview(data)
        offset = 0
        remaining = len(data)

        while remaining:
            try:
                sent = self._sock.send(view[offset:offset + remaining])
            except OSError as e:
                host, port = self.address
                logger.error(f"Couldn't send HTTP request after {offset} of {len(data)} bytes: {e}")
                raise SendError(f"Send failed after {offset} of {len(data)} bytes: {e}",
                                host=host, port=port, errno=e.errno) from e

            if sent == 0:
                host, port = self.address
                logger.error(f"Socket accepted no bytes after {offset} of {len(data)} bytes")
                raise SendError(f"Send stalled after {offset} of {len(data)} bytes",
                                host=host, port=port)

            offset += sent
            remaining -= sent

        logger.debug(f"Sent {offset} bytes")
        return offset

    def receive(self) -> bytes:
        """
        Read until a single read returns fewer bytes than the buffer holds.

        Known limitation: a response whose length is an exact multiple of
        recv_buffer_size blocks on one more read, which only returns once the
        server closes the connection.
        """
        self._ensure_open()
        chunks = []

        while True:
            try:
                chunk = self._sock.recv(self.recv_buffer_size)
            except OSError as e:
                host, port = self.address
                logger.error(f"Couldn't receive HTTP response: {e}")
                raise ReceiveError(f"Receive failed: {e}", host=host, port=port,
                                   errno=e.errno) from e

            chunks.append(chunk)
            if len(chunk) != self.recv_buffer_size:
                break

        raw = b"".join(chunks)
        logger.debug(f"Received {len(raw)} bytes")
        return raw

    def _ensure_open(self):
        if self._sock is None:
            raise RuntimeError("Connection is not open")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
