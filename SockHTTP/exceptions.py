from typing import Optional

# Exceptions
class HTTPClientError(Exception):
    """Base exception for client-side HTTP errors."""
    def __init__(self, message: str, host: Optional[str] = None,
                 port: Optional[int] = None, errno: Optional[int] = None):
        super().__init__(message)
        self.host = host
        self.port = port
        self.errno = errno

class HostResolutionError(HTTPClientError):
    """Raised when the address-resolution call itself fails."""
    pass

class NoUsableAddressError(HostResolutionError):
    """Raised when resolution succeeds but no IPv4/stream/TCP candidate exists."""
    pass

class ConnectError(HTTPClientError):
    """Raised when socket creation or connect fails."""
    pass

class SendError(HTTPClientError):
    """Raised when a socket write fails."""
    pass

class ReceiveError(HTTPClientError):
    """Raised when a socket read fails."""
    pass

class GlobalStartupError(HTTPClientError):
    """Raised when the socket subsystem is unusable for this process."""
    pass
