import logging
# Configure logging
logger = logging.getLogger(__name__)

from typing import Optional

from .models import *

# Middleware System
class BaseMiddleware:
    """Base class for HTTP middleware."""

    def process_request(self, request: HTTPRequest) -> HTTPRequest:
        """Process the request before it's formatted and sent."""
        return request

    def process_response(self, response: HTTPResponse) -> HTTPResponse:
        """Process the response after it's parsed and the cookie jar is updated."""
        return response

    def process_error(self, error: Exception, request: HTTPRequest) -> None:
        """Observe an error that occurred during the request. The error is re-raised afterwards."""
        return None

class LoggingMiddleware(BaseMiddleware):
    """Middleware for logging requests and responses."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def process_request(self, request: HTTPRequest) -> HTTPRequest:
        self.logger.debug(f"Request: {request.target}")
        return request

    def process_response(self, response: HTTPResponse) -> HTTPResponse:
        self.logger.debug(f"Response: {response.status_code} {response.status_text} ({response.elapsed:.3f}s)")
        return response

    def process_error(self, error: Exception, request: HTTPRequest) -> None:
        self.logger.error(f"Request failed: {request.target} - {error}")

class UserAgentMiddleware(BaseMiddleware):
    """Middleware for adding a user-agent header."""

    def __init__(self, user_agent: str):
        self.user_agent = user_agent

    def process_request(self, request: HTTPRequest) -> HTTPRequest:
        if not any(name.lower() == 'user-agent' for name in request.headers):
            request.headers['user-agent'] = self.user_agent
        return request
