import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple, Union

QueryParams = Union[Dict[str, Any], Sequence[Tuple[str, Any]]]

# Request/Response Models
@dataclass
class HTTPRequest:
    """Represents one outgoing HTTP request, before persistent state is merged in."""
    method: str
    path: str
    query_params: QueryParams = field(default_factory=dict)
    body: bytes = b""
    content_type: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.body, str):
            self.body = self.body.encode('utf-8')

    @property
    def target(self) -> str:
        return f"{self.method} {self.path}"

@dataclass
class HTTPResponse:
    """Represents a parsed HTTP response."""
    raw: bytes = b""
    protocol_version: str = ""
    status_code: int = 0
    status_text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    request: Optional[HTTPRequest] = None
    elapsed: float = 0.0

    def reset(self):
        """Clear every field so the object can take a fresh response."""
        self.raw = b""
        self.protocol_version = ""
        self.status_code = 0
        self.status_text = ""
        self.headers = {}
        self.cookies = {}
        self.body = b""
        self.elapsed = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def json(self) -> Any:
        return json.loads(self.text)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)
