"""
Wire format for HTTP/1.1 requests and responses.

Both functions are pure: they never touch sockets or client state, so the
cookie jar and system headers are merged by the caller before formatting and
applied by the caller after parsing.
"""

from typing import Any, Dict, Optional

from .models import HTTPResponse
from .utils import CRLF, iter_query_pairs, split

HTTP_VERSION = "HTTP/1.1"
HEAD_ENCODING = "iso-8859-1"
# Request heads go out as UTF-8 so any path, header or cookie text can be sent
REQUEST_ENCODING = "utf-8"

# Parser states
STATUS, HEADERS, BODY = range(3)


def format_request(method: str, path: str, query_params: Any, body: bytes,
                   content_type: str, headers: Dict[str, str],
                   cookies: Dict[str, str]) -> bytes:
    """Render a request, already merged with persistent state, into raw bytes."""
    query_string = ""
    pairs = list(iter_query_pairs(query_params))
    if pairs:
        # Every pair is followed by '&', the last one included
        query_string = "?" + "".join(f"{key}={value}&" for key, value in pairs)

    head = f"{method} {path}{query_string} {HTTP_VERSION}\r\n"

    for name, value in headers.items():
        head += f"{name}: {value}\r\n"

    if cookies:
        head += "cookie: " + "".join(f"{name}={value};" for name, value in cookies.items()) + "\r\n"

    if body:
        head += f"content-length: {len(body)}\r\n"
        head += f"content-type: {content_type}\r\n"

    head += "\r\n"

    return head.encode(REQUEST_ENCODING) + (body or b"")


def _leading_int(text: str) -> int:
    """Parse the leading decimal digits of text, 0 when there are none."""
    text = text.strip()
    digits = ""
    for char in text:
        if char not in "0123456789":
            break
        digits += char
    return int(digits) if digits else 0


def parse_response(raw: bytes, response: Optional[HTTPResponse] = None) -> HTTPResponse:
    """
    Parse a fully received response buffer.

    Runs a STATUS -> HEADERS -> BODY state machine over the CRLF-split lines.
    ``set-cookie`` headers land in ``response.cookies`` (name and value only,
    attributes after the first ';' are dropped) instead of ``response.headers``.
    Header values start two characters after the colon, so exactly one space
    after the colon is assumed.
    """
    if response is None:
        response = HTTPResponse()
    response.raw = raw

    state = STATUS
    content_length: Optional[int] = None
    body = b""
    body_lines = 0

    for line in split(raw):
        if state == STATUS:
            parts = line.decode(HEAD_ENCODING).split(None, 2)
            if parts:
                response.protocol_version = parts[0]
            if len(parts) > 1:
                response.status_code = _leading_int(parts[1])
            if len(parts) > 2:
                response.status_text = parts[2]
            state = HEADERS

        elif state == HEADERS:
            if not line:
                state = BODY
                continue

            text = line.decode(HEAD_ENCODING)
            pos = text.find(':')
            if pos == -1:
                continue

            key = text[:pos].lower()
            value = text[pos + 2:]

            if key == "set-cookie":
                cookie_name, sep, cookie_value = value.partition('=')
                if not sep:
                    continue
                response.cookies[cookie_name] = cookie_value.split(';', 1)[0]
            else:
                response.headers[key] = value
                if key == "content-length":
                    content_length = _leading_int(value)

        else:
            if content_length is None:
                # Unbounded body: keep everything after the blank line as-is
                if body_lines:
                    body += CRLF
                body += line
            else:
                body += line
                if len(body) < content_length:
                    body += CRLF
            body_lines += 1

    if content_length is not None:
        body = body[:content_length]
    response.body = body
    return response
