"""HTTP request parsing and response building."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from email.utils import formatdate

__all__ = [
    "HttpMethod",
    "HttpStatus",
    "HttpRequest",
    "HttpResponse",
    "RequestParseError",
    "parse_method",
    "status_message",
    "parse_http_request",
    "create_http_response",
]

# Field limits: stored values keep at most this many characters.
_METHOD_MAX = 15
_PATH_MAX = 511
_VERSION_MAX = 15
_HOST_MAX = 255
_USER_AGENT_MAX = 511
_ACCEPT_MAX = 255
_CONNECTION_MAX = 31
_CONTENT_TYPE_MAX = 63

# Formatted headers must fit below this many bytes.
_HEADER_LIMIT = 512

_WHITESPACE = " \t\n\v\f\r"
_LINE_SPLIT = re.compile(r"[\r\n]+")

SERVER_NAME = "CServer/1.0"
HTTP_VERSION = "HTTP/1.1"


class RequestParseError(ValueError):
    """Raised when raw request text cannot be parsed."""


class HttpMethod(enum.Enum):
    """HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


class HttpStatus(enum.IntEnum):
    """Common HTTP status codes."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503


_STATUS_MESSAGES = {
    HttpStatus.OK: "OK",
    HttpStatus.CREATED: "Created",
    HttpStatus.NO_CONTENT: "No Content",
    HttpStatus.BAD_REQUEST: "Bad Request",
    HttpStatus.UNAUTHORIZED: "Unauthorized",
    HttpStatus.FORBIDDEN: "Forbidden",
    HttpStatus.NOT_FOUND: "Not Found",
    HttpStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HttpStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HttpStatus.NOT_IMPLEMENTED: "Not Implemented",
    HttpStatus.SERVICE_UNAVAILABLE: "Service Unavailable",
}


def parse_method(method: str) -> HttpMethod | None:
    """Return the method named by ``method`` (case-insensitive), or None."""
    try:
        return HttpMethod(method.upper())
    except ValueError:
        return None


def status_message(status: int) -> str:
    """Return the reason phrase for a status code, or ``"Unknown"``."""
    try:
        return _STATUS_MESSAGES[HttpStatus(status)]
    except ValueError:
        return "Unknown"


@dataclass
class HttpRequest:
    """The parts of an HTTP request the server cares about."""

    method: str
    path: str
    version: str
    host: str = ""
    user_agent: str = ""
    accept: str = ""
    connection: str = ""

    def describe(self) -> str:
        """Return a human-readable summary of the request."""
        lines = [
            "",
            "-" * 40,
            "HTTP Request:",
            f"Method: {self.method}",
            f"Path: {self.path}",
            f"Version: {self.version}",
            f"Host: {self.host}",
        ]
        if self.user_agent:
            lines.append(f"User-Agent: {self.user_agent}")
        if self.accept:
            lines.append(f"Accept: {self.accept}")
        if self.connection:
            lines.append(f"Connection: {self.connection}")
        lines.append("-" * 40)
        return "\n".join(lines) + "\n"


# Header name prefix -> (request attribute, maximum length). Order matters.
_HEADERS = (
    ("host", "host", _HOST_MAX),
    ("user-agent", "user_agent", _USER_AGENT_MAX),
    ("accept", "accept", _ACCEPT_MAX),
    ("connection", "connection", _CONNECTION_MAX),
)


def _header_value(line: str, limit: int) -> str | None:
    _, colon, value = line.partition(":")
    if not colon:
        return None
    return value[:limit].strip(_WHITESPACE)


def parse_http_request(raw_request: str | bytes) -> HttpRequest:
    """Parse raw request text into an :class:`HttpRequest`.

    Raises :class:`RequestParseError` if the request is empty or its
    request line lacks a method, path or version.
    """
    if raw_request is None:
        raise RequestParseError("raw request is missing")
    if isinstance(raw_request, (bytes, bytearray)):
        raw_request = bytes(raw_request).decode("utf-8", errors="replace")
    raw_request = raw_request.split("\0", 1)[0]

    lines = [line for line in _LINE_SPLIT.split(raw_request) if line]
    if not lines:
        raise RequestParseError("empty request")

    parts = lines[0].split(" ")
    tokens = [part for part in parts if part]
    if len(tokens) < 3:
        raise RequestParseError(
            "malformed request line - missing method, path, or version"
        )
    method, path, version = tokens[:3]

    request = HttpRequest(
        method=method[:_METHOD_MAX],
        path=path[:_PATH_MAX],
        version=version[:_VERSION_MAX],
    )

    for line in lines[1:]:
        lowered = line.lower()
        for prefix, attribute, limit in _HEADERS:
            if not lowered.startswith(prefix):
                continue
            value = _header_value(line, limit)
            if value is not None:
                setattr(request, attribute, value)
                break

    if not request.method or not request.path:
        raise RequestParseError("invalid request - empty method or path")
    return request


@dataclass
class HttpResponse:
    """An HTTP response ready to be serialised."""

    status: int
    status_message: str
    date: str
    content_type: str
    content_length: int = 0
    body: bytes | None = None
    version: str = HTTP_VERSION
    server: str = SERVER_NAME
    connection: str = "close"

    def to_bytes(self) -> bytes:
        """Serialise the response into wire format.

        Raises ValueError if the formatted headers are too large.
        """
        header = (
            f"{self.version} {int(self.status)} {self.status_message}\r\n"
            f"Date: {self.date}\r\n"
            f"Server: {self.server}\r\n"
            f"Content-Type: {self.content_type}\r\n"
            f"Content-Length: {self.content_length}\r\n"
            f"Connection: {self.connection}\r\n"
            "\r\n"
        ).encode("utf-8")
        if len(header) >= _HEADER_LIMIT:
            raise ValueError("HTTP response headers are too large")
        if self.body and self.content_length > 0:
            return header + self.body[: self.content_length]
        return header


def create_http_response(
    status: int, content_type: str, body: str | bytes | None
) -> HttpResponse:
    """Build a response with the default headers filled in.

    Raises ValueError if ``content_type`` is None.
    """
    if content_type is None:
        raise ValueError("content type is required for an HTTP response")
    if isinstance(body, str):
        body = body.encode("utf-8")
    elif body is not None:
        body = bytes(body)
    return HttpResponse(
        status=status,
        status_message=status_message(status),
        date=formatdate(usegmt=True),
        content_type=content_type[:_CONTENT_TYPE_MAX],
        content_length=len(body) if body is not None else 0,
        body=body,
    )