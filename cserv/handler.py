"""Serving files from a root directory in answer to GET requests."""

from __future__ import annotations

import logging
import os
import string

from .http import HttpResponse, HttpStatus, HttpRequest, create_http_response

__all__ = ["validate_path", "content_type_for", "handle_get"]

log = logging.getLogger(__name__)

# A joined file path keeps at most this many characters.
_FILE_PATH_MAX = 4095

_ALLOWED_PATH_CHARS = frozenset(string.ascii_letters + string.digits + "/_.-")

# Checked in order; the first extension found anywhere in the path wins.
_CONTENT_TYPES = (
    (".html", "text/html"),
    (".css", "text/css"),
    (".js", "application/javascript"),
    (".png", "image/png"),
    (".jpg", "image/jpeg"),
    (".jpeg", "image/jpeg"),
    (".ico", "image/x-icon"),
)

_DEFAULT_CONTENT_TYPE = "text/plain"


def validate_path(path: str | None) -> bool:
    """Return True if ``path`` is absolute, has no ``..`` and only safe characters.

    Safe characters are ASCII letters, digits, ``/``, ``_``, ``.`` and ``-``.
    """
    if not path or not path.startswith("/"):
        return False
    if ".." in path:
        return False
    return all(char in _ALLOWED_PATH_CHARS for char in path)


def content_type_for(path: str) -> str:
    """Return the content type implied by the extension found in ``path``."""
    for extension, content_type in _CONTENT_TYPES:
        if extension in path:
            return content_type
    return _DEFAULT_CONTENT_TYPE


def _read_file(file_path: str) -> bytes | None:
    """Return the file's contents, or None if it cannot be opened."""
    try:
        handle = open(file_path, "rb")
    except IsADirectoryError:
        raise
    except OSError:
        return None
    with handle:
        return handle.read()


def handle_get(request: HttpRequest, root_dir: str | os.PathLike[str]) -> HttpResponse:
    """Answer a GET request with the file it names under ``root_dir``."""
    if request.method != "GET":
        return create_http_response(
            HttpStatus.METHOD_NOT_ALLOWED, "text/plain", "Method Not Allowed"
        )

    path = request.path
    if not validate_path(path):
        log.error("Invalid path: %s", path)
        return create_http_response(HttpStatus.BAD_REQUEST, "text/plain", "Bad Request")

    if path == "/":
        path = "/index.html"
    content_type = content_type_for(path)

    log.info("Path: %s", path)
    log.info("Content type: %s", content_type)

    file_path = f"{os.fspath(root_dir)}{path}"[:_FILE_PATH_MAX]
    try:
        content = _read_file(file_path)
    except OSError as error:
        log.error("Failed to read file %s: %s", file_path, error)
        return create_http_response(
            HttpStatus.INTERNAL_SERVER_ERROR, content_type, "Internal Server Error"
        )

    if content is None:
        log.error("File not found: %s", file_path)
        return create_http_response(HttpStatus.NOT_FOUND, content_type, "Not Found")

    if not content:
        # A zero-length read counts as a failed read.
        log.error("Failed to read file (read 0 of 0 bytes): %s", file_path)
        return create_http_response(
            HttpStatus.INTERNAL_SERVER_ERROR, content_type, "Internal Server Error"
        )

    return create_http_response(HttpStatus.OK, content_type, content)