"""A small blocking HTTP server that serves files from one directory."""

from __future__ import annotations

import logging
import os
import socket

from .handler import handle_get
from .http import (
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpStatus,
    RequestParseError,
    create_http_response,
    parse_http_request,
    parse_method,
)

__all__ = ["Server", "DEFAULT_PORT"]

log = logging.getLogger(__name__)

DEFAULT_PORT = 80
MAX_DIR_PATH_SIZE = 4096
MAX_BUFFER_SIZE = 8 * 1024
CONNECTION_BACKLOG = 64


class Server:
    """Serve the files under ``directory`` over HTTP on ``port``."""

    def __init__(self, port: int, directory: str | os.PathLike[str]) -> None:
        self.port = port
        self.directory = os.fspath(directory)[: MAX_DIR_PATH_SIZE - 1]

    def handle_request(self, request: HttpRequest) -> HttpResponse:
        """Dispatch a parsed request to the handler for its method."""
        if parse_method(request.method) is HttpMethod.GET:
            return handle_get(request, self.directory)
        return create_http_response(
            HttpStatus.METHOD_NOT_ALLOWED, "text/plain", "Method Not Allowed"
        )

    def respond(self, raw_request: str | bytes) -> bytes | None:
        """Return the wire response for raw request data.

        Returns None when the request cannot be parsed or the response
        cannot be serialised; the connection is then closed without a reply.
        """
        try:
            request = parse_http_request(raw_request)
        except RequestParseError as error:
            log.error("Failed to parse request: %s", error)
            return None
        log.info("%s", request.describe())

        response = self.handle_request(request)
        try:
            data = response.to_bytes()
        except ValueError as error:
            log.error("Failed to convert response to bytes: %s", error)
            return None
        log.info("Response created")
        return data

    def handle_connection(self, conn: socket.socket) -> None:
        """Read one request from ``conn``, answer it and close the connection."""
        with conn:
            try:
                raw = conn.recv(MAX_BUFFER_SIZE)
            except OSError as error:
                log.error("Socket read failed: %s", error)
                return
            log.info("Request received")
            data = self.respond(raw)
            if data is not None:
                conn.sendall(data)

    def serve_forever(self) -> None:
        """Listen on all interfaces and handle connections until interrupted.

        Raises OSError if the listening socket cannot be set up.
        """
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind(("", self.port))
            listener.listen(CONNECTION_BACKLOG)

            print(f"Server listening on port {self.port}...")
            print(f"Visit http://localhost:{self.port} in your browser")

            while True:
                print("Waiting for connections...")
                try:
                    conn, _ = listener.accept()
                except OSError as error:
                    log.error("accept: %s", error)
                    continue
                self.handle_connection(conn)