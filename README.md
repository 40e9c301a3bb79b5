# cserv

`cserv` is a small HTTP server that serves static files from one directory.
It reads one request on each connection, answers it and closes the connection.
It handles one connection at a time.

## What it serves

- Only `GET` requests are answered. Any other method gets `405 Method Not Allowed`.
- A request path must start with `/`. It may contain only ASCII letters, digits, `/`, `_`, `.`
  and `-`, and never `..`. Any other path gets `400 Bad Request`.
- `/` serves `index.html`.
- The content type comes from the first of these extensions found anywhere in the path:
  `.html`, `.css`, `.js`, `.png`, `.jpg`, `.jpeg` and `.ico`. Every other file is sent as
  `text/plain`.
- A file that cannot be opened gets `404 Not Found`. An empty file, or a path that names a
  directory, gets `500 Internal Server Error`.
- Every response has the headers `Date`, `Server: CServer/1.0`, `Content-Type`,
  `Content-Length` and `Connection: close`.
- A request that cannot be parsed gets no reply; the connection is closed.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
cserv --port 8080 --directory ./public
```

Options, each given as a flag followed by its value:

| Option | Meaning |
| --- | --- |
| `-p`, `--port` | Port to listen on, from 1 to 65535. The default is 80. |
| `-d`, `--directory` | Root directory to serve. A relative path is resolved against the current directory and must exist. The default is `./`. |
| `-h`, `--help` | Show the help message and exit. |
| `-v`, `--version` | Show the server version and exit. |

Run with no options, `cserv` prints the help message and exits with status 1. An unknown
option, a missing value or a bad port number prints an error and the help message and exits
with status 1. The server listens on every interface and logs each request to the console
until it is interrupted.

## Using it from Python

```python
from cserv.http import parse_http_request, create_http_response, HttpStatus
from cserv.handler import handle_get
from cserv.server import Server

request = parse_http_request("GET /index.html HTTP/1.1\r\nHost: localhost\r\n\r\n")
response = handle_get(request, "/srv/www")
print(response.status, response.content_type)

plain = create_http_response(HttpStatus.NOT_FOUND, "text/plain", "Not Found")
wire_bytes = plain.to_bytes()

server = Server(8080, "/srv/www")
reply = server.respond(b"GET / HTTP/1.1\r\n\r\n")   # bytes, or None
server.serve_forever()
```

- `cserv.http` parses requests (`parse_http_request`, which raises `RequestParseError` when
  the request is empty or its request line is incomplete) and builds responses
  (`create_http_response`, `HttpResponse.to_bytes`). It also has `HttpMethod`, `HttpStatus`,
  `parse_method` and `status_message`.
- `cserv.handler` has `validate_path`, `content_type_for` and `handle_get`.
- `cserv.server.Server` dispatches requests (`handle_request`), turns raw request data into
  response bytes (`respond`), answers one socket (`handle_connection`) and runs the listening
  loop (`serve_forever`).
- `cserv.cli` has `parse_args`, `format_help` and `main`, which is what the `cserv` command runs.

## What it does not do

There is no support for `HEAD`, `POST` or other methods, no keep-alive, no directory listings,
no TLS and no concurrent connections. Only the first 8 KiB of each request are read.