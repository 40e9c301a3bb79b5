"""A small static-file HTTP server: request parsing, a GET file handler, a server and a command."""

__version__ = "0.0.1"