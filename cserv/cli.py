"""Command-line entry point for the file server."""

from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from .server import DEFAULT_PORT, MAX_DIR_PATH_SIZE, Server

__all__ = ["Options", "UsageError", "format_help", "parse_args", "main", "VERSION"]

VERSION = "0.0.1"
DEFAULT_DIRECTORY = "./"

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


class UsageError(ValueError):
    """Raised when the command line cannot be used to start the server."""


class _Flag(NamedTuple):
    short: str
    long: str
    name: str
    description: str


_PORT = _Flag("-p", "--port", "port", "Port number to listen on")
_HELP = _Flag("-h", "--help", "help", "Display this help message")
_DIRECTORY = _Flag("-d", "--directory", "directory", "Root directory to serve")
_VERSION = _Flag("-v", "--version", "version", "Display the version of the server")

_FLAGS = (_PORT, _HELP, _DIRECTORY, _VERSION)


@dataclass
class Options:
    """Settings taken from the command line."""

    port: int = DEFAULT_PORT
    directory: str = DEFAULT_DIRECTORY
    show_help: bool = False
    show_version: bool = False


def format_help() -> str:
    """Return the usage message."""
    lines = ["Usage: cserv [options]", "Options:"]
    lines.extend(
        f"  {flag.short}, {flag.long}\t{flag.description}" for flag in _FLAGS
    )
    return "\n".join(lines) + "\n"


def _matches(arg: str, flag: _Flag) -> bool:
    return arg in (flag.short, flag.long)


def _is_known_flag(arg: str) -> bool:
    return any(_matches(arg, flag) for flag in _FLAGS)


def _leading_integer(text: str) -> int:
    """Read the integer at the start of ``text``; 0 if there is none."""
    match = _LEADING_INTEGER.match(text)
    return int(match.group(1)) if match else 0


def _value_after(argv: Sequence[str], flag: _Flag) -> str | None:
    """Return the argument after the first occurrence of ``flag``."""
    for position, arg in enumerate(argv):
        if _matches(arg, flag):
            if position + 1 >= len(argv):
                raise UsageError(f"Missing value for {arg}")
            return argv[position + 1]
    return None


def _parse_port(value: str) -> int:
    port = _leading_integer(value)
    if port == 0:
        raise UsageError(f"Invalid port number: {value}")
    if not 1 <= port <= 65535:
        raise UsageError("Port number must be between 1 and 65535")
    return port


def _resolve_directory(value: str) -> str:
    directory = value[: MAX_DIR_PATH_SIZE - 1]
    if directory.startswith("/"):
        return directory
    try:
        cwd = os.getcwd()
    except OSError as error:
        raise UsageError("Could not get current working directory") from error
    directory = f"{cwd}/{directory}"[: MAX_DIR_PATH_SIZE - 1]
    if not os.path.exists(directory):
        raise UsageError(f"Directory does not exist: {directory}")
    return directory


def parse_args(argv: Sequence[str]) -> Options:
    """Turn command-line arguments (without the program name) into options.

    Flags are expected at every other position, each followed by its value.
    Raises :class:`UsageError` when the arguments are missing or invalid.
    """
    argv = list(argv)
    if not argv:
        raise UsageError()

    for arg in argv[::2]:
        if not _is_known_flag(arg):
            raise UsageError(f"Invalid argument: {arg}")

    options = Options(
        show_help=any(_matches(arg, _HELP) for arg in argv),
        show_version=any(_matches(arg, _VERSION) for arg in argv),
    )

    port_value = _value_after(argv, _PORT)
    if port_value is not None:
        options.port = _parse_port(port_value)

    directory_value = _value_after(argv, _DIRECTORY)
    if directory_value is not None:
        options.directory = _resolve_directory(directory_value)

    return options


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line and run the server; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        options = parse_args(argv)
    except UsageError as error:
        message = str(error)
        if message:
            print(f"Error: {message}")
        print(format_help(), end="")
        return 1

    if options.show_help:
        print(format_help(), end="")
        return 0
    if options.show_version:
        print(VERSION)
        return 0

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    server = Server(options.port, options.directory)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as error:
        print(f"Error: {error}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())