[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cserv"
version = "0.0.1"
description = "A small static-file HTTP server that answers GET requests from a root directory"
requires-python = ">=3.10"
keywords = ["http", "server", "static files", "web"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cserv = "cserv.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cserv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
