"""cabinet - simple static file server."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cabinet")
except PackageNotFoundError:
    __version__ = "0.0.0"
