from __future__ import annotations

import re
from typing import NamedTuple

from cabinet.errors import ListenError

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

_PORT_RE = re.compile(r"[0-9]{1,5}")


class ListenAddress(NamedTuple):
    host: str
    port: int

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


DEFAULT_LISTEN = ListenAddress(DEFAULT_HOST, DEFAULT_PORT)


def parse_listen(value: str) -> ListenAddress:
    """Parse ``port`` or ``host:port`` into a validated address.

    An empty host (``:8080``) binds every interface. IPv6 literals are not
    supported.
    """
    if not value:
        raise ListenError("--listen requires a value")

    host_text, sep, port_text = value.partition(":")
    if not sep:
        host_text, port_text = "", value
    elif ":" in port_text:
        raise ListenError(f"Invalid listen value: {value}")

    if not _PORT_RE.fullmatch(port_text):
        raise ListenError(f"Invalid port: {port_text}")
    port = int(port_text)
    if not 0 < port < 65536:
        raise ListenError(f"Invalid port: {port_text}")

    return ListenAddress(host_text or DEFAULT_HOST, port)
