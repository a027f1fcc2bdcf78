"""HTTP listener that hands every request to a static file handler."""

from __future__ import annotations

import logging
import mimetypes
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Mapping, Tuple

log = logging.getLogger(__name__)
access_log = logging.getLogger("cabinet.http")

# Types the platform mime database often lacks
mimetypes.add_type("text/javascript", ".mjs")
mimetypes.add_type("application/wasm", ".wasm")
mimetypes.add_type("application/manifest+json", ".webmanifest")
mimetypes.add_type("application/json", ".map")

Handler = Callable[["CabinetRequestHandler", Mapping[str, Any]], None]


def serve_handler(request: "CabinetRequestHandler", options: Mapping[str, Any]) -> None:
    """Serve ``request`` from ``options["public"]`` with the stdlib file server."""
    request.directory = options["public"]
    method = getattr(SimpleHTTPRequestHandler, "do_" + request.command)
    method(request)


class CabinetRequestHandler(SimpleHTTPRequestHandler):
    server: "CabinetServer"

    def setup(self):
        super().setup()
        self.response_started = False

    def send_response_only(self, code, message=None):
        self.response_started = True
        super().send_response_only(code, message)

    def do_GET(self):
        self.delegate()

    def do_HEAD(self):
        self.delegate()

    def delegate(self):
        try:
            self.server.handler(self, self.server.options)
        except Exception:
            log.exception("Request failed: %s %s", self.command, self.path)
            self.send_internal_error()

    def send_internal_error(self):
        if self.response_started:
            # too late for a status line, drop the connection instead
            self.close_connection = True
            return
        body = b"Internal Server Error"
        self.send_response(HTTPStatus.INTERNAL_SERVER_ERROR)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Connection", "close")
        self.end_headers()
        self.close_connection = True
        if self.command != "HEAD":
            self.wfile.write(body)

    def log_message(self, format, *args):
        access_log.info("%s - - %s", self.address_string(), format % args)


class CabinetServer(ThreadingHTTPServer):
    """Threaded listener carrying the merged options and the request handler."""

    def __init__(
        self,
        address: Tuple[str, int],
        options: Mapping[str, Any],
        handler: Handler = serve_handler,
        bind_and_activate: bool = True,
    ):
        self.options = options
        self.handler = handler
        super().__init__(tuple(address), CabinetRequestHandler, bind_and_activate)
