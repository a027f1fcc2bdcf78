"""Command line entry point.

Usage:
  cabinet                     # serves the current folder on http://0.0.0.0:3000
  cabinet site --listen 8080
  cabinet --config ./serve.json -l 127.0.0.1:4000
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Optional, Sequence, TextIO

from cabinet import __version__
from cabinet.args import HELP_TEXT, parse_args
from cabinet.config import load_config, merge_options, resolve_public_dir
from cabinet.errors import CabinetError
from cabinet.listen import DEFAULT_LISTEN
from cabinet.server import CabinetServer, Handler, serve_handler


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    cwd: Optional[str] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    handler: Handler = serve_handler,
    server_factory: Callable[..., CabinetServer] = CabinetServer,
) -> int:
    """Run cabinet and return the process exit status."""
    argv = sys.argv[1:] if argv is None else argv
    cwd = os.getcwd() if cwd is None else cwd
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    try:
        options = parse_args(argv)
        if options.help:
            print(HELP_TEXT, file=stdout)
            return 0
        if options.version:
            print(__version__, file=stdout)
            return 0

        root_dir = os.path.normpath(os.path.join(cwd, options.directory or "."))
        config = load_config(root_dir, options.config_path, cwd=cwd)
        public_dir = resolve_public_dir(root_dir, config)
        merged = merge_options(config, public_dir)
    except CabinetError as exc:
        print(exc, file=stderr)
        return 1

    address = options.listen or DEFAULT_LISTEN
    try:
        server = server_factory(address, merged, handler)
    except OSError as exc:
        print(f"Could not listen on {address.host}:{address.port}: {exc.strerror or exc}", file=stderr)
        return 1

    print(f"Serving {public_dir}", file=stdout)
    if public_dir != root_dir:
        print(f"Root directory {root_dir}", file=stdout)
    print(f"Listening on {address.url}", file=stdout, flush=True)

    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nShutting down...", file=stdout)
    return 0


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    sys.exit(main())
