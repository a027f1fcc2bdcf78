from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from cabinet.errors import UsageError
from cabinet.listen import ListenAddress, parse_listen

HELP_TEXT = """cabinet - simple static file server

Usage:
  cabinet [dir] [--listen|-l <port|host:port>] [--config <path>] [--help] [--version]

Options:
  --listen, -l    Port or host:port (default 0.0.0.0:3000)
  --config        Path to JSON config
  --help, -h      Show help
  --version, -v   Show version
"""


@dataclass(frozen=True)
class Options:
    directory: Optional[str] = None
    listen: Optional[ListenAddress] = None
    config_path: Optional[str] = None
    help: bool = False
    version: bool = False


def _take_value(argv: Sequence[str], index: int) -> str:
    if index + 1 >= len(argv):
        raise UsageError(f"Missing value for {argv[index]}")
    return argv[index + 1]


def _set_directory(current: Optional[str], value: str) -> str:
    if current is not None:
        raise UsageError("Only one directory can be provided")
    return value


def parse_args(argv: Sequence[str]) -> Options:
    """Parse command line tokens into :class:`Options`.

    Tokens are consumed left to right and the first problem raises, so no
    partially parsed result ever escapes. Repeating ``--listen`` or
    ``--config`` keeps the last value.
    """
    directory: Optional[str] = None
    listen: Optional[ListenAddress] = None
    config_path: Optional[str] = None
    show_help = False
    show_version = False

    i = 0
    while i < len(argv):
        arg = argv[i]

        if arg == "--":
            rest: List[str] = list(argv[i + 1:])
            if rest:
                directory = _set_directory(directory, " ".join(rest))
            break

        if arg in ("--help", "-h"):
            show_help = True
        elif arg in ("--version", "-v"):
            show_version = True
        elif arg in ("--listen", "-l"):
            listen = parse_listen(_take_value(argv, i))
            i += 1
        elif arg.startswith("--listen="):
            listen = parse_listen(arg[len("--listen="):])
        elif arg.startswith("-l"):
            listen = parse_listen(arg[2:])
        elif arg == "--config":
            config_path = _take_value(argv, i)
            i += 1
        elif arg.startswith("--config="):
            config_path = arg[len("--config="):]
        elif arg.startswith("-"):
            raise UsageError(f"Unknown option: {arg}")
        else:
            directory = _set_directory(directory, arg)

        i += 1

    return Options(
        directory=directory,
        listen=listen,
        config_path=config_path,
        help=show_help,
        version=show_version,
    )
