"""Locate and load ``serve.json`` and work out which directory to serve."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from cabinet.errors import ConfigError

DEFAULT_CONFIG_NAME = "serve.json"

log = logging.getLogger(__name__)

Config = Dict[str, Any]


def resolve_config_path(root_dir: str, config_path: Optional[str], cwd: str) -> str:
    if config_path:
        return os.path.normpath(os.path.join(cwd, config_path))
    return os.path.join(root_dir, DEFAULT_CONFIG_NAME)


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name}")


def _read_json_object(path: str) -> Config:
    try:
        with open(path, encoding="utf-8") as fp:
            raw = fp.read()
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc

    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ConfigError(f"Invalid JSON in {path}: Config must be a JSON object")
    return parsed


def load_config(root_dir: str, config_path: Optional[str] = None, cwd: Optional[str] = None) -> Config:
    """Load the config for ``root_dir``.

    Without ``config_path`` the file ``<root_dir>/serve.json`` is optional and
    an empty config is returned when it is absent. An explicit path must exist.
    """
    path = resolve_config_path(root_dir, config_path, os.getcwd() if cwd is None else cwd)

    if not os.path.exists(path):
        if not config_path:
            return {}
        raise ConfigError(f"Config file not found: {path}")

    log.debug("Loading config from %s", path)
    return _read_json_object(path)


def resolve_public_dir(root_dir: str, config: Mapping[str, Any]) -> str:
    if "public" not in config:
        return root_dir

    public = config["public"]
    if not isinstance(public, str):
        raise ConfigError('"public" must be a string path')
    if os.path.isabs(public):
        return public
    return os.path.normpath(os.path.join(root_dir, public))


def merge_options(config: Mapping[str, Any], public_dir: str) -> Config:
    options = dict(config)
    options["public"] = public_dir
    return options
