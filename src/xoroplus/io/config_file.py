"""Config file loading (JSON or YAML)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from xoroplus.config.schema import GeneratorConfig, RunConfig
from xoroplus.io.serialize import load_config
from xoroplus.utils.exceptions import ConfigError

JSON_SUFFIXES = frozenset({".json"})


def parse_config_text(text: str, suffix: str) -> Any:
    """Parse config file contents, choosing the format from ``suffix``.

    ``.json`` files go through the strict JSON parser; anything else is read
    as YAML with ``yaml.safe_load``.

    Raises:
        ConfigError: If the text is not valid in the chosen format.
    """
    try:
        if suffix.lower() in JSON_SUFFIXES:
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot parse {suffix or 'YAML'} config: {exc}") from exc


def load_config_file(path: Path) -> tuple[GeneratorConfig, RunConfig]:
    """Read, parse and validate a config file.

    Args:
        path: ``.json`` or YAML file with optional ``generator`` and ``run``
            sections.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    try:
        text = path.read_text()
    except OSError as exc:
        raise ConfigError(f"cannot read config: {exc}") from exc
    return load_config(parse_config_text(text, path.suffix))
