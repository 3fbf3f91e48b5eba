"""Serialization of generator state and configs."""

from __future__ import annotations

import json
from typing import Any, TextIO

from pydantic import ValidationError

from xoroplus.config.defaults import (
    DEFAULT_SEED,
    default_generator_config,
    default_run_config,
)
from xoroplus.config.schema import GeneratorConfig, RunConfig
from xoroplus.core.state import GeneratorState
from xoroplus.core.xoroshiro import Xoroshiro128Plus
from xoroplus.utils.exceptions import ConfigError, StateParseError


def write_state(source: Xoroshiro128Plus | GeneratorState, stream: TextIO) -> None:
    """Write ``"<s0> <s1>"`` to ``stream``, with no trailing separator."""
    state = source.state if isinstance(source, Xoroshiro128Plus) else source
    stream.write(str(state))


def read_state(stream: TextIO) -> GeneratorState:
    """Read two state words from ``stream``, leaving the rest unread.

    Raises:
        StateParseError: If the stream cannot be read or holds a malformed state.
    """
    return GeneratorState.read(stream)


def load_state_into(generator: Xoroshiro128Plus, stream: TextIO) -> None:
    """Read a state from ``stream`` into ``generator``.

    On failure the generator keeps its previous state.
    """
    generator.assign(read_state(stream))


def dump_state_json(generator: Xoroshiro128Plus) -> str:
    """Serialize a generator's state and default seed to JSON."""
    state = generator.state
    data = {"s0": state.s0, "s1": state.s1, "default_seed": generator.default_seed}
    return json.dumps(data, indent=2)


def load_state_json(json_str: str) -> Xoroshiro128Plus:
    """Rebuild a generator from :func:`dump_state_json` output.

    JSON numbers are taken as-is: floats, strings and booleans are rejected
    rather than coerced.

    Raises:
        StateParseError: On invalid JSON, missing keys, or words that are not
            in-range JSON integers.
        ConfigError: If the stored default seed is invalid.
    """
    try:
        data: dict[str, Any] = json.loads(json_str)
        words = [_json_int(data, key) for key in ("s0", "s1")]
        state = GeneratorState(*words)
        default_seed = _json_int(data, "default_seed", DEFAULT_SEED)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        raise StateParseError(f"invalid state JSON: {exc}") from exc
    try:
        config = GeneratorConfig.model_validate({"default_seed": default_seed})
    except ValidationError as exc:
        raise ConfigError(f"invalid default_seed in state JSON: {exc}") from exc
    return Xoroshiro128Plus.from_state(state, default_seed=config.default_seed)


def _json_int(data: dict[str, Any], key: str, default: int | None = None) -> int:
    if default is not None and key not in data:
        return default
    value = data[key]
    # bool is an int subclass; JSON true/false is not a state word
    if type(value) is not int:
        raise StateParseError(f"{key} must be a JSON integer, got {value!r}")
    return value


def dump_config(generator_config: GeneratorConfig, run_config: RunConfig) -> str:
    """Serialize configs to a JSON string."""
    data = {
        "generator": generator_config.model_dump(),
        "run": run_config.model_dump(),
    }
    return json.dumps(data, indent=2)


def load_config(data: dict[str, Any] | None) -> tuple[GeneratorConfig, RunConfig]:
    """Validate parsed config data; missing sections fall back to defaults.

    Raises:
        ConfigError: If the data is not a mapping or fails validation.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
    try:
        generator_config = (
            GeneratorConfig.model_validate(data["generator"])
            if "generator" in data
            else default_generator_config()
        )
        run_config = (
            RunConfig.model_validate(data["run"]) if "run" in data else default_run_config()
        )
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    unknown = set(data) - {"generator", "run"}
    if unknown:
        raise ConfigError(f"unknown config sections: {sorted(unknown)}")
    return generator_config, run_config
