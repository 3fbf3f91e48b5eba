"""Tests for text and JSON state serialization."""

from __future__ import annotations

import io
import json

import pytest

from xoroplus.config.defaults import default_generator_config, default_run_config
from xoroplus.config.schema import GeneratorConfig, RunConfig
from xoroplus.core.state import GeneratorState
from xoroplus.core.xoroshiro import Xoroshiro128Plus
from xoroplus.io.serialize import (
    dump_config,
    dump_state_json,
    load_config,
    load_state_into,
    load_state_json,
    read_state,
    write_state,
)
from xoroplus.utils.exceptions import ConfigError, StateParseError


class BrokenStream(io.StringIO):
    def read(self, size: int | None = -1) -> str:
        raise OSError("device gone")


class TestTextState:
    def test_write_format(self, gen: Xoroshiro128Plus) -> None:
        out = io.StringIO()
        write_state(gen, out)
        assert out.getvalue() == "16490336266968443936 16834447057089888969"

    def test_write_raw_state(self) -> None:
        out = io.StringIO()
        write_state(GeneratorState(0, 1), out)
        assert out.getvalue() == "0 1"

    def test_round_trip_reproduces_sequence(self, seeded: Xoroshiro128Plus) -> None:
        seeded.discard(17)
        out = io.StringIO()
        write_state(seeded, out)

        fresh = Xoroshiro128Plus()
        load_state_into(fresh, io.StringIO(out.getvalue()))
        assert fresh == seeded
        assert [fresh.next() for _ in range(10)] == [seeded.next() for _ in range(10)]

    def test_read_state(self) -> None:
        assert read_state(io.StringIO("12 34\n")) == GeneratorState(12, 34)

    def test_read_state_leaves_remainder(self) -> None:
        stream = io.StringIO('12 34\n{"next": true}')
        assert read_state(stream) == GeneratorState(12, 34)
        assert stream.read() == '{"next": true}'

    def test_embedded_state_reused(self, seeded: Xoroshiro128Plus) -> None:
        out = io.StringIO()
        write_state(seeded, out)
        out.write(" trailer")
        fresh = Xoroshiro128Plus()
        stream = io.StringIO(out.getvalue())
        load_state_into(fresh, stream)
        assert fresh == seeded
        assert stream.read() == "trailer"

    @pytest.mark.parametrize("text", ["123", "abc def", "", "12 "])
    def test_malformed_leaves_generator_unchanged(
        self, seeded: Xoroshiro128Plus, text: str
    ) -> None:
        before = seeded.state
        with pytest.raises(StateParseError):
            load_state_into(seeded, io.StringIO(text))
        assert seeded.state == before

    def test_stream_error(self, seeded: Xoroshiro128Plus) -> None:
        before = seeded.state
        with pytest.raises(StateParseError, match="device gone"):
            load_state_into(seeded, BrokenStream())
        assert seeded.state == before


class TestJsonState:
    def test_round_trip(self) -> None:
        gen = Xoroshiro128Plus(5, default_seed=99)
        gen.discard(3)
        restored = load_state_json(dump_state_json(gen))
        assert restored == gen
        assert restored.default_seed == 99

    def test_payload(self, gen: Xoroshiro128Plus) -> None:
        data = json.loads(dump_state_json(gen))
        assert data == {
            "s0": 16490336266968443936,
            "s1": 16834447057089888969,
            "default_seed": 0xFFFFFFFFFFFFFFFF,
        }

    def test_missing_default_seed_uses_standard(self) -> None:
        gen = load_state_json('{"s0": 1, "s1": 2}')
        assert gen.state == GeneratorState(1, 2)
        assert gen.default_seed == 0xFFFFFFFFFFFFFFFF

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            '{"s0": 1}',
            '{"s0": -1, "s1": 2}',
            '{"s0": "x", "s1": 2}',
            "[1, 2]",
            '{"s0": 1.9, "s1": 2.5}',
            '{"s0": 1.0, "s1": 2}',
            '{"s0": "12", "s1": 2}',
            '{"s0": true, "s1": 2}',
            '{"s0": 1, "s1": false}',
            '{"s0": 1, "s1": null}',
            '{"s0": 1, "s1": 2, "default_seed": 1.5}',
            '{"s0": 1, "s1": 2, "default_seed": "7"}',
            '{"s0": 1, "s1": 2, "default_seed": true}',
        ],
    )
    def test_invalid_state(self, payload: str) -> None:
        with pytest.raises(StateParseError):
            load_state_json(payload)

    def test_invalid_default_seed(self) -> None:
        with pytest.raises(ConfigError):
            load_state_json('{"s0": 1, "s1": 2, "default_seed": -5}')


class TestConfigSerialize:
    def test_round_trip(self) -> None:
        gen_cfg = GeneratorConfig(default_seed=7)
        run_cfg = RunConfig(seed=3, count=4, jumps=1)
        loaded = load_config(json.loads(dump_config(gen_cfg, run_cfg)))
        assert loaded == (gen_cfg, run_cfg)

    def test_missing_sections_use_defaults(self) -> None:
        assert load_config({}) == (default_generator_config(), default_run_config())
        assert load_config(None) == (default_generator_config(), default_run_config())

    def test_partial_section(self) -> None:
        _, run_cfg = load_config({"run": {"count": 2}})
        assert run_cfg.count == 2
        assert run_cfg.seed is None

    def test_unknown_section(self) -> None:
        with pytest.raises(ConfigError, match="unknown"):
            load_config({"simulation": {}})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigError):
            load_config([1, 2])  # type: ignore[arg-type]

    def test_validation_error_wrapped(self) -> None:
        with pytest.raises(ConfigError):
            load_config({"run": {"count": -1}})
