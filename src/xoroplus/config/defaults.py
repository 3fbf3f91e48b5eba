"""Default configuration values for xoroplus."""

from __future__ import annotations

from xoroplus.config.schema import GeneratorConfig, RunConfig
from xoroplus.core.xoroshiro import DEFAULT_SEED, Xoroshiro128Plus

__all__ = [
    "DEFAULT_SEED",
    "default_generator_config",
    "default_run_config",
    "make_generator",
]


def default_generator_config() -> GeneratorConfig:
    """Generator options with the all-ones default seed."""
    return GeneratorConfig(default_seed=DEFAULT_SEED)


def default_run_config() -> RunConfig:
    return RunConfig()


def make_generator(
    config: GeneratorConfig | None = None,
    seed: int | None = None,
) -> Xoroshiro128Plus:
    """Build a generator from ``config``, seeded with ``seed`` or the default seed."""
    if config is None:
        config = default_generator_config()
    return Xoroshiro128Plus(seed, default_seed=config.default_seed)
