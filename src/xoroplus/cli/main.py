"""CLI entry point for xoroplus."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from pydantic import ValidationError

from xoroplus.config.defaults import (
    default_generator_config,
    default_run_config,
    make_generator,
)
from xoroplus.config.schema import GeneratorConfig, RunConfig
from xoroplus.io.config_file import load_config_file
from xoroplus.io.serialize import load_state_into
from xoroplus.utils.exceptions import XoroplusError

logger = logging.getLogger(__name__)


def _load_configs(config_path: Path | None) -> tuple[GeneratorConfig, RunConfig]:
    if config_path is None:
        return default_generator_config(), default_run_config()
    try:
        return load_config_file(config_path)
    except XoroplusError as exc:
        raise click.ClickException(f"{config_path}: {exc}") from exc


def _apply_overrides(run_config: RunConfig, **overrides: object) -> RunConfig:
    """Merge non-None command-line values into ``run_config`` and revalidate."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    try:
        return RunConfig.model_validate({**run_config.model_dump(), **updates})
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc


def _format(value: int, output_format: str) -> str:
    if output_format == "hex":
        return f"{value:#018x}"
    return str(value)


@click.group()
@click.version_option(package_name="xoroplus")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Xoroshiro128+ pseudo-random number generator."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML or JSON config file. Uses defaults if not provided.",
)
@click.option("--seed", default=None, type=int, help="Integer seed.")
@click.option("--count", default=None, type=int, help="Number of outputs to print.")
@click.option("--discard", default=None, type=int, help="Outputs to skip first.")
@click.option("--jumps", default=None, type=int, help="Jumps (2**64 steps each) to apply first.")
@click.option(
    "--state-in",
    "state_in",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Start from a saved text state instead of seeding.",
)
@click.option(
    "--state-out",
    "state_out",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the final state as text.",
)
@click.option("--hex", "as_hex", is_flag=True, help="Print outputs in hexadecimal.")
def generate(
    config_path: Path | None,
    seed: int | None,
    count: int | None,
    discard: int | None,
    jumps: int | None,
    state_in: Path | None,
    state_out: Path | None,
    as_hex: bool,
) -> None:
    """Print generator outputs, one per line."""
    generator_config, run_config = _load_configs(config_path)

    # CLI overrides
    run_config = _apply_overrides(
        run_config,
        seed=seed,
        count=count,
        discard=discard,
        jumps=jumps,
        output_format="hex" if as_hex else None,
    )

    gen = make_generator(generator_config, run_config.seed)
    if state_in is not None:
        try:
            with open(state_in) as f:
                load_state_into(gen, f)
        except XoroplusError as exc:
            raise click.ClickException(f"{state_in}: {exc}") from exc
        logger.debug("Loaded state %s from %s", gen.state, state_in)

    gen.jump(run_config.jumps)
    gen.discard(run_config.discard)
    for _ in range(run_config.count):
        click.echo(_format(gen.next(), run_config.output_format))

    if state_out is not None:
        state_out.write_text(str(gen.state))
        logger.debug("Wrote state to %s", state_out)


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML or JSON config file. Uses defaults if not provided.",
)
@click.option("--seed", default=None, type=int, help="Integer seed.")
@click.option("--streams", "n_streams", default=None, type=int, help="Number of streams.")
def streams(config_path: Path | None, seed: int | None, n_streams: int | None) -> None:
    """Print the text state of each jump-separated stream."""
    generator_config, run_config = _load_configs(config_path)
    run_config = _apply_overrides(run_config, seed=seed, streams=n_streams)

    gen = make_generator(generator_config, run_config.seed)
    for child in gen.spawn(run_config.streams):
        click.echo(str(child.state))


if __name__ == "__main__":
    cli()
