"""Pydantic v2 configuration models for xoroplus."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from xoroplus.core.splitmix import MASK64, expand_seed
from xoroplus.core.xoroshiro import DEFAULT_SEED


class GeneratorConfig(BaseModel):
    """Construction options for a Xoroshiro128+ generator."""

    model_config = ConfigDict(extra="forbid")

    default_seed: int = Field(
        default=DEFAULT_SEED,
        ge=0,
        le=MASK64,
        description="Seed used when none is given and to recover from a zero state",
    )

    @model_validator(mode="after")
    def _validate_default_seed(self) -> GeneratorConfig:
        if expand_seed(self.default_seed) == (0, 0):
            raise ValueError(f"default_seed {self.default_seed:#x} expands to the zero state")
        return self


class RunConfig(BaseModel):
    """Parameters for a command-line generation run."""

    model_config = ConfigDict(extra="forbid")

    seed: int | None = Field(
        default=None,
        ge=0,
        le=MASK64,
        description="Integer seed; the generator's default seed when omitted",
    )
    count: int = Field(default=10, ge=0, description="Number of outputs to print")
    discard: int = Field(default=0, ge=0, description="Outputs skipped before printing")
    jumps: int = Field(default=0, ge=0, description="Jumps (2**64 steps each) before printing")
    streams: int = Field(default=1, ge=1, description="Number of jump-separated streams")
    output_format: Literal["decimal", "hex"] = "decimal"
