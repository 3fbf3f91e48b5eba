"""Shared test fixtures."""

from __future__ import annotations

import pytest

from xoroplus.core.xoroshiro import Xoroshiro128Plus


@pytest.fixture
def gen() -> Xoroshiro128Plus:
    """Generator seeded with the default seed."""
    return Xoroshiro128Plus()


@pytest.fixture
def seeded() -> Xoroshiro128Plus:
    """Generator seeded with a small explicit integer."""
    return Xoroshiro128Plus(42)
