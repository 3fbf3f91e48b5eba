"""SplitMix64 seed expander."""

from __future__ import annotations

from dataclasses import dataclass

MASK64 = (1 << 64) - 1

_GOLDEN_GAMMA = 0x9E3779B97F4A7C15
_MIX_MUL_1 = 0xBF58476D1CE4E5B9
_MIX_MUL_2 = 0x94D049BB133111EB


@dataclass
class SplitMix64:
    """SplitMix64 generator used to expand a single 64-bit seed.

    Every 64-bit seed yields a well-mixed stream, so consecutive words are
    suitable as initial state for generators that must avoid weak
    (sparse or correlated) starting states.

    Attributes:
        state: 64-bit counter, advanced by the golden gamma on each draw.
    """

    state: int

    RESULT_BITS = 64

    def __post_init__(self) -> None:
        self.state &= MASK64

    def next(self) -> int:
        """Advance the counter and return the next mixed 64-bit word."""
        self.state = (self.state + _GOLDEN_GAMMA) & MASK64
        z = self.state
        z = ((z ^ (z >> 30)) * _MIX_MUL_1) & MASK64
        z = ((z ^ (z >> 27)) * _MIX_MUL_2) & MASK64
        return z ^ (z >> 31)

    def __call__(self) -> int:
        return self.next()


def expand_seed(seed: int, n_words: int = 2) -> tuple[int, ...]:
    """Expand ``seed`` into ``n_words`` 64-bit words."""
    gen = SplitMix64(seed)
    return tuple(gen.next() for _ in range(n_words))
