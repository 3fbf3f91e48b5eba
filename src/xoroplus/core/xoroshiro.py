"""Xoroshiro128+ uniform random bit generator."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, TextIO

import numpy as np
from numpy.typing import NDArray

from xoroplus.core.splitmix import MASK64, expand_seed
from xoroplus.core.state import GeneratorState
from xoroplus.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0xFFFFFFFFFFFFFFFF

MASK32 = (1 << 32) - 1

_DOUBLE_UNIT = 1.0 / (1 << 53)

# Jump polynomial for the (55, 14, 36) parameters; one jump == 2**64 steps.
JUMP_CONSTANTS: tuple[int, int] = (0xBEAC0467EBA5FACB, 0xD86B048B86AA9922)


class WordSource(Protocol):
    """Anything shaped like ``numpy.random.SeedSequence``."""

    def generate_state(self, n_words: int, dtype: Any = ...) -> NDArray[Any]: ...


def _rotl(x: int, k: int) -> int:
    return ((x << k) & MASK64) | (x >> (64 - k))


def validate_default_seed(default_seed: int) -> int:
    """Check that ``default_seed`` can always restore a usable state.

    Raises:
        ConfigError: If the seed is not an unsigned 64-bit integer or its
            expansion is the all-zero state.
    """
    if not 0 <= default_seed <= MASK64:
        raise ConfigError(f"default_seed must be an unsigned 64-bit integer, got {default_seed}")
    if expand_seed(default_seed) == (0, 0):
        raise ConfigError(f"default_seed {default_seed:#x} expands to the zero state")
    return default_seed


def _source_drawer(source: Any, result_bits: int | None) -> tuple[Callable[[], int], int]:
    """Return a zero-argument draw function and the native width of ``source``."""
    if isinstance(source, np.random.Generator):
        source = source.bit_generator
    if isinstance(source, np.random.BitGenerator):
        return (lambda: int(source.random_raw())), result_bits or 64
    bits = result_bits or getattr(source, "RESULT_BITS", None) or getattr(
        source, "result_bits", None
    )
    if bits is None:
        bits = 32
    if hasattr(source, "getrandbits"):
        return (lambda: source.getrandbits(bits)), bits
    return (lambda: int(source())), bits


class Xoroshiro128Plus:
    """Xoroshiro128+ pseudo-random number generator.

    Produces unsigned 64-bit integers in ``[min(), max()]``. Not suitable for
    cryptographic use. Instances are not thread-safe; give each thread its own
    generator, for example via :meth:`spawn`.

    ``seed`` accepts the same values as :meth:`seed`, except that a
    ``Xoroshiro128Plus`` or a :class:`GeneratorState` is copied directly rather
    than drawn from.

    Args:
        seed: Seed value, word source, upstream generator or state to copy.
            ``None`` uses ``default_seed``.
        default_seed: Seed used when no seed is given and whenever seeding
            would leave the all-zero state.
    """

    RESULT_BITS = 64
    MIN = 0
    MAX = MASK64

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, seed: Any = None, *, default_seed: int = DEFAULT_SEED) -> None:
        self._default_seed = validate_default_seed(default_seed)
        self._s0 = 0
        self._s1 = 0
        if isinstance(seed, (Xoroshiro128Plus, GeneratorState)):
            self.assign(seed)
        else:
            self.seed(seed)

    @classmethod
    def from_state(
        cls, state: GeneratorState, *, default_seed: int = DEFAULT_SEED
    ) -> Xoroshiro128Plus:
        """Create a generator holding a copy of ``state``."""
        return cls(state, default_seed=default_seed)

    @classmethod
    def from_generator(
        cls, other: Xoroshiro128Plus, *, default_seed: int | None = None
    ) -> Xoroshiro128Plus:
        """Create a generator with the same state as ``other``.

        The default seed is taken from ``other`` unless given.
        """
        if default_seed is None:
            default_seed = other.default_seed
        return cls(other, default_seed=default_seed)

    @property
    def default_seed(self) -> int:
        return self._default_seed

    @property
    def state(self) -> GeneratorState:
        """Snapshot of the two state words."""
        return GeneratorState(self._s0, self._s1)

    @classmethod
    def min(cls) -> int:
        return cls.MIN

    @classmethod
    def max(cls) -> int:
        return cls.MAX

    # --- seeding -----------------------------------------------------------

    def seed(self, value: Any = None) -> None:
        """Seed from an integer, a word source or an upstream generator.

        Objects with a ``generate_state`` method (``numpy.random.SeedSequence``)
        are treated as word sources; any other non-integer is treated as a
        generator and drawn from.
        """
        if value is None:
            self.seed_from_integer(self._default_seed)
        elif isinstance(value, (int, np.integer)):
            self.seed_from_integer(int(value))
        elif hasattr(value, "generate_state"):
            self.seed_from_word_source(value)
        else:
            self.seed_from_generator(value)

    def seed_from_integer(self, value: int) -> None:
        """Expand ``value`` (taken modulo 2**64) with SplitMix64."""
        s0, s1 = expand_seed(value & MASK64)
        self._set_words(s0, s1)

    def seed_from_word_source(self, source: WordSource) -> None:
        """Seed from four 32-bit words, packed little-endian into the state."""
        w0, w1, w2, w3 = (int(w) & MASK32 for w in source.generate_state(4, np.uint32))
        self._set_words(w0 | (w1 << 32), w2 | (w3 << 32))

    def seed_from_generator(self, source: Any, result_bits: int | None = None) -> None:
        """Seed by drawing from another random bit generator.

        A 64-bit source is drawn twice, once per state word. Narrower (or
        wider) sources are drawn ``ceil(128 / result_bits)`` times; each value
        is masked to ``result_bits`` and the values are packed little-endian,
        keeping the low 128 bits.

        Args:
            source: numpy ``BitGenerator``/``Generator``, an object with
                ``getrandbits`` (``random.Random``), or a zero-argument
                callable. The width comes from ``result_bits``, else a
                ``RESULT_BITS``/``result_bits`` attribute, else 32.
            result_bits: Explicit native width of ``source``.
        """
        if result_bits is not None and result_bits <= 0:
            raise ValueError(f"result_bits must be positive, got {result_bits}")
        draw, bits = _source_drawer(source, result_bits)
        if bits == 64:
            s0 = draw() & MASK64
            s1 = draw() & MASK64
        else:
            mask = (1 << bits) - 1
            packed = 0
            for i in range(-(-128 // bits)):
                packed |= (draw() & mask) << (i * bits)
            s0 = packed & MASK64
            s1 = (packed >> 64) & MASK64
        self._set_words(s0, s1)

    def assign(self, other: Xoroshiro128Plus | GeneratorState) -> None:
        """Copy the state of another generator, or a raw state, without re-expansion."""
        if other is self:
            return
        state = other.state if isinstance(other, Xoroshiro128Plus) else other
        self._set_words(state.s0, state.s1)

    def load_state(self, source: str | TextIO) -> None:
        """Replace the state with one parsed from ``"<s0> <s1>"`` text.

        ``source`` is either the text itself or a text stream, from which
        exactly two tokens are read.

        Raises:
            StateParseError: On malformed input; the state is left unchanged.
        """
        if isinstance(source, str):
            state = GeneratorState.parse(source)
        else:
            state = GeneratorState.read(source)
        self.assign(state)

    def _set_words(self, s0: int, s1: int) -> None:
        self._s0 = s0
        self._s1 = s1
        self._validate_state()

    def _validate_state(self) -> None:
        if self._s0 == 0 and self._s1 == 0:
            logger.debug("Zero state rejected; reseeding with default seed %#x", self._default_seed)
            # the default seed never expands to zero, so this does not recurse further
            self.seed_from_integer(self._default_seed)

    # --- generation --------------------------------------------------------

    def next(self) -> int:
        """Return the next 64-bit output and advance the state."""
        s0 = self._s0
        s1 = self._s1
        result = (s0 + s1) & MASK64
        s1 ^= s0
        self._s0 = _rotl(s0, 55) ^ s1 ^ ((s1 << 14) & MASK64)
        self._s1 = _rotl(s1, 36)
        return result

    def __call__(self) -> int:
        return self.next()

    def discard(self, n: int = 1) -> None:
        """Advance by ``n`` steps, dropping the outputs."""
        if n < 0:
            raise ValueError(f"discard count must be non-negative, got {n}")
        for _ in range(n):
            self.next()

    def jump(self, n: int = 1) -> None:
        """Advance by ``n * 2**64`` steps.

        Each jump costs 128 ordinary steps. Generators jumped a different
        number of times from one state produce non-overlapping sequences of
        2**64 outputs.
        """
        if n < 0:
            raise ValueError(f"jump count must be non-negative, got {n}")
        for _ in range(n):
            self._jump_once()

    def _jump_once(self) -> None:
        acc0 = 0
        acc1 = 0
        for constant in JUMP_CONSTANTS:
            for b in range(64):
                if constant & (1 << b):
                    acc0 ^= self._s0
                    acc1 ^= self._s1
                self.next()
        self._s0 = acc0
        self._s1 = acc1

    def spawn(self, n: int) -> list[Xoroshiro128Plus]:
        """Split off ``n`` independent streams by jumping.

        Child ``i`` starts ``i + 1`` jumps ahead of the current state; this
        generator then moves one jump past the last child, so it does not
        overlap any of them.
        """
        if n < 0:
            raise ValueError(f"spawn count must be non-negative, got {n}")
        children = []
        for _ in range(n):
            self._jump_once()
            children.append(Xoroshiro128Plus.from_generator(self))
        self._jump_once()
        logger.debug("Spawned %d jump-separated streams", n)
        return children

    # --- numpy helpers -----------------------------------------------------

    def random_raw(self, size: int | tuple[int, ...] | None = None) -> int | NDArray[np.uint64]:
        """Return raw outputs, as ``numpy.random.BitGenerator.random_raw`` does.

        Args:
            size: Output shape. ``None`` returns a single Python int.
        """
        if size is None:
            return self.next()
        out = np.empty(size, dtype=np.uint64)
        flat = out.reshape(-1)
        for i in range(flat.size):
            flat[i] = self.next()
        return out

    def random(self, size: int | tuple[int, ...] | None = None) -> float | NDArray[np.float64]:
        """Return doubles in ``[0, 1)`` built from the top 53 bits of each output."""
        if size is None:
            return (self.next() >> 11) * _DOUBLE_UNIT
        raw = self.random_raw(size)
        result: NDArray[np.float64] = (raw >> np.uint64(11)).astype(np.float64) * _DOUBLE_UNIT
        return result

    # --- comparison / display ----------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Xoroshiro128Plus):
            return NotImplemented
        return self._s0 == other._s0 and self._s1 == other._s1

    def __str__(self) -> str:
        return str(self.state)

    def __repr__(self) -> str:
        return f"Xoroshiro128Plus(s0={self._s0:#018x}, s1={self._s1:#018x})"

