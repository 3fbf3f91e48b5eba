"""Immutable two-word generator state and its text form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from xoroplus.core.splitmix import MASK64
from xoroplus.utils.exceptions import StateParseError


@dataclass(frozen=True, slots=True)
class GeneratorState:
    """The 128-bit Xoroshiro128+ state as two unsigned 64-bit words.

    The text form is ``"<s0> <s1>"``: two base-10 integers separated by a
    single space.

    Attributes:
        s0: First state word.
        s1: Second state word.
    """

    s0: int
    s1: int

    def __post_init__(self) -> None:
        for name in ("s0", "s1"):
            word = getattr(self, name)
            if not 0 <= word <= MASK64:
                raise ValueError(f"{name} must be an unsigned 64-bit integer, got {word}")

    @property
    def is_degenerate(self) -> bool:
        """True for the all-zero state, a fixed point of the transition."""
        return self.s0 == 0 and self.s1 == 0

    def __str__(self) -> str:
        return f"{self.s0} {self.s1}"

    @classmethod
    def parse(cls, text: str) -> GeneratorState:
        """Parse the first two whitespace-delimited tokens of ``text``.

        Tokens after the second are ignored.

        Raises:
            StateParseError: Fewer than two tokens, a non-numeric token, or
                a value outside the unsigned 64-bit range.
        """
        tokens = text.split(maxsplit=2)
        if len(tokens) < 2:
            raise StateParseError(f"expected two state words, got {len(tokens)}")
        words = []
        for token in tokens[:2]:
            # int() also accepts signs and underscores; an unsigned token is digits only
            if not (token.isascii() and token.isdigit()):
                raise StateParseError(f"invalid state word {token!r}")
            word = int(token)
            if word > MASK64:
                raise StateParseError(f"state word {token} exceeds 64 bits")
            words.append(word)
        return cls(words[0], words[1])

    @classmethod
    def read(cls, stream: TextIO) -> GeneratorState:
        """Read exactly two whitespace-delimited tokens from ``stream``.

        The whitespace character ending the second token is consumed;
        whatever follows stays in the stream for the caller.

        Raises:
            StateParseError: The stream fails, ends early, or holds a
                malformed state word.
        """
        tokens: list[str] = []
        chars: list[str] = []
        try:
            while len(tokens) < 2:
                ch = stream.read(1)
                if ch and not ch.isspace():
                    chars.append(ch)
                    continue
                if chars:
                    tokens.append("".join(chars))
                    chars = []
                if not ch:
                    break
        except (OSError, UnicodeDecodeError) as exc:
            raise StateParseError(f"failed to read state: {exc}") from exc
        return cls.parse(" ".join(tokens))
