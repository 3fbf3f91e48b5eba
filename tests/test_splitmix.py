"""Tests for the SplitMix64 seed expander."""

from __future__ import annotations

from xoroplus.core.splitmix import MASK64, SplitMix64, expand_seed


class TestSplitMix64:
    def test_reference_vector_seed_zero(self) -> None:
        gen = SplitMix64(0)
        assert gen.next() == 0xE220A8397B1DCDAF
        assert gen.next() == 0x6E789E6AA1B965F4

    def test_callable_matches_next(self) -> None:
        a = SplitMix64(123)
        b = SplitMix64(123)
        assert [a() for _ in range(5)] == [b.next() for _ in range(5)]

    def test_state_reduced_to_64_bits(self) -> None:
        assert SplitMix64(-1).state == MASK64
        assert SplitMix64(1 << 64).state == 0

    def test_expand_seed(self) -> None:
        assert expand_seed(0) == (16294208416658607535, 7960286522194355700)
        assert expand_seed(MASK64) == (16490336266968443936, 16834447057089888969)

    def test_expand_seed_word_count(self) -> None:
        words = expand_seed(7, n_words=4)
        assert len(words) == 4
        assert words[:2] == expand_seed(7)

    def test_result_bits(self) -> None:
        assert SplitMix64.RESULT_BITS == 64
