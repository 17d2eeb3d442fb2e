"""
Tests for the Pronounceable Generator
=====================================
Tests for passkit/generators/pronounceable.py.
"""

import math

import pytest

from passkit.config import MarkovConfig, PinConfig
from passkit.entropy import markov_entropy
from passkit.errors import GenerationFailure, InvalidConfig
from passkit.generators import PronounceableGenerator, RandomSource, is_pronounceable
from passkit.generators.markov_generator import MarkovChain
from passkit.generators.pronounceable import READABLE_SYMBOLS


@pytest.fixture(scope="module")
def gen(corpus):
    return PronounceableGenerator(MarkovChain.from_words(corpus))


class TestIsPronounceable:
    @pytest.mark.parametrize("text", ["banana", "Tolabi4nek", "strip", "aei", "ab-cdef"])
    def test_accepts(self, text):
        assert is_pronounceable(text)

    @pytest.mark.parametrize("text", ["strength", "aeio", "xkcdq"])
    def test_rejects(self, text):
        assert not is_pronounceable(text)

    def test_non_letters_reset_runs(self):
        assert is_pronounceable("bcd7fgh")
        assert not is_pronounceable("bcdf7gh")

    def test_custom_run_limit(self):
        assert not is_pronounceable("strip", max_run=2)
        assert is_pronounceable("strength", max_run=5)


class TestPronounceableGenerator:
    def test_default_password(self, gen):
        """12 characters, capital first letter, exactly one digit."""
        pw = gen.generate(MarkovConfig(length=12), RandomSource.system())
        assert len(pw.value) == 12
        assert pw.value[0].isupper()
        assert sum(c.isdigit() for c in pw.value) == 1
        assert pw.entropy.bits > 0

    @pytest.mark.parametrize("length", [1, 2, 3, 4, 8, 12, 16, 32])
    def test_exact_length(self, gen, length):
        pw = gen.generate(MarkovConfig(length=length), RandomSource.seeded(length))
        assert len(pw.value) == length

    def test_digit_never_first(self, gen):
        for seed in range(50):
            pw = gen.generate(MarkovConfig(length=6), RandomSource.seeded(seed))
            assert pw.value[0].isalpha()

    def test_symbol_inserted(self, gen, rng):
        pw = gen.generate(MarkovConfig(length=14, symbols=True), rng)
        assert len(pw.value) == 14
        assert sum(c in READABLE_SYMBOLS for c in pw.value) == 1
        assert sum(c.isdigit() for c in pw.value) == 1

    def test_no_extras(self, gen, rng):
        cfg = MarkovConfig(length=10, digits=False, symbols=False, capitalize=False)
        pw = gen.generate(cfg, rng)
        assert pw.value.isalpha()
        assert pw.value.islower()

    def test_short_password_has_no_inserts(self, gen, rng):
        pw = gen.generate(MarkovConfig(length=2, symbols=True), rng)
        assert pw.value.isalpha()

    def test_always_pronounceable(self, gen):
        for seed in range(30):
            pw = gen.generate(MarkovConfig(length=16), RandomSource.seeded(seed))
            assert is_pronounceable(pw.value)

    def test_entropy_counts_inserts(self, gen):
        # The generator draws its 11 letters first, from the same stream
        sample = gen.chain.sample(11, RandomSource.seeded(8))
        pw = gen.generate(MarkovConfig(length=12), RandomSource.seeded(8))

        walk_bits = markov_entropy(sample.choices).bits
        assert pw.value.lower().startswith(sample.text[:1])
        assert pw.entropy.bits == pytest.approx(walk_bits + math.log2(11) + math.log2(10))

    def test_reproducible(self, gen):
        a = gen.generate(MarkovConfig(length=12), RandomSource.seeded(4))
        b = gen.generate(MarkovConfig(length=12), RandomSource.seeded(4))
        assert a == b

    def test_unpronounceable_source_fails(self):
        gen = PronounceableGenerator(MarkovChain.from_words(["bcdfg"]))
        cfg = MarkovConfig(length=8, digits=False, max_attempts=3)
        with pytest.raises(GenerationFailure):
            gen.generate(cfg, RandomSource.seeded(1))

    def test_invalid_length(self, gen, rng):
        with pytest.raises(InvalidConfig):
            gen.generate(MarkovConfig(length=0), rng)

    def test_wrong_config_type(self, gen, rng):
        with pytest.raises(InvalidConfig):
            gen.generate(PinConfig(length=4), rng)
