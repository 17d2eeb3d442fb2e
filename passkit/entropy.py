#!/usr/bin/env python3
"""
Entropy and Strength
====================
Entropy estimates (in bits) for every generation mode, and the strength
tier derived from them.

    PIN            length * log2(10)
    Secure         length * log2(pool size)
    Passphrase     words * log2(|corpus|) + per-word mutation entropy
    Pronounceable  sum of log2(options) over every step actually taken

Tiers use inclusive lower bounds:

    [0, 25)    Very Weak
    [25, 50)   Weak
    [50, 75)   Moderate
    [75, 100)  Strong
    [100, inf) Very Strong
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from passkit.config import Mode, coerce_enum
from passkit.errors import EntropyUnderflow, InvalidConfig


LOG2_10 = math.log2(10)

# Bits at which the strength bar is full
BAR_MAX_BITS = 128.0


class StrengthTier(Enum):
    """Discrete strength label for an entropy estimate."""
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    MODERATE = "Moderate"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    @property
    def label(self) -> str:
        return self.value


# Highest floor first
TIER_FLOORS = (
    (100.0, StrengthTier.VERY_STRONG),
    (75.0, StrengthTier.STRONG),
    (50.0, StrengthTier.MODERATE),
    (25.0, StrengthTier.WEAK),
)


def classify(bits: float) -> StrengthTier:
    """Map an entropy estimate onto its strength tier."""
    if math.isnan(bits) or bits < 0:
        raise EntropyUnderflow(f"Entropy must be a non-negative number, got {bits}")
    for floor, tier in TIER_FLOORS:
        if bits >= floor:
            return tier
    return StrengthTier.VERY_WEAK


@dataclass(frozen=True)
class EntropyResult:
    """Entropy of one generated password."""
    bits: float
    tier: StrengthTier
    source: str = ""

    @classmethod
    def from_bits(cls, bits: float, source: str = "") -> 'EntropyResult':
        return cls(bits=bits, tier=classify(bits), source=source)

    def percentage(self, max_bits: float = BAR_MAX_BITS) -> int:
        """Fill percentage for a strength bar, capped at 100."""
        return int(min(100.0, (self.bits / max_bits) * 100.0))


def _check_length(length: int, name: str = "length") -> None:
    if length < 0:
        raise InvalidConfig(f"{name} must not be negative, got {length}")


def pin_entropy(length: int) -> EntropyResult:
    _check_length(length)
    return EntropyResult.from_bits(length * LOG2_10, "Numeric")


def secure_entropy(length: int, pool_size: int) -> EntropyResult:
    """Entropy of `length` independent uniform draws from `pool_size` symbols."""
    _check_length(length)
    if pool_size < 2:
        raise EntropyUnderflow(
            f"Character pool of size {pool_size} carries no entropy"
        )
    return EntropyResult.from_bits(length * math.log2(pool_size), "Random")


def passphrase_entropy(word_count: int,
                       corpus_size: int,
                       mutate: bool = False,
                       per_word_bonus: float = 0.0) -> EntropyResult:
    """
    Diceware entropy plus the extra uncertainty mutation adds per word.

    Args:
        word_count: Number of words drawn
        corpus_size: Size of the word list actually drawn from
        mutate: Whether words are mutated
        per_word_bonus: Mutation entropy per word for this word list and
            policy; ignored unless mutate is set
    """
    _check_length(word_count, "word count")
    if corpus_size < 2:
        raise EntropyUnderflow(f"Word list of size {corpus_size} carries no entropy")
    if mutate and per_word_bonus < 0:
        raise EntropyUnderflow(f"Mutation entropy must not be negative, got {per_word_bonus}")

    per_word = math.log2(corpus_size) + (per_word_bonus if mutate else 0.0)
    source = "Diceware + mutation" if mutate else "Diceware"
    return EntropyResult.from_bits(word_count * per_word, source)


def markov_entropy(choices: Iterable[int]) -> EntropyResult:
    """
    Entropy of a Markov walk from the number of options at each step.

    A step with a single option contributes nothing; branching varies by
    context, so the estimate belongs to the generated instance.
    """
    bits = 0.0
    for options in choices:
        if options < 1:
            raise EntropyUnderflow(f"A step needs at least one option, got {options}")
        bits += math.log2(options)
    return EntropyResult.from_bits(bits, "Markov pronounceable")


def shannon_entropy(probabilities: Iterable[float]) -> float:
    """Shannon entropy in bits of a discrete distribution."""
    return -sum(p * math.log2(p) for p in probabilities if p > 0)


def entropy_bits(mode, **params) -> EntropyResult:
    """
    Entropy for a generation mode and its parameters.

    Args:
        mode: Mode (or its string value)
        **params:
            pin     - length
            secure  - length, pool_size
            phrase  - word_count, corpus_size, mutate and per_word_bonus
                      (both optional)
            normal  - choices (options per step of the generated instance)
    """
    mode = coerce_enum(Mode, mode, "mode")

    if mode is Mode.PIN:
        return pin_entropy(params["length"])
    if mode is Mode.SECURE:
        return secure_entropy(params["length"], params["pool_size"])
    if mode is Mode.PHRASE:
        return passphrase_entropy(
            params["word_count"],
            params["corpus_size"],
            params.get("mutate", False),
            params.get("per_word_bonus", 0.0),
        )
    if mode is Mode.NORMAL:
        return markov_entropy(params["choices"])

    raise InvalidConfig(f"Unknown mode: {mode}")


__all__ = [
    "StrengthTier",
    "EntropyResult",
    "classify",
    "pin_entropy",
    "secure_entropy",
    "passphrase_entropy",
    "markov_entropy",
    "shannon_entropy",
    "entropy_bits",
    "LOG2_10",
]
