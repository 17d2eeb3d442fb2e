#!/usr/bin/env python3
"""
Diceware Passphrase Generator
=============================
Selects words uniformly (with replacement) from the word list and, unless
disabled, mutates each one.

Mutation policy
---------------
Every selected word independently draws one transform, each with
probability 1/4:

    none      - word unchanged
    leet      - each mutable letter (a e i o s t b g) is replaced by its
                digit independently with probability `leet_probability`
    truncate  - cut to a length drawn uniformly from
                [min_truncate_length, len(word) - 1]
    double    - one uniformly chosen letter is written twice

A transform that cannot apply to a word (nothing to leet, too short to
truncate) leaves it unchanged.

Entropy
-------
The per-word bonus is H(mutation | word): the exact Shannon entropy of the
strings this policy can turn a word into, averaged over the word list.
It depends only on the word list and the policy, so every passphrase of a
given configuration reports the same bits. Words plus bonus is the joint
entropy of (words, transforms). It can overstate the entropy of the final
string, because different words may mutate to the same string (truncating
'bakan' and 'bakas' both give 'bak').
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from passkit.config import CapitalizeScope, Mode, PassphraseConfig
from passkit.entropy import EntropyResult, passphrase_entropy, shannon_entropy
from passkit.errors import InvalidConfig
from .base_generator import GeneratedPassword, PasswordGenerator
from .randomness import RandomSource

logger = logging.getLogger(__name__)


LEET_TABLE = {
    'a': '4',
    'b': '8',
    'e': '3',
    'g': '9',
    'i': '1',
    'o': '0',
    's': '5',
    't': '7',
}


class Mutation(Enum):
    """Transforms a passphrase word can undergo."""
    NONE = "none"
    LEET = "leet"
    TRUNCATE = "truncate"
    DOUBLE = "double"


# Drawn uniformly
MUTATIONS = tuple(Mutation)


@dataclass(frozen=True)
class MutationPolicy:
    """Tunable constants of the mutation step."""
    leet_probability: float = 0.5
    min_truncate_length: int = 3

    @classmethod
    def from_config(cls, config: PassphraseConfig) -> 'MutationPolicy':
        return cls(
            leet_probability=float(config.leet_probability),
            min_truncate_length=config.min_truncate_length,
        )


# =============================================================================
# Transforms
# =============================================================================

def leet_positions(word: str) -> List[int]:
    return [i for i, c in enumerate(word) if c in LEET_TABLE]


def leet_substitute(word: str, rng: RandomSource, probability: float) -> str:
    chars = list(word)
    for i in leet_positions(word):
        if rng.chance(probability):
            chars[i] = LEET_TABLE[chars[i]]
    return ''.join(chars)


def truncate(word: str, rng: RandomSource, min_length: int) -> str:
    if len(word) <= min_length:
        return word
    return word[:rng.between(min_length, len(word) - 1)]


def double_letter(word: str, rng: RandomSource) -> str:
    letters = [i for i, c in enumerate(word) if c.isalpha()]
    if not letters:
        return word
    i = rng.choice(letters)
    return word[:i + 1] + word[i:]


def mutate_word(word: str, rng: RandomSource, policy: MutationPolicy) -> Tuple[str, Mutation]:
    """Apply one uniformly chosen transform to a word."""
    kind = rng.choice(MUTATIONS)

    if kind is Mutation.LEET:
        return leet_substitute(word, rng, policy.leet_probability), kind
    if kind is Mutation.TRUNCATE:
        return truncate(word, rng, policy.min_truncate_length), kind
    if kind is Mutation.DOUBLE:
        return double_letter(word, rng), kind
    return word, kind


def mutation_entropy(word: str, policy: MutationPolicy) -> float:
    """
    Shannon entropy (bits) of the output of mutate_word() for this word.

    For a single word, outcomes of different transforms never collide
    except on the unchanged word: leet keeps the length, truncation
    shortens, doubling lengthens. Across words they can collide.
    Leet outcomes are grouped by number of substitutions, so no subset
    enumeration is needed.
    """
    p = 1.0 / len(MUTATIONS)
    q = policy.leet_probability

    unchanged = p
    # (probability of one outcome, number of outcomes with that probability)
    groups = []

    m = len(leet_positions(word))
    unchanged += p * (1.0 - q) ** m
    for k in range(1, m + 1):
        prob = p * (q ** k) * ((1.0 - q) ** (m - k))
        if prob > 0:
            groups.append((prob, math.comb(m, k)))

    lengths = len(word) - policy.min_truncate_length
    if lengths > 0:
        groups.append((p / lengths, lengths))
    else:
        unchanged += p

    letters = [i for i, c in enumerate(word) if c.isalpha()]
    if letters:
        doubled = Counter(word[:i + 1] + word[i:] for i in letters)
        for count in doubled.values():
            groups.append((p * count / len(letters), 1))
    else:
        unchanged += p

    groups.append((unchanged, 1))
    return shannon_entropy(prob for prob, n in groups for _ in range(n))


def mean_mutation_entropy(corpus: Sequence[str], policy: MutationPolicy) -> float:
    """Average mutation_entropy() over a word list, i.e. H(mutation | word)."""
    if not corpus:
        raise InvalidConfig("Word list is empty")
    return sum(mutation_entropy(word, policy) for word in corpus) / len(corpus)


# =============================================================================
# Generation
# =============================================================================

def select_words(corpus: Sequence[str], count: int, rng: RandomSource) -> List[str]:
    """Draw `count` words uniformly and independently, with replacement."""
    return [corpus[rng.below(len(corpus))] for _ in range(count)]


def capitalize_words(words: List[str], scope: CapitalizeScope) -> List[str]:
    if scope is CapitalizeScope.FIRST:
        return [w[:1].upper() + w[1:] if i == 0 else w for i, w in enumerate(words)]
    return [w[:1].upper() + w[1:] for w in words]


def generate_words(config: PassphraseConfig,
                   corpus: Sequence[str],
                   rng: RandomSource) -> List[str]:
    """Select, mutate and capitalize words for one passphrase."""
    words = select_words(corpus, config.words, rng)

    if config.mutate:
        policy = MutationPolicy.from_config(config)
        words = [mutate_word(word, rng, policy)[0] for word in words]

    if config.capitalize:
        words = capitalize_words(words, config.capitalize_scope)

    return words


class PassphraseGenerator(PasswordGenerator):
    """Diceware passphrases over a shared, read-only word list."""

    mode = Mode.PHRASE
    config_type = PassphraseConfig

    def __init__(self, corpus: Sequence[str]):
        if not corpus:
            raise InvalidConfig("Word list is empty")
        self.corpus = corpus
        self._bonus_cache: Dict[MutationPolicy, float] = {}

    def mutation_bonus(self, policy: MutationPolicy) -> float:
        """Per-word mutation entropy for this word list (computed once per policy)."""
        if policy not in self._bonus_cache:
            bonus = mean_mutation_entropy(self.corpus, policy)
            logger.debug(f"Mutation bonus {bonus:.3f} bits/word over {len(self.corpus)} words")
            self._bonus_cache[policy] = bonus
        return self._bonus_cache[policy]

    def entropy(self, config: PassphraseConfig) -> EntropyResult:
        """Entropy of any passphrase this config can produce."""
        bonus = self.mutation_bonus(MutationPolicy.from_config(config)) if config.mutate else 0.0
        return passphrase_entropy(config.words, len(self.corpus), config.mutate, bonus)

    def generate(self, config: PassphraseConfig, rng: RandomSource) -> GeneratedPassword:
        self.check_config(config)
        separator = config.separator_string

        words = generate_words(config, self.corpus, rng)
        return GeneratedPassword(value=separator.join(words), entropy=self.entropy(config))


__all__ = [
    "PassphraseGenerator",
    "Mutation",
    "MutationPolicy",
    "LEET_TABLE",
    "select_words",
    "mutate_word",
    "mutation_entropy",
    "mean_mutation_entropy",
    "generate_words",
    "leet_substitute",
    "truncate",
    "double_letter",
    "capitalize_words",
]
