#!/usr/bin/env python3
"""
Pronounceable Password Generator
================================
Wraps the Markov chain with the post-processing that turns a speakable
letter sequence into a password:

- Capitalize the first letter
- Insert one digit at a random position (never the first)
- Optionally insert one readable symbol the same way

The chain produces `length - inserts` letters so the result is always
exactly `length` characters. Candidates with more than `max_run`
consecutive vowels or consonants are resampled.
"""

import logging
import string

from passkit.config import MarkovConfig, Mode
from passkit.entropy import markov_entropy
from passkit.errors import GenerationFailure
from .base_generator import GeneratedPassword, PasswordGenerator
from .markov_generator import MarkovChain
from .randomness import RandomSource

logger = logging.getLogger(__name__)


READABLE_SYMBOLS = "!@#$%&*-_+"
VOWELS = "aeiou"


def is_pronounceable(password: str, max_run: int = 3) -> bool:
    """Reject runs of more than max_run vowels or consonants. Non-letters reset runs."""
    consonant_run = 0
    vowel_run = 0

    for c in password.lower():
        if not c.isalpha():
            consonant_run = 0
            vowel_run = 0
            continue

        if c in VOWELS:
            vowel_run += 1
            consonant_run = 0
            if vowel_run > max_run:
                return False
        else:
            consonant_run += 1
            vowel_run = 0
            if consonant_run > max_run:
                return False

    return True


class PronounceableGenerator(PasswordGenerator):
    """Pronounceable passwords from a shared, pre-trained Markov chain."""

    mode = Mode.NORMAL
    config_type = MarkovConfig

    def __init__(self, chain: MarkovChain):
        self.chain = chain

    def _inserts(self, config: MarkovConfig) -> list:
        # Too short to hold letters plus extras
        if config.length <= 2:
            return []
        inserts = []
        if config.digits:
            inserts.append(string.digits)
        if config.symbols:
            inserts.append(READABLE_SYMBOLS)
        return inserts

    def generate(self, config: MarkovConfig, rng: RandomSource) -> GeneratedPassword:
        self.check_config(config)
        inserts = self._inserts(config)
        base_length = config.length - len(inserts)

        for attempt in range(1, config.max_attempts + 1):
            sample = self.chain.sample(base_length, rng, max_restarts=config.max_restarts)
            chars = list(sample.text)
            choices = list(sample.choices)

            if config.capitalize:
                chars[0] = chars[0].upper()

            for alphabet in inserts:
                # Positions 1..len(chars): anywhere but in front
                choices.extend([len(chars), len(alphabet)])
                chars.insert(rng.between(1, len(chars)), rng.choice(alphabet))

            password = ''.join(chars)
            if is_pronounceable(password, config.max_run):
                if attempt > 1:
                    logger.debug(f"Accepted pronounceable candidate on attempt {attempt}")
                return GeneratedPassword(value=password, entropy=markov_entropy(choices))

        raise GenerationFailure(
            f"No pronounceable password after {config.max_attempts} attempts"
        )


__all__ = [
    "PronounceableGenerator",
    "is_pronounceable",
    "READABLE_SYMBOLS",
]
