#!/usr/bin/env python3
"""
Secure Random Generator
=======================
Uniform, independent draws from a character pool built from the enabled
character classes. With ambiguous-character exclusion the glyphs that are
easy to confuse (0/O, 1/l/I and the pipe) are removed before drawing.
"""

import logging
import string

from passkit.config import CharSet, Mode, SecureConfig
from passkit.entropy import secure_entropy
from passkit.errors import InvalidConfig
from .base_generator import GeneratedPassword, PasswordGenerator
from .randomness import RandomSource

logger = logging.getLogger(__name__)


LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{}|;:,.<>?"
# Printable ASCII 32-126 minus letters and digits
ALL_SYMBOLS = " " + string.punctuation
AMBIGUOUS = "0O1lI|"


def build_charset(config: SecureConfig) -> str:
    """
    Build the character pool for a config.

    Classes are added in a fixed order (lowercase, uppercase, digits,
    symbols) and duplicates dropped, so the pool size is the number of
    distinct characters.

    Raises:
        InvalidConfig: if nothing is left after exclusions
    """
    symbols = ALL_SYMBOLS if config.charset is CharSet.ALL else SYMBOLS

    pool = ""
    if config.lowercase:
        pool += LOWERCASE
    if config.uppercase:
        pool += UPPERCASE
    if config.digits:
        pool += DIGITS
    if config.symbols:
        pool += symbols

    if config.exclude_ambiguous:
        pool = ''.join(c for c in pool if c not in AMBIGUOUS)

    # dict keeps first-seen order
    pool = ''.join(dict.fromkeys(pool))

    if not pool:
        raise InvalidConfig("Character set is empty after exclusions")
    return pool


class SecureGenerator(PasswordGenerator):
    """Cryptographically secure random passwords."""

    mode = Mode.SECURE
    config_type = SecureConfig

    def generate(self, config: SecureConfig, rng: RandomSource) -> GeneratedPassword:
        self.check_config(config)
        pool = build_charset(config)

        # Entropy first so a one-character pool fails before drawing
        entropy = secure_entropy(config.length, len(pool))

        password = ''.join(pool[rng.below(len(pool))] for _ in range(config.length))
        logger.debug(f"Drew {config.length} chars from a pool of {len(pool)}")

        return GeneratedPassword(value=password, entropy=entropy)


__all__ = [
    "SecureGenerator",
    "build_charset",
    "LOWERCASE",
    "UPPERCASE",
    "DIGITS",
    "SYMBOLS",
    "ALL_SYMBOLS",
    "AMBIGUOUS",
]
