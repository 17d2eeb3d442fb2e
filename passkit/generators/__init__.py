#!/usr/bin/env python3
"""
Password Generators
===================
Provides the four generation strategies:
- Pronounceable: Markov chain trained on the word list
- Secure: uniform draws from a configurable character pool
- Passphrase: diceware words with optional mutation
- PIN: uniform decimal digits
"""

from .randomness import RandomSource
from .base_generator import GeneratedPassword, PasswordGenerator
from .pronounceable import PronounceableGenerator, is_pronounceable
from .secure import SecureGenerator, build_charset
from .passphrase import (
    PassphraseGenerator,
    Mutation,
    MutationPolicy,
    mean_mutation_entropy,
    mutation_entropy,
    mutate_word,
    select_words,
)
from .pin import PinGenerator

__all__ = [
    "RandomSource",
    "GeneratedPassword",
    "PasswordGenerator",
    "PronounceableGenerator",
    "SecureGenerator",
    "PassphraseGenerator",
    "PinGenerator",
    "Mutation",
    "MutationPolicy",
    "build_charset",
    "is_pronounceable",
    "mean_mutation_entropy",
    "mutation_entropy",
    "mutate_word",
    "select_words",
]
