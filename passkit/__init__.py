#!/usr/bin/env python3
"""
PassKit - Password Generator
============================

Generates passwords four ways and measures each one:

- normal  : pronounceable, from a Markov chain trained on the word list
- secure  : uniform random characters from a configurable pool
- phrase  : diceware passphrase, optionally mutated
- pin     : numeric PIN

Every password comes with an entropy estimate in bits and a strength tier.

Quick Start
-----------
    from passkit import PassKit, PinConfig, PassphraseConfig

    kit = PassKit()

    for pw in kit.generate(PinConfig(length=6)):
        print(pw.value, pw.entropy.bits, pw.entropy.tier.label)

    kit.generate(PassphraseConfig(words=5, mutate=False), count=3)

Modules
-------
    passkit.generators - The four generators and the random source
    passkit.entropy    - Entropy estimates and strength tiers
    passkit.config     - Per-mode configuration
    passkit.wordlist   - Word list loading

CLI Usage
---------
    python -m passkit normal 14
    python -m passkit secure --charset alphanumeric --no-ambiguous
    python -m passkit phrase 5 --separator space --no-mutate
    python -m passkit pin 8 -n 3
"""

__version__ = "0.2.0"
__author__ = "PassKit"

import logging
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

# =============================================================================
# Submodule Imports
# =============================================================================

from . import generators
from . import entropy
from . import config

from .generators.markov_generator import MarkovChain, MarkovModel, MarkovTrainer

from .errors import (
    PassKitError,
    InvalidConfig,
    GenerationFailure,
    EntropyUnderflow,
)
from .config import (
    Mode,
    CharSet,
    Separator,
    CapitalizeScope,
    GenerationConfig,
    MarkovConfig,
    SecureConfig,
    PassphraseConfig,
    PinConfig,
    config_for,
)
from .entropy import (
    EntropyResult,
    StrengthTier,
    classify,
    entropy_bits,
)
from .generators import (
    RandomSource,
    GeneratedPassword,
    PasswordGenerator,
    PronounceableGenerator,
    SecureGenerator,
    PassphraseGenerator,
    PinGenerator,
)
from .wordlist import load_wordlist


# =============================================================================
# PassKit Main Class
# =============================================================================

class PassKit:
    """
    Main interface for password generation.

    Owns the word list and the Markov chain trained from it. Both are built
    at most once, on first use, and are read-only afterwards, so one
    PassKit can serve any number of requests.

    Examples
    --------
        >>> kit = PassKit(corpus=words)
        >>> [pw] = kit.generate(MarkovConfig(length=12))
        >>> len(pw.value)
        12
    """

    def __init__(self,
                 corpus: Optional[Sequence[str]] = None,
                 wordlist_path: Optional[str] = None,
                 markov_model: Optional[MarkovModel] = None):
        """
        Parameters
        ----------
        corpus : sequence of str, optional
            Pre-loaded word list. Loaded from `wordlist_path` (or the
            configured default) when first needed otherwise.
        wordlist_path : str, optional
            Word list file to load instead of the configured default.
        markov_model : MarkovModel, optional
            Pre-trained model; trained from the corpus when omitted.
        """
        self._corpus = tuple(corpus) if corpus is not None else None
        self._wordlist_path = wordlist_path
        self._chain = MarkovChain(markov_model) if markov_model is not None else None

        self._pin_gen = PinGenerator()
        self._secure_gen = SecureGenerator()
        self._phrase_gen = None
        self._markov_gen = None

    # -------------------------------------------------------------------------
    # Shared resources
    # -------------------------------------------------------------------------

    @property
    def corpus(self) -> tuple:
        """The word list (loaded on first access)."""
        if self._corpus is None:
            self._corpus = load_wordlist(self._wordlist_path)
        return self._corpus

    @property
    def chain(self) -> MarkovChain:
        """The Markov chain (trained on first access)."""
        if self._chain is None:
            logger.debug(f"Training Markov model on {len(self.corpus)} words")
            self._chain = MarkovChain(MarkovTrainer(order=2).train(self.corpus))
        return self._chain

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generator(self, mode) -> PasswordGenerator:
        """Generator for one of the four modes."""
        mode = config.coerce_enum(Mode, mode, "mode")

        if mode is Mode.PIN:
            return self._pin_gen
        if mode is Mode.SECURE:
            return self._secure_gen
        if mode is Mode.PHRASE:
            if self._phrase_gen is None:
                self._phrase_gen = PassphraseGenerator(self.corpus)
            return self._phrase_gen
        if mode is Mode.NORMAL:
            if self._markov_gen is None:
                self._markov_gen = PronounceableGenerator(self.chain)
            return self._markov_gen

        raise InvalidConfig(f"Unknown mode: {mode}")

    def generate(self,
                 cfg: GenerationConfig,
                 count: Optional[int] = None,
                 rng: Optional[RandomSource] = None) -> List[GeneratedPassword]:
        """
        Generate passwords.

        Parameters
        ----------
        cfg : GenerationConfig
            Mode-specific configuration; its type selects the generator.
        count : int, optional
            Number of passwords (default: cfg.count).
        rng : RandomSource, optional
            Random source shared by all draws of this call. A fresh
            OS-seeded source is used when omitted.

        Returns
        -------
        list of GeneratedPassword
            One entry per password, each drawn independently.

        Raises
        ------
        InvalidConfig
            If the configuration cannot describe a password.
        GenerationFailure
            If pronounceable sampling exhausts its retries.
        """
        count = cfg.count if count is None else count
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidConfig(f"count must be a positive integer, got {count!r}")

        gen = self.generator(cfg.mode)
        rng = rng or RandomSource.system()
        return [gen.generate(cfg, rng) for _ in range(count)]


# =============================================================================
# Convenience Functions
# =============================================================================

def generate(mode, count: int = 1, corpus: Optional[Sequence[str]] = None,
             **options) -> List[GeneratedPassword]:
    """
    One-shot generation.

        >>> [pw] = generate("pin", length=4)
        >>> pw.entropy.tier
        <StrengthTier.VERY_WEAK: 'Very Weak'>
    """
    cfg = config_for(mode, **options)
    return PassKit(corpus=corpus).generate(cfg, count=count)


__all__ = [
    # Main class
    'PassKit',
    'generate',

    # Errors
    'PassKitError',
    'InvalidConfig',
    'GenerationFailure',
    'EntropyUnderflow',

    # Config
    'Mode',
    'CharSet',
    'Separator',
    'CapitalizeScope',
    'GenerationConfig',
    'MarkovConfig',
    'SecureConfig',
    'PassphraseConfig',
    'PinConfig',
    'config_for',

    # Entropy
    'EntropyResult',
    'StrengthTier',
    'classify',
    'entropy_bits',

    # Generators
    'RandomSource',
    'GeneratedPassword',
    'PasswordGenerator',
    'PronounceableGenerator',
    'SecureGenerator',
    'PassphraseGenerator',
    'PinGenerator',
    'MarkovChain',
    'MarkovModel',
    'MarkovTrainer',
    'load_wordlist',

    # Submodules
    'generators',
    'entropy',
    'config',
]
