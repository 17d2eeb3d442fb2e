#!/usr/bin/env python3
"""
Word List Loading
=================
Reads the word list shared by the passphrase generator and the Markov
model. Accepted formats, one entry per line:

    11111	abacus      (EFF diceware: dice roll, tab, word)
    abacus          (plain)

Blank lines and lines starting with '#' are skipped.
"""

from __future__ import annotations

import logging
import os
from collections import Counter
from pathlib import Path
from typing import Tuple

from passkit.errors import InvalidConfig
from passkit.settings import get_setting, resolve_path

logger = logging.getLogger(__name__)

WORDLIST_ENV = "PASSKIT_WORDLIST"


def parse_wordlist(text: str) -> Tuple[str, ...]:
    """Parse word list text into an ordered tuple of lowercase words."""
    words = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        parts = line.split()
        # Diceware lines carry the dice roll first
        word = parts[1] if len(parts) == 2 and parts[0].isdigit() else parts[0]
        words.append(word.lower())
    return tuple(words)


def default_wordlist_path() -> Path:
    """Word list location: $PASSKIT_WORDLIST, else wordlist.path from app.yaml."""
    value = os.environ.get(WORDLIST_ENV) or get_setting("wordlist.path")
    if not value:
        raise InvalidConfig("wordlist.path must be set in app.yaml")
    return resolve_path(value)


def load_wordlist(path: str | Path | None = None) -> Tuple[str, ...]:
    """
    Load a word list.

    Args:
        path: File to read (default: default_wordlist_path())

    Raises:
        FileNotFoundError: if the file does not exist
        InvalidConfig: if it holds no words
    """
    path = Path(path) if path is not None else default_wordlist_path()
    if not path.exists():
        raise FileNotFoundError(f"Word list not found: {path}")

    words = parse_wordlist(path.read_text(encoding="utf-8"))
    if not words:
        raise InvalidConfig(f"Word list is empty: {path}")

    expected = get_setting("wordlist.expected_size")
    if expected and len(words) != expected:
        logger.warning(f"Word list {path} has {len(words)} words, expected {expected}")

    duplicates = [w for w, n in Counter(words).items() if n > 1]
    if duplicates:
        logger.warning(f"Word list {path} has {len(duplicates)} duplicated words")

    logger.info(f"Loaded {len(words)} words from {path}")
    return words


__all__ = [
    "parse_wordlist",
    "load_wordlist",
    "default_wordlist_path",
    "WORDLIST_ENV",
]
