"""
Shared fixtures
===============
A synthetic 7776-word list (the diceware size) built from
onset-vowel-consonant-vowel-coda patterns, so every word is pronounceable
and the tests never need the real EFF list.
"""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passkit.generators import RandomSource


ONSETS = "bcdfghjklmnprstvwz"   # 18
VOWELS = "aeio"                 # 4
MIDDLES = "bdgklmnrt"           # 9
CODAS = ("", "n", "s")          # 3


def build_corpus() -> tuple:
    """18 * 4 * 9 * 4 * 3 = 7776 distinct words such as 'bakan'."""
    return tuple(
        onset + v1 + mid + v2 + coda
        for onset in ONSETS
        for v1 in VOWELS
        for mid in MIDDLES
        for v2 in VOWELS
        for coda in CODAS
    )


@pytest.fixture(scope="session")
def corpus():
    words = build_corpus()
    assert len(words) == 7776
    assert len(set(words)) == 7776
    return words


@pytest.fixture
def rng():
    return RandomSource.seeded(42)


@pytest.fixture
def wordlist_file(tmp_path, corpus):
    """The synthetic corpus written in EFF diceware format."""
    path = tmp_path / "wordlist.txt"
    lines = []
    for i, word in enumerate(corpus):
        digits = []
        n = i
        for _ in range(5):
            digits.append(str(n % 6 + 1))
            n //= 6
        lines.append(f"{''.join(reversed(digits))}\t{word}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
