#!/usr/bin/env python3
"""
Markov Chain Password Engine
============================
Character-level Markov chain trained on a word list and sampled to build
pronounceable passwords.

Theory:
-------
A 2nd-order chain models P(next_char | previous 2 chars). Training slides
a 3-character window over every word and counts successors per 2-character
context. Sampling:

1. Pick a start context uniformly among the contexts that began a real word
   (this is what keeps output speakable: no seeds from across word joins).
2. Draw the next character in proportion to its count at the current context.
3. Slide the context forward by one character and repeat.
4. At a dead end (a context with no successors) append a fresh start
   context and carry on, so every walk reaches the requested length.

The trained model is read-only and can be shared by any number of walks.
"""

import json
import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from passkit.errors import GenerationFailure, InvalidConfig

logger = logging.getLogger(__name__)


# =============================================================================
# MARKOV CHAIN MODEL
# =============================================================================

def _freeze_counts(counts: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(counts))


@dataclass(frozen=True)
class MarkovModel:
    """Character-level Markov chain model (immutable once built)"""
    order: int
    transitions: Mapping[str, Mapping[str, int]] = field(default_factory=dict)
    start_states: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, order: int, transitions: Mapping[str, Mapping[str, int]],
              start_states: Mapping[str, int]) -> 'MarkovModel':
        """Create a model whose tables are read-only views."""
        return cls(
            order=order,
            transitions=MappingProxyType({
                context: _freeze_counts(successors)
                for context, successors in transitions.items()
                if any(count > 0 for count in successors.values())
            }),
            start_states=_freeze_counts(start_states),
        )

    def to_dict(self) -> dict:
        """Serialize model to dictionary"""
        return {
            'order': self.order,
            'transitions': {k: dict(v) for k, v in self.transitions.items()},
            'start_states': dict(self.start_states),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MarkovModel':
        """Deserialize model from dictionary"""
        return cls.build(
            order=data['order'],
            transitions=data['transitions'],
            start_states=data['start_states'],
        )


class MarkovTrainer:
    """Trains Markov models on word lists"""

    def __init__(self, order: int = 2):
        if order < 1:
            raise InvalidConfig(f"Markov order must be at least 1, got {order}")
        self.order = order

    def train(self, words: Iterable[str]) -> MarkovModel:
        """
        Train a model on a list of words.

        Words are lowercased and reduced to their letters. Words shorter
        than order + 1 letters contribute neither transitions nor a start
        context.
        """
        transitions = defaultdict(Counter)
        start_states = Counter()

        for word in words:
            letters = ''.join(c for c in word.lower().strip() if c.isalpha())
            if len(letters) < self.order + 1:
                continue

            start_states[letters[:self.order]] += 1

            for i in range(len(letters) - self.order):
                context = letters[i:i + self.order]
                transitions[context][letters[i + self.order]] += 1

        model = MarkovModel.build(self.order, transitions, start_states)
        logger.debug(
            f"Trained order-{self.order} model: {len(model.transitions)} contexts, "
            f"{len(model.start_states)} start contexts"
        )
        return model


# =============================================================================
# SAMPLING
# =============================================================================

@dataclass(frozen=True)
class MarkovSample:
    """A sampled letter sequence and the number of options at each kept step."""
    text: str
    choices: tuple
    restarts: int = 0


class MarkovChain:
    """Samples fixed-length letter sequences from a trained model"""

    def __init__(self, model: MarkovModel):
        self.model = model
        self.order = model.order

        # Fixed iteration order keeps sampling reproducible for a seeded source
        self.starts = tuple(model.start_states.keys())
        self.start_letters = tuple(dict.fromkeys(s[0] for s in self.starts))
        self._candidates = {
            context: (tuple(successors.keys()), list(successors.values()))
            for context, successors in model.transitions.items()
        }

    @classmethod
    def from_words(cls, words: Iterable[str], order: int = 2) -> 'MarkovChain':
        return cls(MarkovTrainer(order=order).train(words))

    def branching(self, context: str) -> int:
        """Number of distinct successors at a context."""
        entry = self._candidates.get(context)
        return len(entry[0]) if entry else 0

    def _append_start(self, text: str, length: int, rng, choices: list) -> str:
        remaining = length - len(text)
        if remaining >= self.order:
            choices.append(len(self.starts))
            return text + rng.choice(self.starts)
        # Only part of a start context fits; draw its first letter directly
        choices.append(len(self.start_letters))
        return text + rng.choice(self.start_letters)[:remaining]

    def sample(self, length: int, rng, max_restarts: int = 64) -> MarkovSample:
        """
        Sample exactly `length` letters.

        Args:
            length: Number of letters to produce
            rng: RandomSource providing below()/choice()/weighted_index()
            max_restarts: Dead ends tolerated before giving up

        Raises:
            InvalidConfig: if length < 1
            GenerationFailure: if the model has no start contexts or the
                walk hits more than max_restarts dead ends
        """
        if length < 1:
            raise InvalidConfig(f"length must be a positive integer, got {length}")
        if not self.starts:
            raise GenerationFailure("Markov model has no start contexts")

        choices = []
        restarts = 0
        text = self._append_start("", length, rng, choices)

        while len(text) < length:
            entry = self._candidates.get(text[-self.order:])

            if entry is None:
                restarts += 1
                if restarts > max_restarts:
                    raise GenerationFailure(
                        f"Markov walk hit {restarts} dead ends before reaching {length} chars"
                    )
                logger.debug(f"Dead end at '{text[-self.order:]}', restarting ({restarts})")
                text = self._append_start(text, length, rng, choices)
                continue

            letters, weights = entry
            text += letters[rng.weighted_index(weights)]
            choices.append(len(letters))

        return MarkovSample(text=text, choices=tuple(choices), restarts=restarts)


# =============================================================================
# PERSISTENCE
# =============================================================================

def save_model(model: MarkovModel, filepath: str):
    """Save a trained model to JSON file"""
    Path(filepath).write_text(json.dumps(model.to_dict(), indent=2), encoding="utf-8")


def load_model(filepath: str) -> MarkovModel:
    """Load a trained model from JSON file"""
    data = json.loads(Path(filepath).read_text(encoding="utf-8"))
    return MarkovModel.from_dict(data)


__all__ = [
    "MarkovModel",
    "MarkovTrainer",
    "MarkovChain",
    "MarkovSample",
    "save_model",
    "load_model",
]
