#!/usr/bin/env python3
"""
Generator Base
==============
Shared result type and the capability every generator provides:
produce one password for a config and a random source, together with
its entropy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from passkit.config import GenerationConfig, Mode
from passkit.entropy import EntropyResult
from passkit.errors import InvalidConfig
from .randomness import RandomSource


@dataclass(frozen=True)
class GeneratedPassword:
    """A generated password and its entropy estimate."""
    value: str
    entropy: EntropyResult

    def __str__(self) -> str:
        return self.value


class PasswordGenerator(ABC):
    """One of the four generation strategies."""

    mode: ClassVar[Mode]
    config_type: ClassVar[type]

    @property
    def description(self) -> str:
        return self.mode.description

    def check_config(self, config: GenerationConfig) -> None:
        """Reject configs for another mode, then validate."""
        if not isinstance(config, self.config_type):
            raise InvalidConfig(
                f"{type(self).__name__} needs a {self.config_type.__name__}, "
                f"got {type(config).__name__}"
            )
        config.validate()

    @abstractmethod
    def generate(self, config: GenerationConfig, rng: RandomSource) -> GeneratedPassword:
        """Generate a single password."""
