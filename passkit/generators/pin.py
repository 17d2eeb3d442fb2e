#!/usr/bin/env python3
"""Numeric PIN generator."""

from passkit.config import Mode, PinConfig
from passkit.entropy import pin_entropy
from .base_generator import GeneratedPassword, PasswordGenerator
from .randomness import RandomSource


class PinGenerator(PasswordGenerator):
    """Uniform, independent decimal digits."""

    mode = Mode.PIN
    config_type = PinConfig

    def generate(self, config: PinConfig, rng: RandomSource) -> GeneratedPassword:
        self.check_config(config)
        pin = ''.join(str(rng.below(10)) for _ in range(config.length))
        return GeneratedPassword(value=pin, entropy=pin_entropy(config.length))


__all__ = ["PinGenerator"]
