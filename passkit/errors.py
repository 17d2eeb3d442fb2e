#!/usr/bin/env python3
"""
PassKit Errors
==============
Typed failures raised by the generation engine.

    InvalidConfig      - a request that cannot describe a password
    GenerationFailure  - Markov sampling gave up after its retry budget
    EntropyUnderflow   - too few symbols to measure anything
"""


class PassKitError(Exception):
    """Base class for all PassKit failures."""


class InvalidConfig(PassKitError, ValueError):
    """Configuration that cannot produce a password (zero length, empty pool, ...)."""


class GenerationFailure(PassKitError, RuntimeError):
    """Generation could not complete within its bounded retries."""


class EntropyUnderflow(PassKitError, ValueError):
    """Pool too small (or bits negative) for a meaningful entropy estimate."""


__all__ = [
    "PassKitError",
    "InvalidConfig",
    "GenerationFailure",
    "EntropyUnderflow",
]
