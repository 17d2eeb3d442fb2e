#!/usr/bin/env python3
"""
Generation Configuration
========================
Per-mode configuration values for the four generators.

Every field left as None is filled from the matching section of app.yaml,
so a config built with no arguments carries the documented defaults:

    normal  - 12 chars, capitalized, one digit inserted
    secure  - 16 chars, letters + digits + symbols
    phrase  - 6 words, dash separator, mutation enabled
    pin     - 6 digits

Configs are built once per invocation and handed to generators read-only.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Optional, Tuple

from passkit.errors import InvalidConfig
from passkit.settings import get_setting


# =============================================================================
# Enumerations
# =============================================================================

class Mode(Enum):
    """The closed set of generation strategies."""
    NORMAL = "normal"
    SECURE = "secure"
    PHRASE = "phrase"
    PIN = "pin"

    @property
    def description(self) -> str:
        return MODE_DESCRIPTIONS[self]


MODE_DESCRIPTIONS = {
    Mode.NORMAL: "Pronounceable (Markov chain)",
    Mode.SECURE: "Secure random",
    Mode.PHRASE: "Diceware passphrase",
    Mode.PIN: "Numeric PIN",
}


class CharSet(Enum):
    """Character set presets for secure passwords."""
    ALPHA = "alpha"                                # a-z, A-Z
    ALPHANUMERIC = "alphanumeric"                  # a-z, A-Z, 0-9
    ALPHANUMERIC_SYMBOLS = "alphanumeric-symbols"  # a-z, A-Z, 0-9, symbols
    ALL = "all"                                    # all printable ASCII


# (lowercase, uppercase, digits, symbols)
CHARSET_CLASSES = {
    CharSet.ALPHA: (True, True, False, False),
    CharSet.ALPHANUMERIC: (True, True, True, False),
    CharSet.ALPHANUMERIC_SYMBOLS: (True, True, True, True),
    CharSet.ALL: (True, True, True, True),
}


class Separator(Enum):
    """Word separators for passphrases."""
    DASH = "dash"
    SPACE = "space"
    DOT = "dot"
    UNDERSCORE = "underscore"
    NONE = "none"
    CUSTOM = "custom"

    def as_str(self) -> Optional[str]:
        return SEPARATOR_STRINGS.get(self)


SEPARATOR_STRINGS = {
    Separator.DASH: "-",
    Separator.SPACE: " ",
    Separator.DOT: ".",
    Separator.UNDERSCORE: "_",
    Separator.NONE: "",
}


class CapitalizeScope(Enum):
    """Which passphrase words get a capital first letter."""
    EACH = "each"
    FIRST = "first"


def coerce_enum(enum_cls, value: Any, field_name: str):
    """Accept an enum member or its string value."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ', '.join(m.value for m in enum_cls)
        raise InvalidConfig(
            f"Invalid {field_name} '{value}'. Choose from: {choices}"
        ) from None


def _require_positive(value: Any, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfig(f"{field_name} must be a positive integer, got {value!r}")


# =============================================================================
# Configs
# =============================================================================

@dataclass
class GenerationConfig:
    """Options shared by every mode."""
    count: Optional[int] = None

    mode: ClassVar[Mode]
    # field name -> dotted key inside this mode's app.yaml section
    settings_keys: ClassVar[Tuple[Tuple[str, str], ...]] = ()
    optional_fields: ClassVar[Tuple[str, ...]] = ()

    def __post_init__(self):
        if self.count is None:
            self.count = get_setting("output.count")

        section = get_setting(self.mode.value, {}) or {}
        for name, key in self.settings_keys:
            if getattr(self, name) is None:
                setattr(self, name, _lookup(section, key))

        self._normalize()

        missing = [
            f.name for f in fields(self)
            if getattr(self, f.name) is None and f.name not in self.optional_fields
        ]
        if missing:
            raise InvalidConfig(
                f"{self.mode.value} settings missing in app.yaml: {', '.join(missing)}"
            )

    def _normalize(self) -> None:
        """Hook for subclasses to coerce enum values after defaults are applied."""

    def validate(self) -> None:
        """Raise InvalidConfig unless this config can describe a password."""
        _require_positive(self.count, "count")


def _lookup(section: dict, dotted: str) -> Any:
    current: Any = section
    for part in dotted.split('.'):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


@dataclass
class MarkovConfig(GenerationConfig):
    """Pronounceable password options."""
    length: Optional[int] = None
    digits: Optional[bool] = None
    symbols: Optional[bool] = None
    capitalize: Optional[bool] = None
    max_attempts: Optional[int] = None
    max_restarts: Optional[int] = None
    max_run: Optional[int] = None

    mode: ClassVar[Mode] = Mode.NORMAL
    settings_keys: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("length", "length"),
        ("digits", "digits"),
        ("symbols", "symbols"),
        ("capitalize", "capitalize"),
        ("max_attempts", "max_attempts"),
        ("max_restarts", "max_restarts"),
        ("max_run", "max_run"),
    )

    def validate(self) -> None:
        super().validate()
        _require_positive(self.length, "length")
        _require_positive(self.max_attempts, "max_attempts")
        _require_positive(self.max_run, "max_run")
        if self.max_restarts < 0:
            raise InvalidConfig(f"max_restarts must not be negative, got {self.max_restarts}")


@dataclass
class SecureConfig(GenerationConfig):
    """Secure random password options."""
    length: Optional[int] = None
    charset: Optional[CharSet] = None
    lowercase: Optional[bool] = None
    uppercase: Optional[bool] = None
    digits: Optional[bool] = None
    symbols: Optional[bool] = None
    exclude_ambiguous: Optional[bool] = None

    mode: ClassVar[Mode] = Mode.SECURE
    settings_keys: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("length", "length"),
        ("charset", "charset"),
        ("exclude_ambiguous", "exclude_ambiguous"),
    )

    def _normalize(self) -> None:
        self.charset = coerce_enum(CharSet, self.charset, "charset")
        if self.charset is None:
            return
        # Class flags not given explicitly follow the preset.
        preset = CHARSET_CLASSES[self.charset]
        for name, enabled in zip(("lowercase", "uppercase", "digits", "symbols"), preset):
            if getattr(self, name) is None:
                setattr(self, name, enabled)

    @classmethod
    def from_charset(cls, charset, **kwargs) -> 'SecureConfig':
        """Build a config whose class flags come from a preset."""
        return cls(charset=coerce_enum(CharSet, charset, "charset"), **kwargs)

    def validate(self) -> None:
        super().validate()
        _require_positive(self.length, "length")
        if not (self.lowercase or self.uppercase or self.digits or self.symbols):
            raise InvalidConfig("At least one character class must be enabled")


@dataclass
class PassphraseConfig(GenerationConfig):
    """Diceware passphrase options."""
    words: Optional[int] = None
    separator: Optional[Separator] = None
    custom_separator: Optional[str] = None
    capitalize: Optional[bool] = None
    capitalize_scope: Optional[CapitalizeScope] = None
    mutate: Optional[bool] = None
    leet_probability: Optional[float] = None
    min_truncate_length: Optional[int] = None

    mode: ClassVar[Mode] = Mode.PHRASE
    settings_keys: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("words", "words"),
        ("separator", "separator"),
        ("capitalize", "capitalize"),
        ("capitalize_scope", "capitalize_scope"),
        ("mutate", "mutate"),
        ("leet_probability", "mutation.leet_probability"),
        ("min_truncate_length", "mutation.min_truncate_length"),
    )
    optional_fields: ClassVar[Tuple[str, ...]] = ("custom_separator",)

    def _normalize(self) -> None:
        self.separator = coerce_enum(Separator, self.separator, "separator")
        self.capitalize_scope = coerce_enum(
            CapitalizeScope, self.capitalize_scope, "capitalize_scope"
        )

    @property
    def separator_string(self) -> str:
        """The joining string; a custom separator overrides the enum."""
        if self.custom_separator is not None:
            return self.custom_separator
        sep = self.separator.as_str()
        if sep is None:
            raise InvalidConfig("Custom separator selected but no custom separator given")
        return sep

    def validate(self) -> None:
        super().validate()
        _require_positive(self.words, "word count")
        if not 0.0 <= float(self.leet_probability) <= 1.0:
            raise InvalidConfig(
                f"leet_probability must be within [0, 1], got {self.leet_probability}"
            )
        _require_positive(self.min_truncate_length, "min_truncate_length")
        if self.custom_separator is None and self.separator is Separator.CUSTOM:
            raise InvalidConfig("Custom separator selected but no custom separator given")


@dataclass
class PinConfig(GenerationConfig):
    """Numeric PIN options."""
    length: Optional[int] = None

    mode: ClassVar[Mode] = Mode.PIN
    settings_keys: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("length", "length"),
    )

    def validate(self) -> None:
        super().validate()
        _require_positive(self.length, "length")


CONFIG_TYPES = {
    Mode.NORMAL: MarkovConfig,
    Mode.SECURE: SecureConfig,
    Mode.PHRASE: PassphraseConfig,
    Mode.PIN: PinConfig,
}


def config_for(mode, **kwargs) -> GenerationConfig:
    """Build the config type for a mode; None-valued kwargs fall back to defaults."""
    mode = coerce_enum(Mode, mode, "mode")
    return CONFIG_TYPES[mode](**kwargs)


__all__ = [
    "Mode",
    "CharSet",
    "Separator",
    "CapitalizeScope",
    "GenerationConfig",
    "MarkovConfig",
    "SecureConfig",
    "PassphraseConfig",
    "PinConfig",
    "CONFIG_TYPES",
    "config_for",
    "coerce_enum",
]
