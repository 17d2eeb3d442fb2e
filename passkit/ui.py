#!/usr/bin/env python3
"""
Password Display
================
Rich-based terminal output for generated passwords.

Each password is shown with a strength bar, its entropy in bits and the
strength tier:

    Password: Tolabinek4ra
    Strength: ████████░░░░░░░░░░░░ 53.1 bits Moderate 😐

Usage:
    from passkit.ui import PasswordDisplay

    display = PasswordDisplay(use_color=True, quiet=False)
    display.show_header("Diceware passphrase", count=3)
    for pw in passwords:
        display.show(pw)
"""

import sys
from typing import Optional

from rich.console import Console
from rich.style import Style
from rich.text import Text

from passkit.entropy import StrengthTier
from passkit.generators import GeneratedPassword
from passkit.settings import get_setting


TIER_STYLES = {
    StrengthTier.VERY_WEAK: Style(color="red"),
    StrengthTier.WEAK: Style(color="yellow"),
    StrengthTier.MODERATE: Style(color="blue"),
    StrengthTier.STRONG: Style(color="green"),
    StrengthTier.VERY_STRONG: Style(color="bright_green", bold=True),
}

TIER_EMOJI = {
    StrengthTier.VERY_WEAK: "💀",
    StrengthTier.WEAK: "😟",
    StrengthTier.MODERATE: "😐",
    StrengthTier.STRONG: "😊",
    StrengthTier.VERY_STRONG: "🔒",
}

FILL_CHAR = "█"
EMPTY_CHAR = "░"


class PasswordDisplay:
    """Renders passwords and their strength to a rich Console."""

    def __init__(self,
                 use_color: bool = True,
                 quiet: bool = False,
                 console: Optional[Console] = None):
        self.use_color = use_color
        self.quiet = quiet
        self.console = console or Console(
            no_color=not use_color,
            highlight=False,
            soft_wrap=True,
        )
        self.err_console = Console(stderr=True, no_color=not use_color, highlight=False)

        self.bar_width = get_setting("output.bar_width", 20)
        self.bar_max_bits = float(get_setting("output.bar_max_bits", 128))
        self.use_emoji = use_color and bool(get_setting("output.emoji", True))

    @staticmethod
    def stdout_is_terminal() -> bool:
        return sys.stdout.isatty()

    def render_bar(self, pw: GeneratedPassword) -> Text:
        """Strength bar scaled to bar_max_bits."""
        percentage = pw.entropy.percentage(self.bar_max_bits)
        filled = (self.bar_width * percentage) // 100
        bar = FILL_CHAR * filled + EMPTY_CHAR * (self.bar_width - filled)

        if self.use_color:
            return Text(bar, style=TIER_STYLES[pw.entropy.tier])
        return Text(f"[{bar}]")

    def show_header(self, description: str, count: int):
        if self.quiet:
            return
        prefix = "🔑 " if self.use_emoji else ""
        self.console.print()
        self.console.print(
            Text(f"{prefix}Generating {count} {description} password(s):",
                 style="bold cyan" if self.use_color else "")
        )
        self.console.print()

    def show(self, pw: GeneratedPassword):
        """Display a generated password with its strength."""
        if self.quiet:
            # Plain value only, safe to pipe
            self.console.print(Text(pw.value), markup=False)
            return

        tier = pw.entropy.tier

        line = Text("  ")
        line.append("Password:", style="bold" if self.use_color else "")
        line.append(" ")
        line.append(pw.value, style="bold green" if self.use_color else "")
        self.console.print(line)

        line = Text("  ")
        line.append("Strength:", style="bold" if self.use_color else "")
        line.append(" ")
        line.append_text(self.render_bar(pw))
        line.append(f" {pw.entropy.bits:.1f} bits ")
        if self.use_color:
            line.append(tier.label, style=TIER_STYLES[tier])
        else:
            line.append(f"({tier.label})")
        if self.use_emoji:
            line.append(f" {TIER_EMOJI[tier]}")
        self.console.print(line)
        self.console.print()

    def error(self, msg: str):
        self.err_console.print(Text(f"Error: {msg}", style="bold red" if self.use_color else ""))


__all__ = ["PasswordDisplay", "TIER_STYLES", "TIER_EMOJI"]
