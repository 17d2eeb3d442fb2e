#!/usr/bin/env python3
"""
PassKit CLI
===========
Command-line interface for password generation.

Usage:
    passkit normal 14 --symbols
    passkit secure 24 --charset alphanumeric --no-ambiguous
    passkit phrase 5 --separator space --capitalize --no-mutate
    passkit pin 8 -n 3
"""

import argparse
import logging
import sys

from passkit import __version__, PassKit
from passkit.config import (
    CapitalizeScope,
    CharSet,
    MarkovConfig,
    PassphraseConfig,
    PinConfig,
    SecureConfig,
    Separator,
)
from passkit.errors import PassKitError
from passkit.settings import get_setting
from passkit.ui import PasswordDisplay

logger = logging.getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else get_setting("logging.level", "WARNING")
    logging.basicConfig(
        level=level,
        format=get_setting("logging.format", "%(levelname)s %(name)s: %(message)s"),
        stream=sys.stderr,
    )


def pick(positional, flag):
    """Positional value wins over the flag; None means use the default."""
    return positional if positional is not None else flag


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


# =============================================================================
# Commands
# =============================================================================

def cmd_normal(args) -> MarkovConfig:
    """Pronounceable password config from parsed arguments."""
    return MarkovConfig(
        length=pick(args.length_pos, args.length),
        digits=args.digits,
        symbols=args.symbols,
        capitalize=args.capitalize,
        count=args.count,
    )


def cmd_secure(args) -> SecureConfig:
    """Secure random password config from parsed arguments."""
    return SecureConfig.from_charset(
        args.charset,
        length=pick(args.length_pos, args.length),
        exclude_ambiguous=args.no_ambiguous,
        count=args.count,
    )


def cmd_phrase(args) -> PassphraseConfig:
    """Passphrase config from parsed arguments."""
    return PassphraseConfig(
        words=pick(args.words_pos, args.words),
        separator=args.separator,
        custom_separator=args.custom_sep,
        # A scope on its own implies capitalization
        capitalize=True if args.capitalize or args.capitalize_scope else None,
        capitalize_scope=args.capitalize_scope,
        mutate=False if args.no_mutate else None,
        count=args.count,
    )


def cmd_pin(args) -> PinConfig:
    """PIN config from parsed arguments."""
    return PinConfig(length=pick(args.length_pos, args.length), count=args.count)


# =============================================================================
# Main
# =============================================================================

def add_common_options(parser, suppress: bool = False):
    """
    Options accepted both before and after the mode.

    The copy on each subparser uses SUPPRESS defaults so it does not
    overwrite a value given before the mode.
    """
    def default(value):
        return argparse.SUPPRESS if suppress else value

    parser.add_argument('-n', '--count', type=positive_int, default=default(None),
                        help='Number of passwords to generate (default: 1)')
    parser.add_argument('-q', '--quiet', action='store_true', default=default(False),
                        help='Only print the passwords')
    parser.add_argument('--no-color', action='store_true', default=default(False),
                        help='Disable colored output')
    parser.add_argument('--wordlist', default=default(None),
                        help='Word list file (default: from app.yaml)')
    parser.add_argument('-v', '--verbose', action='store_true', default=default(False),
                        help='Debug logging')


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    add_common_options(common, suppress=True)

    parser = argparse.ArgumentParser(
        prog='passkit',
        description='PassKit - generate secure, memorable passwords',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s normal 14 --symbols
  %(prog)s secure 24 --charset alphanumeric --no-ambiguous
  %(prog)s phrase 5 --separator space --capitalize --no-mutate
  %(prog)s pin 8 -n 3
  %(prog)s -n 3 -q phrase 4 --capitalize --capitalize-scope first
"""
    )
    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    add_common_options(parser)

    subparsers = parser.add_subparsers(dest='command', help='Modes')

    # --- normal ---
    p = subparsers.add_parser('normal', parents=[common],
                              help='Pronounceable passwords (Markov chain)')
    p.add_argument('length_pos', nargs='?', type=positive_int, metavar='LENGTH')
    p.add_argument('-l', '--length', type=positive_int, help='Password length (default: 12)')
    p.add_argument('-d', '--digits', action=argparse.BooleanOptionalAction, default=None,
                   help='Insert one digit (default: on)')
    p.add_argument('-s', '--symbols', action=argparse.BooleanOptionalAction, default=None,
                   help='Insert one readable symbol (default: off)')
    p.add_argument('-C', '--capitalize', action=argparse.BooleanOptionalAction, default=None,
                   help='Capitalize the first letter (default: on)')

    # --- secure ---
    p = subparsers.add_parser('secure', parents=[common],
                              help='Cryptographically secure random passwords')
    p.add_argument('length_pos', nargs='?', type=positive_int, metavar='LENGTH')
    p.add_argument('-l', '--length', type=positive_int, help='Password length (default: 16)')
    p.add_argument('-S', '--charset', choices=[c.value for c in CharSet],
                   help='Character set (default: alphanumeric-symbols)')
    p.add_argument('--no-ambiguous', action='store_true', default=None,
                   help='Exclude ambiguous characters (0 O 1 l I |)')

    # --- phrase ---
    p = subparsers.add_parser('phrase', parents=[common],
                              help='Diceware passphrases')
    p.add_argument('words_pos', nargs='?', type=positive_int, metavar='WORDS')
    p.add_argument('-w', '--words', type=positive_int, help='Number of words (default: 6)')
    p.add_argument('--separator', choices=[s.value for s in Separator],
                   help='Word separator (default: dash)')
    p.add_argument('--custom-sep', help='Custom separator string (overrides --separator)')
    p.add_argument('-C', '--capitalize', action='store_true', default=None,
                   help='Capitalize words')
    p.add_argument('--capitalize-scope', choices=[c.value for c in CapitalizeScope],
                   help='Capitalize each word or only the first (default: each)')
    p.add_argument('--no-mutate', action='store_true',
                   help='Disable leet/truncate/double mutations')

    # --- pin ---
    p = subparsers.add_parser('pin', parents=[common], help='Numeric PIN codes')
    p.add_argument('length_pos', nargs='?', type=positive_int, metavar='LENGTH')
    p.add_argument('-l', '--length', type=positive_int, help='PIN length (default: 6)')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    # Piped output gets the bare passwords
    is_tty = PasswordDisplay.stdout_is_terminal()
    display = PasswordDisplay(
        use_color=is_tty and not args.no_color,
        quiet=args.quiet or not is_tty,
    )

    commands = {
        'normal': cmd_normal,
        'secure': cmd_secure,
        'phrase': cmd_phrase,
        'pin': cmd_pin,
    }

    try:
        cfg = commands[args.command](args)
        kit = PassKit(wordlist_path=args.wordlist)
        gen = kit.generator(cfg.mode)

        display.show_header(gen.description, cfg.count)
        for pw in kit.generate(cfg):
            display.show(pw)
    except KeyboardInterrupt:
        display.error("Cancelled.")
        return 130
    except (PassKitError, FileNotFoundError) as e:
        display.error(str(e))
        if args.verbose:
            logger.exception("Generation failed")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
