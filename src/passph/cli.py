"""Command-line passphrase generation, without Telegram or Redis.

    passph generate -n 5 -s = -l dice-long -c 3
"""

import argparse
import asyncio
import sys

from .conversation import MAX_WORD_COUNT, parse_separator
from .errors import InvalidConfig, SeparatorTooLong
from .generator import DEFAULT_LENGTH, DEFAULT_SEPARATOR, PassphraseConfig, PassphraseGenerator
from .wordlists import CATALOG, DEFAULT_BASE_URL, CatalogEntry, load_catalog


def wordlist_slug(entry: CatalogEntry) -> str:
    """Command-line name of a wordlist ("Dice Short 1" -> "dice-short-1")."""
    return entry.name.lower().replace(" ", "-")


WORDLIST_CHOICES = {wordlist_slug(entry): entry for entry in CATALOG}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the generate command."""
    parser = argparse.ArgumentParser(
        prog="passph generate",
        description="Generate mnemonic passphrases",
    )
    parser.add_argument(
        "-n", "--words",
        type=int,
        default=DEFAULT_LENGTH,
        help=f"Number of words (1-{MAX_WORD_COUNT}, default {DEFAULT_LENGTH})",
    )
    parser.add_argument(
        "-s", "--separator",
        default=DEFAULT_SEPARATOR,
        help="Separator between words ('\\' for space, '\\n' for newline)",
    )
    parser.add_argument(
        "-l", "--wordlist",
        choices=sorted(WORDLIST_CHOICES),
        default=wordlist_slug(CATALOG[0]),
        help="Wordlist to draw words from",
    )
    parser.add_argument(
        "-c", "--count",
        type=int,
        default=1,
        help="How many passphrases to print",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="Where the wordlist files are downloaded from",
    )
    return parser


def run_generate_cli(argv: list[str] | None = None) -> int:
    """Run the generate command with given arguments.

    Args:
        argv: Command-line arguments. Uses sys.argv[1:] if None.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not 0 < args.words <= MAX_WORD_COUNT:
        parser.error(f"--words must be between 1 and {MAX_WORD_COUNT}")
    if args.count < 1:
        parser.error("--count must be at least 1")
    try:
        separator = parse_separator(args.separator)
    except SeparatorTooLong as e:
        parser.error(str(e))

    entry = WORDLIST_CHOICES[args.wordlist]
    report = asyncio.run(load_catalog([entry], base_url=args.base_url))
    if not report.ok:
        print(f"❌ Error: {report.summary()}", file=sys.stderr)
        return 1

    generator = PassphraseGenerator(report.registry)
    config = PassphraseConfig(wordlist=entry.id, length=args.words, separator=separator)
    try:
        for _ in range(args.count):
            print(generator.generate(config))
    except InvalidConfig as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run_generate_cli())
