"""Passphrase generation."""

import secrets
from collections.abc import Callable
from dataclasses import dataclass

from .errors import InvalidConfig
from .wordlists import WordlistId, WordlistRegistry

DEFAULT_LENGTH = 3
DEFAULT_SEPARATOR = "-"


@dataclass(frozen=True)
class PassphraseConfig:
    """What to generate: which wordlist, how many words, joined by what."""

    wordlist: WordlistId
    length: int = DEFAULT_LENGTH
    separator: str = DEFAULT_SEPARATOR


class PassphraseGenerator:
    """Draws words uniformly at random from registered wordlists.

    Words are drawn with replacement, so a passphrase may repeat a word and
    may be longer than its wordlist.
    """

    def __init__(
        self,
        registry: WordlistRegistry,
        randbelow: Callable[[int], int] = secrets.randbelow,
    ) -> None:
        self.registry = registry
        self._randbelow = randbelow

    def is_valid(self, config: PassphraseConfig) -> bool:
        """True if the config points to a usable wordlist."""
        return self.registry.is_usable(config.wordlist)

    def generate(self, config: PassphraseConfig) -> str:
        """Generate a passphrase.

        Raises:
            InvalidConfig: If the wordlist is unknown or has no words.
        """
        if not self.is_valid(config):
            raise InvalidConfig(f"Wordlist {config.wordlist!r} is not usable")

        if config.length <= 0:
            return ""

        words = self.registry.resolve(config.wordlist).words
        size = len(words)
        # randbelow is unbiased for any upper bound
        parts = [words[self._randbelow(size)] for _ in range(config.length)]
        return config.separator.join(parts)
