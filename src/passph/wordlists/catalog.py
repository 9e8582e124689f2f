"""The fixed catalog of wordlists and the Wordlist value type."""

from dataclasses import dataclass, replace
from enum import IntEnum

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/bzhn/passph/master/wordlists"


class WordlistId(IntEnum):
    """Stable identifiers of the catalog entries.

    Values are persisted per user, so existing members must never be
    renumbered. New wordlists are appended at the end.
    """

    BIP39 = 0
    WORDLE = 1
    DICE_LONG = 2
    DICE_SHORT1 = 3
    DICE_SHORT2 = 4

    @classmethod
    def parse(cls, value: object) -> "WordlistId | None":
        """Return the id for an int or decimal string, or None if out of range."""
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = int(value)
            except ValueError:
                return None
        if not isinstance(value, int):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class CatalogEntry:
    """Static description of a wordlist."""

    id: WordlistId
    name: str
    expected_size: int
    filename: str
    description: str = ""
    example: str = ""

    def source(self, base_url: str = DEFAULT_BASE_URL) -> str:
        """URL of the JSON array holding the words."""
        return f"{base_url.rstrip('/')}/{self.filename}"


@dataclass(frozen=True)
class Wordlist:
    """A catalog entry together with its loaded words."""

    id: WordlistId
    name: str
    expected_size: int
    source: str
    description: str = ""
    example: str = ""
    words: tuple[str, ...] = ()

    @classmethod
    def from_entry(cls, entry: CatalogEntry, base_url: str = DEFAULT_BASE_URL) -> "Wordlist":
        """Build an empty (not yet loaded) wordlist for a catalog entry."""
        return cls(
            id=entry.id,
            name=entry.name,
            expected_size=entry.expected_size,
            source=entry.source(base_url),
            description=entry.description,
            example=entry.example,
        )

    @property
    def usable(self) -> bool:
        """A wordlist can be used for generation only when it has words."""
        return len(self.words) > 0

    @property
    def size(self) -> int:
        return len(self.words)

    def with_words(self, words: list[str] | tuple[str, ...]) -> "Wordlist":
        """Return a copy holding the given words."""
        return replace(self, words=tuple(words))


# Ordered: the first entry is the default for users who never picked one.
CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        id=WordlistId.BIP39,
        name="BIP39",
        expected_size=2048,
        filename="bip39_dictionary.json",
        description="English BIP39 list used for crypto wallet recovery phrases",
        example="spider music exhibit",
    ),
    CatalogEntry(
        id=WordlistId.WORDLE,
        name="Wordle",
        expected_size=12972,
        filename="wordle-powerlanguage.json",
        description="only 5-chars words, 12000ish words in the list",
        example="spews livid airns",
    ),
    CatalogEntry(
        id=WordlistId.DICE_LONG,
        name="Dice Long",
        expected_size=7776,
        filename="eff_large_wordlist.json",
        description="6^5 = 7776 words",
        example="freebee attendant empirical",
    ),
    CatalogEntry(
        id=WordlistId.DICE_SHORT1,
        name="Dice Short 1",
        expected_size=1296,
        filename="eff_short_wordlist_1.json",
        description="Featuring only short words (6^4 = 1296 words)",
        example="stack lip visa",
    ),
    CatalogEntry(
        id=WordlistId.DICE_SHORT2,
        name="Dice Short 2",
        expected_size=1296,
        filename="eff_short_wordlist_2_0.json",
        description="Featuring longer words that may be more memorable (6^4 = 1296 words)",
        example="liquid mapmaker shyness",
    ),
)
