"""Wordlist registry and startup loading."""

import asyncio
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import httpx

from ..errors import NotFound, PassphError, TransportFailure, Unusable
from .catalog import CATALOG, DEFAULT_BASE_URL, CatalogEntry, Wordlist, WordlistId

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 3.0


class WordlistRegistry:
    """Immutable set of loaded wordlists, keyed by id.

    Built once at startup and shared by reference; nothing mutates it
    afterwards, so concurrent readers need no locking.
    """

    def __init__(self, wordlists: Iterable[Wordlist]) -> None:
        self._wordlists: dict[WordlistId, Wordlist] = {}
        for wordlist in wordlists:
            if wordlist.id in self._wordlists:
                raise ValueError(f"Wordlist '{wordlist.name}' already registered")
            self._wordlists[wordlist.id] = wordlist
        if not self._wordlists:
            raise ValueError("WordlistRegistry needs at least one wordlist")

    def __iter__(self) -> Iterator[Wordlist]:
        return iter(self._wordlists.values())

    def __len__(self) -> int:
        return len(self._wordlists)

    @property
    def default_id(self) -> WordlistId:
        """Id used for users who never picked a wordlist."""
        return next(iter(self._wordlists))

    def get(self, wordlist_id: object) -> Wordlist | None:
        """Get a wordlist by id, or None if it is not registered."""
        parsed = WordlistId.parse(wordlist_id)
        if parsed is None:
            return None
        return self._wordlists.get(parsed)

    def resolve(self, wordlist_id: object) -> Wordlist:
        """Get a wordlist by id.

        Raises:
            NotFound: If the id is outside the catalog or not registered.
        """
        wordlist = self.get(wordlist_id)
        if wordlist is None:
            raise NotFound(f"Unknown wordlist id: {wordlist_id!r}")
        return wordlist

    def is_usable(self, wordlist_id: object) -> bool:
        """True if the id resolves to a wordlist that has words."""
        wordlist = self.get(wordlist_id)
        return wordlist is not None and wordlist.usable

    def list_wordlists(self, usable_only: bool = False) -> list[Wordlist]:
        """Registered wordlists in catalog order, optionally only those with words."""
        return [wl for wl in self._wordlists.values() if wl.usable or not usable_only]


@dataclass
class LoadReport:
    """Outcome of loading the catalog at startup.

    Failed entries are still present in the registry, with no words, so
    they resolve but are never usable.
    """

    registry: WordlistRegistry
    failures: dict[WordlistId, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        """Human-readable list of failed wordlists."""
        if self.ok:
            return "all wordlists loaded"
        return "; ".join(
            f"{self.registry.resolve(wl_id).name}: {reason}"
            for wl_id, reason in self.failures.items()
        )


async def fetch_wordlist(client: httpx.AsyncClient, wordlist: Wordlist) -> Wordlist:
    """Download the words of a wordlist from its source.

    The source must return a JSON array of strings.

    Args:
        client: HTTP client to use (its timeout bounds the request).
        wordlist: The wordlist to fill.

    Returns:
        A copy of the wordlist holding the fetched words.

    Raises:
        TransportFailure: On network errors, non-2xx responses or bad JSON.
        Unusable: If the source returned an empty array.
    """
    try:
        response = await client.get(wordlist.source)
        response.raise_for_status()
        data = response.json()
    except httpx.TimeoutException as e:
        raise TransportFailure(f"Timed out fetching {wordlist.source}") from e
    except httpx.HTTPStatusError as e:
        raise TransportFailure(
            f"HTTP {e.response.status_code} fetching {wordlist.source}"
        ) from e
    except httpx.RequestError as e:
        raise TransportFailure(f"Request to {wordlist.source} failed: {e}") from e
    except ValueError as e:
        raise TransportFailure(f"Invalid JSON from {wordlist.source}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
        raise TransportFailure(f"Expected a JSON array of strings from {wordlist.source}")
    if not data:
        raise Unusable(f"Wordlist {wordlist.name} is empty")

    if len(data) != wordlist.expected_size:
        logger.warning(
            "Wordlist %s has %d words, expected %d",
            wordlist.name,
            len(data),
            wordlist.expected_size,
        )

    return wordlist.with_words(data)


async def load_catalog(
    catalog: Iterable[CatalogEntry] = CATALOG,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = FETCH_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> LoadReport:
    """Load every catalog entry and build the registry.

    Per-entry failures are collected in the report instead of raised; the
    caller decides whether to abort.

    Args:
        catalog: Entries to load.
        base_url: Base URL the entries' files are fetched from.
        timeout: Per-request timeout in seconds (ignored if client is given).
        client: Optional HTTP client; one is created and closed if None.

    Returns:
        LoadReport with the registry and any failures.
    """
    pending = [Wordlist.from_entry(entry, base_url) for entry in catalog]

    own_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)
    try:
        results = await asyncio.gather(
            *(fetch_wordlist(client, wordlist) for wordlist in pending),
            return_exceptions=True,
        )
    finally:
        if own_client:
            await client.aclose()

    loaded: list[Wordlist] = []
    failures: dict[WordlistId, str] = {}
    for wordlist, result in zip(pending, results):
        if isinstance(result, PassphError):
            logger.error("Can't load wordlist %s: %s", wordlist.name, result)
            failures[wordlist.id] = str(result)
            loaded.append(wordlist)
        elif isinstance(result, BaseException):
            raise result
        else:
            logger.info("Loaded wordlist %s (%d words)", result.name, result.size)
            loaded.append(result)

    return LoadReport(registry=WordlistRegistry(loaded), failures=failures)
