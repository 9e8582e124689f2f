"""Wordlist catalog, registry and loading."""

from .catalog import CATALOG, DEFAULT_BASE_URL, CatalogEntry, Wordlist, WordlistId
from .registry import LoadReport, WordlistRegistry, fetch_wordlist, load_catalog

__all__ = [
    "CATALOG",
    "DEFAULT_BASE_URL",
    "CatalogEntry",
    "LoadReport",
    "Wordlist",
    "WordlistId",
    "WordlistRegistry",
    "fetch_wordlist",
    "load_catalog",
]
