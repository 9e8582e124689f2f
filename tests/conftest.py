"""Shared fixtures."""

from pathlib import Path
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from passph.conversation import ConversationController
from passph.generator import PassphraseGenerator
from passph.logging import JSONLLogger
from passph.store import UserConfigStore
from passph.wordlists import CATALOG, Wordlist, WordlistRegistry

TEST_WORDS = {
    0: ["abandon", "ability", "able", "about", "above", "absent"],
    1: ["aback", "abase", "abate", "abbey", "abbot"],
    2: ["abacus", "abdomen", "abdominal", "abide", "abiding", "ability", "ablaze"],
    3: ["acid", "acorn", "acre", "acts"],
    4: ["aardvark", "abandoned", "abbreviate", "abdomen"],
}


class InMemoryRedis:
    """Redis test double with a manual clock for key expiry."""

    def __init__(self) -> None:
        self.now = 0.0
        self.down = False
        self.calls: list[tuple[Any, ...]] = []
        self._data: dict[str, tuple[str, float | None]] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def ttl(self, name: str) -> float | None:
        """Seconds left before a key expires, None if it never does."""
        _, expires_at = self._data[name]
        return None if expires_at is None else expires_at - self.now

    def _check(self) -> None:
        if self.down:
            raise RedisConnectionError("Connection refused")

    def _live(self, name: str) -> str | None:
        item = self._data.get(name)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and self.now >= expires_at:
            del self._data[name]
            return None
        return value

    async def get(self, name: str) -> str | None:
        self._check()
        self.calls.append(("GET", name))
        return self._live(name)

    async def set(self, name: str, value: Any) -> bool:
        self._check()
        self.calls.append(("SET", name, str(value)))
        self._data[name] = (str(value), None)
        return True

    async def setex(self, name: str, time: int, value: Any) -> bool:
        self._check()
        self.calls.append(("SETEX", name, int(time), str(value)))
        self._data[name] = (str(value), self.now + int(time))
        return True

    async def delete(self, *names: str) -> int:
        self._check()
        self.calls.append(("DEL", *names))
        removed = 0
        for name in names:
            if self._live(name) is not None:
                del self._data[name]
                removed += 1
        return removed


@pytest.fixture
def redis_client() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def registry() -> WordlistRegistry:
    """Registry with every catalog entry loaded with a few test words."""
    return WordlistRegistry(
        Wordlist.from_entry(entry).with_words(TEST_WORDS[int(entry.id)])
        for entry in CATALOG
    )


@pytest.fixture
def generator(registry: WordlistRegistry) -> PassphraseGenerator:
    return PassphraseGenerator(registry)


@pytest.fixture
def store(redis_client: InMemoryRedis) -> UserConfigStore:
    return UserConfigStore(redis_client)


@pytest.fixture
def json_logger(tmp_path: Path) -> JSONLLogger:
    return JSONLLogger(log_dir=tmp_path / "logs")


@pytest.fixture
def controller(
    store: UserConfigStore,
    generator: PassphraseGenerator,
    json_logger: JSONLLogger,
) -> ConversationController:
    return ConversationController(store, generator, json_logger=json_logger)
