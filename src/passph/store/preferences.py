"""Per-user preferences and pending actions kept in Redis.

Every field lives under its own key, ``"<prefix>:<user_id>"``, with its own
expiry:

    plist:<id>    wordlist id        no expiry
    wordsn:<id>   number of words    365 days
    sep:<id>      separator          365 days
    lastact:<id>  pending action     1 hour

Preferences are a long-lived cache of human-facing settings. The pending
action is a short-lived marker: once it expires the user is treated as having
nothing pending.

Writes for the same user are last-write-wins; there is no compare-and-swap,
so a wordlist change racing with a regenerate may be seen by either.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from redis.exceptions import RedisError

from ..errors import InvalidArgument, NotFound, TransportFailure
from ..wordlists import WordlistId

logger = logging.getLogger(__name__)

WORDLIST_PREFIX = "plist"
WORD_COUNT_PREFIX = "wordsn"
SEPARATOR_PREFIX = "sep"
PENDING_ACTION_PREFIX = "lastact"

PREFERENCE_TTL_SECONDS = 365 * 24 * 60 * 60
PENDING_ACTION_TTL_SECONDS = 60 * 60


class PendingAction(Enum):
    """What kind of free-text reply the bot is waiting for."""

    AWAITING_WORD_COUNT = "setnumberofwords"
    AWAITING_SEPARATOR = "setseparator"
    AWAITING_ENCRYPTION_PASSWORD = "setencryptionpass"

    @classmethod
    def parse(cls, tag: str) -> "PendingAction | None":
        try:
            return cls(tag)
        except ValueError:
            return None


@dataclass(frozen=True)
class UserPreferences:
    """Effective generation settings of a user, defaults applied."""

    user_id: int
    wordlist_id: WordlistId
    word_count: int
    separator: str


class KeyValueClient(Protocol):
    """The subset of the redis.asyncio client used by the store."""

    async def get(self, name: str) -> Any: ...

    async def set(self, name: str, value: Any) -> Any: ...

    async def setex(self, name: str, time: int, value: Any) -> Any: ...

    async def delete(self, *names: str) -> Any: ...


def user_key(prefix: str, user_id: int) -> str:
    """Build the key of a user's field."""
    return f"{prefix}:{user_id}"


def _check_user(user_id: int) -> None:
    if not user_id:
        raise InvalidArgument("Invalid user id")


class UserConfigStore:
    """Reads and writes user preferences through a Redis client.

    Redis errors are raised as TransportFailure, except from get_wordlist,
    which falls back to the default wordlist.
    """

    def __init__(
        self,
        client: KeyValueClient,
        default_wordlist: WordlistId = WordlistId.BIP39,
    ) -> None:
        self.client = client
        self.default_wordlist = default_wordlist

    async def _get(self, key: str) -> str | None:
        try:
            value = await self.client.get(key)
        except RedisError as e:
            raise TransportFailure(f"GET {key} failed: {e}") from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def _set(self, key: str, value: str, ttl: int | None = None) -> None:
        try:
            if ttl is None:
                await self.client.set(key, value)
            else:
                await self.client.setex(key, ttl, value)
        except RedisError as e:
            raise TransportFailure(f"SET {key} failed: {e}") from e

    async def _delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise TransportFailure(f"DEL {key} failed: {e}") from e

    async def set_wordlist(self, user_id: int, wordlist_id: object) -> WordlistId:
        """Store the user's wordlist.

        Raises:
            InvalidArgument: If user_id is 0 or the id is outside the catalog.
        """
        _check_user(user_id)
        parsed = WordlistId.parse(wordlist_id)
        if parsed is None:
            raise InvalidArgument(f"Wordlist id {wordlist_id!r} is invalid")
        await self._set(user_key(WORDLIST_PREFIX, user_id), str(int(parsed)))
        return parsed

    async def get_wordlist(self, user_id: int) -> WordlistId:
        """Get the user's wordlist, or the default if unset or unreadable."""
        try:
            raw = await self._get(user_key(WORDLIST_PREFIX, user_id))
        except TransportFailure as e:
            logger.warning("Can't get wordlist of user %s: %s", user_id, e)
            return self.default_wordlist

        if raw is None:
            return self.default_wordlist

        parsed = WordlistId.parse(raw)
        if parsed is None:
            logger.warning("Stored wordlist of user %s is invalid: %r", user_id, raw)
            return self.default_wordlist
        return parsed

    async def set_word_count(self, user_id: int, n: int) -> None:
        """Store the number of words. The caller validates the magnitude."""
        _check_user(user_id)
        await self._set(
            user_key(WORD_COUNT_PREFIX, user_id), str(n), PREFERENCE_TTL_SECONDS
        )

    async def get_word_count(self, user_id: int) -> int:
        """Get the stored number of words.

        Non-positive stored values are returned as-is.

        Raises:
            NotFound: If nothing is stored.
            InvalidArgument: If the stored value is not an integer.
            TransportFailure: On Redis errors.
        """
        raw = await self._get(user_key(WORD_COUNT_PREFIX, user_id))
        if raw is None:
            raise NotFound(f"No word count for user {user_id}")
        try:
            return int(raw)
        except ValueError as e:
            raise InvalidArgument(f"Stored word count {raw!r} is not a number") from e

    async def set_separator(self, user_id: int, separator: str) -> None:
        """Store the separator. The caller validates the length."""
        _check_user(user_id)
        await self._set(
            user_key(SEPARATOR_PREFIX, user_id), separator, PREFERENCE_TTL_SECONDS
        )

    async def get_separator(self, user_id: int) -> str:
        """Get the stored separator.

        Raises:
            NotFound: If nothing is stored.
            TransportFailure: On Redis errors.
        """
        raw = await self._get(user_key(SEPARATOR_PREFIX, user_id))
        if raw is None:
            raise NotFound(f"No separator for user {user_id}")
        return raw

    async def set_pending_action(self, user_id: int, action: PendingAction) -> None:
        """Replace the user's pending action. It expires after an hour."""
        _check_user(user_id)
        await self._set(
            user_key(PENDING_ACTION_PREFIX, user_id),
            action.value,
            PENDING_ACTION_TTL_SECONDS,
        )

    async def clear_pending_action(self, user_id: int) -> None:
        """Remove the user's pending action. Nothing pending is fine."""
        _check_user(user_id)
        await self._delete(user_key(PENDING_ACTION_PREFIX, user_id))

    async def get_pending_action(self, user_id: int) -> PendingAction | None:
        """Get the user's pending action, None if there is none.

        Raises:
            TransportFailure: On Redis errors.
        """
        raw = await self._get(user_key(PENDING_ACTION_PREFIX, user_id))
        if raw is None:
            return None
        action = PendingAction.parse(raw)
        if action is None:
            logger.warning("Unknown pending action of user %s: %r", user_id, raw)
        return action
