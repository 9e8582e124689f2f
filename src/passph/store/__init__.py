"""Per-user settings storage."""

from .preferences import (
    PENDING_ACTION_TTL_SECONDS,
    PREFERENCE_TTL_SECONDS,
    KeyValueClient,
    PendingAction,
    UserConfigStore,
    UserPreferences,
    user_key,
)

__all__ = [
    "PENDING_ACTION_TTL_SECONDS",
    "PREFERENCE_TTL_SECONDS",
    "KeyValueClient",
    "PendingAction",
    "UserConfigStore",
    "UserPreferences",
    "user_key",
]
