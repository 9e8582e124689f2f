"""Runtime configuration loaded from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

from .wordlists import DEFAULT_BASE_URL


@dataclass
class BotConfig:
    """Configuration for the bot process.

    Attributes:
        token: Telegram bot token.
        redis_url: Redis connection URL.
        redis_timeout: Socket timeout for Redis calls, in seconds.
        wordlist_timeout: Timeout for each wordlist download, in seconds.
        wordlist_base_url: Where the wordlist JSON files are fetched from.
        log_dir: Directory for JSONL logs.
    """

    token: str | None = None
    redis_url: str = "redis://redis:6379/0"
    redis_timeout: float = 3.0
    wordlist_timeout: float = 3.0
    wordlist_base_url: str = DEFAULT_BASE_URL
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.log_dir is None:
            self.log_dir = Path.home() / ".passph" / "logs"

        if self.redis_timeout <= 0:
            raise ValueError("redis_timeout must be positive")
        if self.wordlist_timeout <= 0:
            raise ValueError("wordlist_timeout must be positive")

    @classmethod
    def from_env(cls) -> "BotConfig":
        """Load configuration from environment variables."""
        log_dir = os.getenv("PASSPH_LOG_DIR")
        return cls(
            token=os.getenv("PASSPHRASEBOT_TOKEN"),
            redis_url=os.getenv("REDIS_URL", "redis://redis:6379/0"),
            redis_timeout=float(os.getenv("PASSPH_REDIS_TIMEOUT", "3")),
            wordlist_timeout=float(os.getenv("PASSPH_WORDLIST_TIMEOUT", "3")),
            wordlist_base_url=os.getenv("PASSPH_WORDLIST_BASE_URL", DEFAULT_BASE_URL),
            log_dir=Path(log_dir).expanduser() if log_dir else None,
        )
