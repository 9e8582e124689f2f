"""passph entry point."""

import asyncio
import logging
import sys

import redis.asyncio as redis
from dotenv import find_dotenv, load_dotenv

from .config import BotConfig
from .conversation import ConversationController
from .generator import PassphraseGenerator
from .logging import configure_logger
from .store import UserConfigStore
from .wordlists import LoadReport, load_catalog

logger = logging.getLogger(__name__)

USAGE = "usage: passph [bot | generate [options]]"


def load_wordlists(config: BotConfig) -> LoadReport:
    """Download every wordlist before the bot starts.

    Runs on a fresh event loop that stays installed as the current loop,
    so the Telegram application can reuse it afterwards.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    return loop.run_until_complete(
        load_catalog(base_url=config.wordlist_base_url, timeout=config.wordlist_timeout)
    )


def run_bot(config: BotConfig | None = None) -> int:
    """Load wordlists, connect to Redis and serve Telegram updates.

    Returns:
        Exit code. Non-zero when the bot could not start.
    """
    config = config or BotConfig.from_env()
    json_logger = configure_logger(config.log_dir)

    if not config.token:
        print("❌ Error: PASSPHRASEBOT_TOKEN environment variable not set")
        return 1

    report = load_wordlists(config)
    json_logger.log(
        "wordlist_load",
        ok=report.ok,
        loaded=[wl.name for wl in report.registry if wl.usable],
    )
    if not report.ok:
        # Generating from an empty wordlist is undefined, so refuse to serve.
        logger.critical("Can't load wordlists: %s", report.summary())
        json_logger.log_error(report.summary(), context="wordlist_load")
        print(f"❌ Error: can't load wordlists: {report.summary()}")
        return 1

    redis_client = redis.from_url(
        config.redis_url,
        decode_responses=True,
        socket_timeout=config.redis_timeout,
        socket_connect_timeout=config.redis_timeout,
    )
    store = UserConfigStore(redis_client, default_wordlist=report.registry.default_id)
    controller = ConversationController(
        store, PassphraseGenerator(report.registry), json_logger=json_logger
    )

    from .telegram import PassphraseBot

    bot = PassphraseBot(controller, token=config.token, redis_client=redis_client)
    bot.run()
    return 0


def main() -> None:
    """Main entry point."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command = sys.argv[1] if len(sys.argv) > 1 else "bot"

    if command == "generate":
        from .cli import run_generate_cli

        # Pass remaining args (after 'generate') to the generate CLI
        sys.exit(run_generate_cli(sys.argv[2:]))

    if command == "bot":
        sys.exit(run_bot())

    print(USAGE, file=sys.stderr)
    sys.exit(2)


if __name__ == "__main__":
    main()
