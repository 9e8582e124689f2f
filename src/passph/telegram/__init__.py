"""Telegram transport."""

from .bot import PassphraseBot, command_name, to_markup

__all__ = ["PassphraseBot", "command_name", "to_markup"]
