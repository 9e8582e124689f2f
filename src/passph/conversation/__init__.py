"""Conversation handling: commands, pending actions and buttons."""

from .buttons import ButtonAction, ButtonKind, parse_button_payload
from .controller import GENERATE_TRIGGERS, ConversationController
from .replies import PARSE_MODE_HTML, Button, Menu, Reply
from .validation import MAX_SEPARATOR_BYTES, MAX_WORD_COUNT, parse_separator, parse_word_count

__all__ = [
    "GENERATE_TRIGGERS",
    "MAX_SEPARATOR_BYTES",
    "MAX_WORD_COUNT",
    "PARSE_MODE_HTML",
    "Button",
    "ButtonAction",
    "ButtonKind",
    "ConversationController",
    "Menu",
    "Reply",
    "parse_button_payload",
    "parse_separator",
    "parse_word_count",
]
