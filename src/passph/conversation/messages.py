"""Texts sent to users."""

import html
from collections.abc import Iterable

from ..wordlists import Wordlist
from .validation import MAX_SEPARATOR_BYTES, MAX_WORD_COUNT

START = (
    "Hello. Use this bot to generate strong mnemonic passwords which, however, "
    "are easy to memorise!\n"
    'Click Generate button at the bottom of the chat or type "gen"'
)

HELP = """This bot allows you to create mnemonic passwords by single click

You can setup number of words in generated passphrases with /number

In order to change default separator between words, type /sep

You can even change the list of words that will be used for generation. Type /list to try!"""

ASK_WORD_COUNT = (
    "Choose number of words in the passphrases that will be generated. "
    "The value has to contain only numbers and nothing more."
)

ASK_SEPARATOR = (
    "Type separator of the passphrases that will be generated. "
    "It can be <code>-</code> or <code>_</code> or even newline, for instance. "
    f"Separator has to be less than {MAX_SEPARATOR_BYTES} bytes long.\n"
    "To set space as a separator, type <code>\\</code> (just backslash). "
    "For newline, type <code>\\n</code>. Note that first backslash will be removed "
    "from any of your messages (if you use it), so for one backslash as a separator "
    "you have to specify two backslashes."
)

WORD_COUNT_NOT_POSITIVE = "Number of words has to be positive"
WORD_COUNT_TOO_BIG = f"Number of words can't be more than {MAX_WORD_COUNT}"
WORD_COUNT_CHANGED = "Number of words successfully changed!"

SEPARATOR_TOO_LONG = f"Separator has to be less than {MAX_SEPARATOR_BYTES} bytes long"
SEPARATOR_CHANGED = "Separator successfully changed"

PENDING_ACTION_REMOVED = "Last action successfully removed!"

SERVER_ERROR = "Error on the server side. Sorry."
UNRECOGNIZED = "Sorry, I don't understand. Send me /help to get help."
UNKNOWN_COMMAND = "Unknown command, sorry. Type /help to get help."
UNKNOWN_WORDLIST = "This wordlist is not available"
SAVE_UNAVAILABLE = "Your password wasn't saved. This functionality is under maintenance."

IN_DEVELOPMENT = {
    "addlist": "In development. Later it will be possible to add custom lists.",
    "vault": "In development. Later you'll have access to your vault, where passwords are stored",
    "encryption": (
        "In development. Setup your encryption settings. "
        "Disable/enable encryption and change password for encryption"
    ),
    "search": "In development. Search your stored passphrases",
}


def wordlist_selected(wordlist: Wordlist) -> str:
    return f"{wordlist.name} is your new wordlist"


def wordlist_in_use(wordlist: Wordlist) -> str:
    return f"You use {wordlist.name} wordlist"


def passphrase(text: str) -> str:
    """Wrap a passphrase in a code block (HTML)."""
    return f"<code>{html.escape(text)}</code>"


def wordlist_overview(wordlists: Iterable[Wordlist]) -> str:
    """HTML description of every wordlist with an example passphrase."""
    parts = ["<b>Select desired wordlist</b>", "", "Here are some examples of generated passphrases:"]
    for wl in wordlists:
        parts.append(f"<b>{html.escape(wl.name)}</b>")
        if wl.description:
            parts.append(html.escape(wl.description))
        if wl.example:
            parts.append(f"<code>{html.escape(wl.example)}</code>")
        parts.append("")
    return "\n".join(parts).rstrip() + "\n"
