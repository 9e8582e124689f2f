"""Menus attached to bot replies."""

from collections.abc import Iterable

from ..wordlists import Wordlist
from .buttons import (
    cancel_action_payload,
    cancel_payload,
    delete_payload,
    regenerate_payload,
    set_wordlist_payload,
)
from .replies import Button, Menu

GENERATE_LABEL = "Generate"
CANCEL_LABEL = "Cancel"
WORDLISTS_PER_ROW = 2


def generate_keyboard() -> Menu:
    """Reply keyboard with a single Generate button."""
    return Menu(rows=((Button(GENERATE_LABEL),),), inline=False)


def passphrase_options() -> Menu:
    """Buttons under a generated passphrase."""
    return Menu(
        rows=(
            (
                Button("🗑️ Delete", delete_payload()),
                Button("🔀 Regenerate", regenerate_payload()),
            ),
        )
    )


def cancel_action_keyboard() -> Menu:
    """Single button that drops the pending action."""
    return Menu(rows=((Button(CANCEL_LABEL, cancel_action_payload()),),))


def wordlist_chooser(wordlists: Iterable[Wordlist]) -> Menu:
    """Wordlists two per row, followed by a Cancel button.

    Cancel shares the last row when that row has a single wordlist,
    otherwise it gets a row of its own.
    """
    buttons = [Button(wl.name, set_wordlist_payload(wl.id)) for wl in wordlists]
    rows = [
        buttons[i : i + WORDLISTS_PER_ROW]
        for i in range(0, len(buttons), WORDLISTS_PER_ROW)
    ]

    cancel = Button(CANCEL_LABEL, cancel_payload())
    if rows and len(rows[-1]) < WORDLISTS_PER_ROW:
        rows[-1].append(cancel)
    else:
        rows.append([cancel])

    return Menu(rows=tuple(tuple(row) for row in rows))
