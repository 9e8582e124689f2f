"""Inline button payloads.

Simple payloads are a bare action name (``regenerate``). Payloads with an
argument use ``<action>$$<argument>`` (``setwl$$2``, ``system$$cancel``).
"""

from dataclasses import dataclass
from enum import Enum

PAYLOAD_DELIMITER = "$$"


class ButtonKind(Enum):
    """Known button actions."""

    REGENERATE = "regenerate"
    DELETE = "delete"
    SAVE = "save"
    SET_WORDLIST = "setwl"
    SYSTEM = "system"


# Arguments of SYSTEM buttons
SYSTEM_CANCEL = "cancel"
SYSTEM_CANCEL_ACTION = "cancelaction"


@dataclass(frozen=True)
class ButtonAction:
    """A decoded button payload."""

    kind: ButtonKind
    argument: str | None = None

    def encode(self) -> str:
        if self.argument is None:
            return self.kind.value
        return f"{self.kind.value}{PAYLOAD_DELIMITER}{self.argument}"


def parse_button_payload(payload: str) -> ButtonAction | None:
    """Decode a button payload, or None if it is not recognized."""
    parts = payload.split(PAYLOAD_DELIMITER)
    if len(parts) > 2:
        return None

    try:
        kind = ButtonKind(parts[0])
    except ValueError:
        return None

    takes_argument = kind in (ButtonKind.SET_WORDLIST, ButtonKind.SYSTEM)
    if takes_argument != (len(parts) == 2):
        return None

    return ButtonAction(kind=kind, argument=parts[1] if takes_argument else None)


def regenerate_payload() -> str:
    return ButtonAction(ButtonKind.REGENERATE).encode()


def delete_payload() -> str:
    return ButtonAction(ButtonKind.DELETE).encode()


def set_wordlist_payload(wordlist_id: int) -> str:
    return ButtonAction(ButtonKind.SET_WORDLIST, str(int(wordlist_id))).encode()


def cancel_payload() -> str:
    return ButtonAction(ButtonKind.SYSTEM, SYSTEM_CANCEL).encode()


def cancel_action_payload() -> str:
    return ButtonAction(ButtonKind.SYSTEM, SYSTEM_CANCEL_ACTION).encode()
