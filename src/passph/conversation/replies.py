"""Transport-agnostic outbound replies."""

from dataclasses import dataclass

PARSE_MODE_HTML = "HTML"


@dataclass(frozen=True)
class Button:
    """A single button: label shown to the user and the payload sent back."""

    label: str
    payload: str = ""


@dataclass(frozen=True)
class Menu:
    """Rows of buttons.

    Inline menus are attached to a message and send their payload back on
    click. Non-inline menus replace the user's keyboard; clicking one sends
    its label as ordinary text.
    """

    rows: tuple[tuple[Button, ...], ...]
    inline: bool = True

    def buttons(self) -> list[Button]:
        return [button for row in self.rows for button in row]


@dataclass(frozen=True)
class Reply:
    """What the bot sends back for one inbound event.

    Attributes:
        text: Message text, or None when nothing is sent.
        menu: Optional buttons under the message.
        parse_mode: Formatting hint for the text (e.g. HTML).
        notice: Short popup answering a button click.
        edit: Replace the message the clicked button belongs to.
        delete_source: Delete the message that triggered the event.
    """

    text: str | None = None
    menu: Menu | None = None
    parse_mode: str | None = None
    notice: str | None = None
    edit: bool = False
    delete_source: bool = False
