"""Validation of free-text replies to pending actions."""

import re

from ..errors import NumberOfWordsLessThanZero, NumberOfWordsTooBig, SeparatorTooLong

MAX_WORD_COUNT = 200
MAX_SEPARATOR_BYTES = 8

# ASCII digits only, with an optional sign
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_word_count(text: str) -> int:
    """Parse the number of words a user typed.

    Raises:
        NumberOfWordsLessThanZero: If the text is not a positive integer.
        NumberOfWordsTooBig: If it is above MAX_WORD_COUNT.
    """
    stripped = text.strip()
    n = int(stripped) if _INTEGER.fullmatch(stripped) else 0

    if n <= 0:
        raise NumberOfWordsLessThanZero(f"{text!r} is not a positive number")
    if n > MAX_WORD_COUNT:
        raise NumberOfWordsTooBig(f"{n} is more than {MAX_WORD_COUNT}")
    return n


def parse_separator(text: str) -> str:
    """Turn what a user typed into the separator to store.

    A lone backslash means a space and ``\\n`` means a newline. Otherwise a
    single leading backslash is dropped, so two backslashes give one.

    Raises:
        SeparatorTooLong: If the text is MAX_SEPARATOR_BYTES bytes or longer.
    """
    if len(text.encode("utf-8")) >= MAX_SEPARATOR_BYTES:
        raise SeparatorTooLong(f"Separator is {len(text.encode('utf-8'))} bytes long")

    if text == "\\":
        return " "
    if text == "\\n":
        return "\n"
    if len(text) > 1 and text.startswith("\\"):
        return text[1:]
    return text
