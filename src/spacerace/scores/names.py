"""Pilot name codes."""

import re

NAME_LENGTH = 3
FILLER = "-"
DEFAULT_NAME = FILLER * NAME_LENGTH

_NON_LETTERS = re.compile(r"[^a-zA-Z]")


def normalize_name(raw: str) -> str:
    """Reduce input to a 3-letter uppercase code, padded with dashes.

    >>> normalize_name("ab1c d")
    'ABC'
    >>> normalize_name("x")
    'X--'
    """
    letters = _NON_LETTERS.sub("", raw or "").upper()[:NAME_LENGTH]
    return letters.ljust(NAME_LENGTH, FILLER)
