"""Pilot name prompt shown after a crash."""

import logging
from typing import Optional

from spacerace.scores.names import NAME_LENGTH

logger = logging.getLogger(__name__)


class NameEntryPrompt:
    """Collects up to three letters typed on the keyboard."""

    def __init__(self) -> None:
        self._open = False
        self._text = ""
        self.score = 0

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def text(self) -> str:
        return self._text

    def open(self, score: int) -> None:
        self._open = True
        self._text = ""
        self.score = score
        logger.debug(f"Name entry opened for score {score}")

    def type_char(self, char: str) -> None:
        if not self._open or len(self._text) >= NAME_LENGTH:
            return
        if len(char) == 1 and char.isascii() and char.isalpha():
            self._text += char.upper()

    def backspace(self) -> None:
        if self._open:
            self._text = self._text[:-1]

    def submit(self) -> Optional[str]:
        """Close the prompt and return what was typed."""
        if not self._open:
            return None
        self._open = False
        return self._text

    def cancel(self) -> None:
        self._open = False
        self._text = ""
