"""Top-10 high-score list persisted in key-value storage."""

from dataclasses import dataclass
from typing import Callable, List, Optional
import logging
import time

from pydantic import TypeAdapter, ValidationError

from spacerace.scores.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_KEY = "space-race-leaderboard"
DEFAULT_LIMIT = 10


@dataclass
class HighScoreEntry:
    """One leaderboard line. ``time`` is epoch milliseconds."""
    name: str
    score: int
    time: int


_entries_adapter = TypeAdapter(List[HighScoreEntry])


class HighScoreStore:
    """Sorted by score (high first), earlier entry wins ties."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_KEY,
        limit: int = DEFAULT_LIMIT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.storage = storage
        self.key = key
        self.limit = limit
        self._clock = clock

    def load(self) -> List[HighScoreEntry]:
        """Return saved entries; missing or corrupt data reads as empty."""
        try:
            raw = self.storage.get(self.key)
        except OSError as e:
            logger.warning(f"Leaderboard unavailable: {e}")
            return []
        if not raw:
            return []
        try:
            return _entries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupt leaderboard ({e.error_count()} errors)")
            return []

    def record(self, name: str, score: float) -> Optional[HighScoreEntry]:
        """Add a score, truncated to int. Scores below 1 are ignored.

        Returns:
            The stored entry, or None if nothing was added
        """
        score = int(score)
        if score <= 0:
            return None

        entry = HighScoreEntry(name=name, score=score, time=int(self._clock() * 1000))
        entries = self.load()
        entries.append(entry)
        entries.sort(key=lambda e: (-e.score, e.time))
        entries = entries[:self.limit]

        try:
            self.storage.set(self.key, _entries_adapter.dump_json(entries).decode("utf-8"))
        except OSError as e:
            logger.error(f"Failed to save leaderboard: {e}")
            return None

        logger.info(f"Recorded {entry.name} {entry.score}")
        return entry
