"""High-score persistence for SPACE RACE."""

from spacerace.scores.names import DEFAULT_NAME, normalize_name
from spacerace.scores.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from spacerace.scores.store import HighScoreEntry, HighScoreStore

__all__ = [
    "DEFAULT_NAME",
    "normalize_name",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "HighScoreEntry",
    "HighScoreStore",
]
