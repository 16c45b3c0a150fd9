"""Key-value text storage backing the leaderboard.

``JsonFileStorage`` keeps all keys in one JSON object on disk and
rewrites the file through a temp file, so readers never see a partial
write.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """String values stored by string key."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the value stored under key."""
        ...


class MemoryStorage(KeyValueStorage):
    """In-process storage, used by tests and as a fallback."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage(KeyValueStorage):
    """Storage persisted as a JSON object of key -> string."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        """Load every key. Raises OSError if the file exists but cannot be read."""
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except ValueError as e:
                logger.warning(f"Ignoring corrupt {self.path}: {e}")
                return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {self.path}: not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".scores-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(f"Saved key {key!r} to {self.path}")
