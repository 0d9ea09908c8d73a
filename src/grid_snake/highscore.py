"""High-score persistence collaborators."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Interface for loading and saving the best score across sessions."""

    def load(self) -> int:
        raise NotImplementedError

    def save(self, value: int) -> None:
        raise NotImplementedError


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, value: int = 0) -> None:
        self.value = value

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value


class JsonHighScoreStore(HighScoreStore):
    """Stores the high score as ``{"highscore": n}`` in a JSON file.

    A missing file, a missing key, or a value that is not a non-negative
    integer all load as ``0``. I/O errors propagate; the engine decides how
    to degrade.
    """

    DEFAULT_KEY = "highscore"

    def __init__(self, path: str | Path, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        raw = json.loads(self.path.read_text())
        return raw if isinstance(raw, dict) else {}

    def load(self) -> int:
        value = self._read().get(self.key, 0)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning(
                "Ignoring invalid high score %r in %s.", value, self.path,
            )
            return 0
        return value

    def save(self, value: int) -> None:
        try:
            data = self._read()
        except ValueError:
            data = {}
        data[self.key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
        logger.debug("High score %d saved to %s.", value, self.path)
