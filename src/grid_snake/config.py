"""Engine configuration and tick speed selection."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from grid_snake.grid import GRID_SIZE, MIN_GRID_SIZE

logger = logging.getLogger(__name__)


class Speed(enum.Enum):
    """Named tick intervals in milliseconds."""

    SLOW = 200
    NORMAL = 100
    FAST = 60

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def interval(self) -> float:
        """Tick period in seconds."""
        return self.value / 1000.0

    @classmethod
    def parse(cls, name: str) -> Speed:
        """Look up a speed by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown speed: {name!r}.") from None


DEFAULT_SPEED = Speed.NORMAL


@dataclass(frozen=True)
class EngineConfig:
    """Settings for building a :class:`~grid_snake.engine.GameEngine`.

    Supports JSON serialization so a setup can be reproduced.
    """

    grid_size: int = GRID_SIZE
    speed: str = DEFAULT_SPEED.name.lower()
    seed: int | None = None
    high_score_path: str | None = None

    def __post_init__(self) -> None:
        if self.grid_size < MIN_GRID_SIZE:
            raise ValueError(f"grid_size must be at least {MIN_GRID_SIZE}.")
        # Validates the name; raises ValueError on unknown speeds.
        Speed.parse(self.speed)

    @property
    def tick_speed(self) -> Speed:
        return Speed.parse(self.speed)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> EngineConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Config in {path} must be a JSON object.")
        unknown = set(raw) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}.")
        return cls(**raw)
