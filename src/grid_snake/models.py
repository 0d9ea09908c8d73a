"""Pydantic models for the read-only state handed to render collaborators."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class GameStatus(str, enum.Enum):
    """Lifecycle states for a run."""

    RUNNING = "running"
    GAME_OVER = "game_over"


class GameSnapshot(BaseModel):
    """Immutable view of the engine after a tick or restart."""

    model_config = ConfigDict(frozen=True)

    tick: int = Field(ge=0)
    status: GameStatus
    snake: list[tuple[int, int]]
    direction: str
    food: tuple[int, int] | None
    score: int = Field(ge=0)
    high_score: int = Field(ge=0)
    grid_size: int
    cells: list[list[int]]

    @property
    def game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER
