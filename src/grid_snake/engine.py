"""Tick-based game engine composing grid, snake, food, and collision logic."""

from __future__ import annotations

import logging

import numpy as np

from grid_snake.collision import Collision, classify
from grid_snake.config import EngineConfig
from grid_snake.direction import DirectionBuffer
from grid_snake.food import FoodSpawner
from grid_snake.grid import GRID_SIZE, Cell, Grid
from grid_snake.highscore import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
)
from grid_snake.models import GameSnapshot, GameStatus
from grid_snake.snake import (
    INITIAL_DIRECTION,
    Direction,
    Snake,
    advance,
    initial_snake,
    next_head,
)

logger = logging.getLogger(__name__)

# Errors a persistence collaborator may raise when storage is unavailable
# or holds garbage.
_STORE_ERRORS = (OSError, ValueError, TypeError)


class GameEngine:
    """Single-snake, tick-based game engine.

    The engine is the only writer of the run state: snake body, applied
    direction, food, score, and high score. Each call to :meth:`step`
    advances the game by one tick and returns a :class:`GameSnapshot`.
    Nothing here raises on game over; the run simply moves to
    :attr:`GameStatus.GAME_OVER` and further steps are no-ops until
    :meth:`restart`.
    """

    def __init__(
        self,
        size: int = GRID_SIZE,
        seed: int | None = None,
        high_score_store: HighScoreStore | None = None,
    ) -> None:
        self.grid = Grid(size)
        self.rng = np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        self.store = (
            high_score_store
            if high_score_store is not None else MemoryHighScoreStore()
        )
        self.high_score = self._load_high_score()
        self._buffer = DirectionBuffer()
        self._reset_run()

    @classmethod
    def from_config(cls, config: EngineConfig) -> GameEngine:
        store = (
            JsonHighScoreStore(config.high_score_path)
            if config.high_score_path else None
        )
        return cls(
            size=config.grid_size, seed=config.seed, high_score_store=store,
        )

    def _reset_run(self) -> None:
        self.snake: Snake = initial_snake(self.grid.size)
        self.direction: Direction = INITIAL_DIRECTION
        self._buffer.clear()
        self.food: Cell | None = self.food_spawner.place(self.snake)
        self.score = 0
        self.tick = 0
        self.status = GameStatus.RUNNING

    @property
    def game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    @property
    def pending_direction(self) -> Direction | None:
        return self._buffer.pending

    def request_direction(self, direction: Direction) -> bool:
        """Buffer a direction change for the next tick.

        Returns ``False`` when the request would reverse the direction
        applied on the last tick and was therefore dropped.
        """
        return self._buffer.request(direction, self.direction)

    def step(self) -> GameSnapshot:
        """Advance the game by one tick."""
        if self.game_over:
            return self.snapshot()

        self.direction = self._buffer.consume(self.direction)
        head = next_head(self.snake, self.direction)

        collision = classify(head, self.snake, self.grid)
        if collision is not Collision.NONE:
            self._end_run(collision)
            return self.snapshot()

        if head == self.food:
            self.snake = advance(self.snake, head, grew=True)
            self.score += 1
            self._update_high_score()
            self.food = self.food_spawner.place(self.snake)
        else:
            self.snake = advance(self.snake, head, grew=False)

        self.tick += 1
        return self.snapshot()

    def restart(self) -> GameSnapshot:
        """Start a fresh run, keeping (and if beaten, raising) the high score."""
        self._update_high_score()
        final_score = self.score
        self._reset_run()
        logger.info(
            "Run restarted (previous score %d, high score %d).",
            final_score, self.high_score,
        )
        return self.snapshot()

    def snapshot(self) -> GameSnapshot:
        """Return a read-only view of the current state."""
        return GameSnapshot(
            tick=self.tick,
            status=self.status,
            snake=[tuple(cell) for cell in self.snake],
            direction=self.direction.name,
            food=tuple(self.food) if self.food is not None else None,
            score=self.score,
            high_score=self.high_score,
            grid_size=self.grid.size,
            cells=self.grid.occupancy(self.snake, self.food).tolist(),
        )

    def get_state(self) -> dict:
        """Return the full, JSON-serializable game state."""
        return self.snapshot().model_dump(mode="json")

    def _end_run(self, collision: Collision) -> None:
        """Mark the run as over; the body is left as it was."""
        self.status = GameStatus.GAME_OVER
        self._update_high_score()
        logger.info(
            "Game over (%s collision) at tick %d with score %d.",
            collision.value, self.tick, self.score,
        )

    def _update_high_score(self) -> None:
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        logger.info("New high score: %d.", self.high_score)
        self._save_high_score()

    def _load_high_score(self) -> int:
        try:
            value = int(self.store.load())
        except _STORE_ERRORS as exc:
            logger.warning("High score unavailable, starting at 0: %s", exc)
            return 0
        return max(0, value)

    def _save_high_score(self) -> None:
        try:
            self.store.save(self.high_score)
        except _STORE_ERRORS as exc:
            logger.warning(
                "Could not persist high score %d: %s", self.high_score, exc,
            )
