"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.grid import Cell

if TYPE_CHECKING:
    from grid_snake.grid import Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Chooses food cells uniformly among the cells the snake leaves free.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Sampling is rejection-based and bounded; once *max_attempts* draws have
    all landed on excluded cells the free-cell set is computed and sampled
    directly, which keeps placement terminating on crowded boards.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = 64,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def place(self, excluded: Iterable[Cell]) -> Cell | None:
        """Return a random cell not in *excluded*.

        Returns ``None`` when every cell of the board is excluded.
        """
        blocked = set(excluded)
        size = self.grid.size

        for _ in range(self.max_attempts):
            x, y = self.rng.integers(0, size, size=2).tolist()
            cell = Cell(x, y)
            if cell not in blocked:
                return cell

        free = self.grid.free_cells(blocked)
        if not free:
            logger.warning("No free cells available for food placement.")
            return None
        return free[int(self.rng.integers(len(free)))]
