"""Grid model: fixed coordinate space and containment rules."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from typing import NamedTuple

import numpy as np

GRID_SIZE = 20

# Smallest board that still fits the centred two-cell starting snake.
MIN_GRID_SIZE = 6


class Cell(NamedTuple):
    """Immutable ``(x, y)`` board coordinate; ``y`` grows downwards."""

    x: int
    y: int


class CellType(enum.IntEnum):
    """Integer codes stored in the occupancy array."""

    EMPTY = 0
    SNAKE_HEAD = 1
    SNAKE_BODY = 2
    FOOD = 3


class Grid:
    """Square game board of ``size`` × ``size`` cells.

    The grid holds no game state itself; helpers that need to know about
    the snake or food take them as arguments and build NumPy arrays
    indexed ``[y, x]``.
    """

    def __init__(self, size: int = GRID_SIZE) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid size must be at least {MIN_GRID_SIZE}.",
            )
        self.size = size

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies within the grid."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def _mask(self, cells: Iterable[Cell]) -> np.ndarray:
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in cells:
            if 0 <= x < self.size and 0 <= y < self.size:
                mask[y, x] = True
        return mask

    def free_cells(self, excluded: Iterable[Cell]) -> list[Cell]:
        """Return every in-bounds cell not in *excluded*, row by row."""
        ys, xs = np.nonzero(~self._mask(excluded))
        return [Cell(x, y) for y, x in zip(ys.tolist(), xs.tolist(), strict=True)]

    def occupancy(
        self, snake: Sequence[Cell], food: Cell | None,
    ) -> np.ndarray:
        """Build the render-ready board of :class:`CellType` codes."""
        cells = np.full((self.size, self.size), CellType.EMPTY, dtype=np.int8)
        for x, y in snake[1:]:
            cells[y, x] = CellType.SNAKE_BODY
        if snake:
            head = snake[0]
            cells[head.y, head.x] = CellType.SNAKE_HEAD
        # Food is drawn on top when it coincides with the snake.
        if food is not None:
            cells[food.y, food.x] = CellType.FOOD
        return cells


_DEFAULT_GRID = Grid()


def in_bounds(cell: Cell) -> bool:
    """Containment test against the default :data:`GRID_SIZE` board."""
    return _DEFAULT_GRID.in_bounds(cell)
