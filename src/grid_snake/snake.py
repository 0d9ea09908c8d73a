"""Snake representation and movement logic.

A snake is a plain tuple of :class:`~grid_snake.grid.Cell` values, head
first. Every move builds a new tuple, so a caller holding the previous body
keeps an untouched before-move snapshot.
"""

from __future__ import annotations

import enum

from grid_snake.grid import GRID_SIZE, Cell

Snake = tuple[Cell, ...]


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return OPPOSITE[self]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


# Pairs that would cause an instant 180° reversal.
OPPOSITE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

INITIAL_DIRECTION = Direction.RIGHT


def initial_snake(size: int = GRID_SIZE) -> Snake:
    """Return the two-cell, horizontal starting body for a *size* board."""
    mid = size // 2
    return (Cell(mid - 2, mid), Cell(mid - 3, mid))


def next_head(snake: Snake, direction: Direction) -> Cell:
    """Compute the next head position. No bounds checking."""
    dx, dy = direction.value
    x, y = snake[0]
    return Cell(x + dx, y + dy)


def advance(snake: Snake, head: Cell, grew: bool) -> Snake:
    """Return the body after moving onto *head*.

    The tail is kept when the snake *grew*, otherwise dropped. The caller
    is responsible for having validated *head*.
    """
    if grew:
        return (head, *snake)
    return (head, *snake[:-1])
