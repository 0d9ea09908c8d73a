"""Wall and self collision tests for a candidate head cell."""

from __future__ import annotations

import enum

from grid_snake.grid import Cell, Grid
from grid_snake.snake import Snake


class Collision(enum.Enum):
    """Outcome of testing a candidate head against the board."""

    WALL = "wall"
    SELF = "self"
    NONE = "none"


def classify(head: Cell, snake: Snake, grid: Grid) -> Collision:
    """Classify *head* against the grid edges and the pre-move *snake*.

    The whole current body is checked, tail included, so moving into the
    cell the tail is about to vacate still counts as a self collision.
    """
    if not grid.in_bounds(head):
        return Collision.WALL
    if head in snake:
        return Collision.SELF
    return Collision.NONE
