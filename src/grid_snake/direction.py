"""Direction intent buffering with a single-reversal guard."""

from __future__ import annotations

import logging

from grid_snake.snake import OPPOSITE, Direction

logger = logging.getLogger(__name__)


def request_direction(
    candidate: Direction, last_applied: Direction,
) -> Direction | None:
    """Return *candidate*, or ``None`` if it reverses *last_applied*."""
    if OPPOSITE[candidate] == last_applied:
        return None
    return candidate


class DirectionBuffer:
    """Holds at most one pending direction until the next tick consumes it.

    Requests are validated against the direction actually applied on the
    last tick rather than against earlier pending requests, so two quick
    turns inside one tick window can never fold the snake back onto itself.
    A later valid request replaces an earlier one.
    """

    def __init__(self) -> None:
        self._pending: Direction | None = None

    @property
    def pending(self) -> Direction | None:
        return self._pending

    def request(self, candidate: Direction, last_applied: Direction) -> bool:
        """Buffer *candidate*; returns ``False`` when it was dropped."""
        accepted = request_direction(candidate, last_applied)
        if accepted is None:
            logger.debug(
                "Dropped %s: reverses last applied %s.",
                candidate.name, last_applied.name,
            )
            return False
        self._pending = accepted
        return True

    def consume(self, current: Direction) -> Direction:
        """Pop the pending direction, falling back to *current*."""
        direction = self._pending if self._pending is not None else current
        self._pending = None
        return direction

    def clear(self) -> None:
        self._pending = None
