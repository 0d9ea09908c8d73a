"""Asyncio tick source driving a single game engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from grid_snake.config import DEFAULT_SPEED, EngineConfig, Speed
from grid_snake.engine import GameEngine
from grid_snake.models import GameSnapshot
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[GameSnapshot], Awaitable[None]]


class GameSession:
    """Runs an engine on a periodic timer and publishes snapshots.

    Each schedule of the tick loop is tagged with a generation number.
    Changing the speed, restarting, or stopping bumps the generation and
    cancels the running task, and a loop only steps the engine while its
    generation is current. ``engine.step()`` is synchronous and runs under
    :attr:`lock`, so a tick always completes before the next one starts.
    """

    def __init__(
        self, engine: GameEngine, speed: Speed = DEFAULT_SPEED,
    ) -> None:
        self.engine = engine
        self.speed = speed
        self.lock = asyncio.Lock()
        self._listeners: list[SnapshotListener] = []
        self._generation = 0
        self._task: asyncio.Task | None = None
        self._closed = False

    @classmethod
    def from_config(cls, config: EngineConfig) -> GameSession:
        """Build an engine from *config* and tick it at the configured speed."""
        return cls(GameEngine.from_config(config), speed=config.tick_speed)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self) -> None:
        """Start ticking. Does nothing once the run is over."""
        if self._closed:
            raise RuntimeError("Session has been stopped.")
        if self.engine.game_over or self.running:
            return
        self._reschedule()

    def set_speed(self, speed: Speed) -> None:
        """Change the tick period; the rules are unaffected."""
        if speed == self.speed:
            return
        self.speed = speed
        logger.info("Tick speed set to %s (%d ms).", speed.label, speed.value)
        if self.running:
            self._reschedule()

    def request_direction(self, direction: Direction) -> bool:
        """Buffer a direction intent; it is applied at the next tick."""
        return self.engine.request_direction(direction)

    async def request_restart(self) -> bool:
        """Restart after a game over. Ignored while the run is live."""
        if self._closed:
            return False
        async with self.lock:
            if not self.engine.game_over:
                logger.debug("Restart ignored: run still in progress.")
                return False
            snapshot = self.engine.restart()
        await self._broadcast(snapshot)
        # stop() may have run while listeners were being notified.
        if self._closed:
            return False
        self._reschedule()
        return True

    async def stop(self) -> None:
        """Cancel the tick loop. No tick fires after this returns."""
        self._closed = True
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        logger.info("Session stopped.")

    def _reschedule(self) -> None:
        if self._closed:
            return
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.create_task(self._tick_loop(self._generation))

    async def _tick_loop(self, generation: int) -> None:
        """Step the engine every interval, broadcasting state each tick."""
        interval = self.speed.interval
        try:
            while True:
                await asyncio.sleep(interval)
                async with self.lock:
                    if generation != self._generation:
                        return
                    snapshot = self.engine.step()
                await self._broadcast(snapshot)
                if snapshot.game_over:
                    logger.info(
                        "Tick loop finished: game over with score %d.",
                        snapshot.score,
                    )
                    return
        except asyncio.CancelledError:
            logger.debug("Tick loop generation %d cancelled.", generation)
        except Exception:
            logger.exception("Tick loop error in generation %d.", generation)

    async def _broadcast(self, snapshot: GameSnapshot) -> None:
        """Send a snapshot to every listener, dropping any that fail."""
        dead: list[SnapshotListener] = []
        # Iterate over a copy so listeners may unsubscribe while notified.
        for listener in list(self._listeners):
            try:
                await listener(snapshot)
            except Exception:
                logger.warning("Dropping snapshot listener %r.", listener)
                dead.append(listener)
        for listener in dead:
            self.unsubscribe(listener)
