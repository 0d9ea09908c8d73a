"""Tests for the asyncio tick session."""

from __future__ import annotations

import asyncio

import pytest

from grid_snake.config import EngineConfig, Speed
from grid_snake.engine import GameEngine
from grid_snake.grid import Cell
from grid_snake.models import GameSnapshot, GameStatus
from grid_snake.session import GameSession
from grid_snake.snake import Direction


class _Recorder:
    """Async listener collecting every published snapshot."""

    def __init__(self) -> None:
        self.snapshots: list[GameSnapshot] = []
        self.game_over = asyncio.Event()

    async def __call__(self, snapshot: GameSnapshot) -> None:
        self.snapshots.append(snapshot)
        if snapshot.game_over:
            self.game_over.set()


async def _wait_stopped(session: GameSession) -> None:
    for _ in range(100):
        if not session.running:
            return
        await asyncio.sleep(0.01)


def _engine(size: int = 10) -> GameEngine:
    engine = GameEngine(size=size, seed=0)
    engine.food = Cell(0, 0)
    return engine


class TestSessionTicking:
    @pytest.mark.asyncio
    async def test_runs_until_game_over(self):
        session = GameSession(_engine(), speed=Speed.FAST)
        recorder = _Recorder()
        session.subscribe(recorder)
        session.start()
        await asyncio.wait_for(recorder.game_over.wait(), timeout=5)
        await _wait_stopped(session)

        assert not session.running
        assert recorder.snapshots[-1].status == GameStatus.GAME_OVER
        ticks = [s.tick for s in recorder.snapshots]
        assert ticks == sorted(ticks)
        await session.stop()

    @pytest.mark.asyncio
    async def test_direction_applied_at_next_tick(self):
        engine = _engine(size=20)
        session = GameSession(engine, speed=Speed.FAST)
        recorder = _Recorder()
        session.subscribe(recorder)
        assert session.request_direction(Direction.UP)
        assert engine.snake[0] == Cell(8, 10)
        session.start()
        for _ in range(100):
            if recorder.snapshots:
                break
            await asyncio.sleep(0.01)
        await session.stop()
        assert recorder.snapshots[0].snake[0] == (8, 9)

    @pytest.mark.asyncio
    async def test_start_is_noop_when_game_over(self):
        engine = _engine()
        engine.status = GameStatus.GAME_OVER
        session = GameSession(engine)
        session.start()
        assert not session.running


class TestSessionStop:
    @pytest.mark.asyncio
    async def test_no_tick_after_stop(self):
        engine = _engine(size=20)
        session = GameSession(engine, speed=Speed.FAST)
        session.start()
        await asyncio.sleep(0.15)
        await session.stop()
        tick = engine.tick
        await asyncio.sleep(0.2)
        assert engine.tick == tick
        assert not session.running

    @pytest.mark.asyncio
    async def test_start_after_stop_raises(self):
        session = GameSession(_engine())
        await session.stop()
        with pytest.raises(RuntimeError, match="stopped"):
            session.start()

    @pytest.mark.asyncio
    async def test_stop_during_restart_broadcast(self):
        engine = _engine()
        engine.status = GameStatus.GAME_OVER
        session = GameSession(engine, speed=Speed.FAST)
        entered = asyncio.Event()
        release = asyncio.Event()

        async def slow_listener(snapshot):
            entered.set()
            await release.wait()

        session.subscribe(slow_listener)
        restart = asyncio.create_task(session.request_restart())
        await asyncio.wait_for(entered.wait(), timeout=5)
        await session.stop()
        release.set()

        assert not await restart
        await asyncio.sleep(0.3)
        assert not session.running
        assert engine.tick == 0

    @pytest.mark.asyncio
    async def test_set_speed_after_stop_does_not_start(self):
        session = GameSession(_engine(), speed=Speed.SLOW)
        session.start()
        await session.stop()
        session.set_speed(Speed.FAST)
        assert not session.running


class TestSessionSpeed:
    @pytest.mark.asyncio
    async def test_set_speed_reschedules(self):
        session = GameSession(_engine(size=20), speed=Speed.SLOW)
        session.start()
        first_task = session._task
        session.set_speed(Speed.FAST)
        await asyncio.gather(first_task, return_exceptions=True)
        assert session.speed is Speed.FAST
        assert session.running
        assert session._task is not first_task
        assert first_task.done()
        await session.stop()

    @pytest.mark.asyncio
    async def test_set_speed_when_idle_does_not_start(self):
        session = GameSession(_engine())
        session.set_speed(Speed.FAST)
        assert session.speed is Speed.FAST
        assert not session.running


class TestSessionRestart:
    @pytest.mark.asyncio
    async def test_restart_ignored_while_running(self):
        session = GameSession(_engine())
        assert not await session.request_restart()

    @pytest.mark.asyncio
    async def test_restart_after_game_over(self):
        engine = _engine()
        session = GameSession(engine, speed=Speed.FAST)
        recorder = _Recorder()
        session.subscribe(recorder)
        session.start()
        await asyncio.wait_for(recorder.game_over.wait(), timeout=5)
        await _wait_stopped(session)

        assert await session.request_restart()
        latest = recorder.snapshots[-1]
        assert latest.status == GameStatus.RUNNING
        assert latest.tick == 0
        assert latest.score == 0
        assert session.running
        await session.stop()


class TestSessionListeners:
    @pytest.mark.asyncio
    async def test_failing_listener_dropped(self):
        session = GameSession(_engine(), speed=Speed.FAST)
        calls: list[int] = []

        async def broken(snapshot):
            calls.append(snapshot.tick)
            raise RuntimeError("render failed")

        recorder = _Recorder()
        session.subscribe(broken)
        session.subscribe(recorder)
        session.start()
        await asyncio.wait_for(recorder.game_over.wait(), timeout=5)
        await session.stop()

        assert calls == [1]
        assert len(recorder.snapshots) > 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        session = GameSession(_engine())
        recorder = _Recorder()
        session.subscribe(recorder)
        session.unsubscribe(recorder)
        session.unsubscribe(recorder)
        assert session._listeners == []


class TestSessionFromConfig:
    def test_builds_engine_and_speed(self):
        config = EngineConfig(grid_size=10, speed="fast", seed=1)
        session = GameSession.from_config(config)
        assert session.speed is Speed.FAST
        assert session.engine.grid.size == 10

    @pytest.mark.asyncio
    async def test_ticks_at_configured_speed(self, monkeypatch):
        real_sleep = asyncio.sleep
        delays: list[float] = []

        async def recording_sleep(delay, *args, **kwargs):
            delays.append(delay)
            await real_sleep(0)

        session = GameSession.from_config(
            EngineConfig(grid_size=10, speed="slow", seed=1),
        )
        recorder = _Recorder()
        session.subscribe(recorder)
        monkeypatch.setattr(asyncio, "sleep", recording_sleep)
        session.start()
        for _ in range(100):
            if recorder.snapshots:
                break
            await real_sleep(0.01)
        await session.stop()

        assert recorder.snapshots
        assert delays[0] == Speed.SLOW.interval
