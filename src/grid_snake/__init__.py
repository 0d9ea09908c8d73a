"""Grid Snake: tick-driven snake simulation engine."""

from grid_snake.collision import Collision, classify
from grid_snake.config import EngineConfig, Speed
from grid_snake.direction import DirectionBuffer, request_direction
from grid_snake.engine import GameEngine
from grid_snake.food import FoodSpawner
from grid_snake.grid import GRID_SIZE, Cell, CellType, Grid, in_bounds
from grid_snake.highscore import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
)
from grid_snake.models import GameSnapshot, GameStatus
from grid_snake.session import GameSession
from grid_snake.snake import (
    OPPOSITE,
    Direction,
    advance,
    initial_snake,
    next_head,
)

__all__ = [
    "GRID_SIZE",
    "OPPOSITE",
    "Cell",
    "CellType",
    "Collision",
    "Direction",
    "DirectionBuffer",
    "EngineConfig",
    "FoodSpawner",
    "GameEngine",
    "GameSession",
    "GameSnapshot",
    "GameStatus",
    "Grid",
    "HighScoreStore",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "Speed",
    "advance",
    "classify",
    "in_bounds",
    "initial_snake",
    "next_head",
    "request_direction",
]
