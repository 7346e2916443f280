# src/gridsnake/__init__.py
"""Fixed-step grid snake simulation."""

from gridsnake.config import Config, Direction, TICK_MS
from gridsnake.simulation import (
    ConstructionError,
    GameStatus,
    GridSnakeError,
    Position,
    RandomSource,
    Simulation,
    SnapshotError,
    Tile,
)

__all__ = [
    "Config",
    "Direction",
    "TICK_MS",
    "ConstructionError",
    "GameStatus",
    "GridSnakeError",
    "Position",
    "RandomSource",
    "Simulation",
    "SnapshotError",
    "Tile",
]
