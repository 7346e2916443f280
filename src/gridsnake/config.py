from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import random

# ----- Simulation -----
TICK_MS = 300                 # one grid step per 300 ms of accumulated time
GRID_W, GRID_H = 10, 10

# ----- Window -----
TILE_SIZE = 50
BORDER_SIZE = 10
FPS = 60

# ----- Colors -----
BG          = (41, 41, 41)
TILE_COLORS = ((51, 51, 51), (59, 59, 59))
TAIL_COLORS = ((12, 185, 45), (19, 138, 54))
HEAD_COLOR  = TAIL_COLORS[1]
FRUIT_COLOR = (255, 87, 51)
TEXT        = (220, 220, 230)

# ----- Relative tile sizes (fraction of TILE_SIZE) -----
HEAD_SCALE  = 0.7
TAIL_SCALE  = 0.5
FRUIT_SCALE = 0.4


# ----- Directions (dx, dy), y grows downward -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


# ----- Tunables -----
@dataclass
class Config:
    width: int = GRID_W
    height: int = GRID_H
    tick_ms: int = TICK_MS
    seed: Optional[int] = None
    fps: int = FPS
    autopilot: bool = False

    def window_size(self) -> Tuple[int, int]:
        """Pixel size of the window: the grid plus a border on every side."""
        return (
            2 * BORDER_SIZE + self.width * TILE_SIZE,
            2 * BORDER_SIZE + self.height * TILE_SIZE,
        )

    def make_rng(self) -> random.Random:
        # Seeded source for reproducible fruit placement
        return random.Random(self.seed)
