# simulation.py
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Deque, Dict, Iterator, NamedTuple, Optional, Protocol, Tuple
import logging
import random

import numpy as np  # type: ignore

from .config import TICK_MS, Direction

logger = logging.getLogger(__name__)


# ---------- Errors ----------
class GridSnakeError(Exception):
    """Base class for every error raised by gridsnake."""


class ConstructionError(GridSnakeError, ValueError):
    """The requested grid cannot host both a head and a fruit."""


class SnapshotError(GridSnakeError, ValueError):
    """A snapshot is malformed or describes an inconsistent game."""


# ---------- Value types ----------
class Position(NamedTuple):
    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        return Position(self.x + direction.dx, self.y + direction.dy)


class GameStatus(Enum):
    RUNNING = "running"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Tile:
    position: Position
    occupied: bool


class RandomSource(Protocol):
    """Anything that can draw an int in [0, stop); random.Random qualifies."""

    def randrange(self, stop: int) -> int: ...


# ---------- Simulation ----------
class Simulation:
    """
    Deterministic snake state machine over a fixed-size grid.

    The presentation layer feeds it two things:
      - handle_direction_input(direction) on key press
      - advance_tick(elapsed_ms) once per frame with the frame's delta time
    and reads the accessors afterwards to draw.

    Movement is fixed-step: elapsed time accumulates and one grid step is
    applied each time the accumulator reaches tick_ms (never more than one
    step per call). The accumulator starts full, so the first call steps
    immediately.

    Occupancy is a dense (height, width) boolean array indexed [y, x]; a tile
    is occupied when the head, a tail segment or the fruit sits on it.
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[RandomSource] = None,
        tick_ms: int = TICK_MS,
    ):
        if width < 1 or height < 1 or width * height < 2:
            raise ConstructionError(
                f"grid {width}x{height} is too small: need room for a head and a fruit"
            )
        if tick_ms <= 0:
            raise ConstructionError(f"tick_ms must be positive, got {tick_ms}")

        self._width = width
        self._height = height
        self._tick_ms = tick_ms
        self._rng: RandomSource = rng if rng is not None else random.Random()

        self._occupied = np.zeros((height, width), dtype=bool)
        self._head = Position(width // 2, height // 2)
        self._occupied[self._head.y, self._head.x] = True
        self._tail: Deque[Position] = deque()

        self._direction = Direction.RIGHT
        self._queued: Optional[Direction] = None
        self._status = GameStatus.RUNNING
        self._accumulator_ms = tick_ms

        self._fruit = self._spawn_first_fruit()
        logger.debug("new %dx%d game: head=%s fruit=%s", width, height, self._head, self._fruit)

    # ---------- Fruit placement ----------
    def _spawn_first_fruit(self) -> Position:
        # Reject-and-resample over the whole grid, skipping the head
        while True:
            candidate = Position(
                self._rng.randrange(self._width),
                self._rng.randrange(self._height),
            )
            if candidate != self._head:
                self._occupied[candidate.y, candidate.x] = True
                return candidate

    def _place_fruit(self) -> Optional[Position]:
        """Put the fruit on a random free tile; None when the grid is full."""
        free = np.argwhere(~self._occupied)  # rows of (y, x), row-major
        if len(free) == 0:
            return None
        y, x = free[self._rng.randrange(len(free))]
        self._occupied[y, x] = True
        return Position(int(x), int(y))

    # ---------- Input / Update ----------
    def handle_direction_input(self, direction: Direction) -> None:
        """Queue a turn for the next tick; 180° reversals are ignored."""
        if not isinstance(direction, Direction):
            raise TypeError(f"expected a Direction, got {direction!r}")
        if self._status is not GameStatus.RUNNING:
            return
        if direction is self._direction.opposite:
            return
        self._queued = direction

    def advance_tick(self, elapsed_ms: int) -> bool:
        """
        Add elapsed_ms to the clock and apply at most one grid step.
        Returns True if a step was executed.
        """
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")
        if self._status is not GameStatus.RUNNING:
            return False

        self._accumulator_ms += elapsed_ms
        if self._accumulator_ms < self._tick_ms:
            return False
        self._accumulator_ms -= self._tick_ms

        self._step()
        return True

    def _step(self) -> None:
        # Commit direction once per tick
        if self._queued is not None:
            self._direction = self._queued
            self._queued = None

        new_head = self._head.moved(self._direction)

        # Wall collision
        if not self.in_bounds(new_head):
            self._finish(GameStatus.LOST, "wall")
            return

        previous = self._head
        self._head = new_head
        self._occupied[new_head.y, new_head.x] = True
        self._tail.appendleft(previous)

        # Self collision, checked before the last segment moves out of the way
        if new_head in self._tail:
            self._finish(GameStatus.LOST, "self")
            return

        # Grow
        if new_head == self._fruit:
            fruit = self._place_fruit()
            if fruit is None:
                self._finish(GameStatus.WON, "no free tile left")
                return
            self._fruit = fruit
            logger.debug("ate fruit at %s, next fruit at %s, length=%d", new_head, fruit, len(self._tail) + 1)
            return

        # Move
        oldest = self._tail.pop()
        self._occupied[oldest.y, oldest.x] = False
        logger.debug("head -> %s", new_head)

    def _finish(self, status: GameStatus, reason: str) -> None:
        self._status = status
        logger.info("game %s (%s) with score %d", status.value, reason, self.score)

    # ---------- Accessors ----------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self._width, self._height)

    @property
    def tick_ms(self) -> int:
        return self._tick_ms

    @property
    def head(self) -> Position:
        return self._head

    @property
    def tail(self) -> Tuple[Position, ...]:
        """Tail segments front (newest) to back (oldest)."""
        return tuple(self._tail)

    @property
    def fruit(self) -> Position:
        return self._fruit

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def queued_direction(self) -> Optional[Direction]:
        return self._queued

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def accumulator_ms(self) -> int:
        return self._accumulator_ms

    @property
    def score(self) -> int:
        # Every fruit adds exactly one segment
        return len(self._tail)

    @property
    def occupancy(self) -> np.ndarray:
        """Copy of the (height, width) occupancy grid, indexed [y, x]."""
        return self._occupied.copy()

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        x, y = pos
        return 0 <= x < self._width and 0 <= y < self._height

    def is_occupied(self, pos: Tuple[int, int]) -> bool:
        x, y = pos
        if not self.in_bounds(pos):
            raise IndexError(f"{pos} is outside the {self._width}x{self._height} grid")
        return bool(self._occupied[y, x])

    def tile(self, pos: Tuple[int, int]) -> Tile:
        return Tile(Position(*pos), self.is_occupied(pos))

    def tiles(self) -> Iterator[Tile]:
        """All tiles, row by row."""
        for y in range(self._height):
            for x in range(self._width):
                yield Tile(Position(x, y), bool(self._occupied[y, x]))

    def __repr__(self) -> str:
        return (
            f"Simulation({self._width}x{self._height}, status={self._status.value}, "
            f"head={tuple(self._head)}, length={len(self._tail) + 1}, fruit={tuple(self._fruit)})"
        )

    # ---------- Snapshot / Restore ----------
    def snapshot(self) -> Dict[str, Any]:
        """JSON-compatible copy of the whole game state (not the random source)."""
        return {
            "width": self._width,
            "height": self._height,
            "tick_ms": self._tick_ms,
            "head": list(self._head),
            "tail": [list(p) for p in self._tail],
            "fruit": list(self._fruit),
            "direction": self._direction.name,
            "queued_direction": self._queued.name if self._queued is not None else None,
            "status": self._status.name,
            "accumulator_ms": self._accumulator_ms,
            "occupancy": self._occupied.tolist(),
        }

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any], rng: Optional[RandomSource] = None) -> "Simulation":
        """
        Rebuild a Simulation from snapshot(). Pass an rng in the same state as
        the snapshotted game's to replay identical fruit placements.
        """
        try:
            width = int(data["width"])
            height = int(data["height"])
            tick_ms = int(data["tick_ms"])
            head = Position(*(int(v) for v in data["head"]))
            tail = [Position(*(int(v) for v in p)) for p in data["tail"]]
            fruit = Position(*(int(v) for v in data["fruit"]))
            direction = Direction[data["direction"]]
            queued = data["queued_direction"]
            queued_direction = Direction[queued] if queued is not None else None
            status = GameStatus[data["status"]]
            accumulator_ms = int(data["accumulator_ms"])
            occupied = np.array(data["occupancy"], dtype=bool)
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"malformed snapshot: {exc!r}") from exc

        if width < 1 or height < 1 or width * height < 2 or tick_ms <= 0:
            raise SnapshotError(f"invalid grid {width}x{height} / tick_ms={tick_ms}")
        if occupied.shape != (height, width):
            raise SnapshotError(
                f"occupancy shape {occupied.shape} does not match grid {width}x{height}"
            )
        for pos in [head, fruit, *tail]:
            if not (0 <= pos.x < width and 0 <= pos.y < height):
                raise SnapshotError(f"position {tuple(pos)} is outside the grid")
        if accumulator_ms < 0:
            raise SnapshotError(f"negative accumulator {accumulator_ms}")

        # Occupancy must be exactly head + tail + fruit
        expected = np.zeros((height, width), dtype=bool)
        for pos in [head, fruit, *tail]:
            expected[pos.y, pos.x] = True
        if not (expected == occupied).all():
            raise SnapshotError("occupancy does not match head, tail and fruit")

        # Terminal states may legitimately overlap (head on the tail, head on the fruit)
        if status is GameStatus.RUNNING:
            body = [head, *tail]
            if len(set(body)) != len(body):
                raise SnapshotError("snake segments overlap in a running game")
            if fruit in body:
                raise SnapshotError(f"fruit {tuple(fruit)} sits on the snake")

        sim = cls.__new__(cls)
        sim._width = width
        sim._height = height
        sim._tick_ms = tick_ms
        sim._rng = rng if rng is not None else random.Random()
        sim._occupied = occupied
        sim._head = head
        sim._tail = deque(tail)
        sim._fruit = fruit
        sim._direction = direction
        sim._queued = queued_direction
        sim._status = status
        sim._accumulator_ms = accumulator_ms
        return sim
