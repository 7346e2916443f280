# autopilot.py
from typing import List

from .config import Direction
from .simulation import Position, Simulation


def _manhattan(a: Position, b: Position) -> int:
    """Manhattan (L1) distance on the grid."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def best_moves_toward(head: Position, target: Position) -> List[Direction]:
    """
    Returns a preference ordering of moves that reduce Manhattan distance to target.
    Does NOT check collisions; caller should filter unsafe moves.
    """
    prefs = []
    if target.x < head.x:
        prefs.append(Direction.LEFT)
    elif target.x > head.x:
        prefs.append(Direction.RIGHT)
    if target.y < head.y:
        prefs.append(Direction.UP)
    elif target.y > head.y:
        prefs.append(Direction.DOWN)
    # Orthogonal options last so the caller still has choices when blocked
    for d in Direction:
        if d not in prefs:
            prefs.append(d)
    return prefs  # length 4


def would_hit(sim: Simulation, direction: Direction) -> bool:
    """
    True if moving the head one cell in 'direction' ends the game.
    The last tail segment counts too: collisions are checked before it moves.
    """
    nxt = sim.head.moved(direction)
    if not sim.in_bounds(nxt):
        return True
    return nxt in sim.tail


def choose_direction(sim: Simulation) -> Direction:
    """
    Greedy on fruit distance with simple safety:
    - prefer moves that reduce Manhattan distance
    - never the reversal of the active direction
    - skip any move that would hit a wall or the tail
    - if boxed in, keep going straight
    """
    reverse = sim.direction.opposite
    for d in best_moves_toward(sim.head, sim.fruit):
        if d is reverse:
            continue
        if not would_hit(sim, d):
            return d
    return sim.direction
