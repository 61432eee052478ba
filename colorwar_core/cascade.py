from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from .board import Board, Coord, Player
from .config import debug_enabled


@dataclass(frozen=True)
class Explosion:
    """One cell bursting during a cascade. `captured` lists neighbors whose owner changed."""
    coord: Coord
    wave: int
    owner: Optional[Player]
    captured: Tuple[Coord, ...]


def over_capacity(board: Board, capacity: int) -> List[Coord]:
    """Cells at or above capacity, in row-major scan order."""
    return [coord for coord in board.coords() if board.at(*coord).power >= capacity]


def propagate(board: Board, capacity: int, max_explosions: Optional[int] = None) -> List[Explosion]:
    """
    Runs the chain reaction to quiescence, mutating `board` in place.

    Breadth-first over (row, col, wave) entries. The queue is seeded by a single
    row-major scan at wave 0; each explosion resets its cell to (None, 0), then
    gives +1 power and its owner to every neighbor, enqueueing the ones that
    reach capacity at wave + 1. Entries are not deduplicated, so a neighbor
    flipped by several explosions ends with the owner of the last one in FIFO
    order. An entry whose cell has already been drained below capacity by an
    earlier entry is spent and skipped.

    Returns the explosions in the order they happened. Raises RuntimeError if
    `max_explosions` is given and exceeded.
    """
    debug = debug_enabled()
    queue: Deque[Tuple[int, int, int]] = deque((r, c, 0) for (r, c) in over_capacity(board, capacity))
    explosions: List[Explosion] = []

    while queue:
        r, c, wave = queue.popleft()
        cell = board.at(r, c)
        if cell.power < capacity:
            continue
        if max_explosions is not None and len(explosions) >= max_explosions:
            raise RuntimeError(f'cascade did not settle within {max_explosions} explosions')

        owner = cell.owner
        cell.power = 0
        cell.owner = None

        captured: List[Coord] = []
        for nr, nc in board.neighbors((r, c)):
            neighbor = board.at(nr, nc)
            old_owner = neighbor.owner
            neighbor.power += 1
            neighbor.owner = owner
            if old_owner != owner:
                captured.append((nr, nc))
            if neighbor.power >= capacity:
                queue.append((nr, nc, wave + 1))

        explosions.append(Explosion(coord=(r, c), wave=wave, owner=owner, captured=tuple(captured)))

    if debug and explosions:
        depth = max(e.wave for e in explosions)
        print(f"[cascade] {len(explosions)} explosions, {depth + 1} waves")
    return explosions
