from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .board import Coord
from .cascade import Explosion

CELL_SIZE = 50.0
BOARD_MARGIN = 4.0 * CELL_SIZE
ANIMATION_DURATION = 0.1  # seconds per wave

Point = Tuple[float, float]


@dataclass(frozen=True)
class Decoration:
    """Presentation-only state for one cell. The engine never reads these."""
    delay: float
    source: Optional[Point] = None  # pixel center a captured cell slides in from
    exploding: bool = False


def cell_center(coord: Coord, cell_size: float = CELL_SIZE, margin: float = BOARD_MARGIN) -> Point:
    """Pixel center (x, y) of a board cell."""
    r, c = coord
    return (c * cell_size + cell_size / 2.0 + margin, r * cell_size + cell_size / 2.0 + margin)


def decorate(
    explosions: Iterable[Explosion],
    cell_size: float = CELL_SIZE,
    margin: float = BOARD_MARGIN,
    duration: float = ANIMATION_DURATION,
) -> Dict[Coord, Decoration]:
    """
    Builds per-cell decorations for a cascade, later events overwriting earlier
    ones on the same cell, mirroring how ownership is overwritten.
    """
    out: Dict[Coord, Decoration] = {}
    for ex in explosions:
        delay = ex.wave * duration
        out[ex.coord] = Decoration(delay=delay, exploding=True)
        src = cell_center(ex.coord, cell_size, margin)
        for coord in ex.captured:
            out[coord] = Decoration(delay=delay, source=src)
    return out


def animation_progress(elapsed: float, delay: float, duration: float = ANIMATION_DURATION) -> float:
    """Fraction of the animation shown after `elapsed` seconds, clamped to [0, 1]."""
    t = elapsed - delay
    if t < 0.0:
        return 0.0
    return min(t / duration, 1.0)
