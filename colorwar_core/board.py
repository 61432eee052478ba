from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

Coord = Tuple[int, int]
Player = int


@dataclass
class Cell:
    """A single board position: who holds it and how much charge it carries."""
    owner: Optional[Player] = None
    power: int = 0

    def is_empty(self) -> bool:
        return self.owner is None


@dataclass
class Board:
    """Mutable grid of cells, no wrap-around at the edges."""
    width: int
    height: int
    grid: List[Cell] = field(default_factory=list)  # row-major, length == width * height

    @classmethod
    def empty(cls, rows: int, cols: int) -> 'Board':
        return cls(width=cols, height=rows, grid=[Cell() for _ in range(rows * cols)])

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * self.width + c

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.height and 0 <= c < self.width

    def at(self, r: int, c: int) -> Cell:
        """Gets the cell at a given row and column; raises ValueError off the board."""
        if not self.in_bounds(r, c):
            raise ValueError(f'cell ({r}, {c}) is off the {self.height}x{self.width} board')
        return self.grid[self.index(r, c)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board, row-major."""
        for r in range(self.height):
            for c in range(self.width):
                yield (r, c)

    def neighbors(self, coord: Coord) -> List[Coord]:
        """Orthogonal neighbors in up, down, left, right order. Edges and corners have fewer."""
        r, c = coord
        out: List[Coord] = []
        if r > 0:
            out.append((r - 1, c))
        if r < self.height - 1:
            out.append((r + 1, c))
        if c > 0:
            out.append((r, c - 1))
        if c < self.width - 1:
            out.append((r, c + 1))
        return out

    def owned_by(self, player: Player) -> List[Coord]:
        return [coord for coord in self.coords() if self.at(*coord).owner == player]

    def snapshot(self) -> Tuple[Tuple[Optional[Player], int], ...]:
        """Immutable (owner, power) view, row-major. Handy for equality checks."""
        return tuple((cell.owner, cell.power) for cell in self.grid)

    def pretty(self, symbols: Optional[str] = None) -> str:
        """Human-readable board: '.' for empty, otherwise player symbol followed by power."""
        syms = symbols or 'RGBY'
        lines: List[str] = []
        header = '   ' + ' '.join(f'{c:>2}' for c in range(self.width))
        lines.append(header)
        for r in range(self.height):
            row: List[str] = []
            for c in range(self.width):
                cell = self.at(r, c)
                if cell.is_empty():
                    row.append(' .')
                else:
                    sym = syms[cell.owner] if cell.owner < len(syms) else str(cell.owner)
                    row.append(f'{sym}{cell.power}')
            lines.append(f'{r:>2} ' + ' '.join(row))
        return '\n'.join(lines)
