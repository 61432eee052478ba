from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .board import Board, Cell, Coord, Player
from .cascade import Explosion, propagate
from .config import GameConfig
from .deal import deal_player_order


@dataclass
class GameState:
    """
    The whole game: board, seating order and elimination bookkeeping.

    Mutated only through `place_tile`. Start a new game with `new_game` rather
    than resetting fields by hand.
    """
    config: GameConfig
    board: Board
    player_order: List[Player]
    turn_number: int = 0
    first_moves: List[bool] = field(default_factory=list)  # True while a player's first move is pending
    alive: List[bool] = field(default_factory=list)
    game_over: bool = False
    winner: Optional[Player] = None
    move_count: int = 0
    last_cascade: List[Explosion] = field(default_factory=list)

    def __post_init__(self) -> None:
        n = self.config.players
        if not self.first_moves:
            self.first_moves = [True] * n
        if not self.alive:
            self.alive = [True] * n
        if sorted(self.player_order) != list(range(n)):
            raise ValueError(f'player order {self.player_order} is not a permutation of {n} players')
        if len(self.first_moves) != n or len(self.alive) != n:
            raise ValueError('per-player flags do not match the player count')
        if (self.board.height, self.board.width) != (self.config.rows, self.config.cols):
            raise ValueError('board dimensions do not match the configuration')
        if not 0 <= self.turn_number < n:
            raise ValueError(f'turn number {self.turn_number} out of range')
        if self.game_over:
            return
        if not any(self.alive):
            raise ValueError('no player is alive in a running game')
        if any(pending and not alive for pending, alive in zip(self.first_moves, self.alive)):
            raise ValueError('a player still owed a first move cannot be eliminated')
        if self.all_entered() and not self.alive[self.current_player]:
            raise ValueError(f'current player {self.current_player} has been eliminated')

    # ---------- Queries ----------

    @property
    def current_player(self) -> Player:
        return self.player_order[self.turn_number]

    @property
    def is_game_over(self) -> bool:
        return self.game_over

    @property
    def is_draw(self) -> bool:
        return self.game_over and self.winner is None

    def cell(self, row: int, col: int) -> Cell:
        return self.board.at(row, col)

    def first_move_pending(self, player: Player) -> bool:
        return self.first_moves[player]

    def all_entered(self) -> bool:
        return not any(self.first_moves)

    def alive_players(self) -> List[Player]:
        return [p for p in range(self.config.players) if self.alive[p]]

    def owned_counts(self) -> Dict[Player, int]:
        counts = {p: 0 for p in range(self.config.players)}
        for cell in self.board.grid:
            if cell.owner is not None:
                counts[cell.owner] += 1
        return counts

    def is_legal(self, row: int, col: int) -> bool:
        if self.game_over:
            return False
        cell = self.board.at(row, col)
        p = self.current_player
        if self.first_moves[p]:
            return cell.is_empty()
        return cell.owner == p

    def legal_cells(self) -> List[Coord]:
        """Cells the current player may target right now."""
        return [coord for coord in self.board.coords() if self.is_legal(*coord)]

    # ---------- Command ----------

    def place_tile(self, row: int, col: int) -> None:
        """
        Places or charges a tile for the current player.

        Illegal targets are ignored: no change, no turn advance. A legal
        placement runs the cascade, the elimination check and, unless the game
        just ended, the turn advance before returning.
        """
        if self.game_over:
            return
        cell = self.board.at(row, col)
        if not self.is_legal(row, col):
            return

        p = self.current_player
        if self.first_moves[p]:
            cell.owner = p
            cell.power = self.config.start_power
            self.first_moves[p] = False
        else:
            cell.power += 1

        self.move_count += 1
        self.last_cascade = propagate(self.board, self.config.capacity)
        self.check_elimination()
        if not self.game_over:
            self.advance_turn()

    # ---------- Transitions ----------

    def check_elimination(self) -> None:
        # Meaningless until everyone has entered the board.
        if not self.all_entered():
            return
        counts = self.owned_counts()
        for p in range(self.config.players):
            self.alive[p] = counts[p] > 0
        survivors = self.alive_players()
        if len(survivors) == 1:
            self.winner = survivors[0]
            self.game_over = True
        elif not survivors:
            # Mutual wipe-out is a draw.
            self.winner = None
            self.game_over = True

    def advance_turn(self) -> None:
        if self.game_over:
            return
        n = self.config.players
        for _ in range(n):
            self.turn_number = (self.turn_number + 1) % n
            if self.alive[self.current_player]:
                return
        raise RuntimeError('no living player left to take a turn')


def new_game(
    config: Optional[GameConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Creates a cleared board with a freshly shuffled turn order."""
    cfg = config or GameConfig()
    order = deal_player_order(cfg.players, seed=seed, rng=rng)
    return GameState(config=cfg, board=Board.empty(cfg.rows, cfg.cols), player_order=order)
