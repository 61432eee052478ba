from __future__ import annotations

# Facade module that re-exports Color War core functionality.
# The Flask app, tools and tests import from here.
# Single-responsibility modules live under colorwar_core/*.

from colorwar_core.board import Board, Cell, Coord, Player
from colorwar_core.config import (
    CAPACITY,
    START_POWER,
    ConfigError,
    GameConfig,
    config_from_env,
    debug_enabled,
)
from colorwar_core.cascade import Explosion, over_capacity, propagate
from colorwar_core.deal import deal_player_order
from colorwar_core.state import GameState, new_game
from colorwar_core.players import (
    PLAYER_NAMES,
    draw_message,
    player_color,
    player_name,
    turn_message,
    winner_message,
)
from colorwar_core.animation import (
    ANIMATION_DURATION,
    BOARD_MARGIN,
    CELL_SIZE,
    Decoration,
    animation_progress,
    cell_center,
    decorate,
)


def main() -> None:
    # CLI driver delegated to colorwar_core.cli
    from colorwar_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
