from __future__ import annotations

from typing import Tuple

from .board import Player

RGB = Tuple[int, int, int]

PLAYER_NAMES: Tuple[str, ...] = ('Red', 'Green', 'Blue', 'Yellow')
PLAYER_COLORS: Tuple[RGB, ...] = (
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
)
WHITE: RGB = (255, 255, 255)


def player_name(player: Player) -> str:
    if 0 <= player < len(PLAYER_NAMES):
        return PLAYER_NAMES[player]
    return f'Player {player + 1}'


def player_color(player: Player) -> RGB:
    if 0 <= player < len(PLAYER_COLORS):
        return PLAYER_COLORS[player]
    return WHITE


def turn_message(player: Player) -> str:
    return f"{player_name(player)} player's turn - Place your tile!"


def winner_message(player: Player) -> str:
    return f'{player_name(player)} player wins!'


def draw_message() -> str:
    return 'Nobody is left on the board - draw!'
