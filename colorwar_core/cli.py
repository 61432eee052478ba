from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

from .config import ConfigError, GameConfig, config_from_env
from .players import draw_message, player_name, turn_message, winner_message
from .state import GameState, new_game


def parse_move(text: str) -> Optional[Tuple[int, int]]:
    """Parses 'r,c' or 'r c'. Returns None when the text is not two integers."""
    sep = ',' if ',' in text else ' '
    parts = [t.strip() for t in text.split(sep) if t.strip() != '']
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def describe_cascade(state: GameState) -> List[str]:
    lines: List[str] = []
    if not state.last_cascade:
        return lines
    waves = max(e.wave for e in state.last_cascade) + 1
    captured = sum(len(e.captured) for e in state.last_cascade)
    lines.append(f'Chain reaction: {len(state.last_cascade)} explosions over {waves} waves, {captured} captures')
    return lines


def play(state: GameState) -> None:
    """Hot-seat loop on stdin/stdout until the game ends or input runs out."""
    print(state.board.pretty())
    while not state.is_game_over:
        p = state.current_player
        print(turn_message(p))
        try:
            text = input(f'{player_name(p)} - enter your move as r,c or r c: ').strip()
        except EOFError:
            print('\nBye.')
            return
        move = parse_move(text)
        if move is None:
            print('Could not parse. Try again.')
            continue
        r, c = move
        if not state.board.in_bounds(r, c):
            print('That cell is off the board. Try again.')
            continue
        before = state.move_count
        state.place_tile(r, c)
        if state.move_count == before:
            print('Move ignored: first moves go on empty cells, later moves on your own tiles.')
            continue
        for line in describe_cascade(state):
            print(line)
        print(state.board.pretty())

    if state.winner is not None:
        print(winner_message(state.winner))
    else:
        print(draw_message())


def main(argv: Optional[List[str]] = None) -> None:
    base = config_from_env()
    parser = argparse.ArgumentParser(description='Color War - chain reaction territory game (hot seat)')
    parser.add_argument('--rows', type=int, default=base.rows, help='Board rows')
    parser.add_argument('--cols', type=int, default=base.cols, help='Board columns')
    parser.add_argument('--players', type=int, default=base.players, help='Number of players')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the turn order')
    args = parser.parse_args(argv)

    try:
        config = GameConfig(
            rows=args.rows,
            cols=args.cols,
            players=args.players,
            start_power=base.start_power,
            capacity=base.capacity,
        )
    except ConfigError as e:
        parser.error(str(e))

    state = new_game(config, seed=args.seed)
    order = ', '.join(player_name(p) for p in state.player_order)
    print(f'Turn order: {order}')
    play(state)


if __name__ == '__main__':
    main()
