from __future__ import annotations

import argparse
import os
import random
import sys
import time
from typing import List, Tuple

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import GameConfig, GameState, new_game, player_name  # type: ignore


def check_invariants(state: GameState) -> List[str]:
    """Returns a description of every at-rest invariant the state breaks."""
    problems: List[str] = []
    cap = state.config.capacity
    for (r, c) in state.board.coords():
        cell = state.board.at(r, c)
        if not 0 <= cell.power < cap:
            problems.append(f"({r},{c}) power {cell.power} outside [0,{cap})")
        if (cell.owner is None) != (cell.power == 0):
            problems.append(f"({r},{c}) owner={cell.owner} power={cell.power}")
    if state.game_over:
        return problems
    if state.all_entered() and not state.alive[state.current_player]:
        problems.append(f"current player {state.current_player} is eliminated")
    return problems


def play_random_game(config: GameConfig, seed: int, max_moves: int) -> Tuple[GameState, int, List[str]]:
    rng = random.Random(seed)
    state = new_game(config, rng=rng)
    biggest = 0
    for _ in range(max_moves):
        if state.is_game_over:
            break
        legal = state.legal_cells()
        if not legal:
            return state, biggest, [f"player {state.current_player} has no legal cell"]
        state.place_tile(*rng.choice(legal))
        biggest = max(biggest, len(state.last_cascade))
        problems = check_invariants(state)
        if problems:
            return state, biggest, problems
    return state, biggest, []


def main() -> None:
    parser = argparse.ArgumentParser(description='Play seeded random games and check engine invariants')
    parser.add_argument('--games', type=int, default=50)
    parser.add_argument('--rows', type=int, default=8)
    parser.add_argument('--cols', type=int, default=8)
    parser.add_argument('--players', type=int, default=4)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--max-moves', type=int, default=5000)
    args = parser.parse_args()

    config = GameConfig(rows=args.rows, cols=args.cols, players=args.players)
    random.seed(args.seed)
    failures = 0
    unfinished = 0
    t0 = time.time()
    for _ in range(args.games):
        seed = random.randrange(1_000_000)
        state, biggest, problems = play_random_game(config, seed, args.max_moves)
        if problems:
            failures += 1
            print(f"seed={seed} FAILED after {state.move_count} moves: {problems[0]}")
            continue
        if not state.is_game_over:
            unfinished += 1
        who = player_name(state.winner) if state.winner is not None else '-'
        print(f"seed={seed} moves={state.move_count} winner={who} biggest_cascade={biggest}")
    took = time.time() - t0
    print(f"Played {args.games} games in {took:.1f}s, failures={failures}, unfinished={unfinished}")
    if failures:
        sys.exit(1)


if __name__ == '__main__':
    main()
