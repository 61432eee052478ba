import random
import unittest

from game import Board, GameConfig, GameState, new_game


def make_state(rows, cols, order, cells=None, entered=None, turn_number=0):
    """GameState with a fixed seating order; `cells` maps (r, c) -> (owner, power)."""
    cfg = GameConfig(rows=rows, cols=cols, players=len(order))
    board = Board.empty(rows, cols)
    for (r, c), (owner, power) in (cells or {}).items():
        board.at(r, c).owner = owner
        board.at(r, c).power = power
    first_moves = [True] * len(order)
    for p in entered or []:
        first_moves[p] = False
    return GameState(config=cfg, board=board, player_order=list(order), turn_number=turn_number, first_moves=first_moves)


class TestPlacementRule(unittest.TestCase):
    def test_given_first_move_when_placing_on_empty_cell_then_start_power_and_turn_advances(self):
        s = make_state(3, 3, [1, 0])
        self.assertEqual(s.current_player, 1)
        s.place_tile(0, 2)
        cell = s.cell(0, 2)
        self.assertEqual((cell.owner, cell.power), (1, 3))
        self.assertFalse(s.first_move_pending(1))
        self.assertTrue(s.first_move_pending(0))
        self.assertEqual(s.current_player, 0)
        self.assertEqual(s.move_count, 1)
        self.assertEqual(s.last_cascade, [])

    def test_given_first_move_when_target_already_owned_then_ignored(self):
        s = make_state(3, 3, [0, 1])
        s.place_tile(1, 1)
        before = s.board.snapshot()
        s.place_tile(1, 1)  # player 1 tries the occupied cell
        self.assertEqual(s.board.snapshot(), before)
        self.assertEqual(s.current_player, 1)
        self.assertTrue(s.first_move_pending(1))
        self.assertEqual(s.move_count, 1)

    def test_given_later_move_when_target_not_owned_by_mover_then_ignored(self):
        s = make_state(3, 3, [0, 1])
        s.place_tile(0, 0)
        s.place_tile(2, 2)
        before = s.board.snapshot()
        s.place_tile(1, 1)  # empty cell, not a first move any more
        s.place_tile(2, 2)  # opponent's cell
        self.assertEqual(s.board.snapshot(), before)
        self.assertEqual(s.current_player, 0)
        s.place_tile(0, 0)
        self.assertEqual(s.move_count, 3)
        self.assertEqual(s.current_player, 1)

    def test_given_own_cell_when_placing_then_power_increments(self):
        s = make_state(3, 3, [0, 1], cells={(0, 0): (0, 1), (2, 2): (1, 1)}, entered=[0, 1])
        s.place_tile(0, 0)
        self.assertEqual((s.cell(0, 0).owner, s.cell(0, 0).power), (0, 2))
        self.assertEqual(s.current_player, 1)

    def test_given_corner_at_three_when_charged_then_explodes_into_two_neighbors(self):
        s = make_state(3, 3, [0, 1])
        s.place_tile(0, 0)
        s.place_tile(2, 2)
        s.place_tile(0, 0)
        self.assertEqual((s.cell(0, 0).owner, s.cell(0, 0).power), (None, 0))
        self.assertEqual((s.cell(1, 0).owner, s.cell(1, 0).power), (0, 1))
        self.assertEqual((s.cell(0, 1).owner, s.cell(0, 1).power), (0, 1))
        self.assertEqual((s.cell(2, 2).owner, s.cell(2, 2).power), (1, 3))
        self.assertEqual(len(s.last_cascade), 1)
        self.assertFalse(s.is_game_over)
        self.assertEqual(s.current_player, 1)

    def test_given_off_board_target_when_placing_then_value_error(self):
        s = make_state(3, 3, [0, 1])
        with self.assertRaises(ValueError):
            s.place_tile(3, 0)
        with self.assertRaises(ValueError):
            s.place_tile(0, -1)

    def test_given_game_over_when_placing_then_noop(self):
        s = make_state(3, 3, [0, 1], cells={(0, 0): (0, 1)}, entered=[0, 1])
        s.game_over = True
        s.winner = 0
        before = s.board.snapshot()
        s.place_tile(0, 0)
        self.assertEqual(s.board.snapshot(), before)
        self.assertEqual(s.legal_cells(), [])

    def test_given_first_and_later_moves_when_listing_legal_cells_then_rule_applied(self):
        s = make_state(2, 2, [0, 1])
        self.assertEqual(len(s.legal_cells()), 4)
        s.place_tile(0, 0)
        self.assertEqual(s.legal_cells(), [(0, 1), (1, 0), (1, 1)])
        s.place_tile(1, 1)
        self.assertEqual(s.legal_cells(), [(0, 0)])


class TestEliminationAndTurns(unittest.TestCase):
    def test_given_pending_first_move_when_checking_elimination_then_nothing_changes(self):
        s = make_state(3, 3, [0, 1, 2], cells={(0, 0): (0, 2)}, entered=[0, 1])
        s.check_elimination()
        self.assertFalse(s.is_game_over)
        self.assertEqual(s.alive, [True, True, True])

    def test_given_pending_first_move_when_capture_wipes_player_then_no_winner_yet(self):
        s = make_state(3, 3, [0, 1, 2], cells={(0, 0): (0, 3), (0, 1): (1, 1)}, entered=[0, 1])
        s.place_tile(0, 0)
        self.assertEqual(s.owned_counts()[1], 0)
        self.assertFalse(s.is_game_over)
        self.assertIsNone(s.winner)
        self.assertTrue(s.alive[1])
        self.assertEqual(s.current_player, 1)

    def test_given_eliminated_player_when_turns_advance_then_player_is_skipped(self):
        cells = {(1, 1): (0, 3), (1, 2): (1, 1), (2, 2): (2, 1)}
        s = make_state(3, 3, [2, 0, 1], cells=cells, entered=[0, 1, 2], turn_number=1)
        self.assertEqual(s.current_player, 0)
        s.place_tile(1, 1)
        self.assertEqual(s.alive, [True, False, True])
        self.assertFalse(s.is_game_over)
        self.assertEqual(s.current_player, 2)

        seen = []
        for _ in range(6):
            p = s.current_player
            seen.append(p)
            s.place_tile(*s.board.owned_by(p)[0])
            if s.is_game_over:
                break
        self.assertNotIn(1, seen)

    def test_given_last_opponent_captured_when_checking_then_game_over_with_winner(self):
        s = make_state(3, 3, [0, 1], cells={(1, 1): (0, 3), (1, 2): (1, 1)}, entered=[0, 1])
        s.place_tile(1, 1)
        self.assertTrue(s.is_game_over)
        self.assertEqual(s.winner, 0)
        self.assertFalse(s.is_draw)
        self.assertEqual(s.alive_players(), [0])
        # The winning move does not advance the turn, and nothing moves afterwards.
        self.assertEqual(s.turn_number, 0)
        before = s.board.snapshot()
        for coord in s.board.coords():
            s.place_tile(*coord)
        self.assertEqual(s.board.snapshot(), before)
        self.assertTrue(s.is_game_over)
        self.assertEqual(s.winner, 0)

    def test_given_empty_board_after_everyone_entered_when_checking_then_draw(self):
        s = make_state(2, 2, [0, 1], entered=[0, 1])
        s.check_elimination()
        self.assertTrue(s.is_game_over)
        self.assertIsNone(s.winner)
        self.assertTrue(s.is_draw)

    def test_given_saturated_board_when_overflowing_then_cascade_settles_and_opponent_wiped(self):
        cells = {coord: (0, 3) for coord in Board.empty(8, 8).coords()}
        cells[(3, 4)] = (1, 1)
        s = make_state(8, 8, [0, 1], cells=cells, entered=[0, 1])
        s.place_tile(3, 3)
        self.assertGreater(len(s.last_cascade), 1)
        for cell in s.board.grid:
            self.assertLess(cell.power, 4)
            self.assertEqual(cell.owner is None, cell.power == 0)
        self.assertTrue(s.is_game_over)
        self.assertEqual(s.winner, 0)


class TestWholeGames(unittest.TestCase):
    def test_given_same_seed_when_new_game_then_same_turn_order(self):
        a = new_game(GameConfig(rows=4, cols=4, players=4), seed=11)
        b = new_game(GameConfig(rows=4, cols=4, players=4), seed=11)
        self.assertEqual(a.player_order, b.player_order)
        self.assertEqual(a.current_player, a.player_order[0])
        self.assertEqual(a.board.snapshot(), tuple((None, 0) for _ in range(16)))

    def test_given_bad_state_parts_when_constructing_then_value_error(self):
        cfg = GameConfig(rows=2, cols=2, players=2)
        with self.assertRaises(ValueError):
            GameState(config=cfg, board=Board.empty(2, 2), player_order=[0, 0])
        with self.assertRaises(ValueError):
            GameState(config=cfg, board=Board.empty(3, 2), player_order=[0, 1])
        with self.assertRaises(ValueError):
            GameState(config=cfg, board=Board.empty(2, 2), player_order=[0, 1], turn_number=2)

    def test_given_no_living_player_in_running_game_when_constructing_then_value_error(self):
        cfg = GameConfig(rows=2, cols=2, players=2)
        with self.assertRaises(ValueError):
            GameState(config=cfg, board=Board.empty(2, 2), player_order=[0, 1], alive=[False, False])
        with self.assertRaises(ValueError):
            # player 1 has not entered yet, so cannot already be out
            GameState(config=cfg, board=Board.empty(2, 2), player_order=[0, 1],
                      first_moves=[False, True], alive=[True, False])
        with self.assertRaises(ValueError):
            GameState(config=cfg, board=Board.empty(2, 2), player_order=[1, 0],
                      first_moves=[False, False], alive=[True, False])
        over = GameState(config=cfg, board=Board.empty(2, 2), player_order=[0, 1],
                         first_moves=[False, False], alive=[False, False], game_over=True)
        self.assertTrue(over.is_draw)

    def test_given_flags_cleared_behind_its_back_when_advancing_turn_then_runtime_error(self):
        s = make_state(2, 2, [0, 1], entered=[0, 1])
        s.alive = [False, False]
        with self.assertRaises(RuntimeError):
            s.advance_turn()

    def _play_random(self, seed, rows, cols, players, max_moves):
        rng = random.Random(seed)
        s = new_game(GameConfig(rows=rows, cols=cols, players=players), rng=rng)
        moves = []
        for _ in range(max_moves):
            if s.is_game_over:
                break
            legal = s.legal_cells()
            self.assertTrue(legal, "current player has no legal cell")
            move = rng.choice(legal)
            moves.append(move)
            s.place_tile(*move)
            for cell in s.board.grid:
                self.assertLess(cell.power, s.config.capacity)
                self.assertEqual(cell.owner is None, cell.power == 0)
            if s.all_entered() and not s.is_game_over:
                self.assertTrue(s.alive[s.current_player])
        return s, moves

    def test_given_random_legal_play_when_running_then_invariants_hold_every_move(self):
        for seed in range(8):
            with self.subTest(seed=seed):
                s, _ = self._play_random(seed, 5, 5, 3, 600)
                if s.is_game_over:
                    self.assertIsNotNone(s.winner)
                    self.assertEqual(s.alive_players(), [s.winner])

    def test_given_same_seed_and_moves_when_replayed_then_identical_board(self):
        s1, moves = self._play_random(3, 6, 6, 2, 200)
        s2 = new_game(GameConfig(rows=6, cols=6, players=2), rng=random.Random(3))
        self.assertEqual(s2.player_order, s1.player_order)
        for move in moves:
            s2.place_tile(*move)
        self.assertEqual(s2.board.snapshot(), s1.board.snapshot())
        self.assertEqual(s2.winner, s1.winner)


if __name__ == '__main__':
    unittest.main(verbosity=2)
