import unittest

from ttt_search.game import (
    NO_MOVE,
    Board,
    Move,
    Player,
    Win,
    apply_move,
    game_outcome,
    is_game_over,
    legal_moves,
    undo_move,
)
from ttt_search.minimax import (
    NodeCounter,
    cache_size,
    clear_cache,
    find_best_move,
    heuristic,
    minimax_alpha_beta,
    minimax_value_and_move,
    search,
)
from ttt_search.eval import eval_pruning_agreement

from test_game import board_from_rows

X, O = Player.CROSS, Player.NOUGHT


class TestHeuristic(unittest.TestCase):
    def test_win_draw_loss_scores(self) -> None:
        x_won = board_from_rows(["XXX", "OO ", "   "], turn=O)
        self.assertEqual(heuristic(x_won, X), 1)
        self.assertEqual(heuristic(x_won, O), -1)

        drawn = board_from_rows(["XOX", "XOO", "OXX"], turn=O)
        self.assertEqual(heuristic(drawn, X), 0)
        self.assertEqual(heuristic(drawn, O), 0)

    def test_ongoing_collapses_to_minus_one(self) -> None:
        self.assertEqual(heuristic(Board(X, 3), X), -1)
        self.assertEqual(heuristic(Board(X, 3), O), -1)


class TestNodeCounter(unittest.TestCase):
    def test_reset_and_increment(self) -> None:
        counter = NodeCounter()
        counter.increment()
        counter.increment()
        self.assertEqual(counter.count, 2)
        counter.reset()
        self.assertEqual(counter.count, 0)


class TestSearch(unittest.TestCase):
    def test_takes_immediate_win(self) -> None:
        board = board_from_rows(["XX ", "OO ", "   "], turn=X)
        result = search(board)
        self.assertEqual(result.move, Move(0, 2))
        self.assertEqual(result.score, 1)

    def test_nought_takes_immediate_win(self) -> None:
        # X threatens column 0 at (1,0), which also completes row 1 for O
        board = board_from_rows(["XX ", " OO", "X  "], turn=O)
        result = search(board)
        self.assertEqual(result.move, Move(1, 0))
        self.assertEqual(result.score, -1)

    def test_blocks_threat(self) -> None:
        board = board_from_rows(["XX ", " O ", "   "], turn=O)
        result = search(board)
        self.assertEqual(result.move, Move(0, 2))
        self.assertEqual(result.score, 0)

    def test_empty_board_is_a_draw(self) -> None:
        for first in (X, O):
            result = search(Board(first, 3))
            self.assertEqual(result.score, 0)
            self.assertIn(result.move, legal_moves(Board(first, 3)))

    def test_search_restores_board(self) -> None:
        board = board_from_rows(["X  ", " O ", "   "], turn=X)
        before = board.key()
        find_best_move(board)
        self.assertEqual(board.key(), before)

    def test_terminal_position_returns_sentinel(self) -> None:
        board = board_from_rows(["XXX", "OO ", "   "], turn=O)
        result = search(board)
        self.assertEqual(result.move, NO_MOVE)
        self.assertEqual(result.score, 1)
        self.assertEqual(result.nodes, 1)

        drawn = board_from_rows(["XOX", "XOO", "OX "], turn=O)
        self.assertEqual(minimax_alpha_beta(-1, 1, drawn, False), (NO_MOVE, 0))

    def test_counter_is_reset_per_search(self) -> None:
        counter = NodeCounter()
        counter.count = 99
        result = search(Board(X, 3), counter)
        self.assertEqual(counter.count, result.nodes)
        self.assertGreater(result.nodes, 1)

    def test_fewer_nodes_one_ply_deeper(self) -> None:
        board = Board(X, 3)
        root_nodes = search(board).nodes
        apply_move(board, Move(0, 0), board.turn)
        self.assertGreater(root_nodes, search(board).nodes)

    def test_immediate_win_on_4x4_prunes_siblings(self) -> None:
        board = board_from_rows(["XXX.", "OOO.", "....", "...."], turn=X)
        result = search(board)
        self.assertEqual(result.move, Move(0, 3))
        self.assertEqual(result.score, 1)
        self.assertEqual(result.nodes, 2)


class TestPruningAgreement(unittest.TestCase):
    def setUp(self) -> None:
        clear_cache()

    def tearDown(self) -> None:
        clear_cache()

    def test_plain_minimax_matches_on_sample(self) -> None:
        board = board_from_rows(["X  ", " O ", "   "], turn=X)
        self.assertEqual(minimax_value_and_move(board), minimax_alpha_beta(-1, 1, board, True))
        self.assertGreater(cache_size(), 0)

    def test_alpha_beta_matches_minimax_on_all_3x3_positions(self) -> None:
        for first in (X, O):
            result = eval_pruning_agreement(3, first, progress=False)
            self.assertGreater(result["n_states"], 0)
            self.assertEqual(result["n_mismatches"], 0)
            self.assertEqual(result["agreement"], 1.0)


class TestOptimalPlay(unittest.TestCase):
    def _worst_outcome_for(self, engine_side: Player, first: Player) -> int:
        """
        Play the engine against every possible opponent line.

        Returns the worst score seen, from the engine's point of view.
        """
        board = Board(first, 3)
        engine_moves = {}

        def walk() -> int:
            if is_game_over(board):
                outcome = game_outcome(board)
                if isinstance(outcome, Win):
                    return 1 if outcome.player is engine_side else -1
                return 0

            if board.turn is engine_side:
                key = board.key()
                if key not in engine_moves:
                    engine_moves[key] = find_best_move(board)
                candidates = [engine_moves[key]]
            else:
                candidates = legal_moves(board)

            worst = 1
            for move in candidates:
                apply_move(board, move, board.turn)
                worst = min(worst, walk())
                undo_move(board, move)
            return worst

        return walk()

    def test_first_mover_never_loses(self) -> None:
        self.assertGreaterEqual(self._worst_outcome_for(X, X), 0)

    def test_second_mover_never_loses(self) -> None:
        self.assertGreaterEqual(self._worst_outcome_for(O, X), 0)


if __name__ == "__main__":
    unittest.main()
