import unittest

from ttt_search.game import Board, Draw, InvalidMove, Move, Player, Undecided, Win
from ttt_search.model import AlphaBetaModel


class TestAlphaBetaModel(unittest.TestCase):
    def setUp(self) -> None:
        self.model = AlphaBetaModel()

    def test_describes_itself(self) -> None:
        self.assertIn("Alpha Beta", str(self.model))
        self.assertIs(self.model.cross, Player.CROSS)
        self.assertIs(self.model.nought, Player.NOUGHT)

    def test_game_start(self) -> None:
        board = self.model.game_start(Player.NOUGHT, 4)
        self.assertIsInstance(board, Board)
        self.assertEqual(board.size, 4)
        self.assertIs(board.turn, Player.NOUGHT)
        with self.assertRaises(ValueError):
            self.model.game_start(Player.CROSS, 0)

    def test_apply_move_infers_mark_from_turn(self) -> None:
        board = self.model.game_start(Player.NOUGHT, 3)
        returned = self.model.apply_move(board, self.model.create_move(2, 1))
        self.assertIs(returned, board)
        self.assertIs(board.get(2, 1), Player.NOUGHT)
        self.assertIs(board.turn, Player.CROSS)

        self.model.apply_move(board, Move(0, 0))
        self.assertIs(board.get(0, 0), Player.CROSS)
        with self.assertRaises(InvalidMove):
            self.model.apply_move(board, Move(0, 0))

    def test_find_best_move_records_node_count(self) -> None:
        board = self.model.game_start(Player.CROSS, 3)
        move = self.model.find_best_move(board)
        self.assertIsInstance(move, Move)
        self.assertGreater(self.model.counter.count, 0)

    def test_driving_loop_self_play_draws(self) -> None:
        board = self.model.game_start(Player.CROSS, 3)
        outcome = self.model.game_outcome(board)
        self.assertEqual(outcome, Undecided())
        while not outcome.is_over:
            self.model.apply_move(board, self.model.find_best_move(board))
            outcome = self.model.game_outcome(board)
        self.assertEqual(outcome, Draw())

    def test_outcome_reports_winner_line(self) -> None:
        board = self.model.game_start(Player.CROSS, 3)
        for row, col in [(0, 0), (1, 0), (1, 1), (2, 0), (2, 2)]:
            self.model.apply_move(board, self.model.create_move(row, col))
        self.assertEqual(
            self.model.game_outcome(board),
            Win(Player.CROSS, ((0, 0), (1, 1), (2, 2))),
        )


if __name__ == "__main__":
    unittest.main()
