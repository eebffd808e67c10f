"""
Programmatic surface for a host application (UI, driver loop, evaluator).

AlphaBetaModel bundles game creation, move application, the alpha-beta
search and outcome classification behind one object.
"""

from typing import Optional

from .game import Board, Move, Outcome, Player, create_move, game_outcome
from .game import apply_move as _apply_move
from .minimax import NodeCounter, find_best_move


class AlphaBetaModel:
    """
    Optimal N x N TicTacToe player using alpha-beta minimax.

    The node count of the most recent find_best_move() call is kept on
    self.counter.
    """

    cross = Player.CROSS
    nought = Player.NOUGHT

    def __init__(self):
        self.counter = NodeCounter()

    def __str__(self) -> str:
        return "Impure Python with Alpha Beta Pruning"

    def game_start(self, first: Player, size: int) -> Board:
        return Board(first, size)

    def create_move(self, row: int, col: int) -> Move:
        return create_move(row, col)

    def apply_move(self, board: Board, move: Move) -> Board:
        """
        Play move for the side to move and pass the turn.

        Args:
            board: current position, mutated in place
            move: cell to mark

        Returns:
            The same board, for chaining.

        Raises:
            InvalidMove: the cell is occupied or off the board
        """
        _apply_move(board, move, board.turn)
        return board

    def find_best_move(self, board: Board, counter: Optional[NodeCounter] = None) -> Move:
        return find_best_move(board, counter if counter is not None else self.counter)

    def game_outcome(self, board: Board) -> Outcome:
        return game_outcome(board)
