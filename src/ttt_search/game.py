"""
TicTacToe game rules and state management for N x N boards.

Board representation: dict (row, col) -> Optional[Player]
  - None: empty
  - Player.CROSS: X
  - Player.NOUGHT: O

Winning lines: N rows, then N columns, then the two diagonals (2N + 2 lines),
built once per board.

The board is mutated in place by apply_move/undo_move. Search relies on this
to keep a single path of the game tree materialised; a Board must not be
shared between concurrently explored branches (use Board.copy() for that).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

Cell = Tuple[int, int]
Line = Tuple[Cell, ...]


class InvalidMove(ValueError):
    """Raised when a move targets an occupied or off-board cell."""


class Player(Enum):
    """The two players. Values match the numpy board encoding."""
    CROSS = +1
    NOUGHT = -1

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.NOUGHT if self is Player.CROSS else Player.CROSS

    @property
    def mark(self) -> str:
        return "X" if self is Player.CROSS else "O"


@dataclass(frozen=True)
class Move:
    """An immutable (row, col) coordinate. Not validated against any board."""
    row: int
    col: int

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


# Returned by the search when there is nothing left to play
NO_MOVE = Move(-1, -1)


def create_move(row: int, col: int) -> Move:
    return Move(row, col)


class Outcome:
    """Base class of the game outcome variants: Win, Draw, Undecided."""

    @property
    def is_over(self) -> bool:
        return not isinstance(self, Undecided)


@dataclass(frozen=True)
class Win(Outcome):
    player: Player
    line: Line


@dataclass(frozen=True)
class Draw(Outcome):
    pass


@dataclass(frozen=True)
class Undecided(Outcome):
    pass


def build_winning_lines(size: int) -> Tuple[Line, ...]:
    """
    Build all winning lines for a size x size grid.

    Order: every row, then every column, then the main diagonal and the
    anti-diagonal.
    """
    rows = [tuple((r, c) for c in range(size)) for r in range(size)]
    cols = [tuple((r, c) for r in range(size)) for c in range(size)]
    diag = tuple((i, i) for i in range(size))
    anti = tuple((i, size - i - 1) for i in range(size))
    return tuple(rows + cols + [diag, anti])


class Board:
    """
    Mutable N x N board plus the side to move.

    Attributes:
        size: board edge length N (fixed)
        turn: player to move next
        cells: (row, col) -> Optional[Player], exactly N*N entries
        winning_lines: the 2N + 2 winning lines, never recomputed
    """

    def __init__(self, turn: Player, size: int = 3):
        if not isinstance(turn, Player):
            raise ValueError(f"turn must be a Player, got {turn!r}")
        if not isinstance(size, int) or size < 1:
            raise ValueError(f"board size must be a positive integer, got {size!r}")

        self.size = size
        self.turn = turn
        self.cells: Dict[Cell, Optional[Player]] = {
            (r, c): None for r in range(size) for c in range(size)
        }
        self.winning_lines = build_winning_lines(size)

    def __repr__(self) -> str:
        return f"Board(size={self.size}, turn={self.turn.name})"

    def __str__(self) -> str:
        rows = []
        for r in range(self.size):
            rows.append("|".join(
                self.cells[(r, c)].mark if self.cells[(r, c)] else " "
                for c in range(self.size)
            ))
        return ("\n" + "-+" * (self.size - 1) + "-\n").join(rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.key() == other.key()

    def get(self, row: int, col: int) -> Optional[Player]:
        return self.cells.get((row, col))

    def empty_cells(self) -> Iterator[Cell]:
        """Yield empty cells in row-major order."""
        for cell, occupant in self.cells.items():
            if occupant is None:
                yield cell

    def key(self) -> Tuple[Tuple[Optional[Player], ...], Player]:
        """Hashable snapshot of cell contents (row-major) and side to move."""
        return tuple(self.cells.values()), self.turn

    def copy(self) -> "Board":
        """Create an independent copy. Winning lines are shared (immutable)."""
        new_board = Board.__new__(Board)
        new_board.size = self.size
        new_board.turn = self.turn
        new_board.cells = dict(self.cells)
        new_board.winning_lines = self.winning_lines
        return new_board

    def to_array(self) -> np.ndarray:
        """Encode as an int8 [N, N] array: +1 X, -1 O, 0 empty."""
        arr = np.zeros((self.size, self.size), dtype=np.int8)
        for (r, c), occupant in self.cells.items():
            if occupant is not None:
                arr[r, c] = occupant.value
        return arr

    @classmethod
    def from_array(cls, arr, turn: Player) -> "Board":
        """
        Build a board from an [N, N] array using the to_array() encoding.

        No check is made that the position is reachable.
        """
        arr = np.asarray(arr)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"expected a square 2-D array, got shape {arr.shape}")
        if not np.isin(arr, (-1, 0, 1)).all():
            raise ValueError("board array values must be -1, 0 or +1")

        board = cls(turn, int(arr.shape[0]))
        for r, c in zip(*np.nonzero(arr)):
            board.cells[(int(r), int(c))] = Player(int(arr[r, c]))
        return board


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def legal_moves(board: Board) -> List[Move]:
    """Return all empty cells as moves, row-major."""
    return [Move(r, c) for r, c in board.empty_cells()]


def apply_move(board: Board, move: Move, player: Player) -> None:
    """
    Place player's mark on move's cell and pass the turn.

    Raises:
        InvalidMove: the cell is off the board or already occupied
    """
    cell = move.cell
    if cell not in board.cells:
        raise InvalidMove(f"Cell {cell} is outside the {board.size}x{board.size} board")
    if board.cells[cell] is not None:
        raise InvalidMove(f"Cell {cell} is already occupied by {board.cells[cell].mark}")

    board.cells[cell] = player
    board.turn = board.turn.opposite()


def undo_move(board: Board, move: Move) -> None:
    """
    Clear move's cell and pass the turn back.

    Must be given the move most recently applied; no history is kept.
    """
    board.cells[move.cell] = None
    board.turn = board.turn.opposite()


def winning_line_for(board: Board, player: Player) -> Optional[Line]:
    """Return the first line fully owned by player, or None."""
    cells = board.cells
    for line in board.winning_lines:
        if all(cells[cell] is player for cell in line):
            return line
    return None


def is_draw(board: Board) -> bool:
    """
    True iff every winning line holds at least one X and at least one O.

    This is line-based, not "board full": a board can be drawn before it
    fills up, and on N > 3 boards the two notions can disagree.
    """
    cells = board.cells
    for line in board.winning_lines:
        occupants = {cells[cell] for cell in line}
        if Player.CROSS not in occupants or Player.NOUGHT not in occupants:
            return False
    return True


def is_game_over(board: Board) -> bool:
    return (
        is_draw(board)
        or winning_line_for(board, Player.CROSS) is not None
        or winning_line_for(board, Player.NOUGHT) is not None
    )


def game_outcome(board: Board) -> Outcome:
    """
    Classify the position.

    Cross is checked before Nought, so an ill-formed board where both own a
    line reports a Cross win.
    """
    line = winning_line_for(board, Player.CROSS)
    if line is not None:
        return Win(Player.CROSS, line)
    line = winning_line_for(board, Player.NOUGHT)
    if line is not None:
        return Win(Player.NOUGHT, line)
    if is_draw(board):
        return Draw()
    return Undecided()
