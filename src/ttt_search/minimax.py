"""
Exact game-tree search for N x N TicTacToe.

Scores are always from Cross's point of view: +1 Cross wins, 0 draw,
-1 Nought wins. Cross maximises, Nought minimises. Scores are not
depth-weighted, so a quick win and a slow win look the same.

The search applies and undoes moves on the caller's board; the board is
back in its original state when any function here returns.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .game import (
    NO_MOVE,
    Board,
    Move,
    Player,
    apply_move,
    is_draw,
    is_game_over,
    legal_moves,
    undo_move,
    winning_line_for,
)

logger = logging.getLogger(__name__)

# Outside the [-1, 1] score range; replaced by the first child searched
_WORST_FOR_MAX = -2
_WORST_FOR_MIN = 2


class NodeCounter:
    """Counts positions visited by a search. Instrumentation only."""

    def __init__(self):
        self.count = 0

    def __repr__(self) -> str:
        return f"NodeCounter(count={self.count})"

    def reset(self):
        self.count = 0

    def increment(self):
        self.count += 1


@dataclass(frozen=True)
class SearchResult:
    move: Move
    score: int
    nodes: int


def heuristic(board: Board, player: Player) -> int:
    """
    Score a finished position for player.

    Returns:
        1 if player owns a winning line, 0 on a draw, -1 otherwise
        (opponent won, or the game is still going)
    """
    if winning_line_for(board, player) is not None:
        return 1
    if is_draw(board):
        return 0
    return -1


def minimax_alpha_beta(
    alpha: int,
    beta: int,
    board: Board,
    maximizing: bool,
    counter: Optional[NodeCounter] = None,
) -> Tuple[Move, int]:
    """
    Alpha-beta minimax over legal moves in generation order.

    Args:
        alpha: best score the maximiser can already guarantee
        beta: best score the minimiser can already guarantee
        board: position to search; mutated during the call, restored on return
        maximizing: True when Cross is to move
        counter: incremented once per visited position

    Returns:
        (best_move, score). best_move is NO_MOVE for a terminal position.
    """
    if counter is not None:
        counter.increment()

    if is_game_over(board):
        return NO_MOVE, heuristic(board, Player.CROSS)

    best_move = NO_MOVE
    best_score = _WORST_FOR_MAX if maximizing else _WORST_FOR_MIN

    for move in legal_moves(board):
        apply_move(board, move, board.turn)
        _, score = minimax_alpha_beta(alpha, beta, board, not maximizing, counter)
        undo_move(board, move)

        if maximizing:
            if score > best_score:
                best_move, best_score = move, score
                alpha = max(alpha, best_score)
        else:
            if score < best_score:
                best_move, best_score = move, score
                beta = min(beta, best_score)

        if alpha >= beta:
            break  # Prune

    return best_move, best_score


def search(board: Board, counter: Optional[NodeCounter] = None) -> SearchResult:
    """
    Run a full-window alpha-beta search from the side to move.

    The counter (a fresh one if not given) is reset before searching.
    """
    if counter is None:
        counter = NodeCounter()
    counter.reset()

    move, score = minimax_alpha_beta(
        -1, 1, board, board.turn is Player.CROSS, counter
    )
    logger.debug(
        "searched %d nodes on %dx%d board: move=%s score=%d",
        counter.count, board.size, board.size, move.cell, score,
    )
    return SearchResult(move, score, counter.count)


def find_best_move(board: Board, counter: Optional[NodeCounter] = None) -> Move:
    """Best move for the side to move (NO_MOVE if the game is already over)."""
    return search(board, counter).move


# ---------------------------------------------------------------------------
# Plain minimax (no pruning), used to check the pruned search
# ---------------------------------------------------------------------------

# Cache: (size, board.key()) -> (move, score)
_MINIMAX_CACHE: Dict[tuple, Tuple[Move, int]] = {}


def minimax_value_and_move(board: Board) -> Tuple[Move, int]:
    """
    Exhaustive minimax without pruning, memoised per position.

    Picks the first move in generation order reaching the optimal score,
    the same tie-break as minimax_alpha_beta.

    Returns:
        (best_move, score) with score from Cross's point of view
    """
    key = (board.size, board.key())
    if key in _MINIMAX_CACHE:
        return _MINIMAX_CACHE[key]

    if is_game_over(board):
        result = (NO_MOVE, heuristic(board, Player.CROSS))
        _MINIMAX_CACHE[key] = result
        return result

    maximizing = board.turn is Player.CROSS
    best_move = NO_MOVE
    best_score = _WORST_FOR_MAX if maximizing else _WORST_FOR_MIN

    for move in legal_moves(board):
        apply_move(board, move, board.turn)
        _, score = minimax_value_and_move(board)
        undo_move(board, move)

        if (score > best_score) if maximizing else (score < best_score):
            best_move, best_score = move, score

    _MINIMAX_CACHE[key] = (best_move, best_score)
    return best_move, best_score


def clear_cache():
    """Clear minimax cache (useful for memory management)."""
    logger.debug("clearing minimax cache (%d entries)", len(_MINIMAX_CACHE))
    _MINIMAX_CACHE.clear()


def cache_size() -> int:
    """Return current cache size."""
    return len(_MINIMAX_CACHE)
