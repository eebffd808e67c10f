"""
N x N TicTacToe with exact alpha-beta minimax search.

The engine plays optimally (never loses a won or drawn position) but scores
only win/draw/loss, so it does not prefer faster wins.
"""

from .game import (
    Board,
    Move,
    Player,
    Outcome,
    Win,
    Draw,
    Undecided,
    InvalidMove,
    NO_MOVE,
    create_move,
    legal_moves,
    apply_move,
    undo_move,
    winning_line_for,
    is_draw,
    is_game_over,
    game_outcome,
)
from .minimax import (
    NodeCounter,
    SearchResult,
    heuristic,
    minimax_alpha_beta,
    search,
    find_best_move,
    minimax_value_and_move,
)
from .model import AlphaBetaModel
from .symmetries import apply_symmetry_board, apply_symmetry_move, canonical_key
from .eval import (
    EvalConfig,
    iter_reachable_positions,
    count_canonical_positions,
    eval_pruning_agreement,
    play_game,
    eval_vs_random,
)

__version__ = "0.1.0"
__all__ = [
    "Board",
    "Move",
    "Player",
    "Outcome",
    "Win",
    "Draw",
    "Undecided",
    "InvalidMove",
    "NO_MOVE",
    "create_move",
    "legal_moves",
    "apply_move",
    "undo_move",
    "winning_line_for",
    "is_draw",
    "is_game_over",
    "game_outcome",
    "NodeCounter",
    "SearchResult",
    "heuristic",
    "minimax_alpha_beta",
    "search",
    "find_best_move",
    "minimax_value_and_move",
    "AlphaBetaModel",
    "apply_symmetry_board",
    "apply_symmetry_move",
    "canonical_key",
    "EvalConfig",
    "iter_reachable_positions",
    "count_canonical_positions",
    "eval_pruning_agreement",
    "play_game",
    "eval_vs_random",
]
