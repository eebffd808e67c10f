"""
Evaluation functions.

Checks the pruned search against plain minimax on every reachable
position, and measures the engine in self-play and against a random
opponent.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from tqdm.auto import tqdm

from .game import (
    Board,
    Move,
    Outcome,
    Player,
    Win,
    apply_move,
    game_outcome,
    is_game_over,
    legal_moves,
    undo_move,
)
from .minimax import NodeCounter, minimax_value_and_move, search
from .model import AlphaBetaModel
from .symmetries import canonical_key

logger = logging.getLogger(__name__)


@dataclass
class EvalConfig:
    """Evaluation configuration."""

    # Board
    size: int = 3
    first: Player = Player.CROSS

    # Games vs random opponent
    games: int = 100
    seed: int = 0

    # Progress bars
    progress: bool = True


def iter_reachable_positions(
    size: int = 3,
    first: Player = Player.CROSS,
    include_terminal: bool = False,
) -> Iterator[Board]:
    """
    Iterate over every distinct position reachable from an empty board.

    Terminal positions are not expanded further.

    Yields:
        Independent Board snapshots, each position once
    """
    board = Board(first, size)
    seen = set()

    def walk():
        key = board.key()
        if key in seen:
            return
        seen.add(key)

        if is_game_over(board):
            if include_terminal:
                yield board.copy()
            return

        yield board.copy()
        for move in legal_moves(board):
            apply_move(board, move, board.turn)
            yield from walk()
            undo_move(board, move)

    yield from walk()


def count_canonical_positions(
    size: int = 3,
    first: Player = Player.CROSS,
    include_terminal: bool = False,
) -> int:
    """Number of reachable positions up to rotation and reflection."""
    return len({
        canonical_key(b)
        for b in iter_reachable_positions(size, first, include_terminal)
    })


def eval_pruning_agreement(
    size: int = 3,
    first: Player = Player.CROSS,
    progress: bool = True,
) -> Dict[str, object]:
    """
    Compare alpha-beta against unpruned minimax on all non-terminal positions.

    Returns:
        Dict with counts and the mismatching boards (prefixed with '_')
    """
    positions = list(iter_reachable_positions(size, first))
    counter = NodeCounter()
    mismatches: List[Board] = []
    ab_nodes = 0

    for board in tqdm(positions, desc="pruning agreement", disable=not progress):
        result = search(board, counter)
        ab_nodes += result.nodes
        if (result.move, result.score) != minimax_value_and_move(board):
            mismatches.append(board)

    n = len(positions)
    logger.debug("checked %d positions, %d mismatches", n, len(mismatches))
    return {
        "n_states": n,
        "n_mismatches": len(mismatches),
        "agreement": (n - len(mismatches)) / n if n else float("nan"),
        "ab_nodes_total": ab_nodes,
        "_mismatches": mismatches,
    }


def play_game(
    model: Optional[AlphaBetaModel] = None,
    size: int = 3,
    first: Player = Player.CROSS,
    opponent: Optional[Callable[[Board], Move]] = None,
    engine_side: Player = Player.CROSS,
) -> Tuple[Outcome, List[Move]]:
    """
    Play one game to the end.

    Args:
        model: engine used for its own moves (a fresh one if None)
        size: board size
        first: player who opens
        opponent: picks moves for the side that is not engine_side; if None
            the engine plays both sides
        engine_side: side the engine plays when an opponent is given

    Returns:
        (outcome, moves in play order)
    """
    model = model or AlphaBetaModel()
    board = model.game_start(first, size)
    moves: List[Move] = []

    while not is_game_over(board):
        if opponent is not None and board.turn is not engine_side:
            move = opponent(board)
        else:
            move = model.find_best_move(board)
        model.apply_move(board, move)
        moves.append(move)

    return game_outcome(board), moves


def eval_vs_random(
    games: int = 100,
    size: int = 3,
    first: Player = Player.CROSS,
    seed: int = 0,
    progress: bool = True,
) -> Dict[str, float]:
    """
    Evaluate the engine vs a uniformly random opponent.

    The engine alternates sides: Cross in even games, Nought in odd ones.

    Returns:
        Dict with 'games', 'engine_w', 'engine_d', 'engine_l'
    """
    rng = random.Random(seed)
    model = AlphaBetaModel()

    # The engine is deterministic, so each position is only searched once
    engine_moves: Dict[tuple, Move] = {}

    def engine(board: Board) -> Move:
        key = board.key()
        if key not in engine_moves:
            engine_moves[key] = model.find_best_move(board)
        return engine_moves[key]

    def random_player(board: Board) -> Move:
        return rng.choice(legal_moves(board))

    wins = draws = losses = 0
    for g in tqdm(range(games), desc="vs random", disable=not progress):
        engine_side = Player.CROSS if g % 2 == 0 else Player.NOUGHT
        board = model.game_start(first, size)

        while not is_game_over(board):
            if board.turn is engine_side:
                move = engine(board)
            else:
                move = random_player(board)
            model.apply_move(board, move)

        outcome = game_outcome(board)
        if isinstance(outcome, Win):
            if outcome.player is engine_side:
                wins += 1
            else:
                losses += 1
        else:
            draws += 1

    total = wins + draws + losses
    return {
        "games": total,
        "engine_w": wins / max(1, total),
        "engine_d": draws / max(1, total),
        "engine_l": losses / max(1, total),
    }
