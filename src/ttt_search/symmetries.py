"""
D4 symmetries of an N x N TicTacToe board (8 transforms).

Rotations: 0°, 90°, 180°, 270°
Reflections: horizontal, vertical, main diagonal, anti-diagonal

Every transform maps winning lines onto winning lines, so symmetric
positions have the same game value.
"""

from typing import Dict, List, Tuple

import numpy as np

from .game import Board, Move

N_SYMMETRIES = 8

# size -> list of 8 flat permutation arrays
_SYM_CACHE: Dict[int, List[np.ndarray]] = {}


def _transform(r: int, c: int, n: int, sym_id: int) -> Tuple[int, int]:
    """Where (r, c) lands under transform sym_id on an n x n board."""
    m = n - 1
    if sym_id == 0:   return r, c              # identity
    elif sym_id == 1: return c, m - r          # rotate 90
    elif sym_id == 2: return m - r, m - c      # rotate 180
    elif sym_id == 3: return m - c, r          # rotate 270
    elif sym_id == 4: return r, m - c          # reflect horizontal
    elif sym_id == 5: return m - r, c          # reflect vertical
    elif sym_id == 6: return c, r              # reflect main diag
    else:             return m - c, m - r      # reflect anti-diag


def _check_sym_id(sym_id: int):
    if not 0 <= sym_id < N_SYMMETRIES:
        raise ValueError(f"symmetry id must be in [0, {N_SYMMETRIES}), got {sym_id}")


def symmetry_maps(size: int) -> List[np.ndarray]:
    """
    Permutation maps for the 8 symmetries of a size x size board.

    maps[k][i] is the flat source index whose content lands on flat index i.
    """
    if size not in _SYM_CACHE:
        maps = []
        for k in range(N_SYMMETRIES):
            mp = np.zeros(size * size, dtype=np.int64)
            for r in range(size):
                for c in range(size):
                    rt, ct = _transform(r, c, size, k)
                    mp[rt * size + ct] = r * size + c
            maps.append(mp)
        _SYM_CACHE[size] = maps
    return _SYM_CACHE[size]


def apply_symmetry_array(arr: np.ndarray, sym_id: int) -> np.ndarray:
    """Apply transform sym_id to an [N, N] encoded board."""
    _check_sym_id(sym_id)
    n = arr.shape[0]
    return arr.ravel()[symmetry_maps(n)[sym_id]].reshape(n, n)


def apply_symmetry_board(board: Board, sym_id: int) -> Board:
    """
    Apply symmetry transform to board.

    Returns:
        New board with transformed cells and the same side to move
    """
    return Board.from_array(apply_symmetry_array(board.to_array(), sym_id), board.turn)


def apply_symmetry_move(move: Move, size: int, sym_id: int) -> Move:
    """Map a move to its image under transform sym_id."""
    _check_sym_id(sym_id)
    return Move(*_transform(move.row, move.col, size, sym_id))


def get_all_symmetries(board: Board) -> List[Board]:
    """Return all 8 symmetric versions of a board."""
    return [apply_symmetry_board(board, k) for k in range(N_SYMMETRIES)]


def canonical_key(board: Board) -> Tuple[bytes, int]:
    """Key shared by a position and all of its symmetric images."""
    arr = board.to_array()
    best = min(apply_symmetry_array(arr, k).tobytes() for k in range(N_SYMMETRIES))
    return best, board.turn.value
